##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other ShelfDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to ShelfDB.
##############################################################################

"""
This module contains pytest fixtures to be used throughout the entire test suite.
"""
import logging
import os
import sys
from glob import glob

import pytest
from _pytest.tmpdir import TempPathFactory

from tests.fixture_types import FixtureCallable, FixtureStr


# pylint: disable=redefined-outer-name


#######################################
# Loading in Module Specific Fixtures #
#######################################

TESTS_DIR = os.path.dirname(os.path.abspath(__file__))
fixture_glob = os.path.join(TESTS_DIR, "fixtures", "**", "*.py")
pytest_plugins = [
    "tests." + os.path.relpath(fixture_file, TESTS_DIR)[: -len(".py")].replace(os.sep, ".")
    for fixture_file in glob(fixture_glob, recursive=True)
    if not fixture_file.endswith("__init__.py")
]


#######################################
######### Fixture Definitions #########
#######################################


@pytest.fixture(scope="session")
def create_testing_dir() -> FixtureCallable:
    """
    Fixture to create a temporary testing directory.

    Returns:
        A function that creates the testing directory.
    """

    def _create_testing_dir(base_dir: str, sub_dir: str) -> str:
        """
        Helper function to create a temporary testing directory.

        Args:
            base_dir: The base directory where the testing directory will be created.
            sub_dir: The name of the subdirectory to create.

        Returns:
            The path to the created testing directory.
        """
        testing_dir = os.path.join(base_dir, sub_dir)
        os.makedirs(testing_dir, exist_ok=True)
        return testing_dir

    return _create_testing_dir


@pytest.fixture(scope="session")
def temp_output_dir(tmp_path_factory: TempPathFactory) -> FixtureStr:
    """
    Create a temporary directory for the output files of this test run and move into it,
    so nothing a test writes relative to the cwd ends up in the repository.

    Args:
        tmp_path_factory: A built in factory with pytest to help create temp paths for testing.

    Yields:
        The path to the temp output directory we'll use for this test run.
    """
    cwd = os.getcwd()
    temp_dir = tmp_path_factory.mktemp(
        f"python_{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}_"
    )
    os.chdir(temp_dir)

    yield str(temp_dir)

    os.chdir(cwd)


@pytest.fixture
def shelfdb_logger() -> logging.Logger:
    """
    The package logger, set to DEBUG and propagating so `caplog` sees every record.

    Returns:
        The `shelfdb` logger.
    """
    logger = logging.getLogger("shelfdb")
    old_level, old_propagate = logger.level, logger.propagate
    logger.setLevel(logging.DEBUG)
    logger.propagate = True
    yield logger
    logger.setLevel(old_level)
    logger.propagate = old_propagate
