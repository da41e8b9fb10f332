##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other ShelfDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to ShelfDB.
##############################################################################

"""
Fixtures for files in this `cli/` test directory.
"""

from argparse import ArgumentParser, Namespace

import pytest
from pytest_mock import MockerFixture

from shelfdb.cli.commands.command_entry_point import CommandEntryPoint
from shelfdb.config import Config
from tests.fixture_types import FixtureCallable, FixtureStr


@pytest.fixture
def create_parser() -> FixtureCallable:
    """
    A fixture to help create a parser for any command.

    Returns:
        A function that creates a parser.
    """

    def _create_parser(cmd: CommandEntryPoint) -> ArgumentParser:
        """
        Returns an `ArgumentParser` configured with the `cmd` command and its subcommands.

        Returns:
            Parser with the `cmd` command and its subcommands registered.
        """
        parser = ArgumentParser()
        parser.add_argument("-d", "--data-dir", default=None)
        subparsers = parser.add_subparsers(dest="main_command")
        cmd.add_parser(subparsers)
        return parser

    return _create_parser


@pytest.fixture
def cli_data_dir(mocker: MockerFixture, tmp_path) -> FixtureStr:
    """
    Point the CLI at a temp data directory and keep any real `shelfdb.yaml` out of the tests.

    Args:
        mocker: PyTest mocker fixture.
        tmp_path: A built-in pytest fixture providing a unique temp directory.

    Returns:
        The temp data directory.
    """
    mocker.patch("shelfdb.cli.utils.get_config", side_effect=lambda: Config({"data_dir": str(tmp_path)}))
    return str(tmp_path)


@pytest.fixture
def run_command(create_parser: FixtureCallable, cli_data_dir: FixtureStr) -> FixtureCallable:
    """
    A fixture to parse a command line for one command and run it against the temp data directory.

    Args:
        create_parser: A fixture to help create a parser.
        cli_data_dir: The temp data directory.

    Returns:
        A function taking a command object and its command-line arguments.
    """

    def _run(cmd: CommandEntryPoint, *argv: str) -> Namespace:
        args = create_parser(cmd).parse_args(list(argv))
        args.func(args)
        return args

    return _run
