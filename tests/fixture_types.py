##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other ShelfDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to ShelfDB.
##############################################################################

"""
It's hard to type hint pytest fixtures in a way that makes it clear
that the variable being used is a fixture. This module creates
aliases for these fixtures in order to make it easier to track what's
happening.

The types here will be defined as such:
- `FixtureCallable`: A fixture that returns a function
- `FixtureConfig`: A fixture that returns a ShelfDB `Config` object
- `FixtureDatabase`: A fixture that returns a ShelfDB `Database` object
- `FixtureList`: A fixture that returns a list
- `FixtureStr`: A fixture that returns a string
- `FixtureTable`: A fixture that returns a ShelfDB `Table` object
"""

import sys
from collections.abc import Callable
from typing import Generic, List, TypeVar

import pytest

from shelfdb.config import Config
from shelfdb.db_scripts.database import Database
from shelfdb.db_scripts.table import Table


K = TypeVar("K")

# TODO when we drop support for Python 3.8, remove this if/else statement
if sys.version_info >= (3, 9):
    from typing import Annotated

    FixtureCallable = Annotated[Callable, pytest.fixture]
    FixtureConfig = Annotated[Config, pytest.fixture]
    FixtureDatabase = Annotated[Database, pytest.fixture]
    FixtureList = Annotated[List[K], pytest.fixture]
    FixtureStr = Annotated[str, pytest.fixture]
    FixtureTable = Annotated[Table, pytest.fixture]
else:
    # Fallback for Python 3.8
    class FixtureList(Generic[K], List[K]):
        """
        This class is necessary to allow FixtureList to be subscriptable
        when using it to type hint.
        """

    FixtureCallable = pytest.fixture
    FixtureConfig = pytest.fixture
    FixtureDatabase = pytest.fixture
    FixtureStr = pytest.fixture
    FixtureTable = pytest.fixture
