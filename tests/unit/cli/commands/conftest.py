##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other ShelfDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to ShelfDB.
##############################################################################

"""
Fixtures for the command tests.
"""

import os

import pytest

from shelfdb.config import Config
from shelfdb.db_scripts.columns import Column, Columns
from shelfdb.db_scripts.database import Database
from shelfdb.db_scripts.table import Table
from tests.fixture_types import FixtureCallable, FixtureDatabase, FixtureStr


@pytest.fixture
def load_cli_database(cli_data_dir: FixtureStr) -> FixtureCallable:
    """
    A fixture to read a database the CLI wrote to the temp data directory.

    Args:
        cli_data_dir: The temp data directory.

    Returns:
        A function that loads a database by name.
    """

    def _load(name: str = "app") -> Database:
        config = Config({"data_dir": cli_data_dir})
        return Database.load_from_file(os.path.join(cli_data_dir, f"{name}.json"), config=config)

    return _load


@pytest.fixture
def cli_users_database(cli_data_dir: FixtureStr) -> FixtureDatabase:
    """
    A database named `app` in the temp data directory with a populated `users` table.

    Args:
        cli_data_dir: The temp data directory.

    Returns:
        The `app` database.
    """
    database = Database.open_or_create("app", config=Config({"data_dir": cli_data_dir}))
    database.add_table(Table("users", Columns([Column("name"), Column("email", required=False)])))
    database.insert_rows("users", [{"name": "Alice", "email": "alice@example.com"}, {"name": "Bob"}])
    return database
