##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other ShelfDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to ShelfDB.
##############################################################################

"""
Utility functions to support ShelfDB CLI command handlers.

These helpers turn parsed command-line arguments into the settings, schemas
and database handles the command handlers work with.
"""

import json
import logging
import os
from argparse import Namespace
from typing import Any

from shelfdb.config import Config
from shelfdb.config.configfile import get_config
from shelfdb.db_scripts.columns import Column
from shelfdb.db_scripts.database import Database


LOG = logging.getLogger("shelfdb")
OPTIONAL_SUFFIX = ":opt"


def config_from_args(args: Namespace) -> Config:
    """
    Load the settings for a CLI invocation.

    The `--data-dir` option, when given, takes precedence over the config file
    and the `SHELFDB_DATA_DIR` environment variable.

    Args:
        args: The parsed CLI arguments.

    Returns:
        The settings to run the command with.
    """
    config = get_config()
    data_dir = getattr(args, "data_dir", None)
    if data_dir:
        config.data_dir = data_dir
    LOG.debug(f"Using data directory {config.data_dir}")
    return config


def database_path(config: Config, name: str) -> str:
    """
    Get the path of the file backing the database called `name`.

    Args:
        config: The settings holding the data directory.
        name: The logical name of the database.

    Returns:
        The path `<data_dir>/<name>.json`.
    """
    return os.path.join(config.data_dir, f"{name}.json")


def open_database(args: Namespace, create: bool = False) -> Database:
    """
    Open the database named by `args.database`.

    Args:
        args: The parsed CLI arguments.
        create: If True, a missing database is created. Otherwise a missing
            database is an error.

    Returns:
        The opened `Database`.

    Raises:
        FileNotFoundError: If the database doesn't exist and `create` is False.
    """
    config = config_from_args(args)
    if not create:
        file_name = database_path(config, args.database)
        if not os.path.exists(file_name):
            raise FileNotFoundError(f"Database '{args.database}' does not exist at {file_name}.")
    return Database.open_or_create(args.database, config=config)


def parse_column(raw: str) -> Column:
    """
    Parse a column definition given on the command line.

    A plain name declares a required column and `name:opt` an optional one.

    Args:
        raw: The column definition.

    Returns:
        The parsed `Column`.

    Raises:
        ValueError: If the definition has an empty name or an unknown suffix.
    """
    name, required = raw, True
    if raw.endswith(OPTIONAL_SUFFIX):
        name, required = raw[: -len(OPTIONAL_SUFFIX)], False
    if not name or ":" in name:
        raise ValueError(f"Invalid column definition '{raw}'. Use 'name' or 'name{OPTIONAL_SUFFIX}'.")
    return Column(name=name, required=required)


def print_json(value: Any, indent: int = 4):
    """
    Print a JSON value to stdout.

    Args:
        value: The value to print.
        indent: Indentation to pretty-print with.
    """
    print(json.dumps(value, indent=indent))
