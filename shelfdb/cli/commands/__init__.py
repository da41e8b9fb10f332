##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other ShelfDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to ShelfDB.
##############################################################################

"""
ShelfDB CLI Commands Package.

This package defines every top-level command of the ShelfDB command-line
interface. Each module encapsulates the argument parsing and logic of one
command, built around the `CommandEntryPoint` interface.

Modules:
    command_entry_point: Defines the abstract base class `CommandEntryPoint` for all CLI commands.
    drop: Implements the `drop` command for deleting a database file.
    row: Implements the `row` command for inserting, reading, updating and deleting rows.
    table: Implements the `table` command for creating, listing, dropping and renaming tables.
    view: Implements the `view` command for printing a database as tables.
"""

from shelfdb.cli.commands.drop import DropCommand
from shelfdb.cli.commands.row import RowCommand
from shelfdb.cli.commands.table import TableCommand
from shelfdb.cli.commands.view import ViewCommand


# Keep these in alphabetical order
ALL_COMMANDS = [
    DropCommand(),
    RowCommand(),
    TableCommand(),
    ViewCommand(),
]
