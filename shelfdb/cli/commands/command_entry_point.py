##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other ShelfDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to ShelfDB.
##############################################################################

"""
Defines the abstract base class for ShelfDB CLI commands.

Every command registers its own parser and handles its own parsed arguments
through the `CommandEntryPoint` interface.
"""

from abc import ABC, abstractmethod
from argparse import ArgumentParser, Namespace


class CommandEntryPoint(ABC):
    """
    Abstract base class for a ShelfDB CLI command entry point.

    Methods:
        add_parser: Adds the parser for a specific command to the main `ArgumentParser`.
        process_command: Executes the logic for this CLI command.
        add_database_argument: Adds the positional `database` argument to a parser.
        add_table_argument: Adds the positional `table` argument to a parser.
    """

    @abstractmethod
    def add_parser(self, subparsers: ArgumentParser):
        """Add the parser for this command to the main `ArgumentParser`."""
        raise NotImplementedError("Subclasses of `CommandEntryPoint` must implement an `add_parser` method.")

    @abstractmethod
    def process_command(self, args: Namespace):
        """Execute the logic for this CLI command."""
        raise NotImplementedError("Subclasses of `CommandEntryPoint` must implement a `process_command` method.")

    @staticmethod
    def add_database_argument(parser: ArgumentParser):
        """
        Add the positional `database` argument shared by every ShelfDB command.

        Args:
            parser: The parser of a command or subcommand.
        """
        parser.add_argument(
            "database",
            type=str,
            help="The name of the database. Its file is <data-dir>/<database>.json.",
        )

    @staticmethod
    def add_table_argument(parser: ArgumentParser):
        """
        Add the positional `table` argument.

        Args:
            parser: The parser of a command or subcommand.
        """
        parser.add_argument("table", type=str, help="The name of the table.")
