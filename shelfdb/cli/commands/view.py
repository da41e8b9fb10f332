##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other ShelfDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to ShelfDB.
##############################################################################

"""CLI module for printing the contents of a database as tables."""

from argparse import ArgumentDefaultsHelpFormatter, ArgumentParser, Namespace

from shelfdb.cli.commands.command_entry_point import CommandEntryPoint
from shelfdb.cli.utils import open_database


class ViewCommand(CommandEntryPoint):
    """
    Handles the `view` command that prints a database, or one of its tables.

    Methods:
        add_parser: Adds the `view` command parser to the CLI argument parser.
        process_command: Processes the CLI input and prints the requested tables.
    """

    def add_parser(self, subparsers: ArgumentParser):
        """
        Add the `view` command parser to the CLI argument parser.

        Parameters:
            subparsers: The subparsers object to which the `view` command parser will be added.
        """
        view: ArgumentParser = subparsers.add_parser(
            "view",
            help="Print the tables of a database.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        view.set_defaults(func=self.process_command)
        self.add_database_argument(view)
        view.add_argument("table", type=str, nargs="?", default=None, help="Only print this table.")

    def process_command(self, args: Namespace):
        """
        Print the database, or the table given in `args`.

        Args:
            args: Parsed CLI arguments.
        """
        database = open_database(args)
        if args.table is None:
            database.view()
        else:
            database.view_table(args.table)
