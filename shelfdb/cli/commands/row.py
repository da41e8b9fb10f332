##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other ShelfDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to ShelfDB.
##############################################################################

"""
This module defines the `RowCommand` class, which provides CLI subcommands for
inserting, reading, updating and deleting the rows of a table.

Rows are selected by equality on one payload key, the same way
[`Query.where_eq`][db_scripts.query.Query.where_eq] selects them.
"""

import logging
from argparse import ArgumentDefaultsHelpFormatter, ArgumentParser, Namespace

from shelfdb.cli.commands.command_entry_point import CommandEntryPoint
from shelfdb.cli.utils import open_database, print_json
from shelfdb.utils import parse_json_argument


LOG = logging.getLogger("shelfdb")


class RowCommand(CommandEntryPoint):
    """
    Handles `row` CLI commands for working with the rows of a table.

    Methods:
        add_parser: Adds the `row` command and its subcommands to the CLI parser.
        process_command: Processes the CLI input and dispatches the appropriate action.
    """

    def _add_match_arguments(self, parser: ArgumentParser):
        """
        Add the arguments that select a row by equality.

        Parameters:
            parser (ArgumentParser): The parser of a row subcommand.
        """
        self.add_database_argument(parser)
        self.add_table_argument(parser)
        parser.add_argument("key", type=str, help="The payload key to match on.")
        parser.add_argument("value", type=str, help="The string value the key must hold.")

    def add_parser(self, subparsers: ArgumentParser):
        """
        Add the `row` command parser to the CLI argument parser.

        Parameters:
            subparsers (ArgumentParser): The subparsers object to which the `row` command parser will be added.
        """
        row: ArgumentParser = subparsers.add_parser(
            "row",
            help="Insert, read, update or delete rows.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        row.set_defaults(func=self.process_command)
        row_commands: ArgumentParser = row.add_subparsers(dest="commands", required=True)

        # Subcommand: row insert
        insert = row_commands.add_parser(
            "insert",
            help="Insert a JSON object, or a JSON array of objects, into a table.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        self.add_database_argument(insert)
        self.add_table_argument(insert)
        insert.add_argument("payload", type=str, help="The row(s) to insert, as JSON.")
        insert.add_argument(
            "-a",
            "--atomic",
            action="store_true",
            help="Insert nothing if any row of an array is rejected.",
        )

        # Subcommand: row all
        all_rows = row_commands.add_parser(
            "all",
            help="Print every row of a table.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        self.add_database_argument(all_rows)
        self.add_table_argument(all_rows)

        # Subcommand: row get
        get = row_commands.add_parser(
            "get",
            help="Print the first row whose key holds the given value.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        self._add_match_arguments(get)

        # Subcommand: row update
        update = row_commands.add_parser(
            "update",
            help="Merge a JSON object into the first row whose key holds the given value.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        self._add_match_arguments(update)
        update.add_argument("payload", type=str, help="The fields to merge in, as a JSON object.")

        # Subcommand: row delete
        delete = row_commands.add_parser(
            "delete",
            help="Delete the first row whose key holds the given value.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        self._add_match_arguments(delete)

    def process_command(self, args: Namespace):
        """
        Process row commands by routing to the correct action.

        Args:
            args: An argparse Namespace containing user arguments.
        """
        database = open_database(args)
        indent = database.config.indent

        if args.commands == "insert":
            result = database.insert_rows(args.table, parse_json_argument(args.payload), atomic=args.atomic)
            print_json(result.inserted, indent=indent)
            if not result.ok:
                LOG.warning(f"{len(result.errors)} row(s) were rejected.")
        elif args.commands == "all":
            print_json(database.get_rows().from_(args.table).all(), indent=indent)
        elif args.commands == "get":
            row = database.get_single().from_(args.table).where_eq_or_raise(args.key, args.value)
            print_json(row, indent=indent)
        elif args.commands == "update":
            query = database.update_row().from_(args.table).data(parse_json_argument(args.payload))
            print_json(query.where_eq_or_raise(args.key, args.value), indent=indent)
        elif args.commands == "delete":
            row = database.delete_single().from_(args.table).where_eq_or_raise(args.key, args.value)
            print_json(row, indent=indent)
