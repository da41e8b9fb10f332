##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other ShelfDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to ShelfDB.
##############################################################################

"""
This module defines the `TableCommand` class, which provides CLI subcommands
for managing the tables of a database: creating, listing, dropping and
renaming them.
"""

import logging
from argparse import ArgumentDefaultsHelpFormatter, ArgumentParser, Namespace

from shelfdb.cli.commands.command_entry_point import CommandEntryPoint
from shelfdb.cli.utils import open_database, parse_column
from shelfdb.db_scripts.columns import Columns
from shelfdb.db_scripts.table import Table


LOG = logging.getLogger("shelfdb")


class TableCommand(CommandEntryPoint):
    """
    Handles `table` CLI commands for managing the tables of a database.

    Methods:
        add_parser: Adds the `table` command and its subcommands to the CLI parser.
        process_command: Processes the CLI input and dispatches the appropriate action.
    """

    def add_parser(self, subparsers: ArgumentParser):
        """
        Add the `table` command parser to the CLI argument parser.

        Parameters:
            subparsers (ArgumentParser): The subparsers object to which the `table` command parser will be added.
        """
        table: ArgumentParser = subparsers.add_parser(
            "table",
            help="Create, list, drop or rename tables.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        table.set_defaults(func=self.process_command)
        table_commands: ArgumentParser = table.add_subparsers(dest="commands", required=True)

        # Subcommand: table create
        create = table_commands.add_parser(
            "create",
            help="Create a table. The database is created if it doesn't exist.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        self.add_database_argument(create)
        self.add_table_argument(create)
        create.add_argument(
            "columns",
            type=str,
            nargs="+",
            help="A space-delimited list of column names. Suffix a name with ':opt' to make it optional.",
        )

        # Subcommand: table list
        list_tables = table_commands.add_parser(
            "list",
            help="List the tables of a database.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        self.add_database_argument(list_tables)

        # Subcommand: table drop
        drop = table_commands.add_parser(
            "drop",
            help="Drop a table and every row in it.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        self.add_database_argument(drop)
        self.add_table_argument(drop)

        # Subcommand: table rename
        rename = table_commands.add_parser(
            "rename",
            help="Rename a table.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        self.add_database_argument(rename)
        rename.add_argument("old_name", type=str, help="The current name of the table.")
        rename.add_argument("new_name", type=str, help="The new name of the table.")

    def process_command(self, args: Namespace):
        """
        Process table commands by routing to the correct action.

        Args:
            args: An argparse Namespace containing user arguments.
        """
        if args.commands == "create":
            columns = Columns([parse_column(raw) for raw in args.columns])
            database = open_database(args, create=True)
            database.add_table(Table(args.table, columns))
        elif args.commands == "list":
            database = open_database(args)
            table_names = database.list_tables()
            if not table_names:
                LOG.info(f"Database '{database.name}' has no tables.")
            for name in table_names:
                print(f"{name} ({database.count_rows(name)} rows)")
        elif args.commands == "drop":
            open_database(args).drop_table(args.table)
        elif args.commands == "rename":
            open_database(args).rename_table(args.old_name, args.new_name)
