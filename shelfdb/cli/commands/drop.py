##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other ShelfDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to ShelfDB.
##############################################################################

"""CLI module for deleting a database file."""

import logging
import os
from argparse import ArgumentDefaultsHelpFormatter, ArgumentParser, Namespace

from shelfdb.cli.commands.command_entry_point import CommandEntryPoint
from shelfdb.cli.utils import config_from_args, database_path
from shelfdb.db_scripts.database import Database


LOG = logging.getLogger("shelfdb")


def confirm(prompt: str) -> bool:
    """
    Ask the user a yes/no question until they answer it.

    Args:
        prompt: The question to ask.

    Returns:
        True if the user answered 'y'.
    """
    valid_inputs = ["y", "n"]
    user_input = input(f"{prompt} (y/n): ").strip().lower()
    while user_input not in valid_inputs:
        user_input = input("Invalid input. Use 'y' for 'yes' or 'n' for 'no': ").strip().lower()
    return user_input == "y"


class DropCommand(CommandEntryPoint):
    """
    Handles the `drop` command that deletes a database file.

    Methods:
        add_parser: Adds the `drop` command parser to the CLI argument parser.
        process_command: Processes the CLI input and deletes the database.
    """

    def add_parser(self, subparsers: ArgumentParser):
        """
        Add the `drop` command parser to the CLI argument parser.

        Parameters:
            subparsers: The subparsers object to which the `drop` command parser will be added.
        """
        drop: ArgumentParser = subparsers.add_parser(
            "drop",
            help="Delete a database and every table in it.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        drop.set_defaults(func=self.process_command)
        self.add_database_argument(drop)
        drop.add_argument(
            "-f",
            "--force",
            action="store_true",
            help="Delete the database without confirmation.",
        )

    def process_command(self, args: Namespace):
        """
        Delete the database named in `args`, asking first unless `--force` is set.

        Args:
            args: Parsed CLI arguments.
        """
        config = config_from_args(args)
        file_name = database_path(config, args.database)
        if not os.path.exists(file_name):
            LOG.warning(f"Database '{args.database}' does not exist at {file_name}. Nothing to drop.")
            return

        if not args.force and not confirm(f"Are you sure you want to drop the database '{args.database}'?"):
            LOG.info("Drop cancelled.")
            return

        Database(args.database, file_name, config=config).drop_database()
