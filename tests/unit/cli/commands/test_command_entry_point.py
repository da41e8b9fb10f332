##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other ShelfDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to ShelfDB.
##############################################################################

"""
Tests for the `command_entry_point.py` file.
"""

from argparse import ArgumentParser, Namespace

import pytest

from shelfdb.cli.commands.command_entry_point import CommandEntryPoint


def test_cannot_instantiate_abstract_class():
    """
    Test that `CommandEntryPoint` can't be instantiated directly.
    """
    with pytest.raises(TypeError):
        CommandEntryPoint()


def test_subclass_must_implement_methods():
    """
    Test that a subclass missing `process_command` can't be instantiated.
    """

    class IncompleteCommand(CommandEntryPoint):
        def add_parser(self, subparsers: ArgumentParser):
            pass

    with pytest.raises(TypeError):
        IncompleteCommand()


def test_concrete_subclass_works():
    """
    Test that a subclass implementing both methods can be instantiated and called.
    """

    class ConcreteCommand(CommandEntryPoint):
        def add_parser(self, subparsers: ArgumentParser):
            self.added = True

        def process_command(self, args: Namespace):
            self.processed = args.value

    cmd = ConcreteCommand()
    cmd.add_parser(None)
    cmd.process_command(Namespace(value=3))
    assert cmd.added
    assert cmd.processed == 3


def test_shared_arguments():
    """
    Test that the shared positional arguments are added in order.
    """
    parser = ArgumentParser()
    CommandEntryPoint.add_database_argument(parser)
    CommandEntryPoint.add_table_argument(parser)

    args = parser.parse_args(["app", "users"])
    assert args.database == "app"
    assert args.table == "users"
