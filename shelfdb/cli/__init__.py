##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other ShelfDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to ShelfDB.
##############################################################################

"""
ShelfDB CLI Package.

This package defines the `shelfdb` command-line interface, a thin layer over
the storage engine for creating tables, editing rows and inspecting database
files from a shell.

Subpackages:
    commands: Contains every command implementation of the ShelfDB CLI.

Modules:
    argparse_main: Sets up the top-level argument parser and registers every command.
    utils: Shared helpers for resolving settings and opening databases from CLI arguments.
"""
