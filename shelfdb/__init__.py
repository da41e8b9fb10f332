##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other ShelfDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to ShelfDB.
##############################################################################

"""
ShelfDB: an embedded, file-backed document store.

Each database is a named collection of tables holding JSON-shaped rows,
persisted as a single JSON file. The public API lives in `shelfdb.db_scripts`.
"""


__version__ = "0.3.0"
VERSION = __version__
