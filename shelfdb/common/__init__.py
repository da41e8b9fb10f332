##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other ShelfDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to ShelfDB.
##############################################################################

"""
The `common` package provides shared definitions used across ShelfDB.

Modules:
    enums.py: Defines enumerations for interfaces.
"""
