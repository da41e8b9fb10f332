##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other ShelfDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to ShelfDB.
##############################################################################

"""
This module stores constants representing file paths that will be needed for
ShelfDB's configuration.
"""

import os


APP_FILENAME: str = "shelfdb.yaml"
USER_HOME: str = os.path.expanduser("~")
SHELFDB_HOME: str = os.path.join(USER_HOME, ".shelfdb")
DATA_DIR_ENV_VAR: str = "SHELFDB_DATA_DIR"
