##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other ShelfDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to ShelfDB.
##############################################################################

"""This module provides enumerations for interfaces."""
from enum import Enum, IntEnum


__all__ = ("Operation", "ReturnCode")


class Operation(Enum):
    """
    The closed set of operations a [`Query`][db_scripts.query.Query] can perform.

    A query is built with exactly one operation and never changes it.

    Attributes:
        CREATE: Insert a new row. Only reachable through `execute_add`.
        READ: Read one or all rows.
        UPDATE: Shallow-merge a payload into a matching row.
        DELETE: Remove a matching row.
    """

    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"


class ReturnCode(IntEnum):
    """
    Exit codes returned by the `shelfdb` command line.

    Attributes:
        OK (int): Indicates a successful operation. Numeric value: 0.
        ERROR (int): Indicates a general error occurred. Numeric value: 1.
    """

    OK: int = 0
    ERROR: int = 1
