##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other ShelfDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to ShelfDB.
##############################################################################

"""
Helpers that derive a table schema from existing Python types so a table can
be declared from the dataclass its rows are read back into.
"""

from dataclasses import MISSING, is_dataclass
from dataclasses import fields as dataclass_fields
from typing import Any, Dict

from shelfdb.db_scripts.columns import Column, Columns


def columns_from_dataclass(cls: type, required: bool = None) -> Columns:
    """
    Build a schema from the fields of a dataclass, in declaration order.

    Args:
        cls: The dataclass (or an instance of it) to derive the schema from.
        required: If None, a column is required when its field has neither a
            default nor a default factory. A bool forces every column's flag.

    Returns:
        A `Columns` instance with one column per field.

    Raises:
        TypeError: If `cls` is not a dataclass.
    """
    if not is_dataclass(cls):
        raise TypeError(f"Expected a dataclass, got {cls!r}.")

    columns = []
    for dc_field in dataclass_fields(cls):
        if required is None:
            is_required = dc_field.default is MISSING and dc_field.default_factory is MISSING
        else:
            is_required = required
        columns.append(Column(name=dc_field.name, required=is_required))
    return Columns(columns)


def columns_from_mapping(mapping: Dict[str, Any], required: bool = True) -> Columns:
    """
    Build a schema from the keys of a sample row.

    Args:
        mapping: A sample payload. Only its keys are used, in insertion order.
        required: The required flag given to every column.

    Returns:
        A `Columns` instance with one column per key.
    """
    return Columns([Column(name=key, required=required) for key in mapping])
