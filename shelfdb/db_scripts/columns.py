##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other ShelfDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to ShelfDB.
##############################################################################

"""
This module defines the `Columns` class, the ordered schema of a table.

A schema governs the shape of a row's payload, not the types of its values:
validation only checks which keys are present.
"""

from typing import Any, Dict, Iterator, List

from shelfdb.db_scripts.data_models import Column, payload_type_name
from shelfdb.exceptions import (
    DeserializationError,
    InvalidDataError,
    InvalidShapeError,
    RequiredColumnMissingError,
    UnknownColumnError,
)


__all__ = ("Column", "Columns")


class Columns:
    """
    An ordered collection of [`Column`][db_scripts.data_models.Column] definitions.

    Declared order is preserved and determines display and iteration order.
    Column names are unique within one `Columns`.

    Attributes:
        columns (List[Column]): The declared columns, in order.

    Methods:
        validate: Check that a payload matches this schema.
        names: The declared column names, in order.
        required_names: The names of the required columns, in order.
        to_list: Convert the schema to its persisted form.
        from_list (classmethod): Build a schema from its persisted form.
    """

    def __init__(self, columns: List[Column] = None):
        """
        Args:
            columns: The columns of the schema, in declaration order.

        Raises:
            (exceptions.InvalidDataError): If two columns share a name.
        """
        self.columns: List[Column] = list(columns or [])

        seen = set()
        for column in self.columns:
            if column.name in seen:
                raise InvalidDataError(f"Column '{column.name}' is declared more than once.")
            seen.add(column.name)

    def __iter__(self) -> Iterator[Column]:
        return iter(self.columns)

    def __len__(self) -> int:
        return len(self.columns)

    def __contains__(self, name: str) -> bool:
        return any(column.name == name for column in self.columns)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Columns):
            return NotImplemented
        return self.columns == other.columns

    def __repr__(self) -> str:
        return f"Columns({self.columns!r})"

    def names(self) -> List[str]:
        """
        Get the declared column names.

        Returns:
            The column names in declaration order.
        """
        return [column.name for column in self.columns]

    def required_names(self) -> List[str]:
        """
        Get the names of the required columns.

        Returns:
            The required column names in declaration order.
        """
        return [column.name for column in self.columns if column.required]

    def validate(self, payload: Any):
        """
        Check that `payload` has the shape this schema describes.

        The payload is valid iff it's a JSON object, every required column is
        one of its keys, and every one of its keys is a declared column.

        Args:
            payload: The candidate row payload.

        Raises:
            (exceptions.InvalidShapeError): If `payload` is not a dict.
            (exceptions.RequiredColumnMissingError): If a required column is missing.
            (exceptions.UnknownColumnError): If `payload` has an undeclared key.
        """
        if not isinstance(payload, dict):
            raise InvalidShapeError(payload_type_name(payload))

        for column in self.columns:
            if column.required and column.name not in payload:
                raise RequiredColumnMissingError(column.name)

        declared = set(self.names())
        for key in payload:
            if key not in declared:
                raise UnknownColumnError(key)

    def to_list(self) -> List[Dict]:
        """
        Convert the schema to its persisted form.

        Returns:
            A list of `{"name": ..., "required": ...}` dictionaries.
        """
        return [column.to_dict() for column in self.columns]

    @classmethod
    def from_list(cls, data: List[Dict]) -> "Columns":
        """
        Build a schema from its persisted form.

        Args:
            data: A list of `{"name": ..., "required": ...}` dictionaries.

        Returns:
            A `Columns` instance.

        Raises:
            (exceptions.DeserializationError): If `data` isn't a list of column definitions.
        """
        if not isinstance(data, list):
            raise DeserializationError(f"Expected a list of columns, got {payload_type_name(data)}.")
        try:
            return cls([Column.from_dict(entry) for entry in data])
        except InvalidDataError as exc:
            raise DeserializationError(str(exc)) from exc
