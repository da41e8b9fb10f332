##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other ShelfDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to ShelfDB.
##############################################################################

"""
This module defines the `Table` class: a fixed schema plus the rows stored
under it, keyed by row identifier.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple, Union

from shelfdb.db_scripts.columns import Columns
from shelfdb.db_scripts.data_models import BaseDataModel, JSONObject, Row, payload_type_name
from shelfdb.exceptions import DeserializationError, SchemaError


@dataclass
class InsertResult:
    """
    The outcome of a call to [`Table.insert`][db_scripts.table.Table.insert].

    Attributes:
        inserted (List[str]): The identifiers of the rows that were added, in input order.
        errors (List[Tuple[int, SchemaError]]): The index and validation error of every
            item that was rejected.
    """

    inserted: List[str] = field(default_factory=list)
    errors: List[Tuple[int, SchemaError]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True when no item was rejected."""
        return not self.errors


@dataclass
class Table(BaseDataModel):
    """
    A named, schema-constrained collection of rows.

    The schema is fixed when the table is created. Rows are kept in insertion
    order, which is the order equality lookups scan in.

    Attributes:
        name (str): The name of the table, unique within its database.
        columns (Columns): The schema every row payload must satisfy.
        rows (Dict[str, Row]): The rows of the table keyed by their identifier.

    Methods:
        insert: Validate and add one payload or a list of payloads.
        get: Get a row by identifier.
        remove: Remove a row by identifier.
        contains: Check whether a row identifier is present.
        find_eq: Find the first row whose payload maps a key to a given string.
        to_dict: Convert the table to its persisted form.
        from_dict (classmethod): Build a table from its persisted form.
    """

    name: str
    columns: Columns = field(default_factory=Columns)
    rows: Dict[str, Row] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(self.rows.values())

    def __contains__(self, row_id: str) -> bool:
        return self.contains(row_id)

    def insert(self, payload: Union[JSONObject, List[JSONObject]], atomic: bool = False) -> InsertResult:
        """
        Validate and add rows to this table.

        A single object that fails validation raises its schema error. For a list
        of objects the behavior depends on `atomic`:

        - `atomic=False` (default): every item is validated and added on its own.
          A rejected item is recorded in the result and does not undo the items
          before or after it, so a batch may be partially committed.
        - `atomic=True`: every item is validated before anything is added. If any
          item is rejected the first error is raised and the table is unchanged.

        Args:
            payload: A JSON object or a list of JSON objects.
            atomic: Whether a batch is all-or-nothing.

        Returns:
            An [`InsertResult`][db_scripts.table.InsertResult] listing the new row ids
                and any rejected items.

        Raises:
            (exceptions.SchemaError): If a single payload, or any item of an atomic
                batch, doesn't match the schema.
        """
        result = InsertResult()

        if not isinstance(payload, list):
            self.columns.validate(payload)
            result.inserted.append(self._add(payload))
            return result

        if atomic:
            for item in payload:
                self.columns.validate(item)
            result.inserted.extend(self._add(item) for item in payload)
            return result

        for index, item in enumerate(payload):
            try:
                self.columns.validate(item)
            except SchemaError as exc:
                result.errors.append((index, exc))
                continue
            result.inserted.append(self._add(item))
        return result

    def _add(self, payload: JSONObject) -> str:
        row = Row.new(payload)
        self.rows[row.id] = row
        return row.id

    def contains(self, row_id: str) -> bool:
        """
        Check whether a row identifier is present.

        Args:
            row_id: The row identifier.

        Returns:
            True if a row with this identifier is stored in the table.
        """
        return row_id in self.rows

    def get(self, row_id: str) -> Optional[Row]:
        """
        Get a row by identifier.

        Args:
            row_id: The row identifier.

        Returns:
            The row, or None if there's no row with this identifier.
        """
        return self.rows.get(row_id)

    def remove(self, row_id: str) -> Optional[Row]:
        """
        Remove a row by identifier.

        Args:
            row_id: The row identifier.

        Returns:
            The removed row, or None if there was no row with this identifier.
        """
        return self.rows.pop(row_id, None)

    def find_eq(self, key: str, value: str) -> Optional[Row]:
        """
        Find the first row whose payload maps `key` to a string equal to `value`.

        Rows are scanned in insertion order. Non-string values never match.

        Args:
            key: The payload key to match on.
            value: The string to compare against.

        Returns:
            The first matching row, or None.
        """
        for row in self.rows.values():
            if row.matches(key, value):
                return row
        return None

    def to_dict(self) -> Dict:
        """
        Convert the table to its persisted form.

        Returns:
            A dictionary with `name`, `columns` and `rows` entries.
        """
        return {
            "name": self.name,
            "columns": self.columns.to_list(),
            "rows": {row_id: row.to_dict() for row_id, row in self.rows.items()},
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "Table":
        """
        Build a table from its persisted form.

        Args:
            data: A dictionary with `name`, `columns` and `rows` entries.

        Returns:
            A `Table` instance.

        Raises:
            (exceptions.DeserializationError): If `data` isn't a valid table.
        """
        if not isinstance(data, dict) or not isinstance(data.get("name"), str):
            raise DeserializationError(f"Invalid table entry: {data!r}")

        raw_rows = data.get("rows", {})
        if not isinstance(raw_rows, dict):
            raise DeserializationError(
                f"Rows of table '{data['name']}' must be an object, got {payload_type_name(raw_rows)}."
            )

        rows = {}
        for row_id, raw_row in raw_rows.items():
            row = Row.from_dict(raw_row)
            if row.id != row_id:
                raise DeserializationError(
                    f"Row stored under '{row_id}' in table '{data['name']}' has identifier '{row.id}'."
                )
            rows[row_id] = row

        return cls(name=data["name"], columns=Columns.from_list(data.get("columns", [])), rows=rows)
