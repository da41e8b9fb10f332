##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other ShelfDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to ShelfDB.
##############################################################################

"""
This module defines the `Query` class, a builder and executor for one
create/read/update/delete operation against one table.

A query is created by one of the entry points of a
[`Database`][db_scripts.database.Database] (`add_row`, `get_rows`,
`get_single`, `update_row`, `delete_single`), configured through chained
builder calls, and consumed by one terminal call:

```python
db.add_row().from_("users").data_from_struct(user).execute_add()
db.get_rows().from_("users").all()
db.get_single().from_("users").where_eq("id", "1")
db.update_row().from_("users").data({"name": "Alice"}).where_eq("id", "1")
db.delete_single().from_("users").where_eq("id", "1")
```

Builder calls never touch the disk. Every terminal call reads the database
file afresh, and mutating calls hold the file's lock until the modified
document has been written back.
"""

import dataclasses
import json
import logging
import os
from collections.abc import Mapping
from copy import deepcopy
from typing import Any, Callable, List, Optional, Union

from filelock import Timeout

from shelfdb.common.enums import Operation
from shelfdb.config import Config
from shelfdb.db_scripts.data_models import JSONObject, JSONValue, get_file_lock
from shelfdb.db_scripts.database_model import DatabaseModel, load_database_model
from shelfdb.db_scripts.table import Table
from shelfdb.exceptions import (
    DeserializationError,
    InvalidDataError,
    LoadError,
    RowNotFoundError,
    SerializationError,
    TableNotFoundError,
)


LOG = logging.getLogger("shelfdb")

Model = Optional[Union[type, Callable[..., Any]]]


def to_payload(obj: Any) -> JSONValue:
    """
    Convert a typed value into a plain JSON value.

    Dataclass instances, objects with a `to_dict` method, mappings, and lists
    of any of these are supported. The result is round-tripped through JSON so
    it only holds JSON types.

    Args:
        obj: The value to convert.

    Returns:
        The value as plain JSON data.

    Raises:
        (exceptions.SerializationError): If `obj` can't be represented as JSON.
    """
    if isinstance(obj, list):
        return [to_payload(item) for item in obj]

    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        data = dataclasses.asdict(obj)
    elif callable(getattr(obj, "to_dict", None)):
        data = obj.to_dict()
    elif isinstance(obj, Mapping):
        data = dict(obj)
    else:
        raise SerializationError(f"Cannot build a row payload from a value of type {type(obj).__name__}.")

    try:
        return json.loads(json.dumps(data))
    except (TypeError, ValueError) as exc:
        raise SerializationError(f"Row payload is not JSON serializable: {exc}") from exc


def from_payload(payload: JSONObject, model: Model = None) -> Any:
    """
    Convert a stored payload into the caller's requested type.

    Args:
        payload: The payload of a row.
        model: `None` to get a copy of the raw dictionary, a class exposing a
            `from_dict` classmethod, or any callable accepting the payload's keys
            as keyword arguments.

    Returns:
        The converted value.

    Raises:
        (exceptions.DeserializationError): If the payload doesn't fit `model`.
    """
    if model is None:
        return deepcopy(payload)

    try:
        if callable(getattr(model, "from_dict", None)):
            return model.from_dict(deepcopy(payload))
        return model(**deepcopy(payload))
    except Exception as exc:  # pylint: disable=broad-except
        name = getattr(model, "__name__", repr(model))
        raise DeserializationError(f"Could not convert row payload into {name}: {exc}") from exc


class Query:
    """
    A builder and executor for one operation against one table.

    Attributes:
        db_file_name (str): The path of the database file the query runs against.
        operation (Operation): The operation this query performs. Fixed at construction.
        table_name (Optional[str]): The target table.
        update_data (Optional[JSONValue]): The payload attached with `data` or `set`.
        row_data (Optional[JSONValue]): The payload attached with `data_from_struct`.
        logger (logging.Logger): The logger to report to.
        config (config.Config): Settings for file locking and formatting.

    Methods:
        from_: Set the target table.
        data: Attach a JSON payload.
        set: Alias of `data`.
        data_from_struct: Attach a payload built from a typed value.
        execute_add: Insert the attached payload (Create).
        all: Read every row of the target table.
        where_eq: Read, update or delete the first row matching a key/value pair.
        where_eq_or_raise: Like `where_eq` but raise when nothing matches.
    """

    def __init__(self, db_file_name: str, operation: Operation, logger: logging.Logger = None, config: Config = None):
        """
        Args:
            db_file_name: The path of the database file to run against.
            operation: The operation this query performs.
            logger: The logger to report to. Defaults to the `shelfdb` logger.
            config: Settings for file locking and formatting. Defaults to built-in defaults.
        """
        self.db_file_name: str = db_file_name
        self.operation: Operation = Operation(operation)
        self.table_name: Optional[str] = None
        self.update_data: Optional[JSONValue] = None
        self.row_data: Optional[JSONValue] = None
        self.logger: logging.Logger = logger or LOG
        self.config: Config = config or Config()

    def __repr__(self) -> str:
        return f"Query(operation={self.operation.name}, table={self.table_name!r}, file={self.db_file_name!r})"

    ###########################
    # Builder
    ###########################

    def from_(self, table_name: str) -> "Query":
        """
        Set the table this query targets.

        Args:
            table_name: The name of the table.

        Returns:
            This query.
        """
        self.table_name = table_name
        return self

    def data(self, value: JSONValue) -> "Query":
        """
        Attach a JSON payload: the fields to merge for an Update query, or the
        row(s) to insert for a Create query built without `data_from_struct`.

        Args:
            value: The payload.

        Returns:
            This query.
        """
        self.update_data = deepcopy(value)
        return self

    def set(self, value: JSONValue) -> "Query":
        """
        Alias of [`data`][db_scripts.query.Query.data].

        Args:
            value: The payload.

        Returns:
            This query.
        """
        return self.data(value)

    def data_from_struct(self, obj: Any) -> "Query":
        """
        Attach the row to insert, built from a dataclass instance, an object with a
        `to_dict` method, a mapping, or a list of these.

        Args:
            obj: The typed value to insert.

        Returns:
            This query.

        Raises:
            (exceptions.SerializationError): If `obj` can't be represented as JSON.
        """
        self.row_data = to_payload(obj)
        return self

    ###########################
    # Terminal calls
    ###########################

    def _load(self) -> DatabaseModel:
        return load_database_model(self.db_file_name, lock_timeout=self.config.lock_timeout)

    def _save(self, db_info: DatabaseModel):
        db_info.dump_to_json_file(self.db_file_name, indent=self.config.indent, lock_timeout=self.config.lock_timeout)

    def _lock(self):
        if not os.path.exists(self.db_file_name):
            raise LoadError(self.db_file_name, "no such file")
        try:
            return get_file_lock(self.db_file_name).acquire(timeout=self.config.lock_timeout)
        except Timeout as exc:
            raise LoadError(self.db_file_name, f"timed out waiting for the lock {exc.lock_file}") from exc

    def _target_table(self, db_info: DatabaseModel) -> Table:
        table = db_info.tables.get(self.table_name)
        if table is None:
            raise TableNotFoundError(self.table_name)
        return table

    def execute_add(self) -> List[str]:
        """
        Validate and insert the attached payload into the target table.

        The payload attached with `data_from_struct` is used; if there is none, the
        payload attached with `data` is used instead. A list of rows is inserted
        all-or-nothing.

        Returns:
            The identifiers of the inserted rows.

        Raises:
            (exceptions.InvalidDataError): If this isn't a Create query, or the table
                name or payload is missing.
            (exceptions.TableNotFoundError): If the target table doesn't exist.
            (exceptions.SchemaError): If a row doesn't match the table's columns.
            (exceptions.LoadError): If the database file can't be read.
            (exceptions.SaveError): If the database file can't be written.
        """
        if self.operation is not Operation.CREATE:
            raise InvalidDataError(f"execute_add can only run a Create query, not {self.operation.name}.")
        if not self.table_name:
            raise InvalidDataError("Table name not specified.")

        payload = self.row_data if self.row_data is not None else self.update_data
        if payload is None:
            raise InvalidDataError("No data provided for the new row.")

        with self._lock():
            db_info = self._load()
            table = self._target_table(db_info)
            result = table.insert(payload, atomic=True)
            self._save(db_info)

        self.logger.info(f"Added {len(result.inserted)} row(s) to table '{self.table_name}'.")
        return result.inserted

    def all(self, model: Model = None) -> List[Any]:
        """
        Read every row of the target table.

        Nothing here is fatal: a missing table name, a missing table, or an
        unreadable database file is logged and produces an empty list. Rows that
        can't be converted into `model` are skipped.

        Args:
            model: The type to convert each payload into. See
                [`from_payload`][db_scripts.query.from_payload].

        Returns:
            The converted payloads in storage order.
        """
        if not self.table_name:
            self.logger.warning("Table name not provided.")
            return []

        try:
            db_info = self._load()
        except (LoadError, DeserializationError) as exc:
            self.logger.error(f"Failed to load database from file: {exc}")
            return []

        table = db_info.tables.get(self.table_name)
        if table is None:
            self.logger.warning(f"Table '{self.table_name}' not found.")
            return []

        results = []
        for row in table:
            try:
                results.append(from_payload(row.data, model))
            except DeserializationError as exc:
                self.logger.debug(f"Skipping row {row.id}: {exc}")
        return results

    def where_eq(self, key: str, value: str, model: Model = None) -> Optional[Any]:
        """
        Apply this query's operation to the first row whose payload maps `key` to
        a string equal to `value`. Rows are scanned in storage order.

        - Read: return the matching payload.
        - Update: shallow-merge the attached payload into the matching row (the
          merged row must still match the table's columns), persist it, and
          return the merged payload.
        - Delete: remove the matching row, persist, and return its payload.

        The payload is converted into `model` before anything is written, so a
        failed conversion leaves the file unchanged.

        Args:
            key: The payload key to match on.
            value: The string to compare against.
            model: The type to convert the payload into. See
                [`from_payload`][db_scripts.query.from_payload].

        Returns:
            The converted payload, or None if no row matched.

        Raises:
            RuntimeError: If this is a Create query.
            (exceptions.InvalidDataError): If the table name is missing, or this is an
                Update query without a JSON object attached.
            (exceptions.TableNotFoundError): If the target table doesn't exist.
            (exceptions.SchemaError): If an update would break the table's schema.
            (exceptions.DeserializationError): If the payload doesn't fit `model`.
            (exceptions.LoadError): If the database file can't be read.
            (exceptions.SaveError): If the database file can't be written.
        """
        if self.operation is Operation.CREATE:
            raise RuntimeError("where_eq cannot run a Create query; use execute_add instead.")
        if not self.table_name:
            raise InvalidDataError("Table name not specified.")

        if self.operation is Operation.READ:
            row = self._target_table(self._load()).find_eq(key, value)
            return None if row is None else from_payload(row.data, model)

        if self.operation is Operation.UPDATE:
            if self.update_data is None:
                raise InvalidDataError("No update data provided.")
            if not isinstance(self.update_data, dict):
                raise InvalidDataError("Invalid update data format: expected a JSON object.")

        with self._lock():
            db_info = self._load()
            table = self._target_table(db_info)
            row = table.find_eq(key, value)
            if row is None:
                self.logger.debug(f"No row in '{self.table_name}' where {key} == {value}.")
                return None

            if self.operation is Operation.UPDATE:
                table.columns.validate({**row.data, **self.update_data})
                row.merge(self.update_data)
                result = from_payload(row.data, model)
            else:
                table.remove(row.id)
                result = from_payload(row.data, model)

            self._save(db_info)

        verb = "updated in" if self.operation is Operation.UPDATE else "deleted from"
        self.logger.info(f"Row {row.id} {verb} table '{self.table_name}'.")
        return result

    def where_eq_or_raise(self, key: str, value: str, model: Model = None) -> Any:
        """
        Like [`where_eq`][db_scripts.query.Query.where_eq] but fail when no row matches.

        Args:
            key: The payload key to match on.
            value: The string to compare against.
            model: The type to convert the payload into.

        Returns:
            The converted payload.

        Raises:
            (exceptions.RowNotFoundError): If no row matched.
        """
        result = self.where_eq(key, value, model=model)
        if result is None:
            raise RowNotFoundError(key, value)
        return result
