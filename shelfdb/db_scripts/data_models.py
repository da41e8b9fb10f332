##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other ShelfDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to ShelfDB.
##############################################################################

"""
This module houses dataclasses that define the format of the data
that's stored in a ShelfDB database file, along with the file locking
and atomic-write helpers every database file goes through.
"""

import json
import logging
import os
import threading
import uuid
from copy import deepcopy
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Type, TypeVar, Union

from filelock import FileLock, Timeout

from shelfdb.exceptions import DeserializationError, LoadError, SaveError, SerializationError


LOG = logging.getLogger("shelfdb")
T = TypeVar("T", bound="BaseDataModel")

JSONValue = Union[None, bool, int, float, str, List["JSONValue"], Dict[str, "JSONValue"]]
JSONObject = Dict[str, JSONValue]

_LOCKS: Dict[str, FileLock] = {}
_LOCKS_GUARD = threading.Lock()


def get_file_lock(filepath: str) -> FileLock:
    """
    Get the lock guarding `filepath`.

    One `FileLock` is shared per path within a process so that nested
    acquisitions from the same thread are re-entrant instead of deadlocking
    against each other. The lock file lives alongside the target file.

    Args:
        filepath: The path to the file being guarded.

    Returns:
        The `FileLock` for `<filepath>.lock`.
    """
    key = os.path.abspath(filepath)
    with _LOCKS_GUARD:
        if key not in _LOCKS:
            _LOCKS[key] = FileLock(f"{key}.lock")
        return _LOCKS[key]


@dataclass
class BaseDataModel:
    """
    A base class for dataclasses that provides common serialization and
    deserialization functionality.

    Methods:
        to_dict:
            Convert the dataclass instance to a dictionary.

        to_json:
            Serialize the dataclass instance to a JSON string.

        from_dict (classmethod):
            Create an instance of the dataclass from a dictionary.

        from_json (classmethod):
            Create an instance of the dataclass from a JSON string.

        dump_to_json_file:
            Dump the data of this dataclass to a JSON file.

        load_from_json_file (classmethod):
            Load the data stored in a JSON file to this dataclass.
    """

    def to_dict(self) -> Dict:
        """
        Convert the dataclass to a dictionary.

        Returns:
            The dataclass as a dictionary.
        """
        return asdict(self)

    def to_json(self, indent: int = None) -> str:
        """
        Serialize the dataclass to a JSON string.

        Args:
            indent: Indentation to pretty-print with. `None` produces compact output.

        Returns:
            The dataclass as a JSON string.

        Raises:
            (exceptions.SerializationError): If a stored value can't be represented as JSON.
        """
        try:
            return json.dumps(self.to_dict(), indent=indent)
        except (TypeError, ValueError) as exc:
            raise SerializationError(f"Could not serialize {type(self).__name__}: {exc}") from exc

    @classmethod
    def from_dict(cls: Type[T], data: Dict) -> T:
        """
        Create an instance of the dataclass from a dictionary.

        Args:
            data: A dictionary to turn into an instance of this dataclass.

        Returns:
            An instance of the dataclass that called this.
        """
        return cls(**data)

    @classmethod
    def from_json(cls: Type[T], json_str: str) -> T:
        """
        Create an instance of the dataclass from a JSON string.

        Args:
            json_str: A JSON string to turn into an instance of this dataclass.

        Returns:
            An instance of the dataclass that called this.

        Raises:
            (exceptions.DeserializationError): If `json_str` is not valid JSON or
                doesn't describe this dataclass.
        """
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as exc:
            raise DeserializationError(f"Invalid JSON for {cls.__name__}: {exc}") from exc
        return cls.from_dict(data)

    def dump_to_json_file(self, filepath: str, indent: int = 4, lock_timeout: float = -1):
        """
        Dump the data of this dataclass to a JSON file.

        The data is written to a temporary file in the same directory which then
        replaces the target, so readers see either the old or the new document.

        Args:
            filepath: The path to the JSON file where the data will be written.
            indent: Indentation to pretty-print with.
            lock_timeout: Seconds to wait for the file lock; negative waits forever.

        Raises:
            ValueError: If the `filepath` is not provided.
            (exceptions.SerializationError): If the data can't be represented as JSON.
            (exceptions.SaveError): If the file can't be written.
        """
        if not filepath:
            raise ValueError("A valid file path must be provided.")

        # Serialize up front so a bad value never touches the disk
        json_data = self.to_json(indent=indent)

        # Ensure the directory for the file exists
        dirname = os.path.dirname(filepath)
        if dirname:
            os.makedirs(dirname, exist_ok=True)

        temp_filepath = f"{filepath}.tmp"
        try:
            with get_file_lock(filepath).acquire(timeout=lock_timeout):
                with open(temp_filepath, "w") as json_file:
                    json_file.write(json_data)
                os.replace(temp_filepath, filepath)
        except Timeout as exc:
            raise SaveError(filepath, f"timed out waiting for the lock {exc.lock_file}") from exc
        except OSError as exc:
            if os.path.exists(temp_filepath):
                os.remove(temp_filepath)
            raise SaveError(filepath, str(exc)) from exc

        LOG.debug(f"Data successfully dumped to {filepath}.")

    @classmethod
    def load_from_json_file(cls: Type[T], filepath: str, lock_timeout: float = -1) -> T:
        """
        Load the data stored in a JSON file to this dataclass.

        Args:
            filepath: The path to the JSON file where the data is located.
            lock_timeout: Seconds to wait for the file lock; negative waits forever.

        Raises:
            (exceptions.LoadError): If the file doesn't exist or can't be read.
            (exceptions.DeserializationError): If the file contents aren't valid JSON
                for this dataclass.
        """
        if not filepath or not os.path.exists(filepath):
            raise LoadError(filepath, "no such file")

        try:
            with get_file_lock(filepath).acquire(timeout=lock_timeout):
                with open(filepath, "r") as json_file:
                    json_data = json_file.read()
        except Timeout as exc:
            raise LoadError(filepath, f"timed out waiting for the lock {exc.lock_file}") from exc
        except OSError as exc:
            raise LoadError(filepath, str(exc)) from exc

        LOG.debug(f"Data successfully loaded from {filepath}.")
        return cls.from_json(json_data)


@dataclass
class Column(BaseDataModel):
    """
    One declared column of a table's schema.

    Attributes:
        name (str): The key this column corresponds to in a row's payload.
        required (bool): Whether every row must carry this key.
    """

    name: str
    required: bool = True

    @classmethod
    def from_dict(cls, data: Dict) -> "Column":
        """
        Create a column from its persisted form.

        Args:
            data: A dictionary with `name` and `required` entries.

        Returns:
            A `Column` instance.

        Raises:
            (exceptions.DeserializationError): If `data` isn't a valid column.
        """
        if not isinstance(data, dict) or not isinstance(data.get("name"), str):
            raise DeserializationError(f"Invalid column definition: {data!r}")
        return cls(name=data["name"], required=bool(data.get("required", True)))


@dataclass
class Row(BaseDataModel):
    """
    A single record stored in a table.

    The identifier is assigned once, independently of the payload, and is the
    key the row is stored under. It is persisted as `_id`.

    Attributes:
        id (str): The unique, immutable identifier of this row.
        data (Dict): The JSON-object payload of this row.
    """

    id: str = field(default_factory=lambda: str(uuid.uuid4()))  # pylint: disable=invalid-name
    data: JSONObject = field(default_factory=dict)

    @classmethod
    def new(cls, payload: JSONObject) -> "Row":
        """
        Create a row with a freshly generated identifier.

        Args:
            payload: The JSON object to store. It is copied so later changes made
                by the caller don't leak into the table.

        Returns:
            A new `Row`.
        """
        return cls(data=deepcopy(payload))

    def to_dict(self) -> Dict:
        """
        Convert the row to its persisted form.

        Returns:
            A dictionary with `_id` and `data` entries.
        """
        return {"_id": self.id, "data": deepcopy(self.data)}

    @classmethod
    def from_dict(cls, data: Dict) -> "Row":
        """
        Create a row from its persisted form.

        Args:
            data: A dictionary with `_id` and `data` entries.

        Returns:
            A `Row` instance.

        Raises:
            (exceptions.DeserializationError): If `data` isn't a valid row.
        """
        if not isinstance(data, dict) or not isinstance(data.get("_id"), str):
            raise DeserializationError(f"Invalid row entry: {data!r}")
        payload = data.get("data", {})
        if not isinstance(payload, dict):
            raise DeserializationError(f"Row '{data['_id']}' has a payload that is not a JSON object.")
        return cls(id=data["_id"], data=payload)

    def merge(self, updates: JSONObject):
        """
        Shallow-merge `updates` into this row's payload.

        Keys in `updates` overwrite existing keys; every other key is left untouched.

        Args:
            updates: The keys and values to merge in.
        """
        for key, value in updates.items():
            self.data[key] = deepcopy(value)

    def matches(self, key: str, value: str) -> bool:
        """
        Check whether this row's payload maps `key` to a string equal to `value`.

        Args:
            key: The payload key to inspect.
            value: The string to compare against.

        Returns:
            True if the payload holds exactly that string under `key`.
        """
        field_value = self.data.get(key)
        return isinstance(field_value, str) and field_value == value

    def __str__(self) -> str:
        return f"Row {self.id}: {json.dumps(self.data)}"


def payload_type_name(value: Any) -> str:
    """
    Name the JSON type of `value` for error messages.

    Args:
        value: Any decoded JSON value.

    Returns:
        One of `null`, `boolean`, `number`, `string`, `array`, `object`, or the
            Python type name for values outside the JSON model.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__
