##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other ShelfDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to ShelfDB.
##############################################################################

"""
This module houses the `DatabaseModel` dataclass, which defines the format of
a whole database file, and the helper that reads one from disk.
"""

import os
from dataclasses import dataclass, field
from typing import Dict

from shelfdb.db_scripts.data_models import BaseDataModel, payload_type_name
from shelfdb.db_scripts.table import Table
from shelfdb.exceptions import DeserializationError


@dataclass
class DatabaseModel(BaseDataModel):
    """
    A dataclass to store everything persisted in a database file.

    Attributes:
        name (str): The logical name of the database.
        file_name (str): The path of the backing file.
        tables (Dict[str, Table]): The tables of the database keyed by name.
    """

    name: str = ""
    file_name: str = ""
    tables: Dict[str, Table] = field(default_factory=dict)

    def to_dict(self) -> Dict:
        """
        Convert the database to its persisted form.

        Returns:
            A dictionary with `name`, `file_name` and `tables` entries.
        """
        return {
            "name": self.name,
            "file_name": self.file_name,
            "tables": {name: table.to_dict() for name, table in self.tables.items()},
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "DatabaseModel":
        """
        Build a database model from its persisted form.

        An empty document (`{}`) is accepted and produces an empty, unnamed model.

        Args:
            data: A dictionary with `name`, `file_name` and `tables` entries.

        Returns:
            A `DatabaseModel` instance.

        Raises:
            (exceptions.DeserializationError): If `data` isn't a valid database document.
        """
        if not isinstance(data, dict):
            raise DeserializationError(f"Expected a database document object, got {payload_type_name(data)}.")

        raw_tables = data.get("tables", {})
        if not isinstance(raw_tables, dict):
            raise DeserializationError(f"Tables must be an object, got {payload_type_name(raw_tables)}.")

        tables = {}
        for table_name, raw_table in raw_tables.items():
            table = Table.from_dict(raw_table)
            if table.name != table_name:
                raise DeserializationError(f"Table stored under '{table_name}' is named '{table.name}'.")
            tables[table_name] = table

        return cls(name=data.get("name") or "", file_name=data.get("file_name") or "", tables=tables)


def load_database_model(file_name: str, lock_timeout: float = -1) -> DatabaseModel:
    """
    Read the database document stored at `file_name`.

    A document without a name (such as an empty `{}` placeholder) takes the
    file's stem as its name. The model is bound to `file_name` regardless of
    the path recorded inside the document.

    Args:
        file_name: The path of the database file.
        lock_timeout: Seconds to wait for the file lock; negative waits forever.

    Returns:
        The `DatabaseModel` stored in the file.

    Raises:
        (exceptions.LoadError): If the file doesn't exist or can't be read.
        (exceptions.DeserializationError): If the file isn't a valid database document.
    """
    db_info = DatabaseModel.load_from_json_file(file_name, lock_timeout=lock_timeout)
    if not db_info.name:
        db_info.name = os.path.splitext(os.path.basename(file_name))[0]
    db_info.file_name = str(file_name)
    return db_info
