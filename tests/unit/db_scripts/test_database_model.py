##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other ShelfDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to ShelfDB.
##############################################################################

"""
Tests for the `database_model.py` module.
"""

import json
import os

import pytest

from shelfdb.db_scripts.database_model import DatabaseModel, load_database_model
from shelfdb.db_scripts.table import Table
from shelfdb.exceptions import DeserializationError, LoadError


class TestDatabaseModel:
    """Tests for the `DatabaseModel` dataclass."""

    def test_to_dict_layout(self, database_users_table: Table):
        """
        Test the persisted layout of a database document.

        Args:
            database_users_table: An empty `users` table.
        """
        model = DatabaseModel(name="app", file_name="app.json", tables={"users": database_users_table})
        assert model.to_dict() == {
            "name": "app",
            "file_name": "app.json",
            "tables": {"users": database_users_table.to_dict()},
        }

    def test_empty_document(self):
        """Test that `{}` loads as an empty, unnamed model."""
        model = DatabaseModel.from_dict({})
        assert model == DatabaseModel()

    def test_table_key_mismatch(self):
        """Test that a table stored under another name is rejected."""
        data = {"tables": {"users": {"name": "people", "columns": [], "rows": {}}}}
        with pytest.raises(DeserializationError, match="is named 'people'"):
            DatabaseModel.from_dict(data)

    @pytest.mark.parametrize("data", [[], {"tables": []}, {"tables": {"t": "x"}}])
    def test_invalid_documents(self, data):
        """
        Test that malformed documents raise a `DeserializationError`.

        Args:
            data: A malformed database document.
        """
        with pytest.raises(DeserializationError):
            DatabaseModel.from_dict(data)


class TestLoadDatabaseModel:
    """Tests for `load_database_model`."""

    def test_empty_placeholder_takes_file_stem(self, tmp_path):
        """
        Test that an `{}` file loads as an empty database named after the file.

        Args:
            tmp_path: A built-in pytest fixture providing a unique temp directory.
        """
        file_name = os.path.join(tmp_path, "legacy.json")
        with open(file_name, "w") as db_file:
            db_file.write("{}")

        model = load_database_model(file_name)

        assert model.name == "legacy"
        assert model.file_name == file_name
        assert model.tables == {}

    def test_binds_to_actual_path(self, tmp_path):
        """
        Test that the path recorded inside a document is replaced by the real path.

        Args:
            tmp_path: A built-in pytest fixture providing a unique temp directory.
        """
        file_name = os.path.join(tmp_path, "moved.json")
        with open(file_name, "w") as db_file:
            json.dump({"name": "app", "file_name": "/somewhere/else.json", "tables": {}}, db_file)

        model = load_database_model(file_name)

        assert model.name == "app"
        assert model.file_name == file_name

    def test_missing_file(self, tmp_path):
        """
        Test that a missing file raises a `LoadError`.

        Args:
            tmp_path: A built-in pytest fixture providing a unique temp directory.
        """
        with pytest.raises(LoadError):
            load_database_model(os.path.join(tmp_path, "missing.json"))

    def test_corrupt_file(self, tmp_path):
        """
        Test that a file that isn't JSON raises a `DeserializationError`.

        Args:
            tmp_path: A built-in pytest fixture providing a unique temp directory.
        """
        file_name = os.path.join(tmp_path, "corrupt.json")
        with open(file_name, "w") as db_file:
            db_file.write("{ this is not json")
        with pytest.raises(DeserializationError):
            load_database_model(file_name)
