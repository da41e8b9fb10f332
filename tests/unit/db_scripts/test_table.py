##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other ShelfDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to ShelfDB.
##############################################################################

"""
Tests for the `table.py` module.
"""

import pytest

from shelfdb.db_scripts.columns import Columns
from shelfdb.db_scripts.data_models import Row
from shelfdb.db_scripts.table import InsertResult, Table
from shelfdb.exceptions import (
    DeserializationError,
    InvalidShapeError,
    RequiredColumnMissingError,
    UnknownColumnError,
)


class TestTableInsert:
    """Tests for `Table.insert`."""

    def test_insert_single(self, database_users_table: Table):
        """
        Test inserting one payload.

        Args:
            database_users_table: An empty `users` table.
        """
        result = database_users_table.insert({"id": "1", "name": "Alice"})

        assert isinstance(result, InsertResult)
        assert result.ok
        assert len(result.inserted) == 1
        row_id = result.inserted[0]
        assert row_id in database_users_table
        assert database_users_table.get(row_id).data == {"id": "1", "name": "Alice"}

    def test_insert_single_invalid_raises(self, database_users_table: Table):
        """
        Test that a single payload failing validation raises and adds nothing.

        Args:
            database_users_table: An empty `users` table.
        """
        with pytest.raises(RequiredColumnMissingError):
            database_users_table.insert({"id": "1"})
        assert len(database_users_table) == 0

    def test_insert_non_object_raises(self, database_users_table: Table):
        """
        Test that a payload that isn't an object or a list raises `InvalidShapeError`.

        Args:
            database_users_table: An empty `users` table.
        """
        with pytest.raises(InvalidShapeError):
            database_users_table.insert("Alice")

    def test_insert_batch_is_not_atomic_by_default(self, database_users_table: Table):
        """
        Test that valid items around a rejected item of a batch are still inserted.

        Args:
            database_users_table: An empty `users` table.
        """
        result = database_users_table.insert(
            [
                {"id": "1", "name": "Alice"},
                {"id": "2", "name": "Bob", "age": 40},
                {"id": "3", "name": "Carol"},
                "not an object",
            ]
        )

        assert not result.ok
        assert len(result.inserted) == 2
        assert [index for index, _ in result.errors] == [1, 3]
        assert isinstance(result.errors[0][1], UnknownColumnError)
        assert isinstance(result.errors[1][1], InvalidShapeError)
        assert [row.data["id"] for row in database_users_table] == ["1", "3"]

    def test_insert_batch_atomic_rejects_everything(self, database_users_table: Table):
        """
        Test that an atomic batch with one bad item inserts nothing and raises the first error.

        Args:
            database_users_table: An empty `users` table.
        """
        with pytest.raises(RequiredColumnMissingError):
            database_users_table.insert([{"id": "1", "name": "Alice"}, {"id": "2"}], atomic=True)
        assert len(database_users_table) == 0

    def test_insert_batch_atomic_success(self, database_users_table: Table):
        """
        Test that a valid atomic batch inserts every item in order.

        Args:
            database_users_table: An empty `users` table.
        """
        result = database_users_table.insert([{"id": "1", "name": "Alice"}, {"id": "2", "name": "Bob"}], atomic=True)
        assert result.ok
        assert [database_users_table.get(row_id).data["id"] for row_id in result.inserted] == ["1", "2"]

    def test_insert_empty_batch(self, database_users_table: Table):
        """
        Test that an empty batch is a no-op.

        Args:
            database_users_table: An empty `users` table.
        """
        result = database_users_table.insert([])
        assert result.ok
        assert result.inserted == []

    def test_duplicate_payloads_get_distinct_rows(self, database_users_table: Table):
        """
        Test that identical payloads are stored as separate rows.

        Args:
            database_users_table: An empty `users` table.
        """
        payload = {"id": "1", "name": "Alice"}
        first = database_users_table.insert(payload).inserted[0]
        second = database_users_table.insert(payload).inserted[0]
        assert first != second
        assert len(database_users_table) == 2


class TestTableLookup:
    """Tests for reading and removing rows of a table."""

    @pytest.fixture
    def populated_table(self, database_users_table: Table) -> Table:
        """
        A `users` table with three rows, two of them named Bob.

        Args:
            database_users_table: An empty `users` table.

        Returns:
            The populated table.
        """
        database_users_table.insert(
            [
                {"id": "1", "name": "Alice"},
                {"id": "2", "name": "Bob"},
                {"id": "3", "name": "Bob", "email": "bob3@example.com"},
            ]
        )
        return database_users_table

    def test_find_eq_returns_first_match(self, populated_table: Table):
        """
        Test that the first row in insertion order wins.

        Args:
            populated_table: A populated `users` table.
        """
        assert populated_table.find_eq("name", "Bob").data["id"] == "2"

    def test_find_eq_no_match(self, populated_table: Table):
        """
        Test that a lookup without a match returns None.

        Args:
            populated_table: A populated `users` table.
        """
        assert populated_table.find_eq("name", "Dave") is None
        assert populated_table.find_eq("age", "1") is None

    def test_contains_and_get(self, populated_table: Table):
        """
        Test membership and lookup by identifier.

        Args:
            populated_table: A populated `users` table.
        """
        row = populated_table.find_eq("id", "1")
        assert populated_table.contains(row.id)
        assert populated_table.get(row.id) is row
        assert not populated_table.contains("missing")
        assert populated_table.get("missing") is None

    def test_remove(self, populated_table: Table):
        """
        Test removing a row by identifier.

        Args:
            populated_table: A populated `users` table.
        """
        row = populated_table.find_eq("id", "2")
        assert populated_table.remove(row.id) is row
        assert len(populated_table) == 2
        assert populated_table.remove(row.id) is None
        assert populated_table.find_eq("name", "Bob").data["id"] == "3"


class TestTablePersistence:
    """Tests for converting a table to and from its persisted form."""

    def test_to_dict(self):
        """Test the persisted form of a table."""
        table = Table("t", Columns.from_list([{"name": "a", "required": True}]), {"r1": Row(id="r1", data={"a": 1})})
        assert table.to_dict() == {
            "name": "t",
            "columns": [{"name": "a", "required": True}],
            "rows": {"r1": {"_id": "r1", "data": {"a": 1}}},
        }

    def test_round_trip(self, database_users_table: Table):
        """
        Test that a table rebuilt from its persisted form equals the original.

        Args:
            database_users_table: An empty `users` table.
        """
        database_users_table.insert([{"id": "1", "name": "Alice"}, {"id": "2", "name": "Bob"}])
        rebuilt = Table.from_dict(database_users_table.to_dict())
        assert rebuilt == database_users_table
        assert list(rebuilt.rows) == list(database_users_table.rows)

    def test_from_dict_mismatched_row_key(self):
        """Test that a row stored under a key other than its identifier is rejected."""
        data = {"name": "t", "columns": [], "rows": {"r1": {"_id": "r2", "data": {}}}}
        with pytest.raises(DeserializationError, match="has identifier 'r2'"):
            Table.from_dict(data)

    @pytest.mark.parametrize("data", [{"columns": []}, {"name": "t", "rows": []}, ["t"]])
    def test_from_dict_invalid(self, data):
        """
        Test that malformed tables raise a `DeserializationError`.

        Args:
            data: A malformed persisted table.
        """
        with pytest.raises(DeserializationError):
            Table.from_dict(data)
