##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other ShelfDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to ShelfDB.
##############################################################################

"""
Tests for the `schema_adapters.py` module.
"""

from dataclasses import dataclass, field
from typing import List

import pytest

from shelfdb.db_scripts.columns import Column, Columns
from shelfdb.schema_adapters import columns_from_dataclass, columns_from_mapping


@dataclass
class Article:
    """A dataclass mixing required fields, defaults and default factories."""

    slug: str
    title: str
    body: str = ""
    tags: List[str] = field(default_factory=list)


class TestColumnsFromDataclass:
    """Tests for `columns_from_dataclass`."""

    def test_required_follows_defaults(self):
        """Test that fields without defaults become required columns, in declaration order."""
        assert columns_from_dataclass(Article) == Columns(
            [Column("slug"), Column("title"), Column("body", required=False), Column("tags", required=False)]
        )

    @pytest.mark.parametrize("required", [True, False])
    def test_forced_required_flag(self, required: bool):
        """
        Test that an explicit flag applies to every column.

        Args:
            required: The flag to force.
        """
        columns = columns_from_dataclass(Article, required=required)
        assert [column.required for column in columns] == [required] * 4

    def test_instance_is_accepted(self):
        """Test that an instance gives the same schema as its class."""
        assert columns_from_dataclass(Article("s", "t")) == columns_from_dataclass(Article)

    def test_schema_accepts_the_dataclass_payload(self, database_user_class: type):
        """
        Test that the derived schema validates payloads built from the dataclass.

        Args:
            database_user_class: The `User` dataclass.
        """
        columns = columns_from_dataclass(database_user_class)
        columns.validate({"id": "1", "name": "A", "email": ""})
        columns.validate({"id": "1", "name": "A"})

    @pytest.mark.parametrize("value", [dict, {"a": 1}, "Article"])
    def test_non_dataclass(self, value):
        """
        Test that anything but a dataclass raises a `TypeError`.

        Args:
            value: A value that isn't a dataclass.
        """
        with pytest.raises(TypeError):
            columns_from_dataclass(value)


class TestColumnsFromMapping:
    """Tests for `columns_from_mapping`."""

    def test_keys_in_order(self):
        """Test that every key becomes a required column in insertion order."""
        columns = columns_from_mapping({"b": 1, "a": 2})
        assert columns.names() == ["b", "a"]
        assert columns.required_names() == ["b", "a"]

    def test_optional(self):
        """Test that the flag can make every column optional."""
        assert columns_from_mapping({"a": 1}, required=False).required_names() == []
