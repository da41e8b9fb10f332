##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other ShelfDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to ShelfDB.
##############################################################################

"""
Module of all ShelfDB-specific exception types.

Every error raised by the storage core derives from `DatabaseError` so that
callers can catch the whole family at once.
"""

__all__ = (
    "DatabaseError",
    "LoadError",
    "SaveError",
    "DeleteError",
    "TableAlreadyExistsError",
    "TableNotFoundError",
    "SchemaError",
    "InvalidShapeError",
    "RequiredColumnMissingError",
    "UnknownColumnError",
    "InvalidDataError",
    "RowNotFoundError",
    "SerializationError",
    "DeserializationError",
)


class DatabaseError(Exception):
    """
    Base exception for every error raised by a ShelfDB database.
    """


class LoadError(DatabaseError):
    """
    Exception to signal that the backing file of a database could not be read.

    Attributes:
        file_name: The path that was being read.
    """

    def __init__(self, file_name: str, reason: str):
        self.file_name = file_name
        super().__init__(f"Failed to load the database from '{file_name}': {reason}")


class SaveError(DatabaseError):
    """
    Exception to signal that the backing file of a database could not be written.

    Attributes:
        file_name: The path that was being written.
    """

    def __init__(self, file_name: str, reason: str):
        self.file_name = file_name
        super().__init__(f"Failed to save the database to '{file_name}': {reason}")


class DeleteError(DatabaseError):
    """
    Exception to signal that the backing file of a database could not be removed.

    Attributes:
        file_name: The path that was being removed.
    """

    def __init__(self, file_name: str, reason: str):
        self.file_name = file_name
        super().__init__(f"Failed to drop the database file '{file_name}': {reason}")


class TableAlreadyExistsError(DatabaseError):
    """
    Exception to signal that a table name is already registered in a database.

    Attributes:
        table_name: The conflicting table name.
    """

    def __init__(self, table_name: str):
        self.table_name = table_name
        super().__init__(f"Table '{table_name}' already exists")


class TableNotFoundError(DatabaseError):
    """
    Exception to signal that a table is not registered in a database.

    Attributes:
        table_name: The table name that was looked up.
    """

    def __init__(self, table_name: str):
        self.table_name = table_name
        super().__init__(f"Table '{table_name}' not found")


class SchemaError(DatabaseError):
    """
    Base exception for a payload whose shape does not match a table's columns.
    """


class InvalidShapeError(SchemaError):
    """
    Exception to signal that a row payload is not a JSON object.
    """

    def __init__(self, received: str):
        self.received = received
        super().__init__(f"Invalid row data: expected a JSON object, got {received}")


class RequiredColumnMissingError(SchemaError):
    """
    Exception to signal that a required column is absent from a row payload.

    Attributes:
        column: The name of the missing column.
    """

    def __init__(self, column: str):
        self.column = column
        super().__init__(f"Column '{column}' is required")


class UnknownColumnError(SchemaError):
    """
    Exception to signal that a row payload carries a key that is not a declared column.

    Attributes:
        column: The undeclared key.
    """

    def __init__(self, column: str):
        self.column = column
        super().__init__(f"Column '{column}' is not valid")


class InvalidDataError(DatabaseError):
    """
    Exception to signal a malformed request, such as a missing table name or payload.

    Attributes:
        reason: A description of what was wrong with the request.
    """

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid data: {reason}")


class RowNotFoundError(DatabaseError):
    """
    Exception to signal that no row matched an equality lookup.

    Attributes:
        key: The payload key that was matched on.
        value: The value that was searched for.
    """

    def __init__(self, key: str, value: str):
        self.key = key
        self.value = value
        super().__init__(f"Row not found with {key} = {value}")


class SerializationError(DatabaseError):
    """
    Exception to signal that a value could not be converted to JSON.
    """


class DeserializationError(DatabaseError):
    """
    Exception to signal that stored JSON could not be converted to the requested shape.
    """
