##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other ShelfDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to ShelfDB.
##############################################################################

"""
The `db_scripts` package provides the storage engine of ShelfDB.

This package defines the models persisted in a database file, the table and
database objects that manage them, and the query builder used to create,
read, update and delete rows.

Modules:
    data_models.py: Defines the base dataclass with JSON file persistence and the
        records stored in a database file, such as [`Column`][db_scripts.data_models.Column]
        and [`Row`][db_scripts.data_models.Row].
    columns.py: Contains [`Columns`][db_scripts.columns.Columns], the schema of a table.
    table.py: Contains [`Table`][db_scripts.table.Table], a schema plus the rows stored
        under it.
    database_model.py: Contains [`DatabaseModel`][db_scripts.database_model.DatabaseModel],
        the format of a whole database file.
    database.py: Contains [`Database`][db_scripts.database.Database], which binds a
        collection of tables to its backing file and owns the table lifecycle.
    query.py: Contains [`Query`][db_scripts.query.Query], the builder and executor for
        row operations.
"""

from shelfdb.db_scripts.columns import Column, Columns
from shelfdb.db_scripts.data_models import Row
from shelfdb.db_scripts.database import Database
from shelfdb.db_scripts.query import Query
from shelfdb.db_scripts.table import InsertResult, Table


__all__ = ("Column", "Columns", "Database", "InsertResult", "Query", "Row", "Table")
