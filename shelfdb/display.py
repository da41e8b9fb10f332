##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other ShelfDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to ShelfDB.
##############################################################################

"""
Manages formatting for displaying databases and tables to the console.
"""
import json
from typing import List

from tabulate import tabulate

from shelfdb.db_scripts.data_models import JSONValue
from shelfdb.db_scripts.table import Table


TABLE_FORMAT = "grid"


def _format_cell(value: JSONValue) -> str:
    """
    Render one payload value as a table cell.

    Args:
        value: The value stored in a row's payload.

    Returns:
        Strings as they are, everything else as compact JSON.
    """
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(",", ":"))


def format_table(table: Table) -> str:
    """
    Render a table's rows under its declared columns.

    Columns appear in declaration order and keys missing from a row render as
    empty cells.

    Args:
        table: The table to render.

    Returns:
        The rendered table, headed by its name.
    """
    lines = [f"Table: {table.name}"]
    headers = table.columns.names()
    if not headers:
        lines.append("No columns defined for this table.")
        return "\n".join(lines)

    body: List[List[str]] = [
        [_format_cell(row.data[name]) if name in row.data else "" for name in headers] for row in table
    ]
    lines.append(tabulate(body, headers=headers, tablefmt=TABLE_FORMAT))
    return "\n".join(lines)


def format_database(database: "Database") -> str:  # noqa: F821
    """
    Render every table of a database.

    Args:
        database: The database to render.

    Returns:
        The database name followed by each of its tables.
    """
    sections = [f"Database: {database.name}"]
    if not database.tables:
        sections.append("No tables in this database.")
    for table in database.tables.values():
        sections.append(format_table(table))
    return "\n\n".join(sections)


def display_database(database: "Database"):  # noqa: F821
    """
    Print every table of a database.

    Args:
        database: The database to print.
    """
    print(format_database(database))


def display_table(database: "Database", table_name: str):  # noqa: F821
    """
    Print one table of a database.

    A missing table prints a notice instead of raising.

    Args:
        database: The database holding the table.
        table_name: The name of the table to print.
    """
    table = database.get_table(table_name)
    if table is None:
        print(f"Table '{table_name}' not found in database '{database.name}'.")
        return
    print(format_table(table))
