##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other ShelfDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to ShelfDB.
##############################################################################

"""
This module contains the `Database` class, a named collection of tables bound
to one backing JSON file.

The file is the single source of truth. A `Database` object only holds a
snapshot of it: every lifecycle operation re-reads the file while holding the
file's lock, applies its change, writes the whole document back and then
mirrors the result into the snapshot. Holding the lock across the
read-modify-write cycle means two handles on the same file can't overwrite
each other's changes.
"""

import logging
import os
from contextlib import contextmanager
from copy import deepcopy
from typing import Dict, List, Optional, Union

from filelock import Timeout

from shelfdb.common.enums import Operation
from shelfdb.config import Config
from shelfdb.config.configfile import get_config
from shelfdb.db_scripts.data_models import JSONObject, get_file_lock
from shelfdb.db_scripts.database_model import DatabaseModel, load_database_model
from shelfdb.db_scripts.query import Query
from shelfdb.db_scripts.table import InsertResult, Table
from shelfdb.exceptions import (
    DeleteError,
    DeserializationError,
    InvalidDataError,
    LoadError,
    TableAlreadyExistsError,
    TableNotFoundError,
)


LOG = logging.getLogger("shelfdb")


class Database:
    """
    A named collection of tables bound to one backing file.

    Attributes:
        db_info (DatabaseModel): The in-memory snapshot of the database file.
        logger (logging.Logger): The logger this database and its queries report to.
        config (config.Config): The settings used for file locking and formatting.

    Methods:
        open_or_create (classmethod): Load a database by name, creating it if needed.
        load_from_file (classmethod): Load a database from a specific file.
        save_to_file: Write the snapshot to the backing file.
        reload: Refresh the snapshot from the backing file.
        add_table: Register a new table.
        drop_table: Remove a table.
        rename_table: Move a table under a new name.
        insert_rows: Validate and insert rows into a table.
        list_tables: The names of every table in the snapshot.
        get_table: Get a table from the snapshot.
        count_rows: The number of rows of a table in the snapshot.
        record_exists: Check whether a row identifier exists in a table of the snapshot.
        drop_database: Delete the backing file.
        add_row: Start a Create query.
        get_rows: Start a Read query for many rows.
        get_single: Start a Read query for one row.
        update_row: Start an Update query.
        delete_single: Start a Delete query.
        view: Print every table of the snapshot.
        view_table: Print one table of the snapshot.
    """

    def __init__(
        self,
        name: str,
        file_name: str,
        tables: Dict[str, Table] = None,
        logger: logging.Logger = None,
        config: Config = None,
    ):
        """
        Initialize a `Database` bound to `file_name`. Nothing is read or written.

        Use [`open_or_create`][db_scripts.database.Database.open_or_create] to get a
        database backed by an existing or freshly created file.

        Args:
            name: The logical name of the database.
            file_name: The path of the backing file.
            tables: The initial tables keyed by name.
            logger: The logger to report to. Defaults to the `shelfdb` logger.
            config: Settings for locking and formatting. Defaults to built-in defaults.
        """
        self.db_info: DatabaseModel = DatabaseModel(name=name, file_name=str(file_name), tables=dict(tables or {}))
        self.logger: logging.Logger = logger or LOG
        self.config: Config = config or Config()
        # Set when the backing file couldn't be parsed; the next commit replaces it.
        self._recovered: bool = False

    def __repr__(self) -> str:
        return f"Database(name={self.name!r}, file_name={self.file_name!r}, tables={self.list_tables()!r})"

    def __str__(self) -> str:
        return f"Database '{self.name}' ({len(self.tables)} tables) at {self.file_name}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Database):
            return NotImplemented
        return self.db_info == other.db_info

    @property
    def name(self) -> str:
        """The logical name of the database."""
        return self.db_info.name

    @property
    def file_name(self) -> str:
        """The path of the backing file."""
        return self.db_info.file_name

    @property
    def tables(self) -> Dict[str, Table]:
        """The tables of the snapshot keyed by name."""
        return self.db_info.tables

    ###########################
    # Persistence
    ###########################

    @classmethod
    def open_or_create(cls, name: str, logger: logging.Logger = None, config: Config = None) -> "Database":
        """
        Open the database called `name`, creating its file if it doesn't exist.

        The backing file is `<data_dir>/<name>.json`. If that file exists but can't
        be read or parsed, the error is logged and an empty database bound to the
        file is returned; the file itself is left untouched until the next save.

        Args:
            name: The logical name of the database.
            logger: The logger to report to. Defaults to the `shelfdb` logger.
            config: Settings to use. Defaults to the loaded `shelfdb.yaml` settings.

        Returns:
            A `Database` instance.

        Raises:
            (exceptions.InvalidDataError): If `name` is empty.
            (exceptions.SaveError): If a new database file can't be written.
        """
        if not name:
            raise InvalidDataError("A database name must be provided.")

        logger = logger or LOG
        config = config or get_config()
        file_name = os.path.join(config.data_dir, f"{name}.json")

        if os.path.exists(file_name):
            logger.info(f"Database '{name}' already exists, loading it from {file_name}.")
            try:
                return cls.load_from_file(file_name, logger=logger, config=config)
            except (LoadError, DeserializationError) as exc:
                logger.error(f"Failed to load database from {file_name}: {exc}")
                database = cls(name, file_name, logger=logger, config=config)
                database._recovered = True
                return database

        logger.info(f"Creating new database '{name}' at {file_name}.")
        database = cls(name, file_name, logger=logger, config=config)
        database.save_to_file()
        return database

    @classmethod
    def load_from_file(cls, file_name: str, logger: logging.Logger = None, config: Config = None) -> "Database":
        """
        Load a database from `file_name`.

        A document without a name (such as an empty `{}` placeholder) takes the
        file's stem as its name. The database is bound to `file_name` regardless of
        the path recorded inside the document.

        Args:
            file_name: The path of the database file.
            logger: The logger to report to. Defaults to the `shelfdb` logger.
            config: Settings to use. Defaults to built-in defaults.

        Returns:
            A `Database` instance.

        Raises:
            (exceptions.LoadError): If the file doesn't exist or can't be read.
            (exceptions.DeserializationError): If the file isn't a valid database document.
        """
        config = config or Config()
        db_info = load_database_model(file_name, lock_timeout=config.lock_timeout)

        database = cls(db_info.name, db_info.file_name, logger=logger, config=config)
        database.db_info = db_info
        database.logger.debug(f"Database '{db_info.name}' loaded from {file_name}.")
        return database

    def save_to_file(self):
        """
        Write the whole snapshot to the backing file, replacing its contents.

        Raises:
            (exceptions.SerializationError): If a stored value can't be represented as JSON.
            (exceptions.SaveError): If the file can't be written.
        """
        self.db_info.dump_to_json_file(self.file_name, indent=self.config.indent, lock_timeout=self.config.lock_timeout)
        self._recovered = False
        self.logger.debug(f"Database saved to file: {self.file_name}")

    def reload(self):
        """
        Refresh the snapshot from the backing file.

        Raises:
            (exceptions.LoadError): If the file doesn't exist or can't be read.
            (exceptions.DeserializationError): If the file isn't a valid database document.
        """
        self.db_info = load_database_model(self.file_name, lock_timeout=self.config.lock_timeout)
        self._recovered = False

    @contextmanager
    def _exclusive(self):
        """
        Hold the backing file's lock for a whole read-modify-write cycle.

        Raises:
            (exceptions.LoadError): If the lock can't be acquired in time.
        """
        dirname = os.path.dirname(self.file_name)
        if dirname:
            os.makedirs(dirname, exist_ok=True)
        try:
            lock = get_file_lock(self.file_name).acquire(timeout=self.config.lock_timeout)
        except Timeout as exc:
            raise LoadError(self.file_name, f"timed out waiting for the lock {exc.lock_file}") from exc
        with lock:
            yield

    def _read_latest(self, must_exist: bool = False) -> DatabaseModel:
        """
        Read the latest persisted state of this database.

        A database opened over an unreadable file keeps working from its snapshot
        until a commit replaces that file.

        Args:
            must_exist: If False and the backing file is missing, a copy of the
                snapshot is returned instead of raising.

        Returns:
            A `DatabaseModel` read from the file.
        """
        if not must_exist and not os.path.exists(self.file_name):
            self.logger.warning(f"Database file {self.file_name} is missing; continuing from the in-memory snapshot.")
            return deepcopy(self.db_info)

        try:
            return load_database_model(self.file_name, lock_timeout=self.config.lock_timeout)
        except DeserializationError:
            if not self._recovered:
                raise
            self.logger.warning(f"Database file {self.file_name} is unreadable; it will be replaced on save.")
            return deepcopy(self.db_info)

    def _commit(self, latest: DatabaseModel):
        """
        Persist `latest` and make it the snapshot.

        Args:
            latest: The modified state to persist.
        """
        latest.dump_to_json_file(self.file_name, indent=self.config.indent, lock_timeout=self.config.lock_timeout)
        self.db_info = latest
        self._recovered = False
        self.logger.debug(f"Database saved to file: {self.file_name}")

    ###########################
    # Table lifecycle
    ###########################

    def add_table(self, table: Table):
        """
        Register a new table and persist the database.

        The table is copied, so later changes to `table` don't affect the database.

        Args:
            table: The table to register.

        Raises:
            (exceptions.TableAlreadyExistsError): If a table with the same name exists.
            (exceptions.SaveError): If the database can't be written.
        """
        with self._exclusive():
            latest = self._read_latest()
            if table.name in latest.tables:
                raise TableAlreadyExistsError(table.name)
            latest.tables[table.name] = deepcopy(table)
            self._commit(latest)
        self.logger.info(f"Table '{table.name}' added to database '{self.name}'.")

    def drop_table(self, table_name: str):
        """
        Remove a table and persist the database.

        Args:
            table_name: The name of the table to remove.

        Raises:
            (exceptions.TableNotFoundError): If there's no table with this name.
            (exceptions.LoadError): If the database file can't be read.
            (exceptions.SaveError): If the database can't be written.
        """
        with self._exclusive():
            latest = self._read_latest(must_exist=True)
            if table_name not in latest.tables:
                raise TableNotFoundError(table_name)
            del latest.tables[table_name]
            self._commit(latest)
        self.logger.info(f"Table '{table_name}' dropped from database '{self.name}'.")

    def rename_table(self, old_name: str, new_name: str):
        """
        Move a table under a new name and persist the database.

        The table keeps its position among the other tables.

        Args:
            old_name: The current name of the table.
            new_name: The name to move the table to.

        Raises:
            (exceptions.InvalidDataError): If the names are equal or `new_name` is empty.
            (exceptions.TableNotFoundError): If there's no table named `old_name`.
            (exceptions.TableAlreadyExistsError): If a table named `new_name` exists.
            (exceptions.SaveError): If the database can't be written.
        """
        if old_name == new_name:
            raise InvalidDataError("old name and new name are the same")
        if not new_name:
            raise InvalidDataError("the new table name must not be empty")

        with self._exclusive():
            latest = self._read_latest()
            if old_name not in latest.tables:
                raise TableNotFoundError(old_name)
            if new_name in latest.tables:
                raise TableAlreadyExistsError(new_name)

            latest.tables[old_name].name = new_name
            latest.tables = {(new_name if name == old_name else name): table for name, table in latest.tables.items()}
            self._commit(latest)
        self.logger.info(f"Table '{old_name}' renamed to '{new_name}' in database '{self.name}'.")

    def insert_rows(
        self, table_name: str, payload: Union[JSONObject, List[JSONObject]], atomic: bool = False
    ) -> InsertResult:
        """
        Validate and insert one payload or a list of payloads into a table.

        See [`Table.insert`][db_scripts.table.Table.insert] for how rejected items of
        a batch are handled. Items rejected in a non-atomic batch are logged.

        Args:
            table_name: The name of the table to insert into.
            payload: A JSON object or a list of JSON objects.
            atomic: Whether a batch is all-or-nothing.

        Returns:
            An [`InsertResult`][db_scripts.table.InsertResult].

        Raises:
            (exceptions.TableNotFoundError): If there's no table with this name.
            (exceptions.SchemaError): If a single payload, or any item of an atomic
                batch, doesn't match the table's columns.
            (exceptions.SaveError): If the database can't be written.
        """
        with self._exclusive():
            latest = self._read_latest()
            table = latest.tables.get(table_name)
            if table is None:
                raise TableNotFoundError(table_name)

            result = table.insert(payload, atomic=atomic)
            for index, error in result.errors:
                self.logger.warning(f"Skipped item {index} of the batch for table '{table_name}': {error}")

            if result.inserted:
                self._commit(latest)
            else:
                self.db_info = latest
        self.logger.debug(f"Inserted {len(result.inserted)} row(s) into table '{table_name}'.")
        return result

    def list_tables(self) -> List[str]:
        """
        Get the names of every table in the snapshot.

        Returns:
            The table names in registration order.
        """
        return list(self.tables)

    def get_table(self, table_name: str) -> Optional[Table]:
        """
        Get a table from the snapshot.

        Args:
            table_name: The name of the table.

        Returns:
            The table, or None if there's no table with this name.
        """
        return self.tables.get(table_name)

    def count_rows(self, table_name: str) -> int:
        """
        Count the rows of a table in the snapshot.

        Args:
            table_name: The name of the table.

        Returns:
            The number of rows in the table.

        Raises:
            (exceptions.TableNotFoundError): If there's no table with this name.
        """
        table = self.get_table(table_name)
        if table is None:
            raise TableNotFoundError(table_name)
        return len(table)

    def record_exists(self, table_name: str, row_id: str) -> bool:
        """
        Check whether a row identifier exists in a table of the snapshot.

        Args:
            table_name: The name of the table.
            row_id: The row identifier.

        Returns:
            True if the table exists and contains the row.
        """
        table = self.get_table(table_name)
        return table is not None and table.contains(row_id)

    def drop_database(self):
        """
        Delete the backing file.

        The snapshot is left as it was, so the database can be saved again. The
        `<file>.lock` file is kept so handles waiting on it stay serialized.

        Raises:
            (exceptions.DeleteError): If the file can't be removed.
        """
        if not os.path.exists(self.file_name):
            raise DeleteError(self.file_name, "no such file")
        try:
            with self._exclusive():
                os.remove(self.file_name)
        except OSError as exc:
            raise DeleteError(self.file_name, str(exc)) from exc
        self.logger.info(f"Database '{self.name}' dropped.")

    ###########################
    # Query entry points
    ###########################

    def _query(self, operation: Operation) -> Query:
        return Query(self.file_name, operation, logger=self.logger, config=self.config)

    def add_row(self) -> Query:
        """
        Start a query that inserts a row.

        Returns:
            A Create [`Query`][db_scripts.query.Query].
        """
        return self._query(Operation.CREATE)

    def get_rows(self) -> Query:
        """
        Start a query that reads many rows.

        Returns:
            A Read [`Query`][db_scripts.query.Query].
        """
        return self._query(Operation.READ)

    def get_single(self) -> Query:
        """
        Start a query that reads one row.

        Returns:
            A Read [`Query`][db_scripts.query.Query].
        """
        return self._query(Operation.READ)

    def update_row(self) -> Query:
        """
        Start a query that updates one row.

        Returns:
            An Update [`Query`][db_scripts.query.Query].
        """
        return self._query(Operation.UPDATE)

    def delete_single(self) -> Query:
        """
        Start a query that deletes one row.

        Returns:
            A Delete [`Query`][db_scripts.query.Query].
        """
        return self._query(Operation.DELETE)

    ###########################
    # Display
    ###########################

    def view(self):
        """Print every table of the snapshot."""
        from shelfdb.display import display_database  # pylint: disable=import-outside-toplevel

        display_database(self)

    def view_table(self, table_name: str):
        """
        Print one table of the snapshot.

        Args:
            table_name: The name of the table to print.
        """
        from shelfdb.display import display_table  # pylint: disable=import-outside-toplevel

        display_table(self, table_name)
