"""
mdb2sqlite/destination.py

SQLite destination store. DDL and inserts run through a SQLAlchemy engine
with pysqlite's own transaction handling switched off, so CREATE statements
take part in the surrounding transaction and roll back with it.
"""

import datetime
import logging
import os
import sqlite3
import uuid
from contextlib import contextmanager
from decimal import Decimal
from typing import Any, Dict, Sequence
from urllib.parse import quote

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import URL
from sqlalchemy.exc import SQLAlchemyError

from mdb2sqlite.errors import DestinationError, OpenError
from mdb2sqlite.schema import escape

logger = logging.getLogger(__name__)

# Values sqlite3 cannot bind itself
_ADAPTERS = {
    Decimal: float,
    uuid.UUID: str,
    datetime.datetime: lambda v: v.isoformat(" "),
    datetime.date: lambda v: v.isoformat(),
    datetime.time: lambda v: v.isoformat(),
}


def _bindable(val):
    adapter = _ADAPTERS.get(type(val))
    return adapter(val) if adapter else val


def _describe(error: SQLAlchemyError) -> str:
    orig = getattr(error, "orig", None)
    return str(orig) if orig is not None else str(error)


def _check_writable(path: str):
    directory = os.path.dirname(os.path.abspath(path))
    if not os.path.isdir(directory):
        raise OpenError(f"Destination directory '{directory}' does not exist", path)
    if os.path.exists(path):
        if not os.path.isfile(path) or not os.access(path, os.W_OK):
            raise OpenError(f"Destination '{path}' is not writable", path)
    elif not os.access(directory, os.W_OK):
        raise OpenError(f"Destination directory '{directory}' is not writable", path)


def _check_empty(path: str):
    """Reject any destination that already holds schema objects.

    The file is opened read-only so a rejected destination stays untouched.
    """
    if not os.path.exists(path) or os.path.getsize(path) == 0:
        return

    url = URL.create(
        "sqlite",
        database=f"file:{quote(os.path.abspath(path))}",
        query={"mode": "ro", "uri": "true"},
    )
    engine = create_engine(url, echo=False)
    try:
        with engine.connect() as conn:
            count = conn.execute(text("SELECT count(*) FROM sqlite_master")).scalar()
    except SQLAlchemyError as e:
        raise OpenError(
            f"Destination '{path}' is not a SQLite database: {_describe(e)}", path
        ) from e
    finally:
        engine.dispose()

    if count:
        raise OpenError(
            f"Destination '{path}' is not empty ({count} schema objects)", path
        )


class DestinationTransaction:
    """Statement execution inside one open destination transaction"""

    def __init__(self, conn, table: str = None):
        self.conn = conn
        self.table = table
        self._insert_sql: Dict[tuple, str] = {}

    def execute_ddl(self, statement: str):
        logger.debug("DDL: %s", statement)
        try:
            self.conn.exec_driver_sql(statement)
        except SQLAlchemyError as e:
            raise DestinationError(
                f"Statement rejected for {self.table}: {_describe(e)}",
                self.table,
                statement,
            ) from e

    def insert(self, table_name: str, values: Sequence[Any]):
        """Insert one row by position into an existing table"""
        key = (table_name, len(values))
        sql = self._insert_sql.get(key)
        if sql is None:
            placeholders = ", ".join("?" for _ in values)
            sql = f"INSERT INTO {escape(table_name)} VALUES ({placeholders})"
            self._insert_sql[key] = sql
        try:
            self.conn.exec_driver_sql(sql, tuple(_bindable(v) for v in values))
        except SQLAlchemyError as e:
            raise DestinationError(
                f"Insert into {table_name} rejected: {_describe(e)}", table_name, sql
            ) from e


class SQLiteDestination:
    """
    SQLite database file being written by an export.

    Open with:
        destination = SQLiteDestination.open("out.sqlite")
    """

    def __init__(self, path: str):
        self.path = path
        self.space_reclaiming = False
        self.engine = create_engine(f"sqlite:///{path}", echo=False)
        event.listen(self.engine, "connect", self._on_connect)
        event.listen(self.engine, "begin", self._on_begin)

    @classmethod
    def open(cls, path: str, require_empty: bool = True) -> "SQLiteDestination":
        _check_writable(path)
        if require_empty:
            _check_empty(path)
        logger.debug("Opened destination %s", path)
        return cls(path)

    def _on_connect(self, dbapi_connection, connection_record):
        # Disable pysqlite's implicit BEGIN/COMMIT around DDL
        dbapi_connection.isolation_level = None
        if self.space_reclaiming:
            dbapi_connection.execute("PRAGMA auto_vacuum = FULL")

    def _on_begin(self, conn):
        conn.exec_driver_sql("BEGIN")

    def set_space_reclaiming(self, enabled: bool):
        """Turn auto-vacuum on or off; only effective before the first table"""
        self.space_reclaiming = enabled
        mode = "FULL" if enabled else "NONE"
        try:
            dbapi_connection = self.engine.raw_connection()
        except SQLAlchemyError as e:
            raise DestinationError(f"Could not connect to {self.path}: {_describe(e)}") from e
        try:
            dbapi_connection.cursor().execute(f"PRAGMA auto_vacuum = {mode}")
        except sqlite3.Error as e:
            raise DestinationError(f"Could not set auto_vacuum: {e}") from e
        finally:
            dbapi_connection.close()

    @contextmanager
    def transaction(self, table: str = None):
        """One write transaction: committed on exit, rolled back on error.

        Only failures of the transaction itself become DestinationError;
        anything raised by the body propagates unchanged.
        """
        try:
            conn = self.engine.connect()
        except SQLAlchemyError as e:
            raise DestinationError(
                f"Could not connect to {self.path}: {_describe(e)}", table
            ) from e
        try:
            trans = conn.begin()
        except SQLAlchemyError as e:
            conn.close()
            raise DestinationError(
                f"Could not begin transaction for {table}: {_describe(e)}", table
            ) from e

        try:
            try:
                yield DestinationTransaction(conn, table)
            except BaseException:
                trans.rollback()
                raise
            try:
                trans.commit()
            except SQLAlchemyError as e:
                raise DestinationError(
                    f"Commit for {table} failed: {_describe(e)}", table
                ) from e
        finally:
            conn.close()

    def close(self):
        if self.engine:
            self.engine.dispose()
            self.engine = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
