"""
mdb2sqlite/source.py

MS Access source reader. Connects through the sqlalchemy-access dialect
(pyodbc underneath) and reads the catalog via the ODBC catalog functions,
which report Access column types by their Jet type names.
"""

import logging
import os
from collections import OrderedDict
from typing import Dict, Iterator, List

from sqlalchemy import create_engine, inspect
from sqlalchemy.engine import URL
from sqlalchemy.exc import SQLAlchemyError

from mdb2sqlite.errors import OpenError, UnsupportedTypeError
from mdb2sqlite.schema import Column, Index, Row, Table
from mdb2sqlite.types import SourceType

logger = logging.getLogger(__name__)

DEFAULT_DRIVER = "Microsoft Access Driver (*.mdb, *.accdb)"

# ODBC TYPE_NAME reported by the Access driver -> Access data type
ODBC_TYPES: Dict[str, SourceType] = {
    "BIT": SourceType.BOOLEAN,
    "BYTE": SourceType.BYTE,
    "SMALLINT": SourceType.INT,
    "INTEGER": SourceType.LONG,
    "COUNTER": SourceType.LONG,
    "CURRENCY": SourceType.MONEY,
    "REAL": SourceType.FLOAT,
    "DOUBLE": SourceType.DOUBLE,
    "DATETIME": SourceType.SHORT_DATE_TIME,
    "BINARY": SourceType.BINARY,
    "VARBINARY": SourceType.BINARY,
    "CHAR": SourceType.TEXT,
    "VARCHAR": SourceType.TEXT,
    "LONGBINARY": SourceType.OLE,
    "LONGCHAR": SourceType.MEMO,
    "GUID": SourceType.GUID,
    "DECIMAL": SourceType.NUMERIC,
    "NUMERIC": SourceType.NUMERIC,
    "BIGINT": SourceType.BIG_INT,
}

# SQL_TABLE_STAT rows in SQLStatistics carry no index
_TABLE_STAT = 0


def _quote(identifier: str) -> str:
    return "[" + identifier.replace("]", "]]") + "]"


def read_columns(cursor, table: str) -> List[Column]:
    """Columns from SQLColumns, in ordinal order"""
    columns = []
    for info in sorted(cursor.columns(table=table), key=lambda c: c.ordinal_position):
        type_name = info.type_name.upper()
        if type_name not in ODBC_TYPES:
            raise UnsupportedTypeError(type_name, table, info.column_name)
        columns.append(Column(info.column_name, ODBC_TYPES[type_name]))
    return columns


def read_indexes(cursor, table: str) -> List[Index]:
    """Indexes from SQLStatistics, one row per indexed column"""
    grouped = OrderedDict()
    for stat in cursor.statistics(table=table):
        if stat.type == _TABLE_STAT or stat.index_name is None:
            continue
        entry = grouped.setdefault(
            stat.index_name, {"unique": not stat.non_unique, "columns": []}
        )
        entry["columns"].append((stat.ordinal_position, stat.column_name))
    return [
        Index(name, tuple(c for _, c in sorted(entry["columns"])), entry["unique"])
        for name, entry in grouped.items()
    ]


class AccessSource:
    """
    Read-only view of an MS Access database.

    Open with:
        with AccessSource.open("legacy.mdb") as source:
            for name in source.table_names():
                table = source.table(name)
    """

    def __init__(self, path: str, driver: str = DEFAULT_DRIVER):
        self.path = path
        self.driver = driver
        connection_string = f"DRIVER={{{driver}}};DBQ={os.path.abspath(path)};ReadOnly=1;"
        url = URL.create(
            "access+pyodbc", query={"odbc_connect": connection_string}
        )
        self.engine = create_engine(url, echo=False)
        self._table_names: List[str] = None

    @classmethod
    def open(cls, path: str, driver: str = DEFAULT_DRIVER) -> "AccessSource":
        if not os.path.isfile(path) or not os.access(path, os.R_OK):
            raise OpenError(f"Source '{path}' not found or not readable", path)
        source = None
        try:
            source = cls(path, driver)
            source.table_names()
        except SQLAlchemyError as e:
            if source is not None:
                source.close()
            raise OpenError(f"Could not open '{path}' as an Access database: {e}", path) from e
        logger.debug("Opened source %s", path)
        return source

    def table_names(self) -> List[str]:
        """User table names, in catalog order; stable for the life of the handle"""
        if self._table_names is None:
            names = inspect(self.engine).get_table_names()
            self._table_names = [n for n in names if not n.startswith("MSys")]
        return list(self._table_names)

    def table(self, name: str) -> Table:
        with self.engine.connect() as conn:
            cursor = conn.connection.cursor()
            try:
                columns = read_columns(cursor, name)
                indexes = read_indexes(cursor, name)
            finally:
                cursor.close()
        return Table(name, tuple(columns), tuple(indexes))

    def rows(self, table: Table) -> Iterator[Row]:
        """Stream rows in declared column order without loading the table"""
        columns = ", ".join(_quote(c) for c in table.column_names)
        sql = f"SELECT {columns} FROM {_quote(table.name)}"
        with self.engine.connect() as conn:
            result = conn.execution_options(stream_results=True).exec_driver_sql(sql)
            for row in result:
                yield tuple(row)

    def close(self):
        if self.engine:
            self.engine.dispose()
            self.engine = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
