"""
Shared fixtures: an in-memory stand-in for the Access reader and a
temporary SQLite target.
"""

import sqlite3

import pytest

from mdb2sqlite.schema import Column, Index, Table
from mdb2sqlite.types import SourceType


class FakeSource:
    """Implements the source reader interface over in-memory tables"""

    def __init__(self, tables=None):
        self.tables = {}
        self.data = {}
        self.rows_requested = []
        self.rows_yielded = 0
        self.closed = False
        for table, rows in tables or []:
            self.add(table, rows)

    def add(self, table: Table, rows=()):
        self.tables[table.name] = table
        self.data[table.name] = list(rows)

    def table_names(self):
        return list(self.tables)

    def table(self, name):
        return self.tables[name]

    def rows(self, table):
        self.rows_requested.append(table.name)
        for row in self.data[table.name]:
            self.rows_yielded += 1
            yield row

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def make_table(name, columns, indexes=()):
    """columns: [(name, SourceType)], indexes: [(name, [cols], unique)]"""
    return Table(
        name,
        tuple(Column(n, t) for n, t in columns),
        tuple(Index(n, tuple(cols), unique) for n, cols, unique in indexes),
    )


@pytest.fixture
def target_path(tmp_path):
    return str(tmp_path / "target.sqlite")


@pytest.fixture
def sample_table():
    return make_table(
        "T",
        [("c1", SourceType.INT), ("c2", SourceType.TEXT)],
        [("idx", ["c1"], True)],
    )


def query(path, sql, params=()):
    conn = sqlite3.connect(path)
    try:
        return conn.execute(sql, params).fetchall()
    finally:
        conn.close()


def table_names(path):
    return [r[0] for r in query(path, "SELECT name FROM sqlite_master WHERE type = 'table' ORDER BY name")]
