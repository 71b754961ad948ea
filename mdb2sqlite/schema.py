"""
mdb2sqlite/schema.py

Table metadata and the SQLite DDL built from it.
"""

from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from mdb2sqlite.errors import UnsupportedTypeError
from mdb2sqlite.types import SourceType, storage_category

# One value per column, in declared column order; None is NULL.
Row = Tuple[Optional[Any], ...]


@dataclass(frozen=True)
class Column:
    name: str
    type: SourceType


@dataclass(frozen=True)
class Index:
    name: str
    columns: Tuple[str, ...]
    unique: bool = False


@dataclass(frozen=True)
class Table:
    """Table definition as read from the source database"""

    name: str
    columns: Tuple[Column, ...]
    indexes: Tuple[Index, ...] = field(default_factory=tuple)

    @property
    def column_names(self) -> List[str]:
        return [c.name for c in self.columns]

    def row(self, values: Mapping[str, Any]) -> Row:
        """Align a name-keyed record to column order; missing keys are NULL"""
        return tuple(values.get(c.name) for c in self.columns)


def escape(identifier: str) -> str:
    """Quote an identifier so SQLite takes it literally"""
    return "'" + identifier.replace("'", "''") + "'"


def index_name(table: Table, index: Index) -> str:
    """Index names are global in SQLite, so prefix with the table name"""
    return f"{table.name}_{index.name}"


def create_table_statement(table: Table) -> str:
    columns = []
    for column in table.columns:
        try:
            category = storage_category(column.type)
        except UnsupportedTypeError as e:
            raise UnsupportedTypeError(e.type_name, table.name, column.name) from e
        columns.append(f"{escape(column.name)} {category.value}")
    return f"CREATE TABLE {escape(table.name)} ({', '.join(columns)})"


def create_index_statement(table: Table, index: Index) -> str:
    keyword = "CREATE UNIQUE INDEX" if index.unique else "CREATE INDEX"
    columns = ", ".join(escape(c) for c in index.columns)
    return (
        f"{keyword} {escape(index_name(table, index))} "
        f"ON {escape(table.name)}({columns})"
    )


def translate_table(table: Table) -> List[str]:
    """All DDL for one table: CREATE TABLE first, then one CREATE INDEX per index"""
    statements = [create_table_statement(table)]
    statements.extend(create_index_statement(table, index) for index in table.indexes)
    return statements


def translate_schema(tables: Sequence[Table]) -> List[Tuple[Table, List[str]]]:
    """Translate every table up front so a bad type fails before any DDL runs"""
    return [(table, translate_table(table)) for table in tables]
