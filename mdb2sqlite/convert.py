"""
mdb2sqlite/convert.py

Row value conversion from Access values to SQLite bind parameters.
"""

from decimal import Decimal
from typing import Any, List

from mdb2sqlite.errors import ConversionError
from mdb2sqlite.schema import Column, Row, Table
from mdb2sqlite.types import SourceType


def _money(val, column: Column, table: str):
    # bool is an int subclass but never a currency amount
    if isinstance(val, bool) or not isinstance(val, (Decimal, int, float, str)):
        raise ConversionError(
            f"Cannot store {type(val).__name__} value as currency in {table}.{column.name}",
            table,
            column.name,
            column.type.name,
        )
    return str(val)


def _boolean(val, column: Column, table: str):
    if isinstance(val, bool):
        return 1 if val else 0
    # Some ODBC drivers hand bit columns back as plain integers
    if isinstance(val, int) and val in (0, 1):
        return val
    raise ConversionError(
        f"Cannot store {val!r} as boolean in {table}.{column.name}",
        table,
        column.name,
        column.type.name,
    )


_CONVERTERS = {
    SourceType.MONEY: _money,
    SourceType.BOOLEAN: _boolean,
}


def convert_value(column: Column, val, table: str = None) -> Any:
    """Convert one source value to what SQLite should store for its column"""
    # NULL bypasses every type-specific rule
    if val is None:
        return None

    converter = _CONVERTERS.get(column.type)
    if converter is None:
        return val
    return converter(val, column, table)


def convert_row(table: Table, row: Row) -> List[Any]:
    """Build the positional insert parameters for one row"""
    if len(row) != len(table.columns):
        raise ConversionError(
            f"Row for {table.name} has {len(row)} values, expected {len(table.columns)}",
            table.name,
        )
    return [convert_value(c, v, table.name) for c, v in zip(table.columns, row)]
