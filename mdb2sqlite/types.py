"""
mdb2sqlite/types.py

MS Access column types and their SQLite storage categories.
"""

from enum import Enum
from typing import Dict

from mdb2sqlite.errors import UnsupportedTypeError


class SourceType(Enum):
    """MS Access data types, valued by their on-disk type code"""

    BOOLEAN = 0x01
    BYTE = 0x02
    INT = 0x03
    LONG = 0x04
    MONEY = 0x05
    FLOAT = 0x06
    DOUBLE = 0x07
    SHORT_DATE_TIME = 0x08
    BINARY = 0x09
    TEXT = 0x0A
    OLE = 0x0B
    MEMO = 0x0C
    UNKNOWN_0D = 0x0D
    GUID = 0x0F
    NUMERIC = 0x10
    UNKNOWN_11 = 0x11
    COMPLEX_TYPE = 0x12
    BIG_INT = 0x13
    EXT_DATE_TIME = 0x14


class StorageCategory(Enum):
    """SQLite storage classes; values are the DDL keywords"""

    BLOB = "BLOB"
    INTEGER = "INTEGER"
    REAL = "REAL"
    TEXT = "TEXT"


# Types missing here have no SQLite equivalent and abort the export.
STORAGE_CATEGORIES: Dict[SourceType, StorageCategory] = {
    # Blob
    SourceType.BINARY: StorageCategory.BLOB,
    SourceType.OLE: StorageCategory.BLOB,
    # Integers
    SourceType.BOOLEAN: StorageCategory.INTEGER,
    SourceType.BYTE: StorageCategory.INTEGER,
    SourceType.INT: StorageCategory.INTEGER,
    SourceType.LONG: StorageCategory.INTEGER,
    # Floating point
    SourceType.DOUBLE: StorageCategory.REAL,
    SourceType.FLOAT: StorageCategory.REAL,
    SourceType.NUMERIC: StorageCategory.REAL,
    # Text
    SourceType.TEXT: StorageCategory.TEXT,
    SourceType.GUID: StorageCategory.TEXT,
    SourceType.MEMO: StorageCategory.TEXT,
    SourceType.MONEY: StorageCategory.TEXT,
    SourceType.SHORT_DATE_TIME: StorageCategory.TEXT,
}


def type_name(source_type) -> str:
    """Printable name of a type tag, whether or not it is a SourceType"""
    if isinstance(source_type, SourceType):
        return source_type.name
    return str(source_type)


def storage_category(source_type: SourceType) -> StorageCategory:
    """Map an Access column type to the SQLite storage category used in DDL.

    Raises UnsupportedTypeError for any type outside the mapping table,
    including values that are not SourceType members at all.
    """
    if not isinstance(source_type, SourceType):
        raise UnsupportedTypeError(type_name(source_type))
    try:
        return STORAGE_CATEGORIES[source_type]
    except KeyError:
        raise UnsupportedTypeError(source_type.name) from None
