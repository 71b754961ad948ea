"""
mdb2sqlite/errors.py

Exception hierarchy for the exporter. Every error carries the context
(table, column, type, statement) needed to diagnose it.
"""


class ExportError(Exception):
    """Base class for all export failures"""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class OpenError(ExportError):
    """Source unreadable, or destination not empty / not writable"""

    def __init__(self, message: str, path: str = None):
        super().__init__(message, {"path": path})
        self.path = path


class UnsupportedTypeError(ExportError):
    """A column type has no SQLite storage category"""

    def __init__(self, type_name: str, table: str = None, column: str = None):
        if table and column:
            message = f"Unhandled MS Access datatype {type_name} ({table}.{column})"
        else:
            message = f"Unhandled MS Access datatype {type_name}"
        super().__init__(
            message, {"type": type_name, "table": table, "column": column}
        )
        self.type_name = type_name
        self.table = table
        self.column = column


class DestinationError(ExportError):
    """The destination engine rejected a statement or insert"""

    def __init__(self, message: str, table: str = None, statement: str = None):
        super().__init__(message, {"table": table, "statement": statement})
        self.table = table
        self.statement = statement


class ConversionError(ExportError):
    """A row value cannot be represented for its column"""

    def __init__(self, message: str, table: str = None, column: str = None, type_name: str = None):
        super().__init__(
            message, {"table": table, "column": column, "type": type_name}
        )
        self.table = table
        self.column = column
        self.type_name = type_name


class ConfigError(ExportError):
    """Configuration file missing, empty, or invalid"""
