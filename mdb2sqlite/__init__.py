"""
mdb2sqlite

Export a Microsoft Access database into a SQLite database file.
"""

from mdb2sqlite.errors import (
    ConfigError,
    ConversionError,
    DestinationError,
    ExportError,
    OpenError,
    UnsupportedTypeError,
)
from mdb2sqlite.exporter import Exporter, ExportReport, export

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "ConversionError",
    "DestinationError",
    "ExportError",
    "Exporter",
    "ExportReport",
    "OpenError",
    "UnsupportedTypeError",
    "export",
]
