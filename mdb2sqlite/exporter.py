"""
mdb2sqlite/exporter.py

Export of an Access database into an empty SQLite database.

The schema for every table is created before any row is copied, and each
table's DDL and each table's rows get their own transaction. A failure
stops the export; tables committed before it stay in the destination.
"""

import logging
from contextlib import closing
from dataclasses import dataclass, field
from typing import Dict, List

from mdb2sqlite.convert import convert_row
from mdb2sqlite.destination import SQLiteDestination
from mdb2sqlite.schema import Table, translate_schema
from mdb2sqlite.source import DEFAULT_DRIVER, AccessSource

logger = logging.getLogger(__name__)


@dataclass
class ExportReport:
    """Rows copied per table, in export order"""

    tables: Dict[str, int] = field(default_factory=dict)

    @property
    def total_rows(self) -> int:
        return sum(self.tables.values())


def create_schema(destination, table: Table, statements: List[str]):
    """Create one table and all its indexes atomically"""
    with destination.transaction(table.name) as tx:
        for statement in statements:
            tx.execute_ddl(statement)


def populate_table(source, destination, table: Table) -> int:
    """Copy every row of one table inside a single transaction"""
    count = 0
    with destination.transaction(table.name) as tx:
        with closing(source.rows(table)) as rows:
            for row in rows:
                tx.insert(table.name, convert_row(table, row))
                count += 1
    return count


class Exporter:
    """
    Runs an export between an opened source and destination.

    Instantiate with:
        exporter = Exporter(source, destination)
        report = exporter.run()
    """

    def __init__(self, source, destination):
        self.source = source
        self.destination = destination
        self.tables: List[Table] = []
        self.report = ExportReport()

    def read_schema(self) -> List[Table]:
        self.tables = [self.source.table(name) for name in self.source.table_names()]
        logger.info("Read %d tables from source", len(self.tables))
        return self.tables

    def create_tables(self):
        print("\nCreating SQLite schema...")
        # Every table is translated before any DDL runs
        plan = translate_schema(self.tables)
        for table, statements in plan:
            create_schema(self.destination, table, statements)
            logger.info("Created %s (%d indexes)", table.name, len(table.indexes))
            print(f"  ✓ {table.name}")
        print("✓ Schema created")

    def populate_tables(self):
        print("\nImporting data...")
        for table in self.tables:
            print(f"  {table.name}...", end=" ", flush=True)
            try:
                count = populate_table(self.source, self.destination, table)
            except Exception:
                print("✗")
                raise
            self.report.tables[table.name] = count
            logger.info("Copied %d rows into %s", count, table.name)
            print(f"✓ {count}")

        print("\n" + "=" * 50)
        print(f"Imported: {self.report.total_rows} rows in {len(self.report.tables)} tables")
        print("=" * 50)

    def run(self) -> ExportReport:
        self.destination.set_space_reclaiming(True)
        self.read_schema()
        self.create_tables()
        self.populate_tables()
        return self.report


def export(source_path: str, destination_path: str, driver: str = DEFAULT_DRIVER) -> ExportReport:
    """Export the Access database at source_path into a new SQLite file.

    The destination must not exist yet or be empty. Both databases are
    released on every exit path.
    """
    with AccessSource.open(source_path, driver) as source:
        with SQLiteDestination.open(destination_path, require_empty=True) as destination:
            return Exporter(source, destination).run()
