"""Ingestion pipelines.

- MessageParser turns one free-text bank alert into at most one transaction
- TableImporter turns statement rows (CSV exports) into pending transactions
"""

from samvid.parsers.message import MessageParser, extract_transaction
from samvid.parsers.table import TableImporter, import_csv, import_table, read_csv_rows

__all__ = [
    "MessageParser",
    "TableImporter",
    "extract_transaction",
    "import_csv",
    "import_table",
    "read_csv_rows",
]
