"""Samvid transaction extraction engine.

Converts bank alert messages and statement CSV rows into categorized
transaction records. The UI layer supplies raw text or rows and receives
``Transaction`` records (or a ``NoMatch`` for messages that are not
transactions).
"""

from samvid.categorization import categorize
from samvid.parsers import (
    MessageParser,
    TableImporter,
    extract_transaction,
    import_csv,
    import_table,
    read_csv_rows,
)
from samvid.schemas import (
    CATEGORIES,
    LedgerSummary,
    NoMatch,
    NoMatchReason,
    Transaction,
    TransactionStatus,
)
from samvid.services import LedgerService, add_transactions, confirm, summarize

__all__ = [
    # Pipelines
    "categorize",
    "extract_transaction",
    "import_table",
    "import_csv",
    "read_csv_rows",
    "MessageParser",
    "TableImporter",
    # Collection operations
    "add_transactions",
    "confirm",
    "summarize",
    "LedgerService",
    # Models
    "CATEGORIES",
    "LedgerSummary",
    "NoMatch",
    "NoMatchReason",
    "Transaction",
    "TransactionStatus",
]
