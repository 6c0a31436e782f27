"""Data schemas produced by the ingestion pipelines."""

from samvid.schemas.ledger import LedgerSummary
from samvid.schemas.transaction import (
    CATEGORIES,
    NoMatch,
    NoMatchReason,
    Transaction,
    TransactionStatus,
)

__all__ = [
    "CATEGORIES",
    "LedgerSummary",
    "NoMatch",
    "NoMatchReason",
    "Transaction",
    "TransactionStatus",
]
