"""Transaction collection operations.

The engine does not own a global transaction list. The functions in this
module are pure transformations ``(collection, input) -> new collection``;
the caller keeps the result. ``LedgerService`` is a small owner for hosts
that want one in-memory collection: it serializes the three mutations
(add from messages, add from imports, confirm) behind a lock.
"""

import logging
import threading
from collections.abc import Iterable, Mapping, Sequence
from datetime import datetime
from decimal import Decimal
from typing import Any

from samvid.config import get_settings
from samvid.core.vocabulary import Vocabulary, get_vocabulary
from samvid.parsers.message import MessageParser
from samvid.parsers.table import TableImporter, read_csv_rows
from samvid.schemas.ledger import LedgerSummary
from samvid.schemas.transaction import NoMatch, Transaction, TransactionStatus

logger = logging.getLogger(__name__)


def add_transactions(
    collection: Sequence[Transaction], new: Iterable[Transaction]
) -> list[Transaction]:
    """Prepend ``new`` (in its own order) to ``collection``: most recent first."""
    return [*new, *collection]


def confirm(collection: Sequence[Transaction], transaction_id: str) -> list[Transaction]:
    """Mark a pending transaction as verified.

    Unknown ids and already-verified records are left alone. Order and all
    other records are preserved, so confirming twice equals confirming once.
    """
    updated: list[Transaction] = []
    for transaction in collection:
        if transaction.id == transaction_id and transaction.status is TransactionStatus.PENDING:
            transaction = transaction.model_copy(update={"status": TransactionStatus.VERIFIED})
        updated.append(transaction)
    return updated


def summarize(
    collection: Iterable[Transaction],
    opening_balance: Decimal | None = None,
    income_label: str | None = None,
) -> LedgerSummary:
    """Compute dashboard totals.

    Income records add to the balance; every other category counts as
    spend, whatever its review status.

    Args:
        collection: Transactions to aggregate
        opening_balance: Starting balance (default: ``Settings.OPENING_BALANCE``)
        income_label: Category counted as income (default: vocabulary's)
    """
    if opening_balance is None:
        opening_balance = get_settings().OPENING_BALANCE
    income_label = income_label or get_vocabulary().income_label

    spent = Decimal("0.00")
    income = Decimal("0.00")
    count = 0
    pending = 0
    by_category: dict[str, Decimal] = {}
    for transaction in collection:
        count += 1
        if transaction.is_pending:
            pending += 1
        if transaction.category == income_label:
            income += transaction.amount
        else:
            spent += transaction.amount
        by_category[transaction.category] = (
            by_category.get(transaction.category, Decimal("0.00")) + transaction.amount
        )

    return LedgerSummary(
        total_spent=spent,
        total_income=income,
        opening_balance=opening_balance,
        balance=opening_balance + income - spent,
        transactions_count=count,
        pending_count=pending,
        by_category=by_category,
    )


class LedgerService:
    """Owner of one in-memory transaction collection.

    Messages (pasted or listener-delivered) and imports are parsed outside
    the lock; only the list swap is serialized.
    """

    def __init__(
        self,
        transactions: Iterable[Transaction] | None = None,
        vocabulary: Vocabulary | None = None,
    ):
        """Initialize the service.

        Args:
            transactions: Initial collection (most recent first)
            vocabulary: Banking vocabulary (default: process-wide vocabulary)
        """
        self.vocabulary = vocabulary or get_vocabulary()
        self.message_parser = MessageParser(self.vocabulary)
        self.table_importer = TableImporter(self.vocabulary)
        self._transactions: list[Transaction] = list(transactions or [])
        self._lock = threading.Lock()

    @property
    def transactions(self) -> list[Transaction]:
        """Snapshot of the collection, most recent first."""
        with self._lock:
            return list(self._transactions)

    def ingest_message(self, text: str, now: datetime | None = None) -> Transaction | NoMatch:
        """Parse a pasted message and record it when it is a transaction."""
        result = self.message_parser.parse(text, now=now)
        if result:
            self._prepend([result])
        return result

    def handle_incoming_message(
        self, body: str, now: datetime | None = None
    ) -> Transaction | NoMatch:
        """Handle one message delivered by an automatic listener.

        Each delivery is parsed exactly once and appended on its own; no
        ordering is implied between two deliveries.
        """
        result = self.ingest_message(body, now=now)
        if result:
            logger.info("Auto-added: %s", result.vendor)
        return result

    def ingest_table(
        self, rows: Iterable[Mapping[str, Any]], now: datetime | None = None
    ) -> list[Transaction]:
        """Import rows as pending transactions and record them."""
        imported = self.table_importer.import_rows(rows, now=now)
        if imported:
            self._prepend(imported)
        return imported

    def ingest_csv(self, csv_text: str, now: datetime | None = None) -> list[Transaction]:
        """Import CSV text as pending transactions.

        Raises:
            TableImportError: If the text has no header row
        """
        return self.ingest_table(read_csv_rows(csv_text), now=now)

    def confirm(self, transaction_id: str) -> list[Transaction]:
        """Verify a pending transaction and return the updated snapshot."""
        with self._lock:
            self._transactions = confirm(self._transactions, transaction_id)
            return list(self._transactions)

    def pending(self) -> list[Transaction]:
        """Transactions still awaiting review."""
        return [t for t in self.transactions if t.is_pending]

    def summary(self, opening_balance: Decimal | None = None) -> LedgerSummary:
        return summarize(
            self.transactions,
            opening_balance=opening_balance,
            income_label=self.vocabulary.income_label,
        )

    def _prepend(self, new: Sequence[Transaction]) -> None:
        with self._lock:
            self._transactions = add_transactions(self._transactions, new)
