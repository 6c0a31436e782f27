"""Bulk import of spreadsheet rows (bank statement CSV exports).

Statement exports differ per bank, so there is no fixed schema. For each row
the importer looks for a description-like column and an amount-like column
by header substring, then builds a pending Transaction.

Tabular sources are bulk and lower-trust: a malformed row is dropped, an
unreadable amount becomes 0, and the import as a whole never aborts on a
per-row problem. Partial success is success.
"""

import csv
import io
import logging
import re
from collections.abc import Iterable, Mapping, Sequence
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from samvid.categorization.rules import categorize
from samvid.core.exceptions import TableImportError
from samvid.core.vocabulary import Vocabulary, get_vocabulary
from samvid.schemas.transaction import Transaction, TransactionStatus

logger = logging.getLogger(__name__)

ID_PREFIX = "imp"

# Leading numeric prefix of a cleaned cell ("1.2.3" -> "1.2", "5-3" -> "5")
_NUMBER_PREFIX = re.compile(r"-?(?:\d+\.?\d*|\.\d+)")


class TableImporter:
    """Convert header->value rows into pending transactions.

    Rows are processed independently with no cross-row state, so the
    importer can be shared and rows can be processed in any order.

    Example:
        >>> importer = TableImporter()
        >>> rows = [{"Narration": "AMAZON PURCHASE", "Debit": "2,499.00"}]
        >>> [t.amount for t in importer.import_rows(rows)]
        [Decimal('2499.00')]
    """

    def __init__(self, vocabulary: Vocabulary | None = None):
        """Initialize the importer.

        Args:
            vocabulary: Banking vocabulary (default: process-wide vocabulary)
        """
        self.vocabulary = vocabulary or get_vocabulary()

    def import_rows(
        self, rows: Iterable[Mapping[str, Any]], now: datetime | None = None
    ) -> list[Transaction]:
        """Import every well-formed row, preserving input order.

        Args:
            rows: Header->value mappings (e.g. from ``csv.DictReader``)
            now: Ingestion time shared by the whole batch (default: now)

        Returns:
            Pending transactions for the rows that could be read
        """
        now = now or datetime.now()
        transactions: list[Transaction] = []
        total = 0
        for index, row in enumerate(rows):
            total += 1
            transaction = self.process_row(row, index, now)
            if transaction is not None:
                transactions.append(transaction)

        logger.info("Imported %d of %d rows", len(transactions), total)
        return transactions

    def process_row(
        self, row: Mapping[str, Any], index: int, now: datetime
    ) -> Transaction | None:
        """Convert one row, or return None when the row is dropped.

        Args:
            row: Header->value mapping
            index: Position of the row in the input (used in the id)
            now: Ingestion time

        Returns:
            Pending Transaction, or None for a malformed row
        """
        headers = [key for key in row.keys() if key is not None]
        description_key = self.find_column(headers, self.vocabulary.description_column_keywords)
        amount_key = self.find_column(headers, self.vocabulary.amount_column_keywords)
        if description_key is None or amount_key is None:
            logger.debug("Row %d dropped: no description/amount column in %s", index, headers)
            return None

        raw_description = row.get(description_key)
        description = "" if raw_description is None else str(raw_description)
        signed_amount = self.parse_amount(row.get(amount_key))

        if not description.strip() and signed_amount is None:
            logger.debug("Row %d dropped: blank description and unreadable amount", index)
            return None

        vendor = description if description.strip() else self.vocabulary.unknown_vendor
        amount = abs(signed_amount) if signed_amount is not None else Decimal("0")

        return Transaction.model_validate(
            {
                "id": f"{ID_PREFIX}-{int(now.timestamp() * 1000)}-{index}",
                "vendor": vendor,
                "amount": amount,
                "date": now.date(),
                # Signed amount on purpose: the categorizer sees the source value.
                "category": categorize(vendor, signed_amount, self.vocabulary),
                "status": TransactionStatus.PENDING,
            },
            context={"categories": self.vocabulary.category_labels},
        )

    @staticmethod
    def find_column(headers: Sequence[str], keywords: Sequence[str]) -> str | None:
        """Return the first header (in column order) containing any keyword."""
        lowered_keywords = [kw.lower() for kw in keywords]
        for header in headers:
            name = str(header).lower()
            if any(kw in name for kw in lowered_keywords):
                return header
        return None

    @staticmethod
    def parse_amount(raw: Any) -> Decimal | None:
        """Parse a messy amount cell.

        Drops everything except digits, ``.`` and ``-``, then reads the
        leading number. Returns None when nothing numeric is left.
        """
        if raw is None:
            return None
        cleaned = re.sub(r"[^0-9.\-]", "", str(raw))
        match = _NUMBER_PREFIX.match(cleaned)
        if not match:
            return None
        try:
            return Decimal(match.group(0))
        except InvalidOperation:
            return None


def read_csv_rows(csv_text: str) -> list[dict[str, str]]:
    """Parse CSV text with a header row into header->value dicts.

    Blank lines and rows whose cells are all empty are skipped.

    Raises:
        TableImportError: If the text has no header row
    """
    if csv_text.startswith("\ufeff"):
        csv_text = csv_text[1:]

    with io.StringIO(csv_text) as f:
        reader = csv.DictReader(f)
        if not reader.fieldnames:
            raise TableImportError("IMPORT_001", details={"length": len(csv_text)})

        rows: list[dict[str, str]] = []
        for row in reader:
            # DictReader puts overflow cells under a None key; drop them.
            normalized = {k: (v if v is not None else "") for k, v in row.items() if k is not None}
            if all(not v.strip() for v in normalized.values()):
                continue
            rows.append(normalized)
        return rows


# Shared importer for the default vocabulary
_importer_instance: TableImporter | None = None


def get_table_importer() -> TableImporter:
    """Get or create the importer bound to the process-wide vocabulary."""
    global _importer_instance
    if _importer_instance is None or _importer_instance.vocabulary is not get_vocabulary():
        _importer_instance = TableImporter()
    return _importer_instance


def import_table(
    rows: Iterable[Mapping[str, Any]],
    now: datetime | None = None,
    vocabulary: Vocabulary | None = None,
) -> list[Transaction]:
    """Convenience function: import header->value rows as pending transactions."""
    importer = TableImporter(vocabulary) if vocabulary is not None else get_table_importer()
    return importer.import_rows(rows, now=now)


def import_csv(
    csv_text: str,
    now: datetime | None = None,
    vocabulary: Vocabulary | None = None,
) -> list[Transaction]:
    """Convenience function: read CSV text and import its rows.

    Raises:
        TableImportError: If the text has no header row
    """
    return import_table(read_csv_rows(csv_text), now=now, vocabulary=vocabulary)
