"""Free-text bank alert parser.

Turns one SMS-style notification ("Acct debited INR 500 at Starbucks on
12-01") into at most one Transaction. The same parser serves manual paste
and messages delivered by an automatic listener.

Every stage is a hard gate. A message that fails one is not a transaction
and yields a ``NoMatch`` value (never an exception).
"""

import logging
import re
from datetime import datetime
from decimal import Decimal, InvalidOperation
from uuid import uuid4

from samvid.categorization.rules import categorize, normalize_merchant
from samvid.core.logger import filter_pii
from samvid.core.vocabulary import Vocabulary, get_vocabulary
from samvid.parsers.cleaning import clean_vendor, correct_vendor
from samvid.schemas.transaction import NoMatch, NoMatchReason, Transaction, TransactionStatus

logger = logging.getLogger(__name__)

ID_PREFIX = "sms"


def _alternation(words: tuple[str, ...], escape: bool = True) -> str:
    items = sorted(words, key=len, reverse=True)
    if escape:
        items = [re.escape(w) for w in items]
    return "|".join(items)


class MessageParser:
    """Parser for single bank notification messages.

    Patterns are compiled once from the vocabulary; the parser holds no
    other state and is safe to share between callers.

    Example:
        >>> parser = MessageParser()
        >>> result = parser.parse("Acct debited INR 500 at Starbucks on 12-01")
        >>> result.vendor, result.category
        ('STARBUCKS', 'Food')
    """

    # Characters a vendor run may contain after a preposition.
    VENDOR_CHARS = r"[A-Za-z0-9\s\-\.\*/&@]"
    # Characters a vendor run may contain after a payment-reference prefix.
    REFERENCE_CHARS = r"[A-Za-z0-9\s\-\.&]"

    def __init__(self, vocabulary: Vocabulary | None = None):
        """Initialize the parser.

        Args:
            vocabulary: Banking vocabulary (default: process-wide vocabulary)
        """
        self.vocabulary = vocabulary or get_vocabulary()
        vocab = self.vocabulary

        # Word-start match only: "otp" covers OTPs, "auth" covers authenticate.
        self.spam_pattern = re.compile(
            rf"\b(?:{_alternation(vocab.spam_keywords, escape=False)})", re.IGNORECASE
        )
        # Group 1 is the numeric token: digits, thousands separators, <= 2 decimals.
        self.amount_pattern = re.compile(
            rf"(?<![a-z])(?:{_alternation(vocab.currency_markers)})\s*(\d[\d,]*(?:\.\d{{1,2}})?)",
            re.IGNORECASE,
        )
        self.credit_pattern = re.compile(
            rf"\b(?:{_alternation(vocab.credit_keywords, escape=False)})\b", re.IGNORECASE
        )
        self.reference_pattern = (
            re.compile(
                rf"(?:{_alternation(vocab.reference_prefixes)})({self.REFERENCE_CHARS}+)",
                re.IGNORECASE,
            )
            if vocab.reference_prefixes
            else None
        )
        stop = (
            rf"\s+(?:{_alternation(vocab.vendor_stop_words)})\b|"
            if vocab.vendor_stop_words
            else ""
        )
        self.vendor_pattern = re.compile(
            rf"\b(?:(?:{_alternation(vocab.vendor_prepositions)})\s+)+"
            rf"({self.VENDOR_CHARS}+?)(?:{stop}\.|\(|$)",
            re.IGNORECASE,
        )

    def parse(self, text: str, now: datetime | None = None) -> Transaction | NoMatch:
        """Extract a transaction from a bank notification.

        Args:
            text: Raw message body
            now: Ingestion time (default: current local time). Only used for
                ``id`` and ``date``.

        Returns:
            A verified Transaction, or NoMatch when the message is not a
            transaction alert.
        """
        text = text or ""

        # Stage 1: security codes share the shape of spending alerts
        if self.is_spam(text):
            logger.debug("Message rejected by OTP filter: %s", filter_pii(text[:80]))
            return NoMatch(reason=NoMatchReason.SPAM_FILTERED)

        # Stage 2: no amount, no transaction
        amount = self.find_amount(text)
        if amount is None:
            logger.debug("No amount found in message: %s", filter_pii(text[:80]))
            return NoMatch(reason=NoMatchReason.NO_AMOUNT)

        # Stage 3
        is_credit = self.is_credit(text)

        # Stages 4-6
        raw_vendor = self.find_vendor(text)
        cleaned = clean_vendor(raw_vendor, self.vocabulary)
        vendor = correct_vendor(cleaned, is_credit, self.vocabulary)

        # Stage 7
        if is_credit:
            category = self.vocabulary.income_label
        else:
            category = categorize(vendor, amount, self.vocabulary)

        now = now or datetime.now()
        transaction = Transaction.model_validate(
            {
                "id": self._make_id(now),
                "vendor": normalize_merchant(vendor),
                "amount": amount,
                "date": now.date(),
                "category": category,
                "status": TransactionStatus.VERIFIED,
            },
            context={"categories": self.vocabulary.category_labels},
        )
        logger.debug(
            "Parsed message: vendor=%s amount=%s category=%s",
            transaction.vendor,
            transaction.amount,
            transaction.category,
        )
        return transaction

    def is_spam(self, text: str) -> bool:
        """True for OTP / login / verification messages."""
        return bool(self.spam_pattern.search(text))

    def find_amount(self, text: str) -> Decimal | None:
        """Return the first currency-prefixed amount, separators stripped."""
        match = self.amount_pattern.search(text)
        if not match:
            return None
        try:
            return Decimal(match.group(1).replace(",", ""))
        except InvalidOperation:
            return None

    def is_credit(self, text: str) -> bool:
        """True when the message reports money coming in."""
        return bool(self.credit_pattern.search(text))

    def find_vendor(self, text: str) -> str:
        """Capture the raw vendor run.

        Payment-reference markers (``UPI-...``) are preferred; otherwise the
        text after a preposition up to a stop marker; otherwise the unknown
        placeholder.
        """
        if self.reference_pattern is not None:
            match = self.reference_pattern.search(text)
            if match:
                return match.group(1)

        match = self.vendor_pattern.search(text)
        if match:
            return match.group(1).strip()

        return self.vocabulary.unknown_vendor

    @staticmethod
    def _make_id(now: datetime) -> str:
        millis = int(now.timestamp() * 1000)
        return f"{ID_PREFIX}-{millis}-{uuid4().hex[:12]}"


# Shared parser for the default vocabulary
_parser_instance: MessageParser | None = None


def get_message_parser() -> MessageParser:
    """Get or create the parser bound to the process-wide vocabulary."""
    global _parser_instance
    if _parser_instance is None or _parser_instance.vocabulary is not get_vocabulary():
        _parser_instance = MessageParser()
    return _parser_instance


def extract_transaction(
    text: str,
    now: datetime | None = None,
    vocabulary: Vocabulary | None = None,
) -> Transaction | NoMatch:
    """Convenience function: parse one message.

    Args:
        text: Raw message body
        now: Ingestion time (default: now)
        vocabulary: Custom vocabulary (default: process-wide vocabulary)

    Returns:
        Transaction with status ``verified``, or NoMatch
    """
    parser = MessageParser(vocabulary) if vocabulary is not None else get_message_parser()
    return parser.parse(text, now=now)
