"""Transaction schemas shared by both ingestion pipelines.

These models are the engine's only output. Amounts are ``Decimal`` rupees
with two fractional digits (not paise), matching what the UI displays.
"""

import datetime
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from samvid.core.errors import get_user_message
from samvid.core.vocabulary import DEFAULT_VOCABULARY

# Default category taxonomy (priority order, then fallback buckets).
CATEGORIES: tuple[str, ...] = DEFAULT_VOCABULARY.category_labels

TWO_PLACES = Decimal("0.01")


class TransactionStatus(str, Enum):
    """Review state of a transaction."""

    PENDING = "pending"
    VERIFIED = "verified"


class Transaction(BaseModel):
    """A structured financial record derived from a message or table row.

    Instances are immutable; lifecycle changes produce a new copy (see
    ``samvid.services.ledger.confirm``).
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Opaque unique id (pipeline prefix + time + suffix)")
    vendor: str = Field(..., description="Display name of the counterparty")
    amount: Decimal = Field(..., ge=0, description="Non-negative amount, 2 decimal places")
    date: datetime.date = Field(..., description="Ingestion date (not a date found in the source)")
    category: str = Field(..., description="Category label from the categorizer")
    status: TransactionStatus = Field(..., description="pending (imported) or verified")

    @field_validator("id", "vendor", "category")
    @classmethod
    def not_blank(cls, v: str) -> str:
        """Ensure identifying text fields are never empty."""
        if not v or not v.strip():
            raise ValueError("value cannot be empty")
        return v

    @field_validator("category")
    @classmethod
    def known_category(cls, v: str, info: ValidationInfo) -> str:
        """Check against the closed label set passed as ``context["categories"]``."""
        allowed = (info.context or {}).get("categories")
        if allowed is not None and v not in allowed:
            raise ValueError(f"unknown category: {v}")
        return v

    @field_validator("amount")
    @classmethod
    def two_places(cls, v: Decimal) -> Decimal:
        """Quantize to paise precision."""
        return v.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)

    @property
    def is_pending(self) -> bool:
        return self.status is TransactionStatus.PENDING


class NoMatchReason(str, Enum):
    """Why the text pipeline found no transaction."""

    SPAM_FILTERED = "spam_filtered"
    NO_AMOUNT = "no_amount"


_REASON_CODES: dict[NoMatchReason, str] = {
    NoMatchReason.SPAM_FILTERED: "EXTRACT_001",
    NoMatchReason.NO_AMOUNT: "EXTRACT_002",
}


class NoMatch(BaseModel):
    """Result of the text pipeline when a message is not a transaction.

    This is an ordinary outcome, not an error. It is falsy so callers can
    branch with ``if result:``.
    """

    model_config = ConfigDict(frozen=True)

    reason: NoMatchReason

    @property
    def error_code(self) -> str:
        return _REASON_CODES[self.reason]

    @property
    def user_message(self) -> str:
        return get_user_message(self.error_code)

    def __bool__(self) -> bool:
        return False
