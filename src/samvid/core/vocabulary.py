"""Banking vocabulary used by the extraction and categorization rules.

The regex shapes in ``samvid.parsers`` and ``samvid.categorization`` are
generic; every word they look for lives here. The defaults are tuned for
Indian bank SMS alerts and statement exports. Deployments for other banks
can override any field from a YAML file:

    # vocabulary.yaml
    spam_keywords: [otp, login, passcode]
    category_groups:
      - label: Food
        keywords: [zomato, swiggy, cafe]

Keyword entries are regular-expression fragments matched case-insensitively
(plain words work as-is). Token lists used for cleaning are literal text.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from samvid.config import get_settings
from samvid.core.exceptions import VocabularyError

logger = logging.getLogger(__name__)


class CategoryGroup(BaseModel):
    """One priority slot of the categorizer: a label and its keywords."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    label: str
    keywords: tuple[str, ...]

    @field_validator("label")
    @classmethod
    def label_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("category label cannot be empty")
        return v.strip()

    @field_validator("keywords")
    @classmethod
    def keywords_not_empty(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        cleaned = tuple(k for k in v if k)
        if not cleaned:
            raise ValueError("category group needs at least one keyword")
        return cleaned


# Ordering matters: earlier groups win. Income is checked before any
# expense group so refunds are never read as purchases.
DEFAULT_CATEGORY_GROUPS: tuple[CategoryGroup, ...] = (
    CategoryGroup(
        label="Income",
        keywords=("salary", "credit", "refund", "dividend", "interest"),
    ),
    CategoryGroup(
        label="Food",
        keywords=(
            "zomato", "swiggy", "starbucks", "mcdonald", "domino", "pizza",
            "burger", "kfc", "cafe", "restaurant", "bakers", "food",
            "tea", "coffee",
        ),
    ),
    CategoryGroup(
        label="Transport",
        keywords=(
            "uber", r"\bola", "rapido", "shell", "petrol", "fuel", "hpcl",
            "bpcl", "irctc", "metro", "flight", r"air(?!tel)",
            "travel", r"\bcab",
        ),
    ),
    CategoryGroup(
        label="Groceries",
        keywords=(
            "blinkit", "zepto", "bigbasket", "dmart", "reliance", "fresh",
            "mart", "supermarket", "grocer",
        ),
    ),
    CategoryGroup(
        label="Shopping",
        keywords=(
            "amazon", "flipkart", "myntra", "ajio", "shopping", "retail",
            "store", "fashion", "cloth",
        ),
    ),
    CategoryGroup(
        label="Bills",
        keywords=(
            "jio", "airtel", r"\bvi\b", "vodafone", "bescom", "tneb",
            "electricity", "water", "gas", "bill", "recharge", "tatasky",
        ),
    ),
    CategoryGroup(
        label="Health",
        keywords=(
            "pharmacy", "medplus", "apollo", "practo", "hospital", "clinic",
            "doctor", "lab", "scan", "diagnostic",
        ),
    ),
    CategoryGroup(
        label="Entertainment",
        keywords=(
            "netflix", "spotify", "prime", "hotstar", "youtube", "movie",
            "cinema", "bookmyshow",
        ),
    ),
    CategoryGroup(
        label="Transfer",
        keywords=("upi", "transfer", r"sent\s+to", r"paid\s+to"),
    ),
)


class Vocabulary(BaseModel):
    """All regional vocabulary the engine matches against."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    # Text pipeline: gates
    spam_keywords: tuple[str, ...] = (
        "otp", r"one\s+time\s+password", "login", "auth", "code", "verification",
    )
    currency_markers: tuple[str, ...] = ("Rs.", "Rs", "INR", "₹")
    credit_keywords: tuple[str, ...] = ("credited", "received", "deposited", "added")

    # Text pipeline: vendor capture
    reference_prefixes: tuple[str, ...] = ("UPI-",)
    vendor_prepositions: tuple[str, ...] = ("at", "to", "via", "from", "merchant", "paid")
    vendor_stop_words: tuple[str, ...] = ("on", "ref", "txn")
    unknown_vendor: str = "Unknown"

    # Text pipeline: vendor cleaning
    boilerplate_tokens: tuple[str, ...] = (
        "a/c", "acct", "account", "ending", "card", "pos", "txn", "info",
        "ref", "no.", "bsnl", "bank", "neft", "imps", "rtgs", "upi", "pvt", "ltd",
    )
    min_digit_run: int = Field(default=4, ge=1)
    vendor_blacklist: tuple[str, ...] = ("at", "to", "via", "from", "unknown")
    min_vendor_length: int = Field(default=2, ge=1)
    incoming_sentinel: str = "Incoming Transfer"
    outgoing_sentinel: str = "Transfer to Account"

    # Categorizer
    category_groups: tuple[CategoryGroup, ...] = DEFAULT_CATEGORY_GROUPS
    income_label: str = "Income"
    empty_label: str = "Uncategorized"
    major_expense_label: str = "Major Expense"
    general_label: str = "General"
    major_expense_threshold: Decimal = Decimal("10000")

    # Tabular import: header keywords (substring, case-insensitive)
    description_column_keywords: tuple[str, ...] = (
        "desc", "narration", "particular", "remark", "memo", "detail",
    )
    amount_column_keywords: tuple[str, ...] = ("amount", "debit", "withdraw", "value", "inr")

    @field_validator(
        "spam_keywords",
        "currency_markers",
        "credit_keywords",
        "vendor_prepositions",
        "description_column_keywords",
        "amount_column_keywords",
    )
    @classmethod
    def list_not_empty(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        if not v:
            raise ValueError("list cannot be empty")
        return v

    @property
    def category_labels(self) -> tuple[str, ...]:
        """Every label the categorizer can return, in priority order."""
        labels = [group.label for group in self.category_groups]
        for extra in (
            self.income_label,
            self.major_expense_label,
            self.general_label,
            self.empty_label,
        ):
            if extra not in labels:
                labels.append(extra)
        return tuple(labels)


DEFAULT_VOCABULARY = Vocabulary()


def load_vocabulary(path: str | Path) -> Vocabulary:
    """Load a vocabulary override file and merge it over the defaults.

    Top-level keys replace the default value for that field entirely.

    Raises:
        VocabularyError: If the file is missing, not YAML, or invalid
    """
    vocab_path = Path(path)
    try:
        with vocab_path.open(encoding="utf-8") as f:
            data: Any = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise VocabularyError("VOCAB_001", details={"path": str(vocab_path), "reason": str(e)}) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise VocabularyError(
            "VOCAB_001",
            details={"path": str(vocab_path), "reason": "top level must be a mapping"},
        )

    try:
        vocabulary = Vocabulary.model_validate({**DEFAULT_VOCABULARY.model_dump(), **data})
    except ValidationError as e:
        raise VocabularyError("VOCAB_001", details={"path": str(vocab_path), "reason": str(e)}) from e

    logger.info("Loaded vocabulary overrides from %s (%d keys)", vocab_path, len(data))
    return vocabulary


@lru_cache
def get_vocabulary() -> Vocabulary:
    """Get the process-wide vocabulary (defaults or the configured file)."""
    settings = get_settings()
    if settings.VOCABULARY_FILE:
        return load_vocabulary(settings.VOCABULARY_FILE)
    return DEFAULT_VOCABULARY
