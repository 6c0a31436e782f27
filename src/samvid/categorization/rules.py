"""Deterministic transaction categorization.

Bank alerts and statement exports don't carry a category. For the dashboard
we infer one from the vendor/description text plus the amount.

This is intentionally rule-based so it's:
- fast (no external calls)
- explainable (auditable)
- privacy-safe (the text never leaves the process)

The rule table is built from the vocabulary so it can be extended or
swapped without touching this module.
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from functools import lru_cache

from samvid.core.vocabulary import Vocabulary, get_vocabulary


def _norm(text: str) -> str:
    return re.sub(r"\s+", " ", (text or "").strip().upper())


def normalize_merchant(description: str | None) -> str:
    """Normalize a vendor/description string into its display form.

    Upper-cases, trims and collapses internal whitespace. This is an
    exact-match key, not fuzzy matching.
    """
    return _norm(description or "")


@lru_cache(maxsize=8)
def build_rules(vocabulary: Vocabulary) -> tuple[tuple[str, re.Pattern[str]], ...]:
    """Compile the ordered ``(label, pattern)`` table for a vocabulary.

    Ordering matters: earlier matches win.
    """
    return tuple(
        (group.label, re.compile("|".join(f"(?:{kw})" for kw in group.keywords), re.IGNORECASE))
        for group in vocabulary.category_groups
    )


def _as_decimal(amount: Decimal | float | int | str | None) -> Decimal:
    if amount is None:
        return Decimal("0")
    try:
        value = Decimal(str(amount))
    except InvalidOperation:
        return Decimal("0")
    return value if value.is_finite() else Decimal("0")


def categorize(
    text: str | None,
    amount: Decimal | float | int | str | None = None,
    vocabulary: Vocabulary | None = None,
) -> str:
    """Infer a category from vendor/description text.

    Args:
        text: Cleaned vendor name or raw description. May be empty.
        amount: Transaction amount; only consulted for the fallback bucket.
            The value is compared as given (a negative amount never counts
            as a major expense).
        vocabulary: Rule vocabulary (default: process-wide vocabulary)

    Returns:
        A category label. Never fails.
    """
    vocab = vocabulary or get_vocabulary()

    if not text or not text.strip():
        return vocab.empty_label

    lowered = text.lower()
    for category, pattern in build_rules(vocab):
        if pattern.search(lowered):
            return category

    if _as_decimal(amount) > vocab.major_expense_threshold:
        return vocab.major_expense_label

    return vocab.general_label
