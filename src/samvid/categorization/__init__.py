"""Transaction categorization utilities.

This module provides deterministic, local categorization of transactions based on
their vendor text. It is intentionally rule-based (no network calls) to keep
ingestion fast and privacy-safe.
"""

from .rules import build_rules, categorize, normalize_merchant

__all__ = ["build_rules", "categorize", "normalize_merchant"]
