"""Custom exception classes for the extraction engine.

Expected outcomes ("no transaction in this message", "row skipped") are
return values, not exceptions. The classes below cover caller and
configuration faults only. Each exception maps to an error code defined in
errors.py.
"""

from typing import Any


class SamvidError(Exception):
    """Base exception for all engine errors.

    Attributes:
        error_code: Code from the error catalog (e.g., "IMPORT_001")
        details: Additional context about the error (for logging)
    """

    def __init__(self, error_code: str, details: dict[str, Any] | None = None):
        """Initialize the exception.

        Args:
            error_code: Error code from errors.py
            details: Additional error context (not shown to users)
        """
        self.error_code = error_code
        self.details = details or {}
        super().__init__(error_code)


class VocabularyError(SamvidError):
    """Raised when a vocabulary override file is unreadable or invalid.

    Maps to error code VOCAB_001.
    """

    pass


class TableImportError(SamvidError):
    """Raised when tabular input cannot be read at all.

    Per-row problems never raise; this covers whole-file faults such as a
    CSV without a header row (IMPORT_001).
    """

    pass
