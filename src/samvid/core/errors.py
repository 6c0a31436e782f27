"""Error codes and user-friendly messages.

This module defines the error catalog for the extraction engine.
Each error has:
- code: Unique identifier
- message: Technical description (for logs)
- user_message: User-friendly explanation
- suggestion: Actionable guidance for the user
- retry_allowed: Whether the same input could succeed on retry

Not every code maps to an exception. ``EXTRACT_*`` codes describe the
ordinary "no transaction found" outcomes of the text pipeline and are
carried on ``NoMatch`` results instead of being raised.
"""

from dataclasses import dataclass


@dataclass
class ErrorDefinition:
    """Definition of a single error type."""

    code: str
    message: str
    user_message: str
    suggestion: str
    retry_allowed: bool


ERROR_CATALOG: dict[str, dict] = {
    "EXTRACT_001": {
        "code": "EXTRACT_001",
        "message": "Message rejected by the OTP/verification filter",
        "user_message": "This looks like a security code or login alert, not a transaction.",
        "suggestion": "Paste the debit or credit alert sent by your bank instead.",
        "retry_allowed": False,
    },
    "EXTRACT_002": {
        "code": "EXTRACT_002",
        "message": "No currency-prefixed amount found in message",
        "user_message": "Could not detect a valid transaction.",
        "suggestion": "Check the text format. The message must contain an amount such as 'Rs 500' or 'INR 1,200.00'.",
        "retry_allowed": False,
    },
    "IMPORT_001": {
        "code": "IMPORT_001",
        "message": "CSV import failed: no header row",
        "user_message": "This file doesn't have a header row.",
        "suggestion": "Export the statement as CSV with column names in the first row.",
        "retry_allowed": False,
    },
    "VOCAB_001": {
        "code": "VOCAB_001",
        "message": "Vocabulary file could not be loaded or failed validation",
        "user_message": "The banking vocabulary configuration is invalid.",
        "suggestion": "Fix the YAML file referenced by SAMVID_VOCABULARY_FILE or unset it to use the defaults.",
        "retry_allowed": False,
    },
}


def get_error(error_code: str) -> dict:
    """Get error details from catalog.

    Args:
        error_code: Error code from the catalog

    Returns:
        Dict with error details (a generic entry for unknown codes)
    """
    if error_code not in ERROR_CATALOG:
        return {
            "code": "UNKNOWN",
            "message": f"Unknown error code: {error_code}",
            "user_message": "An unexpected error occurred.",
            "suggestion": "Please try again. Contact support if the problem persists.",
            "retry_allowed": True,
        }
    return ERROR_CATALOG[error_code]


def get_definition(error_code: str) -> ErrorDefinition:
    """Get the catalog entry for ``error_code`` as an ErrorDefinition."""
    entry = get_error(error_code)
    return ErrorDefinition(
        code=entry["code"],
        message=entry["message"],
        user_message=entry["user_message"],
        suggestion=entry["suggestion"],
        retry_allowed=entry["retry_allowed"],
    )


def get_user_message(error_code: str) -> str:
    """Get user-friendly message for an error code."""
    return get_error(error_code)["user_message"]


def get_suggestion(error_code: str) -> str:
    """Get actionable suggestion for an error code."""
    return get_error(error_code)["suggestion"]


def is_retryable(error_code: str) -> bool:
    """Check if an error is retryable."""
    return get_error(error_code)["retry_allowed"]
