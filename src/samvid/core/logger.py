"""
Shared logging utilities with PII filtering.

Bank messages carry account numbers, card fragments and phone numbers.
Anything the engine logs about a message goes through ``filter_pii`` so
those never reach a log sink in clear text.
"""

import logging
import re
import sys
from pathlib import Path

from samvid.config import get_settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Order matters: card numbers before generic digit runs.
PII_PATTERNS = [
    # Card numbers (13-19 digits, with or without spaces/dashes)
    (re.compile(r"\b\d{4}[\s-]?\d{4}[\s-]?\d{4}[\s-]?\d{1,7}\b"), "[CARD]"),
    # Email addresses
    (re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b"), "[EMAIL]"),
    # Phone numbers (international format)
    (re.compile(r"\+\d{1,3}[-.\s]?\(?\d{2,4}\)?[-.\s]?\d{3,4}[-.\s]?\d{4,5}"), "[PHONE]"),
    # Masked account numbers like XX1234 / **1234 / A/c 123456
    (re.compile(r"(?i)(?:[x*]{2,}\d{3,}|\ba/c\s*(?:no\.?\s*)?\d{3,})"), "[ACCOUNT]"),
    # Remaining long digit runs (references, account numbers, OTPs)
    (re.compile(r"\d{6,}"), "[NUMBER]"),
]


def filter_pii(text: str) -> str:
    """Remove PII from text using regex patterns.

    Args:
        text: Input text that may contain PII

    Returns:
        Text with PII replaced by placeholders
    """
    if not text:
        return text

    filtered = text
    for pattern, replacement in PII_PATTERNS:
        filtered = pattern.sub(replacement, filtered)

    return filtered


class PIIFilter(logging.Filter):
    """Logging filter that scrubs PII from the rendered record message."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        record.msg = filter_pii(message)
        record.args = None
        return True


def setup_logging(level: str | None = None, log_file: str | None = None) -> None:
    """
    Configure the ``samvid`` package logger.

    Args:
        level: Log level ('DEBUG', 'INFO', 'WARNING', 'ERROR').
            Defaults to ``Settings.LOG_LEVEL``.
        log_file: Optional log file path. Defaults to ``Settings.LOG_FILE``.
    """
    settings = get_settings()
    level = level or settings.LOG_LEVEL
    log_file = log_file or settings.LOG_FILE

    log_level = getattr(logging, level.upper(), logging.INFO)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    package_logger = logging.getLogger("samvid")
    package_logger.setLevel(log_level)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    console_handler.addFilter(PIIFilter())
    package_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        file_handler.addFilter(PIIFilter())
        package_logger.addHandler(file_handler)
