"""Vendor name cleanup for free-text bank alerts.

A captured vendor run usually drags banking boilerplate along with it
("A/c XX1234 POS AMAZON PVT LTD"). Cleanup is a fixed sequence of passes,
each a plain ``str -> str`` function:

1. strip boilerplate tokens and card/account masks
2. strip runs of 4+ digits (masked account / reference numbers)
3. collapse whitespace
4. trim

After cleaning, ``correct_vendor`` swaps leftover preposition stubs and
one-letter fragments for a direction-dependent sentinel label.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from functools import lru_cache

from samvid.core.vocabulary import Vocabulary, get_vocabulary

# ``*`` masks and runs of x (XX1234, XXXX-1234); an x-run inside a word is kept.
MASK_PATTERN = re.compile(r"\*+|(?<![a-z])x{2,}(?![a-z])", re.IGNORECASE)


@lru_cache(maxsize=8)
def _boilerplate_pattern(tokens: tuple[str, ...]) -> re.Pattern[str] | None:
    if not tokens:
        return None
    # Longest first so "account" wins over "acct"-style prefixes.
    alternation = "|".join(re.escape(t) for t in sorted(tokens, key=len, reverse=True))
    return re.compile(rf"(?<![a-z])(?:{alternation})(?![a-z])", re.IGNORECASE)


def strip_boilerplate(text: str, tokens: Sequence[str] | None = None) -> str:
    """Remove banking jargon tokens and ``*``/``XX`` masks."""
    if tokens is None:
        tokens = get_vocabulary().boilerplate_tokens
    pattern = _boilerplate_pattern(tuple(tokens))
    if pattern is not None:
        text = pattern.sub(" ", text)
    return MASK_PATTERN.sub(" ", text)


def strip_digit_runs(text: str, min_run: int = 4) -> str:
    """Remove every run of ``min_run`` or more consecutive digits."""
    return re.sub(rf"\d{{{min_run},}}", " ", text)


def collapse_whitespace(text: str) -> str:
    return re.sub(r"\s+", " ", text)


def trim(text: str) -> str:
    return text.strip()


def cleaning_passes(vocabulary: Vocabulary) -> tuple[Callable[[str], str], ...]:
    """Return the ordered cleanup passes configured for ``vocabulary``."""
    return (
        lambda s: strip_boilerplate(s, vocabulary.boilerplate_tokens),
        lambda s: strip_digit_runs(s, vocabulary.min_digit_run),
        collapse_whitespace,
        trim,
    )


def clean_vendor(raw_vendor: str, vocabulary: Vocabulary | None = None) -> str:
    """Run every cleanup pass over a captured vendor string."""
    vocab = vocabulary or get_vocabulary()
    text = raw_vendor or ""
    for step in cleaning_passes(vocab):
        text = step(text)
    return text


def is_blacklisted(vendor: str, vocabulary: Vocabulary | None = None) -> bool:
    """True when ``vendor`` is a bare preposition stub or too short to be a name."""
    vocab = vocabulary or get_vocabulary()
    blacklist = {word.lower() for word in vocab.vendor_blacklist}
    return vendor.lower() in blacklist or len(vendor) < vocab.min_vendor_length


def correct_vendor(vendor: str, is_credit: bool, vocabulary: Vocabulary | None = None) -> str:
    """Replace unusable vendor text with the incoming/outgoing sentinel."""
    vocab = vocabulary or get_vocabulary()
    if is_blacklisted(vendor, vocab):
        return vocab.incoming_sentinel if is_credit else vocab.outgoing_sentinel
    return vendor
