import sys
from datetime import datetime
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).parents[1] / "src"))

from samvid.config import get_settings
from samvid.core.vocabulary import get_vocabulary


@pytest.fixture(autouse=True)
def _reset_cached_config(monkeypatch: pytest.MonkeyPatch):
    """Give every test fresh settings and vocabulary.

    Settings are read from the environment once and cached; tests that set
    ``SAMVID_*`` variables must not leak into each other.
    """
    monkeypatch.delenv("SAMVID_VOCABULARY_FILE", raising=False)
    monkeypatch.delenv("SAMVID_OPENING_BALANCE", raising=False)
    monkeypatch.delenv("SAMVID_LOG_LEVEL", raising=False)
    monkeypatch.delenv("SAMVID_LOG_FILE", raising=False)
    get_settings.cache_clear()
    get_vocabulary.cache_clear()
    yield
    get_settings.cache_clear()
    get_vocabulary.cache_clear()


@pytest.fixture
def fixed_now() -> datetime:
    """A fixed ingestion time so ids and dates are predictable."""
    return datetime(2025, 1, 15, 10, 30, 0)
