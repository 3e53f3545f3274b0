"""Pytest configuration for the onellm test suite.

Every test runs offline: backends are faked with ``httpx.MockTransport`` or
in-memory adapters, retry sleeps are disabled, and credentials from the
developer's shell never leak into a test.
"""

from __future__ import annotations

import time
from typing import Iterator, List

import pytest

from ..base.http import close_all_clients


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in (
        "OPENAI_API_KEY",
        "ANTHROPIC_API_KEY",
        "OPENAI_BASE_URL",
        "ANTHROPIC_BASE_URL",
        "ONELLM_CONFIG_FILE",
        "ONELLM_MAX_RETRIES",
        "ONELLM_TIMEOUT_CONNECT_SECONDS",
        "ONELLM_TIMEOUT_READ_SECONDS",
        "ONELLM_TIMEOUT_WRITE_SECONDS",
        "ONELLM_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    yield
    close_all_clients()


@pytest.fixture(autouse=True)
def sleeps(monkeypatch: pytest.MonkeyPatch) -> List[float]:
    """Record retry backoff delays instead of sleeping."""
    recorded: List[float] = []
    monkeypatch.setattr(time, "sleep", recorded.append)
    return recorded


@pytest.fixture
def log_records(monkeypatch: pytest.MonkeyPatch):
    """Attach a list handler to the shared ``onellm`` logger at DEBUG level."""
    from ..base.logging import get_logger
    from .helpers import ListHandler

    monkeypatch.setenv("ONELLM_LOG_LEVEL", "DEBUG")
    base = get_logger()
    handler = ListHandler()
    base.addHandler(handler)
    try:
        yield handler
    finally:
        base.removeHandler(handler)
