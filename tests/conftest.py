# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Shared test configuration and fixtures."""

try:
    import seopager  # noqa: F401
except ImportError:
    raise ImportError("seopager is not installed. Run: pip install -e '.[dev]'") from None

import logging

import pytest
import structlog


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep SEOPAGER_* variables of the developer shell out of the tests."""
    for name in ("SEOPAGER_WINDOW_SIZE", "SEOPAGER_CACHE_TTL", "SEOPAGER_HINT_SIGNATURES"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def reset_logging():
    """Restore root logging and structlog state after a test that configures logging."""
    root = logging.getLogger()
    old_handlers = root.handlers[:]
    old_level = root.level
    yield
    root.handlers = old_handlers
    root.setLevel(old_level)
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    from seopager.cache import InMemoryTotalsCache

    return InMemoryTotalsCache(clock=clock)


@pytest.fixture
def context():
    from seopager import RequestContext

    return RequestContext(url="https://example.com/blog/", content_id=42)
