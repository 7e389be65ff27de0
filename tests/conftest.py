"""
Shared fixtures for clicktrack tests.
"""

import os
from contextlib import asynccontextmanager

import pytest

os.environ.setdefault('CLICKTRACK_BROWSER_MODE', 'local')

from clicktrack_core.config import Config
from fakes import FakeContext, FakeSession


@pytest.fixture
def cfg():
    return Config(
        marker="clicktrackedAd_js",
        browser_mode="local",
        navigation_timeout_ms=1000,
        async_wait_timeout_ms=50,
        max_isolated_probes=10,
    )


@pytest.fixture
def fake_browser(monkeypatch):
    """Replace launch_browser in the scrape service with a FakeContext-backed session."""
    context = FakeContext()
    state = {"launched": 0, "closed": 0}

    @asynccontextmanager
    async def _launch(cfg=None, launcher=None):
        state["launched"] += 1
        try:
            yield FakeSession(context)
        finally:
            state["closed"] += 1

    monkeypatch.setattr("clicktrack_core.scraper.launch_browser", _launch)
    context.state = state
    return context
