"""Root conftest for pytest configuration and shared fixtures.

Loaded before both testpaths (tests/ and the colocated beacon/**/tests/),
so its fixtures are available everywhere.
"""

import os

import pytest

# ---------------------------------------------------------------------------
# Environment variables — must be set before any beacon module import
# Uses setdefault so real env vars (CI) are never overridden.
# ---------------------------------------------------------------------------
os.environ.setdefault("BEACON_ENVIRONMENT", "test")
os.environ.setdefault("BEACON_ANALYTICS_ENABLED", "false")


# ---------------------------------------------------------------------------
# Shared fake fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def fake_backend():
    """Fake LogBackend that records every call."""
    from beacon.adapters.fake import FakeLogBackend

    return FakeLogBackend()


@pytest.fixture
def fake_sink():
    """Synchronous LogSink spy."""
    from beacon.adapters.fake import FakeLogSink

    return FakeLogSink()


@pytest.fixture
def dispatcher_factory():
    """Build dispatchers that are closed when the test ends."""
    from beacon.core.dispatcher import LogDispatcher

    created = []

    def _build(backends=()):
        dispatcher = LogDispatcher(backends)
        created.append(dispatcher)
        return dispatcher

    yield _build
    for dispatcher in created:
        dispatcher.close(timeout=5)
