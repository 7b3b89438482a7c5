"""Pytest configuration"""

import pytest

from termmux import RecordingRunner, Server
from termmux.telemetry import metrics


@pytest.fixture
def runner():
    """Recording runner: every command succeeds with empty output."""
    return RecordingRunner()


@pytest.fixture
def server(runner):
    """Optimistic server wired to the recording runner."""
    return Server(runner=runner, strict=False)


@pytest.fixture
def strict_server(runner):
    """Strict server wired to the recording runner."""
    return Server(runner=runner, strict=True)


@pytest.fixture
def session(server, runner):
    """Fresh session "work" with the setup calls cleared from the runner."""
    created = server.create_session("work")
    runner.calls.clear()
    return created


@pytest.fixture(autouse=True)
def reset_metrics():
    """Reset metrics around each test"""
    metrics.reset()
    yield
    metrics.reset()
