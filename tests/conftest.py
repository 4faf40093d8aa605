"""
Pytest configuration and common fixtures for Google API integration tests.

Fixtures follow camelCase naming convention.
"""

import tempfile
from pathlib import Path

import pytest

from lib.google_api.test_helpers import fakeApi, resetGoogleApiState  # noqa: F401


@pytest.fixture
def tempDir():
    """Create a temporary directory for config files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def restoreLogging():
    """Restore root, httpx and httpcore loggers changed by initLogging()."""
    import logging

    loggers = [logging.getLogger(), logging.getLogger("httpx"), logging.getLogger("httpcore")]
    saved = [(lg, lg.level, lg.handlers[:]) for lg in loggers]
    yield
    for lg, level, handlers in saved:
        lg.setLevel(level)
        lg.handlers[:] = handlers
