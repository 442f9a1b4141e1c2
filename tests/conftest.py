"""Shared pytest fixtures for loxcore tests."""

import pytest

from loxcore.core.errors import ErrorReporter


@pytest.fixture
def reporter() -> ErrorReporter:
    """Return a fresh diagnostic sink."""
    return ErrorReporter()
