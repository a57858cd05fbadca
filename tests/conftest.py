"""Pytest configuration shared by the dashboard tests."""

import pytest

from app.shared.security.rate_limiting import limiter


@pytest.fixture(autouse=True)
def _disable_rate_limits():
    """Keep slowapi out of the way unless a test turns it back on."""
    previous = limiter.enabled
    limiter.enabled = False
    yield
    limiter.enabled = previous
