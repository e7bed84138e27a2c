"""
Global pytest fixtures for restpager tests.

This file contains test fixtures that can be used across all test files.
"""

import pytest

from restpager.utils.network.rate_limiter import global_rate_limiter


# Import common fixtures to make them available globally
pytest_plugins = [
    "tests.fixtures.rate_limiter_fixtures",
    "tests.fixtures.pagination",
]


@pytest.fixture(autouse=True)
def reset_global_rate_limiter():
    """Keep the process-wide limiter from leaking state between tests."""
    global_rate_limiter.reset()
    yield
    global_rate_limiter.reset()


def pytest_configure(config):
    """
    Configure pytest with custom markers.

    Args:
        config: pytest configuration object
    """
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "network: mark test as requiring network connectivity")
