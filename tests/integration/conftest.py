"""Conftest for integration tests - automatically mark all tests as integration tests."""

import pytest


def pytest_collection_modifyitems(config, items):
    """Automatically mark all tests in the integration directory as integration tests."""
    for item in items:
        if "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
