"""
Shared test configuration and fixtures for WebFinger client tests.
"""

from unittest.mock import Mock

import pytest


@pytest.fixture
def mock_logger():
    """Logger double recording the lines a Client emits."""
    return Mock(spec=["debug", "warning"])
