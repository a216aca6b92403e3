"""
Shared test configuration, fixtures, and markers for heightmaps tests.
"""

import pytest
from unittest.mock import MagicMock

from heightmaps import HeightmapCollection, HeightmapLayer


def pytest_configure(config):
    """Configure test markers."""
    config.addinivalue_line("markers", "property: marks property-based tests")
    config.addinivalue_line("markers", "unit: marks unit tests (fast, pure logic)")


@pytest.fixture
def fake_provider():
    """Stand-in terrain provider that is never ready."""
    provider = MagicMock(name="provider")
    provider.is_ready.return_value = False
    return provider


@pytest.fixture
def make_layers(fake_provider):
    """Factory for distinct layer handles over the same provider."""

    def _make(count):
        return [HeightmapLayer(fake_provider) for _ in range(count)]

    return _make


@pytest.fixture
def layers(make_layers):
    """Five distinct layers, L1..L5 in the scenarios."""
    return make_layers(5)


@pytest.fixture
def collection(layers):
    """Collection built from the first three layers."""
    return HeightmapCollection("collection1", 1, layers[:3])
