import pytest

from canopy.registry import GlobalProviderRegistry, set_default_registry


@pytest.fixture(autouse=True)
def registry():
    """Install a fresh default registry for each test."""
    registry = GlobalProviderRegistry()
    previous = set_default_registry(registry)
    yield registry
    set_default_registry(previous)
