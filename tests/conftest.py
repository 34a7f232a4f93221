"""Global pytest configuration for nodepanel tests."""
import pytest

from nodepanel.core.config import default_panel_config
from nodepanel.core.context import NodePropertiesContext
from nodepanel.core.network import InMemoryGraphStore


@pytest.fixture
def store():
    """Empty in-memory graph store."""
    return InMemoryGraphStore()


@pytest.fixture
def context(store):
    """Panel context over ``store`` with the built-in override registries."""
    return NodePropertiesContext(store, default_panel_config())
