"""Core module for nodepanel."""

# These imports are re-exported through __all__
from nodepanel.core.context import NodePropertiesContext
from nodepanel.core.config import PanelConfig, default_panel_config
from nodepanel.core.network import DocumentNode, GraphStore, InMemoryGraphStore, NodeInput, ProtoNode
from nodepanel.core.tagged_value import TaggedValue, ValueTag

__all__ = [
    'DocumentNode',
    'GraphStore',
    'InMemoryGraphStore',
    'NodeInput',
    'NodePropertiesContext',
    'PanelConfig',
    'ProtoNode',
    'TaggedValue',
    'ValueTag',
    'default_panel_config',
]
