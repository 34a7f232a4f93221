"""
Panel orchestration: one properties section per selected node.

The section for a node comes from the first source that applies:

1. a whole-node builder registered for the node's reference name;
2. otherwise, for every property slot (index 1 onwards), a slot builder
   registered for ``(reference name, index)``, or the catalog widget for the
   slot's resolved type.

Index 0 is the node's primary data input and is never shown.
"""

import logging
from typing import Any, List

from nodepanel.core.context import NodePropertiesContext
from nodepanel.core.exceptions import LookupFailure
from nodepanel.core.network import DocumentNode
from nodepanel.ui.shared.type_resolution import resolve
from nodepanel.ui.shared.ui_utils import format_no_properties
from nodepanel.ui.shared.widget_creation_registry import DEFAULT_REGISTRY, WidgetRegistry
from nodepanel.ui.shared.widget_descriptors import Section, TextLabel, WidgetRow

logger = logging.getLogger(__name__)


def node_no_properties(is_layer: bool) -> List[WidgetRow]:
    return [WidgetRow([TextLabel(format_no_properties(is_layer))])]


def slot_rows(node_id: Any, index: int, context: NodePropertiesContext,
              registry: WidgetRegistry = DEFAULT_REGISTRY) -> List[WidgetRow]:
    """Rows for one property slot: its slot builder if registered, else the catalog widget."""
    reference = context.network.reference(node_id)
    widget_override = context.config.widget_override(reference, index)
    if widget_override is not None:
        return list(widget_override(node_id, index, context))

    descriptor, number_options = resolve(node_id, index, context, registry)
    if descriptor is None:
        return []
    # Unsupported types still show their labelled row
    return list(registry.dispatch(node_id, index, descriptor, number_options, context).rows)


def section_name(document_node: DocumentNode, context: NodePropertiesContext) -> str:
    """Reference name, else the primitive operation's name, else the configured placeholder."""
    if document_node.reference is not None:
        return document_node.reference
    proto = document_node.proto_node()
    if proto is not None:
        return proto.name
    return context.config.fallback_node_name


def generate_node_properties(node_id: Any, context: NodePropertiesContext,
                             registry: WidgetRegistry = DEFAULT_REGISTRY) -> Section:
    """Build the properties section shown for ``node_id``."""
    try:
        document_node = context.network.node(node_id)
    except LookupFailure as e:
        logger.warning(f"Could not build properties for node {node_id}: {e}")
        return Section(
            name=context.config.fallback_node_name, description="", visible=True, pinned=False,
            node_id=node_id, rows=node_no_properties(False),
        )

    layout: List[WidgetRow] = []
    node_override = context.config.node_override(document_node.reference)
    if node_override is not None:
        logger.debug(f"Using node override for {document_node.reference!r}")
        layout = list(node_override(node_id, context))
    else:
        for index in range(1, len(document_node.inputs)):
            layout.extend(slot_rows(node_id, index, context, registry))

    if not layout:
        layout = node_no_properties(document_node.is_layer)

    return Section(
        name=section_name(document_node, context),
        description=document_node.description,
        visible=document_node.visible,
        pinned=document_node.pinned,
        node_id=node_id,
        rows=layout,
    )
