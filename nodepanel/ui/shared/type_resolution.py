"""
Resolution of the type a slot's widget is built for.

A slot of a primitive operation registered with several signatures has one
candidate type per signature. Only candidates the widget catalog can render
are eligible, and the first by type name wins. The ordering is arbitrary but
stable, so the same node always shows the same control.
"""

import logging
from typing import Any, List, Optional, Tuple

from nodepanel.core.context import NodePropertiesContext
from nodepanel.core.exceptions import LookupFailure
from nodepanel.core.types import TypeDescriptor, type_name, unwrap
from nodepanel.ui.shared.widget_creation_registry import (
    DEFAULT_REGISTRY, NumberOptions, WidgetRegistry,
)

logger = logging.getLogger(__name__)


def select_candidate(candidates: List[TypeDescriptor], registry: WidgetRegistry = DEFAULT_REGISTRY) -> Optional[TypeDescriptor]:
    """First renderable candidate by type name, or None if none can be rendered."""
    renderable = [unwrap(candidate) for candidate in candidates if registry.supports(candidate)]
    if not renderable:
        return None
    return min(renderable, key=type_name)


def resolve(node_id: Any, index: int, context: NodePropertiesContext,
            registry: WidgetRegistry = DEFAULT_REGISTRY) -> Tuple[Optional[TypeDescriptor], NumberOptions]:
    """
    Type to build the widget for slot ``index`` of ``node_id``, with its numeric options.

    Returns ``(None, options)`` when no renderable type exists; the slot then
    shows no row.
    """
    network = context.network
    try:
        metadata = network.field_metadata(node_id, index)
        number_options = NumberOptions.from_metadata(metadata)
        if metadata is not None and metadata.default_type is not None:
            return unwrap(metadata.default_type), number_options

        candidates = network.overload_candidates(node_id, index)
        if candidates:
            chosen = select_candidate(candidates, registry)
            if chosen is None:
                names = ", ".join(type_name(candidate) for candidate in candidates)
                logger.error(f"Node {node_id} input {index} has no renderable overload among: {names}")
            return chosen, number_options

        return unwrap(network.input_type(node_id, index)), number_options
    except LookupFailure as e:
        logger.error(f"Could not resolve the type of node {node_id} input {index}: {e}")
        return None, NumberOptions()
