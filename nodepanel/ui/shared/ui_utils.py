"""
Small text helpers shared by the widget constructors.
"""

import logging
from typing import Any

logger = logging.getLogger(__name__)


def format_unsupported_tooltip(type_display_name: str) -> str:
    """Tooltip for a slot whose type has no widget."""
    return f"This data can only be supplied through the node graph because no widget exists for its type:\n{type_display_name}"


def format_no_properties(is_layer: bool) -> str:
    """'Layer has no properties' or 'Node has no properties'"""
    return f"{'Layer' if is_layer else 'Node'} has no properties"


def debug_param(param_name: str, value: Any, context: str = "") -> None:
    """Simple parameter debug logging"""
    context_str = f" [{context}]" if context else ""
    logger.debug(f"PARAM: {param_name} = {value}{context_str}")
