"""
nodepanel: type-directed property panels for node-graph editors.

This module exposes the package version and the entry point used by hosts to
build a properties section for a selected node. It does NOT import the
composite builders eagerly; the default override registries are assembled
on first use by ``nodepanel.core.config.default_panel_config``.
"""

import logging

__version__ = "0.1.0"


# Set up basic logging configuration if none exists
# This ensures warnings from panel construction are visible outside a host app
def _ensure_basic_logging():
    """Ensure basic logging is configured if no configuration exists."""
    root_logger = logging.getLogger()

    # Only configure if no handlers exist and level is too high
    if not root_logger.handlers and root_logger.level > logging.INFO:
        logging.basicConfig(
            level=logging.INFO,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )


_ensure_basic_logging()


def generate_node_properties(node_id, context):
    """Build the properties section for ``node_id`` (see ``panel_orchestrator``)."""
    from nodepanel.ui.shared.panel_orchestrator import generate_node_properties as _generate
    return _generate(node_id, context)


__all__ = [
    "__version__",
    "generate_node_properties",
]
