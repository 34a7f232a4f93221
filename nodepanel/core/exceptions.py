"""
Custom exceptions for the nodepanel core.

Lookup failures are raised by the graph store and handled at the slot or
panel boundary; malformed tagged values fail loudly at construction.
"""


class NodePanelError(Exception):
    """Base class for all nodepanel custom exceptions."""
    pass


class LookupFailure(NodePanelError, KeyError):
    """Raised when a node, input slot, or slot metadata cannot be found in the graph store."""

    def __str__(self):
        # KeyError quotes its argument; keep log lines readable
        return str(self.args[0]) if self.args else ""


class TaggedValueError(NodePanelError, TypeError):
    """Raised when a tagged value's payload does not match the shape its tag declares."""
    pass


class ConfigError(NodePanelError, ValueError):
    """Raised when a panel configuration file contains unknown or malformed settings."""
    pass
