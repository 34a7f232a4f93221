"""
Panel configuration for nodepanel.

``PanelConfig`` carries the override registries consulted by the panel
orchestrator together with the numeric settings shared by widget
constructors. Configuration is immutable: registries are read-only mappings
built once at startup and passed in explicitly.
"""

import dataclasses
import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Callable, Dict, FrozenSet, List, Mapping, Optional, Tuple, Union

import yaml

from nodepanel.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

# (node_id, context) -> rows for the whole node
NodeOverride = Callable[[Any, Any], List[Any]]
# (node_id, input_index, context) -> rows for one slot
WidgetOverride = Callable[[Any, int, Any], List[Any]]


@dataclass(frozen=True)
class PanelConfig:
    """
    Root configuration for building property panels.
    Intended to be instantiated once and shared by every panel refresh.
    """
    node_overrides: Mapping[str, NodeOverride] = field(default_factory=dict)
    """Whole-node builders keyed by the node's reference name."""

    widget_overrides: Mapping[Tuple[str, int], WidgetOverride] = field(default_factory=dict)
    """Per-slot builders keyed by (reference name, input index)."""

    resolution_minimum: float = 64.0
    """Lower bound of both fields of a ``Resolution`` slot."""

    footprint_resolution_max: int = 4000
    """Upper bound of each axis of a footprint's render resolution."""

    fallback_node_name: str = "Custom Node"
    """Section name for nodes with neither a reference name nor a primitive operation."""

    disabled_node_overrides: FrozenSet[str] = frozenset()
    """Reference names whose whole-node builder is skipped in favor of per-slot widgets."""

    def __post_init__(self):
        object.__setattr__(self, "node_overrides", MappingProxyType(dict(self.node_overrides)))
        object.__setattr__(self, "widget_overrides", MappingProxyType(dict(self.widget_overrides)))
        object.__setattr__(self, "disabled_node_overrides", frozenset(self.disabled_node_overrides))
        if self.footprint_resolution_max < 1:
            raise ConfigError(f"footprint_resolution_max must be at least 1, got {self.footprint_resolution_max}")

    def node_override(self, reference: Optional[str]) -> Optional[NodeOverride]:
        if reference is None or reference in self.disabled_node_overrides:
            return None
        return self.node_overrides.get(reference)

    def widget_override(self, reference: Optional[str], input_index: int) -> Optional[WidgetOverride]:
        if reference is None:
            return None
        return self.widget_overrides.get((reference, input_index))

    @classmethod
    def from_yaml(cls, path: Union[str, Path], base: Optional["PanelConfig"] = None) -> "PanelConfig":
        """
        Load scalar settings from a YAML file on top of ``base``.

        Override registries are code, not data, and always come from ``base``
        (the built-in registries when ``base`` is None).
        """
        path = Path(path)
        base = base if base is not None else default_panel_config()
        logger.info(f"Loading panel configuration from {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                loaded_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Error parsing YAML from {path}: {e}") from e

        if not loaded_data:
            logger.warning(f"Panel config file {path} is empty. Using base config.")
            return base
        if not isinstance(loaded_data, dict):
            raise ConfigError(f"Panel config file {path} must contain a mapping")

        return _construct_config_from_data(loaded_data, base)


def _name_set(value: Any) -> FrozenSet[str]:
    if isinstance(value, str):
        raise TypeError("expected a list of names")
    return frozenset(str(name) for name in value)


_SCALAR_SETTINGS: Dict[str, Callable[[Any], Any]] = {
    "resolution_minimum": float,
    "footprint_resolution_max": int,
    "fallback_node_name": str,
    "disabled_node_overrides": _name_set,
}


def _construct_config_from_data(loaded_data: Dict[str, Any], base: PanelConfig) -> PanelConfig:
    unknown = set(loaded_data) - set(_SCALAR_SETTINGS)
    if unknown:
        raise ConfigError(f"Unknown panel config keys: {sorted(unknown)}")

    changes = {}
    for key, value in loaded_data.items():
        try:
            changes[key] = _SCALAR_SETTINGS[key](value)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid value for {key}: {value!r}") from e

    config = dataclasses.replace(base, **changes)
    logger.info("Successfully loaded and applied panel configuration.")
    return config


_DEFAULT_PANEL_CONFIG: Optional[PanelConfig] = None


def default_panel_config() -> PanelConfig:
    """
    Provides the default PanelConfig with the built-in composite builders registered.

    The registries are assembled on first call and reused afterwards.
    """
    global _DEFAULT_PANEL_CONFIG
    if _DEFAULT_PANEL_CONFIG is None:
        # Builders import widget constructors that depend on core; import late
        from nodepanel.ui.shared.composite_builders import NODE_OVERRIDES, WIDGET_OVERRIDES
        logger.info("Initializing with default PanelConfig.")
        _DEFAULT_PANEL_CONFIG = PanelConfig(node_overrides=NODE_OVERRIDES, widget_overrides=WIDGET_OVERRIDES)
    return _DEFAULT_PANEL_CONFIG
