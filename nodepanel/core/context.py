"""Everything a panel build reads: the graph snapshot and the panel configuration."""

from dataclasses import dataclass, field

from nodepanel.core.config import PanelConfig, default_panel_config
from nodepanel.core.network import GraphStore


@dataclass(frozen=True)
class NodePropertiesContext:
    network: GraphStore
    config: PanelConfig = field(default_factory=default_panel_config)
