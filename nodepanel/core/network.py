"""
Read-only node graph access for panel construction.

``GraphStore`` names the queries the panel builders make against the host's
node graph. ``InMemoryGraphStore`` is a dictionary-backed implementation with
registries for overload signatures and per-slot numeric metadata; hosts that
keep their graph elsewhere implement ``GraphStore`` directly.

Every query that cannot find what it was asked for raises ``LookupFailure``.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

import yaml

from nodepanel.core.exceptions import ConfigError, LookupFailure
from nodepanel.core.tagged_value import TaggedValue, ValueTag
from nodepanel.core.types import ConcreteType, TypeDescriptor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NodeInput:
    """
    One input slot of a node.

    A slot either holds a literal ``value`` or is ``wired`` to the output of an
    upstream node. A literal value flagged ``exposed`` is shown in the graph as
    a connectable input; the panel then only offers the expose toggle.
    """
    value: Optional[TaggedValue] = None
    exposed: bool = False
    wired: Optional[Any] = None

    @classmethod
    def literal(cls, value: TaggedValue, exposed: bool = False) -> "NodeInput":
        return cls(value=value, exposed=exposed)

    @classmethod
    def connection(cls, upstream_node_id: Any) -> "NodeInput":
        return cls(wired=upstream_node_id, exposed=True)

    def as_value(self) -> Optional[TaggedValue]:
        return self.value if self.wired is None else None

    def as_non_exposed_value(self) -> Optional[TaggedValue]:
        """The literal value when the slot is edited in the panel, else None."""
        if self.is_exposed():
            return None
        return self.value

    def is_exposed(self) -> bool:
        return self.exposed or self.wired is not None


@dataclass(frozen=True)
class ProtoNode:
    """A primitive operation, identified by its fully qualified path."""
    identifier: str

    @property
    def name(self) -> str:
        return self.identifier.rsplit("::", 1)[-1]


@dataclass(frozen=True)
class NestedNetwork:
    """Implementation made of an inner network of nodes."""
    node_ids: Tuple[Any, ...] = ()


NetworkImplementation = Union[ProtoNode, NestedNetwork]


@dataclass(frozen=True)
class FieldMetadata:
    """Numeric constraints and type hints registered for one slot of a primitive operation."""
    number_min: Optional[float] = None
    number_max: Optional[float] = None
    number_mode_range: Optional[Tuple[float, float]] = None
    default_type: Optional[TypeDescriptor] = None


@dataclass(frozen=True)
class DocumentNode:
    """A node as stored in the document, together with its declared slot metadata."""
    inputs: Tuple[NodeInput, ...]
    implementation: NetworkImplementation
    reference: Optional[str] = None
    input_names: Tuple[str, ...] = ()
    input_descriptions: Tuple[str, ...] = ()
    input_types: Tuple[TypeDescriptor, ...] = ()
    description: str = ""
    visible: bool = True
    pinned: bool = False
    is_layer: bool = False

    def __post_init__(self):
        for name in ("inputs", "input_names", "input_descriptions", "input_types"):
            object.__setattr__(self, name, tuple(getattr(self, name)))

    def proto_node(self) -> Optional[ProtoNode]:
        return self.implementation if isinstance(self.implementation, ProtoNode) else None


class GraphStore(ABC):
    """Read-only queries the panel builders make against the node graph."""

    @abstractmethod
    def node(self, node_id: Any) -> DocumentNode:
        """Return the node with ``node_id``; raise ``LookupFailure`` if it is not in the network."""
        pass

    @abstractmethod
    def input_type(self, node_id: Any, input_index: int) -> TypeDescriptor:
        """Type required at the slot when the node has a single fixed signature."""
        pass

    @abstractmethod
    def overload_candidates(self, node_id: Any, input_index: int) -> List[TypeDescriptor]:
        """Candidate types at the slot across all registered signatures; empty when not polymorphic."""
        pass

    @abstractmethod
    def field_metadata(self, node_id: Any, input_index: int) -> Optional[FieldMetadata]:
        """Numeric metadata registered for the slot of the node's primitive operation."""
        pass

    # Derived queries

    def input_name(self, node_id: Any, input_index: int) -> str:
        names = self.node(node_id).input_names
        if not 0 <= input_index < len(names):
            raise LookupFailure(f"Node {node_id} declares no name for input {input_index}")
        return names[input_index]

    def input_description(self, node_id: Any, input_index: int) -> str:
        descriptions = self.node(node_id).input_descriptions
        if not 0 <= input_index < len(descriptions):
            raise LookupFailure(f"Node {node_id} declares no description for input {input_index}")
        return descriptions[input_index]

    def reference(self, node_id: Any) -> Optional[str]:
        return self.node(node_id).reference


class InMemoryGraphStore(GraphStore):
    """
    Dictionary-backed graph store.

    ``overloads`` maps a primitive operation identifier to its registered
    signatures, each a sequence of slot types. ``metadata`` maps
    ``(identifier, input_index)`` to ``FieldMetadata``.
    """

    def __init__(
        self,
        nodes: Optional[Mapping[Any, DocumentNode]] = None,
        overloads: Optional[Mapping[str, Sequence[Sequence[TypeDescriptor]]]] = None,
        metadata: Optional[Mapping[Tuple[str, int], FieldMetadata]] = None,
    ):
        self._nodes: Dict[Any, DocumentNode] = dict(nodes or {})
        self._overloads: Dict[str, List[Tuple[TypeDescriptor, ...]]] = {
            identifier: [tuple(signature) for signature in signatures]
            for identifier, signatures in (overloads or {}).items()
        }
        self._metadata: Dict[Tuple[str, int], FieldMetadata] = dict(metadata or {})

    def add_node(self, node_id: Any, node: DocumentNode) -> None:
        self._nodes[node_id] = node

    def register_overload(self, identifier: str, signature: Sequence[TypeDescriptor]) -> None:
        self._overloads.setdefault(identifier, []).append(tuple(signature))

    def register_metadata(self, identifier: str, input_index: int, metadata: FieldMetadata) -> None:
        self._metadata[(identifier, input_index)] = metadata

    def node(self, node_id: Any) -> DocumentNode:
        try:
            return self._nodes[node_id]
        except KeyError:
            raise LookupFailure(f"Node {node_id} is not in the current network") from None

    def input_type(self, node_id: Any, input_index: int) -> TypeDescriptor:
        types = self.node(node_id).input_types
        if not 0 <= input_index < len(types):
            raise LookupFailure(f"Node {node_id} declares no type for input {input_index}")
        return types[input_index]

    def overload_candidates(self, node_id: Any, input_index: int) -> List[TypeDescriptor]:
        proto = self.node(node_id).proto_node()
        if proto is None:
            return []
        signatures = self._overloads.get(proto.identifier, [])
        if len(signatures) < 2:
            return []
        return [signature[input_index] for signature in signatures if input_index < len(signature)]

    def field_metadata(self, node_id: Any, input_index: int) -> Optional[FieldMetadata]:
        proto = self.node(node_id).proto_node()
        if proto is None:
            return None
        return self._metadata.get((proto.identifier, input_index))


def _parse_type(type_entry: Any) -> TypeDescriptor:
    if isinstance(type_entry, str):
        type_entry = {"type": type_entry}
    if not isinstance(type_entry, dict) or "type" not in type_entry:
        raise ConfigError(f"Invalid default_type entry: {type_entry!r}")
    try:
        tag = ValueTag(type_entry["type"])
    except ValueError:
        raise ConfigError(f"Unknown value type in default_type: {type_entry['type']!r}") from None
    return ConcreteType.of(tag, alias=type_entry.get("alias"))


def _parse_field_metadata(entry: Mapping[str, Any]) -> FieldMetadata:
    if not isinstance(entry, dict):
        raise ConfigError(f"Field metadata must be a mapping, got {entry!r}")
    unknown = set(entry) - {"min", "max", "range", "default_type"}
    if unknown:
        raise ConfigError(f"Unknown field metadata keys: {sorted(unknown)}")
    mode_range = entry.get("range")
    if mode_range is not None:
        try:
            low, high = mode_range
            mode_range = (float(low), float(high))
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Metadata range must have two numeric bounds, got {mode_range!r}") from e
    default_type = entry.get("default_type")
    return FieldMetadata(
        number_min=entry.get("min"),
        number_max=entry.get("max"),
        number_mode_range=mode_range,
        default_type=_parse_type(default_type) if default_type is not None else None,
    )


def load_node_metadata(path: Union[str, Path]) -> Dict[Tuple[str, int], FieldMetadata]:
    """
    Load a slot metadata registry from a YAML file.

    The file maps primitive operation identifiers to slot indices to entries
    with optional ``min``, ``max``, ``range`` and ``default_type`` keys.
    """
    path = Path(path)
    logger.info(f"Loading node metadata from {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            loaded_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Error parsing YAML from {path}: {e}") from e

    if not loaded_data:
        logger.warning(f"Node metadata file {path} is empty")
        return {}
    if not isinstance(loaded_data, dict):
        raise ConfigError(f"Node metadata file {path} must contain a mapping")

    registry: Dict[Tuple[str, int], FieldMetadata] = {}
    for identifier, slots in loaded_data.items():
        if not isinstance(slots, dict):
            raise ConfigError(f"Metadata for {identifier} must map slot indices to entries")
        for input_index, entry in slots.items():
            try:
                index = int(input_index)
            except (TypeError, ValueError) as e:
                raise ConfigError(f"Slot index {input_index!r} of {identifier} is not an integer") from e
            registry[(identifier, index)] = _parse_field_metadata(entry or {})
    logger.debug(f"Loaded {len(registry)} metadata entries from {path}")
    return registry
