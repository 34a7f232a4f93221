"""Node and widget helpers shared by the test modules."""
from typing import Any, List, Optional, Tuple, Type

from nodepanel.core.network import DocumentNode, NestedNetwork, NodeInput, ProtoNode
from nodepanel.core.tagged_value import TaggedValue, ValueTag
from nodepanel.core.types import ConcreteType, TypeDescriptor

PRIMARY_TYPE = ConcreteType.of(ValueTag.VECTOR_DATA)


def slot(name: str, value: Optional[TaggedValue], descriptor: Optional[TypeDescriptor] = None,
         exposed: bool = False) -> Tuple[str, NodeInput, TypeDescriptor]:
    """A named property slot holding ``value``; its type defaults to the value's tag."""
    if descriptor is None:
        descriptor = ConcreteType.of(value.tag)
    return name, NodeInput(value=value, exposed=exposed), descriptor


def make_node(*slots, reference: Optional[str] = None, proto: Optional[str] = "nodes::TestNode",
              description: str = "", is_layer: bool = False, visible: bool = True,
              pinned: bool = False) -> DocumentNode:
    """Node whose input 0 is a wired primary input followed by ``slots`` at indices 1, 2, ..."""
    return DocumentNode(
        inputs=[NodeInput.connection("upstream")] + [node_input for _, node_input, _ in slots],
        implementation=ProtoNode(proto) if proto is not None else NestedNetwork(),
        reference=reference,
        input_names=["Primary"] + [name for name, _, _ in slots],
        input_descriptions=[""] + [f"{name} tooltip" for name, _, _ in slots],
        input_types=[PRIMARY_TYPE] + [descriptor for _, _, descriptor in slots],
        description=description,
        visible=visible,
        pinned=pinned,
        is_layer=is_layer,
    )


def f64(value: float) -> TaggedValue:
    return TaggedValue(ValueTag.F64, value)


def widgets_of(rows, widget_type: Type) -> List[Any]:
    """All widgets of ``widget_type`` across ``rows``, in order."""
    return [widget for row in rows for widget in row.widgets if isinstance(widget, widget_type)]


def only(rows, widget_type: Type) -> Any:
    """The single widget of ``widget_type`` across ``rows``."""
    found = widgets_of(rows, widget_type)
    assert len(found) == 1, f"expected one {widget_type.__name__}, found {len(found)}"
    return found[0]
