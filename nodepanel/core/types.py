"""
Type descriptors for node input slots.

A slot's required type is one of four shapes: a concrete type backed by a
tagged value (optionally refined by an alias), a generic type parameter, a
function type, or a future type. Function and future types are wrappers;
widget resolution always looks at the type they eventually produce.
"""

from dataclasses import dataclass
from typing import Optional, Union

from nodepanel.core.tagged_value import ValueTag


@dataclass(frozen=True)
class ConcreteType:
    """
    A concrete type.

    ``identity`` is the value tag stored for this type, or None when no value
    shape exists for it. ``alias`` is a semantic refinement such as ``"Angle"``
    that changes widget constraints without changing the stored shape.
    """
    name: str
    identity: Optional[ValueTag] = None
    alias: Optional[str] = None

    @classmethod
    def of(cls, tag: ValueTag, alias: Optional[str] = None) -> "ConcreteType":
        return cls(name=tag.value, identity=tag, alias=alias)


@dataclass(frozen=True)
class GenericType:
    name: str


@dataclass(frozen=True)
class FnType:
    input: "TypeDescriptor"
    output: "TypeDescriptor"


@dataclass(frozen=True)
class FutureType:
    output: "TypeDescriptor"


TypeDescriptor = Union[ConcreteType, GenericType, FnType, FutureType]


def unwrap(descriptor: TypeDescriptor) -> TypeDescriptor:
    """Strip Fn and Future wrappers until a concrete or generic type remains."""
    while isinstance(descriptor, (FnType, FutureType)):
        descriptor = descriptor.output
    return descriptor


def type_name(descriptor: TypeDescriptor) -> str:
    """Display name of a type; wrappers report the name of their output. Aliases do not change the name."""
    return unwrap(descriptor).name
