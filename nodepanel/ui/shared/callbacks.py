"""
Update callbacks bound to controls.

Callbacks are plain value objects: they can be compared, logged and invoked
without capturing any widget state. A host calls ``callback(raw)`` with the
control's new raw value (a float for number fields, a string for text fields,
an enum member for dropdowns, a ``FillChoice`` for color swatches, and so on)
and dispatches the returned message.

Transforms map the raw value to the new ``TaggedValue`` for a slot. A
transform returning None suppresses the update.
"""

import math
from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple

from nodepanel.constants.constants import I32_MAX, I32_MIN, U32_MAX
from nodepanel.core.messages import AddTransaction, Batched, ExposeInput, Message, NoOp, SetInputValue
from nodepanel.core.tagged_value import TaggedValue, ValueTag, Vec2
from nodepanel.ui.shared.ui_utils import debug_param

Transform = Callable[[Any], Optional[TaggedValue]]


def saturating_int(raw: Any, low: int, high: int) -> int:
    """Truncate ``raw`` to an integer clamped to [low, high]; NaN becomes 0 and infinities become the bounds."""
    raw = float(raw)
    if math.isnan(raw):
        raw = 0.0
    raw = min(max(raw, float(low)), float(high))
    return min(max(int(raw), low), high)


@dataclass(frozen=True)
class Wrap:
    """Tag the raw value as-is."""
    tag: ValueTag

    def __call__(self, raw: Any) -> Optional[TaggedValue]:
        return TaggedValue(self.tag, raw)


@dataclass(frozen=True)
class Constant:
    """Ignore the raw value and write a fixed value."""
    value: TaggedValue

    def __call__(self, raw: Any) -> Optional[TaggedValue]:
        return self.value


@dataclass(frozen=True)
class Apply:
    """Tag ``function(raw)``; a None result suppresses the update."""
    function: Callable[[Any], Any]
    tag: ValueTag

    def __call__(self, raw: Any) -> Optional[TaggedValue]:
        result = self.function(raw)
        if result is None:
            return None
        return TaggedValue(self.tag, result)


@dataclass(frozen=True)
class ApplyOptional:
    """Tag ``function(raw)`` for slots whose payload may be None."""
    function: Callable[[Any], Any]
    tag: ValueTag

    def __call__(self, raw: Any) -> Optional[TaggedValue]:
        return TaggedValue(self.tag, self.function(raw))


@dataclass(frozen=True)
class ReplaceComponent:
    """Write ``base`` with one component replaced by the raw number."""
    tag: ValueTag
    base: Vec2
    axis: int

    def __call__(self, raw: Any) -> Optional[TaggedValue]:
        components = list(self.base)
        if self.tag is ValueTag.UVEC2:
            raw = saturating_int(raw, 0, int(U32_MAX))
        elif self.tag is ValueTag.IVEC2:
            raw = saturating_int(raw, int(I32_MIN), int(I32_MAX))
        components[self.axis] = raw
        return TaggedValue(self.tag, Vec2(*components))


@dataclass(frozen=True)
class UpdateValue:
    """Live-update callback writing one slot."""
    node_id: Any
    input_index: int
    transform: Transform

    def __call__(self, raw: Any = None) -> Message:
        value = self.transform(raw)
        if value is None:
            debug_param(f"input {self.input_index}", raw, context="rejected")
            return NoOp()
        return SetInputValue(self.node_id, self.input_index, value)


@dataclass(frozen=True)
class BatchedUpdate:
    """Live-update callback writing several slots of one node as a single message."""
    node_id: Any
    writes: Tuple[Tuple[int, Transform], ...]

    def __post_init__(self):
        object.__setattr__(self, "writes", tuple(self.writes))

    def __call__(self, raw: Any = None) -> Message:
        messages = []
        for input_index, transform in self.writes:
            value = transform(raw)
            if value is None:
                debug_param(f"input {input_index}", raw, context="rejected batch")
                return NoOp()
            messages.append(SetInputValue(self.node_id, input_index, value))
        return Batched(tuple(messages))


@dataclass(frozen=True)
class CommitValue:
    """Commit callback: closes the current history transaction."""

    def __call__(self, raw: Any = None) -> Message:
        return AddTransaction()


@dataclass(frozen=True)
class ToggleExposed:
    """Flip the exposed state of a slot."""
    node_id: Any
    input_index: int
    exposed: bool

    def __call__(self, raw: Any = None) -> Message:
        return ExposeInput(self.node_id, self.input_index, not self.exposed, start_transaction=True)


def update_value(transform: Transform, node_id: Any, input_index: int) -> UpdateValue:
    return UpdateValue(node_id, input_index, transform)


def batched_update(node_id: Any, *writes: Tuple[int, Transform]) -> BatchedUpdate:
    return BatchedUpdate(node_id, writes)
