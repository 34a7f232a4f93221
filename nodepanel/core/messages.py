"""
Update messages produced by bound control callbacks.

The panel never mutates the graph. Callbacks return these messages and the
host's dispatch fabric applies them; a ``Batched`` message is applied as one
indivisible update.
"""

from dataclasses import dataclass
from typing import Any, Tuple, Union

from nodepanel.core.tagged_value import TaggedValue


@dataclass(frozen=True)
class SetInputValue:
    node_id: Any
    input_index: int
    value: TaggedValue


@dataclass(frozen=True)
class ExposeInput:
    node_id: Any
    input_index: int
    set_to_exposed: bool
    start_transaction: bool = True


@dataclass(frozen=True)
class AddTransaction:
    """Marks a history boundary; emitted when the user commits an edit."""
    pass


@dataclass(frozen=True)
class NoOp:
    """Suppressed update, e.g. free text that failed to parse."""
    pass


@dataclass(frozen=True)
class Batched:
    messages: Tuple["Message", ...]

    def __post_init__(self):
        object.__setattr__(self, "messages", tuple(self.messages))


Message = Union[SetInputValue, ExposeInput, AddTransaction, NoOp, Batched]
