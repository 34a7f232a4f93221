"""
Toolkit-neutral control descriptors.

The panel produces a tree of these descriptors and the host renders them with
its own widget toolkit. Interactive descriptors carry ``on_update`` (live
edit) and ``on_commit`` (history boundary) callbacks from
``nodepanel.ui.shared.callbacks``.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional, Tuple

from nodepanel.constants.constants import FrontendGraphDataType
from nodepanel.core.tagged_value import Curve, FillChoice

Callback = Optional[Callable[[Any], Any]]


class SeparatorType(Enum):
    RELATED = "Related"
    UNRELATED = "Unrelated"
    SECTION = "Section"


class NumberMode(Enum):
    INCREMENT = "Increment"
    RANGE = "Range"


@dataclass(frozen=True)
class TextLabel:
    text: str
    tooltip: str = ""
    bold: bool = False


@dataclass(frozen=True)
class Separator:
    separator_type: SeparatorType = SeparatorType.UNRELATED


@dataclass(frozen=True)
class ParameterExposeButton:
    exposed: bool
    data_type: FrontendGraphDataType = FrontendGraphDataType.GENERAL
    tooltip: str = ""
    on_update: Callback = None


@dataclass(frozen=True)
class NumberInput:
    """
    Numeric field.

    ``min``/``max`` clamp entered values. In range mode the control is drawn
    as a slider spanning ``range_min``..``range_max``. ``default`` is the
    value restored when the user resets the field.
    """
    value: Optional[float] = None
    label: str = ""
    min: Optional[float] = None
    max: Optional[float] = None
    mode: NumberMode = NumberMode.INCREMENT
    range_min: Optional[float] = None
    range_max: Optional[float] = None
    step: float = 1.0
    unit: str = ""
    is_integer: bool = False
    disabled: bool = False
    default: Optional[float] = None
    tooltip: str = ""
    on_update: Callback = None
    on_commit: Callback = None


@dataclass(frozen=True)
class TextInput:
    value: str = ""
    label: str = ""
    disabled: bool = False
    tooltip: str = ""
    on_update: Callback = None
    on_commit: Callback = None


@dataclass(frozen=True)
class TextAreaInput:
    value: str = ""
    disabled: bool = False
    tooltip: str = ""
    on_update: Callback = None
    on_commit: Callback = None


@dataclass(frozen=True)
class CheckboxInput:
    checked: bool = False
    disabled: bool = False
    tooltip: str = ""
    on_update: Callback = None
    on_commit: Callback = None


@dataclass(frozen=True)
class ColorInput:
    value: FillChoice = field(default_factory=FillChoice)
    allow_none: bool = True
    disabled: bool = False
    tooltip: str = ""
    on_update: Callback = None
    on_commit: Callback = None


@dataclass(frozen=True)
class MenuListEntry:
    value: Enum
    label: str


@dataclass(frozen=True)
class DropdownInput:
    entries: Tuple[Tuple[MenuListEntry, ...], ...] = ()
    selected_index: Optional[int] = None
    disabled: bool = False
    tooltip: str = ""
    on_update: Callback = None
    on_commit: Callback = None


@dataclass(frozen=True)
class RadioEntryData:
    value: Any
    label: str = ""
    icon: Optional[str] = None
    tooltip: str = ""
    on_update: Callback = None
    on_commit: Callback = None


@dataclass(frozen=True)
class RadioInput:
    entries: Tuple[RadioEntryData, ...] = ()
    selected_index: Optional[int] = None
    disabled: bool = False


@dataclass(frozen=True)
class CurveInput:
    value: Curve = field(default_factory=Curve)
    on_update: Callback = None
    on_commit: Callback = None


@dataclass(frozen=True)
class FontInput:
    font_family: str
    font_style: str
    is_style_picker: bool = False
    on_update: Callback = None
    on_commit: Callback = None


@dataclass(frozen=True)
class IconButton:
    icon: str
    tooltip: str = ""
    disabled: bool = False
    on_update: Callback = None


@dataclass(frozen=True)
class WidgetRow:
    widgets: Tuple[Any, ...] = ()
    tooltip: str = ""

    def __post_init__(self):
        object.__setattr__(self, "widgets", tuple(self.widgets))


@dataclass(frozen=True)
class Section:
    """Properties section for one node, rebuilt on every refresh."""
    name: str
    description: str
    visible: bool
    pinned: bool
    node_id: Any
    rows: Tuple[WidgetRow, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "rows", tuple(self.rows))
