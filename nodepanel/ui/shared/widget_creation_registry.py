"""Declarative Widget Creation Registry for nodepanel"""

import dataclasses
import logging
from functools import partial
from typing import Any, Callable, Dict, List, Optional, Tuple

from nodepanel.constants.constants import FrontendGraphDataType, U32_MAX
from nodepanel.core.context import NodePropertiesContext
from nodepanel.core.exceptions import LookupFailure
from nodepanel.core.network import DocumentNode, FieldMetadata
from nodepanel.core.tagged_value import ENUM_TAGS, Fill, FillChoice, Gradient, TaggedValue, ValueTag
from nodepanel.core.types import ConcreteType, GenericType, TypeDescriptor, unwrap
from nodepanel.ui.shared import widget_strategies as strategies
from nodepanel.ui.shared.callbacks import Apply, CommitValue, update_value
from nodepanel.ui.shared.text_parsing import format_float_list, parse_float_array4
from nodepanel.ui.shared.ui_utils import format_unsupported_tooltip
from nodepanel.ui.shared.widget_descriptors import (
    ColorInput, NumberInput, NumberMode, Separator, SeparatorType, TextInput, TextLabel, WidgetRow,
)

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class NumberOptions:
    """Numeric constraints registered for a slot: explicit bounds and an optional slider range."""
    number_min: Optional[float] = None
    number_max: Optional[float] = None
    mode_range: Optional[Tuple[float, float]] = None

    @classmethod
    def from_metadata(cls, metadata: Optional[FieldMetadata]) -> "NumberOptions":
        if metadata is None:
            return cls()
        return cls(metadata.number_min, metadata.number_max, metadata.number_mode_range)


@dataclasses.dataclass(frozen=True)
class DispatchResult:
    """
    Rows built for a slot.

    ``ok`` is False when no widget exists for the slot's type; the rows then
    hold the "unsupported" row, which is still displayed but makes the type
    ineligible as an overload candidate.
    """
    ok: bool
    rows: Tuple[WidgetRow, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "rows", tuple(self.rows))


@dataclasses.dataclass(frozen=True)
class WidgetRequest:
    """Everything a widget creator needs to know about the slot it builds for."""
    document_node: DocumentNode
    node_id: Any
    index: int
    name: str
    description: str
    concrete_type: ConcreteType
    number_input: NumberInput
    options: NumberOptions
    context: NodePropertiesContext

    def min(self, default: float) -> float:
        return self.options.number_min if self.options.number_min is not None else default

    def max(self, default: float) -> float:
        return self.options.number_max if self.options.number_max is not None else default

    def numbers(self, **changes) -> NumberInput:
        return dataclasses.replace(self.number_input, **changes)

    @property
    def slot(self) -> Tuple[DocumentNode, Any, int, str, str]:
        return self.document_node, self.node_id, self.index, self.name, self.description


Creator = Callable[[WidgetRequest], List[WidgetRow]]


def _row(widgets: List[Any]) -> List[WidgetRow]:
    return [WidgetRow(widgets)]


def _number(request: WidgetRequest, **changes) -> List[WidgetRow]:
    return _row(strategies.number_widget(*request.slot, request.numbers(**changes)))


# Aliased types (semantic refinements of a stored shape)

def _percentage(request: WidgetRequest) -> List[WidgetRow]:
    return _number(request, unit="%", min=request.min(0.0), max=request.max(100.0))


def _signed_percentage(request: WidgetRequest) -> List[WidgetRow]:
    return _number(request, unit="%", min=request.min(-100.0), max=request.max(100.0))


def _angle(request: WidgetRequest) -> List[WidgetRow]:
    return _number(request, mode=NumberMode.RANGE, unit="°", min=request.min(-180.0), max=request.max(180.0),
                   range_min=request.min(-180.0), range_max=request.max(180.0))


def _pixel_length(request: WidgetRequest) -> List[WidgetRow]:
    return _number(request, unit=" px", min=request.min(0.0))


def _length(request: WidgetRequest) -> List[WidgetRow]:
    return _number(request, min=request.min(0.0))


def _fraction(request: WidgetRequest) -> List[WidgetRow]:
    return _number(request, mode=NumberMode.RANGE, min=request.min(0.0), max=request.max(1.0),
                   range_min=request.min(0.0), range_max=request.max(1.0))


def _integer_count(request: WidgetRequest) -> List[WidgetRow]:
    return _number(request, is_integer=True, min=request.min(1.0))


def _seed_value(request: WidgetRequest) -> List[WidgetRow]:
    return _number(request, is_integer=True, min=request.min(0.0))


def _resolution(request: WidgetRequest) -> List[WidgetRow]:
    return [strategies.vec2_widget(*request.slot, x="W", y="H", unit=" px", min=request.context.config.resolution_minimum)]


ALIAS_CREATORS: Dict[str, Creator] = {
    "Percentage": _percentage,
    "SignedPercentage": _signed_percentage,
    "Angle": _angle,
    "PixelLength": _pixel_length,
    "Length": _length,
    "Fraction": _fraction,
    "IntegerCount": _integer_count,
    "SeedValue": _seed_value,
    "Resolution": _resolution,
}


# Concrete value shapes

def _choice_to_fill(existing: Optional[Gradient], choice: FillChoice) -> Fill:
    return choice.to_fill(existing)


def _with_stops(gradient: Gradient, choice: FillChoice) -> Optional[Gradient]:
    stops = choice.as_gradient()
    return dataclasses.replace(gradient, stops=stops) if stops is not None else None


def _fill_swatch(request: WidgetRequest) -> List[WidgetRow]:
    """Standalone fill slot: one swatch that keeps the gradient geometry when stops are edited."""
    widgets = strategies.start_widgets(*request.slot, FrontendGraphDataType.GENERAL, True)
    match strategies.literal_value(request.document_node, request.index):
        case TaggedValue(tag=ValueTag.FILL, value=fill):
            existing = fill.as_gradient()
            widgets.extend([
                Separator(SeparatorType.UNRELATED),
                ColorInput(
                    value=FillChoice.from_fill(fill),
                    on_update=update_value(Apply(partial(_choice_to_fill, existing), ValueTag.FILL), request.node_id, request.index),
                    on_commit=CommitValue(),
                ),
            ])
    return _row(widgets)


def _gradient_swatch(request: WidgetRequest) -> List[WidgetRow]:
    widgets = strategies.start_widgets(*request.slot, FrontendGraphDataType.GENERAL, True)
    match strategies.literal_value(request.document_node, request.index):
        case TaggedValue(tag=ValueTag.GRADIENT, value=gradient):
            widgets.extend([
                Separator(SeparatorType.UNRELATED),
                ColorInput(
                    value=FillChoice(stops=gradient.stops),
                    allow_none=False,
                    on_update=update_value(Apply(partial(_with_stops, gradient), ValueTag.GRADIENT), request.node_id, request.index),
                    on_commit=CommitValue(),
                ),
            ])
    return _row(widgets)


def _float_array4(request: WidgetRequest) -> List[WidgetRow]:
    widgets = strategies.start_widgets(*request.slot, FrontendGraphDataType.NUMBER, True)
    match strategies.literal_value(request.document_node, request.index):
        case TaggedValue(tag=ValueTag.F64_ARRAY4, value=values):
            widgets.extend([
                Separator(SeparatorType.UNRELATED),
                TextInput(
                    value=format_float_list(values),
                    on_update=update_value(Apply(parse_float_array4, ValueTag.F64_ARRAY4), request.node_id, request.index),
                    on_commit=CommitValue(),
                ),
            ])
    return _row(widgets)


def _font(request: WidgetRequest) -> List[WidgetRow]:
    font_widgets, style_widgets = strategies.font_inputs(*request.slot)
    rows = [WidgetRow(font_widgets)]
    if style_widgets is not None:
        rows.append(WidgetRow(style_widgets))
    return rows


def _enum_creator(tag: ValueTag) -> Creator:
    return lambda request: [strategies.enum_widget(*request.slot, tag)]


IDENTITY_CREATORS: Dict[ValueTag, Creator] = {
    ValueTag.BOOL: lambda r: _row(strategies.bool_widget(*r.slot)),
    ValueTag.F64: lambda r: _number(r, min=r.min(float("-inf")), max=r.max(float("inf"))),
    ValueTag.OPTIONAL_F64: lambda r: _number(r, min=r.min(float("-inf")), max=r.max(float("inf"))),
    ValueTag.U32: lambda r: _number(r, is_integer=True, min=r.min(0.0), max=r.max(U32_MAX)),
    ValueTag.U64: lambda r: _number(r, is_integer=True, min=r.min(0.0)),
    ValueTag.STRING: lambda r: _row(strategies.text_widget(*r.slot)),
    ValueTag.COLOR: lambda r: [strategies.color_widget(*r.slot, ColorInput(allow_none=False))],
    ValueTag.OPTIONAL_COLOR: lambda r: [strategies.color_widget(*r.slot, ColorInput(allow_none=True))],
    ValueTag.GRADIENT_STOPS: lambda r: [strategies.color_widget(*r.slot, ColorInput(allow_none=False))],
    ValueTag.GRADIENT: _gradient_swatch,
    ValueTag.FILL: _fill_swatch,
    ValueTag.DVEC2: lambda r: [strategies.vec2_widget(*r.slot)],
    ValueTag.IVEC2: lambda r: [strategies.vec2_widget(*r.slot)],
    ValueTag.UVEC2: lambda r: [strategies.vec2_widget(*r.slot, min=0.0)],
    ValueTag.VEC_F64: lambda r: _row(strategies.vec_f64_input(*r.slot)),
    ValueTag.VEC_DVEC2: lambda r: _row(strategies.vec_dvec2_input(*r.slot)),
    ValueTag.F64_ARRAY4: _float_array4,
    ValueTag.FONT: _font,
    ValueTag.CURVE: lambda r: [strategies.curves_widget(*r.slot)],
    ValueTag.FOOTPRINT: lambda r: strategies.footprint_widget(*r.slot, r.context.config.footprint_resolution_max),
    ValueTag.VECTOR_DATA: lambda r: _row(strategies.graph_data_widget(*r.slot, FrontendGraphDataType.VECTOR_DATA)),
    ValueTag.RASTER_DATA: lambda r: _row(strategies.graph_data_widget(*r.slot, FrontendGraphDataType.RASTER)),
    ValueTag.GRAPHIC_GROUP: lambda r: _row(strategies.graph_data_widget(*r.slot, FrontendGraphDataType.GROUP)),
    **{tag: _enum_creator(tag) for tag in ENUM_TAGS},
}


def unsupported_row(request: WidgetRequest) -> WidgetRow:
    """Label row for a slot whose type has no widget; the tooltip names the type."""
    widgets = strategies.start_widgets(*request.slot, FrontendGraphDataType.GENERAL, True)
    widgets.extend([
        Separator(SeparatorType.UNRELATED),
        TextLabel("-", tooltip=format_unsupported_tooltip(request.concrete_type.name)),
    ])
    return WidgetRow(widgets)


@dataclasses.dataclass
class WidgetRegistry:
    """Widget creation registry dispatching on alias first, then on the stored value tag."""
    _aliases: Dict[str, Creator] = dataclasses.field(default_factory=dict)
    _identities: Dict[ValueTag, Creator] = dataclasses.field(default_factory=dict)

    def register(self, alias_or_tag: "str | ValueTag", creator_func: Creator) -> None:
        """Register widget creator using declarative dispatch."""
        target_dict = self._identities if isinstance(alias_or_tag, ValueTag) else self._aliases
        target_dict[alias_or_tag] = creator_func

    def supports(self, descriptor: TypeDescriptor) -> bool:
        """Whether a widget exists for the type, without building one."""
        inner = unwrap(descriptor)
        if isinstance(inner, GenericType):
            return True
        return (inner.alias in self._aliases) or (inner.identity in self._identities)

    def dispatch(self, node_id: Any, index: int, descriptor: TypeDescriptor,
                 number_options: NumberOptions, context: NodePropertiesContext) -> DispatchResult:
        """Build the rows for slot ``index`` of ``node_id`` given its required type."""
        network = context.network
        try:
            name = network.input_name(node_id, index)
            description = network.input_description(node_id, index)
            document_node = network.node(node_id)
        except LookupFailure as e:
            logger.warning(f"A widget failed to be built for node {node_id}, index {index}: {e}")
            return DispatchResult(ok=False)

        descriptor = unwrap(descriptor)
        if isinstance(descriptor, GenericType):
            return DispatchResult(ok=True, rows=[WidgetRow([TextLabel("Generic type (not supported)")])])

        number_input = NumberInput()
        if number_options.mode_range is not None:
            range_start, range_end = number_options.mode_range
            number_options = dataclasses.replace(number_options, number_min=range_start, number_max=range_end)
            number_input = NumberInput(mode=NumberMode.RANGE, min=range_start, max=range_end,
                                       range_min=range_start, range_max=range_end)

        request = WidgetRequest(document_node, node_id, index, name, description, descriptor,
                                number_input, number_options, context)

        # Functional dispatch with early return pattern
        if creator := self._aliases.get(descriptor.alias):
            return DispatchResult(ok=True, rows=creator(request))

        if creator := self._identities.get(descriptor.identity):
            return DispatchResult(ok=True, rows=creator(request))

        # Fail-soft fallback: the row is still shown
        logger.debug(f"No widget creator registered for type: {descriptor.name}")
        return DispatchResult(ok=False, rows=[unsupported_row(request)])


def create_widget_registry() -> WidgetRegistry:
    """Create the registry of built-in alias and value-shape creators."""
    registry = WidgetRegistry()
    for alias, creator in ALIAS_CREATORS.items():
        registry.register(alias, creator)
    for tag, creator in IDENTITY_CREATORS.items():
        registry.register(tag, creator)
    return registry


DEFAULT_REGISTRY = create_widget_registry()


def property_from_type(node_id: Any, index: int, descriptor: TypeDescriptor,
                       number_options: NumberOptions, context: NodePropertiesContext) -> DispatchResult:
    """Dispatch through the default registry."""
    return DEFAULT_REGISTRY.dispatch(node_id, index, descriptor, number_options, context)
