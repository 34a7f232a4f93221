"""
Per-type widget constructors.

Each constructor builds the controls for one input slot: the expose toggle
and label (``start_widgets``) followed by the value control, which is only
present while the slot holds a literal value. Constructors read the slot's
current ``TaggedValue`` and bind callbacks that write a value with the same
tag back to the slot.
"""

import dataclasses
import logging
from functools import partial
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from nodepanel.constants.constants import (
    CentroidType, FrontendGraphDataType, I32_MAX, I32_MIN, MAX_SAFE_INTEGER, U32_MAX,
)
from nodepanel.core.network import DocumentNode, NodeInput
from nodepanel.core.tagged_value import (
    ENUM_TAGS, Color, Font, Footprint, FillChoice, GradientStops, TaggedValue, ValueTag, Vec2,
)
from nodepanel.ui.shared.callbacks import (
    Apply, ApplyOptional, CommitValue, ReplaceComponent, ToggleExposed, Wrap, saturating_int, update_value,
)
from nodepanel.ui.shared.enum_display_formatter import EnumDisplayFormatter
from nodepanel.ui.shared.text_parsing import (
    format_float_list, format_point_list, parse_float_list, parse_point_list,
)
from nodepanel.ui.shared.widget_descriptors import (
    CheckboxInput, ColorInput, CurveInput, DropdownInput, FontInput, MenuListEntry, NumberInput,
    ParameterExposeButton, RadioEntryData, RadioInput, Separator, SeparatorType, TextAreaInput,
    TextInput, TextLabel, WidgetRow,
)

logger = logging.getLogger(__name__)

INVALID_INDEX_WARNING = "A widget failed to be built because its node's input index is invalid."


@dataclasses.dataclass(frozen=True)
class WidgetConfig:
    """Immutable widget configuration constants."""
    VEC2_MAX: float = MAX_SAFE_INTEGER
    OPTIONAL_F64_ENABLED_VALUE: float = 100.0
    FOOTPRINT_RESOLUTION_MIN: int = 1
    EXPOSE_TOOLTIP: str = "Expose this parameter as a node input in the graph"


# Row tooltips for enum controls
ENUM_TOOLTIPS: Dict[ValueTag, str] = {
    ValueTag.BLEND_MODE: "Formula used for blending",
    ValueTag.REAL_TIME_MODE: "Real Time Mode",
    ValueTag.RED_GREEN_BLUE: "Color Channel",
    ValueTag.RED_GREEN_BLUE_ALPHA: "Color Channel",
    ValueTag.XY: "X or Y Component of Vector2",
    ValueTag.NOISE_TYPE: "Style of noise pattern",
    ValueTag.FRACTAL_TYPE: "Style of layered levels of the noise pattern",
    ValueTag.CELLULAR_DISTANCE_FUNCTION: "Distance function used by the cellular noise",
    ValueTag.CELLULAR_RETURN_TYPE: "Return type of the cellular noise",
    ValueTag.DOMAIN_WARP_TYPE: "Type of domain warp",
    ValueTag.LUMINANCE_CALCULATION: "Formula used to calculate the luminance of a pixel",
    ValueTag.RELATIVE_ABSOLUTE: "Whether adjustments are relative to the current values or absolute",
    ValueTag.FILL_TYPE: "Paint the shape with a solid color or a gradient",
    ValueTag.GRADIENT_TYPE: "Shape along which the gradient colors are spread",
    ValueTag.BOOLEAN_OPERATION: "Operation used to combine the shapes",
    ValueTag.GRID_TYPE: "Arrangement of the grid cells",
    ValueTag.LINE_CAP: "Shape drawn at the open ends of the stroke",
    ValueTag.LINE_JOIN: "Shape drawn where stroke segments meet",
    ValueTag.ARC_TYPE: "How the ends of the arc are closed",
    ValueTag.CENTROID_TYPE: "Whether the center of mass is measured over the area or the perimeter",
}

# Enum slots rendered as radio groups; all others are dropdowns
RADIO_ENUM_TAGS = frozenset({
    ValueTag.BOOLEAN_OPERATION,
    ValueTag.GRID_TYPE,
    ValueTag.LINE_CAP,
    ValueTag.LINE_JOIN,
    ValueTag.ARC_TYPE,
    ValueTag.CENTROID_TYPE,
})

RADIO_ENTRY_TOOLTIPS: Dict[Any, str] = {
    CentroidType.AREA: "Center of mass for the interior area of the shape",
    CentroidType.LENGTH: "Center of mass for the perimeter arc length of the shape",
}


def input_at(document_node: DocumentNode, index: int) -> Optional[NodeInput]:
    """Slot ``index`` of the node, logging a warning when it does not exist."""
    if 0 <= index < len(document_node.inputs):
        return document_node.inputs[index]
    logger.warning(INVALID_INDEX_WARNING)
    return None


def literal_value(document_node: DocumentNode, index: int) -> Optional[TaggedValue]:
    """Literal value shown in the panel for slot ``index``, or None if it is exposed or missing."""
    node_input = input_at(document_node, index)
    return node_input.as_non_exposed_value() if node_input is not None else None


def expose_widget(node_id: Any, index: int, data_type: FrontendGraphDataType, exposed: bool) -> ParameterExposeButton:
    return ParameterExposeButton(
        exposed=exposed,
        data_type=data_type,
        tooltip=WidgetConfig.EXPOSE_TOOLTIP,
        on_update=ToggleExposed(node_id, index, exposed),
    )


def add_blank_assist(widgets: List[Any]) -> None:
    """Pad a row to the width of an assist button so value controls line up."""
    widgets.extend([Separator(SeparatorType.SECTION), Separator(SeparatorType.UNRELATED)])


def start_widgets(document_node: DocumentNode, node_id: Any, index: int, name: str, description: str,
                  data_type: FrontendGraphDataType, blank_assist: bool) -> List[Any]:
    """Expose toggle and label that begin every slot row; empty if the slot does not exist."""
    node_input = input_at(document_node, index)
    if node_input is None:
        return []
    widgets = [expose_widget(node_id, index, data_type, node_input.is_exposed()), TextLabel(name, tooltip=description)]
    if blank_assist:
        add_blank_assist(widgets)
    return widgets


def _blank_row_start() -> List[Any]:
    widgets: List[Any] = [TextLabel("")]
    add_blank_assist(widgets)
    return widgets


def text_widget(document_node: DocumentNode, node_id: Any, index: int, name: str, description: str,
                blank_assist: bool = True, multiline: bool = False) -> List[Any]:
    widgets = start_widgets(document_node, node_id, index, name, description, FrontendGraphDataType.GENERAL, blank_assist)
    if input_at(document_node, index) is None:
        return []
    match literal_value(document_node, index):
        case TaggedValue(tag=ValueTag.STRING, value=text):
            control = TextAreaInput if multiline else TextInput
            widgets.extend([
                Separator(SeparatorType.UNRELATED),
                control(value=text, on_update=update_value(Wrap(ValueTag.STRING), node_id, index), on_commit=CommitValue()),
            ])
    return widgets


def bool_widget(document_node: DocumentNode, node_id: Any, index: int, name: str, description: str,
                checkbox_input: CheckboxInput = CheckboxInput(), blank_assist: bool = True) -> List[Any]:
    widgets = start_widgets(document_node, node_id, index, name, description, FrontendGraphDataType.GENERAL, blank_assist)
    if input_at(document_node, index) is None:
        return []
    match literal_value(document_node, index):
        case TaggedValue(tag=ValueTag.BOOL, value=checked):
            widgets.extend([
                Separator(SeparatorType.UNRELATED),
                dataclasses.replace(
                    checkbox_input,
                    checked=checked,
                    on_update=update_value(Wrap(ValueTag.BOOL), node_id, index),
                    on_commit=CommitValue(),
                ),
            ])
    return widgets


def _saturating_uint(bits: int, raw: float) -> int:
    return saturating_int(raw, 0, 2 ** bits - 1)


def _optional_enabled(checked: bool) -> Any:
    return WidgetConfig.OPTIONAL_F64_ENABLED_VALUE if checked else None


def number_widget(document_node: DocumentNode, node_id: Any, index: int, name: str, description: str,
                  number_props: NumberInput = NumberInput(), blank_assist: bool = True) -> List[Any]:
    """
    Number field for f64, u32, u64, optional f64 and DVec2 slots.

    An optional f64 gets an enable checkbox in front of the field; the field is
    disabled while the value is None. A DVec2 slot shows its ``y`` component
    and is written back as an f64.
    """
    widgets = start_widgets(document_node, node_id, index, name, description, FrontendGraphDataType.NUMBER, blank_assist)
    if input_at(document_node, index) is None:
        return []

    def field(value, transform, **changes):
        return dataclasses.replace(
            number_props, value=value, on_update=update_value(transform, node_id, index), on_commit=CommitValue(), **changes
        )

    match literal_value(document_node, index):
        case TaggedValue(tag=ValueTag.F64, value=x):
            widgets.extend([Separator(SeparatorType.UNRELATED), field(x, Wrap(ValueTag.F64))])
        case TaggedValue(tag=ValueTag.U32, value=x):
            widgets.extend([Separator(SeparatorType.UNRELATED), field(float(x), Apply(partial(_saturating_uint, 32), ValueTag.U32))])
        case TaggedValue(tag=ValueTag.U64, value=x):
            widgets.extend([Separator(SeparatorType.UNRELATED), field(float(x), Apply(partial(_saturating_uint, 64), ValueTag.U64))])
        case TaggedValue(tag=ValueTag.OPTIONAL_F64, value=x):
            widgets.extend([
                Separator(SeparatorType.UNRELATED),
                Separator(SeparatorType.RELATED),
                CheckboxInput(
                    checked=x is not None,
                    on_update=update_value(ApplyOptional(_optional_enabled, ValueTag.OPTIONAL_F64), node_id, index),
                    on_commit=CommitValue(),
                ),
                Separator(SeparatorType.RELATED),
                Separator(SeparatorType.UNRELATED),
                field(x, Wrap(ValueTag.OPTIONAL_F64), disabled=x is None),
            ])
        case TaggedValue(tag=ValueTag.DVEC2, value=vec):
            # y is kept so a grid's rectangular height carries over to its isometric spacing
            widgets.extend([Separator(SeparatorType.UNRELATED), field(vec.y, Wrap(ValueTag.F64))])
    return widgets


def vec2_widget(document_node: DocumentNode, node_id: Any, index: int, name: str, description: str,
                x: str = "X", y: str = "Y", unit: str = "", min: Optional[float] = None,
                blank_assist: bool = True) -> WidgetRow:
    """
    Pair of number fields for DVec2, IVec2 and UVec2 slots.

    An f64 slot is shown in both fields and is written back as a DVec2 of the
    edited component and the old scalar.
    """
    widgets = start_widgets(document_node, node_id, index, name, description, FrontendGraphDataType.NUMBER, False)
    if blank_assist:
        add_blank_assist(widgets)
    if input_at(document_node, index) is None:
        return WidgetRow()

    def pair(tag: ValueTag, base: Vec2, is_integer: bool, default_min: float,
             default_max: float = WidgetConfig.VEC2_MAX) -> List[Any]:
        common = dict(unit=unit, is_integer=is_integer, min=default_min if min is None else min,
                      max=default_max, on_commit=CommitValue())
        return [
            Separator(SeparatorType.UNRELATED),
            NumberInput(value=float(base.x), label=x,
                        on_update=update_value(ReplaceComponent(tag, base, 0), node_id, index), **common),
            Separator(SeparatorType.RELATED),
            NumberInput(value=float(base.y), label=y,
                        on_update=update_value(ReplaceComponent(tag, base, 1), node_id, index), **common),
        ]

    match literal_value(document_node, index):
        case TaggedValue(tag=ValueTag.DVEC2, value=vec):
            widgets.extend(pair(ValueTag.DVEC2, vec, False, -WidgetConfig.VEC2_MAX))
        case TaggedValue(tag=ValueTag.IVEC2, value=vec):
            widgets.extend(pair(ValueTag.IVEC2, vec, True, I32_MIN, I32_MAX))
        case TaggedValue(tag=ValueTag.UVEC2, value=vec):
            widgets.extend(pair(ValueTag.UVEC2, vec, True, 0.0, U32_MAX))
        case TaggedValue(tag=ValueTag.F64, value=scalar):
            widgets.extend(pair(ValueTag.DVEC2, Vec2(scalar, scalar), False, -WidgetConfig.VEC2_MAX))
    return WidgetRow(widgets)


def vec_f64_input(document_node: DocumentNode, node_id: Any, index: int, name: str, description: str,
                  text_input: TextInput = TextInput(), blank_assist: bool = True) -> List[Any]:
    widgets = start_widgets(document_node, node_id, index, name, description, FrontendGraphDataType.NUMBER, blank_assist)
    if input_at(document_node, index) is None:
        return []
    match literal_value(document_node, index):
        case TaggedValue(tag=ValueTag.VEC_F64, value=values):
            widgets.extend([
                Separator(SeparatorType.UNRELATED),
                dataclasses.replace(
                    text_input,
                    value=format_float_list(values),
                    on_update=update_value(Apply(parse_float_list, ValueTag.VEC_F64), node_id, index),
                    on_commit=CommitValue(),
                ),
            ])
    return widgets


def vec_dvec2_input(document_node: DocumentNode, node_id: Any, index: int, name: str, description: str,
                    text_input: TextInput = TextInput(), blank_assist: bool = True) -> List[Any]:
    widgets = start_widgets(document_node, node_id, index, name, description, FrontendGraphDataType.NUMBER, blank_assist)
    if input_at(document_node, index) is None:
        return []
    match literal_value(document_node, index):
        case TaggedValue(tag=ValueTag.VEC_DVEC2, value=points):
            widgets.extend([
                Separator(SeparatorType.UNRELATED),
                dataclasses.replace(
                    text_input,
                    value=format_point_list(points),
                    on_update=update_value(Apply(parse_point_list, ValueTag.VEC_DVEC2), node_id, index),
                    on_commit=CommitValue(),
                ),
            ])
    return widgets


def _font_from_picker(raw: Any) -> Font:
    if isinstance(raw, Font):
        return raw
    family, style = raw
    return Font(family, style)


def font_inputs(document_node: DocumentNode, node_id: Any, index: int, name: str, description: str,
                blank_assist: bool = True) -> Tuple[List[Any], Optional[List[Any]]]:
    """Family picker row and, when the slot holds a font, a style picker row."""
    first_widgets = start_widgets(document_node, node_id, index, name, description, FrontendGraphDataType.GENERAL, blank_assist)
    if input_at(document_node, index) is None:
        return [], None

    match literal_value(document_node, index):
        case TaggedValue(tag=ValueTag.FONT, value=font):
            on_update = update_value(Apply(_font_from_picker, ValueTag.FONT), node_id, index)
            first_widgets.extend([
                Separator(SeparatorType.UNRELATED),
                FontInput(font.font_family, font.font_style, on_update=on_update, on_commit=CommitValue()),
            ])
            second_widgets = _blank_row_start()
            second_widgets.extend([
                Separator(SeparatorType.UNRELATED),
                FontInput(font.font_family, font.font_style, is_style_picker=True, on_update=on_update, on_commit=CommitValue()),
            ])
            return first_widgets, second_widgets
    return first_widgets, None


def graph_data_widget(document_node: DocumentNode, node_id: Any, index: int, name: str, description: str,
                      data_type: FrontendGraphDataType, blank_assist: bool = True) -> List[Any]:
    """Label row for vector, raster and group data, which only arrive through wires."""
    kind = {
        FrontendGraphDataType.VECTOR_DATA: "Vector",
        FrontendGraphDataType.RASTER: "Raster",
        FrontendGraphDataType.GROUP: "Group",
    }[data_type]
    widgets = start_widgets(document_node, node_id, index, name, description, data_type, blank_assist)
    widgets.extend([Separator(SeparatorType.UNRELATED), TextLabel(f"{kind} data is supplied through the node graph")])
    return widgets


def _solid_or_black(choice: FillChoice) -> Color:
    return choice.as_solid() or Color.BLACK


def _solid_or_none(choice: FillChoice) -> Optional[Color]:
    return choice.as_solid()


def _stops_or_default(choice: FillChoice) -> GradientStops:
    stops = choice.as_gradient()
    return stops if stops is not None else GradientStops()


def color_widget(document_node: DocumentNode, node_id: Any, index: int, name: str, description: str,
                 color_button: ColorInput = ColorInput(), blank_assist: bool = True) -> WidgetRow:
    """Color swatch for Color, optional Color and GradientStops slots."""
    widgets = start_widgets(document_node, node_id, index, name, description, FrontendGraphDataType.GENERAL, blank_assist)
    tagged = literal_value(document_node, index)
    if tagged is None:
        return WidgetRow(widgets)

    widgets.append(Separator(SeparatorType.UNRELATED))
    match tagged:
        case TaggedValue(tag=ValueTag.COLOR, value=color):
            choice, transform = FillChoice(color=color), Apply(_solid_or_black, ValueTag.COLOR)
        case TaggedValue(tag=ValueTag.OPTIONAL_COLOR, value=color):
            choice, transform = FillChoice(color=color), ApplyOptional(_solid_or_none, ValueTag.OPTIONAL_COLOR)
        case TaggedValue(tag=ValueTag.GRADIENT_STOPS, value=stops):
            choice, transform = FillChoice(stops=stops), Apply(_stops_or_default, ValueTag.GRADIENT_STOPS)
        case _:
            return WidgetRow(widgets)
    widgets.append(dataclasses.replace(
        color_button, value=choice, on_update=update_value(transform, node_id, index), on_commit=CommitValue()
    ))
    return WidgetRow(widgets)


def curves_widget(document_node: DocumentNode, node_id: Any, index: int, name: str, description: str,
                  blank_assist: bool = True) -> WidgetRow:
    widgets = start_widgets(document_node, node_id, index, name, description, FrontendGraphDataType.GENERAL, blank_assist)
    if input_at(document_node, index) is None:
        return WidgetRow()
    match literal_value(document_node, index):
        case TaggedValue(tag=ValueTag.CURVE, value=curve):
            widgets.extend([
                Separator(SeparatorType.UNRELATED),
                CurveInput(curve, on_update=update_value(Wrap(ValueTag.CURVE), node_id, index), on_commit=CommitValue()),
            ])
    return WidgetRow(widgets)


# Footprint geometry

def _footprint_geometry(footprint: Footprint) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Top-left corner, bounds and oversampling factor of a footprint."""
    top_left = footprint.transform_point2((0.0, 0.0))
    bounds = footprint.scale()
    resolution = np.array(footprint.resolution, dtype=float)
    safe_bounds = np.where(bounds == 0.0, 1.0, bounds)
    oversample = np.where(bounds == 0.0, 1.0, resolution / safe_bounds)
    return top_left, bounds, oversample


def _as_uvec2(values: np.ndarray) -> Vec2:
    clipped = np.clip(np.nan_to_num(values, nan=0.0, posinf=2.0 ** 32 - 1), 0, 2 ** 32 - 1)
    return Vec2(int(clipped[0]), int(clipped[1]))


def _footprint_with(footprint: Footprint, offset, scale) -> Footprint:
    _, _, oversample = _footprint_geometry(footprint)
    scale = np.asarray(scale, dtype=float)
    return Footprint(
        transform=Footprint.from_scale_angle_translation(scale, 0.0, offset),
        resolution=_as_uvec2(oversample * scale),
    )


def footprint_moved(footprint: Footprint, axis: int, raw: float) -> Footprint:
    """Footprint whose top-left corner has ``axis`` set to ``raw``."""
    top_left, bounds, _ = _footprint_geometry(footprint)
    offset = top_left.copy()
    offset[axis] = raw
    return _footprint_with(footprint, offset, bounds)


def footprint_resized(footprint: Footprint, axis: int, raw: float) -> Footprint:
    """Footprint whose size along ``axis`` is ``raw``, keeping its oversampling."""
    top_left, bounds, _ = _footprint_geometry(footprint)
    scale = bounds.copy()
    scale[axis] = raw
    return _footprint_with(footprint, top_left, scale)


def footprint_rescaled(footprint: Footprint, resolution_max: int, raw: Optional[float]) -> Footprint:
    """Footprint rendered at ``raw`` percent of its bounds, clamped per axis."""
    _, bounds, _ = _footprint_geometry(footprint)
    percent = 100.0 if raw is None else raw
    resolution = _as_uvec2(bounds * percent / 100.0)
    clamped = Vec2(*(min(max(v, WidgetConfig.FOOTPRINT_RESOLUTION_MIN), resolution_max) for v in resolution))
    return Footprint(transform=footprint.transform, resolution=clamped)


def footprint_widget(document_node: DocumentNode, node_id: Any, index: int, name: str, description: str,
                     resolution_max: int) -> List[WidgetRow]:
    """Position, size and resolution rows for a footprint slot."""
    if input_at(document_node, index) is None:
        return []
    location_widgets = start_widgets(document_node, node_id, index, name, description, FrontendGraphDataType.GENERAL, True)
    location_widgets.append(Separator(SeparatorType.UNRELATED))
    scale_widgets = _blank_row_start() + [Separator(SeparatorType.UNRELATED)]
    resolution_widgets = _blank_row_start() + [Separator(SeparatorType.UNRELATED)]

    match literal_value(document_node, index):
        case TaggedValue(tag=ValueTag.FOOTPRINT, value=footprint):
            top_left, bounds, oversample = _footprint_geometry(footprint)

            def field(value, label, function, unit=" px"):
                return NumberInput(
                    value=float(value), label=label, unit=unit,
                    on_update=update_value(Apply(function, ValueTag.FOOTPRINT), node_id, index),
                    on_commit=CommitValue(),
                )

            location_widgets.extend([
                field(top_left[0], "X", partial(footprint_moved, footprint, 0)),
                Separator(SeparatorType.RELATED),
                field(top_left[1], "Y", partial(footprint_moved, footprint, 1)),
            ])
            scale_widgets.extend([
                field(bounds[0], "W", partial(footprint_resized, footprint, 0)),
                Separator(SeparatorType.RELATED),
                field(bounds[1], "H", partial(footprint_resized, footprint, 1)),
            ])
            resolution_widgets.append(
                field(oversample[0] * 100.0, "Resolution", partial(footprint_rescaled, footprint, resolution_max), unit="%")
            )

    return [WidgetRow(location_widgets), WidgetRow(scale_widgets), WidgetRow(resolution_widgets)]


def enum_widget(document_node: DocumentNode, node_id: Any, index: int, name: str, description: str,
                tag: ValueTag, disabled: bool = False, blank_assist: bool = True) -> WidgetRow:
    """Dropdown or radio group listing the members of the enum stored under ``tag``."""
    enum_type = ENUM_TAGS[tag]
    widgets = start_widgets(document_node, node_id, index, name, description, FrontendGraphDataType.GENERAL, blank_assist)
    if input_at(document_node, index) is None:
        return WidgetRow()

    tagged = literal_value(document_node, index)
    if tagged is not None and tagged.tag is tag:
        on_update = update_value(Wrap(tag), node_id, index)
        sections = EnumDisplayFormatter.get_sections(enum_type)
        selected_index = EnumDisplayFormatter.get_selected_index(sections, tagged.value)
        if tag in RADIO_ENUM_TAGS:
            control = radio_input(sections[0], selected_index, on_update, disabled)
        else:
            control = dropdown_input(sections, selected_index, on_update, disabled)
        widgets.extend([Separator(SeparatorType.UNRELATED), control])
    return WidgetRow(widgets, tooltip=ENUM_TOOLTIPS.get(tag, ""))


def dropdown_input(sections, selected_index: Optional[int], on_update, disabled: bool = False) -> DropdownInput:
    """Dropdown listing enum members by section; every entry shares ``on_update``."""
    return DropdownInput(
        entries=tuple(
            tuple(MenuListEntry(member, EnumDisplayFormatter.get_display_text(member)) for member in section)
            for section in sections
        ),
        selected_index=selected_index,
        disabled=disabled,
        on_update=on_update,
        on_commit=CommitValue(),
    )


def radio_input(members, selected_index: Optional[int], on_update, disabled: bool = False) -> RadioInput:
    """Radio group of enum members; icon entries show no label and use it as their tooltip."""
    entries = []
    for member in members:
        icon = EnumDisplayFormatter.get_icon(member)
        label = EnumDisplayFormatter.get_display_text(member)
        entries.append(RadioEntryData(
            value=member,
            label="" if icon else label,
            icon=icon,
            tooltip=RADIO_ENTRY_TOOLTIPS.get(member, label if icon else ""),
            on_update=on_update,
            on_commit=CommitValue(),
        ))
    return RadioInput(tuple(entries), selected_index=selected_index, disabled=disabled)
