"""
Hand-built panels for nodes whose inputs only make sense together.

Node builders replace the whole panel of a node and are keyed by the node's
reference name in ``NODE_OVERRIDES``. Slot builders replace the widget of a
single input and are keyed by ``(reference name, input index)`` in
``WIDGET_OVERRIDES``. Both registries are read by ``default_panel_config``.

Builders read sibling slots to decide what to show. A sibling that is
missing or holds an unexpected value produces an empty panel and a log
line, never an exception.
"""

import dataclasses
import logging
import sys
from functools import partial
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Tuple

from nodepanel.constants.constants import (
    DomainWarpType, FillType, FractalType, FrontendGraphDataType, GradientType, GridType,
    LineJoin, MATH_INFIX_OPERATORS, NoiseType, RedGreenBlue, RelativeAbsolute, SelectiveColorChoice,
)
from nodepanel.core.config import NodeOverride, WidgetOverride
from nodepanel.core.context import NodePropertiesContext
from nodepanel.core.exceptions import LookupFailure
from nodepanel.core.network import DocumentNode
from nodepanel.core.tagged_value import Fill, FillChoice, Gradient, TaggedValue, ValueTag
from nodepanel.ui.shared.callbacks import Apply, CommitValue, Constant, Wrap, batched_update, update_value
from nodepanel.ui.shared.enum_display_formatter import EnumDisplayFormatter
from nodepanel.ui.shared.text_parsing import format_float_list, parse_float_array4
from nodepanel.ui.shared.widget_descriptors import (
    CheckboxInput, ColorInput, IconButton, NumberInput, NumberMode, RadioEntryData, RadioInput,
    Separator, SeparatorType, TextInput, TextLabel, WidgetRow,
)
from nodepanel.ui.shared.widget_strategies import (
    add_blank_assist, bool_widget, color_widget, dropdown_input, enum_widget,
    input_at, literal_value, number_widget, radio_input, start_widgets, text_widget, vec2_widget, vec_f64_input,
)

logger = logging.getLogger(__name__)


def _document_node(node_id: Any, context: NodePropertiesContext, builder: str) -> Optional[DocumentNode]:
    try:
        return context.network.node(node_id)
    except LookupFailure as e:
        logger.error(f"Could not get document node in {builder}: {e}")
        return None


def _current_value(document_node: DocumentNode, index: int, tag: ValueTag) -> Optional[TaggedValue]:
    """Value held by slot ``index`` when it is a literal of ``tag``; exposed literals count."""
    node_input = input_at(document_node, index)
    if node_input is None:
        return None
    value = node_input.as_value()
    return value if value is not None and value.tag is tag else None


def _first_value_of(document_node: DocumentNode, tag: ValueTag) -> Optional[Any]:
    for node_input in document_node.inputs:
        value = node_input.as_value()
        if value is not None and value.tag is tag:
            return value.value
    return None


def _labeled_row_start(label: str) -> List[Any]:
    widgets: List[Any] = [TextLabel(label), Separator(SeparatorType.UNRELATED)]
    add_blank_assist(widgets)
    return widgets


def _range_number(bound: float, **changes) -> NumberInput:
    return NumberInput(mode=NumberMode.RANGE, min=-bound, max=bound, range_min=-bound, range_max=bound, unit="%", **changes)


# Fill

FILL_INDEX = 1
BACKUP_COLOR_INDEX = 2
BACKUP_GRADIENT_INDEX = 3

REVERSE_STOPS_TOOLTIP = "Reverse the gradient color stops"
REVERSE_RADIAL_TOOLTIP = "Reverse which end the gradient radiates from"


def _fill_backup(fill: Fill) -> Tuple[int, Constant]:
    """Write that stores the fill's current representation in its backup slot."""
    gradient = fill.as_gradient()
    if gradient is not None:
        return BACKUP_GRADIENT_INDEX, Constant(TaggedValue(ValueTag.GRADIENT, gradient))
    return BACKUP_COLOR_INDEX, Constant(TaggedValue(ValueTag.OPTIONAL_COLOR, fill.as_solid()))


def _fill_from_choice(existing_gradient: Optional[Gradient], choice: FillChoice) -> Fill:
    return choice.to_fill(existing_gradient)


def _set_fill(node_id: Any, fill: Fill):
    return update_value(Constant(TaggedValue(ValueTag.FILL, fill)), node_id, FILL_INDEX)


def _fill_type_entries(node_id: Any, fill: Fill, backup_color, backup_gradient: Gradient) -> List[RadioEntryData]:
    """
    Solid and Gradient entries.

    Leaving a representation backs it up, restores the backup of the entered
    representation and makes it the active fill, all in one batch.
    """
    is_gradient = fill.as_gradient() is not None
    left_backup = _fill_backup(fill)
    restore_color = (BACKUP_COLOR_INDEX, Constant(TaggedValue(ValueTag.OPTIONAL_COLOR, backup_color)))
    restore_gradient = (BACKUP_GRADIENT_INDEX, Constant(TaggedValue(ValueTag.GRADIENT, backup_gradient)))
    solid_fill = Constant(TaggedValue(ValueTag.FILL, Fill.from_optional_color(backup_color)))
    gradient_fill = Constant(TaggedValue(ValueTag.FILL, Fill.from_gradient(backup_gradient)))

    if is_gradient:
        solid_update = batched_update(node_id, left_backup, restore_color, (FILL_INDEX, solid_fill))
        gradient_update = _set_fill(node_id, fill)
    else:
        solid_update = _set_fill(node_id, fill)
        gradient_update = batched_update(node_id, left_backup, restore_gradient, (FILL_INDEX, gradient_fill))

    return [
        RadioEntryData(FillType.SOLID, label="Solid", on_update=solid_update, on_commit=CommitValue()),
        RadioEntryData(FillType.GRADIENT, label="Gradient", on_update=gradient_update, on_commit=CommitValue()),
    ]


def radial_points_right(gradient: Gradient) -> bool:
    """Whether a radial gradient visually radiates towards the right."""
    if abs(gradient.end.x - gradient.start.x) > sys.float_info.epsilon * 1e6:
        return gradient.end.x > gradient.start.x
    return (gradient.start.x + gradient.start.y) < (gradient.end.x + gradient.end.y)


def _gradient_shape_row(node_id: Any, gradient: Gradient) -> WidgetRow:
    widgets: List[Any] = [TextLabel("")]
    if gradient.gradient_type is GradientType.RADIAL:
        swapped = dataclasses.replace(gradient, start=gradient.end, end=gradient.start)
        icon = "ReverseRadialGradientToRight" if radial_points_right(gradient) else "ReverseRadialGradientToLeft"
        widgets.extend([
            Separator(SeparatorType.UNRELATED),
            IconButton(icon, tooltip=REVERSE_RADIAL_TOOLTIP, on_update=_set_fill(node_id, Fill.from_gradient(swapped))),
        ])
    else:
        add_blank_assist(widgets)

    entries = [
        RadioEntryData(
            gradient_type,
            label=gradient_type.value,
            on_update=_set_fill(node_id, Fill.from_gradient(dataclasses.replace(gradient, gradient_type=gradient_type))),
            on_commit=CommitValue(),
        )
        for gradient_type in GradientType
    ]
    widgets.extend([
        Separator(SeparatorType.UNRELATED),
        RadioInput(tuple(entries), selected_index=list(GradientType).index(gradient.gradient_type)),
    ])
    return WidgetRow(widgets)


def fill_properties(node_id: Any, context: NodePropertiesContext) -> List[WidgetRow]:
    """Fill swatch, Solid/Gradient switch and, for gradients, shape controls."""
    document_node = _document_node(node_id, context, "fill_properties")
    if document_node is None:
        return []

    first_row = start_widgets(document_node, node_id, FILL_INDEX, "Fill", "", FrontendGraphDataType.GENERAL, True)
    fill_value = _current_value(document_node, FILL_INDEX, ValueTag.FILL)
    color_value = _current_value(document_node, BACKUP_COLOR_INDEX, ValueTag.OPTIONAL_COLOR)
    gradient_value = _current_value(document_node, BACKUP_GRADIENT_INDEX, ValueTag.GRADIENT)
    if fill_value is None or color_value is None or gradient_value is None:
        return [WidgetRow(first_row)]

    fill: Fill = fill_value.value
    gradient = fill.as_gradient()
    first_row.extend([
        Separator(SeparatorType.UNRELATED),
        ColorInput(
            value=FillChoice.from_fill(fill),
            on_update=batched_update(
                node_id,
                _fill_backup(fill),
                (FILL_INDEX, Apply(partial(_fill_from_choice, gradient), ValueTag.FILL)),
            ),
            on_commit=CommitValue(),
        ),
    ])
    rows = [WidgetRow(first_row)]

    switch_row: List[Any] = [TextLabel("")]
    if gradient is None:
        add_blank_assist(switch_row)
    else:
        reversed_fill = Fill.from_gradient(dataclasses.replace(gradient, stops=gradient.stops.reversed()))
        switch_row.extend([
            Separator(SeparatorType.UNRELATED),
            IconButton("Reverse", tooltip=REVERSE_STOPS_TOOLTIP, on_update=_set_fill(node_id, reversed_fill)),
        ])
    switch_row.extend([
        Separator(SeparatorType.UNRELATED),
        RadioInput(
            tuple(_fill_type_entries(node_id, fill, color_value.value, gradient_value.value)),
            selected_index=1 if gradient is not None else 0,
        ),
    ])
    rows.append(WidgetRow(switch_row))

    if gradient is not None:
        rows.append(_gradient_shape_row(node_id, gradient))
    return rows


# Stroke and Offset Path

def _miter_limit_disabled(document_node: DocumentNode, line_join_index: int) -> bool:
    line_join = _current_value(document_node, line_join_index, ValueTag.LINE_JOIN)
    return (line_join.value if line_join is not None else LineJoin.MITER) is not LineJoin.MITER


def stroke_properties(node_id: Any, context: NodePropertiesContext) -> List[WidgetRow]:
    document_node = _document_node(node_id, context, "stroke_properties")
    if document_node is None:
        return []
    color_index, weight_index, dash_lengths_index, dash_offset_index = 1, 2, 3, 4
    line_cap_index, line_join_index, miter_limit_index = 5, 6, 7

    dash_lengths = _current_value(document_node, dash_lengths_index, ValueTag.VEC_F64)
    has_dashes = dash_lengths is not None and len(dash_lengths.value) > 0

    return [
        color_widget(document_node, node_id, color_index, "Color", "", ColorInput(), True),
        WidgetRow(number_widget(document_node, node_id, weight_index, "Weight", "", NumberInput(unit=" px", min=0.0), True)),
        WidgetRow(vec_f64_input(document_node, node_id, dash_lengths_index, "Dash Lengths", "", TextInput(), True)),
        WidgetRow(number_widget(document_node, node_id, dash_offset_index, "Dash Offset", "",
                                NumberInput(unit=" px", disabled=not has_dashes), True)),
        enum_widget(document_node, node_id, line_cap_index, "Line Cap", "", ValueTag.LINE_CAP),
        enum_widget(document_node, node_id, line_join_index, "Line Join", "", ValueTag.LINE_JOIN),
        WidgetRow(number_widget(document_node, node_id, miter_limit_index, "Miter Limit", "",
                                NumberInput(min=0.0, disabled=_miter_limit_disabled(document_node, line_join_index)), True)),
    ]


def offset_path_properties(node_id: Any, context: NodePropertiesContext) -> List[WidgetRow]:
    document_node = _document_node(node_id, context, "offset_path_properties")
    if document_node is None:
        return []
    distance_index, line_join_index, miter_limit_index = 1, 2, 3

    return [
        WidgetRow(number_widget(document_node, node_id, distance_index, "Offset", "", NumberInput(unit=" px"), True)),
        enum_widget(document_node, node_id, line_join_index, "Line Join", "", ValueTag.LINE_JOIN),
        WidgetRow(number_widget(document_node, node_id, miter_limit_index, "Miter Limit", "",
                                NumberInput(min=0.0, disabled=_miter_limit_disabled(document_node, line_join_index)), True)),
    ]


# Rectangle

def rectangle_properties(node_id: Any, context: NodePropertiesContext) -> List[WidgetRow]:
    """Size, corner radius (uniform or per corner) and clamping."""
    document_node = _document_node(node_id, context, "rectangle_properties")
    if document_node is None:
        return []
    size_x_index, size_y_index, corner_rounding_type_index, corner_radius_index, clamped_index = 1, 2, 3, 4, 5

    size_x = number_widget(document_node, node_id, size_x_index, "Size X", "", NumberInput(), True)
    size_y = number_widget(document_node, node_id, size_y_index, "Size Y", "", NumberInput(), True)

    radius_row_1 = start_widgets(document_node, node_id, corner_radius_index, "Corner Radius", "", FrontendGraphDataType.NUMBER, True)
    radius_row_1.append(Separator(SeparatorType.UNRELATED))
    radius_row_2: List[Any] = [Separator(SeparatorType.UNRELATED), TextLabel("")]
    add_blank_assist(radius_row_2)

    rounding_input = input_at(document_node, corner_rounding_type_index)
    if rounding_input is None:
        return []
    match rounding_input.as_non_exposed_value():
        case TaggedValue(tag=ValueTag.BOOL, value=is_individual):
            radius_input = input_at(document_node, corner_radius_index)
            if radius_input is None:
                return []
            match radius_input.as_non_exposed_value():
                case TaggedValue(tag=ValueTag.F64, value=radius):
                    uniform_val, individual_val = radius, (radius,) * 4
                case TaggedValue(tag=ValueTag.F64_ARRAY4, value=radii):
                    uniform_val, individual_val = radii[0], radii
                case _:
                    uniform_val, individual_val = 0.0, (0.0,) * 4

            uniform = RadioEntryData(
                "Uniform", label="Uniform",
                on_update=batched_update(
                    node_id,
                    (corner_rounding_type_index, Constant(TaggedValue(ValueTag.BOOL, False))),
                    (corner_radius_index, Constant(TaggedValue(ValueTag.F64, uniform_val))),
                ),
                on_commit=CommitValue(),
            )
            individual = RadioEntryData(
                "Individual", label="Individual",
                on_update=batched_update(
                    node_id,
                    (corner_rounding_type_index, Constant(TaggedValue(ValueTag.BOOL, True))),
                    (corner_radius_index, Constant(TaggedValue(ValueTag.F64_ARRAY4, individual_val))),
                ),
                on_commit=CommitValue(),
            )
            radius_row_1.append(RadioInput((uniform, individual), selected_index=int(is_individual)))

            if is_individual:
                radius_row_2.append(TextInput(
                    value=format_float_list(individual_val),
                    on_update=update_value(Apply(parse_float_array4, ValueTag.F64_ARRAY4), node_id, corner_radius_index),
                    on_commit=CommitValue(),
                ))
            else:
                radius_row_2.append(NumberInput(
                    value=uniform_val,
                    on_update=update_value(Wrap(ValueTag.F64), node_id, corner_radius_index),
                    on_commit=CommitValue(),
                ))

    clamped = bool_widget(document_node, node_id, clamped_index, "Clamped", "", CheckboxInput(), True)

    return [
        WidgetRow(size_x),
        WidgetRow(size_y),
        WidgetRow(radius_row_1),
        WidgetRow(radius_row_2),
        WidgetRow(clamped),
    ]


# Channel Mixer

class ChannelRow(NamedTuple):
    index: int
    label: str
    seed: float


MONOCHROME_ROWS = (ChannelRow(2, "Red", 40.0), ChannelRow(3, "Green", 40.0), ChannelRow(4, "Blue", 20.0), ChannelRow(5, "Constant", 0.0))

OUTPUT_CHANNEL_ROWS: Dict[RedGreenBlue, Tuple[ChannelRow, ...]] = {
    channel: tuple(
        ChannelRow(first_index + offset, f"({channel.value}) {source}", 100.0 if source == channel.value else 0.0)
        for offset, source in enumerate(("Red", "Green", "Blue", "Constant"))
    )
    for channel, first_index in ((RedGreenBlue.RED, 6), (RedGreenBlue.GREEN, 10), (RedGreenBlue.BLUE, 14))
}


def channel_mixer_properties(node_id: Any, context: NodePropertiesContext) -> List[WidgetRow]:
    """Monochrome toggle, output channel and the four coefficients of the selected channel."""
    document_node = _document_node(node_id, context, "channel_mixer_properties")
    if document_node is None:
        return []
    monochrome_index, output_channel_index = 1, 18

    monochrome = bool_widget(document_node, node_id, monochrome_index, "Monochrome", "", CheckboxInput(), True)
    monochrome_value = _current_value(document_node, monochrome_index, ValueTag.BOOL)
    is_monochrome = monochrome_value.value if monochrome_value is not None else False

    output_channel = _labeled_row_start("Output Channel")
    channel_input = input_at(document_node, output_channel_index)
    if channel_input is None:
        return []
    match channel_input.as_non_exposed_value():
        case TaggedValue(tag=ValueTag.RED_GREEN_BLUE, value=choice):
            output_channel.append(radio_input(
                tuple(RedGreenBlue), list(RedGreenBlue).index(choice),
                update_value(Wrap(ValueTag.RED_GREEN_BLUE), node_id, output_channel_index),
            ))

    selected = _current_value(document_node, output_channel_index, ValueTag.RED_GREEN_BLUE)
    if selected is None:
        logger.warning("Channel Mixer node properties panel could not be displayed.")
        return []

    layout = [WidgetRow(monochrome)]
    if not is_monochrome:
        layout.append(WidgetRow(output_channel))
    for channel_row in MONOCHROME_ROWS if is_monochrome else OUTPUT_CHANNEL_ROWS[selected.value]:
        layout.append(WidgetRow(number_widget(
            document_node, node_id, channel_row.index, channel_row.label, "",
            _range_number(200.0, value=channel_row.seed), True,
        )))
    return layout


# Selective Color

SELECTIVE_COLOR_FIRST_INDEX = 2
CMYK_NAMES = ("Cyan", "Magenta", "Yellow", "Black")


def selective_color_cmyk_indices(choice: SelectiveColorChoice) -> Tuple[int, int, int, int]:
    """The four consecutive slots holding the CMYK adjustments of a color band."""
    first = SELECTIVE_COLOR_FIRST_INDEX + 4 * list(SelectiveColorChoice).index(choice)
    return first, first + 1, first + 2, first + 3


def selective_color_properties(node_id: Any, context: NodePropertiesContext) -> List[WidgetRow]:
    document_node = _document_node(node_id, context, "selective_color_properties")
    if document_node is None:
        return []
    mode_index, colors_index = 1, 38

    colors = _labeled_row_start("Colors")
    colors_input = input_at(document_node, colors_index)
    if colors_input is None:
        return []
    match colors_input.as_non_exposed_value():
        case TaggedValue(tag=ValueTag.SELECTIVE_COLOR_CHOICE, value=choice):
            sections = EnumDisplayFormatter.get_sections(SelectiveColorChoice)
            colors.append(dropdown_input(
                sections, EnumDisplayFormatter.get_selected_index(sections, choice),
                update_value(Wrap(ValueTag.SELECTIVE_COLOR_CHOICE), node_id, colors_index),
            ))

    selected = _current_value(document_node, colors_index, ValueTag.SELECTIVE_COLOR_CHOICE)
    if selected is None:
        logger.warning("Selective Color node properties panel could not be displayed.")
        return []

    cmyk_rows = [
        WidgetRow(number_widget(document_node, node_id, index, f"({selected.value.value}) {name}", "", _range_number(100.0), True))
        for index, name in zip(selective_color_cmyk_indices(selected.value), CMYK_NAMES)
    ]

    mode = start_widgets(document_node, node_id, mode_index, "Mode", "", FrontendGraphDataType.GENERAL, True)
    mode.append(Separator(SeparatorType.UNRELATED))
    mode_input = input_at(document_node, mode_index)
    if mode_input is None:
        return []
    match mode_input.as_non_exposed_value():
        case TaggedValue(tag=ValueTag.RELATIVE_ABSOLUTE, value=relative_or_absolute):
            mode.append(radio_input(
                tuple(RelativeAbsolute), list(RelativeAbsolute).index(relative_or_absolute),
                update_value(Wrap(ValueTag.RELATIVE_ABSOLUTE), node_id, mode_index),
            ))

    return [WidgetRow(colors), *cmyk_rows, WidgetRow(mode)]


# Grid

def grid_properties(node_id: Any, context: NodePropertiesContext) -> List[WidgetRow]:
    document_node = _document_node(node_id, context, "grid_properties")
    if document_node is None:
        return []
    grid_type_index, spacing_index, angles_index, rows_index, columns_index = 1, 2, 3, 4, 5

    layout = [enum_widget(document_node, node_id, grid_type_index, "Grid Type", "", ValueTag.GRID_TYPE)]

    grid_type_input = input_at(document_node, grid_type_index)
    if grid_type_input is None:
        return []
    match grid_type_input.as_non_exposed_value():
        case TaggedValue(tag=ValueTag.GRID_TYPE, value=GridType.RECTANGULAR):
            layout.append(vec2_widget(document_node, node_id, spacing_index, "Spacing", "", x="W", y="H", unit=" px", min=0.0))
        case TaggedValue(tag=ValueTag.GRID_TYPE, value=GridType.ISOMETRIC):
            layout.extend([
                WidgetRow(number_widget(document_node, node_id, spacing_index, "Spacing", "",
                                        NumberInput(label="H", min=0.0, unit=" px"), True)),
                vec2_widget(document_node, node_id, angles_index, "Angles", "", x="", y="", unit="°"),
            ])

    layout.extend([
        WidgetRow(number_widget(document_node, node_id, rows_index, "Rows", "", NumberInput(min=1.0), True)),
        WidgetRow(number_widget(document_node, node_id, columns_index, "Columns", "", NumberInput(min=1.0), True)),
    ])
    return layout


# Math

EXPRESSION_TOOLTIP = 'A math expression that may incorporate "A" and/or "B", such as "sqrt(A + B) - B^2"'
OPERAND_B_TOOLTIP = 'The value of "B" when calculating the expression'
OPERAND_A_TOOLTIP = '"A" is fed by the value from the previous node in the primary data flow, or it is 0 if disconnected'


def normalize_math_expression(text: str) -> str:
    """Trim the expression; a lone infix operator becomes the binary expression of A and B."""
    expression = text.strip()
    if expression in MATH_INFIX_OPERATORS:
        return f"A {expression} B"
    return expression


def math_properties(node_id: Any, context: NodePropertiesContext) -> List[WidgetRow]:
    document_node = _document_node(node_id, context, "math_properties")
    if document_node is None:
        return []
    expression_index, operand_b_index = 1, 2

    expression = start_widgets(document_node, node_id, expression_index, "Expression", "", FrontendGraphDataType.GENERAL, True)
    match literal_value(document_node, expression_index):
        case TaggedValue(tag=ValueTag.STRING, value=text):
            expression.extend([
                Separator(SeparatorType.UNRELATED),
                TextInput(
                    value=text,
                    on_update=update_value(Apply(normalize_math_expression, ValueTag.STRING), node_id, expression_index),
                    on_commit=CommitValue(),
                ),
            ])
    operand_b = number_widget(document_node, node_id, operand_b_index, "Operand B", "", NumberInput(), True)

    return [
        WidgetRow(expression, tooltip=EXPRESSION_TOOLTIP),
        WidgetRow(operand_b, tooltip=OPERAND_B_TOOLTIP),
        WidgetRow([TextLabel("(Operand A is the primary input)")], tooltip=OPERAND_A_TOOLTIP),
    ]


# Exposure

def exposure_properties(node_id: Any, context: NodePropertiesContext) -> List[WidgetRow]:
    document_node = _document_node(node_id, context, "exposure_properties")
    if document_node is None:
        return []
    return [
        WidgetRow(number_widget(document_node, node_id, 1, "Exposure", "", NumberInput(min=-20.0, max=20.0), True)),
        WidgetRow(number_widget(document_node, node_id, 2, "Offset", "", NumberInput(min=-0.5, max=0.5), True)),
        WidgetRow(number_widget(document_node, node_id, 3, "Gamma Correction", "",
                                NumberInput(min=0.01, max=9.99, step=0.1), True)),
    ]


# Per-slot overrides

def _slot(node_id: Any, index: int, context: NodePropertiesContext) -> Optional[Tuple[DocumentNode, Any, int, str, str]]:
    network = context.network
    try:
        return (network.node(node_id), node_id, index,
                network.input_name(node_id, index), network.input_description(node_id, index))
    except LookupFailure as e:
        logger.warning(f"A widget override failed to be built for node {node_id}, index {index}: {e}")
        return None


class NoisePatternState(NamedTuple):
    fractal_active: bool
    coherent_noise_active: bool
    cellular_noise_active: bool
    ping_pong_active: bool
    domain_warp_active: bool
    domain_warp_only_fractal_type_wrongly_active: bool


def noise_pattern_state(document_node: DocumentNode) -> NoisePatternState:
    """Which groups of noise settings apply, from the node's current noise, fractal and warp types."""
    noise_type = _first_value_of(document_node, ValueTag.NOISE_TYPE)
    fractal_type = _first_value_of(document_node, ValueTag.FRACTAL_TYPE)
    domain_warp_type = _first_value_of(document_node, ValueTag.DOMAIN_WARP_TYPE)
    domain_warp_active = domain_warp_type is not DomainWarpType.NONE
    return NoisePatternState(
        fractal_active=fractal_type is not FractalType.NONE,
        coherent_noise_active=noise_type is not NoiseType.WHITE_NOISE,
        cellular_noise_active=noise_type is NoiseType.CELLULAR,
        ping_pong_active=fractal_type is FractalType.PING_PONG,
        domain_warp_active=domain_warp_active,
        domain_warp_only_fractal_type_wrongly_active=not domain_warp_active and fractal_type in (
            FractalType.DOMAIN_WARP_PROGRESSIVE, FractalType.DOMAIN_WARP_INDEPENDENT,
        ),
    )


def _noise_pattern_enum(tag: ValueTag, disabled_when: Callable[[NoisePatternState], bool]) -> WidgetOverride:
    def build(node_id: Any, index: int, context: NodePropertiesContext) -> List[WidgetRow]:
        slot = _slot(node_id, index, context)
        if slot is None:
            return []
        state = noise_pattern_state(slot[0])
        return [enum_widget(*slot, tag, disabled=disabled_when(state))]
    return build


ASSIGN_COLORS_RANDOMIZE_INDEX = 5


def assign_colors_randomize(document_node: DocumentNode) -> bool:
    randomize = _current_value(document_node, ASSIGN_COLORS_RANDOMIZE_INDEX, ValueTag.BOOL)
    return randomize.value if randomize is not None else False


def assign_colors_seed(node_id: Any, index: int, context: NodePropertiesContext) -> List[WidgetRow]:
    slot = _slot(node_id, index, context)
    if slot is None:
        return []
    disabled = not assign_colors_randomize(slot[0])
    return [WidgetRow(number_widget(*slot, NumberInput(is_integer=True, min=0.0, disabled=disabled), True))]


def assign_colors_repeat_every(node_id: Any, index: int, context: NodePropertiesContext) -> List[WidgetRow]:
    slot = _slot(node_id, index, context)
    if slot is None:
        return []
    disabled = assign_colors_randomize(slot[0])
    return [WidgetRow(number_widget(*slot, NumberInput(is_integer=True, min=0.0, disabled=disabled), True))]


def text_area_override(node_id: Any, index: int, context: NodePropertiesContext) -> List[WidgetRow]:
    slot = _slot(node_id, index, context)
    if slot is None:
        return []
    return [WidgetRow(text_widget(*slot, blank_assist=True, multiline=True))]


NODE_OVERRIDES: Dict[str, NodeOverride] = {
    "Fill": fill_properties,
    "Stroke": stroke_properties,
    "Offset Path": offset_path_properties,
    "Rectangle": rectangle_properties,
    "Channel Mixer": channel_mixer_properties,
    "Selective Color": selective_color_properties,
    "Grid": grid_properties,
    "Math": math_properties,
    "Exposure": exposure_properties,
}

WIDGET_OVERRIDES: Dict[Tuple[str, int], WidgetOverride] = {
    ("Noise Pattern", 4): _noise_pattern_enum(ValueTag.NOISE_TYPE, lambda state: False),
    ("Noise Pattern", 5): _noise_pattern_enum(ValueTag.DOMAIN_WARP_TYPE, lambda state: not state.coherent_noise_active),
    ("Noise Pattern", 7): _noise_pattern_enum(ValueTag.FRACTAL_TYPE, lambda state: not state.coherent_noise_active),
    ("Noise Pattern", 13): _noise_pattern_enum(
        ValueTag.CELLULAR_DISTANCE_FUNCTION,
        lambda state: not state.coherent_noise_active or not state.cellular_noise_active,
    ),
    ("Noise Pattern", 14): _noise_pattern_enum(
        ValueTag.CELLULAR_RETURN_TYPE,
        lambda state: not state.coherent_noise_active or not state.cellular_noise_active,
    ),
    ("Assign Colors", 6): assign_colors_seed,
    ("Assign Colors", 7): assign_colors_repeat_every,
    ("Text", 1): text_area_override,
}
