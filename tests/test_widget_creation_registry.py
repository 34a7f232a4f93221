"""Tests for catalog dispatch: aliases, value shapes, fallbacks and bound callbacks."""
import math

import pytest

from nodepanel.constants.constants import BlendMode, BooleanOperation, FrontendGraphDataType
from nodepanel.core.messages import AddTransaction, ExposeInput, NoOp, SetInputValue
from nodepanel.core.tagged_value import (
    Color, DEFAULT_GRADIENT_STOPS, Fill, FillChoice, Font, Footprint, TaggedValue, ValueTag, Vec2,
)
from nodepanel.core.types import ConcreteType, FnType, GenericType
from nodepanel.ui.shared.widget_creation_registry import (
    DEFAULT_REGISTRY, DispatchResult, NumberOptions, WidgetRegistry, property_from_type,
)
from nodepanel.ui.shared.widget_descriptors import (
    CheckboxInput, ColorInput, DropdownInput, FontInput, NumberInput, NumberMode, ParameterExposeButton,
    RadioInput, TextInput, TextLabel,
)
from tests.helpers import f64, make_node, only, slot, widgets_of


@pytest.fixture
def build(store, context):
    """Dispatch slot 1 of a fresh node holding ``value`` for ``descriptor``."""
    def _build(value, descriptor=None, options=NumberOptions(), exposed=False):
        descriptor = descriptor if descriptor is not None else ConcreteType.of(value.tag)
        store.add_node("n", make_node(slot("Value", value, descriptor, exposed=exposed)))
        return property_from_type("n", 1, descriptor, options, context)
    return _build


class TestAliases:
    """Semantic aliases set bounds, units and modes."""

    def test_percentage(self, build):
        number = only(build(f64(50.0), ConcreteType.of(ValueTag.F64, "Percentage")).rows, NumberInput)
        assert (number.min, number.max, number.unit) == (0.0, 100.0, "%")

    def test_signed_percentage(self, build):
        number = only(build(f64(0.0), ConcreteType.of(ValueTag.F64, "SignedPercentage")).rows, NumberInput)
        assert (number.min, number.max, number.unit) == (-100.0, 100.0, "%")

    def test_angle_is_a_slider(self, build):
        number = only(build(f64(0.0), ConcreteType.of(ValueTag.F64, "Angle")).rows, NumberInput)
        assert number.mode is NumberMode.RANGE
        assert (number.range_min, number.range_max, number.unit) == (-180.0, 180.0, "°")

    def test_explicit_bounds_override_alias_bounds(self, build):
        result = build(f64(50.0), ConcreteType.of(ValueTag.F64, "Percentage"), NumberOptions(number_min=5.0))
        number = only(result.rows, NumberInput)
        assert (number.min, number.max, number.unit) == (5.0, 100.0, "%")

    def test_range_option_keeps_alias_unit(self, build):
        result = build(f64(0.0), ConcreteType.of(ValueTag.F64, "Angle"), NumberOptions(mode_range=(-90.0, 90.0)))
        number = only(result.rows, NumberInput)
        assert (number.min, number.max, number.unit) == (-90.0, 90.0, "°")

    def test_integer_count_and_seed(self, build):
        count = only(build(TaggedValue(ValueTag.U32, 3), ConcreteType.of(ValueTag.U32, "IntegerCount")).rows, NumberInput)
        assert count.is_integer and count.min == 1.0

    def test_resolution_pair(self, build):
        result = build(TaggedValue(ValueTag.UVEC2, (1920, 1080)), ConcreteType.of(ValueTag.UVEC2, "Resolution"))
        width, height = widgets_of(result.rows, NumberInput)
        assert (width.label, height.label) == ("W", "H")
        assert width.min == 64.0 and width.unit == " px"
        assert width.on_update(10.0) == SetInputValue("n", 1, TaggedValue(ValueTag.UVEC2, (10, 1080)))

    def test_resolution_saturates_at_u32_bounds(self, build):
        result = build(TaggedValue(ValueTag.UVEC2, (1920, 1080)), ConcreteType.of(ValueTag.UVEC2, "Resolution"))
        width, _ = widgets_of(result.rows, NumberInput)
        assert width.max == 2 ** 32 - 1
        assert width.on_update(5e9).value == TaggedValue(ValueTag.UVEC2, (2 ** 32 - 1, 1080))
        assert width.on_update(-4.0).value == TaggedValue(ValueTag.UVEC2, (0, 1080))


class TestValueShapes:
    """Catalog entries keyed on the stored value tag."""

    def test_f64_defaults_and_callbacks(self, build):
        result = build(f64(1.0))
        assert result.ok
        number = only(result.rows, NumberInput)
        assert number.min == -math.inf and number.max == math.inf
        assert number.on_update(2.5) == SetInputValue("n", 1, f64(2.5))
        assert number.on_commit() == AddTransaction()

    def test_u32_saturates(self, build):
        number = only(build(TaggedValue(ValueTag.U32, 5)).rows, NumberInput)
        assert number.is_integer
        assert number.on_update(-3.7).value == TaggedValue(ValueTag.U32, 0)
        assert number.on_update(1e12).value == TaggedValue(ValueTag.U32, 2 ** 32 - 1)

    @pytest.mark.parametrize("raw, expected", [(math.nan, 0), (math.inf, 2 ** 64 - 1), (-math.inf, 0)])
    def test_u64_saturates_non_finite_input(self, build, raw, expected):
        number = only(build(TaggedValue(ValueTag.U64, 5)).rows, NumberInput)
        assert number.on_update(raw).value == TaggedValue(ValueTag.U64, expected)

    def test_ivec2_saturates_at_i32_bounds(self, build):
        x, y = widgets_of(build(TaggedValue(ValueTag.IVEC2, (1, 2))).rows, NumberInput)
        assert (x.min, x.max) == (-2 ** 31, 2 ** 31 - 1)
        assert x.on_update(1e10).value == TaggedValue(ValueTag.IVEC2, (2 ** 31 - 1, 2))
        assert y.on_update(-1e10).value == TaggedValue(ValueTag.IVEC2, (1, -2 ** 31))
        assert y.on_update(math.nan).value == TaggedValue(ValueTag.IVEC2, (1, 0))

    def test_optional_f64_checkbox(self, build):
        rows = build(TaggedValue(ValueTag.OPTIONAL_F64, None)).rows
        checkbox = only(rows, CheckboxInput)
        number = only(rows, NumberInput)
        assert not checkbox.checked
        assert number.disabled
        assert checkbox.on_update(True).value == TaggedValue(ValueTag.OPTIONAL_F64, 100.0)
        assert checkbox.on_update(False).value == TaggedValue(ValueTag.OPTIONAL_F64, None)

    def test_float_list_rejects_bad_text(self, build):
        text = only(build(TaggedValue(ValueTag.VEC_F64, (1.0, 2.0))).rows, TextInput)
        assert text.value == "1, 2"
        assert text.on_update("1,,abc") == NoOp()
        assert text.on_update("3 4").value == TaggedValue(ValueTag.VEC_F64, (3.0, 4.0))

    def test_array4_text(self, build):
        text = only(build(TaggedValue(ValueTag.F64_ARRAY4, (1, 2, 3, 4))).rows, TextInput)
        assert text.on_update("1 2 3") == NoOp()
        assert text.on_update("4 3 2 1").value == TaggedValue(ValueTag.F64_ARRAY4, (4, 3, 2, 1))

    def test_dvec2_pair_writes_component(self, build):
        x, y = widgets_of(build(TaggedValue(ValueTag.DVEC2, (1.0, 2.0))).rows, NumberInput)
        assert y.on_update(5.0).value == TaggedValue(ValueTag.DVEC2, (1.0, 5.0))

    def test_color_swatch(self, build):
        swatch = only(build(TaggedValue(ValueTag.COLOR, Color.WHITE)).rows, ColorInput)
        assert not swatch.allow_none
        assert swatch.on_update(FillChoice(color=Color.BLACK)).value == TaggedValue(ValueTag.COLOR, Color.BLACK)
        # Clearing a required color falls back to black
        assert swatch.on_update(FillChoice()).value == TaggedValue(ValueTag.COLOR, Color.BLACK)

    def test_optional_color_can_be_cleared(self, build):
        swatch = only(build(TaggedValue(ValueTag.OPTIONAL_COLOR, Color.WHITE)).rows, ColorInput)
        assert swatch.on_update(FillChoice()).value == TaggedValue(ValueTag.OPTIONAL_COLOR, None)

    def test_standalone_fill_swatch(self, build):
        swatch = only(build(TaggedValue(ValueTag.FILL, Fill.solid(Color.WHITE))).rows, ColorInput)
        message = swatch.on_update(FillChoice(stops=DEFAULT_GRADIENT_STOPS))
        assert message.value.value.as_gradient().stops == DEFAULT_GRADIENT_STOPS

    def test_font_has_family_and_style_rows(self, build):
        rows = build(TaggedValue(ValueTag.FONT, Font("Arial", "Regular"))).rows
        assert len(rows) == 2
        family, style = widgets_of(rows, FontInput)
        assert style.is_style_picker and not family.is_style_picker
        assert style.on_update(("Arial", "Bold")).value == TaggedValue(ValueTag.FONT, Font("Arial", "Bold"))

    def test_graph_data_label(self, build):
        rows = build(TaggedValue(ValueTag.VECTOR_DATA, None)).rows
        labels = [label.text for label in widgets_of(rows, TextLabel)]
        assert "Vector data is supplied through the node graph" in labels


class TestEnums:
    """Dropdowns and radio groups."""

    def test_blend_mode_dropdown_sections(self, build):
        result = build(TaggedValue(ValueTag.BLEND_MODE, BlendMode.SCREEN))
        dropdown = only(result.rows, DropdownInput)
        assert len(dropdown.entries) > 1
        flat = [entry.value for section in dropdown.entries for entry in section]
        assert flat[dropdown.selected_index] is BlendMode.SCREEN
        assert result.rows[0].tooltip == "Formula used for blending"
        assert dropdown.on_update(BlendMode.NORMAL).value == TaggedValue(ValueTag.BLEND_MODE, BlendMode.NORMAL)

    def test_boolean_operation_radio_uses_icons(self, build):
        radio = only(build(TaggedValue(ValueTag.BOOLEAN_OPERATION, BooleanOperation.UNION)).rows, RadioInput)
        first = radio.entries[0]
        assert (first.icon, first.label, first.tooltip) == ("BooleanUnion", "", "Union")
        assert radio.selected_index == 0


class TestFootprint:
    """Footprint rows recompute the whole footprint on edit."""

    @pytest.fixture
    def rows(self, build):
        footprint = Footprint(transform=(100.0, 0.0, 0.0, 50.0, 10.0, 20.0), resolution=(200, 100))
        return build(TaggedValue(ValueTag.FOOTPRINT, footprint)).rows

    def test_three_rows(self, rows):
        assert len(rows) == 3
        x, y, w, h, percent = widgets_of(rows, NumberInput)
        assert (x.value, y.value, w.value, h.value) == (10.0, 20.0, 100.0, 50.0)
        assert percent.value == pytest.approx(200.0)

    def test_move_keeps_size_and_resolution(self, rows):
        x = widgets_of(rows, NumberInput)[0]
        footprint = x.on_update(5.0).value.value
        assert footprint.transform[4] == 5.0 and footprint.transform[5] == 20.0
        assert footprint.resolution == Vec2(200, 100)

    def test_resize_keeps_oversampling(self, rows):
        w = widgets_of(rows, NumberInput)[2]
        footprint = w.on_update(50.0).value.value
        assert footprint.transform[0] == 50.0
        assert footprint.resolution == Vec2(100, 100)

    def test_resolution_percent_is_clamped(self, rows):
        percent = widgets_of(rows, NumberInput)[4]
        assert percent.on_update(50.0).value.value.resolution == Vec2(50, 25)
        assert percent.on_update(1e6).value.value.resolution == Vec2(4000, 4000)
        assert percent.on_update(None).value.value.resolution == Vec2(100, 50)


class TestFallbacks:
    """Generic, unsupported and missing slots."""

    def test_unsupported_type_is_err_with_named_tooltip(self, build):
        result = build(f64(0.0), ConcreteType("Vec<Artboard>"))
        assert not result.ok
        label = result.rows[0].widgets[-1]
        assert label.text == "-"
        assert "Vec<Artboard>" in label.tooltip

    def test_generic_type_is_ok(self, build):
        result = build(f64(0.0), GenericType("T"))
        assert result.ok
        assert result.rows[0].widgets[0].text == "Generic type (not supported)"

    def test_function_type_is_unwrapped(self, build):
        result = build(f64(0.0), FnType(ConcreteType.of(ValueTag.BOOL), ConcreteType.of(ValueTag.F64)))
        assert result.ok
        only(result.rows, NumberInput)

    def test_missing_slot_logs_and_returns_no_rows(self, store, context, caplog):
        store.add_node("n", make_node(slot("Value", f64(1.0))))
        result = property_from_type("n", 9, ConcreteType.of(ValueTag.F64), NumberOptions(), context)
        assert result == DispatchResult(ok=False)
        assert "A widget failed to be built" in caplog.text

    def test_exposed_slot_shows_only_toggle_and_label(self, build):
        rows = build(f64(1.0), exposed=True).rows
        assert widgets_of(rows, NumberInput) == []
        toggle = only(rows, ParameterExposeButton)
        assert toggle.exposed and toggle.data_type is FrontendGraphDataType.NUMBER
        assert toggle.on_update() == ExposeInput("n", 1, set_to_exposed=False)


class TestRegistry:
    """Registration and support queries."""

    def test_supports(self):
        assert DEFAULT_REGISTRY.supports(ConcreteType.of(ValueTag.F64))
        assert DEFAULT_REGISTRY.supports(GenericType("T"))
        assert not DEFAULT_REGISTRY.supports(ConcreteType("Artboard"))

    def test_custom_alias(self, store, context):
        registry = WidgetRegistry()
        registry.register("Opacity", lambda request: [])
        store.add_node("n", make_node(slot("Value", f64(1.0))))
        result = registry.dispatch("n", 1, ConcreteType.of(ValueTag.F64, "Opacity"), NumberOptions(), context)
        assert result == DispatchResult(ok=True, rows=())
