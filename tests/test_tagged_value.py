"""Tests for tagged values, value shapes and type descriptors."""
import numpy as np
import pytest

from nodepanel.constants.constants import GradientType, GridType, LineCap, LineJoin
from nodepanel.core.exceptions import LookupFailure, TaggedValueError
from nodepanel.core.tagged_value import (
    Color, Fill, FillChoice, Footprint, Gradient, GradientStops, TaggedValue, ValueTag, Vec2,
)
from nodepanel.core.types import ConcreteType, FnType, FutureType, GenericType, type_name, unwrap


class TestTaggedValueValidation:
    """Payloads are normalized to their tag's shape or rejected."""

    def test_f64_accepts_int_and_normalizes_to_float(self):
        value = TaggedValue(ValueTag.F64, 3)
        assert value.value == 3.0
        assert isinstance(value.value, float)

    def test_bool_is_not_a_number(self):
        with pytest.raises(TaggedValueError):
            TaggedValue(ValueTag.F64, True)
        with pytest.raises(TaggedValueError):
            TaggedValue(ValueTag.BOOL, 1)

    @pytest.mark.parametrize("payload", [-1, 2 ** 32, 1.5])
    def test_u32_range_and_integrality(self, payload):
        with pytest.raises(TaggedValueError):
            TaggedValue(ValueTag.U32, payload)

    def test_array4_requires_exactly_four_numbers(self):
        assert TaggedValue(ValueTag.F64_ARRAY4, [1, 2, 3, 4]).value == (1.0, 2.0, 3.0, 4.0)
        with pytest.raises(TaggedValueError):
            TaggedValue(ValueTag.F64_ARRAY4, (1.0, 2.0, 3.0))

    def test_vec2_shapes(self):
        assert TaggedValue(ValueTag.DVEC2, (1, 2)).value == Vec2(1.0, 2.0)
        with pytest.raises(TaggedValueError):
            TaggedValue(ValueTag.UVEC2, (-1, 2))
        with pytest.raises(TaggedValueError):
            TaggedValue(ValueTag.IVEC2, (1.5, 2))

    def test_enum_payload_must_match_tag(self):
        assert TaggedValue(ValueTag.LINE_CAP, LineCap.ROUND).value is LineCap.ROUND
        with pytest.raises(TaggedValueError):
            TaggedValue(ValueTag.LINE_CAP, LineJoin.MITER)

    def test_of_enum_finds_the_tag(self):
        assert TaggedValue.of_enum(GridType.ISOMETRIC).tag is ValueTag.GRID_TYPE

    def test_optional_payloads_accept_none(self):
        assert TaggedValue(ValueTag.OPTIONAL_F64, None).value is None
        assert TaggedValue(ValueTag.OPTIONAL_COLOR, None).value is None
        with pytest.raises(TaggedValueError):
            TaggedValue(ValueTag.COLOR, None)

    def test_error_types(self):
        assert issubclass(TaggedValueError, TypeError)
        assert issubclass(LookupFailure, KeyError)
        assert str(LookupFailure("Node 3 is not in the current network")) == "Node 3 is not in the current network"


class TestValueShapes:
    """Fill, gradient and footprint helpers."""

    def test_fill_cannot_be_both_solid_and_gradient(self):
        with pytest.raises(TaggedValueError):
            Fill(color=Color.BLACK, gradient=Gradient())

    def test_reversed_stops_mirror_positions(self):
        stops = GradientStops(((0.0, Color.BLACK), (0.25, Color.WHITE)))
        assert stops.reversed().stops == ((0.75, Color.WHITE), (1.0, Color.BLACK))

    def test_fill_choice_keeps_existing_gradient_geometry(self):
        existing = Gradient(gradient_type=GradientType.RADIAL, start=Vec2(0.2, 0.2), end=Vec2(0.8, 0.8))
        new_stops = GradientStops(((0.0, Color.WHITE), (1.0, Color.BLACK)))
        fill = FillChoice(stops=new_stops).to_fill(existing)
        assert fill.as_gradient().gradient_type is GradientType.RADIAL
        assert fill.as_gradient().start == Vec2(0.2, 0.2)
        assert fill.as_gradient().stops == new_stops

    def test_fill_choice_round_trips_solid_and_none(self):
        assert FillChoice.from_fill(Fill.solid(Color.WHITE)).to_fill() == Fill.solid(Color.WHITE)
        assert FillChoice.from_fill(Fill.none()).to_fill().is_none()

    def test_footprint_geometry(self):
        footprint = Footprint(transform=(2.0, 0.0, 0.0, 3.0, 10.0, 20.0), resolution=(4, 6))
        np.testing.assert_allclose(footprint.scale(), [2.0, 3.0])
        np.testing.assert_allclose(footprint.transform_point2((0.0, 0.0)), [10.0, 20.0])
        assert footprint.resolution == Vec2(4, 6)

    def test_color_hex(self):
        assert Color(1.0, 0.0, 0.0).to_rgba_hex() == "ff0000ff"


class TestTypeDescriptors:
    """Wrappers are transparent to resolution and naming."""

    def test_unwrap_nested_wrappers(self):
        inner = ConcreteType.of(ValueTag.F64)
        wrapped = FnType(ConcreteType.of(ValueTag.BOOL), FutureType(FutureType(inner)))
        assert unwrap(wrapped) == inner
        assert type_name(wrapped) == "f64"

    def test_alias_does_not_change_name(self):
        assert type_name(ConcreteType.of(ValueTag.F64, alias="Angle")) == "f64"

    def test_generic_name(self):
        assert type_name(GenericType("T")) == "T"
