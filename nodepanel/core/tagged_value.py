"""
Tagged values held by literal node inputs.

A ``TaggedValue`` pairs a payload with a ``ValueTag`` naming its shape. The set
of tags is closed: every literal input in a node graph holds exactly one of
these shapes, and the tag never changes as the value is edited. Payloads are
normalized and validated on construction so a value whose payload does not
match its tag can never be created.
"""

import dataclasses
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, NamedTuple, Optional, Tuple, Type

import numpy as np

from nodepanel.constants.constants import (
    ArcType, BlendMode, BooleanOperation, CellularDistanceFunction, CellularReturnType,
    CentroidType, DomainWarpType, FillType, FractalType, GradientType, GridType, LineCap,
    LineJoin, LuminanceCalculation, NoiseType, RealTimeMode, RedGreenBlue, RedGreenBlueAlpha,
    RelativeAbsolute, SelectiveColorChoice, XY,
)
from nodepanel.core.exceptions import TaggedValueError

logger = logging.getLogger(__name__)


class Vec2(NamedTuple):
    """Two-component vector; components are floats for DVec2 and ints for IVec2/UVec2."""
    x: float
    y: float


@dataclass(frozen=True)
class Color:
    """Linear RGBA color with channels in [0, 1]."""
    red: float
    green: float
    blue: float
    alpha: float = 1.0

    def to_rgba_hex(self) -> str:
        channels = (self.red, self.green, self.blue, self.alpha)
        return "".join(f"{round(min(max(c, 0.0), 1.0) * 255):02x}" for c in channels)


Color.BLACK = Color(0.0, 0.0, 0.0, 1.0)
Color.WHITE = Color(1.0, 1.0, 1.0, 1.0)


@dataclass(frozen=True)
class GradientStops:
    """Ordered (position, color) stops of a gradient."""
    stops: Tuple[Tuple[float, Color], ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "stops", tuple((float(position), color) for position, color in self.stops))

    def reversed(self) -> "GradientStops":
        """Mirror the stops so the gradient runs the other way."""
        return GradientStops(tuple((1.0 - position, color) for position, color in reversed(self.stops)))


DEFAULT_GRADIENT_STOPS = GradientStops(((0.0, Color.BLACK), (1.0, Color.WHITE)))


@dataclass(frozen=True)
class Gradient:
    """Gradient with geometry, as stored in a fill."""
    stops: GradientStops = DEFAULT_GRADIENT_STOPS
    gradient_type: GradientType = GradientType.LINEAR
    start: Vec2 = Vec2(0.0, 0.5)
    end: Vec2 = Vec2(1.0, 0.5)


@dataclass(frozen=True)
class Fill:
    """Paint applied to a shape: nothing, a solid color, or a gradient."""
    color: Optional[Color] = None
    gradient: Optional[Gradient] = None

    def __post_init__(self):
        if self.color is not None and self.gradient is not None:
            raise TaggedValueError("A fill is either solid or a gradient, not both")

    @classmethod
    def none(cls) -> "Fill":
        return cls()

    @classmethod
    def solid(cls, color: Color) -> "Fill":
        return cls(color=color)

    @classmethod
    def from_gradient(cls, gradient: Gradient) -> "Fill":
        return cls(gradient=gradient)

    @classmethod
    def from_optional_color(cls, color: Optional[Color]) -> "Fill":
        return cls.none() if color is None else cls.solid(color)

    def is_none(self) -> bool:
        return self.color is None and self.gradient is None

    def as_solid(self) -> Optional[Color]:
        return self.color

    def as_gradient(self) -> Optional[Gradient]:
        return self.gradient


@dataclass(frozen=True)
class FillChoice:
    """Value shown by a color swatch: none, a solid color, or gradient stops."""
    color: Optional[Color] = None
    stops: Optional[GradientStops] = None

    @classmethod
    def from_fill(cls, fill: Fill) -> "FillChoice":
        if fill.gradient is not None:
            return cls(stops=fill.gradient.stops)
        return cls(color=fill.color)

    def as_solid(self) -> Optional[Color]:
        return self.color

    def as_gradient(self) -> Optional[GradientStops]:
        return self.stops

    def to_fill(self, existing_gradient: Optional[Gradient] = None) -> Fill:
        """Convert to a fill, keeping the geometry of ``existing_gradient`` when the choice is a gradient."""
        if self.stops is not None:
            base = existing_gradient if existing_gradient is not None else Gradient()
            return Fill.from_gradient(dataclasses.replace(base, stops=self.stops))
        return Fill.from_optional_color(self.color)


@dataclass(frozen=True)
class Font:
    font_family: str
    font_style: str


@dataclass(frozen=True)
class CurveManipulatorGroup:
    anchor: Vec2
    handles: Tuple[Vec2, Vec2]


@dataclass(frozen=True)
class Curve:
    """Tone curve edited by the curve control."""
    manipulator_groups: Tuple[CurveManipulatorGroup, ...] = ()
    first_handle: Vec2 = Vec2(0.2, 0.2)
    last_handle: Vec2 = Vec2(0.8, 0.8)


@dataclass(frozen=True)
class Footprint:
    """
    Camera footprint: the document-space transform of the viewed area plus its render resolution.

    ``transform`` holds the affine matrix as ``(a, b, c, d, e, f)``: the x axis
    ``(a, b)``, the y axis ``(c, d)`` and the translation ``(e, f)``.
    """
    transform: Tuple[float, float, float, float, float, float] = (1.0, 0.0, 0.0, 1.0, 0.0, 0.0)
    resolution: Vec2 = Vec2(1920, 1080)

    def __post_init__(self):
        object.__setattr__(self, "transform", tuple(float(v) for v in self.transform))
        object.__setattr__(self, "resolution", Vec2(int(self.resolution[0]), int(self.resolution[1])))

    def matrix(self) -> np.ndarray:
        a, b, c, d, e, f = self.transform
        return np.array([[a, c, e], [b, d, f], [0.0, 0.0, 1.0]])

    def transform_point2(self, point) -> np.ndarray:
        homogeneous = self.matrix() @ np.array([point[0], point[1], 1.0])
        return homogeneous[:2]

    def scale(self) -> np.ndarray:
        """Length of each transformed axis (the size of the viewed area)."""
        return np.linalg.norm(self.matrix()[:2, :2], axis=0)

    @staticmethod
    def from_scale_angle_translation(scale, angle: float, translation) -> Tuple[float, ...]:
        cos, sin = np.cos(angle), np.sin(angle)
        sx, sy = float(scale[0]), float(scale[1])
        return (cos * sx, sin * sx, -sin * sy, cos * sy, float(translation[0]), float(translation[1]))


class ValueTag(Enum):
    """Shape of a tagged value. Also used as the identity token of concrete types."""
    BOOL = "bool"
    F64 = "f64"
    OPTIONAL_F64 = "Option<f64>"
    U32 = "u32"
    U64 = "u64"
    STRING = "String"
    COLOR = "Color"
    OPTIONAL_COLOR = "Option<Color>"
    GRADIENT_STOPS = "GradientStops"
    GRADIENT = "Gradient"
    FILL = "Fill"
    DVEC2 = "DVec2"
    IVEC2 = "IVec2"
    UVEC2 = "UVec2"
    VEC_F64 = "Vec<f64>"
    VEC_DVEC2 = "Vec<DVec2>"
    F64_ARRAY4 = "[f64; 4]"
    FONT = "Font"
    CURVE = "Curve"
    FOOTPRINT = "Footprint"
    BLEND_MODE = "BlendMode"
    REAL_TIME_MODE = "RealTimeMode"
    RED_GREEN_BLUE = "RedGreenBlue"
    RED_GREEN_BLUE_ALPHA = "RedGreenBlueAlpha"
    XY = "XY"
    NOISE_TYPE = "NoiseType"
    FRACTAL_TYPE = "FractalType"
    CELLULAR_DISTANCE_FUNCTION = "CellularDistanceFunction"
    CELLULAR_RETURN_TYPE = "CellularReturnType"
    DOMAIN_WARP_TYPE = "DomainWarpType"
    RELATIVE_ABSOLUTE = "RelativeAbsolute"
    SELECTIVE_COLOR_CHOICE = "SelectiveColorChoice"
    GRID_TYPE = "GridType"
    LINE_CAP = "LineCap"
    LINE_JOIN = "LineJoin"
    ARC_TYPE = "ArcType"
    FILL_TYPE = "FillType"
    GRADIENT_TYPE = "GradientType"
    BOOLEAN_OPERATION = "BooleanOperation"
    CENTROID_TYPE = "CentroidType"
    LUMINANCE_CALCULATION = "LuminanceCalculation"
    VECTOR_DATA = "VectorDataTable"
    RASTER_DATA = "RasterFrame"
    GRAPHIC_GROUP = "GraphicGroupTable"


ENUM_TAGS: Dict[ValueTag, Type[Enum]] = {
    ValueTag.BLEND_MODE: BlendMode,
    ValueTag.REAL_TIME_MODE: RealTimeMode,
    ValueTag.RED_GREEN_BLUE: RedGreenBlue,
    ValueTag.RED_GREEN_BLUE_ALPHA: RedGreenBlueAlpha,
    ValueTag.XY: XY,
    ValueTag.NOISE_TYPE: NoiseType,
    ValueTag.FRACTAL_TYPE: FractalType,
    ValueTag.CELLULAR_DISTANCE_FUNCTION: CellularDistanceFunction,
    ValueTag.CELLULAR_RETURN_TYPE: CellularReturnType,
    ValueTag.DOMAIN_WARP_TYPE: DomainWarpType,
    ValueTag.RELATIVE_ABSOLUTE: RelativeAbsolute,
    ValueTag.SELECTIVE_COLOR_CHOICE: SelectiveColorChoice,
    ValueTag.GRID_TYPE: GridType,
    ValueTag.LINE_CAP: LineCap,
    ValueTag.LINE_JOIN: LineJoin,
    ValueTag.ARC_TYPE: ArcType,
    ValueTag.FILL_TYPE: FillType,
    ValueTag.GRADIENT_TYPE: GradientType,
    ValueTag.BOOLEAN_OPERATION: BooleanOperation,
    ValueTag.CENTROID_TYPE: CentroidType,
    ValueTag.LUMINANCE_CALCULATION: LuminanceCalculation,
}

# Graph data is never edited in the panel; any payload is accepted
OPAQUE_TAGS = frozenset({ValueTag.VECTOR_DATA, ValueTag.RASTER_DATA, ValueTag.GRAPHIC_GROUP})


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float, np.integer, np.floating)) and not isinstance(value, bool)


def _is_int(value: Any) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


def _to_float(value: Any) -> float:
    if not _is_number(value):
        raise TaggedValueError(f"Expected a number, got {type(value).__name__}")
    return float(value)


def _to_uint(bits: int) -> Callable[[Any], int]:
    limit = 2 ** bits - 1

    def convert(value: Any) -> int:
        if not _is_int(value) or not 0 <= value <= limit:
            raise TaggedValueError(f"Expected an unsigned {bits}-bit integer, got {value!r}")
        return int(value)
    return convert


def _instance_of(cls: type, optional: bool = False) -> Callable[[Any], Any]:
    def convert(value: Any) -> Any:
        if value is None and optional:
            return None
        if not isinstance(value, cls):
            raise TaggedValueError(f"Expected {cls.__name__}, got {type(value).__name__}")
        return value
    return convert


def _to_vec2(component: Callable[[Any], Any]) -> Callable[[Any], Vec2]:
    def convert(value: Any) -> Vec2:
        if not isinstance(value, (tuple, list)) or len(value) != 2:
            raise TaggedValueError(f"Expected a 2-component vector, got {value!r}")
        return Vec2(component(value[0]), component(value[1]))
    return convert


def _to_int(value: Any) -> int:
    if not _is_int(value):
        raise TaggedValueError(f"Expected an integer, got {value!r}")
    return int(value)


def _to_float_tuple(length: Optional[int] = None) -> Callable[[Any], Tuple[float, ...]]:
    def convert(value: Any) -> Tuple[float, ...]:
        if not isinstance(value, (tuple, list)):
            raise TaggedValueError(f"Expected a sequence of numbers, got {type(value).__name__}")
        if length is not None and len(value) != length:
            raise TaggedValueError(f"Expected exactly {length} numbers, got {len(value)}")
        return tuple(_to_float(v) for v in value)
    return convert


def _to_optional_float(value: Any) -> Optional[float]:
    return None if value is None else _to_float(value)


def _to_bool(value: Any) -> bool:
    if not isinstance(value, bool):
        raise TaggedValueError(f"Expected bool, got {type(value).__name__}")
    return value


def _to_str(value: Any) -> str:
    if not isinstance(value, str):
        raise TaggedValueError(f"Expected str, got {type(value).__name__}")
    return value


def _to_point_list(value: Any) -> Tuple[Vec2, ...]:
    if not isinstance(value, (tuple, list)):
        raise TaggedValueError(f"Expected a sequence of points, got {type(value).__name__}")
    point = _to_vec2(_to_float)
    return tuple(point(v) for v in value)


# Payload normalizers, one per non-enum, non-opaque tag
_NORMALIZERS: Dict[ValueTag, Callable[[Any], Any]] = {
    ValueTag.BOOL: _to_bool,
    ValueTag.F64: _to_float,
    ValueTag.OPTIONAL_F64: _to_optional_float,
    ValueTag.U32: _to_uint(32),
    ValueTag.U64: _to_uint(64),
    ValueTag.STRING: _to_str,
    ValueTag.COLOR: _instance_of(Color),
    ValueTag.OPTIONAL_COLOR: _instance_of(Color, optional=True),
    ValueTag.GRADIENT_STOPS: _instance_of(GradientStops),
    ValueTag.GRADIENT: _instance_of(Gradient),
    ValueTag.FILL: _instance_of(Fill),
    ValueTag.DVEC2: _to_vec2(_to_float),
    ValueTag.IVEC2: _to_vec2(_to_int),
    ValueTag.UVEC2: _to_vec2(_to_uint(32)),
    ValueTag.VEC_F64: _to_float_tuple(),
    ValueTag.VEC_DVEC2: _to_point_list,
    ValueTag.F64_ARRAY4: _to_float_tuple(4),
    ValueTag.FONT: _instance_of(Font),
    ValueTag.CURVE: _instance_of(Curve),
    ValueTag.FOOTPRINT: _instance_of(Footprint),
}


@dataclass(frozen=True)
class TaggedValue:
    """A literal input value paired with the tag naming its shape."""
    tag: ValueTag
    value: Any = field(default=None)

    def __post_init__(self):
        if not isinstance(self.tag, ValueTag):
            raise TaggedValueError(f"Unknown value tag: {self.tag!r}")
        if self.tag in OPAQUE_TAGS:
            return
        enum_type = ENUM_TAGS.get(self.tag)
        if enum_type is not None:
            if not isinstance(self.value, enum_type):
                raise TaggedValueError(f"{self.tag.name} expects a {enum_type.__name__}, got {self.value!r}")
            return
        try:
            normalized = _NORMALIZERS[self.tag](self.value)
        except TaggedValueError as e:
            raise TaggedValueError(f"Invalid payload for {self.tag.name}: {e}") from e
        object.__setattr__(self, "value", normalized)

    @classmethod
    def of_enum(cls, member: Enum) -> "TaggedValue":
        """Tag an enum member with the tag registered for its enum class."""
        for tag, enum_type in ENUM_TAGS.items():
            if isinstance(member, enum_type):
                return cls(tag, member)
        raise TaggedValueError(f"No value tag registered for enum {type(member).__name__}")