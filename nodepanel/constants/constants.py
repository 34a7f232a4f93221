"""
Consolidated constants for nodepanel.

This module defines the enumerations that tagged values can carry and the
numeric limits shared by the widget constructors. Enum values are the
display labels shown in dropdowns and radio groups; member order is the
order in which they are listed.
"""

from enum import Enum
from typing import Optional, Tuple


class BlendMode(Enum):
    NORMAL = "Normal"
    MULTIPLY_ALPHA = "Multiply Alpha"
    ERASE = "Erase"
    RESTORE = "Restore"
    DARKEN = "Darken"
    MULTIPLY = "Multiply"
    COLOR_BURN = "Color Burn"
    LINEAR_BURN = "Linear Burn"
    DARKER_COLOR = "Darker Color"
    LIGHTEN = "Lighten"
    SCREEN = "Screen"
    COLOR_DODGE = "Color Dodge"
    LINEAR_DODGE = "Linear Dodge"
    LIGHTER_COLOR = "Lighter Color"
    OVERLAY = "Overlay"
    SOFT_LIGHT = "Soft Light"
    HARD_LIGHT = "Hard Light"
    VIVID_LIGHT = "Vivid Light"
    LINEAR_LIGHT = "Linear Light"
    PIN_LIGHT = "Pin Light"
    HARD_MIX = "Hard Mix"
    DIFFERENCE = "Difference"
    EXCLUSION = "Exclusion"
    SUBTRACT = "Subtract"
    DIVIDE = "Divide"
    HUE = "Hue"
    SATURATION = "Saturation"
    COLOR = "Color"
    LUMINOSITY = "Luminosity"

    @classmethod
    def list_svg_subset(cls) -> Tuple[Tuple["BlendMode", ...], ...]:
        """Blend modes expressible in SVG, grouped into dropdown sections."""
        return BLEND_MODE_SVG_SUBSET

    def index_in_list_svg_subset(self) -> Optional[int]:
        """Flat position of this mode across the SVG subset sections, or None if absent."""
        flat = [mode for section in BLEND_MODE_SVG_SUBSET for mode in section]
        return flat.index(self) if self in flat else None


BLEND_MODE_SVG_SUBSET: Tuple[Tuple[BlendMode, ...], ...] = (
    (BlendMode.NORMAL,),
    (BlendMode.DARKEN, BlendMode.MULTIPLY, BlendMode.COLOR_BURN),
    (BlendMode.LIGHTEN, BlendMode.SCREEN, BlendMode.COLOR_DODGE),
    (BlendMode.OVERLAY, BlendMode.SOFT_LIGHT, BlendMode.HARD_LIGHT),
    (BlendMode.DIFFERENCE, BlendMode.EXCLUSION),
    (BlendMode.HUE, BlendMode.SATURATION, BlendMode.COLOR, BlendMode.LUMINOSITY),
)


class RealTimeMode(Enum):
    UTC = "UTC"
    YEAR = "Year"
    HOUR = "Hour"
    MINUTE = "Minute"
    SECOND = "Second"
    MILLISECOND = "Millisecond"


class RedGreenBlue(Enum):
    RED = "Red"
    GREEN = "Green"
    BLUE = "Blue"


class RedGreenBlueAlpha(Enum):
    RED = "Red"
    GREEN = "Green"
    BLUE = "Blue"
    ALPHA = "Alpha"


class XY(Enum):
    X = "X"
    Y = "Y"


class NoiseType(Enum):
    PERLIN = "Perlin"
    OPEN_SIMPLEX_2 = "OpenSimplex2"
    OPEN_SIMPLEX_2S = "OpenSimplex2S"
    CELLULAR = "Cellular"
    VALUE_CUBIC = "Value Cubic"
    VALUE = "Value"
    WHITE_NOISE = "White Noise"


class FractalType(Enum):
    NONE = "None"
    FBM = "Fractional Brownian Motion"
    RIDGED = "Ridged"
    PING_PONG = "Ping Pong"
    DOMAIN_WARP_PROGRESSIVE = "Progressive (Domain Warp Only)"
    DOMAIN_WARP_INDEPENDENT = "Independent (Domain Warp Only)"


class CellularDistanceFunction(Enum):
    EUCLIDEAN = "Euclidean"
    EUCLIDEAN_SQ = "Euclidean Squared (Faster)"
    MANHATTAN = "Manhattan"
    HYBRID = "Hybrid"


class CellularReturnType(Enum):
    CELL_VALUE = "Cell Value"
    NEAREST = "Nearest (F1)"
    NEXT_NEAREST = "Next Nearest (F2)"
    AVERAGE = "Average (F1 / 2 + F2 / 2)"
    DIFFERENCE = "Difference (F2 - F1)"
    PRODUCT = "Product (F2 * F1 / 2)"
    DIVISION = "Division (F1 / F2)"


class DomainWarpType(Enum):
    NONE = "None"
    OPEN_SIMPLEX_2 = "OpenSimplex2"
    OPEN_SIMPLEX_2_REDUCED = "OpenSimplex2 Reduced"
    BASIC_GRID = "Basic Grid"


class RelativeAbsolute(Enum):
    RELATIVE = "Relative"
    ABSOLUTE = "Absolute"


class SelectiveColorChoice(Enum):
    REDS = "Reds"
    YELLOWS = "Yellows"
    GREENS = "Greens"
    CYANS = "Cyans"
    BLUES = "Blues"
    MAGENTAS = "Magentas"
    WHITES = "Whites"
    NEUTRALS = "Neutrals"
    BLACKS = "Blacks"


class GridType(Enum):
    RECTANGULAR = "Rectangular"
    ISOMETRIC = "Isometric"


class LineCap(Enum):
    BUTT = "Butt"
    ROUND = "Round"
    SQUARE = "Square"


class LineJoin(Enum):
    MITER = "Miter"
    BEVEL = "Bevel"
    ROUND = "Round"


class ArcType(Enum):
    OPEN = "Open"
    CLOSED = "Closed"
    PIE_SLICE = "Pie Slice"


class FillType(Enum):
    SOLID = "Solid"
    GRADIENT = "Gradient"


class GradientType(Enum):
    LINEAR = "Linear"
    RADIAL = "Radial"


class BooleanOperation(Enum):
    UNION = "Union"
    SUBTRACT_FRONT = "Subtract Front"
    SUBTRACT_BACK = "Subtract Back"
    INTERSECT = "Intersect"
    DIFFERENCE = "Difference"

    @property
    def icon(self) -> str:
        return "Boolean" + self.value.replace(" ", "")


class CentroidType(Enum):
    AREA = "Area"
    LENGTH = "Length"


class LuminanceCalculation(Enum):
    SRGB = "sRGB"
    PERCEPTUAL = "Perceptual"
    AVERAGE_CHANNELS = "Average Channel"
    MINIMUM_CHANNELS = "Minimum Channel"
    MAXIMUM_CHANNELS = "Maximum Channel"


class FrontendGraphDataType(Enum):
    """Data type shown on an input's expose toggle."""
    GENERAL = "General"
    NUMBER = "Number"
    RASTER = "Raster"
    VECTOR_DATA = "VectorData"
    GROUP = "Group"


# Numeric limits
# Largest integer exactly representable as f64 (2 ** f64 mantissa digits)
MAX_SAFE_INTEGER: float = float(1 << 53)
U32_MAX: float = float(2 ** 32 - 1)
I32_MIN: float = float(-2 ** 31)
I32_MAX: float = float(2 ** 31 - 1)

# Infix operators accepted as shorthand by the math expression field
MATH_INFIX_OPERATORS: Tuple[str, ...] = ("+", "-", "*", "/", "^", "%")
