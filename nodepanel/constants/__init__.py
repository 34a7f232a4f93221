from nodepanel.constants.constants import (
    ArcType,
    BlendMode,
    BooleanOperation,
    CellularDistanceFunction,
    CellularReturnType,
    CentroidType,
    DomainWarpType,
    FillType,
    FractalType,
    FrontendGraphDataType,
    GradientType,
    GridType,
    LineCap,
    LineJoin,
    LuminanceCalculation,
    NoiseType,
    RealTimeMode,
    RedGreenBlue,
    RedGreenBlueAlpha,
    RelativeAbsolute,
    SelectiveColorChoice,
    XY,
)

__all__ = [
    "ArcType",
    "BlendMode",
    "BooleanOperation",
    "CellularDistanceFunction",
    "CellularReturnType",
    "CentroidType",
    "DomainWarpType",
    "FillType",
    "FractalType",
    "FrontendGraphDataType",
    "GradientType",
    "GridType",
    "LineCap",
    "LineJoin",
    "LuminanceCalculation",
    "NoiseType",
    "RealTimeMode",
    "RedGreenBlue",
    "RedGreenBlueAlpha",
    "RelativeAbsolute",
    "SelectiveColorChoice",
    "XY",
]
