"""
Centralized enum presentation for dropdowns and radio groups.

Every enum control lists its members through this module so labels, section
grouping and selected indices agree across the catalog and the composite
builders.
"""

from enum import Enum
from typing import Optional, Sequence, Tuple, Type

from nodepanel.constants.constants import BlendMode, BooleanOperation, SelectiveColorChoice


# Hue bands first, then tonal ranges
SELECTIVE_COLOR_SECTIONS: Tuple[Tuple[SelectiveColorChoice, ...], ...] = (
    tuple(SelectiveColorChoice)[:6],
    tuple(SelectiveColorChoice)[6:],
)


class EnumDisplayFormatter:
    """
    Formatter for enum display text and menu layout.

    Enum values in ``nodepanel.constants`` are their display labels, so the
    label of a member is its value. Members are listed in declaration order
    unless the enum defines its own sectioning (blend modes are grouped by
    category).
    """

    @staticmethod
    def get_display_text(enum_value: Enum) -> str:
        """
        Get the display text for an enum value.

        Example:
            >>> EnumDisplayFormatter.get_display_text(BlendMode.COLOR_BURN)
            'Color Burn'
        """
        if not isinstance(enum_value, Enum):
            raise TypeError(f"Expected Enum instance, got {type(enum_value)}")

        return enum_value.value

    @staticmethod
    def get_icon(enum_value: Enum) -> Optional[str]:
        """Icon name for radio entries; only boolean operations carry icons."""
        if isinstance(enum_value, BooleanOperation):
            return enum_value.icon
        return None

    @staticmethod
    def get_sections(enum_class: Type[Enum]) -> Tuple[Tuple[Enum, ...], ...]:
        """Members grouped into menu sections."""
        if not issubclass(enum_class, Enum):
            raise TypeError(f"Expected Enum class, got {type(enum_class)}")

        if enum_class is BlendMode:
            return BlendMode.list_svg_subset()
        if enum_class is SelectiveColorChoice:
            return SELECTIVE_COLOR_SECTIONS
        return (tuple(enum_class),)

    @staticmethod
    def get_selected_index(sections: Sequence[Sequence[Enum]], current: Optional[Enum]) -> Optional[int]:
        """Flat index of ``current`` across all sections, or None when it is not listed."""
        flat = [member for section in sections for member in section]
        return flat.index(current) if current in flat else None
