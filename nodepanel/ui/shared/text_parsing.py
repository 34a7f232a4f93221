"""
Free-text parsing and formatting for list-valued controls.

Parsers return None when any token fails to parse, so a half-typed value is
never written back to the graph.
"""

import re
from typing import Iterable, Optional, Tuple

from nodepanel.core.tagged_value import Vec2

_LIST_SEPARATORS = re.compile(r"[, ]")
_POINT_SEPARATORS = re.compile(r"[^0-9A-Za-z.+\-]")
_FLOAT_TOKEN = re.compile(r"[+-]?(\d+\.?\d*([eE][+-]?\d+)?|\.\d+([eE][+-]?\d+)?|inf|infinity|nan)", re.IGNORECASE)


def parse_number(token: str) -> Optional[float]:
    """Parse a single float token; None if it is not a plain decimal number."""
    if not _FLOAT_TOKEN.fullmatch(token):
        return None
    return float(token)


def format_number(value: float) -> str:
    """Shortest text for a float: integral values drop the fractional part."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def _parse_tokens(tokens: Iterable[str]) -> Optional[Tuple[float, ...]]:
    numbers = []
    for token in tokens:
        if not token:
            continue
        number = parse_number(token)
        if number is None:
            return None
        numbers.append(number)
    return tuple(numbers)


def parse_float_list(text: str) -> Optional[Tuple[float, ...]]:
    """'1, 2 3' -> (1.0, 2.0, 3.0). Splits on commas and spaces."""
    return _parse_tokens(_LIST_SEPARATORS.split(text))


def format_float_list(values: Iterable[float]) -> str:
    return ", ".join(format_number(v) for v in values)


def parse_point_list(text: str) -> Optional[Tuple[Vec2, ...]]:
    """
    '(1, 2), (3, 4)' -> (Vec2(1, 2), Vec2(3, 4)).

    Any character other than letters, digits, '.', '+' and '-' separates
    numbers. Numbers are paired in order and a trailing unpaired number is
    dropped.
    """
    numbers = _parse_tokens(_POINT_SEPARATORS.split(text))
    if numbers is None:
        return None
    return tuple(Vec2(numbers[i], numbers[i + 1]) for i in range(0, len(numbers) - 1, 2))


def format_point_list(points: Iterable[Vec2]) -> str:
    return ", ".join(f"({format_number(p[0])}, {format_number(p[1])})" for p in points)


def parse_float_array4(text: str) -> Optional[Tuple[float, float, float, float]]:
    """Parse exactly four numbers; any other count is rejected."""
    numbers = parse_float_list(text)
    if numbers is None or len(numbers) != 4:
        return None
    return numbers
