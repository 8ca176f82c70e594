# textruns/validators.py

from __future__ import annotations

from typing import Any

from textruns.errors import InvalidRange, RangeOutOfBounds, UnsupportedStyleAttribute


def check_range(start: Any, end: Any, what: str = "span") -> None:
    """
    Fail fast on offsets that cannot describe a half-open character range.
    """
    # bool is an int subclass but never a valid offset
    for value in (start, end):
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidRange(f"{what} offsets must be integers, got {value!r}")
    if start < 0 or end < 0:
        raise InvalidRange(f"Negative offset in {what} [{start}, {end})")
    if start > end:
        raise InvalidRange(f"Invalid {what} [{start}, {end})")


def check_bounds(start: int, end: int, length: int) -> None:
    check_range(start, end, "segment")
    if end > length:
        raise RangeOutOfBounds(
            f"Segment [{start}, {end}) exceeds text of length {length}"
        )


def check_color(color: Any) -> None:
    if color is not None and not isinstance(color, str):
        raise UnsupportedStyleAttribute(f"Highlight color must be a string, got {color!r}")
    if isinstance(color, str) and not color.strip():
        raise UnsupportedStyleAttribute("Highlight color must not be blank")
