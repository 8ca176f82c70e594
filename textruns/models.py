# textruns/models.py

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, Iterable, Optional, Tuple

from textruns.errors import UnsupportedStyleAttribute
from textruns.validators import check_color, check_range

DEFAULT_HIGHLIGHT_COLOR = "yellow"

# Typographic flags a host can toggle with a plain name ("bold", "italic", ...)
EMPHASIS_TYPES = ("bold", "italic", "underline", "strikethrough")


def ranges_overlap(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
    """
    Symmetric overlap test: true when an endpoint of either range lies
    inside the half-open range of the other.
    """
    return (
        (a_start <= b_start < a_end)
        or (a_start < b_end <= a_end)
        or (b_start <= a_start < b_end)
        or (b_start < a_end <= b_end)
    )


def _check_identifier(value: Any, what: str) -> None:
    try:
        hash(value)
    except TypeError:
        raise UnsupportedStyleAttribute(f"{what} id must be hashable, got {value!r}") from None


@dataclass(frozen=True)
class EmphasisStyle:
    bold: bool = False
    italic: bool = False
    underline: bool = False
    strikethrough: bool = False
    color: Optional[str] = None
    font_size: Optional[float] = None
    # Unrecognized attributes, sorted by name so equal mappings compare equal
    extra: Tuple[Tuple[str, Any], ...] = ()

    @classmethod
    def from_mapping(cls, mapping: Mapping, strict: bool = False) -> "EmphasisStyle":
        if not isinstance(mapping, Mapping):
            raise UnsupportedStyleAttribute(f"Style must be a mapping, got {mapping!r}")

        known: Dict[str, Any] = {}
        extra = []
        for key, value in mapping.items():
            if not isinstance(key, str):
                raise UnsupportedStyleAttribute(f"Style attribute names must be strings, got {key!r}")

            if key in EMPHASIS_TYPES:
                if not isinstance(value, bool):
                    raise UnsupportedStyleAttribute(f"'{key}' must be a boolean, got {value!r}")
                known[key] = value
            elif key == "color":
                if value is not None and not isinstance(value, str):
                    raise UnsupportedStyleAttribute(f"'color' must be a string, got {value!r}")
                known[key] = value
            elif key == "font_size":
                if value is not None and (
                    isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0
                ):
                    raise UnsupportedStyleAttribute(f"'font_size' must be a positive number, got {value!r}")
                known[key] = value
            else:
                if strict:
                    raise UnsupportedStyleAttribute(f"Unknown style attribute '{key}'")
                try:
                    hash(value)
                except TypeError:
                    raise UnsupportedStyleAttribute(
                        f"Style attribute '{key}' must be a scalar, got {value!r}"
                    ) from None
                extra.append((key, value))

        return cls(**known, extra=tuple(sorted(extra, key=lambda kv: kv[0])))

    @classmethod
    def from_types(cls, types: Iterable[str]) -> "EmphasisStyle":
        """Build a style from a list of flag names such as ``["bold", "italic"]``."""
        if isinstance(types, str):
            raise UnsupportedStyleAttribute(f"Emphasis types must be a list, got {types!r}")
        flags = {}
        for name in types:
            if name not in EMPHASIS_TYPES:
                raise UnsupportedStyleAttribute(f"Unknown emphasis type {name!r}")
            flags[name] = True
        return cls(**flags)

    @classmethod
    def coerce(cls, value: Any, strict: bool = False) -> "EmphasisStyle":
        if isinstance(value, EmphasisStyle):
            if strict and value.extra:
                raise UnsupportedStyleAttribute(
                    f"Unknown style attribute '{value.extra[0][0]}'"
                )
            return value
        if value is None:
            return cls()
        if isinstance(value, Mapping):
            return cls.from_mapping(value, strict=strict)
        if isinstance(value, (list, tuple, set, frozenset)):
            return cls.from_types(value)
        raise UnsupportedStyleAttribute(f"Unsupported style value {value!r}")

    @property
    def is_plain(self) -> bool:
        return self == EmphasisStyle()

    def to_mapping(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {name: True for name in EMPHASIS_TYPES if getattr(self, name)}
        if self.color is not None:
            out["color"] = self.color
        if self.font_size is not None:
            out["font_size"] = self.font_size
        out.update(self.extra)
        return out

    def to_font_style(self) -> Dict[str, Any]:
        """Presentation attributes in the camelCase form native views expect."""
        out: Dict[str, Any] = {}
        if self.bold:
            out["fontWeight"] = "bold"
        if self.italic:
            out["fontStyle"] = "italic"
        decorations = []
        if self.underline:
            decorations.append("underline")
        if self.strikethrough:
            decorations.append("line-through")
        if decorations:
            out["textDecorationLine"] = " ".join(decorations)
        if self.color is not None:
            out["color"] = self.color
        if self.font_size is not None:
            out["fontSize"] = self.font_size
        out.update(self.extra)
        return out

    def to_css(self) -> str:
        decls = []
        if self.bold:
            decls.append("font-weight: bold")
        if self.italic:
            decls.append("font-style: italic")
        decorations = [
            name
            for name, on in (("underline", self.underline), ("line-through", self.strikethrough))
            if on
        ]
        if decorations:
            decls.append("text-decoration: " + " ".join(decorations))
        if self.color is not None:
            decls.append(f"color: {self.color}")
        if self.font_size is not None:
            decls.append(f"font-size: {self.font_size}px")
        for key, value in self.extra:
            decls.append(f"{key.replace('_', '-')}: {value}")
        return "; ".join(decls)


@dataclass(frozen=True)
class Highlight:
    id: Hashable
    start: int
    end: int
    color: Optional[str] = None

    def __post_init__(self):
        check_range(self.start, self.end, "highlight")
        check_color(self.color)
        _check_identifier(self.id, "Highlight")

    def overlaps(self, other) -> bool:
        return ranges_overlap(self.start, self.end, other.start, other.end)


@dataclass(frozen=True)
class Emphasis:
    start: int
    end: int
    style: EmphasisStyle = field(default_factory=EmphasisStyle)
    id: Optional[Hashable] = None

    def __post_init__(self):
        check_range(self.start, self.end, "emphasis")
        _check_identifier(self.id, "Emphasis")
        # frozen: normalize mappings / type lists in place
        object.__setattr__(self, "style", EmphasisStyle.coerce(self.style))

    def overlaps(self, other) -> bool:
        return ranges_overlap(self.start, self.end, other.start, other.end)


@dataclass(frozen=True)
class MergedHighlight:
    start: int
    end: int
    id: Hashable
    color: str = DEFAULT_HIGHLIGHT_COLOR

    def contains(self, offset: int) -> bool:
        return self.start <= offset < self.end


@dataclass(frozen=True)
class StyledSegment:
    start: int
    end: int
    is_highlight: bool = False
    highlight_color: Optional[str] = None
    highlight_id: Optional[Hashable] = None
    emphasis_style: EmphasisStyle = field(default_factory=EmphasisStyle)


@dataclass(frozen=True)
class TextRun:
    text: str
    start: int
    end: int
    is_highlight: bool = False
    highlight_color: Optional[str] = None
    highlight_id: Optional[Hashable] = None
    style: EmphasisStyle = field(default_factory=EmphasisStyle)
