# textruns/errors.py


class TextRunsError(ValueError):
    """Base class for caller contract violations on span input."""


class InvalidRange(TextRunsError):
    """A span has negative offsets, ``start > end``, or overlaps its predecessor."""


class RangeOutOfBounds(TextRunsError):
    """A segment reaches outside the source string."""


class UnsupportedStyleAttribute(TextRunsError):
    """A style attribute or color has a shape the renderer does not accept."""
