# textruns/press.py

from __future__ import annotations

from typing import Hashable, Iterable, Optional, Sequence

from textruns.models import DEFAULT_HIGHLIGHT_COLOR, Highlight, TextRun
from textruns.resolve import merge_highlights


def find_pressed_highlight(
    highlights: Iterable[Highlight],
    range_start: int,
    range_end: int,
    tolerance: int = 1,
    default_color: str = DEFAULT_HIGHLIGHT_COLOR,
) -> Optional[Hashable]:
    """
    Map a pressed character range reported by the host view to the id of the
    first merged highlight containing it.

    Hosts report press ranges with off-by-one slack at word edges, so the
    highlight may be widened by ``tolerance`` characters on each side.
    """
    if range_start > range_end:
        range_start, range_end = range_end, range_start

    for group in merge_highlights(highlights, default_color):
        if range_start >= group.start - tolerance and range_end <= group.end + tolerance:
            return group.id
    return None


def highlight_id_at(runs: Sequence[TextRun], offset: int) -> Optional[Hashable]:
    """Id of the highlighted run covering offset, if any."""
    for run in runs:
        if run.start <= offset < run.end:
            return run.highlight_id if run.is_highlight else None
    return None
