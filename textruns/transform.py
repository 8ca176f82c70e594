# textruns/transform.py

from __future__ import annotations

from typing import Iterable, List, Sequence

from textruns.compose import compose_styles
from textruns.errors import InvalidRange
from textruns.models import DEFAULT_HIGHLIGHT_COLOR, Highlight, StyledSegment, TextRun
from textruns.validators import check_bounds


def partition_text(text: str, segments: Sequence[StyledSegment]) -> List[TextRun]:
    """
    Slice text into ordered runs: one styled run per segment and plain runs
    for the gaps before, between and after them. Empty runs are dropped, so
    joining the run texts gives back the original string.

    Segments must be sorted and non-overlapping.
    """
    runs: List[TextRun] = []
    cursor = 0

    for seg in segments:
        check_bounds(seg.start, seg.end, len(text))
        if seg.start < cursor:
            raise InvalidRange(
                f"Segment [{seg.start}, {seg.end}) overlaps or precedes offset {cursor}"
            )

        if seg.start > cursor:
            runs.append(TextRun(text[cursor:seg.start], cursor, seg.start))

        if seg.end > seg.start:
            runs.append(
                TextRun(
                    text=text[seg.start:seg.end],
                    start=seg.start,
                    end=seg.end,
                    is_highlight=seg.is_highlight,
                    highlight_color=seg.highlight_color,
                    highlight_id=seg.highlight_id,
                    style=seg.emphasis_style,
                )
            )
        cursor = seg.end

    if cursor < len(text):
        runs.append(TextRun(text[cursor:], cursor, len(text)))

    return runs


def partition_highlights(
    text: str,
    highlights: Iterable[Highlight],
    default_color: str = DEFAULT_HIGHLIGHT_COLOR,
) -> List[TextRun]:
    """Runs for highlights alone, with no emphasis styling."""
    return partition_text(text, compose_styles(highlights, [], default_color))
