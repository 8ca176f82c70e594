# textruns/compose.py

from __future__ import annotations

import bisect
from typing import Iterable, List, Optional, Sequence, Tuple

from textruns.models import (
    DEFAULT_HIGHLIGHT_COLOR,
    Emphasis,
    EmphasisStyle,
    Highlight,
    MergedHighlight,
    StyledSegment,
)
from textruns.resolve import merge_highlights
from textruns.validators import check_range

# (start, end, highlight group index, emphasis index)
_Piece = Tuple[int, int, Optional[int], Optional[int]]


def _covering_highlight(
    merged: Sequence[MergedHighlight], starts: Sequence[int], offset: int
) -> Optional[int]:
    ix = bisect.bisect_right(starts, offset) - 1
    if ix >= 0 and merged[ix].contains(offset):
        return ix
    return None


def _top_emphasis(emphases: Sequence[Emphasis], offset: int) -> Optional[int]:
    # last one in input order has the highest priority
    for ix in range(len(emphases) - 1, -1, -1):
        emphasis = emphases[ix]
        if emphasis.start <= offset < emphasis.end:
            return ix
    return None


def _sweep(merged: Sequence[MergedHighlight], emphases: Sequence[Emphasis]) -> List[_Piece]:
    boundaries = sorted(
        {b for span in (*merged, *emphases) for b in (span.start, span.end)}
    )
    starts = [h.start for h in merged]

    pieces: List[_Piece] = []
    for b0, b1 in zip(boundaries, boundaries[1:]):
        hl = _covering_highlight(merged, starts, b0)
        em = _top_emphasis(emphases, b0)
        if hl is None and em is None:
            continue

        if pieces:
            p_start, p_end, p_hl, p_em = pieces[-1]
            if p_end == b0 and p_hl == hl and p_em == em:
                pieces[-1] = (p_start, b1, hl, em)
                continue

        pieces.append((b0, b1, hl, em))
    return pieces


def compose_styles(
    highlights: Iterable[Highlight],
    emphases: Iterable[Emphasis],
    default_color: str = DEFAULT_HIGHLIGHT_COLOR,
) -> List[StyledSegment]:
    """
    Composite emphasis spans on top of merged highlights.

    Returns sorted, non-overlapping segments covering exactly the union of
    all highlight and emphasis ranges. Where emphases overlap each other the
    one supplied last wins, so emphasis order is a priority order (highest
    last). Segments owned by the same highlight group and emphasis are
    coalesced; zero-length spans cover nothing and produce no segment.
    """
    merged = [h for h in merge_highlights(highlights, default_color) if h.start < h.end]

    layers = list(emphases)
    for emphasis in layers:
        check_range(emphasis.start, emphasis.end, "emphasis")
    layers = [e for e in layers if e.start < e.end]

    segments: List[StyledSegment] = []
    for start, end, hl, em in _sweep(merged, layers):
        style = layers[em].style if em is not None else EmphasisStyle()
        if hl is None:
            segments.append(StyledSegment(start, end, emphasis_style=style))
            continue

        group = merged[hl]
        segments.append(
            StyledSegment(
                start=start,
                end=end,
                is_highlight=True,
                highlight_color=group.color,
                highlight_id=group.id,
                emphasis_style=style,
            )
        )

    return segments
