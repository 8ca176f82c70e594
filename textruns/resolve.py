# textruns/resolve.py

from __future__ import annotations

from typing import Iterable, List

from textruns.models import DEFAULT_HIGHLIGHT_COLOR, Highlight, MergedHighlight
from textruns.validators import check_range


def merge_highlights(
    highlights: Iterable[Highlight],
    default_color: str = DEFAULT_HIGHLIGHT_COLOR,
) -> List[MergedHighlight]:
    """
    Collapse overlapping highlights into non-overlapping groups:
    - two highlights overlap only when one starts strictly before the other ends,
      so touching ranges (end == start) stay separate
    - on overlap the later highlight in (start, end) order wins id and color
    - equal (start, end) keys keep input order, so the later input wins
    """
    spans = list(highlights)
    if not spans:
        return []

    for span in spans:
        check_range(span.start, span.end, "highlight")

    spans.sort(key=lambda s: (s.start, s.end))

    result: List[MergedHighlight] = []
    for span in spans:
        color = span.color if span.color is not None else default_color

        if not result or result[-1].end <= span.start:
            result.append(MergedHighlight(span.start, span.end, span.id, color))
            continue

        last = result[-1]
        result[-1] = MergedHighlight(
            start=last.start,
            end=max(last.end, span.end),
            id=span.id,
            color=color,
        )

    return result
