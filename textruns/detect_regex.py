# textruns/detect_regex.py

from __future__ import annotations

import regex as re
from typing import Iterable, List, Optional

from textruns.models import Highlight


def find_pattern_highlights(
    text: str,
    pattern: str,
    color: Optional[str] = None,
    id_prefix: str = "match",
    ignore_case: bool = False,
) -> List[Highlight]:
    """
    One highlight per non-empty match of pattern, with ids "<prefix>-<n>".
    """
    flags = re.IGNORECASE if ignore_case else 0
    compiled = re.compile(pattern, flags)

    highlights: List[Highlight] = []
    for m in compiled.finditer(text):
        # Zero-width matches (lookarounds, "x*") have nothing to paint
        if m.end() == m.start():
            continue
        highlights.append(
            Highlight(
                id=f"{id_prefix}-{len(highlights) + 1}",
                start=m.start(),
                end=m.end(),
                color=color,
            )
        )
    return highlights


def find_term_highlights(
    text: str,
    terms: Iterable[str],
    color: Optional[str] = None,
    ignore_case: bool = True,
    whole_words: bool = False,
) -> List[Highlight]:
    """Highlight literal search terms; each term gets its own id prefix."""
    highlights: List[Highlight] = []
    for term in terms:
        term = term.strip()
        if not term:
            continue
        pattern = re.escape(term)
        if whole_words:
            pattern = rf"\b{pattern}\b"
        highlights += find_pattern_highlights(
            text, pattern, color=color, id_prefix=term, ignore_case=ignore_case
        )
    return highlights
