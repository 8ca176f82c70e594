# textruns/render_html.py

from __future__ import annotations

import html
from typing import Iterable

from textruns.models import TextRun


def run_to_html(run: TextRun) -> str:
    text = html.escape(run.text).replace("\n", "<br/>")
    css = run.style.to_css()
    if run.is_highlight and run.highlight_color:
        css = "; ".join(part for part in (css, f"background-color: {run.highlight_color}") if part)

    if not css and not run.is_highlight:
        return text

    attrs = []
    if css:
        attrs.append(f'style="{html.escape(css)}"')
    if run.is_highlight and run.highlight_id is not None:
        attrs.append(f'data-highlight-id="{html.escape(str(run.highlight_id))}"')
    return f"<span {' '.join(attrs)}>{text}</span>"


def runs_to_html(runs: Iterable[TextRun]) -> str:
    """Render runs as escaped inline HTML; highlights carry data-highlight-id."""
    return "".join(run_to_html(run) for run in runs)
