# textruns/pipeline.py

from __future__ import annotations

import dataclasses
import logging
from typing import Iterable, List, Optional

from .cache import ResultCache
from .compose import compose_styles
from .models import Emphasis, EmphasisStyle, Highlight, TextRun
from .policy import RenderPolicy, load_policy
from .transform import partition_text

logger = logging.getLogger(__name__)


def build_runs(
    text: str,
    highlights: Iterable[Highlight] = (),
    emphases: Iterable[Emphasis] = (),
    policy: Optional[RenderPolicy] = None,
    cache: Optional[ResultCache] = None,
) -> List[TextRun]:
    """
    Highlights + emphases -> ordered text runs for a renderer.

    cache:
      - If None: compute the styled segments fresh.
      - Otherwise: memoize them by input value.
    """
    policy = policy or RenderPolicy()
    spans = list(highlights)
    layers = list(emphases)

    if policy.strict_styles:
        for emphasis in layers:
            EmphasisStyle.coerce(emphasis.style, strict=True)

    if not spans and not layers:
        return partition_text(text, [])

    if cache is not None:
        segments = cache.compose(spans, layers, policy.default_color)
    else:
        segments = compose_styles(spans, layers, policy.default_color)

    runs = partition_text(text, segments)
    logger.debug(
        "Built %d runs from %d highlights, %d emphases", len(runs), len(spans), len(layers)
    )

    if policy.color_override:
        runs = [
            dataclasses.replace(run, highlight_color=policy.color_for(run.highlight_color))
            if run.is_highlight
            else run
            for run in runs
        ]
    return runs


def render_text(
    text: str,
    highlights: Iterable[Highlight] = (),
    emphases: Iterable[Emphasis] = (),
    policy_path: str = "configs/render.yaml",
    cache: Optional[ResultCache] = None,
) -> List[TextRun]:
    """Load the render policy at policy_path and build the runs for text."""
    policy = load_policy(policy_path)
    return build_runs(text, highlights, emphases, policy=policy, cache=cache)
