# tests/test_pipeline.py

import pytest

from textruns.cache import ResultCache
from textruns.errors import UnsupportedStyleAttribute
from textruns.models import Emphasis, Highlight
from textruns.pipeline import build_runs, render_text
from textruns.policy import RenderPolicy


def test_render_basic():
    text = "Read the highlighted words, then the bold ones."
    runs = render_text(
        text,
        [Highlight("note", 9, 26)],
        [Emphasis(21, 32, ["bold"])],
        "configs/render.yaml",
    )

    assert "".join(r.text for r in runs) == text
    assert [r.text for r in runs] == [
        "Read the ",
        "highlighted ",
        "words",
        ", then",
        " the bold ones.",
    ]
    assert runs[1].is_highlight and runs[1].style.is_plain
    assert runs[2].is_highlight and runs[2].style.bold
    assert not runs[3].is_highlight and runs[3].style.bold
    assert runs[2].highlight_id == "note"
    assert runs[2].highlight_color == "yellow"


def test_no_spans_returns_the_whole_text():
    runs = build_runs("plain text")
    assert len(runs) == 1
    assert runs[0].text == "plain text"
    assert not runs[0].is_highlight


def test_color_override_applies_to_every_highlighted_run():
    runs = build_runs(
        "abcdef",
        [Highlight("a", 0, 2, color="red"), Highlight("b", 4, 6)],
        policy=RenderPolicy(color_override="#00ff00"),
    )
    assert [r.highlight_color for r in runs] == ["#00ff00", None, "#00ff00"]


def test_default_color_from_policy():
    runs = build_runs("abc", [Highlight("a", 0, 3)], policy=RenderPolicy(default_color="orange"))
    assert runs[0].highlight_color == "orange"


def test_strict_policy_rejects_unknown_attributes():
    with pytest.raises(UnsupportedStyleAttribute):
        build_runs(
            "abc",
            emphases=[Emphasis(0, 2, {"letter_spacing": 2})],
            policy=RenderPolicy(strict_styles=True),
        )


def test_cached_and_uncached_runs_match():
    cache = ResultCache()
    args = ("0123456789", [Highlight("h", 1, 6)], [Emphasis(4, 9, ["italic"])])
    assert build_runs(*args, cache=cache) == build_runs(*args)
    build_runs(*args, cache=cache)
    assert cache.stats().hits == 1
