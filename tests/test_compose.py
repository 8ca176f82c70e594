# tests/test_compose.py

import random
from types import SimpleNamespace

import pytest

from textruns.compose import compose_styles
from textruns.errors import InvalidRange
from textruns.models import Emphasis, EmphasisStyle, Highlight, StyledSegment

BOLD = EmphasisStyle(bold=True)
ITALIC = EmphasisStyle(italic=True)
PLAIN = EmphasisStyle()


def hl(start, end, id_, style=PLAIN, color="yellow"):
    return StyledSegment(start, end, True, color, id_, style)


def em(start, end, style):
    return StyledSegment(start, end, False, None, None, style)


def test_emphasis_over_highlight():
    segments = compose_styles(
        [Highlight("h", 2, 6)],
        [Emphasis(4, 8, {"bold": True})],
    )
    assert segments == [hl(2, 4, "h"), hl(4, 6, "h", BOLD), em(6, 8, BOLD)]


def test_emphasis_without_highlights():
    assert compose_styles([], [Emphasis(1, 3, ["italic"])]) == [em(1, 3, ITALIC)]


def test_highlights_without_emphases():
    segments = compose_styles([Highlight("a", 0, 5), Highlight("b", 3, 8), Highlight("c", 10, 12)], [])
    assert segments == [hl(0, 8, "b"), hl(10, 12, "c")]


def test_untouched_highlight_is_kept_whole():
    segments = compose_styles(
        [Highlight("near", 0, 4), Highlight("far", 20, 30, color="pink")],
        [Emphasis(2, 6, ["bold"])],
    )
    assert segments == [
        hl(0, 2, "near"),
        hl(2, 4, "near", BOLD),
        em(4, 6, BOLD),
        hl(20, 30, "far", color="pink"),
    ]


def test_emphasis_inside_highlight_splits_it():
    segments = compose_styles([Highlight("h", 0, 10)], [Emphasis(3, 5, ["bold"])])
    assert segments == [hl(0, 3, "h"), hl(3, 5, "h", BOLD), hl(5, 10, "h")]


def test_two_emphases_on_one_highlight():
    segments = compose_styles(
        [Highlight("h", 0, 10)],
        [Emphasis(2, 4, ["bold"]), Emphasis(6, 8, ["italic"])],
    )
    assert segments == [
        hl(0, 2, "h"),
        hl(2, 4, "h", BOLD),
        hl(4, 6, "h"),
        hl(6, 8, "h", ITALIC),
        hl(8, 10, "h"),
    ]


def test_same_range_emphases_later_one_wins():
    segments = compose_styles([], [Emphasis(0, 5, ["bold"]), Emphasis(0, 5, ["italic"])])
    assert segments == [em(0, 5, ITALIC)]


def test_overlapping_emphases_later_one_wins_on_shared_part():
    segments = compose_styles([], [Emphasis(0, 10, ["bold"]), Emphasis(5, 15, ["italic"])])
    assert segments == [em(0, 5, BOLD), em(5, 15, ITALIC)]

    # reversed priority
    segments = compose_styles([], [Emphasis(5, 15, ["italic"]), Emphasis(0, 10, ["bold"])])
    assert segments == [em(0, 10, BOLD), em(10, 15, ITALIC)]


def test_nested_emphasis_resumes_outer_style():
    segments = compose_styles([], [Emphasis(0, 10, ["bold"]), Emphasis(3, 5, ["italic"])])
    assert segments == [em(0, 3, BOLD), em(3, 5, ITALIC), em(5, 10, BOLD)]


def test_emphases_sharing_a_boundary_over_a_highlight():
    segments = compose_styles(
        [Highlight("h", 0, 8)],
        [Emphasis(2, 6, ["bold"]), Emphasis(2, 4, ["italic"])],
    )
    assert segments == [
        hl(0, 2, "h"),
        hl(2, 4, "h", ITALIC),
        hl(4, 6, "h", BOLD),
        hl(6, 8, "h"),
    ]


def test_touching_highlights_keep_their_identity_under_one_emphasis():
    segments = compose_styles(
        [Highlight("a", 0, 5), Highlight("b", 5, 9)],
        [Emphasis(3, 7, ["bold"])],
    )
    assert segments == [
        hl(0, 3, "a"),
        hl(3, 5, "a", BOLD),
        hl(5, 7, "b", BOLD),
        hl(7, 9, "b"),
    ]


def test_zero_length_spans_produce_nothing():
    segments = compose_styles([Highlight("h", 0, 4), Highlight("z", 6, 6)], [Emphasis(2, 2, ["bold"])])
    assert segments == [hl(0, 4, "h")]


def test_invalid_range_propagates_from_merge():
    bad = SimpleNamespace(id="bad", start=9, end=3, color=None)
    with pytest.raises(InvalidRange):
        compose_styles([bad], [])


def test_compose_is_idempotent_on_equal_values():
    def build():
        return (
            [Highlight("a", 0, 6), Highlight("b", 4, 12, "red")],
            [Emphasis(2, 9, {"bold": True, "letter_spacing": 2})],
        )

    assert compose_styles(*build()) == compose_styles(*build())


def _random_inputs(rng):
    highlights = []
    for n in range(rng.randint(0, 8)):
        start = rng.randint(0, 40)
        highlights.append(Highlight(f"h{n}", start, start + rng.randint(0, 8)))
    emphases = []
    for n in range(rng.randint(0, 8)):
        start = rng.randint(0, 40)
        flag = rng.choice(["bold", "italic", "underline"])
        emphases.append(Emphasis(start, start + rng.randint(0, 8), [flag]))
    return highlights, emphases


@pytest.mark.parametrize("seed", range(30))
def test_segments_are_sorted_disjoint_and_cover_the_union(seed):
    highlights, emphases = _random_inputs(random.Random(seed))
    segments = compose_styles(highlights, emphases)

    for prev, nxt in zip(segments, segments[1:]):
        assert (prev.start, prev.end) < (nxt.start, nxt.end)
        assert prev.end <= nxt.start

    expected = set()
    for span in [*highlights, *emphases]:
        expected.update(range(span.start, span.end))
    covered = []
    for seg in segments:
        assert seg.start < seg.end
        covered.extend(range(seg.start, seg.end))
    assert len(covered) == len(set(covered))
    assert set(covered) == expected


@pytest.mark.parametrize("seed", range(30))
def test_segment_styling_matches_last_covering_emphasis(seed):
    highlights, emphases = _random_inputs(random.Random(seed))
    for seg in compose_styles(highlights, emphases):
        covering = [e for e in emphases if e.start <= seg.start < e.end]
        expected = covering[-1].style if covering else EmphasisStyle()
        assert seg.emphasis_style == expected
        assert seg.is_highlight == any(h.start <= seg.start < h.end for h in highlights)
