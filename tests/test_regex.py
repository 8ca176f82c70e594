# tests/test_regex.py

from textruns.detect_regex import find_pattern_highlights, find_term_highlights


def test_pattern_detection():
    text = "Contact me at user@example.com or admin@example.org please."
    highlights = find_pattern_highlights(text, r"[^\s@]+@[^\s@]+\.\w+", color="cyan")
    assert [text[h.start:h.end] for h in highlights] == ["user@example.com", "admin@example.org"]
    assert [h.id for h in highlights] == ["match-1", "match-2"]
    assert all(h.color == "cyan" for h in highlights)


def test_zero_width_matches_are_skipped():
    assert find_pattern_highlights("abc", r"x*") == []


def test_term_detection_escapes_and_ignores_case():
    text = "Use a+b, not A+B. Also a+bc."
    highlights = find_term_highlights(text, ["a+b", " "])
    assert [(h.id, h.start) for h in highlights] == [("a+b-1", 4), ("a+b-2", 13), ("a+b-3", 23)]


def test_whole_word_terms():
    text = "cat catalog cat"
    highlights = find_term_highlights(text, ["cat"], whole_words=True)
    assert [h.start for h in highlights] == [0, 12]
