"""Unit tests for greedy word-wrapping."""

import pytest

from vitae.contexts.rendering.wrapping import (
    WrappedLine,
    paragraphs,
    single_line,
    split_word,
    wrap_lines,
    wrap_text,
)


def monospace(text: str) -> float:
    """Two units per character."""
    return 2 * len(text)


SENTENCES = [
    "The quick brown fox jumps over the lazy dog",
    "Desenvolvimento de APIs REST em Node.js e Python com testes automatizados",
    "a b c d e f g h i j k l m n o p q r s t u v w x y z",
    "Built REST APIs, created reusable components and set up CI/CD pipelines",
]


@pytest.mark.unit
def test_quick_brown_fox():
    """Sentence wrapped at 40 units (20 characters) keeps order and width."""
    text = "The quick brown fox jumps over the lazy dog"
    lines = wrap_text(text, 40, monospace)

    assert lines == ["The quick brown fox", "jumps over the lazy", "dog"]
    assert all(monospace(line) <= 40 for line in lines)
    assert " ".join(lines) == text


@pytest.mark.unit
@pytest.mark.parametrize("text", SENTENCES)
@pytest.mark.parametrize("max_width", [20, 36, 50, 90])
def test_lines_fit_and_rejoin(text, max_width):
    """Every line fits; re-joining reproduces the text when no word was split."""
    lines = wrap_text(text, max_width, monospace)

    assert all(monospace(line) <= max_width for line in lines)
    longest_word = max(monospace(word) for word in text.split())
    if longest_word <= max_width:
        assert " ".join(lines) == " ".join(text.split())


@pytest.mark.unit
def test_short_text_returned_unchanged():
    """Text that already fits comes back as-is, internal spacing included."""
    assert wrap_text("a  b", 40, monospace) == ["a  b"]
    assert wrap_text("exactly twenty chars", 40, monospace) == ["exactly twenty chars"]


@pytest.mark.unit
def test_blank_text_yields_single_empty_line():
    assert wrap_text("", 40, monospace) == [""]
    assert wrap_text("   ", 40, monospace) == [""]


@pytest.mark.unit
@pytest.mark.parametrize("max_width", [0, -5])
def test_non_positive_width_rejected(max_width):
    with pytest.raises(ValueError):
        wrap_text("some text", max_width, monospace)


@pytest.mark.unit
def test_long_word_is_split_at_character_level():
    """A word wider than the line is broken into fragments that each fit."""
    lines = wrap_text("abcdefghij", 8, monospace)

    assert lines == ["abcd", "efgh", "ij"]
    assert "".join(lines) == "abcdefghij"


@pytest.mark.unit
def test_long_word_between_short_words():
    """Forced fragments start on their own line and surrounding words keep their order."""
    lines = wrap_text("see https://example.com/very/long now", 20, monospace)

    assert all(monospace(line) <= 20 for line in lines)
    assert lines[0] == "see"
    assert lines[-1].endswith("now")
    assert "".join(lines).replace(" ", "") == "seehttps://example.com/very/longnow"


@pytest.mark.unit
def test_split_word_makes_progress_on_wide_characters():
    """A character wider than the width still becomes its own fragment."""
    assert split_word("abc", 1, monospace) == ["a", "b", "c"]


@pytest.mark.unit
def test_wrap_lines_hanging_indent():
    """Continuation lines shift right and wrap against the narrower width."""
    lines = wrap_lines("• one two three four", 20, monospace, left_margin=10, hanging_indent=4)

    assert lines == [
        WrappedLine(text="• one two", left_margin=10),
        WrappedLine(text="three", left_margin=14),
        WrappedLine(text="four", left_margin=14),
    ]


@pytest.mark.unit
def test_wrap_lines_without_indent_matches_wrap_text():
    text = "The quick brown fox jumps over the lazy dog"
    lines = wrap_lines(text, 40, monospace, left_margin=20)

    assert [line.text for line in lines] == wrap_text(text, 40, monospace)
    assert {line.left_margin for line in lines} == {20}


@pytest.mark.unit
def test_paragraphs_and_single_line():
    assert single_line(" a\n b\t c ") == "a b c"
    assert paragraphs("first  line\n\n  second\r\nthird \n") == ["first line", "second", "third"]
    assert paragraphs("   \n") == []
