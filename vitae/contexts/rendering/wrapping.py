"""
Greedy word-wrapping against measured text width.

Words are accumulated into a line while the measured width of the candidate
line fits; a word that is wider than the whole line on its own is split at
character level. Order is preserved and no word is dropped or duplicated.
"""

from dataclasses import dataclass
from typing import Callable, List

Measure = Callable[[str], float]


@dataclass(frozen=True)
class WrappedLine:
    """A line produced by wrapping, with the x position it is drawn at."""

    text: str
    left_margin: float


def split_word(word: str, max_width: float, measure: Measure) -> List[str]:
    """
    Split a single word into fragments that each fit ``max_width``.

    Every fragment holds at least one character, so a character wider than
    ``max_width`` still makes progress (and is the only way a fragment can
    exceed the width).
    """
    fragments: List[str] = []
    run = ""
    for char in word:
        if run and measure(run + char) > max_width:
            fragments.append(run)
            run = char
        else:
            run += char
    if run:
        fragments.append(run)
    return fragments


def _greedy_wrap(text: str, measure: Measure, first_width: float, rest_width: float) -> List[str]:
    lines: List[str] = []

    def width() -> float:
        return first_width if not lines else rest_width

    def start_line(word: str) -> str:
        # Flush forced fragments until the tail fits (or is a single character)
        while measure(word) > width():
            head = split_word(word, width(), measure)[0]
            if head == word:
                break
            lines.append(head)
            word = word[len(head):]
        return word

    current = ""
    for word in text.split():
        if not current:
            current = start_line(word)
            continue

        candidate = f"{current} {word}"
        if measure(candidate) <= width():
            current = candidate
        else:
            lines.append(current)
            current = start_line(word)

    if current:
        lines.append(current)

    return lines


def single_line(text: str) -> str:
    """Collapse every whitespace run, line breaks included, to one space."""
    return " ".join(text.split())


def paragraphs(text: str) -> List[str]:
    """Split text at line breaks into single-line paragraphs, dropping blank ones."""
    return [single_line(line) for line in text.splitlines() if line.strip()]


def wrap_text(text: str, max_width: float, measure: Measure) -> List[str]:
    """
    Break text into lines no wider than ``max_width``.

    Text that already fits is returned unchanged as a single line; blank text
    yields ``[""]``. Otherwise the text is split on whitespace and lines are
    filled greedily.

    Args:
        text: Text to wrap
        max_width: Maximum line width, in the units ``measure`` returns
        measure: Width of a string under the current font

    Returns:
        Ordered list of lines

    Example:
        >>> wrap_text("The quick brown fox", 20, lambda s: 2 * len(s))
        ['The quick', 'brown fox']
    """
    if max_width <= 0:
        raise ValueError(f"max_width must be positive, got {max_width}")
    if not text or not text.strip():
        return [""]
    if measure(text) <= max_width:
        return [text]
    return _greedy_wrap(text, measure, max_width, max_width)


def wrap_lines(
    text: str,
    max_width: float,
    measure: Measure,
    left_margin: float,
    hanging_indent: float = 0.0,
) -> List[WrappedLine]:
    """
    Wrap text into positioned lines.

    The first line starts at ``left_margin`` and may use the full
    ``max_width``; continuation lines are shifted right by
    ``hanging_indent`` and wrapped against the correspondingly narrower width.
    """
    if hanging_indent <= 0 or hanging_indent >= max_width:
        return [WrappedLine(text=line, left_margin=left_margin) for line in wrap_text(text, max_width, measure)]

    if not text or not text.strip():
        return [WrappedLine(text="", left_margin=left_margin)]
    if measure(text) <= max_width:
        return [WrappedLine(text=text, left_margin=left_margin)]

    lines = _greedy_wrap(text, measure, max_width, max_width - hanging_indent)
    return [
        WrappedLine(text=line, left_margin=left_margin if i == 0 else left_margin + hanging_indent)
        for i, line in enumerate(lines)
    ]
