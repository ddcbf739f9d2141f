"""Word and character counting for free-text answers."""

from pydantic import BaseModel


class TextMetrics(BaseModel):
    word_count: int = 0
    char_count: int = 0


def measure(text: str) -> TextMetrics:
    """Count words and characters of the trimmed text.

    Words are maximal runs of non-whitespace characters.
    """
    trimmed = text.strip()
    if not trimmed:
        return TextMetrics(word_count=0, char_count=0)
    return TextMetrics(word_count=len(trimmed.split()), char_count=len(trimmed))


def within_limit(word_count: int, minimum: int = 0, maximum: int | None = None) -> bool:
    """Return True if minimum <= word_count <= maximum (None = unbounded)."""
    if word_count < minimum:
        return False
    return maximum is None or word_count <= maximum


def is_single_sentence(text: str) -> bool:
    """Return True if the text has at most one non-blank period-separated segment."""
    segments = [segment for segment in text.strip().split(".") if segment.strip()]
    return len(segments) <= 1
