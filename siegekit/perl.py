"""Line and whitespace helpers in the style of Perl builtins."""

from __future__ import annotations

_WHITESPACE = " \t\n\v\f\r"


def chomp(text: str) -> str:
    """Remove a single trailing newline."""
    return text[:-1] if text.endswith("\n") else text


def rtrim(text: str | None) -> str | None:
    """Strip trailing whitespace."""
    return None if text is None else text.rstrip(_WHITESPACE)


def ltrim(text: str | None) -> str | None:
    """Strip leading whitespace."""
    return None if text is None else text.lstrip(_WHITESPACE)


def trim(text: str | None) -> str | None:
    """Strip whitespace from both ends."""
    return None if text is None else text.strip(_WHITESPACE)


def empty(text: str | None) -> bool:
    """True for None, the empty string, or whitespace only."""
    return text is None or not text.strip(_WHITESPACE)


def word_count(pattern: str, text: str) -> int:
    """Count runs of characters that are not ``pattern``."""
    count = 0
    in_word = False
    for char in text:
        if char != pattern:
            if not in_word:
                count += 1
            in_word = True
        else:
            in_word = False
    return count


def split(pattern: str, text: str) -> list[str]:
    """Split ``text`` on ``pattern``, dropping empty fields."""
    return [word for word in text.split(pattern) if word]