"""Small string, time and random-number helpers."""

from __future__ import annotations

import os
import string
import sys

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)

_RAND_MODULUS = 1 << 31
_RAND_MULTIPLIER = 1103515245
_RAND_INCREMENT = 12345

_UNITS = {"s": 1, "m": 60, "h": 3600}


def _lower(text: str) -> str:
    """Lower-case ASCII letters only, keeping the length unchanged."""
    return text.translate(_ASCII_LOWER)


def parse_time(text: str) -> tuple[int, int]:
    """Parse a duration such as ``10s``, ``5m`` or ``1h``.

    Returns ``(time, secs)``.  With a unit the result is ``(1, seconds)``;
    a bare number is taken as minutes and the count is kept as ``time``.
    Text without leading digits gives ``(0, 0)``.
    """
    digits = len(text) - len(text.lstrip(string.digits))
    if digits == 0:
        return 0, 0
    count = int(text[:digits])
    for char in text[digits:]:
        factor = _UNITS.get(_lower(char))
        if factor is not None:
            return 1, count * factor
    secs = count * 60 if count > 0 else 0
    return count, secs


def substring(text: str, start: int, length: int) -> str | None:
    """Return ``length`` characters of ``text`` from ``start``, or None if out of range."""
    if length < 1 or start < 0 or start > len(text):
        return None
    return text[start:start + length]


def okay(code: int) -> bool:
    """True for informational and success HTTP status codes."""
    return 100 <= code <= 299


def strmatch(option: str, param: str) -> bool:
    """Case-insensitive equality of two strings."""
    return len(option) == len(param) and _lower(option) == _lower(param)


def startswith(prefix: str, text: str) -> bool:
    """True if ``text`` begins with ``prefix`` (case-sensitive)."""
    return text.startswith(prefix)


def endswith(suffix: str | None, text: str | None) -> bool:
    """True if ``text`` ends with ``suffix``; False when either is None."""
    if text is None or suffix is None:
        return False
    return text.endswith(suffix)


def stristr(haystack: str, needle: str) -> str | None:
    """Case-insensitive search; returns the tail of ``haystack`` from the match."""
    index = _lower(haystack).find(_lower(needle))
    return None if index < 0 else haystack[index:]


def strncasestr(text: str, needle: str, length: int) -> str | None:
    """Case-insensitive search of ``needle`` starting within the first ``length`` characters."""
    limit = min(len(text), length)
    if limit < 1 or not needle or len(needle) > limit:
        return None
    lowered = _lower(text)
    wanted = _lower(needle)
    for index in range(limit - len(needle) + 1):
        if lowered.startswith(wanted, index):
            return text[index:]
    return None


def _clock_ticks() -> int:
    try:
        ticks = os.sysconf("SC_CLK_TCK")
    except (AttributeError, ValueError, OSError):
        return 100
    return ticks if ticks > 0 else 100


def elapsed_time(ticks: int) -> float:
    """Convert clock ticks into seconds."""
    return ticks / _clock_ticks()


def urandom() -> int:
    """Return a random signed 32-bit integer from the system's random source."""
    return int.from_bytes(os.urandom(4), sys.byteorder, signed=True)


class RandR:
    """Re-entrant linear congruential generator with an explicit state."""

    def __init__(self, seed: int) -> None:
        self.state = seed & 0xFFFFFFFF

    def next(self) -> int:
        """Advance the state and return it."""
        self.state = (self.state * _RAND_MULTIPLIER + _RAND_INCREMENT) % _RAND_MODULUS
        return self.state