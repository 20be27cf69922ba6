"""A growable text buffer for response bodies."""

from __future__ import annotations

INITIAL_SLACK = 24576


class Page:
    """Accumulates text and tracks its length and reserved capacity."""

    def __init__(self, text: str = "") -> None:
        self._parts: list[str] = [text] if text else []
        self._length = len(text)
        self._size = self._length + INITIAL_SLACK

    def concat(self, text: str | None, length: int | None = None) -> None:
        """Append the first ``length`` characters of ``text`` (all by default).

        Empty or missing text and negative lengths are ignored.
        """
        if not text:
            return
        if length is None:
            length = len(text)
        if length < 0:
            return
        piece = text[:length]
        if self._length + len(piece) > self._size:
            self._size += len(piece) + 1
        self._parts.append(piece)
        self._length += len(piece)

    def clear(self) -> None:
        """Drop the contents, keeping the capacity."""
        self._parts.clear()
        self._length = 0

    def size(self) -> int:
        """Return the reserved capacity."""
        return self._size

    def __len__(self) -> int:
        return self._length

    def __str__(self) -> str:
        if len(self._parts) > 1:
            self._parts = ["".join(self._parts)]
        return self._parts[0] if self._parts else ""