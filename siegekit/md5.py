"""MD5 message digest (RFC 1321) for byte strings and binary streams."""

from __future__ import annotations

import struct
from typing import BinaryIO

_MASK = 0xFFFFFFFF
_BLOCK = 64
_STREAM_BLOCK = 4096

_INITIAL_STATE = (0x67452301, 0xEFCDAB89, 0x98BADCFE, 0x10325476)

_CONSTANTS = (
    0xD76AA478, 0xE8C7B756, 0x242070DB, 0xC1BDCEEE,
    0xF57C0FAF, 0x4787C62A, 0xA8304613, 0xFD469501,
    0x698098D8, 0x8B44F7AF, 0xFFFF5BB1, 0x895CD7BE,
    0x6B901122, 0xFD987193, 0xA679438E, 0x49B40821,
    0xF61E2562, 0xC040B340, 0x265E5A51, 0xE9B6C7AA,
    0xD62F105D, 0x02441453, 0xD8A1E681, 0xE7D3FBC8,
    0x21E1CDE6, 0xC33707D6, 0xF4D50D87, 0x455A14ED,
    0xA9E3E905, 0xFCEFA3F8, 0x676F02D9, 0x8D2A4C8A,
    0xFFFA3942, 0x8771F681, 0x6D9D6122, 0xFDE5380C,
    0xA4BEEA44, 0x4BDECFA9, 0xF6BB4B60, 0xBEBFBC70,
    0x289B7EC6, 0xEAA127FA, 0xD4EF3085, 0x04881D05,
    0xD9D4D039, 0xE6DB99E5, 0x1FA27CF8, 0xC4AC5665,
    0xF4292244, 0x432AFF97, 0xAB9423A7, 0xFC93A039,
    0x655B59C3, 0x8F0CCC92, 0xFFEFF47D, 0x85845DD1,
    0x6FA87E4F, 0xFE2CE6E0, 0xA3014314, 0x4E0811A1,
    0xF7537E82, 0xBD3AF235, 0x2AD7D2BB, 0xEB86D391,
)

_SHIFTS = (
    (7, 12, 17, 22) * 4
    + (5, 9, 14, 20) * 4
    + (4, 11, 16, 23) * 4
    + (6, 10, 15, 21) * 4
)

_WORD_ORDER = (
    tuple(range(16))
    + tuple((5 * i + 1) % 16 for i in range(16))
    + tuple((3 * i + 5) % 16 for i in range(16))
    + tuple((7 * i) % 16 for i in range(16))
)

_WORDS = struct.Struct("<16I")


def _rotate_left(value: int, shift: int) -> int:
    return ((value << shift) | (value >> (32 - shift))) & _MASK


def _compress(state: tuple[int, int, int, int], block: bytes) -> tuple[int, int, int, int]:
    """Run the four rounds over one 64-byte block."""
    words = _WORDS.unpack(block)
    a, b, c, d = state
    for step, (constant, shift, index) in enumerate(zip(_CONSTANTS, _SHIFTS, _WORD_ORDER)):
        if step < 16:
            f = d ^ (b & (c ^ d))
        elif step < 32:
            f = c ^ (d & (b ^ c))
        elif step < 48:
            f = b ^ c ^ d
        else:
            f = c ^ (b | (~d & _MASK))
        f = (f + a + constant + words[index]) & _MASK
        a, d, c = d, c, b
        b = (b + _rotate_left(f, shift)) & _MASK
    return (
        (state[0] + a) & _MASK,
        (state[1] + b) & _MASK,
        (state[2] + c) & _MASK,
        (state[3] + d) & _MASK,
    )


def _as_bytes(data: object) -> bytes:
    if isinstance(data, str):
        raise TypeError("MD5 needs bytes, not str")
    return bytes(memoryview(data))  # type: ignore[arg-type]


class MD5:
    """Incremental MD5 computation."""

    digest_size = 16
    block_size = _BLOCK

    def __init__(self, data: bytes = b"") -> None:
        self._state = _INITIAL_STATE
        self._length = 0
        self._pending = b""
        if data:
            self.update(data)

    def update(self, data: bytes) -> None:
        """Feed more bytes into the digest."""
        chunk = _as_bytes(data)
        self._length += len(chunk)
        buffer = self._pending + chunk
        whole = len(buffer) - len(buffer) % _BLOCK
        state = self._state
        for offset in range(0, whole, _BLOCK):
            state = _compress(state, buffer[offset:offset + _BLOCK])
        self._state = state
        self._pending = buffer[whole:]

    def copy(self) -> MD5:
        """Return an independent copy of the current computation."""
        clone = MD5()
        clone._state = self._state
        clone._length = self._length
        clone._pending = self._pending
        return clone

    def digest(self) -> bytes:
        """Return the 16-byte digest of everything fed so far."""
        pending = len(self._pending)
        pad = (_BLOCK + 56 - pending) if pending >= 56 else (56 - pending)
        bit_length = (self._length << 3) & 0xFFFFFFFFFFFFFFFF
        tail = self._pending + b"\x80" + b"\x00" * (pad - 1) + struct.pack("<Q", bit_length)
        state = self._state
        for offset in range(0, len(tail), _BLOCK):
            state = _compress(state, tail[offset:offset + _BLOCK])
        return struct.pack("<4I", *state)

    def hexdigest(self) -> str:
        """Return the digest as lower-case hexadecimal."""
        return self.digest().hex()


def digest_bytes(data: bytes) -> bytes:
    """Return the MD5 digest of ``data``."""
    return MD5(data).digest()


def digest_stream(stream: BinaryIO) -> bytes:
    """Return the MD5 digest of everything read from a binary stream.

    Read errors propagate as the stream raises them.
    """
    hasher = MD5()
    while True:
        block = stream.read(_STREAM_BLOCK)
        if not block:
            break
        hasher.update(block)
    return hasher.digest()