"""URL method detection, path escaping and text replacement."""

from __future__ import annotations

import string
from enum import IntEnum


class Method(IntEnum):
    """HTTP request method."""

    NOMETHOD = 0
    HEAD = 1
    GET = 2
    POST = 3
    PUT = 4
    DELETE = 5
    TRACE = 6
    OPTIONS = 7
    CONNECT = 8
    PATCH = 9


class Scheme(IntEnum):
    """URL scheme."""

    UNSUPPORTED = 0
    HTTP = 1
    HTTPS = 2
    FTP = 3
    PROXY = 4


_METHOD_ORDER = (
    Method.GET, Method.HEAD, Method.POST, Method.PUT, Method.TRACE,
    Method.DELETE, Method.OPTIONS, Method.CONNECT, Method.PATCH,
)

_RESERVED = frozenset(b"#&+/:;=?@[]")
_UNSAFE = frozenset(
    set(range(0x21)) | set(b"\"#%:<>@[\\]^`{|}~") | set(range(0x7F, 0x100))
)
_HEX = frozenset(string.hexdigits.encode())
_HEX_DIGITS = "0123456789ABCDEF"


def has_method(url: str) -> Method:
    """Return the first method named in ``url`` as `` NAME``, or NOMETHOD."""
    for method in _METHOD_ORDER:
        if f" {method.name}" in url:
            return method
    return Method.NOMETHOD


def _escape_path(path: bytes) -> bytes:
    out = bytearray()
    index = 0
    while index < len(path):
        byte = path[index]
        if byte == 0x25:  # '%'
            pair = path[index + 1:index + 3]
            if len(pair) == 2 and all(b in _HEX for b in pair):
                value = int(pair, 16)
                if value in _UNSAFE or value in _RESERVED:
                    out.append(byte)
                    index += 1
                else:
                    out.append(value)
                    index += 3
                continue
            out += f"%{_HEX_DIGITS[byte >> 4]}{_HEX_DIGITS[byte & 0xF]}".encode()
        elif byte in _UNSAFE and byte not in _RESERVED:
            out += f"%{_HEX_DIGITS[byte >> 4]}{_HEX_DIGITS[byte & 0xF]}".encode()
        else:
            out.append(byte)
        index += 1
    return bytes(out)


def escape(url: str) -> str:
    """Percent-encode unsafe characters in the path of ``url``.

    Needless escapes of safe characters are decoded; reserved and unsafe
    escapes are kept.  The host part is left alone, and so are lines that
    carry a method other than GET (such as `` POST data``).
    """
    if has_method(url) not in (Method.NOMETHOD, Method.GET):
        return url
    marker = url.find("//")
    host_start = marker + 2 if marker >= 0 else 0
    slash = url.find("/", host_start)
    if slash < 0:
        return url
    path_start = slash + 1
    path = url[path_start:].encode("utf-8")
    escaped = _escape_path(path)
    if escaped == path:
        return url
    return url[:path_start] + escaped.decode("latin-1")


def replace_all(text: str, needle: str, replacement: str) -> str:
    """Replace every occurrence of ``needle`` in ``text``."""
    if not needle:
        raise ValueError("needle must not be empty")
    return text.replace(needle, replacement)