"""Parsing of HTTP response status and header lines."""

from __future__ import annotations

import re
from enum import Enum, IntEnum

from .util import strmatch, stristr

ACCEPT_RANGES = "accept-ranges"
CACHE_CONTROL = "cache-control"
CHARSET = "charset"
CONNECTION = "connection"
CONTENT_DISPOSITION = "content-disposition"
CONTENT_ENCODING = "content-encoding"
CONTENT_LENGTH = "content-length"
CONTENT_TYPE = "content-type"
ETAG = "etag"
EXPIRES = "expires"
KEEPALIVE_MAX = "keepalive-max"
KEEPALIVE_TIMEOUT = "keepalive-timeout"
LAST_MODIFIED = "last-modified"
LOCATION = "location"
PRAGMA = "pragma"
PROTOCOL = "protocol"
PROXY_AUTHENTICATE = "proxy-authenticate"
PROXY_CONNECTION = "proxy-connection"
REFRESH = "refresh"
REDIRECT = "redirect"
RESPONSE_CODE = "response-code"
SET_COOKIE = "set-cookie"
TRANSFER_ENCODING = "transfer-encoding"
WWW_AUTHENTICATE = "www-authenticate"

DEFAULT_CODE = 418
DEFAULT_PROTOCOL = "HTTP/1.1"
DEFAULT_CONTENT_TYPE = "unknown"
DEFAULT_CHARSET = "iso-8859-1"

_SPACE = " \t\n\v\f\r"
_SEPARATORS = "=:"
_QUOTES = "\"'"
_ATOI = re.compile(r"[ \t\n\v\f\r]*([+-]?\d+)")


class Connection(IntEnum):
    """Connection handling announced by the server."""

    CLOSE = 1
    KEEPALIVE = 2
    METER = 4


class TransferEncoding(IntEnum):
    """Transfer-encoding of the response body."""

    NONE = 1
    CHUNKED = 2
    TRAILER = 4


class ContentEncoding(IntEnum):
    """Content-encoding of the response body."""

    COMPRESS = 1
    DEFLATE = 2
    GZIP = 4
    BZIP2 = 8


class AuthType(Enum):
    """Authentication scheme requested by a challenge."""

    BASIC = "basic"
    DIGEST = "digest"
    NTLM = "ntlm"


def _atoi(text: str) -> int:
    """Leading integer of ``text``, or 0 when there is none."""
    match = _ATOI.match(text)
    return int(match.group(1)) if match else 0


def _has_prefix(line: str, prefix: str) -> bool:
    return line[:len(prefix)].lower() == prefix.lower()


def _dequote(text: str) -> str:
    return text.strip(_QUOTES)


def _pairs(line: str):
    """Yield ``name=value`` pairs following a leading label.

    Each pair is preceded by a label ended by a space and terminated by
    ``;`` or ``,``.  Iteration stops at the first field without ``=``.
    """
    rest = line
    while True:
        space = rest.find(" ")
        if space < 0:
            return
        rest = rest[space + 1:]
        if not rest:
            return
        ends = [index for index in (rest.find(";"), rest.find(",")) if index >= 0]
        end = min(ends) if ends else len(rest)
        pair = rest[:end]
        rest = rest[end + 1:]
        if "=" not in pair:
            return
        yield pair


def _split_pair(pair: str) -> tuple[str, str]:
    """Split a pair into its option name and value."""
    index = 0
    while index < len(pair) and pair[index] not in _SPACE and pair[index] not in _SEPARATORS:
        index += 1
    option = pair[:index]
    value = pair[index + 1:].lstrip(_SPACE + _SEPARATORS)
    return option, value


class Response:
    """Headers and authentication details gathered from an HTTP response."""

    def __init__(self) -> None:
        self.headers: dict[str, object] = {}
        self.from_cache = False
        self.www_auth_type: AuthType | None = None
        self.www_auth_challenge: str | None = None
        self.www_auth_realm: str | None = None
        self.proxy_auth_type: AuthType | None = None
        self.proxy_auth_challenge: str | None = None
        self.proxy_auth_realm: str | None = None

    def _int_value(self, key: str, default: int) -> int:
        value = self.headers.get(key)
        number = _atoi(value) if isinstance(value, str) else -1
        return number if number > 0 else default

    def _text(self, key: str) -> str | None:
        value = self.headers.get(key)
        return value if isinstance(value, str) else None

    def parse_code(self, line: str) -> bool:
        """Read a status line such as ``HTTP/1.0 200 OK``."""
        if _has_prefix(line, "http") and _atoi(line[9:]) > 1:
            self.headers[PROTOCOL] = line[:8]
            self.headers[RESPONSE_CODE] = line[9:]
            return True
        return False

    def code(self) -> int:
        """The status code, or 418 when none was read."""
        value = self._text(RESPONSE_CODE)
        return DEFAULT_CODE if value is None else _atoi(value)

    def protocol(self) -> str:
        """The protocol from the status line, ``HTTP/1.1`` by default."""
        value = self._text(PROTOCOL)
        return DEFAULT_PROTOCOL if value is None else value

    def success(self) -> bool:
        """True for codes below 400, and for 401 and 407."""
        value = self._text(RESPONSE_CODE)
        if value is None:
            return False
        code = _atoi(value)
        return code < 400 or code in (401, 407)

    def failure(self) -> bool:
        """True when no code was read or the code is an error other than 401/407."""
        value = self._text(RESPONSE_CODE)
        if value is None:
            return True
        code = _atoi(value)
        return code >= 400 and code not in (401, 407)

    def parse_content_type(self, line: str) -> bool:
        """Read a content-type line, with an optional charset."""
        value = line[len(CONTENT_TYPE) + 2:]
        if ";" not in line:
            self.headers[CONTENT_TYPE] = value
            return True
        result = False
        remainder = ""
        stripped = value.lstrip(";")
        if stripped:
            token, _, remainder = stripped.partition(";")
            self.headers[CONTENT_TYPE] = token
            result = True
        found = stristr(remainder, "charset=")
        if found is not None and len(found) > 8:
            self.headers[CHARSET] = found[8:]
        return result

    def content_type(self) -> str:
        """The content type, ``unknown`` by default."""
        value = self._text(CONTENT_TYPE)
        return DEFAULT_CONTENT_TYPE if value is None else value

    def charset(self) -> str:
        """The charset; records ``iso-8859-1`` when none was given."""
        if self._text(CHARSET) is None:
            self.headers[CHARSET] = DEFAULT_CHARSET
        return self.headers[CHARSET]  # type: ignore[return-value]

    def parse_content_length(self, line: str) -> bool:
        """Read a content-length line; lengths of 1 or less are ignored."""
        if _has_prefix(line, CONTENT_LENGTH):
            value = line[len(CONTENT_LENGTH) + 2:]
            if _atoi(value) > 1:
                self.headers[CONTENT_LENGTH] = value
                return True
        return False

    def content_length(self) -> int:
        """The content length, 0 when unknown."""
        return self._int_value(CONTENT_LENGTH, 0)

    def parse_content_encoding(self, line: str) -> bool:
        """Read a content-encoding line; only gzip and deflate are accepted."""
        if _has_prefix(line, CONTENT_ENCODING):
            value = line[len(CONTENT_ENCODING) + 2:]
            if strmatch(value, "gzip"):
                self.headers[CONTENT_ENCODING] = ContentEncoding.GZIP
                return True
            if strmatch(value, "deflate"):
                self.headers[CONTENT_ENCODING] = ContentEncoding.DEFLATE
                return True
        return False

    def content_encoding(self) -> ContentEncoding | None:
        """The content encoding, or None when not set."""
        value = self.headers.get(CONTENT_ENCODING)
        return value if isinstance(value, ContentEncoding) else None

    def parse_transfer_encoding(self, line: str) -> bool:
        """Read a transfer-encoding line."""
        if not _has_prefix(line, TRANSFER_ENCODING):
            return False
        value = line[len(TRANSFER_ENCODING) + 2:].strip(_SPACE)
        if strmatch(value, "chunked"):
            encoding = TransferEncoding.CHUNKED
        elif strmatch(value, "trailer"):
            encoding = TransferEncoding.TRAILER
        else:
            encoding = TransferEncoding.NONE
        self.headers[TRANSFER_ENCODING] = encoding
        return True

    def transfer_encoding(self) -> TransferEncoding:
        """The transfer encoding, NONE by default."""
        value = self.headers.get(TRANSFER_ENCODING)
        return value if isinstance(value, TransferEncoding) else TransferEncoding.NONE

    def parse_location(self, line: str) -> bool:
        """Read a location line; returns whether the response redirects."""
        if _has_prefix(line, LOCATION):
            self.headers[LOCATION] = line[10:]
            self.headers[REDIRECT] = "true"
        return self.redirect()

    def location(self) -> str | None:
        """The redirect target, if any."""
        return self._text(LOCATION)

    def redirect(self) -> bool:
        """True once a location header was read."""
        value = self._text(REDIRECT)
        if value is None:
            return False
        if strmatch(value, "true"):
            return True
        return False

    def parse_connection(self, line: str) -> bool:
        """Read a connection line."""
        if not _has_prefix(line, CONNECTION):
            return False
        if line[12:22].lower() == "keep-alive":
            self.headers[CONNECTION] = Connection.KEEPALIVE
        else:
            self.headers[CONNECTION] = Connection.CLOSE
        return True

    def connection(self) -> Connection:
        """The connection mode, CLOSE by default."""
        value = self.headers.get(CONNECTION)
        return value if isinstance(value, Connection) else Connection.CLOSE

    def parse_keepalive(self, line: str) -> bool:
        """Read the timeout and max options of a keep-alive line."""
        result = False
        for pair in _pairs(line):
            option, value = _split_pair(pair)
            lowered = option.lower()
            if lowered.startswith("timeout"):
                if _atoi(value) > 0:
                    self.headers[KEEPALIVE_TIMEOUT] = value
                result = True
            if lowered.startswith("max"):
                if _atoi(value) > 0:
                    self.headers[KEEPALIVE_MAX] = value
                result = True
        return result

    def keepalive_timeout(self) -> int:
        """Keep-alive timeout in seconds, 15 by default."""
        return self._int_value(KEEPALIVE_TIMEOUT, 15)

    def keepalive_max(self) -> int:
        """Keep-alive request limit, 5 by default."""
        return self._int_value(KEEPALIVE_MAX, 5)

    def parse_last_modified(self, line: str) -> bool:
        """Read a last-modified line."""
        if _has_prefix(line, LAST_MODIFIED):
            self.headers[LAST_MODIFIED] = line[15:]
            return True
        return False

    def last_modified(self) -> str | None:
        """The last-modified date as sent."""
        return self._text(LAST_MODIFIED)

    def parse_etag(self, line: str) -> bool:
        """Read an etag line, removing surrounding quotes."""
        if _has_prefix(line, ETAG):
            self.headers[ETAG] = _dequote(line[6:])
            return True
        return False

    def etag(self) -> str | None:
        """The entity tag without quotes."""
        return self._text(ETAG)

    def _realm(self, text: str) -> str | None:
        realm = None
        for pair in _pairs(text):
            option, value = _split_pair(pair)
            if option.lower().startswith("realm"):
                realm = _dequote(value)
        return realm

    def parse_www_authenticate(self, line: str) -> bool:
        """Read a www-authenticate challenge."""
        if not _has_prefix(line, WWW_AUTHENTICATE):
            return True
        rest = line
        if line[18:24].lower() == "digest":
            rest = line[24:]
            self.www_auth_type = AuthType.DIGEST
            self.www_auth_challenge = line[18:]
        elif line[18:22].lower() == "ntlm":
            rest = line[22:]
            self.www_auth_type = AuthType.NTLM
            self.www_auth_challenge = line[18:]
        elif self.www_auth_type not in (AuthType.DIGEST, AuthType.NTLM):
            rest = line[23:]
            self.www_auth_type = AuthType.BASIC
        realm = self._realm(rest)
        if realm is not None:
            self.www_auth_realm = realm
        return True

    def parse_proxy_authenticate(self, line: str) -> bool:
        """Read a proxy-authenticate challenge."""
        if not _has_prefix(line, PROXY_AUTHENTICATE):
            return True
        if line[20:26].lower() == "digest":
            rest = line[26:]
            self.proxy_auth_type = AuthType.DIGEST
            self.proxy_auth_challenge = line[20:]
        else:
            rest = line[25:]
            self.proxy_auth_type = AuthType.BASIC
        realm = self._realm(rest)
        if realm is not None:
            self.proxy_auth_realm = realm
        return True