"""Parsing and normalisation of request URLs.

A URL line may carry a method and body after the address, as in
``http://host/form.php POST a=1&b=2``; a body of ``<file`` reads the
request body from that file.
"""

from __future__ import annotations

import re
import string
from pathlib import Path

from .perl import empty, trim
from .urlescape import Method, Scheme, escape as escape_url, replace_all
from .util import endswith, stristr

DEFAULT_CONTENT_TYPE = "application/x-www-form-urlencoded"

_SPACE = " \t\n\v\f\r"
_SCHEME_CHARS = frozenset(string.ascii_letters + string.digits + "-+")
_CREDENTIAL_MARK = re.compile(r"[@/?#;]")

# Search order of the method markers, as found in the URL line.
_METHOD_MARKERS = (
    (" POST", Method.POST),
    (" PUT", Method.PUT),
    (" PATCH", Method.PATCH),
    (" OPTIONS", Method.OPTIONS),
    (" DELETE", Method.DELETE),
)

# Known scheme prefixes and how many characters ``scheme://`` takes.
_PREFIXES = (
    ("http:", Scheme.HTTP, 7),
    ("https:", Scheme.HTTPS, 8),
    ("ftp:", Scheme.FTP, 6),
)

_SCHEME_NAMES = {
    Scheme.HTTP: "http",
    Scheme.HTTPS: "https",
    Scheme.FTP: "ftp",
    Scheme.PROXY: "proxy",
}

_METHOD_NAMES = {
    Method.POST: "POST",
    Method.PATCH: "PATCH",
    Method.PUT: "PUT",
    Method.DELETE: "DELETE",
    Method.OPTIONS: "OPTIONS",
    Method.HEAD: "HEAD",
}

_DEFAULT_PORTS = {Scheme.FTP: 21, Scheme.HTTP: 80, Scheme.HTTPS: 443}


def _until(text: str, stops: str) -> int:
    """Index of the first character of ``text`` found in ``stops``, else its length."""
    for index, char in enumerate(text):
        if char in stops:
            return index
    return len(text)


def _has_scheme(text: str) -> bool:
    """True when ``text`` begins with scheme characters followed by ``:``."""
    index = 0
    while index < len(text) and text[index] in _SCHEME_CHARS:
        index += 1
    return index > 0 and text[index:index + 1] == ":"


def _has_credentials(text: str) -> bool:
    """True when an ``@`` comes before any of ``/?#;``."""
    match = _CREDENTIAL_MARK.search(text)
    return match is not None and match.group() == "@"


def _absolute(text: str) -> str:
    """Add ``http://`` (and a trailing slash when there is no path) if no scheme is given."""
    if _has_scheme(text):
        return text
    if "/" in text:
        return f"http://{text}"
    return f"http://{text}/"


class Url:
    """A parsed URL together with its method and request body."""

    def __init__(self, text: str, escape: bool = True, content_type: str | None = None) -> None:
        self.id = 0
        self.escape = escape
        self.default_content_type = content_type
        self.absolute = ""
        self._scheme = Scheme.UNSUPPORTED
        self.method = Method.GET
        self.username: str | None = None
        self.password: str | None = None
        self.hostname = ""
        self.port = 80
        self.path: str | None = None
        self.file: str | None = None
        self.params = ""
        self.hasparams = False
        self.query = ""
        self.fragment = ""
        self.request: str | None = None
        self.postdata: bytes | None = None
        self.postlen = 0
        self.post_file: str | None = None
        self._content_type: str | None = None
        self.redirect = False
        self._parse(text)

    # -- scheme -----------------------------------------------------------

    @property
    def scheme(self) -> Scheme:
        """The URL scheme; assigning it rewrites the absolute URL."""
        return self._scheme

    @scheme.setter
    def scheme(self, scheme: Scheme) -> None:
        self._scheme = Scheme(scheme)
        cut = 0
        lowered = self.absolute.lower()
        for prefix, _, skip in _PREFIXES:
            if lowered.startswith(prefix):
                cut = skip
        self.absolute = f"{self.scheme_name()}://{self.absolute[cut:]}"

    def scheme_name(self) -> str:
        """Lower-case name of the scheme."""
        return _SCHEME_NAMES.get(self._scheme, "unsupported")

    def method_name(self) -> str:
        """Upper-case name of the method; GET for anything unlisted."""
        return _METHOD_NAMES.get(self.method, "GET")

    def default_port(self) -> int:
        """The port a scheme uses when none is given."""
        return _DEFAULT_PORTS.get(self._scheme, 80)

    # -- body -------------------------------------------------------------

    @property
    def content_type(self) -> str:
        """Content type of the body, defaulting to form encoding."""
        if self._content_type is None:
            if not empty(self.default_content_type):
                self._content_type = self.default_content_type
            else:
                self._content_type = DEFAULT_CONTENT_TYPE
        return self._content_type

    @content_type.setter
    def content_type(self, value: str) -> None:
        self._content_type = value

    def set_postdata(self, data: bytes | str) -> None:
        """Replace the request body."""
        if isinstance(data, str):
            data = data.encode("utf-8")
        self.postdata = bytes(data)
        self.postlen = len(self.postdata)

    def display(self, full: bool = False) -> str | None:
        """What to show for this URL: the absolute form, or the request for GET."""
        if full:
            return self.absolute
        if self.method == Method.GET:
            return self.request
        return self.absolute

    def dump(self) -> str:
        """A multi-line description of every field."""
        postdata = None if self.postdata is None else self.postdata.decode("latin-1")
        lines = [
            f"URL ID:    {self.id}",
            f"Absolute:  {self.absolute}",
            f"Scheme:    {self.scheme_name()}",
            f"Method:    {self.method_name()}",
            f"Username:  {self.username}",
            f"Password:  {self.password}",
            f"Hostname:  {self.hostname}",
            f"Port:      {self.port}",
            f"Path:      {self.path}",
            f"File:      {self.file}",
            f"Request:   {self.request}",
        ]
        if self.hasparams:
            lines.append(f"Params:    {self.params}")
        lines += [
            f"Query:     {self.query}",
            f"Fragment:  {self.fragment}",
            f"Post Len:  {self.postlen}",
            f"Post Data: {postdata}",
            f"Cont Type: {self.content_type}",
        ]
        return "\n".join(lines) + "\n"

    # -- parsing ----------------------------------------------------------

    def _parse(self, text: str) -> None:
        source = escape_url(text) if self.escape else text
        if empty(source):
            raise ValueError("empty URL")
        self.absolute = _absolute(source)
        offset = self._take_scheme()
        self._take_method()
        rest = self.absolute[offset:]
        if _has_credentials(rest):
            rest = self._take_username(rest)
            rest = self._take_password(rest)
        rest = self._take_hostname(rest)
        rest = self._take_port(rest)
        rest = self._take_path(rest)
        rest = self._take_file(rest)
        rest = self._take_parameters(rest)
        rest = self._take_query(rest)
        self._take_fragment(rest)

    def _take_scheme(self) -> int:
        lowered = self.absolute.lower()
        for prefix, scheme, skip in _PREFIXES:
            if lowered.startswith(prefix):
                self._scheme = scheme
                return skip
        self._scheme = Scheme.UNSUPPORTED
        return 0

    def _take_method(self) -> None:
        for marker, method in _METHOD_MARKERS:
            position = self.absolute.find(marker)
            if position >= 0:
                self.method = method
                body = self.absolute[position + len(marker):]
                self.absolute = self.absolute[:position]
                self._take_body(body)
                return
        self.method = Method.GET

    def _take_body(self, body: str) -> None:
        body = body.lstrip(_SPACE)
        if body.startswith("<"):
            self.post_file = trim(body[1:])
            self.set_postdata(Path(self.post_file).read_bytes())
            return
        self.set_postdata(body)
        if not empty(self.default_content_type):
            self._content_type = self.default_content_type
        else:
            self._content_type = DEFAULT_CONTENT_TYPE

    def _take_username(self, rest: str) -> str:
        at = rest.find("@")
        slash = rest.find("/")
        if at < 0 or (slash >= 0 and at >= slash):
            return rest
        index = _until(rest, ":@/")
        if rest[index:index + 1] not in ("@", ":"):
            return rest
        self.username = rest[:index]
        return rest[index + 1:]

    def _take_password(self, rest: str) -> str:
        at = rest.find("@")
        slash = rest.find("/")
        if at < 0 or (slash >= 0 and at >= slash):
            return rest
        self.password = rest[:at]
        return rest[at + 1:]

    def _take_hostname(self, rest: str) -> str:
        if rest.startswith("//"):
            rest = rest[2:]
        if rest.startswith("["):
            index = _until(rest, "]")
            if index < len(rest):
                index += 1
        else:
            index = _until(rest, "/#:")
        self.hostname = rest[:index]
        if rest[index:index + 1] == ":":
            return rest[index + 1:]
        return rest[index:]

    def _take_port(self, rest: str) -> str:
        self.port = self.default_port()
        digits = len(rest) - len(rest.lstrip(string.digits))
        if digits == 0:
            return rest
        self.port = int(rest[:digits])
        return rest[digits:]

    def _take_path(self, rest: str) -> str:
        if rest.startswith("#"):
            self.request = "/"
            return rest
        slash = rest.rfind("/")
        if slash < 0:
            self.path = "/"
            self.request = "/"
            return rest[1:]
        self.path = rest[:slash + 1]
        self.request = trim(rest.split("#", 1)[0])
        return rest[slash + 1:]

    def _take_file(self, rest: str) -> str:
        index = _until(rest, ";?" + _SPACE)
        self.file = trim(rest[:index])
        stop = rest[index:index + 1]
        if stop == ";":
            self.hasparams = True
            return rest[index + 1:]
        if stop == "?":
            return rest[index + 1:]
        return rest[index:]

    def _take_parameters(self, rest: str) -> str:
        if not self.hasparams:
            self.params = ""
            return rest
        index = _until(rest, "?" + _SPACE)
        self.params = rest[:index]
        if rest[index:index + 1] == "?":
            return rest[index + 1:]
        return rest[index:]

    def _take_query(self, rest: str) -> str:
        index = _until(rest, "#" + _SPACE)
        self.query = rest[:index]
        if rest[index:index + 1] == "#":
            return rest[index + 1:]
        return rest[index:]

    def _take_fragment(self, rest: str) -> None:
        self.fragment = rest[:_until(rest, _SPACE)]


def _child(base: Url, text: str) -> Url:
    return Url(text, escape=base.escape, content_type=base.default_content_type)


def normalize(base: Url, location: str) -> Url | None:
    """Resolve ``location`` found in a page against the URL it came from.

    Returns None for inline ``data:image/gif`` locations.
    """
    location = replace_all(location, "&amp;", "&")
    location = replace_all(location, "&#038;", "&")

    if stristr(location, "data:image/gif") is not None:
        return None

    if stristr(location, "://") is not None:
        result = _child(base, location)
        if len(result.hostname) > 1:
            return result

    first = location[:1]
    if first not in ("/", ".", "") and "." in location and "/" in location:
        result = _child(base, location)
        result.scheme = base.scheme
        if "." in result.hostname:
            return result

    if "localhost" in location:
        result = _child(base, location)
        result.scheme = base.scheme
        if len(result.hostname) == 9:
            return result

    origin = f"{base.scheme_name()}://{base.hostname}:{base.port}"
    base_path = base.path or ""
    if first == "/":
        if location[1:2] == "/":
            text = f"{base.scheme_name()}:{location}"
        else:
            text = f"{origin}{location}"
    elif endswith("/", base.path):
        tail = location[2:] if first == "." and len(location) > 1 else location
        text = f"{origin}{base_path}{tail}"
    else:
        text = f"{origin}{base_path}/{location}"
    result = _child(base, text)
    result.scheme = base.scheme
    return result


def normalize_string(base: Url, location: str) -> str | None:
    """The absolute form of ``normalize(base, location)``, or None."""
    result = normalize(base, location)
    return None if result is None else result.absolute