"""Extraction of the resources a page refers to.

The page is scanned tag by tag.  Images, stylesheets, scripts, body
backgrounds and meta refresh targets are collected; plain anchors and
frames are not, since a browser would not fetch them along with the page.
"""

from __future__ import annotations

import re

from .url import Url, normalize
from .util import endswith, startswith, stristr, strmatch

_TAG_LIMIT = 4095

_CONTROL = " ="
_CONTROL_PLUS = " =\"'"
_CONTROL_QUOTES = " \"'"


def _token_pattern(delimiters: str) -> re.Pattern[str]:
    klass = re.escape(delimiters)
    return re.compile(f"[{klass}]*([^{klass}]+)[{klass}]?")


_PATTERNS = {
    delimiters: _token_pattern(delimiters)
    for delimiters in (_CONTROL, _CONTROL_PLUS, _CONTROL_QUOTES)
}


class _Tokens:
    """Splits a tag into tokens, each call choosing its own delimiters.

    After a token, exactly one delimiter is consumed; ``rest`` holds what
    remains to be read.
    """

    def __init__(self, text: str) -> None:
        self.rest = text

    def next(self, delimiters: str) -> str | None:
        match = _PATTERNS[delimiters].match(self.rest)
        if match is None:
            self.rest = ""
            return None
        self.rest = self.rest[match.end():]
        return match.group(1)

    def each(self, delimiters: str):
        """Yield tokens until the tag is exhausted."""
        while (token := self.next(delimiters)) is not None:
            yield token


def _has_prefix(token: str, prefix: str) -> bool:
    return token[:len(prefix)].lower() == prefix


class _Collector:
    """Gathers distinct URLs in the order they are found."""

    def __init__(self, base: Url) -> None:
        self.base = base
        self.urls: list[Url] = []

    def resolve(self, location: str) -> Url | None:
        return normalize(self.base, location)

    def add(self, url: Url | None) -> None:
        if url is None or url.hostname is None or len(url.hostname) < 2:
            return
        if any(strmatch(url.absolute, known.absolute) for known in self.urls):
            return
        self.urls.append(url)


def _parse_meta(tokens: _Tokens, collector: _Collector) -> None:
    for token in tokens.each(_CONTROL):
        if not _has_prefix(token, "content"):
            continue
        for item in tokens.each(_CONTROL):
            if stristr(item, "url") is None:
                continue
            target = tokens.next(_CONTROL_QUOTES)
            if target is not None:
                url = collector.resolve(target)
                if url is not None:
                    url.redirect = True
                collector.add(url)


def _parse_link(tokens: _Tokens, collector: _Collector) -> None:
    wanted = False
    href: str | None = None
    while (token := tokens.next(_CONTROL)) is not None:
        if _has_prefix(token, "rel"):
            token = tokens.next(_CONTROL_PLUS)
            if token is None:
                break
            if _has_prefix(token, "stylesheet"):
                wanted = True
            if _has_prefix(token, "next") or _has_prefix(token, "alternate"):
                wanted = False
        if _has_prefix(token, "href"):
            target = tokens.next(_CONTROL_QUOTES)
            if target is not None:
                href = target
    if wanted and href is not None:
        collector.add(collector.resolve(href))


def _parse_script(tokens: _Tokens, collector: _Collector) -> None:
    for token in tokens.each(_CONTROL):
        if not _has_prefix(token, "src"):
            continue
        target = tokens.next(_CONTROL_QUOTES)
        if target is None or startswith("+", target):
            continue
        collector.add(collector.resolve(target))


def _parse_img_rest(tokens: _Tokens, collector: _Collector) -> None:
    for token in tokens.each(_CONTROL):
        if not _has_prefix(token, "src"):
            continue
        target = tokens.next(_CONTROL_QUOTES)
        if target is not None and len(target) > 1 and not _has_prefix(target, "data:image"):
            collector.add(collector.resolve(target))


def _parse_frame(tokens: _Tokens) -> None:
    for token in tokens.each(_CONTROL):
        if _has_prefix(token, "src"):
            tokens.next(_CONTROL_PLUS)


def _parse_tag(tag: str, collector: _Collector) -> None:
    tokens = _Tokens(tag)
    token = top = tokens.next(_CONTROL)
    while token is not None:
        if _has_prefix(token, "href"):
            tokens.next(_CONTROL_PLUS)
        elif _has_prefix(token, "meta"):
            _parse_meta(tokens, collector)
        elif _has_prefix(token, "img"):
            token = tokens.next(_CONTROL)
            if token is not None:
                if tokens.rest.startswith('""'):
                    continue
                if _has_prefix(token, "src"):
                    target = tokens.next(_CONTROL_QUOTES)
                    if target is not None:
                        if _has_prefix(target, "data:image"):
                            token = target
                            continue
                        url = collector.resolve(target)
                        if url is not None and not endswith("+", url.absolute):
                            collector.add(url)
                else:
                    _parse_img_rest(tokens, collector)
        elif _has_prefix(token, "link"):
            _parse_link(tokens, collector)
        elif _has_prefix(token, "script"):
            _parse_script(tokens, collector)
        elif _has_prefix(token, "location.href"):
            tokens.next(_CONTROL_PLUS)
        elif _has_prefix(token, "frame"):
            _parse_frame(tokens)
        elif _has_prefix(token, "background"):
            target = tokens.next(_CONTROL_QUOTES)
            if target is not None and top is not None and strmatch("body", top):
                collector.add(collector.resolve(target[:_TAG_LIMIT]))
        token = tokens.next(_CONTROL)


def parse_links(base: Url, page: str | None) -> list[Url]:
    """Return the distinct resources referenced by ``page``, resolved against ``base``.

    Backslashes are removed before scanning and comments are skipped.  An
    empty or missing page yields an empty list.
    """
    if not page:
        return []
    collector = _Collector(base)
    text = page.replace("\\", "")
    length = len(text)
    position = 0
    while position < length:
        if text[position] == "<":
            position += 1
            if text.startswith("!--", position):
                end = text.find("-->", position + 3)
                if end < 0:
                    break
                position = end + 3
            else:
                stop = text.find(">", position)
                if stop < 0:
                    stop = length
                stop = min(stop, position + _TAG_LIMIT)
                _parse_tag(text[position:stop], collector)
                position = stop
        position += 1
    return collector.urls