"""Building blocks for an HTTP load generator: URLs, response headers, page links, MD5 and text helpers."""

__version__ = "0.1.0"

__all__ = [
    "md5",
    "notify",
    "page",
    "parser",
    "perl",
    "response",
    "url",
    "urlescape",
    "util",
    "version",
]