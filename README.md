# siegekit

Building blocks for an HTTP load generator, usable on their own. The package
depends only on the standard library and supports Python 3.10 and later.

## Modules

- `siegekit.url` – `Url` parses request lines such as
  `http://host/path POST a=1` into scheme, credentials, host, port, path,
  file, parameters, query, fragment, method and body. A body written as
  `<file` is read from that file. `normalize(base, location)` resolves a
  link found in a page against the URL it came from (returning `None` for
  inline `data:image/gif` locations); `normalize_string` gives the absolute
  form. `Url.display(full)`, `Url.dump()`, `Url.scheme_name()`,
  `Url.method_name()`, `Url.default_port()` and `Url.set_postdata()` round
  it out.
- `siegekit.urlescape` – `escape(url)` percent-encodes unsafe characters in
  a URL path and decodes needless escapes; `has_method(url)` finds a
  ` METHOD` marker; `replace_all` replaces every occurrence of a needle
  (an empty needle raises `ValueError`). The `Method` and `Scheme`
  enumerations live here.
- `siegekit.response` – `Response` is filled one header line at a time
  (`parse_code`, `parse_content_type`, `parse_content_length`,
  `parse_content_encoding`, `parse_transfer_encoding`, `parse_location`,
  `parse_connection`, `parse_keepalive`, `parse_last_modified`,
  `parse_etag`, `parse_www_authenticate`, `parse_proxy_authenticate`) and
  answers `code()` (418 when no status line was read), `protocol()`,
  `success()`, `failure()`, `content_type()`, `charset()`,
  `content_length()`, `content_encoding()`, `transfer_encoding()`,
  `location()`, `redirect()`, `connection()`, `keepalive_timeout()`,
  `keepalive_max()`, `last_modified()` and `etag()`. Authentication details
  are kept in attributes such as `www_auth_type` and `www_auth_realm`. The
  enumerations `Connection`, `TransferEncoding`, `ContentEncoding` and
  `AuthType` describe the parsed values.
- `siegekit.parser` – `parse_links(base, page)` returns the distinct
  stylesheets, scripts, images, meta refresh targets and body backgrounds
  an HTML page refers to, as `Url` objects. Plain anchors and frames are
  not collected.
- `siegekit.md5` – a pure MD5 with an `MD5` class (`update`, `copy`,
  `digest`, `hexdigest`) plus `digest_bytes` and `digest_stream`.
- `siegekit.page` – `Page`, a growable text buffer with `concat`, `clear`,
  `size`, `len()` and `str()`.
- `siegekit.perl` – `chomp`, `trim`, `ltrim`, `rtrim`, `empty`,
  `word_count` and `split`.
- `siegekit.util` – `parse_time`, `substring`, `okay`, `strmatch`,
  `startswith`, `endswith`, `stristr`, `strncasestr`, `elapsed_time`,
  `urandom` and the `RandR` generator.
- `siegekit.notify` – `format_notice`, `notify` (standard error) and
  `display` (standard output) for coloured notices; `open_log`, `log` and
  `close_log` for the system log. A `Level.FATAL` notice raises
  `SystemExit(1)`.
- `siegekit.version` – `banner()` returns the program name and version.

## Examples

Reading response headers:

```python
from siegekit.response import Response

response = Response()
response.parse_code("HTTP/1.1 301 Moved Permanently")
response.parse_location("location: http://www.example.com/new/")

response.code()       # 301
response.redirect()   # True
response.location()   # "http://www.example.com/new/"
```

Resolving a relative link:

```python
from siegekit.url import Url, normalize_string

base = Url("http://www.example.com/docs/")
normalize_string(base, "images/logo.png")
```

Extracting the resources a page refers to:

```python
from siegekit.url import Url
from siegekit.parser import parse_links

base = Url("http://www.example.com/")
html = '<link rel="stylesheet" href="/style.css"><script src="/app.js"></script>'
for link in parse_links(base, html):
    print(link.display(True))
```

Hashing:

```python
from siegekit.md5 import MD5, digest_bytes

digest_bytes(b"abc").hex()        # "900150983cd24fb0d6963f7d28e17f72"
hasher = MD5(b"a")
hasher.update(b"bc")
hasher.hexdigest()                # same value
```

Building up page text:

```python
from siegekit.page import Page

page = Page("<html>")
page.concat("</html>", 7)
str(page)   # "<html></html>"
len(page)   # 13
```

## What it does not do

siegekit is a library only. It has no command-line program, opens no
network connections, speaks no HTTP or TLS, and runs no load tests: it
parses and prepares the pieces (request URLs, response headers, page links,
digests) that such a tool works with, and leaves sending requests and
timing them to the caller.