import pytest

from siegekit.parser import parse_links
from siegekit.url import Url


@pytest.fixture
def base():
    return Url("http://www.example.com/dir/")


def files(urls):
    return [url.file for url in urls]


def test_absolute_image_path(base):
    urls = parse_links(base, '<html><img src="/images/logo.png"></html>')
    assert len(urls) == 1
    assert urls[0].hostname == "www.example.com"
    assert urls[0].path == "/images/"
    assert urls[0].file == "logo.png"


def test_relative_image_uses_base_path(base):
    urls = parse_links(base, '<img src="pic.gif">')
    assert len(urls) == 1
    assert urls[0].path == "/dir/"
    assert urls[0].file == "pic.gif"


def test_anchors_are_not_collected(base):
    assert parse_links(base, '<a href="/other.html">link</a>') == []


def test_empty_page(base):
    assert parse_links(base, "") == []
    assert parse_links(base, None) == []


def test_comments_are_skipped(base):
    page = '<!-- <img src="/a.png"> --> <img src="/b.png">'
    assert files(parse_links(base, page)) == ["b.png"]


def test_character_after_comment_is_consumed(base):
    page = '<!-- c --><img src="/b.png">'
    assert parse_links(base, page) == []


def test_duplicates_removed(base):
    page = '<img src="/x.png"><img src="/x.png"><img src="/y.png">'
    urls = parse_links(base, page)
    assert files(urls) == ["x.png", "y.png"]


def test_order_preserved(base):
    page = '<img src="/second.png"><img src="/first.png">'
    assert files(parse_links(base, page)) == ["second.png", "first.png"]


def test_stylesheet_link(base):
    page = '<link rel="stylesheet" type="text/css" href="/css/site.css" />'
    urls = parse_links(base, page)
    assert files(urls) == ["site.css"]
    assert urls[0].path == "/css/"


def test_alternate_link_ignored(base):
    page = '<link rel="alternate" href="/feed.xml" />'
    assert parse_links(base, page) == []


def test_href_before_rel(base):
    page = '<link href="/css/main.css" rel="stylesheet">'
    assert files(parse_links(base, page)) == ["main.css"]


def test_script_src(base):
    page = '<script type="text/javascript" src="/js/app.js"></script>'
    assert files(parse_links(base, page)) == ["app.js"]


def test_script_src_starting_with_plus_is_skipped(base):
    page = '<script src="+inline"></script>'
    assert parse_links(base, page) == []


def test_body_background(base):
    urls = parse_links(base, '<body background="/img/bg.jpg">')
    assert files(urls) == ["bg.jpg"]


def test_background_outside_body_ignored(base):
    assert parse_links(base, '<td background="/img/bg.jpg">') == []


def test_meta_refresh_is_redirect(base):
    page = '<meta http-equiv="refresh" content="0; url=http://other.example.com/next.html">'
    urls = parse_links(base, page)
    assert len(urls) == 1
    assert urls[0].hostname == "other.example.com"
    assert urls[0].file == "next.html"
    assert urls[0].redirect is True


def test_inline_data_image_skipped(base):
    assert parse_links(base, '<img src="data:image/png;base64,AAAA">') == []


def test_empty_src_skipped(base):
    assert parse_links(base, '<img src="">') == []


def test_img_src_after_other_attribute(base):
    assert files(parse_links(base, '<img alt="x" src="/d.png">')) == ["d.png"]


def test_backslashes_are_stripped(base):
    page = '<img src=\\"/c.png\\">'
    assert files(parse_links(base, page)) == ["c.png"]


def test_unterminated_tag_still_parsed(base):
    assert files(parse_links(base, '<img src="/e.png"')) == ["e.png"]


def test_frames_not_collected(base):
    assert parse_links(base, '<frame src="/menu.html">') == []


def test_absolute_url_keeps_its_host(base):
    urls = parse_links(base, '<img src="http://cdn.example.com/a/b.png">')
    assert len(urls) == 1
    assert urls[0].hostname == "cdn.example.com"
    assert urls[0].path == "/a/"