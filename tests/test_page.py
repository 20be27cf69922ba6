from siegekit.page import INITIAL_SLACK, Page


def test_new_page_holds_text():
    page = Page("abc")
    assert str(page) == "abc"
    assert len(page) == 3
    assert page.size() == len(page) + INITIAL_SLACK


def test_concat_whole_and_partial():
    page = Page("abc")
    page.concat("def")
    assert str(page) == "abcdef"
    page.concat("ghijk", 2)
    assert str(page) == "abcdefgh"
    assert len(page) == len(str(page))


def test_concat_ignores_empty_and_negative():
    page = Page("abc")
    page.concat("")
    page.concat(None)
    page.concat("x", -1)
    assert str(page) == "abc"
    assert len(page) == 3


def test_clear_keeps_capacity():
    page = Page("abc")
    page.concat("more text")
    capacity = page.size()
    page.clear()
    assert str(page) == ""
    assert len(page) == 0
    assert page.size() == capacity


def test_concat_after_clear():
    page = Page("abc")
    page.clear()
    page.concat("xyz")
    assert str(page) == "xyz"


def test_page_grows_when_full():
    page = Page()
    chunk = "a" * (INITIAL_SLACK + 10)
    page.concat(chunk)
    assert len(page) == len(chunk)
    assert page.size() == INITIAL_SLACK + len(chunk) + 1
    assert page.size() >= len(page)
    assert str(page) == chunk


def test_capacity_unchanged_when_room_left():
    page = Page("abc")
    before = page.size()
    page.concat("def")
    assert page.size() == before