import pytest

from siegekit.perl import chomp, empty, ltrim, rtrim, split, trim, word_count


def test_chomp_removes_one_newline():
    assert chomp("abc\n") == "abc"
    assert chomp("abc\n\n") == "abc\n"
    assert chomp("abc") == "abc"
    assert chomp("") == ""


def test_trims():
    text = "  a b \t\n"
    assert rtrim(text) == "  a b"
    assert ltrim(text) == "a b \t\n"
    assert trim(text) == "a b"


@pytest.mark.parametrize("func", [rtrim, ltrim, trim])
def test_trims_pass_none(func):
    assert func(None) is None


@pytest.mark.parametrize("text", [None, "", " \t\n"])
def test_empty_true(text):
    assert empty(text) is True


def test_empty_false():
    assert empty(" x ") is False


def test_word_count():
    assert word_count(",", "a,,b,") == 2
    assert word_count(",", ",,,") == 0
    assert word_count(" ", "one two  three") == 3


def test_split_drops_empty_fields():
    assert split(",", "a,,b,") == ["a", "b"]
    assert split(",", ",lead") == ["lead"]
    assert split(",", ",,,") == []


@pytest.mark.parametrize("text", ["a,b,c", ",,x,,y", "", "solo", "p,,"])
def test_split_length_matches_word_count(text):
    assert len(split(",", text)) == word_count(",", text)