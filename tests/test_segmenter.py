"""Test class EntrySegmenter."""

import pytest

from price_entry.common.errors import InvalidEntryFormatError
from price_entry.common.segmenter import EntrySegmenter, is_price_char


@pytest.mark.parametrize("ch,expected", [
    ("7", True),
    (" ", True),
    ("\t", True),
    ("(", True),
    (")", True),
    ("*", True),
    ("-", True),
    ("+", True),
    ("/", True),
    ("ч", False),
    ("a", False),
    (".", False),
    ("%", False),
])
def test_is_price_char(ch, expected):
    """is_price_char accepts digits, whitespace, brackets and operators only."""
    assert is_price_char(ch) == expected


def test_segment_name_first():
    """A leading name puts the price expression second."""
    price, name = EntrySegmenter.segment("чай 75")
    assert name == "чай"
    assert price.strip() == "75"
    assert name + price == "чай 75"


def test_segment_price_first():
    """A leading price expression keeps the separating space on the price side."""
    price, name = EntrySegmenter.segment("75 чай")
    assert (price, name) == ("75 ", "чай")
    assert price + name == "75 чай"


@pytest.mark.parametrize("line,expected", [
    ("tea 75+25", (" 75+25", "tea")),
    ("(10+10)*3 rent", ("(10+10)*3 ", "rent")),
    ("кофе(100-20)", ("(100-20)", "кофе")),
])
def test_segment_expressions(line, expected):
    """Whole arithmetic expressions are kept in the price part."""
    assert EntrySegmenter.segment(line) == expected


@pytest.mark.parametrize("line", [
    "",          # Empty line
    "75",        # Price only
    "75 + 25",   # Price only, with spaces
    "tea",       # Name only
])
def test_segment_single_region(line):
    """Lines without a class transition are rejected."""
    with pytest.raises(InvalidEntryFormatError):
        EntrySegmenter.segment(line)


def test_segment_stops_at_first_transition():
    """Only the first transition counts; names with spaces are not supported."""
    price, name = EntrySegmenter.segment("green tea 50")
    assert name == "green"
    assert price == " tea 50"


def test_split_point():
    """split_point returns the index of the first class change."""
    assert EntrySegmenter.split_point("abc12") == 3
    assert EntrySegmenter.split_point("12 abc") == 3
