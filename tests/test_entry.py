"""Test function parse_entry."""

import pytest

from price_entry.common.entry import parse_entry
from price_entry.common.errors import (
    ArithmeticOverflowError,
    InvalidCharacterError,
    InvalidEntryFormatError,
    UnbalancedParenthesesError,
)
from price_entry.common.models import ProductEntry


@pytest.mark.parametrize("line,name,price", [
    ("tea 75+25", "tea", 100),
    ("(10+10)*3 rent", "rent", 60),
    ("чай 75", "чай", 75),
    ("75 чай", "чай", 75),
    ("  молоко 60  ", "молоко", 60),
    ("обед 300/2", "обед", 150),
])
def test_parse_entry_valid(line, name, price):
    """parse_entry returns the stripped name and the evaluated price."""
    entry = parse_entry(line)
    assert entry == ProductEntry(name=name, price=price)


@pytest.mark.parametrize("line,error", [
    ("", InvalidEntryFormatError),
    ("100", InvalidEntryFormatError),
    ("tea", InvalidEntryFormatError),
    ("green tea 50", InvalidCharacterError),
    ("tea (10+10", UnbalancedParenthesesError),
    ("tea 2147483647+1", ArithmeticOverflowError),
])
def test_parse_entry_invalid(line, error):
    """parse_entry propagates the first error raised by the pipeline."""
    with pytest.raises(error):
        parse_entry(line)
