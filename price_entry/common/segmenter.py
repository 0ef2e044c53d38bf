"""Split a free-text entry line into its name and price-expression parts."""
from typing import Tuple

from price_entry.common.errors import InvalidEntryFormatError


PRICE_SYMBOLS: str = "0123456789()*-+/"


def is_price_char(ch: str) -> bool:
    """
    Tell whether a character may belong to a price expression.

    :param str ch: Single character

    :return: True for digits, whitespace, brackets and the four operators
    :rtype: bool
    """
    return ch in PRICE_SYMBOLS or ch.isspace()


class EntrySegmenter:
    """
    Split a line made of exactly two character-class regions.

    The line is assumed to hold a name and a price expression side by side,
    in either order, with no delimiter: ``"tea 75+25"`` or ``"(10+10)*3 rent"``.
    Names containing digits or spaces are not supported; they split at the
    first class change and the remainder fails later in the tokenizer.
    """

    @staticmethod
    def split_point(line: str) -> int:
        """
        Find the index of the first character whose class differs from the first one.

        :param str line: Entry line

        :return: Index of the first class transition
        :rtype: int
        :raises InvalidEntryFormatError: If the line is empty or has a single class
        """
        if not line:
            raise InvalidEntryFormatError(line)

        leading = is_price_char(line[0])
        for index, ch in enumerate(line):
            if is_price_char(ch) != leading:
                return index

        raise InvalidEntryFormatError(line)

    @staticmethod
    def segment(line: str) -> Tuple[str, str]:
        """
        Split an entry line into ``(price_expression, name)``.

        Both parts are slices of the input, untrimmed, so joining them back in
        their original order reproduces the line.

        :param str line: Trimmed entry line

        :return: Tuple of (price expression, name)
        :rtype: Tuple[str, str]
        :raises InvalidEntryFormatError: If no name and price can be told apart
        """
        split = EntrySegmenter.split_point(line)
        head, tail = line[:split], line[split:]

        if is_price_char(line[0]):
            price, name = head, tail
        else:
            price, name = tail, head

        if not name.strip():
            raise InvalidEntryFormatError(line)
        return price, name
