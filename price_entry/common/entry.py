"""Turn one free-text line into a product entry."""
from price_entry.common.logger import logger
from price_entry.common.models import ProductEntry
from price_entry.common.parser import ExpressionParser
from price_entry.common.segmenter import EntrySegmenter


def parse_entry(line: str) -> ProductEntry:
    """
    Parse a line such as ``"tea 75+25"`` into a product name and a price.

    :param str line: Raw entry line

    :return: Parsed entry
    :rtype: ProductEntry
    :raises PriceEntryError: If the line cannot be segmented or the price cannot be evaluated
    """
    price_expr, name = EntrySegmenter.segment(line.strip())
    price = ExpressionParser.evaluate(price_expr)
    entry = ProductEntry(name=name, price=price)
    logger.debug("Parsed entry %r -> %s: %d", line, entry.name, entry.price)
    return entry
