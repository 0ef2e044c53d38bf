"""User-facing messages for engine errors."""
from typing import Dict

from price_entry.common.errors import InvalidCharacterError, PriceEntryError


DEFAULT_LANGUAGE: str = "ru"

MESSAGES: Dict[str, Dict[str, str]] = {
    "ru": {
        "invalid_entry_format": "В строке должны быть указаны продукт и цена",
        "invalid_character": "Недопустимый символ в цене: {character}",
        "arithmetic_overflow": "Слишком большое число в цене",
        "division_by_zero": "Деление на ноль в цене",
        "unbalanced_parentheses": "Несбалансированные скобки в цене",
        "malformed_expression": "Не удалось вычислить цену",
    },
    "en": {
        "invalid_entry_format": "A product and a price must be specified",
        "invalid_character": "Invalid character in price: {character}",
        "arithmetic_overflow": "Number in price is too large",
        "division_by_zero": "Division by zero in price",
        "unbalanced_parentheses": "Unbalanced parentheses in price",
        "malformed_expression": "Price could not be evaluated",
    },
}


def render_error(exc: PriceEntryError, language: str = DEFAULT_LANGUAGE) -> str:
    """
    Render an engine error as a message for end users.

    Unknown languages fall back to English; unknown kinds fall back to the
    exception's own message.

    :param PriceEntryError exc: Error raised by the engine
    :param str language: Language code, ``"ru"`` or ``"en"``

    :return: Localised message
    :rtype: str
    """
    catalogue = MESSAGES.get(language, MESSAGES["en"])
    template = catalogue.get(exc.kind)
    if template is None:
        return str(exc)
    if isinstance(exc, InvalidCharacterError):
        return template.format(character=exc.character)
    return template
