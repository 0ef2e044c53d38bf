"""Error kinds raised by the price entry engine.

All errors derive from ``ValueError`` so that callers treating malformed input
as a value error keep working. Each class exposes a stable ``kind`` string;
rendering a user-facing message is left to the caller (see ``messages.py``).
"""


class PriceEntryError(ValueError):
    """Base class for every failure of the entry pipeline."""

    kind: str = "price_entry_error"


class InvalidEntryFormatError(PriceEntryError):
    """The line could not be split into a product name and a price expression."""

    kind = "invalid_entry_format"

    def __init__(self, line: str) -> None:
        self.line = line
        super().__init__(f"A product and a price must be specified: {line!r}")


class InvalidCharacterError(PriceEntryError):
    """A character outside the recognised set appeared in a price expression."""

    kind = "invalid_character"

    def __init__(self, character: str) -> None:
        self.character = character
        super().__init__(f"Invalid character in price expression: {character!r}")


class ArithmeticOverflowError(PriceEntryError):
    """A checked operation produced a value outside the signed 32-bit range."""

    kind = "arithmetic_overflow"

    def __init__(self, message: str = "Arithmetic overflow in price expression") -> None:
        super().__init__(message)


class DivisionByZeroError(ArithmeticOverflowError):
    """
    Division by zero.

    Subclass of ArithmeticOverflowError: code that only knows about overflow
    still catches it, as both are "no representable result" conditions.
    """

    kind = "division_by_zero"

    def __init__(self) -> None:
        super().__init__("Division by zero in price expression")


class UnbalancedParenthesesError(PriceEntryError):
    """A bracket was opened and never closed, or closed without being opened."""

    kind = "unbalanced_parentheses"

    def __init__(self) -> None:
        super().__init__("Unbalanced parentheses in price expression")


class MalformedExpressionError(PriceEntryError):
    """The postfix program did not reduce to exactly one value."""

    kind = "malformed_expression"

    def __init__(self, expression: str = "") -> None:
        self.expression = expression
        message = "Malformed price expression"
        if expression:
            message = f"{message}: {expression!r}"
        super().__init__(message)
