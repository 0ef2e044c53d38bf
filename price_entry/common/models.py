"""Pydantic models for price expression tokens, instructions and parsed entries."""
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


# Bounds of the signed 32-bit integer every price must fit in
INT32_MIN: int = -(2**31)
INT32_MAX: int = 2**31 - 1


class OperatorKind(str, Enum):
    """Binary arithmetic operator, valued by its symbol."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"

    @property
    def precedence(self) -> int:
        """Binding strength: 1 for multiplicative, 0 for additive operators."""
        if self in (OperatorKind.MUL, OperatorKind.DIV):
            return 1
        return 0

    @classmethod
    def from_symbol(cls, symbol: str) -> "OperatorKind":
        """
        Look up an operator by its symbol.

        :param str symbol: One of ``+ - * /``

        :return: Matching operator kind
        :rtype: OperatorKind
        :raises ValueError: If the symbol is not an operator
        """
        return cls(symbol)


class _Frozen(BaseModel):
    # Tokens and instructions never change once produced
    model_config = ConfigDict(frozen=True)


class NumberToken(_Frozen):
    """Non-negative integer literal."""

    value: int = Field(..., ge=0, le=INT32_MAX, description="Literal value")


class OperatorToken(_Frozen):
    """Binary operator."""

    kind: OperatorKind = Field(..., description="Operator kind")


class OpenBracket(_Frozen):
    """Opening parenthesis."""


class CloseBracket(_Frozen):
    """Closing parenthesis."""


Token = Union[NumberToken, OperatorToken, OpenBracket, CloseBracket]


class NumberInstruction(_Frozen):
    """Push a value onto the evaluation stack."""

    value: int = Field(..., ge=INT32_MIN, le=INT32_MAX, description="Value to push")


class OperatorInstruction(_Frozen):
    """Pop two values, apply the operator, push the result."""

    kind: OperatorKind = Field(..., description="Operator kind")


Instruction = Union[NumberInstruction, OperatorInstruction]


class ProductEntry(_Frozen):
    """Product name and exact integer price parsed from one free-text line."""

    name: str = Field(..., min_length=1, description="Product name")
    price: int = Field(..., ge=INT32_MIN, le=INT32_MAX, description="Price in whole currency units")

    @field_validator("name")
    def name_must_not_be_blank(cls, v: str) -> str:
        """Strip the name and reject names made only of whitespace."""
        v = v.strip()
        if not v:
            raise ValueError("Product name cannot be empty")
        return v


class EntryResult(BaseModel):
    """Outcome of parsing one line of a batch, sent from a worker to the runner."""

    line_number: int = Field(..., ge=1, description="Line number in the input file")
    line: str = Field(..., description="Original entry line")
    name: Optional[str] = Field(default=None, description="Parsed product name")
    price: Optional[int] = Field(default=None, description="Evaluated price")
    error: Optional[str] = Field(default=None, description="Error message when parsing failed")
    kind: Optional[str] = Field(default=None, description="Error kind when parsing failed")

    @property
    def ok(self) -> bool:
        """True when the line was parsed successfully."""
        return self.error is None
