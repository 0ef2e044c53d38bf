"""Parse and evaluate integer price expressions safely."""
from collections.abc import Callable as ABCCallable
import operator
from typing import Callable, Dict, List, Optional

from price_entry.common.errors import (
    ArithmeticOverflowError,
    DivisionByZeroError,
    InvalidCharacterError,
    MalformedExpressionError,
    UnbalancedParenthesesError,
)
from price_entry.common.logger import logger
from price_entry.common.models import (
    INT32_MAX,
    INT32_MIN,
    CloseBracket,
    Instruction,
    NumberInstruction,
    NumberToken,
    OpenBracket,
    OperatorInstruction,
    OperatorKind,
    OperatorToken,
    Token,
)


# Type alias for operator functions (taking two ints, returning an int)
OperatorFn: ABCCallable[[int, int], int] = Callable[[int, int], int]

DIGITS: str = "0123456789"
SEPARATOR: str = " "


def _truncating_div(left: int, right: int) -> int:
    """Integer division rounding toward zero (``-7 / 2 == -3``)."""
    quotient = abs(left) // abs(right)
    if (left < 0) != (right < 0):
        return -quotient
    return quotient


# Mapping of operator kinds to their unchecked implementation
OPERATIONS: Dict[OperatorKind, OperatorFn] = {
    OperatorKind.ADD: operator.add,
    OperatorKind.SUB: operator.sub,
    OperatorKind.MUL: operator.mul,
    OperatorKind.DIV: _truncating_div,
}


def checked_apply(kind: OperatorKind, left: int, right: int) -> int:
    """
    Apply an operator with signed 32-bit overflow checking.

    :param OperatorKind kind: Operator to apply
    :param int left: Left operand
    :param int right: Right operand

    :return: Result of ``left <op> right``
    :rtype: int
    :raises DivisionByZeroError: If dividing by zero
    :raises ArithmeticOverflowError: If the result does not fit in 32 bits
    """
    if kind is OperatorKind.DIV and right == 0:
        raise DivisionByZeroError()
    result = OPERATIONS[kind](left, right)
    if not INT32_MIN <= result <= INT32_MAX:
        raise ArithmeticOverflowError(
            f"Arithmetic overflow in price expression: {left} {kind.value} {right}"
        )
    return result


class _PendingToken:
    """
    Single-slot buffer holding the token currently being built by the tokenizer.

    Digits are folded into a pending NumberToken; any other token replaces the
    slot and hands back whatever was there before.
    """

    def __init__(self) -> None:
        self._token: Optional[Token] = None

    def push_digit(self, digit: int) -> Optional[Token]:
        """Fold a digit into the pending number, or start a new number."""
        if isinstance(self._token, NumberToken):
            value = self._token.value * 10 + digit
            if value > INT32_MAX:
                raise ArithmeticOverflowError(
                    f"Number too large in price expression: {self._token.value}{digit}..."
                )
            self._token = NumberToken(value=value)
            return None
        return self.replace(NumberToken(value=digit))

    def replace(self, token: Token) -> Optional[Token]:
        """Store a new pending token and return the previous one."""
        previous, self._token = self._token, token
        return previous

    def take(self) -> Optional[Token]:
        """Empty the slot and return its content."""
        previous, self._token = self._token, None
        return previous


class ExpressionParser:
    """
    Parse and evaluate integer price expressions safely.

    Design constraints:
        - No eval(), no dynamic code execution
        - Exact signed 32-bit integer arithmetic, every operation checked

    Algorithm:
        1. Tokenize character by character (no separators required)
        2. Convert to Reverse Polish Notation (RPN) using Shunting-yard
        3. Evaluate RPN using a stack

    Examples:
        - Infix expression: (10 + 10) * 3
        - Corresponding RPN: 10 10 + 3 *
    """

    @staticmethod
    def tokenize(expr: str) -> List[Token]:
        """
        Split a price expression into tokens.

        Multi-digit numbers are built by folding digits one at a time. A space
        ends the current token but produces none of its own.

        :param str expr: Price expression as a string

        :return: List of tokens, empty for an empty expression
        :rtype: List[Token]
        :raises InvalidCharacterError: On a character outside the expression alphabet
        :raises ArithmeticOverflowError: If a literal does not fit in 32 bits
        """
        tokens: List[Token] = []
        pending = _PendingToken()

        for ch in expr:
            if ch in DIGITS:
                finished = pending.push_digit(int(ch))
            elif ch in "+-*/":
                finished = pending.replace(OperatorToken(kind=OperatorKind.from_symbol(ch)))
            elif ch == "(":
                finished = pending.replace(OpenBracket())
            elif ch == ")":
                finished = pending.replace(CloseBracket())
            elif ch == SEPARATOR:
                finished = pending.take()
            else:
                raise InvalidCharacterError(ch)

            if finished is not None:
                tokens.append(finished)

        last = pending.take()
        if last is not None:
            tokens.append(last)
        return tokens

    @staticmethod
    def _pop_to_output(token: Token, output: List[Instruction]) -> None:
        """Append a popped operator-stack entry to the output as an instruction."""
        if isinstance(token, OperatorToken):
            output.append(OperatorInstruction(kind=token.kind))
        elif isinstance(token, NumberToken):
            output.append(NumberInstruction(value=token.value))
        else:
            # Brackets are handled by the caller and never reach the output
            raise UnbalancedParenthesesError()

    @staticmethod
    def to_rpn(tokens: List[Token]) -> List[Instruction]:
        """
        Convert a list of tokens into Reverse Polish Notation (RPN) using the Shunting-yard algorithm.

        Operators of equal precedence are popped before pushing, which makes
        them left-associative: ``20-10-5`` is ``(20-10)-5``.

        :param List[Token] tokens: List of infix tokens

        :return: List of instructions in RPN order
        :rtype: List[Instruction]
        :raises UnbalancedParenthesesError: If a bracket is never closed or never opened
        """
        output: List[Instruction] = []
        stack: List[Token] = []

        for token in tokens:
            if isinstance(token, NumberToken):
                # Numbers are added directly to the output
                output.append(NumberInstruction(value=token.value))

            elif isinstance(token, OpenBracket):
                stack.append(token)

            elif isinstance(token, CloseBracket):
                # Pop until the matching open bracket, which is discarded
                while True:
                    if not stack:
                        raise UnbalancedParenthesesError()
                    top = stack.pop()
                    if isinstance(top, OpenBracket):
                        break
                    ExpressionParser._pop_to_output(top, output)

            else:
                # Operator: pop operators from stack with higher or equal precedence,
                # never past an open bracket
                prec = token.kind.precedence
                while (
                    stack
                    and isinstance(stack[-1], OperatorToken)
                    and stack[-1].kind.precedence >= prec
                ):
                    ExpressionParser._pop_to_output(stack.pop(), output)
                stack.append(token)

        # Append remaining operators in pop order (stack top first)
        while stack:
            top = stack.pop()
            if isinstance(top, OpenBracket):
                raise UnbalancedParenthesesError()
            ExpressionParser._pop_to_output(top, output)
        return output

    @staticmethod
    def evaluate_rpn(instructions: List[Instruction], expr: str = "") -> int:
        """
        Execute a postfix program against a value stack.

        :param List[Instruction] instructions: Instructions in RPN order
        :param str expr: Source expression, used in error messages only

        :return: The single value left on the stack
        :rtype: int
        :raises MalformedExpressionError: If an operator lacks operands or the stack does not end with one value
        :raises ArithmeticOverflowError: If an operation overflows or divides by zero
        """
        stack: List[int] = []
        for instruction in instructions:
            if isinstance(instruction, NumberInstruction):
                stack.append(instruction.value)
            else:
                # Operator requires two operands
                if len(stack) < 2:
                    raise MalformedExpressionError(expr)
                right: int = stack.pop()
                left: int = stack.pop()
                stack.append(checked_apply(instruction.kind, left, right))

        if len(stack) != 1:
            raise MalformedExpressionError(expr)

        return stack[0]

    @staticmethod
    def evaluate(expr: str) -> int:
        """
        Evaluate a price expression.

        :param str expr: Price expression string

        :return: Computed price
        :rtype: int
        :raises PriceEntryError: If the expression is invalid, malformed or overflows
        """
        tokens: List[Token] = ExpressionParser.tokenize(expr)
        rpn: List[Instruction] = ExpressionParser.to_rpn(tokens)
        result: int = ExpressionParser.evaluate_rpn(rpn, expr)
        logger.debug("Evaluated %r to %d", expr, result)
        return result
