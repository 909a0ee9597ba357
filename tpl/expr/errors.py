"""
Exceptions raised while tokenizing, parsing and evaluating expressions.

Every error names the expression (or the variable path) it came from
so that the message is readable without a traceback.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import TplUserError


class ExpressionError(TplUserError):
    """Base class for expression errors."""
    pass


@dataclass
class EmptyExpressionError(ExpressionError):
    """Expression contains no tokens."""
    expression: str

    def __str__(self) -> str:
        return f"Empty expression: {self.expression!r}"


@dataclass
class MismatchedParenthesesError(ExpressionError):
    """A ')' without '(' or a '(' that is never closed."""
    expression: str

    def __str__(self) -> str:
        return f"Mismatched parentheses in expression {self.expression!r}"


@dataclass
class InsufficientOperandsError(ExpressionError):
    """Binary operator with fewer than two operands."""
    operator: str
    expression: str

    def __str__(self) -> str:
        return f"Not enough operands for '{self.operator}' in expression {self.expression!r}"


@dataclass
class UnresolvedExpressionError(ExpressionError):
    """Operands left over after building the tree (missing operator)."""
    expression: str
    roots: int

    def __str__(self) -> str:
        return (
            f"Could not resolve expression {self.expression!r} to a single value "
            f"({self.roots} operands without an operator)"
        )


@dataclass
class VariableNotFoundError(ExpressionError):
    """Path component missing from the context."""
    path: str
    component: str

    def __str__(self) -> str:
        if self.path == self.component:
            return f"Variable '{self.path}' not found in context"
        return f"Variable '{self.path}' not found in context (missing key '{self.component}')"


@dataclass
class NotAnObjectError(ExpressionError):
    """Key lookup on a value that is not an object."""
    path: str
    component: str

    def __str__(self) -> str:
        return f"Cannot look up '{self.component}' in '{self.path}': value is not an object"


@dataclass
class InvalidVariableAccessError(ExpressionError):
    """Variable resolves to an object, a list or an unsupported value."""
    path: str
    type_name: str

    def __str__(self) -> str:
        return f"Variable '{self.path}' is a {self.type_name} and cannot be used as a value"


@dataclass
class InvalidOperatorTypesError(ExpressionError):
    """Operand types not supported by the operator."""
    operator: str
    left_type: str
    right_type: str

    def __str__(self) -> str:
        return f"Invalid operand types for '{self.operator}': {self.left_type} and {self.right_type}"


@dataclass
class DivisionByZeroError(ExpressionError):
    """Right operand of '/' is zero."""
    left: object

    def __str__(self) -> str:
        return f"Division by zero ({describe_number(self.left)} / 0)"


@dataclass
class NumberOutOfRangeError(ExpressionError):
    """Number that has no representation: too many digits, or an integer beyond float range."""
    number: object
    reason: str

    def __str__(self) -> str:
        return f"Number {describe_number(self.number)} is out of range: {self.reason}"


def describe_number(number: object) -> str:
    """Short printable form of a number or a numeric literal."""
    if isinstance(number, str):
        text = number
    else:
        try:
            text = repr(number)
        except ValueError:
            # int too large for decimal conversion
            return f"<integer of {number.bit_length()} bits>"
    if len(text) > 32:
        return f"{text[:12]}...{text[-8:]} ({len(text)} chars)"
    return text


__all__ = [
    "ExpressionError",
    "EmptyExpressionError",
    "MismatchedParenthesesError",
    "InsufficientOperandsError",
    "UnresolvedExpressionError",
    "VariableNotFoundError",
    "NotAnObjectError",
    "InvalidVariableAccessError",
    "InvalidOperatorTypesError",
    "DivisionByZeroError",
    "NumberOutOfRangeError",
    "describe_number",
]
