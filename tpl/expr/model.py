"""
Data models for template expressions.

Contains the value type classification shared by the evaluator and the
context resolver, and the AST node classes produced by the parser.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

# Scalar values an expression can produce
Value = Union[str, int, float, bool]


class ValueType(Enum):
    """Types of values that can appear in a context."""
    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    OBJECT = "object"
    LIST = "list"


# Types usable directly as operands
SCALAR_TYPES = frozenset({ValueType.STRING, ValueType.INTEGER, ValueType.FLOAT, ValueType.BOOLEAN})

NUMERIC_TYPES = frozenset({ValueType.INTEGER, ValueType.FLOAT})


def type_of(value: Any) -> Optional[ValueType]:
    """
    Classifies a Python value as a context value type.

    bool is checked before int since it is a subclass of it.

    Returns:
        Value type or None for values the engine does not support (None, sets, ...)
    """
    if isinstance(value, bool):
        return ValueType.BOOLEAN
    if isinstance(value, int):
        return ValueType.INTEGER
    if isinstance(value, float):
        return ValueType.FLOAT
    if isinstance(value, str):
        return ValueType.STRING
    if isinstance(value, Mapping):
        return ValueType.OBJECT
    if isinstance(value, (list, tuple)):
        return ValueType.LIST
    return None


def type_name(value: Any) -> str:
    """Human readable type name for error messages."""
    vt = type_of(value)
    return vt.value if vt is not None else type(value).__name__


class NodeType(Enum):
    """Types of expression AST nodes."""
    CONSTANT = "constant"
    VARIABLE = "variable"
    BINARY_OP = "binary_op"


class Operator(Enum):
    """Binary operators with their binding power (higher binds tighter)."""
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    EQ = "=="

    @property
    def precedence(self) -> int:
        return _PRECEDENCE[self]

    @classmethod
    def from_token(cls, token: str) -> Optional[Operator]:
        """Returns the operator spelled by token, or None for operands and parentheses."""
        try:
            return cls(token)
        except ValueError:
            return None


# '==' binds tighter than arithmetic: "a + 1 == 2" is "a + (1 == 2)"
_PRECEDENCE = {
    Operator.ADD: 1,
    Operator.SUB: 1,
    Operator.MUL: 2,
    Operator.DIV: 2,
    Operator.EQ: 3,
}


@dataclass(frozen=True)
class ExprNode:
    """Base class for all expression AST nodes."""

    def get_type(self) -> NodeType:
        raise NotImplementedError

    def __str__(self) -> str:
        return self._to_string()

    def _to_string(self) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class ConstantNode(ExprNode):
    """Literal value: "text", 42, 3.14"""
    value: Value

    def get_type(self) -> NodeType:
        return NodeType.CONSTANT

    def _to_string(self) -> str:
        if isinstance(self.value, str):
            return f'"{self.value}"'
        return str(self.value)


@dataclass(frozen=True)
class VariableNode(ExprNode):
    """
    Reference to a context value: name or dotted path (user.address.city).

    Resolved against the context at evaluation time.
    """
    path: str

    def get_type(self) -> NodeType:
        return NodeType.VARIABLE

    def _to_string(self) -> str:
        return self.path


@dataclass(frozen=True)
class BinaryOpNode(ExprNode):
    """Binary operation: left op right"""
    operator: Operator
    left: ExprNode
    right: ExprNode

    def get_type(self) -> NodeType:
        return NodeType.BINARY_OP

    def _to_string(self) -> str:
        return f"({self.left} {self.operator.value} {self.right})"


AnyNode = Union[ConstantNode, VariableNode, BinaryOpNode]

__all__ = [
    "Value",
    "ValueType",
    "SCALAR_TYPES",
    "NUMERIC_TYPES",
    "type_of",
    "type_name",
    "NodeType",
    "Operator",
    "ExprNode",
    "ConstantNode",
    "VariableNode",
    "BinaryOpNode",
    "AnyNode",
]
