"""
Evaluator for expression ASTs.

Walks the tree produced by the parser and computes its value against a
context, applying the operand typing rules of each operator. The walk
uses an explicit stack, so long operator chains do not hit the
interpreter's recursion limit.
"""

from __future__ import annotations

import operator
from typing import Callable, Dict, List, Tuple, cast

from .context import Context, resolve_value
from .errors import (
    DivisionByZeroError,
    ExpressionError,
    InvalidOperatorTypesError,
    NumberOutOfRangeError,
)
from .model import (
    NUMERIC_TYPES,
    BinaryOpNode,
    ConstantNode,
    ExprNode,
    NodeType,
    Operator,
    Value,
    ValueType,
    VariableNode,
    type_of,
)


class ExpressionEvaluator:
    """
    Expression evaluator.

    Takes an AST and the render context, returns a scalar value.

    Operand rules:
    - '+' concatenates two strings and adds two numbers
    - '-', '*', '/' accept numbers only
    - '==' compares two strings or two numbers
    - int op int stays int, any float operand makes the result float
    - booleans are never valid operands
    """

    def __init__(self, context: Context):
        """
        Initializes the evaluator with a context.

        Args:
            context: Mapping of top-level names to context values
        """
        self.context = context
        self._operations: Dict[Operator, Callable[[Value, Value], Value]] = {
            Operator.ADD: self._add,
            Operator.SUB: self._sub,
            Operator.MUL: self._mul,
            Operator.DIV: self._div,
            Operator.EQ: self._eq,
        }

    def evaluate(self, node: ExprNode) -> Value:
        """
        Computes the value of an expression tree.

        Args:
            node: Root node of the AST

        Returns:
            String, integer, float or boolean result

        Raises:
            ExpressionError: On lookup failures, operand type errors,
                numbers out of range or division by zero
        """
        values: List[Value] = []
        # (node, operands already evaluated)
        pending: List[Tuple[ExprNode, bool]] = [(node, False)]

        while pending:
            current, reduced = pending.pop()
            node_type = current.get_type()

            if node_type == NodeType.CONSTANT:
                values.append(cast(ConstantNode, current).value)
            elif node_type == NodeType.VARIABLE:
                values.append(resolve_value(cast(VariableNode, current).path, self.context))
            elif node_type == NodeType.BINARY_OP:
                binary = cast(BinaryOpNode, current)
                if reduced:
                    right = values.pop()
                    left = values.pop()
                    values.append(self._operations[binary.operator](left, right))
                else:
                    # Left operand is popped first: its error wins
                    pending.append((binary, True))
                    pending.append((binary.right, False))
                    pending.append((binary.left, False))
            else:
                raise ExpressionError(f"Unknown node type: {node_type}")

        return values[0]

    # Operators

    def _add(self, left: Value, right: Value) -> Value:
        if type_of(left) is ValueType.STRING and type_of(right) is ValueType.STRING:
            return cast(str, left) + cast(str, right)
        return self._arithmetic(Operator.ADD, left, right, operator.add)

    def _sub(self, left: Value, right: Value) -> Value:
        return self._arithmetic(Operator.SUB, left, right, operator.sub)

    def _mul(self, left: Value, right: Value) -> Value:
        return self._arithmetic(Operator.MUL, left, right, operator.mul)

    def _div(self, left: Value, right: Value) -> Value:
        self._require_numbers(Operator.DIV, left, right)
        if right == 0:
            raise DivisionByZeroError(left)
        if type_of(left) is ValueType.INTEGER and type_of(right) is ValueType.INTEGER:
            return _truncating_div(cast(int, left), cast(int, right))
        return _to_float(left) / _to_float(right)

    def _eq(self, left: Value, right: Value) -> Value:
        if type_of(left) is ValueType.STRING and type_of(right) is ValueType.STRING:
            return left == right
        self._require_numbers(Operator.EQ, left, right)
        return left == right

    # Helpers

    def _arithmetic(
        self,
        op: Operator,
        left: Value,
        right: Value,
        apply: Callable[[Value, Value], Value],
    ) -> Value:
        """Int op int stays int; a float operand converts both sides to float."""
        self._require_numbers(op, left, right)
        if type_of(left) is ValueType.FLOAT or type_of(right) is ValueType.FLOAT:
            return apply(_to_float(left), _to_float(right))
        return apply(left, right)

    @staticmethod
    def _require_numbers(op: Operator, left: Value, right: Value) -> None:
        left_type, right_type = type_of(left), type_of(right)
        if left_type not in NUMERIC_TYPES or right_type not in NUMERIC_TYPES:
            raise InvalidOperatorTypesError(
                op.value,
                left_type.value if left_type else type(left).__name__,
                right_type.value if right_type else type(right).__name__,
            )


def _to_float(value: Value) -> float:
    try:
        return float(value)
    except OverflowError:
        raise NumberOutOfRangeError(value, "too large to convert to float") from None


def _truncating_div(left: int, right: int) -> int:
    """Integer division rounding toward zero (-7 / 2 == -3)."""
    quotient = abs(left) // abs(right)
    return quotient if (left < 0) == (right < 0) else -quotient


def evaluate_expression(expression: str, context: Context) -> Value:
    """
    Convenience function: parses and evaluates an expression string.

    Args:
        expression: Expression source
        context: Render context

    Returns:
        Result of the expression

    Raises:
        ExpressionError: On parse or evaluation errors
    """
    from .parser import ExpressionParser

    parser = ExpressionParser()
    ast = parser.parse(expression)

    evaluator = ExpressionEvaluator(context)
    return evaluator.evaluate(ast)


__all__ = ["ExpressionEvaluator", "evaluate_expression"]
