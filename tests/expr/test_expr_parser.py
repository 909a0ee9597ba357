"""
Tests for the expression parser.
"""

import sys

import pytest

from tpl.expr.errors import (
    EmptyExpressionError,
    InsufficientOperandsError,
    MismatchedParenthesesError,
    NumberOutOfRangeError,
    UnresolvedExpressionError,
)
from tpl.expr.model import BinaryOpNode, ConstantNode, NodeType, Operator, VariableNode
from tpl.expr.parser import ExpressionParser, parse_expression


class TestExpressionParser:

    def setup_method(self):
        self.parser = ExpressionParser()

    def test_empty_expression_error(self):
        with pytest.raises(EmptyExpressionError):
            self.parser.parse("")

        with pytest.raises(EmptyExpressionError):
            self.parser.parse("   ")

    def test_constants(self):
        assert self.parser.parse('"hi"') == ConstantNode("hi")
        assert self.parser.parse("42") == ConstantNode(42)
        assert self.parser.parse("-3") == ConstantNode(-3)
        assert self.parser.parse("2.5") == ConstantNode(2.5)

    def test_number_types(self):
        """A decimal point makes a float"""
        assert type(self.parser.parse("1").value) is int
        assert type(self.parser.parse("1.0").value) is float

    def test_variable(self):
        result = self.parser.parse("user.name")
        assert isinstance(result, VariableNode)
        assert result.get_type() == NodeType.VARIABLE
        assert result.path == "user.name"

    def test_binary_operation(self):
        result = self.parser.parse("a + 1")
        assert result == BinaryOpNode(Operator.ADD, VariableNode("a"), ConstantNode(1))
        assert result.get_type() == NodeType.BINARY_OP

    def test_multiplication_binds_tighter_than_addition(self):
        result = self.parser.parse("1 + 2 * 3")
        assert str(result) == "(1 + (2 * 3))"

    def test_left_associativity(self):
        assert str(self.parser.parse("8 - 4 - 2")) == "((8 - 4) - 2)"
        assert str(self.parser.parse("8 / 4 / 2")) == "((8 / 4) / 2)"

    def test_equality_binds_tightest(self):
        """'==' binds tighter than arithmetic"""
        assert str(self.parser.parse("a + 1 == 2")) == "(a + (1 == 2))"
        assert str(self.parser.parse("a * b == c")) == "(a * (b == c))"

    def test_parentheses_override_precedence(self):
        assert str(self.parser.parse("(a + 1) == 2")) == "((a + 1) == 2)"
        assert str(self.parser.parse("(1 + 2) * 3")) == "((1 + 2) * 3)"

    def test_nested_parentheses(self):
        assert str(self.parser.parse("((1))")) == "1"

    def test_mismatched_parentheses(self):
        for text in ["(1 + 2", "1 + 2)", ")(", "((a)"]:
            with pytest.raises(MismatchedParenthesesError):
                self.parser.parse(text)

    def test_insufficient_operands(self):
        with pytest.raises(InsufficientOperandsError) as exc:
            self.parser.parse("1 +")
        assert exc.value.operator == "+"

        with pytest.raises(InsufficientOperandsError):
            self.parser.parse("* 2")

    def test_unresolved_expression(self):
        with pytest.raises(UnresolvedExpressionError) as exc:
            self.parser.parse("a b")
        assert exc.value.roots == 2

    def test_string_with_operator_characters(self):
        assert self.parser.parse('"a + b"') == ConstantNode("a + b")

    def test_parse_expression_helper(self):
        assert parse_expression("x") == VariableNode("x")

    def test_long_chain_is_left_deep(self):
        ast = self.parser.parse("+".join(["1"] * 3000))
        depth = 0
        while ast.get_type() == NodeType.BINARY_OP:
            assert ast.right == ConstantNode(1)
            ast = ast.left
            depth += 1
        assert depth == 2999

    @pytest.mark.skipif(
        not hasattr(sys, "get_int_max_str_digits"),
        reason="integer string conversion is unlimited on this interpreter",
    )
    def test_integer_literal_with_too_many_digits(self):
        with pytest.raises(NumberOutOfRangeError) as exc:
            self.parser.parse("2 + " + "9" * 5000)
        assert exc.value.number == "9" * 5000
