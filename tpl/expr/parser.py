"""
Parser for template expressions.

Two passes over the token list:
1. Shunting-yard: reorders infix tokens into postfix (RPN) form.
2. RPN reduction: builds the AST bottom-up on an operand stack.

Operator precedence (higher binds tighter, all left-associative):
    ==      3
    * /     2
    + -     1

Note that '==' binds tighter than arithmetic, so "a + 1 == 2" parses
as "a + (1 == 2)". Arithmetic must be parenthesized to compare its
result: "(a + 1) == 2".
"""

from __future__ import annotations

import logging
from typing import List

from .errors import (
    EmptyExpressionError,
    InsufficientOperandsError,
    MismatchedParenthesesError,
    NumberOutOfRangeError,
    UnresolvedExpressionError,
)
from .lexer import ExpressionLexer, Token
from .model import (
    BinaryOpNode,
    ConstantNode,
    ExprNode,
    Operator,
    Value,
    VariableNode,
)

logger = logging.getLogger(__name__)


class ExpressionParser:
    """
    Operator-precedence parser for expressions.

    Converts an expression string into an AST. The parser keeps no state
    between calls; each call builds a fresh tree.
    """

    def __init__(self):
        self.lexer = ExpressionLexer()

    def parse(self, expression: str) -> ExprNode:
        """
        Parses an expression string into an AST.

        Args:
            expression: Expression source

        Returns:
            Root node of the AST

        Raises:
            EmptyExpressionError: Expression has no tokens
            MismatchedParenthesesError: Unbalanced parentheses
            InsufficientOperandsError: Operator without two operands
            UnresolvedExpressionError: Operands without an operator between them
            NumberOutOfRangeError: Integer literal with too many digits
        """
        tokens = self.lexer.tokenize(expression)
        if not tokens:
            raise EmptyExpressionError(expression)

        rpn = self._to_rpn(tokens, expression)
        return self._build_tree(rpn, expression)

    def _to_rpn(self, tokens: List[Token], expression: str) -> List[Token]:
        """Shunting-yard: infix tokens to postfix order."""
        output: List[Token] = []
        operators: List[Token] = []

        for token in tokens:
            if token.value == '(':
                operators.append(token)
            elif token.value == ')':
                while operators and operators[-1].value != '(':
                    output.append(operators.pop())
                if not operators:
                    raise MismatchedParenthesesError(expression)
                operators.pop()
            elif self._is_operator(token):
                precedence = Operator(token.value).precedence
                while (
                    operators
                    and operators[-1].value != '('
                    and precedence <= Operator(operators[-1].value).precedence
                ):
                    output.append(operators.pop())
                operators.append(token)
            else:
                output.append(token)

        while operators:
            token = operators.pop()
            if token.value == '(':
                raise MismatchedParenthesesError(expression)
            output.append(token)

        logger.debug(f"RPN for {expression!r}: {' '.join(t.value for t in output)}")
        return output

    def _build_tree(self, rpn: List[Token], expression: str) -> ExprNode:
        """Reduces postfix tokens to a single AST root."""
        stack: List[ExprNode] = []

        for token in rpn:
            if self._is_operator(token):
                if len(stack) < 2:
                    raise InsufficientOperandsError(token.value, expression)
                right = stack.pop()
                left = stack.pop()
                stack.append(BinaryOpNode(operator=Operator(token.value), left=left, right=right))
            elif token.type == 'STRING':
                stack.append(ConstantNode(value=token.value[1:-1]))
            elif token.type == 'NUMBER':
                stack.append(ConstantNode(value=self._parse_number(token.value)))
            else:
                stack.append(VariableNode(path=token.value))

        if len(stack) != 1:
            raise UnresolvedExpressionError(expression, len(stack))
        return stack[0]

    @staticmethod
    def _is_operator(token: Token) -> bool:
        return token.type == 'OPERATOR' and Operator.from_token(token.value) is not None

    @staticmethod
    def _parse_number(text: str) -> Value:
        if '.' in text:
            return float(text)
        try:
            return int(text)
        except ValueError:
            # Over the interpreter's int string conversion limit
            raise NumberOutOfRangeError(text, "too many digits") from None


def parse_expression(expression: str) -> ExprNode:
    """Convenience function: parses an expression with a fresh parser."""
    return ExpressionParser().parse(expression)


__all__ = ["ExpressionParser", "parse_expression"]
