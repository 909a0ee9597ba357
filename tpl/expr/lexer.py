"""
Lexer for template expressions.

Splits an expression (the content of {{ ... }} or the argument of
{% if ... %}) into tokens:
- String literals in double quotes (quotes are kept)
- Integer and float literals, optionally negative
- Operators (+, -, *, /, ==) and parentheses
- Identifiers and dotted paths (user.name)
- Whitespace (separates tokens, never emitted)
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Token:
    """
    Expression token.

    Attributes:
        type: Token type (STRING, NUMBER, OPERATOR, SYMBOL, IDENTIFIER)
        value: Token text as it appears in the expression
        position: Offset in the source expression
    """
    type: str
    value: str
    position: int

    def __repr__(self):
        return f"Token({self.type}, '{self.value}', pos={self.position})"


class ExpressionLexer:
    """
    Character-driven lexer for expressions.

    At every position the candidates are tried in a fixed order: string
    literal, number literal, single-character token, '=='. Anything else
    accumulates into an identifier that ends at whitespace or at the next
    emitted token.
    """

    STRING_PATTERN = re.compile(r'"[^"]*"')
    NUMBER_PATTERN = re.compile(r'-?[0-9]+(?:\.[0-9]+)?')

    # Single-character tokens and their types
    SINGLE_CHAR_TOKENS = {
        '(': 'SYMBOL',
        ')': 'SYMBOL',
        '+': 'OPERATOR',
        '-': 'OPERATOR',
        '*': 'OPERATOR',
        '/': 'OPERATOR',
    }

    # Token types that end an operand (a following '-' is binary minus)
    _OPERAND_TYPES = {'STRING', 'NUMBER', 'IDENTIFIER'}

    def __init__(self):
        self._text = ""
        self._tokens: List[Token] = []
        self._ident_start: Optional[int] = None

    def tokenize(self, text: str) -> List[Token]:
        """
        Splits an expression into tokens.

        Args:
            text: Expression source

        Returns:
            List of tokens in source order (empty for a blank expression)
        """
        self._text = text
        self._tokens = []
        self._ident_start = None

        position = 0
        while position < len(text):
            position = self._scan(position)
        self._flush_identifier(len(text))

        logger.debug(f"Tokenized expression {text!r} into {len(self._tokens)} tokens")
        return self._tokens

    def _scan(self, position: int) -> int:
        """Consumes input at position and returns the next position."""
        text = self._text
        char = text[position]

        match = self.STRING_PATTERN.match(text, position)
        if match:
            return self._emit('STRING', position, match.end())

        if self._starts_number(position):
            match = self.NUMBER_PATTERN.match(text, position)
            if match:
                return self._emit('NUMBER', position, match.end())

        if char in self.SINGLE_CHAR_TOKENS:
            return self._emit(self.SINGLE_CHAR_TOKENS[char], position, position + 1)

        if char == '=':
            if text.startswith('==', position):
                return self._emit('OPERATOR', position, position + 2)
            return self._emit('SYMBOL', position, position + 1)

        if char.isspace():
            self._flush_identifier(position)
            return position + 1

        if self._ident_start is None:
            self._ident_start = position
        return position + 1

    def _starts_number(self, position: int) -> bool:
        """
        Checks whether a number literal may start at position.

        Digits inside an identifier belong to it (item2), and a '-' right
        after an operand is the minus operator (a-1, (x) - 1).
        """
        if self._ident_start is not None:
            return False
        char = self._text[position]
        if char != '-':
            return char.isdigit()
        if not self._tokens:
            return True
        last = self._tokens[-1]
        return last.type not in self._OPERAND_TYPES and last.value != ')'

    def _emit(self, token_type: str, start: int, end: int) -> int:
        self._flush_identifier(start)
        self._tokens.append(Token(type=token_type, value=self._text[start:end], position=start))
        return end

    def _flush_identifier(self, end: int) -> None:
        if self._ident_start is None:
            return
        start = self._ident_start
        self._ident_start = None
        self._tokens.append(Token(type='IDENTIFIER', value=self._text[start:end], position=start))


def tokenize_expression(text: str) -> List[str]:
    """Convenience wrapper returning token texts only."""
    return [token.value for token in ExpressionLexer().tokenize(text)]


__all__ = ["Token", "ExpressionLexer", "tokenize_expression"]
