"""
Expression language of the template engine.

Lexer, precedence parser, AST model, context lookups and evaluator for
the expressions inside {{ ... }} and {% if ... %}.
"""

from .errors import *
from .model import Value, ValueType, type_of
from .lexer import ExpressionLexer, Token, tokenize_expression
from .parser import ExpressionParser, parse_expression
from .context import Context, resolve, resolve_value
from .evaluator import ExpressionEvaluator, evaluate_expression
