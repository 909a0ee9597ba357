"""
Template layer: tokenizing template source and rendering it.

Supported syntax:
    {{ expression }}
    {% for name in path %} ... {% endfor %}
    {% if expression %} ... [{% else %} ...] {% endif %}
"""

from .segments import *
from .errors import *
from .lexer import TemplateLexer, tokenize_template
from .renderer import BlockKind, TemplateRenderer, format_value, render
