"""
tpl: a small templating engine.

    >>> from tpl import render
    >>> render("Hello, {{name}}!", {"name": "world"})
    'Hello, world!'
"""

from .errors import TplUserError, ConfigError
from .config import RenderSettings, load_settings
from .expr import evaluate_expression
from .template import TemplateRenderer, render, tokenize_template

__all__ = [
    "TplUserError",
    "ConfigError",
    "RenderSettings",
    "load_settings",
    "evaluate_expression",
    "TemplateRenderer",
    "render",
    "tokenize_template",
]
