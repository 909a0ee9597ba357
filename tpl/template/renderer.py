"""
Renderer for tokenized templates.

Walks the flat segment sequence recursively: every for/if body is rendered
by a nested call that stops at the tag closing it and reports where it
stopped. Branches that are not taken are skipped with a tag-matching scan
that does not evaluate anything.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from ..config import DEFAULT_SETTINGS, RenderSettings
from ..expr.context import Context, bind, resolve
from ..expr.errors import NumberOutOfRangeError
from ..expr.evaluator import ExpressionEvaluator
from ..expr.model import Value, ValueType, type_name, type_of
from ..expr.parser import ExpressionParser
from .errors import (
    ForTargetNotListError,
    IfConditionNotBooleanError,
    MalformedForLoopError,
    NestingTooDeepError,
    UnclosedBlockError,
    UnknownControlCommandError,
    UnmatchedElseError,
    UnmatchedEndforError,
    UnmatchedEndifError,
)
from .lexer import TemplateLexer
from .segments import AnySegment, ControlSegment, InterpolationSegment, TextSegment

logger = logging.getLogger(__name__)


class BlockKind(Enum):
    """Kind of block whose body is being rendered."""
    FOR = "for"
    IF = "if"
    ELSE = "else"


# Result of rendering a block body: (output, next position, closing tag)
BlockResult = Tuple[str, int, Optional[ControlSegment]]


class TemplateRenderer:
    """
    Template renderer.

    Holds only settings; every render call works on its own segments and
    context copies, so one renderer can be shared between threads.
    """

    def __init__(self, settings: Optional[RenderSettings] = None):
        """
        Initializes the renderer.

        Args:
            settings: Render limits and formatting (defaults if None)
        """
        self.settings = settings or DEFAULT_SETTINGS

    def render(self, template: str, context: Context) -> str:
        """
        Renders a template.

        Args:
            template: Template source text
            context: Mapping of top-level names to context values

        Returns:
            Rendered text

        Raises:
            TplUserError: Any template or expression error; nothing is
                returned for a template that fails part way
        """
        segments = TemplateLexer(template).tokenize()
        return self.render_segments(segments, context)

    def render_segments(self, segments: Sequence[AnySegment], context: Context) -> str:
        """Renders an already tokenized template."""
        text, _, _ = self._render_block(segments, 0, context, None, None, 0)
        return text

    def _render_block(
        self,
        segments: Sequence[AnySegment],
        position: int,
        context: Context,
        enclosing: Optional[BlockKind],
        opener: Optional[ControlSegment],
        depth: int,
    ) -> BlockResult:
        """
        Renders segments from position until the tag closing the enclosing block.

        Args:
            segments: Tokenized template
            position: Index of the first segment to render
            context: Context for this scope
            enclosing: Kind of the block being rendered, None at top level
            opener: Tag that opened the enclosing block
            depth: Current nesting depth

        Returns:
            (output, index after the closing tag, closing tag)
        """
        parts: List[str] = []

        while position < len(segments):
            segment = segments[position]

            if isinstance(segment, TextSegment):
                parts.append(segment.text)
                position += 1
            elif isinstance(segment, InterpolationSegment):
                parts.append(self._stringify(self._evaluate(segment.expression, context)))
                position += 1
            elif isinstance(segment, ControlSegment):
                command = segment.command
                if command == "for":
                    text, position = self._render_for(segments, position, context, depth)
                    parts.append(text)
                elif command == "if":
                    text, position = self._render_if(segments, position, context, depth)
                    parts.append(text)
                elif command == "endfor":
                    if enclosing is not BlockKind.FOR:
                        raise UnmatchedEndforError(segment.location)
                    return "".join(parts), position + 1, segment
                elif command == "endif":
                    if enclosing not in (BlockKind.IF, BlockKind.ELSE):
                        raise UnmatchedEndifError(segment.location)
                    return "".join(parts), position + 1, segment
                elif command == "else":
                    if enclosing is not BlockKind.IF:
                        raise UnmatchedElseError(segment.location)
                    return "".join(parts), position + 1, segment
                else:
                    raise UnknownControlCommandError(command, segment.location)
            else:
                raise TypeError(f"Unknown segment type: {type(segment).__name__}")

        if opener is not None:
            raise UnclosedBlockError(opener.command, opener.location)
        return "".join(parts), position, None

    def _render_for(
        self,
        segments: Sequence[AnySegment],
        position: int,
        context: Context,
        depth: int,
    ) -> Tuple[str, int]:
        """
        {% for var in path %} ... {% endfor %}

        The body is rendered once per list element with var bound in a
        copy of the context. Returns (output, index after endfor).
        """
        tag = segments[position]
        assert isinstance(tag, ControlSegment)
        self._check_depth(depth, tag)

        var_name, path = self._parse_for_argument(tag)
        items = resolve(path, context)
        if type_of(items) is not ValueType.LIST:
            raise ForTargetNotListError(path, type_name(items), tag.location)

        body_start = position + 1
        if not items:
            end, _ = self._skip_block(segments, body_start, tag, depth, stop_at_else=False)
            return "", end

        parts: List[str] = []
        end = body_start
        for item in items:
            text, end, _ = self._render_block(
                segments, body_start, bind(context, var_name, item), BlockKind.FOR, tag, depth + 1
            )
            parts.append(text)

        logger.debug(f"Rendered for loop over '{path}' at {tag.location}: {len(items)} iterations")
        return "".join(parts), end

    def _render_if(
        self,
        segments: Sequence[AnySegment],
        position: int,
        context: Context,
        depth: int,
    ) -> Tuple[str, int]:
        """
        {% if condition %} ... [{% else %} ...] {% endif %}

        Returns (output of the taken branch, index after endif).
        """
        tag = segments[position]
        assert isinstance(tag, ControlSegment)
        self._check_depth(depth, tag)

        condition = self._evaluate(tag.argument, context)
        if type_of(condition) is not ValueType.BOOLEAN:
            raise IfConditionNotBooleanError(tag.argument, type_name(condition), tag.location)

        body_start = position + 1
        if condition:
            text, end, terminator = self._render_block(
                segments, body_start, context, BlockKind.IF, tag, depth + 1
            )
            if terminator is not None and terminator.command == "else":
                end, _ = self._skip_block(segments, end, tag, depth, stop_at_else=False)
            return text, end

        end, terminator = self._skip_block(segments, body_start, tag, depth, stop_at_else=True)
        if terminator.command == "else":
            text, end, _ = self._render_block(segments, end, context, BlockKind.ELSE, tag, depth + 1)
            return text, end
        return "", end

    def _skip_block(
        self,
        segments: Sequence[AnySegment],
        position: int,
        opener: ControlSegment,
        depth: int,
        stop_at_else: bool,
    ) -> Tuple[int, ControlSegment]:
        """
        Skips a block body without evaluating it.

        Nested for/if blocks are matched with a stack; an else of the
        skipped block itself ends the scan when stop_at_else is set.

        Returns:
            (index after the terminating tag, terminating tag)
        """
        # Open nested blocks: "for", "if", or "else" once an if reached its else
        open_blocks: List[str] = []

        while position < len(segments):
            segment = segments[position]
            position += 1
            if not isinstance(segment, ControlSegment):
                continue

            command = segment.command
            if command in ("for", "if"):
                open_blocks.append(command)
                if depth + len(open_blocks) >= self.settings.max_depth:
                    raise NestingTooDeepError(self.settings.max_depth, segment.location)
            elif command == "endfor":
                if not open_blocks:
                    if opener.command == "for":
                        return position, segment
                    raise UnmatchedEndforError(segment.location)
                if open_blocks.pop() != "for":
                    raise UnmatchedEndforError(segment.location)
            elif command == "endif":
                if not open_blocks:
                    if opener.command == "if":
                        return position, segment
                    raise UnmatchedEndifError(segment.location)
                if open_blocks.pop() not in ("if", "else"):
                    raise UnmatchedEndifError(segment.location)
            elif command == "else":
                if not open_blocks:
                    if stop_at_else:
                        return position, segment
                    raise UnmatchedElseError(segment.location)
                if open_blocks[-1] != "if":
                    raise UnmatchedElseError(segment.location)
                open_blocks[-1] = "else"
            else:
                raise UnknownControlCommandError(command, segment.location)

        raise UnclosedBlockError(opener.command, opener.location)

    def _check_depth(self, depth: int, tag: ControlSegment) -> None:
        if depth >= self.settings.max_depth:
            raise NestingTooDeepError(self.settings.max_depth, tag.location)

    @staticmethod
    def _parse_for_argument(tag: ControlSegment) -> Tuple[str, str]:
        """Splits 'var in path' into (var, path)."""
        parts = tag.argument.split(" in ")
        if len(parts) != 2:
            raise MalformedForLoopError(tag.argument, tag.location)
        var_name, path = parts[0].strip(), parts[1].strip()
        if not var_name or not path:
            raise MalformedForLoopError(tag.argument, tag.location)
        return var_name, path

    def _evaluate(self, expression: str, context: Context) -> Value:
        # Parsed on every use: expressions are not cached
        ast = ExpressionParser().parse(expression)
        return ExpressionEvaluator(context).evaluate(ast)

    def _stringify(self, value: Value) -> str:
        return format_value(value, self.settings.float_precision)


def format_value(value: Value, float_precision: int = DEFAULT_SETTINGS.float_precision) -> str:
    """Integer as decimal, float fixed-point, boolean as 1/0, string unchanged."""
    value_type = type_of(value)
    if value_type is ValueType.BOOLEAN:
        return "1" if value else "0"
    if value_type is ValueType.FLOAT:
        return f"{value:.{float_precision}f}"
    if value_type is ValueType.INTEGER:
        try:
            return str(value)
        except ValueError:
            raise NumberOutOfRangeError(value, "too many digits to print") from None
    return str(value)


def render(template: str, context: Context, settings: Optional[RenderSettings] = None) -> str:
    """
    Renders a template string against a context.

    Args:
        template: Template source text
        context: Mapping of top-level names to context values
        settings: Render settings (defaults if None)

    Returns:
        Rendered text
    """
    return TemplateRenderer(settings).render(template, context)


__all__ = ["BlockKind", "TemplateRenderer", "format_value", "render"]
