"""
Lexer for template source text.

Splits a template into plain text runs, interpolations and control tags:
- {{ expression }}
- {% command argument %}

Tags are matched lazily: an interpolation ends at the first '}}', a
control tag at the first '%}'. Neither may span a line break; an opener
without a closer on the same line is ordinary text.
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional

from .segments import (
    AnySegment,
    ControlSegment,
    InterpolationSegment,
    Location,
    TextSegment,
)

logger = logging.getLogger(__name__)


class TemplateLexer:
    """
    Lexer producing the flat segment sequence of a template.

    Interpolations are tried before control tags at each position.
    """

    INTERPOLATION_PATTERN = re.compile(r'\{\{(.*?)\}\}')
    CONTROL_PATTERN = re.compile(r'\{%(.*?)%\}')

    def __init__(self, text: str):
        """
        Initializes the lexer with template source.

        Args:
            text: Template source text
        """
        self.text = text
        self.length = len(text)

    def tokenize(self) -> List[AnySegment]:
        """
        Splits the template into segments.

        Returns:
            Segments in source order. Adjacent literal characters are
            merged into a single TextSegment.
        """
        segments: List[AnySegment] = []
        text_start = 0
        position = 0

        while position < self.length:
            # Only '{' can open a tag
            brace = self.text.find('{', position)
            if brace < 0:
                break

            segment, end = self._match_tag(brace)
            if segment is None:
                position = brace + 1
                continue

            if text_start < brace:
                segments.append(TextSegment(self.text[text_start:brace], self._location(text_start)))
            segments.append(segment)
            text_start = position = end

        if text_start < self.length:
            segments.append(TextSegment(self.text[text_start:], self._location(text_start)))

        logger.debug(f"Tokenized template of length {self.length} into {len(segments)} segments")
        return segments

    def _match_tag(self, position: int) -> tuple[Optional[AnySegment], int]:
        """
        Tries to match a tag starting exactly at position.

        Returns:
            (segment, end position) or (None, position) if no tag starts here
        """
        match = self.INTERPOLATION_PATTERN.match(self.text, position)
        if match:
            return InterpolationSegment(match.group(1), self._location(position)), match.end()

        match = self.CONTROL_PATTERN.match(self.text, position)
        if match:
            command, argument = self._split_control(match.group(1))
            return ControlSegment(command, argument, self._location(position)), match.end()

        return None, position

    @staticmethod
    def _split_control(inner: str) -> tuple[str, str]:
        """Splits tag content into the command word and the trimmed argument."""
        parts = inner.split(None, 1)
        if not parts:
            return "", ""
        command = parts[0]
        argument = parts[1].strip() if len(parts) > 1 else ""
        return command, argument

    def _location(self, position: int) -> Location:
        line = self.text.count('\n', 0, position) + 1
        line_start = self.text.rfind('\n', 0, position) + 1
        return Location(position=position, line=line, column=position - line_start + 1)


def tokenize_template(text: str) -> List[AnySegment]:
    """
    Convenience function for tokenizing a template.

    Args:
        text: Template source text

    Returns:
        List of segments
    """
    lexer = TemplateLexer(text)
    return lexer.tokenize()


__all__ = ["TemplateLexer", "tokenize_template"]
