"""
Template segments.

A template is tokenized into a flat sequence of segments: plain text,
interpolations and control tags. Nesting of control tags is not resolved
here; the renderer pairs tags up while walking the sequence.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Union


@dataclass(frozen=True)
class Location:
    """Position of a segment in the template source (line and column are 1-based)."""
    position: int = 0
    line: int = 1
    column: int = 1

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


@dataclass(frozen=True)
class Segment:
    """Base class for all template segments."""
    pass


@dataclass(frozen=True)
class TextSegment(Segment):
    """Literal text, copied to the output as is."""
    text: str
    location: Location = field(default=Location(), compare=False)


@dataclass(frozen=True)
class InterpolationSegment(Segment):
    """{{ expression }}: replaced by the stringified value of expression."""
    expression: str
    location: Location = field(default=Location(), compare=False)


@dataclass(frozen=True)
class ControlSegment(Segment):
    """
    {% command argument %}: control tag.

    command is the first word inside the tag (for, endfor, if, else, endif),
    argument is the rest of the tag with surrounding whitespace removed.
    """
    command: str
    argument: str = ""
    location: Location = field(default=Location(), compare=False)

    def __str__(self) -> str:
        inner = f"{self.command} {self.argument}" if self.argument else self.command
        return "{% " + inner + " %}"


AnySegment = Union[TextSegment, InterpolationSegment, ControlSegment]

# Tokenized template
SegmentList = List[AnySegment]


__all__ = [
    "Location",
    "Segment",
    "TextSegment",
    "InterpolationSegment",
    "ControlSegment",
    "AnySegment",
    "SegmentList",
]
