"""
Exceptions raised while rendering templates.

Errors about a specific tag carry its location so that messages point
at line:column in the template source.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..errors import TplUserError
from .segments import Location


class TemplateError(TplUserError):
    """Base class for template structure and rendering errors."""
    pass


def _at(location: Optional[Location]) -> str:
    return f" at {location}" if location is not None else ""


@dataclass
class MalformedForLoopError(TemplateError):
    """for tag argument is not '<var> in <path>'."""
    argument: str
    location: Optional[Location] = None

    def __str__(self) -> str:
        return (
            f"Invalid for loop{_at(self.location)}: expected "
            f"'for <var> in <expression>', got 'for {self.argument}'"
        )


@dataclass
class ForTargetNotListError(TemplateError):
    """for loop target does not resolve to a list."""
    path: str
    type_name: str
    location: Optional[Location] = None

    def __str__(self) -> str:
        return f"Invalid for loop{_at(self.location)}: '{self.path}' is a {self.type_name}, not a list"


@dataclass
class IfConditionNotBooleanError(TemplateError):
    """if condition evaluates to something other than a boolean."""
    expression: str
    type_name: str
    location: Optional[Location] = None

    def __str__(self) -> str:
        return (
            f"Invalid if statement{_at(self.location)}: '{self.expression}' "
            f"evaluates to a {self.type_name}, not a boolean"
        )


@dataclass
class UnmatchedEndforError(TemplateError):
    """endfor without an open for loop."""
    location: Optional[Location] = None

    def __str__(self) -> str:
        return f"Unexpected endfor{_at(self.location)}: no matching for loop"


@dataclass
class UnmatchedEndifError(TemplateError):
    """endif without an open if statement."""
    location: Optional[Location] = None

    def __str__(self) -> str:
        return f"Unexpected endif{_at(self.location)}: no matching if statement"


@dataclass
class UnmatchedElseError(TemplateError):
    """else outside an if statement, or a second else in the same one."""
    location: Optional[Location] = None

    def __str__(self) -> str:
        return f"Unexpected else{_at(self.location)}: no matching if statement"


@dataclass
class UnknownControlCommandError(TemplateError):
    """Control tag with an unsupported command."""
    command: str
    location: Optional[Location] = None

    def __str__(self) -> str:
        return (
            f"Unknown control command '{self.command}'{_at(self.location)}; "
            f"expected for, endfor, if, else or endif"
        )


@dataclass
class UnclosedBlockError(TemplateError):
    """for or if block still open at the end of the template."""
    command: str
    location: Optional[Location] = None

    def __str__(self) -> str:
        closer = "endfor" if self.command == "for" else "endif"
        return f"Unclosed '{self.command}' block{_at(self.location)}: missing {closer}"


@dataclass
class NestingTooDeepError(TemplateError):
    """Control blocks nested deeper than the configured limit."""
    max_depth: int
    location: Optional[Location] = None

    def __str__(self) -> str:
        return f"Control blocks nested deeper than {self.max_depth} levels{_at(self.location)}"


__all__ = [
    "TemplateError",
    "MalformedForLoopError",
    "ForTargetNotListError",
    "IfConditionNotBooleanError",
    "UnmatchedEndforError",
    "UnmatchedEndifError",
    "UnmatchedElseError",
    "UnknownControlCommandError",
    "UnclosedBlockError",
    "NestingTooDeepError",
]
