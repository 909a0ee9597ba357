"""
Base exception for user-facing errors.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from TplUserError:
broken templates, bad expressions, contexts that do not fit the template,
invalid settings files.

Programming errors and bugs should NOT inherit from TplUserError;
they will propagate with full tracebacks.
"""

from __future__ import annotations

from dataclasses import dataclass


class TplUserError(Exception):
    """
    Base class for all user-facing errors of the template engine.

    These errors indicate problems that the user can fix in the template,
    in the context or in the settings file.
    """
    pass


@dataclass
class ConfigError(TplUserError):
    """Invalid settings file or setting value."""
    source: str
    reason: str

    def __str__(self) -> str:
        return f"Invalid settings in {self.source}: {self.reason}"


__all__ = ["TplUserError", "ConfigError"]
