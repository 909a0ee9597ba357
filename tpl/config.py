"""
Render settings and YAML loading helpers.

Settings file example (tpl.yaml):

    max_depth: 32
    float_precision: 2
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import ConfigError

logger = logging.getLogger(__name__)

_yaml = YAML(typ="safe")


@dataclass(frozen=True)
class RenderSettings:
    """
    Limits and formatting options of the renderer.

    Attributes:
        max_depth: Maximum nesting of for/if blocks
        float_precision: Digits after the decimal point when printing floats
    """
    max_depth: int = 64
    float_precision: int = 6

    def __post_init__(self):
        for name in ("max_depth", "float_precision"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError("settings", f"'{name}' must be an integer, got {value!r}")
        if self.max_depth < 1:
            raise ConfigError("settings", f"'max_depth' must be positive, got {self.max_depth}")
        if self.float_precision < 0:
            raise ConfigError("settings", f"'float_precision' must not be negative, got {self.float_precision}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any], source: str = "settings") -> RenderSettings:
        """Create RenderSettings from YAML dictionary; missing keys keep defaults."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(source, f"unknown keys: {', '.join(unknown)}")
        try:
            return replace(cls(), **data)
        except ConfigError as e:
            raise ConfigError(source, e.reason) from None


DEFAULT_SETTINGS = RenderSettings()


def read_yaml(path: Path) -> Any:
    """Reads a YAML (or JSON) document."""
    try:
        return _yaml.load(path.read_text(encoding="utf-8"))
    except YAMLError as e:
        raise ConfigError(str(path), f"YAML parse error: {e}") from e


def read_yaml_map(path: Path) -> Dict[str, Any]:
    """Reads a YAML file that must contain a mapping; an empty file is an empty mapping."""
    raw = read_yaml(path) or {}
    if not isinstance(raw, dict):
        raise ConfigError(str(path), "YAML must be a mapping")
    return raw


def load_settings(path: Optional[Path]) -> RenderSettings:
    """
    Loads render settings from a YAML file.

    Args:
        path: Settings file; None or a missing file gives the defaults

    Returns:
        Render settings

    Raises:
        ConfigError: Malformed file or invalid values
    """
    if path is None or not path.is_file():
        if path is not None:
            logger.debug(f"Settings file {path} not found, using defaults")
        return DEFAULT_SETTINGS
    return RenderSettings.from_dict(read_yaml_map(path), source=str(path))


__all__ = ["RenderSettings", "DEFAULT_SETTINGS", "load_settings", "read_yaml", "read_yaml_map"]
