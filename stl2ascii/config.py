"""
Defaults and environment-driven settings

Environment variables:
    STL2ASCII_GRID_SIZE   grid resolution S (positive int)
    STL2ASCII_VIEW        side, front or top
    STL2ASCII_LOG_LEVEL   logging level name, e.g. DEBUG
"""

import logging
import os
from dataclasses import dataclass

from .projection import ProjectFrom

DEFAULT_GRID_SIZE = 60
DEFAULT_VIEW = ProjectFrom.SIDE
DEFAULT_LOG_LEVEL = logging.WARNING

ENV_PREFIX = "STL2ASCII_"


def _parse_grid_size(value):
    try:
        size = int(value)
    except ValueError:
        raise ValueError(f"Grid size must be an integer, got {value!r}") from None
    if size < 1:
        raise ValueError(f"Grid size must be at least 1, got {size}")
    return size


def _parse_log_level(value):
    level = logging.getLevelName(value.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level {value!r}")
    return level


@dataclass(frozen=True)
class Settings:
    grid_size: int = DEFAULT_GRID_SIZE
    view: ProjectFrom = DEFAULT_VIEW
    log_level: int = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, environ=None):
        """Build settings from STL2ASCII_* variables, falling back to defaults"""
        environ = os.environ if environ is None else environ
        kwargs = {}
        if environ.get(ENV_PREFIX + "GRID_SIZE"):
            kwargs['grid_size'] = _parse_grid_size(environ[ENV_PREFIX + "GRID_SIZE"])
        if environ.get(ENV_PREFIX + "VIEW"):
            kwargs['view'] = ProjectFrom.parse(environ[ENV_PREFIX + "VIEW"])
        if environ.get(ENV_PREFIX + "LOG_LEVEL"):
            kwargs['log_level'] = _parse_log_level(environ[ENV_PREFIX + "LOG_LEVEL"])
        return cls(**kwargs)
