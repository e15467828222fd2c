from __future__ import annotations

import logging
import os as _os
from typing import Optional

from .types import DEFAULT_MAX_DEPTH, MAX_DEPTH_CEILING

_TRUTHY = {"1", "true", "yes", "on"}


def env_flag(name: str) -> bool:
    """True when the env var is set to one of the usual truthy spellings."""
    raw = _os.environ.get(name)
    if raw is None:
        return False

    return raw.strip().lower() in _TRUTHY


def debug_py_trace_enabled() -> bool:
    return env_flag("ESTREE_DEBUG_PY_TRACE")


def parse_max_depth(raw: Optional[str]) -> Optional[int]:
    """Parse a depth limit, returning None unless it is in 1..MAX_DEPTH_CEILING."""
    if raw is None:
        return None

    try:
        value = int(raw.strip())
    except ValueError:
        return None

    return value if 0 < value <= MAX_DEPTH_CEILING else None


def max_depth_from_env() -> int:
    value = parse_max_depth(_os.environ.get("ESTREE_MAX_DEPTH"))
    return DEFAULT_MAX_DEPTH if value is None else value


def log_level_from_env(default: int=logging.WARNING) -> int:
    raw = _os.environ.get("ESTREE_LOG_LEVEL")
    if raw is None:
        return default

    level = logging.getLevelName(raw.strip().upper())

    # getLevelName hands back "Level X" strings for unknown names
    return level if isinstance(level, int) else default
