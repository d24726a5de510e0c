"""Root logger setup for the desktop client.

``AYA_LOG_LEVEL`` (level name or number) pins the level, and a truthy
``AYA_DEBUG_LOGGING`` or ``AYA_DEBUG`` forces DEBUG. Either one wins over the
debug flag stored in user settings.
"""

from __future__ import annotations

import logging
import os
from typing import Mapping, Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%H:%M:%S"
LEVEL_ENV_VAR = "AYA_LOG_LEVEL"
DEBUG_ENV_VARS = ("AYA_DEBUG_LOGGING", "AYA_DEBUG")
_TRUTHY = frozenset({"1", "true", "yes", "on"})


def env_level(environ: Optional[Mapping[str, str]] = None) -> Optional[int]:
    """Return the level forced by the environment, or ``None``."""
    env = os.environ if environ is None else environ
    raw = (env.get(LEVEL_ENV_VAR) or "").strip()
    if raw:
        level = int(raw) if raw.isdigit() else logging.getLevelName(raw.upper())
        if isinstance(level, int):
            return level
    if any((env.get(name) or "").strip().lower() in _TRUTHY for name in DEBUG_ENV_VARS):
        return logging.DEBUG
    return None


def configure_root(
    default_level: int = logging.INFO,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> int:
    """Install the console handler once and set the root level."""
    forced = env_level(environ)
    level = default_level if forced is None else forced
    # no-op when a handler exists already (pytest, embedding apps)
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATEFMT)
    logging.getLogger().setLevel(level)
    return level


def apply_gui_preferences(
    debug_enabled: bool,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> int:
    """Apply the saved debug flag unless the environment pins a level."""
    forced = env_level(environ)
    if forced is not None:
        level = forced
    else:
        level = logging.DEBUG if debug_enabled else logging.INFO
    logging.getLogger().setLevel(level)
    return level


__all__ = ["apply_gui_preferences", "configure_root", "env_level"]
