"""Logging setup for the command-line entry point."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping

__all__ = ["ENV_LOG_LEVEL", "configure_logging", "level_for"]

ENV_LOG_LEVEL = "CARGO_DEBUG_LOG"

_FORMAT = "%(levelname)s %(name)s: %(message)s"


def level_for(verbosity: int, environ: Mapping[str, str] | None = None) -> int:
    """Map ``-v`` count (or ``CARGO_DEBUG_LOG``) onto a logging level."""

    if verbosity >= 2:
        return logging.DEBUG
    if verbosity == 1:
        return logging.INFO
    env = os.environ if environ is None else environ
    name = env.get(ENV_LOG_LEVEL, "").strip().upper()
    level = logging.getLevelName(name) if name else None
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(verbosity: int = 0) -> None:
    logging.basicConfig(level=level_for(verbosity), format=_FORMAT, force=True)
    logging.getLogger("cargo_debug").debug("logging configured")
