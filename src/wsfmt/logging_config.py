from __future__ import annotations

import logging
import os

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"
LOG_LEVEL_ENV = "WSFMT_LOG_LEVEL"


def resolve_log_level(verbose: bool) -> int:
    if verbose:
        return logging.DEBUG
    name = os.getenv(LOG_LEVEL_ENV, "WARNING").strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(*, verbose: bool = False, force: bool = False) -> int:
    level = resolve_log_level(verbose)
    logging.basicConfig(
        level=level,
        format=DEFAULT_LOG_FORMAT,
        datefmt=DEFAULT_LOG_DATEFMT,
        force=force,
    )
    return level
