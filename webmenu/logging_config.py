"""Logging setup for applications embedding webmenu."""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional, Union

_LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LEVEL_ENV = "WEBMENU_LOG_LEVEL"


def resolve_level(level: Union[int, str, None]) -> int:
    """Turn a level name or number into a number; ``None`` reads ``WEBMENU_LOG_LEVEL``."""

    if level is None:
        level = os.getenv(LEVEL_ENV, "INFO")
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(
    level: Union[int, str, None] = None,
    handler: Optional[logging.Handler] = None,
    *,
    logger_name: str = "webmenu",
) -> logging.Logger:
    """Send the structured menu events of ``logger_name`` to ``handler``.

    Parameters
    ----------
    level:
        Numeric level or name such as ``"DEBUG"``. Defaults to the
        ``WEBMENU_LOG_LEVEL`` environment variable, then ``INFO``.
    handler:
        Destination of the records; a ``sys.stdout`` stream handler when omitted.
    logger_name:
        Logger to configure. Pass ``""`` for the root logger.
    """

    logger = logging.getLogger(logger_name or None)
    handler = handler if handler is not None else logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))

    for existing in list(logger.handlers):
        logger.removeHandler(existing)

    logger.setLevel(resolve_level(level))
    logger.addHandler(handler)
    return logger


__all__ = ["LEVEL_ENV", "configure_logging", "resolve_level"]
