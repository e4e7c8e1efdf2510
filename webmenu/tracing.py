"""Structured logging helpers used while building and rendering menus."""

from __future__ import annotations

import enum
import json
import logging
import math
import time
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

__all__ = ["RenderSpan", "trace", "log_event", "safe_json"]

_TRACE_LOGGER = "webmenu.trace"


def safe_json(value: Any) -> Any:
    """Return ``value`` converted into a JSON-serialisable structure.

    Objects exposing ``describe()`` (requests, for instance) are logged through
    it; enums are logged by value and anything else falls back to ``repr``.
    """

    if isinstance(value, enum.Enum):
        return safe_json(value.value)
    if value is None or isinstance(value, (str, int, bool)):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else repr(value)
    if isinstance(value, (list, tuple, set, frozenset)):
        return [safe_json(item) for item in value]
    if isinstance(value, dict):
        return {str(key): safe_json(val) for key, val in value.items()}

    describe = getattr(value, "describe", None)
    if callable(describe) and not isinstance(value, type):
        return safe_json(describe())
    return repr(value)


def log_event(
    logger: logging.Logger,
    level: int,
    event: str,
    *,
    exc_info: bool | BaseException | tuple[Any, Any, Any] | None = None,
    **fields: Any,
) -> None:
    """Emit a structured log line encoded as JSON.

    ``None`` fields are dropped. Nothing is serialised when ``level`` is
    disabled, since renders can log an event per item.
    """

    if not logger.isEnabledFor(level):
        return

    payload: Dict[str, Any] = {"event": event}
    payload.update({key: safe_json(value) for key, value in fields.items() if value is not None})
    logger.log(level, json.dumps(payload, ensure_ascii=False, sort_keys=True), exc_info=exc_info)


class RenderSpan:
    """Collects fields reported when a traced block finishes."""

    __slots__ = ("name", "fields", "started")

    def __init__(self, name: str, fields: Dict[str, Any]) -> None:
        self.name = name
        self.fields = fields
        self.started = time.perf_counter()

    def note(self, **fields: Any) -> None:
        """Attach ``fields`` to the closing ``trace.end``/``trace.error`` event."""

        self.fields.update(fields)

    def elapsed_ms(self) -> float:
        return round((time.perf_counter() - self.started) * 1000, 2)


@contextmanager
def trace(
    name: str,
    *,
    logger: Optional[logging.Logger] = None,
    level: int = logging.INFO,
    **fields: Any,
) -> Iterator[RenderSpan]:
    """Log ``trace.start`` and ``trace.end`` around a block, or ``trace.error`` when it raises."""

    logger = logger or logging.getLogger(_TRACE_LOGGER)
    span = RenderSpan(name, dict(fields))
    log_event(logger, level, "trace.start", trace=name, **span.fields)
    try:
        yield span
    except Exception as exc:
        log_event(
            logger,
            logging.ERROR,
            "trace.error",
            exc_info=True,
            trace=name,
            duration_ms=span.elapsed_ms(),
            error=repr(exc),
            **span.fields,
        )
        raise
    log_event(logger, level, "trace.end", trace=name, duration_ms=span.elapsed_ms(), **span.fields)
