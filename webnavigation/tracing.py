"""Structured logging helpers for navigation events."""

from __future__ import annotations

import json
import logging
import math
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional

__all__ = ["TraceSpan", "trace", "log_event", "safe_json", "page_ref"]


def page_ref(page: Any) -> Dict[str, Any]:
    """Return a compact reference to a page suitable for log lines."""

    return {
        "name": getattr(page, "name", None),
        "uid": getattr(page, "uid", None),
        "route": getattr(page, "route", None),
    }


def safe_json(value: Any) -> Any:
    """Return ``value`` converted into a JSON-serialisable structure."""

    if value is None or isinstance(value, (str, int, float, bool)):
        if isinstance(value, float) and (math.isnan(value) or math.isinf(value)):
            return repr(value)
        return value

    if isinstance(value, (list, tuple, set, frozenset)):
        return [safe_json(item) for item in value]

    if isinstance(value, dict):
        return {str(key): safe_json(val) for key, val in value.items()}

    # Pages are logged by reference; whole subtrees would flood the log.
    if hasattr(value, "uid") and hasattr(value, "children"):
        return page_ref(value)

    if hasattr(value, "to_dict") and callable(getattr(value, "to_dict")):
        return safe_json(value.to_dict())

    return repr(value)


def log_event(
    logger: logging.Logger,
    level: int,
    event: str,
    *,
    exc_info: bool | BaseException | tuple[Any, Any, Any] | None = None,
    **fields: Any,
) -> None:
    """Emit a structured log line encoded as JSON."""

    if not logger.isEnabledFor(level):
        return

    payload: Dict[str, Any] = {"event": event}
    payload.update({key: safe_json(value) for key, value in fields.items() if value is not None})

    message = json.dumps(payload, ensure_ascii=False, sort_keys=True)
    logger.log(level, message, exc_info=exc_info)


@dataclass
class TraceSpan:
    """An open trace span."""

    name: str
    logger: logging.Logger
    fields: Dict[str, Any]
    start_time: float

    def note(self, **fields: Any) -> None:
        base = {"trace": self.name}
        base.update(self.fields)
        base.update(fields)
        log_event(self.logger, logging.DEBUG, "trace.note", **base)

    @property
    def elapsed_ms(self) -> float:
        return round((time.perf_counter() - self.start_time) * 1000, 2)


@contextmanager
def trace(name: str, *, logger: Optional[logging.Logger] = None, **fields: Any) -> Iterator[TraceSpan]:
    """Log start and end of a block, with its duration and any exception."""

    logger = logger or logging.getLogger("webnavigation.trace")
    span = TraceSpan(name=name, logger=logger, fields=dict(fields), start_time=time.perf_counter())
    base_fields = {"trace": name}
    base_fields.update(fields)
    log_event(logger, logging.INFO, "trace.start", **base_fields)
    try:
        yield span
    except Exception as exc:
        log_event(
            logger,
            logging.ERROR,
            "trace.error",
            exc_info=True,
            duration_ms=span.elapsed_ms,
            error=repr(exc),
            **base_fields,
        )
        raise
    else:
        log_event(logger, logging.INFO, "trace.end", duration_ms=span.elapsed_ms, **base_fields)
