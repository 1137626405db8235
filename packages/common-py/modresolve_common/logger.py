"""
modresolve Structured Logger

Thin wrapper over the standard ``logging`` module that accepts keyword
fields on every call and attaches the current resolution id.

Usage:
    from modresolve_common import get_logger, configure_logging

    configure_logging("info")
    logger = get_logger(__name__)
    logger.info("Graph built", nodes=12, edges=30)
    # INFO modresolve_sdk.dependencies.graph: Graph built nodes=12 edges=30

Libraries never call ``configure_logging``; the CLI does at startup.
"""

import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional, TextIO

from .constants import LOG_LEVELS

_resolution_id: ContextVar[Optional[str]] = ContextVar("modresolve_resolution_id", default=None)


def set_resolution_id(resolution_id: str) -> None:
    """Bind a resolution id to the current context."""
    _resolution_id.set(resolution_id)


def get_resolution_id() -> Optional[str]:
    """Return the resolution id bound to the current context, if any."""
    return _resolution_id.get()


def clear_resolution_id() -> None:
    """Remove the resolution id from the current context."""
    _resolution_id.set(None)


class ResolverLogger:
    """
    Logger accepting structured keyword fields.

    Fields are stored on the record as ``fields`` and rendered by
    ``StructuredFormatter``; the wrapped stdlib logger stays reachable through
    ``.logger`` for handlers, levels and caplog.
    """

    def __init__(self, name: str):
        self.name = name
        self.logger = logging.getLogger(name)

    def _log(self, level: int, message: str, exc_info: Any = None, **fields: Any) -> None:
        if not self.logger.isEnabledFor(level):
            return
        resolution_id = get_resolution_id()
        if resolution_id is not None:
            fields.setdefault("resolution_id", resolution_id)
        self.logger.log(level, message, exc_info=exc_info, extra={"fields": fields})

    def debug(self, message: str, **fields: Any) -> None:
        self._log(logging.DEBUG, message, **fields)

    def info(self, message: str, **fields: Any) -> None:
        self._log(logging.INFO, message, **fields)

    def warning(self, message: str, **fields: Any) -> None:
        self._log(logging.WARNING, message, **fields)

    def error(self, message: str, exc_info: Any = None, **fields: Any) -> None:
        self._log(logging.ERROR, message, exc_info=exc_info, **fields)

    def isEnabledFor(self, level: int) -> bool:
        return self.logger.isEnabledFor(level)


class StructuredFormatter(logging.Formatter):
    """Render records as ``LEVEL name: message k=v`` or as one JSON object."""

    def __init__(self, json_format: bool = False):
        super().__init__()
        self.json_format = json_format

    def format(self, record: logging.LogRecord) -> str:
        fields: Dict[str, Any] = getattr(record, "fields", None) or {}

        if self.json_format:
            payload: Dict[str, Any] = {
                "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(
                    timespec="milliseconds"
                ),
                "level": record.levelname,
                "logger": record.name,
                "message": record.getMessage(),
            }
            for key, value in fields.items():
                payload.setdefault(key, value)
            if record.exc_info:
                payload["exception"] = self.formatException(record.exc_info)
            return json.dumps(payload, default=str, ensure_ascii=False)

        line = f"{record.levelname} {record.name}: {record.getMessage()}"
        if fields:
            line += " " + " ".join(f"{key}={value}" for key, value in fields.items())
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


class _StructuredHandler(logging.StreamHandler):
    """Marker subclass so repeated configuration replaces our own handler only."""


def configure_logging(
    level: str = "info",
    json_format: bool = False,
    stream: Optional[TextIO] = None,
) -> None:
    """
    Install the structured handler on the root logger.

    Calling again replaces the handler installed by a previous call.

    Raises:
        ValueError: If level is not one of LOG_LEVELS
    """
    normalized = level.lower()
    if normalized == "warn":
        normalized = "warning"
    if normalized not in LOG_LEVELS:
        raise ValueError(f"Invalid log level '{level}'. Supported: {', '.join(LOG_LEVELS)}")

    root = logging.getLogger()
    root.setLevel(getattr(logging, normalized.upper()))
    for handler in list(root.handlers):
        if isinstance(handler, _StructuredHandler):
            root.removeHandler(handler)

    handler = _StructuredHandler(stream or sys.stderr)
    handler.setFormatter(StructuredFormatter(json_format=json_format))
    root.addHandler(handler)


def get_logger(name: str) -> ResolverLogger:
    """Return a structured logger for the given name."""
    return ResolverLogger(name)
