"""Base structured logging utilities.

One shared ``plugin`` logger writes single-line JSON to stderr; the host
orchestrator captures the plugin's stderr. Modules obtain propagating child
loggers through ``get_logger`` and emit events with ``log_event``. The level
comes from ``PLUGIN_LOG_LEVEL`` (default INFO).

Never pass API keys or message bodies as event fields.
"""
from __future__ import annotations

import json
import logging
import os
import sys
from typing import Any

from .log_support import JsonFormatter, LogContext

BASE_LOGGER_NAME = "plugin"

_BASE_LOGGER_ATTR = "_plugin_logger_initialized"
_CONSOLE_HANDLER_ATTR = "_plugin_console_handler"

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def _parse_level(value: str | None, default: int = logging.INFO) -> int:
    """Parse a level name case-insensitively, falling back to ``default``."""
    if not value:
        return default
    return _LEVELS.get(value.strip().upper(), default)


def _make_console_handler(level: int, json_mode: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    if json_mode:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    setattr(handler, _CONSOLE_HANDLER_ATTR, True)
    return handler


def _ensure_base_logger(json_mode: bool, level: int) -> logging.Logger:
    logger = logging.getLogger(BASE_LOGGER_NAME)
    desired = _parse_level(os.getenv("PLUGIN_LOG_LEVEL"), default=level)
    if getattr(logger, _BASE_LOGGER_ATTR, False):
        if logger.level != desired:
            logger.setLevel(desired)
            for h in logger.handlers:
                h.setLevel(desired)
        return logger

    logger.setLevel(desired)
    logger.handlers[:] = [_make_console_handler(desired, json_mode)]
    logger.propagate = False
    setattr(logger, _BASE_LOGGER_ATTR, True)
    return logger


def get_logger(name: str = BASE_LOGGER_NAME, json_mode: bool = True, level: int = logging.INFO) -> logging.Logger:
    """Return the shared base logger or one of its children.

    Child names are nested under the base name (``"openai"`` becomes
    ``"plugin.openai"``) so records reach the single JSON handler.
    """
    base = _ensure_base_logger(json_mode=json_mode, level=level)
    if name == BASE_LOGGER_NAME:
        return base
    if not name.startswith(BASE_LOGGER_NAME + "."):
        name = f"{BASE_LOGGER_NAME}.{name}"
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    level: int = logging.INFO,
    exc_info: Any = None,
    **fields: Any,
) -> None:
    """Emit a structured event as a JSON message.

    ``None``-valued fields are dropped. ``ctx`` fields are merged first so
    explicit ``fields`` win on conflicts.
    """
    if not logger.isEnabledFor(level):
        return
    payload: dict[str, Any] = {"event": event}
    if ctx:
        payload |= ctx.to_dict()
    payload.update({k: v for k, v in fields.items() if v is not None})
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str), exc_info=exc_info)


__all__ = [
    "BASE_LOGGER_NAME",
    "LogContext",
    "get_logger",
    "log_event",
]
