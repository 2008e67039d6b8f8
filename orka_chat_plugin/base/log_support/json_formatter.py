"""JSON logging formatter used by the plugin's logging setup."""
from __future__ import annotations

import contextlib
import json
import logging
from datetime import datetime, timezone

ISO = "%Y-%m-%dT%H:%M:%S.%fZ"

_RECORD_INTERNALS = frozenset(
    {
        "msg",
        "args",
        "levelname",
        "levelno",
        "name",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
    }
)


class JsonFormatter(logging.Formatter):
    """Single-line JSON formatter.

    Messages that are themselves JSON objects (as produced by ``log_event``)
    are hoisted to top-level keys instead of being double encoded. Extra
    record attributes are merged; tracebacks go under ``exc``.
    """

    def format(self, record: logging.LogRecord) -> str:
        base = {
            "ts": datetime.now(timezone.utc).strftime(ISO),
            "level": record.levelname,
            "logger": record.name,
        }
        msg_text = record.getMessage()
        parsed = None
        with contextlib.suppress(ValueError):
            parsed = json.loads(msg_text)
        if isinstance(parsed, dict):
            base.update(parsed)
        else:
            base["msg"] = msg_text
        for k, v in record.__dict__.items():
            if k.startswith("_") or k in _RECORD_INTERNALS or k in base:
                continue
            base[k] = v
        if record.exc_info:
            base["exc"] = self.formatException(record.exc_info)
        return json.dumps(base, ensure_ascii=False, default=str)


__all__ = ["JsonFormatter", "ISO"]
