"""
Map arbitrary exceptions to normalized ``ErrorCode`` values.

Order of precedence: ``ProviderError`` passthrough, cancellation, timeout
types, HTTP status (from the exception or its ``response``), message
substrings, then ``UNKNOWN``.
"""
from __future__ import annotations

import asyncio
from typing import Dict, Optional

from ..cancellation_parts.cancelled_error import CancelledError
from .error_code import ErrorCode
from .provider_error import ProviderError


def _extract_status(exc: BaseException) -> Optional[int]:
    """Return an HTTP status carried by ``exc`` or ``exc.response``, if any."""
    for attr in ("status_code", "status"):
        val = getattr(exc, attr, None)
        if isinstance(val, int) and 100 <= val < 600:
            return val
    resp = getattr(exc, "response", None)
    if resp is not None:
        sc = getattr(resp, "status_code", None)
        if isinstance(sc, int) and 100 <= sc < 600:
            return sc
    return None


_HTTP_STATUS_MAP: Dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION,
    401: ErrorCode.AUTH,
    403: ErrorCode.AUTH,
    404: ErrorCode.NOT_FOUND,
    408: ErrorCode.TIMEOUT,
    409: ErrorCode.CONFLICT,
    422: ErrorCode.VALIDATION,
    429: ErrorCode.RATE_LIMIT,
    500: ErrorCode.SERVER_ERROR,
    502: ErrorCode.TRANSIENT,
    503: ErrorCode.UNAVAILABLE,
    504: ErrorCode.TIMEOUT,
}

_MESSAGE_PATTERNS = (
    (ErrorCode.TIMEOUT, ("timed out", "timeout")),
    (ErrorCode.AUTH, ("api key", "unauthorized", "forbidden", "auth")),
    (ErrorCode.UNSUPPORTED, ("unsupported", "not supported")),
    (ErrorCode.NOT_FOUND, ("not found", "does not exist")),
    (ErrorCode.UNAVAILABLE, ("unavailable", "connection error", "connection refused")),
    (ErrorCode.VALIDATION, ("invalid", "malformed", "validation")),
    (ErrorCode.SERVER_ERROR, ("server error", "internal error")),
)


def _heuristic_from_message(msg: str) -> Optional[ErrorCode]:
    if "rate" in msg and "limit" in msg:
        return ErrorCode.RATE_LIMIT
    for code, patterns in _MESSAGE_PATTERNS:
        if any(p in msg for p in patterns):
            return code
    return None


def classify_exception(exc: BaseException) -> ErrorCode:
    """Classify ``exc`` into an :class:`ErrorCode`."""
    if isinstance(exc, ProviderError):
        return exc.code
    if isinstance(exc, CancelledError):
        return ErrorCode.CANCELLED
    if isinstance(exc, (TimeoutError, asyncio.TimeoutError)):
        return ErrorCode.TIMEOUT
    status = _extract_status(exc)
    if status is not None and status in _HTTP_STATUS_MAP:
        return _HTTP_STATUS_MAP[status]
    code = _heuristic_from_message(str(exc).lower())
    return code if code is not None else ErrorCode.UNKNOWN


__all__ = ["classify_exception"]
