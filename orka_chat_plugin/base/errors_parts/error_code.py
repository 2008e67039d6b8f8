"""
Failure categories reported in ``rpc.result`` and ``chat.error`` events.

The string values are what log consumers filter on; do not rename them.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Why a call failed."""

    # Rejected before any vendor call.
    VALIDATION = "validation"
    UNSUPPORTED = "unsupported"
    AUTH = "auth"
    # Stopped by the caller or the deadline.
    CANCELLED = "cancelled"
    TIMEOUT = "timeout"
    # Reported by the vendor or the transport.
    RATE_LIMIT = "rate_limit"
    TRANSIENT = "transient"
    UNAVAILABLE = "unavailable"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    SERVER_ERROR = "server_error"
    # Bugs and anything unclassified.
    INTERNAL = "internal"
    UNKNOWN = "unknown"


# Categories the SDK's own retry budget is expected to absorb.
RETRYABLE_CODES = frozenset({ErrorCode.TRANSIENT, ErrorCode.RATE_LIMIT, ErrorCode.TIMEOUT})

__all__ = ["ErrorCode", "RETRYABLE_CODES"]
