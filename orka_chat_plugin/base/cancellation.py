"""Cooperative cancellation primitives (public import path).

``CancellationToken`` carries the cancellation signal for a single RPC call;
``CancelledError`` is raised by operations that observe it.
"""

from .cancellation_parts.cancelled_error import CancelledError
from .cancellation_parts.cancellation_token import CancellationToken

__all__ = ["CancellationToken", "CancelledError"]
