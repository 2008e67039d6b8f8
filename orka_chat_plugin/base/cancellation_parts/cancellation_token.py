"""Cooperative cancellation token.

Tokens form a tree: cancelling a parent cancels every linked child, and a
child linked to an already cancelled parent is cancelled immediately.
Backed by ``threading.Event`` so a worker thread can also block on
``wait``.
"""

from __future__ import annotations

import threading
from typing import List, Optional

from .cancelled_error import CancelledError


class CancellationToken:
    """Thread-safe cancellation flag with an optional reason."""

    def __init__(self, *, parent: Optional["CancellationToken"] = None) -> None:
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._reason: Optional[str] = None
        self._children: List[CancellationToken] = []
        if parent is not None:
            parent.link_child(self)

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> Optional[str]:
        return self._reason

    def cancel(self, reason: Optional[str] = None) -> None:
        """Request cancellation. Only the first call records a reason."""
        with self._lock:
            if self._event.is_set():
                return
            self._reason = reason
            self._event.set()
            children = list(self._children)
        for child in children:
            child.cancel(reason)

    def link_child(self, token: "CancellationToken") -> "CancellationToken":
        """Attach ``token`` so it follows this token's cancellation."""
        with self._lock:
            self._children.append(token)
            already = self._event.is_set()
            reason = self._reason
        if already:
            token.cancel(reason)
        return token

    def child(self) -> "CancellationToken":
        return CancellationToken(parent=self)

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until cancelled or ``timeout`` elapses; return ``cancelled``."""
        return self._event.wait(timeout)

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise CancelledError(self._reason or "operation cancelled")

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"CancellationToken(cancelled={self.cancelled}, reason={self._reason!r})"


__all__ = ["CancellationToken"]
