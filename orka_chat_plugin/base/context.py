"""Deadline-bound execution context passed to provider backends.

A ``CallContext`` pairs an absolute monotonic deadline with a
``CancellationToken``. Backends bound the whole outbound call, retries
included, by ``remaining()`` and abort it as soon as the token is cancelled
(see ``base.http.run_bounded``).
"""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Optional

from .cancellation import CancellationToken, CancelledError


@dataclass(frozen=True)
class CallContext:
    """Cancellable, deadline-bound context for one outbound provider call.

    Attributes:
        deadline: Absolute ``time.monotonic()`` value after which the call
            must not continue. ``None`` means no deadline.
        token: Cancellation token observed by the backend.
    """

    deadline: Optional[float] = None
    token: CancellationToken = field(default_factory=CancellationToken)

    @classmethod
    def with_timeout(
        cls, seconds: float, *, parent: Optional[CancellationToken] = None
    ) -> "CallContext":
        """Create a context expiring ``seconds`` from now.

        When ``parent`` is given the new token is linked to it, so cancelling
        the parent (for example on caller disconnect) cancels this call.
        """
        token = CancellationToken(parent=parent) if parent is not None else CancellationToken()
        return cls(deadline=time.monotonic() + seconds, token=token)

    @classmethod
    def background(cls) -> "CallContext":
        """Context without deadline; only cancellation applies."""
        return cls()

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline (never negative), or ``None``."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    @property
    def expired(self) -> bool:
        remaining = self.remaining()
        return remaining is not None and remaining <= 0.0

    @property
    def cancelled(self) -> bool:
        return self.token.cancelled

    def cancel(self, reason: Optional[str] = None) -> None:
        self.token.cancel(reason)

    def raise_if_done(self) -> None:
        """Raise ``CancelledError`` or ``TimeoutError`` if the call must stop."""
        self.token.raise_if_cancelled()
        if self.expired:
            raise TimeoutError("context deadline exceeded")


__all__ = ["CallContext", "CancelledError"]
