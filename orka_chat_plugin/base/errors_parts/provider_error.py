"""
Structured provider error.

Backends raise ``ProviderError`` ``from`` the SDK exception so the original
cause stays reachable through ``__cause__`` as well as ``raw``. ``str()``
yields the contextual message, which the dispatcher returns to callers
verbatim.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass
class ProviderError(Exception):
    """Represents a classified failure raised by a provider backend.

    Attributes:
        code: Normalized :class:`ErrorCode` for the failure.
        message: Human-readable message including the source context
            (e.g. ``"openai chat error: ..."``).
        provider: Provider key where the error originated (e.g. ``"openai"``).
        model: Model name associated with the failure, if known.
        retryable: Hint only; this package performs no retries of its own.
        raw: Original exception for diagnostics.
    """

    code: ErrorCode
    message: str
    provider: str
    model: Optional[str] = None
    retryable: bool = False
    raw: Optional[BaseException] = None

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


__all__ = ["ProviderError"]
