"""
Provider capability contract.

Every backend implements ``chat`` and ``complete`` against the normalized
DTOs in ``base.models`` and never leaks SDK objects to callers.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from .context import CallContext
from .models import ChatRequest, ProviderResult, TextRequest


@runtime_checkable
class LLMProvider(Protocol):
    """Minimal interface for Large Language Model backends.

    Both operations must honour ``ctx``: the outbound call is bounded by its
    deadline and abandoned when its token is cancelled. Failures are raised
    (``ProviderError`` for vendor/transport problems, ``CancelledError`` or
    ``TimeoutError`` when ``ctx`` stops the call); callers wrap or convert
    them as needed.
    """

    @property
    def provider_name(self) -> str:
        """Canonical provider identifier, e.g. ``"openai"``."""
        ...

    def chat(self, ctx: CallContext, request: ChatRequest) -> ProviderResult:
        """Execute one chat completion."""
        ...

    def complete(self, ctx: CallContext, request: TextRequest) -> ProviderResult:
        """Execute one prompt completion."""
        ...


__all__ = ["LLMProvider"]
