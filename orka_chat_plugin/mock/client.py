"""Deterministic in-process provider for offline testing.

Purpose
-------
Implement the ``LLMProvider`` contract without network traffic so the
dispatcher, the RPC listener and logging can be exercised end to end. The
backend echoes a configured reply, records every request it receives and
can be told to fail with a given exception.

Timeout and cancellation
------------------------
No I/O is performed, but ``ctx`` is still honoured: a cancelled or expired
context raises before a result is produced, matching real backends.
"""

from __future__ import annotations

from typing import List, Optional, Union

from ..base.context import CallContext
from ..base.logging import LogContext, get_logger, log_event
from ..base.models import ChatRequest, ProviderResult, TextRequest, Usage
from ..config.defaults import MOCK_DEFAULT_CONTENT


class MockProvider:
    """Backend returning a canned reply instead of calling a vendor.

    Attributes
    ----------
    requests:
        Every ``ChatRequest``/``TextRequest`` received, in call order.
    """

    def __init__(
        self,
        *,
        content: str = MOCK_DEFAULT_CONTENT,
        finish_reason: str = "stop",
        text: Optional[str] = None,
        error: Optional[BaseException] = None,
        provider: str = "mock",
        **_: object,
    ) -> None:
        self._content = content
        self._finish_reason = finish_reason
        self._text = text
        self._error = error
        self._provider = provider
        self._logger = get_logger("providers.mock")
        self.requests: List[Union[ChatRequest, TextRequest]] = []

    @property
    def provider_name(self) -> str:
        return self._provider

    def _result(self, model: str, prompt_words: int) -> ProviderResult:
        completion_words = len(self._content.split())
        return ProviderResult(
            id=f"mock-{len(self.requests)}",
            model=model,
            content=self._content,
            text=self._text,
            role="assistant",
            finish_reason=self._finish_reason,
            usage=Usage(
                prompt_tokens=prompt_words,
                completion_tokens=completion_words,
                total_tokens=prompt_words + completion_words,
            ),
        )

    def chat(self, ctx: CallContext, request: ChatRequest) -> ProviderResult:
        self.requests.append(request)
        ctx.raise_if_done()
        log_event(self._logger, "chat.start", LogContext(provider=self._provider, model=request.model), messages=len(request.messages))
        if self._error is not None:
            raise self._error
        words = sum(len(m.content.split()) for m in request.messages)
        return self._result(request.model, words)

    def complete(self, ctx: CallContext, request: TextRequest) -> ProviderResult:
        self.requests.append(request)
        ctx.raise_if_done()
        if self._error is not None:
            raise self._error
        return self._result(request.model, len(request.prompt.split()))


__all__ = ["MockProvider"]
