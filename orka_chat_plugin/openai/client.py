"""OpenAI provider backend.

Owns a configured ``openai.AsyncOpenAI`` client (API key, base URL, pooled
``httpx`` transport, fixed retry budget and timeouts) and translates between
the plugin DTOs and the Chat Completions API. Calls run on the shared I/O
loop through ``run_bounded``; the provider interface itself stays
synchronous.

Timeout & cancellation semantics
--------------------------------
- The whole call, SDK retries and backoff included, must finish within
  ``ctx.remaining()``; otherwise it is cancelled and ``TimeoutError`` is
  raised. Each attempt's timeout is also clamped to the time left.
- Cancelling ``ctx.token`` cancels the in-flight request, which closes its
  connection, and raises ``CancelledError`` right away.
- Transient transport failures are retried by the SDK itself
  (``max_retries``); no other retry happens here.

``complete`` is implemented on top of ``chat``: the prompt becomes a single
user message and no separate completions endpoint is used.
"""

from __future__ import annotations

import time
from typing import Any, Optional

from openai import AsyncOpenAI

from ..base.cancellation import CancelledError
from ..base.context import CallContext
from ..base.errors import ErrorCode, ProviderError, classify_exception
from ..base.http import build_timeout, get_httpx_client, run_bounded
from ..base.logging import LogContext, get_logger, log_event
from ..base.models import ChatRequest, ProviderResult, TextRequest
from ..config import get_provider_config
from .helpers import build_chat_params, invoke_create, request_timeout, shape_result

__all__ = ["OpenAIProvider"]


class OpenAIProvider:
    """OpenAI backend implementing ``LLMProvider``."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        max_retries: Optional[int] = None,
        client: Any = None,
    ) -> None:
        """Configure the backend.

        Args:
            api_key: OpenAI API key; required.
            base_url: API base URL override; defaults to the configured URL.
            max_retries: SDK retry budget override; defaults to the fixed budget.
            client: Prebuilt client exposing an async
                ``chat.completions.create`` (tests inject fakes here).

        Raises:
            ProviderError: ``ErrorCode.AUTH`` when ``api_key`` is empty.
        """
        if not api_key:
            raise ProviderError(
                code=ErrorCode.AUTH,
                message="missing OpenAI API key",
                provider=self.provider_name,
            )
        cfg = get_provider_config(self.provider_name, {"base_url": base_url, "max_retries": max_retries})
        self._base_url: str = cfg["base_url"]
        self._max_retries: int = int(cfg["max_retries"])
        self._logger = get_logger("providers.openai")
        self._client = client if client is not None else self._make_client(api_key)

    @property
    def provider_name(self) -> str:
        return "openai"

    def _make_client(self, api_key: str) -> AsyncOpenAI:
        return AsyncOpenAI(
            api_key=api_key,
            base_url=self._base_url,
            max_retries=self._max_retries,
            timeout=build_timeout(),
            http_client=get_httpx_client(self._base_url, self.provider_name),
        )

    def chat(self, ctx: CallContext, request: ChatRequest) -> ProviderResult:
        """Run one Chat Completions call for ``request``.

        Raises:
            ProviderError: The vendor call failed (message prefixed with
                ``"openai chat error:"``, cause chained).
            CancelledError: ``ctx`` was cancelled before or during the call.
            TimeoutError: ``ctx``'s deadline passed before the call finished.
        """
        log_ctx = LogContext(provider=self.provider_name, model=request.model)
        params = build_chat_params(request)
        log_event(
            self._logger,
            "chat.start",
            log_ctx,
            messages=len(request.messages),
            params=sorted(k for k in params if k not in ("model", "messages")),
            stream_requested=request.stream or None,
        )

        t0 = time.perf_counter()
        try:
            resp = run_bounded(
                lambda: invoke_create(
                    self._client,
                    params,
                    timeout=request_timeout(ctx),
                    provider_name=self.provider_name,
                ),
                ctx,
            )
        except (ProviderError, CancelledError, TimeoutError) as e:
            log_event(
                self._logger,
                "chat.error",
                log_ctx,
                error_code=classify_exception(e).value,
                latency_ms=round((time.perf_counter() - t0) * 1000.0, 2),
            )
            raise
        ctx.token.raise_if_cancelled()

        result = shape_result(resp)
        log_event(
            self._logger,
            "chat.end",
            log_ctx,
            latency_ms=round((time.perf_counter() - t0) * 1000.0, 2),
            finish_reason=result.finish_reason,
            tokens=result.usage.to_dict(),
        )
        return result

    def complete(self, ctx: CallContext, request: TextRequest) -> ProviderResult:
        """Complete ``request.prompt`` by delegating to :meth:`chat`."""
        return self.chat(ctx, request.as_chat())
