"""
Translation helpers between plugin DTOs and the OpenAI Chat Completions API.

Purpose:
- Map ``ChatMessage`` roles to OpenAI message params (``system`` and
  ``assistant`` pass through, everything else becomes ``user``).
- Build request params, dropping zero-valued optional fields because zero
  means "unset" for the plugin's DTOs.
- Shape SDK responses into ``ProviderResult`` using the first choice only.
- Wrap SDK failures into ``ProviderError`` while keeping the cause.

No network I/O happens here; ``invoke_create`` awaits whatever async client
it is given.
"""

from __future__ import annotations

import typing as _t

import httpx

from ..base.context import CallContext
from ..base.errors import RETRYABLE_CODES, ProviderError, classify_exception
from ..base.models import ROLE_ASSISTANT, ROLE_SYSTEM, ROLE_USER, ChatMessage, ChatRequest, ProviderResult, Usage
from ..base.timeouts import get_timeout_config


def to_openai_message(message: ChatMessage) -> dict:
    """Return the OpenAI message param for ``message``."""
    if message.role == ROLE_SYSTEM:
        role = ROLE_SYSTEM
    elif message.role == ROLE_ASSISTANT:
        role = ROLE_ASSISTANT
    else:
        role = ROLE_USER
    return {"role": role, "content": message.content}


def to_openai_messages(messages: _t.Sequence[ChatMessage]) -> list[dict]:
    return [to_openai_message(m) for m in messages]


def build_chat_params(request: ChatRequest) -> dict:
    """Assemble keyword arguments for ``chat.completions.create``.

    ``temperature``, ``max_tokens`` and ``top_p`` are included only when
    non-zero. ``stop`` and ``stream`` are accepted on the request but never
    sent: results are always delivered whole, up to the model's own end.
    """
    params: dict = {"model": request.model, "messages": to_openai_messages(request.messages)}
    if request.temperature:
        params["temperature"] = float(request.temperature)
    if request.max_tokens:
        params["max_tokens"] = int(request.max_tokens)
    if request.top_p:
        params["top_p"] = float(request.top_p)
    return params


def request_timeout(ctx: CallContext) -> httpx.Timeout:
    """Per-request timeout bounded by both the SDK ceiling and ``ctx``'s deadline."""
    cfg = get_timeout_config()
    total = cfg.http_timeout_seconds
    remaining = ctx.remaining()
    if remaining is not None:
        total = min(total, remaining)
    return httpx.Timeout(total, connect=min(cfg.connect_timeout_seconds, total))


def _int_or_zero(value: _t.Any) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


def extract_usage(resp: _t.Any) -> Usage:
    usage = getattr(resp, "usage", None)
    if usage is None:
        return Usage()
    return Usage(
        prompt_tokens=_int_or_zero(getattr(usage, "prompt_tokens", 0)),
        completion_tokens=_int_or_zero(getattr(usage, "completion_tokens", 0)),
        total_tokens=_int_or_zero(getattr(usage, "total_tokens", 0)),
    )


def shape_result(resp: _t.Any) -> ProviderResult:
    """Normalize a Chat Completions response.

    Additional choices beyond the first are discarded. When the vendor
    returns no choices, ``content``, ``role`` and ``finish_reason`` stay
    unset; usage is always populated.
    """
    choices = getattr(resp, "choices", None) or []
    content = role = finish_reason = None
    if choices:
        first = choices[0]
        finish_reason = getattr(first, "finish_reason", None) or ""
        message = getattr(first, "message", None)
        content = (getattr(message, "content", None) or "") if message is not None else ""
        role = (getattr(message, "role", None) or "") if message is not None else ""
    return ProviderResult(
        id=getattr(resp, "id", None) or "",
        model=getattr(resp, "model", None) or "",
        content=content,
        role=role,
        finish_reason=finish_reason,
        usage=extract_usage(resp),
    )


def wrap_error(exc: BaseException, *, provider_name: str, model: str) -> ProviderError:
    """Classify ``exc`` and wrap it with the ``"<provider> chat error:"`` prefix."""
    code = classify_exception(exc)
    return ProviderError(
        code=code,
        message=f"{provider_name} chat error: {exc}",
        provider=provider_name,
        model=model,
        retryable=code in RETRYABLE_CODES,
        raw=exc,
    )


async def invoke_create(client: _t.Any, params: dict, *, timeout: httpx.Timeout, provider_name: str) -> _t.Any:
    """Await ``client.chat.completions.create`` and wrap any failure.

    Task cancellation is not wrapped; it propagates so the caller can abort
    the request.

    Raises:
        ProviderError: For every SDK or transport failure, chained to the cause.
    """
    try:
        return await client.chat.completions.create(**params, timeout=timeout)
    except Exception as e:  # noqa: BLE001
        raise wrap_error(e, provider_name=provider_name, model=params.get("model", "")) from e


__all__ = [
    "to_openai_message",
    "to_openai_messages",
    "build_chat_params",
    "request_timeout",
    "extract_usage",
    "shape_result",
    "wrap_error",
    "invoke_create",
]
