"""Method router exposed to the host orchestrator.

``LlmPlugin.call_method`` is the single RPC entry point. It normalizes the
method name, validates the argument bag, selects a backend from the model
name, runs the call under a fixed deadline and projects the result onto the
minimal output contract:

- ``Chat``     -> ``{content, finishReason, usage}``
- ``Complete`` -> ``{text, finishReason, usage}``

Every recoverable failure (validation, routing, backend, deadline) becomes
``CallResponse(success=False, error=...)``; nothing raises out of
``call_method``. The dispatcher holds no mutable state, so concurrent calls
on different threads need no locking.
"""

from __future__ import annotations

import time
from typing import Any, Callable, Dict, Mapping, Optional

from ..base.cancellation import CancellationToken, CancelledError
from ..base.context import CallContext
from ..base.errors import ErrorCode, ProviderError, classify_exception
from ..base.logging import LogContext, get_logger, log_event
from ..base.models import ROLE_USER, ChatMessage, ChatRequest, ProviderResult, TextRequest
from ..base.timeouts import get_timeout_config
from .envelope import CallRequest, CallResponse
from .errors import RequestError, missing_arg
from .normalizer import extract_messages, get_bool, get_float, get_int, get_string, get_string_list
from .routing import ModelRouter

METHOD_CHAT = "Chat"
METHOD_COMPLETE = "Complete"

Handler = Callable[..., Dict[str, Any]]


def normalize_method(name: str) -> str:
    """Upper-case the first character (``"chat"`` -> ``"Chat"``)."""
    if not name:
        return name
    return name[:1].upper() + name[1:]


def filter_chat_output(result: ProviderResult) -> Dict[str, Any]:
    """Keep only ``content``, ``finishReason`` and ``usage``."""
    out = result.to_dict()
    return {k: out[k] for k in ("content", "finishReason", "usage") if k in out}


def filter_complete_output(result: ProviderResult) -> Dict[str, Any]:
    """Keep ``text`` (falling back to ``content``), ``finishReason`` and ``usage``."""
    out = result.to_dict()
    filtered: Dict[str, Any] = {}
    if "text" in out:
        filtered["text"] = out["text"]
    elif "content" in out:
        filtered["text"] = out["content"]
    for k in ("finishReason", "usage"):
        if k in out:
            filtered[k] = out[k]
    return filtered


class LlmPlugin:
    """RPC service implementing the ``Chat`` and ``Complete`` methods."""

    def __init__(self, router: Optional[ModelRouter] = None, call_timeout: Optional[float] = None) -> None:
        self._router = router if router is not None else ModelRouter()
        self._call_timeout = (
            call_timeout if call_timeout is not None else get_timeout_config().call_timeout_seconds
        )
        self._logger = get_logger("dispatcher")
        self._handlers: Dict[str, Handler] = {
            METHOD_CHAT: self.handle_chat,
            METHOD_COMPLETE: self.handle_complete,
        }

    # ----- RPC entry point -----

    def call_method(self, request: CallRequest, *, parent: Optional[CancellationToken] = None) -> CallResponse:
        """Dispatch one RPC call and always return a well-formed envelope.

        ``parent`` lets the transport cancel the call, e.g. when the caller
        disconnects.
        """
        method = normalize_method(request.method)
        args = request.args or {}
        log_ctx = LogContext(method=method or None, model=get_string(args, "model") or None)
        log_event(self._logger, "rpc.call", log_ctx, arg_keys=sorted(k for k in args if k != "apiKey"))

        handler = self._handlers.get(method)
        if handler is None:
            log_event(self._logger, "rpc.result", log_ctx, success=False, error_code=ErrorCode.UNSUPPORTED.value)
            return CallResponse.fail(f"unknown method: {request.method}")

        t0 = time.perf_counter()
        try:
            data = handler(args, parent=parent)
        except (RequestError, ProviderError) as e:
            return self._failure(log_ctx, e, e.code, t0)
        except (CancelledError, TimeoutError) as e:
            return self._failure(log_ctx, e, classify_exception(e), t0)
        except Exception as e:  # noqa: BLE001 - the envelope is the error boundary
            log_event(self._logger, "rpc.unexpected", log_ctx, error=str(e), exc_info=True)
            return self._failure(log_ctx, e, ErrorCode.INTERNAL, t0)

        log_event(
            self._logger,
            "rpc.result",
            log_ctx,
            success=True,
            latency_ms=round((time.perf_counter() - t0) * 1000.0, 2),
        )
        return CallResponse.ok(data)

    def _failure(self, log_ctx: LogContext, exc: BaseException, code: ErrorCode, t0: float) -> CallResponse:
        log_event(
            self._logger,
            "rpc.result",
            log_ctx,
            success=False,
            error_code=code.value,
            latency_ms=round((time.perf_counter() - t0) * 1000.0, 2),
        )
        return CallResponse.fail(str(exc))

    # ----- handlers -----

    def handle_chat(self, args: Mapping[str, Any], *, parent: Optional[CancellationToken] = None) -> Dict[str, Any]:
        """Validate ``args``, run a chat call and project the result.

        Raises:
            RequestError: Missing ``model``, no messages and no ``prompt``,
                unsupported model or missing credentials.
            ProviderError: The backend call failed.
        """
        model = get_string(args, "model")
        if not model:
            raise missing_arg("model")
        temperature = get_float(args, "temperature")
        max_tokens = get_int(args, "maxTokens")
        top_p = get_float(args, "topP")
        stop = get_string_list(args, "stop")
        stream = get_bool(args, "stream")

        messages = extract_messages(args)
        if not messages:
            prompt = get_string(args, "prompt")
            if not prompt:
                raise RequestError("either messages[] or prompt is required")
            messages = [ChatMessage(role=ROLE_USER, content=prompt)]

        provider = self._router.resolve(model, args)
        request = ChatRequest(
            model=model,
            messages=messages,
            temperature=temperature,
            max_tokens=max_tokens,
            top_p=top_p,
            stop=stop,
            stream=stream,
        )
        result = self._run(provider.chat, request, parent)
        return filter_chat_output(result)

    def handle_complete(self, args: Mapping[str, Any], *, parent: Optional[CancellationToken] = None) -> Dict[str, Any]:
        """Validate ``args``, run a completion and project the result."""
        model = get_string(args, "model")
        if not model:
            raise missing_arg("model")
        prompt = get_string(args, "prompt")
        if not prompt:
            raise missing_arg("prompt")
        request = TextRequest(
            model=model,
            prompt=prompt,
            temperature=get_float(args, "temperature"),
            max_tokens=get_int(args, "maxTokens"),
            top_p=get_float(args, "topP"),
            stop=get_string_list(args, "stop"),
        )
        provider = self._router.resolve(model, args)
        result = self._run(provider.complete, request, parent)
        return filter_complete_output(result)

    def _run(
        self,
        call: Callable[[CallContext, Any], ProviderResult],
        request: Any,
        parent: Optional[CancellationToken],
    ) -> ProviderResult:
        ctx = CallContext.with_timeout(self._call_timeout, parent=parent)
        try:
            return call(ctx, request)
        finally:
            ctx.cancel("call finished")


__all__ = [
    "LlmPlugin",
    "METHOD_CHAT",
    "METHOD_COMPLETE",
    "normalize_method",
    "filter_chat_output",
    "filter_complete_output",
]
