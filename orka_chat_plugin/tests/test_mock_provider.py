from __future__ import annotations

import pytest

from orka_chat_plugin.base.cancellation import CancelledError
from orka_chat_plugin.base.context import CallContext
from orka_chat_plugin.base.interfaces import LLMProvider
from orka_chat_plugin.base.models import ChatMessage, ChatRequest, TextRequest
from orka_chat_plugin.mock import MockProvider


def test_mock_provider_chat_and_complete(mock_provider):
    assert isinstance(mock_provider, LLMProvider)  # nosec B101 - pytest assert in tests
    ctx = CallContext.background()
    chat = mock_provider.chat(ctx, ChatRequest(model="mock-1", messages=[ChatMessage("user", "one two")]))
    assert chat.content == "Hello from the mock provider!"  # nosec B101 - pytest assert in tests
    assert chat.usage.prompt_tokens == 2  # nosec B101 - pytest assert in tests
    done = mock_provider.complete(ctx, TextRequest(model="mock-1", prompt="x"))
    assert done.finish_reason == "stop"  # nosec B101 - pytest assert in tests
    assert len(mock_provider.requests) == 2  # nosec B101 - pytest assert in tests


def test_mock_provider_raises_configured_error():
    provider = MockProvider(error=RuntimeError("nope"))
    with pytest.raises(RuntimeError):
        provider.complete(CallContext.background(), TextRequest(model="m", prompt="x"))


def test_mock_provider_respects_cancelled_context():
    ctx = CallContext.background()
    ctx.cancel("stop")
    with pytest.raises(CancelledError, match="stop"):
        MockProvider().complete(ctx, TextRequest(model="m", prompt="x"))
