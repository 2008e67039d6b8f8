"""Dispatcher behaviour: method routing, validation order, projections and error envelopes."""
from __future__ import annotations

import pytest

from orka_chat_plugin.base.cancellation import CancellationToken, CancelledError
from orka_chat_plugin.base.errors import ErrorCode, ProviderError
from orka_chat_plugin.base.models import ChatRequest, ProviderResult, TextRequest, Usage
from orka_chat_plugin.mock import MockProvider
from orka_chat_plugin.openai.client import OpenAIProvider
from orka_chat_plugin.plugin import (
    CallRequest,
    LlmPlugin,
    ModelRouter,
    Route,
    filter_chat_output,
    filter_complete_output,
    marker_matcher,
    normalize_method,
)
from orka_chat_plugin.tests.utils import FakeOpenAIClient, make_completion


def _call(plugin: LlmPlugin, method: str, **args):
    return plugin.call_method(CallRequest(method=method, args=args))


def test_normalize_method_capitalizes_first_letter():
    assert normalize_method("chat") == "Chat"  # nosec B101 - pytest assert in tests
    assert normalize_method("Complete") == "Complete"  # nosec B101 - pytest assert in tests
    assert normalize_method("") == ""  # nosec B101 - pytest assert in tests


def test_unknown_method_reports_raw_name(plugin):
    resp = _call(plugin, "summarize", model="mock-1", prompt="x")
    assert resp.success is False  # nosec B101 - pytest assert in tests
    assert resp.error == "unknown method: summarize"  # nosec B101 - pytest assert in tests
    assert resp.data is None  # nosec B101 - pytest assert in tests


def test_chat_with_lowercase_method_and_prompt(plugin, mock_provider):
    resp = _call(plugin, "chat", model="mock-1", prompt="hello world")
    assert resp.success is True  # nosec B101 - pytest assert in tests
    assert set(resp.data) == {"content", "finishReason", "usage"}  # nosec B101 - pytest assert in tests
    assert resp.data["content"] == "Hello from the mock provider!"  # nosec B101 - pytest assert in tests
    assert resp.data["finishReason"] == "stop"  # nosec B101 - pytest assert in tests
    assert resp.data["usage"]["promptTokens"] == 2  # nosec B101 - pytest assert in tests
    sent = mock_provider.requests[0]
    assert isinstance(sent, ChatRequest)  # nosec B101 - pytest assert in tests
    assert [(m.role, m.content) for m in sent.messages] == [("user", "hello world")]  # nosec B101 - pytest assert in tests


def test_chat_messages_take_precedence_over_prompt(plugin, mock_provider):
    resp = _call(
        plugin,
        "Chat",
        model="mock-1",
        prompt="ignored",
        messages=[{"role": "system", "content": "be brief"}, {"role": "user", "content": "hi"}],
        temperature="0.5",
        maxTokens=64.0,
        topP=0.9,
        stop="END, STOP",
        stream="true",
    )
    assert resp.success is True  # nosec B101 - pytest assert in tests
    sent = mock_provider.requests[0]
    assert [m.content for m in sent.messages] == ["be brief", "hi"]  # nosec B101 - pytest assert in tests
    assert sent.temperature == pytest.approx(0.5)  # nosec B101 - pytest assert in tests
    assert sent.max_tokens == 64  # nosec B101 - pytest assert in tests
    assert sent.top_p == pytest.approx(0.9)  # nosec B101 - pytest assert in tests
    assert sent.stop == ["END", "STOP"]  # nosec B101 - pytest assert in tests
    assert sent.stream is True  # nosec B101 - pytest assert in tests


def test_chat_missing_model_is_checked_first(plugin):
    resp = _call(plugin, "Chat", prompt="hi")
    assert resp.error == "missing required arg: model"  # nosec B101 - pytest assert in tests


def test_chat_requires_messages_or_prompt(plugin, mock_provider):
    resp = _call(plugin, "Chat", model="mock-1", messages=[{"role": "user"}])
    assert resp.success is False  # nosec B101 - pytest assert in tests
    assert resp.error == "either messages[] or prompt is required"  # nosec B101 - pytest assert in tests
    assert mock_provider.requests == []  # nosec B101 - pytest assert in tests


def test_chat_validation_precedes_routing(plugin):
    resp = _call(plugin, "Chat", model="llama-3")
    assert resp.error == "either messages[] or prompt is required"  # nosec B101 - pytest assert in tests


def test_unsupported_model(plugin):
    resp = _call(plugin, "Chat", model="claude-3", prompt="hi")
    assert resp.success is False  # nosec B101 - pytest assert in tests
    assert resp.error == "unsupported model: claude-3"  # nosec B101 - pytest assert in tests


def test_openai_model_without_api_key(plugin):
    resp = _call(plugin, "Chat", model="gpt-4o", prompt="hi")
    assert resp.error == "missing OpenAI API key: pass apiKey argument"  # nosec B101 - pytest assert in tests


def test_complete_requires_model_then_prompt(plugin):
    assert _call(plugin, "Complete", prompt="x").error == "missing required arg: model"  # nosec B101 - pytest assert in tests
    assert _call(plugin, "Complete", model="mock-1").error == "missing required arg: prompt"  # nosec B101 - pytest assert in tests
    # A messages array does not substitute for prompt in Complete.
    resp = _call(plugin, "complete", model="mock-1", messages=[{"role": "user", "content": "hi"}])
    assert resp.error == "missing required arg: prompt"  # nosec B101 - pytest assert in tests


def test_complete_projects_text_from_content(plugin, mock_provider):
    resp = _call(plugin, "complete", model="mock-1", prompt="Say hi", maxTokens="16")
    assert resp.success is True  # nosec B101 - pytest assert in tests
    assert set(resp.data) == {"text", "finishReason", "usage"}  # nosec B101 - pytest assert in tests
    assert resp.data["text"] == "Hello from the mock provider!"  # nosec B101 - pytest assert in tests
    sent = mock_provider.requests[0]
    assert isinstance(sent, TextRequest) and sent.max_tokens == 16  # nosec B101 - pytest assert in tests


def test_backend_error_becomes_failure_envelope(mock_router):
    mock_router.register(
        Route(
            name="broken",
            matches=marker_matcher(prefixes=("broken",)),
            build=lambda args: MockProvider(
                error=ProviderError(code=ErrorCode.RATE_LIMIT, message="openai chat error: rate limited", provider="openai")
            ),
        ),
        first=True,
    )
    resp = LlmPlugin(router=mock_router).call_method(CallRequest(method="Chat", args={"model": "broken-1", "prompt": "hi"}))
    assert resp.success is False  # nosec B101 - pytest assert in tests
    assert resp.error == "openai chat error: rate limited"  # nosec B101 - pytest assert in tests


@pytest.mark.parametrize(
    "error,message",
    [
        (CancelledError("caller went away"), "caller went away"),
        (TimeoutError("context deadline exceeded"), "context deadline exceeded"),
        (RuntimeError("boom"), "boom"),
    ],
)
def test_unexpected_handler_errors_never_escape(error, message):
    backend = MockProvider(error=error)
    router = ModelRouter([Route(name="mock", matches=lambda m: True, build=lambda args: backend)])
    resp = LlmPlugin(router=router).call_method(CallRequest(method="Chat", args={"model": "any", "prompt": "hi"}))
    assert resp.success is False  # nosec B101 - pytest assert in tests
    assert resp.error == message  # nosec B101 - pytest assert in tests


def test_expired_deadline_fails_before_backend_work(mock_router):
    resp = LlmPlugin(router=mock_router, call_timeout=0.0).call_method(
        CallRequest(method="Chat", args={"model": "mock-1", "prompt": "hi"})
    )
    assert resp.success is False  # nosec B101 - pytest assert in tests
    assert resp.error == "context deadline exceeded"  # nosec B101 - pytest assert in tests


def test_openai_route_end_to_end_with_fake_sdk(monkeypatch):
    fake = FakeOpenAIClient(response=make_completion(content="Hi!", n_choices=2))
    monkeypatch.setattr(OpenAIProvider, "_make_client", lambda self, api_key: fake)
    resp = LlmPlugin().call_method(
        CallRequest(
            method="Chat",
            args={"model": "GPT-4o-mini", "apiKey": "sk-test", "prompt": "hello", "temperature": 0, "stop": "END,STOP"},
        )
    )
    assert resp.success is True  # nosec B101 - pytest assert in tests
    assert resp.data == {  # nosec B101 - pytest assert in tests
        "content": "Hi!",
        "finishReason": "stop",
        "usage": {"promptTokens": 3, "completionTokens": 2, "totalTokens": 5},
    }
    sent = fake.completions.calls[0]
    assert sent["model"] == "GPT-4o-mini"  # nosec B101 - pytest assert in tests
    assert "temperature" not in sent and "stop" not in sent and "stream" not in sent  # nosec B101 - pytest assert in tests


def test_filters_only_copy_present_keys():
    bare = ProviderResult(id="x", model="m", usage=Usage())
    assert filter_chat_output(bare) == {"usage": Usage().to_dict()}  # nosec B101 - pytest assert in tests
    assert filter_complete_output(bare) == {"usage": Usage().to_dict()}  # nosec B101 - pytest assert in tests
    native = ProviderResult(content="c", text="t", finish_reason="length")
    assert filter_complete_output(native)["text"] == "t"  # nosec B101 - pytest assert in tests
    assert filter_chat_output(native)["content"] == "c"  # nosec B101 - pytest assert in tests


def test_empty_call_request_fields_are_tolerated():
    req = CallRequest.model_validate({"method": None, "args": None})
    assert req.method == "" and req.args == {}  # nosec B101 - pytest assert in tests


def test_cancelled_parent_token_stops_the_call(plugin, mock_provider):
    parent = CancellationToken()
    parent.cancel("caller disconnected")
    resp = plugin.call_method(CallRequest(method="Chat", args={"model": "mock-1", "prompt": "hi"}), parent=parent)
    assert resp.success is False  # nosec B101 - pytest assert in tests
    assert resp.error == "caller disconnected"  # nosec B101 - pytest assert in tests


def test_wire_form_drops_unset_fields(plugin):
    failed = _call(plugin, "Foo").to_wire()
    assert failed == {"success": False, "error": "unknown method: Foo"}  # nosec B101 - pytest assert in tests
    ok = _call(plugin, "Chat", model="mock-1", prompt="hi").to_wire()
    assert "error" not in ok and ok["success"] is True  # nosec B101 - pytest assert in tests
