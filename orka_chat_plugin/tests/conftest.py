"""Pytest configuration for the plugin test suite.

Provides an in-process mock backend, a dispatcher whose router resolves
``mock*`` models to it, a fake OpenAI SDK client, and loopback vendor endpoints for the tests
that need real HTTP. Nothing leaves 127.0.0.1.
"""

from __future__ import annotations

from typing import Iterator

import pytest

from orka_chat_plugin.base.http import close_all_clients
from orka_chat_plugin.mock import MockProvider
from orka_chat_plugin.plugin import LlmPlugin, ModelRouter, Route, marker_matcher
from orka_chat_plugin.plugin.routing import OPENAI_ROUTE
from orka_chat_plugin.tests.utils import FakeOpenAIClient, VendorStub, make_completion


@pytest.fixture()
def mock_provider() -> Iterator[MockProvider]:
    """Yield a ``MockProvider`` with the default canned reply."""
    yield MockProvider()


@pytest.fixture()
def mock_router(mock_provider: MockProvider) -> ModelRouter:
    """Router sending ``mock*`` models to the fixture backend, then the OpenAI route."""
    route = Route(name="mock", matches=marker_matcher(prefixes=("mock",)), build=lambda args: mock_provider)
    return ModelRouter([route, OPENAI_ROUTE])


@pytest.fixture()
def plugin(mock_router: ModelRouter) -> LlmPlugin:
    return LlmPlugin(router=mock_router)


@pytest.fixture()
def fake_openai_client() -> FakeOpenAIClient:
    return FakeOpenAIClient(response=make_completion())


@pytest.fixture()
def failing_vendor(monkeypatch: pytest.MonkeyPatch) -> Iterator[VendorStub]:
    """Loopback endpoint that answers every chat call with HTTP 500."""
    monkeypatch.setenv("NO_PROXY", "127.0.0.1,localhost")
    stub = VendorStub(mode="error").start()
    yield stub
    stub.stop()


@pytest.fixture()
def slow_vendor(monkeypatch: pytest.MonkeyPatch) -> Iterator[VendorStub]:
    """Loopback endpoint that holds every chat call for four seconds."""
    monkeypatch.setenv("NO_PROXY", "127.0.0.1,localhost")
    stub = VendorStub(mode="slow", delay=4.0).start()
    yield stub
    stub.stop()


@pytest.fixture(scope="session", autouse=True)
def close_http_clients_after_session() -> Iterator[None]:
    """Close pooled HTTP clients created by tests that build real SDK clients."""
    yield
    close_all_clients()
