"""Shared test doubles: a fake OpenAI SDK surface and a local vendor endpoint."""

from __future__ import annotations

import asyncio
import threading
import time
import types
from typing import Any, Dict, List, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from orka_chat_plugin.service.server import bind_socket


class FakeCompletions:
    """Stand-in for ``client.chat.completions`` recording every ``create`` call."""

    def __init__(self, response: Any = None, error: Optional[BaseException] = None) -> None:
        self.response = response
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    async def create(self, **kwargs: Any) -> Any:
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.response


class FakeOpenAIClient:
    """Minimal object shaped like ``openai.AsyncOpenAI`` for the chat path."""

    def __init__(self, response: Any = None, error: Optional[BaseException] = None) -> None:
        self.completions = FakeCompletions(response, error)
        self.chat = types.SimpleNamespace(completions=self.completions)


def make_completion(
    content: Optional[str] = "Hi there",
    finish_reason: str = "stop",
    usage: Optional[Dict[str, int]] = None,
    n_choices: int = 1,
) -> Any:
    """Build an SDK-like chat completion response."""
    usage = usage if usage is not None else {"prompt_tokens": 3, "completion_tokens": 2, "total_tokens": 5}
    choices = [
        types.SimpleNamespace(
            index=i,
            finish_reason=finish_reason,
            message=types.SimpleNamespace(role="assistant", content=content if i == 0 else f"alt {i}"),
        )
        for i in range(n_choices)
    ]
    return types.SimpleNamespace(
        id="chatcmpl-1",
        model="gpt-4o-mini",
        choices=choices,
        usage=types.SimpleNamespace(**usage),
    )


class VendorStub:
    """Local Chat Completions endpoint served by uvicorn on a loopback port.

    ``mode`` selects the behaviour of ``POST /v1/chat/completions``:

    - ``"error"``: always answer 500, so the SDK keeps retrying;
    - ``"slow"``: hold the request for ``delay`` seconds before answering,
      and record whether the client hung up first.
    """

    def __init__(self, mode: str = "error", delay: float = 4.0) -> None:
        self.mode = mode
        self.delay = delay
        self.attempts = 0
        self.disconnected = threading.Event()
        self._server: Optional[uvicorn.Server] = None
        self._thread: Optional[threading.Thread] = None
        self._sock = None

    @property
    def base_url(self) -> str:
        host, port = self._sock.getsockname()[:2]
        return f"http://{host}:{port}/v1"

    def _build_app(self) -> FastAPI:
        app = FastAPI()

        @app.post("/v1/chat/completions")
        async def completions(request: Request) -> JSONResponse:
            self.attempts += 1
            if self.mode == "error":
                return JSONResponse({"error": {"message": "upstream exploded", "type": "server_error"}}, status_code=500)
            loop = asyncio.get_running_loop()
            until = loop.time() + self.delay
            while loop.time() < until:
                if await request.is_disconnected():
                    self.disconnected.set()
                    return JSONResponse({}, status_code=499)
                await asyncio.sleep(0.05)
            return JSONResponse(
                {
                    "id": "chatcmpl-slow",
                    "object": "chat.completion",
                    "created": 0,
                    "model": "gpt-4o-mini",
                    "choices": [
                        {"index": 0, "finish_reason": "stop", "message": {"role": "assistant", "content": "late"}}
                    ],
                    "usage": {"prompt_tokens": 1, "completion_tokens": 1, "total_tokens": 2},
                }
            )

        return app

    def start(self) -> "VendorStub":
        self._sock = bind_socket(0)
        config = uvicorn.Config(self._build_app(), log_level="warning", access_log=False, lifespan="off")
        self._server = uvicorn.Server(config)
        self._thread = threading.Thread(target=self._server.run, kwargs={"sockets": [self._sock]}, daemon=True)
        self._thread.start()
        deadline = time.monotonic() + 5.0
        while not self._server.started:
            if time.monotonic() > deadline:
                raise RuntimeError("vendor stub did not start")
            time.sleep(0.01)
        return self

    def stop(self) -> None:
        if self._server is not None:
            self._server.should_exit = True
        if self._thread is not None:
            self._thread.join(timeout=5.0)
        if self._sock is not None:
            self._sock.close()
