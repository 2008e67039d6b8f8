from __future__ import annotations

import asyncio
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request

from ..base.cancellation import CancellationToken
from ..config.defaults import DISCONNECT_POLL_SECONDS, RPC_CALL_PATH
from ..plugin import CallRequest, CallResponse, LlmPlugin


async def _await_or_cancel_on_disconnect(
    work: "asyncio.Future[CallResponse]", request: Request, caller: CancellationToken
) -> CallResponse:
    """Wait for ``work``; cancel ``caller`` if the client goes away first."""
    while True:
        done, _ = await asyncio.wait({work}, timeout=DISCONNECT_POLL_SECONDS)
        if done:
            return work.result()
        if await request.is_disconnected():
            caller.cancel("caller disconnected")
            return await work


def create_app(plugin: Optional[LlmPlugin] = None) -> FastAPI:
    """Build the RPC application around ``plugin`` (a default one when omitted).

    Each call runs on a worker thread, so concurrent calls proceed
    independently while the event loop keeps watching for disconnects.
    """
    service = plugin if plugin is not None else LlmPlugin()
    app = FastAPI(title="Orka Chat Plugin", version="0.1.0")
    app.state.plugin = service

    @app.post(RPC_CALL_PATH, response_model=CallResponse, response_model_exclude_none=True)
    async def call_method(body: CallRequest, request: Request) -> CallResponse:
        """Run one ``Chat``/``Complete`` call; failures come back as ``success=False``."""
        caller = CancellationToken()
        work = asyncio.ensure_future(asyncio.to_thread(service.call_method, body, parent=caller))
        return await _await_or_cancel_on_disconnect(work, request, caller)

    @app.get("/api/health")
    def health() -> Dict[str, Any]:
        """Report that the listener is up."""
        return {"ok": True}

    return app


app = create_app()


def get_app() -> FastAPI:
    """Return the module-level application instance."""
    return app


__all__ = ["create_app", "get_app", "app"]
