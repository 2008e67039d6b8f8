"""Shared HTTP client pool for provider backends.

Purpose:
    Keep one pooled ``httpx.AsyncClient`` per ``(base_url, purpose)`` so every
    backend instance built for an RPC call reuses warm connections instead
    of opening new ones. Connection limits and timeouts come from
    :func:`get_timeout_config` and the constants below.

Event loop:
    Pooled clients are only ever driven from one background event loop
    (:func:`get_io_loop`), a daemon thread started on first use. Worker
    threads hand coroutines to it through :mod:`.runner`, which lets a
    cancelled or expired call abort its in-flight request.

Lifecycle:
    Clients live for the process lifetime and are closed at interpreter exit
    via ``atexit``; tests may call :func:`close_all_clients` directly.
"""

from __future__ import annotations

import asyncio
import atexit
import socket
import threading
from typing import Dict, List, Optional, Tuple

import httpx

from ..logging import get_logger
from ..timeouts import get_timeout_config

MAX_CONNECTIONS = 100
MAX_KEEPALIVE_CONNECTIONS = 10
CLOSE_TIMEOUT_SECONDS = 5.0

_CLIENTS: Dict[Tuple[Optional[str], str], httpx.AsyncClient] = {}
_LOCK = threading.RLock()
_LOOP: Optional[asyncio.AbstractEventLoop] = None
_LOOP_THREAD: Optional[threading.Thread] = None

_logger = get_logger("http")


def get_io_loop() -> asyncio.AbstractEventLoop:
    """Return the background event loop, starting its thread on first use."""
    global _LOOP, _LOOP_THREAD
    with _LOCK:
        if _LOOP is not None and not _LOOP.is_closed() and _LOOP_THREAD is not None and _LOOP_THREAD.is_alive():
            return _LOOP
        loop = asyncio.new_event_loop()
        thread = threading.Thread(target=loop.run_forever, name="plugin-http-io", daemon=True)
        thread.start()
        _LOOP, _LOOP_THREAD = loop, thread
        return loop


def _socket_options(keepalive_seconds: float) -> List[Tuple[int, int, int]]:
    """TCP keep-alive options; the idle interval is set where the OS allows."""
    opts = [(socket.SOL_SOCKET, socket.SO_KEEPALIVE, 1)]
    if hasattr(socket, "TCP_KEEPIDLE"):
        opts.append((socket.IPPROTO_TCP, socket.TCP_KEEPIDLE, int(keepalive_seconds)))
    return opts


def build_timeout() -> httpx.Timeout:
    cfg = get_timeout_config()
    return httpx.Timeout(cfg.http_timeout_seconds, connect=cfg.connect_timeout_seconds)


def _new_client(base_url: Optional[str]) -> httpx.AsyncClient:
    cfg = get_timeout_config()
    limits = httpx.Limits(
        max_connections=MAX_CONNECTIONS,
        max_keepalive_connections=MAX_KEEPALIVE_CONNECTIONS,
        keepalive_expiry=cfg.idle_connection_seconds,
    )
    transport = httpx.AsyncHTTPTransport(
        limits=limits,
        http2=False,
        socket_options=_socket_options(cfg.keepalive_seconds),
    )
    kwargs = {"timeout": build_timeout(), "transport": transport, "trust_env": True}
    if base_url:
        kwargs["base_url"] = base_url
    return httpx.AsyncClient(**kwargs)


def get_httpx_client(base_url: Optional[str], purpose: str) -> httpx.AsyncClient:
    """Return the pooled ``httpx.AsyncClient`` for ``base_url`` and ``purpose``.

    Parameters:
        base_url: API base URL the client is associated with; ``None``
            groups clients under a shared key.
        purpose: Short stable discriminator (e.g. ``"openai"``).
    """
    key = (base_url, purpose)
    client = _CLIENTS.get(key)
    if client is not None and not client.is_closed:
        return client

    with _LOCK:
        client = _CLIENTS.get(key)
        if client is not None and not client.is_closed:
            return client
        client = _new_client(base_url)
        _CLIENTS[key] = client
        return client


async def _aclose_all(clients: List[httpx.AsyncClient]) -> None:
    for c in clients:
        try:
            await c.aclose()
        except Exception as e:  # noqa: BLE001 - best-effort shutdown
            _logger.debug("http client close failed: %s", e)


def close_all_clients() -> None:
    """Close and forget every pooled client."""
    with _LOCK:
        clients = list(_CLIENTS.values())
        _CLIENTS.clear()
        loop = _LOOP
    if not clients:
        return
    if loop is not None and loop.is_running():
        future = asyncio.run_coroutine_threadsafe(_aclose_all(clients), loop)
        try:
            future.result(timeout=CLOSE_TIMEOUT_SECONDS)
        except Exception as e:  # noqa: BLE001 - best-effort shutdown
            _logger.debug("http pool shutdown incomplete: %s", e)
    else:
        asyncio.run(_aclose_all(clients))


atexit.register(close_all_clients)

__all__ = ["get_httpx_client", "get_io_loop", "close_all_clients", "build_timeout"]
