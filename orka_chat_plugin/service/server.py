"""Process entry point: bind the loopback listener and serve RPC calls.

Usage::

    orka-chat-plugin -port 50051

The port is mandatory. Failing to parse it, or to bind it, is logged and
turns into a non-zero exit status.
"""
from __future__ import annotations

import argparse
import logging
import socket
from typing import Optional, Sequence

import uvicorn

from ..base.logging import get_logger, log_event
from ..config.defaults import RPC_BIND_HOST
from .app import create_app

_logger = get_logger("server")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="orka-chat-plugin", description="LLM chat RPC plugin")
    parser.add_argument("-port", "--port", dest="port", type=int, default=0, help="loopback port to listen on (required)")
    return parser


def bind_socket(port: int, host: str = RPC_BIND_HOST) -> socket.socket:
    """Open a listening TCP socket on ``host:port``.

    Raises:
        OSError: The address is in use or otherwise cannot be bound.
    """
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind((host, port))
        sock.listen(socket.SOMAXCONN)
    except OSError:
        sock.close()
        raise
    sock.set_inheritable(True)
    return sock


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Parse arguments, bind the port and serve until stopped.

    Returns the process exit status.
    """
    parser = build_parser()
    try:
        ns = parser.parse_args(argv)
    except SystemExit as e:
        return int(e.code or 0)
    if ns.port <= 0 or ns.port > 65535:
        log_event(_logger, "server.fatal", level=logging.ERROR, error="-port is required")
        return 1

    try:
        sock = bind_socket(ns.port)
    except OSError as e:
        log_event(_logger, "server.fatal", level=logging.ERROR, error=f"failed to listen: {e}", port=ns.port)
        return 1

    config = uvicorn.Config(create_app(), log_level="warning", access_log=False)
    server = uvicorn.Server(config)
    log_event(_logger, "server.start", host=RPC_BIND_HOST, port=ns.port)
    try:
        server.run(sockets=[sock])
    except Exception as e:  # noqa: BLE001 - last-resort exit status
        log_event(_logger, "server.fatal", level=logging.ERROR, error=f"failed to serve: {e}", exc_info=True)
        return 1
    finally:
        sock.close()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
