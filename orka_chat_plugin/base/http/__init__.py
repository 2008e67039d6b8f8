"""Pooled HTTP transport shared by provider backends."""

from .client import build_timeout, close_all_clients, get_httpx_client, get_io_loop
from .runner import run_bounded

__all__ = ["get_httpx_client", "get_io_loop", "close_all_clients", "build_timeout", "run_bounded"]
