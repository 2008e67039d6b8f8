"""Loopback RPC listener (FastAPI application and uvicorn entry point)."""

from .app import create_app, get_app
from .server import main

__all__ = ["create_app", "get_app", "main"]
