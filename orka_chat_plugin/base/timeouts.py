"""Fixed timeout configuration for the plugin.

All deadlines and transport timeouts live here so no other module carries
numeric literals for them. Values are deliberately not read from the
environment: the host orchestrator relies on these bounds.

TimeoutConfig
    ``call_timeout_seconds`` bounds one dispatcher invocation end to end.
    ``http_timeout_seconds`` is the per-request ceiling configured on the
    vendor SDK client. ``connect_timeout_seconds`` bounds TCP/TLS setup.
    ``keepalive_seconds`` and ``idle_connection_seconds`` shape the pooled
    HTTP transport.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TimeoutConfig:
    """Normalized timeout values, in seconds."""

    call_timeout_seconds: float = 120.0
    http_timeout_seconds: float = 120.0
    connect_timeout_seconds: float = 10.0
    keepalive_seconds: float = 60.0
    idle_connection_seconds: float = 90.0


_CONFIG = TimeoutConfig()


def get_timeout_config() -> TimeoutConfig:
    """Return the process-wide `TimeoutConfig`."""
    return _CONFIG


__all__ = ["TimeoutConfig", "get_timeout_config"]
