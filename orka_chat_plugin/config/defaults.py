"""orka_chat_plugin.config.defaults
================================

Small, stable default values used across the plugin. Only plain constants
live here; this module imports nothing from the rest of the package.
"""

from __future__ import annotations

# ---- RPC listener ----
# Loopback only: the host orchestrator runs on the same machine.
RPC_BIND_HOST = "127.0.0.1"
RPC_CALL_PATH = "/rpc/CallMethod"
# How often a pending call checks whether its caller is still connected.
DISCONNECT_POLL_SECONDS = 0.5

# ---- OpenAI ----
OPENAI_DEFAULT_BASE_URL = "https://api.openai.com/v1"
# Fixed retry budget applied inside the SDK for transient transport failures.
OPENAI_MAX_RETRIES = 5

# ---- Mock ----
MOCK_DEFAULT_CONTENT = "Hello from the mock provider!"


__all__ = [
    "RPC_BIND_HOST",
    "RPC_CALL_PATH",
    "DISCONNECT_POLL_SECONDS",
    "OPENAI_DEFAULT_BASE_URL",
    "OPENAI_MAX_RETRIES",
    "MOCK_DEFAULT_CONTENT",
]
