"""orka_chat_plugin package

LLM chat plugin for the host orchestrator.

Purpose:
    Expose ``Chat`` and ``Complete`` over a loopback RPC listener. Each call
    carries its model name and API key; the plugin picks a backend from the
    model name, forwards the request and returns a normalized result.

Public API (re-exported):
    - Version: ``__version__``
    - Dispatcher: :class:`LlmPlugin`, :class:`CallRequest`, :class:`CallResponse`
    - Errors: :class:`ProviderError`, :class:`ErrorCode`, :class:`RequestError`
    - Factory: :class:`ProviderFactory`
"""

from .base.errors import ErrorCode, ProviderError
from .base.factory import ProviderFactory
from .plugin import CallRequest, CallResponse, LlmPlugin, RequestError

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "LlmPlugin",
    "CallRequest",
    "CallResponse",
    "RequestError",
    "ErrorCode",
    "ProviderError",
    "ProviderFactory",
]
