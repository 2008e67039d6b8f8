"""
Provider base package.

Exports the provider-agnostic contract used by the dispatcher and the
backends:

- Models: request/response DTOs
- Interfaces: the ``LLMProvider`` capability protocol
- Errors: normalized error taxonomy
- Context: deadline + cancellation for one outbound call
- Factory: lazy creation of backends by canonical name
"""

from .cancellation import CancellationToken, CancelledError
from .context import CallContext
from .errors import ErrorCode, ProviderError, classify_exception
from .factory import ProviderFactory, UnknownProviderError
from .interfaces import LLMProvider
from .models import ChatMessage, ChatRequest, ProviderResult, TextRequest, Usage
from .timeouts import TimeoutConfig, get_timeout_config

__all__ = [
    # Models
    "ChatMessage",
    "ChatRequest",
    "TextRequest",
    "ProviderResult",
    "Usage",
    # Interfaces
    "LLMProvider",
    # Errors
    "ErrorCode",
    "ProviderError",
    "classify_exception",
    # Factory
    "ProviderFactory",
    "UnknownProviderError",
    # Timeouts & cancellation
    "CallContext",
    "CancellationToken",
    "CancelledError",
    "TimeoutConfig",
    "get_timeout_config",
]
