"""Error taxonomy parts. Prefer importing from ``orka_chat_plugin.base.errors``."""

from .error_code import RETRYABLE_CODES, ErrorCode
from .provider_error import ProviderError
from .classification import classify_exception

__all__ = ["ErrorCode", "RETRYABLE_CODES", "ProviderError", "classify_exception"]
