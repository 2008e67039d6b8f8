"""One-class-per-file model implementations re-exported by ``base.models``."""

from .message import ROLE_ASSISTANT, ROLE_SYSTEM, ROLE_USER, ChatMessage
from .chat_request import ChatRequest
from .text_request import TextRequest
from .provider_result import ProviderResult, Usage

__all__ = [
    "ChatMessage",
    "ROLE_SYSTEM",
    "ROLE_ASSISTANT",
    "ROLE_USER",
    "ChatRequest",
    "TextRequest",
    "ProviderResult",
    "Usage",
]
