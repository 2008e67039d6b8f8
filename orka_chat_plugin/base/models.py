"""
Provider-agnostic domain models (DTOs) public surface.

Re-exports the implementations under ``orka_chat_plugin.base.models_parts``
so callers import from one stable path.
"""

from .models_parts.message import ROLE_ASSISTANT, ROLE_SYSTEM, ROLE_USER, ChatMessage
from .models_parts.chat_request import ChatRequest
from .models_parts.text_request import TextRequest
from .models_parts.provider_result import ProviderResult, Usage

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
