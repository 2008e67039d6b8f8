"""
ChatRequest DTO for provider-agnostic chat invocations.

Numeric fields use their zero value to mean "unset"; backends omit zero
values from the outgoing vendor request. Callers cannot distinguish an
explicit zero from an omitted field.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from .message import ChatMessage


@dataclass
class ChatRequest:
    """Normalized chat request sent to provider backends.

    Attributes:
        model: Target model identifier.
        messages: Ordered, non-empty list of `ChatMessage` instances.
        temperature: Sampling temperature; ``0.0`` means unset.
        max_tokens: Completion token ceiling; ``0`` means unset.
        top_p: Nucleus sampling mass; ``0.0`` means unset.
        stop: Stop sequences; empty means unset.
        stream: Accepted for compatibility. No incremental delivery happens.
    """

    model: str
    messages: List[ChatMessage]
    temperature: float = 0.0
    max_tokens: int = 0
    top_p: float = 0.0
    stop: List[str] = field(default_factory=list)
    stream: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation of the request."""
        return {
            "model": self.model,
            "messages": [m.to_dict() for m in self.messages],
            "temperature": self.temperature,
            "maxTokens": self.max_tokens,
            "topP": self.top_p,
            "stop": list(self.stop),
            "stream": self.stream,
        }


__all__ = ["ChatRequest"]
