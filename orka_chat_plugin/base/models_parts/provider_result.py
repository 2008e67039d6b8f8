"""
Typed provider results.

``ProviderResult`` replaces a free-form result mapping with an explicit
structure. ``to_dict`` renders the camelCase mapping exposed over RPC and
omits fields the backend did not produce (for example ``content`` when the
vendor returned no choices).
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Usage:
    """Token accounting for a single provider call."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "promptTokens": self.prompt_tokens,
            "completionTokens": self.completion_tokens,
            "totalTokens": self.total_tokens,
        }


@dataclass(frozen=True)
class ProviderResult:
    """Normalized outcome of a backend ``chat`` or ``complete`` call.

    Attributes:
        id: Vendor response identifier.
        model: Model name reported by the vendor.
        content: Message content of the first choice, if any.
        text: Plain completion text for backends with a native completion
            shape. The OpenAI backend leaves it unset.
        role: Role of the first choice message, if any.
        finish_reason: Finish reason of the first choice, if any.
        usage: Token counts, always present (zero when the vendor omits them).
    """

    id: str = ""
    model: str = ""
    content: Optional[str] = None
    text: Optional[str] = None
    role: Optional[str] = None
    finish_reason: Optional[str] = None
    usage: Usage = field(default_factory=Usage)

    def to_dict(self) -> Dict[str, Any]:
        """Return the camelCase mapping, skipping unset optional fields."""
        out: Dict[str, Any] = {"id": self.id, "model": self.model}
        if self.content is not None:
            out["content"] = self.content
        if self.text is not None:
            out["text"] = self.text
        if self.role is not None:
            out["role"] = self.role
        if self.finish_reason is not None:
            out["finishReason"] = self.finish_reason
        out["usage"] = self.usage.to_dict()
        return out


__all__ = ["Usage", "ProviderResult"]
