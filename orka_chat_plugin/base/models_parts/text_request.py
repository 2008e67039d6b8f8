"""TextRequest DTO for single-prompt completions."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from .chat_request import ChatRequest
from .message import ROLE_USER, ChatMessage


@dataclass
class TextRequest:
    """Prompt-style completion request.

    Shares the zero-means-unset convention of `ChatRequest`.
    """

    model: str
    prompt: str
    temperature: float = 0.0
    max_tokens: int = 0
    top_p: float = 0.0
    stop: List[str] = field(default_factory=list)

    def as_chat(self) -> ChatRequest:
        """Return the equivalent chat request with the prompt as one user message."""
        return ChatRequest(
            model=self.model,
            messages=[ChatMessage(role=ROLE_USER, content=self.prompt)],
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            top_p=self.top_p,
            stop=list(self.stop),
        )


__all__ = ["TextRequest"]
