"""
Chat message DTO shared by the dispatcher and provider backends.

Roles form a small open set: ``system`` and ``assistant`` are recognised by
backends, any other value is sent to the vendor as a ``user`` message.
"""
from __future__ import annotations

from dataclasses import dataclass

ROLE_SYSTEM = "system"
ROLE_ASSISTANT = "assistant"
ROLE_USER = "user"


@dataclass(frozen=True)
class ChatMessage:
    """A single role-tagged chat message.

    Attributes:
        role: Author role as supplied by the caller (``"system"``,
            ``"assistant"``, ``"user"`` or any other string).
        content: Plain text body of the message.
    """

    role: str
    content: str

    def to_dict(self) -> dict:
        """Return the message as a plain ``{"role", "content"}`` mapping."""
        return {"role": self.role, "content": self.content}


__all__ = ["ChatMessage", "ROLE_SYSTEM", "ROLE_ASSISTANT", "ROLE_USER"]
