"""
RPC envelope models exchanged with the host orchestrator.

``CallRequest`` carries a logical method name and an untyped argument bag;
``CallResponse`` is either ``success=True`` with ``data`` or
``success=False`` with a non-empty ``error``. Serialize with
``exclude_none=True`` so a failure carries no ``data`` key.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator


class CallRequest(BaseModel):
    """Inbound RPC call.

    Attributes:
        method: Logical operation name (``"Chat"``/``"Complete"``, first
            letter case-insensitive).
        args: Untrusted argument mapping; values are validated later by the
            normalizer, not here.
    """

    method: str = ""
    args: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("method", "args", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any, info) -> Any:
        if value is None:
            return {} if info.field_name == "args" else ""
        return value


class CallResponse(BaseModel):
    """Outbound RPC reply."""

    success: bool
    error: Optional[str] = None
    data: Optional[Any] = None

    @classmethod
    def ok(cls, data: Any) -> "CallResponse":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, message: str) -> "CallResponse":
        return cls(success=False, error=message or "unknown error")

    def to_wire(self) -> Dict[str, Any]:
        """Return the JSON-ready mapping without ``None`` fields."""
        return self.model_dump(exclude_none=True)


__all__ = ["CallRequest", "CallResponse"]
