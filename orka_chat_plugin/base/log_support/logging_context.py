"""Per-call fields attached to structured log events."""
from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Identifies the RPC call an event belongs to.

    ``method`` is the normalized RPC method, ``provider``/``model`` the
    resolved backend. ``extra`` carries ad-hoc keys flattened into the event.
    Never put API keys or message text here.
    """

    method: Optional[str] = None
    provider: Optional[str] = None
    model: Optional[str] = None
    request_id: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Flatten into event keys, omitting unset values."""
        out: Dict[str, Any] = {}
        for f in fields(self):
            if f.name == "extra":
                continue
            value = getattr(self, f.name)
            if value is not None:
                out[f.name] = value
        for k, v in self.extra.items():
            if v is not None:
                out.setdefault(k, v)
        return out


__all__ = ["LogContext"]
