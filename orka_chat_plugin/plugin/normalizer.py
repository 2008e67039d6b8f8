"""
Defensive extraction of typed values from an untyped argument mapping.

Every RPC call carries ``args``: a mapping whose values may arrive in their
native type or encoded as strings (``100``, ``100.0`` and ``"100"`` are all
a valid ``maxTokens``). The helpers here never raise on malformed input;
anything missing, empty or of the wrong shape yields the default.

Note that this makes a typo such as ``"maxTokens": "abc"`` indistinguishable
from an omitted field.
"""
from __future__ import annotations

import math
import re
from typing import Any, List, Mapping

from ..base.models import ChatMessage

_INT_RE = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

_TRUE_STRINGS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_STRINGS = frozenset({"0", "f", "F", "FALSE", "false", "False"})


def _non_empty_str(value: Any) -> str | None:
    return value if isinstance(value, str) and value != "" else None


def get_string(args: Mapping[str, Any], key: str, default: str = "") -> str:
    """Return a non-empty string value for ``key``.

    Keys ending in ``ID`` also accept the ``Id`` spelling (``userID`` falls
    back to ``userId``) when the primary key is absent, empty or not a string.
    """
    value = _non_empty_str(args.get(key))
    if value is not None:
        return value
    if key.endswith("ID"):
        value = _non_empty_str(args.get(key[:-2] + "Id"))
        if value is not None:
            return value
    return default


def _parse_int(text: str) -> int | None:
    if not _INT_RE.fullmatch(text):
        return None
    value = int(text)
    if value < _INT64_MIN or value > _INT64_MAX:
        return None
    return value


def get_int(args: Mapping[str, Any], key: str, default: int = 0) -> int:
    """Return an integer from an int, a float (truncated) or a base-10 string."""
    value = args.get(key)
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else default
    if isinstance(value, str) and value:
        parsed = _parse_int(value)
        if parsed is not None:
            return parsed
    return default


def get_float(args: Mapping[str, Any], key: str, default: float = 0.0) -> float:
    """Return a float from a number or a numeric string (no surrounding whitespace)."""
    value = args.get(key)
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str) and value and value == value.strip() and "_" not in value:
        try:
            return float(value)
        except ValueError:
            return default
    return default


def get_bool(args: Mapping[str, Any], key: str, default: bool = False) -> bool:
    """Return a bool from a native bool or one of the accepted literal strings."""
    value = args.get(key)
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        if value in _TRUE_STRINGS:
            return True
        if value in _FALSE_STRINGS:
            return False
    return default


def get_string_list(args: Mapping[str, Any], key: str) -> List[str]:
    """Return a list of strings.

    Accepts a list/tuple (non-string elements are dropped) or a single
    comma-separated string (segments trimmed, empty segments dropped).
    Absent, ``None`` or any other type gives an empty list.
    """
    value = args.get(key)
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [item for item in value if isinstance(item, str)]
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    return []


def extract_messages(args: Mapping[str, Any], key: str = "messages") -> List[ChatMessage]:
    """Return the chat messages under ``key``, preserving order.

    Entries that are not mappings, or lack a non-empty string ``role`` or
    ``content``, are skipped.
    """
    value = args.get(key)
    if not isinstance(value, (list, tuple)):
        return []
    out: List[ChatMessage] = []
    for entry in value:
        if not isinstance(entry, Mapping):
            continue
        role = get_string(entry, "role")
        content = get_string(entry, "content")
        if role and content:
            out.append(ChatMessage(role=role, content=content))
    return out


__all__ = [
    "get_string",
    "get_int",
    "get_float",
    "get_bool",
    "get_string_list",
    "extract_messages",
]
