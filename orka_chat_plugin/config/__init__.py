"""Configuration layer for provider backends.

Merge order (later wins):
    1. Built-in defaults
    2. In-code overrides passed to ``get_provider_config``

Nothing is read from the environment: the base URL, retry budget and
timeouts are fixed, and API keys arrive with every call as ``apiKey``, so a
caller's key is only ever sent to the configured vendor host.

Public API
----------
* get_provider_config(provider: str, overrides: dict | None = None) -> dict
"""
from __future__ import annotations

from typing import Any, Dict, Optional

from .defaults import OPENAI_DEFAULT_BASE_URL, OPENAI_MAX_RETRIES

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "openai": {"base_url": OPENAI_DEFAULT_BASE_URL, "max_retries": OPENAI_MAX_RETRIES},
    "mock": {},
}


def get_provider_config(provider: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return merged configuration for ``provider`` (defaults -> overrides)."""
    name = (provider or "").lower().strip()
    cfg: Dict[str, Any] = dict(DEFAULTS.get(name, {}))
    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}
    return cfg


__all__ = ["get_provider_config", "DEFAULTS"]
