"""Provider Factory utilities.

Purpose
-------
Create backend instances implementing ``LLMProvider`` from a canonical
name. Adapter modules are imported lazily with ``importlib`` so the vendor
SDK is only loaded when a call is actually routed to it.

Failure modes
-------------
The factory performs no retries or fallbacks; it either returns an instance
or raises :class:`UnknownProviderError` with an actionable message.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, Tuple, Type

from .errors import ProviderError


class UnknownProviderError(Exception):
    """Raised when a provider cannot be resolved or initialized.

    Covers unregistered names, adapter import failures, missing adapter
    classes and invalid constructor arguments.
    """


class ProviderFactory:
    """Create provider backends based on a canonical name (e.g. ``"openai"``)."""

    _PROVIDERS: Dict[str, Dict[str, str]] = {
        "openai": {"module": "orka_chat_plugin.openai.client", "class": "OpenAIProvider"},
        "mock": {"module": "orka_chat_plugin.mock.client", "class": "MockProvider"},
    }

    @classmethod
    def create(cls, provider: str, **kwargs: Any) -> Any:
        """Create a provider backend instance.

        Parameters
        ----------
        provider:
            Canonical provider name (case-insensitive).
        **kwargs:
            Backend constructor arguments (e.g. ``api_key``).

        Raises
        ------
        UnknownProviderError
            Unknown name, import failure, missing class or bad arguments.
        ProviderError
            Propagated unchanged when the backend rejects its configuration
            (for example a missing API key).
        """
        name = (provider or "").lower().strip()
        spec = cls._PROVIDERS.get(name)
        if not spec:
            raise UnknownProviderError(f"Unknown provider '{provider}'")

        module_path, class_name = spec["module"], spec["class"]
        try:
            mod = import_module(module_path)
        except ImportError as exc:
            raise UnknownProviderError(
                f"Failed to import module '{module_path}' for provider '{provider}': {exc}"
            ) from exc

        try:
            klass: Type = getattr(mod, class_name)
        except AttributeError as exc:
            raise UnknownProviderError(
                f"Adapter class '{class_name}' not found in '{module_path}' for provider '{provider}'"
            ) from exc

        try:
            return klass(**kwargs)
        except ProviderError:
            raise
        except TypeError as exc:
            raise UnknownProviderError(
                f"Invalid arguments for '{provider}' adapter constructor: {exc}"
            ) from exc

    @classmethod
    def supported(cls) -> Tuple[str, ...]:
        """Return the registered canonical provider names in order."""
        return tuple(cls._PROVIDERS.keys())


def create_provider(provider: str, **kwargs: Any) -> Any:
    """Shorthand for :meth:`ProviderFactory.create`."""
    return ProviderFactory.create(provider, **kwargs)


__all__ = ["ProviderFactory", "UnknownProviderError", "create_provider"]
