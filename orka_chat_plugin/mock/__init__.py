"""Mock provider backend used by tests and local development."""

from .client import MockProvider

__all__ = ["MockProvider"]
