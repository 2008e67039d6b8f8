"""OpenAI Chat Completions backend, selected for ``gpt*`` and ``o1*`` models."""

from .client import OpenAIProvider

__all__ = ["OpenAIProvider"]
