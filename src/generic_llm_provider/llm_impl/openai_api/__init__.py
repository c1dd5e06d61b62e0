"""Expose the OpenAI provider and its completion backend."""

from .core import OpenAIProvider
from .adapter import OpenAICompletionBackend

__all__ = ["OpenAIProvider", "OpenAICompletionBackend"]
