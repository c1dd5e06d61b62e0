"""Collect concrete provider implementations."""

from .openai_api import OpenAIProvider, OpenAICompletionBackend

__all__ = [
    "OpenAIProvider",
    "OpenAICompletionBackend",
]
