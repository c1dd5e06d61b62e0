"""Expose provider-agnostic message models and the conversation builder."""

from .models import Message, SystemMessage, UserMessage, AssistantMessage, ToolMessage, ToolCallRef
from .builder import build_conversation

__all__ = [
    "Message",
    "SystemMessage",
    "UserMessage",
    "AssistantMessage",
    "ToolMessage",
    "ToolCallRef",
    "build_conversation",
]
