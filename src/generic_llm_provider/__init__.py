"""Generic LLM Provider - a uniform request/response contract with a bounded tool loop."""

from .llm_core import (
    GenericProvider,
    ProviderRequest,
    ProviderResponse,
    ToolCallRecord,
    TokenUsage,
    ToolExecutionMode,
    ToolDefinition,
    ToolRegistry,
    SystemMessage,
    UserMessage,
    AssistantMessage,
    ToolMessage,
    LLMProviderError,
    MissingCredentialError,
    setup_logging,
)
from .llm_impl.openai_api import OpenAIProvider

__all__ = [
    "GenericProvider",
    "ProviderRequest",
    "ProviderResponse",
    "ToolCallRecord",
    "TokenUsage",
    "ToolExecutionMode",
    "ToolDefinition",
    "ToolRegistry",
    "SystemMessage",
    "UserMessage",
    "AssistantMessage",
    "ToolMessage",
    "LLMProviderError",
    "MissingCredentialError",
    "setup_logging",
    "OpenAIProvider",
]
