"""Export the exception hierarchy used by providers and the tool layer."""

from .exceptions import (
    LLMProviderError,
    ProviderConfigError,
    MissingCredentialError,
    CompletionError,
    LLMToolError,
    ToolRegistrationError,
    ToolValidationError,
    ToolNotFoundError,
    ToolArgumentError,
    ToolExecutionError,
)

__all__ = [
    "LLMProviderError",
    "ProviderConfigError",
    "MissingCredentialError",
    "CompletionError",
    "LLMToolError",
    "ToolRegistrationError",
    "ToolValidationError",
    "ToolNotFoundError",
    "ToolArgumentError",
    "ToolExecutionError",
]
