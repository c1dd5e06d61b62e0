"""
Exception hierarchy of the provider library.

Provider errors (configuration, backend responses) are fatal to a request.
Tool errors are raised inside the tool layer; the ones tied to a single tool
call are caught by the call executor and turn into a dropped call.
"""


class LLMProviderError(Exception):
    """Base exception for all errors raised by this library."""


class ProviderConfigError(LLMProviderError):
    """Raised when a provider is missing required configuration."""


class MissingCredentialError(ProviderConfigError):
    """Raised when a request carries no API credential."""


class CompletionError(LLMProviderError):
    """Raised when the completion backend returns something that cannot be used."""


class LLMToolError(LLMProviderError):
    """Base exception for all tool-related errors."""


class ToolRegistrationError(LLMToolError):
    """Raised when a tool cannot be registered."""


class ToolValidationError(LLMToolError):
    """Raised when a tool definition is invalid."""


class ToolNotFoundError(LLMToolError):
    """Raised when a requested tool is not known."""


class ToolArgumentError(LLMToolError):
    """Raised when the arguments of a tool call cannot be decoded."""


class ToolExecutionError(LLMToolError):
    """Raised when a tool fails or times out during execution."""
