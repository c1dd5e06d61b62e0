"""Public exports for the provider-agnostic core."""

from .logger import get_logger, setup_logging
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
from .messages import (
    Message,
    SystemMessage,
    UserMessage,
    AssistantMessage,
    ToolMessage,
    ToolCallRef,
    build_conversation,
)

# tools must be imported before types: types depends on tools.models
from .tools import (
    ToolDefinition,
    ToolCallRequest,
    ToolExecutionResult,
    ToolRegistry,
    ToolExecutor,
    ToolCallExecutor,
    ToolExecutionLoop,
    LoopState,
    FunctionDeclaration,
    to_function_declarations,
)
from .types import ToolExecutionMode, TokenUsage, Completion, CompletionParams
from .config import ProviderSettings, get_settings
from .base import (
    ProviderRequest,
    ProviderResponse,
    ToolCallRecord,
    CompletionBackend,
    aggregate_response,
    GenericProvider,
)

__all__ = [
    "get_logger",
    "setup_logging",
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
    "Message",
    "SystemMessage",
    "UserMessage",
    "AssistantMessage",
    "ToolMessage",
    "ToolCallRef",
    "build_conversation",
    "ToolDefinition",
    "ToolCallRequest",
    "ToolExecutionResult",
    "ToolRegistry",
    "ToolExecutor",
    "ToolCallExecutor",
    "ToolExecutionLoop",
    "LoopState",
    "FunctionDeclaration",
    "to_function_declarations",
    "ToolExecutionMode",
    "TokenUsage",
    "Completion",
    "CompletionParams",
    "ProviderSettings",
    "get_settings",
    "ProviderRequest",
    "ProviderResponse",
    "ToolCallRecord",
    "CompletionBackend",
    "aggregate_response",
    "GenericProvider",
]
