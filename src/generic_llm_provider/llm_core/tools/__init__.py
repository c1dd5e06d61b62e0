"""Tool definitions, registry, schema translation and execution."""

from .models import ToolDefinition, ToolCallRequest, ToolExecutionResult
from .registry import ToolRegistry, RegisteredTool
from .execution import ToolExecutor, ToolCallExecutor, ToolExecutionLoop, LoopState
from .schema import FunctionDeclaration, to_function_declarations

__all__ = [
    "ToolDefinition",
    "ToolCallRequest",
    "ToolExecutionResult",
    "ToolRegistry",
    "RegisteredTool",
    "ToolExecutor",
    "ToolCallExecutor",
    "ToolExecutionLoop",
    "LoopState",
    "FunctionDeclaration",
    "to_function_declarations",
]
