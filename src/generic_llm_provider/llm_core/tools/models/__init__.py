"""Tool-related data models."""

from .models import ToolDefinition
from .tool_call import ToolCallRequest, ToolExecutionResult

__all__ = ["ToolDefinition", "ToolCallRequest", "ToolExecutionResult"]
