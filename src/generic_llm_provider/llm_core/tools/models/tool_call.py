"""Data models for tool calls and their execution."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class ToolCallRequest:
    """A tool call requested by the model inside one completion."""

    name: str
    arguments: Any
    call_id: str = ""


@dataclass(frozen=True)
class ToolExecutionResult:
    """Outcome of running a tool: ``output`` on success, ``error`` on failure."""

    success: bool
    output: Any = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, output: Any) -> ToolExecutionResult:
        return cls(success=True, output=output)

    @classmethod
    def failed(cls, error: str) -> ToolExecutionResult:
        return cls(success=False, error=error)
