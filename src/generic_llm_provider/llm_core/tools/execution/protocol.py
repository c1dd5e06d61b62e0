"""Protocol for the capability that actually runs tools."""

from __future__ import annotations

from typing import Any, Dict, Protocol

from ..models import ToolExecutionResult


class ToolExecutor(Protocol):
    """
    Runs a tool by name.

    Implementations report failures through ``ToolExecutionResult`` instead of
    raising, and return the raw tool output unless ``raw_output`` is False.
    """

    async def run(self, name: str, arguments: Dict[str, Any], raw_output: bool = True) -> ToolExecutionResult:
        """Execute ``name`` with already merged ``arguments``."""
        ...
