"""Translation of caller tool definitions into function declarations."""

from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from ..models import ToolDefinition

EMPTY_PARAMETERS: Dict[str, Any] = {"type": "object", "properties": {}}


class FunctionDeclaration(BaseModel):
    """Backend-neutral function-calling declaration for one tool."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    parameters: Dict[str, Any] = Field(default_factory=lambda: dict(EMPTY_PARAMETERS))


def to_function_declarations(tools: Optional[Sequence[ToolDefinition]]) -> Optional[List[FunctionDeclaration]]:
    """Map tool definitions to function declarations.

    Args:
        tools: The caller's tools, possibly empty or None.

    Returns:
        One declaration per tool, or None when there are no tools. Callers must
        treat None as "no tool calling at all", which is not the same as an
        empty tool list at the backend boundary.
    """
    if not tools:
        return None

    return [
        FunctionDeclaration(
            name=tool.name,
            description=tool.description,
            parameters=tool.parameters or dict(EMPTY_PARAMETERS),
        )
        for tool in tools
    ]
