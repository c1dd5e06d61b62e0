"""Tool definition model shared by requests and the registry."""

from typing import Any, Dict, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class ToolDefinition(BaseModel):
    """
    Describes a tool the model may call during a request.

    Tool definitions are owned by the caller and never modified by a provider.

    Attributes:
        name: The unique name of the tool. ``id`` is accepted as an alias.
        description: A brief description of what the tool does.
        parameters: JSON schema describing the arguments the tool accepts.
        default_params: Values merged under the model-supplied arguments before
            execution. ``params`` is accepted as an alias.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(validation_alias=AliasChoices("name", "id"))
    description: str = ""
    parameters: Optional[Dict[str, Any]] = None
    default_params: Dict[str, Any] = Field(
        default_factory=dict, validation_alias=AliasChoices("default_params", "params")
    )
