"""Provider-agnostic message models for a conversation.

A conversation is an ordered list of these messages. The ``role`` field is the
discriminator, so plain dictionaries such as ``{"role": "user", "content": "hi"}``
validate into the matching model.
"""

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class ToolCallRef(BaseModel):
    """A tool call as recorded on an assistant message.

    Attributes:
        id: Opaque call identifier used to correlate the tool result.
        name: Name of the requested tool.
        arguments: Raw argument payload exactly as the model produced it.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    arguments: str = ""


class SystemMessage(BaseModel):
    """Message authored by the system to steer behavior."""

    model_config = ConfigDict(frozen=True)

    role: Literal["system"] = "system"
    content: str


class UserMessage(BaseModel):
    """Message authored by an end user."""

    model_config = ConfigDict(frozen=True)

    role: Literal["user"] = "user"
    content: str


class AssistantMessage(BaseModel):
    """Message authored by the assistant, optionally requesting tool calls."""

    model_config = ConfigDict(frozen=True)

    role: Literal["assistant"] = "assistant"
    content: Optional[str] = None
    tool_calls: Optional[List[ToolCallRef]] = None


class ToolMessage(BaseModel):
    """Result of a tool invocation, correlated with its call by ``tool_call_id``.

    Messages produced by the tool loop always carry the id. Prior messages
    passed in by a caller may omit it; backends then send the message without one.
    """

    model_config = ConfigDict(frozen=True)

    role: Literal["tool"] = "tool"
    tool_call_id: Optional[str] = None
    content: str


Message = Annotated[
    Union[SystemMessage, UserMessage, AssistantMessage, ToolMessage],
    Field(discriminator="role"),
]
