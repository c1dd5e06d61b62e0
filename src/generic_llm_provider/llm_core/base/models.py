"""Request and response models of the provider contract."""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..messages import Message
from ..tools.models import ToolDefinition
from ..types import TokenUsage


class ProviderRequest(BaseModel):
    """
    Everything a provider needs to answer one request.

    Attributes:
        system_prompt: Optional system instruction, sent first.
        context: Optional context, sent as a user message after the system prompt.
        messages: Prior conversation, in order.
        model: Model identifier; the provider default is used when omitted.
        temperature: Optional sampling temperature.
        max_tokens: Optional cap on output tokens.
        json_mode: Ask the backend for a JSON object response.
        tools: Tools the model may call.
        api_key: Credential for the backend. Required.
    """

    model_config = ConfigDict(frozen=True)

    system_prompt: Optional[str] = None
    context: Optional[str] = None
    messages: List[Message] = Field(default_factory=list)
    model: Optional[str] = None
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    json_mode: bool = False
    tools: Optional[List[ToolDefinition]] = None
    api_key: Optional[str] = Field(default=None, repr=False)


class ToolCallRecord(BaseModel):
    """A tool call as reported to the caller."""

    name: str
    arguments: Any


class ProviderResponse(BaseModel):
    """
    Final result of a request.

    Attributes:
        content: Latest non-empty text the model produced.
        model: The model identifier the request asked for; None when the request
            relied on the provider default.
        tokens: Token usage summed over every completion of the request.
        tool_calls: Tool calls requested by the first completion, if any.
        tool_results: Outputs of every successfully executed tool call, if any.
    """

    content: str
    model: Optional[str] = None
    tokens: TokenUsage = Field(default_factory=TokenUsage)
    tool_calls: Optional[List[ToolCallRecord]] = None
    tool_results: Optional[List[Any]] = None
