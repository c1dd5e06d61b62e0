from openai import AsyncOpenAI
from openai.types.chat import ChatCompletion, ChatCompletionToolParam
from typing import List, Optional, Any, Dict, Sequence, Iterable, cast

from generic_llm_provider.llm_core.exceptions import CompletionError
from generic_llm_provider.llm_core.messages import (
    Message,
    SystemMessage,
    UserMessage,
    AssistantMessage,
    ToolMessage,
)
from generic_llm_provider.llm_core.tools.models import ToolCallRequest
from generic_llm_provider.llm_core.tools.schema import FunctionDeclaration
from generic_llm_provider.llm_core.types import Completion, CompletionParams, TokenUsage


class OpenAICompletionBackend:
    """Completion backend speaking the OpenAI chat completions API."""

    def __init__(self, client: AsyncOpenAI):
        """Initialize the backend.

        Args:
            client: An authenticated AsyncOpenAI client.
        """
        self.client = client

    async def invoke(
        self,
        conversation: Sequence[Message],
        tool_schema: Optional[List[FunctionDeclaration]],
        params: CompletionParams,
    ) -> Completion:
        """Send the conversation to OpenAI and normalize the answer.

        Args:
            conversation: The messages to send.
            tool_schema: Function declarations, or None to disable tool calling.
            params: Model and generation parameters.

        Returns:
            The normalized completion.
        """
        payload = self.build_payload(conversation, tool_schema, params)
        response = await self.client.chat.completions.create(**payload)
        return self.parse_completion(response)

    @classmethod
    def build_payload(
        cls,
        conversation: Sequence[Message],
        tool_schema: Optional[List[FunctionDeclaration]],
        params: CompletionParams,
    ) -> Dict[str, Any]:
        """Build the keyword arguments of ``chat.completions.create``.

        Optional parameters are only included when set, and ``tools`` and
        ``tool_choice`` are left out entirely when there is no tool schema.
        """
        payload: Dict[str, Any] = {
            "model": params.model,
            # The SDK expects a union of TypedDicts; plain dicts are structurally compatible.
            "messages": cast(Iterable[Any], cls.to_openai_messages(conversation)),
        }
        if params.temperature is not None:
            payload["temperature"] = params.temperature
        if params.max_tokens is not None:
            payload["max_tokens"] = params.max_tokens
        if params.json_mode:
            payload["response_format"] = {"type": "json_object"}

        tools = cls.to_openai_tools(tool_schema)
        if tools:
            payload["tools"] = tools
            payload["tool_choice"] = "auto"
        return payload

    @staticmethod
    def to_openai_tools(tool_schema: Optional[List[FunctionDeclaration]]) -> Optional[List[ChatCompletionToolParam]]:
        """Wrap function declarations in OpenAI's tool format."""
        if not tool_schema:
            return None
        return [
            {
                "type": "function",
                "function": {
                    "name": declaration.name,
                    "description": declaration.description,
                    "parameters": declaration.parameters,
                },
            }
            for declaration in tool_schema
        ]

    @staticmethod
    def to_openai_messages(conversation: Sequence[Message]) -> List[Dict[str, Any]]:
        """
        Converts provider-agnostic messages to OpenAI message dictionaries.

        Args:
            conversation: The messages to convert.

        Returns:
            List of OpenAI message dictionaries.
        """
        openai_messages: List[Dict[str, Any]] = []
        for msg in conversation:
            if isinstance(msg, (SystemMessage, UserMessage)):
                openai_messages.append({"role": msg.role, "content": msg.content})
            elif isinstance(msg, AssistantMessage):
                openai_msg: Dict[str, Any] = {"role": "assistant", "content": msg.content}
                if msg.tool_calls:
                    openai_msg["tool_calls"] = [
                        {
                            "id": ref.id,
                            "type": "function",
                            "function": {"name": ref.name, "arguments": ref.arguments},
                        }
                        for ref in msg.tool_calls
                    ]
                openai_messages.append(openai_msg)
            elif isinstance(msg, ToolMessage):
                tool_msg: Dict[str, Any] = {"role": "tool", "content": msg.content}
                if msg.tool_call_id is not None:
                    tool_msg["tool_call_id"] = msg.tool_call_id
                openai_messages.append(tool_msg)
        return openai_messages

    @staticmethod
    def parse_completion(response: ChatCompletion) -> Completion:
        """Extract text, function tool calls and usage from a chat completion.

        Missing usage counts are reported as 0.

        Raises:
            CompletionError: If the response carries no ``choices`` field at all.
        """
        if response.choices is None:
            raise CompletionError("OpenAI response has no choices.")

        usage = response.usage
        tokens = TokenUsage(
            prompt=(usage.prompt_tokens or 0) if usage else 0,
            completion=(usage.completion_tokens or 0) if usage else 0,
            total=(usage.total_tokens or 0) if usage else 0,
        )

        if not response.choices:
            return Completion(usage=tokens)

        message = response.choices[0].message
        requests = []
        for tool_call in message.tool_calls or []:
            # Only function tool calls can be executed
            if tool_call.type == "function":
                requests.append(
                    ToolCallRequest(
                        name=tool_call.function.name,
                        arguments=tool_call.function.arguments,
                        call_id=tool_call.id,
                    )
                )

        return Completion(text=message.content, tool_calls=requests, usage=tokens)
