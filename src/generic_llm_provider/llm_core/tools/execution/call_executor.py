"""Execution of a single tool call requested by the model."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Tuple

from ...exceptions import ToolArgumentError, ToolExecutionError, ToolNotFoundError
from ...logger import get_logger
from ...messages import AssistantMessage, ToolCallRef, ToolMessage
from ..models import ToolCallRequest, ToolDefinition, ToolExecutionResult
from .protocol import ToolExecutor

logger = get_logger(__name__)


@dataclass(frozen=True)
class ToolCallOutcome:
    """A successfully executed call and the two messages recording it."""

    call: ToolCallRequest
    result: ToolExecutionResult
    messages: Tuple[AssistantMessage, ToolMessage]


def parse_arguments(raw_args: Any) -> Dict[str, Any]:
    """Decode a raw argument payload into a dictionary.

    An absent payload (None or JSON ``null``) means "no arguments". An empty
    string is not valid JSON and is rejected like any other malformed payload.

    Raises:
        ToolArgumentError: If the payload is not a JSON object.
    """
    if raw_args is None:
        return {}

    if isinstance(raw_args, dict):
        return raw_args

    if not isinstance(raw_args, str):
        raise ToolArgumentError(f"Unsupported argument payload of type {type(raw_args).__name__}.")

    try:
        parsed = json.loads(raw_args)
    except json.JSONDecodeError as exc:
        raise ToolArgumentError(f"Failed to decode function arguments: {exc}") from exc

    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise ToolArgumentError("Function arguments must decode to a JSON object.")
    return parsed


def merge_arguments(defaults: Dict[str, Any], arguments: Dict[str, Any]) -> Dict[str, Any]:
    """Overlay model-supplied arguments on a tool's default parameters."""
    return {**defaults, **arguments}


class ToolCallExecutor:
    """Resolves, executes and records one tool call.

    Every failure tied to the call (undecodable arguments, unknown tool, failed
    execution or unserializable output) drops that call: ``execute`` returns None and nothing is appended
    to the conversation.
    """

    def __init__(self, executor: ToolExecutor) -> None:
        self._executor = executor

    async def execute(
        self, call: ToolCallRequest, tools: Optional[Sequence[ToolDefinition]]
    ) -> Optional[ToolCallOutcome]:
        """Execute ``call`` against the request's tools.

        Args:
            call: The tool call requested by the model.
            tools: The tools of the current request.

        Returns:
            The outcome on success, None when the call was dropped.
        """
        try:
            return await self._execute(call, tools)
        except (ToolArgumentError, ToolNotFoundError, ToolExecutionError) as exc:
            logger.warning(f"Dropping tool call '{call.name}' (ID: {call.call_id}): {exc}")
            return None

    async def _execute(self, call: ToolCallRequest, tools: Optional[Sequence[ToolDefinition]]) -> ToolCallOutcome:
        logger.debug(f"Handling tool call: {call.name} (ID: {call.call_id})")
        arguments = parse_arguments(call.arguments)

        tool = self._find_tool(call.name, tools)
        merged = merge_arguments(tool.default_params, arguments)

        try:
            result = await self._executor.run(call.name, merged, raw_output=True)
        except Exception as exc:
            raise ToolExecutionError(f"Tool executor raised {type(exc).__name__}: {exc}") from exc
        if not result.success:
            raise ToolExecutionError(result.error or "Tool execution failed.")

        try:
            messages = self._record(call, result)
        except (TypeError, ValueError) as exc:
            raise ToolExecutionError(f"Output of tool '{call.name}' is not serializable: {exc}") from exc

        return ToolCallOutcome(call=call, result=result, messages=messages)

    @staticmethod
    def _find_tool(name: str, tools: Optional[Sequence[ToolDefinition]]) -> ToolDefinition:
        for tool in tools or ():
            if tool.name == name:
                return tool
        raise ToolNotFoundError(f"Tool '{name}' is not part of the request.")

    @staticmethod
    def _record(call: ToolCallRequest, result: ToolExecutionResult) -> Tuple[AssistantMessage, ToolMessage]:
        raw_args = call.arguments if isinstance(call.arguments, str) else json.dumps(call.arguments)
        assistant = AssistantMessage(
            content=None,
            tool_calls=[ToolCallRef(id=call.call_id, name=call.name, arguments=raw_args)],
        )
        tool_message = ToolMessage(tool_call_id=call.call_id, content=json.dumps(result.output, default=str))
        return assistant, tool_message
