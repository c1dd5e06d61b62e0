"""Bounded tool-use loop shared by all providers."""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Iterable, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict

from ...types import Completion, TokenUsage, ToolExecutionMode
from ...logger import get_logger
from ...messages import Message
from ..models import ToolCallRequest, ToolDefinition
from .call_executor import ToolCallExecutor, ToolCallOutcome
from .protocol import ToolExecutor

logger = get_logger(__name__)

DEFAULT_MAX_ITERATIONS = 10

Invoke = Callable[[Sequence[Message]], Awaitable[Completion]]


class LoopState(BaseModel):
    """Accumulated state of one request, replaced (never mutated) at every step.

    Attributes:
        conversation: Messages sent with the latest completion request.
        content: Latest non-empty completion text.
        usage: Token usage summed over all completions so far.
        pending_calls: Tool calls requested by the latest completion.
        tool_results: Outputs of every successful tool execution so far.
        iterations: Tool round-trips performed.
        completions: Backend invocations performed.
    """

    model_config = ConfigDict(frozen=True)

    conversation: Tuple[Message, ...]
    content: str = ""
    usage: TokenUsage = TokenUsage()
    pending_calls: Tuple[ToolCallRequest, ...] = ()
    tool_results: Tuple[Any, ...] = ()
    iterations: int = 0
    completions: int = 0

    @classmethod
    def start(cls, conversation: Sequence[Message], completion: Completion) -> LoopState:
        return cls(conversation=tuple(conversation)).with_completion(completion, round_trip=False)

    def with_completion(self, completion: Completion, round_trip: bool = True) -> LoopState:
        return self.model_copy(
            update={
                "content": completion.text or self.content,
                "usage": self.usage + completion.usage,
                "pending_calls": tuple(completion.tool_calls),
                "iterations": self.iterations + 1 if round_trip else self.iterations,
                "completions": self.completions + 1,
            }
        )

    def with_outcomes(self, outcomes: Iterable[ToolCallOutcome]) -> LoopState:
        outcomes = list(outcomes)
        messages = [message for outcome in outcomes for message in outcome.messages]
        return self.model_copy(
            update={
                "conversation": self.conversation + tuple(messages),
                "tool_results": self.tool_results + tuple(outcome.result.output for outcome in outcomes),
            }
        )


class ToolExecutionLoop:
    """Runs requested tools and re-invokes the backend until the model is done.

    The loop stops when a completion requests no tools or when ``max_iterations``
    round-trips have been made. Hitting the cap is a normal exit. In
    ``parameters-only`` mode no tool is ever executed.
    """

    def __init__(
        self,
        *,
        executor: ToolExecutor,
        mode: ToolExecutionMode = ToolExecutionMode.SYNC,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
    ) -> None:
        """Initialize the loop.

        Args:
            executor: Capability running the tools.
            mode: Whether tool calls are executed or only reported.
            max_iterations: Maximum number of round-trips after the first completion.
        """
        if max_iterations < 0:
            raise ValueError("max_iterations must not be negative.")
        self._call_executor = ToolCallExecutor(executor)
        self._mode = ToolExecutionMode(mode)
        self._max_iterations = max_iterations

    @property
    def mode(self) -> ToolExecutionMode:
        return self._mode

    @property
    def max_iterations(self) -> int:
        return self._max_iterations

    async def run(
        self,
        *,
        first_completion: Completion,
        conversation: Sequence[Message],
        tools: Optional[Sequence[ToolDefinition]],
        invoke: Invoke,
    ) -> LoopState:
        """Drive the loop starting from the first completion of a request.

        Args:
            first_completion: The completion returned for ``conversation``.
            conversation: The conversation the first completion answered.
            tools: The request's tools, used to resolve calls. Without tools nothing is executed.
            invoke: Requests the next completion for a conversation.

        Returns:
            The final accumulated state.
        """
        state = LoopState.start(conversation, first_completion)

        if self._mode is ToolExecutionMode.PARAMETERS_ONLY or not state.pending_calls or not tools:
            logger.debug("No tool execution required. Loop finished.")
            return state

        while state.pending_calls and state.iterations < self._max_iterations:
            state = await self.step(state, tools, invoke)

        if state.pending_calls:
            logger.warning(f"Max tool iterations ({self._max_iterations}) reached. Stopping execution.")
        return state

    async def step(
        self, state: LoopState, tools: Optional[Sequence[ToolDefinition]], invoke: Invoke
    ) -> LoopState:
        """Execute the pending batch of tool calls and fetch the next completion."""
        logger.info(
            f"Iteration {state.iterations + 1}/{self._max_iterations}: "
            f"Processing {len(state.pending_calls)} tool call(s)."
        )
        outcomes = await asyncio.gather(*(self._call_executor.execute(call, tools) for call in state.pending_calls))
        state = state.with_outcomes(outcome for outcome in outcomes if outcome is not None)

        completion = await invoke(state.conversation)
        return state.with_completion(completion)
