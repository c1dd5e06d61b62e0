import os
from typing import Any, Dict, List, Optional, Sequence, Tuple
from unittest.mock import AsyncMock, MagicMock

import pytest
from dotenv import load_dotenv, find_dotenv
from openai import AsyncOpenAI

from generic_llm_provider.llm_core import (
    Completion,
    CompletionParams,
    FunctionDeclaration,
    Message,
    ProviderSettings,
    TokenUsage,
    ToolCallRequest,
    ToolDefinition,
    ToolExecutionResult,
)

env_file = find_dotenv(usecwd=True)
if env_file:
    load_dotenv(env_file)


def tool_call(name: str, arguments: str = "{}", call_id: Optional[str] = None) -> ToolCallRequest:
    return ToolCallRequest(name=name, arguments=arguments, call_id=call_id or f"call_{name}")


def completion(
    text: Optional[str] = None,
    calls: Sequence[ToolCallRequest] = (),
    usage: Tuple[int, int, int] = (10, 5, 15),
) -> Completion:
    prompt, completion_tokens, total = usage
    return Completion(
        text=text,
        tool_calls=list(calls),
        usage=TokenUsage(prompt=prompt, completion=completion_tokens, total=total),
    )


class StubBackend:
    """Returns scripted completions and records every invocation.

    Once the script is exhausted the last completion is repeated.
    """

    def __init__(self, *completions: Completion) -> None:
        self.completions = list(completions)
        self.calls: List[Tuple[List[Message], Optional[List[FunctionDeclaration]], CompletionParams]] = []

    async def invoke(
        self,
        conversation: Sequence[Message],
        tool_schema: Optional[List[FunctionDeclaration]],
        params: CompletionParams,
    ) -> Completion:
        self.calls.append((list(conversation), tool_schema, params))
        index = min(len(self.calls), len(self.completions)) - 1
        return self.completions[index]


class FailingBackend:
    def __init__(self, error: Exception) -> None:
        self.error = error
        self.invocations = 0

    async def invoke(self, conversation: Any, tool_schema: Any, params: Any) -> Completion:
        self.invocations += 1
        raise self.error


class RecordingExecutor:
    """Tool executor returning ``{"tool": name, "args": arguments}`` unless told to fail."""

    def __init__(self, failing: Sequence[str] = ()) -> None:
        self.failing = set(failing)
        self.runs: List[Tuple[str, Dict[str, Any], bool]] = []

    async def run(self, name: str, arguments: Dict[str, Any], raw_output: bool = True) -> ToolExecutionResult:
        self.runs.append((name, arguments, raw_output))
        if name in self.failing:
            return ToolExecutionResult.failed(f"{name} failed")
        return ToolExecutionResult.ok({"tool": name, "args": arguments})


@pytest.fixture
def settings() -> ProviderSettings:
    # Explicit values so a developer's environment or .env does not leak into tests
    return ProviderSettings(
        default_model=None,
        tool_execution_mode="parameters-only",
        max_iterations=10,
        tool_timeout=5.0,
        openai_api_key=None,
        openai_base_url=None,
    )


@pytest.fixture
def executor() -> RecordingExecutor:
    return RecordingExecutor()


@pytest.fixture
def weather_tools() -> List[ToolDefinition]:
    return [
        ToolDefinition(
            id="get_weather",
            description="Current weather for a city.",
            parameters={
                "type": "object",
                "properties": {"city": {"type": "string"}, "unit": {"type": "string"}},
                "required": ["city"],
            },
            params={"unit": "celsius"},
        ),
        ToolDefinition(name="get_time", description="Current time for a city."),
    ]


@pytest.fixture
def openai_client() -> AsyncOpenAI:
    api_key = os.getenv("OPENAI_API_KEY") or "dummy_key"
    return AsyncOpenAI(api_key=api_key, base_url=os.getenv("OPENAI_BASE_URL"))


@pytest.fixture
def mock_openai_client() -> Any:
    client = MagicMock(spec=AsyncOpenAI)
    client.chat = MagicMock()
    client.chat.completions = MagicMock()
    client.chat.completions.create = AsyncMock()
    return client
