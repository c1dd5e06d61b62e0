from typing import Any, List, Optional

import pytest

from conftest import FailingBackend, RecordingExecutor, StubBackend, completion, tool_call
from generic_llm_provider.llm_core import (
    CompletionBackend,
    GenericProvider,
    MissingCredentialError,
    ProviderRequest,
    ProviderSettings,
    SystemMessage,
    TokenUsage,
    ToolCallRecord,
    ToolDefinition,
    ToolExecutionMode,
    ToolExecutor,
    UserMessage,
)


class StubProvider(GenericProvider):
    id = "stub"
    name = "Stub"
    models = ["stub-large", "stub-small"]
    default_model = "stub-large"

    def __init__(self, backend: Any, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.backend = backend
        self.credentials: List[str] = []

    def create_backend(self, api_key: str) -> CompletionBackend:
        self.credentials.append(api_key)
        return self.backend


def make_provider(
    backend: Any,
    settings: ProviderSettings,
    executor: Optional[ToolExecutor] = None,
    mode: ToolExecutionMode = ToolExecutionMode.SYNC,
    max_iterations: Optional[int] = None,
) -> StubProvider:
    return StubProvider(
        backend, tool_executor=executor, execution_mode=mode, max_iterations=max_iterations, settings=settings
    )


def request(tools: Optional[List[ToolDefinition]] = None, **kwargs: Any) -> ProviderRequest:
    return ProviderRequest(
        system_prompt="You are helpful.",
        messages=[UserMessage(content="Weather in Paris?")],
        tools=tools,
        api_key="sk-test",
        **kwargs,
    )


@pytest.mark.asyncio
async def test_missing_credential_fails_before_any_backend_call(settings: ProviderSettings) -> None:
    backend = StubBackend(completion("never"))
    provider = make_provider(backend, settings)

    with pytest.raises(MissingCredentialError):
        await provider.execute_request(ProviderRequest(context="hi"))

    assert backend.calls == []
    assert provider.credentials == []


@pytest.mark.asyncio
@pytest.mark.parametrize("tools", [None, []])
async def test_without_tools_the_backend_is_invoked_once(
    settings: ProviderSettings, executor: RecordingExecutor, tools: Optional[List[ToolDefinition]]
) -> None:
    backend = StubBackend(completion("Sunny", [tool_call("get_weather")]))
    provider = make_provider(backend, settings, executor)

    response = await provider.execute_request(request(tools))

    assert len(backend.calls) == 1
    conversation, tool_schema, params = backend.calls[0]
    assert tool_schema is None
    assert conversation == [SystemMessage(content="You are helpful."), UserMessage(content="Weather in Paris?")]
    assert params.model == "stub-large"
    assert executor.runs == []
    assert response.content == "Sunny"
    assert response.tool_results is None


@pytest.mark.asyncio
async def test_parameters_only_reports_calls_without_running_them(
    settings: ProviderSettings, executor: RecordingExecutor, weather_tools: List[ToolDefinition]
) -> None:
    calls = [tool_call("get_weather", '{"city": "Paris"}'), tool_call("get_time", '{"city": "Paris"}')]
    backend = StubBackend(completion(None, calls))
    provider = make_provider(backend, settings, executor, mode=ToolExecutionMode.PARAMETERS_ONLY)

    response = await provider.execute_request(request(weather_tools))

    assert len(backend.calls) == 1
    assert executor.runs == []
    assert response.content == ""
    assert response.tool_calls == [
        ToolCallRecord(name="get_weather", arguments={"city": "Paris"}),
        ToolCallRecord(name="get_time", arguments={"city": "Paris"}),
    ]
    assert response.tool_results is None


@pytest.mark.asyncio
async def test_sync_mode_runs_tools_and_aggregates(
    settings: ProviderSettings, executor: RecordingExecutor, weather_tools: List[ToolDefinition]
) -> None:
    backend = StubBackend(
        completion(None, [tool_call("get_weather", '{"city": "Paris"}')]),
        completion(None, [tool_call("get_time", '{"city": "Paris"}')]),
        completion("Sunny, 21C, it is noon."),
    )
    provider = make_provider(backend, settings, executor)

    response = await provider.execute_request(request(weather_tools, model="stub-small"))

    assert len(backend.calls) == 3
    assert response.content == "Sunny, 21C, it is noon."
    assert response.model == "stub-small"
    assert response.tokens == TokenUsage(prompt=30, completion=15, total=45)
    # only what the first completion asked for
    assert response.tool_calls == [ToolCallRecord(name="get_weather", arguments={"city": "Paris"})]
    # defaults merged under model arguments, results from every iteration
    assert response.tool_results == [
        {"tool": "get_weather", "args": {"unit": "celsius", "city": "Paris"}},
        {"tool": "get_time", "args": {"city": "Paris"}},
    ]


@pytest.mark.asyncio
async def test_sync_mode_respects_the_iteration_cap(
    settings: ProviderSettings, executor: RecordingExecutor, weather_tools: List[ToolDefinition]
) -> None:
    backend = StubBackend(completion("more", [tool_call("get_time")]))
    provider = make_provider(backend, settings, executor, max_iterations=2)

    response = await provider.execute_request(request(weather_tools))

    assert len(backend.calls) == 3
    assert response.content == "more"
    assert response.tokens.total == 45
    assert response.tool_results is not None and len(response.tool_results) == 2


@pytest.mark.asyncio
async def test_unparseable_first_call_is_reported_raw(
    settings: ProviderSettings, executor: RecordingExecutor, weather_tools: List[ToolDefinition]
) -> None:
    backend = StubBackend(completion(None, [tool_call("get_weather", "{city")]), completion("sorry"))
    provider = make_provider(backend, settings, executor)

    response = await provider.execute_request(request(weather_tools))

    assert response.tool_calls == [ToolCallRecord(name="get_weather", arguments="{city")]
    assert response.tool_results is None
    assert response.content == "sorry"


@pytest.mark.asyncio
async def test_response_echoes_the_requested_model(settings: ProviderSettings) -> None:
    backend = StubBackend(completion("hi"))
    provider = make_provider(backend, settings)

    response = await provider.execute_request(request())

    # the backend is called with the provider default, the response does not invent one
    assert backend.calls[0][2].model == "stub-large"
    assert response.model is None


@pytest.mark.asyncio
async def test_parameters_are_forwarded(settings: ProviderSettings, weather_tools: List[ToolDefinition]) -> None:
    backend = StubBackend(completion("{}"))
    provider = make_provider(backend, settings)

    await provider.execute_request(request(weather_tools, temperature=0.2, max_tokens=64, json_mode=True))

    _, tool_schema, params = backend.calls[0]
    assert tool_schema is not None and [d.name for d in tool_schema] == ["get_weather", "get_time"]
    assert params.temperature == 0.2
    assert params.max_tokens == 64
    assert params.json_mode is True


@pytest.mark.asyncio
async def test_backend_errors_propagate(settings: ProviderSettings) -> None:
    backend = FailingBackend(TimeoutError("backend timed out"))
    provider = make_provider(backend, settings)

    with pytest.raises(TimeoutError):
        await provider.execute_request(request())
    assert backend.invocations == 1


def test_defaults_come_from_settings(settings: ProviderSettings) -> None:
    configured = settings.model_copy(update={"tool_execution_mode": ToolExecutionMode.SYNC, "max_iterations": 4})

    provider = StubProvider(StubBackend(), settings=configured)

    assert provider.execution_mode is ToolExecutionMode.SYNC
    assert provider.max_iterations == 4


def test_settings_default_model_overrides_provider_default(settings: ProviderSettings) -> None:
    provider = StubProvider(StubBackend(), settings=settings.model_copy(update={"default_model": "stub-small"}))

    assert provider.resolve_model(ProviderRequest()) == "stub-small"
    assert provider.resolve_model(ProviderRequest(model="custom")) == "custom"


def test_settings_read_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LLM_PROVIDER_TOOL_EXECUTION_MODE", "sync")
    monkeypatch.setenv("LLM_PROVIDER_MAX_ITERATIONS", "3")

    loaded = ProviderSettings(_env_file=None)

    assert loaded.tool_execution_mode is ToolExecutionMode.SYNC
    assert loaded.max_iterations == 3
