"""Core abstraction every provider implementation builds on."""

import time
from abc import ABC, abstractmethod
from typing import ClassVar, List, Optional, Sequence

from ..config import ProviderSettings, get_settings
from ..exceptions import MissingCredentialError
from ..logger import get_logger
from ..messages import Message, build_conversation
from ..tools.execution import ToolExecutionLoop, ToolExecutor
from ..tools.registry import ToolRegistry
from ..tools.schema import to_function_declarations
from ..types import Completion, CompletionParams, ToolExecutionMode
from .aggregator import aggregate_response
from .backend import CompletionBackend
from .models import ProviderRequest, ProviderResponse

logger = get_logger(__name__)


class GenericProvider(ABC):
    """Abstract base class for provider implementations.

    Subclasses describe themselves through the class attributes and create the
    backend for a credential; the request flow, the tool loop and the response
    aggregation are shared.
    """

    id: ClassVar[str]
    name: ClassVar[str]
    description: ClassVar[str] = ""
    version: ClassVar[str] = "1.0.0"
    models: ClassVar[List[str]] = []
    default_model: ClassVar[str]

    def __init__(
        self,
        tool_executor: Optional[ToolExecutor] = None,
        execution_mode: Optional[ToolExecutionMode] = None,
        max_iterations: Optional[int] = None,
        settings: Optional[ProviderSettings] = None,
    ) -> None:
        """
        Initializes the provider.

        Args:
            tool_executor: Capability running requested tools. Defaults to an empty
                ``ToolRegistry``, which fails every call.
            execution_mode: ``sync`` runs requested tools, ``parameters-only`` only
                reports them. Defaults to the settings value.
            max_iterations: Maximum tool round-trips after the first completion.
                Defaults to the settings value.
            settings: Settings to read defaults from. Defaults to ``get_settings()``.
        """
        self.settings = settings or get_settings()
        self.tool_executor: ToolExecutor = tool_executor or ToolRegistry(tool_timeout=self.settings.tool_timeout)
        self._tool_loop = ToolExecutionLoop(
            executor=self.tool_executor,
            mode=execution_mode or self.settings.tool_execution_mode,
            max_iterations=self.settings.max_iterations if max_iterations is None else max_iterations,
        )

    @property
    def execution_mode(self) -> ToolExecutionMode:
        return self._tool_loop.mode

    @property
    def max_iterations(self) -> int:
        return self._tool_loop.max_iterations

    @abstractmethod
    def create_backend(self, api_key: str) -> CompletionBackend:
        """Create the completion backend authenticated with ``api_key``."""
        pass

    def resolve_model(self, request: ProviderRequest) -> str:
        return request.model or self.settings.default_model or self.default_model

    async def execute_request(self, request: ProviderRequest) -> ProviderResponse:
        """
        Answers a request, running the tool loop when the execution mode asks for it.

        Args:
            request: The request to answer.

        Returns:
            The aggregated response.

        Raises:
            MissingCredentialError: If the request has no API key. No backend call
                is made in that case.
            Exception: Any error raised by the completion backend, unchanged.
        """
        if not request.api_key:
            raise MissingCredentialError(f"API key is required for {self.name}")

        backend = self.create_backend(request.api_key)
        model = self.resolve_model(request)
        conversation = build_conversation(request.system_prompt, request.context, request.messages)
        tool_schema = to_function_declarations(request.tools)
        params = CompletionParams(
            model=model,
            temperature=request.temperature,
            max_tokens=request.max_tokens,
            json_mode=request.json_mode,
        )

        async def invoke(messages: Sequence[Message]) -> Completion:
            return await backend.invoke(messages, tool_schema, params)

        start_time = time.perf_counter()
        logger.info(f"[{self.name} Provider] Starting request with model '{model}'")
        try:
            first_completion = await invoke(conversation)
            logger.info(f"[{self.name} Provider] First request took {self._elapsed_ms(start_time)}ms")

            state = await self._tool_loop.run(
                first_completion=first_completion,
                conversation=conversation,
                tools=request.tools,
                invoke=invoke,
            )
        except Exception as e:
            logger.error(f"[{self.name} Provider] Error in request: {e}")
            raise

        logger.info(
            f"[{self.name} Provider] Completed request in {self._elapsed_ms(start_time)}ms "
            f"({state.completions} completion(s), {state.iterations} tool iteration(s))"
        )
        return aggregate_response(request.model, first_completion, state)

    @staticmethod
    def _elapsed_ms(start_time: float) -> int:
        return int((time.perf_counter() - start_time) * 1000)
