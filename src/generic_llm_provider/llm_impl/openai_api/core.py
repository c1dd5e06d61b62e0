from openai import AsyncOpenAI
from typing import Callable, Optional

from generic_llm_provider.llm_core import GenericProvider
from generic_llm_provider.llm_core.base.models import ProviderRequest, ProviderResponse
from generic_llm_provider.llm_core.config import ProviderSettings, get_settings
from generic_llm_provider.llm_core.logger import get_logger
from generic_llm_provider.llm_core.tools.execution import ToolExecutor
from generic_llm_provider.llm_core.types import ToolExecutionMode
from .adapter import OpenAICompletionBackend

logger = get_logger(__name__)


class OpenAIProvider(GenericProvider):
    """
    Provider for OpenAI's chat models.
    A new client is created per request from the request's credential.
    """

    id = "openai"
    name = "OpenAI"
    description = "OpenAI's GPT models"
    version = "1.0.0"
    models = ["gpt-4o", "o1", "o3-mini"]
    default_model = "gpt-4o"

    def __init__(
        self,
        tool_executor: Optional[ToolExecutor] = None,
        execution_mode: Optional[ToolExecutionMode] = None,
        max_iterations: Optional[int] = None,
        settings: Optional[ProviderSettings] = None,
        base_url: Optional[str] = None,
        client_factory: Optional[Callable[[str], AsyncOpenAI]] = None,
        fallback_api_key: Optional[str] = None,
    ):
        """
        Initializes the OpenAI provider.

        Args:
            tool_executor: Capability running requested tools.
            execution_mode: ``sync`` or ``parameters-only``.
            max_iterations: Maximum tool round-trips after the first completion.
            settings: Settings to read defaults from.
            base_url: Optional API base URL, e.g. for OpenAI-compatible servers.
            client_factory: Builds the client for an API key. Defaults to ``AsyncOpenAI``.
            fallback_api_key: Credential used for requests that carry none.
        """
        super().__init__(
            tool_executor=tool_executor,
            execution_mode=execution_mode,
            max_iterations=max_iterations,
            settings=settings,
        )
        self.base_url = base_url or self.settings.openai_base_url
        self._client_factory = client_factory or self._default_client
        self._fallback_api_key = fallback_api_key

    @classmethod
    def from_settings(
        cls, settings: Optional[ProviderSettings] = None, tool_executor: Optional[ToolExecutor] = None
    ) -> "OpenAIProvider":
        """Build a provider that falls back to ``LLM_PROVIDER_OPENAI_API_KEY``.

        Args:
            settings: Settings to use. Defaults to ``get_settings()``.
            tool_executor: Capability running requested tools.
        """
        settings = settings or get_settings()
        return cls(tool_executor=tool_executor, settings=settings, fallback_api_key=settings.openai_api_key)

    def create_backend(self, api_key: str) -> OpenAICompletionBackend:
        return OpenAICompletionBackend(self._client_factory(api_key))

    async def execute_request(self, request: ProviderRequest) -> ProviderResponse:
        if not request.api_key and self._fallback_api_key:
            logger.debug("Request has no API key. Using the configured OpenAI key.")
            request = request.model_copy(update={"api_key": self._fallback_api_key})
        return await super().execute_request(request)

    def _default_client(self, api_key: str) -> AsyncOpenAI:
        return AsyncOpenAI(api_key=api_key, base_url=self.base_url)
