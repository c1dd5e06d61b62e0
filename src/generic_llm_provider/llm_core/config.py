"""Library settings, read from the environment and an optional ``.env`` file."""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .types import ToolExecutionMode


class ProviderSettings(BaseSettings):
    """
    Defaults applied by providers when the constructor does not override them.

    Every field can be set through an environment variable prefixed with
    ``LLM_PROVIDER_``, e.g. ``LLM_PROVIDER_MAX_ITERATIONS=3``.
    """

    default_model: Optional[str] = None
    tool_execution_mode: ToolExecutionMode = ToolExecutionMode.PARAMETERS_ONLY
    max_iterations: int = Field(default=10, ge=0)
    tool_timeout: float = Field(default=180.0, gt=0)

    openai_api_key: Optional[str] = Field(default=None, repr=False)
    openai_base_url: Optional[str] = None

    model_config = SettingsConfigDict(
        env_prefix="LLM_PROVIDER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> ProviderSettings:
    """Return the process-wide settings, loaded once."""
    return ProviderSettings()
