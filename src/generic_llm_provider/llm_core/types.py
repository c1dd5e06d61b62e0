"""Completion-level types exchanged between providers, backends and the tool loop."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .tools.models import ToolCallRequest


class ToolExecutionMode(str, Enum):
    """Whether requested tool calls are executed or only reported back."""

    SYNC = "sync"
    PARAMETERS_ONLY = "parameters-only"


class TokenUsage(BaseModel):
    """Token counts of one or more completions. Adding two usages sums them."""

    model_config = ConfigDict(frozen=True)

    prompt: int = 0
    completion: int = 0
    total: int = 0

    def __add__(self, other: TokenUsage) -> TokenUsage:
        return TokenUsage(
            prompt=self.prompt + other.prompt,
            completion=self.completion + other.completion,
            total=self.total + other.total,
        )


class CompletionParams(BaseModel):
    """Per-request generation parameters passed to the completion backend."""

    model_config = ConfigDict(frozen=True)

    model: str
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    json_mode: bool = False


class Completion(BaseModel):
    """One backend answer: optional text, requested tool calls and token usage."""

    model_config = ConfigDict(frozen=True)

    text: Optional[str] = None
    tool_calls: List[ToolCallRequest] = Field(default_factory=list)
    usage: TokenUsage = Field(default_factory=TokenUsage)
