"""Protocol for the language-model backend behind a provider."""

from __future__ import annotations

from typing import List, Optional, Protocol, Sequence

from ..messages import Message
from ..tools.schema import FunctionDeclaration
from ..types import Completion, CompletionParams


class CompletionBackend(Protocol):
    """
    Submits a conversation and returns one completion.

    A ``tool_schema`` of None means tool calling is disabled for the request;
    implementations must then leave every tool-related field out of the call.
    Errors raised here are fatal to the request.
    """

    async def invoke(
        self,
        conversation: Sequence[Message],
        tool_schema: Optional[List[FunctionDeclaration]],
        params: CompletionParams,
    ) -> Completion:
        """Request a completion for ``conversation``."""
        ...
