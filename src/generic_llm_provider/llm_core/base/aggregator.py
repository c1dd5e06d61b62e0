"""Assembly of the outward response from the loop's accumulated state."""

from typing import Optional

from ..exceptions import ToolArgumentError
from ..tools.execution import LoopState, parse_arguments
from ..tools.models import ToolCallRequest
from ..types import Completion
from .models import ProviderResponse, ToolCallRecord


def aggregate_response(model: Optional[str], first_completion: Completion, state: LoopState) -> ProviderResponse:
    """Build the response of a request.

    ``tool_calls`` lists what the first completion asked for, however many
    iterations followed; ``tool_results`` collects every successful execution
    across all iterations.

    Args:
        model: The model identifier the request asked for.
        first_completion: The first completion of the request.
        state: The final loop state.

    Returns:
        The response; empty tool lists are reported as None.
    """
    tool_calls = [_record(call) for call in first_completion.tool_calls]
    return ProviderResponse(
        content=state.content,
        model=model,
        tokens=state.usage,
        tool_calls=tool_calls or None,
        tool_results=list(state.tool_results) or None,
    )


def _record(call: ToolCallRequest) -> ToolCallRecord:
    # undecodable payloads are reported as received
    try:
        arguments = parse_arguments(call.arguments)
    except ToolArgumentError:
        arguments = call.arguments
    return ToolCallRecord(name=call.name, arguments=arguments)
