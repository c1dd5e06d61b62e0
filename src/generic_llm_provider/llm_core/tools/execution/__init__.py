"""Tool execution: the executor protocol, per-call handling and the loop."""

from .protocol import ToolExecutor
from .call_executor import ToolCallExecutor, ToolCallOutcome, parse_arguments, merge_arguments
from .tool_loop import ToolExecutionLoop, LoopState, DEFAULT_MAX_ITERATIONS

__all__ = [
    "ToolExecutor",
    "ToolCallExecutor",
    "ToolCallOutcome",
    "parse_arguments",
    "merge_arguments",
    "ToolExecutionLoop",
    "LoopState",
    "DEFAULT_MAX_ITERATIONS",
]
