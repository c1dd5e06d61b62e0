"""In-process tool registry implementing the ``ToolExecutor`` protocol."""

import asyncio
import inspect
from typing import Any, Callable, Dict, List, Optional, Type, Union

from pydantic import BaseModel, ConfigDict, ValidationError

from ..exceptions import ToolExecutionError, ToolNotFoundError, ToolRegistrationError, ToolValidationError
from ..logger import get_logger
from .models import ToolDefinition, ToolExecutionResult
from .schema import build_args_model, parameters_schema

logger = get_logger(__name__)


class RegisteredTool(BaseModel):
    """A tool definition together with its implementation.

    Attributes:
        definition: What the model is told about the tool.
        func: Sync or async callable implementing the tool.
        args_model: Optional pydantic model used to validate and coerce arguments.
        summarizer: Optional callable turning raw output into a user-facing summary.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    definition: ToolDefinition
    func: Callable
    args_model: Optional[Type[BaseModel]] = None
    summarizer: Optional[Callable[[Any], Any]] = None


class ToolRegistry:
    """
    A registry mapping tool names to Python implementations.

    It produces the ``ToolDefinition`` objects a request advertises to the model
    and executes tools when a provider asks for them.
    """

    def __init__(self, tool_timeout: float = 180.0) -> None:
        """Initialize an empty registry.

        Args:
            tool_timeout: Timeout in seconds for a single tool execution.
        """
        self.tools: Dict[str, RegisteredTool] = {}
        self.tool_timeout = tool_timeout

    def register(
        self,
        name_or_func: Union[str, Callable],
        description: Optional[str] = None,
        func: Optional[Callable] = None,
        parameters: Optional[Dict[str, Any]] = None,
        default_params: Optional[Dict[str, Any]] = None,
        summarizer: Optional[Callable[[Any], Any]] = None,
    ) -> ToolDefinition:
        """
        Register a tool.

        Either pass a callable, whose name, docstring and signature describe the
        tool, or pass a name together with ``func``. When ``parameters`` is given
        it is used verbatim and arguments are not validated before the call.

        Args:
            name_or_func: The tool's callable, or its name.
            description: Description override. Required with explicit ``parameters``.
            func: Implementation, required when ``name_or_func`` is a name.
            parameters: Explicit JSON schema for the arguments.
            default_params: Default argument values advertised with the definition.
            summarizer: Converts raw output when a caller asks for a summary.

        Returns:
            The resulting tool definition.

        Raises:
            ToolRegistrationError: If arguments are inconsistent or the name is taken.
            ToolValidationError: If the definition cannot be derived from ``func``.
        """
        if callable(name_or_func):
            func = name_or_func
            name = func.__name__
        else:
            name = name_or_func
            if func is None:
                raise ToolRegistrationError("If passing name as string, func is required.")

        if name in self.tools:
            msg = f"Tool '{name}' is already registered."
            logger.error(msg)
            raise ToolRegistrationError(msg)

        args_model: Optional[Type[BaseModel]] = None
        if parameters is None:
            args_model = build_args_model(func, name)
            parameters = parameters_schema(args_model)
            if description is None:
                description = self._docstring_of(func, name)
        elif description is None:
            raise ToolRegistrationError("If passing explicit parameters, description is required.")

        definition = ToolDefinition(
            name=name,
            description=description,
            parameters=parameters,
            default_params=default_params or {},
        )
        self.tools[name] = RegisteredTool(
            definition=definition, func=func, args_model=args_model, summarizer=summarizer
        )
        logger.info(f"Successfully registered tool: '{name}'")
        return definition

    def unregister(self, tool_name: str) -> None:
        """Remove a tool.

        Raises:
            ToolNotFoundError: If the tool is not registered.
        """
        if tool_name not in self.tools:
            raise ToolNotFoundError(f"Tool '{tool_name}' not found in the registry.")
        del self.tools[tool_name]
        logger.info(f"Successfully unregistered tool: '{tool_name}'")

    def tool(self, func: Callable) -> Callable:
        """Decorator registering ``func`` as a tool and returning it unchanged."""
        self.register(func)
        return func

    def definitions(self) -> List[ToolDefinition]:
        """Return the definitions of all registered tools, in registration order."""
        return [registered.definition for registered in self.tools.values()]

    async def run(self, name: str, arguments: Dict[str, Any], raw_output: bool = True) -> ToolExecutionResult:
        """Execute a registered tool.

        Args:
            name: The tool name.
            arguments: Keyword arguments for the tool.
            raw_output: Return the tool's output untouched. When False and the tool
                has a summarizer, the summary is returned instead.

        Returns:
            A successful result with the output, or a failed one describing why.
        """
        registered = self.tools.get(name)
        if registered is None:
            msg = f"Tool '{name}' not found in registry."
            logger.warning(msg)
            return ToolExecutionResult.failed(msg)

        if registered.args_model is not None:
            try:
                validated = registered.args_model(**arguments)
            except ValidationError as exc:
                msg = f"Argument validation failed: {exc}"
                logger.warning(f"Validation error for '{name}': {msg}")
                return ToolExecutionResult.failed(msg)
            arguments = dict(validated)

        try:
            logger.info(f"Executing tool '{name}'...")
            output = await self._execute(registered.func, arguments)
        except Exception as exc:
            logger.warning(f"Tool '{name}' failed: {exc} ({type(exc).__name__})", exc_info=True)
            return ToolExecutionResult.failed(str(exc))

        logger.info(f"Tool '{name}' executed successfully.")
        if not raw_output and registered.summarizer is not None:
            output = registered.summarizer(output)
        return ToolExecutionResult.ok(output)

    async def _execute(self, func: Callable, arguments: Dict[str, Any]) -> Any:
        """Run a sync or async tool under the registry timeout.

        Raises:
            ToolExecutionError: If execution times out.
        """
        try:
            if inspect.iscoroutinefunction(func):
                return await asyncio.wait_for(func(**arguments), timeout=self.tool_timeout)

            return await asyncio.wait_for(asyncio.to_thread(func, **arguments), timeout=self.tool_timeout)
        except asyncio.TimeoutError as exc:
            raise ToolExecutionError(f"Tool execution timed out after {self.tool_timeout} seconds.") from exc

    @staticmethod
    def _docstring_of(func: Callable, tool_name: str) -> str:
        doc = inspect.getdoc(func)
        if not doc:
            msg = f"Tool '{tool_name}' missing docstring. LLMs need a description of what the tool does."
            logger.error(msg)
            raise ToolValidationError(msg)
        return doc
