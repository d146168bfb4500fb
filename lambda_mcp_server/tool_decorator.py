import asyncio
import inspect
import logging
from contextvars import ContextVar
from typing import Annotated, Any, Callable, Optional

from mcp.server.fastmcp import FastMCP
from mcp.types import CallToolResult, ToolAnnotations
from pydantic import BaseModel, Field

from .handler_registry import execute, register_handler
from .handler_wrappers import ToolResult, _auto_response, _error_handler

logger = logging.getLogger(__name__)

# Global registry storing all tools registered via @Tool decorator
# Key: tool name, Value: dict with name, description, params, annotations,
# raw_args, handler (wrapped), original (unwrapped)
_registry: dict[str, dict[str, Any]] = {}

# Arguments of the tool call in progress, exactly as the client sent them
_raw_arguments: ContextVar[dict[str, Any]] = ContextVar("_raw_arguments", default={})


class ToolServer(FastMCP):
    """FastMCP that remembers the unconverted arguments of each tool call.

    FastMCP json-decodes string arguments that look like JSON before
    validation, so a string payload such as "[1, 2]" would reach the handler
    as a list. Tools listing the argument in raw_args get the original value.
    """

    async def call_tool(self, name: str, arguments: dict[str, Any]) -> Any:
        token = _raw_arguments.set(dict(arguments or {}))
        try:
            return await super().call_tool(name, arguments)
        finally:
            _raw_arguments.reset(token)


# ------------------------------------------------------------------------------
# Tool - Decorator class that registers functions as MCP tools
# ------------------------------------------------------------------------------
# Usage:
#   @Tool("getConfig", "Description for AI",
#         params=FunctionNameParams, error_prefix="Error getting configuration")
#   def get_config(client, params: FunctionNameParams) -> FunctionConfigurationSummary:
#       ...
#
# Parameters:
#   - name: Unique tool identifier exposed to MCP clients
#   - description: Shown to AI to understand when/how to use the tool
#   - params: pydantic model describing the arguments; field aliases are the
#             argument names on the wire
#   - error_prefix: Text placed before the error message on failure
#   - read_only / destructive: MCP tool hints for the host
#   - raw_args: wire names of arguments passed on exactly as sent, without
#               FastMCP's JSON-string decoding (needs a ToolServer)
#
# What happens at import time:
#   1. Wraps function with _auto_response (normalizes return values)
#   2. Wraps with _error_handler (catches exceptions, returns error ToolResult)
#   3. Wraps with _validate_params (raw dict -> params model)
#   4. Registers handler for dispatch
#   5. Stores in _registry for later MCP registration
# ------------------------------------------------------------------------------
class Tool:
    def __init__(
        self,
        name: str,
        description: str,
        handler: Optional[Callable[..., Any]] = None,
        *,
        params: type[BaseModel],
        error_prefix: str,
        read_only: bool = False,
        destructive: bool = False,
        raw_args: tuple[str, ...] = (),
    ):
        self.name = name
        self.description = description
        self.params = params
        self.error_prefix = error_prefix
        self.read_only = read_only
        self.destructive = destructive
        self.raw_args = raw_args

        # Support both @Tool(...) decorator and Tool(..., handler=fn) direct call
        if handler is not None:
            self._register(handler)

    # Called when used as @Tool(...) decorator
    def __call__(self, func: Callable[..., Any]) -> Callable[..., Any]:
        self._register(func)
        return func  # Return original so it can be called directly for testing

    def _register(self, func: Callable[..., Any]) -> None:
        if self.name in _registry:
            raise ValueError(f"Tool already registered: {self.name}")

        # Execution order: _validate_params -> _error_handler -> _auto_response -> func
        wrapped = func
        wrapped = _auto_response(wrapped)
        wrapped = _error_handler(self.error_prefix)(wrapped)
        # Outermost: a validation failure never reaches the handler
        wrapped = _validate_params(self.params)(wrapped)

        register_handler(self.name, wrapped)

        _registry[self.name] = {
            "name": self.name,
            "description": self.description,
            "params": self.params,
            "annotations": ToolAnnotations(
                readOnlyHint=self.read_only,
                destructiveHint=self.destructive,
            ),
            "raw_args": self.raw_args,
            "handler": wrapped,
            "original": func,
        }


# ------------------------------------------------------------------------------
# _validate_params - Turn the raw argument dict into the tool's params model
# ------------------------------------------------------------------------------
# Raises pydantic.ValidationError on bad input. The dispatcher reports it as a
# generic error result; the handler is never called.
# ------------------------------------------------------------------------------
def _validate_params(
    model: type[BaseModel],
) -> Callable[[Callable[..., ToolResult]], Callable[..., ToolResult]]:
    def decorator(func: Callable[..., ToolResult]) -> Callable[..., ToolResult]:
        def wrapper(client: Any, arguments: dict[str, Any]) -> ToolResult:
            params = model.model_validate(arguments)
            return func(client, params)

        wrapper.__name__ = getattr(func, "__name__", "handler")
        wrapper.__doc__ = func.__doc__
        return wrapper

    return decorator


def registered_tools() -> list[str]:
    """Names of all @Tool-registered tools, in registration order."""
    return list(_registry)


def get_tool(name: str) -> dict[str, Any]:
    if name not in _registry:
        raise KeyError(f"Unknown tool: {name}")
    return _registry[name]


# ------------------------------------------------------------------------------
# register_tools - Create MCP tools from registry
# ------------------------------------------------------------------------------
# Called once at server startup. Iterates through all registered tools and
# creates async MCP wrappers that run the handler in a worker thread with the
# shared Lambda client.
# ------------------------------------------------------------------------------
def register_tools(mcp: Any, client: Any) -> None:
    for name, meta in _registry.items():
        _make_mcp_tool(mcp, client, name, meta)
    logger.debug("Registered %d MCP tools", len(_registry))


# ------------------------------------------------------------------------------
# _make_mcp_tool - Create single async MCP tool wrapper
# ------------------------------------------------------------------------------
# Creates an async function that:
#   1. Receives kwargs from MCP client (already validated by FastMCP)
#   2. Puts back the client's original values for the tool's raw_args
#   3. Runs the handler off the event loop (boto3 calls block)
#   4. Returns the ToolResult as a CallToolResult, isError set on failure
#
# The wrapper gets a signature built from the params model so MCP can
# generate the JSON schema with the wire argument names.
# ------------------------------------------------------------------------------
def _make_mcp_tool(
    mcp: Any,
    client: Any,
    name: str,
    meta: dict[str, Any],
) -> None:
    sig = _signature_from_params(meta["params"])
    tool_name = name  # Capture in closure for async wrapper
    raw_args = meta["raw_args"]

    async def wrapper(**kwargs: Any) -> CallToolResult:
        if raw_args:
            sent = _raw_arguments.get()
            kwargs.update({arg: sent[arg] for arg in raw_args if arg in sent})
        result: ToolResult = await asyncio.to_thread(execute, tool_name, client, kwargs)
        return result.to_call_tool_result()

    # Copy metadata for MCP introspection
    wrapper.__name__ = name
    wrapper.__signature__ = sig  # type: ignore[attr-defined]
    wrapper.__annotations__ = {
        p.name: p.annotation for p in sig.parameters.values()
    } | {"return": CallToolResult}

    mcp.tool(description=meta["description"], annotations=meta["annotations"])(wrapper)


def _signature_from_params(model: type[BaseModel]) -> inspect.Signature:
    """Build a keyword-only signature whose parameter names are the field aliases."""
    parameters = []
    for field_name, field in model.model_fields.items():
        annotation: Any = field.annotation
        if field.description:
            annotation = Annotated[annotation, Field(description=field.description)]
        default = inspect.Parameter.empty if field.is_required() else field.get_default()
        parameters.append(
            inspect.Parameter(
                field.alias or field_name,
                inspect.Parameter.KEYWORD_ONLY,
                default=default,
                annotation=annotation,
            )
        )
    return inspect.Signature(parameters, return_annotation=CallToolResult)
