# handler_wrappers.py
"""Shared wrappers and result type for tool handlers.

This module provides the pieces the @Tool decorator stacks around every
handler:
- ToolResult: explicit success/error result returned by each handler
- Error handling wrapper (turns any exception into an error ToolResult)
- Response normalization (turns handler return values into text)

Error Handling Strategy:
    Handlers never report failures by letting exceptions escape. Each tool
    declares an error prefix (e.g. "Error deploying function"); the
    _error_handler wrapper catches everything raised while building or
    sending the Lambda request and returns
    ToolResult("<prefix>: <message>", is_error=True). The dispatcher turns
    that into an MCP result with isError=True, so the host can keep issuing
    calls after a failure.
"""

import json
import logging
from dataclasses import dataclass
from functools import wraps
from typing import Any, Callable, Optional

from botocore.exceptions import ClientError
from mcp.types import CallToolResult, TextContent
from pydantic import BaseModel

logger = logging.getLogger(__name__)

UNKNOWN_ERROR = "Unknown error"


# ------------------------------------------------------------------------------
# ToolResult - What every wrapped handler returns
# ------------------------------------------------------------------------------
@dataclass(frozen=True)
class ToolResult:
    """Outcome of a single tool call.

    Attributes:
        text: Payload sent back to the host as a single text content block
        is_error: True when the call failed; text then holds the error message
    """

    text: str
    is_error: bool = False

    @classmethod
    def error(cls, text: str) -> "ToolResult":
        return cls(text=text, is_error=True)

    def to_call_tool_result(self) -> CallToolResult:
        return CallToolResult(
            content=[TextContent(type="text", text=self.text)],
            isError=self.is_error,
        )


# ------------------------------------------------------------------------------
# HandlerError - Custom exception for handler failures with structured error info
# ------------------------------------------------------------------------------
# Raise this in tool functions when the failure is detected locally rather
# than by Lambda.
# - message: What went wrong
# - hint: Actionable suggestion for the AI (optional)
# - **data: Extra context like function name (optional)
#
# Example: raise HandlerError("Lambda returned no payload", function_name="my-fn")
# ------------------------------------------------------------------------------
class HandlerError(Exception):
    """Structured error for tool handlers.

    Args:
        message: Description of what went wrong
        hint: Actionable suggestion for the AI (optional)
        **data: Extra context like function name (optional)
    """
    def __init__(self, message: str, hint: Optional[str] = None, **data: Any):
        super().__init__(message)
        self.message = message
        self.hint = hint
        self.data = data


def error_message(exc: BaseException) -> str:
    """Extract a human-readable message from an exception.

    botocore's str() for ClientError includes the operation name and error
    code; the service's own message is what the caller wants to see.

    Args:
        exc: The exception raised by the handler

    Returns:
        Message text, or "Unknown error" when the exception carries none
    """
    if isinstance(exc, HandlerError):
        msg = exc.message
        if exc.hint:
            msg += f" (hint: {exc.hint})"
        if exc.data:
            msg += f" (context: {exc.data})"
        return msg or UNKNOWN_ERROR

    if isinstance(exc, ClientError):
        message = exc.response.get("Error", {}).get("Message")
        if message:
            return message

    return str(exc) or UNKNOWN_ERROR


# ------------------------------------------------------------------------------
# _error_handler - Outermost wrapper that catches exceptions
# ------------------------------------------------------------------------------
# Converts any exception into an error ToolResult with the tool's prefix.
# Nothing is retried or re-raised.
# ------------------------------------------------------------------------------
def _error_handler(error_prefix: str) -> Callable[[Callable[..., Any]], Callable[..., ToolResult]]:
    """Build a wrapper that reports exceptions as "<error_prefix>: <message>".

    Args:
        error_prefix: Tool-specific prefix, e.g. "Error deploying function"

    Returns:
        Decorator producing a handler that never raises
    """
    def decorator(func: Callable[..., Any]) -> Callable[..., ToolResult]:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> ToolResult:
            try:
                return func(*args, **kwargs)
            except HandlerError as e:
                logger.warning("Handler error: %s (hint: %s)", e.message, e.hint)
                return ToolResult.error(f"{error_prefix}: {error_message(e)}")
            except ClientError as e:
                # Expected failures (not found, access denied, throttling) - no traceback
                logger.warning("%s: %s", error_prefix, e)
                return ToolResult.error(f"{error_prefix}: {error_message(e)}")
            except Exception as e:
                logger.exception("Unexpected handler error: %s", e)
                return ToolResult.error(f"{error_prefix}: {error_message(e)}")

        return wrapper

    return decorator


# ------------------------------------------------------------------------------
# _auto_response - Normalize return values to a ToolResult
# ------------------------------------------------------------------------------
#   - ToolResult -> pass through unchanged
#   - str -> text as-is
#   - pydantic model -> camelCase JSON, unset fields omitted
#   - None -> empty text
#   - anything else -> compact JSON
# ------------------------------------------------------------------------------
def _auto_response(func: Callable[..., Any]) -> Callable[..., ToolResult]:
    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> ToolResult:
        result = func(*args, **kwargs)

        if isinstance(result, ToolResult):
            return result

        if isinstance(result, str):
            return ToolResult(text=result)

        if isinstance(result, BaseModel):
            return ToolResult(text=result.model_dump_json(by_alias=True, exclude_none=True))

        if result is None:
            return ToolResult(text="")

        return ToolResult(text=to_json_text(result))

    return wrapper


def to_json_text(value: Any) -> str:
    """Serialize to compact JSON; values JSON can't represent become strings."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)
