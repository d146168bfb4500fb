"""Central registry for tool handlers.

Handlers register themselves at import time. The dispatcher uses this
registry to route tool calls to the correct handler, passing the shared
Lambda client explicitly.
"""
from typing import Any, Callable

_handlers: dict[str, Callable[..., Any]] = {}


def register_handler(name: str, handler: Callable[..., Any]) -> None:
    """Register a handler function for a tool name."""
    if name in _handlers:
        raise ValueError(f"Handler already registered: {name}")
    _handlers[name] = handler


def get_handler(name: str) -> Callable[..., Any]:
    """Get handler by name. Raises KeyError if not found."""
    if name not in _handlers:
        raise KeyError(f"Unknown handler: {name}")
    return _handlers[name]


def registered_handlers() -> list[str]:
    """Handler names in registration order."""
    return list(_handlers)


def execute(tool_name: str, client: Any, arguments: dict[str, Any]) -> Any:
    """Execute a tool handler with the Lambda client and raw arguments."""
    handler = get_handler(tool_name)
    return handler(client, arguments)
