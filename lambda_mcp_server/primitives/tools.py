# primitives/tools.py
"""Central tool registration module."""

from typing import Any

# Import all Lambda tools (this triggers handler registration at import time)
from .lambda_tools import (  # noqa: F401
    deploy_tool,
    update_config_tool,
    update_code_tool,
    delete_function_tool,
    get_config_tool,
    list_functions_tool,
    invoke_tool,
)
from ..tool_decorator import register_tools


def register_all_tools(
    mcp,  # FastMCP instance
    client: Any,
) -> None:
    """Register all MCP tools with the server.

    Args:
        mcp: FastMCP server instance
        client: Shared boto3 Lambda client passed to every handler
    """
    register_tools(mcp, client)
