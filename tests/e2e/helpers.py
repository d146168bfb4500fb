"""Helper functions for E2E tests using the MCP SDK's in-memory client session."""
from __future__ import annotations

from typing import Any

from mcp.server.fastmcp import FastMCP
from mcp.shared.memory import create_connected_server_and_client_session
from mcp.types import CallToolResult, Tool


async def call_tool(
    mcp: FastMCP, name: str, args: dict[str, Any] | None = None
) -> CallToolResult:
    """Call an MCP tool over a real client session and return the raw result.

    Args:
        mcp: Server under test
        name: Tool name (e.g., "deploy", "listFunctions")
        args: Tool arguments as dict

    Returns:
        The CallToolResult envelope as the host would receive it.
    """
    async with create_connected_server_and_client_session(mcp._mcp_server) as session:
        return await session.call_tool(name, args or {})


async def list_tools(mcp: FastMCP) -> list[Tool]:
    """List all available MCP tools."""
    async with create_connected_server_and_client_session(mcp._mcp_server) as session:
        result = await session.list_tools()
        return result.tools


def result_text(result: CallToolResult) -> str:
    """Text of the single content block every tool returns."""
    assert len(result.content) == 1
    return result.content[0].text
