"""MCP server exposing AWS Lambda management tools over stdio.

This module implements the MCP server component. It uses the official MCP
SDK (FastMCP) to handle the protocol and exposes Lambda operations as MCP
tools.

Architecture:
    - stdio transport: the host launches this process and talks MCP over
      stdin/stdout; diagnostics go to stderr
    - One shared boto3 Lambda client, created at startup and handed to every
      tool handler
    - Async I/O: tool handlers run in worker threads (asyncio.to_thread) since
      boto3 calls block

Each tool call is independent: handlers hold no state between calls, so
concurrent calls from the host cannot affect each other's results.
"""

import asyncio
import logging
import sys
from typing import Any

from mcp.server.fastmcp import FastMCP
from mcp.server.stdio import stdio_server

from . import __version__
from .config import Config
from .primitives import register_all_tools
from .tool_decorator import ToolServer

logger = logging.getLogger(__name__)

READY_MESSAGE = "Lambda MCP Server running on stdio"

INSTRUCTIONS = (
    "Manage AWS Lambda functions: deploy new functions from base64-encoded zip "
    "packages, update their configuration or code, describe, list, invoke and "
    "delete them. Each tool performs a single Lambda API call."
)


class McpServer:
    """MCP server serving Lambda tools on stdio.

    Usage:
        >>> server = McpServer(Config.from_env(), create_lambda_client(config))
        >>> server.run()  # Blocks until the host closes stdin

    Attributes:
        _config: Server configuration (name, region, log level)
        _client: boto3 Lambda client shared by all tool handlers
    """

    def __init__(self, config: Config, client: Any) -> None:
        """Initialize MCP server.

        Args:
            config: Server configuration
            client: boto3 Lambda client (thread-safe, shared by handlers)
        """
        self._config = config
        self._client = client

    def build(self) -> FastMCP:
        """Create the FastMCP instance with every tool registered.

        Separate from run() so tests can drive the server through an
        in-memory session.
        """
        mcp = ToolServer(self._config.server_name, instructions=INSTRUCTIONS)
        # FastMCP takes no version; the low-level server reports this one as
        # serverInfo.version (it falls back to the mcp package version)
        mcp._mcp_server.version = __version__

        register_all_tools(mcp, self._client)
        return mcp

    def run(self) -> None:
        """Run the server until the host closes the transport."""
        asyncio.run(self._async_main())

    async def _async_main(self) -> None:
        mcp = self.build()
        await self._run_stdio_mode(mcp)

    async def _run_stdio_mode(self, mcp: FastMCP) -> None:
        """Attach stdio transport, announce readiness on stderr, then serve.

        Args:
            mcp: Configured FastMCP server instance with tools defined

        Note:
            The readiness line is printed only once the transport is attached,
            and always to stderr - stdout belongs to the protocol.
        """
        server = mcp._mcp_server

        async with stdio_server() as (read_stream, write_stream):
            print(READY_MESSAGE, file=sys.stderr, flush=True)
            await server.run(
                read_stream,
                write_stream,
                server.create_initialization_options(),
            )

        logger.info("stdio transport closed, shutting down")
