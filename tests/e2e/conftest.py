"""E2E test configuration and fixtures."""
from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from mcp.server.fastmcp import FastMCP

from lambda_mcp_server.config import Config
from lambda_mcp_server.mcp_server import McpServer


@pytest.fixture
def mcp_server(lambda_client: MagicMock) -> FastMCP:
    """Fully wired FastMCP server backed by the fake Lambda client."""
    return McpServer(Config(), lambda_client).build()
