"""Shared test fixtures."""
from __future__ import annotations

from unittest.mock import MagicMock

import pytest

# Importing the primitives registers every tool with the registry
import lambda_mcp_server.primitives  # noqa: F401

from .fakes import make_lambda_client


@pytest.fixture
def lambda_client() -> MagicMock:
    """Fake boto3 Lambda client."""
    return make_lambda_client()


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"
