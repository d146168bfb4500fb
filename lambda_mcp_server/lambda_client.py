"""Factory for the shared AWS Lambda client.

One client is created at startup and handed to every tool handler. boto3
clients are thread-safe, so handlers running concurrently in worker threads
can share it. Credentials are resolved by boto3's standard provider chain.
"""

import logging
from typing import Any

import boto3

from .config import Config

logger = logging.getLogger(__name__)


def create_lambda_client(config: Config) -> Any:
    """Create a boto3 Lambda client from server config.

    Args:
        config: Server configuration (region, optional profile and endpoint)

    Returns:
        botocore client for the "lambda" service
    """
    session = boto3.session.Session(
        profile_name=config.profile,
        region_name=config.region,
    )

    client_kwargs: dict[str, Any] = {}
    if config.endpoint_url:
        client_kwargs["endpoint_url"] = config.endpoint_url

    logger.info(
        "Creating Lambda client (region=%s, profile=%s, endpoint=%s)",
        config.region,
        config.profile or "default",
        config.endpoint_url or "default",
    )
    return session.client("lambda", **client_kwargs)
