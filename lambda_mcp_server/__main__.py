"""Entry point: `python -m lambda_mcp_server` or the `lambda-mcp-server` script."""

import logging
import sys

from botocore.exceptions import BotoCoreError

from .config import Config
from .lambda_client import create_lambda_client
from .mcp_server import McpServer


def main() -> int:
    config = Config.from_env()

    valid, error = config.is_valid()
    if not valid:
        print(f"Lambda MCP Server: Invalid configuration - {error}", file=sys.stderr)
        return 1

    # stdout carries MCP messages, so logs must go to stderr
    logging.basicConfig(
        level=config.log_level_value,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        client = create_lambda_client(config)
    except BotoCoreError as e:
        print(f"Lambda MCP Server: Could not create Lambda client - {e}", file=sys.stderr)
        return 1

    try:
        McpServer(config, client).run()
    except KeyboardInterrupt:
        print("Lambda MCP Server: Stopped", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
