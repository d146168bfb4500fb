"""Configuration for the Lambda MCP server.

Settings come from environment variables so the server can be launched by
any MCP host without a config file. Every field has a default - the server
works with no configuration beyond AWS credentials.
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

# Environment variable -> Config field
ENV_VARS: dict[str, str] = {
    "AWS_REGION": "region",
    "AWS_PROFILE": "profile",
    "LAMBDA_MCP_ENDPOINT_URL": "endpoint_url",
    "LAMBDA_MCP_LOG_LEVEL": "log_level",
}

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Config:
    """
    Server configuration.

    Frozen so a single instance can be shared by every handler without
    anyone mutating it mid-request.
    """

    # AWS settings
    region: str = "us-east-1"
    profile: Optional[str] = None
    endpoint_url: Optional[str] = None

    # MCP server identity
    server_name: str = "LambdaDeployer"

    # Logging (always to stderr - stdout carries the protocol)
    log_level: str = "WARNING"

    def is_valid(self) -> tuple[bool, str]:
        """
        Check the config before starting the server.

        Returns:
            Tuple of (is_valid, error_message). If valid, error_message is empty string.

        Examples:
            >>> Config().is_valid()
            (True, '')

            >>> Config(log_level="LOUD").is_valid()
            (False, 'Unknown log level: LOUD')
        """
        if not self.region:
            return False, "Region must not be empty"
        if self.log_level.upper() not in _LOG_LEVELS:
            return False, f"Unknown log level: {self.log_level}"
        return True, ""

    @property
    def log_level_value(self) -> int:
        return getattr(logging, self.log_level.upper())

    @classmethod
    def from_dict(cls, data: dict) -> "Config":
        """
        Create from dict, using defaults for missing keys.

        Only includes keys that are actual dataclass fields, ignoring
        any extra keys in the input dict.

        Examples:
            >>> Config.from_dict({"region": "eu-west-1"})
            Config(region='eu-west-1', ...)

            >>> Config.from_dict({"unknown_field": "ignored"})
            Config(region='us-east-1', ...)  # Uses all defaults
        """
        return cls(
            **{k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Config":
        """
        Load config from environment variables (see ENV_VARS).

        Empty values are treated as unset so `AWS_REGION=` falls back to
        the default region.
        """
        if environ is None:
            environ = os.environ
        raw = {
            field_name: environ[var]
            for var, field_name in ENV_VARS.items()
            if environ.get(var)
        }
        return cls.from_dict(raw)
