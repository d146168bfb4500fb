"""Get config tool - describe a Lambda function's configuration."""
from typing import Any

from ...tool_decorator import Tool
from .models import FunctionConfigurationSummary, FunctionNameParams


@Tool(
    "getConfig",
    "Get the configuration of an AWS Lambda function: runtime, handler, memory size, "
    "timeout, environment variables and execution role ARN.",
    params=FunctionNameParams,
    error_prefix="Error getting configuration",
    read_only=True,
)
def get_config(client: Any, params: FunctionNameParams) -> FunctionConfigurationSummary:
    response = client.get_function_configuration(FunctionName=params.function_name)
    return FunctionConfigurationSummary.from_response(response)
