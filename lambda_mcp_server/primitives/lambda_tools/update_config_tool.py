"""Update config tool - change settings of an existing Lambda function."""
from typing import Any

from ...tool_decorator import Tool
from .models import DeploymentResult, UpdateConfigParams
from .request_builders import build_update_configuration_request


@Tool(
    "updateConfig",
    "Update the configuration of an existing AWS Lambda function. "
    "Only the fields given in config are sent to Lambda (runtime, handler, memory size, "
    "timeout, environment variables, role ARN, VPC config); omitted fields are left to "
    "Lambda. Note that environment replaces the whole variable set.",
    params=UpdateConfigParams,
    error_prefix="Error updating configuration",
)
def update_config(client: Any, params: UpdateConfigParams) -> DeploymentResult:
    request = build_update_configuration_request(params.function_name, params.config)
    response = client.update_function_configuration(**request)
    return DeploymentResult.from_response(response)
