"""Deploy tool - create a new Lambda function from a base64 zip package."""
from typing import Any

from ...tool_decorator import Tool
from .models import DeployParams, DeploymentResult
from .request_builders import build_create_function_request


@Tool(
    "deploy",
    "Deploy a new AWS Lambda function. "
    "Pass the function configuration (name, runtime, handler, execution role ARN and "
    "optional memory size, timeout, environment variables, architecture, VPC config, tags) "
    "and the deployment package as a base64-encoded zip file. "
    "The function is created but not awaited: state may be Pending right after deploy.",
    params=DeployParams,
    error_prefix="Error deploying function",
)
def deploy(client: Any, params: DeployParams) -> DeploymentResult:
    request = build_create_function_request(params.config, params.code)
    response = client.create_function(**request)
    return DeploymentResult.from_response(response)
