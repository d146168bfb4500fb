"""Update code tool - upload a new deployment package for a Lambda function."""
from typing import Any

from ...tool_decorator import Tool
from .models import DeploymentResult, UpdateCodeParams
from .request_builders import build_update_code_request


@Tool(
    "updateCode",
    "Replace the code of an existing AWS Lambda function with a new deployment package "
    "(base64-encoded zip file).",
    params=UpdateCodeParams,
    error_prefix="Error updating code",
)
def update_code(client: Any, params: UpdateCodeParams) -> DeploymentResult:
    request = build_update_code_request(params.function_name, params.code)
    response = client.update_function_code(**request)
    return DeploymentResult.from_response(response)
