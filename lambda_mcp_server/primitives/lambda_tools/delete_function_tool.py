"""Delete function tool."""
import logging
from typing import Any

from ...tool_decorator import Tool
from .models import FunctionNameParams

logger = logging.getLogger(__name__)


@Tool(
    "deleteFunction",
    "Delete an AWS Lambda function. This cannot be undone.",
    params=FunctionNameParams,
    error_prefix="Error deleting function",
    destructive=True,
)
def delete_function(client: Any, params: FunctionNameParams) -> str:
    client.delete_function(FunctionName=params.function_name)
    logger.info("Deleted Lambda function %s", params.function_name)
    return f"Function {params.function_name} deleted successfully"
