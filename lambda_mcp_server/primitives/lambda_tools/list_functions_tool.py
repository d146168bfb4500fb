"""List functions tool."""
import logging
from typing import Any

from ...tool_decorator import Tool
from .models import NoParams

logger = logging.getLogger(__name__)


@Tool(
    "listFunctions",
    "List AWS Lambda functions in the configured region. "
    "Returns Lambda's function descriptors as-is. Only the first page of results "
    "is returned (up to 50 functions).",
    params=NoParams,
    error_prefix="Error listing functions",
    read_only=True,
)
def list_functions(client: Any, params: NoParams) -> list[dict[str, Any]]:
    # Single call - NextMarker is not followed
    response = client.list_functions()
    functions = response.get("Functions", [])

    if response.get("NextMarker"):
        logger.debug(
            "listFunctions returned %d functions; more pages exist but are not fetched",
            len(functions),
        )

    return functions
