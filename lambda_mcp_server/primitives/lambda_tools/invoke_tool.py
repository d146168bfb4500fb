"""Invoke tool - call a Lambda function synchronously and return its raw response."""
import logging
from typing import Any

from ...tool_decorator import Tool
from ...handler_wrappers import HandlerError
from .models import InvokeParams
from .request_builders import build_invoke_request

logger = logging.getLogger(__name__)


@Tool(
    "invoke",
    "Invoke an AWS Lambda function synchronously with a JSON payload. "
    "Returns the function's response body exactly as the function produced it "
    "(usually JSON text, not re-formatted).",
    params=InvokeParams,
    error_prefix="Error invoking function",
    raw_args=("payload",),
)
def invoke(client: Any, params: InvokeParams) -> str:
    request = build_invoke_request(params.function_name, params.payload)
    response = client.invoke(**request)

    if response.get("FunctionError"):
        # Lambda still returns the error document as the payload
        logger.warning(
            "Function %s returned %s error", params.function_name, response["FunctionError"]
        )

    payload = response.get("Payload")
    if payload is None:
        raise HandlerError("Lambda returned no payload", function_name=params.function_name)

    raw = payload.read() if hasattr(payload, "read") else payload
    return raw.decode("utf-8", errors="replace")
