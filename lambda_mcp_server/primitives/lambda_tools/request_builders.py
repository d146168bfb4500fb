"""Pure mappings from validated tool input to boto3 Lambda request kwargs.

boto3 rejects None for any parameter, so optional fields that were not
supplied are left out of the request entirely rather than sent as null.
"""
import base64
import json
from typing import Any, Union

from .models import DeploymentConfig, PartialDeploymentConfig


def decode_archive(code: str) -> bytes:
    """Decode a base64 deployment package to the raw zip bytes.

    Whitespace (line-wrapped output of base64 tools) is ignored and missing
    trailing padding is restored. Any other character outside the standard
    base64 alphabet is rejected instead of being silently dropped.

    Raises:
        binascii.Error: If code is not valid base64
    """
    compact = "".join(code.split())
    return base64.b64decode(compact + "=" * (-len(compact) % 4), validate=True)


def encode_payload(payload: Any) -> bytes:
    """Serialize an invoke payload to compact JSON bytes."""
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def _optional_settings(config: Union[DeploymentConfig, PartialDeploymentConfig]) -> dict[str, Any]:
    settings: dict[str, Any] = {}
    if config.memory_size is not None:
        settings["MemorySize"] = config.memory_size
    if config.timeout is not None:
        settings["Timeout"] = config.timeout
    if config.environment is not None:
        settings["Environment"] = {"Variables": dict(config.environment)}
    if config.vpc_config is not None:
        settings["VpcConfig"] = {
            "SubnetIds": list(config.vpc_config.subnet_ids),
            "SecurityGroupIds": list(config.vpc_config.security_group_ids),
        }
    return settings


def build_create_function_request(config: DeploymentConfig, code: str) -> dict[str, Any]:
    """Kwargs for lambda_client.create_function()."""
    request: dict[str, Any] = {
        "FunctionName": config.function_name,
        "Runtime": config.runtime,
        "Handler": config.handler,
        "Role": config.role_arn,
        "Code": {"ZipFile": decode_archive(code)},
    }
    request.update(_optional_settings(config))
    if config.architecture is not None:
        request["Architectures"] = [config.architecture]
    if config.tags is not None:
        request["Tags"] = dict(config.tags)
    return request


def build_update_configuration_request(
    function_name: str, config: PartialDeploymentConfig
) -> dict[str, Any]:
    """Kwargs for lambda_client.update_function_configuration().

    Only fields present in config are forwarded; nothing is merged with the
    function's current configuration.
    """
    request: dict[str, Any] = {"FunctionName": function_name}
    if config.runtime is not None:
        request["Runtime"] = config.runtime
    if config.handler is not None:
        request["Handler"] = config.handler
    if config.role_arn is not None:
        request["Role"] = config.role_arn
    request.update(_optional_settings(config))
    return request


def build_update_code_request(function_name: str, code: str) -> dict[str, Any]:
    """Kwargs for lambda_client.update_function_code()."""
    return {
        "FunctionName": function_name,
        "ZipFile": decode_archive(code),
    }


def build_invoke_request(function_name: str, payload: Any) -> dict[str, Any]:
    """Kwargs for lambda_client.invoke() (synchronous RequestResponse call)."""
    return {
        "FunctionName": function_name,
        "Payload": encode_payload(payload),
    }
