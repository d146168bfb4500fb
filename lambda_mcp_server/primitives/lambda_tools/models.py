"""Pydantic models shared by the Lambda tools.

Field names are snake_case in Python; the camelCase aliases are the argument
and result keys seen by MCP clients.
"""
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


LambdaRuntime = Literal[
    "nodejs18.x",
    "nodejs16.x",
    "python3.9",
    "python3.8",
    "java11",
    "dotnet6",
    "go1.x",
    "ruby2.7",
]

LambdaArchitecture = Literal["x86_64", "arm64"]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class VpcConfig(CamelModel):
    subnet_ids: list[str] = Field(description="Subnets the function connects to")
    security_group_ids: list[str] = Field(description="Security groups for the function's ENIs")


class DeploymentConfig(CamelModel):
    function_name: str = Field(description="Unique function name")
    runtime: LambdaRuntime = Field(description="Lambda runtime identifier")
    handler: str = Field(description="Entry point, e.g. 'index.handler' or 'app.lambda_handler'")
    memory_size: Optional[int] = Field(default=None, description="Memory in MB")
    timeout: Optional[int] = Field(default=None, description="Timeout in seconds")
    environment: Optional[dict[str, str]] = Field(
        default=None, description="Environment variables"
    )
    role_arn: str = Field(description="ARN of the execution role")
    architecture: Optional[LambdaArchitecture] = Field(
        default=None, description="Instruction set architecture"
    )
    vpc_config: Optional[VpcConfig] = Field(default=None, description="VPC attachment")
    tags: Optional[dict[str, str]] = Field(default=None, description="Tags for the new function")


class PartialDeploymentConfig(CamelModel):
    """DeploymentConfig with every field optional - used by updateConfig.

    function_name, architecture and tags are accepted for symmetry with
    DeploymentConfig but are not part of a configuration update.
    """

    function_name: Optional[str] = None
    runtime: Optional[LambdaRuntime] = None
    handler: Optional[str] = None
    memory_size: Optional[int] = None
    timeout: Optional[int] = None
    environment: Optional[dict[str, str]] = None
    role_arn: Optional[str] = None
    architecture: Optional[LambdaArchitecture] = None
    vpc_config: Optional[VpcConfig] = None
    tags: Optional[dict[str, str]] = None


# ============================================================================
# Results - built from Lambda's FunctionConfiguration responses
# ============================================================================

class DeploymentResult(CamelModel):
    """Returned by deploy, updateConfig and updateCode.

    Values are passed through from Lambda as-is. state is normally
    Active, Pending or Failed, but whatever Lambda reports is kept.
    """

    function_arn: Optional[str] = None
    function_name: Optional[str] = None
    runtime: Optional[str] = None
    handler: Optional[str] = None
    state: Optional[str] = None
    last_modified: Optional[str] = None
    version: Optional[str] = None

    @classmethod
    def from_response(cls, response: dict[str, Any]) -> "DeploymentResult":
        return cls(
            function_arn=response.get("FunctionArn"),
            function_name=response.get("FunctionName"),
            runtime=response.get("Runtime"),
            handler=response.get("Handler"),
            state=response.get("State"),
            last_modified=response.get("LastModified"),
            version=response.get("Version"),
        )


class FunctionConfigurationSummary(CamelModel):
    """Returned by getConfig."""

    function_name: Optional[str] = None
    runtime: Optional[str] = None
    handler: Optional[str] = None
    memory_size: Optional[int] = None
    timeout: Optional[int] = None
    environment: Optional[dict[str, str]] = None
    role_arn: Optional[str] = None

    @classmethod
    def from_response(cls, response: dict[str, Any]) -> "FunctionConfigurationSummary":
        return cls(
            function_name=response.get("FunctionName"),
            runtime=response.get("Runtime"),
            handler=response.get("Handler"),
            memory_size=response.get("MemorySize"),
            timeout=response.get("Timeout"),
            environment=(response.get("Environment") or {}).get("Variables"),
            role_arn=response.get("Role"),
        )


# ============================================================================
# Tool parameters - field aliases are the MCP argument names
# ============================================================================

class DeployParams(CamelModel):
    config: DeploymentConfig = Field(description="Function configuration")
    code: str = Field(description="Base64-encoded deployment package (zip)")


class UpdateConfigParams(CamelModel):
    function_name: str = Field(description="Name of the function to update")
    config: PartialDeploymentConfig = Field(
        description="Configuration fields to change; omitted fields are not sent"
    )


class UpdateCodeParams(CamelModel):
    function_name: str = Field(description="Name of the function to update")
    code: str = Field(description="Base64-encoded deployment package (zip)")


class FunctionNameParams(CamelModel):
    function_name: str = Field(description="Name of the Lambda function")


class NoParams(CamelModel):
    pass


class InvokeParams(CamelModel):
    function_name: str = Field(description="Name of the function to invoke")
    payload: Any = Field(default=None, description="JSON payload passed to the function")
