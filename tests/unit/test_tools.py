"""Tests for the Lambda tool handlers, dispatched through the handler registry."""
from __future__ import annotations

import base64
import json

import pytest
from pydantic import ValidationError

from lambda_mcp_server.handler_registry import execute
from lambda_mcp_server.handler_wrappers import ToolResult

from ..fakes import ROLE_ARN, client_error, function_configuration, invoke_response

DEPLOY_CONFIG = {
    "functionName": "hello",
    "runtime": "python3.9",
    "handler": "app.handler",
    "roleArn": ROLE_ARN,
}
CODE = base64.b64encode(b"zip-bytes").decode()

DEPLOYMENT_RESULT_KEYS = {
    "functionArn", "functionName", "runtime", "handler", "state", "lastModified", "version",
}


class TestDeploy:
    def test_deploy_success(self, lambda_client):
        result = execute("deploy", lambda_client, {"config": DEPLOY_CONFIG, "code": CODE})

        assert isinstance(result, ToolResult)
        assert not result.is_error
        lambda_client.create_function.assert_called_once_with(
            FunctionName="hello",
            Runtime="python3.9",
            Handler="app.handler",
            Role=ROLE_ARN,
            Code={"ZipFile": b"zip-bytes"},
        )
        body = json.loads(result.text)
        assert set(body) == DEPLOYMENT_RESULT_KEYS
        assert body["state"] == "Pending"
        assert body["functionArn"].endswith(":function:hello")

    def test_environment_only_when_present(self, lambda_client):
        config = {**DEPLOY_CONFIG, "environment": {"STAGE": "dev"}}
        execute("deploy", lambda_client, {"config": config, "code": CODE})
        kwargs = lambda_client.create_function.call_args.kwargs
        assert kwargs["Environment"] == {"Variables": {"STAGE": "dev"}}

    def test_archive_round_trip(self, lambda_client):
        data = bytes(range(256))
        execute(
            "deploy",
            lambda_client,
            {"config": DEPLOY_CONFIG, "code": base64.b64encode(data).decode()},
        )
        assert lambda_client.create_function.call_args.kwargs["Code"]["ZipFile"] == data

    def test_missing_result_fields_omitted(self, lambda_client):
        lambda_client.create_function.return_value = {"FunctionName": "hello"}
        result = execute("deploy", lambda_client, {"config": DEPLOY_CONFIG, "code": CODE})
        assert json.loads(result.text) == {"functionName": "hello"}

    def test_remote_error(self, lambda_client):
        lambda_client.create_function.side_effect = client_error(
            "ResourceConflictException", "Function already exist: hello", "CreateFunction"
        )
        result = execute("deploy", lambda_client, {"config": DEPLOY_CONFIG, "code": CODE})
        assert result.is_error
        assert result.text == "Error deploying function: Function already exist: hello"

    def test_bad_base64_is_reported_not_raised(self, lambda_client):
        result = execute("deploy", lambda_client, {"config": DEPLOY_CONFIG, "code": "!!!"})
        assert result.is_error
        assert result.text.startswith("Error deploying function: ")
        lambda_client.create_function.assert_not_called()

    def test_invalid_runtime_rejected_before_call(self, lambda_client):
        config = {**DEPLOY_CONFIG, "runtime": "cobol85"}
        with pytest.raises(ValidationError):
            execute("deploy", lambda_client, {"config": config, "code": CODE})
        lambda_client.create_function.assert_not_called()

    def test_missing_role_rejected_before_call(self, lambda_client):
        config = {k: v for k, v in DEPLOY_CONFIG.items() if k != "roleArn"}
        with pytest.raises(ValidationError):
            execute("deploy", lambda_client, {"config": config, "code": CODE})
        lambda_client.create_function.assert_not_called()


class TestUpdateConfig:
    def test_forwards_only_given_fields(self, lambda_client):
        result = execute(
            "updateConfig",
            lambda_client,
            {"functionName": "hello", "config": {"timeout": 60}},
        )
        assert not result.is_error
        lambda_client.update_function_configuration.assert_called_once_with(
            FunctionName="hello", Timeout=60
        )
        assert set(json.loads(result.text)) == DEPLOYMENT_RESULT_KEYS

    def test_remote_error(self, lambda_client):
        lambda_client.update_function_configuration.side_effect = client_error(
            "ResourceNotFoundException", "Function not found", "UpdateFunctionConfiguration"
        )
        result = execute(
            "updateConfig", lambda_client, {"functionName": "nope", "config": {}}
        )
        assert result.is_error
        assert result.text == "Error updating configuration: Function not found"


class TestUpdateCode:
    def test_success(self, lambda_client):
        result = execute("updateCode", lambda_client, {"functionName": "hello", "code": CODE})
        assert not result.is_error
        lambda_client.update_function_code.assert_called_once_with(
            FunctionName="hello", ZipFile=b"zip-bytes"
        )

    def test_remote_error(self, lambda_client):
        lambda_client.update_function_code.side_effect = client_error(
            "CodeStorageExceededException", "Code storage limit exceeded", "UpdateFunctionCode"
        )
        result = execute("updateCode", lambda_client, {"functionName": "hello", "code": CODE})
        assert result.is_error
        assert result.text == "Error updating code: Code storage limit exceeded"

    def test_bad_base64_is_reported_not_raised(self, lambda_client):
        result = execute("updateCode", lambda_client, {"functionName": "hello", "code": "!!!"})
        assert result.is_error
        assert result.text.startswith("Error updating code: ")
        lambda_client.update_function_code.assert_not_called()


class TestDeleteFunction:
    def test_plain_confirmation(self, lambda_client):
        result = execute("deleteFunction", lambda_client, {"functionName": "hello"})
        assert result == ToolResult(text="Function hello deleted successfully")
        lambda_client.delete_function.assert_called_once_with(FunctionName="hello")
        with pytest.raises(json.JSONDecodeError):
            json.loads(result.text)

    def test_remote_error(self, lambda_client):
        lambda_client.delete_function.side_effect = client_error(
            "AccessDeniedException", "not authorized to perform: lambda:DeleteFunction",
            "DeleteFunction",
        )
        result = execute("deleteFunction", lambda_client, {"functionName": "hello"})
        assert result.is_error
        assert result.text.startswith("Error deleting function: not authorized")


class TestGetConfig:
    def test_success(self, lambda_client):
        result = execute("getConfig", lambda_client, {"functionName": "hello"})
        lambda_client.get_function_configuration.assert_called_once_with(FunctionName="hello")
        assert json.loads(result.text) == {
            "functionName": "hello",
            "runtime": "python3.9",
            "handler": "app.handler",
            "memorySize": 128,
            "timeout": 3,
            "environment": {"STAGE": "dev"},
            "roleArn": ROLE_ARN,
        }

    def test_no_environment(self, lambda_client):
        lambda_client.get_function_configuration.return_value = function_configuration()
        result = execute("getConfig", lambda_client, {"functionName": "hello"})
        assert "environment" not in json.loads(result.text)

    def test_remote_error(self, lambda_client):
        lambda_client.get_function_configuration.side_effect = client_error(
            "ResourceNotFoundException", "Function not found: hello", "GetFunctionConfiguration"
        )
        result = execute("getConfig", lambda_client, {"functionName": "hello"})
        assert result.text == "Error getting configuration: Function not found: hello"


class TestListFunctions:
    def test_returns_first_page_unfiltered(self, lambda_client):
        page = [function_configuration("a"), function_configuration("b")]
        lambda_client.list_functions.return_value = {"Functions": page, "NextMarker": "m1"}

        result = execute("listFunctions", lambda_client, {})

        lambda_client.list_functions.assert_called_once_with()
        assert json.loads(result.text) == page

    def test_empty_account(self, lambda_client):
        lambda_client.list_functions.return_value = {"Functions": []}
        assert execute("listFunctions", lambda_client, {}).text == "[]"

    def test_remote_error(self, lambda_client):
        lambda_client.list_functions.side_effect = client_error(
            "TooManyRequestsException", "Rate exceeded", "ListFunctions"
        )
        result = execute("listFunctions", lambda_client, {})
        assert result.text == "Error listing functions: Rate exceeded"


class TestInvoke:
    def test_payload_serialized_and_response_verbatim(self, lambda_client):
        raw = b'{ "statusCode" : 200,\n  "body": "caf\xc3\xa9" }'
        lambda_client.invoke.return_value = invoke_response(raw)

        result = execute(
            "invoke", lambda_client, {"functionName": "hello", "payload": {"x": [1, 2]}}
        )

        lambda_client.invoke.assert_called_once_with(
            FunctionName="hello", Payload=b'{"x":[1,2]}'
        )
        assert not result.is_error
        assert result.text == raw.decode("utf-8")

    def test_function_error_payload_returned(self, lambda_client):
        raw = b'{"errorMessage":"boom","errorType":"Exception"}'
        lambda_client.invoke.return_value = invoke_response(raw, FunctionError="Unhandled")
        result = execute("invoke", lambda_client, {"functionName": "hello", "payload": {}})
        assert result.text == raw.decode()

    def test_missing_payload_is_error(self, lambda_client):
        lambda_client.invoke.return_value = {"StatusCode": 202}
        result = execute("invoke", lambda_client, {"functionName": "hello", "payload": 1})
        assert result.is_error
        assert result.text.startswith("Error invoking function: Lambda returned no payload")

    def test_generic_exception(self, lambda_client):
        lambda_client.invoke.side_effect = RuntimeError("connection reset")
        result = execute("invoke", lambda_client, {"functionName": "hello", "payload": None})
        assert result.text == "Error invoking function: connection reset"

    def test_exception_without_message(self, lambda_client):
        lambda_client.invoke.side_effect = RuntimeError()
        result = execute("invoke", lambda_client, {"functionName": "hello"})
        assert result.text == "Error invoking function: Unknown error"


@pytest.mark.parametrize(
    "tool_name, method, arguments, prefix",
    [
        ("deploy", "create_function", {"config": DEPLOY_CONFIG, "code": CODE},
         "Error deploying function:"),
        ("updateConfig", "update_function_configuration",
         {"functionName": "hello", "config": {}}, "Error updating configuration:"),
        ("updateCode", "update_function_code", {"functionName": "hello", "code": CODE},
         "Error updating code:"),
        ("deleteFunction", "delete_function", {"functionName": "hello"},
         "Error deleting function:"),
        ("getConfig", "get_function_configuration", {"functionName": "hello"},
         "Error getting configuration:"),
        ("listFunctions", "list_functions", {}, "Error listing functions:"),
        ("invoke", "invoke", {"functionName": "hello", "payload": {}},
         "Error invoking function:"),
    ],
)
def test_every_tool_reports_remote_failure(lambda_client, tool_name, method, arguments, prefix):
    """Failures come back as results with the tool's prefix, never as exceptions."""
    getattr(lambda_client, method).side_effect = client_error("ServiceException", "down", "Op")

    result = execute(tool_name, lambda_client, arguments)

    assert result.is_error
    assert result.text == f"{prefix} down"
    assert getattr(lambda_client, method).call_count == 1
