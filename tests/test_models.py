"""
Tests for MCP protocol models.

Validates that our Pydantic models correctly handle JSON-RPC 2.0
message serialization and deserialization.
"""

from datetime import timezone

import pytest
from pydantic import ValidationError

from databricks_mcp.errors import ContextError
from databricks_mcp.models import (
    ErrorCode,
    ExecutionContext,
    InitializeResult,
    JsonRpcRequest,
    JsonRpcResponse,
    TextContent,
    Tool,
    ToolCallParams,
    ToolCallResult,
    ToolInputSchema,
    make_error_response,
    make_success_response,
)


def _result(text: str = "ok") -> ToolCallResult:
    return ToolCallResult(content=[TextContent(text=text)])


class TestJsonRpcRequest:
    """Tests for JSON-RPC request parsing."""

    def test_valid_request_with_params(self):
        request = JsonRpcRequest(
            id=1,
            method="tools/call",
            params={"name": "databricks_list_clusters", "arguments": {}},
        )
        assert request.jsonrpc == "2.0"
        assert request.id == 1
        assert request.method == "tools/call"
        assert request.params == {"name": "databricks_list_clusters", "arguments": {}}

    def test_valid_request_without_params(self):
        request = JsonRpcRequest(id="abc", method="tools/list")
        assert request.params is None

    def test_invalid_jsonrpc_version(self):
        with pytest.raises(ValidationError):
            JsonRpcRequest(jsonrpc="1.0", id=1, method="test")

    def test_notification_has_no_id(self):
        request = JsonRpcRequest.model_validate(
            {"jsonrpc": "2.0", "method": "notifications/initialized"}
        )
        assert request.is_notification

    def test_request_with_id_is_not_notification(self):
        assert not JsonRpcRequest(id=0, method="ping").is_notification


class TestJsonRpcResponse:
    """Tests for JSON-RPC response construction."""

    def test_serialization(self):
        response = JsonRpcResponse(id=1, result="ok")
        assert response.model_dump() == {"jsonrpc": "2.0", "id": 1, "result": "ok"}

    def test_error_response(self):
        response = make_error_response(
            request_id=1,
            code=ErrorCode.METHOD_NOT_FOUND,
            message="Unknown method: foo",
        )
        assert response.id == 1
        assert response.error.code == -32601
        assert "Unknown method" in response.error.message

    def test_error_with_null_id(self):
        response = make_error_response(None, ErrorCode.PARSE_ERROR, "Invalid JSON")
        assert response.id is None
        assert response.model_dump()["error"] == {
            "code": -32700,
            "message": "Invalid JSON",
            "data": None,
        }

    def test_make_success_response(self):
        response = make_success_response(42, {"status": "ok"})
        assert response.id == 42
        assert response.result == {"status": "ok"}

    def test_make_error_response_all_codes(self):
        for code in ErrorCode:
            response = make_error_response(1, code, "test")
            assert response.error.code == code.value


class TestToolModels:
    """Tests for MCP tool-related models."""

    def test_tool_serialization(self):
        tool = Tool(
            name="databricks_get_cluster",
            description="Get a cluster",
            inputSchema=ToolInputSchema(
                properties={"clusterId": {"type": "string"}},
                required=["clusterId"],
            ),
        )
        data = tool.model_dump()
        assert data["inputSchema"]["type"] == "object"
        assert data["inputSchema"]["required"] == ["clusterId"]

    def test_tool_call_params_accepts_meta(self):
        params = ToolCallParams.model_validate(
            {"name": "t", "arguments": {}, "_meta": {"progressToken": 1}}
        )
        assert params.meta == {"progressToken": 1}

    def test_tool_call_params_defaults_arguments(self):
        assert ToolCallParams(name="t").arguments == {}

    def test_tool_call_result_text(self):
        result = ToolCallResult(content=[TextContent(text="a"), TextContent(text="b")])
        assert result.text == "ab"
        assert result.isError is False

    def test_initialize_result(self):
        data = InitializeResult().model_dump()
        assert data["protocolVersion"] == "2024-11-05"
        assert data["serverInfo"] == {"name": "databricks-mcp", "version": "1.0.0"}


class TestExecutionContext:
    """
    Tests for the ExecutionContext.

    These tests verify that ExecutionContext enforces its invariants
    and fails loudly when misused.
    """

    def test_direct_construction_forbidden(self):
        with pytest.raises(ContextError) as exc_info:
            ExecutionContext(1, "test")

        assert "from_request()" in str(exc_info.value)

    def test_from_request_rejects_missing_id(self):
        with pytest.raises(ContextError, match="request.id is missing"):
            ExecutionContext.from_request(JsonRpcRequest(method="ping"))

    def test_from_request_rejects_empty_string_id(self):
        with pytest.raises(ContextError, match="request.id is empty"):
            ExecutionContext.from_request(JsonRpcRequest(id="   ", method="test"))

    def test_from_request_rejects_empty_method(self):
        with pytest.raises(ContextError, match="method is empty"):
            ExecutionContext.from_request(JsonRpcRequest(id=1, method=""))

    def test_from_request_valid(self):
        context = ExecutionContext.from_request(JsonRpcRequest(id=42, method="tools/call"))

        assert context.request_id == 42
        assert context.method == "tools/call"
        assert context.tool_name is None
        assert context.arguments == {}
        assert context.results == ()
        assert context.is_sealed is False

    def test_zero_id_is_valid(self):
        context = ExecutionContext.from_request(JsonRpcRequest(id=0, method="ping"))
        assert context.request_id == 0

    def test_created_at_is_utc(self):
        context = ExecutionContext.from_request(JsonRpcRequest(id=1, method="test"))
        assert context.created_at.tzinfo == timezone.utc

    def test_with_tool_call_returns_new_context(self):
        original = ExecutionContext.from_request(JsonRpcRequest(id=1, method="tools/call"))
        bound = original.with_tool_call("databricks_list_jobs", {"limit": 5})

        assert original.tool_name is None
        assert bound.tool_name == "databricks_list_jobs"
        assert bound.arguments == {"limit": 5}
        assert bound.created_at == original.created_at

    def test_with_tool_call_rejects_rebinding(self):
        context = ExecutionContext.from_request(JsonRpcRequest(id=1, method="tools/call"))
        context = context.with_tool_call("first", {})

        with pytest.raises(ContextError, match="'first' is already bound"):
            context.with_tool_call("second", {})

    def test_with_tool_call_rejects_empty_name(self):
        context = ExecutionContext.from_request(JsonRpcRequest(id=1, method="tools/call"))
        with pytest.raises(ContextError, match="tool name is empty"):
            context.with_tool_call("  ", {})

    def test_with_result_requires_tool_name(self):
        context = ExecutionContext.from_request(JsonRpcRequest(id=1, method="tools/call"))
        with pytest.raises(ContextError, match="no tool_name set"):
            context.with_result(_result())

    def test_with_result_rejects_none(self):
        context = ExecutionContext.from_request(JsonRpcRequest(id=1, method="tools/call"))
        context = context.with_tool_call("tool", {})
        with pytest.raises(ContextError, match="result is None"):
            context.with_result(None)

    def test_with_result_returns_new_context(self):
        context = ExecutionContext.from_request(JsonRpcRequest(id=1, method="tools/call"))
        bound = context.with_tool_call("tool", {})
        recorded = bound.with_result(_result())

        assert bound.results == ()
        assert len(recorded.results) == 1

    def test_arguments_returns_copy(self):
        context = ExecutionContext.from_request(JsonRpcRequest(id=1, method="tools/call"))
        context = context.with_tool_call("tool", {"key": "value"})

        arguments = context.arguments
        arguments["key"] = "changed"

        assert context.arguments == {"key": "value"}

    def test_context_size(self):
        context = ExecutionContext.from_request(JsonRpcRequest(id=1, method="tools/call"))
        context = context.with_tool_call("tool", {})
        assert context.context_size() == 0

        context = context.with_result(_result("12345")).with_result(_result("678"))
        assert context.context_size() == 8

    def test_repr(self):
        context = ExecutionContext.from_request(JsonRpcRequest(id=7, method="tools/call"))
        context = context.with_tool_call("databricks_list_jobs", {})
        assert repr(context) == (
            "<ExecutionContext id=7 method=tools/call tool=databricks_list_jobs results=0>"
        )
        assert repr(context.seal()).endswith("SEALED>")
