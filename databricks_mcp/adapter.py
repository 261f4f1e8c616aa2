"""
Databricks-to-MCP Adapter

Exposes the Databricks facade table as MCP tools. The adapter:
1. Keeps a frozen registry of endpoints exposed as MCP tools
2. Validates tool arguments before any request is built
3. Builds one tenant-scoped client per call and runs the request pipeline
4. Renders results and failures as MCP content blocks

The adapter holds no tenant state. Credentials arrive with each call and
are dropped when it completes.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any

import structlog
from pydantic import ValidationError

from .client import DatabricksClient, create_databricks_client
from .credentials import TenantCredentials
from .endpoints import DEFAULT_ENDPOINTS, RestEndpoint
from .errors import ContractViolation, GatewayFailure, UnexpectedResponse
from .formatting import format_error, format_response
from .models import (
    ErrorCode,
    ExecutionContext,
    InitializeResult,
    JsonRpcErrorResponse,
    JsonRpcRequest,
    JsonRpcResponse,
    ListToolsResult,
    Tool,
    ToolCallParams,
    ToolCallResult,
    make_error_response,
    make_success_response,
)

logger = structlog.get_logger()

ClientFactory = Callable[[TenantCredentials], DatabricksClient]


class DatabricksMcpAdapter:
    """
    Adapts the Databricks REST API to the MCP protocol.

    The endpoint registry is read-only after construction; tests swap the
    network out by passing a client_factory that injects a transport.
    """

    def __init__(
        self,
        endpoints: list[RestEndpoint] | None = None,
        client_factory: ClientFactory = create_databricks_client,
    ) -> None:
        registry: dict[str, RestEndpoint] = {}
        for endpoint in DEFAULT_ENDPOINTS if endpoints is None else endpoints:
            if endpoint.name in registry:
                raise ValueError(f"Duplicate tool name: {endpoint.name}")
            registry[endpoint.name] = endpoint

        self.endpoints: Mapping[str, RestEndpoint] = MappingProxyType(registry)
        self._client_factory = client_factory

    def list_tools(self) -> list[Tool]:
        """Return all registered tools in MCP format."""
        return [endpoint.to_mcp_tool() for endpoint in self.endpoints.values()]

    async def call_tool(
        self,
        name: str,
        arguments: dict[str, Any],
        credentials: TenantCredentials,
    ) -> ToolCallResult:
        """
        Execute a tool against the tenant's workspace.

        Flow:
        1. Look up endpoint (fail if unknown)
        2. Validate and bind arguments (fail loudly if invalid)
        3. Build the request descriptor
        4. Run it through a client built for this call only
        5. Reshape and render the result

        Remote failures become an error result, not an exception.

        Raises:
            ContractViolation: unknown tool or invalid arguments
        """
        endpoint = self.endpoints.get(name)
        if endpoint is None:
            raise ContractViolation(f"Unknown tool: {name}", tool_name=name)

        values = endpoint.bind_arguments(arguments, credentials)
        descriptor = endpoint.build_request(values)
        client = self._client_factory(credentials)

        try:
            raw = await client.execute(descriptor)
            presented = self._present(endpoint, values, raw)
        except GatewayFailure as failure:
            if endpoint.on_failure is not None:
                return format_response(endpoint.on_failure(failure))
            logger.info("tool_call_failed", tool=name, failure=failure.failure_category)
            return format_error(failure)

        return format_response(presented)

    @staticmethod
    def _present(endpoint: RestEndpoint, values: dict[str, Any], raw: Any) -> Any:
        """
        Reshape and render a decoded body.

        Raises:
            UnexpectedResponse: the body does not fit the facade's reshaper
        """
        try:
            result = endpoint.reshape(raw) if endpoint.reshape is not None else raw
            return endpoint.present(values, result)
        except Exception as e:
            raise UnexpectedResponse(
                f"Unexpected response shape from {endpoint.path}: {type(e).__name__}",
                tool_name=endpoint.name,
                cause=e,
            ) from e

    async def handle_request(
        self,
        request: JsonRpcRequest,
        credentials: TenantCredentials,
    ) -> tuple[JsonRpcResponse | JsonRpcErrorResponse, ExecutionContext]:
        """
        Single entry point for all MCP operations.

        Flow:
            handle_request()
              → create ExecutionContext
              → route by method
              → seal context
              → return (response, sealed_context)

        Supported methods: initialize, ping, tools/list, tools/call.

        Raises:
            ContextError: the request has no usable id or method
        """
        context = ExecutionContext.from_request(request)

        match request.method:
            case "initialize":
                response = make_success_response(
                    request.id,
                    InitializeResult().model_dump(),
                )
                return response, context.seal()

            case "ping":
                return make_success_response(request.id, {}), context.seal()

            case "tools/list":
                list_result = ListToolsResult(tools=self.list_tools())
                response = make_success_response(request.id, list_result.model_dump())
                return response, context.seal()

            case "tools/call":
                response, context = await self._handle_tools_call(
                    request, context, credentials
                )
                return response, context.seal()

            case _:
                response = make_error_response(
                    request.id,
                    ErrorCode.METHOD_NOT_FOUND,
                    f"Unknown method: {request.method}",
                )
                return response, context.seal()

    async def _handle_tools_call(
        self,
        request: JsonRpcRequest,
        context: ExecutionContext,
        credentials: TenantCredentials,
    ) -> tuple[JsonRpcResponse | JsonRpcErrorResponse, ExecutionContext]:
        """Handle tools/call method with context tracking."""
        if request.params is None:
            response = make_error_response(
                request.id,
                ErrorCode.INVALID_PARAMS,
                "Missing params for tools/call",
            )
            return response, context

        try:
            params = ToolCallParams.model_validate(request.params)
        except ValidationError as e:
            response = make_error_response(
                request.id,
                ErrorCode.INVALID_PARAMS,
                f"Invalid params: {e}",
            )
            return response, context

        context = context.with_tool_call(params.name, params.arguments)

        try:
            call_result = await self.call_tool(params.name, params.arguments, credentials)
        except ContractViolation as e:
            response = make_error_response(
                request.id,
                ErrorCode.INVALID_PARAMS,
                str(e),
                data={"tool": e.tool_name, "errors": e.errors},
            )
            return response, context

        context = context.with_result(call_result)

        response = make_success_response(request.id, call_result.model_dump())
        return response, context


# -----------------------------------------------------------------------------
# Factory Functions
# -----------------------------------------------------------------------------


def create_adapter(client_factory: ClientFactory = create_databricks_client) -> DatabricksMcpAdapter:
    """Create an adapter with every Databricks tool registered."""
    return DatabricksMcpAdapter(endpoints=DEFAULT_ENDPOINTS, client_factory=client_factory)
