"""Multi-tenant Databricks MCP server package."""

from .adapter import DatabricksMcpAdapter, create_adapter
from .client import (
    DatabricksClient,
    HttpMethod,
    RequestDescriptor,
    create_databricks_client,
    interpret_response,
)
from .config import MCP_PROTOCOL_VERSION, SERVER_NAME, SERVER_VERSION
from .credentials import TenantCredentials, resolve_credentials, validate_credentials
from .endpoints import (
    DEFAULT_ENDPOINTS,
    Param,
    ParamLocation,
    ParamType,
    RestEndpoint,
    tool_catalog,
)
from .errors import (
    ApiError,
    AuthenticationError,
    ContextError,
    ContractViolation,
    CredentialError,
    DecodeError,
    GatewayFailure,
    MissingHost,
    MissingToken,
    RateLimitError,
    TransportFailure,
    UnexpectedResponse,
)
from .models import (
    ErrorCode,
    ExecutionContext,
    InitializeResult,
    JsonRpcErrorData,
    JsonRpcErrorResponse,
    JsonRpcRequest,
    JsonRpcResponse,
    ListToolsResult,
    TextContent,
    Tool,
    ToolCallParams,
    ToolCallResult,
    ToolInputSchema,
    make_error_response,
    make_success_response,
)

__all__ = [
    # Adapter
    "DatabricksMcpAdapter",
    "create_adapter",
    # Request pipeline
    "DatabricksClient",
    "HttpMethod",
    "RequestDescriptor",
    "create_databricks_client",
    "interpret_response",
    # Credentials
    "TenantCredentials",
    "resolve_credentials",
    "validate_credentials",
    # Endpoints
    "DEFAULT_ENDPOINTS",
    "Param",
    "ParamLocation",
    "ParamType",
    "RestEndpoint",
    "tool_catalog",
    # Config
    "SERVER_NAME",
    "SERVER_VERSION",
    "MCP_PROTOCOL_VERSION",
    # Errors
    "GatewayFailure",
    "CredentialError",
    "MissingHost",
    "MissingToken",
    "AuthenticationError",
    "RateLimitError",
    "ApiError",
    "DecodeError",
    "TransportFailure",
    "UnexpectedResponse",
    "ContractViolation",
    "ContextError",
    # Models
    "JsonRpcRequest",
    "JsonRpcResponse",
    "JsonRpcErrorResponse",
    "JsonRpcErrorData",
    "Tool",
    "ToolInputSchema",
    "ToolCallParams",
    "ToolCallResult",
    "TextContent",
    "ListToolsResult",
    "InitializeResult",
    "ErrorCode",
    "ExecutionContext",
    "make_error_response",
    "make_success_response",
]
