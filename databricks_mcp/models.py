"""
MCP Protocol Models

Pydantic schemas for JSON-RPC 2.0 messages as used by the Model Context Protocol,
plus the per-call ExecutionContext the dispatcher threads through a request.

Reference: https://modelcontextprotocol.io/specification
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from .config import MCP_PROTOCOL_VERSION, SERVER_NAME, SERVER_VERSION
from .errors import ContextError


# -----------------------------------------------------------------------------
# JSON-RPC 2.0 Base Types
# -----------------------------------------------------------------------------


class JsonRpcRequest(BaseModel):
    """
    JSON-RPC 2.0 request object.

    MCP uses JSON-RPC as its wire protocol. A request without an id is a
    notification and gets no response.
    """

    model_config = ConfigDict(extra="forbid")

    jsonrpc: Literal["2.0"] = "2.0"
    id: int | str | None = None
    method: str
    params: dict[str, Any] | None = None

    @property
    def is_notification(self) -> bool:
        return self.id is None


class JsonRpcResponse(BaseModel):
    """JSON-RPC 2.0 success response."""

    model_config = ConfigDict(extra="forbid")

    jsonrpc: Literal["2.0"] = "2.0"
    id: int | str
    result: Any


class JsonRpcErrorData(BaseModel):
    """Structured error information."""

    code: int
    message: str
    data: Any | None = None


class JsonRpcErrorResponse(BaseModel):
    """JSON-RPC 2.0 error response."""

    jsonrpc: Literal["2.0"] = "2.0"
    id: int | str | None
    error: JsonRpcErrorData


# Standard JSON-RPC error codes
class ErrorCode(int, Enum):
    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603


# -----------------------------------------------------------------------------
# MCP Tool Types
# -----------------------------------------------------------------------------


class ToolInputSchema(BaseModel):
    """
    JSON Schema describing a tool's input parameters.

    LLM agents use this schema to construct valid tool calls.
    """

    type: Literal["object"] = "object"
    properties: dict[str, dict[str, Any]] = Field(default_factory=dict)
    required: list[str] = Field(default_factory=list)


class Tool(BaseModel):
    """MCP Tool definition: a name, a description for the LLM, and an input schema."""

    name: str
    description: str
    inputSchema: ToolInputSchema  # noqa: N815 (MCP uses camelCase)


class ToolCallParams(BaseModel):
    """Parameters for tools/call method."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    name: str
    arguments: dict[str, Any] = Field(default_factory=dict)
    meta: dict[str, Any] | None = Field(default=None, alias="_meta")


# -----------------------------------------------------------------------------
# Content Types
# -----------------------------------------------------------------------------


class TextContent(BaseModel):
    """Text content block."""

    type: Literal["text"] = "text"
    text: str


class ToolCallResult(BaseModel):
    """Result of a tool invocation."""

    content: list[TextContent]
    isError: bool = False  # noqa: N815

    @property
    def text(self) -> str:
        return "".join(block.text for block in self.content)


# -----------------------------------------------------------------------------
# MCP Method Responses
# -----------------------------------------------------------------------------


class ListToolsResult(BaseModel):
    """Response to tools/list method."""

    tools: list[Tool]


class InitializeResult(BaseModel):
    """Response to initialize method."""

    protocolVersion: str = MCP_PROTOCOL_VERSION  # noqa: N815
    serverInfo: dict[str, str] = Field(  # noqa: N815
        default_factory=lambda: {"name": SERVER_NAME, "version": SERVER_VERSION}
    )
    capabilities: dict[str, Any] = Field(default_factory=lambda: {"tools": {}})


# -----------------------------------------------------------------------------
# Execution Context
# -----------------------------------------------------------------------------

_CONSTRUCTION_TOKEN = object()


class ExecutionContext:
    """
    Record of one JSON-RPC request as it moves through the dispatcher.

    Created only via from_request(). Mutation methods return new instances;
    once sealed, a context rejects every further change. It never holds
    tenant credentials.
    """

    __slots__ = (
        "_request_id",
        "_method",
        "_tool_name",
        "_arguments",
        "_results",
        "_created_at",
        "_sealed",
    )

    def __init__(
        self,
        request_id: int | str,
        method: str,
        *,
        _token: object = None,
        tool_name: str | None = None,
        arguments: dict[str, Any] | None = None,
        results: tuple[ToolCallResult, ...] = (),
        created_at: datetime | None = None,
    ) -> None:
        if _token is not _CONSTRUCTION_TOKEN:
            raise ContextError(
                "ExecutionContext cannot be constructed directly; use from_request()"
            )
        self._request_id = request_id
        self._method = method
        self._tool_name = tool_name
        self._arguments = dict(arguments or {})
        self._results = results
        self._created_at = created_at or datetime.now(timezone.utc)
        self._sealed = False

    @classmethod
    def from_request(cls, request: JsonRpcRequest) -> ExecutionContext:
        """
        Create a context for a request.

        Raises:
            ContextError: id missing or empty, or method empty
        """
        if request.id is None:
            raise ContextError("Cannot create context: request.id is missing")
        if isinstance(request.id, str) and not request.id.strip():
            raise ContextError("Cannot create context: request.id is empty")
        if not request.method.strip():
            raise ContextError("Cannot create context: method is empty")
        return cls(request.id, request.method, _token=_CONSTRUCTION_TOKEN)

    def _check_unsealed(self, operation: str) -> None:
        if self._sealed:
            raise ContextError(f"Cannot {operation}: context is sealed")

    def _copy(self, **changes: Any) -> ExecutionContext:
        state: dict[str, Any] = {
            "tool_name": self._tool_name,
            "arguments": self._arguments,
            "results": self._results,
            "created_at": self._created_at,
        }
        state.update(changes)
        return ExecutionContext(
            self._request_id,
            self._method,
            _token=_CONSTRUCTION_TOKEN,
            **state,
        )

    @property
    def request_id(self) -> int | str:
        return self._request_id

    @property
    def method(self) -> str:
        return self._method

    @property
    def tool_name(self) -> str | None:
        return self._tool_name

    @property
    def arguments(self) -> dict[str, Any]:
        return dict(self._arguments)

    @property
    def results(self) -> tuple[ToolCallResult, ...]:
        return self._results

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def is_sealed(self) -> bool:
        return self._sealed

    def with_tool_call(self, name: str, arguments: dict[str, Any]) -> ExecutionContext:
        """Bind the tool being called. A context binds at most one tool."""
        self._check_unsealed("bind tool call")
        if not name or not name.strip():
            raise ContextError("Cannot bind tool call: tool name is empty")
        if self._tool_name is not None:
            raise ContextError(
                f"Cannot bind tool call: tool '{self._tool_name}' is already bound"
            )
        return self._copy(tool_name=name, arguments=arguments)

    def with_result(self, result: ToolCallResult | None) -> ExecutionContext:
        """Record a tool result."""
        self._check_unsealed("add result")
        if result is None:
            raise ContextError("Cannot add result: result is None")
        if self._tool_name is None:
            raise ContextError("Cannot add result: no tool_name set")
        return self._copy(results=(*self._results, result))

    def seal(self) -> ExecutionContext:
        """Freeze this context. Returns self for chaining."""
        self._sealed = True
        return self

    def context_size(self) -> int:
        """Total characters of recorded result text."""
        return sum(len(result.text) for result in self._results)

    def __repr__(self) -> str:
        state = " SEALED" if self._sealed else ""
        tool = f" tool={self._tool_name}" if self._tool_name else ""
        return (
            f"<ExecutionContext id={self._request_id} method={self._method}"
            f"{tool} results={len(self._results)}{state}>"
        )


# -----------------------------------------------------------------------------
# Helper Functions
# -----------------------------------------------------------------------------


def make_error_response(
    request_id: int | str | None,
    code: ErrorCode,
    message: str,
    data: Any | None = None,
) -> JsonRpcErrorResponse:
    """Construct a JSON-RPC error response."""
    return JsonRpcErrorResponse(
        id=request_id,
        error=JsonRpcErrorData(code=code.value, message=message, data=data),
    )


def make_success_response(request_id: int | str, result: Any) -> JsonRpcResponse:
    """Construct a JSON-RPC success response."""
    return JsonRpcResponse(id=request_id, result=result)
