"""
MCP Server

FastAPI application exposing the Databricks adapter as a multi-tenant MCP
server. Handles JSON-RPC 2.0 over HTTP POST.

Every POST /mcp carries the tenant's workspace host and token as headers.
Calls without them are refused with 401 before any remote request is made.
"""

from __future__ import annotations

import json
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from .adapter import ClientFactory, DatabricksMcpAdapter, create_adapter
from .client import create_databricks_client
from .config import (
    ENVIRONMENT,
    LOG_LEVEL,
    OPTIONAL_HEADERS,
    REQUIRED_HEADERS,
    SERVER_DESCRIPTION,
    SERVER_NAME,
    SERVER_VERSION,
)
from .credentials import resolve_credentials, validate_credentials
from .endpoints import tool_catalog
from .errors import ContextError, CredentialError
from .logging_config import configure_logging
from .models import ErrorCode, JsonRpcRequest, make_error_response

logger = structlog.get_logger()


# -----------------------------------------------------------------------------
# Application Lifecycle
# -----------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Configure logging once at startup."""
    configure_logging(environment=ENVIRONMENT, log_level=LOG_LEVEL)
    logger.info(
        "server_started",
        server=SERVER_NAME,
        version=SERVER_VERSION,
        tools=len(app.state.adapter.endpoints),
    )
    yield


def _unauthorized(error: CredentialError) -> JSONResponse:
    return JSONResponse(
        status_code=401,
        content={
            "error": "Unauthorized",
            "message": error.message,
            "required_headers": REQUIRED_HEADERS,
        },
    )


def _rpc_error(request_id: Any, code: ErrorCode, message: str) -> JSONResponse:
    error = make_error_response(request_id, code, message)
    return JSONResponse(content=error.model_dump(), status_code=200)


def create_app(client_factory: ClientFactory = create_databricks_client) -> FastAPI:
    """Build the FastAPI application around a fresh adapter."""
    app = FastAPI(
        title="Databricks MCP Server",
        description=SERVER_DESCRIPTION,
        version=SERVER_VERSION,
        lifespan=lifespan,
    )
    app.state.adapter = create_adapter(client_factory)

    @app.post("/mcp")
    async def mcp_endpoint(request: Request) -> Response:
        """
        Main MCP endpoint accepting JSON-RPC 2.0 requests.

        Credentials are checked first; the body is not even parsed for a
        call that cannot be authenticated.
        """
        adapter: DatabricksMcpAdapter = request.app.state.adapter

        credentials = resolve_credentials(request.headers)
        try:
            validate_credentials(credentials)
        except CredentialError as e:
            logger.warning("credentials_rejected", header=e.header)
            return _unauthorized(e)

        try:
            body = json.loads(await request.body())
        except (json.JSONDecodeError, UnicodeDecodeError):
            return _rpc_error(None, ErrorCode.PARSE_ERROR, "Invalid JSON")

        if not isinstance(body, dict):
            return _rpc_error(None, ErrorCode.INVALID_REQUEST, "Request must be a JSON object")

        try:
            rpc_request = JsonRpcRequest.model_validate(body)
        except ValidationError as e:
            return _rpc_error(body.get("id"), ErrorCode.INVALID_REQUEST, f"Invalid request: {e}")

        if rpc_request.is_notification:
            return Response(status_code=202)

        try:
            response, context = await adapter.handle_request(rpc_request, credentials)
        except ContextError as e:
            return _rpc_error(rpc_request.id, ErrorCode.INVALID_REQUEST, e.message)

        elapsed = datetime.now(timezone.utc) - context.created_at
        logger.debug(
            "mcp_request_handled",
            method=context.method,
            tool=context.tool_name,
            results=len(context.results),
            context_size=context.context_size(),
            duration_ms=round(elapsed.total_seconds() * 1000, 2),
        )
        return JSONResponse(content=response.model_dump(), status_code=200)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "ok", "server": SERVER_NAME}

    @app.get("/")
    async def catalog(request: Request) -> dict[str, Any]:
        """Describe the server, how to authenticate, and the tools it offers."""
        adapter: DatabricksMcpAdapter = request.app.state.adapter
        return {
            "name": SERVER_NAME,
            "version": SERVER_VERSION,
            "description": SERVER_DESCRIPTION,
            "endpoints": {
                "mcp": "/mcp (POST) - JSON-RPC MCP endpoint",
                "health": "/health - Health check",
                "tools": "/tools - Tool definitions",
            },
            "authentication": {
                "description": "Pass Databricks credentials via request headers",
                "required_headers": REQUIRED_HEADERS,
                "optional_headers": OPTIONAL_HEADERS,
            },
            "tools": tool_catalog(list(adapter.endpoints.values())),
        }

    @app.get("/tools")
    async def list_tools(request: Request) -> dict[str, Any]:
        """
        Convenience endpoint to list available tools.

        Not part of MCP - useful for debugging and exploration.
        MCP clients use the tools/list method instead.
        """
        adapter: DatabricksMcpAdapter = request.app.state.adapter
        return {"tools": [t.model_dump() for t in adapter.list_tools()]}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
