"""
Shared test fixtures for the Databricks MCP server tests.

Provides a recording stub transport, tenant credentials, and adapters
wired to the stub so no test ever reaches a real workspace.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from databricks_mcp.adapter import DatabricksMcpAdapter
from databricks_mcp.client import DatabricksClient
from databricks_mcp.credentials import TenantCredentials
from databricks_mcp.models import ToolCallResult

WORKSPACE_HOST = "https://adb-1234567890.12.azuredatabricks.net"
TOKEN = "dapi-test-token-0123456789"


# -----------------------------------------------------------------------------
# Stub HTTP Transport
# -----------------------------------------------------------------------------

StubEntry = (
    tuple[int, Any]
    | tuple[int, Any, dict[str, str]]
    | Callable[[httpx.Request], httpx.Response]
    | Exception
)


class StubTransport(httpx.AsyncBaseTransport):
    """
    Transport that returns canned responses and records every request.

    Responses are keyed by URL path. Each entry is one of:
    - (status, data) or (status, data, headers); data may be JSON-able,
      str/bytes for a raw body, or None for no body
    - a callable taking the request and returning a response
    - an exception instance, raised as if the network failed
    """

    def __init__(
        self,
        responses: dict[str, StubEntry] | None = None,
        default: StubEntry = (404, {"error_code": "NOT_FOUND", "message": "Not found"}),
    ):
        self.responses = dict(responses or {})
        self.default = default
        self.requests: list[httpx.Request] = []

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        entry = self.responses.get(request.url.path, self.default)

        if isinstance(entry, Exception):
            raise entry
        if callable(entry):
            return entry(request)

        status, data, *rest = entry
        headers = rest[0] if rest else None
        if data is None:
            return httpx.Response(status, headers=headers)
        if isinstance(data, (str, bytes)):
            return httpx.Response(status, content=data, headers=headers)
        return httpx.Response(status, json=data, headers=headers)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        """Decoded JSON body of the most recent request."""
        return json.loads(self.last_request.content)


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------


def payload(result: ToolCallResult) -> Any:
    """Decode the JSON text of a tool result."""
    return json.loads(result.content[0].text)


# -----------------------------------------------------------------------------
# Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def credentials() -> TenantCredentials:
    return TenantCredentials(
        host=f"{WORKSPACE_HOST}/",
        token=TOKEN,
        warehouse_id="wh-default",
    )


@pytest.fixture
def stub_transport() -> StubTransport:
    return StubTransport()


@pytest.fixture
def client(credentials: TenantCredentials, stub_transport: StubTransport) -> DatabricksClient:
    return DatabricksClient(credentials, transport=stub_transport)


@pytest.fixture
def adapter(stub_transport: StubTransport) -> DatabricksMcpAdapter:
    """Adapter with every tool, each call building a client on the stub transport."""
    return DatabricksMcpAdapter(
        client_factory=lambda creds: DatabricksClient(creds, transport=stub_transport),
    )
