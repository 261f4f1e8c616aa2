"""
Connection Domain

A single probe tool that checks the tenant's host and token by reading
the current user. It reports failures as a regular result so an agent can
check connectivity without handling an error.
"""

from __future__ import annotations

from typing import Any

from ..endpoints import HttpMethod, RestEndpoint
from ..errors import GatewayFailure


def connected(data: Any) -> dict[str, Any]:
    return {"connected": True, "message": "Successfully connected to Databricks workspace"}


def not_connected(failure: GatewayFailure) -> dict[str, Any]:
    return {"connected": False, "message": failure.message}


CONNECTION_ENDPOINTS: list[RestEndpoint] = [
    RestEndpoint(
        name="databricks_test_connection",
        path="/api/2.0/preview/scim/v2/Me",
        method=HttpMethod.GET,
        description="Test the connection to the Databricks workspace.",
        category="connection",
        reshape=connected,
        on_failure=not_connected,
    ),
]
