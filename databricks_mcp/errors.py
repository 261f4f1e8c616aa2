"""
Gateway Failure Types

Canonical failure taxonomy for the Databricks MCP server.
All failures raised by the gateway MUST be instances of these types, so
callers can branch on the failure kind without matching message strings.
"""

from __future__ import annotations

from typing import Any


class GatewayFailure(Exception):
    """Base class for all gateway failures."""

    failure_category: str = "unknown"

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause

    def to_dict(self) -> dict[str, Any]:
        """Structured, caller-visible representation of this failure."""
        return {"error": self.failure_category, "message": self.message}


# -----------------------------------------------------------------------------
# Credential Failures (raised before any network activity)
# -----------------------------------------------------------------------------


class CredentialError(GatewayFailure):
    """
    Required tenant credentials are absent from the inbound call.

    - Fatality: Fatal to the inbound call. No remote request is attempted.
    - MCP Representation: HTTP 401 with the list of required headers.
    """

    failure_category = "credential_error"
    header: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "header": self.header}


class MissingHost(CredentialError):
    """The workspace host header is missing or empty."""

    def __init__(self, header: str) -> None:
        super().__init__(
            f"Missing {header} header. Provide your Databricks workspace URL."
        )
        self.header = header


class MissingToken(CredentialError):
    """The personal access token header is missing or empty."""

    def __init__(self, header: str) -> None:
        super().__init__(
            f"Missing {header} header. Provide your Databricks personal access token."
        )
        self.header = header


# -----------------------------------------------------------------------------
# Remote Failures (normalized by the request pipeline)
# -----------------------------------------------------------------------------


class AuthenticationError(GatewayFailure):
    """
    The token is absent, or the workspace rejected it (401/403).

    The remote response body is never forwarded: it may carry hints
    about the credential.
    """

    failure_category = "authentication_error"


class RateLimitError(GatewayFailure):
    """
    The workspace answered 429.

    Never retried here. The caller decides whether to retry after
    ``retry_after_seconds``.
    """

    failure_category = "rate_limit"

    def __init__(self, message: str, *, retry_after_seconds: int) -> None:
        super().__init__(message)
        self.retry_after_seconds = retry_after_seconds

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "retry_after_seconds": self.retry_after_seconds}


class ApiError(GatewayFailure):
    """Any other non-2xx answer from the workspace."""

    failure_category = "api_error"

    def __init__(
        self,
        message: str,
        *,
        http_status: int,
        code: str | None = None,
    ) -> None:
        super().__init__(message)
        self.http_status = http_status
        self.code = code

    def to_dict(self) -> dict[str, Any]:
        data = {**super().to_dict(), "http_status": self.http_status}
        if self.code is not None:
            data["code"] = self.code
        return data


class DecodeError(GatewayFailure):
    """A nominally successful (2xx) response carried a body that is not JSON."""

    failure_category = "decode_error"

    def __init__(
        self,
        message: str,
        *,
        http_status: int,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.http_status = http_status

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "http_status": self.http_status}


class UnexpectedResponse(GatewayFailure):
    """
    A decoded success body does not have the shape the facade expects
    (a list where an object belongs, a wrongly typed field).

    - Fatality: Fatal to the tool call.
    - MCP Representation: ToolCallResult with isError.
    """

    failure_category = "unexpected_response"

    def __init__(self, message: str, *, tool_name: str, cause: Exception | None = None) -> None:
        super().__init__(message, cause=cause)
        self.tool_name = tool_name

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "tool": self.tool_name}


class TransportFailure(GatewayFailure):
    """
    Communication with the workspace failed at the transport layer.

    - Fatality: Fatal to the tool call. The tool cannot complete.
    - MCP Representation: ToolCallResult with isError.
    """

    failure_category = "transport_failure"


# -----------------------------------------------------------------------------
# Dispatcher Failures
# -----------------------------------------------------------------------------


class ContractViolation(GatewayFailure):
    """
    The call violates the tool contract: unknown tool, or arguments that
    do not match the declared input shape.

    - Fatality: Fatal. Request cannot proceed.
    - MCP Representation: JSON-RPC error response with INVALID_PARAMS.
    """

    failure_category = "contract_violation"

    def __init__(
        self,
        message: str,
        *,
        tool_name: str | None = None,
        errors: list[str] | None = None,
    ) -> None:
        super().__init__(message)
        self.tool_name = tool_name
        self.errors = errors or []

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "tool": self.tool_name, "errors": self.errors}


class ContextError(GatewayFailure):
    """An inbound JSON-RPC envelope is ambiguous (empty id or method)."""

    failure_category = "context_error"
