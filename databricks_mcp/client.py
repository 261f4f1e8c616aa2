"""
Databricks Request Pipeline

The single choke point through which every remote call passes:

1. Build the URL from the tenant's workspace host and the operation path
2. Attach bearer auth (fail fast with AuthenticationError on an empty token)
3. Send the request with a JSON body, when there is one
4. Interpret the status code into a decoded result or a typed failure

Nothing here retries, caches, or pools connections. A DatabricksClient is
built from one call's credentials and discarded when that call completes.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

import httpx
import structlog

from .config import (
    DEFAULT_RETRY_AFTER_SECONDS,
    HTTP_TIMEOUT_SECONDS,
    TOKEN_HEADER,
    USER_AGENT,
)
from .credentials import TenantCredentials
from .errors import (
    ApiError,
    AuthenticationError,
    DecodeError,
    RateLimitError,
    TransportFailure,
)

logger = structlog.get_logger()


class HttpMethod(str, Enum):
    """HTTP methods supported by the pipeline."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"


@dataclass(frozen=True)
class RequestDescriptor:
    """One outbound call: built by a facade, consumed once by the pipeline."""

    path: str
    method: HttpMethod = HttpMethod.GET
    body: Any = None
    params: Mapping[str, Any] | None = None


def _encode_body(body: Any) -> str | None:
    """
    JSON-encode a request body, or None when there is nothing to send.

    Top-level None values are dropped from dict bodies so optional fields
    are omitted rather than sent as null.
    """
    if isinstance(body, Mapping):
        body = {key: value for key, value in body.items() if value is not None}
    if body is None or (isinstance(body, (dict, list)) and not body):
        return None
    return json.dumps(body)


def _clean_params(params: Mapping[str, Any] | None) -> dict[str, Any]:
    """Drop None query values and render booleans the way the REST API expects."""
    cleaned: dict[str, Any] = {}
    for key, value in (params or {}).items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        cleaned[key] = value
    return cleaned


def _retry_after(value: str | None) -> int:
    """Parse a Retry-After header in seconds, defaulting when absent or malformed."""
    if value is None:
        return DEFAULT_RETRY_AFTER_SECONDS
    try:
        seconds = int(value.strip())
    except ValueError:
        return DEFAULT_RETRY_AFTER_SECONDS
    return seconds if seconds >= 0 else DEFAULT_RETRY_AFTER_SECONDS


def _api_error(response: httpx.Response) -> ApiError:
    """Best-effort extraction of message and error_code from an error body."""
    message = f"API error: {response.status_code}"
    code: str | None = None
    try:
        payload = json.loads(response.text)
    except json.JSONDecodeError:
        payload = None

    if isinstance(payload, dict):
        message = str(payload.get("message") or payload.get("error") or message)
        if payload.get("error_code") is not None:
            code = str(payload["error_code"])

    return ApiError(message, http_status=response.status_code, code=code)


def interpret_response(response: httpx.Response) -> Any:
    """
    Turn an HTTP response into a decoded result or a typed failure.

    Returns None for 204 and for empty 2xx bodies.

    Raises:
        RateLimitError: 429
        AuthenticationError: 401 or 403 (remote body is never forwarded)
        ApiError: any other non-2xx status
        DecodeError: a 2xx body that is not valid JSON
    """
    status = response.status_code

    if status == 429:
        raise RateLimitError(
            "Rate limit exceeded",
            retry_after_seconds=_retry_after(response.headers.get("Retry-After")),
        )

    if status in (401, 403):
        raise AuthenticationError(
            "Authentication failed. Check your Databricks personal access token."
        )

    if not response.is_success:
        raise _api_error(response)

    if status == 204:
        return None

    text = response.text
    if not text:
        return None

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise DecodeError(
            f"Invalid JSON in successful response (status {status})",
            http_status=status,
            cause=e,
        ) from e


class DatabricksClient:
    """
    Tenant-scoped client for the Databricks REST API.

    Holds only the credentials of the call that created it. Each request
    opens its own HTTP connection; there is no shared session.
    """

    def __init__(
        self,
        credentials: TenantCredentials,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = HTTP_TIMEOUT_SECONDS,
    ) -> None:
        self.credentials = credentials
        self.base_url = credentials.base_url
        self._transport = transport
        self._timeout = timeout

    def _auth_headers(self) -> dict[str, str]:
        if not self.credentials.token:
            raise AuthenticationError(
                f"No credentials provided. Include {TOKEN_HEADER} header."
            )

        return {
            "Authorization": f"Bearer {self.credentials.token}",
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": USER_AGENT,
        }

    async def execute(self, descriptor: RequestDescriptor) -> Any:
        """Run a prepared RequestDescriptor through the pipeline."""
        return await self.request(
            descriptor.method,
            descriptor.path,
            body=descriptor.body,
            params=descriptor.params,
        )

    async def request(
        self,
        method: HttpMethod,
        path: str,
        *,
        body: Any = None,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        """Send one request to the workspace and interpret the response."""
        url = f"{self.base_url}{path}"
        headers = self._auth_headers()
        content = _encode_body(body)
        query = _clean_params(params)

        log = logger.bind(method=method.value, path=path)
        log.debug("databricks_request")

        try:
            async with httpx.AsyncClient(
                transport=self._transport,
                timeout=self._timeout,
            ) as client:
                response = await client.request(
                    method.value,
                    url,
                    headers=headers,
                    params=query or None,
                    content=content,
                )
        except httpx.TransportError as e:
            log.warning("databricks_transport_failure", error=type(e).__name__)
            raise TransportFailure(
                f"Could not reach Databricks workspace: {type(e).__name__}",
                cause=e,
            ) from e

        try:
            return interpret_response(response)
        except (RateLimitError, AuthenticationError, ApiError, DecodeError) as e:
            log.warning(
                "databricks_request_failed",
                failure=e.failure_category,
                status=response.status_code,
            )
            raise

    async def get(self, path: str, params: Mapping[str, Any] | None = None) -> Any:
        return await self.request(HttpMethod.GET, path, params=params)

    async def post(self, path: str, body: Any = None) -> Any:
        return await self.request(HttpMethod.POST, path, body=body)

    async def put(self, path: str, body: Any = None) -> Any:
        return await self.request(HttpMethod.PUT, path, body=body)

    async def patch(self, path: str, body: Any = None) -> Any:
        return await self.request(HttpMethod.PATCH, path, body=body)

    async def delete(self, path: str, body: Any = None) -> Any:
        return await self.request(HttpMethod.DELETE, path, body=body)


def create_databricks_client(
    credentials: TenantCredentials,
    transport: httpx.AsyncBaseTransport | None = None,
) -> DatabricksClient:
    """Create a client bound to one call's tenant credentials."""
    return DatabricksClient(credentials, transport=transport)
