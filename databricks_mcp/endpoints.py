"""
Endpoint definitions for the Databricks MCP server.

This module contains:
- Core types: Param, RestEndpoint (one row of the facade table)
- Reshapers that turn decoded JSON into the shapes facades return
- Aggregated endpoint lists imported from domain modules

Domain-specific endpoints are isolated in the domains/ package.
To add a new area: create domains/newarea.py and import it here.
"""

from __future__ import annotations

import json
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from urllib.parse import quote

from pydantic import BaseModel

from .client import HttpMethod, RequestDescriptor
from .credentials import TenantCredentials
from .errors import ContractViolation, GatewayFailure
from .models import Tool, ToolInputSchema


class ParamType(str, Enum):
    """Declared type of a tool argument."""

    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    JSON = "json"  # a JSON document passed as a string, decoded before sending


class ParamLocation(str, Enum):
    """Where an argument goes in the outbound request."""

    PATH = "path"
    QUERY = "query"
    BODY = "body"


_JSON_SCHEMA_TYPES: dict[ParamType, str] = {
    ParamType.STRING: "string",
    ParamType.INTEGER: "integer",
    ParamType.NUMBER: "number",
    ParamType.BOOLEAN: "boolean",
    ParamType.ARRAY: "array",
    ParamType.JSON: "string",
}

_MISSING = object()


def _snake_case(name: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


@dataclass(frozen=True)
class Param:
    """
    One named, typed argument of a tool.

    Arguments are exposed to agents in camelCase and sent to the REST API
    under ``wire_name`` (snake_case of the name unless given).
    """

    name: str
    description: str
    type: ParamType = ParamType.STRING
    location: ParamLocation = ParamLocation.BODY
    required: bool = True
    wire_name: str | None = None
    default: Any = None
    default_factory: Callable[[], Any] | None = None
    enum: tuple[str, ...] | None = None
    minimum: float | None = None
    maximum: float | None = None
    transform: Callable[[Any], Any] | None = None
    spread: bool = False  # merge a decoded JSON object into the body
    credential_fallback: str | None = None  # TenantCredentials attribute

    @property
    def wire(self) -> str:
        return self.wire_name or _snake_case(self.name)

    def to_schema(self) -> dict[str, Any]:
        """JSON Schema fragment for this argument."""
        schema: dict[str, Any] = {
            "type": _JSON_SCHEMA_TYPES[self.type],
            "description": self.description,
        }
        if self.type is ParamType.ARRAY:
            schema["items"] = {"type": "string"}
        if self.type is ParamType.JSON:
            schema["description"] = f"{self.description} (JSON string)"
        if self.enum:
            schema["enum"] = list(self.enum)
        if self.minimum is not None:
            schema["minimum"] = self.minimum
        if self.maximum is not None:
            schema["maximum"] = self.maximum
        if self.default is not None:
            schema["default"] = self.default
        return schema

    def coerce(self, value: Any) -> tuple[Any, str | None]:
        """Check a supplied value against the declared type. Returns (value, error)."""
        match self.type:
            case ParamType.STRING:
                if not isinstance(value, str):
                    return value, f"'{self.name}' must be a string"
            case ParamType.INTEGER:
                if isinstance(value, float) and value.is_integer():
                    value = int(value)
                if isinstance(value, bool) or not isinstance(value, int):
                    return value, f"'{self.name}' must be an integer"
            case ParamType.NUMBER:
                if isinstance(value, bool) or not isinstance(value, (int, float)):
                    return value, f"'{self.name}' must be a number"
            case ParamType.BOOLEAN:
                if not isinstance(value, bool):
                    return value, f"'{self.name}' must be a boolean"
            case ParamType.ARRAY:
                if not isinstance(value, list):
                    return value, f"'{self.name}' must be an array"
            case ParamType.JSON:
                if isinstance(value, str):
                    try:
                        value = json.loads(value)
                    except json.JSONDecodeError as e:
                        return value, f"'{self.name}' is not valid JSON: {e.msg}"
                if self.spread and not isinstance(value, dict):
                    return value, f"'{self.name}' must be a JSON object"

        if self.enum and value not in self.enum:
            return value, f"'{self.name}' must be one of: {', '.join(self.enum)}"
        if self.minimum is not None and value < self.minimum:
            return value, f"'{self.name}' must be >= {self.minimum:g}"
        if self.maximum is not None and value > self.maximum:
            return value, f"'{self.name}' must be <= {self.maximum:g}"
        if self.location is ParamLocation.PATH and not str(value).strip():
            return value, f"Path parameter '{self.name}' cannot be empty"
        return value, None


# -----------------------------------------------------------------------------
# Reshapers
# -----------------------------------------------------------------------------


def unwrap_list(key: str) -> Callable[[Any], list[Any]]:
    """Unwrap ``{key: [...]}`` into a plain list; an absent key gives []."""

    def reshape(data: Any) -> list[Any]:
        return list((data or {}).get(key) or [])

    return reshape


def unwrap(key: str) -> Callable[[Any], Any]:
    """Unwrap ``{key: {...}}`` into the inner value; an absent key gives None."""

    def reshape(data: Any) -> Any:
        return (data or {}).get(key)

    return reshape


def page(model: type[BaseModel]) -> Callable[[Any], dict[str, Any]]:
    """Validate into a result model so absent list fields default to []."""

    def reshape(data: Any) -> dict[str, Any]:
        return model.model_validate(data or {}).model_dump(exclude_none=True)

    return reshape


# -----------------------------------------------------------------------------
# Endpoint Definition
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class RestEndpoint:
    """
    Definition of a Databricks REST endpoint exposed as an MCP tool.

    Maps REST semantics to tool semantics:
    - path: URL path; ``{name}`` placeholders are filled from PATH params
    - method: HTTP method
    - params: declared arguments and where each one goes
    - build_body: optional hook when the body is not a flat field mapping
    - reshape: turns the decoded JSON into the facade's result
    - list_key / count_key / success_message / echo: how the dispatcher
      renders the result for the calling agent
    - on_failure: optional hook turning a failure into a regular result
    """

    name: str
    path: str
    method: HttpMethod
    description: str
    category: str = "general"
    params: tuple[Param, ...] = ()
    build_body: Callable[[dict[str, Any]], Any] | None = None
    reshape: Callable[[Any], Any] | None = None
    list_key: str | None = None
    count_key: str | None = None
    success_message: str | None = None
    echo: Mapping[str, str] = field(default_factory=dict)
    on_failure: Callable[[GatewayFailure], Any] | None = None

    def param(self, name: str) -> Param | None:
        return next((p for p in self.params if p.name == name), None)

    def _resolve(
        self,
        arguments: Mapping[str, Any],
        credentials: TenantCredentials | None,
    ) -> tuple[dict[str, Any], list[str]]:
        errors: list[str] = []
        values: dict[str, Any] = {}

        known = {p.name for p in self.params}
        for arg in arguments:
            if arg not in known:
                errors.append(
                    f"Unknown argument '{arg}' - tool '{self.name}' does not accept this parameter"
                )

        for param in self.params:
            value = arguments.get(param.name, _MISSING)
            if value is None:
                value = _MISSING

            if value is _MISSING and param.credential_fallback and credentials:
                value = getattr(credentials, param.credential_fallback) or _MISSING

            if value is _MISSING:
                if param.default_factory is not None:
                    values[param.name] = param.default_factory()
                elif param.default is not None:
                    values[param.name] = param.default
                elif param.required or param.location is ParamLocation.PATH:
                    errors.append(f"Missing required parameter: '{param.name}'")
                else:
                    values[param.name] = None
                continue

            value, error = param.coerce(value)
            if error:
                errors.append(error)
            values[param.name] = value

        return values, errors

    def validate_arguments(
        self,
        arguments: Mapping[str, Any],
        credentials: TenantCredentials | None = None,
    ) -> list[str]:
        """
        Validate arguments against this endpoint's declared params.

        Returns list of validation errors. Empty list = valid.
        Unknown arguments are rejected; tools receive only what they declare.
        """
        _, errors = self._resolve(arguments, credentials)
        return errors

    def bind_arguments(
        self,
        arguments: Mapping[str, Any],
        credentials: TenantCredentials | None = None,
    ) -> dict[str, Any]:
        """
        Resolve arguments into final values (decoded, defaulted).

        Raises:
            ContractViolation: carrying every validation error at once
        """
        values, errors = self._resolve(arguments, credentials)
        if errors:
            raise ContractViolation(
                f"Invalid arguments for tool '{self.name}': {'; '.join(errors)}",
                tool_name=self.name,
                errors=errors,
            )
        return values

    def build_request(self, values: Mapping[str, Any]) -> RequestDescriptor:
        """Build the outbound RequestDescriptor from bound argument values."""
        path = self.path
        params: dict[str, Any] = {}
        body: dict[str, Any] = {}

        for param in self.params:
            value = values.get(param.name)
            if value is not None and param.transform is not None:
                value = param.transform(value)

            if param.location is ParamLocation.PATH:
                path = path.replace(f"{{{param.name}}}", quote(str(value), safe=""))
            elif param.location is ParamLocation.QUERY:
                params[param.wire] = value
            elif param.spread:
                body.update(value or {})
            else:
                body[param.wire] = value

        if self.build_body is not None:
            request_body: Any = self.build_body(dict(values))
        else:
            request_body = body or None

        return RequestDescriptor(
            path=path,
            method=self.method,
            body=request_body,
            params=params or None,
        )

    def present(self, values: Mapping[str, Any], result: Any) -> Any:
        """Render a facade result the way the calling agent sees it."""
        echoed = {key: values.get(arg) for key, arg in self.echo.items()}

        if self.list_key is not None:
            items = result or []
            return {self.list_key: items, "count": len(items), **echoed}

        if self.count_key is not None and isinstance(result, dict):
            return {**result, "count": len(result.get(self.count_key) or [])}

        if self.success_message is not None:
            presented: dict[str, Any] = {
                "success": True,
                "message": self.success_message.format(**values),
            }
            if result is not None:
                presented["data"] = result
            return presented

        if echoed and isinstance(result, dict):
            return {**echoed, **result}
        return result

    def to_mcp_tool(self) -> Tool:
        """Convert this endpoint definition to an MCP Tool."""
        properties: dict[str, dict[str, Any]] = {}
        required: list[str] = []

        for param in self.params:
            properties[param.name] = param.to_schema()
            if (
                param.required
                and param.default is None
                and param.default_factory is None
                and param.credential_fallback is None
            ):
                required.append(param.name)

        return Tool(
            name=self.name,
            description=self.description,
            inputSchema=ToolInputSchema(
                properties=properties,
                required=required,
            ),
        )


# -----------------------------------------------------------------------------
# Domain Endpoints (imported from isolated domain modules)
# -----------------------------------------------------------------------------

from .domains.clusters import CLUSTER_ENDPOINTS  # noqa: E402
from .domains.connection import CONNECTION_ENDPOINTS  # noqa: E402
from .domains.dbfs import DBFS_ENDPOINTS  # noqa: E402
from .domains.instance_pools import INSTANCE_POOL_ENDPOINTS  # noqa: E402
from .domains.jobs import JOB_ENDPOINTS  # noqa: E402
from .domains.mlflow import MLFLOW_ENDPOINTS  # noqa: E402
from .domains.pipelines import PIPELINE_ENDPOINTS  # noqa: E402
from .domains.repos import REPO_ENDPOINTS  # noqa: E402
from .domains.secrets import SECRET_ENDPOINTS  # noqa: E402
from .domains.sql import SQL_ENDPOINTS  # noqa: E402
from .domains.tokens import TOKEN_ENDPOINTS  # noqa: E402
from .domains.unity_catalog import UNITY_CATALOG_ENDPOINTS  # noqa: E402
from .domains.workspace import WORKSPACE_ENDPOINTS  # noqa: E402


# -----------------------------------------------------------------------------
# Combined Endpoints
# -----------------------------------------------------------------------------

DEFAULT_ENDPOINTS: list[RestEndpoint] = (
    SQL_ENDPOINTS
    + JOB_ENDPOINTS
    + CLUSTER_ENDPOINTS
    + WORKSPACE_ENDPOINTS
    + DBFS_ENDPOINTS
    + UNITY_CATALOG_ENDPOINTS
    + MLFLOW_ENDPOINTS
    + SECRET_ENDPOINTS
    + REPO_ENDPOINTS
    + PIPELINE_ENDPOINTS
    + INSTANCE_POOL_ENDPOINTS
    + TOKEN_ENDPOINTS
    + CONNECTION_ENDPOINTS
)


def tool_catalog(endpoints: list[RestEndpoint] | None = None) -> dict[str, list[str]]:
    """Tool names grouped by category, in registration order."""
    catalog: dict[str, list[str]] = {}
    for endpoint in endpoints if endpoints is not None else DEFAULT_ENDPOINTS:
        catalog.setdefault(endpoint.category, []).append(endpoint.name)
    return catalog
