"""
Centralized configuration for the Databricks MCP server.

All magic values, header names, and facade defaults in one place.
Supports environment variable overrides for deployment flexibility.

Tenant credentials are NOT configuration. They arrive on every inbound
call as request headers and never touch process-wide state.
"""

from __future__ import annotations

import os


def _env_int(name: str, default: int) -> int:
    """Read an integer override, falling back to the default if unparseable."""
    try:
        return int(os.environ.get(name, default))
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    """Read a float override, falling back to the default if unparseable."""
    try:
        return float(os.environ.get(name, default))
    except ValueError:
        return default


# -----------------------------------------------------------------------------
# Server Configuration
# -----------------------------------------------------------------------------

SERVER_NAME = "databricks-mcp"
SERVER_VERSION = "1.0.0"
SERVER_DESCRIPTION = "Multi-tenant Databricks MCP Server"
MCP_PROTOCOL_VERSION = "2024-11-05"

ENVIRONMENT = os.environ.get("DATABRICKS_MCP_ENVIRONMENT", "development")
LOG_LEVEL = os.environ.get("DATABRICKS_MCP_LOG_LEVEL", "INFO")

# -----------------------------------------------------------------------------
# Tenant Credential Headers
# -----------------------------------------------------------------------------

HOST_HEADER = "X-Databricks-Host"
TOKEN_HEADER = "X-Databricks-Token"
WAREHOUSE_ID_HEADER = "X-Databricks-Warehouse-Id"

REQUIRED_HEADERS: dict[str, str] = {
    HOST_HEADER: "Your Databricks workspace URL",
    TOKEN_HEADER: "Your personal access token",
}

OPTIONAL_HEADERS: dict[str, str] = {
    WAREHOUSE_ID_HEADER: "Default SQL warehouse ID for SQL operations",
}

# -----------------------------------------------------------------------------
# HTTP Configuration
# -----------------------------------------------------------------------------

HTTP_TIMEOUT_SECONDS = _env_float("DATABRICKS_MCP_HTTP_TIMEOUT", 30.0)
DEFAULT_RETRY_AFTER_SECONDS = 60
USER_AGENT = f"{SERVER_NAME}/{SERVER_VERSION}"

# -----------------------------------------------------------------------------
# Output Limits
# -----------------------------------------------------------------------------

CHARACTER_LIMIT = _env_int("DATABRICKS_MCP_CHARACTER_LIMIT", 50000)
DEFAULT_PAGE_SIZE = _env_int("DATABRICKS_MCP_DEFAULT_PAGE_SIZE", 20)
MAX_PAGE_SIZE = _env_int("DATABRICKS_MCP_MAX_PAGE_SIZE", 100)

# -----------------------------------------------------------------------------
# Facade Defaults
# -----------------------------------------------------------------------------

SQL_WAIT_TIMEOUT = "50s"
SQL_DISPOSITION = "INLINE"
SQL_FORMAT = "JSON_ARRAY"

CLUSTER_EVENTS_LIMIT = 50
DBFS_READ_LENGTH = 1048576
WORKSPACE_EXPORT_FORMAT = "SOURCE"
SECRET_SCOPE_BACKEND = "DATABRICKS"
JOB_SCHEDULE_TIMEZONE = "UTC"

WORKSPACE_FORMATS = ("SOURCE", "HTML", "JUPYTER", "DBC", "R_MARKDOWN")
NOTEBOOK_LANGUAGES = ("PYTHON", "SCALA", "SQL", "R")
