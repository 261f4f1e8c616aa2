"""
SQL Domain

Statement execution and SQL warehouse management.
https://docs.databricks.com/api/workspace/statementexecution

Statements run with a bounded wait; results come back inline when the
statement completes in time, otherwise poll with databricks_get_sql_status.
"""

from __future__ import annotations

from typing import Any

from ..config import SQL_DISPOSITION, SQL_FORMAT, SQL_WAIT_TIMEOUT
from ..endpoints import HttpMethod, Param, ParamLocation, ParamType, RestEndpoint, unwrap_list
from ..schemas import StatementResponse


def statement_result(data: Any) -> dict[str, Any]:
    """Shape a statement response; point the agent at polling while it runs."""
    statement = StatementResponse.model_validate(data or {})
    shaped = statement.model_dump(exclude_none=True)
    if statement.is_pending:
        shaped["hint"] = (
            f"Statement is {statement.status.state}. "
            "Poll with databricks_get_sql_status using the statement_id."
        )
    return shaped


def _warehouse_id(location: ParamLocation = ParamLocation.PATH) -> Param:
    return Param(
        "warehouseId",
        "SQL warehouse ID (defaults to the X-Databricks-Warehouse-Id header)",
        location=location,
        credential_fallback="warehouse_id",
    )


_STATEMENT_ID = Param("statementId", "Statement ID", location=ParamLocation.PATH)


SQL_ENDPOINTS: list[RestEndpoint] = [
    RestEndpoint(
        name="databricks_execute_sql",
        path="/api/2.0/sql/statements",
        method=HttpMethod.POST,
        description=(
            "Execute a SQL statement on a Databricks SQL warehouse. Results are "
            "returned inline if the statement completes within the wait timeout; "
            "for long-running queries poll with databricks_get_sql_status."
        ),
        category="sql",
        params=(
            _warehouse_id(ParamLocation.BODY),
            Param("statement", "SQL statement to execute"),
            Param("catalog", "Default catalog", required=False),
            Param("schema", "Default schema", required=False),
            Param(
                "waitTimeout",
                'Wait timeout (e.g., "50s")',
                required=False,
                default=SQL_WAIT_TIMEOUT,
            ),
            Param(
                "disposition",
                "Result disposition",
                required=False,
                default=SQL_DISPOSITION,
                enum=("INLINE", "EXTERNAL_LINKS"),
            ),
            Param(
                "format",
                "Result format",
                required=False,
                default=SQL_FORMAT,
                enum=("JSON_ARRAY", "CSV", "ARROW_STREAM"),
            ),
        ),
        reshape=statement_result,
    ),
    RestEndpoint(
        name="databricks_get_sql_status",
        path="/api/2.0/sql/statements/{statementId}",
        method=HttpMethod.GET,
        description="Get the status and results of a SQL statement. Use to poll long-running queries.",
        category="sql",
        params=(_STATEMENT_ID,),
        reshape=statement_result,
    ),
    RestEndpoint(
        name="databricks_get_sql_result_chunk",
        path="/api/2.0/sql/statements/{statementId}/result/chunks/{chunkIndex}",
        method=HttpMethod.GET,
        description="Get a specific chunk of SQL statement results (for results split into chunks).",
        category="sql",
        params=(
            _STATEMENT_ID,
            Param(
                "chunkIndex",
                "Chunk index (0-based)",
                type=ParamType.INTEGER,
                location=ParamLocation.PATH,
                minimum=0,
            ),
        ),
    ),
    RestEndpoint(
        name="databricks_cancel_sql",
        path="/api/2.0/sql/statements/{statementId}/cancel",
        method=HttpMethod.POST,
        description="Cancel a running SQL statement.",
        category="sql",
        params=(_STATEMENT_ID,),
        success_message="Statement {statementId} cancelled",
    ),
    RestEndpoint(
        name="databricks_list_warehouses",
        path="/api/2.0/sql/warehouses",
        method=HttpMethod.GET,
        description="List all SQL warehouses in the workspace with their status and configuration.",
        category="sql",
        reshape=unwrap_list("warehouses"),
        list_key="warehouses",
    ),
    RestEndpoint(
        name="databricks_get_warehouse",
        path="/api/2.0/sql/warehouses/{warehouseId}",
        method=HttpMethod.GET,
        description="Get configuration and status of a SQL warehouse.",
        category="sql",
        params=(_warehouse_id(),),
    ),
    RestEndpoint(
        name="databricks_start_warehouse",
        path="/api/2.0/sql/warehouses/{warehouseId}/start",
        method=HttpMethod.POST,
        description="Start a stopped SQL warehouse.",
        category="sql",
        params=(_warehouse_id(),),
        success_message="SQL warehouse {warehouseId} is starting",
    ),
    RestEndpoint(
        name="databricks_stop_warehouse",
        path="/api/2.0/sql/warehouses/{warehouseId}/stop",
        method=HttpMethod.POST,
        description="Stop a running SQL warehouse.",
        category="sql",
        params=(_warehouse_id(),),
        success_message="SQL warehouse {warehouseId} is stopping",
    ),
]
