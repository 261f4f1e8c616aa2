"""
Jobs Domain

Job definitions and job runs (Jobs API 2.1).
https://docs.databricks.com/api/workspace/jobs
"""

from __future__ import annotations

from typing import Any

from ..config import DEFAULT_PAGE_SIZE, JOB_SCHEDULE_TIMEZONE, MAX_PAGE_SIZE
from ..endpoints import HttpMethod, Param, ParamLocation, ParamType, RestEndpoint, page
from ..schemas import JobsPage, RunsPage


def job_settings(values: dict[str, Any]) -> dict[str, Any]:
    """Build create-job settings; a cron expression becomes a schedule block."""
    settings: dict[str, Any] = {"name": values["name"], "tasks": values["tasks"]}
    if values.get("schedule"):
        settings["schedule"] = {
            "quartz_cron_expression": values["schedule"],
            "timezone_id": values.get("timezone") or JOB_SCHEDULE_TIMEZONE,
        }
    return settings


def _job_id(location: ParamLocation = ParamLocation.BODY) -> Param:
    return Param("jobId", "Job ID", type=ParamType.INTEGER, location=location)


def _run_id(location: ParamLocation = ParamLocation.BODY) -> Param:
    return Param("runId", "Run ID", type=ParamType.INTEGER, location=location)


_LIMIT = Param(
    "limit",
    "Maximum results to return",
    type=ParamType.INTEGER,
    location=ParamLocation.QUERY,
    required=False,
    default=DEFAULT_PAGE_SIZE,
    minimum=1,
    maximum=MAX_PAGE_SIZE,
)
_OFFSET = Param(
    "offset",
    "Pagination offset",
    type=ParamType.INTEGER,
    location=ParamLocation.QUERY,
    required=False,
    minimum=0,
)


JOB_ENDPOINTS: list[RestEndpoint] = [
    RestEndpoint(
        name="databricks_list_jobs",
        path="/api/2.1/jobs/list",
        method=HttpMethod.GET,
        description="List jobs in the workspace, optionally filtered by name.",
        category="jobs",
        params=(
            _LIMIT,
            _OFFSET,
            Param("name", "Filter by job name", location=ParamLocation.QUERY, required=False),
        ),
        reshape=page(JobsPage),
        count_key="jobs",
    ),
    RestEndpoint(
        name="databricks_get_job",
        path="/api/2.1/jobs/get",
        method=HttpMethod.GET,
        description="Get the configuration and metadata of a job.",
        category="jobs",
        params=(_job_id(ParamLocation.QUERY),),
    ),
    RestEndpoint(
        name="databricks_create_job",
        path="/api/2.1/jobs/create",
        method=HttpMethod.POST,
        description="Create a new job from task definitions, with an optional cron schedule.",
        category="jobs",
        params=(
            Param("name", "Job name"),
            Param("tasks", "Tasks configuration", type=ParamType.JSON),
            Param("schedule", "Quartz cron expression", required=False),
            Param("timezone", "Timezone for the schedule (default: UTC)", required=False),
        ),
        build_body=job_settings,
        success_message="Job created",
    ),
    RestEndpoint(
        name="databricks_update_job",
        path="/api/2.1/jobs/update",
        method=HttpMethod.POST,
        description="Update the settings of an existing job.",
        category="jobs",
        params=(
            _job_id(),
            Param("settings", "New job settings", type=ParamType.JSON, wire_name="new_settings"),
        ),
        success_message="Job {jobId} updated",
    ),
    RestEndpoint(
        name="databricks_delete_job",
        path="/api/2.1/jobs/delete",
        method=HttpMethod.POST,
        description="Delete a job.",
        category="jobs",
        params=(_job_id(),),
        success_message="Job {jobId} deleted",
    ),
    RestEndpoint(
        name="databricks_run_job",
        path="/api/2.1/jobs/run-now",
        method=HttpMethod.POST,
        description="Trigger a job run immediately, with optional runtime parameters.",
        category="jobs",
        params=(
            _job_id(),
            Param(
                "parameters",
                "Runtime parameters",
                type=ParamType.JSON,
                required=False,
                spread=True,
            ),
        ),
        success_message="Job run triggered",
    ),
    RestEndpoint(
        name="databricks_list_runs",
        path="/api/2.1/jobs/runs/list",
        method=HttpMethod.GET,
        description="List job runs, optionally filtered by job and state.",
        category="jobs",
        params=(
            Param(
                "jobId",
                "Filter by job ID",
                type=ParamType.INTEGER,
                location=ParamLocation.QUERY,
                required=False,
            ),
            Param(
                "activeOnly",
                "Only active runs",
                type=ParamType.BOOLEAN,
                location=ParamLocation.QUERY,
                required=False,
            ),
            Param(
                "completedOnly",
                "Only completed runs",
                type=ParamType.BOOLEAN,
                location=ParamLocation.QUERY,
                required=False,
            ),
            _LIMIT,
            _OFFSET,
        ),
        reshape=page(RunsPage),
        count_key="runs",
    ),
    RestEndpoint(
        name="databricks_get_run",
        path="/api/2.1/jobs/runs/get",
        method=HttpMethod.GET,
        description="Get details of a job run, including status and tasks.",
        category="jobs",
        params=(_run_id(ParamLocation.QUERY),),
    ),
    RestEndpoint(
        name="databricks_get_run_output",
        path="/api/2.1/jobs/runs/get-output",
        method=HttpMethod.GET,
        description="Get the output of a job run, including notebook output if applicable.",
        category="jobs",
        params=(_run_id(ParamLocation.QUERY),),
    ),
    RestEndpoint(
        name="databricks_cancel_run",
        path="/api/2.1/jobs/runs/cancel",
        method=HttpMethod.POST,
        description="Cancel a running job run.",
        category="jobs",
        params=(_run_id(),),
        success_message="Run {runId} cancelled",
    ),
    RestEndpoint(
        name="databricks_cancel_all_runs",
        path="/api/2.1/jobs/runs/cancel-all",
        method=HttpMethod.POST,
        description="Cancel all active runs of a job.",
        category="jobs",
        params=(_job_id(),),
        success_message="All runs of job {jobId} cancelled",
    ),
]
