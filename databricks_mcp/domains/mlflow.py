"""
MLflow Domain

Experiments, runs and registered models on the workspace MLflow tracking
server. Timestamps are epoch milliseconds.
"""

from __future__ import annotations

import time

from ..endpoints import HttpMethod, Param, ParamLocation, ParamType, RestEndpoint, page, unwrap, unwrap_list
from ..schemas import ExperimentsPage, MlflowRunsPage, RegisteredModelsPage


def now_millis() -> int:
    return int(time.time() * 1000)


def model_name_filter(name: str) -> str:
    return f"name='{name}'"


RUN_STATUSES = ("RUNNING", "SCHEDULED", "FINISHED", "FAILED", "KILLED")

_EXPERIMENT_ID = Param("experimentId", "Experiment ID")
_RUN_ID = Param("runId", "Run ID")
_PAGE_TOKEN = Param("pageToken", "Pagination token", location=ParamLocation.QUERY, required=False)
_MODEL_NAME_QUERY = Param("name", "Model name", location=ParamLocation.QUERY)
_VERSION_QUERY = Param("version", "Version number", location=ParamLocation.QUERY)


def _max_results(location: ParamLocation, maximum: int) -> Param:
    return Param(
        "maxResults",
        "Maximum results",
        type=ParamType.INTEGER,
        location=location,
        required=False,
        minimum=1,
        maximum=maximum,
    )


def _run_field_logger(name: str, path: str, noun: str, message: str) -> RestEndpoint:
    return RestEndpoint(
        name=name,
        path=path,
        method=HttpMethod.POST,
        description=f"Log a {noun} on an MLflow run.",
        category="mlflow",
        params=(
            _RUN_ID,
            Param("key", f"{noun.capitalize()} name"),
            Param("value", f"{noun.capitalize()} value"),
        ),
        success_message=message,
    )


MLFLOW_ENDPOINTS: list[RestEndpoint] = [
    # Experiments
    RestEndpoint(
        name="databricks_list_experiments",
        path="/api/2.0/mlflow/experiments/search",
        method=HttpMethod.GET,
        description="List MLflow experiments.",
        category="mlflow",
        params=(_max_results(ParamLocation.QUERY, 1000), _PAGE_TOKEN),
        reshape=page(ExperimentsPage),
        count_key="experiments",
    ),
    RestEndpoint(
        name="databricks_get_experiment",
        path="/api/2.0/mlflow/experiments/get",
        method=HttpMethod.GET,
        description="Get an MLflow experiment by ID.",
        category="mlflow",
        params=(Param("experimentId", "Experiment ID", location=ParamLocation.QUERY),),
        reshape=unwrap("experiment"),
    ),
    RestEndpoint(
        name="databricks_get_experiment_by_name",
        path="/api/2.0/mlflow/experiments/get-by-name",
        method=HttpMethod.GET,
        description="Get an MLflow experiment by name (e.g., /Users/me/my-experiment).",
        category="mlflow",
        params=(Param("experimentName", "Experiment name", location=ParamLocation.QUERY),),
        reshape=unwrap("experiment"),
    ),
    RestEndpoint(
        name="databricks_create_experiment",
        path="/api/2.0/mlflow/experiments/create",
        method=HttpMethod.POST,
        description="Create an MLflow experiment.",
        category="mlflow",
        params=(
            Param("name", "Experiment name"),
            Param("artifactLocation", "Artifact location", required=False),
        ),
        success_message="Experiment created",
    ),
    RestEndpoint(
        name="databricks_delete_experiment",
        path="/api/2.0/mlflow/experiments/delete",
        method=HttpMethod.POST,
        description="Delete an MLflow experiment (it can be restored).",
        category="mlflow",
        params=(_EXPERIMENT_ID,),
        success_message="Experiment {experimentId} deleted",
    ),
    RestEndpoint(
        name="databricks_restore_experiment",
        path="/api/2.0/mlflow/experiments/restore",
        method=HttpMethod.POST,
        description="Restore a deleted MLflow experiment.",
        category="mlflow",
        params=(_EXPERIMENT_ID,),
        success_message="Experiment {experimentId} restored",
    ),
    # Runs
    RestEndpoint(
        name="databricks_search_runs",
        path="/api/2.0/mlflow/runs/search",
        method=HttpMethod.POST,
        description=(
            "Search MLflow runs across experiments, with an optional filter "
            "(e.g., \"metrics.rmse < 1\") and ordering."
        ),
        category="mlflow",
        params=(
            Param("experimentIds", "Experiment IDs", type=ParamType.ARRAY),
            Param("filter", "Filter expression", required=False),
            _max_results(ParamLocation.BODY, 50000),
            Param("orderBy", "Order by fields", type=ParamType.ARRAY, required=False),
            Param("pageToken", "Pagination token", required=False),
        ),
        reshape=page(MlflowRunsPage),
        count_key="runs",
    ),
    RestEndpoint(
        name="databricks_create_run",
        path="/api/2.0/mlflow/runs/create",
        method=HttpMethod.POST,
        description="Create an MLflow run in an experiment.",
        category="mlflow",
        params=(
            _EXPERIMENT_ID,
            Param("runName", "Run name", required=False),
            Param(
                "startTime",
                "Start timestamp (ms, default: now)",
                type=ParamType.INTEGER,
                required=False,
                default_factory=now_millis,
            ),
            Param(
                "tags",
                'Tags as a JSON array of {"key", "value"} objects',
                type=ParamType.JSON,
                required=False,
            ),
        ),
        reshape=unwrap("run"),
        success_message="Run created",
    ),
    RestEndpoint(
        name="databricks_update_run",
        path="/api/2.0/mlflow/runs/update",
        method=HttpMethod.POST,
        description="Update the status of an MLflow run.",
        category="mlflow",
        params=(
            _RUN_ID,
            Param("status", "Status", enum=RUN_STATUSES),
            Param("endTime", "End timestamp (ms)", type=ParamType.INTEGER, required=False),
        ),
        success_message="Run {runId} updated to {status}",
    ),
    RestEndpoint(
        name="databricks_delete_run",
        path="/api/2.0/mlflow/runs/delete",
        method=HttpMethod.POST,
        description="Delete an MLflow run.",
        category="mlflow",
        params=(_RUN_ID,),
        success_message="Run {runId} deleted",
    ),
    RestEndpoint(
        name="databricks_log_metric",
        path="/api/2.0/mlflow/runs/log-metric",
        method=HttpMethod.POST,
        description="Log a metric value on an MLflow run.",
        category="mlflow",
        params=(
            _RUN_ID,
            Param("key", "Metric name"),
            Param("value", "Metric value", type=ParamType.NUMBER),
            Param(
                "timestamp",
                "Timestamp (ms, default: now)",
                type=ParamType.INTEGER,
                required=False,
                default_factory=now_millis,
            ),
            Param("step", "Step number", type=ParamType.INTEGER, required=False),
        ),
        success_message="Metric {key}={value} logged to run {runId}",
    ),
    _run_field_logger(
        "databricks_log_param",
        "/api/2.0/mlflow/runs/log-parameter",
        "parameter",
        "Parameter {key}={value} logged to run {runId}",
    ),
    _run_field_logger(
        "databricks_set_tag",
        "/api/2.0/mlflow/runs/set-tag",
        "tag",
        "Tag {key}={value} set on run {runId}",
    ),
    # Registered models
    RestEndpoint(
        name="databricks_list_models",
        path="/api/2.0/mlflow/registered-models/search",
        method=HttpMethod.GET,
        description="List registered models.",
        category="mlflow",
        params=(_max_results(ParamLocation.QUERY, 1000), _PAGE_TOKEN),
        reshape=page(RegisteredModelsPage),
        count_key="registered_models",
    ),
    RestEndpoint(
        name="databricks_get_model",
        path="/api/2.0/mlflow/registered-models/get",
        method=HttpMethod.GET,
        description="Get a registered model and its latest versions.",
        category="mlflow",
        params=(_MODEL_NAME_QUERY,),
        reshape=unwrap("registered_model"),
    ),
    RestEndpoint(
        name="databricks_create_model",
        path="/api/2.0/mlflow/registered-models/create",
        method=HttpMethod.POST,
        description="Create a registered model.",
        category="mlflow",
        params=(
            Param("name", "Model name"),
            Param("description", "Model description", required=False),
            Param(
                "tags",
                'Tags as a JSON array of {"key", "value"} objects',
                type=ParamType.JSON,
                required=False,
            ),
        ),
        reshape=unwrap("registered_model"),
        success_message="Model created",
    ),
    RestEndpoint(
        name="databricks_delete_model",
        path="/api/2.0/mlflow/registered-models/delete",
        method=HttpMethod.DELETE,
        description="Delete a registered model and all its versions.",
        category="mlflow",
        params=(_MODEL_NAME_QUERY,),
        success_message="Model {name} deleted",
    ),
    RestEndpoint(
        name="databricks_list_model_versions",
        path="/api/2.0/mlflow/model-versions/search",
        method=HttpMethod.GET,
        description="List the versions of a registered model.",
        category="mlflow",
        params=(
            Param(
                "name",
                "Model name",
                location=ParamLocation.QUERY,
                wire_name="filter",
                transform=model_name_filter,
            ),
        ),
        reshape=unwrap_list("model_versions"),
        list_key="versions",
        echo={"model": "name"},
    ),
    RestEndpoint(
        name="databricks_get_model_version",
        path="/api/2.0/mlflow/model-versions/get",
        method=HttpMethod.GET,
        description="Get one version of a registered model.",
        category="mlflow",
        params=(_MODEL_NAME_QUERY, _VERSION_QUERY),
        reshape=unwrap("model_version"),
    ),
    RestEndpoint(
        name="databricks_delete_model_version",
        path="/api/2.0/mlflow/model-versions/delete",
        method=HttpMethod.DELETE,
        description="Delete one version of a registered model.",
        category="mlflow",
        params=(_MODEL_NAME_QUERY, _VERSION_QUERY),
        success_message="Model {name} version {version} deleted",
    ),
]
