"""
Pipelines Domain

Delta Live Tables pipelines and their updates.
"""

from __future__ import annotations

from typing import Any

from ..config import MAX_PAGE_SIZE
from ..endpoints import HttpMethod, Param, ParamLocation, ParamType, RestEndpoint
from ..schemas import PipelinesPage


def pipelines_page(data: Any) -> dict[str, Any]:
    """The list endpoint calls its items "statuses"; agents see "pipelines"."""
    listing = PipelinesPage.model_validate(data or {})
    shaped: dict[str, Any] = {"pipelines": listing.statuses}
    if listing.next_page_token is not None:
        shaped["next_page_token"] = listing.next_page_token
    return shaped


_PIPELINE_ID = Param("pipelineId", "Pipeline ID", location=ParamLocation.PATH)


PIPELINE_ENDPOINTS: list[RestEndpoint] = [
    RestEndpoint(
        name="databricks_list_pipelines",
        path="/api/2.0/pipelines",
        method=HttpMethod.GET,
        description="List Delta Live Tables pipelines, with an optional filter (e.g., \"name LIKE '%sales%'\").",
        category="pipelines",
        params=(
            Param(
                "maxResults",
                "Maximum results",
                type=ParamType.INTEGER,
                location=ParamLocation.QUERY,
                required=False,
                minimum=1,
                maximum=MAX_PAGE_SIZE,
            ),
            Param("pageToken", "Pagination token", location=ParamLocation.QUERY, required=False),
            Param("filter", "Filter expression", location=ParamLocation.QUERY, required=False),
        ),
        reshape=pipelines_page,
        count_key="pipelines",
    ),
    RestEndpoint(
        name="databricks_get_pipeline",
        path="/api/2.0/pipelines/{pipelineId}",
        method=HttpMethod.GET,
        description="Get a pipeline's specification, state and latest updates.",
        category="pipelines",
        params=(_PIPELINE_ID,),
    ),
    RestEndpoint(
        name="databricks_create_pipeline",
        path="/api/2.0/pipelines",
        method=HttpMethod.POST,
        description="Create a pipeline from a JSON specification (libraries, target, clusters, ...).",
        category="pipelines",
        params=(
            Param("name", "Pipeline name"),
            Param("spec", "Pipeline specification", type=ParamType.JSON, spread=True),
        ),
        success_message="Pipeline created",
    ),
    RestEndpoint(
        name="databricks_update_pipeline",
        path="/api/2.0/pipelines/{pipelineId}",
        method=HttpMethod.PUT,
        description="Replace a pipeline's specification.",
        category="pipelines",
        params=(
            _PIPELINE_ID,
            Param("spec", "Updated specification", type=ParamType.JSON, spread=True),
        ),
        success_message="Pipeline {pipelineId} updated",
    ),
    RestEndpoint(
        name="databricks_delete_pipeline",
        path="/api/2.0/pipelines/{pipelineId}",
        method=HttpMethod.DELETE,
        description="Delete a pipeline.",
        category="pipelines",
        params=(_PIPELINE_ID,),
        success_message="Pipeline {pipelineId} deleted",
    ),
    RestEndpoint(
        name="databricks_start_pipeline",
        path="/api/2.0/pipelines/{pipelineId}/updates",
        method=HttpMethod.POST,
        description="Start a pipeline update, optionally as a full refresh.",
        category="pipelines",
        params=(
            _PIPELINE_ID,
            Param(
                "fullRefresh",
                "Perform full refresh",
                type=ParamType.BOOLEAN,
                required=False,
            ),
        ),
        success_message="Pipeline update started",
    ),
    RestEndpoint(
        name="databricks_stop_pipeline",
        path="/api/2.0/pipelines/{pipelineId}/stop",
        method=HttpMethod.POST,
        description="Stop the active update of a pipeline.",
        category="pipelines",
        params=(_PIPELINE_ID,),
        success_message="Pipeline {pipelineId} stopping",
    ),
]
