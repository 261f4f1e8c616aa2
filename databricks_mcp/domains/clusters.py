"""
Clusters Domain

All-purpose compute clusters (Clusters API 2.0).
https://docs.databricks.com/api/workspace/clusters
"""

from __future__ import annotations

from typing import Any

from ..config import CLUSTER_EVENTS_LIMIT
from ..endpoints import HttpMethod, Param, ParamLocation, ParamType, RestEndpoint, page, unwrap_list
from ..schemas import ClusterEventsPage


def cluster_spec(values: dict[str, Any]) -> dict[str, Any]:
    """
    Build a cluster spec.

    Autoscaling wins when both bounds are given; otherwise the cluster is
    fixed-size with num_workers (0 when omitted, a single-node driver).
    """
    spec: dict[str, Any] = {
        "cluster_name": values["clusterName"],
        "spark_version": values["sparkVersion"],
        "node_type_id": values["nodeTypeId"],
    }
    if values.get("minWorkers") is not None and values.get("maxWorkers") is not None:
        spec["autoscale"] = {
            "min_workers": values["minWorkers"],
            "max_workers": values["maxWorkers"],
        }
    else:
        spec["num_workers"] = values.get("numWorkers") or 0
    if values.get("autoterminationMinutes") is not None:
        spec["autotermination_minutes"] = values["autoterminationMinutes"]
    return spec


_CLUSTER_ID = Param("clusterId", "Cluster ID")


def _cluster_action(name: str, action: str, description: str, message: str) -> RestEndpoint:
    return RestEndpoint(
        name=name,
        path=f"/api/2.0/clusters/{action}",
        method=HttpMethod.POST,
        description=description,
        category="clusters",
        params=(_CLUSTER_ID,),
        success_message=message,
    )


CLUSTER_ENDPOINTS: list[RestEndpoint] = [
    RestEndpoint(
        name="databricks_list_clusters",
        path="/api/2.0/clusters/list",
        method=HttpMethod.GET,
        description="List all clusters in the workspace with their state.",
        category="clusters",
        reshape=unwrap_list("clusters"),
        list_key="clusters",
    ),
    RestEndpoint(
        name="databricks_get_cluster",
        path="/api/2.0/clusters/get",
        method=HttpMethod.GET,
        description="Get configuration and state of a cluster.",
        category="clusters",
        params=(Param("clusterId", "Cluster ID", location=ParamLocation.QUERY),),
    ),
    RestEndpoint(
        name="databricks_create_cluster",
        path="/api/2.0/clusters/create",
        method=HttpMethod.POST,
        description=(
            "Create a cluster. Give numWorkers for a fixed-size cluster, or "
            "minWorkers and maxWorkers for autoscaling."
        ),
        category="clusters",
        params=(
            Param("clusterName", "Cluster name"),
            Param("sparkVersion", 'Spark version (e.g., "13.3.x-scala2.12")'),
            Param("nodeTypeId", 'Node type ID (e.g., "i3.xlarge")'),
            Param("numWorkers", "Number of workers", type=ParamType.INTEGER, required=False, minimum=0),
            Param(
                "minWorkers",
                "Min workers for autoscale",
                type=ParamType.INTEGER,
                required=False,
                minimum=0,
            ),
            Param(
                "maxWorkers",
                "Max workers for autoscale",
                type=ParamType.INTEGER,
                required=False,
                minimum=1,
            ),
            Param(
                "autoterminationMinutes",
                "Auto-terminate after this many idle minutes",
                type=ParamType.INTEGER,
                required=False,
                minimum=0,
            ),
        ),
        build_body=cluster_spec,
        success_message="Cluster created",
    ),
    _cluster_action(
        "databricks_start_cluster",
        "start",
        "Start a terminated cluster.",
        "Cluster {clusterId} is starting",
    ),
    _cluster_action(
        "databricks_restart_cluster",
        "restart",
        "Restart a running cluster.",
        "Cluster {clusterId} is restarting",
    ),
    _cluster_action(
        "databricks_terminate_cluster",
        "delete",
        "Terminate a cluster. The configuration is kept and it can be started again.",
        "Cluster {clusterId} is terminating",
    ),
    _cluster_action(
        "databricks_delete_cluster",
        "permanent-delete",
        "Permanently delete a cluster. This cannot be undone.",
        "Cluster {clusterId} permanently deleted",
    ),
    RestEndpoint(
        name="databricks_list_cluster_events",
        path="/api/2.0/clusters/events",
        method=HttpMethod.POST,
        description="List recent events of a cluster (state changes, resizes, errors).",
        category="clusters",
        params=(
            _CLUSTER_ID,
            Param(
                "limit",
                "Maximum events",
                type=ParamType.INTEGER,
                required=False,
                default=CLUSTER_EVENTS_LIMIT,
                minimum=1,
                maximum=500,
            ),
        ),
        reshape=page(ClusterEventsPage),
        count_key="events",
    ),
    _cluster_action(
        "databricks_pin_cluster",
        "pin",
        "Pin a cluster so its configuration is retained after termination.",
        "Cluster {clusterId} pinned",
    ),
    _cluster_action(
        "databricks_unpin_cluster",
        "unpin",
        "Unpin a cluster.",
        "Cluster {clusterId} unpinned",
    ),
]
