"""
Instance Pools Domain

Pools of idle, ready-to-use instances that cut cluster start times.
"""

from __future__ import annotations

from ..endpoints import HttpMethod, Param, ParamLocation, ParamType, RestEndpoint, unwrap_list

_POOL_ID = Param("instancePoolId", "Instance pool ID")
_POOL_SETTINGS = (
    Param("instancePoolName", "Pool name"),
    Param("nodeTypeId", "Node type ID"),
    Param(
        "minIdleInstances",
        "Minimum idle instances",
        type=ParamType.INTEGER,
        required=False,
        minimum=0,
    ),
    Param("maxCapacity", "Maximum capacity", type=ParamType.INTEGER, required=False, minimum=1),
)


INSTANCE_POOL_ENDPOINTS: list[RestEndpoint] = [
    RestEndpoint(
        name="databricks_list_instance_pools",
        path="/api/2.0/instance-pools/list",
        method=HttpMethod.GET,
        description="List instance pools with their usage statistics.",
        category="instance_pools",
        reshape=unwrap_list("instance_pools"),
        list_key="instance_pools",
    ),
    RestEndpoint(
        name="databricks_get_instance_pool",
        path="/api/2.0/instance-pools/get",
        method=HttpMethod.GET,
        description="Get the configuration and state of an instance pool.",
        category="instance_pools",
        params=(Param("instancePoolId", "Instance pool ID", location=ParamLocation.QUERY),),
    ),
    RestEndpoint(
        name="databricks_create_instance_pool",
        path="/api/2.0/instance-pools/create",
        method=HttpMethod.POST,
        description="Create an instance pool.",
        category="instance_pools",
        params=(
            *_POOL_SETTINGS,
            Param(
                "idleInstanceAutoterminationMinutes",
                "Auto-termination minutes for idle instances",
                type=ParamType.INTEGER,
                required=False,
                minimum=0,
            ),
        ),
        success_message="Instance pool created",
    ),
    RestEndpoint(
        name="databricks_edit_instance_pool",
        path="/api/2.0/instance-pools/edit",
        method=HttpMethod.POST,
        description="Edit an instance pool. Name and node type must always be given.",
        category="instance_pools",
        params=(_POOL_ID, *_POOL_SETTINGS),
        success_message="Instance pool {instancePoolId} updated",
    ),
    RestEndpoint(
        name="databricks_delete_instance_pool",
        path="/api/2.0/instance-pools/delete",
        method=HttpMethod.POST,
        description="Delete an instance pool; its idle instances are terminated.",
        category="instance_pools",
        params=(_POOL_ID,),
        success_message="Instance pool {instancePoolId} deleted",
    ),
]
