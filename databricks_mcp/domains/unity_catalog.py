"""
Unity Catalog Domain

Catalogs, schemas, tables, volumes and functions (Unity Catalog API 2.1).
Securables below a catalog are addressed by their dotted full name,
e.g. "main.default.events".
"""

from __future__ import annotations

from ..endpoints import HttpMethod, Param, ParamLocation, ParamType, RestEndpoint, unwrap_list

_BASE = "/api/2.1/unity-catalog"

_CATALOG_NAME_QUERY = Param("catalogName", "Catalog name", location=ParamLocation.QUERY)
_SCHEMA_NAME_QUERY = Param("schemaName", "Schema name", location=ParamLocation.QUERY)


def _full_name(kind: str, example: str) -> Param:
    return Param("fullName", f"Full {kind} name ({example})", location=ParamLocation.PATH)


def _get(name: str, collection: str, kind: str, example: str) -> RestEndpoint:
    return RestEndpoint(
        name=name,
        path=f"{_BASE}/{collection}/{{fullName}}",
        method=HttpMethod.GET,
        description=f"Get details of a {kind}.",
        category="unity_catalog",
        params=(_full_name(kind, example),),
    )


def _delete(name: str, collection: str, kind: str, example: str) -> RestEndpoint:
    return RestEndpoint(
        name=name,
        path=f"{_BASE}/{collection}/{{fullName}}",
        method=HttpMethod.DELETE,
        description=f"Delete a {kind}.",
        category="unity_catalog",
        params=(_full_name(kind, example),),
        success_message=f"{kind.capitalize()} {{fullName}} deleted",
    )


def _list_in_schema(name: str, collection: str, description: str) -> RestEndpoint:
    return RestEndpoint(
        name=name,
        path=f"{_BASE}/{collection}",
        method=HttpMethod.GET,
        description=description,
        category="unity_catalog",
        params=(_CATALOG_NAME_QUERY, _SCHEMA_NAME_QUERY),
        reshape=unwrap_list(collection),
        list_key=collection,
        echo={"catalog": "catalogName", "schema": "schemaName"},
    )


UNITY_CATALOG_ENDPOINTS: list[RestEndpoint] = [
    # Catalogs
    RestEndpoint(
        name="databricks_list_catalogs",
        path=f"{_BASE}/catalogs",
        method=HttpMethod.GET,
        description="List all Unity Catalog catalogs.",
        category="unity_catalog",
        reshape=unwrap_list("catalogs"),
        list_key="catalogs",
    ),
    RestEndpoint(
        name="databricks_get_catalog",
        path=f"{_BASE}/catalogs/{{name}}",
        method=HttpMethod.GET,
        description="Get details of a catalog.",
        category="unity_catalog",
        params=(Param("name", "Catalog name", location=ParamLocation.PATH),),
    ),
    RestEndpoint(
        name="databricks_create_catalog",
        path=f"{_BASE}/catalogs",
        method=HttpMethod.POST,
        description="Create a catalog.",
        category="unity_catalog",
        params=(
            Param("name", "Catalog name"),
            Param("comment", "Catalog description", required=False),
        ),
        success_message="Catalog created",
    ),
    RestEndpoint(
        name="databricks_delete_catalog",
        path=f"{_BASE}/catalogs/{{name}}",
        method=HttpMethod.DELETE,
        description="Delete a catalog. Use force=true to delete a catalog that is not empty.",
        category="unity_catalog",
        params=(
            Param("name", "Catalog name", location=ParamLocation.PATH),
            Param(
                "force",
                "Force delete",
                type=ParamType.BOOLEAN,
                location=ParamLocation.QUERY,
                required=False,
                default=False,
            ),
        ),
        success_message="Catalog {name} deleted",
    ),
    # Schemas
    RestEndpoint(
        name="databricks_list_schemas",
        path=f"{_BASE}/schemas",
        method=HttpMethod.GET,
        description="List schemas in a catalog.",
        category="unity_catalog",
        params=(_CATALOG_NAME_QUERY,),
        reshape=unwrap_list("schemas"),
        list_key="schemas",
        echo={"catalog": "catalogName"},
    ),
    _get("databricks_get_schema", "schemas", "schema", "catalog.schema"),
    RestEndpoint(
        name="databricks_create_schema",
        path=f"{_BASE}/schemas",
        method=HttpMethod.POST,
        description="Create a schema in a catalog.",
        category="unity_catalog",
        params=(
            Param("catalogName", "Catalog name"),
            Param("name", "Schema name"),
            Param("comment", "Schema description", required=False),
        ),
        success_message="Schema created",
    ),
    _delete("databricks_delete_schema", "schemas", "schema", "catalog.schema"),
    # Tables
    _list_in_schema("databricks_list_tables", "tables", "List tables in a schema."),
    _get("databricks_get_table", "tables", "table", "catalog.schema.table"),
    _delete("databricks_delete_table", "tables", "table", "catalog.schema.table"),
    # Volumes
    _list_in_schema("databricks_list_volumes", "volumes", "List volumes in a schema."),
    _get("databricks_get_volume", "volumes", "volume", "catalog.schema.volume"),
    RestEndpoint(
        name="databricks_create_volume",
        path=f"{_BASE}/volumes",
        method=HttpMethod.POST,
        description="Create a volume. EXTERNAL volumes need a storageLocation.",
        category="unity_catalog",
        params=(
            Param("catalogName", "Catalog name"),
            Param("schemaName", "Schema name"),
            Param("name", "Volume name"),
            Param("volumeType", "Volume type", enum=("MANAGED", "EXTERNAL")),
            Param("storageLocation", "Storage location", required=False),
            Param("comment", "Volume description", required=False),
        ),
        success_message="Volume created",
    ),
    _delete("databricks_delete_volume", "volumes", "volume", "catalog.schema.volume"),
    # Functions
    _list_in_schema("databricks_list_functions", "functions", "List functions in a schema."),
    _get("databricks_get_function", "functions", "function", "catalog.schema.function"),
]
