"""
Workspace Domain

Notebooks, folders and files in the workspace tree.
"""

from __future__ import annotations

from ..config import NOTEBOOK_LANGUAGES, WORKSPACE_EXPORT_FORMAT, WORKSPACE_FORMATS
from ..endpoints import HttpMethod, Param, ParamLocation, ParamType, RestEndpoint, unwrap_list


WORKSPACE_ENDPOINTS: list[RestEndpoint] = [
    RestEndpoint(
        name="databricks_list_workspace",
        path="/api/2.0/workspace/list",
        method=HttpMethod.GET,
        description='List objects in a workspace folder (e.g., "/Users/user@example.com").',
        category="workspace",
        params=(Param("path", "Workspace path", location=ParamLocation.QUERY),),
        reshape=unwrap_list("objects"),
        list_key="objects",
        echo={"path": "path"},
    ),
    RestEndpoint(
        name="databricks_get_workspace_status",
        path="/api/2.0/workspace/get-status",
        method=HttpMethod.GET,
        description="Get the status (type, language, id) of a workspace object.",
        category="workspace",
        params=(Param("path", "Workspace path", location=ParamLocation.QUERY),),
    ),
    RestEndpoint(
        name="databricks_mkdirs",
        path="/api/2.0/workspace/mkdirs",
        method=HttpMethod.POST,
        description="Create a workspace directory, including missing parents.",
        category="workspace",
        params=(Param("path", "Directory path"),),
        success_message="Directory created: {path}",
    ),
    RestEndpoint(
        name="databricks_delete_workspace",
        path="/api/2.0/workspace/delete",
        method=HttpMethod.POST,
        description="Delete a workspace object. Folders need recursive=true when not empty.",
        category="workspace",
        params=(
            Param("path", "Path to delete"),
            Param(
                "recursive",
                "Delete recursively",
                type=ParamType.BOOLEAN,
                required=False,
                default=False,
            ),
        ),
        success_message="Deleted: {path}",
    ),
    RestEndpoint(
        name="databricks_import_notebook",
        path="/api/2.0/workspace/import",
        method=HttpMethod.POST,
        description=(
            "Import a notebook from base64-encoded content. "
            "language is required for SOURCE format."
        ),
        category="workspace",
        params=(
            Param("path", "Destination path"),
            Param("content", "Base64-encoded content"),
            Param("format", "Import format", enum=WORKSPACE_FORMATS),
            Param("language", "Notebook language", required=False, enum=NOTEBOOK_LANGUAGES),
            Param(
                "overwrite",
                "Overwrite existing",
                type=ParamType.BOOLEAN,
                required=False,
                default=False,
            ),
        ),
        success_message="Notebook imported: {path}",
    ),
    RestEndpoint(
        name="databricks_export_notebook",
        path="/api/2.0/workspace/export",
        method=HttpMethod.GET,
        description="Export a notebook. Content is returned base64-encoded.",
        category="workspace",
        params=(
            Param("path", "Notebook path", location=ParamLocation.QUERY),
            Param(
                "format",
                "Export format",
                location=ParamLocation.QUERY,
                required=False,
                default=WORKSPACE_EXPORT_FORMAT,
                enum=WORKSPACE_FORMATS,
            ),
        ),
        echo={"path": "path", "format": "format"},
    ),
]
