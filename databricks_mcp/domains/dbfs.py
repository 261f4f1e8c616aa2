"""
DBFS Domain

Databricks File System. Paths look like "/mnt/data" or "dbfs:/mnt/data";
file contents travel base64-encoded.
"""

from __future__ import annotations

from ..config import DBFS_READ_LENGTH
from ..endpoints import HttpMethod, Param, ParamLocation, ParamType, RestEndpoint, unwrap_list


DBFS_ENDPOINTS: list[RestEndpoint] = [
    RestEndpoint(
        name="databricks_list_dbfs",
        path="/api/2.0/dbfs/list",
        method=HttpMethod.GET,
        description="List files and directories at a DBFS path.",
        category="dbfs",
        params=(Param("path", "DBFS path", location=ParamLocation.QUERY),),
        reshape=unwrap_list("files"),
        list_key="files",
        echo={"path": "path"},
    ),
    RestEndpoint(
        name="databricks_get_dbfs_status",
        path="/api/2.0/dbfs/get-status",
        method=HttpMethod.GET,
        description="Get file or directory information for a DBFS path.",
        category="dbfs",
        params=(Param("path", "DBFS path", location=ParamLocation.QUERY),),
    ),
    RestEndpoint(
        name="databricks_mkdirs_dbfs",
        path="/api/2.0/dbfs/mkdirs",
        method=HttpMethod.POST,
        description="Create a DBFS directory, including missing parents.",
        category="dbfs",
        params=(Param("path", "Directory path"),),
        success_message="DBFS directory created: {path}",
    ),
    RestEndpoint(
        name="databricks_delete_dbfs",
        path="/api/2.0/dbfs/delete",
        method=HttpMethod.POST,
        description="Delete a DBFS file or directory.",
        category="dbfs",
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
        success_message="DBFS deleted: {path}",
    ),
    RestEndpoint(
        name="databricks_read_dbfs",
        path="/api/2.0/dbfs/read",
        method=HttpMethod.GET,
        description="Read up to 1MB of a DBFS file. Data is returned base64-encoded.",
        category="dbfs",
        params=(
            Param("path", "File path", location=ParamLocation.QUERY),
            Param(
                "offset",
                "Byte offset",
                type=ParamType.INTEGER,
                location=ParamLocation.QUERY,
                required=False,
                default=0,
                minimum=0,
            ),
            Param(
                "length",
                "Bytes to read",
                type=ParamType.INTEGER,
                location=ParamLocation.QUERY,
                required=False,
                default=DBFS_READ_LENGTH,
                minimum=1,
                maximum=DBFS_READ_LENGTH,
            ),
        ),
        echo={"path": "path"},
    ),
    RestEndpoint(
        name="databricks_put_dbfs",
        path="/api/2.0/dbfs/put",
        method=HttpMethod.POST,
        description="Write a file to DBFS from base64-encoded contents (up to 1MB).",
        category="dbfs",
        params=(
            Param("path", "Destination path"),
            Param("contents", "Base64-encoded content"),
            Param(
                "overwrite",
                "Overwrite existing",
                type=ParamType.BOOLEAN,
                required=False,
                default=False,
            ),
        ),
        success_message="File written to DBFS: {path}",
    ),
    RestEndpoint(
        name="databricks_move_dbfs",
        path="/api/2.0/dbfs/move",
        method=HttpMethod.POST,
        description="Move or rename a DBFS file or directory.",
        category="dbfs",
        params=(
            Param("sourcePath", "Source path"),
            Param("destinationPath", "Destination path"),
        ),
        success_message="Moved {sourcePath} to {destinationPath}",
    ),
]
