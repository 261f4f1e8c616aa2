"""
Domain Adapters

Each domain module contains the endpoints of one area of the Databricks
REST API. This isolation keeps adding or removing an area a single-file
operation.

To add a new area:
1. Create domains/newarea.py with a NEWAREA_ENDPOINTS list
2. Import it in endpoints.py and add it to DEFAULT_ENDPOINTS
"""

from .clusters import CLUSTER_ENDPOINTS
from .connection import CONNECTION_ENDPOINTS
from .dbfs import DBFS_ENDPOINTS
from .instance_pools import INSTANCE_POOL_ENDPOINTS
from .jobs import JOB_ENDPOINTS
from .mlflow import MLFLOW_ENDPOINTS
from .pipelines import PIPELINE_ENDPOINTS
from .repos import REPO_ENDPOINTS
from .secrets import SECRET_ENDPOINTS
from .sql import SQL_ENDPOINTS
from .tokens import TOKEN_ENDPOINTS
from .unity_catalog import UNITY_CATALOG_ENDPOINTS
from .workspace import WORKSPACE_ENDPOINTS

__all__ = [
    "CLUSTER_ENDPOINTS",
    "CONNECTION_ENDPOINTS",
    "DBFS_ENDPOINTS",
    "INSTANCE_POOL_ENDPOINTS",
    "JOB_ENDPOINTS",
    "MLFLOW_ENDPOINTS",
    "PIPELINE_ENDPOINTS",
    "REPO_ENDPOINTS",
    "SECRET_ENDPOINTS",
    "SQL_ENDPOINTS",
    "TOKEN_ENDPOINTS",
    "UNITY_CATALOG_ENDPOINTS",
    "WORKSPACE_ENDPOINTS",
]
