"""
Databricks Result Shapes

Pydantic models for paged and enveloped responses. Remote payloads are
untyped JSON; these models name the fields facades rely on and default
absent lists to empty lists, so callers never see null where a sequence
is expected. Individual items stay plain dicts: the workspace owns their
schema.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class DatabricksPayload(BaseModel):
    """
    Base for result shapes: unknown fields pass through untouched.

    An explicit null on a declared field is read as absent, so
    `{"jobs": [], "has_more": null}` shapes like `{"jobs": []}`.
    """

    model_config = ConfigDict(extra="allow")

    @model_validator(mode="before")
    @classmethod
    def _null_means_default(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        return {
            key: value
            for key, value in data.items()
            if value is not None or key not in cls.model_fields
        }


# -----------------------------------------------------------------------------
# SQL
# -----------------------------------------------------------------------------


class StatementStatus(DatabricksPayload):
    state: str | None = None
    error: dict[str, Any] | None = None


class StatementResponse(DatabricksPayload):
    """Result of executing or polling a SQL statement."""

    statement_id: str | None = None
    status: StatementStatus = Field(default_factory=StatementStatus)
    manifest: dict[str, Any] | None = None
    result: dict[str, Any] | None = None

    @property
    def is_pending(self) -> bool:
        """The statement is still queued or running; poll again."""
        return self.status.state in ("PENDING", "RUNNING")


# -----------------------------------------------------------------------------
# Jobs & Clusters
# -----------------------------------------------------------------------------


class JobsPage(DatabricksPayload):
    jobs: list[dict[str, Any]] = Field(default_factory=list)
    has_more: bool = False


class RunsPage(DatabricksPayload):
    runs: list[dict[str, Any]] = Field(default_factory=list)
    has_more: bool = False


class ClusterEventsPage(DatabricksPayload):
    events: list[dict[str, Any]] = Field(default_factory=list)
    next_page: Any | None = None


# -----------------------------------------------------------------------------
# MLflow
# -----------------------------------------------------------------------------


class ExperimentsPage(DatabricksPayload):
    experiments: list[dict[str, Any]] = Field(default_factory=list)
    next_page_token: str | None = None


class MlflowRunsPage(DatabricksPayload):
    runs: list[dict[str, Any]] = Field(default_factory=list)
    next_page_token: str | None = None


class RegisteredModelsPage(DatabricksPayload):
    registered_models: list[dict[str, Any]] = Field(default_factory=list)
    next_page_token: str | None = None


# -----------------------------------------------------------------------------
# Repos & Pipelines
# -----------------------------------------------------------------------------


class ReposPage(DatabricksPayload):
    repos: list[dict[str, Any]] = Field(default_factory=list)
    next_page_token: str | None = None


class PipelinesPage(DatabricksPayload):
    statuses: list[dict[str, Any]] = Field(default_factory=list)
    next_page_token: str | None = None
