"""
Tenant Credential Resolution

Credentials are parsed from the headers of every inbound call, never from
process-wide configuration. That is what lets one running instance serve
many workspaces: a TenantCredentials value lives only as long as the call
that created it.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from .config import HOST_HEADER, TOKEN_HEADER, WAREHOUSE_ID_HEADER
from .errors import MissingHost, MissingToken


@dataclass(frozen=True)
class TenantCredentials:
    """
    Per-call credentials for one Databricks workspace.

    The token is excluded from repr so it never ends up in logs or
    tracebacks by accident.
    """

    host: str
    token: str = field(repr=False)
    warehouse_id: str | None = None

    @property
    def base_url(self) -> str:
        """Workspace URL with a single trailing slash removed."""
        if self.host.endswith("/"):
            return self.host[:-1]
        return self.host


def _header(metadata: Mapping[str, str], name: str) -> str:
    """Case-insensitive header lookup over any mapping."""
    value = metadata.get(name)
    if value is None:
        wanted = name.lower()
        for key, candidate in metadata.items():
            if key.lower() == wanted:
                value = candidate
                break
    return value or ""


def resolve_credentials(metadata: Mapping[str, str]) -> TenantCredentials:
    """
    Read tenant credentials from inbound request metadata.

    Never fails: absent host/token become empty strings and an absent
    warehouse id becomes None. Use validate_credentials() to reject them.
    """
    return TenantCredentials(
        host=_header(metadata, HOST_HEADER),
        token=_header(metadata, TOKEN_HEADER),
        warehouse_id=_header(metadata, WAREHOUSE_ID_HEADER) or None,
    )


def validate_credentials(credentials: TenantCredentials) -> None:
    """
    Fail fast if a required credential is missing.

    Raises:
        MissingHost: host is empty
        MissingToken: token is empty
    """
    if not credentials.host:
        raise MissingHost(HOST_HEADER)
    if not credentials.token:
        raise MissingToken(TOKEN_HEADER)
