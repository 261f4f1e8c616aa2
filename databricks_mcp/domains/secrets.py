"""
Secrets Domain

Secret scopes, secrets and scope ACLs. Secret values are write-only:
listing returns key metadata, never values.
"""

from __future__ import annotations

from ..config import SECRET_SCOPE_BACKEND
from ..endpoints import HttpMethod, Param, ParamLocation, RestEndpoint, unwrap_list

ACL_PERMISSIONS = ("READ", "WRITE", "MANAGE")

_SCOPE = Param("scope", "Scope name")
_SCOPE_QUERY = Param("scope", "Scope name", location=ParamLocation.QUERY)
_KEY = Param("key", "Secret key")
_PRINCIPAL = Param("principal", "Principal name (user, group or service principal)")


SECRET_ENDPOINTS: list[RestEndpoint] = [
    # Scopes
    RestEndpoint(
        name="databricks_list_secret_scopes",
        path="/api/2.0/secrets/scopes/list",
        method=HttpMethod.GET,
        description="List all secret scopes.",
        category="secrets",
        reshape=unwrap_list("scopes"),
        list_key="scopes",
    ),
    RestEndpoint(
        name="databricks_create_secret_scope",
        path="/api/2.0/secrets/scopes/create",
        method=HttpMethod.POST,
        description="Create a Databricks-backed secret scope.",
        category="secrets",
        params=(
            _SCOPE,
            Param(
                "backendType",
                "Scope backend",
                required=False,
                wire_name="scope_backend_type",
                default=SECRET_SCOPE_BACKEND,
                enum=(SECRET_SCOPE_BACKEND,),
            ),
        ),
        success_message="Secret scope {scope} created",
    ),
    RestEndpoint(
        name="databricks_delete_secret_scope",
        path="/api/2.0/secrets/scopes/delete",
        method=HttpMethod.POST,
        description="Delete a secret scope and every secret in it.",
        category="secrets",
        params=(_SCOPE,),
        success_message="Secret scope {scope} deleted",
    ),
    # Secrets
    RestEndpoint(
        name="databricks_list_secrets",
        path="/api/2.0/secrets/list",
        method=HttpMethod.GET,
        description="List secret keys in a scope (values are never returned).",
        category="secrets",
        params=(_SCOPE_QUERY,),
        reshape=unwrap_list("secrets"),
        list_key="secrets",
        echo={"scope": "scope"},
    ),
    RestEndpoint(
        name="databricks_put_secret",
        path="/api/2.0/secrets/put",
        method=HttpMethod.POST,
        description="Store a string secret in a scope, replacing any existing value.",
        category="secrets",
        params=(_SCOPE, _KEY, Param("value", "Secret value", wire_name="string_value")),
        success_message="Secret {scope}/{key} stored",
    ),
    RestEndpoint(
        name="databricks_delete_secret",
        path="/api/2.0/secrets/delete",
        method=HttpMethod.POST,
        description="Delete a secret from a scope.",
        category="secrets",
        params=(_SCOPE, _KEY),
        success_message="Secret {scope}/{key} deleted",
    ),
    # ACLs
    RestEndpoint(
        name="databricks_list_secret_acls",
        path="/api/2.0/secrets/acls/list",
        method=HttpMethod.GET,
        description="List the ACLs of a secret scope.",
        category="secrets",
        params=(_SCOPE_QUERY,),
        reshape=unwrap_list("items"),
        list_key="acls",
        echo={"scope": "scope"},
    ),
    RestEndpoint(
        name="databricks_get_secret_acl",
        path="/api/2.0/secrets/acls/get",
        method=HttpMethod.GET,
        description="Get the permission a principal holds on a secret scope.",
        category="secrets",
        params=(_SCOPE_QUERY, Param("principal", "Principal name", location=ParamLocation.QUERY)),
    ),
    RestEndpoint(
        name="databricks_put_secret_acl",
        path="/api/2.0/secrets/acls/put",
        method=HttpMethod.POST,
        description="Grant a principal READ, WRITE or MANAGE on a secret scope.",
        category="secrets",
        params=(_SCOPE, _PRINCIPAL, Param("permission", "Permission level", enum=ACL_PERMISSIONS)),
        success_message="ACL {permission} granted to {principal} on {scope}",
    ),
    RestEndpoint(
        name="databricks_delete_secret_acl",
        path="/api/2.0/secrets/acls/delete",
        method=HttpMethod.POST,
        description="Remove a principal's ACL from a secret scope.",
        category="secrets",
        params=(_SCOPE, _PRINCIPAL),
        success_message="ACL for {principal} on {scope} deleted",
    ),
]
