"""
Tokens Domain

Personal access tokens of the calling user.
"""

from __future__ import annotations

from ..endpoints import HttpMethod, Param, ParamType, RestEndpoint, unwrap_list


TOKEN_ENDPOINTS: list[RestEndpoint] = [
    RestEndpoint(
        name="databricks_list_tokens",
        path="/api/2.0/token/list",
        method=HttpMethod.GET,
        description="List the calling user's personal access tokens (metadata only).",
        category="tokens",
        reshape=unwrap_list("token_infos"),
        list_key="tokens",
    ),
    RestEndpoint(
        name="databricks_create_token",
        path="/api/2.0/token/create",
        method=HttpMethod.POST,
        description="Create a personal access token. The token value is shown only once.",
        category="tokens",
        params=(
            Param("comment", "Token description", required=False),
            Param(
                "lifetimeSeconds",
                "Lifetime in seconds (omit for no expiry)",
                type=ParamType.INTEGER,
                required=False,
                minimum=60,
            ),
        ),
        success_message="Token created (save the token_value - it will not be shown again)",
    ),
    RestEndpoint(
        name="databricks_revoke_token",
        path="/api/2.0/token/delete",
        method=HttpMethod.POST,
        description="Revoke a personal access token.",
        category="tokens",
        params=(Param("tokenId", "Token ID"),),
        success_message="Token {tokenId} revoked",
    ),
]
