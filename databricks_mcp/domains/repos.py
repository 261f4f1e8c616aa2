"""
Repos Domain

Git folders in the workspace and the Git credentials used to sync them.
"""

from __future__ import annotations

from ..endpoints import HttpMethod, Param, ParamLocation, ParamType, RestEndpoint, page, unwrap_list
from ..schemas import ReposPage

_REPO_ID = Param("repoId", "Repo ID", type=ParamType.INTEGER, location=ParamLocation.PATH)


REPO_ENDPOINTS: list[RestEndpoint] = [
    RestEndpoint(
        name="databricks_list_repos",
        path="/api/2.0/repos",
        method=HttpMethod.GET,
        description="List Git folders, optionally under a workspace path prefix.",
        category="repos",
        params=(
            Param(
                "pathPrefix",
                "Filter by path prefix",
                location=ParamLocation.QUERY,
                required=False,
            ),
            Param(
                "pageToken",
                "Pagination token",
                location=ParamLocation.QUERY,
                required=False,
                wire_name="next_page_token",
            ),
        ),
        reshape=page(ReposPage),
        count_key="repos",
    ),
    RestEndpoint(
        name="databricks_get_repo",
        path="/api/2.0/repos/{repoId}",
        method=HttpMethod.GET,
        description="Get a Git folder, including its checked-out branch and head commit.",
        category="repos",
        params=(_REPO_ID,),
    ),
    RestEndpoint(
        name="databricks_create_repo",
        path="/api/2.0/repos",
        method=HttpMethod.POST,
        description="Clone a Git repository into the workspace.",
        category="repos",
        params=(
            Param("url", "Git repository URL"),
            Param("provider", 'Git provider (e.g., "gitHub", "gitLab", "azureDevOpsServices")'),
            Param("path", "Workspace path", required=False),
        ),
        success_message="Repo created",
    ),
    RestEndpoint(
        name="databricks_update_repo",
        path="/api/2.0/repos/{repoId}",
        method=HttpMethod.PATCH,
        description="Check out a branch or tag in a Git folder (pulls the latest commit).",
        category="repos",
        params=(
            _REPO_ID,
            Param("branch", "Branch to checkout", required=False),
            Param("tag", "Tag to checkout", required=False),
        ),
        success_message="Repo updated",
    ),
    RestEndpoint(
        name="databricks_delete_repo",
        path="/api/2.0/repos/{repoId}",
        method=HttpMethod.DELETE,
        description="Delete a Git folder from the workspace.",
        category="repos",
        params=(_REPO_ID,),
        success_message="Repo {repoId} deleted",
    ),
    # Git credentials
    RestEndpoint(
        name="databricks_list_git_credentials",
        path="/api/2.0/git-credentials",
        method=HttpMethod.GET,
        description="List the Git credentials of the calling user.",
        category="repos",
        reshape=unwrap_list("credentials"),
        list_key="credentials",
    ),
    RestEndpoint(
        name="databricks_create_git_credential",
        path="/api/2.0/git-credentials",
        method=HttpMethod.POST,
        description="Store a Git credential for the calling user.",
        category="repos",
        params=(
            Param("provider", "Git provider", wire_name="git_provider"),
            Param("username", "Git username", wire_name="git_username"),
            Param("personalAccessToken", "Personal access token"),
        ),
        success_message="Git credential created",
    ),
    RestEndpoint(
        name="databricks_delete_git_credential",
        path="/api/2.0/git-credentials/{credentialId}",
        method=HttpMethod.DELETE,
        description="Delete a Git credential.",
        category="repos",
        params=(
            Param(
                "credentialId",
                "Credential ID",
                type=ParamType.INTEGER,
                location=ParamLocation.PATH,
            ),
        ),
        success_message="Git credential {credentialId} deleted",
    ),
]
