"""Sets up the githubkit client, authenticated or anonymous."""

from pathlib import Path
from typing import TypeAlias

import structlog
from githubkit import GitHub
from githubkit.auth import (
    AppInstallationAuthStrategy,
    TokenAuthStrategy,
    UnauthAuthStrategy,
)

from github_users_dashboard.configuration.models import GitHubAuthenticationType

logger = structlog.get_logger(__name__)

GitHubClient: TypeAlias = GitHub[AppInstallationAuthStrategy] | GitHub[TokenAuthStrategy] | GitHub[UnauthAuthStrategy]


async def get_github_app_client(
    github_app_id: int | None,
    github_app_private_key_path: Path | None,
    github_app_installation_id: int | None,
    github_api_url: str,
) -> GitHub[AppInstallationAuthStrategy]:
    """Returns a GitHub client authenticated as a GitHub App installation."""
    if not (github_app_id and github_app_private_key_path and github_app_installation_id):
        raise RuntimeError("GitHub App authentication requires app_id, private_key_path, and installation_id in config.")
    try:
        with open(github_app_private_key_path) as f:
            private_key = f.read()
    except OSError as e:
        raise ValueError(f"Failed to read GitHub App private key: {e}") from e
    auth = AppInstallationAuthStrategy(
        app_id=github_app_id,
        private_key=private_key,
        installation_id=github_app_installation_id,
    )
    # Disable HTTP caching to always get fresh data
    return GitHub(auth=auth, base_url=github_api_url, http_cache=False)


async def get_github_pat_client(github_pat_token: str | None, github_api_url: str) -> GitHub[TokenAuthStrategy]:
    """Returns an authenticated GitHub client using GitHub PAT credentials."""
    if not github_pat_token:
        raise RuntimeError("GitHub PAT authentication requires github_pat_token in config.")
    # Disable HTTP caching to always get fresh data
    return GitHub(auth=TokenAuthStrategy(github_pat_token), base_url=github_api_url, http_cache=False)


async def get_github_anonymous_client(github_api_url: str) -> GitHub[UnauthAuthStrategy]:
    """Returns an unauthenticated GitHub client for public endpoints."""
    # Disable HTTP caching to always get fresh data
    return GitHub(auth=UnauthAuthStrategy(), base_url=github_api_url, http_cache=False)


async def get_github_client(
    github_auth_type: GitHubAuthenticationType,
    github_pat_token: str | None,
    github_app_id: int | None,
    github_app_private_key_path: Path | None,
    github_app_installation_id: int | None,
    github_api_url: str,
) -> GitHubClient:
    """Returns a GitHub client for the given authentication type.

    Supports custom base URL for GitHub Enterprise Server (GHES).
    Raises RuntimeError if the credentials required by the chosen type are missing.
    """
    if github_auth_type == GitHubAuthenticationType.APP:
        return await get_github_app_client(github_app_id, github_app_private_key_path, github_app_installation_id, github_api_url)
    elif github_auth_type == GitHubAuthenticationType.PAT:
        return await get_github_pat_client(github_pat_token, github_api_url)
    logger.info("Using anonymous GitHub access; unauthenticated rate limits apply", github_api_url=github_api_url)
    return await get_github_anonymous_client(github_api_url)
