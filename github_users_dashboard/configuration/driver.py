"""Driver for configuration reconciliation for the CLI entry point."""

from pathlib import Path

from github_users_dashboard.configuration import reconcile
from github_users_dashboard.configuration.models import DashboardConfig


async def get_dashboard_config(
    debug: bool | None = None,
    github_api_url: str | None = None,
    github_pat_token: str | None = None,
    github_app_id: int | None = None,
    github_app_private_key_path: Path | None = None,
    github_app_installation_id: int | None = None,
    page_size: int | None = None,
    repository_page_size: int | None = None,
    search_debounce_seconds: float | None = None,
) -> DashboardConfig:
    """Get the reconciled dashboard configuration for the CLI."""
    return await reconcile.reconcile_dashboard_configuration(
        cli_debug=debug,
        cli_github_api_url=github_api_url,
        cli_github_pat_token=github_pat_token,
        cli_github_app_id=github_app_id,
        cli_github_app_private_key_path=github_app_private_key_path,
        cli_github_app_installation_id=github_app_installation_id,
        cli_page_size=page_size,
        cli_repository_page_size=repository_page_size,
        cli_search_debounce_seconds=search_debounce_seconds,
    )
