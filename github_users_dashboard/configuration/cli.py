"""Defines the Command Line Interface (CLI) using Typer."""

import asyncio
import logging
import sys
from pathlib import Path

import structlog
import typer
from dotenv import load_dotenv
from githubkit.exception import GitHubException
from typer import Argument, Option
from typing_extensions import Annotated

from github_users_dashboard.configuration.driver import get_dashboard_config
from github_users_dashboard.configuration.exceptions import (
    GitHubAuthenticationConfigurationUndefinedError,
    InvalidConfigurationElementError,
)
from github_users_dashboard.configuration.models import DashboardConfig
from github_users_dashboard.dashboard import DetailFetcher, ListingView, ManualVisibilityObserver, render_listing, render_user_detail
from github_users_dashboard.github.adapter import GitHubKitAdapter
from github_users_dashboard.utils.github import describe_github_error

load_dotenv()

typer_app = typer.Typer(pretty_exceptions_show_locals=False, help="Browse GitHub users from the terminal.")

BROWSE_HELP = """Commands:
  <Enter> | more     load the next page of users
  /<text>            search users (an empty "/" clears the search)
  clear              clear the search
  retry              reload from the first page after an error
  show <handle>      show a user's profile and repositories
  quit               leave the dashboard"""


def configure_logging(debug: bool) -> None:
    """Configure structlog to write events at or above the requested level to stderr."""
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG if debug else logging.WARNING),
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
    )


async def create_adapter(dashboard_config: DashboardConfig) -> GitHubKitAdapter:
    """Create the GitHub users source described by the configuration."""
    return await GitHubKitAdapter.create(
        github_auth_type=dashboard_config.github_authentication_type,
        github_pat_token=dashboard_config.github_pat_token,
        github_app_id=dashboard_config.github_app_id,
        github_app_private_key_path=dashboard_config.github_app_private_key_path,
        github_app_installation_id=dashboard_config.github_app_installation_id,
        github_api_url=dashboard_config.github_api_url,
    )


def create_listing_view(adapter: GitHubKitAdapter, dashboard_config: DashboardConfig) -> tuple[ListingView, ManualVisibilityObserver]:
    """Create a listing view whose load-more trigger is driven by the terminal."""
    observer = ManualVisibilityObserver()
    view = ListingView(
        adapter,
        observer,
        page_size=dashboard_config.page_size,
        search_debounce_seconds=dashboard_config.search_debounce_seconds,
    )
    return view, observer


@typer_app.callback()
def main_callback(
    ctx: typer.Context,
    debug: Annotated[bool, Option(envvar="DEBUG", help="Enable debug logging.")] = False,
    github_api_url: Annotated[str | None, Option(envvar="GITHUB_API_URL", help="GitHub API URL.")] = None,
    github_pat_token: Annotated[str | None, Option(envvar="GITHUB_PAT_TOKEN", help="GitHub Personal Access Token.")] = None,
    github_app_id: Annotated[int | None, Option(envvar="GITHUB_APP_ID", help="GitHub App ID.")] = None,
    github_app_private_key_path: Annotated[Path | None, Option(envvar="GITHUB_APP_PRIVATE_KEY_PATH", help="Path to GitHub App private key.")] = None,
    github_app_installation_id: Annotated[int | None, Option(envvar="GITHUB_APP_INSTALLATION_ID", help="GitHub App Installation ID.")] = None,
    page_size: Annotated[int | None, Option(envvar="PAGE_SIZE", help="Users requested per page (1-100).")] = None,
    repository_page_size: Annotated[
        int | None, Option(envvar="REPOSITORY_PAGE_SIZE", help="Maximum repositories shown in a user's detail view (1-100).")
    ] = None,
    search_debounce_seconds: Annotated[
        float | None, Option(envvar="SEARCH_DEBOUNCE_SECONDS", help="Pause in typing before a search is issued.")
    ] = None,
) -> None:
    """Reconcile the configuration shared by every command."""
    configure_logging(debug)
    try:
        dashboard_config = asyncio.run(
            get_dashboard_config(
                debug=debug,
                github_api_url=github_api_url,
                github_pat_token=github_pat_token,
                github_app_id=github_app_id,
                github_app_private_key_path=github_app_private_key_path,
                github_app_installation_id=github_app_installation_id,
                page_size=page_size,
                repository_page_size=repository_page_size,
                search_debounce_seconds=search_debounce_seconds,
            )
        )
    except (GitHubAuthenticationConfigurationUndefinedError, InvalidConfigurationElementError) as e:
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(2) from e
    ctx.ensure_object(dict)
    ctx.obj["config"] = dashboard_config


@typer_app.command(name="list")
def list_users_cli(
    ctx: typer.Context,
    pages: Annotated[int, Option(min=1, help="Number of pages to load.")] = 1,
) -> None:
    """List GitHub users, loading pages until the requested count or the end of the listing."""
    dashboard_config: DashboardConfig = ctx.obj["config"]

    async def run() -> tuple[str, str | None]:
        adapter = await create_adapter(dashboard_config)
        view, observer = create_listing_view(adapter, dashboard_config)
        await view.mount()
        try:
            while view.state.error is None and view.state.page < pages and view.sentinel is not None:
                if observer.reveal(view.sentinel) == 0:
                    break
                await view.wait_until_idle()
                if not view.state.has_more:
                    break
            return render_listing(view.snapshot()), view.state.error
        finally:
            view.unmount()

    output, error = asyncio.run(run())
    typer.echo(output, nl=False)
    if error is not None:
        raise typer.Exit(1)


@typer_app.command(name="search")
def search_users_cli(
    ctx: typer.Context,
    query: Annotated[str, Argument(help="Free-text query, e.g. a username.")],
) -> None:
    """Search GitHub users."""
    dashboard_config: DashboardConfig = ctx.obj["config"]

    async def run() -> tuple[str, str | None]:
        adapter = await create_adapter(dashboard_config)
        view, _ = create_listing_view(adapter, dashboard_config)
        try:
            view.set_query(query)
            await view.search.flush()
            return render_listing(view.snapshot()), view.state.error
        finally:
            view.unmount()

    output, error = asyncio.run(run())
    typer.echo(output, nl=False)
    if error is not None:
        raise typer.Exit(1)


@typer_app.command(name="show")
def show_user_cli(
    ctx: typer.Context,
    handle: Annotated[str, Argument(help="GitHub handle of the user to show.")],
) -> None:
    """Show a GitHub user's profile and most recently updated repositories."""
    dashboard_config: DashboardConfig = ctx.obj["config"]

    async def run() -> str:
        adapter = await create_adapter(dashboard_config)
        fetcher = DetailFetcher(adapter, repository_page_size=dashboard_config.repository_page_size)
        return render_user_detail(await fetcher.fetch(handle))

    try:
        output = asyncio.run(run())
    except GitHubException as e:
        typer.echo(f"Failed to load user {handle}: {describe_github_error(e, 'request failed')}", err=True)
        raise typer.Exit(1) from e
    typer.echo(output, nl=False)


async def browse(dashboard_config: DashboardConfig) -> None:
    """Interactive listing: page, search and open detail views until the user quits."""
    adapter = await create_adapter(dashboard_config)
    view, observer = create_listing_view(adapter, dashboard_config)
    fetcher = DetailFetcher(adapter, repository_page_size=dashboard_config.repository_page_size)
    await view.mount()
    typer.echo(render_listing(view.snapshot()), nl=False)
    typer.echo(BROWSE_HELP)
    try:
        while True:
            command = (await asyncio.to_thread(input, "> ")).strip()
            if command in ("quit", "exit", "q"):
                return
            if command in ("", "more"):
                if view.sentinel is None or observer.reveal(view.sentinel) == 0:
                    typer.echo("No more users to load." if not view.state.has_more else "Nothing to load right now.")
                    continue
                await view.wait_until_idle()
            elif command.startswith("/"):
                view.set_query(command[1:])
                await view.search.flush()
            elif command == "clear":
                view.clear_search()
            elif command == "retry":
                await view.retry()
            elif command.startswith("show "):
                handle = command.removeprefix("show ").strip()
                try:
                    typer.echo(render_user_detail(await fetcher.fetch(handle)), nl=False)
                except GitHubException as e:
                    typer.echo(f"Failed to load user {handle}: {describe_github_error(e, 'request failed')}", err=True)
                continue
            else:
                typer.echo(BROWSE_HELP)
                continue
            typer.echo(render_listing(view.snapshot()), nl=False)
    finally:
        view.unmount()


@typer_app.command(name="browse")
def browse_cli(ctx: typer.Context) -> None:
    """Browse GitHub users interactively."""
    dashboard_config: DashboardConfig = ctx.obj["config"]
    try:
        asyncio.run(browse(dashboard_config))
    except (EOFError, KeyboardInterrupt):
        typer.echo("")


if __name__ == "__main__":
    typer_app()
