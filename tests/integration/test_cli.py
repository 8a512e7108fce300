"""Integration tests for the CLI."""

import os
import subprocess
import sys

import pytest


def run_cli(args: list[str]) -> subprocess.CompletedProcess[str]:
    """Helper to run the CLI as a subprocess and capture output.

    Args:
        args: List of command line arguments to pass to the CLI.

    Returns:
        subprocess.CompletedProcess: The result of running the CLI command.
    """
    complete_command = [sys.executable, "-m", "github_users_dashboard.configuration.cli"] + args
    print(f"Running command: {' '.join(complete_command)}")
    result = subprocess.run(
        complete_command,
        capture_output=True,
        text=True,
    )
    print(f"Command result: {result.returncode}")
    print(f"Command stdout: {result.stdout}")
    print(f"Command stderr: {result.stderr}")
    return result


def test_no_handle_provided() -> None:
    """Test that the CLI exits with an error if no handle is given to show."""
    result = run_cli(["show"])
    assert result.returncode != 0
    assert "Missing argument 'HANDLE'" in result.stderr


def test_no_query_provided() -> None:
    """Test that the CLI exits with an error if no query is given to search."""
    result = run_cli(["search"])
    assert result.returncode != 0
    assert "Missing argument 'QUERY'" in result.stderr


def test_invalid_page_size() -> None:
    """Test that an out-of-range page size is reported before any request is made."""
    result = run_cli(["--page-size", "0", "list"])
    assert result.returncode == 2
    assert "Configuration error" in result.stderr
    assert "page_size" in result.stderr


def test_conflicting_authentication() -> None:
    """Test that PAT and GitHub App settings together are rejected."""
    result = run_cli(["--github-pat-token", "ghp_example", "--github-app-id", "12345", "list"])
    assert result.returncode == 2
    assert "Both PAT and GitHub App configurations are defined" in result.stderr


@pytest.mark.skipif(not os.getenv("GITHUB_PAT_TOKEN"), reason="GITHUB_PAT_TOKEN is required to query the live GitHub API")
def test_show_octocat() -> None:
    """Test that the detail view of a well-known user renders from the live API."""
    result = run_cli(["show", "octocat"])
    assert result.returncode == 0
    assert "(@octocat)" in result.stdout
    assert "Repositories (" in result.stdout


@pytest.mark.skipif(not os.getenv("GITHUB_PAT_TOKEN"), reason="GITHUB_PAT_TOKEN is required to query the live GitHub API")
def test_list_two_pages() -> None:
    """Test that requesting two pages accumulates two pages of users."""
    result = run_cli(["--page-size", "5", "list", "--pages", "2"])
    assert result.returncode == 0
    assert "Total Users: 10" in result.stdout
