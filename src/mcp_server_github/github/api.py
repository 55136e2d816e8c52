"""GitHub API tool handlers for the GitHub MCP server"""

import logging
from datetime import datetime
from typing import TYPE_CHECKING, Optional
from urllib.parse import quote

from pydantic import ValidationError

from .client import GitHubError
from .models import (
    CreateRepository,
    GitHubRepository,
    GitHubSearchResults,
    ListRepositories,
    RepositoryInfo,
    SearchRepositories,
)

if TYPE_CHECKING:
    from ..core.tools import ToolContext

logger = logging.getLogger(__name__)

# Failures the handlers turn into tool text; anything else is a bug
API_FAILURES = (GitHubError, ValidationError)

CREATE_FAILURE = "Failed to create repository"
LIST_FAILURE = "Failed to list repositories"
INFO_FAILURE = "Failed to get repository details"
SEARCH_FAILURE = "Failed to search repositories"


def token_not_configured(action: str) -> str:
    return (
        "GitHub token not configured. Please set the GITHUB_TOKEN "
        f"environment variable to {action}."
    )


def _format_date(value: Optional[datetime]) -> str:
    return value.date().isoformat() if value else "Unknown"


def format_repository_details(repo: GitHubRepository) -> str:
    """Render the fixed 12-line summary of a repository"""
    license_name = repo.license.name if repo.license and repo.license.name else None
    lines = [
        f"Repository: {repo.full_name}",
        f"Description: {repo.description or 'No description'}",
        f"Stars: {repo.stargazers_count}",
        f"Forks: {repo.forks_count}",
        f"Watchers: {repo.watchers_count}",
        f"Open Issues: {repo.open_issues_count}",
        f"Created: {_format_date(repo.created_at)}",
        f"Updated: {_format_date(repo.updated_at)}",
        f"Language: {repo.language or 'Not specified'}",
        f"License: {license_name or 'Not specified'}",
        f"Visibility: {repo.visibility}",
        f"URL: {repo.html_url}",
    ]
    return "\n".join(lines)


async def create_repository(params: CreateRepository, context: "ToolContext") -> str:
    """Create a repository for the authenticated user"""
    if not context.credential.is_configured:
        return token_not_configured("create repositories")

    try:
        data = await context.github.post(
            "/user/repos",
            {
                "name": params.name,
                "description": params.description,
                "private": params.private,
                "auto_init": params.auto_init,
            },
        )
        repo = GitHubRepository.model_validate(data)
    except API_FAILURES as e:
        return f"{CREATE_FAILURE}: {e}"

    logger.info(f"Created repository {repo.full_name}")
    return f'Successfully created repository "{params.name}".\nURL: {repo.html_url}'


async def list_repositories(params: ListRepositories, context: "ToolContext") -> str:
    """List the authenticated user's repositories"""
    if not context.credential.is_configured:
        return token_not_configured("list repositories")

    try:
        data = await context.github.get("/user/repos", per_page=params.limit, sort="updated")
        repos = [GitHubRepository.model_validate(item) for item in data]
    except API_FAILURES as e:
        return f"{LIST_FAILURE}: {e}"
    except TypeError as e:
        return f"{LIST_FAILURE}: unexpected response shape ({e})"

    if not repos:
        return "No repositories found."

    output = ["Your GitHub repositories:"]
    for i, repo in enumerate(repos[: params.limit], start=1):
        output.append(
            f"{i}. {repo.name}: {repo.description or 'No description'} ({repo.visibility})"
        )
    return "\n".join(output)


async def repository_info(params: RepositoryInfo, context: "ToolContext") -> str:
    """Get details about one repository"""
    owner, name = (quote(part, safe="") for part in params.repo.split("/", 1))
    try:
        data = await context.github.get(f"/repos/{owner}/{name}")
        repo = GitHubRepository.model_validate(data)
    except API_FAILURES as e:
        return f"{INFO_FAILURE}: {e}"
    return format_repository_details(repo)


async def search_repositories(params: SearchRepositories, context: "ToolContext") -> str:
    """Search public repositories"""
    try:
        data = await context.github.get(
            "/search/repositories", q=params.query, per_page=params.limit
        )
        results = GitHubSearchResults.model_validate(data)
    except API_FAILURES as e:
        return f"{SEARCH_FAILURE}: {e}"

    if not results.items:
        return f'No repositories found matching "{params.query}".'

    output = [f'Found {results.total_count} repositories matching "{params.query}":']
    for i, repo in enumerate(results.items[: params.limit], start=1):
        output.append(
            f"{i}. {repo.full_name} ({repo.stargazers_count} stars): "
            f"{repo.description or 'No description'}"
        )
    return "\n".join(output)
