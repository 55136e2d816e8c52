"""GitHub integration for the GitHub MCP server"""

from .api import (
    create_repository,
    format_repository_details,
    list_repositories,
    repository_info,
    search_repositories,
)
from .client import GitHubAPIError, GitHubClient, GitHubError, GitHubResponseError
from .models import (
    CreateRepository,
    GitHubLicense,
    GitHubRepository,
    GitHubSearchResults,
    ListRepositories,
    RepositoryInfo,
    SearchRepositories,
)

__all__ = [
    "GitHubClient",
    "GitHubError",
    "GitHubAPIError",
    "GitHubResponseError",
    # Tool handlers
    "create_repository",
    "list_repositories",
    "repository_info",
    "search_repositories",
    "format_repository_details",
    # Models
    "CreateRepository",
    "ListRepositories",
    "RepositoryInfo",
    "SearchRepositories",
    "GitHubLicense",
    "GitHubRepository",
    "GitHubSearchResults",
]
