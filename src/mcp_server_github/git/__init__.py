"""Git operations for the GitHub MCP server"""

from .models import CloneRepository, CommitChanges, PushChanges, RepositoryStatus
from .operations import (
    authenticated_clone_url,
    clone_repository,
    commit_changes,
    github_auth_env,
    push_changes,
    repository_status,
)
from .runner import CommandOutcome, run_git, run_git_async

__all__ = [
    # Tool handlers
    "clone_repository",
    "repository_status",
    "commit_changes",
    "push_changes",
    # Helpers
    "authenticated_clone_url",
    "github_auth_env",
    "CommandOutcome",
    "run_git",
    "run_git_async",
    # Models
    "CloneRepository",
    "CommitChanges",
    "PushChanges",
    "RepositoryStatus",
]
