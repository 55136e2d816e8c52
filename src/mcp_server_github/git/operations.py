"""Git tool handlers for the GitHub MCP server"""

import base64
import logging
from typing import TYPE_CHECKING, Dict, Optional
from urllib.parse import urlsplit, urlunsplit

from .models import CloneRepository, CommitChanges, PushChanges, RepositoryStatus
from .runner import run_git_async

if TYPE_CHECKING:
    from ..core.tools import ToolContext

logger = logging.getLogger(__name__)

GITHUB_HOST = "github.com"

CLONE_FAILURE = "Failed to clone repository"
STATUS_FAILURE = "Failed to get git status"
COMMIT_FAILURE = "Failed to commit changes"
PUSH_FAILURE = "Failed to push changes"


def authenticated_clone_url(url: str, token: Optional[str]) -> str:
    """Insert ``token`` as the user-info of an https://github.com URL.

    Any other URL, or any URL when there is no token, is returned unchanged.
    """
    if not token:
        return url
    try:
        parts = urlsplit(url)
        hostname = parts.hostname
        port = parts.port
    except ValueError:
        return url
    if parts.scheme != "https" or hostname != GITHUB_HOST:
        return url

    netloc = f"{token}@{hostname}"
    if port:
        netloc += f":{port}"
    return urlunsplit(parts._replace(netloc=netloc))


def github_auth_env(token: Optional[str]) -> Dict[str, str]:
    """Environment that makes git send ``token`` to https://github.com.

    Uses git's GIT_CONFIG_COUNT variables so the token never appears on the
    command line or in the repository config.
    """
    if not token:
        return {}
    basic = base64.b64encode(f"x-access-token:{token}".encode()).decode()
    return {
        "GIT_CONFIG_COUNT": "1",
        "GIT_CONFIG_KEY_0": f"http.https://{GITHUB_HOST}/.extraheader",
        "GIT_CONFIG_VALUE_0": f"AUTHORIZATION: basic {basic}",
    }


async def clone_repository(params: CloneRepository, context: "ToolContext") -> str:
    clone_url = authenticated_clone_url(params.url, context.credential.token)
    args = ["clone", "--", clone_url]
    if params.directory:
        args.append(params.directory)

    result = await run_git_async(args, secrets=context.secrets, timeout=context.git_timeout)
    if not result.success:
        return f"{CLONE_FAILURE}: {result.error}"

    target = f" to {params.directory}" if params.directory else ""
    return f"Successfully cloned repository from {params.url}{target}."


async def repository_status(params: RepositoryStatus, context: "ToolContext") -> str:
    result = await run_git_async(
        ["status"],
        cwd=params.directory or ".",
        secrets=context.secrets,
        timeout=context.git_timeout,
    )
    if not result.success:
        return f"{STATUS_FAILURE}: {result.error}"
    return f"Git status for {params.directory or 'current directory'}:\n{result.output}"


async def commit_changes(params: CommitChanges, context: "ToolContext") -> str:
    if params.add_all:
        added = await run_git_async(
            ["add", "-A"],
            cwd=params.directory,
            secrets=context.secrets,
            timeout=context.git_timeout,
        )
        if not added.success:
            return f"{COMMIT_FAILURE}: {added.error}"

    result = await run_git_async(
        ["commit", "-m", params.message],
        cwd=params.directory,
        secrets=context.secrets,
        timeout=context.git_timeout,
    )
    if not result.success:
        return f"{COMMIT_FAILURE}: {result.error}"
    return f"Successfully committed changes:\n{result.output}"


async def push_changes(params: PushChanges, context: "ToolContext") -> str:
    result = await run_git_async(
        ["push", params.remote, params.branch],
        cwd=params.directory,
        secrets=context.secrets,
        timeout=context.git_timeout,
        env=github_auth_env(context.credential.token),
    )
    if not result.success:
        return f"{PUSH_FAILURE}: {result.error}"
    logger.info(f"Pushed {params.branch} to {params.remote}")
    return f"Successfully pushed changes to {params.remote}/{params.branch}:\n{result.output}"
