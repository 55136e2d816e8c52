"""GitHub credential resolution.

The token is looked up once at startup and then handed to every tool through
the :class:`~mcp_server_github.core.tools.ToolContext`. Sources, in order:

1. ``GITHUB_TOKEN`` in the process environment
2. ``GITHUB_TOKEN`` in a ``.env`` file in each search directory
3. the contents of a token file (``.github_token``) in each search directory

The search directories default to the current working directory and then the
user's home directory. Empty, whitespace-only and placeholder values are
skipped, so an MCP client that exports ``GITHUB_TOKEN=""`` does not mask a
real token further down the list.
"""

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Sequence

from dotenv import dotenv_values

logger = logging.getLogger(__name__)

TOKEN_ENV_VAR = "GITHUB_TOKEN"
DEFAULT_TOKEN_FILE = ".github_token"

# Common placeholder values copied from templates and never meant to be used
GITHUB_TOKEN_PLACEHOLDERS = ["", "YOUR_TOKEN_HERE", "REPLACE_ME", "TODO", "CHANGEME"]

GITHUB_TOKEN_PATTERNS = [
    r"^ghp_[a-zA-Z0-9]{36}$",  # Personal access tokens (classic)
    r"^github_pat_[a-zA-Z0-9_]{82}$",  # Fine-grained personal access tokens
    r"^gho_[a-zA-Z0-9]{36}$",  # OAuth tokens
    r"^ghs_[a-zA-Z0-9]{36}$",  # GitHub App installation tokens
    r"^ghu_[a-zA-Z0-9]{36}$",  # GitHub App user tokens
]


@dataclass(frozen=True)
class Credential:
    """An optional GitHub access token and where it was found."""

    token: Optional[str] = None
    source: str = "none"

    @property
    def is_configured(self) -> bool:
        return bool(self.token)

    def __repr__(self) -> str:
        masked = "***" if self.token else None
        return f"Credential(token={masked!r}, source={self.source!r})"

    __str__ = __repr__


def is_placeholder_token(token: Optional[str]) -> bool:
    """Check whether a token value should be treated as absent."""
    if token is None:
        return True
    return token.strip() in GITHUB_TOKEN_PLACEHOLDERS


def looks_like_github_token(token: str) -> bool:
    """Validate GitHub token format"""
    return any(re.match(pattern, token.strip()) for pattern in GITHUB_TOKEN_PATTERNS)


def default_search_dirs() -> list[Path]:
    dirs = [Path.cwd()]
    home = Path.home()
    if home not in dirs:
        dirs.append(home)
    return dirs


def _read_token_file(path: Path) -> Optional[str]:
    try:
        return path.read_text(encoding="utf-8").strip()
    except OSError as e:
        logger.warning(f"Failed to read token file {path}: {e}")
        return None


def resolve_credential(
    environ: Optional[Mapping[str, str]] = None,
    search_dirs: Optional[Sequence[Path]] = None,
    token_file_name: str = DEFAULT_TOKEN_FILE,
) -> Credential:
    """Resolve the GitHub credential for this process.

    Args:
        environ: Environment mapping to consult, ``os.environ`` by default
        search_dirs: Directories searched for ``.env`` and token files
        token_file_name: Name of the plain-text token file

    Returns:
        The first usable credential, or ``Credential()`` when none is found.
        A missing token is not an error; GitHub tools that need it report
        that it is not configured.
    """
    environ = os.environ if environ is None else environ
    dirs = list(search_dirs) if search_dirs is not None else default_search_dirs()

    candidates: list[tuple[Optional[str], str]] = [(environ.get(TOKEN_ENV_VAR), "env")]

    for directory in dirs:
        env_file = directory / ".env"
        if env_file.is_file():
            try:
                values = dotenv_values(env_file)
            except Exception as e:
                logger.warning(f"Failed to load .env file {env_file}: {e}")
                continue
            candidates.append((values.get(TOKEN_ENV_VAR), str(env_file)))

    for directory in dirs:
        token_file = directory / token_file_name
        if token_file.is_file():
            candidates.append((_read_token_file(token_file), str(token_file)))

    for token, source in candidates:
        if is_placeholder_token(token):
            continue
        token = token.strip()
        if not looks_like_github_token(token):
            logger.warning(f"⚠️ GitHub token from {source} appears to be an unrecognised format")
        logger.info(f"GitHub token configured (source: {source})")
        return Credential(token=token, source=source)

    logger.warning(
        "No GitHub token found. Set GITHUB_TOKEN or create a "
        f"{token_file_name} file; repository create/list tools are disabled."
    )
    return Credential()
