"""Runs the git executable for the git tools"""

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Sequence, Union

from git import Git, GitCommandError, GitCommandNotFound

from ..logging_config import redact

logger = logging.getLogger(__name__)

# No interactive prompts and no credential helpers from system or global
# config: the resolved GitHub token is the only credential git may use.
GIT_ENV_OVERRIDES = {
    "GIT_TERMINAL_PROMPT": "0",
    "GIT_ASKPASS": "echo",
    "GIT_CONFIG_NOSYSTEM": "1",
}
GIT_CONFIG_OVERRIDES = ["-c", "credential.helper="]


@dataclass(frozen=True)
class CommandOutcome:
    """Result of one git invocation. ``output`` on success, ``error`` on failure."""

    success: bool
    output: str = ""
    error: str = ""


def _combine(stdout: str, stderr: str) -> str:
    return "\n".join(part for part in (stdout.strip("\n"), stderr.strip("\n")) if part)


def run_git(
    args: Sequence[str],
    cwd: Optional[Union[str, Path]] = None,
    secrets: Sequence[str] = (),
    timeout: Optional[float] = None,
    env: Optional[Mapping[str, str]] = None,
) -> CommandOutcome:
    """Run ``git <args>`` and capture its output.

    Arguments are passed to the child process as a list, never through a
    shell. Every string in ``secrets`` is replaced with ``***`` in the
    returned text.

    Args:
        args: git arguments, without the leading ``git``
        cwd: Working directory, the process working directory by default
        secrets: Values that must not appear in output or error text
        timeout: Seconds before the child is killed, ``None`` for no limit
        env: Extra environment variables layered over the overrides

    Returns:
        CommandOutcome; this function does not raise for git failures
    """
    command = ["git", *GIT_CONFIG_OVERRIDES, *args]
    display = redact(" ".join(["git", *args]), secrets)
    logger.debug(f"Running {display} (cwd={cwd or '.'})")

    # GitPython quietly falls back to the process cwd for unusable directories
    if cwd and not Path(cwd).is_dir():
        return CommandOutcome(success=False, error=f"Directory not found: {cwd}")

    try:
        status, stdout, stderr = Git(str(cwd) if cwd else None).execute(
            command,
            with_extended_output=True,
            with_exceptions=False,
            env={**GIT_ENV_OVERRIDES, **(env or {})},
            kill_after_timeout=timeout,
        )
    except (GitCommandError, GitCommandNotFound, OSError) as e:
        logger.warning(f"Failed to start {display}: {redact(str(e), secrets)}")
        return CommandOutcome(success=False, error=redact(str(e).strip(), secrets))

    if status != 0:
        detail = _combine(stderr, stdout)
        message = f"Command failed: {display}"
        if detail:
            message += f"\n{redact(detail, secrets)}"
        logger.info(f"{display} exited with status {status}")
        return CommandOutcome(success=False, error=message)

    return CommandOutcome(success=True, output=redact(_combine(stdout, stderr), secrets))


async def run_git_async(
    args: Sequence[str],
    cwd: Optional[Union[str, Path]] = None,
    secrets: Sequence[str] = (),
    timeout: Optional[float] = None,
    env: Optional[Mapping[str, str]] = None,
) -> CommandOutcome:
    """:func:`run_git` in a worker thread so the event loop keeps serving requests."""
    return await asyncio.to_thread(run_git, args, cwd, secrets, timeout, env)
