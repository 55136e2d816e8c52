"""Tests for the git command runner."""

from pathlib import Path
from unittest.mock import patch

import pytest
from git import GitCommandNotFound

from mcp_server_github.git.runner import CommandOutcome, run_git, run_git_async


def test_run_git_success(test_repository):
    result = run_git(["status"], cwd=test_repository.working_dir)

    assert result.success
    assert "On branch main" in result.output
    assert result.error == ""


def test_run_git_failure_reports_command_and_stderr(test_repository):
    result = run_git(["checkout", "nonexistent-branch"], cwd=test_repository.working_dir)

    assert not result.success
    assert result.error.startswith("Command failed: git checkout nonexistent-branch")
    assert "nonexistent-branch" in result.error.splitlines()[-1]


def test_run_git_missing_directory(tmp_path: Path):
    missing = tmp_path / "does-not-exist"

    result = run_git(["status"], cwd=missing)

    assert result == CommandOutcome(success=False, error=f"Directory not found: {missing}")


def test_run_git_not_a_repository(tmp_path: Path):
    result = run_git(["status"], cwd=tmp_path)

    assert not result.success
    assert "not a git repository" in result.error.lower()


def test_run_git_redacts_secrets(tmp_path: Path):
    source = tmp_path / "SECRET-VALUE" / "repo"

    result = run_git(
        ["clone", "--", str(source), str(tmp_path / "dest")],
        secrets=["SECRET-VALUE"],
    )

    assert not result.success
    assert "SECRET-VALUE" not in result.error
    assert "***" in result.error


def test_run_git_extra_env_is_applied(test_repository):
    env = {
        "GIT_CONFIG_COUNT": "1",
        "GIT_CONFIG_KEY_0": "mcptest.value",
        "GIT_CONFIG_VALUE_0": "hello",
    }

    result = run_git(["config", "--get", "mcptest.value"], cwd=test_repository.working_dir, env=env)

    assert result.success
    assert result.output == "hello"


def test_run_git_missing_executable_does_not_raise():
    with patch("mcp_server_github.git.runner.Git") as git_cls:
        git_cls.return_value.execute.side_effect = GitCommandNotFound("git", "No such file or directory")
        result = run_git(["status"])

    assert not result.success
    assert "No such file or directory" in result.error


def test_run_git_combines_stdout_and_stderr():
    with patch("mcp_server_github.git.runner.Git") as git_cls:
        git_cls.return_value.execute.return_value = (0, "out", "progress")
        result = run_git(["push", "origin", "main"])

    assert result == CommandOutcome(success=True, output="out\nprogress")
    command = git_cls.return_value.execute.call_args.args[0]
    assert command == ["git", "-c", "credential.helper=", "push", "origin", "main"]


def test_run_git_disables_prompts():
    with patch("mcp_server_github.git.runner.Git") as git_cls:
        git_cls.return_value.execute.return_value = (0, "", "")
        run_git(["status"], env={"EXTRA": "1"})

    env = git_cls.return_value.execute.call_args.kwargs["env"]
    assert env["GIT_TERMINAL_PROMPT"] == "0"
    assert env["GIT_CONFIG_NOSYSTEM"] == "1"
    assert env["EXTRA"] == "1"


@pytest.mark.asyncio
async def test_run_git_async_matches_sync(test_repository):
    result = await run_git_async(["rev-parse", "--abbrev-ref", "HEAD"], cwd=test_repository.working_dir)

    assert result == CommandOutcome(success=True, output="main")
