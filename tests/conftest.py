"""
Global pytest configuration and fixtures.

Git fixtures build real repositories in temporary directories; GitHub
fixtures replace the API client with mocks so no network access is needed.
"""

import shutil
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import git
import pytest

from fixtures.github_responses import TEST_TOKEN
from mcp_server_github.core.tools import ToolContext
from mcp_server_github.credentials import Credential
from mcp_server_github.github.client import GitHubClient


@pytest.fixture
def test_repository(tmp_path: Path):
    """A git repository on branch main with one commit."""
    repo_path = tmp_path / "temp_test_repo"
    test_repo = git.Repo.init(repo_path, initial_branch="main")
    with test_repo.config_writer() as config:
        config.set_value("user", "name", "Test User")
        config.set_value("user", "email", "test@example.com")
        config.set_value("commit", "gpgsign", "false")

    Path(repo_path / "test.txt").write_text("test")
    test_repo.index.add(["test.txt"])
    test_repo.index.commit("initial commit")

    yield test_repo

    shutil.rmtree(repo_path, ignore_errors=True)


@pytest.fixture
def bare_remote(tmp_path: Path, test_repository):
    """A bare repository registered as ``origin`` of ``test_repository``."""
    remote_path = tmp_path / "remote.git"
    remote = git.Repo.init(remote_path, bare=True)
    test_repository.create_remote("origin", str(remote_path))
    return remote


@pytest.fixture
def anonymous_context() -> ToolContext:
    return ToolContext(credential=Credential())


@pytest.fixture
def token_context() -> ToolContext:
    credential = Credential(token=TEST_TOKEN, source="env")
    return ToolContext(credential=credential, github=GitHubClient(token=TEST_TOKEN))


@pytest.fixture
def mock_github():
    """A GitHubClient stand-in whose get/post are AsyncMocks."""
    client = MagicMock(spec=GitHubClient)
    client.get = AsyncMock()
    client.post = AsyncMock()
    return client


@pytest.fixture
def github_context(mock_github) -> ToolContext:
    return ToolContext(credential=Credential(token=TEST_TOKEN, source="env"), github=mock_github)


@pytest.fixture
def anonymous_github_context(mock_github) -> ToolContext:
    return ToolContext(credential=Credential(), github=mock_github)


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "requires_git: Tests that require git repository setup")
    config.addinivalue_line("markers", "requires_github: Tests that mock the GitHub API")


def pytest_collection_modifyitems(config, items):
    """Mark tests based on the fixtures they use."""
    for item in items:
        if "test_repository" in item.fixturenames:
            item.add_marker(pytest.mark.requires_git)
        if "mock_github" in item.fixturenames:
            item.add_marker(pytest.mark.requires_github)
