"""Pydantic models for GitHub API tools and the API responses they read"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# Tool parameters
class CreateRepository(BaseModel):
    name: str = Field(min_length=1, description="Name of the new repository")
    description: str = Field(default="", description="Repository description")
    private: bool = Field(default=False, description="Create a private repository")
    auto_init: bool = Field(default=True, description="Initialize with a README")


class ListRepositories(BaseModel):
    limit: int = Field(default=10, ge=1, le=100, description="Maximum number of repositories to return")


class RepositoryInfo(BaseModel):
    repo: str = Field(
        pattern=r"^[A-Za-z0-9_.-]+/[A-Za-z0-9_.-]+$",
        description="Repository in owner/name form",
    )

    @field_validator("repo")
    @classmethod
    def _reject_dot_segments(cls, value: str) -> str:
        # "." and ".." would be resolved as relative path segments
        if any(part in (".", "..") for part in value.split("/")):
            raise ValueError("owner and name must not be '.' or '..'")
        return value


class SearchRepositories(BaseModel):
    query: str = Field(min_length=1, description="GitHub search query")
    limit: int = Field(default=10, ge=1, le=100, description="Maximum number of results to return")


# API responses. Only the fields the tools print are modelled.
class GitHubLicense(BaseModel):
    model_config = ConfigDict(extra="ignore")

    key: Optional[str] = None
    name: Optional[str] = None


class GitHubRepository(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    full_name: str
    description: Optional[str] = None
    private: bool = False
    html_url: str = ""
    stargazers_count: int = 0
    forks_count: int = 0
    watchers_count: int = 0
    open_issues_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    language: Optional[str] = None
    license: Optional[GitHubLicense] = None

    @property
    def visibility(self) -> str:
        return "Private" if self.private else "Public"


class GitHubSearchResults(BaseModel):
    model_config = ConfigDict(extra="ignore")

    total_count: int = 0
    incomplete_results: bool = False
    items: list[GitHubRepository] = Field(default_factory=list)
