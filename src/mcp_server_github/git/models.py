"""Pydantic models for git tool parameters"""

from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, Field


def _reject_option_like(value: str) -> str:
    # git would read a leading dash as an option rather than a name
    if value.startswith("-"):
        raise ValueError("must not start with '-'")
    return value


GitArgument = Annotated[str, AfterValidator(_reject_option_like)]


class CloneRepository(BaseModel):
    url: GitArgument = Field(min_length=1, description="URL of the repository to clone")
    directory: str = Field(default="", description="Directory to clone into (optional)")


class RepositoryStatus(BaseModel):
    directory: Optional[str] = Field(
        default=None,
        description="Directory to check status for (defaults to the current directory)",
    )


class CommitChanges(BaseModel):
    message: str = Field(min_length=1, description="Commit message")
    directory: str = Field(default=".", description="Repository directory")
    add_all: bool = Field(default=True, description="Stage all changes before committing")


class PushChanges(BaseModel):
    directory: str = Field(default=".", description="Repository directory")
    remote: GitArgument = Field(default="origin", min_length=1, description="Remote to push to")
    branch: GitArgument = Field(default="main", min_length=1, description="Branch to push")
