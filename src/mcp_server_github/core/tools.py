"""Tool registry and routing system for the GitHub MCP server"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional, Type

from mcp.types import TextContent, Tool
from pydantic import BaseModel, ValidationError

from ..config import ServerConfig
from ..credentials import Credential
from ..github.client import GitHubClient
from ..logging_config import redact

logger = logging.getLogger(__name__)


class GitHubTools(str, Enum):
    """Enumeration of all available tools"""
    # Git operations
    CLONE = "clone-repository"
    STATUS = "repository-status"
    COMMIT = "commit-changes"
    PUSH = "push-changes"

    # GitHub API tools
    CREATE_REPOSITORY = "create-repository"
    LIST_REPOSITORIES = "list-repositories"
    REPOSITORY_INFO = "repository-info"
    SEARCH_REPOSITORIES = "search-repositories"


class ToolCategory(str, Enum):
    """Tool categories for organization and routing"""
    GIT = "git"
    GITHUB = "github"


class ToolError(Exception):
    """A tool call that was rejected before its handler ran"""


class UnknownToolError(ToolError):
    pass


class ToolInputError(ToolError):
    pass


@dataclass(frozen=True)
class ToolContext:
    """Everything a handler needs besides its parameters.

    Built once at startup and shared by every call; handlers never read the
    credential from the environment themselves.
    """
    credential: Credential = field(default_factory=Credential)
    github: GitHubClient = field(default_factory=GitHubClient)
    git_timeout: Optional[float] = None

    @classmethod
    def from_config(cls, config: ServerConfig, credential: Credential) -> "ToolContext":
        return cls(
            credential=credential,
            github=GitHubClient(
                token=credential.token,
                base_url=config.github_api_url,
                timeout=config.github_api_timeout,
            ),
            git_timeout=config.git_timeout,
        )

    @property
    def secrets(self) -> tuple:
        return (self.credential.token,) if self.credential.token else ()


Handler = Callable[[Any, ToolContext], Awaitable[str]]


@dataclass
class ToolDefinition:
    """Complete tool definition with metadata"""
    name: str
    category: ToolCategory
    description: str
    schema: Type[BaseModel]
    handler: Handler
    failure_prefix: str


class ToolRegistry:
    """Central registry for all server tools"""

    def __init__(self):
        self.tools: Dict[str, ToolDefinition] = {}
        self._initialized = False

    def register(self, tool_def: ToolDefinition):
        """Register a tool in the registry"""
        name = str(getattr(tool_def.name, "value", tool_def.name))
        if name in self.tools:
            raise ValueError(f"Tool already registered: {name}")
        tool_def.name = name
        self.tools[name] = tool_def
        logger.debug(f"Registered tool: {name} ({tool_def.category.value})")

    def get_tool(self, name: str) -> Optional[ToolDefinition]:
        """Get tool definition by name"""
        return self.tools.get(name)

    def list_tools(self) -> List[Tool]:
        """Get all tools as MCP Tool objects"""
        return [
            Tool(
                name=tool_def.name,
                description=tool_def.description,
                inputSchema=tool_def.schema.model_json_schema(),
            )
            for tool_def in self.tools.values()
        ]

    def get_tools_by_category(self, category: ToolCategory) -> List[ToolDefinition]:
        """Get all tools in a specific category"""
        return [
            tool_def for tool_def in self.tools.values()
            if tool_def.category == category
        ]

    def initialize_default_tools(self):
        """Initialize registry with the default git and GitHub tools"""
        if self._initialized:
            return

        from ..git.models import CloneRepository, CommitChanges, PushChanges, RepositoryStatus
        from ..git.operations import (
            CLONE_FAILURE, COMMIT_FAILURE, PUSH_FAILURE, STATUS_FAILURE,
            clone_repository, commit_changes, push_changes, repository_status,
        )
        from ..github.api import (
            CREATE_FAILURE, INFO_FAILURE, LIST_FAILURE, SEARCH_FAILURE,
            create_repository, list_repositories, repository_info, search_repositories,
        )
        from ..github.models import (
            CreateRepository, ListRepositories, RepositoryInfo, SearchRepositories,
        )

        tools = [
            ToolDefinition(
                name=GitHubTools.CLONE,
                category=ToolCategory.GIT,
                description="Clone a git repository. Private GitHub repositories are cloned with the configured token",
                schema=CloneRepository,
                handler=clone_repository,
                failure_prefix=CLONE_FAILURE,
            ),
            ToolDefinition(
                name=GitHubTools.STATUS,
                category=ToolCategory.GIT,
                description="Show the working tree status of a repository",
                schema=RepositoryStatus,
                handler=repository_status,
                failure_prefix=STATUS_FAILURE,
            ),
            ToolDefinition(
                name=GitHubTools.COMMIT,
                category=ToolCategory.GIT,
                description="Commit changes, staging everything first unless add_all is false",
                schema=CommitChanges,
                handler=commit_changes,
                failure_prefix=COMMIT_FAILURE,
            ),
            ToolDefinition(
                name=GitHubTools.PUSH,
                category=ToolCategory.GIT,
                description="Push a branch to a remote",
                schema=PushChanges,
                handler=push_changes,
                failure_prefix=PUSH_FAILURE,
            ),
            ToolDefinition(
                name=GitHubTools.CREATE_REPOSITORY,
                category=ToolCategory.GITHUB,
                description="Create a repository for the authenticated GitHub user",
                schema=CreateRepository,
                handler=create_repository,
                failure_prefix=CREATE_FAILURE,
            ),
            ToolDefinition(
                name=GitHubTools.LIST_REPOSITORIES,
                category=ToolCategory.GITHUB,
                description="List the authenticated user's repositories, most recently updated first",
                schema=ListRepositories,
                handler=list_repositories,
                failure_prefix=LIST_FAILURE,
            ),
            ToolDefinition(
                name=GitHubTools.REPOSITORY_INFO,
                category=ToolCategory.GITHUB,
                description="Get details about a GitHub repository",
                schema=RepositoryInfo,
                handler=repository_info,
                failure_prefix=INFO_FAILURE,
            ),
            ToolDefinition(
                name=GitHubTools.SEARCH_REPOSITORIES,
                category=ToolCategory.GITHUB,
                description="Search GitHub repositories",
                schema=SearchRepositories,
                handler=search_repositories,
                failure_prefix=SEARCH_FAILURE,
            ),
        ]
        for tool_def in tools:
            self.register(tool_def)

        self._initialized = True
        logger.info(f"Registered {len(self.tools)} tools")


def failure_text(prefix: str, error: Any) -> str:
    return f"{prefix}: {error}"


class GitHubToolRouter:
    """Router for dispatching tool calls to their handlers"""

    def __init__(self, registry: ToolRegistry, context: ToolContext):
        self.registry = registry
        self.context = context

    def validate(self, name: str, arguments: Optional[Dict[str, Any]]) -> tuple[ToolDefinition, BaseModel]:
        """Look up a tool and validate its arguments.

        Raises:
            UnknownToolError: no tool is registered under ``name``
            ToolInputError: the arguments do not match the tool's schema
        """
        tool_def = self.registry.get_tool(name)
        if tool_def is None:
            available = ", ".join(self.registry.tools)
            raise UnknownToolError(f"Unknown tool: {name}. Available tools: {available}")

        try:
            params = tool_def.schema.model_validate(arguments or {})
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or 'arguments'}: {err['msg']}"
                for err in e.errors()
            )
            raise ToolInputError(f"Invalid arguments for {name}: {problems}") from e
        return tool_def, params

    async def route_tool_call(self, name: str, arguments: Optional[Dict[str, Any]]) -> List[TextContent]:
        """Route a tool call to the appropriate handler.

        Validation failures are raised. Anything the handler raises is
        turned into the tool's failure text so the host sees a normal result.
        """
        tool_def, params = self.validate(name, arguments)

        try:
            result = await tool_def.handler(params, self.context)
        except Exception as e:
            logger.error(f"Tool call failed for {name}: {e}", exc_info=True)
            result = redact(failure_text(tool_def.failure_prefix, e), self.context.secrets)

        return [TextContent(type="text", text=result)]
