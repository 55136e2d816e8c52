"""GitHub MCP server core components"""

from .handlers import CallToolHandler
from .tools import (
    GitHubToolRouter,
    GitHubTools,
    ToolCategory,
    ToolContext,
    ToolDefinition,
    ToolError,
    ToolInputError,
    ToolRegistry,
    UnknownToolError,
)

__all__ = [
    "CallToolHandler",
    "GitHubToolRouter",
    "GitHubTools",
    "ToolCategory",
    "ToolContext",
    "ToolDefinition",
    "ToolError",
    "ToolInputError",
    "ToolRegistry",
    "UnknownToolError",
]
