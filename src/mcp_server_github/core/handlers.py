"""Tool call handler for the GitHub MCP server"""

import logging
import os
import time
from typing import Any, Dict, List, Optional

from mcp.types import TextContent, Tool

from .tools import GitHubToolRouter, ToolContext, ToolError, ToolRegistry

logger = logging.getLogger(__name__)


class CallToolHandler:
    """Centralized tool call handler using the router system"""

    def __init__(self, context: ToolContext, registry: Optional[ToolRegistry] = None):
        if registry is None:
            registry = ToolRegistry()
            registry.initialize_default_tools()
        self.registry = registry
        self.context = context
        self.router = GitHubToolRouter(self.registry, context)

    def list_tools(self) -> List[Tool]:
        return self.registry.list_tools()

    async def call(self, name: str, arguments: Optional[Dict[str, Any]]) -> List[TextContent]:
        """Dispatch one tool call, logging its duration under a request id"""
        request_id = os.urandom(4).hex()
        start_time = time.time()
        log_extra = {"request_id": request_id, "tool": name}

        logger.info(f"🔧 [{request_id}] Tool call: {name}", extra=log_extra)
        logger.debug(f"🔧 [{request_id}] Arguments: {arguments}", extra=log_extra)

        try:
            result = await self.router.route_tool_call(name, arguments)
        except ToolError as e:
            duration_ms = round((time.time() - start_time) * 1000, 1)
            logger.warning(
                f"❌ [{request_id}] Tool '{name}' rejected: {e}",
                extra={**log_extra, "duration_ms": duration_ms},
            )
            raise

        duration_ms = round((time.time() - start_time) * 1000, 1)
        logger.info(
            f"✅ [{request_id}] Tool '{name}' completed in {duration_ms}ms",
            extra={**log_extra, "duration_ms": duration_ms},
        )
        return result
