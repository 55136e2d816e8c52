"""
GitHub MCP server: wires the tool handler to the MCP SDK over stdio.
"""

import logging
from typing import Any, Dict, List, Optional

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from .config import ServerConfig
from .core.handlers import CallToolHandler
from .core.tools import ToolContext
from .credentials import Credential, resolve_credential

logger = logging.getLogger(__name__)

SERVER_NAME = "github-control"


def create_server(handler: CallToolHandler) -> Server:
    """Create the MCP server and register the tool endpoints on it."""
    server = Server(SERVER_NAME)

    @server.list_tools()
    async def list_tools() -> List[Tool]:
        return handler.list_tools()

    @server.call_tool()
    async def call_tool(name: str, arguments: Dict[str, Any]) -> List[TextContent]:
        # Unknown tools and invalid arguments raise; the SDK reports them
        # as error results. Handler failures come back as ordinary text.
        return await handler.call(name, arguments)

    return server


async def serve(config: ServerConfig, credential: Optional[Credential] = None) -> None:
    """Run the server on stdio until the host closes the connection."""
    if credential is None:
        credential = resolve_credential(token_file_name=config.token_file_name)

    context = ToolContext.from_config(config, credential)
    handler = CallToolHandler(context)
    server = create_server(handler)
    options = server.create_initialization_options()

    logger.info(f"🚀 Starting {SERVER_NAME} with {len(handler.registry.tools)} tools")
    async with stdio_server() as (read_stream, write_stream):
        logger.info("🔗 STDIO server connected, waiting for requests...")
        await server.run(read_stream, write_stream, options)
    logger.info("GitHub MCP server shutting down.")
