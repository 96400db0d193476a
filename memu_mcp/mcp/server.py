"""
MemU MCP Server - Long-term memory for AI coding tools, backed by MemU

SETUP (tell user if they ask "how do I set up memu"):
1. pip install memu-mcp
2. export MEMU_API_KEY=...  MEMU_USER_ID=...
3. Register the server with the host, e.g. for Claude Code:
   claude mcp add memu -e MEMU_API_KEY=... -e MEMU_USER_ID=... -- memu-mcp serve

MCP TOOLS:
- memu_memorize: Save a conversation (>= 3 messages) as memory, returns task_id
- memu_memorize_status: Check a memorize task (PENDING/PROCESSING/SUCCESS/FAILED)
- memu_retrieve: Search memories by text or conversation
- memu_categories: List memory categories with summaries
- memu_delete: Delete memories (ask the user first!)

HOW IT WORKS:
- Every tool call becomes one HTTPS request to api.memu.so
- Credentials are read from the environment on each call
- Failures are returned to the host as failed tool results, the server keeps running
"""

import asyncio
import logging
import os
import sys
from typing import Optional

from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from memu_mcp import __version__
from memu_mcp.client import MemuClient
from memu_mcp.config import LOG_LEVEL_ENV, MemuSettings, get_config, load_settings
from memu_mcp.errors import ConfigurationError
from memu_mcp.tools import ToolRegistry, build_registry

logger = logging.getLogger(__name__)

SERVER_NAME = "memu"


def _warn_if_unconfigured() -> None:
    """Log missing credentials at startup; tool calls will fail until they are set."""
    try:
        get_config()
    except ConfigurationError as e:
        logger.warning(f"{e} - every memu tool call will fail until it is configured")


def create_server(registry: ToolRegistry) -> Server:
    """Low-level MCP server exposing the registry's tools."""
    server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        """List available MCP tools."""
        return registry.list_tools()

    @server.call_tool()
    async def call_tool(name: str, arguments: dict) -> list[types.TextContent]:
        """Handle MCP tool calls. Errors propagate so the SDK marks the result as an error."""
        try:
            return await registry.dispatch(name, arguments)
        except Exception as e:
            logger.error(f"MCP tool error ({name}): {e}")
            raise

    return server


def run_mcp_server(settings: Optional[MemuSettings] = None):
    """Run the MCP server over stdio. Exits with status 1 if the server cannot start."""
    settings = settings or load_settings()
    _warn_if_unconfigured()

    registry = build_registry(MemuClient(settings))
    server = create_server(registry)
    logger.info(f"Starting memu MCP server {__version__} ({settings.base_url}, agent_id={settings.agent_id})")

    async def main():
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())

    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("MCP server stopped")
    except Exception as e:
        logger.error(f"MCP server startup error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    logging.basicConfig(level=os.environ.get(LOG_LEVEL_ENV, "INFO").upper())
    run_mcp_server()
