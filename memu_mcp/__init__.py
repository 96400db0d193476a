"""
memu-mcp - MemU long-term memory for AI coding tools

Exposes the MemU memory API as MCP tools over stdio.

Usage:
    pip install memu-mcp
    export MEMU_API_KEY=...  MEMU_USER_ID=...
    memu-mcp serve

How it works:
    1. The host (Claude Code, Cursor, ...) starts memu-mcp as an MCP server
    2. The assistant calls memu_memorize to save conversations
    3. memu_retrieve / memu_categories bring the memories back later
    4. All storage and retrieval happens in the MemU service
"""

__version__ = "0.1.0"

from memu_mcp.client import MemuClient
from memu_mcp.config import MemuSettings, get_config

__all__ = [
    "MemuClient",
    "MemuSettings",
    "get_config",
    "__version__",
]
