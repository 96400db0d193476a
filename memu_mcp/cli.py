"""
memu-mcp CLI

Usage:
    memu-mcp serve           # Run the MCP server over stdio (default)
    memu-mcp check           # Verify MEMU_API_KEY / MEMU_USER_ID against the API
    memu-mcp task <task_id>  # Show the status of a memorize task
"""

import argparse
import asyncio
import logging
import os
import sys

from memu_mcp import __version__
from memu_mcp.client import CATEGORIES_PATH, MemuClient, memorize_status_path
from memu_mcp.config import LOG_LEVEL_ENV, load_settings
from memu_mcp.errors import MemuError
from memu_mcp.formatters import format_memorize_status

# ANSI colors
GREEN = "\033[92m"
RED = "\033[91m"
RESET = "\033[0m"
BOLD = "\033[1m"


def cmd_serve(args) -> int:
    """Run the MCP server."""
    from memu_mcp.mcp.server import run_mcp_server
    run_mcp_server(load_settings())
    return 0


def cmd_check(args) -> int:
    """Check configuration and credentials with a categories request."""
    settings = load_settings()
    client = MemuClient(settings)

    try:
        result = asyncio.run(client.call(CATEGORIES_PATH, body={
            "user_id": client.user_id(),
            "agent_id": client.agent_id,
        }))
    except MemuError as e:
        print(f"{RED}Check failed: {e}{RESET}")
        return 1

    count = len(result.get("categories") or []) if isinstance(result, dict) else 0
    print(f"{GREEN}OK{RESET} - {settings.base_url} (agent_id: {settings.agent_id})")
    print(f"  Categories: {count}")
    return 0


def cmd_task(args) -> int:
    """Print the status block for a memorize task."""
    client = MemuClient(load_settings())

    try:
        result = asyncio.run(client.call(memorize_status_path(args.task_id), method="GET"))
    except MemuError as e:
        print(f"{RED}Error: {e}{RESET}")
        return 1

    print(f"{BOLD}Task {args.task_id}{RESET}")
    print(format_memorize_status(result))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="memu-mcp",
        description="memu-mcp - MemU long-term memory for AI coding tools",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        default=os.environ.get(LOG_LEVEL_ENV, "INFO"),
        help="Logging level, written to stderr (default: $MEMU_LOG_LEVEL or INFO)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("serve", help="Run the MCP server over stdio")
    subparsers.add_parser("check", help="Verify credentials against the MemU API")

    task_parser = subparsers.add_parser("task", help="Show the status of a memorize task")
    task_parser.add_argument("task_id", help="task_id returned by memu_memorize")

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # stdout carries the MCP protocol when serving, so logs always go to stderr
    logging.basicConfig(level=args.log_level.upper(), stream=sys.stderr)

    if args.command == "check":
        code = cmd_check(args)
    elif args.command == "task":
        code = cmd_task(args)
    else:
        code = cmd_serve(args)

    sys.exit(code)


if __name__ == "__main__":
    main()
