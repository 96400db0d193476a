"""
MemU MCP Configuration

Two kinds of configuration:
- Credentials (API key + user id) come from the environment and are re-read
  on every tool call.
- MemuSettings holds the service constants (base URL, agent identity). They
  are injected into the client at construction so tests can point it at a
  mock endpoint.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from memu_mcp.errors import ConfigurationError

# Environment variables
API_KEY_ENV = "MEMU_API_KEY"
USER_ID_ENV = "MEMU_USER_ID"
BASE_URL_ENV = "MEMU_BASE_URL"
LOG_LEVEL_ENV = "MEMU_LOG_LEVEL"

DEFAULT_BASE_URL = "https://api.memu.so"
DEFAULT_AGENT_ID = "claude-code"
DEFAULT_AGENT_NAME = "Claude Code"


@dataclass(frozen=True)
class Credentials:
    """Per-call credentials read from the environment."""

    api_key: str
    user_id: str


@dataclass(frozen=True)
class MemuSettings:
    """
    Immutable service settings.

    Defaults match the hosted MemU API. agent_id identifies this integration
    so its memories stay separate from other consumers of the same user.
    """

    base_url: str = DEFAULT_BASE_URL
    """Root of the MemU REST API, without trailing slash"""

    agent_id: str = DEFAULT_AGENT_ID
    """Agent identity sent with every scoped request"""

    agent_name: str = DEFAULT_AGENT_NAME
    """Display name sent with memorize requests"""


def get_config(environ: Optional[Mapping[str, str]] = None) -> Credentials:
    """Read credentials, raising ConfigurationError naming the first missing variable."""
    env = os.environ if environ is None else environ

    api_key = env.get(API_KEY_ENV)
    if not api_key:
        raise ConfigurationError(API_KEY_ENV)

    user_id = env.get(USER_ID_ENV)
    if not user_id:
        raise ConfigurationError(USER_ID_ENV)

    return Credentials(api_key=api_key, user_id=user_id)


def load_settings(environ: Optional[Mapping[str, str]] = None) -> MemuSettings:
    """Build settings, honouring the MEMU_BASE_URL override."""
    env = os.environ if environ is None else environ

    base_url = env.get(BASE_URL_ENV)
    if base_url:
        return MemuSettings(base_url=base_url.rstrip("/"))
    return MemuSettings()
