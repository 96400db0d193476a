"""
MemU HTTP Client

Thin async wrapper over the MemU v3 memory API. One request per call, no
retries, default httpx timeouts. Non-2xx answers are mapped onto the
ApiError family so the tool layer can report them as plain text.
"""

import json
import logging
from typing import Any, Dict, Mapping, Optional
from urllib.parse import quote

import httpx

from memu_mcp.config import MemuSettings, get_config
from memu_mcp.errors import (
    ApiError,
    AuthenticationError,
    GenericApiError,
    RateLimitError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Endpoints
MEMORIZE_PATH = "/api/v3/memory/memorize"
MEMORIZE_STATUS_PATH = "/api/v3/memory/memorize/status/{task_id}"
RETRIEVE_PATH = "/api/v3/memory/retrieve"
CATEGORIES_PATH = "/api/v3/memory/categories"
DELETE_PATH = "/api/v3/memory/delete"


def memorize_status_path(task_id: str) -> str:
    """Status path with the task id percent-encoded (slashes included)."""
    return MEMORIZE_STATUS_PATH.format(task_id=quote(task_id, safe=""))


def _error_for_status(status_code: int, text: str) -> ApiError:
    if status_code == 401:
        return AuthenticationError(text)
    if status_code == 422:
        return ValidationError(text)
    if status_code == 429:
        return RateLimitError(text)
    return GenericApiError(status_code, text)


class MemuClient:
    """
    Client for the MemU memory API.

    Credentials are resolved from the environment on every call, before any
    network I/O, so a missing MEMU_API_KEY / MEMU_USER_ID fails fast with
    ConfigurationError.

    Args:
        settings: Base URL and agent identity
        environ: Mapping to read credentials from (defaults to os.environ)
        transport: Optional httpx transport, e.g. httpx.MockTransport in tests
    """

    def __init__(
        self,
        settings: Optional[MemuSettings] = None,
        environ: Optional[Mapping[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or MemuSettings()
        self._environ = environ
        self._transport = transport

    @property
    def agent_id(self) -> str:
        return self.settings.agent_id

    @property
    def agent_name(self) -> str:
        return self.settings.agent_name

    def user_id(self) -> str:
        """Current user id (re-read from the environment)."""
        return get_config(self._environ).user_id

    async def call(
        self,
        path: str,
        method: str = "POST",
        body: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Send one request to the MemU API and return the decoded JSON body.
        Bodies that are not JSON come back as the raw response text.

        Raises:
            ConfigurationError: credentials missing (no request is sent)
            AuthenticationError / ValidationError / RateLimitError /
            GenericApiError: non-2xx response
        """
        config = get_config(self._environ)
        method = method.upper()

        headers = {"Authorization": f"Bearer {config.api_key}"}
        content = None
        if method != "GET" and body is not None:
            headers["Content-Type"] = "application/json"
            content = json.dumps(body)

        url = f"{self.settings.base_url}{path}"
        logger.debug(f"MemU {method} {url}")

        async with httpx.AsyncClient(transport=self._transport) as client:
            response = await client.request(method, url, headers=headers, content=content)

        if not response.is_success:
            text = response.text
            logger.warning(f"MemU {method} {path} failed with {response.status_code}: {text[:200]}")
            raise _error_for_status(response.status_code, text)

        try:
            return response.json()
        except ValueError:
            # empty or text/plain 2xx bodies (e.g. delete) are returned as text
            return response.text
