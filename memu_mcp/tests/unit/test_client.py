"""
Tests for the MemU HTTP client (client.py).

Uses httpx.MockTransport as the remote endpoint.
Tests cover:
- Request construction (URL, auth header, JSON body only for non-GET)
- Status code -> error mapping (401/422/429/other)
- Configuration errors before any request
"""

import sys
import os
import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..', '..')))

from memu_mcp.client import memorize_status_path
from memu_mcp.errors import (
    ApiError,
    AuthenticationError,
    ConfigurationError,
    GenericApiError,
    RateLimitError,
    ValidationError,
)


class TestRequestConstruction:
    """Test what the client puts on the wire."""

    @pytest.mark.asyncio
    async def test_post_sends_json_body(self, make_client, make_endpoint):
        endpoint = make_endpoint({"ok": True})
        client = make_client(endpoint)

        result = await client.call("/api/v3/memory/retrieve", body={"query": "q"})

        assert result == {"ok": True}
        request = endpoint.last_request
        assert request.method == "POST"
        assert str(request.url) == "https://memu.test/api/v3/memory/retrieve"
        assert request.headers["Authorization"] == "Bearer test-key"
        assert request.headers["Content-Type"] == "application/json"
        assert endpoint.last_body() == {"query": "q"}

    @pytest.mark.asyncio
    async def test_get_has_no_body(self, make_client, make_endpoint):
        endpoint = make_endpoint({"status": "PENDING"})
        client = make_client(endpoint)

        await client.call("/api/v3/memory/memorize/status/t1", method="GET", body={"ignored": True})

        request = endpoint.last_request
        assert request.method == "GET"
        assert request.content == b""
        assert "Content-Type" not in request.headers
        assert request.headers["Authorization"] == "Bearer test-key"

    @pytest.mark.asyncio
    async def test_post_without_body(self, make_client, make_endpoint):
        endpoint = make_endpoint({})
        client = make_client(endpoint)

        await client.call("/api/v3/memory/categories")

        assert endpoint.last_request.content == b""
        assert "Content-Type" not in endpoint.last_request.headers

    @pytest.mark.asyncio
    async def test_unicode_body_round_trips(self, make_client, make_endpoint):
        endpoint = make_endpoint({})
        client = make_client(endpoint)

        await client.call("/x", body={"content": "エディタは vim"})

        assert endpoint.last_body() == {"content": "エディタは vim"}

    def test_status_path_encodes_task_id(self):
        assert memorize_status_path("abc123") == "/api/v3/memory/memorize/status/abc123"
        assert memorize_status_path("a/b c") == "/api/v3/memory/memorize/status/a%2Fb%20c"


class TestResponseBody:
    """Test decoding of successful responses."""

    @pytest.mark.asyncio
    async def test_plain_text_body_returned_as_text(self, make_client, make_endpoint):
        endpoint = make_endpoint(text="Deleted 3 memories")
        client = make_client(endpoint)

        result = await client.call("/api/v3/memory/delete", body={"user_id": "user-1"})

        assert result == "Deleted 3 memories"

    @pytest.mark.asyncio
    async def test_empty_body_returned_as_empty_string(self, make_client, make_endpoint):
        endpoint = make_endpoint(status_code=204, text="")
        client = make_client(endpoint)

        result = await client.call("/api/v3/memory/delete", body={"user_id": "user-1"})

        assert result == ""


class TestErrorMapping:
    """Test non-2xx responses map onto distinct error kinds."""

    @pytest.mark.asyncio
    async def test_401_authentication_error(self, make_client, make_endpoint):
        client = make_client(make_endpoint(status_code=401, text="bad key"))
        with pytest.raises(AuthenticationError) as exc:
            await client.call("/x", body={})
        assert exc.value.status_code == 401
        assert "API key" in str(exc.value)

    @pytest.mark.asyncio
    async def test_422_validation_error_includes_detail(self, make_client, make_endpoint):
        client = make_client(make_endpoint(status_code=422, text='{"detail":"conversation too short"}'))
        with pytest.raises(ValidationError) as exc:
            await client.call("/x", body={})
        assert "conversation too short" in str(exc.value)
        assert exc.value.detail == '{"detail":"conversation too short"}'

    @pytest.mark.asyncio
    async def test_429_rate_limit_error(self, make_client, make_endpoint):
        client = make_client(make_endpoint(status_code=429, text="slow down"))
        with pytest.raises(RateLimitError) as exc:
            await client.call("/x", body={})
        assert exc.value.status_code == 429

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code", [400, 403, 404, 500, 503])
    async def test_other_status_generic_error(self, make_client, make_endpoint, status_code):
        client = make_client(make_endpoint(status_code=status_code, text="boom"))
        with pytest.raises(GenericApiError) as exc:
            await client.call("/x", body={})
        assert exc.value.status_code == status_code
        assert f"({status_code})" in str(exc.value)
        assert "boom" in str(exc.value)

    @pytest.mark.asyncio
    async def test_error_kinds_are_distinct(self, make_client, make_endpoint):
        """401/422/429 never surface as the generic kind."""
        for status_code in (401, 422, 429):
            client = make_client(make_endpoint(status_code=status_code, text="x"))
            with pytest.raises(ApiError) as exc:
                await client.call("/x", body={})
            assert not isinstance(exc.value, GenericApiError)


class TestConfiguration:
    """Test credentials are checked before any request."""

    @pytest.mark.asyncio
    async def test_missing_api_key_sends_nothing(self, make_client, make_endpoint):
        endpoint = make_endpoint({})
        client = make_client(endpoint, environ={"MEMU_USER_ID": "u"})

        with pytest.raises(ConfigurationError):
            await client.call("/x", body={})
        assert endpoint.requests == []

    @pytest.mark.asyncio
    async def test_missing_user_id_sends_nothing(self, make_client, make_endpoint):
        endpoint = make_endpoint({})
        client = make_client(endpoint, environ={"MEMU_API_KEY": "k"})

        with pytest.raises(ConfigurationError):
            await client.call("/x", method="GET")
        assert endpoint.requests == []

    def test_agent_identity_from_settings(self, make_client, make_endpoint):
        client = make_client(make_endpoint({}))
        assert client.agent_id == "claude-code"
        assert client.agent_name == "Claude Code"
        assert client.user_id() == "user-1"
