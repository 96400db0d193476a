"""
Pytest configuration for memu-mcp tests.

Sets up import paths and shared fixtures: a stub MemU endpoint built on
httpx.MockTransport that records every request it receives.
"""

import sys
import os
import json

import httpx
import pytest

# Add project root to path
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..'))
sys.path.insert(0, PROJECT_ROOT)

from memu_mcp.client import MemuClient
from memu_mcp.config import MemuSettings

TEST_ENV = {"MEMU_API_KEY": "test-key", "MEMU_USER_ID": "user-1"}
TEST_BASE_URL = "https://memu.test"


class StubEndpoint:
    """Records requests and answers with a canned status + JSON payload."""

    def __init__(self, payload=None, status_code=200, text=None):
        self.payload = payload if payload is not None else {}
        self.status_code = status_code
        self.text = text
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        return httpx.Response(self.status_code, json=self.payload)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_body(self):
        return json.loads(self.last_request.content)


@pytest.fixture
def make_endpoint():
    """Factory for StubEndpoint instances."""
    return StubEndpoint


@pytest.fixture
def make_client():
    """Build a MemuClient bound to a stub endpoint."""
    def _make(endpoint, environ=None):
        return MemuClient(
            MemuSettings(base_url=TEST_BASE_URL),
            environ=TEST_ENV if environ is None else environ,
            transport=httpx.MockTransport(endpoint),
        )
    return _make
