"""
MemU MCP Error Types

Every failure a tool call can hit is a MemuError. The message of each
exception is the plain text shown to the calling agent, so it names the
category and carries the server detail where there is one.
"""

from typing import Optional


class MemuError(Exception):
    """Base class for all memu-mcp errors."""
    pass


class ConfigurationError(MemuError):
    """A required environment variable is missing or empty."""

    def __init__(self, variable: str):
        self.variable = variable
        super().__init__(f"{variable} is not set")


class ApiError(MemuError):
    """The MemU API answered with a non-2xx status."""

    def __init__(self, message: str, status_code: int, detail: Optional[str] = None):
        self.status_code = status_code
        self.detail = detail
        super().__init__(message)


class AuthenticationError(ApiError):
    """HTTP 401 - the API key was rejected."""

    def __init__(self, detail: Optional[str] = None):
        super().__init__("Authentication failed: the API key is invalid", 401, detail)


class ValidationError(ApiError):
    """HTTP 422 - the API rejected the request body."""

    def __init__(self, detail: str):
        super().__init__(f"Validation error: {detail}", 422, detail)


class RateLimitError(ApiError):
    """HTTP 429."""

    def __init__(self, detail: Optional[str] = None):
        super().__init__("Rate limit reached. Wait a moment and retry.", 429, detail)


class GenericApiError(ApiError):
    """Any other non-2xx status."""

    def __init__(self, status_code: int, detail: str):
        super().__init__(f"MemU API error ({status_code}): {detail}", status_code, detail)


class SchemaValidationError(MemuError):
    """Tool arguments do not match the declared input schema."""

    def __init__(self, tool: str, errors: str):
        self.tool = tool
        self.errors = errors
        super().__init__(f"Invalid arguments for {tool}: {errors}")


class UnknownToolError(MemuError):
    """No tool is registered under the requested name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown tool: {name}")
