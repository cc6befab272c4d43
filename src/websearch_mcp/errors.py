"""Error taxonomy for the web search MCP server."""
from __future__ import annotations


class WebSearchMCPError(Exception):
    """Base class for every error raised by this package."""


class ProtocolError(WebSearchMCPError):
    """Malformed MCP request: unknown tool/resource/prompt or invalid arguments."""


class SearchError(WebSearchMCPError):
    """The search provider could not produce a result."""


class NetworkError(SearchError):
    """Transport failure, timeout or non-2xx response from the provider."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ParseError(SearchError):
    """The provider answered, but the body is not the JSON we expect."""
