import os
from dataclasses import dataclass
from typing import Literal
from dotenv import find_dotenv, load_dotenv

from websearch_mcp.utils.logger import get_logger


SERVER_VERSION = "1.0.0"
DEFAULT_SEARCH_API_URL = "https://api.duckduckgo.com/"


@dataclass
class Settings:
    server_name: str
    server_version: str
    search_api_url: str
    default_results: int
    max_results: int
    request_timeout: int
    user_agent: str
    history_limit: int
    transport: Literal["stdio", "streamable-http"]
    host: str
    port: int


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, str(default)).strip()
    try:
        return int(raw)
    except ValueError:
        get_logger("config").warning(f"Invalid {name}={raw!r}, using {default}")
        return default


def load_settings() -> Settings:
    load_dotenv(find_dotenv(usecwd=True))
    transport = os.getenv("MCP_TRANSPORT", "stdio").strip().lower()
    if transport not in {"stdio", "streamable-http"}:
        get_logger("config").warning(f"Unknown MCP_TRANSPORT '{transport}', defaulting to stdio")
        transport = "stdio"

    max_results = max(1, _int_env("MAX_RESULTS", 10))
    # Default can never exceed the ceiling
    default_results = min(max(1, _int_env("DEFAULT_RESULTS", 5)), max_results)

    return Settings(
        server_name=os.getenv("MCP_SERVER_NAME", "websearch-mcp"),
        server_version=SERVER_VERSION,
        search_api_url=os.getenv("SEARCH_API_URL", DEFAULT_SEARCH_API_URL),
        default_results=default_results,
        max_results=max_results,
        request_timeout=_int_env("REQUEST_TIMEOUT", 30),
        user_agent=os.getenv("USER_AGENT", "MCP-Server/1.0"),
        history_limit=max(1, _int_env("HISTORY_LIMIT", 100)),
        transport=transport,  # type: ignore
        host=os.getenv("MCP_HOST", "127.0.0.1"),
        port=_int_env("MCP_PORT", 8000),
    )
