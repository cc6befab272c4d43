"""MCP resources: search history and server configuration."""
from __future__ import annotations

import json
import threading
from datetime import datetime, timezone
from typing import Any, List, Set
from weakref import WeakKeyDictionary

import mcp.types as types
from pydantic import AnyUrl

from websearch_mcp.errors import ProtocolError
from websearch_mcp.search.history import SearchHistory
from websearch_mcp.utils.config import Settings
from websearch_mcp.utils.logger import get_logger


HISTORY_URI = "resource://search/history"
CONFIG_URI = "resource://config"
JSON_MIME = "application/json"


def normalize_uri(uri: str | AnyUrl) -> str:
    return str(uri).rstrip("/")


class ResourceCatalog:
    def __init__(self, settings: Settings, history: SearchHistory, tool_names: List[str]):
        self.settings = settings
        self.history = history
        self.tool_names = tool_names
        self.logger = get_logger("resources_mcp")
        # session -> subscribed URIs
        self._subscriptions: WeakKeyDictionary[Any, Set[str]] = WeakKeyDictionary()
        self._lock = threading.Lock()

    def list_resources(self) -> List[types.Resource]:
        return [
            types.Resource(
                uri=AnyUrl(HISTORY_URI),
                name="Search History",
                description="Recent web search queries and results",
                mimeType=JSON_MIME,
            ),
            types.Resource(
                uri=AnyUrl(CONFIG_URI),
                name="Server Configuration",
                description="Current server configuration settings",
                mimeType=JSON_MIME,
            ),
        ]

    def read(self, uri: str | AnyUrl) -> str:
        key = normalize_uri(uri)
        self.logger.info(f"Reading resource: {key}")
        if key == HISTORY_URI:
            return self.history.to_json()
        if key == CONFIG_URI:
            return self.config_json()
        self.logger.warning(f"Unknown resource requested: {key}")
        raise ProtocolError(f"Unknown resource URI: {key}")

    def config_json(self) -> str:
        s = self.settings
        doc = {
            "serverName": s.server_name,
            "version": s.server_version,
            "tools": list(self.tool_names),
            "capabilities": {"tools": True, "resources": True, "prompts": True},
            "searchConfig": {
                "maxResults": s.max_results,
                "defaultResults": s.default_results,
                "timeout": s.request_timeout,
            },
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        return json.dumps(doc, indent=2)

    def subscribe(self, uri: str | AnyUrl, session: Any) -> None:
        key = normalize_uri(uri)
        self.logger.info(f"Client subscribed to resource: {key}")
        with self._lock:
            self._subscriptions.setdefault(session, set()).add(key)

    def unsubscribe(self, uri: str | AnyUrl, session: Any) -> None:
        key = normalize_uri(uri)
        self.logger.info(f"Client unsubscribed from resource: {key}")
        with self._lock:
            uris = self._subscriptions.get(session)
            if uris is not None:
                uris.discard(key)
                if not uris:
                    del self._subscriptions[session]

    def is_subscribed(self, uri: str | AnyUrl, session: Any) -> bool:
        with self._lock:
            return normalize_uri(uri) in self._subscriptions.get(session, ())

    def subscribers(self, uri: str | AnyUrl) -> List[Any]:
        """Sessions currently subscribed to uri; closed sessions drop out on their own."""
        key = normalize_uri(uri)
        with self._lock:
            return [session for session, uris in self._subscriptions.items() if key in uris]
