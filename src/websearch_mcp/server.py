"""MCP Web Search server
Wires the tool registry, resources and prompts into an MCP low-level Server.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

import anyio
from anyio import to_thread
import mcp.types as types
from mcp.server.lowlevel import NotificationOptions, Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.models import InitializationOptions
from mcp.server.stdio import stdio_server
from pydantic import AnyUrl

from websearch_mcp import prompts
from websearch_mcp.errors import ProtocolError, SearchError
from websearch_mcp.registry import build_registry
from websearch_mcp.resources import HISTORY_URI, JSON_MIME, ResourceCatalog
from websearch_mcp.search.tools import SearchTools
from websearch_mcp.utils.config import Settings, load_settings
from websearch_mcp.utils.logger import get_logger


class WebSearchMCPServer:
    """MCP server exposing the websearch tool, history/config resources and research prompts."""

    def __init__(self, settings: Settings | None = None, search_tools: SearchTools | None = None):
        self.settings = settings or load_settings()
        self.logger = get_logger("websearch_mcp")
        self.search_tools = search_tools or SearchTools(self.settings)
        self.history = self.search_tools.history
        self.registry = build_registry(self.search_tools)
        self.resources = ResourceCatalog(
            self.settings, self.history, [t.name for t in self.registry.list()]
        )
        self.server: Server = Server(self.settings.server_name, version=self.settings.server_version)
        self._register_handlers()

    def _register_handlers(self) -> None:
        self.server.list_tools()(self.list_tools)
        self.server.call_tool()(self.call_tool)
        self.server.list_resources()(self.list_resources)
        self.server.read_resource()(self.read_resource)
        self.server.subscribe_resource()(self.subscribe_resource)
        self.server.unsubscribe_resource()(self.unsubscribe_resource)
        self.server.list_prompts()(self.list_prompts)
        self.server.get_prompt()(self.get_prompt)

    # --- Tools ---
    async def list_tools(self) -> List[types.Tool]:
        self.logger.debug("Listing available tools")
        return self.registry.to_mcp_tools()

    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]]) -> List[types.TextContent]:
        """Run a tool in a worker thread; errors propagate so the SDK reports isError."""
        try:
            text = await to_thread.run_sync(self.registry.call, name, arguments or {})
        except ProtocolError as e:
            self.logger.warning(f"Rejected tool call '{name}': {e}")
            raise
        except SearchError as e:
            self.logger.error(f"Web search failed: {e}")
            raise

        await self._notify_history_updated()
        return [types.TextContent(type="text", text=text)]

    async def _notify_history_updated(self) -> None:
        for session in self.resources.subscribers(HISTORY_URI):
            try:
                await session.send_resource_updated(AnyUrl(HISTORY_URI))
            except (anyio.ClosedResourceError, anyio.BrokenResourceError):
                self.logger.info("Dropping subscription of a closed session")
                self.resources.unsubscribe(HISTORY_URI, session)

    # --- Resources ---
    async def list_resources(self) -> List[types.Resource]:
        self.logger.debug("Listing available resources")
        return self.resources.list_resources()

    async def read_resource(self, uri: AnyUrl) -> List[ReadResourceContents]:
        return [ReadResourceContents(content=self.resources.read(uri), mime_type=JSON_MIME)]

    async def subscribe_resource(self, uri: AnyUrl) -> None:
        self.resources.subscribe(uri, self.server.request_context.session)

    async def unsubscribe_resource(self, uri: AnyUrl) -> None:
        self.resources.unsubscribe(uri, self.server.request_context.session)

    # --- Prompts ---
    async def list_prompts(self) -> List[types.Prompt]:
        self.logger.debug("Listing available prompts")
        return prompts.list_prompts()

    async def get_prompt(self, name: str, arguments: Optional[Dict[str, str]]) -> types.GetPromptResult:
        return prompts.get_prompt(name, arguments)

    # --- Lifecycle ---
    def initialization_options(self) -> InitializationOptions:
        return self.server.create_initialization_options(
            notification_options=NotificationOptions(resources_changed=True),
        )

    async def run_stdio(self) -> None:
        self.logger.info(f"Starting {self.settings.server_name} {self.settings.server_version} on stdio")
        async with stdio_server() as (read_stream, write_stream):
            await self.server.run(read_stream, write_stream, self.initialization_options())

    def close(self) -> None:
        self.logger.info("Shutting down MCP server")
        self.search_tools.close()
