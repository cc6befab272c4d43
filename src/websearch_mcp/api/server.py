from __future__ import annotations

import contextlib
from typing import AsyncIterator

from fastapi import FastAPI
from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
from starlette.types import Receive, Scope, Send

from websearch_mcp.server import WebSearchMCPServer
from websearch_mcp.utils.logger import get_logger


logger = get_logger("api_server")


class MCPEndpoint:
    """ASGI endpoint handing /mcp requests to the streamable-HTTP session manager."""

    def __init__(self, session_manager: StreamableHTTPSessionManager):
        self.session_manager = session_manager

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        await self.session_manager.handle_request(scope, receive, send)


def create_app(mcp_server: WebSearchMCPServer | None = None) -> FastAPI:
    """Build the HTTP app: /health plus the MCP streamable-HTTP endpoint at /mcp.

    Run with: uvicorn --factory websearch_mcp.api.server:create_app
    """
    mcp_server = mcp_server or WebSearchMCPServer()
    session_manager = StreamableHTTPSessionManager(app=mcp_server.server)

    @contextlib.asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        async with session_manager.run():
            logger.info("MCP streamable-HTTP endpoint ready at /mcp")
            try:
                yield
            finally:
                mcp_server.close()

    app = FastAPI(
        title="Web Search MCP Server",
        version=mcp_server.settings.server_version,
        lifespan=lifespan,
    )

    @app.get("/health")
    def health():
        return {
            "status": "ok",
            "server": mcp_server.settings.server_name,
            "version": mcp_server.settings.server_version,
        }

    # A callable instance (not a function) is served by Starlette as a raw ASGI app
    app.add_route("/mcp", MCPEndpoint(session_manager), methods=["GET", "POST", "DELETE"])
    return app
