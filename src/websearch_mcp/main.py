"""Web Search MCP - server entrypoint
Serves the websearch tool over stdio (default) or streamable HTTP.
For a local one-off search without an MCP host, use: websearch-mcp-cli "query"
"""
from __future__ import annotations

import argparse
import sys

import anyio

from websearch_mcp.utils.config import load_settings
from websearch_mcp.utils.logger import get_logger, set_level
from websearch_mcp.server import WebSearchMCPServer


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments for the server entrypoint"""
    p = argparse.ArgumentParser(
        description="Web Search MCP server",
        epilog="Environment variables (see .env) provide the defaults for every flag.",
    )
    p.add_argument("--transport", choices=["stdio", "streamable-http"], default=None,
                   help="MCP transport (default: MCP_TRANSPORT or stdio)")
    p.add_argument("--host", type=str, default=None, help="Bind host for streamable-http")
    p.add_argument("--port", type=int, default=None, help="Bind port for streamable-http")
    p.add_argument("--log-level", type=str, default=None, help="DEBUG, INFO, WARNING, ERROR")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    if args.log_level:
        set_level(args.log_level)
    logger = get_logger("main")

    settings = load_settings()
    if args.transport:
        settings.transport = args.transport
    if args.host:
        settings.host = args.host
    if args.port:
        settings.port = args.port

    try:
        server = WebSearchMCPServer(settings)
    except Exception:
        logger.exception("Failed to start MCP server")
        sys.exit(1)

    if settings.transport == "streamable-http":
        import uvicorn
        from websearch_mcp.api.server import create_app

        logger.info(f"Serving MCP over HTTP on {settings.host}:{settings.port}")
        uvicorn.run(create_app(server), host=settings.host, port=settings.port, log_level="warning")
        return

    try:
        anyio.run(server.run_stdio)
    except KeyboardInterrupt:
        logger.info("Interrupted, stopping MCP server")
    except Exception:
        logger.exception("MCP server failed")
        sys.exit(1)
    finally:
        server.close()


if __name__ == "__main__":
    main()
