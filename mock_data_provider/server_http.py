#!/usr/bin/env python3
"""
HTTP Server - Range queries plus MCP over SSE

Run with: mock-data-provider serve (or: uvicorn mock_data_provider.server_http:app --port 3000)

Endpoints:
- GET /news?start=ISO&end=ISO        articles in [start, end)
- GET /hedgefunds?start=ISO&end=ISO  filings in [start, end]
- GET /ping                          health check
- /sse, /messages                    MCP SSE transport

Configuration:
- PORT: Server port (default: 3000)
- DATA_DIR: Partition directory (default: ./logs)
- ARTICLE_STEP_UNIT / ARTICLE_MAX_STEP: Article spacing (default: minute / 60)
"""

import asyncio
import logging
import signal
import sys
from datetime import datetime, timezone
from typing import Any

from mcp.server import Server
from mcp.server.sse import SseServerTransport
from mcp.types import TextContent, Tool
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Mount, Route

from .adapters.mcp import TOOL_SCHEMAS, MCPHandlers
from .config import get_config, get_port
from .container import Container
from .core import InputValidationError
from .formatters import format_hedgefund_filings, format_news

# Configure logging with millisecond precision
logging.basicConfig(
    level=logging.INFO,
    format="[%(asctime)s] [%(levelname)s] %(message)s",
    datefmt="%Y/%m/%d %H:%M:%S"
)


class MillisecondFormatter(logging.Formatter):
    """Custom formatter with milliseconds as :XXXX format"""
    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: N802
        """Override formatTime to include milliseconds with : separator"""
        ct = datetime.fromtimestamp(record.created, tz=timezone.utc)
        if datefmt:
            s = ct.strftime("%Y/%m/%d %H:%M:%S")
            ms = int((record.created % 1) * 10000)
            return f"{s}:{ms:04d}"
        return super().formatTime(record, datefmt)


# Apply custom formatter to root logger
for handler in logging.root.handlers:
    handler.setFormatter(MillisecondFormatter(
        "[%(asctime)s] [%(levelname)s] %(message)s",
        datefmt="%Y/%m/%d %H:%M:%S"
    ))

logger = logging.getLogger(__name__)


def create_mcp_server(handlers: MCPHandlers) -> Server:
    """MCP server exposing the range queries as tools"""
    mcp_server = Server("mock-data-provider")

    @mcp_server.list_tools()  # type: ignore[misc,no-untyped-call]
    async def list_tools() -> list[Tool]:
        """List available MCP tools"""
        return [Tool(**schema) for schema in TOOL_SCHEMAS.values()]

    @mcp_server.call_tool()  # type: ignore[misc,no-untyped-call]
    async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
        """Handle tool calls"""
        logger.info(f"call_tool: {name} args={arguments}")

        if name == "get_news":
            result = await handlers.get_news(
                start=arguments["start"],
                end=arguments["end"]
            )
            formatted_text = format_news(result)
        elif name == "get_hedgefund_filings":
            result = await handlers.get_hedgefund_filings(
                start=arguments["start"],
                end=arguments["end"],
                fund=arguments.get("fund")
            )
            formatted_text = format_hedgefund_filings(result)
        else:
            raise ValueError(f"Unknown tool: {name}")

        logger.info(f"call_tool: {name} returning {len(formatted_text)} chars")
        return [TextContent(type="text", text=formatted_text)]

    return mcp_server


def create_app(container: Container) -> Starlette:
    """Build the Starlette app around a wired container"""
    handlers = MCPHandlers(container)
    mcp_server = create_mcp_server(handlers)

    # SSE transport for multi-client support
    sse_transport = SseServerTransport("/messages")

    async def handle_root(request: Request) -> Response:
        return JSONResponse({"msg": "Mock Data Provider Running"})

    async def handle_ping(request: Request) -> Response:
        """Health check endpoint"""
        return JSONResponse({"status": "ok"})

    async def handle_news(request: Request) -> Response:
        """Articles published in [start, end)"""
        start = request.query_params.get("start")
        end = request.query_params.get("end")
        try:
            result = await asyncio.to_thread(container.news.execute, start, end)
        except InputValidationError as e:
            logger.info(f"GET /news rejected: {e}")
            return JSONResponse({"error": str(e)}, status_code=400)

        logger.info(f"GET /news {start}..{end}: {result.count} articles ({result.generated} generated)")
        return JSONResponse(result.to_dict("articles"))

    async def handle_hedgefunds(request: Request) -> Response:
        """Filings filed in [start, end], optionally for one fund"""
        start = request.query_params.get("start")
        end = request.query_params.get("end")
        fund = request.query_params.get("fund")
        try:
            result = await asyncio.to_thread(container.hedgefunds.execute, start, end, fund)
        except InputValidationError as e:
            logger.info(f"GET /hedgefunds rejected: {e}")
            return JSONResponse({"error": str(e)}, status_code=400)

        logger.info(f"GET /hedgefunds {start}..{end}: {result.count} filings ({result.generated} generated)")
        return JSONResponse(result.to_dict("records"))

    async def handle_sse(request: Request) -> Response:
        """SSE endpoint for MCP communication"""
        client_addr = request.client.host if request.client else "unknown"
        logger.info(f"SSE connect from {client_addr}")
        async with sse_transport.connect_sse(
            request.scope, request.receive, request._send
        ) as streams:
            logger.info(f"SSE session started for {client_addr}")
            await mcp_server.run(
                streams[0], streams[1], mcp_server.create_initialization_options()
            )
            logger.info(f"SSE disconnect from {client_addr}")
        return Response()

    routes = [
        Route("/", handle_root),
        Route("/ping", handle_ping),
        Route("/news", handle_news),
        Route("/hedgefunds", handle_hedgefunds),
        Route("/sse", handle_sse),
        Mount("/messages", app=sse_transport.handle_post_message),
    ]

    middleware = [
        Middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["GET", "POST"], allow_headers=["*"]),
    ]

    return Starlette(routes=routes, middleware=middleware)


app = create_app(Container(get_config()))


# Graceful shutdown on SIGTERM
def handle_sigterm(signum, frame):
    logger.info("Received SIGTERM, shutting down gracefully...")
    sys.exit(0)


def main(port: int | None = None, container: Container | None = None) -> None:
    import uvicorn

    signal.signal(signal.SIGTERM, handle_sigterm)
    port = port or get_port()
    logger.info(f"Starting Mock Data Provider on port {port}")
    uvicorn.run(create_app(container) if container else app, host="127.0.0.1", port=port)


if __name__ == "__main__":
    main()
