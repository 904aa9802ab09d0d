#!/usr/bin/env python3
"""
CLI for mock-data-provider - query and fill ranges without the server

Usage:
  mock-data-provider list-tools                                     # Show MCP tool definitions
  mock-data-provider news 2024-01-01T00:00:00Z 2024-01-01T06:00:00Z # Articles in [start, end)
  mock-data-provider hedgefunds 2023-01-01 2023-12-31               # Filings in [start, end]
  mock-data-provider hedgefunds 2023-01-01 2023-12-31 --fund "Citadel Advisors LLC"
  mock-data-provider news ... --json                                # Raw JSON instead of text
  mock-data-provider serve --port 3000                              # Run the HTTP server

Uses the hexagonal core directly (no HTTP layer), against $DATA_DIR or ./logs.
"""

import argparse
import asyncio
import json
import sys
from dataclasses import replace
from pathlib import Path

from .adapters.mcp import TOOL_SCHEMAS, MCPHandlers
from .config import get_config
from .container import Container
from .formatters import format_hedgefund_filings, format_news


def build_container(data_dir: str | None) -> Container:
    """Container from environment config, with an optional data dir override"""
    config = get_config()
    if data_dir:
        config = replace(config, data_dir=Path(data_dir))
    return Container(config)


async def list_tools_command() -> int:
    """Show MCP tool definitions"""
    print("=" * 80)
    print("MCP TOOL DEFINITIONS")
    print("=" * 80)
    print()

    for tool_schema in TOOL_SCHEMAS.values():
        print(f"Tool: {tool_schema['name']}")
        print()
        print("Description:")
        print(tool_schema['description'])
        print()
        print("Input Schema:")
        print(json.dumps(tool_schema['inputSchema'], indent=2))
        print()
        print("-" * 80)
        print()

    return 0


async def news_command(start: str, end: str, data_dir: str | None, as_json: bool) -> int:
    """Print articles in [start, end)"""
    handlers = MCPHandlers(build_container(data_dir))
    result = await handlers.get_news(start=start, end=end)

    print(json.dumps(result, indent=2) if as_json else format_news(result))
    return 0 if result["success"] else 1


async def hedgefunds_command(
    start: str,
    end: str,
    fund: str | None,
    data_dir: str | None,
    as_json: bool
) -> int:
    """Print filings in [start, end]"""
    handlers = MCPHandlers(build_container(data_dir))
    result = await handlers.get_hedgefund_filings(start=start, end=end, fund=fund)

    print(json.dumps(result, indent=2) if as_json else format_hedgefund_filings(result))
    return 0 if result["success"] else 1


def serve_command(port: int | None, data_dir: str | None) -> int:
    """Run the HTTP server until interrupted"""
    from .server_http import main as serve

    serve(port, build_container(data_dir))
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(
        description="mock-data-provider CLI - reproducible synthetic news and fund filings"
    )
    parser.add_argument(
        "--data-dir",
        default=None,
        help="Partition directory (default: $DATA_DIR or ./logs)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # list-tools command
    subparsers.add_parser("list-tools", help="Show MCP tool definitions")

    # news command
    news_parser = subparsers.add_parser("news", help="Articles published in [start, end)")
    news_parser.add_argument("start", help="Window start (ISO-8601)")
    news_parser.add_argument("end", help="Window end (ISO-8601, exclusive)")
    news_parser.add_argument("--json", action="store_true", help="Print raw JSON")

    # hedgefunds command
    hf_parser = subparsers.add_parser("hedgefunds", help="Fund filings filed in [start, end]")
    hf_parser.add_argument("start", help="Window start (ISO-8601)")
    hf_parser.add_argument("end", help="Window end (ISO-8601, inclusive)")
    hf_parser.add_argument("--fund", help="Exact fund name filter")
    hf_parser.add_argument("--json", action="store_true", help="Print raw JSON")

    # serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP server")
    serve_parser.add_argument("--port", type=int, default=None, help="Port (default: $PORT or 3000)")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 1

    # Run command
    if args.command == "list-tools":
        return asyncio.run(list_tools_command())
    elif args.command == "news":
        return asyncio.run(news_command(
            start=args.start,
            end=args.end,
            data_dir=args.data_dir,
            as_json=args.json
        ))
    elif args.command == "hedgefunds":
        return asyncio.run(hedgefunds_command(
            start=args.start,
            end=args.end,
            fund=args.fund,
            data_dir=args.data_dir,
            as_json=args.json
        ))
    elif args.command == "serve":
        return serve_command(args.port, args.data_dir)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
