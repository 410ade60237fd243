#!/usr/bin/env python3
"""
Dub.co MCP Server

Exposes Dub.co short-link management (create, update, upsert, delete, list
domains) to AI agents via MCP over stdio.

Usage:
  DUBCO_API_KEY=... python3 -m dubco_mcp
  DUBCO_API_KEY=... dubco-mcp --log-level DEBUG
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

import mcp.server.stdio
from mcp import types
from mcp.server import Server

from .config import DEFAULT_LOG_LEVEL, LOG_LEVELS, ConfigurationError, Settings, load_env_file
from .tools import LinkToolAdapter

logger = logging.getLogger("dubco-mcp")

SERVER_NAME = "dubco-server"
SERVER_VERSION = "1.0.0"


class DubcoMCP:
    """Dub.co MCP Server."""

    def __init__(self, adapter: LinkToolAdapter):
        self.adapter = adapter
        self.server = Server(SERVER_NAME, version=SERVER_VERSION)
        self._register_handlers()

    @classmethod
    def from_settings(cls, settings: Settings) -> "DubcoMCP":
        return cls(LinkToolAdapter(settings.api_key, base_url=settings.base_url))

    def _register_handlers(self):
        @self.server.list_tools()
        async def list_tools() -> list[types.Tool]:
            return self.adapter.list_tools()

        # Registered directly instead of via @call_tool(), which folds every
        # exception into an isError result; McpError must reach the client
        # as a JSON-RPC error.
        async def call_tool(request: types.CallToolRequest) -> types.ServerResult:
            result = await self.adapter.call_tool(request.params.name, request.params.arguments)
            return types.ServerResult(result)

        self.server.request_handlers[types.CallToolRequest] = call_tool

    async def run(self):
        try:
            async with mcp.server.stdio.stdio_server() as (read_stream, write_stream):
                logger.info("Dub.co MCP server running on stdio")
                await self.server.run(read_stream, write_stream, self.server.create_initialization_options())
        finally:
            await self.adapter.close()


def configure_logging(level: str):
    # basicConfig writes to stderr; stdout carries the MCP stream.
    logging.basicConfig(level=level.upper(), format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="dubco-mcp", description="Dub.co MCP server (stdio)")
    parser.add_argument("--base-url", help="Dub.co API root (overrides DUBCO_API_BASE_URL)")
    parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS, help="Logging level (overrides DUBCO_LOG_LEVEL)")
    return parser


def main(argv: Optional[List[str]] = None):
    args = build_parser().parse_args(argv)
    load_env_file()

    try:
        settings = Settings.from_env()
    except ConfigurationError as e:
        configure_logging(args.log_level or DEFAULT_LOG_LEVEL)
        logger.error(str(e))
        sys.exit(1)

    configure_logging(args.log_level or settings.log_level)
    if args.base_url:
        settings.base_url = args.base_url

    server = DubcoMCP.from_settings(settings)
    try:
        asyncio.run(server.run())
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")


if __name__ == "__main__":
    main()
