from typing import Any

import mcp.types as types
from mcp.server.lowlevel import Server

from adapters.google.search_term import GoogleSearchTermAdapter
from core.metadata import SERVICE_NAME, VERSION
from tools.search_term_tools import TOOLS, SearchTermTools


def build_mcp_server(adapter: GoogleSearchTermAdapter) -> Server:
    """MCP server exposing fetch_search_terms and suggest_negative_keywords.

    Arguments are checked against each tool's input schema before dispatch;
    a returned dict becomes structuredContent plus an indented JSON text block.
    """
    server = Server(SERVICE_NAME, version=VERSION)
    tools = SearchTermTools(adapter)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return TOOLS

    @server.call_tool()
    async def call_tool(name: str, arguments: dict[str, Any]) -> dict[str, Any]:
        return await tools.call(name, arguments)

    return server
