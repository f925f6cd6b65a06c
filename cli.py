import argparse
import asyncio
import os
import sys

import structlog
import uvicorn
from dotenv import load_dotenv
from mcp.server.stdio import stdio_server

from adapters.google.search_term import GoogleSearchTermAdapter
from config.logging_config import setup_logging
from config.settings import GoogleAdsSettings
from core.infrastructure.http_client import close_http_client, init_http_client
from core.metadata import SERVICE_NAME, VERSION
from tools.mcp_server import build_mcp_server

logger = structlog.get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog=SERVICE_NAME)
    p.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    sub = p.add_subparsers(dest="command", required=True)

    p_serve = sub.add_parser("serve", help="Serve MCP over streamable HTTP at /mcp")
    p_serve.add_argument("--host", default=os.getenv("HOST", "0.0.0.0"))
    p_serve.add_argument("--port", type=int, default=int(os.getenv("PORT", "8000")))

    sub.add_parser("stdio", help="Serve MCP over stdin/stdout")
    return p


async def run_stdio() -> None:
    server = build_mcp_server(GoogleSearchTermAdapter(GoogleAdsSettings.from_env()))
    init_http_client()
    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(
                read_stream, write_stream, server.create_initialization_options()
            )
    finally:
        await close_http_client()


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    setup_logging()

    if args.command == "serve":
        # log_config=None keeps uvicorn on the structlog root handlers
        uvicorn.run("main:app", host=args.host, port=args.port, log_config=None)
        return 0

    if args.command == "stdio":
        logger.info("Starting MCP stdio server", service=SERVICE_NAME, version=VERSION)
        asyncio.run(run_stdio())
        return 0

    print("ERROR: Unknown command", file=sys.stderr)
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
