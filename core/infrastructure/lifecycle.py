import os
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
import structlog

from adapters.google.search_term import GoogleSearchTermAdapter
from config.settings import GoogleAdsSettings
from core.infrastructure.http_client import init_http_client, close_http_client
from core.metadata import SERVICE_NAME, VERSION
from tools.mcp_server import build_mcp_server

logger = structlog.get_logger(__name__)

STARTUP_BANNER = """
╔══════════════════════════════════════════════╗
║  {service} v{version}
║  Python {python} | env: {env} | {log_level}
║  Google Ads: {data_source}
╚══════════════════════════════════════════════╝"""

SHUTDOWN_BANNER = """
╔══════════════════════════════════════════════╗
║  {service} v{version} shutting down
╚══════════════════════════════════════════════╝"""


def create_session_manager(settings: GoogleAdsSettings) -> StreamableHTTPSessionManager:
    # Stateless JSON mode: every POST is a self-contained JSON-RPC exchange
    server = build_mcp_server(GoogleSearchTermAdapter(settings))
    return StreamableHTTPSessionManager(app=server, json_response=True, stateless=True)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = getattr(app.state, "settings", None) or GoogleAdsSettings.from_env()

    init_http_client()
    logger.info("HTTP client initialized", component="http")

    # run() may only be entered once per manager, so build one per lifespan
    session_manager = create_session_manager(settings)
    app.state.mcp_session_manager = session_manager

    environment = os.getenv("ENVIRONMENT", "local")
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    python_version = sys.version.split()[0]
    data_source = "live" if settings.has_credentials else "mock (credentials missing)"

    print(
        STARTUP_BANNER.format(
            service=SERVICE_NAME,
            version=VERSION,
            python=python_version,
            env=environment,
            log_level=log_level,
            data_source=data_source,
        ),
        file=sys.stderr,
    )
    logger.info(
        "Service started",
        service=SERVICE_NAME,
        version=VERSION,
        python=python_version,
        environment=environment,
        log_level=log_level,
        data_source=data_source,
    )
    try:
        async with session_manager.run():
            yield
    finally:
        print(SHUTDOWN_BANNER.format(service=SERVICE_NAME, version=VERSION), file=sys.stderr)
        logger.info("Service shutting down", service=SERVICE_NAME, version=VERSION)
        await close_http_client()
        logger.info("HTTP client closed", component="http")
