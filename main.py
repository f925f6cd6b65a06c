from dotenv import load_dotenv

from fastapi import FastAPI

from api.health import router as health_router
from api.mcp_endpoint import mcp_endpoint
from config.logging_config import setup_logging
from config.settings import GoogleAdsSettings
from core.infrastructure.lifecycle import lifespan
from core.infrastructure.request_logging_middleware import RequestLoggingMiddleware
from core.metadata import APP_TITLE, VERSION
from exceptions.handlers import setup_exception_handlers


def create_app(settings: GoogleAdsSettings | None = None) -> FastAPI:
    """Build the service. Without explicit settings, Google Ads settings come from the environment at startup."""
    app = FastAPI(title=APP_TITLE, version=VERSION, lifespan=lifespan)
    app.state.settings = settings

    app.include_router(health_router)
    app.add_route("/mcp", mcp_endpoint, include_in_schema=False)

    app.add_middleware(RequestLoggingMiddleware)
    setup_exception_handlers(app)
    return app


load_dotenv()
setup_logging()

app = create_app()
