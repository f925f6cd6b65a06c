import structlog
from fastapi import Request
from starlette.exceptions import HTTPException as StarletteHTTPException

from exceptions.custom_exceptions import BaseAppException
from utils.response_helpers import error_response

logger = structlog.get_logger(__name__)

def setup_exception_handlers(app):

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        logger.warning("HTTPException", path=request.url.path, detail=exc.detail)
        return error_response(exc.detail, status_code=exc.status_code)

    @app.exception_handler(BaseAppException)
    async def app_exception_handler(request: Request, exc: BaseAppException):
        logger.warning("Application error", path=request.url.path, error=exc.message)
        return error_response(exc.message, status_code=exc.status_code)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error("Unhandled Exception", path=request.url.path, error=str(exc))
        return error_response("Something went wrong on the server", status_code=500)
