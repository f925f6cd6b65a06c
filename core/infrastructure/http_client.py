from collections.abc import Callable

import httpx
import structlog

logger = structlog.get_logger(__name__)

_client: httpx.AsyncClient | None = None


def init_http_client():
    global _client
    _client = httpx.AsyncClient(
        timeout=httpx.Timeout(60, connect=10),
        limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
    )


async def close_http_client():
    global _client
    if _client:
        await _client.aclose()
        _client = None


def get_http_client() -> httpx.AsyncClient:
    if _client is None:
        raise RuntimeError("HTTP client not initialized")
    return _client


async def http_request(
    method: str,
    url: str,
    *,
    client: httpx.AsyncClient | None = None,
    error_handler: Callable[[httpx.Response], None] | None = None,
    **kwargs,
) -> httpx.Response:
    """Single-attempt HTTP request; non-2xx goes through error_handler, then raise_for_status."""
    client = client or get_http_client()
    response = await client.request(method, url, **kwargs)
    if response.is_success:
        return response

    logger.warning("http_error", method=method, url=url, status=response.status_code)
    if error_handler:
        error_handler(response)
    response.raise_for_status()
    return response
