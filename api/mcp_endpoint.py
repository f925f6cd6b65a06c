"""ASGI endpoint serving the MCP streamable HTTP transport at /mcp."""
from starlette.types import Receive, Scope, Send

from utils.response_helpers import error_response


class MCPEndpoint:
    """POST-only; the session manager is created by the app lifespan."""

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["method"] != "POST":
            response = error_response(
                "Method Not Allowed", status_code=405, headers={"Allow": "POST"}
            )
            await response(scope, receive, send)
            return

        session_manager = scope["app"].state.mcp_session_manager
        await session_manager.handle_request(scope, receive, send)


mcp_endpoint = MCPEndpoint()
