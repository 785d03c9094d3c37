"""
Liveness and readiness endpoints for the chat relay server.

Deployment platforms poll these; they report process liveness and the
number of live WebSocket connections.
"""

from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

from ..realtime.connection_manager import ConnectionManager

monitoring_router = APIRouter(tags=["monitoring"])

ROOT_MESSAGE = "WebSocket Chat Server is running!"


def get_connection_manager(request: Request) -> ConnectionManager:
    """Return the process-wide connection manager stored on app state."""
    return request.app.state.connection_manager


@monitoring_router.get("/", response_class=PlainTextResponse)
async def root() -> str:
    """Plain-text liveness check."""
    return ROOT_MESSAGE


@monitoring_router.get("/health")
async def health_check(request: Request) -> dict[str, Any]:
    """Report status and the current number of connected clients."""
    connection_manager = get_connection_manager(request)
    return {"status": "ok", "clients": connection_manager.get_connection_count()}
