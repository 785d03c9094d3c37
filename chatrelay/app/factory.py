"""
FastAPI application factory for the chat relay server.

This module handles FastAPI app creation, connection manager setup and
router registration.
"""

from fastapi import FastAPI

from ..api.monitoring import monitoring_router
from ..api.real_time import realtime_router
from ..realtime.connection_manager import ConnectionManager
from ..structured_logging.enhanced_logging_config import get_logger
from .lifespan import lifespan

logger = get_logger(__name__)


def create_app(connection_manager: ConnectionManager | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        connection_manager: Manager to serve; a new one is created when omitted.
            Exactly one manager, and therefore one registry, backs an app.

    Returns:
        FastAPI: The configured FastAPI application instance
    """
    app = FastAPI(
        title="Chat Relay",
        description="Real-time chat relay over WebSocket",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state.connection_manager = connection_manager if connection_manager is not None else ConnectionManager()

    app.include_router(monitoring_router)
    app.include_router(realtime_router)

    logger.debug("Application created", routes=[getattr(route, "path", None) for route in app.routes])
    return app
