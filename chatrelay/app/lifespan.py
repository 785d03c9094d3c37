"""Application lifecycle management for the chat relay server."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from ..structured_logging.enhanced_logging_config import get_logger

logger = get_logger("chatrelay.lifespan")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    The connection manager is created by create_app() so it exists before
    the first request; startup and shutdown here only report on it.
    """
    connection_manager = app.state.connection_manager
    logger.info("Chat relay server starting", live_connections=connection_manager.get_connection_count())
    try:
        yield
    finally:
        logger.info("Chat relay server shutting down", live_connections=connection_manager.get_connection_count())
