"""
Real-time communication API endpoints for the chat relay server.

This module handles WebSocket connections for chat and typing events.
"""

from fastapi import APIRouter, WebSocket

from ..realtime.websocket_handler import handle_websocket_connection

realtime_router = APIRouter(tags=["realtime"])


@realtime_router.websocket("/")
@realtime_router.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket) -> None:
    """WebSocket endpoint for chat, join and typing events."""
    connection_manager = websocket.app.state.connection_manager
    await handle_websocket_connection(websocket, connection_manager)
