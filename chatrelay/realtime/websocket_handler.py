"""
WebSocket handler for chat relay real-time communication.

Accepts the socket, registers it with the connection manager, feeds each
received frame to the router and deregisters the connection when the
socket closes, whether cleanly or after an error.
"""

from fastapi import WebSocket

from ..structured_logging.enhanced_logging_config import get_logger
from .connection_manager import ConnectionManager
from .websocket_channel import WebSocketChannel

logger = get_logger(__name__)


async def _handle_websocket_message_loop(
    websocket: WebSocket, channel: WebSocketChannel, connection_manager: ConnectionManager
) -> None:
    """Receive frames until the peer disconnects or the transport fails."""
    while True:
        try:
            message = await websocket.receive()
        except (RuntimeError, ConnectionError) as e:
            connection_manager.handle_error(channel, e)
            break

        if message["type"] == "websocket.disconnect":
            logger.debug("WebSocket disconnect received", close_code=message.get("code"))
            break

        raw = message.get("text")
        if raw is None:
            raw = message.get("bytes")
        if raw is None:
            continue

        try:
            connection_manager.handle_message(channel, raw)
        except Exception as e:  # pylint: disable=broad-exception-caught  # Reason: one bad event must not end the session
            logger.error(
                "Error handling WebSocket message",
                error=str(e),
                error_type=type(e).__name__,
                exc_info=True,
            )


async def handle_websocket_connection(websocket: WebSocket, connection_manager: ConnectionManager) -> None:
    """
    Handle a WebSocket connection for one participant.

    Args:
        websocket: The WebSocket connection
        connection_manager: ConnectionManager instance (injected from endpoint)
    """
    await websocket.accept()

    channel = WebSocketChannel(websocket)
    channel.start()
    connection_manager.connect(channel)

    try:
        await _handle_websocket_message_loop(websocket, channel, connection_manager)
    finally:
        channel.mark_closed()
        connection_manager.disconnect(channel)
        await channel.aclose()
