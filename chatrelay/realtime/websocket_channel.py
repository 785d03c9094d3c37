"""
Starlette WebSocket adapter for the relay core.

The core expects send() to return immediately. Each channel therefore owns
an unbounded outbox drained by a single writer task, which keeps per
connection message order while letting handlers stay synchronous.
"""

import asyncio

from fastapi import WebSocket, WebSocketDisconnect
from starlette.websockets import WebSocketState

from ..structured_logging.enhanced_logging_config import get_logger

logger = get_logger(__name__)


class WebSocketChannel:
    """
    Wraps one accepted WebSocket as a relay Connection.

    Hashes and compares by identity, as registry keys must.
    """

    def __init__(self, websocket: WebSocket) -> None:
        self.websocket = websocket
        self._outbox: asyncio.Queue[str] = asyncio.Queue()
        self._writer_task: asyncio.Task[None] | None = None
        self._closed = False

    @property
    def is_open(self) -> bool:
        if self._closed:
            return False
        return (
            self.websocket.client_state == WebSocketState.CONNECTED
            and self.websocket.application_state == WebSocketState.CONNECTED
        )

    def start(self) -> None:
        """Start the writer task; must be called from the running event loop."""
        if self._writer_task is None:
            self._writer_task = asyncio.create_task(self._drain_outbox())

    def send(self, text: str) -> None:
        """Queue text for delivery. Never blocks and never raises for a dead peer."""
        if self._closed:
            return
        self._outbox.put_nowait(text)

    def mark_closed(self) -> None:
        self._closed = True

    async def aclose(self) -> None:
        """Stop the writer task, dropping anything still queued."""
        self._closed = True
        if self._writer_task is not None:
            self._writer_task.cancel()
            try:
                await self._writer_task
            except asyncio.CancelledError:
                pass
            except Exception as e:  # pylint: disable=broad-exception-caught  # Reason: cleanup runs inside the handler's finally
                logger.debug("Writer task ended with error", error=str(e), error_type=type(e).__name__)
            self._writer_task = None

    async def _drain_outbox(self) -> None:
        while True:
            text = await self._outbox.get()
            try:
                await self.websocket.send_text(text)
            except (WebSocketDisconnect, RuntimeError, ConnectionError) as e:
                # Peer is gone; the receive loop's close path deregisters us.
                logger.debug("WebSocket send failed, closing outbox", error=str(e), error_type=type(e).__name__)
                self._closed = True
                return
            except Exception as e:  # pylint: disable=broad-exception-caught  # Reason: writer must never die with is_open still True
                logger.error(
                    "Unexpected error writing to WebSocket, closing outbox",
                    error=str(e),
                    error_type=type(e).__name__,
                    exc_info=True,
                )
                self._closed = True
                return
