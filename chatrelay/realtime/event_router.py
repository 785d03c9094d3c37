"""
Inbound event routing.

Turns a raw payload into an InboundEvent and dispatches it to the handler
registered for its kind. Malformed payloads and unknown kinds are logged and
dropped; nothing is sent back to the client and the connection stays open.
"""

from ..structured_logging.enhanced_logging_config import get_logger
from .connection_models import Connection
from .event_handlers import EventHandler, HandlerContext, handle_chat, handle_join, handle_typing
from .message_validator import (
    ChatEvent,
    InboundEvent,
    JoinEvent,
    TypingEvent,
    UnknownEvent,
    UnparseableEvent,
    parse_inbound_event,
)

logger = get_logger(__name__)


class EventRouter:
    """Dispatches parsed inbound events to session handlers."""

    def __init__(self, context: HandlerContext) -> None:
        self.context = context
        self._handlers: dict[type[InboundEvent], EventHandler] = {
            JoinEvent: handle_join,  # type: ignore[dict-item]
            ChatEvent: handle_chat,  # type: ignore[dict-item]
            TypingEvent: handle_typing,  # type: ignore[dict-item]
        }

    def route(self, connection: Connection, raw: str | bytes) -> InboundEvent:
        """
        Parse and dispatch one inbound payload.

        Args:
            connection: The connection the payload arrived on
            raw: Raw frame contents

        Returns:
            InboundEvent: The parse outcome, whether or not it was handled
        """
        event = parse_inbound_event(raw)
        session = self.context.registry.lookup(connection)
        client_id = session.id if session is not None else None

        if isinstance(event, UnparseableEvent):
            logger.warning("Error parsing message", client_id=client_id, reason=event.reason, detail=event.detail)
            return event

        if isinstance(event, UnknownEvent):
            logger.info("Unknown message type", client_id=client_id, message_type=repr(event.type))
            return event

        logger.debug("Received", client_id=client_id, inbound=event.model_dump(by_alias=True, exclude_defaults=True))
        handler = self._handlers[type(event)]
        handler(self.context, connection, event)
        return event
