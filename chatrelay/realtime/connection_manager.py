"""
Connection manager for chat relay real-time communication.

Owns the single connection registry for the process and drives each
connection through CONNECTING -> OPEN -> CLOSED: registration and welcome on
accept, routing while open, deregistration and presence updates on close.
"""

from ..structured_logging.enhanced_logging_config import get_logger, log_exception_once
from .connection_models import Connection, Session
from .connection_registry import ConnectionRegistry
from .event_handlers import HandlerContext
from .event_router import EventRouter
from .message_builders import build_user_left_message, build_welcome_message
from .message_validator import InboundEvent
from .messaging import MessageBroadcaster, PersonalMessageSender

logger = get_logger(__name__)


class ConnectionManager:
    """
    Manages real-time connections for the chat relay.

    One instance is created at application startup and lives for the
    process lifetime. Every method is synchronous; transports call them from
    the event loop, one event at a time.
    """

    def __init__(self, registry: ConnectionRegistry | None = None) -> None:
        """
        Initialize the connection manager with its components.

        Args:
            registry: Registry to use; a fresh one is created when omitted
        """
        self.registry = registry if registry is not None else ConnectionRegistry()
        self.broadcaster = MessageBroadcaster(self.registry)
        self.personal_sender = PersonalMessageSender()
        self.router = EventRouter(HandlerContext(self.registry, self.broadcaster, self.personal_sender))

    def connect(self, connection: Connection) -> Session:
        """
        Register a newly accepted connection and announce it.

        Sends the welcome notice carrying the assigned client id to the new
        connection, then broadcasts the updated user count to everyone.

        Returns:
            Session: The session created for the connection
        """
        session = self.registry.register(connection)
        logger.info("Client connected", client_id=session.id, live_connections=self.registry.size())

        self.personal_sender.send_message(connection, build_welcome_message(session.id))
        self.broadcaster.broadcast_user_count()
        return session

    def handle_message(self, connection: Connection, raw: str | bytes) -> InboundEvent:
        """Route one inbound payload received on an open connection."""
        return self.router.route(connection, raw)

    def handle_error(self, connection: Connection, error: Exception) -> None:
        """
        Log a transport-level error.

        Errors do not deregister the connection; the transport's close event
        does that.
        """
        session = self.registry.lookup(connection)
        log_exception_once(
            logger,
            "error",
            "WebSocket error",
            exc=error,
            client_id=session.id if session is not None else None,
        )

    def disconnect(self, connection: Connection) -> Session | None:
        """
        Deregister a closed connection and update the remaining participants.

        A "left the chat" notice is broadcast only if the session had joined.
        The user count is broadcast on every effective deregistration.
        Disconnecting an unknown or already removed connection does nothing.

        Returns:
            Session | None: The removed session, if there was one
        """
        session = self.registry.deregister(connection)
        if session is None:
            logger.debug("Disconnect for unregistered connection ignored")
            return None

        logger.info("Client disconnected", client_id=session.id, live_connections=self.registry.size())

        if session.has_joined:
            self.broadcaster.broadcast(build_user_left_message(session.username))
        self.broadcaster.broadcast_user_count()
        return session

    def get_connection_count(self) -> int:
        return self.registry.size()
