"""
Session handlers for the join, chat and typing events.

Each handler looks up the sender's session, applies any session mutation and
emits the outbound messages for its event kind. Handlers never await, so a
handler always runs to completion before the next inbound event is taken
off the loop.
"""

from collections.abc import Callable
from dataclasses import dataclass

from ..structured_logging.enhanced_logging_config import get_logger
from .connection_models import Connection
from .connection_registry import ConnectionRegistry
from .message_builders import (
    ANONYMOUS_USERNAME,
    build_chat_message,
    build_joined_message,
    build_typing_message,
    build_user_joined_message,
)
from .message_validator import ChatEvent, InboundEvent, JoinEvent, TypingEvent
from .messaging import MessageBroadcaster, PersonalMessageSender

logger = get_logger(__name__)


@dataclass(frozen=True)
class HandlerContext:
    """The shared state a handler is allowed to read and mutate."""

    registry: ConnectionRegistry
    broadcaster: MessageBroadcaster
    personal_sender: PersonalMessageSender


EventHandler = Callable[[HandlerContext, Connection, InboundEvent], None]


def handle_join(context: HandlerContext, connection: Connection, event: JoinEvent) -> None:
    """
    Set the session's display name and announce it.

    A falsy or absent username resolves to "Anonymous". Joining again is
    allowed: the name is overwritten and announced again.
    """
    session = context.registry.lookup(connection)
    if session is None:
        logger.warning("Join from unregistered connection ignored")
        return

    session.username = event.username or ANONYMOUS_USERNAME
    logger.info("User joined", client_id=session.id, username=session.username)

    context.broadcaster.broadcast(build_user_joined_message(session.username), exclude=connection)
    context.personal_sender.send_message(connection, build_joined_message(session.username))


def handle_chat(context: HandlerContext, connection: Connection, event: ChatEvent) -> None:
    """Relay a chat message to every participant, the sender included."""
    session = context.registry.lookup(connection)
    if session is None:
        logger.warning("Chat from unregistered connection ignored")
        return

    username = session.username or ANONYMOUS_USERNAME
    context.broadcaster.broadcast(build_chat_message(username, event.message, session.id))


def handle_typing(context: HandlerContext, connection: Connection, event: TypingEvent) -> None:
    """Relay a typing indicator to everyone except the sender."""
    session = context.registry.lookup(connection)
    if session is None:
        logger.warning("Typing from unregistered connection ignored")
        return

    context.broadcaster.broadcast(build_typing_message(session.username, event.is_typing), exclude=connection)
