"""
Message broadcasting for connection management.

Fans one serialized message out to every open connection in the registry,
optionally excluding one. Delivery is best-effort: there is no
acknowledgement, buffering beyond the transport's own outbox, or retry.
"""

from typing import Any

from ...structured_logging.enhanced_logging_config import get_logger
from ..connection_models import Connection
from ..connection_registry import ConnectionRegistry
from ..envelope import serialize_event
from ..message_builders import build_user_count_message

logger = get_logger(__name__)


class MessageBroadcaster:
    """
    Broadcasts messages to the connections held by a registry.

    Membership is read from a registry snapshot taken when broadcast() is
    called. A connection found closed, or whose send fails, is skipped and
    the remaining connections still receive the message.
    """

    def __init__(self, registry: ConnectionRegistry) -> None:
        """
        Initialize the message broadcaster.

        Args:
            registry: ConnectionRegistry whose entries are the audience
        """
        self.registry = registry

    def broadcast(self, event: dict[str, Any], exclude: Connection | None = None) -> int:
        """
        Send an event to every open connection except `exclude`.

        Args:
            event: The event data to send
            exclude: Connection to leave out, typically the sender

        Returns:
            int: Number of connections the message was handed to
        """
        payload = serialize_event(event)
        delivered = 0
        skipped = 0

        for connection, session in self.registry.items():
            if connection is exclude:
                continue
            if not connection.is_open:
                skipped += 1
                continue
            try:
                connection.send(payload)
            except (RuntimeError, ConnectionError) as e:
                logger.debug("Broadcast send failed", client_id=session.id, error=str(e))
                skipped += 1
                continue
            delivered += 1

        logger.debug(
            "Broadcast complete",
            event_type=event.get("type"),
            delivered=delivered,
            skipped=skipped,
            excluded=exclude is not None,
        )
        return delivered

    def broadcast_user_count(self) -> int:
        """Tell everyone how many connections are currently registered."""
        return self.broadcast(build_user_count_message(self.registry.size()))
