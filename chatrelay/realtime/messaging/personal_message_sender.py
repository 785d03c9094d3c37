"""
Direct message delivery to a single connection.

Used for the welcome notice and the join confirmation, which go to one
participant only.
"""

from typing import Any

from ...structured_logging.enhanced_logging_config import get_logger
from ..connection_models import Connection
from ..envelope import serialize_event

logger = get_logger(__name__)


class PersonalMessageSender:
    """Sends one message to one connection, fire-and-forget."""

    def send_message(self, connection: Connection, event: dict[str, Any]) -> bool:
        """
        Send an event to a single connection if it is still open.

        Args:
            connection: Target connection
            event: The event data to send

        Returns:
            bool: True if the message was handed to the transport
        """
        if not connection.is_open:
            logger.debug("Skipping personal message to closed connection", event_type=event.get("type"))
            return False

        try:
            connection.send(serialize_event(event))
        except (RuntimeError, ConnectionError) as e:
            logger.debug("Personal message send failed", event_type=event.get("type"), error=str(e))
            return False
        return True
