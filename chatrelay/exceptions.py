"""
Exception hierarchy for the chat relay server.

Every error raised by chatrelay code derives from ChatRelayError so callers
can catch the whole family at one seam. Protocol-level problems (bad JSON,
unknown event types, dead sockets) are not exceptions here: they are logged
and dropped by the components that meet them.
"""

from typing import Any


class ChatRelayError(Exception):
    """
    Base exception for all chat relay errors.

    Carries an optional context dictionary that is merged into the structured
    log entry when the error is reported.
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        """
        Initialize the error.

        Args:
            message: Technical error message
            context: Additional key/value pairs describing the failure
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self._already_logged = False

    def mark_logged(self) -> None:
        """Mark this error as already written to the log."""
        self._already_logged = True

    @property
    def already_logged(self) -> bool:
        return self._already_logged

    def to_dict(self) -> dict[str, Any]:
        """Convert the error to a dictionary for logging."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "context": self.context,
        }


class ConnectionAlreadyRegisteredError(ChatRelayError):
    """Raised when a connection handle is registered twice."""

    def __init__(self, client_id: str):
        super().__init__(
            "Connection is already registered",
            context={"client_id": client_id},
        )
        self.client_id = client_id
