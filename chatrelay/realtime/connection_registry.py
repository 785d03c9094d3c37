"""
Connection registry for the chat relay.

Maps each live connection handle to its Session. Entries are inserted when
the transport accepts a connection and removed when it closes, both
synchronously on the event loop, so the registry needs no locking.
"""

from collections.abc import Callable, Iterator

from ..exceptions import ConnectionAlreadyRegisteredError
from ..structured_logging.enhanced_logging_config import get_logger
from .connection_models import Connection, Session

logger = get_logger(__name__)


class ConnectionRegistry:
    """
    Live connection -> session table.

    A connection is a key if and only if its channel has been accepted and
    not yet closed. Keys compare by identity.
    """

    def __init__(self) -> None:
        self._sessions: dict[Connection, Session] = {}

    def register(self, connection: Connection) -> Session:
        """
        Create and store a fresh session for a newly accepted connection.

        Args:
            connection: The accepted connection handle

        Returns:
            Session: The new session (no username yet)

        Raises:
            ConnectionAlreadyRegisteredError: If the connection is already a key
        """
        existing = self._sessions.get(connection)
        if existing is not None:
            raise ConnectionAlreadyRegisteredError(existing.id)

        session = Session()
        self._sessions[connection] = session
        logger.debug("Connection registered", client_id=session.id, live_connections=len(self._sessions))
        return session

    def lookup(self, connection: Connection) -> Session | None:
        return self._sessions.get(connection)

    def deregister(self, connection: Connection) -> Session | None:
        """
        Remove a connection and return its session.

        Returns None when the connection was never registered or was already
        removed; a double close is not an error.
        """
        session = self._sessions.pop(connection, None)
        if session is not None:
            logger.debug("Connection deregistered", client_id=session.id, live_connections=len(self._sessions))
        return session

    def size(self) -> int:
        return len(self._sessions)

    def items(self) -> list[tuple[Connection, Session]]:
        """Snapshot of the current entries; safe to iterate while mutating."""
        return list(self._sessions.items())

    def for_each(self, visitor: Callable[[Connection, Session], None]) -> None:
        """Call visitor for every entry present when iteration starts."""
        for connection, session in self.items():
            visitor(connection, session)

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, connection: object) -> bool:
        return connection in self._sessions

    def __iter__(self) -> Iterator[Connection]:
        return iter(list(self._sessions))
