"""
Data models for connection management.

This module defines the structural type the registry accepts as a connection
handle and the per-connection session record it stores.
"""

import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Connection(Protocol):
    """
    One open bidirectional channel, as seen by the relay core.

    Identity is object identity. send() must not block: it hands the text to
    the transport and returns immediately.
    """

    @property
    def is_open(self) -> bool: ...

    def send(self, text: str) -> None: ...


def generate_session_id() -> str:
    """Return a short opaque id; collisions among live sessions are not checked."""
    return uuid.uuid4().hex[:8]


@dataclass
class Session:
    """
    Mutable identity attached to one live connection.

    The session is created with its connection, lives exactly as long as the
    connection is registered, and is dropped with the registry entry.
    """

    id: str = field(default_factory=generate_session_id)
    username: Any = None
    connected_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def has_joined(self) -> bool:
        return bool(self.username)
