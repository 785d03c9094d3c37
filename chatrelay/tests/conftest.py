"""
Test configuration and fixtures for the chat relay test suite.

Provides an in-memory connection double that records everything sent to it,
plus registry and connection manager fixtures built on top of it.
"""

import json
import os
from typing import Any

import pytest

os.environ.setdefault("LOGGING_ENVIRONMENT", "unit_test")
os.environ.setdefault("LOGGING_LEVEL", "DEBUG")

from chatrelay.realtime.connection_manager import ConnectionManager  # noqa: E402
from chatrelay.realtime.connection_registry import ConnectionRegistry  # noqa: E402


class RecordingConnection:
    """Connection double: records sent frames and can be closed or made to fail."""

    def __init__(self, name: str = "conn") -> None:
        self.name = name
        self.sent: list[str] = []
        self.open = True
        self.fail_sends = False

    @property
    def is_open(self) -> bool:
        return self.open

    def send(self, text: str) -> None:
        if self.fail_sends:
            raise ConnectionError("peer reset")
        text.encode("utf-8")  # a real socket encodes frames as UTF-8
        self.sent.append(text)

    def messages(self) -> list[dict[str, Any]]:
        return [json.loads(text) for text in self.sent]

    def messages_of_type(self, message_type: str) -> list[dict[str, Any]]:
        return [message for message in self.messages() if message["type"] == message_type]

    def clear(self) -> None:
        self.sent.clear()

    def __repr__(self) -> str:
        return f"RecordingConnection({self.name!r})"


@pytest.fixture
def make_connection():
    """Factory for recording connections."""

    def _make(name: str = "conn") -> RecordingConnection:
        return RecordingConnection(name)

    return _make


@pytest.fixture
def registry():
    return ConnectionRegistry()


@pytest.fixture
def connection_manager(registry):
    return ConnectionManager(registry)
