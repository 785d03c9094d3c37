"""
Event envelope utilities for chat relay messages.

Every outbound record is a flat JSON object with a "type" discriminator, the
kind-specific fields and a "timestamp" (ISO 8601 UTC, millisecond precision,
'Z' suffix) taken when the record is built.
"""

from __future__ import annotations

import json
from datetime import UTC, datetime
from typing import Any


class _Missing:
    """Marker for an inbound field that was absent, as opposed to null."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __copy__(self) -> _Missing:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> _Missing:
        return self

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


def utc_now_z() -> str:
    """Return current UTC time in ISO 8601 format with 'Z' suffix."""
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_event(event_type: str, **fields: Any) -> dict[str, Any]:
    """
    Create an outbound event record.

    Fields whose value is MISSING are left out of the record entirely.

    Args:
        event_type: Value of the "type" discriminator
        **fields: Kind-specific fields

    Returns:
        dict: The event, with a fresh timestamp
    """
    event: dict[str, Any] = {"type": event_type}
    for key, value in fields.items():
        if value is MISSING:
            continue
        event[key] = value
    event["timestamp"] = utc_now_z()
    return event


def serialize_event(event: dict[str, Any]) -> str:
    """Serialize an event to compact, ASCII-only JSON text (non-ASCII and lone surrogates are \\u-escaped)."""
    return json.dumps(event, ensure_ascii=True, separators=(",", ":"), default=str)
