"""
Inbound message parsing for the chat relay.

Raw WebSocket payloads are turned into a closed set of event models. Parsing
never raises: input that is not a UTF-8 JSON object becomes an
UnparseableEvent, and an object whose "type" is absent or unrecognized
becomes an UnknownEvent. Field values are deliberately not validated; they
are relayed to other participants exactly as received.
"""

import json
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field

from .envelope import MISSING


class InboundEvent(BaseModel):
    """Base class for every parse outcome."""

    kind: ClassVar[str] = ""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


class JoinEvent(InboundEvent):
    """Participant announces a display name."""

    kind: ClassVar[str] = "join"

    username: Any = Field(default=MISSING)


class ChatEvent(InboundEvent):
    """Participant sends a chat message."""

    kind: ClassVar[str] = "chat"

    message: Any = Field(default=MISSING)


class TypingEvent(InboundEvent):
    """Participant started or stopped typing."""

    kind: ClassVar[str] = "typing"

    is_typing: Any = Field(default=MISSING, alias="isTyping")


class UnknownEvent(InboundEvent):
    """A JSON object whose type discriminator is absent or not recognized."""

    kind: ClassVar[str] = "unknown"

    type: Any = Field(default=MISSING)


class UnparseableEvent(InboundEvent):
    """A payload that could not be decoded into a JSON object."""

    kind: ClassVar[str] = "unparseable"

    reason: str
    detail: str = ""


RECOGNIZED_EVENTS: dict[str, type[InboundEvent]] = {
    JoinEvent.kind: JoinEvent,
    ChatEvent.kind: ChatEvent,
    TypingEvent.kind: TypingEvent,
}


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant {name!r}")


def parse_inbound_event(raw: str | bytes | bytearray) -> InboundEvent:
    """
    Parse one raw payload into an inbound event.

    Args:
        raw: Text frame, or binary frame holding UTF-8 text

    Returns:
        InboundEvent: One of JoinEvent, ChatEvent, TypingEvent, UnknownEvent
        or UnparseableEvent
    """
    if isinstance(raw, bytes | bytearray):
        try:
            raw = bytes(raw).decode("utf-8")
        except UnicodeDecodeError as e:
            return UnparseableEvent(reason="invalid_utf8", detail=str(e))

    try:
        data = json.loads(raw, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as e:
        return UnparseableEvent(reason="invalid_json", detail=str(e))

    if not isinstance(data, dict):
        return UnparseableEvent(reason="not_an_object", detail=type(data).__name__)

    event_type = data.get("type", MISSING)
    event_class = RECOGNIZED_EVENTS.get(event_type) if isinstance(event_type, str) else None
    if event_class is None:
        return UnknownEvent(type=event_type)

    return event_class.model_validate(data)
