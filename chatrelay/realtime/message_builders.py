"""
Builders for the outbound message kinds of the chat protocol.

| type       | fields                                   |
|------------|------------------------------------------|
| system     | message, timestamp, clientId (welcome)   |
| joined     | username, timestamp                      |
| chat       | username, message, timestamp, clientId   |
| typing     | username, isTyping, timestamp            |
| user_count | count, timestamp                         |
"""

import json
from typing import Any

from .envelope import MISSING, build_event

WELCOME_MESSAGE = "Connected to chat server"
ANONYMOUS_USERNAME = "Anonymous"


def build_system_message(message: str, client_id: str = MISSING) -> dict[str, Any]:
    """Build a system notice; client_id is only set on the welcome message."""
    return build_event("system", message=message, clientId=client_id)


def build_welcome_message(client_id: str) -> dict[str, Any]:
    return build_system_message(WELCOME_MESSAGE, client_id=client_id)


def display_name(value: Any) -> str:
    """
    Render a username relayed from a client as notice text.

    Usernames are not validated, so any JSON value can arrive here. Non-string
    values are rendered with JSON spelling rather than Python's: true, null,
    1 rather than 1.0. Arrays are joined with commas and objects
    rendered as compact JSON.
    """
    if isinstance(value, str):
        return value
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    if isinstance(value, int | float):
        return repr(value)
    if isinstance(value, list):
        return ",".join("" if item is None else display_name(item) for item in value)
    if isinstance(value, dict):
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    return str(value)


def build_user_joined_message(username: Any) -> dict[str, Any]:
    return build_system_message(f"{display_name(username)} joined the chat")


def build_user_left_message(username: Any) -> dict[str, Any]:
    return build_system_message(f"{display_name(username)} left the chat")


def build_joined_message(username: Any) -> dict[str, Any]:
    """Build the join confirmation sent back to the joining connection only."""
    return build_event("joined", username=username)


def build_chat_message(username: Any, message: Any, client_id: str) -> dict[str, Any]:
    """
    Build a chat message.

    Args:
        username: Resolved display name of the sender
        message: Message body exactly as received (MISSING if it was absent)
        client_id: Session id of the sender

    Returns:
        dict: The chat event
    """
    return build_event("chat", username=username, message=message, clientId=client_id)


def build_typing_message(username: Any, is_typing: Any) -> dict[str, Any]:
    return build_event("typing", username=username, isTyping=is_typing)


def build_user_count_message(count: int) -> dict[str, Any]:
    return build_event("user_count", count=count)
