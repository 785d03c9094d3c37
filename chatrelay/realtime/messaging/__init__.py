"""
Messaging components for connection management.

This package provides single-connection delivery and registry-wide
broadcasting for real-time communication.
"""

from .message_broadcaster import MessageBroadcaster
from .personal_message_sender import PersonalMessageSender

__all__ = ["MessageBroadcaster", "PersonalMessageSender"]
