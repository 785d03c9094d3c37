"""
Real-time relay core: connection registry, event routing, session handlers
and broadcasting.
"""

from .connection_manager import ConnectionManager
from .connection_models import Connection, Session
from .connection_registry import ConnectionRegistry

__all__ = ["Connection", "ConnectionManager", "ConnectionRegistry", "Session"]
