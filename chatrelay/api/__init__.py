"""
API module for the chat relay.

Provides the liveness endpoints and the WebSocket endpoint.
"""

from .monitoring import monitoring_router
from .real_time import realtime_router

__all__ = ["monitoring_router", "realtime_router"]
