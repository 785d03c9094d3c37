"""FastAPI application assembly for the chat relay."""

from .factory import create_app

__all__ = ["create_app"]
