"""
Chat relay server - main application entry point.

Loads configuration, sets up structured logging before any request is
served, and exposes the ASGI application as `app` for uvicorn.
"""

from .app.factory import create_app
from .config import get_config
from .structured_logging.enhanced_logging_config import get_logger, setup_enhanced_logging

config = get_config()
setup_enhanced_logging(config.to_legacy_dict())

logger = get_logger(__name__)
logger.info("Logging setup completed", environment=config.logging.environment)

app = create_app()
