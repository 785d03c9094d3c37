"""
Structlog-based logging configuration for the chat relay server.

structlog is layered over the standard library logging module so that
uvicorn, starlette and our own modules all end up on the same root handler,
rendered as JSON, key/value pairs or a colored console line depending on
the configured format.
"""

import json
import logging
import sys
from typing import Any

import structlog
from structlog.contextvars import merge_contextvars
from structlog.stdlib import BoundLogger, LoggerFactory

# Infrastructure code may use structlog.get_logger() directly; everything else
# goes through get_logger() below.
logger = structlog.get_logger(__name__)


class _LoggingState:  # pylint: disable=too-few-public-methods  # Reason: State container, no behaviour
    """State container for logging initialization to avoid global statements."""

    initialized: bool = False
    signature: str | None = None


_logging_state = _LoggingState()


def _select_renderer(log_format: str) -> Any:
    """Return the final structlog processor for the requested format."""
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    if log_format == "colored":
        return structlog.dev.ConsoleRenderer(colors=True)
    return structlog.processors.KeyValueRenderer(key_order=["timestamp", "level", "logger", "event"])


def configure_enhanced_structlog(
    environment: str = "local",
    log_level: str = "INFO",
    log_format: str = "human",
    disable_logging: bool = False,
) -> None:
    """
    Configure structlog and the stdlib root logger.

    Args:
        environment: Environment name, bound into every entry
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: One of "json", "human" or "colored"
        disable_logging: When True, only CRITICAL entries are emitted
    """
    level = logging.CRITICAL if disable_logging else getattr(logging, log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    def add_environment(_logger: Any, _name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.setdefault("environment", environment)
        return event_dict

    processors = [
        merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        add_environment,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        _select_renderer(log_format),
    ]

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=LoggerFactory(),
        wrapper_class=BoundLogger,
        cache_logger_on_first_use=False,
    )


def setup_enhanced_logging(config: dict[str, Any], *, force_reconfigure: bool = False) -> None:
    """
    Set up logging from the server configuration dictionary.

    Repeated calls are ignored unless force_reconfigure is set, so importing
    the application module more than once does not stack handlers.

    Args:
        config: Server configuration dictionary (AppConfig.to_legacy_dict())
        force_reconfigure: When True, rebuild handlers even if already configured
    """
    config_signature = json.dumps(config, sort_keys=True, default=str)

    if _logging_state.initialized and not force_reconfigure:
        get_logger("chatrelay.structured_logging.setup").debug(
            "setup_enhanced_logging skipped; logging system already initialized",
            config_signature=_logging_state.signature,
        )
        return

    logging_config = config.get("logging", {})
    environment = logging_config.get("environment", "local")
    log_level = logging_config.get("level", "INFO")
    log_format = logging_config.get("format", "human")
    disable_logging = logging_config.get("disable_logging", False)

    configure_enhanced_structlog(environment, log_level, log_format, disable_logging)
    _configure_uvicorn_logging()

    get_logger("chatrelay.structured_logging.enhanced").info(
        "Logging system initialized",
        environment=environment,
        log_level=log_level,
        log_format=log_format,
    )

    _logging_state.initialized = True
    _logging_state.signature = config_signature


def _configure_uvicorn_logging() -> None:
    """Route uvicorn's loggers through the root handler."""
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers = []
        uvicorn_logger.propagate = True


def get_logger(name: str) -> Any:  # Returns BoundLogger but typed as Any for flexibility
    """
    Get a structlog logger with the specified name.

    This is the public API for obtaining loggers. Application code should use
    this function rather than calling structlog.get_logger() directly.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def log_exception_once(
    bound_logger: BoundLogger,
    level: str,
    message: str,
    *,
    exc: Exception | None = None,
    mark_logged: bool = True,
    **kwargs: Any,
) -> None:
    """
    Log an exception once, respecting exceptions that have already been logged.

    Args:
        bound_logger: Structlog bound logger instance.
        level: Logging level to use (for example, "error" or "warning").
        message: Log message to emit.
        exc: Optional exception to include in the log entry.
        mark_logged: When True, mark the exception as logged to prevent duplicates.
        **kwargs: Additional key-value pairs for structured logging.
    """
    if exc is not None:
        if getattr(exc, "already_logged", False) or getattr(exc, "_already_logged", False):
            return
        kwargs.setdefault("error_type", type(exc).__name__)
        kwargs.setdefault("error", str(exc))
        context = getattr(exc, "context", None)
        if isinstance(context, dict):
            for key, value in context.items():
                kwargs.setdefault(key, value)

    log_method = getattr(bound_logger, level.lower(), bound_logger.error)
    log_method(message, **kwargs)

    if exc is not None and mark_logged:
        marker = getattr(exc, "mark_logged", None)
        if callable(marker):
            marker()  # pylint: disable=not-callable  # Reason: callable() check above
        else:
            setattr(exc, "_already_logged", True)
