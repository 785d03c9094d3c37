"""
Pydantic-based configuration models for the chat relay server.

Every setting is read from the environment (and an optional .env file)
through pydantic-settings, validated once, and exposed as typed attributes.
"""

from typing import Any

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings

from ..structured_logging.enhanced_logging_config import get_logger

logger = get_logger(__name__)


class ServerConfig(BaseSettings):
    """Server network configuration."""

    host: str = Field(
        default="0.0.0.0",
        validation_alias=AliasChoices("HOST", "SERVER_HOST"),
        description="Server bind address",
    )
    port: int = Field(
        default=8000,
        validation_alias=AliasChoices("PORT", "SERVER_PORT"),
        description="Listening port for HTTP and WebSocket traffic",
    )

    @field_validator("port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Validate port is in valid range."""
        if not 1 <= v <= 65535:
            logger.error("Invalid server port", port=v, valid_range="1-65535")
            raise ValueError("Port must be between 1 and 65535")
        return v

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
        "populate_by_name": True,
    }


class LoggingConfig(BaseSettings):
    """Logging configuration."""

    environment: str = Field(default="local", description="Logging environment")
    level: str = Field(default="INFO", description="Log level")
    format: str = Field(default="human", description="Log format")
    disable_logging: bool = Field(default=False, description="Disable all logging")

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate logging environment."""
        valid_environments = ["local", "unit_test", "e2e_test", "production"]
        if v not in valid_environments:
            logger.error("Invalid logging environment", environment=v, valid_environments=valid_environments)
            raise ValueError(f"Environment must be one of {valid_environments}, got '{v}'")
        return v

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}, got '{v}'")
        return v_upper

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        """Validate log format."""
        valid_formats = ["json", "human", "colored"]
        if v not in valid_formats:
            raise ValueError(f"Log format must be one of {valid_formats}, got '{v}'")
        return v

    model_config = {
        "env_prefix": "LOGGING_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    def to_legacy_dict(self) -> dict[str, Any]:
        """Return the dict shape consumed by setup_enhanced_logging()."""
        return {
            "environment": self.environment,
            "level": self.level,
            "format": self.format,
            "disable_logging": self.disable_logging,
        }


class AppConfig(BaseSettings):
    """
    Composite application configuration.

    Aggregates the per-concern settings. Access via get_config().
    """

    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "case_sensitive": False, "extra": "ignore"}

    def to_legacy_dict(self) -> dict[str, Any]:
        """Flatten into the dict format used by the logging setup."""
        return {
            "host": self.server.host,
            "port": self.server.port,
            "logging": self.logging.to_legacy_dict(),
        }
