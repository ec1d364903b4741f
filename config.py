"""Configuration management for URL shortener."""

from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Config(BaseSettings):
    """Application configuration."""

    # Database settings
    db_host: str = Field(
        default="localhost",
        description="PostgreSQL host"
    )

    db_port: int = Field(
        default=5432,
        description="PostgreSQL port"
    )

    db_user: str = Field(
        default="admin",
        description="PostgreSQL user"
    )

    db_password: str = Field(
        default="admin",
        description="PostgreSQL password"
    )

    db_name: str = Field(
        default="db",
        description="PostgreSQL database name"
    )

    db_pool_max_size: int = Field(
        default=10,
        ge=1,
        description="Maximum size of the connection pool"
    )

    db_command_timeout_seconds: int = Field(
        default=30,
        description="Per-statement timeout in seconds"
    )

    # Server settings
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind to"
    )

    port: int = Field(
        default=8080,
        description="Port to listen on"
    )

    # URL shortener settings
    base_url: str = Field(
        default="http://localhost:8080",
        description="Base URL for short links when the request carries no host"
    )

    path_prefix: str = Field(
        default="/go",
        description="Path prefix for short URLs (e.g., '/go' for /go/1a2b3c4d)"
    )

    max_key_attempts: int = Field(
        default=10,
        ge=1,
        description="Maximum insert attempts when allocating a new key"
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    log_file: Optional[str] = Field(
        default=None,
        description="Log file path (logs to stdout if not specified)"
    )

    log_json: bool = Field(
        default=False,
        description="Use JSON format for logs"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",  # Ignore extra environment variables
    }

    @property
    def dsn(self) -> str:
        """PostgreSQL connection URL."""
        return (
            f"postgresql://{self.db_user}:{self.db_password}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )

    def safe_dump(self) -> dict:
        """Configuration dump with the password masked, for logging."""
        data = self.model_dump()
        data["db_password"] = "***"
        return data


def load_config(**overrides) -> Config:
    """Load configuration from environment."""
    return Config(**overrides)
