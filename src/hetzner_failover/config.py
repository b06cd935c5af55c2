"""Pydantic configuration models for the failover tool.

Uses pydantic-settings for environment variable loading
with validation and type coercion.
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://robot-ws.your-server.de"


def _default_user_credentials_file() -> Path:
    return Path.home() / ".hetzner.rc"


class FailoverSettings(BaseSettings):
    """Main application settings.

    Settings can be provided via:
    - Environment variables (prefixed with HETZNER_)
    - .env file in the working directory
    - Direct instantiation
    """

    model_config = SettingsConfigDict(
        env_prefix="HETZNER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API settings
    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="Robot webservice base URL",
    )
    timeout: float = Field(
        default=30.0,
        ge=1,
        le=300,
        description="HTTP request timeout in seconds",
    )

    # Credentials files, tried in order
    user_credentials_file: Path = Field(
        default_factory=_default_user_credentials_file,
        description="Per-user credentials file",
    )
    system_credentials_file: Path = Field(
        default=Path("/etc/hetzner-api.conf"),
        description="System-wide credentials file",
    )

    # Logging
    log_level: str = Field(
        default="WARNING",
        description="Logging level",
    )

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Base URL must be http(s): {v}")
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return upper

    def credential_paths(self) -> list[Path]:
        """Credentials files in lookup order."""
        return [self.user_credentials_file, self.system_credentials_file]


def get_settings() -> FailoverSettings:
    """Get application settings."""
    return FailoverSettings()
