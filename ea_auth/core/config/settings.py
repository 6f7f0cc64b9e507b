"""Application settings with Pydantic validation."""

from pathlib import Path
from typing import Any, Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ea_auth.constants import HttpConfig


class EASettings(BaseSettings):
    """Application settings with validation and environment variable support."""

    # Account storage
    accounts_file: Path = Field(
        default=Path("config/accounts.yaml"),
        description="YAML file holding the ordered account list (first entry is the default)",
    )

    # HTTP
    request_timeout: int = Field(
        default=HttpConfig.DEFAULT_TIMEOUT_SECONDS,
        ge=1,
        le=300,
        description="Total timeout for each request to an EA endpoint, in seconds",
    )

    # Environment
    env: str = Field(
        default="production", description="Environment (production, development, testing)"
    )

    # Logging
    log_level: str = Field(
        default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    log_json: bool = Field(default=False, description="Also write JSON logs to logs/")

    model_config = SettingsConfigDict(
        env_prefix="EA_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @model_validator(mode="before")
    @classmethod
    def default_env_for_pytest(cls, data: Any) -> Any:
        """Auto-detect testing environment when running under pytest."""
        import sys

        if not isinstance(data, dict):
            return data

        if ("env" not in data or not data.get("env")) and "pytest" in sys.modules:
            data["env"] = "testing"

        return data

    @field_validator("env")
    @classmethod
    def validate_env(cls, v: str) -> str:
        """Validate environment value."""
        allowed = ["production", "development", "testing", "staging"]
        if v.lower() not in allowed:
            raise ValueError(f'EA_ENV must be one of: {", ".join(allowed)}')
        return v.lower()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in allowed:
            raise ValueError(f'EA_LOG_LEVEL must be one of: {", ".join(allowed)}')
        return v_upper

    @property
    def is_development(self) -> bool:
        """Whether debug-only features (traceback variable dumps) may be enabled."""
        return self.env in ("development", "testing")


_settings: Optional[EASettings] = None


def get_settings() -> EASettings:
    """
    Get the process-wide settings instance, creating it on first use.

    Returns:
        Cached EASettings
    """
    global _settings
    if _settings is None:
        _settings = EASettings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings (used by tests)."""
    global _settings
    _settings = None
