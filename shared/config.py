"""
Shared configuration management for the NeverBounce client.
"""

from pydantic import Field, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from shared.errors import ConfigurationError

API_BASE_URL = "https://api.neverbounce.com/v3"

LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


class NeverBounceSettings(BaseSettings):
    """Client configuration loaded from NEVERBOUNCE_* variables or .env."""

    model_config = SettingsConfigDict(
        env_prefix="NEVERBOUNCE_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    env: str = Field(default="local")
    log_level: str = Field(default="info")

    # Credentials
    api_username: str = Field(default="")
    api_key: SecretStr = Field(default=SecretStr(""))

    # Service
    base_url: str = Field(default=API_BASE_URL)
    timeout: float = Field(default=10.0, gt=0)

    @field_validator("log_level", mode="before")
    @classmethod
    def check_log_level(cls, value):
        level = str(value).strip().lower()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level


def get_settings(**overrides) -> NeverBounceSettings:
    """Get client configuration, with explicit overrides taking precedence.

    Invalid values from any source raise ConfigurationError naming the fields.
    """
    try:
        return NeverBounceSettings(**overrides)
    except ValidationError as e:
        invalid = sorted({str(err["loc"][0]) for err in e.errors() if err.get("loc")})
        raise ConfigurationError(
            f"Invalid configuration: {', '.join(invalid) or 'unknown field'}",
            invalid=invalid,
            error=str(e)
        ) from e
