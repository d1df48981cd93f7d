"""Configuration models using Pydantic for type safety and validation."""

import os
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from .quote0.constants import DEFAULT_BASE_URL, DEFAULT_RATE_LIMIT_SECONDS, DEFAULT_TIMEOUT_SECONDS

TOKEN_ENV_VAR = "QUOTE0_TOKEN"
DEVICE_ENV_VAR = "QUOTE0_DEVICE"


class Quote0Config(BaseModel):
    """Quote/0 API configuration."""

    api_token: str = Field(..., description="Quote/0 API token (dot_app_xxx)")
    device_id: Optional[str] = Field(None, description="Default device serial")
    base_url: str = Field(DEFAULT_BASE_URL, description="API host")
    timeout_seconds: float = Field(DEFAULT_TIMEOUT_SECONDS, gt=0, description="Per-request transport timeout")
    rate_limit_seconds: Optional[float] = Field(
        DEFAULT_RATE_LIMIT_SECONDS, gt=0, description="Minimum seconds between requests (None disables)"
    )
    user_agent: Optional[str] = Field(None, description="User-Agent override (SDK default if unset)")

    @field_validator('api_token')
    @classmethod
    def validate_api_token(cls, v: str) -> str:
        """Validate that the API token is not blank."""
        v = v.strip()
        if not v:
            raise ValueError(f"API token is required (set {TOKEN_ENV_VAR})")
        return v

    @field_validator('device_id')
    @classmethod
    def validate_device_id(cls, v: Optional[str]) -> Optional[str]:
        """Normalize blank device ids to None."""
        if v is None:
            return None
        return v.strip() or None


class AppConfig(BaseModel):
    """Main application configuration."""

    quote0: Quote0Config = Field(..., description="Quote/0 configuration")
    log_level: str = Field("WARNING", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)")

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a valid Python logging level."""
        valid_levels = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}
        v_upper = v.upper().strip()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log_level: '{v}'. Valid options: {', '.join(sorted(valid_levels))}")
        return v_upper

    @classmethod
    def from_env(
        cls,
        api_token: Optional[str] = None,
        device_id: Optional[str] = None,
        log_level: str = "WARNING",
        **quote0_overrides: Any,
    ) -> 'AppConfig':
        """Load configuration from environment variables.

        Only the token and device serial are read from the environment
        (after loading any .env file); explicit arguments take precedence.

        Args:
            api_token: Token override for QUOTE0_TOKEN
            device_id: Device override for QUOTE0_DEVICE
            log_level: Logging level name
            **quote0_overrides: Extra Quote0Config fields (base_url, timeout_seconds, ...)
        """
        load_dotenv()

        quote0_config = Quote0Config(
            api_token=api_token or os.getenv(TOKEN_ENV_VAR, ""),
            device_id=device_id or os.getenv(DEVICE_ENV_VAR),
            **quote0_overrides,
        )

        return cls(quote0=quote0_config, log_level=log_level)
