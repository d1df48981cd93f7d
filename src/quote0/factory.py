"""Factory function for creating Quote/0 clients."""

import logging
from typing import TYPE_CHECKING, Optional

from .client import Quote0Client
from .constants import DEFAULT_RATE_LIMIT_SECONDS, DEFAULT_TIMEOUT_SECONDS
from .rate_limit import FixedIntervalLimiter

if TYPE_CHECKING:
    from ..config import Quote0Config


def create_quote0_client(
    api_token: Optional[str] = None,
    device_id: str = "",
    base_url: Optional[str] = None,
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    rate_limit_seconds: Optional[float] = DEFAULT_RATE_LIMIT_SECONDS,
    user_agent: Optional[str] = None,
    config: Optional["Quote0Config"] = None,
) -> Quote0Client:
    """Factory function to create a configured Quote0Client.

    All configuration is explicit - no environment variable reading.
    For environment-based configuration, use AppConfig.from_env() and pass
    config.quote0 to this function.

    Args:
        api_token: API token, required unless config is provided
        device_id: Default device serial
        base_url: API host override
        timeout_seconds: Transport timeout per request
        rate_limit_seconds: Minimum seconds between requests; None disables throttling
        user_agent: User-Agent override
        config: Quote0Config object (overrides other parameters if provided)

    Returns:
        Quote0Client instance

    Raises:
        ConfigurationError: If no API token is available

    Examples:
        >>> client = create_quote0_client(api_token="dot_app_xxx", device_id="ABCD1234")

        >>> from config import AppConfig
        >>> app_config = AppConfig.from_env()
        >>> client = create_quote0_client(config=app_config.quote0)
    """
    logger = logging.getLogger(__name__)

    if config is not None:
        api_token = config.api_token
        device_id = config.device_id or ""
        base_url = config.base_url
        timeout_seconds = config.timeout_seconds
        rate_limit_seconds = config.rate_limit_seconds
        user_agent = config.user_agent

    limiter = FixedIntervalLimiter(rate_limit_seconds) if rate_limit_seconds is not None else None
    if limiter is None:
        logger.warning("Rate limiting disabled for Quote/0 client")

    return Quote0Client(
        api_key=api_token or "",
        base_url=base_url,
        rate_limiter=limiter,
        user_agent=user_agent,
        default_device_id=device_id,
        timeout=timeout_seconds,
    )
