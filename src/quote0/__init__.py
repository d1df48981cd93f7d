"""Quote/0 client library for the text and image Open APIs.

Quote/0 is a Wi-Fi e-ink display with a 296x152 screen that receives
content updates over REST. This package provides bearer-token
authentication, a default device id with per-request override, pluggable
1 QPS rate limiting, and normalized handling of JSON and plain-text
responses.
"""

from .client import Quote0Client
from .constants import DEFAULT_BASE_URL, IMAGE_ENDPOINT, MAX_RESPONSE_BODY_SIZE, TEXT_ENDPOINT
from .errors import (
    APIError,
    ConfigurationError,
    DeviceIDMissingError,
    EncodeError,
    ImagePayloadMissingError,
    ImageReadError,
    Quote0Error,
    RequestCancelledError,
    RequestValidationError,
    TransportError,
    build_api_error,
    is_auth_error,
    is_rate_limit_error,
)
from .factory import create_quote0_client
from .models import APIResponse, BorderColor, DitherKernel, DitherType, ImageRequest, TextRequest
from .rate_limit import FixedIntervalLimiter, RateLimiter, RateLimiterFunc

__all__ = [
    # Client
    "Quote0Client",
    "create_quote0_client",
    # Models
    "TextRequest",
    "ImageRequest",
    "APIResponse",
    "BorderColor",
    "DitherType",
    "DitherKernel",
    # Rate limiting
    "RateLimiter",
    "RateLimiterFunc",
    "FixedIntervalLimiter",
    # Errors
    "Quote0Error",
    "ConfigurationError",
    "RequestValidationError",
    "DeviceIDMissingError",
    "ImagePayloadMissingError",
    "ImageReadError",
    "EncodeError",
    "TransportError",
    "RequestCancelledError",
    "APIError",
    "build_api_error",
    "is_rate_limit_error",
    "is_auth_error",
    # Constants
    "DEFAULT_BASE_URL",
    "TEXT_ENDPOINT",
    "IMAGE_ENDPOINT",
    "MAX_RESPONSE_BODY_SIZE",
]
