"""Exception taxonomy and error-response normalization for the Quote/0 SDK."""

import json
from typing import Any, Dict, Optional


class Quote0Error(Exception):
    """Base exception for the library.

    Every failure raised by the SDK inherits from this class so callers can
    catch ``Quote0Error`` to handle any library-specific failure.
    """
    pass


class ConfigurationError(Quote0Error, ValueError):
    """The client was constructed with invalid settings (e.g. an empty token)."""
    pass


class RequestValidationError(Quote0Error):
    """The request was rejected locally, before any network activity."""
    pass


class DeviceIDMissingError(RequestValidationError):
    """Neither the request nor the client carries a device id."""

    def __init__(self, message: str = "quote0: deviceId is required"):
        super().__init__(message)


class ImagePayloadMissingError(RequestValidationError):
    """The image request resolved to an empty payload."""

    def __init__(self, message: str = "quote0: image payload is required"):
        super().__init__(message)


class ImageReadError(RequestValidationError):
    """The image file could not be read."""
    pass


class EncodeError(RequestValidationError):
    """The request could not be serialized to JSON."""
    pass


class TransportError(Quote0Error):
    """Errors related to the transport layer.

    This includes problems such as:
      - Invalid request URL
      - Connection failures
      - Request timeouts
      - Failures while reading the response body

    The underlying ``requests`` exception is chained as ``__cause__``.
    """
    pass


class RequestCancelledError(Quote0Error):
    """The caller's cancellation signal fired while waiting on the rate limiter."""

    def __init__(self, message: str = "quote0: request cancelled"):
        super().__init__(message)


class APIError(Quote0Error):
    """A non-2xx response from the Quote/0 service.

    The service may answer with a JSON object or with plain text (frequently
    Chinese); both are normalized into this shape by ``build_api_error``.

    Attributes:
        status_code: HTTP status code of the response
        code: Normalized server error code, or "" when absent (e.g. "429")
        message: Human-readable message from the server or the raw body text
        raw_body: Original response bytes, kept for debugging
    """

    def __init__(self, status_code: int, message: str = "", code: str = "", raw_body: bytes = b""):
        self.status_code = status_code
        self.code = code
        self.message = message
        self.raw_body = raw_body
        super().__init__(self._format())

    def _format(self) -> str:
        text = f"quote0: API error (status={self.status_code}"
        if self.code:
            text += f", code={self.code}"
        text += ")"
        message = self.message.strip()
        if message:
            text += f": {message}"
        return text

    def __str__(self) -> str:
        return self._format()

    @property
    def is_rate_limited(self) -> bool:
        """True for HTTP 429 Too Many Requests."""
        return self.status_code == 429

    @property
    def is_auth_error(self) -> bool:
        """True for HTTP 401/403 authentication or authorization failures."""
        return self.status_code in (401, 403)


def is_rate_limit_error(error: BaseException) -> bool:
    """Return True if error is an APIError with HTTP status 429."""
    return isinstance(error, APIError) and error.is_rate_limited


def is_auth_error(error: BaseException) -> bool:
    """Return True if error is an APIError with HTTP status 401 or 403."""
    return isinstance(error, APIError) and error.is_auth_error


def build_api_error(status_code: int, body: bytes) -> APIError:
    """Normalize a non-2xx response body into an APIError.

    JSON objects contribute ``message`` (falling back to ``error``) and
    ``code``; anything else becomes the message as trimmed text.

    Args:
        status_code: HTTP status code of the response
        body: Raw response bytes

    Returns:
        APIError carrying the status code, raw bytes and extracted fields
    """
    trimmed = body.decode("utf-8", errors="replace").strip()
    error = APIError(status_code=status_code, message=trimmed, raw_body=body)

    if _looks_like_json_object(trimmed):
        obj = _try_parse_json(trimmed)
        if obj is not None:
            _extract_error_fields(error, obj, trimmed)

    return error


def _looks_like_json_object(text: str) -> bool:
    return text.startswith("{") and text.endswith("}")


def _try_parse_json(text: str) -> Optional[Dict[str, Any]]:
    """Parse text as a JSON object, returning None on any failure."""
    try:
        obj = json.loads(text)
    except ValueError:
        return None
    return obj if isinstance(obj, dict) else None


def _extract_error_fields(error: APIError, obj: Dict[str, Any], fallback: str) -> None:
    message = obj.get("message")
    alternate = obj.get("error")
    if isinstance(message, str) and message:
        error.message = message
    elif isinstance(alternate, str) and alternate:
        error.message = alternate
    else:
        error.message = fallback

    if "code" in obj:
        error.code = format_code(obj["code"])


def format_code(value: Any) -> str:
    """Render a JSON ``code`` field (string or number) as a string."""
    # bool is an int subclass but never a meaningful code
    if isinstance(value, bool):
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (int, float)):
        return str(int(value))
    return ""
