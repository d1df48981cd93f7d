"""Quote/0 Open API client."""

import json
import logging
import threading
from typing import Optional, Union

import requests
from pydantic import ValidationError

from .constants import (
    DEFAULT_BASE_URL,
    DEFAULT_RATE_LIMIT_SECONDS,
    DEFAULT_TIMEOUT_SECONDS,
    IMAGE_ENDPOINT,
    MAX_RESPONSE_BODY_SIZE,
    RESPONSE_CHUNK_SIZE,
    TEXT_ENDPOINT,
)
from .errors import (
    ConfigurationError,
    DeviceIDMissingError,
    EncodeError,
    TransportError,
    build_api_error,
)
from .models import APIResponse, ImageRequest, ResponseEnvelope, TextRequest
from .rate_limit import FixedIntervalLimiter, RateLimiter
from .utils import build_default_user_agent

_DEFAULT_LIMITER = object()


class Quote0Client:
    """Client for the Quote/0 text and image APIs.

    A single instance may be shared by many threads. The only mutable state
    is the default device id (guarded by a lock) and the rate limiter's
    schedule (guarded inside the limiter).
    """

    def __init__(
        self,
        api_key: str,
        base_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        rate_limiter: Union[RateLimiter, None, object] = _DEFAULT_LIMITER,
        user_agent: Optional[str] = None,
        default_device_id: str = "",
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        """Initialize the Quote/0 client.

        Args:
            api_key: API token (format: dot_app_xxx)
            base_url: API host override; trailing slashes are stripped
            session: requests.Session to send through (default: a new one)
            rate_limiter: Limiter gating each request (default: 1 QPS);
                pass None to disable throttling
            user_agent: User-Agent header; None builds the SDK default and
                a blank string omits the header
            default_device_id: Device serial used when a request omits one
            timeout: Per-request transport timeout in seconds

        Raises:
            ConfigurationError: If api_key is empty
        """
        api_key = (api_key or "").strip()
        if not api_key:
            raise ConfigurationError("quote0: API token is required")

        if rate_limiter is _DEFAULT_LIMITER:
            rate_limiter = FixedIntervalLimiter(DEFAULT_RATE_LIMIT_SECONDS)

        self.api_key = api_key
        self.base_url = sanitize_base_url(base_url)
        self.session = session if session is not None else requests.Session()
        self.rate_limiter: Optional[RateLimiter] = rate_limiter
        self.user_agent = build_default_user_agent() if user_agent is None else user_agent
        self.timeout = timeout

        self._device_lock = threading.Lock()
        self._default_device = (default_device_id or "").strip()

        self.logger = logging.getLogger(__name__)
        self.logger.debug(f"Initialized Quote/0 client for {self.base_url}")

    @property
    def default_device_id(self) -> str:
        """Device serial used when a request omits its own."""
        with self._device_lock:
            return self._default_device

    @default_device_id.setter
    def default_device_id(self, device_id: str) -> None:
        with self._device_lock:
            self._default_device = (device_id or "").strip()

    def set_default_device_id(self, device_id: str) -> None:
        """Update the default device id in a thread-safe manner."""
        self.default_device_id = device_id

    def get_default_device_id(self) -> str:
        """Return the current default device id."""
        return self.default_device_id

    def headers(self) -> dict:
        """Headers sent with every request."""
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        user_agent = (self.user_agent or "").strip()
        if user_agent:
            headers["User-Agent"] = user_agent
        return headers

    # ------------------------------------------------------------------
    # Text
    # ------------------------------------------------------------------

    def send_text(
        self, request: TextRequest, cancel: Optional[threading.Event] = None
    ) -> APIResponse:
        """Send text content to a device.

        Args:
            request: Text payload; an empty device_id uses the client default
            cancel: Optional event that aborts the rate-limiter wait

        Returns:
            Normalized APIResponse

        Raises:
            DeviceIDMissingError: If no device id can be resolved
            RequestCancelledError: If cancel fires while throttled
            EncodeError: If the request cannot be serialized
            TransportError: On connection, timeout or read failures
            APIError: On any non-2xx response
        """
        device_id = self._resolve_device_id(request.device_id)
        request = request.model_copy(update={"device_id": device_id})
        request.validate_request()
        return self._post_json(TEXT_ENDPOINT, request, cancel)

    def send_text_to_device(
        self, device_id: str, request: TextRequest, cancel: Optional[threading.Event] = None
    ) -> APIResponse:
        """Send text content to a specific device."""
        return self.send_text(request.model_copy(update={"device_id": device_id}), cancel)

    def send_text_simple(self, title: str = "", message: str = "", signature: str = "") -> APIResponse:
        """Send title/message/signature to the default device with an immediate refresh."""
        return self.send_text(
            TextRequest(refresh_now=True, title=title, message=message, signature=signature)
        )

    # ------------------------------------------------------------------
    # Image
    # ------------------------------------------------------------------

    def send_image(
        self, request: ImageRequest, cancel: Optional[threading.Event] = None
    ) -> APIResponse:
        """Upload an image to a device.

        The payload is taken from ``image``, else ``image_bytes``, else
        ``image_path`` (read from disk), and base64-encoded as needed.

        Args:
            request: Image payload; an empty device_id uses the client default
            cancel: Optional event that aborts the rate-limiter wait

        Returns:
            Normalized APIResponse

        Raises:
            DeviceIDMissingError: If no device id can be resolved
            ImageReadError: If image_path cannot be read
            ImagePayloadMissingError: If no image source yields data
            RequestCancelledError: If cancel fires while throttled
            EncodeError: If the request cannot be serialized
            TransportError: On connection, timeout or read failures
            APIError: On any non-2xx response
        """
        device_id = self._resolve_device_id(request.device_id)
        request = request.model_copy(update={"device_id": device_id}).resolve_image()
        request.validate_request()
        return self._post_json(IMAGE_ENDPOINT, request, cancel)

    def send_image_to_device(
        self, device_id: str, request: ImageRequest, cancel: Optional[threading.Event] = None
    ) -> APIResponse:
        """Upload an image to a specific device."""
        return self.send_image(request.model_copy(update={"device_id": device_id}), cancel)

    def send_image_simple(self, base64_png: str) -> APIResponse:
        """Send a base64 PNG to the default device with an immediate refresh."""
        return self.send_image(ImageRequest(refresh_now=True, image=base64_png))

    def send_image_bytes(
        self,
        png: bytes,
        meta: Optional[ImageRequest] = None,
        cancel: Optional[threading.Event] = None,
    ) -> APIResponse:
        """Upload raw PNG bytes; base64 encoding is done internally."""
        meta = meta or ImageRequest()
        return self.send_image(meta.model_copy(update={"image": "", "image_bytes": png}), cancel)

    def send_image_file(
        self,
        path: str,
        meta: Optional[ImageRequest] = None,
        cancel: Optional[threading.Event] = None,
    ) -> APIResponse:
        """Upload a PNG file by path; reading and encoding are done internally."""
        meta = meta or ImageRequest()
        return self.send_image(
            meta.model_copy(update={"image": "", "image_bytes": None, "image_path": path}), cancel
        )

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _resolve_device_id(self, explicit: Optional[str]) -> str:
        """Pick the request's device id, falling back to the client default."""
        explicit = (explicit or "").strip()
        if explicit:
            return explicit
        device_id = self.default_device_id
        if not device_id:
            raise DeviceIDMissingError()
        return device_id

    def _post_json(
        self,
        endpoint: str,
        request: Union[TextRequest, ImageRequest],
        cancel: Optional[threading.Event],
    ) -> APIResponse:
        """Throttle, serialize, POST and normalize the response."""
        if self.rate_limiter is not None:
            self.rate_limiter.wait(cancel)

        try:
            body = json.dumps(request.to_payload(), ensure_ascii=False).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise EncodeError(f"quote0: encode request: {e}") from e

        url = self.base_url + endpoint
        self.logger.debug(f"POST {url} for device {request.device_id} ({len(body)} bytes)")

        try:
            response = self.session.post(
                url,
                data=body,
                headers=self.headers(),
                timeout=self.timeout,
                stream=True,
            )
        except requests.RequestException as e:
            raise TransportError(f"quote0: execute request: {e}") from e

        with response:
            try:
                raw = read_capped_body(response)
            except requests.RequestException as e:
                raise TransportError(f"quote0: read response: {e}") from e

        status = response.status_code
        self.logger.debug(f"Quote/0 responded with HTTP {status} ({len(raw)} bytes)")

        if not 200 <= status < 300:
            raise build_api_error(status, raw)

        return decode_success(status, response.headers.get("Content-Type", ""), raw)


def sanitize_base_url(base_url: Optional[str]) -> str:
    """Trim the base URL, drop trailing slashes and default when blank."""
    base_url = (base_url or "").strip()
    if not base_url:
        return DEFAULT_BASE_URL
    return base_url.rstrip("/")


def read_capped_body(response: requests.Response, limit: Optional[int] = None) -> bytes:
    """Read at most ``limit`` bytes (default MAX_RESPONSE_BODY_SIZE) of a streamed body."""
    if limit is None:
        limit = MAX_RESPONSE_BODY_SIZE
    buffer = bytearray()
    for chunk in response.iter_content(chunk_size=RESPONSE_CHUNK_SIZE):
        if not chunk:
            continue
        buffer.extend(chunk[: limit - len(buffer)])
        if len(buffer) >= limit:
            break
    return bytes(buffer)


def decode_success(status_code: int, content_type: str, raw: bytes) -> APIResponse:
    """Build an APIResponse from a 2xx reply.

    JSON is only attempted when the response declares a JSON content type;
    otherwise, or if decoding fails, the trimmed body becomes the message.
    """
    if not raw:
        return APIResponse(status_code=status_code, raw_body=raw)

    if "application/json" in (content_type or "").lower():
        try:
            envelope = ResponseEnvelope.model_validate_json(raw)
        except ValidationError:
            envelope = None
        if envelope is not None:
            return envelope.to_response(status_code, raw)

    return APIResponse(
        message=raw.decode("utf-8", errors="replace").strip(),
        status_code=status_code,
        raw_body=raw,
    )
