"""Request and response models for the Quote/0 Open API."""

from enum import Enum, IntEnum
from typing import Any, ClassVar, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, StrictInt

from .errors import DeviceIDMissingError, ImagePayloadMissingError
from .utils import encode_base64, read_image_file


class BorderColor(IntEnum):
    """Screen edge color; sent on the wire as an integer."""

    WHITE = 0
    BLACK = 1


class DitherType(str, Enum):
    """Server-side dithering modes.

    When omitted, the server applies error diffusion with the Floyd-Steinberg
    kernel. NONE binarizes with a plain threshold, ORDERED applies a
    Bayer-like threshold matrix.
    """

    NONE = "NONE"
    DIFFUSION = "DIFFUSION"
    ORDERED = "ORDERED"


class DitherKernel(str, Enum):
    """Dithering kernels.

    Only meaningful when the dither type is DIFFUSION; the server ignores the
    kernel for ORDERED and NONE. The client passes it through regardless.
    """

    THRESHOLD = "THRESHOLD"
    ATKINSON = "ATKINSON"
    BURKES = "BURKES"
    FLOYD_STEINBERG = "FLOYD_STEINBERG"
    SIERRA2 = "SIERRA2"
    STUCKI = "STUCKI"
    JARVIS_JUDICE_NINKE = "JARVIS_JUDICE_NINKE"
    DIFFUSION_ROW = "DIFFUSION_ROW"
    DIFFUSION_COLUMN = "DIFFUSION_COLUMN"
    DIFFUSION_2D = "DIFFUSION_2D"


class _WireModel(BaseModel):
    """Base for request bodies; unset optionals vanish from the wire format."""

    model_config = ConfigDict(populate_by_name=True)

    # Keys kept on the wire even when empty
    WIRE_REQUIRED: ClassVar[Tuple[str, ...]] = ("deviceId",)

    def to_payload(self) -> Dict[str, Any]:
        """Serialize to the JSON-ready camelCase body sent to the server."""
        data = self.model_dump(mode="json", by_alias=True, exclude_none=True)
        return {
            key: value
            for key, value in data.items()
            if value != "" or key in self.WIRE_REQUIRED
        }


class TextRequest(_WireModel):
    """Body of ``POST /api/open/text``.

    The 296x152 screen has a fixed layout: title on the first line, message
    on the next three, a 40x40 icon bottom-left and the signature
    bottom-right. Any omitted field leaves its area blank; the layout does
    not reflow, so an empty request simply refreshes with blank content.
    """

    refresh_now: Optional[bool] = Field(None, alias="refreshNow", description="Refresh the display immediately")
    device_id: str = Field("", alias="deviceId", description="Device serial; empty uses the client default")
    title: Optional[str] = Field(None, description="First line")
    message: Optional[str] = Field(None, description="Next three lines")
    signature: Optional[str] = Field(None, description="Bottom-right corner")
    icon: Optional[str] = Field(None, description="Base64 40x40 PNG, bottom-left corner")
    link: Optional[str] = Field(None, description="URL opened from the companion app")

    def validate_request(self) -> None:
        """Only a device id is required."""
        if not self.device_id.strip():
            raise DeviceIDMissingError()


class ImageRequest(_WireModel):
    """Body of ``POST /api/open/image``.

    The image may be given as pre-encoded base64 text (``image``), raw PNG
    bytes (``image_bytes``) or a file path (``image_path``); see
    ``resolve_image`` for the precedence.
    """

    WIRE_REQUIRED: ClassVar[Tuple[str, ...]] = ("deviceId", "image")

    refresh_now: Optional[bool] = Field(None, alias="refreshNow", description="Refresh the display immediately")
    device_id: str = Field("", alias="deviceId", description="Device serial; empty uses the client default")
    image: str = Field("", description="Base64-encoded 296x152 PNG")
    image_bytes: Optional[bytes] = Field(None, exclude=True, description="Raw PNG bytes, encoded by the SDK")
    image_path: Optional[str] = Field(None, exclude=True, description="PNG file path, read and encoded by the SDK")
    link: Optional[str] = Field(None, description="URL opened from the companion app")
    border: Optional[BorderColor] = Field(None, description="Screen edge color")
    dither_type: Optional[DitherType] = Field(None, alias="ditherType", description="Server dithering mode")
    dither_kernel: Optional[DitherKernel] = Field(None, alias="ditherKernel", description="Diffusion kernel")

    def resolve_image(self) -> "ImageRequest":
        """Return a copy whose ``image`` field holds the encoded payload.

        Precedence: ``image`` > ``image_bytes`` > ``image_path``.

        Raises:
            ImageReadError: If ``image_path`` is used and cannot be read
        """
        if self.image.strip():
            return self
        if self.image_bytes:
            return self.model_copy(update={"image": encode_base64(self.image_bytes)})
        if self.image_path and self.image_path.strip():
            data = read_image_file(self.image_path.strip())
            return self.model_copy(update={"image": encode_base64(data)})
        return self

    def validate_request(self) -> None:
        """Require a device id and an encoded image."""
        if not self.device_id.strip():
            raise DeviceIDMissingError()
        if not self.image.strip():
            raise ImagePayloadMissingError()


class APIResponse(BaseModel):
    """Normalized success envelope.

    JSON replies fill ``code``/``message``/``result``; plain-text replies
    only set ``message``. ``status_code`` and ``raw_body`` are always set.
    """

    code: int = Field(0, description="Service status code (0 on success)")
    message: str = Field("", description="Service message, e.g. 'ok'")
    result: Any = Field(None, description="Endpoint-specific payload")
    status_code: int = Field(0, description="HTTP status code")
    raw_body: bytes = Field(b"", repr=False, description="Exact response bytes")


class ResponseEnvelope(BaseModel):
    """JSON body of a 2xx reply. Keys other than these three are ignored."""

    code: StrictInt = 0
    message: str = ""
    result: Any = None

    def to_response(self, status_code: int, raw_body: bytes) -> APIResponse:
        return APIResponse(
            code=self.code,
            message=self.message,
            result=self.result,
            status_code=status_code,
            raw_body=raw_body,
        )
