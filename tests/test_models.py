"""Tests for request models and their wire serialization."""

import base64

import pytest
from pydantic import ValidationError

from src.quote0 import (
    BorderColor,
    DeviceIDMissingError,
    DitherKernel,
    DitherType,
    ImagePayloadMissingError,
    ImageRequest,
    TextRequest,
)


class TestTextRequest:
    """Test TextRequest validation and serialization."""

    def test_accepts_wire_aliases(self):
        """Test camelCase aliases populate snake_case fields."""
        request = TextRequest(refreshNow=True, deviceId="ABC")

        assert request.refresh_now is True
        assert request.device_id == "ABC"

    def test_false_refresh_is_kept(self):
        """Test an explicit False is sent rather than omitted."""
        payload = TextRequest(refresh_now=False, device_id="ABC").to_payload()
        assert payload == {"refreshNow": False, "deviceId": "ABC"}

    def test_device_id_always_present(self):
        """Test deviceId stays on the wire even when empty."""
        assert TextRequest().to_payload() == {"deviceId": ""}

    def test_validate_requires_device(self):
        """Test validation fails only on a blank device id."""
        with pytest.raises(DeviceIDMissingError):
            TextRequest(device_id="  ").validate_request()

        TextRequest(device_id="ABC").validate_request()


class TestImageRequest:
    """Test ImageRequest resolution, validation and serialization."""

    def test_resolve_keeps_existing_image(self):
        """Test an explicit image is returned unchanged."""
        request = ImageRequest(image="QUJD", image_bytes=b"ignored")
        assert request.resolve_image() is request

    def test_resolve_encodes_bytes_without_mutating(self):
        """Test bytes are encoded onto a copy."""
        request = ImageRequest(image_bytes=b"ABC")
        resolved = request.resolve_image()

        assert resolved.image == base64.b64encode(b"ABC").decode("ascii")
        assert request.image == ""

    def test_resolve_reads_trimmed_path(self, tmp_path):
        """Test file paths are trimmed before reading."""
        path = tmp_path / "img.png"
        path.write_bytes(b"PNGDATA")

        resolved = ImageRequest(image_path=f"  {path}  ").resolve_image()

        assert resolved.image == base64.b64encode(b"PNGDATA").decode("ascii")

    def test_resolve_without_source_leaves_empty(self):
        """Test nothing to resolve yields an empty image."""
        assert ImageRequest(image_path="   ").resolve_image().image == ""

    def test_validate_order(self):
        """Test the device id is checked before the payload."""
        with pytest.raises(DeviceIDMissingError):
            ImageRequest().validate_request()
        with pytest.raises(ImagePayloadMissingError):
            ImageRequest(device_id="ABC", image="  ").validate_request()

    def test_local_sources_never_serialized(self, tmp_path):
        """Test image_bytes and image_path stay off the wire."""
        payload = ImageRequest(device_id="ABC", image="QUJD", image_bytes=b"x",
                               image_path=str(tmp_path)).to_payload()

        assert payload == {"deviceId": "ABC", "image": "QUJD"}

    def test_white_border_sent_when_set(self):
        """Test an explicitly chosen white border is serialized as 0."""
        payload = ImageRequest(device_id="ABC", image="QUJD", border=BorderColor.WHITE).to_payload()
        assert payload["border"] == 0

    def test_enum_values_accepted(self):
        """Test enum fields accept their wire strings."""
        request = ImageRequest(ditherType="ORDERED", ditherKernel="THRESHOLD", border=1)

        assert request.dither_type is DitherType.ORDERED
        assert request.dither_kernel is DitherKernel.THRESHOLD
        assert request.border is BorderColor.BLACK

    def test_unknown_dither_type_rejected(self):
        """Test values outside the enums fail model validation."""
        with pytest.raises(ValidationError):
            ImageRequest(dither_type="SPIRAL")


class TestEnums:
    """Test enum members match the server's vocabulary."""

    def test_dither_types(self):
        """Test all dither types."""
        assert {d.value for d in DitherType} == {"NONE", "DIFFUSION", "ORDERED"}

    def test_dither_kernels(self):
        """Test all dither kernels."""
        assert len(DitherKernel) == 10
        assert DitherKernel.FLOYD_STEINBERG.value == "FLOYD_STEINBERG"
        assert DitherKernel.JARVIS_JUDICE_NINKE.value == "JARVIS_JUDICE_NINKE"

    def test_border_colors(self):
        """Test border colors are integers."""
        assert int(BorderColor.WHITE) == 0
        assert int(BorderColor.BLACK) == 1
