"""Pytest configuration and fixtures for Quote/0 SDK tests."""

import io
import json
from typing import Union
from unittest.mock import Mock

import pytest
import requests

from src.config import AppConfig, Quote0Config
from src.quote0 import Quote0Client

# ============================================================================
# Helper Functions for Creating Test Objects
# ============================================================================


def make_response(
    status_code: int = 200,
    body: Union[bytes, str, dict, list] = b"",
    content_type: str = "application/json",
) -> requests.Response:
    """Build a real, streamable requests.Response backed by an in-memory body.

    Args:
        status_code: HTTP status code
        body: Raw bytes, text (UTF-8 encoded) or a JSON-serializable object
        content_type: Content-Type header value; None omits the header

    Returns:
        requests.Response ready to be returned from a mocked session
    """
    if isinstance(body, (dict, list)):
        body = json.dumps(body, ensure_ascii=False).encode("utf-8")
    elif isinstance(body, str):
        body = body.encode("utf-8")

    response = requests.Response()
    response.status_code = status_code
    response.raw = io.BytesIO(body)
    if content_type is not None:
        response.headers["Content-Type"] = content_type
    return response


def create_mock_session(status_code: int = 200, body=None, content_type: str = "application/json") -> Mock:
    """Create a mocked requests.Session whose post() returns a fresh response per call."""
    if body is None:
        body = {"code": 0, "message": "ok", "result": None}
    session = Mock(spec=requests.Session)
    session.post.side_effect = lambda *args, **kwargs: make_response(status_code, body, content_type)
    return session


def create_test_client(
    session: Mock = None,
    api_key: str = "dot_app_test",
    default_device_id: str = "DEVICE123",
    rate_limiter=None,
    **kwargs,
) -> Quote0Client:
    """Create a Quote0Client with throttling disabled and a mocked session."""
    return Quote0Client(
        api_key,
        session=session if session is not None else create_mock_session(),
        rate_limiter=rate_limiter,
        default_device_id=default_device_id,
        **kwargs,
    )


def sent_payload(session: Mock, call_index: int = -1) -> dict:
    """Decode the JSON body of a recorded session.post call."""
    call = session.post.call_args_list[call_index]
    return json.loads(call.kwargs["data"].decode("utf-8"))


def create_test_app_config(
    api_token: str = "dot_app_test",
    device_id: str = "DEVICE123",
    log_level: str = "WARNING",
    **quote0_kwargs,
) -> AppConfig:
    """Create an AppConfig for testing with sensible defaults."""
    return AppConfig(
        quote0=Quote0Config(api_token=api_token, device_id=device_id, **quote0_kwargs),
        log_level=log_level,
    )


# ============================================================================
# Pytest Fixtures
# ============================================================================


@pytest.fixture
def mock_session():
    """Fixture providing a session that answers with a JSON success envelope."""
    return create_mock_session()


@pytest.fixture
def client(mock_session):
    """Fixture providing an unthrottled client bound to mock_session."""
    return create_test_client(session=mock_session)


@pytest.fixture
def png_bytes():
    """Fixture providing a small PNG-like payload."""
    return b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x01(\x00\x00\x00\x98"


@pytest.fixture
def test_app_config():
    """Fixture providing a standard AppConfig for testing."""
    return create_test_app_config()
