"""Utility functions for Quote/0 client operations."""

import base64
import platform
import socket
from datetime import datetime
from typing import Optional

from .constants import PROJECT_URL, USER_AGENT_PRODUCT, USER_AGENT_VERSION
from .errors import ImageReadError


def encode_base64(data: bytes) -> str:
    """Encode raw bytes with standard (padded) base64."""
    return base64.b64encode(data).decode("ascii")


def read_image_file(path: str) -> bytes:
    """Read an image file from disk.

    Args:
        path: Path to the PNG file

    Returns:
        Raw file bytes

    Raises:
        ImageReadError: If the file cannot be read
    """
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as e:
        raise ImageReadError(f"quote0: read image file: {e}") from e


def build_default_user_agent() -> str:
    """Build the SDK's default User-Agent string.

    Examples:
        >>> build_default_user_agent()
        'quote0-python-sdk/1.0 (+https://github.com/1set/quote0; Python3.12.1; linux/x86_64)'
    """
    system = platform.system().lower() or "unknown"
    machine = platform.machine().lower() or "unknown"
    return (
        f"{USER_AGENT_PRODUCT}/{USER_AGENT_VERSION} "
        f"(+{PROJECT_URL}; Python{platform.python_version()}; {system}/{machine})"
    )


def auto_signature(now: Optional[datetime] = None, hostname: Optional[str] = None) -> str:
    """Build a ``hostname@MM-DD HH:MM:SS`` signature for the display."""
    now = now or datetime.now()
    hostname = hostname or socket.gethostname() or "localhost"
    return f"{hostname}@{now:%m-%d %H:%M:%S}"
