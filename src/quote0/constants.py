"""Quote/0 API constants shared across the SDK."""

# Official API host; endpoints live under /api/open/*
DEFAULT_BASE_URL = "https://dot.mindreset.tech"

TEXT_ENDPOINT = "/api/open/text"
IMAGE_ENDPOINT = "/api/open/image"

# User-Agent product token
USER_AGENT_PRODUCT = "quote0-python-sdk"
USER_AGENT_VERSION = "1.0"
PROJECT_URL = "https://github.com/1set/quote0"

DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_RATE_LIMIT_SECONDS = 1.0  # documented 1 QPS

# Hard cap on response bytes read from the server (4 MiB)
MAX_RESPONSE_BODY_SIZE = 4 << 20
RESPONSE_CHUNK_SIZE = 64 * 1024
