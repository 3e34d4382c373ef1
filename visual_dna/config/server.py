"""HTTP API defaults."""

DEFAULT_API_HOST = "127.0.0.1"
DEFAULT_API_PORT = 8040
API_VERSION = "1.0.0"
