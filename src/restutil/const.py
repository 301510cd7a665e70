"""Constants for the restutil helpers."""

__version__ = "0.1.0"

HEADER_RATE_LIMIT_BUCKET = "X-RateLimit-Bucket"
HEADER_CALL_SENT = "X-CallSent-Timestamp"
HEADER_CALL_RECEIVED = "X-CallReceived-Timestamp"
HEADER_CALL_LENGTH = "X-CallLength-Milliseconds"

HTTP_TOO_MANY_REQUESTS = 429

RATE_LIMIT_DATA_FIELD = "data"

DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_CHARSET = "utf-8"
