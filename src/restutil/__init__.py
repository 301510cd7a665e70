"""Helpers for classifying, timing and decoding HTTP responses."""

from .const import __version__
from ._classifier import (
    capture_transport_error,
    classify_response,
    raise_for_outcome,
    read_text_response,
)
from ._client import RestClient
from ._decoding import get_or_default, to_typed_list, to_typed_list_from_json
from ._timing import CallTimer, annotate_call_timing, get_call_length, get_header_value
from .exceptions import (
    ApiConnectionError,
    DecodeError,
    HttpFailureError,
    ParseError,
    RateLimitError,
    RestUtilError,
)
from .models import (
    CallTiming,
    ClassifiedResponse,
    Failure,
    RateLimited,
    ResponseOutcome,
    Success,
    TransportError,
)
from .timestamps import (
    from_iso8601,
    from_unix_milliseconds,
    from_unix_seconds,
    to_iso8601,
    to_rfc3339,
)

__all__ = [
    "__version__",
    "RestClient",
    "capture_transport_error",
    "classify_response",
    "raise_for_outcome",
    "read_text_response",
    "get_or_default",
    "to_typed_list",
    "to_typed_list_from_json",
    "CallTimer",
    "annotate_call_timing",
    "get_call_length",
    "get_header_value",
    "ApiConnectionError",
    "DecodeError",
    "HttpFailureError",
    "ParseError",
    "RateLimitError",
    "RestUtilError",
    "CallTiming",
    "ClassifiedResponse",
    "Failure",
    "RateLimited",
    "ResponseOutcome",
    "Success",
    "TransportError",
    "from_iso8601",
    "from_unix_milliseconds",
    "from_unix_seconds",
    "to_iso8601",
    "to_rfc3339",
]
