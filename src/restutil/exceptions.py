"""Exception hierarchy for the restutil helpers."""

from __future__ import annotations


class RestUtilError(Exception):
    """Base exception for all restutil errors."""


class ApiConnectionError(RestUtilError):
    """The transport failed before a response arrived (network, DNS, timeout)."""


class HttpFailureError(RestUtilError):
    """The server answered with an unexpected status.

    Attributes:
        url: The request URL.
        status_code: HTTP status code.
        body: Response body text (empty if it could not be read).
    """

    def __init__(
        self,
        url: str,
        status_code: int,
        body: str = "",
        *,
        message: str | None = None,
    ) -> None:
        super().__init__(
            message
            or f"HTTP request failed: URL {url} - Status {status_code} - Body {body}"
        )
        self.url = url
        self.status_code = status_code
        self.body = body


class RateLimitError(HttpFailureError):
    """The server answered 429 Too Many Requests.

    Attributes:
        bucket: Value of the ``X-RateLimit-Bucket`` header, empty if absent.
        partial_data: The ``data`` field of the body, if one could be extracted.
    """

    def __init__(
        self,
        bucket: str = "",
        partial_data: str | None = None,
        *,
        url: str = "",
    ) -> None:
        super().__init__(
            url,
            429,
            partial_data or "",
            message=f"Rate limited: bucket {bucket}, partial data: {partial_data!r}",
        )
        self.bucket = bucket
        self.partial_data = partial_data


class ParseError(RestUtilError, ValueError):
    """A timestamp string could not be parsed."""


class DecodeError(RestUtilError, ValueError):
    """A JSON value could not be decoded into the target type.

    Attributes:
        index: Position of the offending array element, or None when the
            payload itself was unusable.
        reason: Human readable cause.
    """

    def __init__(self, reason: str, *, index: int | None = None) -> None:
        where = "payload" if index is None else f"element {index}"
        super().__init__(f"Cannot decode {where}: {reason}")
        self.index = index
        self.reason = reason
