"""Classification of completed HTTP responses into outcome variants."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from .const import (
    DEFAULT_CHARSET,
    HEADER_RATE_LIMIT_BUCKET,
    HTTP_TOO_MANY_REQUESTS,
    RATE_LIMIT_DATA_FIELD,
)
from .exceptions import ApiConnectionError, HttpFailureError, RateLimitError
from .models import Failure, RateLimited, ResponseOutcome, Success, TransportError

_LOGGER = logging.getLogger(__name__)


class ResponseLike(Protocol):
    """The part of ``aiohttp.ClientResponse`` the classifier relies on."""

    status: int
    headers: Mapping[str, str]
    url: Any

    async def read(self) -> bytes: ...


async def classify_response(response: ResponseLike) -> ResponseOutcome:
    """Turn a completed response into exactly one outcome.

    * 429 becomes ``RateLimited``, with the ``X-RateLimit-Bucket`` header
      and, when the body is a JSON object with a ``data`` field, that
      field as partial data.
    * 2xx becomes ``Success`` with the body text.
    * Anything else becomes ``Failure`` with URL, status and body text.

    The body is read exactly once. Unreadable or undecodable bodies
    degrade to empty text; this function never raises because of what
    the server sent.
    """
    raw = await _read_body(response)
    status = response.status

    if status == HTTP_TOO_MANY_REQUESTS:
        bucket = response.headers.get(HEADER_RATE_LIMIT_BUCKET) or ""
        return RateLimited(bucket=bucket, partial_data=_extract_partial_data(raw))

    text = _decode_text(response, raw)
    if 200 <= status < 300:
        return Success(body=text, status_code=status)
    return Failure(url=str(response.url), status_code=status, body=text)


def capture_transport_error(
    err: BaseException, message: str | None = None
) -> TransportError:
    """Wrap an exception raised by the transport call into ``TransportError``.

    With ``message`` the result reads ``"<message> - Inner error: <err>"``.
    """
    detail = str(err) or type(err).__name__
    if message:
        return TransportError(message=f"{message} - Inner error: {detail}")
    return TransportError(message=detail)


def raise_for_outcome(outcome: ResponseOutcome) -> str:
    """Return the body of a ``Success`` or raise the matching exception.

    Raises:
        RateLimitError: For ``RateLimited``.
        HttpFailureError: For ``Failure``.
        ApiConnectionError: For ``TransportError``.
    """
    if isinstance(outcome, Success):
        return outcome.body
    if isinstance(outcome, RateLimited):
        raise RateLimitError(outcome.bucket, outcome.partial_data)
    if isinstance(outcome, Failure):
        raise HttpFailureError(outcome.url, outcome.status_code, outcome.body)
    if isinstance(outcome, TransportError):
        raise ApiConnectionError(outcome.message)
    raise TypeError(f"Not a response outcome: {outcome!r}")


async def read_text_response(
    response: ResponseLike, *, raise_on_failure: bool = False
) -> str:
    """Read a response as text, treating non-2xx as failure.

    Returns the body for 2xx responses. Otherwise returns ``""``, or
    raises when ``raise_on_failure`` is set.

    Raises:
        RateLimitError: On 429 with ``raise_on_failure``.
        HttpFailureError: On other non-2xx with ``raise_on_failure``.
    """
    outcome = await classify_response(response)
    if isinstance(outcome, Success):
        return outcome.body
    _LOGGER.debug("Request to %s did not succeed: %s", response.url, outcome)
    if raise_on_failure:
        raise_for_outcome(outcome)
    return ""


async def _read_body(response: ResponseLike) -> bytes:
    try:
        return await response.read()
    except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as err:
        _LOGGER.debug("Could not read body from %s: %s", response.url, err)
        return b""


def _decode_text(response: ResponseLike, raw: bytes) -> str:
    if not raw:
        return ""
    charset = getattr(response, "charset", None) or DEFAULT_CHARSET
    try:
        return raw.decode(charset, errors="replace")
    except LookupError:
        return raw.decode(DEFAULT_CHARSET, errors="replace")


def _extract_partial_data(raw: bytes) -> str | None:
    """Pull the ``data`` field out of a rate-limited body, if there is one."""
    try:
        payload = json.loads(raw)
    except (ValueError, RecursionError):
        _LOGGER.debug("Rate-limited body is not usable JSON; no partial data")
        return None
    if not isinstance(payload, dict):
        return None
    data = payload.get(RATE_LIMIT_DATA_FIELD)
    if data is None:
        return None
    if isinstance(data, str):
        return data
    return json.dumps(data)
