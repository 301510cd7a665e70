"""Thin aiohttp client that times, classifies and decodes single requests."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Callable
from typing import Any, TypeVar

import aiohttp

from ._classifier import capture_transport_error, classify_response, raise_for_outcome
from ._decoding import to_typed_list
from ._timing import CallTimer, annotate_call_timing
from .const import DEFAULT_TIMEOUT_SECONDS
from .exceptions import DecodeError
from .models import ClassifiedResponse

_LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


class RestClient:
    """Async HTTP client returning classified outcomes instead of raising.

    Usage::

        async with RestClient(timeout=10) as client:
            result = await client.request("GET", "https://api.example.com/items")
            if isinstance(result.outcome, RateLimited):
                ...

    Each call performs exactly one request. Nothing is retried; what to do
    with a ``RateLimited`` or ``Failure`` outcome is up to the caller.

    A session passed in is borrowed and left open. Without one, a private
    session is opened lazily on the first request and closed by
    ``async_close()`` or on leaving the ``async with`` block.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession | None = None,
        *,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._borrowed = session
        self._private: aiohttp.ClientSession | None = None
        self._timeout = aiohttp.ClientTimeout(total=timeout)

    async def __aenter__(self) -> RestClient:
        return self

    async def __aexit__(self, *_: Any) -> None:
        await self.async_close()

    @property
    def _session(self) -> aiohttp.ClientSession:
        if self._borrowed is not None:
            return self._borrowed
        if self._private is None or self._private.closed:
            self._private = aiohttp.ClientSession()
        return self._private

    async def async_close(self) -> None:
        """Close the private session, if one was opened."""
        if self._private is not None:
            await self._private.close()
            self._private = None

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
        json_body: Any = None,
    ) -> ClassifiedResponse:
        """Execute one request and classify the result.

        Transport failures (connection refused, DNS, timeout) come back as a
        ``TransportError`` outcome with no timing. Otherwise the returned
        headers carry the response headers plus the call timing headers.
        """
        kwargs: dict[str, Any] = {"timeout": self._timeout}
        if params:
            kwargs["params"] = params
        if headers:
            kwargs["headers"] = headers
        if json_body is not None:
            kwargs["json"] = json_body

        try:
            with CallTimer() as timer:
                async with self._session.request(method, url, **kwargs) as resp:
                    outcome = await classify_response(resp)
                    response_headers = resp.headers
        except (aiohttp.ClientError, asyncio.TimeoutError) as err:
            _LOGGER.debug("%s %s failed in transport: %r", method, url, err)
            return ClassifiedResponse(
                outcome=capture_transport_error(err, f"{method} {url} failed")
            )

        timing = timer.timing
        _LOGGER.debug(
            "%s %s -> %s in %d ms",
            method,
            url,
            type(outcome).__name__,
            timing.duration_ms,
        )
        return ClassifiedResponse(
            outcome=outcome,
            timing=timing,
            headers=annotate_call_timing(response_headers, timing),
        )

    async def async_get_text(self, url: str, **kwargs: Any) -> str:
        """GET ``url`` and return the body text.

        Raises:
            RateLimitError: On 429 responses.
            HttpFailureError: On other non-2xx responses.
            ApiConnectionError: On network errors.
        """
        result = await self.request("GET", url, **kwargs)
        return raise_for_outcome(result.outcome)

    async def async_get_list(
        self,
        url: str,
        decoder: Callable[[Any], T],
        *,
        field: str | None = None,
        **kwargs: Any,
    ) -> list[T]:
        """GET ``url`` and decode a JSON array from the response.

        When ``field`` is given and the body is an object, the array is
        read from that field. An empty body or a missing field gives an
        empty list.

        Raises:
            DecodeError: If the body is not JSON or an element fails to decode.
            RateLimitError: On 429 responses.
            HttpFailureError: On other non-2xx responses.
            ApiConnectionError: On network errors.
        """
        text = await self.async_get_text(url, **kwargs)
        if not text.strip():
            return []
        try:
            data = json.loads(text)
        except (ValueError, RecursionError) as err:
            raise DecodeError(f"invalid JSON: {err}") from err
        if field is not None and isinstance(data, dict):
            data = data.get(field, [])
        return to_typed_list(data, decoder)
