"""Conftest: stand-in response objects for testing without network access.

``FakeResponse`` mimics the slice of ``aiohttp.ClientResponse`` the
classifier uses (status, headers, url, charset, ``read()``) and counts how
often the body is read.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, tzinfo
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest
from multidict import CIMultiDict, CIMultiDictProxy
from yarl import URL


# --------------------------------------------------------------------------- #
#  Lightweight ClientResponse stand-in
# --------------------------------------------------------------------------- #


class FakeResponse:
    """Minimal stand-in for aiohttp.ClientResponse."""

    def __init__(
        self,
        status: int,
        body: bytes | str = b"",
        *,
        headers: dict[str, str] | None = None,
        url: str = "https://api.example.com/data",
        charset: str | None = None,
        read_error: BaseException | None = None,
    ) -> None:
        self.status = status
        self.headers = CIMultiDictProxy(CIMultiDict(headers or {}))
        self.url = URL(url)
        self.charset = charset
        self._body = body.encode() if isinstance(body, str) else body
        self._read_error = read_error
        self.read_count = 0

    async def read(self) -> bytes:
        self.read_count += 1
        if self._read_error is not None:
            raise self._read_error
        return self._body


@pytest.fixture
def make_response() -> Callable[..., FakeResponse]:
    """Factory for ``FakeResponse`` objects."""

    def _make(status: int, body: bytes | str = b"", **kwargs: Any) -> FakeResponse:
        return FakeResponse(status, body, **kwargs)

    return _make


class _NoOffset(tzinfo):
    """A tzinfo that cannot tell its offset, which makes datetimes naive."""

    def utcoffset(self, dt: datetime | None) -> None:
        return None

    def dst(self, dt: datetime | None) -> None:
        return None

    def tzname(self, dt: datetime | None) -> str:
        return "unknown"


@pytest.fixture
def no_offset_tz() -> tzinfo:
    """A tzinfo whose ``utcoffset()`` is None."""
    return _NoOffset()


# --------------------------------------------------------------------------- #
#  ClientSession stand-in
# --------------------------------------------------------------------------- #


class _RequestContext:
    """Stand-in for the object returned by ``ClientSession.request``."""

    def __init__(
        self, response: FakeResponse | None, error: BaseException | None
    ) -> None:
        self._response = response
        self._error = error

    async def __aenter__(self) -> FakeResponse | None:
        if self._error is not None:
            raise self._error
        return self._response

    async def __aexit__(self, *_: Any) -> None:
        return None


@pytest.fixture
def mock_session() -> Callable[..., MagicMock]:
    """Factory for a mocked ``aiohttp.ClientSession``.

    ``request`` yields the given response, or raises ``error`` on entry.
    """

    def _make(
        response: FakeResponse | None = None, error: BaseException | None = None
    ) -> MagicMock:
        session = MagicMock(spec=aiohttp.ClientSession)
        session.request = MagicMock(return_value=_RequestContext(response, error))
        session.close = AsyncMock()
        return session

    return _make
