"""Call timing headers attached to responses for downstream observability."""

from __future__ import annotations

import time
from collections.abc import Mapping
from datetime import datetime, timedelta, timezone
from typing import Any

from multidict import CIMultiDict, CIMultiDictProxy

from .const import HEADER_CALL_LENGTH, HEADER_CALL_RECEIVED, HEADER_CALL_SENT
from .models import CallTiming


class CallTimer:
    """Context manager that records a ``CallTiming`` around a request.

    Usage::

        with CallTimer() as timer:
            resp = await session.get(url)
        headers = annotate_call_timing(resp.headers, timer.timing)

    The wall clock is read once on entry; the receive instant is derived
    from the monotonic clock so a wall clock step cannot yield a negative
    duration. ``timing`` is only available once the block has exited.
    """

    def __init__(self) -> None:
        self._sent_at: datetime | None = None
        self._started: float = 0.0
        self._timing: CallTiming | None = None

    def __enter__(self) -> CallTimer:
        self._sent_at = datetime.now(timezone.utc)
        self._started = time.monotonic()
        return self

    def __exit__(self, *_: Any) -> None:
        if self._sent_at is None:
            raise RuntimeError("CallTimer exited without being entered")
        elapsed = timedelta(seconds=time.monotonic() - self._started)
        self._timing = CallTiming(
            sent_at=self._sent_at, received_at=self._sent_at + elapsed
        )

    @property
    def timing(self) -> CallTiming:
        if self._timing is None:
            raise RuntimeError("CallTimer has not finished yet")
        return self._timing


def annotate_call_timing(
    headers: Mapping[str, str], timing: CallTiming
) -> CIMultiDict[str]:
    """Return a copy of ``headers`` with the three call timing headers set.

    The input is left untouched, so aiohttp's read-only response headers
    can be passed directly.
    """
    annotated: CIMultiDict[str] = CIMultiDict(headers)
    annotated[HEADER_CALL_SENT] = str(timing.sent_epoch_seconds)
    annotated[HEADER_CALL_RECEIVED] = str(timing.received_epoch_seconds)
    annotated[HEADER_CALL_LENGTH] = str(timing.duration_ms)
    return annotated


def get_header_value(headers: Mapping[str, str], name: str) -> str | None:
    """Case-insensitive lookup of a single header value."""
    if not isinstance(headers, (CIMultiDict, CIMultiDictProxy)):
        headers = CIMultiDict(headers)
    return headers.get(name)


def get_call_length(headers: Mapping[str, str]) -> str | None:
    """Format the recorded call length as ``"<ms> ms"``."""
    value = get_header_value(headers, HEADER_CALL_LENGTH)
    if value is None:
        return None
    return f"{value} ms"
