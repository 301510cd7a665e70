"""Data models for classified HTTP responses."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Union

from multidict import CIMultiDict

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True)
class Success:
    """A 2xx response and its body text."""

    body: str
    status_code: int = 200

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class RateLimited:
    """A 429 response.

    ``partial_data`` holds the body's ``data`` field when the server sent
    one along with the rejection.
    """

    bucket: str
    partial_data: str | None = None

    @property
    def ok(self) -> bool:
        return False


@dataclass(frozen=True)
class Failure:
    """Any other non-2xx response."""

    url: str
    status_code: int
    body: str = ""

    @property
    def ok(self) -> bool:
        return False


@dataclass(frozen=True)
class TransportError:
    """The request never produced a response (connection refused, timeout, DNS)."""

    message: str

    @property
    def ok(self) -> bool:
        return False


ResponseOutcome = Union[Success, RateLimited, Failure, TransportError]


@dataclass(frozen=True)
class CallTiming:
    """When a call was sent and when its response arrived.

    Both instants must be timezone-aware and ``received_at`` must not
    precede ``sent_at``; anything else raises ``ValueError``.
    """

    sent_at: datetime
    received_at: datetime

    def __post_init__(self) -> None:
        if self.sent_at.utcoffset() is None or (
            self.received_at.utcoffset() is None
        ):
            raise ValueError("CallTiming requires timezone-aware datetimes")
        if self.received_at < self.sent_at:
            raise ValueError(
                f"received_at ({self.received_at.isoformat()}) precedes "
                f"sent_at ({self.sent_at.isoformat()})"
            )

    @property
    def duration_ms(self) -> int:
        """Elapsed time in whole milliseconds."""
        return (self.received_at - self.sent_at) // timedelta(milliseconds=1)

    @property
    def sent_epoch_seconds(self) -> int:
        return (self.sent_at - _EPOCH) // timedelta(seconds=1)

    @property
    def received_epoch_seconds(self) -> int:
        return (self.received_at - _EPOCH) // timedelta(seconds=1)


@dataclass(frozen=True)
class ClassifiedResponse:
    """Result of a single ``RestClient.request`` call.

    ``timing`` is None when the transport failed before any response
    existed. ``headers`` carries the response headers plus the call timing
    headers.
    """

    outcome: ResponseOutcome
    timing: CallTiming | None = None
    headers: CIMultiDict[str] = field(default_factory=CIMultiDict)

    @property
    def ok(self) -> bool:
        return self.outcome.ok
