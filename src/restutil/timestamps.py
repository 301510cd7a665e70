"""Conversions between Unix timestamps, ISO-8601 strings and datetimes."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from dateutil.parser import isoparse

from .exceptions import ParseError

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def from_unix_milliseconds(milliseconds: int) -> datetime:
    """Build a UTC datetime from Unix time in milliseconds."""
    return _EPOCH + timedelta(milliseconds=milliseconds)


def from_unix_seconds(seconds: int) -> datetime:
    """Build a UTC datetime from Unix time in seconds."""
    return _EPOCH + timedelta(seconds=seconds)


def from_iso8601(value: str) -> datetime:
    """Parse an ISO-8601 / RFC-3339 string into an offset-aware datetime.

    The original offset is kept (``+02:00`` stays ``+02:00``); a trailing
    ``Z`` is read as UTC.

    Raises:
        ParseError: If the string is malformed, has out-of-range fields,
            or carries no UTC offset.
    """
    if not isinstance(value, str):
        raise ParseError(f"Expected an ISO-8601 string, got {type(value).__name__}")
    try:
        parsed = isoparse(value.strip())
    except (ValueError, OverflowError) as err:
        raise ParseError(f"Invalid ISO-8601 timestamp {value!r}: {err}") from err
    if parsed.tzinfo is None or parsed.utcoffset() is None:
        raise ParseError(f"Timestamp {value!r} has no UTC offset")
    return parsed


def to_iso8601(value: datetime) -> str:
    """Format as UTC, truncated to whole seconds, with a ``Z`` suffix.

    Naive datetimes are taken to already be in UTC.
    """
    if value.utcoffset() is None:
        value = value.replace(tzinfo=timezone.utc)
    utc = value.astimezone(timezone.utc).replace(tzinfo=None)
    return utc.isoformat(timespec="seconds") + "Z"


# Same wire format; kept under the RFC name for callers that ask for it.
to_rfc3339 = to_iso8601
