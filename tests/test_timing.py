"""Tests for CallTiming and the call timing headers."""

from __future__ import annotations

from dataclasses import FrozenInstanceError
from datetime import datetime, timedelta, timezone

import pytest
from multidict import CIMultiDict, CIMultiDictProxy

from restutil import (
    CallTimer,
    CallTiming,
    annotate_call_timing,
    get_call_length,
    get_header_value,
)

UTC = timezone.utc
SENT = datetime(2021, 1, 1, 0, 0, 0, tzinfo=UTC)


# =========================================================================== #
#  1. CallTiming
# =========================================================================== #


class TestCallTiming:
    def test_duration_in_milliseconds(self):
        timing = CallTiming(sent_at=SENT, received_at=SENT + timedelta(seconds=1.5))
        assert timing.duration_ms == 1500

    def test_sub_millisecond_truncated(self):
        timing = CallTiming(
            sent_at=SENT, received_at=SENT + timedelta(microseconds=2999)
        )
        assert timing.duration_ms == 2

    def test_zero_duration_allowed(self):
        assert CallTiming(sent_at=SENT, received_at=SENT).duration_ms == 0

    def test_epoch_seconds(self):
        timing = CallTiming(sent_at=SENT, received_at=SENT + timedelta(seconds=2.9))
        assert timing.sent_epoch_seconds == 1609459200
        assert timing.received_epoch_seconds == 1609459202

    @pytest.mark.parametrize("delta", [timedelta(microseconds=1), timedelta(hours=3)])
    def test_received_before_sent_rejected(self, delta):
        with pytest.raises(ValueError, match="precedes"):
            CallTiming(sent_at=SENT, received_at=SENT - delta)

    def test_naive_datetimes_rejected(self):
        with pytest.raises(ValueError, match="timezone-aware"):
            CallTiming(sent_at=datetime(2021, 1, 1), received_at=datetime(2021, 1, 2))

    def test_tzinfo_without_offset_rejected(self, no_offset_tz):
        unknown = datetime(2021, 1, 1, tzinfo=no_offset_tz)
        with pytest.raises(ValueError, match="timezone-aware"):
            CallTiming(sent_at=SENT, received_at=unknown)
        with pytest.raises(ValueError, match="timezone-aware"):
            CallTiming(sent_at=unknown, received_at=SENT)

    def test_mixed_offsets_compare_as_instants(self):
        plus_one = timezone(timedelta(hours=1))
        timing = CallTiming(
            sent_at=SENT, received_at=datetime(2021, 1, 1, 1, 0, 1, tzinfo=plus_one)
        )
        assert timing.duration_ms == 1000

    def test_immutable(self):
        timing = CallTiming(sent_at=SENT, received_at=SENT)
        with pytest.raises(FrozenInstanceError):
            timing.sent_at = SENT  # type: ignore[misc]


class TestCallTimer:
    def test_records_timing(self):
        with CallTimer() as timer:
            pass
        timing = timer.timing
        assert timing.duration_ms >= 0
        assert timing.sent_at.tzinfo is not None

    def test_timing_unavailable_inside_block(self):
        with CallTimer() as timer:
            with pytest.raises(RuntimeError):
                timer.timing

    def test_records_timing_when_block_raises(self):
        timer = CallTimer()
        with pytest.raises(KeyError):
            with timer:
                raise KeyError("x")
        assert timer.timing.duration_ms >= 0


# =========================================================================== #
#  2. Header annotation
# =========================================================================== #


class TestAnnotateCallTiming:
    def test_adds_three_headers(self):
        timing = CallTiming(sent_at=SENT, received_at=SENT + timedelta(milliseconds=500))
        headers = annotate_call_timing({"Content-Type": "application/json"}, timing)
        assert headers["X-CallSent-Timestamp"] == "1609459200"
        assert headers["X-CallReceived-Timestamp"] == "1609459200"
        assert headers["X-CallLength-Milliseconds"] == "500"
        assert headers["content-type"] == "application/json"

    def test_does_not_mutate_read_only_input(self):
        original = CIMultiDictProxy(CIMultiDict({"A": "1"}))
        timing = CallTiming(sent_at=SENT, received_at=SENT)
        annotated = annotate_call_timing(original, timing)
        assert "X-CallLength-Milliseconds" in annotated
        assert "X-CallLength-Milliseconds" not in original

    def test_replaces_existing_values(self):
        timing = CallTiming(sent_at=SENT, received_at=SENT + timedelta(seconds=1))
        headers = annotate_call_timing({"x-calllength-milliseconds": "7"}, timing)
        assert headers.getall("X-CallLength-Milliseconds") == ["1000"]


class TestHeaderAccessors:
    def test_get_call_length(self):
        assert get_call_length({"X-CallLength-Milliseconds": "500"}) == "500 ms"

    def test_get_call_length_missing(self):
        assert get_call_length({}) is None

    def test_get_header_value_case_insensitive(self):
        headers = {"Content-Type": "application/json"}
        assert get_header_value(headers, "content-type") == "application/json"

    def test_get_header_value_missing(self):
        assert get_header_value(CIMultiDict(), "X-Nope") is None
