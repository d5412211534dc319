"""Tests for duration and timestamp text encoding."""

from __future__ import annotations

import pytest

from frob_tracker.grammar import parse_frob_at
from frob_tracker.timecodec import (
    duration_from_parts,
    format_duration,
    format_timestamp,
    parse_timestamp,
)


class TestFormatDuration:
    @pytest.mark.parametrize(
        ("seconds", "expected"),
        [
            (0, "0:00:00"),
            (59, "0:00:59"),
            (61, "0:01:01"),
            (3600, "1:00:00"),
            (13054, "3:37:34"),
            (13169, "3:39:29"),
            (360000, "100:00:00"),
        ],
    )
    def test_renders_unpadded_hours(self, seconds, expected):
        assert format_duration(seconds) == expected

    def test_truncates_fractions(self):
        assert format_duration(59.999) == "0:00:59"
        assert format_duration(3599.5) == "0:59:59"

    def test_round_trips_through_frob_grammar(self):
        for seconds in (0, 1, 59, 60, 3599, 3600, 86399, 90061, 1_000_000):
            frob = parse_frob_at(f"[{format_duration(seconds)}]", 0)
            assert frob.accumulated_seconds == seconds
            assert frob.active_since is None


def test_duration_from_parts():
    assert duration_from_parts(2, 25, 5) == 8705
    assert duration_from_parts(0, 90, 0) == 5400


class TestTimestamps:
    def test_integral_timestamps_are_digit_runs(self):
        assert format_timestamp(1700000000.0) == "1700000000"
        assert format_timestamp(42) == "42"

    def test_fractional_timestamps_keep_their_fraction(self):
        assert format_timestamp(1700000000.25) == "1700000000.25"

    def test_small_fractions_avoid_exponent_notation(self):
        assert format_timestamp(0.00001) == "0.00001"

    def test_fractional_round_trip_is_exact(self):
        for value in (1760783012.8137457, 0.5, 123.125, 1e-05):
            assert parse_timestamp(format_timestamp(value)) == value
