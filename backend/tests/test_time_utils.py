"""
Clock-time arithmetic tests.

Tests:
  - parsing and validation of "HH:MM" variants
  - durations, including the overnight wrap
  - late / early minutes are never negative
  - extraction of times from free-form cells
"""

from __future__ import annotations

import pytest

from punchclock.services import time_utils
from punchclock.services.calculations import (
    average,
    distribution,
    percentage,
    round_half_up,
    round_int,
    standard_deviation,
)


class TestParsing:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("00:00", 0),
            ("09:45", 585),
            ("9:05", 545),
            ("18:30:59", 1110),
            ("0930", 570),
            (" 10:01 ", 601),
            ("23:59", 1439),
        ],
    )
    def test_parse_valid(self, value: str, expected: int) -> None:
        assert time_utils.is_valid_time(value)
        assert time_utils.parse_time(value) == expected

    @pytest.mark.parametrize("value", ["", "24:00", "12:60", "abc", "9", None, 930])
    def test_parse_invalid_degrades_to_zero(self, value: object) -> None:
        assert not time_utils.is_valid_time(value)
        assert time_utils.parse_time(value) == 0

    def test_normalize(self) -> None:
        assert time_utils.normalize_time("9:05") == "09:05"
        assert time_utils.normalize_time("1830") == "18:30"
        assert time_utils.normalize_time("25:00") is None

    def test_format_time_wraps(self) -> None:
        assert time_utils.format_time(585) == "09:45"
        assert time_utils.format_time(24 * 60 + 5) == "00:05"


class TestDurations:
    def test_same_day(self) -> None:
        assert time_utils.duration_minutes("09:45", "18:30") == 525
        assert time_utils.duration_hours("09:45", "18:30") == 8.75

    def test_overnight_wraps(self) -> None:
        """A shift from 22:00 to 06:00 lasts 8 hours, not -16."""
        assert time_utils.duration_minutes("22:00", "06:00") == 480
        assert time_utils.duration_hours("22:00", "06:00") == 8.0

    def test_identical_punches(self) -> None:
        assert time_utils.duration_hours("09:30", "09:30") == 0.0

    def test_missing_endpoint(self) -> None:
        assert time_utils.duration_minutes(None, "18:30") == 0
        assert time_utils.duration_minutes("09:30", "") == 0

    def test_hours_rounded_to_two_places(self) -> None:
        # 530 minutes = 8.8333... hours
        assert time_utils.duration_hours("09:50", "18:40") == 8.83

    def test_late_and_early_minutes(self) -> None:
        assert time_utils.late_minutes("10:31", "10:01") == 30
        assert time_utils.late_minutes("09:45", "10:01") == 0
        assert time_utils.early_minutes("18:00", "18:30") == 30
        assert time_utils.early_minutes("19:00", "18:30") == 0

    def test_comparisons(self) -> None:
        assert time_utils.is_after("10:02", "10:01")
        assert not time_utils.is_after("10:01", "10:01")
        assert time_utils.is_before("18:29", "18:30")
        assert not time_utils.is_before("18:30", "18:30")

    def test_format_duration(self) -> None:
        assert time_utils.format_duration(8.75) == "8h 45m"
        assert time_utils.format_duration(0) == "0h 00m"


class TestExtractTimes:
    def test_space_separated(self) -> None:
        assert time_utils.extract_times("09:41 13:02 18:45") == ["09:41", "13:02", "18:45"]

    def test_with_seconds_and_noise(self) -> None:
        assert time_utils.extract_times("In 9:41:07, out 18:45:00") == ["09:41", "18:45"]

    def test_out_of_range_tokens_dropped(self) -> None:
        assert time_utils.extract_times("25:10 10:15") == ["10:15"]

    def test_empty(self) -> None:
        assert time_utils.extract_times(None) == []
        assert time_utils.extract_times("") == []


class TestCalculations:
    def test_round_half_up(self) -> None:
        assert round_half_up(2.5) == 3
        assert round_half_up(3.5) == 4
        assert round_int(44.5) == 45

    def test_percentage(self) -> None:
        assert percentage(1, 3) == 33
        assert percentage(2, 3) == 67
        assert percentage(5, 0) == 0

    def test_average_and_deviation(self) -> None:
        assert average([]) == 0.0
        assert average([8.75, 9.0]) == 8.88
        assert standard_deviation([100]) == 0.0
        assert standard_deviation([100, 0]) == 50.0

    def test_distribution(self) -> None:
        assert distribution(["a", "b", "a"], lambda x: x) == {"a": 2, "b": 1}
