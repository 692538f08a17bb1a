"""시각 계산(ClockMath) 단위 테스트.

ClockMath unit tests — HH:MM parsing/formatting, half-up rounding,
drift-free durations, and the calendar helpers.
"""

from datetime import date, time

import pytest

from app.engine import clock
from app.engine.errors import FormatError


class TestParseTime:
    """HH:MM 파싱 테스트."""

    @pytest.mark.parametrize("value,expected", [
        ("00:00", 0),
        ("09:30", 570),
        ("23:59", 1439),
        ("7:05", 425),
    ])
    def test_valid(self, value, expected):
        assert clock.parse_time(value) == expected

    @pytest.mark.parametrize("value", [
        "24:00", "12:60", "9", "ab:cd", "12:30:00", "", "-1:00", "12:", ":30", "１２:００",
    ])
    def test_invalid(self, value):
        with pytest.raises(FormatError):
            clock.parse_time(value)

    def test_non_string(self):
        with pytest.raises(FormatError):
            clock.parse_time(930)

    def test_format_error_is_value_error(self):
        """FormatError는 ValueError — pydantic 검증에서 422로 변환됨."""
        with pytest.raises(ValueError):
            clock.parse_time("25:00")


class TestFormatMinutes:
    """분 → HH:MM 변환 테스트."""

    def test_zero_padded(self):
        assert clock.format_minutes(5) == "00:05"
        assert clock.format_minutes(570) == "09:30"

    def test_floors_fractions(self):
        assert clock.format_minutes(65.9) == "01:05"

    def test_absorbs_float_noise(self):
        assert clock.format_minutes(59.9999999) == "01:00"

    def test_does_not_wrap_past_midnight(self):
        assert clock.format_minutes(1440) == "24:00"
        assert clock.format_minutes(1500.7) == "25:00"

    def test_negative_rejected(self):
        with pytest.raises(FormatError):
            clock.format_minutes(-1)


class TestRoundMinutes:
    """반올림 (half-up) 테스트."""

    @pytest.mark.parametrize("value,expected", [
        (0, 0),
        (7.4, 5),
        (7.5, 10),
        (2.5, 5),
        (12.5, 15),
        (562.49, 560),
        (562.5, 565),
    ])
    def test_five_minute_grid(self, value, expected):
        assert clock.round_minutes(value) == expected

    def test_custom_increment(self):
        assert clock.round_minutes(22.5, 15) == 30
        assert clock.round_minutes(22.4, 15) == 15

    def test_invalid_increment(self):
        with pytest.raises(FormatError):
            clock.round_minutes(10, 0)


class TestDuration:
    """근무 길이 계산 테스트."""

    def test_seven_fifty_five(self):
        hours = clock.duration_hours("09:00", "16:55")
        assert hours == 475 / 60
        assert clock.format_duration(hours) == "7h 55m"

    def test_drift_is_rounded_to_whole_minutes(self):
        hours = clock.duration_hours(540.0000001, 1014.9999999)
        assert hours == 475 / 60
        assert clock.format_duration(hours) == "7h 55m"

    def test_mixed_inputs(self):
        assert clock.duration_minutes("09:00", 600) == 60

    def test_bad_format(self):
        with pytest.raises(FormatError):
            clock.duration_hours("9am", "17:00")

    @pytest.mark.parametrize("hours,expected", [
        (3, "3h 0m"),
        (2, "2h 0m"),
        (0.5, "0h 30m"),
        (11, "11h 0m"),
    ])
    def test_format_duration(self, hours, expected):
        assert clock.format_duration(hours) == expected


class TestCalendarHelpers:
    """요일/주 계산 테스트."""

    def test_time_conversion(self):
        assert clock.from_time(time(9, 5)) == "09:05"
        assert clock.to_time("09:05") == time(9, 5)

    def test_day_of_week_is_sunday_based(self):
        assert clock.day_of_week(date(2025, 3, 9)) == 0  # Sunday
        assert clock.day_of_week(date(2025, 3, 3)) == 1  # Monday
        assert clock.day_of_week(date(2025, 3, 8)) == 6  # Saturday

    def test_week_bounds_is_monday_start(self):
        expected = (date(2025, 3, 3), date(2025, 3, 9))
        assert clock.week_bounds(date(2025, 3, 3)) == expected
        assert clock.week_bounds(date(2025, 3, 6)) == expected
        assert clock.week_bounds(date(2025, 3, 9)) == expected

    def test_iter_days(self):
        days = list(clock.iter_days(date(2025, 3, 3), date(2025, 3, 5)))
        assert days == [date(2025, 3, 3), date(2025, 3, 4), date(2025, 3, 5)]
        assert list(clock.iter_days(date(2025, 3, 5), date(2025, 3, 3))) == []
