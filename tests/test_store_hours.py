"""유효 매장 운영시간 결정 단위 테스트.

Effective store-day resolution: exception > holiday (day 7) > weekday.
"""

from datetime import date

from app.engine.store_hours import HOLIDAY_DAY, day_envelope, resolve_day
from app.schemas.scheduling import StoreException, StoreScheduleDay, TimeRange

MONDAY = date(2025, 3, 3)

WEEKDAY = StoreScheduleDay(
    day_of_week=1, time_ranges=[TimeRange(open_time="09:00", close_time="20:00")]
)
HOLIDAY = StoreScheduleDay(
    day_of_week=HOLIDAY_DAY, time_ranges=[TimeRange(open_time="11:00", close_time="16:00")]
)


class TestResolveDay:
    def test_weekday_entry(self):
        assert resolve_day(MONDAY, [WEEKDAY, HOLIDAY]) == WEEKDAY

    def test_missing_entry_is_unknown(self):
        assert resolve_day(MONDAY, [HOLIDAY]) is None

    def test_holiday_entry_on_holiday(self):
        assert resolve_day(MONDAY, [WEEKDAY, HOLIDAY], holidays=[MONDAY]) == HOLIDAY

    def test_holiday_without_entry_falls_back(self):
        assert resolve_day(MONDAY, [WEEKDAY], holidays=[MONDAY]) == WEEKDAY

    def test_exception_wins(self):
        closure = StoreException(date=MONDAY, is_open=False, reason="Maintenance")
        resolved = resolve_day(MONDAY, [WEEKDAY, HOLIDAY], [closure], [MONDAY])
        assert resolved.is_open is False
        assert resolved.time_ranges == []
        assert resolved.day_of_week == 1

    def test_exception_for_other_date_ignored(self):
        closure = StoreException(date=date(2025, 3, 4), is_open=False)
        assert resolve_day(MONDAY, [WEEKDAY], [closure]) == WEEKDAY


class TestDayEnvelope:
    def test_split_day(self):
        split = StoreScheduleDay(
            day_of_week=1,
            time_ranges=[
                TimeRange(open_time="14:00", close_time="20:00"),
                TimeRange(open_time="09:00", close_time="12:00"),
            ],
        )
        assert [r.open_time for r in split.time_ranges] == ["09:00", "14:00"]
        assert day_envelope(split) == (540, 1200)

    def test_no_hours(self):
        assert day_envelope(StoreScheduleDay(day_of_week=1, is_open=True)) is None
        assert day_envelope(StoreScheduleDay(day_of_week=1, is_open=False)) is None
