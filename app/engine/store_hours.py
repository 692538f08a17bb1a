"""유효 매장 운영시간 결정 모듈.

Resolves which opening schedule applies on a calendar date.

Precedence:
    1. 날짜별 예외 (date-specific StoreException)
    2. 공휴일이면 휴일 스케줄(day_of_week=7), 정의된 경우에만
       (holiday pseudo-day entry, when the store defines one)
    3. 요일 스케줄 (regular weekday entry)

No entry at all resolves to ``None``: the store's hours are unknown.
"""

from collections.abc import Iterable
from datetime import date

from app.engine import clock
from app.schemas.scheduling import StoreException, StoreScheduleDay

HOLIDAY_DAY: int = 7


def resolve_day(
    day: date,
    schedule: Iterable[StoreScheduleDay],
    exceptions: Iterable[StoreException] = (),
    holidays: Iterable[date] = (),
) -> StoreScheduleDay | None:
    """해당 날짜에 적용되는 운영 스케줄을 반환합니다."""
    for exception in exceptions:
        if exception.date == day:
            return StoreScheduleDay(
                day_of_week=clock.day_of_week(day),
                is_open=exception.is_open,
                time_ranges=exception.time_ranges if exception.is_open else [],
            )

    by_day: dict[int, StoreScheduleDay] = {entry.day_of_week: entry for entry in schedule}
    if day in set(holidays) and HOLIDAY_DAY in by_day:
        return by_day[HOLIDAY_DAY]
    return by_day.get(clock.day_of_week(day))


def day_envelope(store_day: StoreScheduleDay) -> tuple[int, int] | None:
    """분할 영업일의 전체 범위 — first open to last close, in minutes."""
    if not store_day.has_hours:
        return None
    opens: list[int] = [clock.parse_time(r.open_time) for r in store_day.time_ranges]
    closes: list[int] = [clock.parse_time(r.close_time) for r in store_day.time_ranges]
    return min(opens), max(closes)
