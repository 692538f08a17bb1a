"""시각 계산 모듈 — ClockMath.

Pure time-of-day arithmetic used by every other engine component.
Wire format is ``HH:MM`` (24-hour, zero-padded, no seconds); internally
times are minutes-of-day.

Rounding policy:
    ``round_minutes`` rounds half-up (``floor(x / increment + 0.5)``), so
    7.5 minutes on a 5-minute grid becomes 10. It is applied only for
    display and on commit, never during a live drag.
"""

import math
from datetime import date, time, timedelta

from app.engine.errors import FormatError

# 기본 반올림 단위(분) — Default rounding increment in minutes
DEFAULT_INCREMENT: int = 5

MINUTES_PER_DAY: int = 24 * 60


def parse_time(value: str) -> int:
    """``HH:MM`` 문자열을 하루 기준 분으로 변환합니다.

    Parse a ``HH:MM`` string into minutes-of-day.

    Raises:
        FormatError: 두 개의 정수가 아니거나 범위를 벗어난 경우
                     (Not two colon-separated integers, or out of range)
    """
    if not isinstance(value, str):
        raise FormatError(f"Time must be a string, got {type(value).__name__}")
    parts: list[str] = value.strip().split(":")
    if len(parts) != 2 or not all(p.isascii() and p.isdigit() for p in parts):
        raise FormatError(f"Invalid time '{value}', expected HH:MM")
    hours, minutes = int(parts[0]), int(parts[1])
    if not 0 <= hours <= 23:
        raise FormatError(f"Invalid hour in '{value}'")
    if not 0 <= minutes <= 59:
        raise FormatError(f"Invalid minute in '{value}'")
    return hours * 60 + minutes


def format_minutes(minutes: float) -> str:
    """분 값을 ``HH:MM`` 문자열로 변환합니다.

    Format minutes-of-day as ``HH:MM``. Fractional values are floored and
    values past 23:59 are not wrapped (1440 -> ``"24:00"``), since live
    interaction math may transiently exceed the day.
    """
    # 부동소수 오차 흡수 후 내림 — absorb float noise before flooring
    whole: int = math.floor(round(minutes, 6))
    if whole < 0:
        raise FormatError(f"Negative minute value {minutes}")
    return f"{whole // 60:02d}:{whole % 60:02d}"


def round_minutes(minutes: float, increment: int = DEFAULT_INCREMENT) -> int:
    """분 값을 increment 단위로 반올림합니다 (half-up).

    Round a minute value to the nearest multiple of ``increment``,
    ties going up.
    """
    if increment <= 0:
        raise FormatError(f"Rounding increment must be positive, got {increment}")
    return int(math.floor(minutes / increment + 0.5)) * increment


def to_minutes(value: str | float) -> float:
    """``HH:MM`` 문자열 또는 분 숫자를 분으로 정규화합니다."""
    if isinstance(value, str):
        return parse_time(value)
    return value


def duration_minutes(start: str | float, end: str | float) -> int:
    """두 시각 사이의 길이를 정수 분으로 반환합니다.

    The difference is rounded to a whole minute so that floating point
    drift from pixel math never leaks into the hour value.
    """
    return int(round(to_minutes(end) - to_minutes(start)))


def duration_hours(start: str | float, end: str | float) -> float:
    """두 시각 사이의 길이를 소수 시간으로 반환합니다.

    Duration in decimal hours; ``duration_hours("09:00", "16:55")`` is
    exactly ``475 / 60``.
    """
    return duration_minutes(start, end) / 60


def format_duration(hours: float) -> str:
    """소수 시간을 ``Hh Mm`` 형식으로 표시합니다 (e.g. ``"7h 55m"``)."""
    total: int = int(round(hours * 60))
    sign: str = "-" if total < 0 else ""
    total = abs(total)
    return f"{sign}{total // 60}h {total % 60}m"


def from_time(value: time) -> str:
    """``datetime.time``을 ``HH:MM`` 문자열로 변환합니다."""
    return value.strftime("%H:%M")


def to_time(value: str) -> time:
    """``HH:MM`` 문자열을 ``datetime.time``으로 변환합니다."""
    minutes: int = parse_time(value)
    return time(minutes // 60, minutes % 60)


def day_of_week(day: date) -> int:
    """요일 번호 — 0 = 일요일 ... 6 = 토요일 (Sunday-based day index)."""
    return (day.weekday() + 1) % 7


def week_bounds(day: date) -> tuple[date, date]:
    """해당 날짜가 속한 ISO 주(월~일)의 시작/종료일을 반환합니다."""
    start: date = day - timedelta(days=day.weekday())
    return start, start + timedelta(days=6)


def iter_days(date_from: date, date_to: date):
    """date_from부터 date_to까지(포함) 날짜를 순서대로 생성합니다."""
    current: date = date_from
    while current <= date_to:
        yield current
        current += timedelta(days=1)
