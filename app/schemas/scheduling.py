"""스케줄링 엔진 값 타입 — Pydantic 모델.

Scheduling engine value types.
These models are the engine's inputs and outputs and double as API
response bodies. Time-of-day fields are ``HH:MM`` strings validated through
``app.engine.clock``; invalid values surface as 422 at the API boundary.
"""

from datetime import date
from enum import Enum

from pydantic import BaseModel, Field, field_validator, model_validator

from app.engine import clock


def _check_time(value: str) -> str:
    clock.parse_time(value)
    return value


# === 매장 운영시간 (Store schedule) ===

class TimeRange(BaseModel):
    """영업 시간 구간 — One open range within a day (``open_time < close_time``)."""

    open_time: str  # 개점 시각 HH:MM (Opening time)
    close_time: str  # 폐점 시각 HH:MM (Closing time)

    _validate_times = field_validator("open_time", "close_time")(_check_time)

    @model_validator(mode="after")
    def _check_order(self) -> "TimeRange":
        if clock.parse_time(self.open_time) >= clock.parse_time(self.close_time):
            raise ValueError(f"open_time {self.open_time} must be before close_time {self.close_time}")
        return self


def _check_ranges(ranges: list[TimeRange]) -> list[TimeRange]:
    """구간을 개점 시각 순으로 정렬하고 겹침을 거부합니다."""
    ordered: list[TimeRange] = sorted(ranges, key=lambda r: clock.parse_time(r.open_time))
    for previous, current in zip(ordered, ordered[1:]):
        if clock.parse_time(current.open_time) < clock.parse_time(previous.close_time):
            raise ValueError(
                f"Time ranges {previous.open_time}-{previous.close_time} and "
                f"{current.open_time}-{current.close_time} overlap"
            )
    return ordered


class StoreScheduleDay(BaseModel):
    """요일별 매장 운영 스케줄.

    Recurring opening schedule for one day of the week.
    ``day_of_week`` is 0 = Sunday ... 6 = Saturday, 7 = holiday pseudo-day.
    A store may be open in several disjoint ranges (e.g. closed for lunch).
    """

    day_of_week: int = Field(ge=0, le=7)
    is_open: bool = True
    time_ranges: list[TimeRange] = Field(default_factory=list)

    _sort_ranges = field_validator("time_ranges")(_check_ranges)

    @property
    def has_hours(self) -> bool:
        return self.is_open and bool(self.time_ranges)


class StoreException(BaseModel):
    """특정 날짜 운영 예외 — Date-specific override of the weekly schedule."""

    date: date
    is_open: bool = False
    time_ranges: list[TimeRange] = Field(default_factory=list)
    reason: str | None = None

    _sort_ranges = field_validator("time_ranges")(_check_ranges)


# === 직원 (Employee) ===

class UnavailableTime(BaseModel):
    """반복 근무 불가 시간 — Recurring weekly unavailable window."""

    day_of_week: int = Field(ge=0, le=6)  # 0 = 일요일 (Sunday)
    start_time: str
    end_time: str

    _validate_times = field_validator("start_time", "end_time")(_check_time)

    @model_validator(mode="after")
    def _check_order(self) -> "UnavailableTime":
        if clock.parse_time(self.start_time) >= clock.parse_time(self.end_time):
            raise ValueError("start_time must be before end_time")
        return self


class EmployeeData(BaseModel):
    """엔진 입력용 직원 정보 — Employee as seen by the engine."""

    id: str
    name: str
    weekly_limit: float = 0  # 주간 근무 한도, 0이면 미설정 (0 = no personal limit)
    unavailable_times: list[UnavailableTime] = Field(default_factory=list)


# === 근무 (Shift) ===

class ShiftData(BaseModel):
    """엔진 입력/출력용 근무 정보.

    One scheduled work interval for one employee on one calendar day.
    ``hours`` is always derived from the times; any client-sent value is
    overwritten.
    """

    id: str
    employee_id: str
    date: date
    start_time: str
    end_time: str
    hours: float = 0
    is_published: bool = False

    _validate_times = field_validator("start_time", "end_time")(_check_time)

    @model_validator(mode="after")
    def _derive_hours(self) -> "ShiftData":
        if clock.parse_time(self.start_time) >= clock.parse_time(self.end_time):
            raise ValueError(
                f"start_time {self.start_time} must be before end_time {self.end_time}"
            )
        self.hours = clock.duration_hours(self.start_time, self.end_time)
        return self

    @property
    def start_minutes(self) -> int:
        return clock.parse_time(self.start_time)

    @property
    def end_minutes(self) -> int:
        return clock.parse_time(self.end_time)


class TentativeShift(BaseModel):
    """드래그/리사이즈 중 임시 근무 — Live, unrounded gesture feedback.

    ``start_hours``/``end_hours`` are the exact decimal hours; the string
    fields are their floored ``HH:MM`` display form.
    """

    shift_id: str
    start_hours: float
    end_hours: float
    start_time: str
    end_time: str
    hours: float
    duration: str  # "Hh Mm"
    left_px: float
    width_px: float


# === 충돌 (Conflict) ===

class ConflictReason(str, Enum):
    """충돌 사유 — evaluated in this order, first match wins."""

    STORE_CLOSED = "store_closed"
    OUTSIDE_STORE_HOURS = "outside_store_hours"
    OVERLAP_SAME_EMPLOYEE = "overlap_same_employee"
    WEEKLY_HOUR_CAP_EXCEEDED = "weekly_hour_cap_exceeded"


class ConflictResult(BaseModel):
    """충돌 검사 결과 — advisory, never blocks a commit."""

    has_conflict: bool = False
    reason: ConflictReason | None = None
    message: str | None = None
    conflicting_shift_id: str | None = None


# === 커버리지 (Coverage) ===

class CoverageProblemType(str, Enum):
    GAP = "gap"
    CONFLICT = "conflict"
    OVERTIME = "overtime"
    EMPTY_DAY = "empty_day"


class CoverageProblem(BaseModel):
    """커버리지 문제 — derived, never persisted."""

    type: CoverageProblemType
    reason: str | None = None  # conflict 하위 유형 — "unavailable"
    day: date
    time: str  # "HH:MM-HH:MM" 또는 "all day"
    description: str
    employee_id: str | None = None
    start_time: str | None = None
    end_time: str | None = None
    duration: str | None = None  # "Hh Mm"


class EmployeeWeeklyHours(BaseModel):
    """직원별 주간 배정 시간 요약."""

    employee_id: str
    employee_name: str
    week_start: date
    assigned_hours: float
    weekly_limit: float
    remaining_hours: float
    over_limit: bool
