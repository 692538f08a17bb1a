"""근무 충돌 검사 모듈 — ConflictValidator.

Decides whether a candidate shift is admissible and, if not, which rule it
breaks. Rules run in priority order and the first match wins:

    store_closed -> outside_store_hours -> overlap_same_employee
    -> weekly_hour_cap_exceeded

Results are advisory. A conflicting shift is still committed; the caller
marks it and decides whether to block publishing.
"""

from collections.abc import Iterable

from app.engine import clock
from app.engine.store_hours import day_envelope
from app.schemas.scheduling import (
    ConflictReason,
    ConflictResult,
    EmployeeData,
    ShiftData,
    StoreScheduleDay,
)

# 주간 최대 근무시간 기본값 — Default weekly hour ceiling
DEFAULT_WEEKLY_HOUR_CAP: float = 48


def intervals_overlap(start_a: float, end_a: float, start_b: float, end_b: float) -> bool:
    """반개구간 [start, end) 겹침 검사 — touching intervals do not overlap."""
    return start_a < end_b and start_b < end_a


def shifts_overlap(a: ShiftData, b: ShiftData) -> bool:
    """같은 날짜의 두 근무 시간이 겹치는지 — symmetric in ``a`` and ``b``."""
    if a.date != b.date:
        return False
    return intervals_overlap(a.start_minutes, a.end_minutes, b.start_minutes, b.end_minutes)


class ConflictValidator:
    """후보 근무에 대한 충돌 규칙 검사기.

    Attributes:
        weekly_hour_cap: 주간 최대 근무시간 (Weekly ceiling in hours)
    """

    def __init__(self, weekly_hour_cap: float = DEFAULT_WEEKLY_HOUR_CAP) -> None:
        self.weekly_hour_cap: float = weekly_hour_cap

    def effective_cap(self, employee: EmployeeData | None) -> float:
        """직원 개인 한도와 매장 상한 중 작은 값."""
        if employee is not None and employee.weekly_limit > 0:
            return min(self.weekly_hour_cap, employee.weekly_limit)
        return self.weekly_hour_cap

    def check(
        self,
        candidate: ShiftData,
        shifts: Iterable[ShiftData],
        store_day: StoreScheduleDay | None,
        employee: EmployeeData | None = None,
    ) -> ConflictResult:
        """후보 근무의 첫 번째 위반 규칙을 반환합니다.

        Args:
            candidate: 검사할 근무 (Candidate shift)
            shifts: 기존 근무 목록, 후보 자신이 포함되어도 됨
                    (Existing shifts; the candidate's own id is ignored)
            store_day: 해당 날짜의 유효 운영 스케줄, 모르면 None
                       (Effective store schedule for the date, None if unknown)
            employee: 담당 직원 (Assigned employee, for the personal weekly limit)
        """
        others: list[ShiftData] = [s for s in shifts if s.id != candidate.id]

        result: ConflictResult | None = self._check_store_hours(candidate, store_day)
        if result is None:
            result = self._check_overlap(candidate, others)
        if result is None:
            result = self._check_weekly_cap(candidate, others, employee)
        return result or ConflictResult()

    def _check_store_hours(
        self, candidate: ShiftData, store_day: StoreScheduleDay | None
    ) -> ConflictResult | None:
        if store_day is None:
            return None
        if not store_day.is_open:
            return ConflictResult(
                has_conflict=True,
                reason=ConflictReason.STORE_CLOSED,
                message=f"The store is closed on {candidate.date.isoformat()}",
            )
        envelope: tuple[int, int] | None = day_envelope(store_day)
        if envelope is None:
            return None
        store_open, store_close = envelope
        if candidate.start_minutes < store_open or candidate.end_minutes > store_close:
            return ConflictResult(
                has_conflict=True,
                reason=ConflictReason.OUTSIDE_STORE_HOURS,
                message=(
                    f"Shift {candidate.start_time}-{candidate.end_time} is outside store hours "
                    f"{clock.format_minutes(store_open)}-{clock.format_minutes(store_close)}"
                ),
            )
        return None

    def _check_overlap(
        self, candidate: ShiftData, others: list[ShiftData]
    ) -> ConflictResult | None:
        for other in others:
            if other.employee_id == candidate.employee_id and shifts_overlap(candidate, other):
                return ConflictResult(
                    has_conflict=True,
                    reason=ConflictReason.OVERLAP_SAME_EMPLOYEE,
                    message=(
                        f"Overlaps the employee's shift {other.start_time}-{other.end_time}"
                    ),
                    conflicting_shift_id=other.id,
                )
        return None

    def _check_weekly_cap(
        self,
        candidate: ShiftData,
        others: list[ShiftData],
        employee: EmployeeData | None,
    ) -> ConflictResult | None:
        week_start, week_end = clock.week_bounds(candidate.date)
        existing: float = sum(
            s.hours
            for s in others
            if s.employee_id == candidate.employee_id and week_start <= s.date <= week_end
        )
        total: float = existing + candidate.hours
        cap: float = self.effective_cap(employee)
        # 분 단위 비교로 부동소수 오차 회피 — compare in whole minutes
        if round(total * 60) > round(cap * 60):
            return ConflictResult(
                has_conflict=True,
                reason=ConflictReason.WEEKLY_HOUR_CAP_EXCEEDED,
                message=(
                    f"Week of {week_start.isoformat()} totals {clock.format_duration(total)}, "
                    f"over the {clock.format_duration(cap)} limit"
                ),
            )
        return None

