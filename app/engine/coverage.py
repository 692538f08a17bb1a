"""커버리지 분석 모듈 — CoverageAnalyzer.

Scans a range of days against the store's opening schedule and employee
constraints and reports coverage problems. Per day, problems come in this
order:

    1. empty_day  — 영업일인데 근무가 하나도 없음 (other checks skipped)
    2. overtime   — 직원의 일일 합계가 기준 초과
    3. gap        — 영업 구간 중 아무도 없는 5분 이상의 빈 시간
    4. conflict   — 직원의 근무 불가 시간과 겹침 (reason="unavailable")

The analyzer is a pure function of its inputs; identical inputs always give
an identical, identically ordered list.
"""

from collections.abc import Iterable, Sequence
from datetime import date

from app.engine import clock
from app.engine.conflicts import ConflictValidator, intervals_overlap
from app.engine.store_hours import resolve_day
from app.schemas.scheduling import (
    CoverageProblem,
    CoverageProblemType,
    EmployeeData,
    EmployeeWeeklyHours,
    ShiftData,
    StoreException,
    StoreScheduleDay,
)

# 일일 초과근무 기준 — Daily overtime threshold in hours
DEFAULT_DAILY_OVERTIME_HOURS: float = 8

# 보고 대상 최소 공백(분) — Gaps shorter than this are ignored
DEFAULT_MIN_GAP_MINUTES: int = 5

ALL_DAY: str = "all day"


def _sort_key(shift: ShiftData) -> tuple:
    return (shift.start_minutes, shift.end_minutes, shift.employee_id, shift.id)


def _span(start: int, end: int) -> str:
    return f"{clock.format_minutes(start)}-{clock.format_minutes(end)}"


class CoverageAnalyzer:
    """일별 커버리지 문제 탐지기.

    Attributes:
        daily_overtime_hours: 일일 초과근무 기준 (Daily overtime threshold)
        min_gap_minutes: 최소 공백 길이 (Minimum reportable gap)
    """

    def __init__(
        self,
        daily_overtime_hours: float = DEFAULT_DAILY_OVERTIME_HOURS,
        min_gap_minutes: int = DEFAULT_MIN_GAP_MINUTES,
    ) -> None:
        self.daily_overtime_hours: float = daily_overtime_hours
        self.min_gap_minutes: int = min_gap_minutes

    def analyze_day(
        self,
        day: date,
        shifts: Iterable[ShiftData],
        store_day: StoreScheduleDay | None,
        employees: Iterable[EmployeeData],
    ) -> list[CoverageProblem]:
        """하루치 커버리지 문제를 탐지 순서대로 반환합니다.

        Args:
            day: 분석 날짜 (Calendar day)
            shifts: 근무 목록, 다른 날짜 근무는 무시
                    (Shifts; entries for other dates are ignored)
            store_day: 해당 날짜의 유효 운영 스케줄, None이면 시간 미정의
                       (Effective store schedule; None means hours unknown)
            employees: 직원 목록 (Employees, for names and unavailability)
        """
        if store_day is not None and not store_day.is_open:
            return []

        day_shifts: list[ShiftData] = sorted(
            (s for s in shifts if s.date == day), key=_sort_key
        )
        if not day_shifts:
            return [
                CoverageProblem(
                    type=CoverageProblemType.EMPTY_DAY,
                    day=day,
                    time=ALL_DAY,
                    description=f"No shifts scheduled on {day.isoformat()}",
                )
            ]

        staff: dict[str, EmployeeData] = {e.id: e for e in employees}
        problems: list[CoverageProblem] = []
        problems.extend(self._overtime(day, day_shifts, staff))
        if store_day is not None:
            problems.extend(self._gaps(day, day_shifts, store_day))
        problems.extend(self._unavailable(day, day_shifts, staff))
        return problems

    def analyze_range(
        self,
        date_from: date,
        date_to: date,
        shifts: Sequence[ShiftData],
        schedule: Sequence[StoreScheduleDay],
        employees: Sequence[EmployeeData],
        exceptions: Sequence[StoreException] = (),
        holidays: Sequence[date] = (),
    ) -> list[CoverageProblem]:
        """기간 전체를 날짜 순으로 분석합니다."""
        problems: list[CoverageProblem] = []
        for day in clock.iter_days(date_from, date_to):
            store_day: StoreScheduleDay | None = resolve_day(day, schedule, exceptions, holidays)
            problems.extend(self.analyze_day(day, shifts, store_day, employees))
        return problems

    def _overtime(
        self, day: date, day_shifts: list[ShiftData], staff: dict[str, EmployeeData]
    ) -> list[CoverageProblem]:
        # 첫 등장 순서로 직원별 그룹화 — group by employee in first-seen order
        grouped: dict[str, list[ShiftData]] = {}
        for shift in day_shifts:
            grouped.setdefault(shift.employee_id, []).append(shift)

        threshold_minutes: int = round(self.daily_overtime_hours * 60)
        problems: list[CoverageProblem] = []
        for employee_id, employee_shifts in grouped.items():
            worked: int = sum(
                clock.duration_minutes(s.start_minutes, s.end_minutes) for s in employee_shifts
            )
            if worked <= threshold_minutes:
                continue
            excess: str = clock.format_duration((worked - threshold_minutes) / 60)
            name: str = staff[employee_id].name if employee_id in staff else "Unknown employee"
            first: int = employee_shifts[0].start_minutes
            last: int = max(s.end_minutes for s in employee_shifts)
            problems.append(
                CoverageProblem(
                    type=CoverageProblemType.OVERTIME,
                    day=day,
                    time=_span(first, last),
                    description=(
                        f"{name} works {clock.format_duration(worked / 60)}, "
                        f"{excess} over the daily limit of "
                        f"{clock.format_duration(self.daily_overtime_hours)}"
                    ),
                    employee_id=employee_id,
                    start_time=clock.format_minutes(first),
                    end_time=clock.format_minutes(last),
                    duration=excess,
                )
            )
        return problems

    def _gap(self, day: date, start: int, end: int) -> CoverageProblem:
        length: str = clock.format_duration((end - start) / 60)
        return CoverageProblem(
            type=CoverageProblemType.GAP,
            day=day,
            time=_span(start, end),
            description=f"No coverage from {_span(start, end)} ({length})",
            start_time=clock.format_minutes(start),
            end_time=clock.format_minutes(end),
            duration=length,
        )

    def _gaps(
        self, day: date, day_shifts: list[ShiftData], store_day: StoreScheduleDay
    ) -> list[CoverageProblem]:
        problems: list[CoverageProblem] = []
        for time_range in store_day.time_ranges:
            range_open: int = clock.parse_time(time_range.open_time)
            range_close: int = clock.parse_time(time_range.close_time)
            in_range: list[ShiftData] = [
                s for s in day_shifts
                if intervals_overlap(s.start_minutes, s.end_minutes, range_open, range_close)
            ]
            last_end: int = range_open
            for shift in in_range:
                if shift.start_minutes - last_end >= self.min_gap_minutes:
                    problems.append(self._gap(day, last_end, shift.start_minutes))
                # 앞 근무에 포함된 근무는 공백을 다시 열지 않음
                last_end = max(last_end, shift.end_minutes)
            if range_close - last_end >= self.min_gap_minutes:
                problems.append(self._gap(day, last_end, range_close))
        return problems

    def _unavailable(
        self, day: date, day_shifts: list[ShiftData], staff: dict[str, EmployeeData]
    ) -> list[CoverageProblem]:
        weekday: int = clock.day_of_week(day)
        problems: list[CoverageProblem] = []
        for shift in day_shifts:
            employee: EmployeeData | None = staff.get(shift.employee_id)
            if employee is None:
                continue
            windows = sorted(
                (w for w in employee.unavailable_times if w.day_of_week == weekday),
                key=lambda w: (clock.parse_time(w.start_time), clock.parse_time(w.end_time)),
            )
            for window in windows:
                start: int = max(shift.start_minutes, clock.parse_time(window.start_time))
                end: int = min(shift.end_minutes, clock.parse_time(window.end_time))
                if start >= end:
                    continue
                problems.append(
                    CoverageProblem(
                        type=CoverageProblemType.CONFLICT,
                        reason="unavailable",
                        day=day,
                        time=_span(start, end),
                        description=(
                            f"{employee.name} is unavailable {_span(start, end)} "
                            f"but scheduled {shift.start_time}-{shift.end_time}"
                        ),
                        employee_id=employee.id,
                        start_time=clock.format_minutes(start),
                        end_time=clock.format_minutes(end),
                        duration=clock.format_duration((end - start) / 60),
                    )
                )
        return problems


def summarize_weekly_hours(
    week_start: date,
    shifts: Iterable[ShiftData],
    employees: Iterable[EmployeeData],
    weekly_hour_cap: float,
) -> list[EmployeeWeeklyHours]:
    """직원별 주간 배정 시간과 한도를 요약합니다.

    Per-employee assigned hours for the ISO week containing ``week_start``,
    compared with the effective weekly limit (personal limit capped by the
    store ceiling). Employees are listed by name, then id.
    """
    start, end = clock.week_bounds(week_start)
    minutes_by_employee: dict[str, int] = {}
    for shift in shifts:
        if start <= shift.date <= end:
            minutes_by_employee[shift.employee_id] = minutes_by_employee.get(
                shift.employee_id, 0
            ) + clock.duration_minutes(shift.start_minutes, shift.end_minutes)

    validator: ConflictValidator = ConflictValidator(weekly_hour_cap)
    summary: list[EmployeeWeeklyHours] = []
    for employee in sorted(employees, key=lambda e: (e.name, e.id)):
        limit: float = validator.effective_cap(employee)
        assigned: float = minutes_by_employee.get(employee.id, 0) / 60
        summary.append(
            EmployeeWeeklyHours(
                employee_id=employee.id,
                employee_name=employee.name,
                week_start=start,
                assigned_hours=assigned,
                weekly_limit=limit,
                remaining_hours=max(0.0, limit - assigned),
                over_limit=round(assigned * 60) > round(limit * 60),
            )
        )
    return summary
