"""커버리지 분석(CoverageAnalyzer) 단위 테스트.

CoverageAnalyzer unit tests — empty days, overtime, gaps (split ranges,
nested shifts, minimum gap), unavailability, per-day ordering, range
analysis with exceptions/holidays, and determinism.
"""

import random
from datetime import date, timedelta

import pytest

from app.engine.coverage import CoverageAnalyzer, summarize_weekly_hours
from app.schemas.scheduling import (
    CoverageProblemType,
    EmployeeData,
    ShiftData,
    StoreException,
    StoreScheduleDay,
    TimeRange,
    UnavailableTime,
)

MONDAY = date(2025, 3, 3)

ALICE = EmployeeData(id="emp-a", name="Alice", weekly_limit=40)
BOB = EmployeeData(id="emp-b", name="Bob")


def make(shift_id: str, employee: EmployeeData, start: str, end: str, day: date = MONDAY) -> ShiftData:
    return ShiftData(id=shift_id, employee_id=employee.id, date=day, start_time=start, end_time=end)


def open_day(*ranges: tuple[str, str], day_of_week: int = 1) -> StoreScheduleDay:
    return StoreScheduleDay(
        day_of_week=day_of_week,
        time_ranges=[TimeRange(open_time=o, close_time=c) for o, c in ranges],
    )


def week_schedule(open_time: str = "09:00", close_time: str = "20:00") -> list[StoreScheduleDay]:
    return [open_day((open_time, close_time), day_of_week=d) for d in range(7)]


@pytest.fixture
def analyzer() -> CoverageAnalyzer:
    return CoverageAnalyzer()


class TestEmptyDay:
    """근무 없는 날 테스트."""

    def test_single_empty_day_problem(self, analyzer):
        problems = analyzer.analyze_day(MONDAY, [], open_day(("09:00", "20:00")), [ALICE])
        assert len(problems) == 1
        assert problems[0].type is CoverageProblemType.EMPTY_DAY
        assert problems[0].time == "all day"
        assert problems[0].day == MONDAY

    def test_shifts_on_other_days_are_ignored(self, analyzer):
        other = make("s", ALICE, "09:00", "20:00", day=MONDAY + timedelta(days=1))
        problems = analyzer.analyze_day(MONDAY, [other], open_day(("09:00", "20:00")), [ALICE])
        assert [p.type for p in problems] == [CoverageProblemType.EMPTY_DAY]

    def test_unknown_hours_still_report_empty_day(self, analyzer):
        problems = analyzer.analyze_day(MONDAY, [], None, [])
        assert [p.type for p in problems] == [CoverageProblemType.EMPTY_DAY]

    def test_closed_day_has_no_problems(self, analyzer):
        closed = StoreScheduleDay(day_of_week=1, is_open=False)
        assert analyzer.analyze_day(MONDAY, [], closed, [ALICE]) == []
        shift = make("s", ALICE, "05:00", "23:00")
        assert analyzer.analyze_day(MONDAY, [shift], closed, [ALICE]) == []


class TestOvertime:
    """일일 초과근무 테스트."""

    def test_eleven_hours_is_three_over(self, analyzer):
        shifts = [make("a1", ALICE, "09:00", "13:00"), make("a2", ALICE, "14:00", "21:00")]
        problems = analyzer.analyze_day(MONDAY, shifts, open_day(("09:00", "21:00")), [ALICE])
        overtime = [p for p in problems if p.type is CoverageProblemType.OVERTIME]
        assert len(overtime) == 1
        assert overtime[0].duration == "3h 0m"
        assert overtime[0].employee_id == "emp-a"
        assert overtime[0].time == "09:00-21:00"
        assert "Alice" in overtime[0].description

    def test_exactly_threshold_is_not_overtime(self, analyzer):
        shifts = [make("a1", ALICE, "09:00", "17:00")]
        problems = analyzer.analyze_day(MONDAY, shifts, None, [ALICE])
        assert problems == []

    def test_configured_threshold(self):
        shifts = [make("a1", ALICE, "09:00", "17:00")]
        problems = CoverageAnalyzer(daily_overtime_hours=6).analyze_day(MONDAY, shifts, None, [ALICE])
        assert [(p.type, p.duration) for p in problems] == [(CoverageProblemType.OVERTIME, "2h 0m")]

    def test_unknown_employee_still_reported(self, analyzer):
        shifts = [make("x", BOB, "06:00", "18:00")]
        problems = analyzer.analyze_day(MONDAY, shifts, None, [])
        assert problems[0].type is CoverageProblemType.OVERTIME
        assert "Unknown employee" in problems[0].description


class TestGaps:
    """영업 구간 공백 테스트."""

    def test_two_hour_gap(self, analyzer):
        shifts = [make("a", ALICE, "09:00", "13:00"), make("b", BOB, "15:00", "20:00")]
        problems = analyzer.analyze_day(MONDAY, shifts, open_day(("09:00", "20:00")), [ALICE, BOB])
        assert len(problems) == 1
        gap = problems[0]
        assert gap.type is CoverageProblemType.GAP
        assert gap.time == "13:00-15:00"
        assert gap.start_time == "13:00"
        assert gap.end_time == "15:00"
        assert gap.duration == "2h 0m"

    def test_leading_and_trailing_gaps(self, analyzer):
        shifts = [make("a", ALICE, "10:00", "18:00")]
        problems = analyzer.analyze_day(MONDAY, shifts, open_day(("09:00", "20:00")), [ALICE])
        assert [p.time for p in problems] == ["09:00-10:00", "18:00-20:00"]

    def test_nested_shift_does_not_reopen_gap(self, analyzer):
        shifts = [
            make("a", ALICE, "09:00", "17:00"),
            make("b", BOB, "10:00", "11:00"),
            make("c", BOB, "17:00", "20:00"),
        ]
        problems = analyzer.analyze_day(MONDAY, shifts, open_day(("09:00", "20:00")), [ALICE, BOB])
        assert [p for p in problems if p.type is CoverageProblemType.GAP] == []

    def test_minimum_gap(self, analyzer):
        short = [make("a", ALICE, "09:00", "13:00"), make("b", BOB, "13:04", "20:00")]
        assert analyzer.analyze_day(MONDAY, short, open_day(("09:00", "20:00")), []) == []
        exact = [make("a", ALICE, "09:00", "13:00"), make("b", BOB, "13:05", "20:00")]
        problems = analyzer.analyze_day(MONDAY, exact, open_day(("09:00", "20:00")), [])
        assert [p.time for p in problems] == ["13:00-13:05"]

    def test_split_day_checks_each_range(self, analyzer):
        split = open_day(("09:00", "12:00"), ("14:00", "20:00"))
        shifts = [make("a", ALICE, "09:00", "12:00"), make("b", BOB, "14:00", "18:00")]
        problems = analyzer.analyze_day(MONDAY, shifts, split, [ALICE, BOB])
        assert [p.time for p in problems] == ["18:00-20:00"]

    def test_lunch_break_is_not_a_gap(self, analyzer):
        split = open_day(("09:00", "12:00"), ("14:00", "20:00"))
        shifts = [make("a", ALICE, "09:00", "12:00"), make("b", BOB, "14:00", "20:00")]
        assert analyzer.analyze_day(MONDAY, shifts, split, [ALICE, BOB]) == []

    def test_unknown_hours_skip_gap_checks(self, analyzer):
        shifts = [make("a", ALICE, "10:00", "11:00")]
        assert analyzer.analyze_day(MONDAY, shifts, None, [ALICE]) == []


class TestUnavailability:
    """근무 불가 시간 충돌 테스트."""

    def test_overlap_with_unavailable_window(self, analyzer):
        carol = EmployeeData(
            id="emp-c",
            name="Carol",
            unavailable_times=[UnavailableTime(day_of_week=1, start_time="12:00", end_time="14:00")],
        )
        shifts = [make("c", carol, "09:00", "13:00")]
        problems = analyzer.analyze_day(MONDAY, shifts, None, [carol])
        assert len(problems) == 1
        conflict = problems[0]
        assert conflict.type is CoverageProblemType.CONFLICT
        assert conflict.reason == "unavailable"
        assert conflict.time == "12:00-13:00"
        assert conflict.duration == "1h 0m"
        assert conflict.employee_id == "emp-c"

    def test_other_weekday_ignored(self, analyzer):
        carol = EmployeeData(
            id="emp-c",
            name="Carol",
            unavailable_times=[UnavailableTime(day_of_week=2, start_time="09:00", end_time="18:00")],
        )
        assert analyzer.analyze_day(MONDAY, [make("c", carol, "09:00", "13:00")], None, [carol]) == []

    def test_touching_window_is_fine(self, analyzer):
        carol = EmployeeData(
            id="emp-c",
            name="Carol",
            unavailable_times=[UnavailableTime(day_of_week=1, start_time="13:00", end_time="18:00")],
        )
        assert analyzer.analyze_day(MONDAY, [make("c", carol, "09:00", "13:00")], None, [carol]) == []


class TestOrdering:
    """탐지 순서 및 결정성 테스트."""

    @pytest.fixture
    def busy_day(self) -> tuple[list[ShiftData], list[EmployeeData]]:
        dave = EmployeeData(
            id="emp-d",
            name="Dave",
            unavailable_times=[UnavailableTime(day_of_week=1, start_time="18:00", end_time="19:00")],
        )
        shifts = [
            make("d1", dave, "09:00", "13:00"),
            make("d2", dave, "14:00", "19:00"),
            make("b1", BOB, "10:00", "12:00"),
        ]
        return shifts, [dave, BOB]

    def test_detection_order_within_day(self, analyzer, busy_day):
        shifts, employees = busy_day
        problems = analyzer.analyze_day(MONDAY, shifts, open_day(("09:00", "20:00")), employees)
        assert [p.type for p in problems] == [
            CoverageProblemType.OVERTIME,
            CoverageProblemType.GAP,
            CoverageProblemType.GAP,
            CoverageProblemType.CONFLICT,
        ]
        assert [p.time for p in problems[1:3]] == ["13:00-14:00", "19:00-20:00"]

    def test_input_order_does_not_matter(self, analyzer, busy_day):
        shifts, employees = busy_day
        expected = analyzer.analyze_day(MONDAY, shifts, open_day(("09:00", "20:00")), employees)
        rng = random.Random(7)
        for _ in range(5):
            shuffled = shifts[:]
            rng.shuffle(shuffled)
            assert analyzer.analyze_day(
                MONDAY, shuffled, open_day(("09:00", "20:00")), list(reversed(employees))
            ) == expected

    def test_idempotent_week(self, analyzer, busy_day):
        shifts, employees = busy_day
        schedule = week_schedule()
        first = analyzer.analyze_range(MONDAY, MONDAY + timedelta(days=6), shifts, schedule, employees)
        second = analyzer.analyze_range(MONDAY, MONDAY + timedelta(days=6), shifts, schedule, employees)
        assert first == second
        assert [p.model_dump() for p in first] == [p.model_dump() for p in second]


class TestAnalyzeRange:
    """기간 분석 테스트."""

    def test_days_in_date_order(self, analyzer):
        wednesday = MONDAY + timedelta(days=2)
        shifts = [make("a", ALICE, "09:00", "17:00", day=wednesday), make("b", BOB, "12:00", "20:00", day=wednesday)]
        problems = analyzer.analyze_range(MONDAY, MONDAY + timedelta(days=6), shifts, week_schedule(), [ALICE])
        days = [p.day for p in problems]
        assert days == sorted(days)
        assert wednesday not in days
        assert len(problems) == 6
        assert all(p.type is CoverageProblemType.EMPTY_DAY for p in problems)

    def test_exception_closes_a_day(self, analyzer):
        closure = StoreException(date=MONDAY, is_open=False, reason="Inventory")
        problems = analyzer.analyze_range(
            MONDAY, MONDAY, [], week_schedule(), [], exceptions=[closure]
        )
        assert problems == []

    def test_exception_with_special_hours(self, analyzer):
        short_day = StoreException(
            date=MONDAY, is_open=True, time_ranges=[TimeRange(open_time="12:00", close_time="16:00")]
        )
        shifts = [make("a", ALICE, "12:00", "15:00")]
        problems = analyzer.analyze_range(
            MONDAY, MONDAY, shifts, week_schedule(), [ALICE], exceptions=[short_day]
        )
        assert [p.time for p in problems] == ["15:00-16:00"]

    def test_holiday_uses_holiday_schedule(self, analyzer):
        schedule = week_schedule() + [StoreScheduleDay(day_of_week=7, is_open=False)]
        assert analyzer.analyze_range(MONDAY, MONDAY, [], schedule, [], holidays=[MONDAY]) == []

    def test_holiday_without_holiday_entry_uses_weekday(self, analyzer):
        problems = analyzer.analyze_range(MONDAY, MONDAY, [], week_schedule(), [], holidays=[MONDAY])
        assert [p.type for p in problems] == [CoverageProblemType.EMPTY_DAY]

    def test_empty_inputs_never_fail(self, analyzer):
        problems = analyzer.analyze_range(MONDAY, MONDAY + timedelta(days=1), [], [], [])
        assert [p.type for p in problems] == [CoverageProblemType.EMPTY_DAY] * 2


class TestWeeklyHours:
    """직원별 주간 시간 요약 테스트."""

    def test_summary(self):
        shifts = [
            make("a1", ALICE, "08:00", "20:00"),
            make("a2", ALICE, "08:00", "20:00", day=MONDAY + timedelta(days=1)),
            make("a3", ALICE, "08:00", "20:00", day=MONDAY + timedelta(days=2)),
            make("a4", ALICE, "08:00", "13:00", day=MONDAY + timedelta(days=3)),
            make("b1", BOB, "09:00", "16:55", day=MONDAY + timedelta(days=6)),
            make("b0", BOB, "09:00", "17:00", day=MONDAY - timedelta(days=1)),
        ]
        summary = summarize_weekly_hours(MONDAY + timedelta(days=3), shifts, [BOB, ALICE], 48)
        assert [s.employee_name for s in summary] == ["Alice", "Bob"]
        alice, bob = summary
        assert alice.week_start == MONDAY
        assert alice.assigned_hours == 41
        assert alice.weekly_limit == 40
        assert alice.over_limit is True
        assert alice.remaining_hours == 0
        assert bob.assigned_hours == pytest.approx(475 / 60)
        assert bob.weekly_limit == 48
        assert bob.over_limit is False

    def test_employee_without_shifts(self):
        summary = summarize_weekly_hours(MONDAY, [], [ALICE], 48)
        assert summary[0].assigned_hours == 0
        assert summary[0].remaining_hours == 40
