"""커버리지 서비스 — 주간 커버리지 분석 및 주간 근무시간 요약.

Coverage Service — Runs the coverage analyzer over a store's date range
and summarizes weekly hours per employee. Results are derived on every
call and never persisted.
"""

from collections import Counter
from datetime import date
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.engine import clock
from app.engine.coverage import CoverageAnalyzer, summarize_weekly_hours
from app.schemas.coverage import CoverageResponse, WeeklyHoursResponse
from app.schemas.scheduling import CoverageProblem, EmployeeData, ShiftData
from app.services.employee_service import employee_service
from app.services.labor_law_service import labor_law_service
from app.services.shift_service import shift_service
from app.services.store_service import StoreHours, store_service
from app.utils.exceptions import BadRequestError

# 한 번에 분석할 수 있는 최대 일수 — Longest range analyzed in one call
MAX_RANGE_DAYS: int = 62


class CoverageService:

    async def analyze(
        self,
        db: AsyncSession,
        store_id: UUID,
        date_from: date,
        date_to: date | None = None,
    ) -> CoverageResponse:
        """기간 내 커버리지 문제를 날짜 순으로 분석합니다.

        Analyze ``[date_from, date_to]`` (default: the ISO week containing
        ``date_from``) and return problems per day in date order.

        Raises:
            NotFoundError: 매장을 찾을 수 없을 때 (Store not found)
            BadRequestError: 기간이 잘못되었거나 너무 길 때 (Invalid or too long range)
        """
        if date_to is None:
            date_from, date_to = clock.week_bounds(date_from)
        if date_to < date_from:
            raise BadRequestError("date_to must not be before date_from")
        if (date_to - date_from).days + 1 > MAX_RANGE_DAYS:
            raise BadRequestError(f"Coverage ranges are limited to {MAX_RANGE_DAYS} days")
        await store_service.get_store_or_404(db, store_id)

        shifts: list[ShiftData] = await shift_service.list_shift_data(db, store_id, date_from, date_to)
        employees: list[EmployeeData] = await employee_service.list_employee_data(db, store_id)
        hours: StoreHours = await store_service.load_hours(db, store_id, date_from, date_to)
        thresholds = await labor_law_service.get_thresholds(db, store_id)

        analyzer: CoverageAnalyzer = CoverageAnalyzer(
            daily_overtime_hours=thresholds.daily_overtime_hours,
            min_gap_minutes=settings.MIN_GAP_MINUTES,
        )
        problems: list[CoverageProblem] = analyzer.analyze_range(
            date_from,
            date_to,
            shifts,
            hours.schedule,
            employees,
            hours.exceptions,
            hours.holidays,
        )
        counts: Counter = Counter(p.type.value for p in problems)
        return CoverageResponse(
            store_id=str(store_id),
            date_from=date_from,
            date_to=date_to,
            problems=problems,
            counts=dict(counts),
        )

    async def weekly_hours(
        self, db: AsyncSession, store_id: UUID, week_start: date
    ) -> WeeklyHoursResponse:
        """직원별 주간 배정 시간과 한도를 요약합니다."""
        await store_service.get_store_or_404(db, store_id)
        start, end = clock.week_bounds(week_start)
        shifts: list[ShiftData] = await shift_service.list_shift_data(db, store_id, start, end)
        employees: list[EmployeeData] = await employee_service.list_employee_data(db, store_id)
        thresholds = await labor_law_service.get_thresholds(db, store_id)
        return WeeklyHoursResponse(
            store_id=str(store_id),
            week_start=start,
            week_end=end,
            employees=summarize_weekly_hours(start, shifts, employees, thresholds.weekly_hour_cap),
        )


coverage_service: CoverageService = CoverageService()
