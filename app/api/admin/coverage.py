"""관리자 커버리지 라우터 — 커버리지 분석 및 주간 근무시간 요약.

Admin Coverage Router — Nested under /stores/{store_id}:
    - GET /coverage: 기간 커버리지 문제 (gaps, overtime, unavailability, empty days)
    - GET /weekly-hours: 직원별 주간 배정 시간 (Weekly hours per employee)
"""

from datetime import date
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.coverage import CoverageResponse, WeeklyHoursResponse
from app.services.coverage_service import coverage_service

router: APIRouter = APIRouter()


@router.get("/stores/{store_id}/coverage", response_model=CoverageResponse)
async def analyze_coverage(
    store_id: UUID,
    date_from: Annotated[date, Query()],
    db: Annotated[AsyncSession, Depends(get_db)],
    date_to: Annotated[date | None, Query()] = None,
) -> CoverageResponse:
    """기간 내 커버리지 문제를 분석합니다.

    Analyze ``[date_from, date_to]``; without ``date_to`` the ISO week
    containing ``date_from`` is analyzed.
    """
    return await coverage_service.analyze(db, store_id, date_from, date_to)


@router.get("/stores/{store_id}/weekly-hours", response_model=WeeklyHoursResponse)
async def weekly_hours(
    store_id: UUID,
    week_start: Annotated[date, Query()],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> WeeklyHoursResponse:
    return await coverage_service.weekly_hours(db, store_id, week_start)
