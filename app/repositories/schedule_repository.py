"""매장 운영시간 레포지토리 — 요일별 스케줄, 운영 예외, 공휴일 쿼리.

Store-hours Repository — Queries for the weekly opening schedule,
date-specific exceptions, and holidays of a store.
"""

from datetime import date
from typing import Any
from uuid import UUID

from sqlalchemy import Select, delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.store import Holiday, StoreException, StoreScheduleDay
from app.repositories.base import BaseRepository


class StoreScheduleRepository(BaseRepository[StoreScheduleDay]):
    """요일별 운영 스케줄 레포지토리.

    Weekly schedule repository. The schedule is always read and replaced
    as a whole week (plus the optional day-7 holiday entry).
    """

    def __init__(self) -> None:
        super().__init__(StoreScheduleDay)

    async def get_by_store(
        self,
        db: AsyncSession,
        store_id: UUID,
    ) -> list[StoreScheduleDay]:
        """매장의 요일별 스케줄을 요일 순으로 조회합니다.

        Retrieve a store's schedule entries ordered by day of week.
        """
        query: Select = (
            select(StoreScheduleDay)
            .where(StoreScheduleDay.store_id == store_id)
            .order_by(StoreScheduleDay.day_of_week)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def replace_for_store(
        self,
        db: AsyncSession,
        store_id: UUID,
        days: list[dict[str, Any]],
    ) -> list[StoreScheduleDay]:
        """매장의 요일별 스케줄 전체를 교체합니다.

        Replace every schedule entry of a store.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            store_id: 매장 ID (Store UUID)
            days: 새 스케줄 행 목록 {'day_of_week', 'is_open', 'time_ranges'}
                  (New schedule rows)

        Returns:
            list[StoreScheduleDay]: 저장된 스케줄 (Stored schedule, ordered)
        """
        await db.execute(delete(StoreScheduleDay).where(StoreScheduleDay.store_id == store_id))
        for day in days:
            db.add(StoreScheduleDay(store_id=store_id, **day))
        await db.flush()
        return await self.get_by_store(db, store_id)


class StoreExceptionRepository(BaseRepository[StoreException]):
    """날짜별 운영 예외 레포지토리 — Date-specific override queries."""

    def __init__(self) -> None:
        super().__init__(StoreException)

    async def get_by_store(
        self,
        db: AsyncSession,
        store_id: UUID,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> list[StoreException]:
        """매장의 운영 예외를 날짜 순으로 조회합니다 (기간 필터 선택).

        Retrieve a store's exceptions ordered by date, optionally limited
        to an inclusive date range.
        """
        query: Select = select(StoreException).where(StoreException.store_id == store_id)
        if date_from is not None:
            query = query.where(StoreException.exception_date >= date_from)
        if date_to is not None:
            query = query.where(StoreException.exception_date <= date_to)
        result = await db.execute(query.order_by(StoreException.exception_date))
        return list(result.scalars().all())


class HolidayRepository(BaseRepository[Holiday]):
    """공휴일 레포지토리 — Holiday date queries."""

    def __init__(self) -> None:
        super().__init__(Holiday)

    async def get_by_store(
        self,
        db: AsyncSession,
        store_id: UUID,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> list[Holiday]:
        query: Select = select(Holiday).where(Holiday.store_id == store_id)
        if date_from is not None:
            query = query.where(Holiday.holiday_date >= date_from)
        if date_to is not None:
            query = query.where(Holiday.holiday_date <= date_to)
        result = await db.execute(query.order_by(Holiday.holiday_date))
        return list(result.scalars().all())


# 싱글턴 인스턴스 — Singleton instances
store_schedule_repository: StoreScheduleRepository = StoreScheduleRepository()
store_exception_repository: StoreExceptionRepository = StoreExceptionRepository()
holiday_repository: HolidayRepository = HolidayRepository()
