"""근무 레포지토리 — 근무 CRUD 쿼리.

Shift Repository — CRUD queries for shifts.
Extends BaseRepository with date-range and per-employee week lookups used
by the conflict validator and the coverage analyzer.
"""

from datetime import date
from typing import Sequence
from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.shift import Shift
from app.repositories.base import BaseRepository


class ShiftRepository(BaseRepository[Shift]):
    """근무 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the shifts table.
    """

    def __init__(self) -> None:
        """ShiftRepository를 초기화합니다.

        Initialize the ShiftRepository with the Shift model.
        """
        super().__init__(Shift)

    async def get_by_range(
        self,
        db: AsyncSession,
        store_id: UUID,
        date_from: date,
        date_to: date,
        employee_id: UUID | None = None,
        is_published: bool | None = None,
    ) -> list[Shift]:
        """기간 내 매장 근무를 날짜/시작 시각 순으로 조회합니다.

        Retrieve a store's shifts within an inclusive date range, ordered by
        date, start time, and end time.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            store_id: 매장 ID (Store UUID)
            date_from: 시작일, 포함 (Range start, inclusive)
            date_to: 종료일, 포함 (Range end, inclusive)
            employee_id: 직원 필터, 선택 (Optional employee filter)
            is_published: 게시 여부 필터, 선택 (Optional published filter)

        Returns:
            list[Shift]: 근무 목록 (List of shifts)
        """
        query: Select = select(Shift).where(
            Shift.store_id == store_id,
            Shift.work_date >= date_from,
            Shift.work_date <= date_to,
        )
        if employee_id is not None:
            query = query.where(Shift.employee_id == employee_id)
        if is_published is not None:
            query = query.where(Shift.is_published == is_published)
        query = query.order_by(Shift.work_date, Shift.start_time, Shift.end_time, Shift.id)
        result = await db.execute(query)
        return list(result.scalars().all())

    async def get_for_employee(
        self,
        db: AsyncSession,
        employee_id: UUID,
        date_from: date,
        date_to: date,
    ) -> list[Shift]:
        """직원의 기간 내 근무를 매장과 무관하게 조회합니다.

        Retrieve all of one employee's shifts in a date range, across stores.
        """
        query: Select = (
            select(Shift)
            .where(
                Shift.employee_id == employee_id,
                Shift.work_date >= date_from,
                Shift.work_date <= date_to,
            )
            .order_by(Shift.work_date, Shift.start_time)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def get_by_ids(
        self,
        db: AsyncSession,
        store_id: UUID,
        shift_ids: Sequence[UUID],
    ) -> list[Shift]:
        """ID 목록에 해당하는 매장 근무를 조회합니다."""
        if not shift_ids:
            return []
        query: Select = select(Shift).where(Shift.store_id == store_id, Shift.id.in_(shift_ids))
        result = await db.execute(query)
        return list(result.scalars().all())


# 싱글턴 인스턴스 — Singleton instance
shift_repository: ShiftRepository = ShiftRepository()
