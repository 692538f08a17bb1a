"""직원 레포지토리 — 직원 및 근무 불가 시간 쿼리.

Employee Repository — Queries for employees and their recurring
unavailable times. Unavailable times are eager-loaded on every query
(relationship ``lazy="selectin"``), so callers never trigger lazy loads
on the async session.
"""

from typing import Any
from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.employee import Employee, EmployeeUnavailableTime
from app.repositories.base import BaseRepository


class EmployeeRepository(BaseRepository[Employee]):
    """직원 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the employees table.
    """

    def __init__(self) -> None:
        """EmployeeRepository를 초기화합니다.

        Initialize the EmployeeRepository with the Employee model.
        """
        super().__init__(Employee)

    async def get_by_store(
        self,
        db: AsyncSession,
        store_id: UUID,
        is_active: bool | None = None,
    ) -> list[Employee]:
        """매장 직원 목록을 이름 순으로 조회합니다.

        Retrieve a store's employees ordered by name.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            store_id: 매장 ID (Store UUID)
            is_active: 활성 상태 필터, None이면 전체 (Active filter; None = all)

        Returns:
            list[Employee]: 근무 불가 시간이 로드된 직원 목록
                            (Employees with unavailable times loaded)
        """
        query: Select = (
            select(Employee)
            .options(selectinload(Employee.unavailable_times))
            .where(Employee.store_id == store_id)
            .order_by(Employee.name, Employee.id)
        )
        if is_active is not None:
            query = query.where(Employee.is_active == is_active)
        result = await db.execute(query)
        return list(result.scalars().all())

    async def get_detail(
        self,
        db: AsyncSession,
        employee_id: UUID,
        store_id: UUID | None = None,
    ) -> Employee | None:
        """직원 상세 정보를 근무 불가 시간과 함께 조회합니다.

        Retrieve one employee with unavailable times freshly loaded.
        ``populate_existing`` refreshes an instance already in the identity
        map, e.g. right after its unavailable times were replaced.
        """
        query: Select = (
            select(Employee)
            .options(selectinload(Employee.unavailable_times))
            .where(Employee.id == employee_id)
            .execution_options(populate_existing=True)
        )
        if store_id is not None:
            query = query.where(Employee.store_id == store_id)
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def replace_unavailable_times(
        self,
        db: AsyncSession,
        employee: Employee,
        windows: list[dict[str, Any]],
    ) -> None:
        """직원의 근무 불가 시간 전체를 교체합니다.

        Replace all unavailable windows of an employee. Old rows are removed
        through the ``delete-orphan`` cascade.
        """
        employee.unavailable_times = [EmployeeUnavailableTime(**window) for window in windows]
        await db.flush()


# 싱글턴 인스턴스 — Singleton instance
employee_repository: EmployeeRepository = EmployeeRepository()
