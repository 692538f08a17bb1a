"""직원 서비스 — 직원 CRUD 비즈니스 로직.

Employee Service — Business logic for employee CRUD operations.
Employees are scoped to a store; their recurring unavailable windows are
managed together with the employee. Also converts rows into the engine's
``EmployeeData``.
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.engine import clock
from app.models.employee import Employee
from app.repositories.employee_repository import employee_repository
from app.schemas.employee import EmployeeCreate, EmployeeResponse, EmployeeUpdate
from app.schemas.scheduling import EmployeeData, UnavailableTime
from app.services.store_service import store_service
from app.utils.exceptions import NotFoundError


def _window_rows(windows: list[UnavailableTime]) -> list[dict]:
    return [
        {
            "day_of_week": w.day_of_week,
            "start_time": clock.to_time(w.start_time),
            "end_time": clock.to_time(w.end_time),
        }
        for w in windows
    ]


class EmployeeService:
    """직원 관련 비즈니스 로직을 처리하는 서비스.

    Service handling employee business logic.
    """

    def _unavailable(self, employee: Employee) -> list[UnavailableTime]:
        return [
            UnavailableTime(
                day_of_week=u.day_of_week,
                start_time=clock.from_time(u.start_time),
                end_time=clock.from_time(u.end_time),
            )
            for u in employee.unavailable_times
        ]

    def _to_response(self, employee: Employee) -> EmployeeResponse:
        """직원 모델을 응답 스키마로 변환합니다.

        Convert an Employee model instance to an EmployeeResponse schema.
        """
        return EmployeeResponse(
            id=str(employee.id),
            store_id=str(employee.store_id),
            name=employee.name,
            weekly_limit=employee.weekly_limit,
            color=employee.color,
            is_active=employee.is_active,
            unavailable_times=self._unavailable(employee),
            created_at=employee.created_at,
        )

    def to_employee_data(self, employee: Employee) -> EmployeeData:
        """엔진 입력용 직원 값으로 변환합니다."""
        return EmployeeData(
            id=str(employee.id),
            name=employee.name,
            weekly_limit=employee.weekly_limit,
            unavailable_times=self._unavailable(employee),
        )

    async def get_employee_or_404(
        self, db: AsyncSession, store_id: UUID, employee_id: UUID
    ) -> Employee:
        """매장 소속 직원을 조회하고 없으면 404를 발생시킵니다.

        Raises:
            NotFoundError: 직원을 찾을 수 없거나 다른 매장 소속일 때
                           (Employee not found or in another store)
        """
        employee: Employee | None = await employee_repository.get_detail(db, employee_id, store_id)
        if employee is None:
            raise NotFoundError("Employee not found in this store")
        return employee

    async def list_employees(
        self, db: AsyncSession, store_id: UUID, is_active: bool | None = None
    ) -> list[EmployeeResponse]:
        await store_service.get_store_or_404(db, store_id)
        employees: list[Employee] = await employee_repository.get_by_store(db, store_id, is_active)
        return [self._to_response(e) for e in employees]

    async def list_employee_data(self, db: AsyncSession, store_id: UUID) -> list[EmployeeData]:
        """매장 직원 전체를 엔진 값으로 조회합니다.

        Inactive employees are included so existing shifts keep a name.
        """
        employees: list[Employee] = await employee_repository.get_by_store(db, store_id)
        return [self.to_employee_data(e) for e in employees]

    async def get_employee(
        self, db: AsyncSession, store_id: UUID, employee_id: UUID
    ) -> EmployeeResponse:
        return self._to_response(await self.get_employee_or_404(db, store_id, employee_id))

    async def create_employee(
        self, db: AsyncSession, store_id: UUID, data: EmployeeCreate
    ) -> EmployeeResponse:
        """새 직원을 근무 불가 시간과 함께 생성합니다.

        Create an employee together with its unavailable windows.
        """
        await store_service.get_store_or_404(db, store_id)
        employee: Employee = Employee(
            store_id=store_id,
            name=data.name,
            weekly_limit=data.weekly_limit,
            color=data.color,
        )
        db.add(employee)
        await employee_repository.replace_unavailable_times(
            db, employee, _window_rows(data.unavailable_times)
        )
        return self._to_response(await self.get_employee_or_404(db, store_id, employee.id))

    async def update_employee(
        self, db: AsyncSession, store_id: UUID, employee_id: UUID, data: EmployeeUpdate
    ) -> EmployeeResponse:
        """직원 정보를 수정합니다.

        Update an employee. ``unavailable_times`` replaces the whole list
        when provided.
        """
        employee: Employee = await self.get_employee_or_404(db, store_id, employee_id)
        update_data: dict = data.model_dump(exclude_unset=True, exclude={"unavailable_times"})
        for field, value in update_data.items():
            setattr(employee, field, value)
        if data.unavailable_times is not None:
            await employee_repository.replace_unavailable_times(
                db, employee, _window_rows(data.unavailable_times)
            )
        await db.flush()
        return self._to_response(await self.get_employee_or_404(db, store_id, employee_id))

    async def delete_employee(
        self, db: AsyncSession, store_id: UUID, employee_id: UUID
    ) -> None:
        """직원을 삭제합니다 — 직원의 근무도 함께 삭제됩니다 (FK CASCADE)."""
        employee: Employee = await self.get_employee_or_404(db, store_id, employee_id)
        await db.delete(employee)
        await db.flush()


# 싱글턴 인스턴스 — Singleton instance
employee_service: EmployeeService = EmployeeService()
