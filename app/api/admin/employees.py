"""관리자 직원 라우터 — 매장 하위 직원 CRUD 엔드포인트.

Admin Employee Router — CRUD endpoints for employees under a store.
All endpoints are nested under /stores/{store_id}/employees.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.employee import EmployeeCreate, EmployeeResponse, EmployeeUpdate
from app.services.employee_service import employee_service

router: APIRouter = APIRouter()


@router.get(
    "/stores/{store_id}/employees",
    response_model=list[EmployeeResponse],
)
async def list_employees(
    store_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    is_active: Annotated[bool | None, Query()] = None,
) -> list[EmployeeResponse]:
    """매장 직원 목록을 조회합니다.

    List the employees of a store, ordered by name.
    """
    return await employee_service.list_employees(db, store_id, is_active)


@router.get(
    "/stores/{store_id}/employees/{employee_id}",
    response_model=EmployeeResponse,
)
async def get_employee(
    store_id: UUID,
    employee_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> EmployeeResponse:
    return await employee_service.get_employee(db, store_id, employee_id)


@router.post(
    "/stores/{store_id}/employees",
    response_model=EmployeeResponse,
    status_code=201,
)
async def create_employee(
    store_id: UUID,
    data: EmployeeCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> EmployeeResponse:
    """새 직원을 등록합니다.

    Create an employee with its recurring unavailable windows.
    """
    result: EmployeeResponse = await employee_service.create_employee(db, store_id, data)
    await db.commit()
    return result


@router.put(
    "/stores/{store_id}/employees/{employee_id}",
    response_model=EmployeeResponse,
)
async def update_employee(
    store_id: UUID,
    employee_id: UUID,
    data: EmployeeUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> EmployeeResponse:
    """직원 정보를 수정합니다.

    Update an employee; ``unavailable_times`` replaces the list when sent.
    """
    result: EmployeeResponse = await employee_service.update_employee(
        db, store_id, employee_id, data
    )
    await db.commit()
    return result


@router.delete(
    "/stores/{store_id}/employees/{employee_id}",
    status_code=204,
)
async def delete_employee(
    store_id: UUID,
    employee_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> None:
    """직원을 삭제합니다. 직원의 근무도 함께 삭제됩니다.

    Delete an employee together with their shifts.
    """
    await employee_service.delete_employee(db, store_id, employee_id)
    await db.commit()
