"""관리자 매장 라우터 — 매장 CRUD 및 운영시간 엔드포인트.

Admin Store Router — CRUD endpoints for stores and their opening hours.
Mounted at /stores:
    - /stores, /stores/{store_id}: 매장 CRUD (Store CRUD)
    - /stores/{store_id}/schedule: 요일별 운영 스케줄 (Weekly schedule, day 7 = holiday)
    - /stores/{store_id}/exceptions: 날짜별 운영 예외 (Date-specific overrides)
    - /stores/{store_id}/holidays: 공휴일 (Holidays)
"""

from datetime import date
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.store import (
    HolidayCreate,
    HolidayResponse,
    StoreCreate,
    StoreExceptionCreate,
    StoreExceptionResponse,
    StoreResponse,
    StoreUpdate,
    WeeklyScheduleResponse,
    WeeklyScheduleUpdate,
)
from app.services.store_service import store_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[StoreResponse])
async def list_stores(
    db: Annotated[AsyncSession, Depends(get_db)],
    is_active: Annotated[bool | None, Query()] = None,
) -> list[StoreResponse]:
    """매장 목록을 조회합니다.

    List stores, optionally filtered by active flag.
    """
    return await store_service.list_stores(db, is_active)


@router.get("/{store_id}", response_model=StoreResponse)
async def get_store(
    store_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> StoreResponse:
    return await store_service.get_store(db, store_id)


@router.post("", response_model=StoreResponse, status_code=201)
async def create_store(
    data: StoreCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> StoreResponse:
    """새 매장을 생성합니다.

    Create a new store.
    """
    result: StoreResponse = await store_service.create_store(db, data)
    await db.commit()
    return result


@router.put("/{store_id}", response_model=StoreResponse)
async def update_store(
    store_id: UUID,
    data: StoreUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> StoreResponse:
    """매장 정보를 수정합니다.

    Update store information.
    """
    result: StoreResponse = await store_service.update_store(db, store_id, data)
    await db.commit()
    return result


@router.delete("/{store_id}", status_code=204)
async def delete_store(
    store_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> None:
    """매장을 삭제합니다. 직원, 근무, 운영시간이 함께 삭제됩니다.

    Delete a store together with its employees, shifts and hours.
    """
    await store_service.delete_store(db, store_id)
    await db.commit()


# === 요일별 운영 스케줄 (Weekly schedule) ===

@router.get("/{store_id}/schedule", response_model=WeeklyScheduleResponse)
async def get_schedule(
    store_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> WeeklyScheduleResponse:
    return await store_service.get_schedule(db, store_id)


@router.put("/{store_id}/schedule", response_model=WeeklyScheduleResponse)
async def replace_schedule(
    store_id: UUID,
    data: WeeklyScheduleUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> WeeklyScheduleResponse:
    """요일별 운영 스케줄 전체를 교체합니다.

    Replace the whole weekly schedule (days 0-6, optional holiday day 7).
    """
    result: WeeklyScheduleResponse = await store_service.replace_schedule(db, store_id, data)
    await db.commit()
    return result


# === 운영 예외 (Exceptions) ===

@router.get("/{store_id}/exceptions", response_model=list[StoreExceptionResponse])
async def list_exceptions(
    store_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    date_from: Annotated[date | None, Query()] = None,
    date_to: Annotated[date | None, Query()] = None,
) -> list[StoreExceptionResponse]:
    return await store_service.list_exceptions(db, store_id, date_from, date_to)


@router.post("/{store_id}/exceptions", response_model=StoreExceptionResponse, status_code=201)
async def add_exception(
    store_id: UUID,
    data: StoreExceptionCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> StoreExceptionResponse:
    """날짜별 운영 예외를 추가합니다.

    Add a date-specific override (closure or special hours).
    """
    result: StoreExceptionResponse = await store_service.add_exception(db, store_id, data)
    await db.commit()
    return result


@router.delete("/{store_id}/exceptions/{exception_id}", status_code=204)
async def delete_exception(
    store_id: UUID,
    exception_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> None:
    await store_service.delete_exception(db, store_id, exception_id)
    await db.commit()


# === 공휴일 (Holidays) ===

@router.get("/{store_id}/holidays", response_model=list[HolidayResponse])
async def list_holidays(
    store_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    date_from: Annotated[date | None, Query()] = None,
    date_to: Annotated[date | None, Query()] = None,
) -> list[HolidayResponse]:
    return await store_service.list_holidays(db, store_id, date_from, date_to)


@router.post("/{store_id}/holidays", response_model=HolidayResponse, status_code=201)
async def add_holiday(
    store_id: UUID,
    data: HolidayCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> HolidayResponse:
    result: HolidayResponse = await store_service.add_holiday(db, store_id, data)
    await db.commit()
    return result


@router.delete("/{store_id}/holidays/{holiday_id}", status_code=204)
async def delete_holiday(
    store_id: UUID,
    holiday_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> None:
    await store_service.delete_holiday(db, store_id, holiday_id)
    await db.commit()
