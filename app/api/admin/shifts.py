"""관리자 근무 라우터 — 매장 하위 근무 CRUD, 게시, 주간 복사 엔드포인트.

Admin Shift Router — Endpoints for shifts under a store.
All endpoints are nested under /stores/{store_id}/shifts. Mutations return
the saved shift together with its advisory conflict.
"""

from datetime import date
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.shift import (
    CopyWeekRequest,
    CopyWeekResponse,
    PublishRequest,
    PublishResponse,
    ShiftCreate,
    ShiftMutationResponse,
    ShiftResponse,
    ShiftUpdate,
)
from app.services.shift_service import shift_service

router: APIRouter = APIRouter()


@router.get(
    "/stores/{store_id}/shifts",
    response_model=list[ShiftResponse],
)
async def list_shifts(
    store_id: UUID,
    date_from: Annotated[date, Query()],
    date_to: Annotated[date, Query()],
    db: Annotated[AsyncSession, Depends(get_db)],
    employee_id: Annotated[UUID | None, Query()] = None,
) -> list[ShiftResponse]:
    """기간 내 매장 근무 목록을 조회합니다.

    List a store's shifts in an inclusive date range.
    """
    return await shift_service.list_shifts(db, store_id, date_from, date_to, employee_id)


@router.get(
    "/stores/{store_id}/shifts/{shift_id}",
    response_model=ShiftResponse,
)
async def get_shift(
    store_id: UUID,
    shift_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ShiftResponse:
    return await shift_service.get_shift(db, store_id, shift_id)


@router.post(
    "/stores/{store_id}/shifts",
    response_model=ShiftMutationResponse,
    status_code=201,
)
async def create_shift(
    store_id: UUID,
    data: ShiftCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ShiftMutationResponse:
    """새 근무를 초안으로 생성합니다.

    Create a draft shift; the response carries its advisory conflict.
    """
    result: ShiftMutationResponse = await shift_service.create_shift(db, store_id, data)
    await db.commit()
    return result


@router.put(
    "/stores/{store_id}/shifts/{shift_id}",
    response_model=ShiftMutationResponse,
)
async def update_shift(
    store_id: UUID,
    shift_id: UUID,
    data: ShiftUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ShiftMutationResponse:
    """근무를 수정합니다. 수정된 근무는 초안으로 돌아갑니다.

    Update a shift; it returns to draft.
    """
    result: ShiftMutationResponse = await shift_service.update_shift(
        db, store_id, shift_id, data
    )
    await db.commit()
    return result


@router.delete(
    "/stores/{store_id}/shifts/{shift_id}",
    status_code=204,
)
async def delete_shift(
    store_id: UUID,
    shift_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> None:
    await shift_service.delete_shift(db, store_id, shift_id)
    await db.commit()


@router.post(
    "/stores/{store_id}/shifts/publish",
    response_model=PublishResponse,
)
async def publish_shifts(
    store_id: UUID,
    data: PublishRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> PublishResponse:
    """초안 근무를 게시합니다.

    Publish draft shifts. With ``require_clean`` nothing is published while
    a selected shift still has a conflict.
    """
    result: PublishResponse = await shift_service.publish_shifts(db, store_id, data)
    await db.commit()
    return result


@router.post(
    "/stores/{store_id}/shifts/copy-week",
    response_model=CopyWeekResponse,
    status_code=201,
)
async def copy_week(
    store_id: UUID,
    data: CopyWeekRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> CopyWeekResponse:
    """한 주의 근무를 다음 주로 초안 복사합니다.

    Copy a week's shifts onto the following week as drafts.
    """
    result: CopyWeekResponse = await shift_service.copy_week(db, store_id, data)
    await db.commit()
    return result
