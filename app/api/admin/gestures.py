"""관리자 제스처 라우터 — 근무 바 드래그/리사이즈 엔드포인트.

Admin Gesture Router — Drives shift-bar gestures on a store board.
Nested under /stores/{store_id}/gestures:
    - POST   /gestures                 포인터 다운 (start)
    - GET    /gestures/current         현재 임시 근무 (tentative state)
    - PATCH  /gestures/current         포인터 이동 (update, nothing saved)
    - POST   /gestures/current/commit  포인터 업 (commit, saved as draft)
    - POST   /gestures/edit            더블클릭 편집 요청 (edit intent)

One gesture per board; a second start while one is active returns 409.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_store
from app.database import get_db
from app.schemas.gesture import (
    EditIntentRequest,
    EditIntentResponse,
    GestureCommitRequest,
    GestureCommitResponse,
    GestureStartRequest,
    GestureStateResponse,
    GestureUpdateRequest,
)
from app.services.gesture_service import gesture_service

router: APIRouter = APIRouter(dependencies=[Depends(get_store)])


@router.post(
    "/stores/{store_id}/gestures",
    response_model=GestureStateResponse,
    status_code=201,
)
async def start_gesture(
    store_id: UUID,
    data: GestureStartRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> GestureStateResponse:
    """포인터 다운 — 제스처를 시작합니다.

    Start a drag or resize on a shift bar. Without ``kind`` the pointer is
    hit-tested; resize handles win over the bar body.
    """
    return await gesture_service.start(db, store_id, data)


@router.get(
    "/stores/{store_id}/gestures/current",
    response_model=GestureStateResponse,
)
async def get_current_gesture(store_id: UUID) -> GestureStateResponse:
    return gesture_service.current(store_id)


@router.patch(
    "/stores/{store_id}/gestures/current",
    response_model=GestureStateResponse,
)
async def update_gesture(
    store_id: UUID,
    data: GestureUpdateRequest,
) -> GestureStateResponse:
    """포인터 이동 — 반올림하지 않은 임시 근무를 반환합니다.

    Move the pointer; returns exact (unrounded) tentative times. The stored
    shift is untouched.
    """
    return gesture_service.update(store_id, data)


@router.post(
    "/stores/{store_id}/gestures/current/commit",
    response_model=GestureCommitResponse,
)
async def commit_gesture(
    store_id: UUID,
    data: GestureCommitRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> GestureCommitResponse:
    """포인터 업 — 근무를 확정합니다.

    Release the pointer: the shift is rounded to the increment, saved as a
    draft, and returned with its advisory conflict.
    """
    result: GestureCommitResponse = await gesture_service.commit(db, store_id, data)
    await db.commit()
    return result


@router.post(
    "/stores/{store_id}/gestures/edit",
    response_model=EditIntentResponse,
)
async def edit_shift(
    store_id: UUID,
    data: EditIntentRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> EditIntentResponse:
    """더블클릭 — 편집 대화상자를 여는 요청. 제스처 중에는 409.

    Double-click on an idle bar opens the editor instead of dragging.
    """
    return await gesture_service.edit(db, store_id, data)
