"""관리자 근무 템플릿 라우터 — 템플릿 저장/조회/삭제/적용 엔드포인트.

Admin Shift Template Router — Save weekly shift patterns and stamp them
onto a week as drafts. Templates are scoped under a store:
/stores/{store_id}/shift-templates
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.shift import (
    ApplyTemplateRequest,
    ApplyTemplateResponse,
    ShiftTemplateCreate,
    ShiftTemplateResponse,
)
from app.services.shift_service import shift_service
from app.services.shift_template_service import shift_template_service

router: APIRouter = APIRouter()


@router.get("/stores/{store_id}/shift-templates", response_model=list[ShiftTemplateResponse])
async def list_shift_templates(
    store_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[ShiftTemplateResponse]:
    return await shift_template_service.list_templates(db, store_id)


@router.get("/stores/{store_id}/shift-templates/{template_id}", response_model=ShiftTemplateResponse)
async def get_shift_template(
    store_id: UUID,
    template_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ShiftTemplateResponse:
    return await shift_template_service.get_template(db, store_id, template_id)


@router.post("/stores/{store_id}/shift-templates", response_model=ShiftTemplateResponse, status_code=201)
async def create_shift_template(
    store_id: UUID,
    data: ShiftTemplateCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ShiftTemplateResponse:
    """근무 템플릿을 저장합니다 — explicit entries or a captured week."""
    result: ShiftTemplateResponse = await shift_template_service.save_template(db, store_id, data)
    await db.commit()
    return result


@router.delete("/stores/{store_id}/shift-templates/{template_id}", status_code=204)
async def delete_shift_template(
    store_id: UUID,
    template_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> None:
    await shift_template_service.delete_template(db, store_id, template_id)
    await db.commit()


@router.post(
    "/stores/{store_id}/shift-templates/{template_id}/apply",
    response_model=ApplyTemplateResponse,
    status_code=201,
)
async def apply_shift_template(
    store_id: UUID,
    template_id: UUID,
    data: ApplyTemplateRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApplyTemplateResponse:
    """템플릿을 한 주에 초안으로 적용합니다.

    Create the template's shifts as drafts in the given week and return
    their advisory conflicts.
    """
    result: ApplyTemplateResponse = await shift_service.apply_template(db, store_id, template_id, data)
    await db.commit()
    return result
