"""관리자 타임라인 라우터 — 시각/픽셀 변환 엔드포인트.

Admin Timeline Router — Rendering contract for the weekly board:
``project(time) -> px`` and ``unproject(px, rounded) -> time``.
Geometry is taken from query parameters, falling back to the settings.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from app.api.deps import get_projector
from app.engine import clock
from app.engine.timeline import TimelineProjector
from app.schemas.timeline import ProjectResponse, UnprojectResponse

router: APIRouter = APIRouter()


@router.get("/project", response_model=ProjectResponse)
async def project(
    time: Annotated[str, Query(description="HH:MM")],
    projector: Annotated[TimelineProjector, Depends(get_projector)],
) -> ProjectResponse:
    """시각의 픽셀 위치를 계산합니다 (반올림 없음)."""
    return ProjectResponse(time=time, px=projector.project(time))


@router.get("/unproject", response_model=UnprojectResponse)
async def unproject(
    px: Annotated[float, Query()],
    projector: Annotated[TimelineProjector, Depends(get_projector)],
    rounded: Annotated[bool, Query()] = False,
) -> UnprojectResponse:
    """픽셀 위치의 시각을 계산합니다. rounded=true이면 increment 단위로 반올림."""
    hours: float = projector.position_to_time(px, rounded=rounded)
    return UnprojectResponse(
        px=px,
        rounded=rounded,
        time=clock.format_minutes(hours * 60),
        hours=hours,
    )
