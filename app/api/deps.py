"""FastAPI 의존성 주입 모듈 — 매장 조회 및 타임라인 기하.

FastAPI dependency injection module.
Provides reusable dependencies for resolving the store named in the path
and for building a timeline projector from query-string geometry.

Geometry Flow:
    1. 클라이언트가 자신의 타임라인 기하를 쿼리로 전송 (생략 시 설정값)
       (Client sends its timeline geometry as query params; settings fill gaps)
    2. TimelineGeometry로 수집 (Collected into a TimelineGeometry)
    3. TimelineProjector 생성 — 잘못된 기하는 ConfigurationError → 400
       (Projector built; invalid geometry surfaces as 400)
"""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.engine.timeline import TimelineProjector
from app.models.store import Store
from app.schemas.timeline import TimelineGeometry
from app.services.gesture_service import build_projector
from app.services.store_service import store_service


async def get_store(
    store_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Store:
    """경로의 매장을 조회합니다. 없으면 404.

    Resolve the ``{store_id}`` path parameter to a Store or raise 404.
    """
    return await store_service.get_store_or_404(db, store_id)


def get_timeline_geometry(
    visible_start_hour: Annotated[int | None, Query(ge=0, le=23)] = None,
    visible_end_hour: Annotated[int | None, Query(ge=0, le=23)] = None,
    day_column_width_px: Annotated[float | None, Query(ge=0)] = None,
    timeline_width_px: Annotated[float | None, Query()] = None,
) -> TimelineGeometry:
    """쿼리 파라미터에서 타임라인 기하를 수집합니다 (생략 시 설정값)."""
    overrides: dict = {
        "visible_start_hour": visible_start_hour,
        "visible_end_hour": visible_end_hour,
        "day_column_width_px": day_column_width_px,
        "timeline_width_px": timeline_width_px,
    }
    return TimelineGeometry(**{k: v for k, v in overrides.items() if v is not None})


def get_projector(
    geometry: Annotated[TimelineGeometry, Depends(get_timeline_geometry)],
) -> TimelineProjector:
    """타임라인 변환기 의존성 — raises ConfigurationError on invalid geometry."""
    return build_projector(geometry)
