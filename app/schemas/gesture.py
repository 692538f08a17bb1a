"""근무 바 제스처 Pydantic 스키마.

Gesture request/response schemas for driving the shift interaction
controller over HTTP: pointer down (start), pointer move (update), pointer
up (commit), and double-click (edit intent).
"""

from uuid import UUID

from pydantic import BaseModel, Field

from app.engine.interaction import GestureKind, GesturePhase
from app.schemas.scheduling import ConflictResult, TentativeShift
from app.schemas.shift import ShiftResponse
from app.schemas.timeline import TimelineGeometry


class GestureStartRequest(BaseModel):
    """포인터 다운 요청.

    Attributes:
        shift_id: 대상 근무 UUID (Target shift)
        pointer_px: 포인터 x좌표 (Pointer x-coordinate)
        kind: 제스처 종류, 없으면 hit-test로 결정 (Hit-tested when omitted)
        geometry: 클라이언트 타임라인 기하 (Client timeline geometry)
    """

    shift_id: UUID
    pointer_px: float
    kind: GestureKind | None = None
    geometry: TimelineGeometry = Field(default_factory=TimelineGeometry)


class GestureUpdateRequest(BaseModel):
    pointer_px: float


class GestureCommitRequest(BaseModel):
    # 릴리스 위치, 없으면 마지막 위치로 확정 (Release position; last position when omitted)
    pointer_px: float | None = None


class GestureStateResponse(BaseModel):
    """진행 중인 제스처 상태 — live, unrounded feedback."""

    store_id: str
    phase: GesturePhase
    shift_id: str
    tentative: TentativeShift


class GestureCommitResponse(BaseModel):
    """확정 결과 — 저장된 근무와 권고 충돌."""

    shift: ShiftResponse
    conflict: ConflictResult


class EditIntentRequest(BaseModel):
    shift_id: UUID


class EditIntentResponse(BaseModel):
    """더블클릭 편집 요청 결과 — the editor opens on this shift."""

    action: str = "edit"
    shift_id: str
    shift: ShiftResponse
