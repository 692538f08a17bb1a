"""제스처 서비스 — 매장 보드별 드래그/리사이즈 세션 관리.

Gesture Service — Drives a ``ShiftInteractionController`` per store board.
A board has at most one active gesture; the controllers live in an
in-process registry keyed by store id, so gesture state is local to one
worker process.

Flow:
    start (pointer down) → update* (pointer move, unrounded feedback)
    → commit (pointer up: rounded, saved as draft, conflict returned)
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.engine.errors import GestureStateError
from app.engine.interaction import EditIntent, ShiftInteractionController
from app.engine.timeline import TimelineProjector
from app.models.shift import Shift
from app.schemas.gesture import (
    EditIntentRequest,
    EditIntentResponse,
    GestureCommitRequest,
    GestureCommitResponse,
    GestureStartRequest,
    GestureStateResponse,
    GestureUpdateRequest,
)
from app.schemas.scheduling import ConflictResult, ShiftData
from app.schemas.timeline import TimelineGeometry
from app.services.shift_service import shift_service


def build_projector(geometry: TimelineGeometry) -> TimelineProjector:
    """타임라인 기하로 변환기를 생성합니다 — raises ConfigurationError."""
    return TimelineProjector(
        visible_start_hour=geometry.visible_start_hour,
        visible_end_hour=geometry.visible_end_hour,
        day_column_width_px=geometry.day_column_width_px,
        timeline_width_px=geometry.resolved_width_px(),
        increment=settings.TIME_INCREMENT_MINUTES,
    )


class GestureService:
    """매장 보드별 제스처 상태를 관리하는 서비스.

    Attributes:
        _controllers: 매장 ID별 컨트롤러 (Controller per store board)
    """

    def __init__(self) -> None:
        self._controllers: dict[UUID, ShiftInteractionController] = {}

    def clear(self) -> None:
        """모든 보드의 제스처 상태를 초기화합니다."""
        self._controllers.clear()

    def _active(self, store_id: UUID) -> ShiftInteractionController:
        controller: ShiftInteractionController | None = self._controllers.get(store_id)
        if controller is None or not controller.is_active:
            raise GestureStateError("No gesture in progress on this board")
        return controller

    def _state(self, store_id: UUID, controller: ShiftInteractionController) -> GestureStateResponse:
        return GestureStateResponse(
            store_id=str(store_id),
            phase=controller.phase,
            shift_id=controller.shift_id,
            tentative=controller.current(),
        )

    async def start(
        self, db: AsyncSession, store_id: UUID, data: GestureStartRequest
    ) -> GestureStateResponse:
        """포인터 다운 — 근무 바에 대한 제스처를 시작합니다.

        Raises:
            NotFoundError: 근무를 찾을 수 없을 때 (Shift not found)
            ConfigurationError: 타임라인 기하가 잘못되었을 때 (Invalid geometry)
            GestureStateError: 이미 진행 중인 제스처가 있거나 바를 벗어난 경우
                               (A gesture is active, or the pointer misses the bar)
        """
        existing: ShiftInteractionController | None = self._controllers.get(store_id)
        if existing is not None and existing.is_active:
            raise GestureStateError(
                f"A gesture on shift {existing.shift_id} is already in progress"
            )
        shift: Shift = await shift_service.get_shift_or_404(db, store_id, data.shift_id)
        controller: ShiftInteractionController = ShiftInteractionController(
            build_projector(data.geometry),
            min_width_px=settings.MIN_BAR_WIDTH_PX,
            handle_px=settings.RESIZE_HANDLE_PX,
        )
        controller.start_gesture(shift_service.to_shift_data(shift), data.pointer_px, data.kind)
        self._controllers[store_id] = controller
        return self._state(store_id, controller)

    def current(self, store_id: UUID) -> GestureStateResponse:
        return self._state(store_id, self._active(store_id))

    def update(self, store_id: UUID, data: GestureUpdateRequest) -> GestureStateResponse:
        """포인터 이동 — 반올림하지 않은 임시 근무를 반환합니다. 저장하지 않습니다."""
        controller: ShiftInteractionController = self._active(store_id)
        controller.update_gesture(data.pointer_px)
        return self._state(store_id, controller)

    async def commit(
        self, db: AsyncSession, store_id: UUID, data: GestureCommitRequest
    ) -> GestureCommitResponse:
        """포인터 업 — 반올림된 시각으로 근무를 확정하고 초안으로 저장합니다.

        Every release commits. The board returns to Idle even when the
        shift was deleted meanwhile (NotFoundError).
        """
        controller: ShiftInteractionController = self._active(store_id)
        committed: ShiftData = controller.commit_gesture(data.pointer_px)
        shift: Shift = await shift_service.apply_times(db, store_id, committed)
        conflict: ConflictResult = await shift_service.check_conflict(
            db, store_id, shift_service.to_shift_data(shift)
        )
        return GestureCommitResponse(shift=shift_service.to_response(shift), conflict=conflict)

    async def edit(
        self, db: AsyncSession, store_id: UUID, data: EditIntentRequest
    ) -> EditIntentResponse:
        """더블클릭 — 유휴 보드에서만 편집 요청을 만듭니다."""
        shift: Shift = await shift_service.get_shift_or_404(db, store_id, data.shift_id)
        controller: ShiftInteractionController | None = self._controllers.get(store_id)
        if controller is None:
            controller = ShiftInteractionController(build_projector(TimelineGeometry()))
        intent: EditIntent = controller.double_click(shift_service.to_shift_data(shift))
        return EditIntentResponse(shift_id=intent.shift_id, shift=shift_service.to_response(shift))


# 싱글턴 인스턴스 — Singleton instance
gesture_service: GestureService = GestureService()
