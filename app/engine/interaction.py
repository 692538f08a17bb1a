"""근무 바 드래그/리사이즈 상태 머신 — ShiftInteractionController.

Turns a stream of pointer positions into a tentative ``(start, end)`` pair
for the shift bar being dragged or resized, and commits it on release.

State flow:
    Idle -> Dragging | ResizingLeft | ResizingRight -> Idle

The controller is fed plain pixel coordinates, so any event source
(pointer, touch, HTTP, test harness) can drive it. Live feedback uses exact
unrounded times; the committed shift is snapped to the rounding increment.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict

from app.engine import clock
from app.engine.errors import GestureStateError
from app.engine.timeline import TimelineProjector
from app.schemas.scheduling import ShiftData, TentativeShift

# 최소 바 너비(px) — 0이 아닌 최소 근무 길이에 해당
# Minimum bar width in pixels, i.e. a non-zero minimum duration
DEFAULT_MIN_WIDTH_PX: float = 20

# 리사이즈 핸들 폭(px) — Hit area of each resize handle
DEFAULT_HANDLE_PX: float = 8


class GestureKind(str, Enum):
    """제스처 종류 — What the pointer-down landed on."""

    DRAG = "drag"
    RESIZE_LEFT = "resize_left"
    RESIZE_RIGHT = "resize_right"


class GesturePhase(str, Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    RESIZING_LEFT = "resizing_left"
    RESIZING_RIGHT = "resizing_right"


_PHASE_BY_KIND: dict[GestureKind, GesturePhase] = {
    GestureKind.DRAG: GesturePhase.DRAGGING,
    GestureKind.RESIZE_LEFT: GesturePhase.RESIZING_LEFT,
    GestureKind.RESIZE_RIGHT: GesturePhase.RESIZING_RIGHT,
}


class EditIntent(BaseModel):
    """더블클릭 편집 요청 — Double-click on an idle bar opens the editor."""

    model_config = ConfigDict(frozen=True)

    shift_id: str


class ShiftInteractionController:
    """제스처 하나를 처리하는 상태 머신.

    Per-board gesture state machine. Only one bar can be the active target;
    starting a second gesture before the first commits raises
    ``GestureStateError``.

    Attributes:
        projector: 시각/픽셀 변환기 (Timeline projector)
        min_width_px: 최소 바 너비 (Minimum bar width)
        handle_px: 리사이즈 핸들 폭 (Resize handle hit width)
    """

    def __init__(
        self,
        projector: TimelineProjector,
        min_width_px: float = DEFAULT_MIN_WIDTH_PX,
        handle_px: float = DEFAULT_HANDLE_PX,
    ) -> None:
        self.projector: TimelineProjector = projector
        self.min_width_px: float = min_width_px
        self.handle_px: float = handle_px
        self._reset()

    def _reset(self) -> None:
        self.phase: GesturePhase = GesturePhase.IDLE
        self.shift: ShiftData | None = None
        self._origin_pointer_px: float = 0.0
        self._origin_left_px: float = 0.0
        self._origin_width_px: float = 0.0
        self._delta_px: float = 0.0
        self.left_px: float = 0.0
        self.width_px: float = 0.0

    @property
    def is_active(self) -> bool:
        return self.phase is not GesturePhase.IDLE

    @property
    def shift_id(self) -> str | None:
        return self.shift.id if self.shift is not None else None

    def bar_bounds(self, shift: ShiftData) -> tuple[float, float]:
        """근무 바의 좌/우 픽셀 좌표."""
        left: float = self.projector.time_to_position(shift.start_minutes / 60)
        right: float = self.projector.time_to_position(shift.end_minutes / 60)
        return left, right

    def hit_test(self, shift: ShiftData, pointer_px: float) -> GestureKind | None:
        """포인터가 바의 어느 부분에 닿았는지 판정합니다.

        Resize handles take priority over the body, so a press on a handle
        never starts a whole-bar drag. Returns None when the pointer misses
        the bar.
        """
        left, right = self.bar_bounds(shift)
        if pointer_px < left or pointer_px > right:
            return None
        # 짧은 바에서는 핸들이 바 너비의 절반을 넘지 않음
        handle: float = min(self.handle_px, (right - left) / 2)
        if pointer_px <= left + handle:
            return GestureKind.RESIZE_LEFT
        if pointer_px >= right - handle:
            return GestureKind.RESIZE_RIGHT
        return GestureKind.DRAG

    def start_gesture(
        self,
        shift: ShiftData,
        pointer_px: float,
        kind: GestureKind | None = None,
    ) -> GesturePhase:
        """포인터 다운 — 제스처를 시작합니다.

        Args:
            shift: 대상 근무 (Committed shift under the pointer)
            pointer_px: 포인터 x좌표 (Pointer x-coordinate)
            kind: 제스처 종류, None이면 hit-test로 결정
                  (Gesture kind; hit-tested when omitted)

        Raises:
            GestureStateError: 이미 진행 중인 제스처가 있거나 바를 벗어난 경우
        """
        if self.is_active:
            raise GestureStateError(
                f"A gesture on shift {self.shift_id} is already in progress"
            )
        if kind is None:
            kind = self.hit_test(shift, pointer_px)
            if kind is None:
                raise GestureStateError("Pointer is not on the shift bar")

        left, right = self.bar_bounds(shift)
        self.phase = _PHASE_BY_KIND[kind]
        self.shift = shift
        self._origin_pointer_px = pointer_px
        self._origin_left_px = left
        self._origin_width_px = right - left
        self.left_px = left
        self.width_px = right - left
        return self.phase

    def double_click(self, shift: ShiftData) -> EditIntent:
        """유휴 상태의 더블클릭은 드래그 대신 편집을 엽니다."""
        if self.is_active:
            raise GestureStateError("Cannot open the editor while a gesture is in progress")
        return EditIntent(shift_id=shift.id)

    def _apply_pointer(self, pointer_px: float) -> None:
        """포인터 이동량으로 바의 좌측/너비를 계산하고 타임라인 안으로 제한합니다."""
        delta: float = pointer_px - self._origin_pointer_px
        self._delta_px = delta
        lo: float = self.projector.left_px
        hi: float = self.projector.right_px
        origin_right: float = self._origin_left_px + self._origin_width_px

        if self.phase is GesturePhase.DRAGGING:
            width: float = min(self._origin_width_px, hi - lo)
            left: float = min(max(self._origin_left_px + delta, lo), hi - width)
        elif self.phase is GesturePhase.RESIZING_LEFT:
            right: float = min(origin_right, hi)
            left = min(max(self._origin_left_px + delta, lo), right - self.min_width_px)
            left = max(left, lo)
            width = right - left
        else:
            left = max(self._origin_left_px, lo)
            right = min(max(origin_right + delta, left + self.min_width_px), hi)
            width = right - left

        self.left_px = left
        self.width_px = width

    @property
    def moved(self) -> bool:
        """포인터가 누른 위치에서 벗어났는지 여부."""
        return self._delta_px != 0

    def _edges(self) -> tuple[float, float]:
        """현재 바의 시작/종료 시각 (소수 시간, 반올림 없음).

        Only the edge the gesture moves is read back from pixels; the other
        keeps the shift's own time, so a shift reaching outside the visible
        window is not cut at the window edge. A drag keeps the duration.
        """
        start: float = self.shift.start_minutes / 60
        end: float = self.shift.end_minutes / 60
        if not self.moved:
            return start, end
        if self.phase is GesturePhase.DRAGGING:
            left: float = self.projector.position_to_time(self.left_px, rounded=False)
            return left, left + (end - start)
        if self.phase is GesturePhase.RESIZING_LEFT:
            return self.projector.position_to_time(self.left_px, rounded=False), end
        return start, self.projector.position_to_time(self.left_px + self.width_px, rounded=False)

    def _tentative(self) -> TentativeShift:
        start, end = self._edges()
        hours: float = clock.duration_hours(start * 60, end * 60)
        return TentativeShift(
            shift_id=self.shift.id,
            start_hours=start,
            end_hours=end,
            start_time=clock.format_minutes(start * 60),
            end_time=clock.format_minutes(end * 60),
            hours=hours,
            duration=clock.format_duration(hours),
            left_px=self.left_px,
            width_px=self.width_px,
        )

    def update_gesture(self, pointer_px: float) -> TentativeShift:
        """포인터 이동 — 반올림하지 않은 임시 근무를 반환합니다.

        The committed shift is not touched; the returned value is for live
        display only.
        """
        if not self.is_active:
            raise GestureStateError("No gesture in progress")
        self._apply_pointer(pointer_px)
        return self._tentative()

    def current(self) -> TentativeShift:
        """현재 임시 근무 — tentative state without moving the pointer."""
        if not self.is_active:
            raise GestureStateError("No gesture in progress")
        return self._tentative()

    def commit_gesture(self, pointer_px: float | None = None) -> ShiftData:
        """포인터 업 — 반올림된 시각으로 근무를 확정하고 Idle로 돌아갑니다.

        Every release commits; a release outside the timeline keeps the
        last clamped position. The result is always a draft
        (``is_published=False``) with ``hours`` re-derived.

        A drag snaps the start and keeps the original duration; a resize
        snaps only the edge it moved. A press and release without movement
        keeps the shift's times (snapped to the increment).
        """
        if not self.is_active:
            raise GestureStateError("No gesture in progress")
        if pointer_px is not None:
            self._apply_pointer(pointer_px)

        increment: int = self.projector.increment
        start_hours, end_hours = self._edges()
        start: int = clock.round_minutes(start_hours * 60, increment)
        dragged: bool = self.phase is GesturePhase.DRAGGING and self.moved
        if dragged:
            end: int = start + (self.shift.end_minutes - self.shift.start_minutes)
        else:
            end = clock.round_minutes(end_hours * 60, increment)
        # 반올림으로 길이가 0이 되면 한 단위 확보
        if end <= start:
            end = start + increment
        # 자정을 넘지 않음 — shifts never cross midnight
        last: int = (clock.MINUTES_PER_DAY - 1) // increment * increment
        if end > last:
            if dragged:
                start = max(0, start - (end - last))
            else:
                start = min(start, last - increment)
            end = last

        committed: ShiftData = self.shift.model_copy(
            update={
                "start_time": clock.format_minutes(start),
                "end_time": clock.format_minutes(end),
                "is_published": False,
            }
        )
        # model_copy는 검증을 건너뛰므로 다시 검증하여 hours 재계산
        committed = ShiftData.model_validate(committed.model_dump())
        self._reset()
        return committed
