"""타임라인 좌표 변환 모듈 — TimelineProjector.

Maps a visible hour window onto a horizontal pixel axis and back.
The axis starts after the day/label column: hour ``visible_start_hour``
sits at ``day_column_width_px`` and the right edge of hour
``visible_end_hour`` sits at ``day_column_width_px + timeline_width_px``.
"""

from app.engine import clock
from app.engine.errors import ConfigurationError


class TimelineProjector:
    """시각 <-> 픽셀 양방향 변환기.

    Bidirectional mapping between clock time (decimal hours) and pointer
    x-coordinates. ``time_to_position`` never rounds; rounding there makes
    bars jitter during a drag.

    Attributes:
        visible_start_hour: 표시 시작 시각 (First visible hour, inclusive)
        visible_end_hour: 표시 종료 시각 (Last visible hour, inclusive)
        day_column_width_px: 요일/라벨 열 너비 (Width of the label column)
        timeline_width_px: 시간 축 너비 (Width of the hour axis)
        increment: 반올림 단위(분) (Rounding increment in minutes)
    """

    def __init__(
        self,
        visible_start_hour: int,
        visible_end_hour: int,
        day_column_width_px: float,
        timeline_width_px: float,
        increment: int = clock.DEFAULT_INCREMENT,
    ) -> None:
        if timeline_width_px <= 0:
            raise ConfigurationError(
                f"Timeline width must be positive, got {timeline_width_px}"
            )
        if visible_end_hour < visible_start_hour:
            raise ConfigurationError(
                f"Visible end hour {visible_end_hour} is before start hour {visible_start_hour}"
            )
        if visible_start_hour < 0 or visible_end_hour > 23:
            raise ConfigurationError(
                f"Visible hours must lie within 0-23, got {visible_start_hour}-{visible_end_hour}"
            )
        self.visible_start_hour: int = visible_start_hour
        self.visible_end_hour: int = visible_end_hour
        self.day_column_width_px: float = day_column_width_px
        self.timeline_width_px: float = timeline_width_px
        self.increment: int = increment

    @property
    def span_hours(self) -> int:
        """표시되는 시간 수 — end hour is inclusive, so +1."""
        return self.visible_end_hour - self.visible_start_hour + 1

    @property
    def left_px(self) -> float:
        return self.day_column_width_px

    @property
    def right_px(self) -> float:
        return self.day_column_width_px + self.timeline_width_px

    @property
    def min_hours(self) -> float:
        return float(self.visible_start_hour)

    @property
    def max_hours(self) -> float:
        return float(self.visible_end_hour + 1)

    def time_to_position(self, hours: float) -> float:
        """소수 시간을 픽셀 x좌표로 변환합니다 (반올림 없음)."""
        relative: float = (hours - self.visible_start_hour) / self.span_hours
        return self.day_column_width_px + relative * self.timeline_width_px

    def position_to_time(self, px: float, rounded: bool = False) -> float:
        """픽셀 x좌표를 소수 시간으로 변환합니다.

        Convert a pointer x-coordinate to decimal hours. The relative
        position is clamped to ``[0, 1]`` first, so a pointer that leaves
        the timeline still yields a time inside the visible window.

        Args:
            px: 포인터 x좌표 (Pointer x-coordinate)
            rounded: True이면 increment 단위로 반올림 (Snap to the increment)
        """
        relative: float = (px - self.day_column_width_px) / self.timeline_width_px
        relative = min(1.0, max(0.0, relative))
        hours: float = self.visible_start_hour + relative * self.span_hours
        if not rounded:
            return hours
        minutes: int = clock.round_minutes(hours * 60, self.increment)
        # 반올림 후에도 표시 범위 유지 — keep inside the window after snapping
        minutes = min(int(self.max_hours * 60), max(int(self.min_hours * 60), minutes))
        return minutes / 60

    def project(self, value: str) -> float:
        """``HH:MM`` 시각의 픽셀 위치 — rendering contract ``project``."""
        return self.time_to_position(clock.parse_time(value) / 60)

    def unproject(self, px: float, rounded: bool = False) -> str:
        """픽셀 위치의 ``HH:MM`` 시각 — rendering contract ``unproject``."""
        return clock.format_minutes(self.position_to_time(px, rounded=rounded) * 60)
