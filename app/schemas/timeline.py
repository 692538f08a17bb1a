"""타임라인 좌표 변환 Pydantic 스키마.

Timeline projection request/response schemas. Geometry defaults come from
the settings; a client renders with its own geometry by overriding them.
"""

from pydantic import BaseModel, Field

from app.config import settings


class TimelineGeometry(BaseModel):
    """타임라인 기하 정보.

    Attributes:
        visible_start_hour: 표시 시작 시각 (First visible hour)
        visible_end_hour: 표시 종료 시각, 포함 (Last visible hour, inclusive)
        day_column_width_px: 요일/라벨 열 너비 (Label column width)
        timeline_width_px: 시간 축 너비, 없으면 시간당 너비 x 시간 수
                           (Hour axis width; defaults to HOUR_WIDTH_PX per visible hour)
    """

    visible_start_hour: int = Field(default_factory=lambda: settings.VISIBLE_START_HOUR)
    visible_end_hour: int = Field(default_factory=lambda: settings.VISIBLE_END_HOUR)
    day_column_width_px: float = Field(default_factory=lambda: settings.DAY_COLUMN_WIDTH_PX)
    timeline_width_px: float | None = None

    def resolved_width_px(self) -> float:
        if self.timeline_width_px is not None:
            return self.timeline_width_px
        return (self.visible_end_hour - self.visible_start_hour + 1) * settings.HOUR_WIDTH_PX


class ProjectResponse(BaseModel):
    time: str  # HH:MM
    px: float


class UnprojectResponse(BaseModel):
    px: float
    rounded: bool
    time: str  # HH:MM
    hours: float  # 소수 시간 (Decimal hours)
