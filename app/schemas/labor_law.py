"""노동시간 기준 Pydantic 스키마.

Labor Law Setting request/response schemas.
"""

from pydantic import BaseModel, Field


class LaborLawSettingUpdate(BaseModel):
    # None이면 전역 기본값 사용 — None falls back to the configured default
    daily_overtime_hours: float | None = Field(default=None, gt=0, le=24)
    weekly_hour_cap: float | None = Field(default=None, gt=0, le=168)


class LaborLawSettingResponse(BaseModel):
    store_id: str
    daily_overtime_hours: float | None
    weekly_hour_cap: float | None
    # 실제 적용값 — Values the engine actually uses
    effective_daily_overtime_hours: float
    effective_weekly_hour_cap: float
