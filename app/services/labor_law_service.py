"""노동시간 기준 서비스 — Labor Law Setting 비즈니스 로직.

Labor Law Setting Service — Business logic for per-store labor thresholds.
Upsert pattern: GET returns the stored setting (or the defaults), PUT
creates or updates. Unset values fall back to ``DAILY_OVERTIME_HOURS`` and
``WEEKLY_HOUR_CAP``.
"""

from uuid import UUID

from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.store import LaborLawSetting
from app.repositories.labor_law_repository import labor_law_repository
from app.schemas.labor_law import LaborLawSettingResponse, LaborLawSettingUpdate
from app.services.store_service import store_service


class LaborThresholds(BaseModel):
    """엔진에 전달되는 실제 기준값 — Effective thresholds for the engine."""

    daily_overtime_hours: float
    weekly_hour_cap: float


class LaborLawService:

    def _thresholds(self, setting: LaborLawSetting | None) -> LaborThresholds:
        daily: float | None = setting.daily_overtime_hours if setting is not None else None
        weekly: float | None = setting.weekly_hour_cap if setting is not None else None
        return LaborThresholds(
            daily_overtime_hours=daily if daily is not None else settings.DAILY_OVERTIME_HOURS,
            weekly_hour_cap=weekly if weekly is not None else settings.WEEKLY_HOUR_CAP,
        )

    def _to_response(self, store_id: UUID, setting: LaborLawSetting | None) -> LaborLawSettingResponse:
        effective: LaborThresholds = self._thresholds(setting)
        return LaborLawSettingResponse(
            store_id=str(store_id),
            daily_overtime_hours=setting.daily_overtime_hours if setting is not None else None,
            weekly_hour_cap=setting.weekly_hour_cap if setting is not None else None,
            effective_daily_overtime_hours=effective.daily_overtime_hours,
            effective_weekly_hour_cap=effective.weekly_hour_cap,
        )

    async def get_setting(
        self, db: AsyncSession, store_id: UUID
    ) -> LaborLawSettingResponse:
        await store_service.get_store_or_404(db, store_id)
        setting = await labor_law_repository.find_for_store(db, store_id)
        return self._to_response(store_id, setting)

    async def upsert_setting(
        self, db: AsyncSession, store_id: UUID, data: LaborLawSettingUpdate
    ) -> LaborLawSettingResponse:
        await store_service.get_store_or_404(db, store_id)
        setting = await labor_law_repository.replace_for_store(db, store_id, data.model_dump())
        return self._to_response(store_id, setting)

    async def get_thresholds(self, db: AsyncSession, store_id: UUID) -> LaborThresholds:
        """매장의 실제 적용 기준값 — defaults filled in."""
        setting = await labor_law_repository.find_for_store(db, store_id)
        return self._thresholds(setting)


labor_law_service: LaborLawService = LaborLawService()
