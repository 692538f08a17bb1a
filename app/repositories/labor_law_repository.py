"""노동시간 기준 레포지토리 — 매장당 한 행.

Labor-law settings repository. Each store owns at most one row
(``store_id`` is unique), so writes go through ``replace_for_store``.
"""

from typing import Any
from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.store import LaborLawSetting
from app.repositories.base import BaseRepository


class LaborLawRepository(BaseRepository[LaborLawSetting]):

    def __init__(self) -> None:
        super().__init__(LaborLawSetting)

    async def find_for_store(
        self, db: AsyncSession, store_id: UUID
    ) -> LaborLawSetting | None:
        query: Select = select(LaborLawSetting).where(LaborLawSetting.store_id == store_id)
        return (await db.execute(query)).scalar_one_or_none()

    async def replace_for_store(
        self, db: AsyncSession, store_id: UUID, values: dict[str, Any]
    ) -> LaborLawSetting:
        """매장 기준값 전체 교체 (없으면 생성).

        Replace the store's thresholds wholesale. Keys missing from
        ``values`` are reset to NULL, i.e. back to the global defaults.
        """
        columns: dict[str, Any] = {
            "daily_overtime_hours": values.get("daily_overtime_hours"),
            "weekly_hour_cap": values.get("weekly_hour_cap"),
        }
        setting: LaborLawSetting | None = await self.find_for_store(db, store_id)
        if setting is None:
            return await self.create(db, {"store_id": store_id, **columns})
        return await self.update(db, setting.id, columns, store_id=store_id)


labor_law_repository: LaborLawRepository = LaborLawRepository()
