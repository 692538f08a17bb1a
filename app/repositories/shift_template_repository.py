"""근무 템플릿 레포지토리 — Shift Template CRUD.

Shift Template Repository — Queries for saved weekly shift patterns.
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.shift import ShiftTemplate
from app.repositories.base import BaseRepository


class ShiftTemplateRepository(BaseRepository[ShiftTemplate]):

    def __init__(self) -> None:
        super().__init__(ShiftTemplate)

    async def get_by_store(
        self, db: AsyncSession, store_id: UUID
    ) -> Sequence[ShiftTemplate]:
        return await self.get_all(db, store_id, order_by=ShiftTemplate.name)

    async def name_taken(self, db: AsyncSession, store_id: UUID, name: str) -> bool:
        return await self.exists(db, {"store_id": store_id, "name": name})


shift_template_repository: ShiftTemplateRepository = ShiftTemplateRepository()
