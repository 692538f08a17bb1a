"""근무 템플릿 서비스 — Shift Template 저장/조회/삭제 비즈니스 로직.

Shift Template Service — Saves weekly shift patterns for reuse. Applying a
template lives in ``shift_service.apply_template`` next to ``copy_week``.
"""

from datetime import date
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.engine import clock
from app.models.shift import Shift, ShiftTemplate
from app.repositories.shift_repository import shift_repository
from app.repositories.shift_template_repository import shift_template_repository
from app.schemas.shift import ShiftTemplateCreate, ShiftTemplateResponse, TemplateEntry
from app.services.employee_service import employee_service
from app.services.store_service import store_service
from app.utils.exceptions import BadRequestError, DuplicateError, NotFoundError


class ShiftTemplateService:

    def _to_response(self, template: ShiftTemplate) -> ShiftTemplateResponse:
        return ShiftTemplateResponse(
            id=str(template.id),
            store_id=str(template.store_id),
            name=template.name,
            entries=[TemplateEntry(**entry) for entry in template.entries],
            created_at=template.created_at,
        )

    async def _capture_week(
        self, db: AsyncSession, store_id: UUID, week_start: date
    ) -> list[TemplateEntry]:
        monday, sunday = clock.week_bounds(week_start)
        shifts: list[Shift] = await shift_repository.get_by_range(db, store_id, monday, sunday)
        return [
            TemplateEntry(
                employee_id=s.employee_id,
                day_offset=(s.work_date - monday).days,
                start_time=clock.from_time(s.start_time),
                end_time=clock.from_time(s.end_time),
            )
            for s in shifts
        ]

    async def get_template_or_404(
        self, db: AsyncSession, store_id: UUID, template_id: UUID
    ) -> ShiftTemplate:
        template: ShiftTemplate | None = await shift_template_repository.get_by_id(
            db, template_id, store_id
        )
        if template is None:
            raise NotFoundError("Shift template not found in this store")
        return template

    async def list_templates(
        self, db: AsyncSession, store_id: UUID
    ) -> list[ShiftTemplateResponse]:
        await store_service.get_store_or_404(db, store_id)
        templates = await shift_template_repository.get_by_store(db, store_id)
        return [self._to_response(t) for t in templates]

    async def get_template(
        self, db: AsyncSession, store_id: UUID, template_id: UUID
    ) -> ShiftTemplateResponse:
        return self._to_response(await self.get_template_or_404(db, store_id, template_id))

    async def save_template(
        self, db: AsyncSession, store_id: UUID, data: ShiftTemplateCreate
    ) -> ShiftTemplateResponse:
        """근무 템플릿을 저장합니다.

        Save the given entries, or the shifts of the week containing
        ``week_start``, under a name unique within the store.

        Raises:
            NotFoundError: 매장을 찾을 수 없을 때 (Store not found)
            DuplicateError: 같은 이름의 템플릿이 있을 때 (Name already used)
            BadRequestError: 근무가 없거나 다른 매장 직원일 때
                             (No shifts, or an employee outside the store)
        """
        await store_service.get_store_or_404(db, store_id)
        if await shift_template_repository.name_taken(db, store_id, data.name):
            raise DuplicateError(f"A shift template named '{data.name}' already exists")

        if data.entries is not None:
            entries: list[TemplateEntry] = data.entries
        else:
            entries = await self._capture_week(db, store_id, data.week_start)
        if not entries:
            raise BadRequestError("A shift template needs at least one shift")

        staff: set[str] = {e.id for e in await employee_service.list_employee_data(db, store_id)}
        for entry in entries:
            if str(entry.employee_id) not in staff:
                raise BadRequestError("Employee does not belong to this store")

        entries.sort(key=lambda e: (e.day_offset, e.start_time, e.end_time, str(e.employee_id)))
        template: ShiftTemplate = await shift_template_repository.create(db, {
            "store_id": store_id,
            "name": data.name,
            "entries": [entry.model_dump(mode="json") for entry in entries],
        })
        return self._to_response(template)

    async def delete_template(
        self, db: AsyncSession, store_id: UUID, template_id: UUID
    ) -> None:
        deleted: bool = await shift_template_repository.delete(db, template_id, store_id)
        if not deleted:
            raise NotFoundError("Shift template not found in this store")


shift_template_service: ShiftTemplateService = ShiftTemplateService()
