"""근무 서비스 — 근무 CRUD, 충돌 검사, 게시, 주간 복사, 템플릿 적용 비즈니스 로직.

Shift Service — Business logic for shifts.
Loads and stores the shifts the scheduling engine works on, plus the
management operations around them. Every mutation returns the advisory
conflict of the resulting shift; conflicts never block a write.

Lifecycle:
    생성/수정/드래그 → 초안 (is_published=False) → 게시 (publish)
    (Create / edit / drag → draft → publish)
"""

from datetime import date, time, timedelta
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.engine import clock
from app.engine.conflicts import ConflictValidator
from app.models.shift import Shift, ShiftTemplate
from app.repositories.shift_repository import shift_repository
from app.schemas.scheduling import ConflictResult, EmployeeData, ShiftData, StoreScheduleDay
from app.schemas.shift import (
    ApplyTemplateRequest,
    ApplyTemplateResponse,
    CopyWeekRequest,
    CopyWeekResponse,
    PublishRequest,
    PublishResponse,
    ShiftConflict,
    ShiftCreate,
    ShiftMutationResponse,
    ShiftResponse,
    ShiftUpdate,
)
from app.services.employee_service import employee_service
from app.services.labor_law_service import labor_law_service
from app.services.shift_template_service import shift_template_service
from app.services.store_service import StoreHours, store_service
from app.utils.exceptions import BadRequestError, NotFoundError


class ShiftService:
    """근무 관련 비즈니스 로직을 처리하는 서비스.

    Service handling shift business logic.
    """

    def to_shift_data(self, shift: Shift) -> ShiftData:
        """근무 모델을 엔진 값으로 변환합니다 — hours is re-derived."""
        return ShiftData(
            id=str(shift.id),
            employee_id=str(shift.employee_id),
            date=shift.work_date,
            start_time=clock.from_time(shift.start_time),
            end_time=clock.from_time(shift.end_time),
            is_published=shift.is_published,
        )

    def to_response(self, shift: Shift) -> ShiftResponse:
        """근무 모델을 응답 스키마로 변환합니다.

        Convert a Shift model instance to a ShiftResponse schema.
        """
        return ShiftResponse(
            store_id=str(shift.store_id),
            **self.to_shift_data(shift).model_dump(),
        )

    async def get_shift_or_404(
        self, db: AsyncSession, store_id: UUID, shift_id: UUID
    ) -> Shift:
        """매장 소속 근무를 조회하고 없으면 404를 발생시킵니다.

        Raises:
            NotFoundError: 근무를 찾을 수 없을 때 (Shift not found in this store)
        """
        shift: Shift | None = await shift_repository.get_by_id(db, shift_id, store_id)
        if shift is None:
            raise NotFoundError("Shift not found in this store")
        return shift

    # --- 조회 (Queries) ---

    async def list_shifts(
        self,
        db: AsyncSession,
        store_id: UUID,
        date_from: date,
        date_to: date,
        employee_id: UUID | None = None,
    ) -> list[ShiftResponse]:
        """기간 내 매장 근무 목록을 조회합니다.

        Raises:
            BadRequestError: 종료일이 시작일보다 앞설 때 (date_to before date_from)
        """
        if date_to < date_from:
            raise BadRequestError("date_to must not be before date_from")
        await store_service.get_store_or_404(db, store_id)
        shifts: list[Shift] = await shift_repository.get_by_range(
            db, store_id, date_from, date_to, employee_id
        )
        return [self.to_response(s) for s in shifts]

    async def list_shift_data(
        self, db: AsyncSession, store_id: UUID, date_from: date, date_to: date
    ) -> list[ShiftData]:
        shifts: list[Shift] = await shift_repository.get_by_range(db, store_id, date_from, date_to)
        return [self.to_shift_data(s) for s in shifts]

    async def get_shift(self, db: AsyncSession, store_id: UUID, shift_id: UUID) -> ShiftResponse:
        return self.to_response(await self.get_shift_or_404(db, store_id, shift_id))

    # --- 충돌 검사 (Conflicts) ---

    async def check_conflict(
        self,
        db: AsyncSession,
        store_id: UUID,
        candidate: ShiftData,
        store_day: StoreScheduleDay | None = None,
        employee: EmployeeData | None = None,
    ) -> ConflictResult:
        """후보 근무의 권고 충돌을 계산합니다.

        Load what the validator needs (the employee's shifts in the
        candidate's ISO week, the effective store day, the weekly cap) and
        run it. ``store_day``/``employee`` may be passed to avoid reloading.
        """
        week_start, week_end = clock.week_bounds(candidate.date)
        week_shifts: list[Shift] = await shift_repository.get_for_employee(
            db, UUID(candidate.employee_id), week_start, week_end
        )
        if store_day is None:
            store_day = await store_service.store_day(db, store_id, candidate.date)
        if employee is None:
            employee = employee_service.to_employee_data(
                await employee_service.get_employee_or_404(db, store_id, UUID(candidate.employee_id))
            )
        thresholds = await labor_law_service.get_thresholds(db, store_id)
        validator: ConflictValidator = ConflictValidator(thresholds.weekly_hour_cap)
        return validator.check(
            candidate,
            [self.to_shift_data(s) for s in week_shifts],
            store_day,
            employee,
        )

    async def _mutation_response(
        self, db: AsyncSession, store_id: UUID, shift: Shift
    ) -> ShiftMutationResponse:
        data: ShiftData = self.to_shift_data(shift)
        conflict: ConflictResult = await self.check_conflict(db, store_id, data)
        return ShiftMutationResponse(shift=self.to_response(shift), conflict=conflict)

    # --- 변경 (Mutations) ---

    async def _verify_employee(self, db: AsyncSession, store_id: UUID, employee_id: UUID) -> None:
        try:
            await employee_service.get_employee_or_404(db, store_id, employee_id)
        except NotFoundError:
            raise BadRequestError("Employee does not belong to this store")

    async def create_shift(
        self, db: AsyncSession, store_id: UUID, data: ShiftCreate
    ) -> ShiftMutationResponse:
        """새 근무를 초안으로 생성합니다.

        Create a draft shift. ``hours`` is derived from the times.

        Raises:
            NotFoundError: 매장을 찾을 수 없을 때 (Store not found)
            BadRequestError: 직원이 매장 소속이 아닐 때 (Employee not in store)
        """
        await store_service.get_store_or_404(db, store_id)
        await self._verify_employee(db, store_id, data.employee_id)

        shift: Shift = await shift_repository.create(
            db,
            {
                "store_id": store_id,
                "employee_id": data.employee_id,
                "work_date": data.date,
                "start_time": clock.to_time(data.start_time),
                "end_time": clock.to_time(data.end_time),
                "hours": clock.duration_hours(data.start_time, data.end_time),
                "is_published": False,
            },
        )
        return await self._mutation_response(db, store_id, shift)

    async def update_shift(
        self, db: AsyncSession, store_id: UUID, shift_id: UUID, data: ShiftUpdate
    ) -> ShiftMutationResponse:
        """근무를 수정하고 초안으로 되돌립니다.

        Update a shift; any change resets it to draft and re-derives hours.

        Raises:
            NotFoundError: 근무를 찾을 수 없을 때 (Shift not found)
            BadRequestError: 병합 결과 시작이 종료보다 늦거나 같을 때
                             (Merged start is not before end)
        """
        shift: Shift = await self.get_shift_or_404(db, store_id, shift_id)
        if data.employee_id is not None and data.employee_id != shift.employee_id:
            await self._verify_employee(db, store_id, data.employee_id)

        start: str = data.start_time or clock.from_time(shift.start_time)
        end: str = data.end_time or clock.from_time(shift.end_time)
        if clock.parse_time(start) >= clock.parse_time(end):
            raise BadRequestError(f"start_time {start} must be before end_time {end}")

        if data.employee_id is not None:
            shift.employee_id = data.employee_id
        if data.date is not None:
            shift.work_date = data.date
        shift.start_time = clock.to_time(start)
        shift.end_time = clock.to_time(end)
        shift.hours = clock.duration_hours(start, end)
        shift.is_published = False
        await db.flush()
        return await self._mutation_response(db, store_id, shift)

    async def upsert_shift(
        self, db: AsyncSession, store_id: UUID, data: ShiftData
    ) -> Shift:
        """엔진 근무 값을 저장합니다 (없으면 생성).

        Write an engine shift back, creating it under ``data.id`` when it
        does not exist yet. ``ShiftData`` has already validated the time
        format and ``start < end``; ``hours`` is re-derived from the times.

        Raises:
            NotFoundError: 다른 매장의 근무 ID일 때 (Id belongs to another store)
            BadRequestError: 직원이 매장 소속이 아닐 때 (Employee not in store)
        """
        shift_id: UUID = UUID(data.id)
        employee_id: UUID = UUID(data.employee_id)
        values: dict = {
            "employee_id": employee_id,
            "work_date": data.date,
            "start_time": clock.to_time(data.start_time),
            "end_time": clock.to_time(data.end_time),
            "hours": clock.duration_hours(data.start_time, data.end_time),
            "is_published": data.is_published,
        }
        shift: Shift | None = await shift_repository.get_by_id(db, shift_id)
        if shift is not None and shift.store_id != store_id:
            raise NotFoundError("Shift not found in this store")
        if shift is None or shift.employee_id != employee_id:
            await self._verify_employee(db, store_id, employee_id)
        if shift is None:
            return await shift_repository.create(db, {"id": shift_id, "store_id": store_id, **values})
        for field, value in values.items():
            setattr(shift, field, value)
        await db.flush()
        return shift

    async def apply_times(
        self, db: AsyncSession, store_id: UUID, data: ShiftData
    ) -> Shift:
        """제스처 결과의 시각만 저장하고 초안으로 되돌립니다.

        Write back only the times of a committed gesture. Employee and date
        stay as currently stored, so a form edit made while the bar was
        being dragged is kept.

        Raises:
            NotFoundError: 근무가 삭제되었을 때 (Shift no longer exists)
        """
        shift: Shift = await self.get_shift_or_404(db, store_id, UUID(data.id))
        shift.start_time = clock.to_time(data.start_time)
        shift.end_time = clock.to_time(data.end_time)
        shift.hours = clock.duration_hours(data.start_time, data.end_time)
        shift.is_published = False
        await db.flush()
        return shift

    async def delete_shift(self, db: AsyncSession, store_id: UUID, shift_id: UUID) -> None:
        """근무를 삭제합니다."""
        deleted: bool = await shift_repository.delete(db, shift_id, store_id)
        if not deleted:
            raise NotFoundError("Shift not found in this store")

    # --- 게시 / 복사 (Publish / Copy) ---

    async def publish_shifts(
        self, db: AsyncSession, store_id: UUID, data: PublishRequest
    ) -> PublishResponse:
        """초안 근무를 게시합니다.

        Publish the draft shifts of a date range (or the selected ids in it).
        Conflicts are reported for every selected shift; with
        ``require_clean`` nothing is published while any conflict remains.
        """
        await store_service.get_store_or_404(db, store_id)
        drafts: list[Shift] = await shift_repository.get_by_range(
            db, store_id, data.date_from, data.date_to, is_published=False
        )
        if data.shift_ids is not None:
            wanted: set[UUID] = set(data.shift_ids)
            drafts = [s for s in drafts if s.id in wanted]

        hours: StoreHours = await store_service.load_hours(db, store_id, data.date_from, data.date_to)
        staff: dict[str, EmployeeData] = {
            e.id: e for e in await employee_service.list_employee_data(db, store_id)
        }
        conflicts: list[ShiftConflict] = []
        for shift in drafts:
            candidate: ShiftData = self.to_shift_data(shift)
            result: ConflictResult = await self.check_conflict(
                db, store_id, candidate, hours.day(candidate.date), staff.get(candidate.employee_id)
            )
            if result.has_conflict:
                conflicts.append(ShiftConflict(shift_id=candidate.id, conflict=result))

        if data.require_clean and conflicts:
            return PublishResponse(published=False, published_count=0, conflicts=conflicts)

        for shift in drafts:
            shift.is_published = True
        await db.flush()
        return PublishResponse(
            published=True,
            published_count=len(drafts),
            shift_ids=[str(s.id) for s in drafts],
            conflicts=conflicts,
        )

    async def _create_drafts(
        self,
        db: AsyncSession,
        store_id: UUID,
        drafts: list[tuple[UUID, date, time, time]],
        date_from: date,
        date_to: date,
    ) -> tuple[list[Shift], list[ShiftConflict]]:
        """초안 근무를 일괄 생성하고 권고 충돌을 계산합니다.

        Create ``(employee_id, date, start, end)`` drafts inside
        ``date_from..date_to``, skipping any identical to a shift already
        there. Conflicts are checked after every draft exists, so overlaps
        between the new drafts are reported too.
        """
        existing: list[Shift] = await shift_repository.get_by_range(db, store_id, date_from, date_to)
        taken: set[tuple] = {
            (s.employee_id, s.work_date, s.start_time, s.end_time) for s in existing
        }

        created: list[Shift] = []
        for key in drafts:
            if key in taken:
                continue
            taken.add(key)
            employee_id, work_date, start, end = key
            created.append(
                await shift_repository.create(
                    db,
                    {
                        "store_id": store_id,
                        "employee_id": employee_id,
                        "work_date": work_date,
                        "start_time": start,
                        "end_time": end,
                        "hours": clock.duration_hours(clock.from_time(start), clock.from_time(end)),
                        "is_published": False,
                    },
                )
            )

        hours: StoreHours = await store_service.load_hours(db, store_id, date_from, date_to)
        staff: dict[str, EmployeeData] = {
            e.id: e for e in await employee_service.list_employee_data(db, store_id)
        }
        conflicts: list[ShiftConflict] = []
        for shift in created:
            candidate: ShiftData = self.to_shift_data(shift)
            result: ConflictResult = await self.check_conflict(
                db, store_id, candidate, hours.day(candidate.date), staff.get(candidate.employee_id)
            )
            if result.has_conflict:
                conflicts.append(ShiftConflict(shift_id=candidate.id, conflict=result))
        return created, conflicts

    async def copy_week(
        self, db: AsyncSession, store_id: UUID, data: CopyWeekRequest
    ) -> CopyWeekResponse:
        """한 주의 근무를 다음 주로 초안 복사합니다.

        Copy the shifts of the ISO week containing ``week_start`` seven days
        forward as drafts. A shift identical (employee, date, times) to one
        already in the target week is skipped.
        """
        await store_service.get_store_or_404(db, store_id)
        source_start, source_end = clock.week_bounds(data.week_start)
        offset: timedelta = timedelta(days=7)

        source: list[Shift] = await shift_repository.get_by_range(db, store_id, source_start, source_end)
        created, conflicts = await self._create_drafts(
            db,
            store_id,
            [(s.employee_id, s.work_date + offset, s.start_time, s.end_time) for s in source],
            source_start + offset,
            source_end + offset,
        )
        return CopyWeekResponse(
            target_week_start=source_start + offset,
            created=[self.to_response(s) for s in created],
            conflicts=conflicts,
            skipped_count=len(source) - len(created),
        )

    async def apply_template(
        self, db: AsyncSession, store_id: UUID, template_id: UUID, data: ApplyTemplateRequest
    ) -> ApplyTemplateResponse:
        """근무 템플릿을 한 주에 초안으로 적용합니다.

        Stamp a saved template onto the ISO week containing ``week_start``.
        Entries whose employee no longer exists in the store are skipped, as
        are entries identical to a shift already in that week.

        Raises:
            NotFoundError: 템플릿을 찾을 수 없을 때 (Template not found)
        """
        template: ShiftTemplate = await shift_template_service.get_template_or_404(
            db, store_id, template_id
        )
        monday, sunday = clock.week_bounds(data.week_start)
        staff: set[str] = {e.id for e in await employee_service.list_employee_data(db, store_id)}

        drafts: list[tuple[UUID, date, time, time]] = [
            (
                UUID(entry["employee_id"]),
                monday + timedelta(days=entry["day_offset"]),
                clock.to_time(entry["start_time"]),
                clock.to_time(entry["end_time"]),
            )
            for entry in template.entries
            if entry["employee_id"] in staff
        ]
        created, conflicts = await self._create_drafts(db, store_id, drafts, monday, sunday)
        return ApplyTemplateResponse(
            template_id=str(template.id),
            target_week_start=monday,
            created=[self.to_response(s) for s in created],
            conflicts=conflicts,
            skipped_count=len(template.entries) - len(created),
        )


# 싱글턴 인스턴스 — Singleton instance
shift_service: ShiftService = ShiftService()
