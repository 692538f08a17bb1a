"""매장 서비스 — 매장 CRUD 및 운영시간 비즈니스 로직.

Store Service — Business logic for stores and their opening hours.
Handles store CRUD, the weekly schedule, date-specific exceptions and
holidays, and resolves the effective opening schedule of a date for the
scheduling engine.
"""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from app.engine.store_hours import resolve_day
from app.models.store import Holiday, Store, StoreException as StoreExceptionRow, StoreScheduleDay as StoreScheduleDayRow
from app.repositories.schedule_repository import (
    holiday_repository,
    store_exception_repository,
    store_schedule_repository,
)
from app.repositories.store_repository import store_repository
from app.schemas.scheduling import StoreException, StoreScheduleDay, TimeRange
from app.schemas.store import (
    HolidayCreate,
    HolidayResponse,
    StoreCreate,
    StoreExceptionCreate,
    StoreExceptionResponse,
    StoreResponse,
    StoreUpdate,
    WeeklyScheduleResponse,
    WeeklyScheduleUpdate,
)
from app.utils.exceptions import DuplicateError, NotFoundError


class StoreHours(BaseModel):
    """기간 내 매장 운영시간 — 엔진 입력 묶음.

    Opening-hours inputs of one store for a date range, already converted
    to engine value types.
    """

    schedule: list[StoreScheduleDay] = Field(default_factory=list)
    exceptions: list[StoreException] = Field(default_factory=list)
    holidays: list[date] = Field(default_factory=list)

    def day(self, day: date) -> StoreScheduleDay | None:
        """해당 날짜의 유효 운영 스케줄 (예외 > 공휴일 > 요일)."""
        return resolve_day(day, self.schedule, self.exceptions, self.holidays)


def _ranges(raw: list[dict] | None) -> list[TimeRange]:
    return [TimeRange(**item) for item in raw or []]


class StoreService:
    """매장 관련 비즈니스 로직을 처리하는 서비스.

    Service handling store business logic.
    """

    def _to_response(self, store: Store) -> StoreResponse:
        """매장 모델을 응답 스키마로 변환합니다.

        Convert a Store model instance to a StoreResponse schema.
        """
        return StoreResponse(
            id=str(store.id),
            name=store.name,
            address=store.address,
            is_active=store.is_active,
            created_at=store.created_at,
        )

    def _to_schedule_day(self, row: StoreScheduleDayRow) -> StoreScheduleDay:
        return StoreScheduleDay(
            day_of_week=row.day_of_week,
            is_open=row.is_open,
            time_ranges=_ranges(row.time_ranges),
        )

    def _to_exception(self, row: StoreExceptionRow) -> StoreException:
        return StoreException(
            date=row.exception_date,
            is_open=row.is_open,
            time_ranges=_ranges(row.time_ranges),
            reason=row.reason,
        )

    def _to_exception_response(self, row: StoreExceptionRow) -> StoreExceptionResponse:
        return StoreExceptionResponse(
            id=str(row.id),
            store_id=str(row.store_id),
            **self._to_exception(row).model_dump(),
        )

    def _to_holiday_response(self, row: Holiday) -> HolidayResponse:
        return HolidayResponse(
            id=str(row.id),
            store_id=str(row.store_id),
            date=row.holiday_date,
            name=row.name,
        )

    async def get_store_or_404(self, db: AsyncSession, store_id: UUID) -> Store:
        """매장을 조회하고 없으면 404를 발생시킵니다.

        Retrieve a store or raise NotFoundError.

        Raises:
            NotFoundError: 매장을 찾을 수 없을 때 (Store not found)
        """
        store: Store | None = await store_repository.get_by_id(db, store_id)
        if store is None:
            raise NotFoundError("Store not found")
        return store

    # --- 매장 CRUD (Store CRUD) ---

    async def list_stores(
        self, db: AsyncSession, is_active: bool | None = None
    ) -> list[StoreResponse]:
        stores: list[Store] = await store_repository.get_list(db, is_active)
        return [self._to_response(s) for s in stores]

    async def get_store(self, db: AsyncSession, store_id: UUID) -> StoreResponse:
        return self._to_response(await self.get_store_or_404(db, store_id))

    async def create_store(self, db: AsyncSession, data: StoreCreate) -> StoreResponse:
        """새 매장을 생성합니다.

        Create a new store. The store starts without a weekly schedule,
        i.e. every day is "unknown" until one is saved.
        """
        store: Store = await store_repository.create(db, data.model_dump())
        return self._to_response(store)

    async def update_store(
        self, db: AsyncSession, store_id: UUID, data: StoreUpdate
    ) -> StoreResponse:
        await self.get_store_or_404(db, store_id)
        store: Store | None = await store_repository.update(
            db, store_id, data.model_dump(exclude_unset=True)
        )
        if store is None:
            raise NotFoundError("Store not found")
        return self._to_response(store)

    async def delete_store(self, db: AsyncSession, store_id: UUID) -> None:
        deleted: bool = await store_repository.delete(db, store_id)
        if not deleted:
            raise NotFoundError("Store not found")

    # --- 요일별 운영 스케줄 (Weekly schedule) ---

    async def get_schedule(self, db: AsyncSession, store_id: UUID) -> WeeklyScheduleResponse:
        """매장의 요일별 운영 스케줄을 조회합니다."""
        await self.get_store_or_404(db, store_id)
        rows: list[StoreScheduleDayRow] = await store_schedule_repository.get_by_store(db, store_id)
        return WeeklyScheduleResponse(
            store_id=str(store_id),
            days=[self._to_schedule_day(r) for r in rows],
        )

    async def replace_schedule(
        self, db: AsyncSession, store_id: UUID, data: WeeklyScheduleUpdate
    ) -> WeeklyScheduleResponse:
        """요일별 운영 스케줄 전체를 교체합니다.

        Replace the weekly schedule. Closed days are stored without ranges.
        """
        await self.get_store_or_404(db, store_id)
        rows: list[StoreScheduleDayRow] = await store_schedule_repository.replace_for_store(
            db,
            store_id,
            [
                {
                    "day_of_week": day.day_of_week,
                    "is_open": day.is_open,
                    "time_ranges": [r.model_dump() for r in day.time_ranges] if day.is_open else [],
                }
                for day in data.days
            ],
        )
        return WeeklyScheduleResponse(
            store_id=str(store_id),
            days=[self._to_schedule_day(r) for r in rows],
        )

    # --- 운영 예외 (Exceptions) ---

    async def list_exceptions(
        self,
        db: AsyncSession,
        store_id: UUID,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> list[StoreExceptionResponse]:
        await self.get_store_or_404(db, store_id)
        rows = await store_exception_repository.get_by_store(db, store_id, date_from, date_to)
        return [self._to_exception_response(r) for r in rows]

    async def add_exception(
        self, db: AsyncSession, store_id: UUID, data: StoreExceptionCreate
    ) -> StoreExceptionResponse:
        """날짜별 운영 예외를 추가합니다.

        Raises:
            DuplicateError: 같은 날짜의 예외가 이미 있을 때
                            (An exception already exists on that date)
        """
        await self.get_store_or_404(db, store_id)
        if await store_exception_repository.exists(
            db, {"store_id": store_id, "exception_date": data.date}
        ):
            raise DuplicateError(f"An exception already exists on {data.date.isoformat()}")

        row: StoreExceptionRow = await store_exception_repository.create(
            db,
            {
                "store_id": store_id,
                "exception_date": data.date,
                "is_open": data.is_open,
                "time_ranges": [r.model_dump() for r in data.time_ranges] if data.is_open else [],
                "reason": data.reason,
            },
        )
        return self._to_exception_response(row)

    async def delete_exception(
        self, db: AsyncSession, store_id: UUID, exception_id: UUID
    ) -> None:
        deleted: bool = await store_exception_repository.delete(db, exception_id, store_id)
        if not deleted:
            raise NotFoundError("Store exception not found")

    # --- 공휴일 (Holidays) ---

    async def list_holidays(
        self,
        db: AsyncSession,
        store_id: UUID,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> list[HolidayResponse]:
        await self.get_store_or_404(db, store_id)
        rows = await holiday_repository.get_by_store(db, store_id, date_from, date_to)
        return [self._to_holiday_response(r) for r in rows]

    async def add_holiday(
        self, db: AsyncSession, store_id: UUID, data: HolidayCreate
    ) -> HolidayResponse:
        await self.get_store_or_404(db, store_id)
        if await holiday_repository.exists(
            db, {"store_id": store_id, "holiday_date": data.date}
        ):
            raise DuplicateError(f"A holiday already exists on {data.date.isoformat()}")
        row: Holiday = await holiday_repository.create(
            db, {"store_id": store_id, "holiday_date": data.date, "name": data.name}
        )
        return self._to_holiday_response(row)

    async def delete_holiday(self, db: AsyncSession, store_id: UUID, holiday_id: UUID) -> None:
        deleted: bool = await holiday_repository.delete(db, holiday_id, store_id)
        if not deleted:
            raise NotFoundError("Holiday not found")

    # --- 엔진 입력 (Engine inputs) ---

    async def load_hours(
        self,
        db: AsyncSession,
        store_id: UUID,
        date_from: date,
        date_to: date,
    ) -> StoreHours:
        """기간 내 운영시간 입력을 엔진 값 타입으로 로드합니다.

        Load the weekly schedule plus the exceptions and holidays falling in
        ``[date_from, date_to]`` as engine value types.
        """
        schedule_rows = await store_schedule_repository.get_by_store(db, store_id)
        exception_rows = await store_exception_repository.get_by_store(db, store_id, date_from, date_to)
        holiday_rows = await holiday_repository.get_by_store(db, store_id, date_from, date_to)
        return StoreHours(
            schedule=[self._to_schedule_day(r) for r in schedule_rows],
            exceptions=[self._to_exception(r) for r in exception_rows],
            holidays=[r.holiday_date for r in holiday_rows],
        )

    async def store_day(
        self, db: AsyncSession, store_id: UUID, day: date
    ) -> StoreScheduleDay | None:
        """해당 날짜의 유효 운영 스케줄 — None이면 스케줄 미정."""
        hours: StoreHours = await self.load_hours(db, store_id, day, day)
        return hours.day(day)


# 싱글턴 인스턴스 — Singleton instance
store_service: StoreService = StoreService()
