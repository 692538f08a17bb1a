"""매장 및 운영시간 관련 Pydantic 요청/응답 스키마 정의.

Store and store-hours Pydantic request/response schema definitions.
Covers store CRUD, the weekly opening schedule, date-specific exceptions,
and holidays. Schedule entries reuse the engine value types from
``app.schemas.scheduling`` so the API validates exactly what the engine
consumes.
"""

from datetime import date, datetime

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from app.schemas.scheduling import StoreException, StoreScheduleDay, TimeRange


# === 매장 (Store) 스키마 ===

class StoreCreate(BaseModel):
    """매장 생성 요청 스키마.

    Store creation request schema.

    Attributes:
        name: 매장 이름 (Store name)
        address: 매장 주소 (Store address, optional)
    """

    name: str = Field(min_length=1, max_length=255)  # 매장 이름 (Store name)
    address: str | None = None  # 매장 주소 (Physical address, optional)


class StoreUpdate(BaseModel):
    """매장 수정 요청 스키마 (부분 업데이트).

    Store update request schema (partial update).
    """

    name: str | None = Field(default=None, min_length=1, max_length=255)  # 변경할 매장 이름
    address: str | None = None  # 변경할 주소 (New address, optional)
    is_active: bool | None = None  # 활성 상태 변경 (Activate/deactivate, optional)


class StoreResponse(BaseModel):
    """매장 응답 스키마.

    Store response schema returned from API.

    Attributes:
        id: 매장 UUID (Store unique identifier)
        name: 매장 이름 (Store name)
        address: 매장 주소 (Store address, nullable)
        is_active: 활성 상태 (Active status flag)
        created_at: 생성 일시 (Creation timestamp)
    """

    id: str  # 매장 UUID 문자열 (Store UUID as string)
    name: str  # 매장 이름 (Store name)
    address: str | None  # 매장 주소 (Address, may be null)
    is_active: bool  # 활성 상태 (Active flag)
    created_at: datetime  # 생성 일시 UTC (Creation timestamp)


# === 요일별 운영 스케줄 (Weekly schedule) 스키마 ===

class WeeklyScheduleUpdate(BaseModel):
    """요일별 운영 스케줄 전체 교체 요청 스키마.

    Weekly schedule replacement request. Each day of week (0-7) may appear
    at most once; days left out have no schedule entry.
    """

    days: list[StoreScheduleDay] = Field(default_factory=list)

    @field_validator("days")
    @classmethod
    def _unique_days(cls, days: list[StoreScheduleDay]) -> list[StoreScheduleDay]:
        seen: set[int] = set()
        for day in days:
            if day.day_of_week in seen:
                raise ValueError(f"day_of_week {day.day_of_week} appears more than once")
            seen.add(day.day_of_week)
        return sorted(days, key=lambda d: d.day_of_week)


class WeeklyScheduleResponse(BaseModel):
    """요일별 운영 스케줄 응답 스키마."""

    store_id: str
    days: list[StoreScheduleDay]


# === 운영 예외 / 공휴일 (Exceptions / Holidays) 스키마 ===

class StoreExceptionCreate(StoreException):
    """날짜별 운영 예외 생성 요청 스키마.

    Inherits the engine ``StoreException`` validation (sorted,
    non-overlapping ranges). An open exception needs at least one range.
    """

    @field_validator("time_ranges")
    @classmethod
    def _ranges_required_when_open(cls, ranges: list[TimeRange], info: ValidationInfo) -> list[TimeRange]:
        if info.data.get("is_open") and not ranges:
            raise ValueError("An open exception needs at least one time range")
        return ranges


class StoreExceptionResponse(StoreException):
    """날짜별 운영 예외 응답 스키마."""

    id: str
    store_id: str


class HolidayCreate(BaseModel):
    """공휴일 등록 요청 스키마 — the day-7 schedule applies on this date."""

    date: date
    name: str = Field(min_length=1, max_length=255)


class HolidayResponse(BaseModel):
    id: str
    store_id: str
    date: date
    name: str
