"""매장 관련 SQLAlchemy ORM 모델 정의.

Store-related SQLAlchemy ORM model definitions.
Includes the store itself, its recurring weekly opening schedule,
date-specific exceptions, holidays, and labor-law thresholds.

Tables:
    - stores: 매장 (Store)
    - store_schedule_days: 요일별 운영 스케줄 (Weekly opening schedule, day 7 = holiday)
    - store_exceptions: 날짜별 운영 예외 (Date-specific overrides)
    - holidays: 공휴일 (Holiday dates using the day-7 schedule)
    - labor_law_settings: 노동시간 기준 (Daily overtime / weekly cap per store)
"""

import uuid
from datetime import date, datetime, timezone
from sqlalchemy import String, Boolean, Date, DateTime, Float, Integer, Text, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base, JSONType


class Store(Base):
    """매장 모델 — 스케줄이 작성되는 사업장 단위.

    Store model — The unit a weekly schedule board belongs to.
    Employees, shifts, and opening hours are all scoped to a store.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        name: 매장 이름 (Store name)
        address: 매장 주소 (Store address, optional)
        is_active: 활성 상태 (Active status flag)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last update timestamp)
    """

    __tablename__ = "stores"

    # 매장 고유 식별자 — Store unique identifier (UUID v4, auto-generated)
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 매장 이름 — Store display name
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    # 매장 주소 — Physical address of the store (optional)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    # 활성 상태 — Whether the store is active
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    # 생성 일시 — Record creation timestamp (UTC)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    # 수정 일시 — Last modification timestamp (UTC, auto-updated)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))


class StoreScheduleDay(Base):
    """요일별 운영 스케줄 모델.

    Recurring opening schedule for one day of the week.
    A day may hold several disjoint open ranges (e.g. closed for lunch),
    stored as a JSON list of ``{"open_time": "HH:MM", "close_time": "HH:MM"}``.

    Attributes:
        day_of_week: 0 = 일요일 ... 6 = 토요일, 7 = 공휴일
                     (0 = Sunday ... 6 = Saturday, 7 = holiday pseudo-day)
        is_open: 영업 여부 (Open flag)
        time_ranges: 영업 구간 목록 (Open ranges, sorted by open time)

    Constraints:
        uq_store_schedule_day: 매장당 요일 하나 (One entry per store and day)
    """

    __tablename__ = "store_schedule_days"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 소속 매장 FK — Parent store (CASCADE)
    store_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("stores.id", ondelete="CASCADE"), nullable=False)
    day_of_week: Mapped[int] = mapped_column(Integer, nullable=False)
    is_open: Mapped[bool] = mapped_column(Boolean, default=True)
    time_ranges: Mapped[list] = mapped_column(JSONType, default=list)

    __table_args__ = (
        UniqueConstraint("store_id", "day_of_week", name="uq_store_schedule_day"),
    )


class StoreException(Base):
    """날짜별 운영 예외 모델 — 특정 날짜의 휴무/특별 영업시간.

    Date-specific override of the weekly schedule (closure for maintenance,
    shortened hours, ...).
    """

    __tablename__ = "store_exceptions"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    store_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("stores.id", ondelete="CASCADE"), nullable=False)
    # 대상 날짜 — Calendar date the override applies to
    exception_date: Mapped[date] = mapped_column(Date, nullable=False)
    is_open: Mapped[bool] = mapped_column(Boolean, default=False)
    time_ranges: Mapped[list] = mapped_column(JSONType, default=list)
    # 사유 — e.g. "Inventory", "Maintenance"
    reason: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        UniqueConstraint("store_id", "exception_date", name="uq_store_exception_date"),
    )


class Holiday(Base):
    """공휴일 모델 — 해당 날짜에는 휴일 스케줄(day 7)이 적용됩니다."""

    __tablename__ = "holidays"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    store_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("stores.id", ondelete="CASCADE"), nullable=False)
    holiday_date: Mapped[date] = mapped_column(Date, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        UniqueConstraint("store_id", "holiday_date", name="uq_holiday_store_date"),
    )


class LaborLawSetting(Base):
    """노동시간 기준 모델 — 매장별 초과근무/주간 상한.

    Labor-law setting model — Per-store overtime thresholds.
    NULL 값은 전역 설정의 기본값을 사용합니다
    (NULL columns fall back to ``DAILY_OVERTIME_HOURS`` / ``WEEKLY_HOUR_CAP``).

    Attributes:
        daily_overtime_hours: 일일 초과근무 기준시간 (Daily overtime threshold)
        weekly_hour_cap: 주간 최대시간 (Weekly hour ceiling)
    """

    __tablename__ = "labor_law_settings"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    store_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("stores.id", ondelete="CASCADE"), nullable=False, unique=True)
    daily_overtime_hours: Mapped[float | None] = mapped_column(Float, nullable=True)
    weekly_hour_cap: Mapped[float | None] = mapped_column(Float, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))
