"""근무 SQLAlchemy ORM 모델 정의.

Shift SQLAlchemy ORM model definition.

Tables:
    - shifts: 직원 1명의 하루 근무 구간 (One work interval for one employee on one day)
    - shift_templates: 재사용 가능한 한 주 근무 패턴 (Reusable weekly shift pattern)
"""

import uuid
from datetime import date, datetime, time, timezone
from sqlalchemy import Boolean, Date, DateTime, Float, String, Time, ForeignKey, Index, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base, JSONType


class Shift(Base):
    """근무 모델.

    Shift model — One scheduled work interval on one calendar day.

    Lifecycle:
        생성 시 초안(is_published=False) → 드래그/리사이즈/수정 시 다시 초안
        → 명시적 게시 액션으로만 is_published=True
        (Created as a draft; any change resets it to draft; published only
        through the publish action)

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        store_id: 매장 FK (Store the shift is scheduled in)
        employee_id: 직원 FK (Assigned employee)
        work_date: 근무 날짜 (Calendar day)
        start_time: 시작 시각 (Start, strictly before end)
        end_time: 종료 시각 (End, same day)
        hours: 근무 시간 — 항상 시작/종료에서 계산 (Always derived from the times)
        is_published: 게시 여부 (Published flag)

    Indexes:
        ix_shifts_store_date: 주간 보드 조회용 (Weekly board queries)
        ix_shifts_employee_date: 주간 시간 합산용 (Weekly hour totals)
    """

    __tablename__ = "shifts"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    store_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("stores.id", ondelete="CASCADE"), nullable=False)
    employee_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("employees.id", ondelete="CASCADE"), nullable=False)
    work_date: Mapped[date] = mapped_column(Date, nullable=False)
    start_time: Mapped[time] = mapped_column(Time, nullable=False)
    end_time: Mapped[time] = mapped_column(Time, nullable=False)
    hours: Mapped[float] = mapped_column(Float, nullable=False)
    is_published: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        Index("ix_shifts_store_date", "store_id", "work_date"),
        Index("ix_shifts_employee_date", "employee_id", "work_date"),
    )


class ShiftTemplate(Base):
    """근무 템플릿 모델 — 한 주 근무 패턴.

    Shift template model — A named weekly pattern of shifts that can be
    stamped onto any week as drafts.

    Attributes:
        name: 템플릿 이름, 매장 내 고유 (Unique per store)
        entries: ``[{"employee_id", "day_offset", "start_time", "end_time"}]``
                 day_offset 0 = 월요일 (Days after the week's Monday)
    """

    __tablename__ = "shift_templates"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    store_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("stores.id", ondelete="CASCADE"), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    entries: Mapped[list] = mapped_column(JSONType, default=list)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        UniqueConstraint("store_id", "name", name="uq_shift_template_store_name"),
    )
