"""직원 관련 SQLAlchemy ORM 모델 정의.

Employee-related SQLAlchemy ORM model definitions.

Tables:
    - employees: 직원 (Employees scheduled on a store's board)
    - employee_unavailable_times: 반복 근무 불가 시간 (Recurring weekly unavailability)
"""

import uuid
from datetime import datetime, time, timezone
from sqlalchemy import String, Boolean, DateTime, Float, Integer, Time, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class Employee(Base):
    """직원 모델.

    Employee model — A person whose shifts are laid out on the timeline.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        store_id: 소속 매장 FK (Home store)
        name: 이름 (Full name)
        weekly_limit: 주간 근무 한도(시간), 0이면 매장 상한만 적용
                      (Personal weekly hour limit; 0 = store cap only)
        color: 타임라인 바 색상 (Bar color, hex)
        is_active: 활성 상태 (Active status flag)

    Relationships:
        unavailable_times: 근무 불가 시간 목록 (Eager-loaded, cascade delete)
    """

    __tablename__ = "employees"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 소속 매장 FK — Home store (CASCADE)
    store_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("stores.id", ondelete="CASCADE"), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    # 주간 근무 한도 — Personal weekly limit in hours
    weekly_limit: Mapped[float] = mapped_column(Float, default=0)
    color: Mapped[str | None] = mapped_column(String(20), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    # 관계 — 비동기 세션에서 지연 로딩을 피하기 위해 selectin 사용
    # Relationships — selectin loading avoids lazy loads on async sessions
    unavailable_times = relationship(
        "EmployeeUnavailableTime",
        back_populates="employee",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="(EmployeeUnavailableTime.day_of_week, EmployeeUnavailableTime.start_time)",
    )


class EmployeeUnavailableTime(Base):
    """반복 근무 불가 시간 모델 — 특정 날짜가 아닌 매주 반복되는 제약.

    Recurring weekly unavailable window (not tied to a calendar date).

    Attributes:
        day_of_week: 0 = 일요일 ... 6 = 토요일 (0 = Sunday ... 6 = Saturday)
        start_time: 시작 시각 (Window start)
        end_time: 종료 시각 (Window end)
    """

    __tablename__ = "employee_unavailable_times"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    employee_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("employees.id", ondelete="CASCADE"), nullable=False)
    day_of_week: Mapped[int] = mapped_column(Integer, nullable=False)
    start_time: Mapped[time] = mapped_column(Time, nullable=False)
    end_time: Mapped[time] = mapped_column(Time, nullable=False)

    employee = relationship("Employee", back_populates="unavailable_times")
