"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package — Central import point for all domain models.
Importing from this package ensures all models are registered with the
SQLAlchemy metadata, which is required for Alembic migrations, test schema
creation and relationship resolution.

Modules:
    store: 매장, 요일별 운영 스케줄, 운영 예외, 공휴일, 노동시간 기준
           (Store, StoreScheduleDay, StoreException, Holiday, LaborLawSetting)
    employee: 직원 및 근무 불가 시간 (Employee, EmployeeUnavailableTime)
    shift: 근무, 근무 템플릿 (Shift, ShiftTemplate)
"""

from app.models.store import Store, StoreScheduleDay, StoreException, Holiday, LaborLawSetting
from app.models.employee import Employee, EmployeeUnavailableTime
from app.models.shift import Shift, ShiftTemplate

__all__ = [
    "Store", "StoreScheduleDay", "StoreException", "Holiday", "LaborLawSetting",
    "Employee", "EmployeeUnavailableTime",
    "Shift", "ShiftTemplate",
]
