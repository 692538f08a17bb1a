"""initial_scheduling_schema

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-19 09:00:00.000000

매장, 요일별 운영 스케줄, 운영 예외, 공휴일, 노동시간 기준, 직원,
근무 불가 시간, 근무 테이블 생성.
Create stores, weekly schedule, exceptions, holidays, labor-law settings,
employees, unavailable times and shifts tables.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB, UUID


# revision identifiers, used by Alembic.
revision: str = 'a1b2c3d4e5f6'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # stores — 매장 (Store)
    op.create_table(
        'stores',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), server_default='true', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    # store_schedule_days — 요일별 운영 스케줄 (0 = 일요일, 7 = 공휴일)
    # Weekly opening schedule (0 = Sunday, 7 = holiday pseudo-day)
    op.create_table(
        'store_schedule_days',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('store_id', UUID(as_uuid=True), sa.ForeignKey('stores.id', ondelete='CASCADE'), nullable=False),
        sa.Column('day_of_week', sa.Integer(), nullable=False),
        sa.Column('is_open', sa.Boolean(), server_default='true', nullable=False),
        sa.Column('time_ranges', JSONB(), server_default='[]', nullable=False),
        sa.UniqueConstraint('store_id', 'day_of_week', name='uq_store_schedule_day'),
        sa.CheckConstraint('day_of_week BETWEEN 0 AND 7', name='ck_store_schedule_day_of_week'),
    )

    # store_exceptions — 날짜별 운영 예외 (Date-specific overrides)
    op.create_table(
        'store_exceptions',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('store_id', UUID(as_uuid=True), sa.ForeignKey('stores.id', ondelete='CASCADE'), nullable=False),
        sa.Column('exception_date', sa.Date(), nullable=False),
        sa.Column('is_open', sa.Boolean(), server_default='false', nullable=False),
        sa.Column('time_ranges', JSONB(), server_default='[]', nullable=False),
        sa.Column('reason', sa.String(255), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint('store_id', 'exception_date', name='uq_store_exception_date'),
    )

    # holidays — 공휴일 (Holiday dates using the day-7 schedule)
    op.create_table(
        'holidays',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('store_id', UUID(as_uuid=True), sa.ForeignKey('stores.id', ondelete='CASCADE'), nullable=False),
        sa.Column('holiday_date', sa.Date(), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint('store_id', 'holiday_date', name='uq_holiday_store_date'),
    )

    # labor_law_settings — 노동시간 기준 (NULL = 전역 기본값)
    # Per-store thresholds (NULL = configured default)
    op.create_table(
        'labor_law_settings',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('store_id', UUID(as_uuid=True), sa.ForeignKey('stores.id', ondelete='CASCADE'), nullable=False, unique=True),
        sa.Column('daily_overtime_hours', sa.Float(), nullable=True),
        sa.Column('weekly_hour_cap', sa.Float(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    # employees — 직원 (Employees)
    op.create_table(
        'employees',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('store_id', UUID(as_uuid=True), sa.ForeignKey('stores.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('weekly_limit', sa.Float(), server_default='0', nullable=False),
        sa.Column('color', sa.String(20), nullable=True),
        sa.Column('is_active', sa.Boolean(), server_default='true', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_employees_store_id', 'employees', ['store_id'])

    # employee_unavailable_times — 반복 근무 불가 시간 (Recurring weekly unavailability)
    op.create_table(
        'employee_unavailable_times',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('employee_id', UUID(as_uuid=True), sa.ForeignKey('employees.id', ondelete='CASCADE'), nullable=False),
        sa.Column('day_of_week', sa.Integer(), nullable=False),
        sa.Column('start_time', sa.Time(), nullable=False),
        sa.Column('end_time', sa.Time(), nullable=False),
        sa.CheckConstraint('day_of_week BETWEEN 0 AND 6', name='ck_unavailable_day_of_week'),
        sa.CheckConstraint('start_time < end_time', name='ck_unavailable_order'),
    )

    # shifts — 근무 (One work interval for one employee on one day)
    op.create_table(
        'shifts',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('store_id', UUID(as_uuid=True), sa.ForeignKey('stores.id', ondelete='CASCADE'), nullable=False),
        sa.Column('employee_id', UUID(as_uuid=True), sa.ForeignKey('employees.id', ondelete='CASCADE'), nullable=False),
        sa.Column('work_date', sa.Date(), nullable=False),
        sa.Column('start_time', sa.Time(), nullable=False),
        sa.Column('end_time', sa.Time(), nullable=False),
        sa.Column('hours', sa.Float(), nullable=False),
        sa.Column('is_published', sa.Boolean(), server_default='false', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint('start_time < end_time', name='ck_shifts_order'),
    )
    op.create_index('ix_shifts_store_date', 'shifts', ['store_id', 'work_date'])
    op.create_index('ix_shifts_employee_date', 'shifts', ['employee_id', 'work_date'])


def downgrade() -> None:
    op.drop_index('ix_shifts_employee_date', table_name='shifts')
    op.drop_index('ix_shifts_store_date', table_name='shifts')
    op.drop_table('shifts')
    op.drop_table('employee_unavailable_times')
    op.drop_index('ix_employees_store_id', table_name='employees')
    op.drop_table('employees')
    op.drop_table('labor_law_settings')
    op.drop_table('holidays')
    op.drop_table('store_exceptions')
    op.drop_table('store_schedule_days')
    op.drop_table('stores')
