"""데모 데이터 시드 스크립트 — 매장, 운영시간, 직원, 한 주 근무 생성.

Seed script — Creates a demo store with opening hours, staff and one week
of draft shifts so the scheduling board has something to show.

Usage:
    python -m app.seed

Creates:
    - 1개 매장: "Demo Store" (1 store)
    - 운영시간: 월-토 09:00-20:00, 일 11:00-17:00, 공휴일 휴무
      (Mon-Sat 09:00-20:00, Sun 11:00-17:00, closed on holidays)
    - 3명 직원, 1명은 수요일 오후 근무 불가 (3 employees, one unavailable Wed afternoon)
    - 이번 주 초안 근무 (Draft shifts for the current ISO week)
"""

import asyncio
from datetime import date, timedelta

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import Base, async_session, engine
from app.engine import clock
from app.models import Employee, EmployeeUnavailableTime, Shift, Store, StoreScheduleDay

DEMO_STORE_NAME: str = "Demo Store"

# (이름, 주간 한도, 색상) — (name, weekly limit, bar color)
_STAFF: list[tuple[str, float, str]] = [
    ("Alice", 40, "#3B82F6"),
    ("Bob", 0, "#10B981"),
    ("Dave", 30, "#F59E0B"),
]

# 요일 오프셋(월=0) → [(직원 번호, 시작, 종료)]
# Weekday offset (Mon=0) -> [(staff index, start, end)]
_WEEK_PLAN: dict[int, list[tuple[int, str, str]]] = {
    0: [(0, "09:00", "15:00"), (1, "14:00", "20:00")],
    1: [(0, "09:00", "13:00"), (2, "13:00", "20:00")],
    2: [(2, "09:00", "17:00"), (1, "15:00", "20:00")],
    3: [(0, "09:00", "20:00")],
    4: [(1, "09:00", "14:00"), (2, "14:00", "20:00")],
    5: [(0, "10:00", "18:00")],
}


async def seed_demo(db: AsyncSession, week_start: date) -> Store | None:
    """데모 매장을 생성합니다. 이미 있으면 None을 반환합니다.

    Create the demo store and its week of draft shifts for the ISO week
    containing ``week_start``. Idempotent: returns None when a store named
    ``DEMO_STORE_NAME`` already exists. The caller commits.
    """
    existing = await db.execute(select(Store).where(Store.name == DEMO_STORE_NAME).limit(1))
    if existing.scalar_one_or_none() is not None:
        return None

    store: Store = Store(name=DEMO_STORE_NAME, address="1 Demo Street")
    db.add(store)
    await db.flush()  # flush로 store.id 생성 (Flush to generate store.id)

    # 0 = 일요일, 7 = 공휴일 — 0 = Sunday, 7 = holiday pseudo-day
    for day_of_week in range(1, 7):
        db.add(StoreScheduleDay(
            store_id=store.id,
            day_of_week=day_of_week,
            is_open=True,
            time_ranges=[{"open_time": "09:00", "close_time": "20:00"}],
        ))
    db.add(StoreScheduleDay(
        store_id=store.id,
        day_of_week=0,
        is_open=True,
        time_ranges=[{"open_time": "11:00", "close_time": "17:00"}],
    ))
    db.add(StoreScheduleDay(store_id=store.id, day_of_week=7, is_open=False, time_ranges=[]))

    staff: list[Employee] = []
    for name, weekly_limit, color in _STAFF:
        employee: Employee = Employee(
            store_id=store.id, name=name, weekly_limit=weekly_limit, color=color
        )
        db.add(employee)
        staff.append(employee)
    await db.flush()

    # Dave는 수요일 12:00-16:00 근무 불가 — shows up as an unavailability conflict
    db.add(EmployeeUnavailableTime(
        employee_id=staff[2].id,
        day_of_week=3,
        start_time=clock.to_time("12:00"),
        end_time=clock.to_time("16:00"),
    ))

    monday, _ = clock.week_bounds(week_start)
    for offset, entries in _WEEK_PLAN.items():
        for index, start, end in entries:
            db.add(Shift(
                store_id=store.id,
                employee_id=staff[index].id,
                work_date=monday + timedelta(days=offset),
                start_time=clock.to_time(start),
                end_time=clock.to_time(end),
                hours=clock.duration_hours(start, end),
                is_published=False,
            ))
    await db.flush()
    return store


async def seed() -> None:
    """데이터베이스를 데모 데이터로 시드합니다.

    Create tables if they don't exist, then insert the demo store for the
    current week.
    """
    # 테이블 생성 — DDL 실행 (Create all tables from ORM metadata)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as db:
        store: Store | None = await seed_demo(db, date.today())
        if store is None:
            print("Already seeded. Skipping.")
            return
        await db.commit()
        print(f"Seeded: store={store.id} ({DEMO_STORE_NAME})")


if __name__ == "__main__":
    asyncio.run(seed())
