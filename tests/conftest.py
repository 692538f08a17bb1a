"""테스트 인프라 — 인메모리 SQLite DB, 세션, httpx 클라이언트 픽스처.

Test infrastructure — In-memory SQLite (aiosqlite) database, session, and
httpx client fixtures. Every test gets a fresh database built from the ORM
metadata; foreign keys are enforced so CASCADE deletes behave as on
PostgreSQL.
"""

from collections.abc import AsyncGenerator
from datetime import date

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.engine import clock
from app.main import app
from app.models import *  # noqa: F401,F403 — register all models with metadata
from app.services.gesture_service import gesture_service

# ---------------------------------------------------------------------------
# 테스트 DB 설정
# ---------------------------------------------------------------------------
TEST_DATABASE_URL = "sqlite+aiosqlite://"

ADMIN = "/api/v1/admin"

# 2025-03-03은 월요일 — ISO week Mon 2025-03-03 .. Sun 2025-03-09
MONDAY = date(2025, 3, 3)


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 async 엔진. 테스트마다 새 인메모리 스키마를 생성합니다."""
    eng = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(eng.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — DB 세션을 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def reset_gestures():
    """보드별 제스처 상태는 프로세스 전역이므로 테스트마다 초기화합니다."""
    gesture_service.clear()
    yield
    gesture_service.clear()


# ---------------------------------------------------------------------------
# 헬퍼 픽스처: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def store(db: AsyncSession):
    """테스트 매장을 생성합니다 (운영 스케줄 없음)."""
    from app.models.store import Store
    s = Store(name="Test Store", address="123 Test St")
    db.add(s)
    await db.flush()
    await db.refresh(s)
    return s


@pytest_asyncio.fixture
async def open_store(db: AsyncSession, store):
    """매일 09:00-20:00 영업하는 매장."""
    from app.models.store import StoreScheduleDay
    for day in range(7):
        db.add(StoreScheduleDay(
            store_id=store.id,
            day_of_week=day,
            is_open=True,
            time_ranges=[{"open_time": "09:00", "close_time": "20:00"}],
        ))
    await db.flush()
    return store


@pytest_asyncio.fixture
async def employee(db: AsyncSession, store):
    """주간 한도 40시간 직원."""
    return await make_employee(db, store, "Alice", weekly_limit=40)


@pytest_asyncio.fixture
async def other_employee(db: AsyncSession, store):
    return await make_employee(db, store, "Bob")


async def make_employee(db: AsyncSession, store, name: str, weekly_limit: float = 0):
    from app.models.employee import Employee
    e = Employee(store_id=store.id, name=name, weekly_limit=weekly_limit)
    db.add(e)
    await db.flush()
    await db.refresh(e)
    return e


async def make_shift(
    db: AsyncSession,
    store,
    employee,
    work_date: date,
    start: str,
    end: str,
    is_published: bool = False,
):
    """근무를 직접 생성합니다 (hours는 시각에서 계산)."""
    from app.models.shift import Shift
    s = Shift(
        store_id=store.id,
        employee_id=employee.id,
        work_date=work_date,
        start_time=clock.to_time(start),
        end_time=clock.to_time(end),
        hours=clock.duration_hours(start, end),
        is_published=is_published,
    )
    db.add(s)
    await db.flush()
    await db.refresh(s)
    return s
