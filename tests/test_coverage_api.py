"""커버리지 분석 API 테스트.

Coverage endpoint tests — gap, overtime, empty-day and unavailability
examples through the API, plus the weekly hours summary.
Store fixture ``open_store`` is open 09:00-20:00 every day.
"""

import uuid
from datetime import timedelta

from httpx import AsyncClient

from tests.conftest import ADMIN, MONDAY, make_employee, make_shift


def url(store) -> str:
    return f"{ADMIN}/stores/{store.id}/coverage"


class TestCoverage:
    """커버리지 문제 분석 테스트."""

    async def test_gap_example(self, client: AsyncClient, db, open_store, employee, other_employee):
        await make_shift(db, open_store, employee, MONDAY, "09:00", "13:00")
        await make_shift(db, open_store, other_employee, MONDAY, "15:00", "20:00")
        res = await client.get(url(open_store), params={"date_from": "2025-03-03", "date_to": "2025-03-03"})
        assert res.status_code == 200
        problems = res.json()["problems"]
        assert len(problems) == 1
        assert problems[0]["type"] == "gap"
        assert problems[0]["time"] == "13:00-15:00"
        assert problems[0]["duration"] == "2h 0m"

    async def test_empty_week(self, client: AsyncClient, open_store):
        """date_to 생략 시 date_from이 속한 ISO 주 전체."""
        res = await client.get(url(open_store), params={"date_from": "2025-03-05"})
        data = res.json()
        assert data["date_from"] == "2025-03-03"
        assert data["date_to"] == "2025-03-09"
        assert [p["day"] for p in data["problems"]] == [
            (MONDAY + timedelta(days=i)).isoformat() for i in range(7)
        ]
        assert all(p["type"] == "empty_day" and p["time"] == "all day" for p in data["problems"])
        assert data["counts"] == {"empty_day": 7}

    async def test_overtime_example(self, client: AsyncClient, db, open_store, employee):
        await make_shift(db, open_store, employee, MONDAY, "09:00", "13:00")
        await make_shift(db, open_store, employee, MONDAY, "14:00", "21:00")
        res = await client.get(url(open_store), params={"date_from": "2025-03-03", "date_to": "2025-03-03"})
        problems = res.json()["problems"]
        assert [p["type"] for p in problems] == ["overtime", "gap"]
        assert problems[0]["duration"] == "3h 0m"
        assert problems[0]["employee_id"] == str(employee.id)
        assert problems[1]["time"] == "13:00-14:00"

    async def test_store_overtime_threshold(self, client: AsyncClient, db, open_store, employee):
        await client.put(f"{ADMIN}/stores/{open_store.id}/labor-law", json={"daily_overtime_hours": 12})
        await make_shift(db, open_store, employee, MONDAY, "09:00", "13:00")
        await make_shift(db, open_store, employee, MONDAY, "13:00", "20:00")
        res = await client.get(url(open_store), params={"date_from": "2025-03-03", "date_to": "2025-03-03"})
        assert res.json()["problems"] == []

    async def test_unavailability(self, client: AsyncClient, db, open_store):
        dave = (await client.post(f"{ADMIN}/stores/{open_store.id}/employees", json={
            "name": "Dave",
            "unavailable_times": [{"day_of_week": 1, "start_time": "12:00", "end_time": "14:00"}],
        })).json()
        await client.post(f"{ADMIN}/stores/{open_store.id}/shifts", json={
            "employee_id": dave["id"], "date": "2025-03-03", "start_time": "09:00", "end_time": "17:00",
        })
        res = await client.get(url(open_store), params={"date_from": "2025-03-03", "date_to": "2025-03-03"})
        problems = res.json()["problems"]
        assert [p["type"] for p in problems] == ["gap", "conflict"]
        assert problems[1]["reason"] == "unavailable"
        assert problems[1]["time"] == "12:00-14:00"
        assert res.json()["counts"] == {"gap": 1, "conflict": 1}

    async def test_closed_exception_day(self, client: AsyncClient, open_store):
        await client.post(f"{ADMIN}/stores/{open_store.id}/exceptions", json={"date": "2025-03-04"})
        res = await client.get(url(open_store), params={"date_from": "2025-03-03"})
        days = [p["day"] for p in res.json()["problems"]]
        assert "2025-03-04" not in days
        assert len(days) == 6

    async def test_idempotent(self, client: AsyncClient, db, open_store, employee, other_employee):
        await make_shift(db, open_store, employee, MONDAY, "09:00", "18:00")
        await make_shift(db, open_store, other_employee, MONDAY + timedelta(days=2), "10:00", "12:00")
        params = {"date_from": "2025-03-03"}
        first = (await client.get(url(open_store), params=params)).json()
        second = (await client.get(url(open_store), params=params)).json()
        assert first == second

    async def test_range_limits(self, client: AsyncClient, store):
        res = await client.get(url(store), params={"date_from": "2025-03-01", "date_to": "2025-05-31"})
        assert res.status_code == 400
        res = await client.get(url(store), params={"date_from": "2025-03-09", "date_to": "2025-03-03"})
        assert res.status_code == 400
        assert (await client.get(url(store))).status_code == 422

    async def test_unknown_store(self, client: AsyncClient):
        res = await client.get(f"{ADMIN}/stores/{uuid.uuid4()}/coverage", params={"date_from": "2025-03-03"})
        assert res.status_code == 404


class TestWeeklyHours:
    """직원별 주간 근무시간 요약 테스트."""

    async def test_summary(self, client: AsyncClient, db, store, employee, other_employee):
        for i in range(4):
            await make_shift(db, store, employee, MONDAY + timedelta(days=i), "08:00", "17:30")
        await make_shift(db, store, employee, MONDAY + timedelta(days=4), "10:00", "13:00")
        await make_shift(db, store, other_employee, MONDAY, "09:00", "13:00")
        await make_shift(db, store, other_employee, MONDAY + timedelta(days=7), "09:00", "13:00")

        res = await client.get(f"{ADMIN}/stores/{store.id}/weekly-hours", params={"week_start": "2025-03-06"})
        assert res.status_code == 200
        data = res.json()
        assert data["week_start"] == "2025-03-03"
        assert data["week_end"] == "2025-03-09"
        alice, bob = data["employees"]
        assert alice["employee_name"] == "Alice"
        assert alice["assigned_hours"] == 41
        assert alice["weekly_limit"] == 40
        assert alice["remaining_hours"] == 0
        assert alice["over_limit"] is True
        assert bob["assigned_hours"] == 4
        assert bob["weekly_limit"] == 48
        assert bob["remaining_hours"] == 44
        assert bob["over_limit"] is False

    async def test_store_cap(self, client: AsyncClient, db, store):
        await make_employee(db, store, "Carol", weekly_limit=50)
        await client.put(f"{ADMIN}/stores/{store.id}/labor-law", json={"weekly_hour_cap": 45})
        res = await client.get(f"{ADMIN}/stores/{store.id}/weekly-hours", params={"week_start": "2025-03-03"})
        assert res.json()["employees"][0]["weekly_limit"] == 45
