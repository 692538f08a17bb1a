"""근무 템플릿 API 테스트.

Shift template tests — saving a weekly pattern (explicit entries or a
captured week) and stamping it onto another week as drafts.
"""

import uuid
from datetime import timedelta

from httpx import AsyncClient

from tests.conftest import ADMIN, MONDAY, make_employee, make_shift


def url(store) -> str:
    return f"{ADMIN}/stores/{store.id}/shift-templates"


def entry(employee, day_offset: int = 0, start: str = "09:00", end: str = "13:00") -> dict:
    return {
        "employee_id": str(employee.id),
        "day_offset": day_offset,
        "start_time": start,
        "end_time": end,
    }


class TestSaveTemplate:
    """템플릿 저장 테스트."""

    async def test_save_entries(self, client: AsyncClient, store, employee, other_employee):
        res = await client.post(url(store), json={
            "name": "Weekday mornings",
            "entries": [entry(other_employee, 2, "10:00", "14:00"), entry(employee, 0)],
        })
        assert res.status_code == 201
        data = res.json()
        assert data["name"] == "Weekday mornings"
        assert data["store_id"] == str(store.id)
        assert [e["day_offset"] for e in data["entries"]] == [0, 2]

    async def test_capture_week(self, client: AsyncClient, db, store, employee, other_employee):
        await make_shift(db, store, employee, MONDAY + timedelta(days=6), "11:00", "17:00")
        await make_shift(db, store, other_employee, MONDAY, "09:00", "13:00", is_published=True)
        await make_shift(db, store, employee, MONDAY + timedelta(days=7), "09:00", "13:00")
        res = await client.post(url(store), json={"name": "Week 10", "week_start": "2025-03-05"})
        assert res.status_code == 201
        assert res.json()["entries"] == [
            entry(other_employee, 0),
            entry(employee, 6, "11:00", "17:00"),
        ]

    async def test_empty_week_rejected(self, client: AsyncClient, store):
        res = await client.post(url(store), json={"name": "Nothing", "week_start": "2025-03-03"})
        assert res.status_code == 400

    async def test_exactly_one_source(self, client: AsyncClient, store, employee):
        both = {"name": "Both", "entries": [entry(employee)], "week_start": "2025-03-03"}
        assert (await client.post(url(store), json=both)).status_code == 422
        assert (await client.post(url(store), json={"name": "Neither"})).status_code == 422

    async def test_entry_validation(self, client: AsyncClient, store, employee):
        bad_order = {"name": "Bad", "entries": [entry(employee, 0, "13:00", "09:00")]}
        assert (await client.post(url(store), json=bad_order)).status_code == 422
        bad_day = {"name": "Bad", "entries": [entry(employee, 7)]}
        assert (await client.post(url(store), json=bad_day)).status_code == 422

    async def test_duplicate_name(self, client: AsyncClient, store, employee):
        body = {"name": "Standard", "entries": [entry(employee)]}
        assert (await client.post(url(store), json=body)).status_code == 201
        assert (await client.post(url(store), json=body)).status_code == 409

    async def test_employee_from_other_store(self, client: AsyncClient, db, store):
        from app.models.store import Store
        other_store = Store(name="Other Store")
        db.add(other_store)
        await db.flush()
        outsider = await make_employee(db, other_store, "Eve")
        res = await client.post(url(store), json={"name": "Outsider", "entries": [entry(outsider)]})
        assert res.status_code == 400


class TestReadTemplates:
    """템플릿 조회/삭제 테스트."""

    async def test_list_sorted_by_name(self, client: AsyncClient, store, employee):
        for name in ("Weekend", "Opening"):
            await client.post(url(store), json={"name": name, "entries": [entry(employee)]})
        res = await client.get(url(store))
        assert res.status_code == 200
        assert [t["name"] for t in res.json()] == ["Opening", "Weekend"]

    async def test_get_and_delete(self, client: AsyncClient, store, employee):
        template = (await client.post(url(store), json={"name": "Standard", "entries": [entry(employee)]})).json()
        assert (await client.get(f"{url(store)}/{template['id']}")).json()["name"] == "Standard"
        assert (await client.delete(f"{url(store)}/{template['id']}")).status_code == 204
        assert (await client.get(f"{url(store)}/{template['id']}")).status_code == 404
        assert (await client.delete(f"{url(store)}/{template['id']}")).status_code == 404

    async def test_unknown_store(self, client: AsyncClient):
        res = await client.get(f"{ADMIN}/stores/{uuid.uuid4()}/shift-templates")
        assert res.status_code == 404


class TestApplyTemplate:
    """템플릿 적용 테스트."""

    async def test_apply_creates_drafts(self, client: AsyncClient, store, employee, other_employee):
        template = (await client.post(url(store), json={
            "name": "Standard",
            "entries": [entry(employee, 0), entry(other_employee, 4, "12:00", "20:00")],
        })).json()
        res = await client.post(f"{url(store)}/{template['id']}/apply", json={"week_start": "2025-03-12"})
        assert res.status_code == 201
        data = res.json()
        assert data["template_id"] == template["id"]
        assert data["target_week_start"] == "2025-03-10"
        assert [(s["date"], s["start_time"], s["hours"]) for s in data["created"]] == [
            ("2025-03-10", "09:00", 4),
            ("2025-03-14", "12:00", 8),
        ]
        assert all(s["is_published"] is False for s in data["created"])
        assert data["conflicts"] == []
        assert data["skipped_count"] == 0

        listed = await client.get(
            f"{ADMIN}/stores/{store.id}/shifts", params={"date_from": "2025-03-10", "date_to": "2025-03-16"}
        )
        assert len(listed.json()) == 2

    async def test_apply_twice_skips_identical(self, client: AsyncClient, store, employee):
        template = (await client.post(url(store), json={"name": "Standard", "entries": [entry(employee)]})).json()
        apply_url = f"{url(store)}/{template['id']}/apply"
        await client.post(apply_url, json={"week_start": "2025-03-10"})
        res = await client.post(apply_url, json={"week_start": "2025-03-10"})
        assert res.json()["created"] == []
        assert res.json()["skipped_count"] == 1

    async def test_apply_reports_conflicts(self, client: AsyncClient, db, open_store, employee):
        await make_shift(db, open_store, employee, MONDAY, "12:00", "16:00")
        template = (await client.post(url(open_store), json={
            "name": "Long day",
            "entries": [entry(employee, 0, "08:00", "12:30"), entry(employee, 1, "10:00", "14:00")],
        })).json()
        res = await client.post(f"{url(open_store)}/{template['id']}/apply", json={"week_start": "2025-03-03"})
        data = res.json()
        assert len(data["created"]) == 2
        monday_id = next(s["id"] for s in data["created"] if s["date"] == "2025-03-03")
        assert [(c["shift_id"], c["conflict"]["reason"]) for c in data["conflicts"]] == [
            (monday_id, "outside_store_hours"),
        ]

    async def test_removed_employee_skipped(self, client: AsyncClient, store, employee, other_employee):
        template = (await client.post(url(store), json={
            "name": "Standard", "entries": [entry(employee), entry(other_employee, 1)],
        })).json()
        await client.delete(f"{ADMIN}/stores/{store.id}/employees/{other_employee.id}")
        res = await client.post(f"{url(store)}/{template['id']}/apply", json={"week_start": "2025-03-10"})
        data = res.json()
        assert [s["employee_id"] for s in data["created"]] == [str(employee.id)]
        assert data["skipped_count"] == 1

    async def test_unknown_template(self, client: AsyncClient, store):
        res = await client.post(f"{url(store)}/{uuid.uuid4()}/apply", json={"week_start": "2025-03-10"})
        assert res.status_code == 404
