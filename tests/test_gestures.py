"""근무 바 제스처 API 테스트.

Gesture API tests — pointer down/move/up over HTTP on the default board
(06:00-23:59, 200px label column, 60px per hour: a 09:00-13:00 bar spans
380px..620px).
"""

import uuid

import pytest
from httpx import AsyncClient

from tests.conftest import ADMIN, MONDAY, make_shift


def url(store) -> str:
    return f"{ADMIN}/stores/{store.id}/gestures"


@pytest.fixture
async def shift(db, store, employee):
    return await make_shift(db, store, employee, MONDAY, "09:00", "13:00", is_published=True)


class TestStart:
    """포인터 다운 테스트."""

    async def test_body_starts_drag(self, client: AsyncClient, store, shift):
        res = await client.post(url(store), json={"shift_id": str(shift.id), "pointer_px": 500})
        assert res.status_code == 201
        data = res.json()
        assert data["phase"] == "dragging"
        assert data["shift_id"] == str(shift.id)
        assert data["tentative"]["start_time"] == "09:00"
        assert data["tentative"]["left_px"] == pytest.approx(380)
        assert data["tentative"]["width_px"] == pytest.approx(240)

    async def test_handle_starts_resize(self, client: AsyncClient, store, shift):
        res = await client.post(url(store), json={"shift_id": str(shift.id), "pointer_px": 615})
        assert res.json()["phase"] == "resizing_right"

    async def test_explicit_kind(self, client: AsyncClient, store, shift):
        res = await client.post(url(store), json={
            "shift_id": str(shift.id), "pointer_px": 500, "kind": "resize_left",
        })
        assert res.json()["phase"] == "resizing_left"

    async def test_miss_is_conflict(self, client: AsyncClient, store, shift):
        res = await client.post(url(store), json={"shift_id": str(shift.id), "pointer_px": 100})
        assert res.status_code == 409
        assert (await client.get(f"{url(store)}/current")).status_code == 409

    async def test_second_gesture_rejected(self, client: AsyncClient, db, store, employee, shift):
        other = await make_shift(db, store, employee, MONDAY, "14:00", "16:00")
        await client.post(url(store), json={"shift_id": str(shift.id), "pointer_px": 500})
        res = await client.post(url(store), json={"shift_id": str(other.id), "pointer_px": 750})
        assert res.status_code == 409
        assert (await client.get(f"{url(store)}/current")).json()["shift_id"] == str(shift.id)

    async def test_boards_are_independent(self, client: AsyncClient, db, store, employee, shift):
        from app.models.store import Store
        other_store = Store(name="Other Store")
        db.add(other_store)
        await db.flush()
        await client.post(url(store), json={"shift_id": str(shift.id), "pointer_px": 500})
        res = await client.get(f"{ADMIN}/stores/{other_store.id}/gestures/current")
        assert res.status_code == 409

    async def test_custom_geometry(self, client: AsyncClient, store, shift):
        """클라이언트 기하 — 08:00부터, 라벨 열 없음, 시간당 100px."""
        res = await client.post(url(store), json={
            "shift_id": str(shift.id),
            "pointer_px": 200,
            "geometry": {
                "visible_start_hour": 8,
                "visible_end_hour": 17,
                "day_column_width_px": 0,
                "timeline_width_px": 1000,
            },
        })
        assert res.status_code == 201
        assert res.json()["tentative"]["left_px"] == pytest.approx(100)

    async def test_bad_geometry(self, client: AsyncClient, store, shift):
        res = await client.post(url(store), json={
            "shift_id": str(shift.id),
            "pointer_px": 500,
            "geometry": {"timeline_width_px": 0},
        })
        assert res.status_code == 400

    async def test_unknown_shift(self, client: AsyncClient, store):
        res = await client.post(url(store), json={"shift_id": str(uuid.uuid4()), "pointer_px": 500})
        assert res.status_code == 404

    async def test_unknown_store(self, client: AsyncClient, shift):
        res = await client.post(
            f"{ADMIN}/stores/{uuid.uuid4()}/gestures",
            json={"shift_id": str(shift.id), "pointer_px": 500},
        )
        assert res.status_code == 404


class TestMoveAndCommit:
    """포인터 이동 / 업 테스트."""

    async def test_move_is_unrounded_and_not_saved(self, client: AsyncClient, store, shift):
        await client.post(url(store), json={"shift_id": str(shift.id), "pointer_px": 500})
        res = await client.patch(f"{url(store)}/current", json={"pointer_px": 533})
        assert res.status_code == 200
        tentative = res.json()["tentative"]
        assert tentative["start_hours"] == pytest.approx(9 + 33 / 60)
        assert tentative["start_time"] == "09:33"
        assert tentative["end_time"] == "13:33"
        assert tentative["duration"] == "4h 0m"

        stored = (await client.get(f"{ADMIN}/stores/{store.id}/shifts/{shift.id}")).json()
        assert stored["start_time"] == "09:00"
        assert stored["is_published"] is True

    async def test_commit_rounds_and_saves_draft(self, client: AsyncClient, store, shift):
        await client.post(url(store), json={"shift_id": str(shift.id), "pointer_px": 500})
        await client.patch(f"{url(store)}/current", json={"pointer_px": 533})
        res = await client.post(f"{url(store)}/current/commit", json={})
        assert res.status_code == 200
        data = res.json()
        assert data["shift"]["start_time"] == "09:35"
        assert data["shift"]["end_time"] == "13:35"
        assert data["shift"]["hours"] == 4
        assert data["shift"]["is_published"] is False
        assert data["conflict"]["has_conflict"] is False

        stored = (await client.get(f"{ADMIN}/stores/{store.id}/shifts/{shift.id}")).json()
        assert stored["start_time"] == "09:35"
        assert stored["is_published"] is False
        assert (await client.get(f"{url(store)}/current")).status_code == 409

    async def test_commit_with_release_position(self, client: AsyncClient, store, shift):
        await client.post(url(store), json={"shift_id": str(shift.id), "pointer_px": 615})
        res = await client.post(f"{url(store)}/current/commit", json={"pointer_px": 671})
        assert res.json()["shift"]["end_time"] == "13:55"
        assert res.json()["shift"]["hours"] == pytest.approx(295 / 60)

    async def test_commit_keeps_edit_made_during_gesture(
        self, client: AsyncClient, store, shift, other_employee
    ):
        """드래그 중 폼에서 바꾼 직원/날짜는 확정 후에도 유지됩니다."""
        await client.post(url(store), json={"shift_id": str(shift.id), "pointer_px": 500})
        await client.put(f"{ADMIN}/stores/{store.id}/shifts/{shift.id}", json={
            "employee_id": str(other_employee.id), "date": "2025-03-04",
        })
        res = await client.post(f"{url(store)}/current/commit", json={"pointer_px": 533})
        data = res.json()["shift"]
        assert data["employee_id"] == str(other_employee.id)
        assert data["date"] == "2025-03-04"
        assert data["start_time"] == "09:35"
        assert data["end_time"] == "13:35"

        stored = (await client.get(f"{ADMIN}/stores/{store.id}/shifts/{shift.id}")).json()
        assert stored["employee_id"] == str(other_employee.id)
        assert stored["date"] == "2025-03-04"

    async def test_press_and_release_keeps_early_shift(self, client: AsyncClient, db, store, employee):
        """표시 범위(06시) 이전에 시작하는 근무를 누르고 떼어도 시간이 바뀌지 않습니다."""
        early = await make_shift(db, store, employee, MONDAY, "05:00", "09:00")
        await client.post(url(store), json={"shift_id": str(early.id), "pointer_px": 300})
        res = await client.post(f"{url(store)}/current/commit", json={})
        data = res.json()["shift"]
        assert data["start_time"] == "05:00"
        assert data["end_time"] == "09:00"
        assert data["hours"] == 4

    async def test_commit_reports_conflict(self, client: AsyncClient, db, open_store, employee):
        shift = await make_shift(db, open_store, employee, MONDAY, "09:00", "13:00")
        await client.post(url(open_store), json={"shift_id": str(shift.id), "pointer_px": 500})
        res = await client.post(f"{url(open_store)}/current/commit", json={"pointer_px": 380})
        data = res.json()
        assert data["shift"]["start_time"] == "07:00"
        assert data["conflict"]["reason"] == "outside_store_hours"

    async def test_update_without_gesture(self, client: AsyncClient, store):
        res = await client.patch(f"{url(store)}/current", json={"pointer_px": 500})
        assert res.status_code == 409

    async def test_commit_without_gesture(self, client: AsyncClient, store):
        res = await client.post(f"{url(store)}/current/commit", json={})
        assert res.status_code == 409

    async def test_new_gesture_after_commit(self, client: AsyncClient, store, shift):
        await client.post(url(store), json={"shift_id": str(shift.id), "pointer_px": 500})
        await client.post(f"{url(store)}/current/commit", json={})
        res = await client.post(url(store), json={"shift_id": str(shift.id), "pointer_px": 500})
        assert res.status_code == 201


class TestEditIntent:
    """더블클릭 편집 요청 테스트."""

    async def test_edit_when_idle(self, client: AsyncClient, store, shift):
        res = await client.post(f"{url(store)}/edit", json={"shift_id": str(shift.id)})
        assert res.status_code == 200
        data = res.json()
        assert data["action"] == "edit"
        assert data["shift_id"] == str(shift.id)
        assert data["shift"]["start_time"] == "09:00"

    async def test_edit_during_gesture(self, client: AsyncClient, store, shift):
        await client.post(url(store), json={"shift_id": str(shift.id), "pointer_px": 500})
        res = await client.post(f"{url(store)}/edit", json={"shift_id": str(shift.id)})
        assert res.status_code == 409

    async def test_edit_unknown_shift(self, client: AsyncClient, store):
        res = await client.post(f"{url(store)}/edit", json={"shift_id": str(uuid.uuid4())})
        assert res.status_code == 404
