"""타임라인 변환 API 테스트.

Timeline projection endpoint tests on the default board and with client
geometry passed as query parameters.
"""

import pytest
from httpx import AsyncClient

from tests.conftest import ADMIN

URL = f"{ADMIN}/timeline"


class TestProject:
    async def test_default_geometry(self, client: AsyncClient):
        res = await client.get(f"{URL}/project", params={"time": "09:00"})
        assert res.status_code == 200
        assert res.json()["time"] == "09:00"
        assert res.json()["px"] == pytest.approx(380)

    async def test_custom_geometry(self, client: AsyncClient):
        res = await client.get(f"{URL}/project", params={
            "time": "12:30",
            "visible_start_hour": 8,
            "visible_end_hour": 17,
            "day_column_width_px": 0,
            "timeline_width_px": 1000,
        })
        assert res.json()["px"] == pytest.approx(450)

    async def test_bad_time(self, client: AsyncClient):
        res = await client.get(f"{URL}/project", params={"time": "25:00"})
        assert res.status_code == 400

    async def test_bad_geometry(self, client: AsyncClient):
        res = await client.get(f"{URL}/project", params={"time": "09:00", "timeline_width_px": 0})
        assert res.status_code == 400
        res = await client.get(f"{URL}/project", params={
            "time": "09:00", "visible_start_hour": 12, "visible_end_hour": 11,
        })
        assert res.status_code == 400


class TestUnproject:
    async def test_unrounded(self, client: AsyncClient):
        res = await client.get(f"{URL}/unproject", params={"px": 383})
        data = res.json()
        assert data["time"] == "09:03"
        assert data["rounded"] is False
        assert data["hours"] == pytest.approx(9.05)

    async def test_rounded(self, client: AsyncClient):
        res = await client.get(f"{URL}/unproject", params={"px": 383, "rounded": True})
        assert res.json()["time"] == "09:05"

    async def test_clamped(self, client: AsyncClient):
        assert (await client.get(f"{URL}/unproject", params={"px": -50})).json()["time"] == "06:00"
        assert (await client.get(f"{URL}/unproject", params={"px": 9999})).json()["time"] == "24:00"
