"""Tests for energy simulation endpoints."""
import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio

BASE = "/api/v1/energy"


class TestHealth:
    async def test_health(self, client: AsyncClient):
        resp = await client.get("/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "ok"
        assert data["mode"] == "online"
        assert data["battery_level"] == pytest.approx(60.0)


class TestTick:
    async def test_tick(self, client: AsyncClient):
        resp = await client.post(f"{BASE}/tick")
        assert resp.status_code == 200
        data = resp.json()
        assert data["fallback"] is False
        assert data["mode"] == "online"
        assert data["sensors"] is None
        record = data["energy_record"]
        assert record["timestamp"] == "2025-05-15T12:00:00"
        assert record["forecast"] in {"Surplus", "Deficit", "Balanced"}
        assert 5 <= record["battery_soc_percent"] <= 100
        assert set(data["weather"]["forecast"]) == {"next_1h", "next_6h", "next_24h"}
        assert 0 <= data["prediction"]["solar_efficiency"] <= 1

    async def test_tick_moves_health_battery(self, client: AsyncClient):
        tick = (await client.post(f"{BASE}/tick")).json()
        health = (await client.get("/health")).json()
        assert health["battery_level"] == pytest.approx(
            tick["energy_record"]["battery_soc_percent"]
        )
        assert health["ticks"] == 1

    async def test_current_ticks_once_when_empty(self, client: AsyncClient):
        first = (await client.get(f"{BASE}/current")).json()
        second = (await client.get(f"{BASE}/current")).json()
        assert first == second

    async def test_current_returns_latest_tick(self, client: AsyncClient):
        tick = (await client.post(f"{BASE}/tick")).json()
        current = (await client.get(f"{BASE}/current")).json()
        assert current == tick


class TestMode:
    async def test_get_mode(self, client: AsyncClient):
        resp = await client.get(f"{BASE}/mode")
        assert resp.status_code == 200
        assert resp.json() == {"mode": "online", "has_api_key": False}

    async def test_switch_to_offline(self, client: AsyncClient):
        resp = await client.put(f"{BASE}/mode", json={"mode": "offline", "api_key": "k-123"})
        assert resp.status_code == 200
        assert resp.json() == {"mode": "offline", "has_api_key": True}

        tick = (await client.post(f"{BASE}/tick")).json()
        assert tick["mode"] == "offline"
        assert tick["sensors"]["panel_tilt"] == 30.0

    async def test_invalid_mode(self, client: AsyncClient):
        resp = await client.put(f"{BASE}/mode", json={"mode": "hybrid"})
        assert resp.status_code == 422
        mode = (await client.get(f"{BASE}/mode")).json()
        assert mode["mode"] == "online"


class TestDashboard:
    async def test_recommendations(self, client: AsyncClient):
        resp = await client.get(f"{BASE}/recommendations")
        assert resp.status_code == 200
        recs = resp.json()
        assert len(recs) >= 1
        for rec in recs:
            assert rec["priority"] in {"high", "medium", "low"}
            assert rec["icon"]

    async def test_metrics(self, client: AsyncClient):
        tick = (await client.post(f"{BASE}/tick")).json()["energy_record"]
        metrics = (await client.get(f"{BASE}/metrics")).json()
        assert metrics["solar_generation"] == tick["solar_gen_kw"]
        assert metrics["battery_level"] == tick["battery_soc_percent"]
        assert 0 <= metrics["efficiency"] <= 100

    async def test_alerts(self, client: AsyncClient):
        resp = await client.get(f"{BASE}/alerts")
        assert resp.status_code == 200
        for alert in resp.json():
            assert alert["type"] in {"error", "warning", "info"}

    async def test_battery(self, client: AsyncClient):
        resp = await client.get(f"{BASE}/battery")
        assert resp.status_code == 200
        assert resp.json()["status"] in {"Charging", "Discharging", "Standby"}


class TestForecast:
    async def test_default_forecast(self, client: AsyncClient):
        resp = await client.get(f"{BASE}/forecast")
        assert resp.status_code == 200
        assert len(resp.json()) == 12

    async def test_forecast_leaves_battery(self, client: AsyncClient):
        before = (await client.get("/health")).json()["battery_level"]
        await client.get(f"{BASE}/forecast", params={"hours": 48})
        after = (await client.get("/health")).json()["battery_level"]
        assert before == after

    @pytest.mark.parametrize("hours", [0, 49])
    async def test_forecast_bounds(self, client: AsyncClient, hours):
        resp = await client.get(f"{BASE}/forecast", params={"hours": hours})
        assert resp.status_code == 422

    async def test_historical(self, client: AsyncClient):
        resp = await client.get(f"{BASE}/historical", params={"days": 2})
        assert resp.status_code == 200
        records = resp.json()
        assert len(records) == 25
        assert records[-1]["timestamp"] == "2025-05-15T12:00:00"

    @pytest.mark.parametrize("days", [0, 31])
    async def test_historical_bounds(self, client: AsyncClient, days):
        resp = await client.get(f"{BASE}/historical", params={"days": days})
        assert resp.status_code == 422
