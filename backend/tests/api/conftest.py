"""API test infrastructure: async httpx client against a seeded simulation."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from datetime import datetime

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.config import Settings
from app.services.simulation_service import (
    SimulationService,
    build_alert_thresholds,
    build_simulator,
)

# Mid-May noon: summer season, solar at its daily peak.
FROZEN_NOW = datetime(2025, 5, 15, 12, 0, 0)


@pytest_asyncio.fixture
async def app():
    from app.main import create_app

    cfg = Settings(ticker_enabled=False, random_seed=42, json_logs=False, debug=False)
    application = create_app(cfg)

    # Replace the service with one on a frozen clock
    application.state.simulation = SimulationService(
        build_simulator(cfg, clock=lambda: FROZEN_NOW),
        build_alert_thresholds(cfg),
    )

    yield application


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
