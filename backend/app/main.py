import asyncio
import contextlib
from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import Settings, settings
from app.api.v1 import energy
from app.core.logging import RequestLoggingMiddleware, setup_logging
from app.services.simulation_service import SimulationService
from app.services.ticker import run_ticker


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    cfg: Settings = app.state.settings
    task: asyncio.Task | None = None
    if cfg.ticker_enabled:
        task = asyncio.create_task(
            run_ticker(app.state.simulation, cfg.tick_interval_seconds)
        )
    yield
    if task is not None:
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task


def create_app(cfg: Settings | None = None) -> FastAPI:
    cfg = cfg or settings
    setup_logging(json_format=cfg.json_logs, debug=cfg.debug)

    application = FastAPI(
        title=cfg.app_name,
        version="0.1.0",
        lifespan=lifespan,
    )
    application.state.settings = cfg
    application.state.simulation = SimulationService.from_settings(cfg)

    application.add_middleware(RequestLoggingMiddleware)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in cfg.cors_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.include_router(energy.router, prefix="/api/v1/energy", tags=["energy"])

    @application.get("/health")
    async def health_check() -> dict:
        service: SimulationService = application.state.simulation
        return {
            "status": "ok",
            "mode": service.simulator.mode,
            "battery_level": round(service.simulator.battery.level, 2),
            "ticks": service.tick_count,
            "environment": cfg.environment,
            "site": {"latitude": cfg.latitude, "longitude": cfg.longitude},
        }

    return application


app = create_app()
