from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.core.deps import get_simulation_service
from app.schemas.energy import (
    AlertResponse,
    BatteryStatusResponse,
    EnergyRecordResponse,
    MetricsResponse,
    ModeResponse,
    ModeUpdate,
    RecommendationResponse,
    TickResponse,
)
from app.services.simulation_service import SimulationService
from engine.simulation.metrics import alerts, battery_status, current_metrics
from engine.simulation.runner import MAX_BACKFILL_DAYS, MAX_PROJECTION_HOURS

router = APIRouter()


def _hour_of(timestamp: str) -> int:
    # ISO timestamps: YYYY-MM-DDTHH:...
    return int(timestamp[11:13])


@router.post(
    "/tick",
    response_model=TickResponse,
    summary="Run a simulation tick",
    description="Advance the simulation by one tick and return the resulting snapshot.",
)
def run_tick(service: SimulationService = Depends(get_simulation_service)):
    return service.tick()


@router.get(
    "/current",
    response_model=TickResponse,
    summary="Latest snapshot",
    description="Return the most recent tick, running one if the simulation has not ticked yet.",
)
def get_current(service: SimulationService = Depends(get_simulation_service)):
    return service.latest()


@router.get(
    "/mode",
    response_model=ModeResponse,
    summary="Current system mode",
)
def get_mode(service: SimulationService = Depends(get_simulation_service)):
    return service.simulator


@router.put(
    "/mode",
    response_model=ModeResponse,
    summary="Switch system mode",
    description="Switch between online (weather only) and offline (sensor-refined) mode. "
    "Takes effect on the next tick.",
)
def set_mode(
    body: ModeUpdate,
    service: SimulationService = Depends(get_simulation_service),
):
    try:
        service.simulator.set_mode(body.mode, body.api_key)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
        ) from exc
    return service.simulator


@router.get(
    "/recommendations",
    response_model=list[RecommendationResponse],
    summary="Operator recommendations",
    description="Weather-based advisories for the latest snapshot, most urgent rules first.",
)
def get_recommendations(service: SimulationService = Depends(get_simulation_service)):
    latest = service.latest()
    return service.simulator.recommendations(
        latest.energy_record,
        latest.weather,
        latest.prediction,
        hour=_hour_of(latest.energy_record.timestamp),
    )


@router.get(
    "/metrics",
    response_model=MetricsResponse,
    summary="Current metrics",
)
def get_metrics(service: SimulationService = Depends(get_simulation_service)):
    return current_metrics(service.latest().energy_record)


@router.get(
    "/alerts",
    response_model=list[AlertResponse],
    summary="Active alerts",
)
def get_alerts(service: SimulationService = Depends(get_simulation_service)):
    record = service.latest().energy_record
    return alerts(record, _hour_of(record.timestamp), service.thresholds)


@router.get(
    "/battery",
    response_model=BatteryStatusResponse,
    summary="Battery status",
    description="Charging/discharging state with rate and time to full or empty.",
)
def get_battery(service: SimulationService = Depends(get_simulation_service)):
    return battery_status(service.latest().energy_record)


@router.get(
    "/forecast",
    response_model=list[EnergyRecordResponse],
    summary="Hourly forecast",
    description="Project the plant forward one record per hour without touching the live battery level.",
)
def get_forecast(
    hours: int = Query(default=12, ge=1, le=MAX_PROJECTION_HOURS),
    service: SimulationService = Depends(get_simulation_service),
):
    return service.simulator.project(hours)


@router.get(
    "/historical",
    response_model=list[EnergyRecordResponse],
    summary="Synthetic history",
    description="Backfill records every 2 hours over the past days.",
)
def get_historical(
    days: int = Query(default=7, ge=1, le=MAX_BACKFILL_DAYS),
    service: SimulationService = Depends(get_simulation_service),
):
    return service.simulator.backfill(days)
