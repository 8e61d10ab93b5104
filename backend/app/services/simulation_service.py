import logging
import threading
from collections.abc import Callable
from datetime import datetime

import numpy as np

from app.config import Settings
from app.core.logging import tick_var
from engine.battery.soc_tracker import BatteryLevelTracker
from engine.simulation.integrator import PlantConfig
from engine.simulation.metrics import AlertThresholds
from engine.simulation.runner import EnergySimulator, TickResult

logger = logging.getLogger(__name__)


def build_simulator(
    cfg: Settings, clock: Callable[[], datetime] | None = None
) -> EnergySimulator:
    """Create the plant simulator described by *cfg*."""
    plant = PlantConfig(
        max_solar_kw=cfg.max_solar_kw,
        max_wind_kw=cfg.max_wind_kw,
        base_load_kw=cfg.base_load_kw,
        carbon_factor=cfg.carbon_factor,
    )
    return EnergySimulator(
        mode=cfg.system_mode,
        api_key=cfg.weather_api_key,
        plant=plant,
        battery=BatteryLevelTracker(initial_level=cfg.initial_battery_percent),
        rng=np.random.default_rng(cfg.random_seed),
        clock=clock,
    )


def build_alert_thresholds(cfg: Settings) -> AlertThresholds:
    return AlertThresholds(
        battery_low=cfg.alert_battery_low,
        high_grid_usage_kw=cfg.alert_high_grid_usage_kw,
        peak_load_kw=cfg.alert_peak_load_kw,
    )


class SimulationService:
    """Holds the plant simulator and its most recent tick.

    Shared by the background ticker and the API routes.
    """

    def __init__(self, simulator: EnergySimulator, thresholds: AlertThresholds) -> None:
        self.simulator = simulator
        self.thresholds = thresholds
        self.tick_count = 0
        self._latest: TickResult | None = None
        self._latest_count = 0
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, cfg: Settings) -> "SimulationService":
        return cls(build_simulator(cfg), build_alert_thresholds(cfg))

    def tick(self) -> TickResult:
        """Run one tick and remember it as the latest snapshot."""
        with self._lock:
            self.tick_count += 1
            count = self.tick_count

        token = tick_var.set(count)
        try:
            result = self.simulator.tick()
            if result.fallback:
                logger.warning(
                    "Tick %d used fallback record: %s",
                    count,
                    result.error,
                    extra={"mode": result.mode, "fallback": True, "tick_count": count},
                )
            else:
                logger.debug(
                    "Tick %d complete",
                    count,
                    extra={
                        "mode": result.mode,
                        "battery_soc": result.energy_record.battery_soc_percent,
                        "tick_count": count,
                    },
                )
        finally:
            tick_var.reset(token)

        with self._lock:
            # Overlapping ticks may finish out of order; keep the newest.
            if count > self._latest_count:
                self._latest = result
                self._latest_count = count
        return result

    def latest(self) -> TickResult:
        """Latest snapshot, ticking once if none exists yet."""
        with self._lock:
            latest = self._latest
        if latest is None:
            latest = self.tick()
        return latest
