"""Simulation orchestrator for the institute's renewable energy plant.

``EnergySimulator`` wires together the weather synthesizer, the efficiency
predictor, the battery advisor and the integrator into a single per-tick
pipeline::

    synthesize weather -> (offline: synthesize sensors) -> predict -> integrate

It owns the plant's persistent battery level and is the only object that
advances it.  A tick never raises: any failure inside the pipeline is logged
and replaced by a fixed fallback record.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Optional

import numpy as np

from engine.advisor.recommendations import (
    SAFE_MODE_RECOMMENDATION,
    Recommendation,
    smart_recommendations,
)
from engine.battery.soc_tracker import BatteryLevelTracker
from engine.prediction.predictor import (
    FALLBACK_PREDICTION,
    EfficiencyPredictor,
    EnergyPrediction,
)
from engine.simulation.integrator import (
    EnergyRecord,
    PlantConfig,
    fallback_record,
    integrate,
)
from engine.weather.seasons import season_for_month
from engine.weather.sensors import IoTSensorSample, synthesize_sensors
from engine.weather.synthesizer import (
    FALLBACK_WEATHER,
    WeatherSample,
    WeatherSynthesizer,
    validate_weather,
)

logger = logging.getLogger(__name__)

# ======================================================================
# Constants
# ======================================================================

MODES = ("online", "offline")

MAX_PROJECTION_HOURS = 48
MAX_BACKFILL_DAYS = 30
BACKFILL_STEP_HOURS = 2


def validate_mode(mode: str) -> str:
    if mode not in MODES:
        raise ValueError(f"Unknown system mode '{mode}'. Choose from: {list(MODES)}")
    return mode


# ======================================================================
# Tick result
# ======================================================================

@dataclass(frozen=True)
class TickResult:
    """Everything produced by one tick.

    ``fallback`` is ``True`` when the pipeline failed and the fixed fallback
    values were substituted; ``error`` then holds the failure message.
    """

    energy_record: EnergyRecord
    weather: WeatherSample
    prediction: EnergyPrediction
    sensors: Optional[IoTSensorSample]
    mode: str
    fallback: bool = False
    error: Optional[str] = None


# ======================================================================
# Simulator
# ======================================================================

class EnergySimulator:
    """Weather-driven energy simulator for one plant.

    Parameters
    ----------
    mode : str
        ``"online"`` (weather only) or ``"offline"`` (weather refined by
        synthesised on-site sensors).  Default ``"online"``.
    api_key : str
        Weather provider key held for the transport layer.  Default ``""``.
    plant : PlantConfig or None
        Nameplate capacities.  Defaults to :class:`PlantConfig`.
    battery : BatteryLevelTracker or None
        Persistent battery state.  Defaults to a tracker seeded at 60 %.
    rng : numpy.random.Generator or None
        Random source for weather and sensor synthesis on live ticks.
        Projections and backfills use independent streams spawned from it.
    clock : callable or None
        Returns the current :class:`datetime`.  Defaults to
        :meth:`datetime.now`.

    Raises
    ------
    ValueError
        If *mode* is not a known system mode.
    """

    def __init__(
        self,
        mode: str = "online",
        api_key: str = "",
        plant: Optional[PlantConfig] = None,
        battery: Optional[BatteryLevelTracker] = None,
        rng: Optional[np.random.Generator] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._mode: str = validate_mode(mode)
        self._api_key: str = api_key
        self.plant: PlantConfig = plant or PlantConfig()
        self.battery: BatteryLevelTracker = battery or BatteryLevelTracker()

        self._rng = rng if rng is not None else np.random.default_rng()
        self._clock = clock or datetime.now
        self._synthesizer = WeatherSynthesizer(rng=self._rng, clock=self._clock)
        # Projections and backfills draw child streams from here and never
        # advance the live stream.
        self._replay_rng = self._rng.spawn(1)[0]
        self._predictor = EfficiencyPredictor(clock=self._clock)

        # Serialises whole ticks so battery updates never interleave.
        self._tick_lock = threading.Lock()

    # ------------------------------------------------------------------
    # Mode
    # ------------------------------------------------------------------

    @property
    def mode(self) -> str:
        return self._mode

    @property
    def has_api_key(self) -> bool:
        return bool(self._api_key)

    def set_mode(self, mode: str, api_key: Optional[str] = None) -> None:
        """Switch system mode; takes effect on the next tick.

        An empty or missing *api_key* keeps the current key.

        Raises
        ------
        ValueError
            If *mode* is not ``"online"`` or ``"offline"``.
        """
        self._mode = validate_mode(mode)
        if api_key:
            self._api_key = api_key
        logger.info("System mode set to %s (api key configured: %s)", mode, self.has_api_key)

    # ------------------------------------------------------------------
    # Ticks
    # ------------------------------------------------------------------

    def tick(
        self,
        weather: Optional[WeatherSample] = None,
        sensors: Optional[IoTSensorSample] = None,
    ) -> TickResult:
        """Run one tick at the current clock time and advance the battery.

        Parameters
        ----------
        weather : WeatherSample or None
            Externally fetched conditions.  ``None`` synthesises them.
        sensors : IoTSensorSample or None
            Externally read sensors for offline mode.  ``None`` synthesises
            them when the simulator is offline.

        Returns
        -------
        TickResult
            Never raises; see ``TickResult.fallback``.
        """
        with self._tick_lock:
            now = self._clock()
            result = self._run(
                now, self._mode, self.battery, self._rng, self._synthesizer, weather, sensors
            )
        logger.debug(
            "Tick %s: soc=%.2f%% forecast=%s fallback=%s",
            result.energy_record.timestamp,
            result.energy_record.battery_soc_percent,
            result.energy_record.forecast,
            result.fallback,
        )
        return result

    def recommendations(
        self,
        record: EnergyRecord,
        weather: WeatherSample,
        prediction: EnergyPrediction,
        hour: Optional[int] = None,
    ) -> list[Recommendation]:
        """Ordered operator advisories for a tick.

        Falls back to a single safe-mode entry if rule evaluation fails.
        """
        if hour is None:
            hour = self._clock().hour
        try:
            return smart_recommendations(record, weather, prediction, hour, self._mode)
        except Exception:
            logger.warning("Recommendation rules failed, using safe mode", exc_info=True)
            return [SAFE_MODE_RECOMMENDATION]

    # ------------------------------------------------------------------
    # Projections (run on a copy of the battery)
    # ------------------------------------------------------------------

    def project(self, hours: int = 12) -> list[EnergyRecord]:
        """Forecast one record per hour for the next *hours* hours.

        The persistent battery level is not modified.

        Raises
        ------
        ValueError
            If *hours* is outside 1 -- 48.
        """
        if not 1 <= hours <= MAX_PROJECTION_HOURS:
            raise ValueError(
                f"hours must be in 1..{MAX_PROJECTION_HOURS}, got {hours}"
            )
        start = self._clock()
        times = [start + timedelta(hours=offset) for offset in range(hours)]
        return self._replay(times)

    def backfill(self, days: int = 7) -> list[EnergyRecord]:
        """Synthetic history every 2 hours from *days* days ago up to now.

        The persistent battery level is not modified.

        Raises
        ------
        ValueError
            If *days* is outside 1 -- 30.
        """
        if not 1 <= days <= MAX_BACKFILL_DAYS:
            raise ValueError(f"days must be in 1..{MAX_BACKFILL_DAYS}, got {days}")
        end = self._clock()
        steps = days * 24 // BACKFILL_STEP_HOURS
        times = [
            end - timedelta(hours=BACKFILL_STEP_HOURS * (steps - i))
            for i in range(steps + 1)
        ]
        return self._replay(times)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _replay(self, times: list[datetime]) -> list[EnergyRecord]:
        with self._tick_lock:
            battery = self.battery.copy()
            mode = self._mode
            rng = self._replay_rng.spawn(1)[0]
        synthesizer = WeatherSynthesizer(rng=rng, clock=self._clock)
        return [
            self._run(t, mode, battery, rng, synthesizer).energy_record for t in times
        ]

    def _run(
        self,
        now: datetime,
        mode: str,
        battery: BatteryLevelTracker,
        rng: np.random.Generator,
        synthesizer: WeatherSynthesizer,
        weather: Optional[WeatherSample] = None,
        sensors: Optional[IoTSensorSample] = None,
    ) -> TickResult:
        try:
            return self._compute(now, mode, battery, rng, synthesizer, weather, sensors)
        except Exception as exc:
            logger.error("Tick at %s failed, returning fallback record", now.isoformat(), exc_info=True)
            return self._fallback(now, mode, rng, exc)

    def _compute(
        self,
        now: datetime,
        mode: str,
        battery: BatteryLevelTracker,
        rng: np.random.Generator,
        synthesizer: WeatherSynthesizer,
        weather: Optional[WeatherSample],
        sensors: Optional[IoTSensorSample],
    ) -> TickResult:
        season = season_for_month(now.month)

        if weather is None:
            weather = synthesizer.synthesize(now.hour, month=now.month)
        weather = validate_weather(weather)

        if mode == "offline" and sensors is None:
            sensors = synthesize_sensors(weather, rng)
        elif mode == "online":
            sensors = None

        prediction = self._predictor.predict(weather, sensors, season=season)
        record = integrate(
            now,
            prediction,
            weather.condition,
            weather.temperature,
            battery,
            self.plant,
        )
        return TickResult(
            energy_record=record,
            weather=weather,
            prediction=prediction,
            sensors=sensors,
            mode=mode,
        )

    def _fallback(
        self, now: datetime, mode: str, rng: np.random.Generator, exc: Exception
    ) -> TickResult:
        sensors = None
        if mode == "offline":
            sensors = synthesize_sensors(FALLBACK_WEATHER, rng)
        return TickResult(
            energy_record=fallback_record(now),
            weather=FALLBACK_WEATHER,
            prediction=FALLBACK_PREDICTION,
            sensors=sensors,
            mode=mode,
            fallback=True,
            error=str(exc) or type(exc).__name__,
        )

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------

    def __repr__(self) -> str:
        return f"EnergySimulator(mode={self._mode!r}, battery={self.battery!r})"
