"""Efficiency predictor: weather (+ optional sensors) -> energy outlook.

Combines the solar, wind and load sub-models with the battery advisor into a
single :class:`EnergyPrediction` per weather sample.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from engine.advisor.battery_advisor import optimal_battery_charge, select_recommendation
from engine.load.load_model import clamp_load_multiplier, load_multiplier
from engine.solar.efficiency import solar_efficiency
from engine.weather.seasons import SeasonProfile, current_season
from engine.weather.sensors import IoTSensorSample
from engine.weather.synthesizer import WeatherSample
from engine.wind.power_curve import wind_efficiency


@dataclass(frozen=True)
class EnergyPrediction:
    """Predicted operating factors for the current tick.

    Attributes
    ----------
    solar_efficiency : float
        Fraction of nameplate PV output, [0, 1].
    wind_efficiency : float
        Fraction of nameplate wind output, [0, 1].
    load_multiplier : float
        Weather-driven demand scale, [0.3, 2.5].
    battery_optimal_charge : float
        Target SOC in %, [5, 100].
    recommendation : str
        One of ``charge_now``, ``discharge_now``, ``maintain``,
        ``prepare_for_peak``.
    """

    solar_efficiency: float
    wind_efficiency: float
    load_multiplier: float
    battery_optimal_charge: float
    recommendation: str


FALLBACK_PREDICTION = EnergyPrediction(
    solar_efficiency=0.8,
    wind_efficiency=0.6,
    load_multiplier=1.0,
    battery_optimal_charge=60.0,
    recommendation="maintain",
)


class EfficiencyPredictor:
    """Maps weather samples to :class:`EnergyPrediction` records.

    Parameters
    ----------
    clock : callable or None
        Returns the current :class:`datetime`; selects the season when
        :meth:`predict` is not given one.  Defaults to :meth:`datetime.now`.
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None) -> None:
        self._clock = clock or datetime.now

    def predict(
        self,
        weather: WeatherSample,
        sensors: Optional[IoTSensorSample] = None,
        season: Optional[SeasonProfile] = None,
    ) -> EnergyPrediction:
        """Predict efficiencies, load, target SOC and action for *weather*.

        Parameters
        ----------
        weather : WeatherSample
            Current conditions with forecast.
        sensors : IoTSensorSample or None
            On-site readings (offline mode); refine solar efficiency only.
        season : SeasonProfile or None
            Season override; defaults to the clock's current season.
        """
        if season is None:
            season = current_season(self._clock())

        solar = solar_efficiency(
            cloud_cover=weather.cloud_cover,
            temperature=weather.temperature,
            solar_boost=season.solar_boost,
            uv_index=weather.uv_index,
            visibility=weather.visibility,
            panel_temperature=sensors.panel_temperature if sensors else None,
            ambient_light=sensors.ambient_light if sensors else None,
        )
        wind = wind_efficiency(weather.wind_speed, weather.temperature)
        load = load_multiplier(weather.temperature, season.heat_load, weather.humidity)

        # Action is chosen from the raw factors, before clamping.
        recommendation = select_recommendation(solar, wind, load)
        optimal = optimal_battery_charge(weather, season)

        return EnergyPrediction(
            solar_efficiency=max(0.0, min(1.0, solar)),
            wind_efficiency=max(0.0, min(1.0, wind)),
            load_multiplier=clamp_load_multiplier(load),
            battery_optimal_charge=optimal,
            recommendation=recommendation,
        )
