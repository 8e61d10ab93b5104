"""Battery advisor: target state of charge and operating action.

The target SOC looks ahead at the three forecast horizons of a weather
sample; the action is chosen from the current efficiencies and load.

Forecast horizons carry no UV, visibility, humidity or sensor readings, so
they are evaluated with a reduced efficiency model (cloud, temperature and
season only).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from engine.load.load_model import clamp_load_multiplier, load_multiplier
from engine.solar.efficiency import solar_efficiency
from engine.weather.seasons import SeasonProfile
from engine.weather.synthesizer import ForecastSample, WeatherSample
from engine.wind.power_curve import wind_efficiency

logger = logging.getLogger(__name__)

RECOMMENDATIONS = ("charge_now", "discharge_now", "maintain", "prepare_for_peak")

DEFAULT_OPTIMAL_CHARGE = 60.0


@dataclass(frozen=True)
class HorizonOutlook:
    """Clamped efficiencies for a single forecast horizon."""

    solar: float
    wind: float
    load: float

    @property
    def generation(self) -> float:
        return (self.solar + self.wind) / 2


def _clamp_unit(value: float) -> float:
    return max(0.0, min(1.0, value))


def evaluate_horizon(sample: ForecastSample, season: SeasonProfile) -> HorizonOutlook:
    """Reduced efficiency evaluation of one forecast horizon."""
    solar = solar_efficiency(
        cloud_cover=sample.cloud_cover,
        temperature=sample.temperature,
        solar_boost=season.solar_boost,
    )
    wind = wind_efficiency(sample.wind_speed, sample.temperature)
    load = load_multiplier(sample.temperature, season.heat_load)
    return HorizonOutlook(
        solar=_clamp_unit(solar),
        wind=_clamp_unit(wind),
        load=clamp_load_multiplier(load),
    )


def optimal_battery_charge(weather: WeatherSample, season: SeasonProfile) -> float:
    """Recommended battery SOC (%) ahead of the forecast period.

    Averages generation ``(solar + wind) / 2`` and load over the 1 h, 6 h
    and 24 h horizons, then:

    * poor generation (< 0.4) -> ``min(95, 70 + (1 - gen) * 25)``
    * high load (> 1.3) -> ``min(90, 60 + (load - 1) * 30)``
    * otherwise -> ``60 + (gen - load) * 20`` clamped to [40, 80]

    Any failure while evaluating the forecast yields the default of 60 %.
    """
    forecast = getattr(weather, "forecast", None)
    if forecast is None:
        return DEFAULT_OPTIMAL_CHARGE

    try:
        outlooks = [evaluate_horizon(sample, season) for sample in forecast.horizons()]
        avg_generation = sum(o.generation for o in outlooks) / len(outlooks)
        avg_load = sum(o.load for o in outlooks) / len(outlooks)
    except Exception as exc:
        logger.warning("Optimal battery level fell back to default: %s", exc)
        return DEFAULT_OPTIMAL_CHARGE

    if avg_generation < 0.4:
        return min(95.0, 70.0 + (1.0 - avg_generation) * 25.0)
    if avg_load > 1.3:
        return min(90.0, 60.0 + (avg_load - 1.0) * 30.0)
    return max(40.0, min(80.0, 60.0 + (avg_generation - avg_load) * 20.0))


def select_recommendation(
    solar_efficiency: float, wind_efficiency: float, load_multiplier: float
) -> str:
    """Pick the operating action, first matching rule wins.

    1. renewable share > 0.7 and load < 1.2 -> ``charge_now``
    2. renewable share < 0.3 or load > 1.5 -> ``prepare_for_peak``
    3. renewable share < 0.6 * load -> ``discharge_now``
    4. otherwise -> ``maintain``
    """
    share = (solar_efficiency + wind_efficiency) / 2
    if share > 0.7 and load_multiplier < 1.2:
        return "charge_now"
    if share < 0.3 or load_multiplier > 1.5:
        return "prepare_for_peak"
    if share < load_multiplier * 0.6:
        return "discharge_now"
    return "maintain"
