"""Human-readable operator advisories for the current tick.

Rules are evaluated in a fixed order and every match appends one entry, so
the output order is deterministic for a given input.  When no rule fires a
single low-priority "running efficiently" entry is returned.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from engine.prediction.predictor import EnergyPrediction
from engine.simulation.integrator import EnergyRecord
from engine.weather.synthesizer import WeatherSample


@dataclass(frozen=True)
class Recommendation:
    message: str
    priority: str  # "high" | "medium" | "low"
    icon: str
    action: Optional[str] = None
    weather_based: bool = True


def _fmt(value: float) -> str:
    """Compact number formatting: ``80.0`` -> ``80``, ``72.5`` -> ``72.5``."""
    return f"{value:g}"


def smart_recommendations(
    record: EnergyRecord,
    weather: WeatherSample,
    prediction: EnergyPrediction,
    hour: int,
    mode: str,
) -> list[Recommendation]:
    """Build the ordered advisory list for one tick.

    Parameters
    ----------
    record : EnergyRecord
        The tick's telemetry (battery level is read from it).
    weather : WeatherSample
        Conditions and forecast behind the tick.
    prediction : EnergyPrediction
        Efficiencies, target SOC and action for the tick.
    hour : int
        Current hour of day, 0 -- 23.
    mode : str
        System mode, echoed in the default entry.
    """
    recs: list[Recommendation] = []
    soc = record.battery_soc_percent
    forecast = weather.forecast

    if forecast.next_6h.cloud_cover > 70 and soc < 60:
        recs.append(Recommendation(
            message=(
                f"Heavy clouds expected in 6h ({_fmt(forecast.next_6h.cloud_cover)}% cover)"
                " - charge battery now"
            ),
            priority="high",
            icon="☁️",
            action="Enable maximum battery charging while solar is available",
        ))

    if forecast.next_24h.temperature > 40 and hour < 12:
        recs.append(Recommendation(
            message=(
                f"Extreme heat expected tomorrow ({_fmt(forecast.next_24h.temperature)}°C)"
                " - prepare for high AC load"
            ),
            priority="high",
            icon="🌡️",
            action="Charge battery to 90%+ and schedule non-essential loads for night",
        ))

    if prediction.wind_efficiency > 0.8 and soc < prediction.battery_optimal_charge:
        recs.append(Recommendation(
            message=f"Excellent wind conditions ({_fmt(weather.wind_speed)} m/s) - optimize charging",
            priority="medium",
            icon="💨",
            action="Utilize high wind generation for battery charging",
        ))

    if weather.condition == "dusty" and prediction.solar_efficiency < 0.6:
        recs.append(Recommendation(
            message="Dust storm reducing solar efficiency - clean panels when safe",
            priority="medium",
            icon="🌪️",
            action="Schedule panel cleaning and rely more on wind/battery",
        ))

    if prediction.recommendation == "charge_now":
        recs.append(Recommendation(
            message="Optimal charging window - maximize renewable energy storage",
            priority="medium",
            icon="⚡",
            action="Switch to maximum charge mode",
        ))
    elif prediction.recommendation == "prepare_for_peak":
        recs.append(Recommendation(
            message="High load period approaching - ensure battery readiness",
            priority="high",
            icon="🔋",
            action=f"Charge battery to {_fmt(round(prediction.battery_optimal_charge, 1))}%",
        ))
    elif prediction.recommendation == "discharge_now":
        recs.append(Recommendation(
            message="Low renewable generation - use stored battery power",
            priority="medium",
            icon="🔄",
            action="Switch to battery backup mode",
        ))

    if prediction.solar_efficiency < 0.3 and 10 <= hour <= 16:
        recs.append(Recommendation(
            message=(
                f"Solar efficiency very low ({round(prediction.solar_efficiency * 100)}%)"
                " during peak hours"
            ),
            priority="high",
            icon="☀️",
            action="Check for panel obstructions or maintenance needs",
        ))

    if not recs:
        recs.append(Recommendation(
            message=f"Weather-optimized system running efficiently ({mode} mode)",
            priority="low",
            icon="✅",
            action="Continue current operation",
        ))

    return recs


SAFE_MODE_RECOMMENDATION = Recommendation(
    message="Energy system operating in safe mode",
    priority="low",
    icon="⚠️",
    action="Manual monitoring recommended",
    weather_based=False,
)
