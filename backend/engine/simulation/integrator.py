"""Generation / load / battery integration for one simulation tick.

Turns an :class:`~engine.prediction.EnergyPrediction` into instantaneous
PV and wind output, campus demand and grid exchange, and advances the
persistent battery level.  Surplus and deficit are derived from one signed
balance, so grid import and export are never both positive.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from engine.battery.soc_tracker import BatteryLevelTracker
from engine.load.load_model import load_demand_kw
from engine.prediction.predictor import EnergyPrediction
from engine.solar.efficiency import daytime_factor

# Balance (kW) beyond which a tick is labelled Surplus / Deficit.
BALANCE_BAND_KW = 20.0


@dataclass(frozen=True)
class PlantConfig:
    """Nameplate parameters of the institute's plant.

    Parameters
    ----------
    max_solar_kw : float
        PV array peak output in kW.  Default 300.
    max_wind_kw : float
        Wind turbine rated output in kW.  Default 100.
    base_load_kw : float
        Nominal campus demand in kW.  Default 200.
    carbon_factor : float
        kg CO2 avoided per kW of renewable generation.  Default 0.82.
    """

    max_solar_kw: float = 300.0
    max_wind_kw: float = 100.0
    base_load_kw: float = 200.0
    carbon_factor: float = 0.82

    def __post_init__(self) -> None:
        for name in ("max_solar_kw", "max_wind_kw", "base_load_kw", "carbon_factor"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0, got {getattr(self, name)}")


@dataclass(frozen=True)
class EnergyRecord:
    """One tick of plant telemetry."""

    timestamp: str
    solar_gen_kw: float
    wind_gen_kw: float
    load_demand_kw: float
    battery_soc_percent: float
    grid_import_kw: float
    grid_export_kw: float
    weather: str
    forecast: str
    temperature: float
    carbon_saved_kg: float

    @property
    def total_generation_kw(self) -> float:
        return self.solar_gen_kw + self.wind_gen_kw

    @property
    def energy_balance_kw(self) -> float:
        return self.total_generation_kw - self.load_demand_kw


def balance_label(energy_balance_kw: float) -> str:
    """``Surplus`` above +20 kW, ``Deficit`` below -20 kW, else ``Balanced``."""
    if energy_balance_kw > BALANCE_BAND_KW:
        return "Surplus"
    if energy_balance_kw < -BALANCE_BAND_KW:
        return "Deficit"
    return "Balanced"


def integrate(
    now: datetime,
    prediction: EnergyPrediction,
    weather_condition: str,
    temperature: float,
    battery: BatteryLevelTracker,
    plant: PlantConfig = PlantConfig(),
) -> EnergyRecord:
    """Compute the :class:`EnergyRecord` for the tick at *now*.

    Advances *battery* exactly once using this tick's balance and the
    prediction's target level and action.
    """
    hour = now.hour

    solar_kw = plant.max_solar_kw * prediction.solar_efficiency * daytime_factor(hour)
    wind_kw = plant.max_wind_kw * prediction.wind_efficiency
    load_kw = load_demand_kw(plant.base_load_kw, prediction.load_multiplier, hour)

    total_kw = solar_kw + wind_kw
    balance = total_kw - load_kw

    soc = battery.advance(
        balance, prediction.battery_optimal_charge, prediction.recommendation
    )

    return EnergyRecord(
        timestamp=now.isoformat(),
        solar_gen_kw=round(solar_kw, 2),
        wind_gen_kw=round(wind_kw, 2),
        load_demand_kw=round(load_kw, 2),
        battery_soc_percent=round(soc, 2),
        grid_import_kw=round(max(0.0, -balance), 2),
        grid_export_kw=round(max(0.0, balance), 2),
        weather=weather_condition,
        forecast=balance_label(balance),
        temperature=temperature,
        carbon_saved_kg=round(total_kw * plant.carbon_factor, 2),
    )


def fallback_record(now: datetime) -> EnergyRecord:
    """Fixed record returned when a tick cannot be computed."""
    return EnergyRecord(
        timestamp=now.isoformat(),
        solar_gen_kw=200.0,
        wind_gen_kw=60.0,
        load_demand_kw=180.0,
        battery_soc_percent=65.0,
        grid_import_kw=0.0,
        grid_export_kw=80.0,
        weather="sunny",
        forecast="Surplus",
        temperature=30.0,
        carbon_saved_kg=213.2,
    )
