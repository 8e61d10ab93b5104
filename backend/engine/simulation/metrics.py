"""Dashboard metrics derived from a single :class:`EnergyRecord`.

Summary figures, threshold alerts and a battery charge/discharge status.
All functions are pure.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from engine.simulation.integrator import EnergyRecord


@dataclass(frozen=True)
class AlertThresholds:
    """Limits that raise dashboard alerts.

    Parameters
    ----------
    battery_low : float
        Battery level (%) below which an error is raised.  Default 20.
    high_grid_usage_kw : float
        Grid import (kW) above which a warning is raised.  Default 100.
    peak_load_kw : float
        Demand (kW) above which an info alert is raised.  Default 250.
    """

    battery_low: float = 20.0
    high_grid_usage_kw: float = 100.0
    peak_load_kw: float = 250.0


@dataclass(frozen=True)
class CurrentMetrics:
    solar_generation: float
    wind_generation: float
    battery_level: float
    grid_usage: float
    current_load: float
    total_generation: float
    efficiency: float


@dataclass(frozen=True)
class Alert:
    type: str  # "error" | "warning" | "info"
    message: str


@dataclass(frozen=True)
class BatteryStatus:
    status: str  # "Charging" | "Discharging" | "Standby"
    rate: float
    time_to_full: Optional[float] = None
    time_to_empty: Optional[float] = None


def current_metrics(record: EnergyRecord) -> CurrentMetrics:
    """Headline figures; efficiency is the renewable share of supply in %."""
    total = record.total_generation_kw
    if total > 0:
        efficiency = min(100.0, total / (total + record.grid_import_kw) * 100)
    else:
        efficiency = 0.0

    return CurrentMetrics(
        solar_generation=record.solar_gen_kw,
        wind_generation=record.wind_gen_kw,
        battery_level=record.battery_soc_percent,
        grid_usage=record.grid_import_kw,
        current_load=record.load_demand_kw,
        total_generation=round(total, 2),
        efficiency=round(efficiency, 2),
    )


def alerts(
    record: EnergyRecord,
    hour: int,
    thresholds: AlertThresholds = AlertThresholds(),
) -> list[Alert]:
    result: list[Alert] = []

    if record.battery_soc_percent < thresholds.battery_low:
        result.append(Alert("error", "Battery critically low"))
    if record.grid_import_kw > thresholds.high_grid_usage_kw:
        result.append(Alert("warning", "High grid demand detected"))
    if record.solar_gen_kw == 0 and 8 <= hour <= 17:
        result.append(Alert("warning", "Solar generation below expected"))
    if record.load_demand_kw > thresholds.peak_load_kw:
        result.append(Alert("info", "Peak load period detected"))

    return result


def battery_status(record: EnergyRecord) -> BatteryStatus:
    """Charge/discharge state with rate (%/h) and time to full/empty (h)."""
    balance = record.energy_balance_kw

    if balance > 10:
        rate = balance * 0.05
        return BatteryStatus(
            status="Charging",
            rate=round(abs(rate), 2),
            time_to_full=round((100 - record.battery_soc_percent) / rate, 2),
        )
    if balance < -10:
        rate = abs(balance * 0.03)
        return BatteryStatus(
            status="Discharging",
            rate=round(rate, 2),
            time_to_empty=round(record.battery_soc_percent / rate, 2),
        )
    return BatteryStatus(status="Standby", rate=0.0)
