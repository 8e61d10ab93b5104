"""On-site IoT sensor readings synthesised from a weather sample.

Used in offline mode, where the plant's own sensors stand in for an external
weather feed and refine the solar efficiency estimate.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .synthesizer import WeatherSample

# Fixed panel tilt for the site latitude (~27 deg N).
PANEL_TILT_DEG = 30.0

_AMBIENT_LIGHT_LUX: dict[str, tuple[float, float]] = {
    "sunny": (80_000.0, 100_000.0),
    "partly_cloudy": (40_000.0, 70_000.0),
    "cloudy": (10_000.0, 25_000.0),
}
_DIM_LIGHT_LUX = 500.0


@dataclass(frozen=True)
class IoTSensorSample:
    """Snapshot of plant-side sensor readings."""

    panel_temperature: float
    panel_tilt: float
    wind_turbine_rpm: int
    ambient_light: int
    battery_voltage: float
    inverter_efficiency: float
    load_power_factor: float


def synthesize_sensors(
    weather: WeatherSample, rng: np.random.Generator
) -> IoTSensorSample:
    """Derive plausible sensor readings from *weather*.

    Panels run 15 deg C above ambient plus 2 deg C per UV index point.
    Ambient light depends on the sky condition; any other condition (dust,
    rain, night) reads as dim light.
    """
    panel_temperature = weather.temperature + 15 + weather.uv_index * 2

    light_range = _AMBIENT_LIGHT_LUX.get(weather.condition)
    if light_range is not None:
        ambient_light = float(rng.uniform(*light_range))
    else:
        ambient_light = _DIM_LIGHT_LUX

    return IoTSensorSample(
        panel_temperature=round(panel_temperature, 1),
        panel_tilt=PANEL_TILT_DEG,
        wind_turbine_rpm=int(round(weather.wind_speed * 25 + rng.random() * 50)),
        ambient_light=int(round(ambient_light)),
        # 48 V bank, +/- 1 V
        battery_voltage=round(48.0 + (rng.random() - 0.5) * 2, 2),
        inverter_efficiency=round(float(rng.uniform(94.0, 98.0)), 2),
        load_power_factor=round(float(rng.uniform(0.85, 0.95)), 3),
    )
