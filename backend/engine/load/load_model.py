"""Weather-driven load model for an educational institute campus.

Demand is the product of a nameplate base load, a fixed hourly shape
(afternoon AC peak typical of a hot climate) and a weather-dependent
multiplier covering cooling, heating and dehumidification.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

# ======================================================================
# Built-in hourly shape (24 values, 1.0 = nominal base load)
# ======================================================================

# Institute campus: low overnight, morning ramp, AC peak 12:00-15:59.
_INSTITUTE_HOURLY = np.array(
    [
        0.4, 0.4, 0.4, 0.4, 0.4,       # 00-04
        0.6, 0.6, 0.6,                 # 05-07
        0.8, 0.8, 0.8, 0.8,            # 08-11
        1.2, 1.2, 1.2, 1.2,            # 12-15 (peak AC load)
        1.0, 1.0, 1.0, 1.0,            # 16-19
        0.7, 0.7, 0.7,                 # 20-22
        0.5,                           # 23
    ],
    dtype=np.float64,
)

# Cooling load starts above this temperature (deg C).
COOLING_THRESHOLD = 30.0
# Heating load starts below this temperature (deg C).
HEATING_THRESHOLD = 15.0
# Dehumidification load starts above this relative humidity (%).
HUMIDITY_THRESHOLD = 70.0
HUMIDITY_COEFFICIENT = 0.005

MIN_LOAD_MULTIPLIER = 0.3
MAX_LOAD_MULTIPLIER = 2.5


# ======================================================================
# Public API
# ======================================================================


def hourly_load_pattern(hour: int) -> float:
    """Nominal load fraction for *hour* of the day (0 -- 23).

    Raises
    ------
    ValueError
        If *hour* is outside 0 -- 23.
    """
    if not 0 <= hour <= 23:
        raise ValueError(f"hour must be in 0..23, got {hour}")
    return float(_INSTITUTE_HOURLY[hour])


def load_multiplier(
    temperature: float,
    heat_load: float,
    humidity: Optional[float] = None,
) -> float:
    """Unclamped weather load multiplier.

    Parameters
    ----------
    temperature : float
        Ambient temperature in deg C.
    heat_load : float
        Seasonal heat-load scale.
    humidity : float or None
        Relative humidity in %.  ``None`` skips the dehumidification term.

    Returns
    -------
    float
        ``1.0`` in the comfort band; grows with the 1.5 power of the excess
        above 30 deg C and linearly with the deficit below 15 deg C.
    """
    multiplier = 1.0
    if temperature > COOLING_THRESHOLD:
        multiplier = 1.0 + ((temperature - COOLING_THRESHOLD) / 10.0) ** 1.5 * heat_load
    elif temperature < HEATING_THRESHOLD:
        multiplier = 1.0 + (HEATING_THRESHOLD - temperature) * 0.1 * heat_load

    if humidity is not None and humidity > HUMIDITY_THRESHOLD:
        multiplier *= 1.0 + (humidity - HUMIDITY_THRESHOLD) * HUMIDITY_COEFFICIENT

    return multiplier


def clamp_load_multiplier(multiplier: float) -> float:
    return float(np.clip(multiplier, MIN_LOAD_MULTIPLIER, MAX_LOAD_MULTIPLIER))


def load_demand_kw(base_load_kw: float, multiplier: float, hour: int) -> float:
    """Instantaneous demand in kW for *hour* under *multiplier*."""
    return base_load_kw * multiplier * hourly_load_pattern(hour)
