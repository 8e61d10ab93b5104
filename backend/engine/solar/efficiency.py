"""Weather-driven PV efficiency factor.

The factor is the product of independent derating terms (cloud cover, cell
temperature, UV correlation, visibility) and the seasonal boost.  Optional
sensor refinements apply further multiplicative penalties.  Because every
term is multiplicative the evaluation order does not matter.
"""

from __future__ import annotations

import math
from typing import Optional

# Cell temperature above which output derates (deg C).
OPTIMAL_PANEL_TEMP = 25.0
# Fractional power loss per deg C above OPTIMAL_PANEL_TEMP.
TEMP_COEFFICIENT = 0.004
# Floor on temperature derating.
MIN_TEMP_DERATING = 0.7

# UV index / visibility (km) at which their factors saturate at 1.0.
UV_SATURATION = 8.0
VISIBILITY_SATURATION_KM = 10.0

# Sensor refinement thresholds.
HOT_PANEL_TEMP = 60.0
HOT_PANEL_PENALTY = 0.9
LOW_LIGHT_LUX = 20_000.0
LOW_LIGHT_PENALTY = 0.8


def cloud_factor(cloud_cover: float) -> float:
    """Fraction of clear-sky output passing through *cloud_cover* %."""
    return (100.0 - cloud_cover) / 100.0


def temperature_derating(temperature: float) -> float:
    """Panel derating: -0.4 %/deg C above 25 deg C, floored at 70 %."""
    excess = max(0.0, temperature - OPTIMAL_PANEL_TEMP)
    return max(MIN_TEMP_DERATING, 1.0 - excess * TEMP_COEFFICIENT)


def solar_efficiency(
    cloud_cover: float,
    temperature: float,
    solar_boost: float,
    uv_index: Optional[float] = None,
    visibility: Optional[float] = None,
    panel_temperature: Optional[float] = None,
    ambient_light: Optional[float] = None,
) -> float:
    """Unclamped solar efficiency factor.

    Parameters
    ----------
    cloud_cover : float
        Cloud cover in % (0 -- 100).
    temperature : float
        Ambient temperature in deg C.
    solar_boost : float
        Seasonal multiplier.
    uv_index : float or None
        UV index.  ``None`` skips the UV term (forecast horizons carry no
        UV reading).
    visibility : float or None
        Visibility in km.  ``None`` skips the visibility term.
    panel_temperature : float or None
        Measured panel temperature (deg C) from on-site sensors.
    ambient_light : float or None
        Measured ambient light (lux) from on-site sensors.

    Returns
    -------
    float
        Efficiency factor; callers clamp to [0, 1].
    """
    efficiency = cloud_factor(cloud_cover)
    efficiency *= temperature_derating(temperature)

    if uv_index is not None:
        efficiency *= min(1.0, uv_index / UV_SATURATION)
    if visibility is not None:
        efficiency *= min(1.0, visibility / VISIBILITY_SATURATION_KM)

    efficiency *= solar_boost

    if panel_temperature is not None and panel_temperature > HOT_PANEL_TEMP:
        efficiency *= HOT_PANEL_PENALTY
    if ambient_light is not None and ambient_light < LOW_LIGHT_LUX:
        efficiency *= LOW_LIGHT_PENALTY

    return efficiency


def daytime_factor(hour: int) -> float:
    """Fraction of peak irradiance at *hour*: half-sine over 06:00 -- 18:00.

    Zero outside that window.
    """
    if hour < 6 or hour > 18:
        return 0.0
    return max(0.0, math.sin((hour - 6) / 12 * math.pi))
