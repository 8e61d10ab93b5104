"""
Solar PV engine module.

Provides the weather-driven efficiency factor used to scale nameplate PV
capacity: cloud, cell-temperature, UV and visibility derating plus optional
on-site sensor refinements.
"""

from .efficiency import (
    cloud_factor,
    daytime_factor,
    solar_efficiency,
    temperature_derating,
)

__all__ = [
    "cloud_factor",
    "daytime_factor",
    "solar_efficiency",
    "temperature_derating",
]
