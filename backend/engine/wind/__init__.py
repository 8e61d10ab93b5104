"""Wind turbine engine module.

Submodules
----------
power_curve
    Normalised turbine efficiency curve with cut-in/cut-out handling and an
    air-density proxy.
"""

from engine.wind.power_curve import (
    DEFAULT_CURVE,
    WindEfficiencyCurve,
    air_density_factor,
    wind_efficiency,
)

__all__ = [
    "air_density_factor",
    "DEFAULT_CURVE",
    "WindEfficiencyCurve",
    "wind_efficiency",
]
