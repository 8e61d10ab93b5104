"""Wind turbine efficiency curve.

Provides the :class:`WindEfficiencyCurve` class for mapping wind speed and
air temperature to a normalised turbine output factor, and a module-level
default curve used by the efficiency predictor.
"""

from __future__ import annotations

from dataclasses import dataclass

# Reference temperature for the air-density proxy (deg C).
REFERENCE_TEMPERATURE = 25.0
# Fractional output change per deg C away from the reference.
DENSITY_COEFFICIENT = 0.005


# ---------------------------------------------------------------------------
# WindEfficiencyCurve class
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class WindEfficiencyCurve:
    """Piecewise efficiency curve for a small wind turbine.

    Between *cut_in* and *cut_out* the factor follows a squared ramp
    ``(v / rated_speed) ** 2`` capped at 1.0, which approximates the cubic
    power law of the rotor.  Outside that band the factor is fixed:
    *below_cut_in* for idling rotors and *above_cut_out* (still density
    scaled) for furled, de-rated operation.

    Parameters
    ----------
    cut_in : float
        Wind speed (m/s) below which the turbine idles.  Default 3.0.
    rated_speed : float
        Wind speed (m/s) at which the ramp reaches 1.0.  Default 12.0.
    cut_out : float
        Wind speed (m/s) above which the turbine de-rates.  Default 15.0.
    below_cut_in : float
        Fixed factor below *cut_in*.  Default 0.1.
    above_cut_out : float
        Factor above *cut_out* before density scaling.  Default 0.3.
    """

    cut_in: float = 3.0
    rated_speed: float = 12.0
    cut_out: float = 15.0
    below_cut_in: float = 0.1
    above_cut_out: float = 0.3

    def __post_init__(self) -> None:
        if not (0 < self.cut_in < self.rated_speed <= self.cut_out):
            raise ValueError(
                "Speeds must satisfy 0 < cut_in < rated_speed <= cut_out, "
                f"got cut_in={self.cut_in}, rated_speed={self.rated_speed}, "
                f"cut_out={self.cut_out}"
            )

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def efficiency(self, wind_speed: float, temperature: float) -> float:
        """Unclamped efficiency factor at *wind_speed* and *temperature*.

        The ramp and the de-rated factor above *cut_out* are scaled by the
        air-density proxy ``1 + (25 - T) * 0.005``; the idle factor below
        *cut_in* is returned as-is.
        """
        if wind_speed < self.cut_in:
            return self.below_cut_in
        if wind_speed > self.cut_out:
            return self.above_cut_out * air_density_factor(temperature)

        ramp = min(1.0, (wind_speed / self.rated_speed) ** 2)
        return ramp * air_density_factor(temperature)


def air_density_factor(temperature: float) -> float:
    """Output scaling from air density; colder air is denser."""
    return 1.0 + (REFERENCE_TEMPERATURE - temperature) * DENSITY_COEFFICIENT


DEFAULT_CURVE = WindEfficiencyCurve()


def wind_efficiency(
    wind_speed: float,
    temperature: float,
    curve: WindEfficiencyCurve = DEFAULT_CURVE,
) -> float:
    """Evaluate *curve* (the default small-turbine curve unless given)."""
    return curve.efficiency(wind_speed, temperature)
