"""Seasonal climate buckets for a hot semi-arid region (Rajasthan, India).

Each calendar month maps to one of four fixed seasons.  A season carries the
multipliers used by the efficiency predictor (``solar_boost``, ``heat_load``)
and the base/range pair that shapes the synthetic daily temperature curve.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class SeasonProfile:
    """Climate parameters for one season bucket.

    Parameters
    ----------
    name : str
        Season identifier (``winter``, ``summer``, ``monsoon``,
        ``postMonsoon``).
    months : tuple[int, ...]
        Calendar months (1 -- 12) belonging to the season.
    solar_boost : float
        Multiplier applied to solar efficiency.
    heat_load : float
        Scale of weather-driven cooling/heating load.
    base_temperature : float
        Mean daily temperature in deg C.
    temperature_range : float
        Amplitude of the daily temperature swing in deg C.
    """

    name: str
    months: tuple[int, ...]
    solar_boost: float
    heat_load: float
    base_temperature: float
    temperature_range: float


# ======================================================================
# Season table
# ======================================================================

SEASONS: dict[str, SeasonProfile] = {
    "winter": SeasonProfile(
        name="winter",
        months=(12, 1, 2),
        solar_boost=0.9,
        heat_load=0.3,
        base_temperature=18.0,
        temperature_range=8.0,
    ),
    "summer": SeasonProfile(
        name="summer",
        months=(3, 4, 5, 6),
        solar_boost=1.1,
        heat_load=1.5,
        base_temperature=35.0,
        temperature_range=12.0,
    ),
    "monsoon": SeasonProfile(
        name="monsoon",
        months=(7, 8, 9),
        solar_boost=0.6,
        heat_load=0.8,
        base_temperature=28.0,
        temperature_range=6.0,
    ),
    "postMonsoon": SeasonProfile(
        name="postMonsoon",
        months=(10, 11),
        solar_boost=1.0,
        heat_load=0.9,
        base_temperature=25.0,
        temperature_range=9.0,
    ),
}

_SEASON_BY_MONTH: dict[int, SeasonProfile] = {
    month: profile for profile in SEASONS.values() for month in profile.months
}


def season_for_month(month: int) -> SeasonProfile:
    """Return the season bucket containing *month* (1 -- 12).

    Raises
    ------
    ValueError
        If *month* is outside 1 -- 12.
    """
    try:
        return _SEASON_BY_MONTH[month]
    except KeyError:
        raise ValueError(f"month must be in 1..12, got {month}") from None


def current_season(now: datetime) -> SeasonProfile:
    """Season bucket for a wall-clock timestamp."""
    return season_for_month(now.month)
