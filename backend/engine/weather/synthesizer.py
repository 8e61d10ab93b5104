"""Synthetic weather generation for a hot semi-arid climate.

Produces a current :class:`WeatherSample` together with reduced forecast
samples 1 h, 6 h and 24 h ahead.  All draws are parameterised by the hour of
day and the season bucket of the current month (see
:mod:`engine.weather.seasons`).

Random numbers come from an injected :class:`numpy.random.Generator` so
callers can seed or replace the source, and the month comes from an injected
clock, so a synthesizer is fully deterministic under test.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

import numpy as np

from .seasons import SeasonProfile, season_for_month

CONDITIONS = ("sunny", "partly_cloudy", "cloudy", "dusty", "rainy", "clear_night")

# Daylight window: hours strictly before SUNRISE_HOUR or after SUNSET_HOUR
# are reported as clear_night.
SUNRISE_HOUR = 6
SUNSET_HOUR = 19


class WeatherDataError(ValueError):
    """Raised when a weather sample is structurally unusable."""


# ======================================================================
# Data structures
# ======================================================================

@dataclass(frozen=True)
class ForecastSample:
    """Reduced weather sample for a single forecast horizon."""

    condition: str
    temperature: float
    wind_speed: float
    cloud_cover: float


@dataclass(frozen=True)
class WeatherForecast:
    """Forecast samples 1 h, 6 h and 24 h ahead."""

    next_1h: ForecastSample
    next_6h: ForecastSample
    next_24h: ForecastSample

    def horizons(self) -> tuple[ForecastSample, ForecastSample, ForecastSample]:
        return (self.next_1h, self.next_6h, self.next_24h)


@dataclass(frozen=True)
class WeatherSample:
    """Current weather conditions plus short-term forecast.

    Attributes
    ----------
    condition : str
        One of :data:`CONDITIONS`.
    temperature : float
        Air temperature in deg C.
    humidity : float
        Relative humidity in %.
    wind_speed : float
        Wind speed in m/s.
    cloud_cover : float
        Cloud cover in % (0 -- 100).
    uv_index : float
        UV index (0 -- 11).
    visibility : float
        Horizontal visibility in km.
    forecast : WeatherForecast
        Reduced samples for the next 1 h, 6 h and 24 h.
    """

    condition: str
    temperature: float
    humidity: float
    wind_speed: float
    cloud_cover: float
    uv_index: float
    visibility: float
    forecast: WeatherForecast


def validate_weather(sample: Optional[WeatherSample]) -> WeatherSample:
    """Return *sample* unchanged if it is usable, else raise.

    Raises
    ------
    WeatherDataError
        If the sample is missing, its condition is unknown, or any forecast
        horizon is absent.
    """
    if sample is None:
        raise WeatherDataError("Weather sample is missing")
    if sample.condition not in CONDITIONS:
        raise WeatherDataError(f"Unknown weather condition: {sample.condition!r}")
    forecast = getattr(sample, "forecast", None)
    if forecast is None:
        raise WeatherDataError("Weather sample has no forecast")
    for name in ("next_1h", "next_6h", "next_24h"):
        if getattr(forecast, name, None) is None:
            raise WeatherDataError(f"Weather forecast is missing horizon {name}")
    return sample


# Safe sample used when synthesis fails at the tick boundary.
FALLBACK_WEATHER = WeatherSample(
    condition="sunny",
    temperature=30.0,
    humidity=50.0,
    wind_speed=5.0,
    cloud_cover=20.0,
    uv_index=6.0,
    visibility=10.0,
    forecast=WeatherForecast(
        next_1h=ForecastSample("sunny", 30.0, 5.0, 20.0),
        next_6h=ForecastSample("sunny", 32.0, 6.0, 15.0),
        next_24h=ForecastSample("partly_cloudy", 28.0, 4.0, 30.0),
    ),
)


# ======================================================================
# Helpers
# ======================================================================

def diurnal_curve(hour: float) -> float:
    """Half-sine daily shape, zero at 06:00 and 18:00, peak at 12:00.

    Outside the 06:00 -- 18:00 window the value goes negative, which the
    temperature model uses for the overnight dip.
    """
    return math.sin((hour - 6) / 12 * math.pi)


def is_night(hour: int) -> bool:
    return hour < SUNRISE_HOUR or hour > SUNSET_HOUR


def _check_hour(hour: int) -> None:
    if not 0 <= hour <= 23:
        raise ValueError(f"hour must be in 0..23, got {hour}")


# Per-horizon (wind low, wind high, cloud low, cloud high) draw ranges.
_HORIZON_RANGES: dict[int, tuple[float, float, float, float]] = {
    1: (3.0, 8.0, 20.0, 60.0),
    6: (4.0, 10.0, 10.0, 40.0),
    24: (3.0, 10.0, 25.0, 60.0),
}


# ======================================================================
# Synthesizer
# ======================================================================

class WeatherSynthesizer:
    """Season-aware generator of plausible weather samples.

    Parameters
    ----------
    rng : numpy.random.Generator or None
        Random source.  ``None`` creates an unseeded default generator.
    clock : callable or None
        Zero-argument callable returning the current :class:`datetime`; used
        to pick the season when no month is given.  Defaults to
        :meth:`datetime.now`.
    """

    def __init__(
        self,
        rng: Optional[np.random.Generator] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._rng = rng if rng is not None else np.random.default_rng()
        self._clock = clock or datetime.now

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def season(self, month: Optional[int] = None) -> SeasonProfile:
        """Season bucket for *month*, or for the clock's current month."""
        if month is None:
            month = self._clock().month
        return season_for_month(month)

    def synthesize(self, hour: int, month: Optional[int] = None) -> WeatherSample:
        """Generate the weather for *hour* of the day.

        Parameters
        ----------
        hour : int
            Hour of day, 0 -- 23.
        month : int or None
            Calendar month used to choose the season.  Defaults to the
            clock's current month.

        Returns
        -------
        WeatherSample
            Sample with every numeric field rounded to one decimal and a
            fully populated forecast.
        """
        _check_hour(hour)
        season = self.season(month)

        temperature = (
            self.seasonal_temperature(season, hour)
            + (self._rng.random() - 0.5) * 3
        )
        cloud_cover, condition = self._draw_sky(season)
        if is_night(hour):
            condition = "clear_night"

        if season.name == "summer":
            wind_speed = self._uniform(3.0, 11.0)
        else:
            wind_speed = self._uniform(2.0, 7.0)

        if season.name == "monsoon":
            humidity = self._uniform(70.0, 95.0)
        elif season.name == "summer":
            humidity = self._uniform(20.0, 50.0)
        else:
            humidity = self._uniform(40.0, 75.0)

        uv_index = self._uv_index(condition, hour)

        if condition == "dusty":
            visibility = self._uniform(2.0, 5.0)
        elif condition == "rainy":
            visibility = self._uniform(1.0, 3.0)
        else:
            visibility = self._uniform(8.0, 15.0)

        return WeatherSample(
            condition=condition,
            temperature=round(temperature, 1),
            humidity=round(humidity, 1),
            wind_speed=round(wind_speed, 1),
            cloud_cover=round(cloud_cover, 1),
            uv_index=round(uv_index, 1),
            visibility=round(visibility, 1),
            forecast=self.forecast(hour, season),
        )

    def forecast(self, hour: int, season: SeasonProfile) -> WeatherForecast:
        """Build the 1 h / 6 h / 24 h forecast starting from *hour*."""
        return WeatherForecast(
            next_1h=self._forecast_sample(hour, 1, season),
            next_6h=self._forecast_sample(hour, 6, season),
            next_24h=self._forecast_sample(hour, 24, season),
        )

    @staticmethod
    def seasonal_temperature(season: SeasonProfile, hour: float) -> float:
        """Noise-free temperature on the seasonal daily curve."""
        return season.base_temperature + diurnal_curve(hour) * season.temperature_range

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _uniform(self, low: float, high: float) -> float:
        return float(self._rng.uniform(low, high))

    def _draw_sky(self, season: SeasonProfile) -> tuple[float, str]:
        """Draw cloud cover (%) and the matching daytime condition."""
        if season.name == "monsoon":
            cloud_cover = self._uniform(60.0, 100.0)
            condition = "cloudy" if cloud_cover > 80 else "partly_cloudy"
            if self._rng.random() < 0.3:
                condition = "rainy"
        elif season.name == "summer":
            cloud_cover = self._uniform(0.0, 30.0)
            if cloud_cover < 10:
                condition = "sunny"
            elif cloud_cover < 20:
                condition = "partly_cloudy"
            else:
                condition = "dusty"
        else:
            cloud_cover = self._uniform(0.0, 50.0)
            if cloud_cover < 15:
                condition = "sunny"
            elif cloud_cover < 35:
                condition = "partly_cloudy"
            else:
                condition = "cloudy"
        return cloud_cover, condition

    @staticmethod
    def _uv_index(condition: str, hour: int) -> float:
        if condition == "sunny":
            return min(11.0, 6 + diurnal_curve(hour) * 5)
        if condition == "partly_cloudy":
            return min(8.0, 4 + diurnal_curve(hour) * 3)
        return 2.0

    def _forecast_condition(self, season: SeasonProfile) -> str:
        draw = self._rng.random()
        if season.name == "monsoon":
            return "rainy" if draw < 0.4 else "cloudy"
        if season.name == "summer":
            return "sunny" if draw < 0.7 else "dusty"
        return "sunny" if draw < 0.6 else "partly_cloudy"

    def _forecast_sample(
        self, hour: int, horizon: int, season: SeasonProfile
    ) -> ForecastSample:
        wind_lo, wind_hi, cloud_lo, cloud_hi = _HORIZON_RANGES[horizon]
        condition = self._forecast_condition(season)
        temperature = self.seasonal_temperature(season, hour + horizon)
        return ForecastSample(
            condition=condition,
            temperature=round(temperature, 1),
            wind_speed=round(self._uniform(wind_lo, wind_hi), 1),
            cloud_cover=round(self._uniform(cloud_lo, cloud_hi), 1),
        )
