"""Shared test fixtures for GreenGrid engine and API tests."""

from __future__ import annotations

from datetime import datetime

import numpy as np
import pytest

from engine.weather.synthesizer import ForecastSample, WeatherForecast, WeatherSample

# Mid-May noon: summer season, peak of the daily curves.
SUMMER_NOON = datetime(2025, 5, 15, 12, 0, 0)


# ======================================================================
# Randomness and time
# ======================================================================

@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(42)


@pytest.fixture
def fixed_clock():
    """Clock frozen at mid-May noon."""
    return lambda: SUMMER_NOON


# ======================================================================
# Weather fixtures
# ======================================================================

def make_weather(
    condition: str = "sunny",
    temperature: float = 30.0,
    humidity: float = 40.0,
    wind_speed: float = 6.0,
    cloud_cover: float = 10.0,
    uv_index: float = 9.0,
    visibility: float = 12.0,
    forecast: WeatherForecast | None = None,
) -> WeatherSample:
    if forecast is None:
        forecast = WeatherForecast(
            next_1h=ForecastSample("sunny", 31.0, 5.0, 20.0),
            next_6h=ForecastSample("sunny", 29.0, 6.0, 15.0),
            next_24h=ForecastSample("partly_cloudy", 30.0, 5.0, 30.0),
        )
    return WeatherSample(
        condition=condition,
        temperature=temperature,
        humidity=humidity,
        wind_speed=wind_speed,
        cloud_cover=cloud_cover,
        uv_index=uv_index,
        visibility=visibility,
        forecast=forecast,
    )


@pytest.fixture
def summer_weather() -> WeatherSample:
    """Clear, hot summer afternoon: 5 % cloud, 38 deg C, UV 11."""
    return make_weather(
        condition="sunny",
        temperature=38.0,
        humidity=30.0,
        wind_speed=6.0,
        cloud_cover=5.0,
        uv_index=11.0,
        visibility=10.0,
    )


@pytest.fixture
def mild_weather() -> WeatherSample:
    return make_weather()


@pytest.fixture
def weather_factory():
    """Build a :class:`WeatherSample` overriding any field by keyword."""
    return make_weather
