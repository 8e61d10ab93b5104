"""Weather module (seasonal climate table, synthetic weather, IoT sensors)."""

from .seasons import SEASONS, SeasonProfile, current_season, season_for_month
from .synthesizer import (
    CONDITIONS,
    FALLBACK_WEATHER,
    ForecastSample,
    WeatherDataError,
    WeatherForecast,
    WeatherSample,
    WeatherSynthesizer,
    validate_weather,
)
from .sensors import IoTSensorSample, synthesize_sensors

__all__ = [
    "SEASONS",
    "SeasonProfile",
    "current_season",
    "season_for_month",
    "CONDITIONS",
    "FALLBACK_WEATHER",
    "ForecastSample",
    "WeatherDataError",
    "WeatherForecast",
    "WeatherSample",
    "WeatherSynthesizer",
    "validate_weather",
    "IoTSensorSample",
    "synthesize_sensors",
]
