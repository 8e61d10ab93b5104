"""Tests for weather synthesis: seasons, synthesizer, IoT sensors."""
from datetime import datetime

import numpy as np
import pytest

from engine.weather.seasons import SEASONS, current_season, season_for_month
from engine.weather.sensors import PANEL_TILT_DEG, synthesize_sensors
from engine.weather.synthesizer import (
    CONDITIONS,
    FALLBACK_WEATHER,
    WeatherDataError,
    WeatherForecast,
    WeatherSynthesizer,
    diurnal_curve,
    is_night,
    validate_weather,
)


class TestSeasons:
    @pytest.mark.parametrize(
        "month,expected",
        [
            (12, "winter"), (1, "winter"), (2, "winter"),
            (3, "summer"), (4, "summer"), (5, "summer"), (6, "summer"),
            (7, "monsoon"), (8, "monsoon"), (9, "monsoon"),
            (10, "postMonsoon"), (11, "postMonsoon"),
        ],
    )
    def test_month_mapping(self, month, expected):
        assert season_for_month(month).name == expected

    def test_every_month_covered_once(self):
        months = sorted(m for s in SEASONS.values() for m in s.months)
        assert months == list(range(1, 13))

    @pytest.mark.parametrize("month", [0, 13, -1])
    def test_invalid_month(self, month):
        with pytest.raises(ValueError, match="1..12"):
            season_for_month(month)

    def test_summer_profile(self):
        summer = SEASONS["summer"]
        assert summer.solar_boost == pytest.approx(1.1)
        assert summer.heat_load == pytest.approx(1.5)
        assert summer.base_temperature == pytest.approx(35.0)

    def test_current_season_from_datetime(self):
        assert current_season(datetime(2025, 8, 1)).name == "monsoon"


class TestDiurnalCurve:
    def test_zero_at_six_and_eighteen(self):
        assert diurnal_curve(6) == pytest.approx(0.0)
        assert diurnal_curve(18) == pytest.approx(0.0, abs=1e-12)

    def test_peak_at_noon(self):
        assert diurnal_curve(12) == pytest.approx(1.0)

    def test_negative_overnight(self):
        assert diurnal_curve(0) < 0

    def test_night_hours(self):
        assert is_night(5)
        assert is_night(20)
        assert not is_night(6)
        assert not is_night(19)


class TestWeatherSynthesizer:
    @pytest.mark.parametrize("hour", [0, 1, 2, 3, 4, 5, 20, 21, 22, 23])
    @pytest.mark.parametrize("month", [1, 5, 8, 10])
    def test_night_is_always_clear_night(self, hour, month, rng):
        synth = WeatherSynthesizer(rng=rng)
        assert synth.synthesize(hour, month=month).condition == "clear_night"

    @pytest.mark.parametrize("hour", range(24))
    def test_forecast_always_present(self, hour, rng):
        sample = WeatherSynthesizer(rng=rng).synthesize(hour, month=7)
        assert isinstance(sample.forecast, WeatherForecast)
        for horizon in sample.forecast.horizons():
            assert horizon is not None
            assert horizon.condition in CONDITIONS

    def test_fields_within_ranges(self):
        synth = WeatherSynthesizer(rng=np.random.default_rng(7))
        for month in range(1, 13):
            for hour in range(24):
                s = synth.synthesize(hour, month=month)
                assert s.condition in CONDITIONS
                assert 0 <= s.cloud_cover <= 100
                assert 0 <= s.uv_index <= 11
                assert 0 <= s.humidity <= 100
                assert s.wind_speed >= 0
                assert s.visibility > 0

    def test_values_rounded_to_one_decimal(self, rng):
        s = WeatherSynthesizer(rng=rng).synthesize(13, month=4)
        for value in (s.temperature, s.humidity, s.wind_speed, s.cloud_cover,
                      s.uv_index, s.visibility):
            assert round(value, 1) == value

    def test_summer_daytime_conditions(self):
        synth = WeatherSynthesizer(rng=np.random.default_rng(3))
        seen = {synth.synthesize(12, month=5).condition for _ in range(200)}
        assert seen <= {"sunny", "partly_cloudy", "dusty"}

    def test_monsoon_is_cloudy_or_wet(self):
        synth = WeatherSynthesizer(rng=np.random.default_rng(3))
        for _ in range(100):
            s = synth.synthesize(12, month=8)
            assert s.cloud_cover >= 60
            assert s.condition in {"cloudy", "partly_cloudy", "rainy"}

    def test_night_uv_is_floor(self, rng):
        s = WeatherSynthesizer(rng=rng).synthesize(2, month=5)
        assert s.uv_index == pytest.approx(2.0)

    def test_temperature_follows_season(self):
        synth = WeatherSynthesizer(rng=np.random.default_rng(11))
        summer = synth.synthesize(12, month=5).temperature
        winter = synth.synthesize(12, month=1).temperature
        assert summer > winter

    def test_same_seed_same_sample(self):
        a = WeatherSynthesizer(rng=np.random.default_rng(5)).synthesize(10, month=3)
        b = WeatherSynthesizer(rng=np.random.default_rng(5)).synthesize(10, month=3)
        assert a == b

    def test_month_defaults_to_clock(self, rng, fixed_clock):
        synth = WeatherSynthesizer(rng=rng, clock=fixed_clock)
        assert synth.season().name == "summer"

    @pytest.mark.parametrize("hour", [-1, 24])
    def test_invalid_hour(self, hour, rng):
        with pytest.raises(ValueError, match="hour"):
            WeatherSynthesizer(rng=rng).synthesize(hour, month=5)

    def test_forecast_horizon_ranges(self):
        synth = WeatherSynthesizer(rng=np.random.default_rng(9))
        for _ in range(50):
            f = synth.synthesize(10, month=11).forecast
            assert 3 <= f.next_1h.wind_speed <= 8
            assert 20 <= f.next_1h.cloud_cover <= 60
            assert 4 <= f.next_6h.wind_speed <= 10
            assert 10 <= f.next_6h.cloud_cover <= 40
            assert 3 <= f.next_24h.wind_speed <= 10
            assert 25 <= f.next_24h.cloud_cover <= 60


class TestValidateWeather:
    def test_valid_sample_passes_through(self, mild_weather):
        assert validate_weather(mild_weather) is mild_weather

    def test_missing_sample(self):
        with pytest.raises(WeatherDataError, match="missing"):
            validate_weather(None)

    def test_unknown_condition(self, weather_factory):
        with pytest.raises(WeatherDataError, match="condition"):
            validate_weather(weather_factory(condition="hail"))

    def test_missing_forecast(self, mild_weather):
        from dataclasses import replace

        with pytest.raises(WeatherDataError, match="forecast"):
            validate_weather(replace(mild_weather, forecast=None))

    def test_missing_horizon(self, mild_weather):
        from dataclasses import replace

        broken = replace(mild_weather, forecast=replace(mild_weather.forecast, next_6h=None))
        with pytest.raises(WeatherDataError, match="next_6h"):
            validate_weather(broken)

    def test_weather_data_error_is_value_error(self):
        assert issubclass(WeatherDataError, ValueError)

    def test_fallback_weather_is_valid(self):
        assert validate_weather(FALLBACK_WEATHER).condition == "sunny"


class TestSensors:
    def test_panel_temperature(self, weather_factory, rng):
        s = synthesize_sensors(weather_factory(temperature=30.0, uv_index=8.0), rng)
        assert s.panel_temperature == pytest.approx(61.0)
        assert s.panel_tilt == PANEL_TILT_DEG

    @pytest.mark.parametrize(
        "condition,low,high",
        [
            ("sunny", 80_000, 100_000),
            ("partly_cloudy", 40_000, 70_000),
            ("cloudy", 10_000, 25_000),
        ],
    )
    def test_ambient_light_by_condition(self, condition, low, high, weather_factory, rng):
        for _ in range(20):
            s = synthesize_sensors(weather_factory(condition=condition), rng)
            assert low <= s.ambient_light <= high

    @pytest.mark.parametrize("condition", ["dusty", "rainy", "clear_night"])
    def test_dim_light(self, condition, weather_factory, rng):
        s = synthesize_sensors(weather_factory(condition=condition), rng)
        assert s.ambient_light == 500

    def test_reading_ranges(self, weather_factory, rng):
        weather = weather_factory(wind_speed=8.0)
        for _ in range(50):
            s = synthesize_sensors(weather, rng)
            assert 200 <= s.wind_turbine_rpm <= 250
            assert 47.0 <= s.battery_voltage <= 49.0
            assert 94.0 <= s.inverter_efficiency <= 98.0
            assert 0.85 <= s.load_power_factor <= 0.95
            assert isinstance(s.wind_turbine_rpm, int)
