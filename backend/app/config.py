from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_prefix": "", "case_sensitive": False}

    # App
    environment: str = "development"
    debug: bool = True
    app_name: str = "GreenGrid"
    cors_origins: str = "http://localhost:5173,http://localhost:3000"
    json_logs: bool = False

    # Simulation
    system_mode: str = "online"
    weather_api_key: str = ""
    tick_interval_seconds: float = Field(default=60.0, gt=0)
    ticker_enabled: bool = True
    random_seed: int | None = None

    # Plant (nameplate)
    max_solar_kw: float = 300.0
    max_wind_kw: float = 100.0
    base_load_kw: float = 200.0
    carbon_factor: float = 0.82
    initial_battery_percent: float = 60.0

    # Alert thresholds
    alert_battery_low: float = 20.0
    alert_high_grid_usage_kw: float = 100.0
    alert_peak_load_kw: float = 250.0

    # Location (Jaipur, Rajasthan)
    latitude: float = 26.9124
    longitude: float = 75.7873


settings = Settings()
