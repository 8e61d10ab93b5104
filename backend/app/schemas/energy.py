from typing import Literal

from pydantic import BaseModel, Field

SystemMode = Literal["online", "offline"]


class ForecastSampleResponse(BaseModel):
    condition: str
    temperature: float
    wind_speed: float
    cloud_cover: float

    model_config = {"from_attributes": True}


class WeatherForecastResponse(BaseModel):
    next_1h: ForecastSampleResponse
    next_6h: ForecastSampleResponse
    next_24h: ForecastSampleResponse

    model_config = {"from_attributes": True}


class WeatherSampleResponse(BaseModel):
    condition: str
    temperature: float
    humidity: float
    wind_speed: float
    cloud_cover: float = Field(ge=0, le=100)
    uv_index: float = Field(ge=0, le=11)
    visibility: float
    forecast: WeatherForecastResponse

    model_config = {"from_attributes": True}


class SensorSampleResponse(BaseModel):
    panel_temperature: float
    panel_tilt: float
    wind_turbine_rpm: int
    ambient_light: int
    battery_voltage: float
    inverter_efficiency: float
    load_power_factor: float

    model_config = {"from_attributes": True}


class PredictionResponse(BaseModel):
    solar_efficiency: float = Field(ge=0, le=1)
    wind_efficiency: float = Field(ge=0, le=1)
    load_multiplier: float = Field(ge=0.3, le=2.5)
    battery_optimal_charge: float
    recommendation: Literal["charge_now", "discharge_now", "maintain", "prepare_for_peak"]

    model_config = {"from_attributes": True}


class EnergyRecordResponse(BaseModel):
    timestamp: str
    solar_gen_kw: float
    wind_gen_kw: float
    load_demand_kw: float
    battery_soc_percent: float
    grid_import_kw: float
    grid_export_kw: float
    weather: str
    forecast: Literal["Surplus", "Deficit", "Balanced"]
    temperature: float
    carbon_saved_kg: float

    model_config = {"from_attributes": True}


class TickResponse(BaseModel):
    energy_record: EnergyRecordResponse
    weather: WeatherSampleResponse
    prediction: PredictionResponse
    sensors: SensorSampleResponse | None
    mode: SystemMode
    fallback: bool
    error: str | None

    model_config = {"from_attributes": True}


class ModeUpdate(BaseModel):
    mode: SystemMode
    api_key: str | None = Field(default=None, max_length=255)


class ModeResponse(BaseModel):
    mode: SystemMode
    has_api_key: bool

    model_config = {"from_attributes": True}


class RecommendationResponse(BaseModel):
    message: str
    priority: Literal["high", "medium", "low"]
    icon: str
    action: str | None
    weather_based: bool

    model_config = {"from_attributes": True}


class MetricsResponse(BaseModel):
    solar_generation: float
    wind_generation: float
    battery_level: float
    grid_usage: float
    current_load: float
    total_generation: float
    efficiency: float

    model_config = {"from_attributes": True}


class AlertResponse(BaseModel):
    type: Literal["error", "warning", "info"]
    message: str

    model_config = {"from_attributes": True}


class BatteryStatusResponse(BaseModel):
    status: Literal["Charging", "Discharging", "Standby"]
    rate: float
    time_to_full: float | None
    time_to_empty: float | None

    model_config = {"from_attributes": True}
