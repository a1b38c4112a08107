from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict


class ForecastPeriod(BaseModel):
    """One forecast time slot, flattened across all weather elements.

    Notes
    -----
    - Every field is a string, exactly as reported by CWA (`rain` is the raw
      percentage number without a `%` sign).
    - Measurement fields stay `""` when the dataset does not carry the
      element; `F-C0032-001` has no `WS`, so `windSpeed` is usually empty.
    """

    model_config = ConfigDict(frozen=True)

    startTime: str
    endTime: str
    weather: str = ""
    rain: str = ""
    minTemp: str = ""
    maxTemp: str = ""
    comfort: str = ""
    windSpeed: str = ""


class WeatherResult(BaseModel):
    city: str
    updateTime: str
    forecasts: List[ForecastPeriod]


class WeatherResponse(BaseModel):
    success: bool = True
    data: WeatherResult


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    message: str
    details: Optional[Any] = None


class HealthResponse(BaseModel):
    status: str
    timestamp: str


class ServiceInfo(BaseModel):
    message: str
    endpoints: Dict[str, str]
