"""
Weather entities shared by the backend, the aggregator and the dashboard state.
All models are frozen: a fetch produces new values, it never edits old ones.
"""
import datetime
from enum import Enum
from typing import Dict, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field


class UnitSystem(str, Enum):
    """Measurement convention requested from the upstream API."""
    METRIC = "metric"
    IMPERIAL = "imperial"

    @property
    def temperature_symbol(self) -> str:
        return "°C" if self is UnitSystem.METRIC else "°F"

    @property
    def wind_speed_unit(self) -> str:
        return "m/s" if self is UnitSystem.METRIC else "mph"

    def toggled(self) -> "UnitSystem":
        return UnitSystem.IMPERIAL if self is UnitSystem.METRIC else UnitSystem.METRIC


class Coordinates(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class CurrentConditions(BaseModel):
    """Current weather for one resolved place. Replaced wholesale on each fetch."""

    model_config = ConfigDict(frozen=True)

    place_name: str
    temperature: float
    condition_summary: str
    wind_speed: float
    humidity_pct: int
    pressure_hpa: int
    sunrise: datetime.datetime
    sunset: datetime.datetime
    coordinates: Coordinates
    icon_code: Optional[str] = None


class ForecastSample(BaseModel):
    """One 3-hourly forecast point."""

    model_config = ConfigDict(frozen=True)

    timestamp: datetime.datetime
    temperature: float
    condition_summary: str
    icon_code: Optional[str] = None


class ForecastSeries(BaseModel):
    """Forecast samples in the order the upstream delivered them (chronological)."""

    model_config = ConfigDict(frozen=True)

    samples: Tuple[ForecastSample, ...] = ()

    def __len__(self) -> int:
        return len(self.samples)


class AirQualitySample(BaseModel):
    model_config = ConfigDict(frozen=True)

    aqi_index: int
    timestamp: datetime.datetime
    components: Dict[str, float] = Field(default_factory=dict)


class HourlyEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    timestamp: datetime.datetime
    time_label: str
    temperature: float
    condition_summary: str


class DailyForecast(BaseModel):
    """One calendar day of the forecast: mean temperature, first sample's description."""

    model_config = ConfigDict(frozen=True)

    date: datetime.date
    temperature: float
    condition_summary: str
    icon_code: Optional[str] = None
    sample_count: int = 1


# A location is either free text typed by the user or a coordinate pair.
Location = Union[str, Coordinates]
