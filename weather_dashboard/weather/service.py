"""
Service layer: fetch weather entities and fold every failure into an outcome
value, so nothing raised by the network layer reaches the dashboard.
"""
import logging
from dataclasses import dataclass
from typing import Optional, Union

from .models import AirQualitySample, Coordinates, CurrentConditions, ForecastSeries, Location, UnitSystem
from .weather_backend import LocationNotFoundError, WeatherBackend, WeatherBackendError

NOT_FOUND_MESSAGE = "Location not found"
FETCH_FAILED_MESSAGE = "Failed to fetch weather data"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WeatherLoaded:
    conditions: CurrentConditions
    forecast: ForecastSeries


@dataclass(frozen=True)
class LocationNotFound:
    message: str = NOT_FOUND_MESSAGE


@dataclass(frozen=True)
class FetchFailed:
    message: str = FETCH_FAILED_MESSAGE


FetchOutcome = Union[WeatherLoaded, LocationNotFound, FetchFailed]


class WeatherService:
    def __init__(self, backend: WeatherBackend):
        self.backend = backend

    def fetch_weather(self, location: Location, units: UnitSystem) -> FetchOutcome:
        """Current conditions and forecast together; both must succeed."""
        if isinstance(location, str):
            location = location.strip()
            if not location:
                return LocationNotFound()

        try:
            conditions = self.backend.get_current_conditions(location, units)
            forecast = self.backend.get_forecast(location, units)
        except LocationNotFoundError as e:
            logger.info(f"Location {location!r} not found: {e}")
            return LocationNotFound(e.upstream_message or NOT_FOUND_MESSAGE)
        except WeatherBackendError as e:
            logger.error(f"Error fetching weather for {location!r}: {e}")
            return FetchFailed(e.upstream_message or FETCH_FAILED_MESSAGE)

        logger.info(
            f"Fetched weather for {conditions.place_name}: "
            f"{len(forecast)} forecast samples ({UnitSystem(units).value})"
        )
        return WeatherLoaded(conditions=conditions, forecast=forecast)

    def fetch_air_quality(self, coordinates: Coordinates) -> Optional[AirQualitySample]:
        """Best effort: any failure degrades to no data."""
        try:
            return self.backend.get_air_quality(coordinates)
        except WeatherBackendError as e:
            logger.warning(f"Air quality unavailable for {coordinates.latitude}, {coordinates.longitude}: {e}")
            return None
