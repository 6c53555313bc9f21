from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, Optional
import logging

import requests

from .models import (
    AirQualitySample,
    Coordinates,
    CurrentConditions,
    ForecastSample,
    ForecastSeries,
    Location,
    UnitSystem,
)

DEFAULT_BASE_URL = "https://api.openweathermap.org/data/2.5"


class WeatherBackendError(Exception):
    """Transport, HTTP or payload failure talking to the weather provider."""

    def __init__(self, message: str, upstream_message: Optional[str] = None):
        super().__init__(message)
        # Human readable reason from the provider body, e.g. "Invalid API key. ..."
        self.upstream_message = upstream_message


class LocationNotFoundError(WeatherBackendError):
    """The provider explicitly reported the location as unresolvable."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or "Location not found", upstream_message=message)


class WeatherBackend(ABC):
    """Base class for weather data providers"""

    def __init__(self, config: Dict[str, Any], session: Optional[requests.Session] = None):
        self.config = config
        self.session = session or requests.Session()
        self.timeout = float(config.get("timeout", 15))
        self.logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    def get_current_conditions(self, location: Location, units: UnitSystem) -> CurrentConditions:
        pass

    @abstractmethod
    def get_forecast(self, location: Location, units: UnitSystem) -> ForecastSeries:
        pass

    @abstractmethod
    def get_air_quality(self, coordinates: Coordinates) -> Optional[AirQualitySample]:
        """Latest air quality reading, or None when the provider has none for this place"""
        pass


class OpenWeatherMapBackend(WeatherBackend):
    """Current weather, 5 day / 3 hour forecast and air pollution from OpenWeatherMap 2.5"""

    def __init__(self, config: Dict[str, Any], session: Optional[requests.Session] = None):
        super().__init__(config, session)
        self.api_key = config.get("api_key", "")
        self.base_url = (config.get("base_url") or DEFAULT_BASE_URL).rstrip("/")

    def get_current_conditions(self, location: Location, units: UnitSystem) -> CurrentConditions:
        data = self._get("weather", self._location_params(location, units))
        try:
            weather = (data.get("weather") or [{}])[0]
            return CurrentConditions(
                place_name=data.get("name", ""),
                temperature=data["main"]["temp"],
                condition_summary=weather.get("description", ""),
                wind_speed=data["wind"]["speed"],
                humidity_pct=data["main"]["humidity"],
                pressure_hpa=data["main"]["pressure"],
                sunrise=_from_unix(data["sys"]["sunrise"]),
                sunset=_from_unix(data["sys"]["sunset"]),
                coordinates=Coordinates(latitude=data["coord"]["lat"], longitude=data["coord"]["lon"]),
                icon_code=weather.get("icon"),
            )
        except (KeyError, TypeError, IndexError, ValueError) as e:
            self.logger.error(f"Invalid current weather payload: {e}")
            raise WeatherBackendError("invalid current weather payload") from e

    def get_forecast(self, location: Location, units: UnitSystem) -> ForecastSeries:
        data = self._get("forecast", self._location_params(location, units))
        try:
            samples = []
            for item in data.get("list") or []:
                weather = (item.get("weather") or [{}])[0]
                samples.append(
                    ForecastSample(
                        timestamp=_from_unix(item["dt"]),
                        temperature=item["main"]["temp"],
                        condition_summary=weather.get("description", ""),
                        icon_code=weather.get("icon"),
                    )
                )
            return ForecastSeries(samples=tuple(samples))
        except (KeyError, TypeError, IndexError, ValueError) as e:
            self.logger.error(f"Invalid forecast payload: {e}")
            raise WeatherBackendError("invalid forecast payload") from e

    def get_air_quality(self, coordinates: Coordinates) -> Optional[AirQualitySample]:
        params = {"lat": coordinates.latitude, "lon": coordinates.longitude}
        data = self._get("air_pollution", params)
        readings = data.get("list") or []
        if not readings:
            self.logger.info(f"No air quality readings for {coordinates.latitude}, {coordinates.longitude}")
            return None
        try:
            reading = readings[0]
            return AirQualitySample(
                aqi_index=reading["main"]["aqi"],
                timestamp=_from_unix(reading["dt"]),
                components=reading.get("components") or {},
            )
        except (KeyError, TypeError, ValueError) as e:
            self.logger.error(f"Invalid air quality payload: {e}")
            raise WeatherBackendError("invalid air quality payload") from e

    def _location_params(self, location: Location, units: UnitSystem) -> Dict[str, Any]:
        if isinstance(location, Coordinates):
            params: Dict[str, Any] = {"lat": location.latitude, "lon": location.longitude}
        else:
            params = {"q": location}
        params["units"] = UnitSystem(units).value
        return params

    def _get(self, endpoint: str, params: Dict[str, Any]) -> Dict[str, Any]:
        """GET an endpoint and return the decoded JSON body"""
        url = f"{self.base_url}/{endpoint}"
        params = dict(params, appid=self.api_key)
        self.logger.debug(f"Making API request to {url}")
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            self.logger.error(f"Network error fetching {endpoint}: {e}")
            raise WeatherBackendError(f"request to {endpoint} failed") from e

        try:
            data = response.json()
        except ValueError:
            data = None

        status = response.status_code
        message = None
        if isinstance(data, dict):
            if isinstance(data.get("message"), str):
                message = data["message"]
            # "cod" is an int on /weather and a string on /forecast
            if str(data.get("cod", "")).isdigit():
                status = max(status, int(data["cod"]))

        if status == 404:
            self.logger.info(f"Location rejected by {endpoint}: {message}")
            raise LocationNotFoundError(message)

        if status == 401:
            self.logger.error("Invalid API key or unauthorized access")
            raise WeatherBackendError("unauthorized", upstream_message=message)

        if status >= 400:
            self.logger.error(f"Provider returned {status}: {response.text}")
            raise WeatherBackendError(f"HTTP {status}", upstream_message=message)

        if not isinstance(data, dict):
            self.logger.error(f"Invalid response format from {endpoint}")
            raise WeatherBackendError(f"invalid response from {endpoint}")

        return data


def _from_unix(value: Any) -> datetime:
    return datetime.fromtimestamp(int(value), tz=timezone.utc)
