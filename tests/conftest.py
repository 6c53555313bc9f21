from __future__ import annotations

from datetime import datetime, timezone

import pytest

from requests_mock import Mocker

from weather_dashboard.weather.models import (
    Coordinates,
    CurrentConditions,
    ForecastSample,
    ForecastSeries,
)

BASE_URL = "https://owm.test/data/2.5"


@pytest.fixture
def requests_mock():
    with Mocker() as mock:
        yield mock


@pytest.fixture
def backend_config():
    return {"api_key": "test-key", "base_url": BASE_URL, "timeout": 5}


def make_sample(timestamp: datetime, temp: float, summary: str = "clear sky", icon: str = "01d") -> ForecastSample:
    return ForecastSample(timestamp=timestamp, temperature=temp, condition_summary=summary, icon_code=icon)


def make_series(*samples: ForecastSample) -> ForecastSeries:
    return ForecastSeries(samples=tuple(samples))


def make_conditions(place: str = "London", temp: float = 12.5, lat: float = 51.51, lon: float = -0.13) -> CurrentConditions:
    return CurrentConditions(
        place_name=place,
        temperature=temp,
        condition_summary="light rain",
        wind_speed=4.1,
        humidity_pct=81,
        pressure_hpa=1012,
        sunrise=datetime(2024, 1, 1, 8, 6, tzinfo=timezone.utc),
        sunset=datetime(2024, 1, 1, 16, 2, tzinfo=timezone.utc),
        coordinates=Coordinates(latitude=lat, longitude=lon),
        icon_code="10d",
    )


@pytest.fixture
def current_payload():
    return {
        "coord": {"lon": -0.1257, "lat": 51.5085},
        "weather": [{"id": 500, "main": "Rain", "description": "light rain", "icon": "10d"}],
        "main": {"temp": 12.5, "feels_like": 11.9, "pressure": 1012, "humidity": 81},
        "wind": {"speed": 4.1, "deg": 240},
        "dt": 1704096000,
        "sys": {"country": "GB", "sunrise": 1704096360, "sunset": 1704124920},
        "name": "London",
        "cod": 200,
    }


@pytest.fixture
def forecast_payload():
    return {
        "cod": "200",
        "cnt": 3,
        "list": [
            {"dt": 1704067200, "main": {"temp": 10.0}, "weather": [{"description": "overcast clouds", "icon": "04n"}]},
            {"dt": 1704078000, "main": {"temp": 14.0}, "weather": [{"description": "light rain", "icon": "10n"}]},
            {"dt": 1704153600, "main": {"temp": 8.0}, "weather": [{"description": "clear sky", "icon": "01n"}]},
        ],
        "city": {"name": "London"},
    }


@pytest.fixture
def air_payload():
    return {
        "coord": {"lon": -0.1257, "lat": 51.5085},
        "list": [
            {
                "main": {"aqi": 2},
                "components": {"co": 201.94, "no2": 0.77, "pm2_5": 3.2, "pm10": 6.1},
                "dt": 1704096000,
            }
        ],
    }


class BackendStub:
    """Canned backend answers; an Exception value is raised instead of returned."""

    def __init__(self, current=None, forecast=None, air=None, places=None) -> None:
        self.current = current if current is not None else make_conditions()
        self.forecast = forecast if forecast is not None else make_series(
            make_sample(datetime(2024, 1, 1, tzinfo=timezone.utc), 10)
        )
        self.air = air
        self.places = places or {}
        self.calls = []

    def _answer(self, value):
        if isinstance(value, Exception):
            raise value
        return value

    def get_current_conditions(self, location, units):
        self.calls.append(("current", location, units))
        return self._answer(self.places.get(location, self.current))

    def get_forecast(self, location, units):
        self.calls.append(("forecast", location, units))
        return self._answer(self.forecast)

    def get_air_quality(self, coordinates):
        self.calls.append(("air", coordinates))
        return self._answer(self.air)


class DeferredTasks:
    """Task manager stand-in: work runs only when the test says so, on the test thread."""

    def __init__(self) -> None:
        self.pending = []

    def submit(self, name, work, on_result, on_error=None) -> bool:
        self.pending.append((name, work, on_result, on_error))
        return True

    def names(self):
        return [name for name, _, _, _ in self.pending]

    def run(self, index: int = 0) -> None:
        name, work, on_result, on_error = self.pending.pop(index)
        try:
            result = work()
        except Exception as e:
            if on_error is not None:
                on_error(e)
            return
        on_result(result)

    def run_all(self) -> None:
        while self.pending:
            self.run()
