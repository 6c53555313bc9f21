from __future__ import annotations

from datetime import datetime, timezone

import pytest
import requests

from conftest import BASE_URL
from weather_dashboard.weather.models import Coordinates, UnitSystem
from weather_dashboard.weather.weather_backend import (
    LocationNotFoundError,
    OpenWeatherMapBackend,
    WeatherBackendError,
)


@pytest.fixture
def backend(backend_config):
    return OpenWeatherMapBackend(backend_config)


def test_current_conditions_normalization(requests_mock, backend, current_payload):
    requests_mock.get(f"{BASE_URL}/weather", json=current_payload)

    conditions = backend.get_current_conditions("London", UnitSystem.METRIC)

    assert conditions.place_name == "London"
    assert conditions.temperature == 12.5
    assert conditions.condition_summary == "light rain"
    assert conditions.wind_speed == 4.1
    assert conditions.humidity_pct == 81
    assert conditions.pressure_hpa == 1012
    assert conditions.icon_code == "10d"
    assert conditions.coordinates == Coordinates(latitude=51.5085, longitude=-0.1257)
    assert conditions.sunrise == datetime(2024, 1, 1, 8, 6, tzinfo=timezone.utc)


def test_query_location_sends_q_units_and_key(requests_mock, backend, current_payload):
    requests_mock.get(f"{BASE_URL}/weather", json=current_payload)

    backend.get_current_conditions("Paris", UnitSystem.IMPERIAL)

    query = requests_mock.last_request.qs
    assert query["q"] == ["paris"]
    assert query["units"] == ["imperial"]
    assert query["appid"] == ["test-key"]
    assert "lat" not in query


def test_coordinate_location_sends_lat_lon(requests_mock, backend, forecast_payload):
    requests_mock.get(f"{BASE_URL}/forecast", json=forecast_payload)

    backend.get_forecast(Coordinates(latitude=48.85, longitude=2.35), UnitSystem.METRIC)

    query = requests_mock.last_request.qs
    assert query["lat"] == ["48.85"]
    assert query["lon"] == ["2.35"]
    assert query["units"] == ["metric"]
    assert "q" not in query


def test_forecast_keeps_upstream_order(requests_mock, backend, forecast_payload):
    requests_mock.get(f"{BASE_URL}/forecast", json=forecast_payload)

    series = backend.get_forecast("London", UnitSystem.METRIC)

    assert len(series) == 3
    assert [s.temperature for s in series.samples] == [10.0, 14.0, 8.0]
    assert series.samples[0].timestamp == datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert series.samples[1].condition_summary == "light rain"
    assert series.samples[2].icon_code == "01n"


def test_air_quality_reading(requests_mock, backend, air_payload):
    requests_mock.get(f"{BASE_URL}/air_pollution", json=air_payload)

    sample = backend.get_air_quality(Coordinates(latitude=51.5, longitude=-0.12))

    assert sample.aqi_index == 2
    assert sample.components["pm2_5"] == 3.2
    assert requests_mock.last_request.qs["lat"] == ["51.5"]
    assert "units" not in requests_mock.last_request.qs


def test_air_quality_without_readings_is_none(requests_mock, backend):
    requests_mock.get(f"{BASE_URL}/air_pollution", json={"coord": {}, "list": []})

    assert backend.get_air_quality(Coordinates(latitude=0, longitude=0)) is None


def test_404_maps_to_location_not_found(requests_mock, backend):
    requests_mock.get(
        f"{BASE_URL}/weather",
        status_code=404,
        json={"cod": "404", "message": "city not found"},
    )

    with pytest.raises(LocationNotFoundError) as excinfo:
        backend.get_current_conditions("Atlantis", UnitSystem.METRIC)

    assert excinfo.value.upstream_message == "city not found"
    assert str(excinfo.value) == "city not found"


def test_404_cod_in_body_maps_to_location_not_found(requests_mock, backend):
    requests_mock.get(f"{BASE_URL}/forecast", json={"cod": "404", "message": "city not found"})

    with pytest.raises(LocationNotFoundError):
        backend.get_forecast("Atlantis", UnitSystem.METRIC)


def test_404_without_body_uses_default_message(requests_mock, backend):
    requests_mock.get(f"{BASE_URL}/weather", status_code=404, text="not here")

    with pytest.raises(LocationNotFoundError) as excinfo:
        backend.get_current_conditions("Atlantis", UnitSystem.METRIC)

    assert excinfo.value.upstream_message is None
    assert str(excinfo.value) == "Location not found"


@pytest.mark.parametrize("status", [401, 429, 500, 503])
def test_other_http_errors_are_backend_errors(requests_mock, backend, status):
    requests_mock.get(f"{BASE_URL}/weather", status_code=status, json={"cod": status, "message": "nope"})

    with pytest.raises(WeatherBackendError) as excinfo:
        backend.get_current_conditions("London", UnitSystem.METRIC)

    assert not isinstance(excinfo.value, LocationNotFoundError)


def test_network_error_is_backend_error(requests_mock, backend):
    requests_mock.get(f"{BASE_URL}/weather", exc=requests.exceptions.ConnectTimeout)

    with pytest.raises(WeatherBackendError):
        backend.get_current_conditions("London", UnitSystem.METRIC)


def test_non_json_body_is_backend_error(requests_mock, backend):
    requests_mock.get(f"{BASE_URL}/weather", text="<html>gateway</html>")

    with pytest.raises(WeatherBackendError):
        backend.get_current_conditions("London", UnitSystem.METRIC)


def test_missing_fields_are_backend_error(requests_mock, backend):
    requests_mock.get(f"{BASE_URL}/weather", json={"name": "London", "main": {}})

    with pytest.raises(WeatherBackendError):
        backend.get_current_conditions("London", UnitSystem.METRIC)


def test_default_base_url(requests_mock, current_payload):
    requests_mock.get("https://api.openweathermap.org/data/2.5/weather", json=current_payload)

    backend = OpenWeatherMapBackend({"api_key": "k"})

    assert backend.get_current_conditions("London", UnitSystem.METRIC).place_name == "London"


def test_unauthorized_keeps_upstream_message(requests_mock, backend):
    requests_mock.get(
        f"{BASE_URL}/weather",
        status_code=401,
        json={"cod": 401, "message": "Invalid API key. Please see https://openweathermap.org/faq#error401 for more info."},
    )

    with pytest.raises(WeatherBackendError) as excinfo:
        backend.get_current_conditions("London", UnitSystem.METRIC)

    assert excinfo.value.upstream_message.startswith("Invalid API key")


def test_error_cod_in_body_is_backend_error(requests_mock, backend):
    requests_mock.get(f"{BASE_URL}/forecast", json={"cod": "400", "message": "wrong latitude"})

    with pytest.raises(WeatherBackendError) as excinfo:
        backend.get_forecast(Coordinates(latitude=1, longitude=2), UnitSystem.METRIC)

    assert excinfo.value.upstream_message == "wrong latitude"


def test_network_error_has_no_upstream_message(requests_mock, backend):
    requests_mock.get(f"{BASE_URL}/weather", exc=requests.exceptions.ConnectionError)

    with pytest.raises(WeatherBackendError) as excinfo:
        backend.get_current_conditions("London", UnitSystem.METRIC)

    assert excinfo.value.upstream_message is None
