from __future__ import annotations

import pytest
import requests

from weather_dashboard.weather.geolocation import DEFAULT_GEOLOCATION_URL, IpGeolocator
from weather_dashboard.weather.models import Coordinates

GEO_URL = "https://geo.test/json/"


@pytest.fixture
def geolocator():
    return IpGeolocator({"geolocation_url": GEO_URL, "timeout": 2})


def test_position_from_ip_lookup(requests_mock, geolocator):
    requests_mock.get(GEO_URL, json={"status": "success", "city": "Berlin", "lat": 52.52, "lon": 13.405})

    assert geolocator.get_current_position() == Coordinates(latitude=52.52, longitude=13.405)


def test_failed_status_gives_none(requests_mock, geolocator):
    requests_mock.get(GEO_URL, json={"status": "fail", "message": "reserved range"})

    assert geolocator.get_current_position() is None


@pytest.mark.parametrize(
    "kwargs",
    [
        {"exc": requests.exceptions.ConnectionError},
        {"status_code": 503, "text": "unavailable"},
        {"text": "not json"},
        {"json": {"status": "success"}},
        {"json": {"status": "success", "lat": 123.0, "lon": 0.0}},
    ],
)
def test_any_failure_gives_none(requests_mock, geolocator, kwargs):
    requests_mock.get(GEO_URL, **kwargs)

    assert geolocator.get_current_position() is None


def test_default_url():
    assert IpGeolocator({}).url == DEFAULT_GEOLOCATION_URL
