from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from weather_dashboard.weather.formatting import (
    format_clock,
    format_day_name,
    format_short_date,
    format_temperature,
    format_time_of_day,
    format_wind,
    icon_url,
)
from weather_dashboard.weather.models import UnitSystem


@pytest.mark.parametrize(
    "value,unit,expected",
    [
        (12.4, UnitSystem.METRIC, "12°C"),
        (12.6, UnitSystem.METRIC, "13°C"),
        (-3.2, UnitSystem.METRIC, "-3°C"),
        (71.0, UnitSystem.IMPERIAL, "71°F"),
    ],
)
def test_format_temperature(value, unit, expected):
    assert format_temperature(value, unit) == expected


def test_format_wind():
    assert format_wind(4.1, UnitSystem.METRIC) == "4.1 m/s"
    assert format_wind(9.2, UnitSystem.IMPERIAL) == "9.2 mph"


def test_format_clock():
    assert format_clock(datetime(2024, 1, 1, 9, 5, 7)) == "Mon, Jan 01 2024 | 09:05:07"


def test_format_time_of_day_converts_timezone():
    moment = datetime(2024, 1, 1, 8, 6, tzinfo=timezone.utc)

    assert format_time_of_day(moment, timezone.utc) == "08:06"
    assert format_time_of_day(moment, timezone(timedelta(hours=-5))) == "03:06"


def test_format_day_name():
    today = date(2024, 1, 1)

    assert format_day_name(today, today) == "Today"
    assert format_day_name(date(2024, 1, 2), today) == "Tue"


def test_format_short_date():
    assert format_short_date(date(2024, 1, 1)) == "Jan 1"
    assert format_short_date(date(2024, 12, 25)) == "Dec 25"


def test_icon_url():
    assert icon_url("10d") == "https://openweathermap.org/img/wn/10d@2x.png"
    assert icon_url(None) is None
    assert icon_url("") is None
