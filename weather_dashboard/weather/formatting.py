"""Display labels shared by the view components."""
from datetime import date, datetime, tzinfo
from typing import Optional

from .models import UnitSystem

CLOCK_FORMAT = "%a, %b %d %Y | %H:%M:%S"
OWM_ICON_URL = "https://openweathermap.org/img/wn/{code}@2x.png"


def format_temperature(value: float, unit: UnitSystem) -> str:
    return f"{round(value)}{UnitSystem(unit).temperature_symbol}"


def format_wind(speed: float, unit: UnitSystem) -> str:
    return f"{speed} {UnitSystem(unit).wind_speed_unit}"


def format_clock(moment: datetime, fmt: str = CLOCK_FORMAT) -> str:
    return moment.strftime(fmt)


def format_time_of_day(moment: datetime, tz: Optional[tzinfo] = None) -> str:
    """HH:MM in the viewer's timezone"""
    return moment.astimezone(tz).strftime("%H:%M")


def format_day_name(day: date, today: date) -> str:
    if day == today:
        return "Today"
    return day.strftime("%a")


def format_short_date(day: date) -> str:
    # "Jan 1", no zero padding
    return f"{day.strftime('%b')} {day.day}"


def icon_url(code: Optional[str]) -> Optional[str]:
    if not code:
        return None
    return OWM_ICON_URL.format(code=code)
