from __future__ import annotations

import logging
from types import SimpleNamespace

import pytest

pytest.importorskip("tkinter")

from weather_dashboard.core.app import DashboardApp  # noqa: E402
from weather_dashboard.core.config import WeatherSettings  # noqa: E402
from weather_dashboard.weather.models import UnitSystem  # noqa: E402


class ControllerStub:
    def __init__(self) -> None:
        self.units = []

    def set_units(self, unit) -> None:
        self.units.append(unit)


def make_app(file_units: UnitSystem) -> DashboardApp:
    """DashboardApp without a Tk window, enough to exercise config reloads"""
    app = DashboardApp.__new__(DashboardApp)
    app.logger = logging.getLogger("DashboardApp")
    app.config = SimpleNamespace(weather=WeatherSettings(units=file_units))
    app.config_units = file_units
    app.controller = ControllerStub()
    app.components = []
    return app


def test_reload_without_unit_change_keeps_command_line_units():
    app = make_app(UnitSystem.METRIC)

    app.handle_config_change({"components": {}})

    assert app.controller.units == []


def test_reload_applies_changed_units():
    app = make_app(UnitSystem.METRIC)
    app.config.weather = WeatherSettings(units=UnitSystem.IMPERIAL)

    app.handle_config_change({"components": {}})
    app.handle_config_change({"components": {}})

    assert app.controller.units == [UnitSystem.IMPERIAL]
