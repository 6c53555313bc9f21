import tkinter as tk
from typing import Any, Dict

from weather_dashboard.core.component_base import DashboardComponent
from weather_dashboard.weather.formatting import (
    format_temperature,
    format_time_of_day,
    format_wind,
    icon_url,
)
from weather_dashboard.weather.state import DashboardState
from .icon_manager import STAT_ICONS, IconManager

STATS = (("wind", "Wind"), ("humidity", "Humidity"), ("pressure", "Pressure"))


class WeatherComponent(DashboardComponent):
    """Current conditions: place, temperature, description, sun times and stat boxes."""

    name = "Current Weather"

    def __init__(self, app, config: Dict[str, Any]):
        super().__init__(app, config)
        self.icon_manager = IconManager(app.task_manager)

    def initialize(self, parent: tk.Frame) -> None:
        super().initialize(parent)
        body = self.create_body(self.create_card(self.frame), "No weather data yet.")
        padding = self.get_padding('medium')

        self.place_label = self.create_label(body, text="--", font_size='heading', bold=True)
        self.place_label.pack(anchor="w", padx=padding)

        top = tk.Frame(body, bg=self.background)
        top.pack(fill=tk.X, padx=padding)
        self.icon_label = tk.Label(top, bg=self.background)
        self.icon_label.pack(side=tk.LEFT)
        self.temp_label = self.create_label(top, text="--", font_size='display', bold=True)
        self.temp_label.pack(side=tk.LEFT, padx=padding)

        self.desc_label = self.create_label(body, text="--", font_size='body')
        self.desc_label.pack(anchor="w", padx=padding)
        self.sun_label = self.create_label(body, text="", font_size='small')
        self.sun_label.pack(anchor="w", padx=padding, pady=(0, padding))

        stats = tk.Frame(body, bg=self.background)
        stats.pack(fill=tk.X, padx=padding, pady=(0, padding))
        self.stat_values = {}
        for column, (key, title) in enumerate(STATS):
            box = tk.Frame(stats, bg=self.background)
            box.grid(row=0, column=column, sticky="nsew", padx=2)
            stats.columnconfigure(column, weight=1)
            icon = tk.Label(box, bg=self.background)
            icon.pack()
            self.icon_manager.set_icon(icon, STAT_ICONS[key], size=(32, 32))
            self.create_label(box, text=title, font_size='tiny').pack()
            value = self.create_label(box, text="--", font_size='body', bold=True)
            value.pack()
            self.stat_values[key] = value

    def render(self, state: DashboardState) -> None:
        conditions = state.conditions
        self.show_body(state.has_weather)
        if not state.has_weather:
            return

        unit = state.display_unit
        self.place_label.config(text=conditions.place_name)
        self.temp_label.config(text=format_temperature(conditions.temperature, unit))
        self.desc_label.config(text=conditions.condition_summary.capitalize())
        self.sun_label.config(
            text=f"Sunrise {format_time_of_day(conditions.sunrise)} | Sunset {format_time_of_day(conditions.sunset)}"
        )
        self.stat_values["wind"].config(text=format_wind(conditions.wind_speed, unit))
        self.stat_values["humidity"].config(text=f"{conditions.humidity_pct}%")
        self.stat_values["pressure"].config(text=f"{conditions.pressure_hpa} hPa")
        self.icon_manager.set_icon(self.icon_label, icon_url(conditions.icon_code), size=(64, 64))

    def destroy(self) -> None:
        self.icon_manager.clear_cache()
        super().destroy()
