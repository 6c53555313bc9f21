import tkinter as tk
from typing import Any, Dict

from weather_dashboard.core.component_base import DashboardComponent
from weather_dashboard.weather.aggregator import DAILY_DAYS
from weather_dashboard.weather.formatting import (
    format_day_name,
    format_short_date,
    format_temperature,
    icon_url,
)
from weather_dashboard.weather.state import DashboardState
from .icon_manager import IconManager


class DailyForecastComponent(DashboardComponent):
    """Five rows, one per calendar day: mean temperature and the day's first description."""

    name = "Daily Forecast"

    def __init__(self, app, config: Dict[str, Any]):
        super().__init__(app, config)
        self.icon_manager = IconManager(app.task_manager)

    @property
    def headline(self) -> str:
        return self.config.get("headline", f"{DAILY_DAYS}-Day Forecast")

    def initialize(self, parent: tk.Frame) -> None:
        super().initialize(parent)
        body = self.create_body(self.create_card(self.frame), "No forecast yet.")
        padding = self.get_padding('medium')

        self.day_rows = []
        for _ in range(DAILY_DAYS):
            row = tk.Frame(body, bg=self.background)
            row.pack(fill=tk.X, padx=padding, pady=2)

            names = tk.Frame(row, bg=self.background)
            names.pack(side=tk.LEFT)
            day_label = self.create_label(names, text="--", font_size='body', bold=True, width=8, anchor="w")
            day_label.pack(anchor="w")
            date_label = self.create_label(names, text="", font_size='tiny', anchor="w")
            date_label.pack(anchor="w")

            icon_label = tk.Label(row, bg=self.background)
            icon_label.pack(side=tk.LEFT, padx=padding)

            desc_label = self.create_label(row, text="--", font_size='small', wraplength=160, justify=tk.LEFT)
            desc_label.pack(side=tk.LEFT, fill=tk.X, expand=True)

            temp_label = self.create_label(row, text="--", font_size='heading', bold=True, width=6)
            temp_label.pack(side=tk.RIGHT)

            self.day_rows.append({
                'day': day_label,
                'date': date_label,
                'icon': icon_label,
                'desc': desc_label,
                'temp': temp_label,
            })

    def render(self, state: DashboardState) -> None:
        days = self.controller.daily()
        self.show_body(bool(days))
        if not days:
            return

        today = state.clock_time.date()
        for i, row in enumerate(self.day_rows):
            if i >= len(days):
                for key in ('day', 'date', 'desc', 'temp'):
                    row[key].config(text="--" if key != 'date' else "")
                row['icon'].config(image="")
                continue
            day = days[i]
            row['day'].config(text=format_day_name(day.date, today))
            row['date'].config(text=format_short_date(day.date))
            row['desc'].config(text=day.condition_summary.capitalize())
            row['temp'].config(text=format_temperature(day.temperature, state.display_unit))
            self.icon_manager.set_icon(row['icon'], icon_url(day.icon_code), size=(36, 36))

    def destroy(self) -> None:
        self.icon_manager.clear_cache()
        super().destroy()
