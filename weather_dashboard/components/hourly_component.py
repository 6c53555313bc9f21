import tkinter as tk
from typing import Any, Dict, List

from weather_dashboard.core.component_base import DashboardComponent
from weather_dashboard.weather.aggregator import HOURLY_SAMPLES
from weather_dashboard.weather.formatting import format_temperature
from weather_dashboard.weather.models import HourlyEntry
from weather_dashboard.weather.state import DashboardState

CHART_HEIGHT = 140


def chart_points(entries: List[HourlyEntry], width: int, height: int, margin: int = 20) -> List[tuple]:
    """Canvas (x, y) for each entry; warmest at the top, coldest at the bottom."""
    if not entries:
        return []
    temps = [entry.temperature for entry in entries]
    low, high = min(temps), max(temps)
    span = (high - low) or 1.0
    step = (width - 2 * margin) / max(1, len(entries) - 1)
    points = []
    for i, temp in enumerate(temps):
        x = margin + i * step
        y = margin + (high - temp) / span * (height - 2 * margin)
        points.append((x, y))
    return points


class HourlyWeatherComponent(DashboardComponent):
    name = "Hourly Weather"

    def __init__(self, app, config: Dict[str, Any]):
        super().__init__(app, config)
        self.hours_to_show = int(self.config.get("hours_to_show", HOURLY_SAMPLES))

    def initialize(self, parent: tk.Frame) -> None:
        super().initialize(parent)
        body = self.create_body(self.create_card(self.frame), "No forecast yet.")
        padding = self.get_padding('small')

        self.canvas = tk.Canvas(body, height=CHART_HEIGHT, bg=self.background, highlightthickness=0)
        self.canvas.pack(fill=tk.X, padx=padding, pady=padding)
        self.canvas.bind('<Configure>', lambda e: self.update(self.controller.state))

        self.hours_container = tk.Frame(body, bg=self.background)
        self.hours_container.pack(fill=tk.X, padx=padding, pady=(0, padding))
        self.hour_frames = []
        for col in range(self.hours_to_show):
            hour_frame = tk.Frame(self.hours_container, bg=self.background)
            hour_frame.grid(row=0, column=col, padx=padding, sticky="nsew")
            self.hours_container.columnconfigure(col, weight=1, minsize=40)
            time_label = self.create_label(hour_frame, text="--", font_size='small', bold=True)
            time_label.pack()
            temp_label = self.create_label(hour_frame, text="--", font_size='body')
            temp_label.pack()
            self.hour_frames.append({'time': time_label, 'temp': temp_label})

    def render(self, state: DashboardState) -> None:
        entries = self.controller.hourly()[:self.hours_to_show]
        self.show_body(bool(entries))
        if not entries:
            return

        for i, frame in enumerate(self.hour_frames):
            if i < len(entries):
                frame['time'].config(text=entries[i].time_label)
                frame['temp'].config(text=format_temperature(entries[i].temperature, state.display_unit))
            else:
                frame['time'].config(text="--")
                frame['temp'].config(text="--")
        self._draw_chart(entries)

    def _draw_chart(self, entries: List[HourlyEntry]) -> None:
        self.canvas.delete("all")
        width = max(self.canvas.winfo_width(), 200)
        points = chart_points(entries, width, CHART_HEIGHT)
        if len(points) > 1:
            self.canvas.create_line(*[c for point in points for c in point],
                                    fill=self.color('heading'), width=2, smooth=True)
        for x, y in points:
            self.canvas.create_oval(x - 4, y - 4, x + 4, y + 4, fill=self.color('accent'), outline="")
