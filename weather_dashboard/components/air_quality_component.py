import tkinter as tk
from typing import Any, Dict

from weather_dashboard.core.component_base import DashboardComponent
from weather_dashboard.weather.air_quality import classify_aqi
from weather_dashboard.weather.state import DashboardState
from .icon_manager import STAT_ICONS, IconManager

NO_DATA_TEXT = "No AQI data available."
BAR_WIDTH = 240
BAR_HEIGHT = 10
POLLUTANTS = (("pm2_5", "PM2.5"), ("pm10", "PM10"))


class AirQualityComponent(DashboardComponent):
    name = "Air Quality"

    def __init__(self, app, config: Dict[str, Any]):
        super().__init__(app, config)
        self.icon_manager = IconManager(app.task_manager)

    def initialize(self, parent: tk.Frame) -> None:
        super().initialize(parent)
        card = self.create_card(self.frame)
        padding = self.get_padding('medium')

        self.content = tk.Frame(card, bg=self.background)
        self.content.pack(fill=tk.X, padx=padding, pady=padding)

        self.icon_label = tk.Label(self.content, bg=self.background)
        self.icon_label.pack(side=tk.LEFT, padx=(0, padding))
        self.icon_manager.set_icon(self.icon_label, STAT_ICONS["aqi"], size=(56, 56))

        text = tk.Frame(self.content, bg=self.background)
        text.pack(side=tk.LEFT, fill=tk.X, expand=True)
        self.index_label = self.create_label(text, text="", font_size='title', bold=True, anchor="w")
        self.index_label.pack(anchor="w")
        self.summary_label = self.create_label(text, text=NO_DATA_TEXT, font_size='small',
                                               anchor="w", justify=tk.LEFT, wraplength=260)
        self.summary_label.pack(anchor="w")
        self.bar = tk.Canvas(text, width=BAR_WIDTH, height=BAR_HEIGHT, bg="#374151", highlightthickness=0)
        self.bar.pack(anchor="w", pady=(4, 0))
        self.pollutants_label = self.create_label(text, text="", font_size='tiny', anchor="w")
        self.pollutants_label.pack(anchor="w")

    def render(self, state: DashboardState) -> None:
        # The card is only meaningful next to loaded weather; mirror its visibility.
        if not state.has_weather:
            self.content.pack_forget()
            return
        if not self.content.winfo_ismapped():
            self.content.pack(fill=tk.X, padx=self.get_padding('medium'), pady=self.get_padding('medium'))

        sample = state.air_quality
        self.bar.delete("all")
        if sample is None:
            self.index_label.config(text="")
            self.summary_label.config(text=NO_DATA_TEXT)
            self.pollutants_label.config(text="")
            return

        band = classify_aqi(sample.aqi_index)
        self.index_label.config(text=f"AQI: {sample.aqi_index}")
        self.summary_label.config(text=band.summary)
        self.bar.create_rectangle(0, 0, BAR_WIDTH * band.intensity_pct / 100, BAR_HEIGHT,
                                  fill=band.color, outline="")
        parts = [
            f"{title} {sample.components[key]:.1f} µg/m³"
            for key, title in POLLUTANTS
            if key in sample.components
        ]
        self.pollutants_label.config(text="  ".join(parts))

    def destroy(self) -> None:
        self.icon_manager.clear_cache()
        super().destroy()
