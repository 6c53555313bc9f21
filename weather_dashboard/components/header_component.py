import tkinter as tk
from typing import Any, Dict

from weather_dashboard.core.component_base import DashboardComponent
from weather_dashboard.weather.formatting import CLOCK_FORMAT, format_clock
from weather_dashboard.weather.state import DashboardState

LOADING_TEXT = "Loading weather data..."


class HeaderComponent(DashboardComponent):
    """Title, live clock, search box and the °C/°F toggle."""

    name = "Header"

    def __init__(self, app, config: Dict[str, Any]):
        super().__init__(app, config)
        self.clock_format = app.config.data.get("clock_format", CLOCK_FORMAT)
        self.query_var = None

    def initialize(self, parent: tk.Frame) -> None:
        super().initialize(parent)
        card = tk.Frame(self.frame, bg=self.background)
        card.pack(fill=tk.BOTH, expand=True)
        padding = self.get_padding('medium')

        self.create_label(card, text=self.config.get("headline", "Weather Dashboard"),
                          font_size='title', bold=True).pack(pady=(padding, 0))
        self.create_label(card, text="Real-time weather and air quality updates",
                          font_size='small').pack()
        self.clock_label = self.create_label(card, text="", font_size='tiny')
        self.clock_label.pack(pady=(0, padding))

        search_row = tk.Frame(card, bg=self.background)
        search_row.pack(fill=tk.X, padx=padding)

        self.query_var = tk.StringVar(value=self.controller.state.query)
        entry = tk.Entry(
            search_row,
            textvariable=self.query_var,
            font=(self.config.get('font_family', 'Helvetica'), self.get_responsive_fonts()['body']),
            bg="#31323e",
            fg=self.color('text'),
            insertbackground=self.color('text'),
            relief=tk.FLAT,
        )
        entry.pack(side=tk.LEFT, fill=tk.X, expand=True, ipady=4)
        entry.bind('<Return>', lambda e: self._submit())
        self.entry = entry

        tk.Button(search_row, text="Search", command=self._submit,
                  bg=self.color('heading'), fg=self.color('accent'), relief=tk.FLAT).pack(side=tk.LEFT, padx=(4, 0))
        self.unit_button = tk.Button(search_row, text="", command=self.controller.toggle_units,
                                     bg=self.color('heading'), fg=self.color('accent'), relief=tk.FLAT, width=4)
        self.unit_button.pack(side=tk.LEFT, padx=(4, 0))

        self.status_label = self.create_label(card, text="", font_size='small')
        self.status_label.pack(pady=padding)

    def _submit(self) -> None:
        self.controller.submit_query(self.query_var.get())

    def render(self, state: DashboardState) -> None:
        self.clock_label.config(text=format_clock(state.clock_time, self.clock_format))
        self.unit_button.config(text=state.unit.temperature_symbol)

        # Only overwrite the box when the query changed underneath it (geolocation),
        # never while the user is typing.
        if self.query_var.get() != state.query and self.app.root.focus_get() is not self.entry:
            self.query_var.set(state.query)

        if state.error_message:
            self.status_label.config(text=state.error_message, fg=self.color('error'))
        elif state.loading:
            self.status_label.config(text=LOADING_TEXT, fg=self.color('text'))
        else:
            self.status_label.config(text="")
