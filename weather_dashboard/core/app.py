import tkinter as tk
from typing import Any, Dict, List, Optional
import logging
import sys

from .config import Config
from .layout_manager import LayoutManager
from .task_manager import TaskManager
from weather_dashboard.components import COMPONENT_CLASSES
from weather_dashboard.weather import create_controller
from weather_dashboard.weather.models import UnitSystem
from weather_dashboard.weather.state import DashboardState

CLOCK_INTERVAL_MS = 1000
RESULT_POLL_MS = 100
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'


class DashboardApp:
    def __init__(self, config_path: Optional[str] = None, location: Optional[str] = None,
                 units: Optional[str] = None):
        self.root = tk.Tk()
        self.logger = logging.getLogger(self.__class__.__name__)

        self.config = Config(root=self.root, config_path=config_path)
        self.config.register_change_callback(self.handle_config_change)
        self._setup_logging()

        self.settings = self.config.weather
        # Units as written in the file; a reload only applies them when this changes.
        self.config_units = self.settings.units
        if units:
            self.settings = self.settings.model_copy(update={"units": UnitSystem(units)})
        if location is not None:
            self.settings = self.settings.model_copy(update={"location": location})
        if not self.settings.api_key:
            self.logger.warning("No OpenWeatherMap API key configured (weather.api_key / OPENWEATHER_API_KEY)")

        self._configure_window()

        self.task_manager = TaskManager()
        self.controller = create_controller(self.settings, self.task_manager)
        self.controller.subscribe(self.render)

        self.main_container = tk.Frame(self.root, bg=self.bg_color)
        self.main_container.pack(fill=tk.BOTH, expand=True)
        self.layout_manager = LayoutManager(
            self.root,
            container=self.main_container,
            columns=self.config.data["layout"].get("columns", 3),
            padding=self.config.data["layout"].get("padding", 10),
            bg_color=self.bg_color,
        )
        self.components = self.create_components()
        self.layout_manager.add_components(self.components)

    @property
    def bg_color(self) -> str:
        return self.config.data["window"].get("background_color", "#1e202c")

    def _setup_logging(self) -> None:
        """Configure logging to write to both file and stdout"""
        logging_config = self.config.data["logging"]
        root_logger = logging.getLogger()
        for handler in list(root_logger.handlers):
            root_logger.removeHandler(handler)
        root_logger.setLevel(getattr(logging, str(logging_config.get("level", "INFO")).upper(), logging.INFO))

        formatter = logging.Formatter(LOG_FORMAT)
        if logging_config.get("file"):
            file_handler = logging.FileHandler(logging_config["file"])
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

        logging.info("Weather dashboard starting...")

    def _configure_window(self) -> None:
        """Configure window size and appearance"""
        window_config = self.config.data["window"]
        self.root.title(window_config.get("title", "Weather Dashboard"))
        self.root.configure(bg=self.bg_color)

        if window_config.get("borderless"):
            self.root.overrideredirect(True)
            self.root.attributes('-topmost', True)
            self.root.bind('<Escape>', lambda e: self.root.quit())

        if window_config.get("auto_size"):
            screen_width = self.root.winfo_screenwidth()
            screen_height = self.root.winfo_screenheight()
            margin = int(min(screen_width, screen_height) * window_config.get("margin_percent", 5) / 100)
            self.root.geometry(f"{screen_width - 2 * margin}x{screen_height - 2 * margin}+{margin}+{margin}")
        else:
            self.root.geometry(f"{window_config.get('width', 1100)}x{window_config.get('height', 760)}")

        if window_config.get("fullscreen"):
            self.root.attributes('-fullscreen', True)

    def create_components(self) -> List:
        components = []
        for component_class in COMPONENT_CLASSES:
            component_config = self.config.get_component_config(component_class.name)
            if not component_config or not component_config.get("enable", False):
                self.logger.info(f"Component '{component_class.name}' disabled")
                continue
            self.logger.debug(f"Creating component {component_class.name}")
            components.append(component_class(self, component_config))
        return components

    def render(self, state: DashboardState) -> None:
        for component in self.components:
            component.update(state)

    def _tick(self) -> None:
        self.controller.tick()
        self.root.after(CLOCK_INTERVAL_MS, self._tick)

    def _drain_result_queue(self) -> None:
        """Apply finished fetches on the Tk thread"""
        self.task_manager.drain()
        self.root.after(RESULT_POLL_MS, self._drain_result_queue)

    def handle_config_change(self, new_config: Dict[str, Any]) -> None:
        """Apply unit changes and per-component settings from a reloaded config"""
        self.logger.info("Handling config change")
        try:
            settings = self.config.weather
        except ValueError as e:
            self.logger.error(f"Ignoring invalid weather settings: {e}")
            return
        if settings.units != self.config_units:
            self.config_units = settings.units
            self.controller.set_units(settings.units)
        for component in self.components:
            component_config = new_config.get("components", {}).get(component.name)
            if component_config:
                component.update_config(component_config)

    def start(self) -> None:
        """Initial fetch: configured location first, otherwise this machine's position"""
        self.render(self.controller.state)
        if self.settings.location:
            self.controller.submit_query(self.settings.location)
        else:
            self.controller.locate()

    def run(self) -> None:
        try:
            self.start()
            self.root.after(CLOCK_INTERVAL_MS, self._tick)
            self.root.after(RESULT_POLL_MS, self._drain_result_queue)
            self.root.mainloop()
        finally:
            self.task_manager.stop()
            self.config.cleanup()
