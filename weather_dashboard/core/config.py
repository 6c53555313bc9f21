import yaml
from pathlib import Path
import os
from typing import Any, Dict, Optional, List, Callable
import logging
import time
import re
from watchdog.observers import Observer
from watchdog.events import FileSystemEventHandler
from pydantic import BaseModel, Field

from weather_dashboard.weather.models import UnitSystem


class WeatherSettings(BaseModel):
    """The `weather` section of config.yaml"""

    api_key: str = ""
    base_url: str = "https://api.openweathermap.org/data/2.5"
    units: UnitSystem = UnitSystem.METRIC
    location: str = ""
    use_geolocation: bool = True
    geolocation_url: str = "http://ip-api.com/json/"
    timeout: float = Field(default=15.0, gt=0)


def default_config(config_dir: Path) -> Dict[str, Any]:
    return {
        "window": {
            "title": "Weather Dashboard",
            "fullscreen": False,
            "borderless": False,
            "width": 1100,
            "height": 760,
            "auto_size": False,
            "margin_percent": 5,
            "background_color": "#1e202c",
            "card_color": "#23243a",
        },
        "layout": {
            "columns": 3,
            "padding": 10,
        },
        "colors": {
            "text": "#bfc0d1",
            "heading": "#60519b",
            "title": "#60519b",
            "accent": "#F3BD68",
            "error": "#f87171",
        },
        "weather": WeatherSettings(api_key="${OPENWEATHER_API_KEY}").model_dump(mode="json"),
        "components": {
            "Header": {"enable": True, "column": 0},
            "Current Weather": {"enable": True, "column": 0},
            "Air Quality": {"enable": True, "column": 0},
            "Hourly Weather": {"enable": True, "column": 1},
            "Daily Forecast": {"enable": True, "column": 2},
        },
        "clock_format": "%a, %b %d %Y | %H:%M:%S",
        "logging": {
            "level": "INFO",
            "file": str(config_dir / "dashboard.log"),
        },
    }


class ConfigFileWatcher(FileSystemEventHandler):
    """Reloads the config when config.yaml is saved, including editors that save by rename."""

    def __init__(self, config, debounce: float = 1.0):
        self.config = config
        self.debounce = debounce
        self._last_reload: Optional[float] = None

    def _is_config_file(self, path) -> bool:
        return bool(path) and Path(path).resolve() == self.config.config_file

    def on_modified(self, event):
        if not event.is_directory and self._is_config_file(event.src_path):
            self._reload()

    def on_moved(self, event):
        if self._is_config_file(getattr(event, "dest_path", None)):
            self._reload()

    def _reload(self) -> None:
        now = time.monotonic()
        if self._last_reload is not None and now - self._last_reload < self.debounce:
            return
        self._last_reload = now
        try:
            self.config.reload()
        except Exception as e:
            logging.error(f"Config reload failed: {e}")


class Config:
    def __init__(self, root=None, config_path: Optional[str] = None, watch: bool = True):
        logging.debug("Initializing Config class")

        self.root = root
        self.change_callbacks: List[Callable] = []
        self._loading = False
        self.observer = None

        if config_path:
            self.config_file = Path(config_path).resolve()
            self.config_dir = self.config_file.parent
        else:
            self.config_dir = Path.cwd()
            self.config_file = self.config_dir / "config.yaml"

        logging.debug(f"Using config file: {self.config_file}")

        self._load_env_file()
        self._ensure_config_exists()
        self._load_config()

        if watch:
            self.observer = Observer()
            self.observer.schedule(ConfigFileWatcher(self), str(self.config_dir), recursive=False)
            self.observer.start()
            logging.info(f"Path monitored for reloading: {self.config_dir}")

    def register_change_callback(self, callback: Callable) -> None:
        """Register a callback to be called with the new data when config changes"""
        self.change_callbacks.append(callback)

    def reload(self) -> None:
        """Reload config and notify listeners"""
        if self._loading:
            return

        self._loading = True
        try:
            logging.info("Config file change detected - reloading configuration")
            old_config = dict(self.data)
            self._load_config()
            self._log_config_changes(old_config, self.data)

            for callback in self.change_callbacks:
                try:
                    if self.root:
                        self.root.after_idle(lambda cb=callback: cb(self.data))
                    else:
                        callback(self.data)
                except Exception as e:
                    logging.error(f"Error in config change callback: {e}")
        finally:
            self._loading = False

    def _log_config_changes(self, old_config: Dict, new_config: Dict, path: str = "") -> None:
        for key in set(old_config) | set(new_config):
            current_path = f"{path}.{key}" if path else key
            old, new = old_config.get(key), new_config.get(key)
            if isinstance(old, dict) and isinstance(new, dict):
                self._log_config_changes(old, new, current_path)
            elif key not in new_config:
                logging.info(f"Config removed: {current_path}")
            elif key not in old_config:
                logging.info(f"Config added: {current_path}")
            elif old != new:
                # values may hold secrets (api_key), log the key only
                logging.info(f"Config changed: {current_path}")

    def cleanup(self) -> None:
        """Stop the file observer"""
        if self.observer:
            self.observer.stop()
            self.observer.join()

    def _ensure_config_exists(self) -> None:
        """Create default config if it doesn't exist"""
        if not self.config_dir.exists():
            logging.info(f"Creating config directory: {self.config_dir}")
            self.config_dir.mkdir(parents=True)

        if not self.config_file.exists():
            logging.info(f"Creating default config file: {self.config_file}")
            self.config_file.write_text(yaml.safe_dump(default_config(self.config_dir), sort_keys=False))

    def _load_env_file(self) -> None:
        """Load KEY=VALUE pairs from the first .env found; existing environment wins"""
        candidates = [
            self.config_dir / ".env",
            self.config_dir.parent / ".env",
            Path.cwd() / ".env",
        ]
        env_file = next((path for path in candidates if path.exists()), None)
        if not env_file:
            logging.debug("No .env file found, skipping environment variable loading")
            return

        logging.info(f"Loading environment variables from: {env_file}")
        try:
            with open(env_file, "r") as f:
                for line in f:
                    line = line.strip()
                    if not line or line.startswith("#"):
                        continue
                    match = re.match(r"^([A-Za-z_][A-Za-z0-9_]*)\s*=\s*(.*)$", line)
                    if match:
                        key, value = match.groups()
                        value = value.strip('"').strip("'")
                        if key not in os.environ:
                            os.environ[key] = value
                            logging.debug(f"Loaded env var: {key}")
        except OSError as e:
            logging.warning(f"Error loading .env file: {e}")

    def _substitute_env_vars(self, data: Any) -> Any:
        """Replace "${VAR}" / "$VAR" strings with the environment value, recursively"""
        if isinstance(data, dict):
            return {key: self._substitute_env_vars(value) for key, value in data.items()}
        if isinstance(data, list):
            return [self._substitute_env_vars(item) for item in data]
        if isinstance(data, str):
            if data.startswith("${") and data.endswith("}"):
                return os.environ.get(data[2:-1], data)
            if data.startswith("$") and len(data) > 1:
                return os.environ.get(data[1:], data)
        return data

    def _load_config(self) -> None:
        """Load configuration from file, keeping the previous data on errors"""
        try:
            logging.debug(f"Loading config from: {self.config_file}")
            with open(self.config_file) as f:
                new_data = yaml.safe_load(f)

            if not isinstance(new_data, dict):
                raise ValueError("Invalid config format: root must be a dictionary")

            new_data = self._substitute_env_vars(new_data)
            self.data = self._merge_defaults(new_data)

            log_file = self.data["logging"].get("file")
            if log_file:
                self.data["logging"]["file"] = os.path.expanduser(log_file)

        except (OSError, ValueError, yaml.YAMLError) as e:
            logging.error(f"Error loading config: {e}")
            if hasattr(self, "data"):
                logging.info("Keeping previous configuration")
            else:
                logging.info("Using default configuration")
                self.data = self._substitute_env_vars(default_config(self.config_dir))

    def _merge_defaults(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Top-level sections missing from the file fall back to the defaults"""
        merged = self._substitute_env_vars(default_config(self.config_dir))
        for key, value in data.items():
            if isinstance(value, dict) and isinstance(merged.get(key), dict) and key != "components":
                merged[key] = {**merged[key], **value}
            else:
                merged[key] = value
        return merged

    @property
    def weather(self) -> WeatherSettings:
        """Validated weather settings; raises pydantic.ValidationError on bad values"""
        section = dict(self.data.get("weather") or {})
        api_key = section.get("api_key")
        if isinstance(api_key, str) and api_key.startswith("$"):
            # unresolved ${OPENWEATHER_API_KEY}
            section["api_key"] = ""
        return WeatherSettings.model_validate(section)

    def get_component_config(self, component_name: str) -> Optional[Dict[str, Any]]:
        """Get config for a specific component"""
        return self.data.get("components", {}).get(component_name)
