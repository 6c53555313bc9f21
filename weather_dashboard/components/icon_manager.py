import logging
import tkinter as tk
from io import BytesIO
from typing import Dict, Optional, Set, Tuple

import requests
from PIL import Image, ImageTk

logger = logging.getLogger(__name__)

# Stat icons shown next to wind, humidity, pressure and air quality
STAT_ICONS = {
    "wind": "https://img.icons8.com/fluency/96/windsock.png",
    "humidity": "https://img.icons8.com/fluency/96/hygrometer.png",
    "pressure": "https://img.icons8.com/fluency/96/air-element.png",
    "thermometer": "https://img.icons8.com/fluency/96/thermometer.png",
    "aqi": "https://img.icons8.com/fluency/96/factory.png",
}

IconKey = Tuple[str, Tuple[int, int]]


class IconManager:
    """Downloads icons through the app's TaskManager and sets them on labels.

    Downloads run on worker threads; results come back through the task
    manager queue, so every Tk call here happens on the Tk thread.
    """

    def __init__(self, task_manager, timeout: float = 10.0):
        self.task_manager = task_manager
        self.timeout = timeout
        self._photos: Dict[IconKey, ImageTk.PhotoImage] = {}
        self._in_flight: Set[IconKey] = set()
        # label -> icon it should show; a late download never overrides a newer request
        self._wanted: Dict[tk.Label, IconKey] = {}

    def set_icon(self, label: tk.Label, url: Optional[str], size: Tuple[int, int] = (48, 48)) -> None:
        if not url:
            self._wanted.pop(label, None)
            label.config(image="")
            return
        key = (url, size)
        self._wanted[label] = key
        if key in self._photos:
            self._attach(label, key)
            return
        if key in self._in_flight:
            return
        self._in_flight.add(key)
        self.task_manager.submit(
            "icon",
            lambda: self._download(url, size),
            lambda image: self._loaded(key, image),
            lambda error: self._in_flight.discard(key),
        )

    def _download(self, url: str, size: Tuple[int, int]) -> Image.Image:
        response = requests.get(url, timeout=self.timeout)
        response.raise_for_status()
        image = Image.open(BytesIO(response.content))
        return image.resize(size, Image.Resampling.LANCZOS)

    def _loaded(self, key: IconKey, image: Image.Image) -> None:
        self._in_flight.discard(key)
        self._photos[key] = ImageTk.PhotoImage(image)
        for label, wanted in list(self._wanted.items()):
            if wanted == key:
                self._attach(label, key)

    def _attach(self, label: tk.Label, key: IconKey) -> None:
        if not label.winfo_exists():
            self._wanted.pop(label, None)
            return
        photo = self._photos[key]
        label.config(image=photo)
        label.image = photo  # keep a reference

    def clear_cache(self) -> None:
        self._photos.clear()
        self._wanted.clear()
