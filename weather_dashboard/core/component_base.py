from abc import ABC, abstractmethod
import tkinter as tk
from typing import Optional, Dict, Any
import logging

from weather_dashboard.weather.state import DashboardState

# Base window dimensions for responsive scaling
BASE_WINDOW_WIDTH = 1100
BASE_WINDOW_HEIGHT = 760

BASE_FONT_SIZES = {
    'display': 36,
    'title': 20,
    'heading': 14,
    'body': 12,
    'small': 10,
    'tiny': 8,
}

BASE_PADDING = {
    'small': 5,
    'medium': 10,
    'large': 15,
}


class DashboardComponent(ABC):
    """A card on the dashboard. Built once in initialize(), redrawn from state in render()."""

    def __init__(self, app, config: Dict[str, Any]):
        self.frame: Optional[tk.Frame] = None
        self.config = config
        self.app = app
        self.logger = logging.getLogger(self.name)

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of the component, as used in the config file"""
        pass

    @property
    def headline(self) -> str:
        return self.config.get("headline", self.name)

    @property
    def controller(self):
        return self.app.controller

    @property
    def background(self) -> str:
        return self.config.get("background_color", self.app.config.data["window"].get("card_color", "#23243a"))

    def _scale(self) -> float:
        """Window size relative to the base size, clamped to 0.5x..2x"""
        width, height = BASE_WINDOW_WIDTH, BASE_WINDOW_HEIGHT
        root = getattr(self.app, 'root', None)
        if root is not None and root.winfo_exists():
            if root.winfo_width() > 1 and root.winfo_height() > 1:
                width, height = root.winfo_width(), root.winfo_height()
        scale = (width / BASE_WINDOW_WIDTH + height / BASE_WINDOW_HEIGHT) / 2
        return max(0.5, min(2.0, scale))

    def get_responsive_fonts(self) -> Dict[str, int]:
        scale = self._scale()
        fonts = {key: max(6, int(size * scale)) for key, size in BASE_FONT_SIZES.items()}
        for key, value in self.config.get('fonts', {}).items():
            if key in fonts and isinstance(value, (int, float)):
                fonts[key] = max(6, int(value * scale))
        return fonts

    def get_padding(self, size: str = 'medium') -> int:
        return max(3, int(BASE_PADDING.get(size, BASE_PADDING['medium']) * self._scale()))

    def color(self, key: str) -> str:
        """Theme color from the app-wide `colors` section, overridable per component"""
        colors = dict(self.app.config.data.get('colors', {}))
        colors.update(self.config.get('colors', {}))
        return colors.get(key, colors.get('text', '#ffffff'))

    def create_label(self, parent, text="", font_size='body', bold=False, color=None, **kwargs) -> tk.Label:
        """Label with responsive font size and theme colors"""
        fonts = self.get_responsive_fonts()
        size = fonts.get(font_size, fonts['body']) if isinstance(font_size, str) else font_size
        family = kwargs.pop('font_family', self.config.get('font_family', 'Helvetica'))
        font = (family, size, "bold") if bold else (family, size)
        if 'fg' not in kwargs:
            kwargs['fg'] = color or self.color('heading' if bold else 'text')
        kwargs.setdefault('bg', self.background)
        return tk.Label(parent, text=text, font=font, **kwargs)

    def create_card(self, parent) -> tk.Frame:
        """Bordered container with the component's headline"""
        card = tk.Frame(parent, bg=self.background, relief=tk.GROOVE, borderwidth=1)
        card.pack(fill=tk.BOTH, expand=True)
        self.create_label(card, text=self.headline, font_size='heading', bold=True).pack(
            anchor="w", padx=self.get_padding('medium'), pady=(self.get_padding('small'), 0)
        )
        return card

    def create_body(self, card: tk.Frame, placeholder: str) -> tk.Frame:
        """Content frame that is swapped for a placeholder line while there is nothing to show"""
        self.placeholder_label = self.create_label(card, text=placeholder, font_size='small')
        self.body = tk.Frame(card, bg=self.background)
        self.show_body(False)
        return self.body

    def show_body(self, visible: bool) -> None:
        if visible:
            self.placeholder_label.pack_forget()
            self.body.pack(fill=tk.BOTH, expand=True)
        else:
            self.body.pack_forget()
            self.placeholder_label.pack(anchor="w", padx=self.get_padding('medium'), pady=self.get_padding('small'))

    @abstractmethod
    def initialize(self, parent: tk.Frame) -> None:
        """Initialize the component with a parent frame"""
        self.frame = tk.Frame(parent, bg=parent.cget('bg'))
        padding = self.get_padding('medium')
        self.frame.pack(pady=padding, padx=padding, fill=tk.X)

    @abstractmethod
    def render(self, state: DashboardState) -> None:
        """Redraw widgets from the dashboard state"""
        pass

    def update(self, state: DashboardState) -> None:
        """Render, logging instead of raising so one card cannot stop the others"""
        if self.frame is None:
            return
        try:
            self.render(state)
        except Exception as e:
            self.logger.error(f"Error rendering {self.name}: {e}", exc_info=True)

    def destroy(self) -> None:
        """Clean up resources"""
        try:
            if self.frame is not None and self.frame.winfo_exists():
                self.frame.destroy()
            self.frame = None
            self.logger.debug(f"Component {self.name} destroyed")
        except tk.TclError as e:
            self.logger.error(f"Error destroying component {self.name}: {e}")

    def update_config(self, new_config: Dict[str, Any]) -> None:
        """Update component configuration and redraw"""
        self.config = new_config
        self.logger.info(f"Updated config for {self.name}")
        self.update(self.controller.state)
