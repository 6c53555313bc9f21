import tkinter as tk
from typing import Any, Dict, List, Optional, Sequence, Tuple
import logging

from .component_base import DashboardComponent


def plan_columns(configs: Sequence[Tuple[str, Dict[str, Any]]], columns: int) -> Dict[int, List[str]]:
    """Assign component names to columns.

    Components with a `column` are clamped into range and ordered by `row`
    (unset rows go last, keeping config order). The rest go to whichever
    column currently holds the fewest components.
    """
    columns = max(1, columns)
    placed: Dict[int, List[Tuple[int, int, str]]] = {i: [] for i in range(columns)}
    floating = []
    for order, (name, config) in enumerate(configs):
        column = config.get("column")
        if column is None:
            floating.append(name)
            continue
        index = max(0, min(int(column), columns - 1))
        row = config.get("row")
        placed[index].append((row if row is not None else 999, order, name))

    plan = {i: [name for _, _, name in sorted(entries)] for i, entries in placed.items()}
    for name in floating:
        target = min(plan, key=lambda i: len(plan[i]))
        plan[target].append(name)
    return plan


class LayoutManager:
    def __init__(self, root: tk.Tk, container: Optional[tk.Frame] = None, columns: int = 3,
                 padding: int = 10, bg_color: Optional[str] = None):
        self.root = root
        self.container = container if container else root
        self.columns = max(1, columns)
        self.padding = padding
        self.bg_color = bg_color
        self.frames: List[tk.Frame] = []
        self.components: Dict[str, DashboardComponent] = {}
        self.logger = logging.getLogger(self.__class__.__name__)
        self._setup_grid()

    def _setup_grid(self) -> None:
        """Create one frame per column"""
        for frame in self.frames:
            if frame.winfo_exists():
                frame.destroy()
        self.frames = []

        for _ in range(self.columns):
            frame = tk.Frame(self.container, bg=self.bg_color)
            frame.pack(side=tk.LEFT, expand=True, fill=tk.BOTH, padx=self.padding, pady=self.padding)
            self.frames.append(frame)

    def add_components(self, components: Sequence[DashboardComponent]) -> None:
        """Initialize components inside the column frames the plan assigns them to"""
        by_name = {component.name: component for component in components}
        plan = plan_columns([(c.name, c.config) for c in components], self.columns)
        for index, names in plan.items():
            for name in names:
                component = by_name[name]
                try:
                    component.initialize(self.frames[index])
                    component.frame.pack(fill=tk.BOTH, expand=True, pady=(0, self.padding))
                    self.components[name] = component
                except tk.TclError as e:
                    self.logger.error(f"Error adding component {name}: {e}", exc_info=True)
