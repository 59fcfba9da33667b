"""
ui/
---
Presentation layer.

    from ui import render_grid
    from ui import algorithm_selector, grid_size_selector, …
"""

from ui.canvas import render_grid, cell_color, CanvasConfig

from ui.controls import (
    algorithm_selector,
    grid_size_selector,
    playback_controls,
    legend,
    analytics_panel,
    comparison_controls,
    comparison_panel,
)

__all__ = [
    "render_grid",
    "cell_color",
    "CanvasConfig",
    "algorithm_selector",
    "grid_size_selector",
    "playback_controls",
    "legend",
    "analytics_panel",
    "comparison_controls",
    "comparison_panel",
]
