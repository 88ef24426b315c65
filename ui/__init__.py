"""
ui/
---
Presentation layer.

    from ui import render_lane
    from ui import command_bar, algorithm_card, …
"""

from ui.canvas import (
    CanvasConfig,
    render_lane,
    render_race_canvas,
    render_empty_canvas,
)

from ui.controls import (
    command_bar,
    algorithm_card,
    winner_banner,
    event_log_panel,
    notice_toast,
)

__all__ = [
    "CanvasConfig",
    "render_lane",
    "render_race_canvas",
    "render_empty_canvas",
    "command_bar",
    "algorithm_card",
    "winner_banner",
    "event_log_panel",
    "notice_toast",
]
