"""
canvas.py — SVG Race Renderer
===============================
Pure rendering function: GridModel + TracerState + ResultSummary → SVG.

The renderer consumes:
  • grid        – the maze (walls, start, goal)
  • state       – the lane's TracerState (phase / index / active)
  • summary     – visited order and path of the lane's last run
  • path_order  – cell → rank along the path
  • now_ms      – wall-clock sample for the pulse effects
  • config      – visual config (canvas size, colors, …)

Layers, bottom to top:
  1. base       – open / wall cells, start (green), goal (red)
  2. overlay    – EXPLORATION: visited[:index] faint, visited[index] pulsing + outlined
                  PATH:        all visited very faint, path[:index] bright with a
                               travelling colour wave, tracer dot at path[index]

Design decisions:
  - NO mutation.  Everything comes in as arguments; a string goes out.
  - Time only enters through now_ms, so a frame is a pure function of
    (state, now_ms) and tests can pin the clock.
  - Colour channels are clamped to 0..255 after pulsing — never wrapped.
"""

import math
from typing import Dict, Optional, Tuple

from engine.lane import Lane
from engine.tracer import TracerPhase, TracerState
from grid import Cell, GridModel, ResultSummary

RGB = Tuple[int, int, int]


# ---------------------------------------------------------------------------
# Visual Config: colour palette, dimensions, pulse constants
# ---------------------------------------------------------------------------
class CanvasConfig:
    # canvas
    width:  int = 570
    height: int = 375
    bg:     str = "#ffffff"

    # base layer
    open_color:  str = "#ffffff"
    wall_color:  str = "#e6eefc"
    start_color: str = "#22c55e"   # green
    goal_color:  str = "#ef4444"   # red
    gap:         float = 1.0       # px left between neighbouring cells

    # exploration phase
    explored_opacity:      float = 0.3
    explore_pulse_period:  float = 200.0   # ms
    explore_pulse_base:    float = 0.7
    explore_pulse_amp:     float = 0.3
    current_outline_width: int   = 2

    # path phase
    background_opacity: float = 0.15
    path_pulse_amp:     float = 25.0
    path_pulse_rate:    float = 120.0      # ms per radian
    path_pulse_spread:  float = 3.0        # path ranks per radian of phase shift
    dot_color:          str   = "#facc15"  # tracer dot
    dot_radius:         float = 0.25       # × cell size


CONFIG = CanvasConfig()


# ---------------------------------------------------------------------------
# Colour helpers
# ---------------------------------------------------------------------------
def clamp(v: float, lo: float, hi: float) -> float:
    return lo if v < lo else (hi if v > hi else v)


def hex_to_rgb(color: str) -> RGB:
    value = int(color.lstrip("#"), 16)
    return (value >> 16) & 255, (value >> 8) & 255, value & 255


def exploration_pulse(now_ms: float, config: CanvasConfig = CONFIG) -> float:
    """Opacity of the cell being explored right now, in [base-amp, base+amp]."""
    phase = 2 * math.pi * now_ms / config.explore_pulse_period
    return clamp(config.explore_pulse_base + config.explore_pulse_amp * math.sin(phase), 0.0, 1.0)


def path_pulse_rgb(rgb: RGB, now_ms: float, rank: int, config: CanvasConfig = CONFIG) -> RGB:
    """
    Brightness wave along the path.  Red and green shift together; the
    per-rank phase offset makes neighbouring cells pulse slightly apart.
    """
    shift = math.sin(now_ms / config.path_pulse_rate + rank / config.path_pulse_spread) * config.path_pulse_amp
    r, g, b = rgb
    return (
        int(round(clamp(r + shift, 0, 255))),
        int(round(clamp(g + shift, 0, 255))),
        int(round(clamp(b, 0, 255))),
    )


# ---------------------------------------------------------------------------
# Main Render Functions
# ---------------------------------------------------------------------------
def render_empty_canvas(config: CanvasConfig = CONFIG, message: str = "Generate a maze to begin") -> str:
    return "\n".join([
        _svg_open(config),
        f'<rect width="{config.width}" height="{config.height}" fill="{config.bg}"/>',
        f'<text x="{config.width / 2}" y="{config.height / 2}" text-anchor="middle" '
        f'font-size="14" font-family="\'DM Sans\', sans-serif" fill="#7d8590">{message}</text>',
        "</svg>",
    ])


def render_race_canvas(
    grid: GridModel,
    state: TracerState,
    summary: Optional[ResultSummary],
    path_order: Dict[Cell, int],
    color: str,
    now_ms: float,
    config: CanvasConfig = CONFIG,
) -> str:
    """
    Returns an SVG string.

    Args:
        grid       : The maze.
        state      : Tracer state to draw.
        summary    : Run being replayed, or None to draw the bare maze.
        path_order : cell → rank along summary.path.
        color      : The lane's algorithm colour, "#rrggbb".
        now_ms     : Clock sample driving the pulse effects.
        config     : Visual config.
    """
    cell = min(config.width / grid.cols, config.height / grid.rows)

    svg_parts = [_svg_open(config), _render_base(grid, cell, config)]
    if summary is not None:
        if state.phase is TracerPhase.EXPLORATION:
            svg_parts.append(_render_exploration(summary, state, color, now_ms, cell, config))
        else:
            svg_parts.append(_render_path(summary, state, path_order, color, now_ms, cell, config))
    svg_parts.append("</svg>")
    return "\n".join(svg_parts)


def render_lane(grid: Optional[GridModel], lane: Lane, now_ms: float, config: CanvasConfig = CONFIG) -> str:
    """Convenience wrapper the session uses as its renderer."""
    if grid is None:
        return render_empty_canvas(config)
    return render_race_canvas(
        grid, lane.state, lane.summary, lane.path_order, lane.info.color, now_ms, config,
    )


# ---------------------------------------------------------------------------
# Layers
# ---------------------------------------------------------------------------
def _render_base(grid: GridModel, cell: float, config: CanvasConfig) -> str:
    parts = ['<g class="base">']
    for c, wall in grid.cells():
        parts.append(_rect(c, cell, config.wall_color if wall else config.open_color, config))
    parts.append(_rect(grid.start, cell, config.start_color, config, css="start"))
    parts.append(_rect(grid.goal, cell, config.goal_color, config, css="goal"))
    parts.append("</g>")
    return "\n".join(parts)


def _render_exploration(
    summary: ResultSummary, state: TracerState, color: str, now_ms: float,
    cell: float, config: CanvasConfig,
) -> str:
    rgb = hex_to_rgb(color)
    fill = _rgb(rgb)
    visited = summary.visited

    parts = ['<g class="exploration">']
    for c in visited[: state.index]:
        parts.append(_rect(c, cell, fill, config, opacity=config.explored_opacity))

    if state.index < len(visited):
        c = visited[state.index]
        parts.append(_rect(c, cell, fill, config, opacity=exploration_pulse(now_ms, config), css="current"))
        parts.append(
            f'<rect class="current-outline" x="{_f(c.y * cell)}" y="{_f(c.x * cell)}" '
            f'width="{_f(cell - config.gap)}" height="{_f(cell - config.gap)}" fill="none" '
            f'stroke="{color}" stroke-width="{config.current_outline_width}"/>'
        )
    parts.append("</g>")
    return "\n".join(parts)


def _render_path(
    summary: ResultSummary, state: TracerState, path_order: Dict[Cell, int], color: str,
    now_ms: float, cell: float, config: CanvasConfig,
) -> str:
    rgb = hex_to_rgb(color)
    path = summary.path

    parts = ['<g class="explored">']
    for c in summary.visited:
        parts.append(_rect(c, cell, _rgb(rgb), config, opacity=config.background_opacity))
    parts.append("</g>")

    parts.append('<g class="path">')
    for i, c in enumerate(path[: state.index]):
        rank = path_order.get(c, i)
        parts.append(_rect(c, cell, _rgb(path_pulse_rgb(rgb, now_ms, rank, config)), config))
    parts.append("</g>")

    if state.active and state.index < len(path):
        c = path[state.index]
        parts.append(
            f'<circle class="tracer" cx="{_f(c.y * cell + cell / 2)}" cy="{_f(c.x * cell + cell / 2)}" '
            f'r="{_f(cell * config.dot_radius)}" fill="{config.dot_color}"/>'
        )
    return "\n".join(parts)


# ---------------------------------------------------------------------------
# Primitives
# ---------------------------------------------------------------------------
def _svg_open(config: CanvasConfig) -> str:
    return (
        f'<svg width="{config.width}" height="{config.height}" '
        f'viewBox="0 0 {config.width} {config.height}" '
        f'xmlns="http://www.w3.org/2000/svg" style="background: {config.bg};">'
    )


def _rect(c: Cell, cell: float, fill: str, config: CanvasConfig,
          opacity: Optional[float] = None, css: str = "") -> str:
    # x (row) runs down the canvas, y (column) across
    attrs = f' class="{css}"' if css else ""
    op = f' fill-opacity="{opacity:.3f}"' if opacity is not None else ""
    size = _f(cell - config.gap)
    return (
        f'<rect{attrs} x="{_f(c.y * cell)}" y="{_f(c.x * cell)}" '
        f'width="{size}" height="{size}" fill="{fill}"{op}/>'
    )


def _rgb(rgb: RGB) -> str:
    return f"rgb({rgb[0]},{rgb[1]},{rgb[2]})"


def _f(v: float) -> str:
    return f"{v:.2f}".rstrip("0").rstrip(".")
