"""
controls.py — UI Panels
=========================
Every panel is a pure function that takes state and returns HTML.

Panels:
  • command_bar      – Generate / Start / Stop / Resume / Clear log
  • algorithm_card   – one competitor: canvas slot, time / visited / path, badges
  • winner_banner    – the judge's verdict text
  • event_log_panel  – timestamped run log
  • notice_toast     – transient notification slot

Design:
  - All panels are stateless render functions.
  - Output is raw HTML strings (no templating engine).
  - main.py stitches them into the page; the page script swaps the
    dynamic bits (stats, badges, log) from /api/state without
    re-rendering whole panels.
"""

from html import escape
from typing import List, Optional

from algorithms import AlgoInfo
from engine import LogLine
from grid import ResultSummary


# ---------------------------------------------------------------------------
# Command Bar
# ---------------------------------------------------------------------------
def command_bar(paused: bool = False, has_grid: bool = False) -> str:
    # Stop and Resume share a slot: exactly one of them is visible
    stop_display   = "none" if paused else "inline-block"
    resume_display = "inline-block" if paused else "none"
    start_disabled = "" if has_grid else "disabled"

    return f"""
    <div class="panel command-bar">
      <div class="button-row">
        <button id="genBtn" class="btn-secondary" title="Ask the maze server for a new maze">Generate Maze</button>
        <button id="startBtn" class="btn-primary" {start_disabled}>Start Race</button>
        <button id="stopBtn" style="display: {stop_display};">Stop</button>
        <button id="resumeBtn" style="display: {resume_display};">Resume</button>
        <button id="clearLogBtn" class="btn-ghost">Clear Log</button>
      </div>
    </div>
    """


# ---------------------------------------------------------------------------
# Algorithm Card
# ---------------------------------------------------------------------------
def algorithm_card(
    info: AlgoInfo,
    svg: str,
    summary: Optional[ResultSummary] = None,
    badges: Optional[List[str]] = None,
) -> str:
    key = info.key.value
    if summary is None:
        time_s = visited_s = path_s = "-"
    else:
        time_s    = f"{summary.elapsed_ms:.2f}"
        visited_s = str(summary.visited_count)
        path_s    = str(summary.path_length) if summary.path_found else "no path"
    badge_text = " · ".join(badges or [])
    winner_cls = " winner-glow" if badges and "Winner" in badges else ""

    return f"""
    <div class="panel algo-card{winner_cls}" id="card-{key}" style="--algo-color: {info.color};">
      <h3>
        <span class="swatch" style="background: {info.color};"></span>
        {escape(info.name)}
        <span class="badge" id="badge-{key}">{badge_text}</span>
      </h3>
      <div class="canvas-slot" id="canvas-{key}">{svg}</div>
      <table class="stats">
        <tr><td>Time (ms):</td><td><strong id="time-{key}">{time_s}</strong></td></tr>
        <tr><td>Visited:</td><td><strong id="visited-{key}">{visited_s}</strong></td></tr>
        <tr><td>Path length:</td><td><strong id="path-{key}">{path_s}</strong></td></tr>
      </table>
    </div>
    """


# ---------------------------------------------------------------------------
# Winner Banner
# ---------------------------------------------------------------------------
def winner_banner(text: str = "") -> str:
    return f'<div class="winner-banner" id="winner">{escape(text)}</div>'


# ---------------------------------------------------------------------------
# Event Log
# ---------------------------------------------------------------------------
def event_log_panel(lines: List[LogLine]) -> str:
    rows = [
        f'<div class="log-line"><span class="ts">[{line.timestamp}]</span>{escape(line.message)}</div>'
        for line in lines
    ]
    return f"""
    <div class="panel event-log">
      <h3>Run Log</h3>
      <div id="log">{''.join(rows)}</div>
    </div>
    """


# ---------------------------------------------------------------------------
# Notice Toast
# ---------------------------------------------------------------------------
def notice_toast() -> str:
    return '<div id="notify" class="notify" style="display: none;"></div>'
