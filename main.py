"""
main.py — Maze Race Visualizer Flask App
==========================================
The web host for the race.  It does not build mazes or run searches:
it asks the maze server for both, animates the answers and judges them.

Routes:
  GET  /                – main UI
  POST /api/generate    – fetch a new maze from the provider
  POST /api/start       – fetch both results, judge, start both animations
  POST /api/stop        – pause both animations in place
  POST /api/resume      – continue the animations that have work left
  GET  /api/frame       – run one animation frame, return both SVGs
  GET  /api/state       – stats, badges, winner, log, pending notice
  POST /api/log/clear   – clear the run log and winner banner

State management:
  One in-process RaceSession in app.extensions["race_session"].  The
  session is single-threaded, so every route holds SESSION_LOCK while it
  touches it.  `python main.py` runs the server unthreaded; under
  `flask --app main run` (threaded) the lock serialises the requests.
"""

import functools
import logging
import threading

from flask import Flask, jsonify, render_template_string

from algorithms import list_algorithms
from engine import HttpMazeProvider, HttpSolverProvider, RaceSession
from errors import NoGridError, RaceError, TransportFailure
from settings import RaceSettings, load_settings
from ui import (
    render_lane,
    command_bar,
    algorithm_card,
    winner_banner,
    event_log_panel,
    notice_toast,
)

logger = logging.getLogger(__name__)

SETTINGS = load_settings()

app = Flask(__name__)
app.config.from_mapping(RACE_SETTINGS=SETTINGS)

SESSION_LOCK = threading.Lock()


# ---------------------------------------------------------------------------
# Session Helpers
# ---------------------------------------------------------------------------
def build_session(settings: RaceSettings) -> RaceSession:
    return RaceSession(
        maze_provider=HttpMazeProvider(settings.provider_url, settings.request_timeout),
        solver_provider=HttpSolverProvider(settings.provider_url, settings.request_timeout),
        renderer=render_lane,
    )


def serialized(view):
    """Run a view with SESSION_LOCK held."""
    @functools.wraps(view)
    def wrapper(*args, **kwargs):
        with SESSION_LOCK:
            return view(*args, **kwargs)
    return wrapper


def get_session() -> RaceSession:
    if "race_session" not in app.extensions:
        app.extensions["race_session"] = build_session(app.config["RACE_SETTINGS"])
    return app.extensions["race_session"]


def command_response(command):
    """Run a session command and map RaceErrors onto JSON error replies."""
    race = get_session()
    try:
        command(race)
    except NoGridError as e:
        return jsonify({"ok": False, "error": str(e), "state": race.snapshot()}), 409
    except TransportFailure as e:
        return jsonify({"ok": False, "error": str(e), "state": race.snapshot()}), 502
    except RaceError as e:
        return jsonify({"ok": False, "error": str(e), "state": race.snapshot()}), 400
    return jsonify({"ok": True, "state": race.snapshot()})


# ---------------------------------------------------------------------------
# Main UI Route
# ---------------------------------------------------------------------------
@app.route("/")
@serialized
def index():
    race = get_session()
    frames = race.frames()

    cards = []
    for info in list_algorithms():
        lane = race.lanes[info.key]
        badges = race.outcome.badges(info.key) if race.outcome else []
        cards.append(algorithm_card(info, frames[info.key], lane.summary, badges))

    return render_template_string(
        INDEX_TEMPLATE,
        commands=command_bar(paused=race.paused, has_grid=race.grid is not None),
        cards=cards,
        winner=winner_banner(race.winner_text),
        log=event_log_panel(race.log.lines),
        notify=notice_toast(),
        has_grid=race.grid is not None,
    )


# ---------------------------------------------------------------------------
# API: Commands
# ---------------------------------------------------------------------------
@app.route("/api/generate", methods=["POST"])
@serialized
def api_generate():
    return command_response(lambda race: race.generate())


@app.route("/api/start", methods=["POST"])
@serialized
def api_start():
    return command_response(lambda race: race.start())


@app.route("/api/stop", methods=["POST"])
@serialized
def api_stop():
    return command_response(lambda race: race.stop())


@app.route("/api/resume", methods=["POST"])
@serialized
def api_resume():
    return command_response(lambda race: race.resume())


@app.route("/api/log/clear", methods=["POST"])
@serialized
def api_log_clear():
    return command_response(lambda race: race.clear_log())


# ---------------------------------------------------------------------------
# API: Frames & State
# ---------------------------------------------------------------------------
@app.route("/api/frame")
@serialized
def api_frame():
    race = get_session()
    frames = race.tick()
    return jsonify({
        "frames": {key.value: svg for key, svg in frames.items()},
        "state":  race.snapshot(),
    })


@app.route("/api/state")
@serialized
def api_state():
    return jsonify(get_session().snapshot())


# ---------------------------------------------------------------------------
# HTML Template
# ---------------------------------------------------------------------------
INDEX_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Maze Race: BFS vs A*</title>
  <link rel="preconnect" href="https://fonts.googleapis.com">
  <link rel="preconnect" href="https://fonts.gstatic.com" crossorigin>
  <link href="https://fonts.googleapis.com/css2?family=JetBrains+Mono:wght@400;500;700&family=DM+Sans:wght@400;500;700&display=swap" rel="stylesheet">
  <style>
    * { margin: 0; padding: 0; box-sizing: border-box; }

    :root {
      --bg-dark: #0d1117;
      --bg-darker: #010409;
      --bg-panel: #161b22;
      --border: #30363d;
      --text-primary: #e6edf3;
      --text-secondary: #7d8590;
      --accent-cyan: #0ea5e9;
      --accent-teal: #06b6d4;
      --accent-amber: #f59e0b;
      --glow-cyan: rgba(14, 165, 233, 0.4);
    }

    body {
      font-family: 'DM Sans', -apple-system, BlinkMacSystemFont, sans-serif;
      background: var(--bg-darker);
      color: var(--text-primary);
      padding: 24px;
    }

    h1 { font-size: 20px; margin-bottom: 16px; }

    /* Panels */
    .panel {
      background: var(--bg-panel);
      border: 1px solid var(--border);
      border-radius: 12px;
      padding: 18px;
      margin-bottom: 16px;
      transition: all 0.3s ease;
    }

    .panel h3 {
      font-size: 13px;
      font-weight: 700;
      margin-bottom: 14px;
      text-transform: uppercase;
      letter-spacing: 0.5px;
      display: flex;
      align-items: center;
      gap: 8px;
    }

    /* Buttons */
    .button-row { display: flex; gap: 8px; }

    button {
      background: linear-gradient(135deg, var(--accent-cyan), var(--accent-teal));
      color: #fff;
      border: none;
      padding: 10px 16px;
      border-radius: 8px;
      cursor: pointer;
      font-size: 13px;
      font-weight: 600;
      font-family: 'DM Sans', sans-serif;
      box-shadow: 0 2px 8px rgba(6, 182, 212, 0.3);
    }
    button:disabled, button.disabled { opacity: 0.4; cursor: not-allowed; }
    .btn-ghost { background: transparent; border: 1px solid var(--border); box-shadow: none; }

    /* Race cards */
    #race { display: grid; grid-template-columns: 1fr 1fr; gap: 20px; }
    .algo-card .swatch { width: 12px; height: 12px; border-radius: 3px; display: inline-block; }
    .algo-card .badge { margin-left: auto; color: var(--accent-amber); }
    .algo-card.winner-glow { box-shadow: 0 0 24px var(--algo-color); border-color: var(--algo-color); }
    .canvas-slot { display: flex; justify-content: center; margin-bottom: 12px; border-radius: 6px; transition: box-shadow 0.3s ease; }
    .canvas-slot.result-glow { box-shadow: 0 0 18px var(--algo-color); }
    .stats td { padding: 2px 12px 2px 0; color: var(--text-secondary); }
    .stats strong { color: var(--text-primary); }

    .winner-banner { min-height: 24px; margin-bottom: 16px; color: var(--accent-amber); font-weight: 600; }

    /* Log */
    #log {
      max-height: 220px;
      overflow-y: auto;
      font-family: 'JetBrains Mono', 'Courier New', monospace;
      font-size: 12px;
      line-height: 1.6;
      color: var(--text-secondary);
    }
    #log .ts { color: var(--text-primary); margin-right: 8px; }

    /* Toast */
    .notify {
      position: fixed; top: 20px; right: 20px;
      background: var(--bg-panel); border: 1px solid var(--accent-cyan);
      border-radius: 8px; padding: 10px 16px;
      box-shadow: 0 0 20px var(--glow-cyan);
    }
  </style>
</head>
<body>
  <h1>Maze Race: BFS vs A*</h1>
  <div id="commands">{{ commands|safe }}</div>
  {{ winner|safe }}
  <div id="race">
    {% for card in cards %}{{ card|safe }}{% endfor %}
  </div>
  <div id="event-log">{{ log|safe }}</div>
  {{ notify|safe }}

  <script>
    let framePending = false;
    let notifyTimer = null;

    // API helpers
    async function post(url) {
      const res = await fetch(url, {method: 'POST', headers: {'Content-Type': 'application/json'}, body: '{}'});
      return await res.json();
    }

    function showNotify(notice) {
      if (!notice) return;
      const n = document.getElementById('notify');
      n.innerText = notice.message;
      n.style.display = 'block';
      clearTimeout(notifyTimer);
      notifyTimer = setTimeout(() => n.style.display = 'none', notice.duration_ms);
    }

    function applyState(state) {
      if (!state) return;
      for (const [key, lane] of Object.entries(state.lanes)) {
        const s = lane.stats;
        document.getElementById(`time-${key}`).textContent = s ? s.time_ms.toFixed(2) : '-';
        document.getElementById(`visited-${key}`).textContent = s ? s.visited : '-';
        document.getElementById(`path-${key}`).textContent = s ? (s.path_found ? s.path_length : 'no path') : '-';
        document.getElementById(`badge-${key}`).textContent = lane.badges.join(' · ');
        document.getElementById(`card-${key}`).classList.toggle('winner-glow', lane.badges.includes('Winner'));
      }
      document.getElementById('winner').textContent = state.winner_text;
      document.getElementById('startBtn').disabled = !state.has_grid;
      document.getElementById('stopBtn').style.display = state.paused ? 'none' : 'inline-block';
      document.getElementById('resumeBtn').style.display = state.paused ? 'inline-block' : 'none';

      const log = document.getElementById('log');
      log.innerHTML = '';
      for (const line of state.log) {
        const div = document.createElement('div');
        div.className = 'log-line';
        const ts = document.createElement('span');
        ts.className = 'ts';
        ts.textContent = `[${line.ts}]`;
        div.appendChild(ts);
        div.appendChild(document.createTextNode(line.message));
        log.appendChild(div);
      }
      log.scrollTop = log.scrollHeight;
      showNotify(state.notice);
    }

    // Frame loop: one server frame per browser frame while anything animates
    async function frame() {
      framePending = false;
      let data;
      try {
        const res = await fetch('/api/frame');
        if (!res.ok) throw new Error(`HTTP ${res.status}`);
        data = await res.json();
      } catch (e) {
        showNotify({message: 'Connection lost, retrying...', duration_ms: 1500});
        setTimeout(requestFrame, 1000);
        return;
      }
      for (const [key, svg] of Object.entries(data.frames)) {
        document.getElementById(`canvas-${key}`).innerHTML = svg;
      }
      applyState(data.state);
      if (data.state.animating) requestFrame();
    }

    function requestFrame() {
      if (framePending) return;
      framePending = true;
      requestAnimationFrame(frame);
    }

    async function command(url) {
      let data;
      try {
        data = await post(url);
      } catch (e) {
        showNotify({message: 'Server offline?', duration_ms: 1000});
        return null;
      }
      applyState(data.state);
      requestFrame();
      return data;
    }

    // Each canvas glows briefly when its result arrives
    function glowCanvases(state) {
      for (const [key, lane] of Object.entries(state.lanes)) {
        if (!lane.stats) continue;
        const slot = document.getElementById(`canvas-${key}`);
        slot.classList.add('result-glow');
        setTimeout(() => slot.classList.remove('result-glow'), 800);
      }
    }

    document.getElementById('genBtn').addEventListener('click', () => command('/api/generate'));
    document.getElementById('startBtn').addEventListener('click', async () => {
      const btn = document.getElementById('startBtn');
      btn.disabled = true;
      const data = await command('/api/start');
      if (data && data.ok) glowCanvases(data.state);
    });
    document.getElementById('stopBtn').addEventListener('click', () => command('/api/stop'));
    document.getElementById('resumeBtn').addEventListener('click', () => command('/api/resume'));
    document.getElementById('clearLogBtn').addEventListener('click', () => command('/api/log/clear'));

    {% if not has_grid %}
    window.addEventListener('load', () => command('/api/generate'));
    {% else %}
    window.addEventListener('load', requestFrame);
    {% endif %}
  </script>
</body>
</html>
"""


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    logging.basicConfig(
        level=getattr(logging, SETTINGS.log_level),
        format="[%(levelname)s] %(name)s: %(message)s",
    )
    logger.info("Maze Race Visualizer on http://%s:%s (provider %s)",
                SETTINGS.host, SETTINGS.port, SETTINGS.provider_url)
    app.run(debug=SETTINGS.debug, host=SETTINGS.host, port=SETTINGS.port, threaded=False)
