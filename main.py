"""
main.py — Grid Pathfinding Visualizer Flask App
================================================
The web server that powers the visualizer.

Routes:
  GET  /                      – main UI
  GET  /api/state             – grid snapshot + run state
  POST /api/grid/configure    – rebuild grid at a new size
  POST /api/grid/toggle       – toggle an obstacle
  POST /api/grid/reset        – reset path (keep walls) or clear all
  POST /api/grid/random       – scatter random walls
  POST /api/run               – run an algorithm, return its event stream
  POST /api/run/cancel        – cancel the in-flight run
  POST /api/config/speed      – animation speed preset
  POST /api/compare           – run two algorithms on the same grid

State management:
  Each browser session gets its own RunController (and therefore its own
  Grid), held in-process and keyed by a random id stored in the Flask
  session cookie.  The table is bounded (see get_controller).  Runs
  execute in batch mode on the server; the browser paints the snapshot
  and replays the events with the configured delay.
"""

import logging
import secrets
import threading
import time
from collections import OrderedDict
from dataclasses import asdict
from typing import Any, Optional, Tuple

from flask import Flask, render_template_string, request, jsonify, session

import config
from errors import InvalidSizeError, UnknownAlgorithmError, AlreadyRunningError
from algorithms import Algorithm, get_algorithm, list_algorithms
from engine import RunController, Recorder, compare
from ui import (
    render_grid,
    CanvasConfig,
    algorithm_selector,
    grid_size_selector,
    playback_controls,
    legend,
    analytics_panel,
    comparison_controls,
    comparison_panel,
)


logger = logging.getLogger(__name__)

app = Flask(__name__)
app.secret_key = config.SECRET_KEY

# sid -> (controller, last time it was used); oldest first
_controllers: "OrderedDict[str, Tuple[RunController, float]]" = OrderedDict()
_controllers_lock = threading.Lock()


# ---------------------------------------------------------------------------
# Session State Helpers
# ---------------------------------------------------------------------------
def get_controller() -> RunController:
    """
    The caller's RunController, created on first use.

    Controllers live in process memory, so the table is bounded: idle
    sessions expire after SESSION_IDLE_SECONDS and the least recently
    used one is dropped once MAX_SESSIONS is exceeded.  An evicted
    browser simply gets a fresh default grid on its next request.
    """
    sid = session.get("sid")
    if sid is None:
        sid = secrets.token_hex(16)
        session["sid"] = sid

    now = time.monotonic()
    with _controllers_lock:
        entry = _controllers.get(sid)
        if entry is None:
            ctl = RunController(speed=session.get("speed", config.DEFAULT_SPEED))
            logger.info("New session %s", sid[:8])
        else:
            ctl = entry[0]
        _controllers[sid] = (ctl, now)
        _controllers.move_to_end(sid)
        _evict_sessions(now, keep=sid)
    return ctl


def _evict_sessions(now: float, keep: str) -> None:
    """Drop expired and surplus controllers, never `keep`.  Caller holds the lock."""
    cutoff = now - config.SESSION_IDLE_SECONDS
    limit = max(1, config.MAX_SESSIONS)
    while _controllers:
        sid, (_, last_used) = next(iter(_controllers.items()))
        if sid == keep or (len(_controllers) <= limit and last_used >= cutoff):
            break
        del _controllers[sid]
        logger.debug("Evicted session %s", sid[:8])


def get_state(ctl: RunController) -> dict:
    return {
        "grid":          ctl.grid.snapshot(),
        "run_state":     ctl.state.value,
        "selected_algo": session.get("selected_algo", Algorithm.DIJKSTRA.key),
        "speed":         session.get("speed", config.DEFAULT_SPEED),
    }


def _json_body() -> dict:
    return request.get_json(silent=True) or {}


def _as_bool(value: Any) -> bool:
    """JSON booleans pass through; "true"/"false"-style strings and 0/1 are parsed."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in ("true", "1", "yes", "on"):
            return True
        if text in ("false", "0", "no", "off"):
            return False
    raise ValueError(f"Expected a boolean, got {value!r}")


def _wall_params(data: dict) -> Tuple[float, Optional[int]]:
    """(wall_prob, seed) from a /api/grid/random body, validated."""
    raw = data.get("wall_prob", config.DEFAULT_WALL_PROBABILITY)
    if isinstance(raw, bool):
        raise ValueError(f"wall_prob must be a number, got {raw!r}")
    try:
        wall_prob = float(raw)
    except (TypeError, ValueError):
        raise ValueError(f"wall_prob must be a number, got {raw!r}")
    if not 0.0 <= wall_prob <= 1.0:
        raise ValueError(f"wall_prob must be within [0, 1], got {wall_prob}")

    seed = data.get("seed")
    if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
        raise ValueError(f"seed must be an integer, got {seed!r}")
    return wall_prob, seed


def _delays(ctl: RunController) -> dict:
    return {"visited": ctl.speed, "path": ctl.speed * config.PATH_DELAY_FACTOR}


# ---------------------------------------------------------------------------
# Error handlers
# ---------------------------------------------------------------------------
@app.errorhandler(InvalidSizeError)
@app.errorhandler(UnknownAlgorithmError)
def handle_bad_request(err):
    return jsonify({"error": str(err)}), 400


@app.errorhandler(AlreadyRunningError)
def handle_conflict(err):
    return jsonify({"error": str(err)}), 409


# ---------------------------------------------------------------------------
# Main UI Route
# ---------------------------------------------------------------------------
@app.route("/")
def index():
    ctl   = get_controller()
    state = get_state(ctl)

    html = render_template_string(
        INDEX_TEMPLATE,
        svg=render_grid(ctl.grid),
        algo_selector=algorithm_selector(list_algorithms(), selected_key=state["selected_algo"]),
        size_selector=grid_size_selector(ctl.grid.rows, ctl.grid.cols),
        playback=playback_controls(speed=state["speed"], is_running=ctl.is_running),
        legend=legend(),
        analytics=analytics_panel(),
        compare_controls=comparison_controls(list_algorithms()),
        palette=CanvasConfig.cell_colors,
    )
    return html


@app.route("/api/state")
def api_state():
    return jsonify(get_state(get_controller()))


# ---------------------------------------------------------------------------
# API: Grid editing
# ---------------------------------------------------------------------------
@app.route("/api/grid/configure", methods=["POST"])
def api_grid_configure():
    data = _json_body()
    rows, cols = data.get("rows"), data.get("cols", data.get("rows"))
    try:
        rows, cols = int(rows), int(cols)
    except (TypeError, ValueError):
        raise InvalidSizeError(rows, cols)

    ctl = get_controller()
    ctl.configure(rows, cols)
    return jsonify({"grid": ctl.grid.snapshot(), "svg": render_grid(ctl.grid)})


@app.route("/api/grid/toggle", methods=["POST"])
def api_grid_toggle():
    data = _json_body()
    ctl = get_controller()
    try:
        row, col = int(data["row"]), int(data["col"])
        toggled = ctl.toggle_obstacle(row, col)
    except (KeyError, TypeError, ValueError, IndexError):
        return jsonify({"error": "row and col must address a cell on the grid"}), 400

    return jsonify({
        "toggled":  toggled,
        "obstacle": ctl.grid.node(row, col).is_obstacle,
    })


@app.route("/api/grid/reset", methods=["POST"])
def api_grid_reset():
    try:
        keep = _as_bool(_json_body().get("keep_obstacles", True))
    except ValueError as err:
        return jsonify({"error": str(err)}), 400

    ctl = get_controller()
    ctl.reset(keep_obstacles=keep)
    return jsonify({"grid": ctl.grid.snapshot(), "svg": render_grid(ctl.grid)})


@app.route("/api/grid/random", methods=["POST"])
def api_grid_random():
    data = _json_body()
    try:
        wall_prob, seed = _wall_params(data)
    except ValueError as err:
        return jsonify({"error": str(err)}), 400

    ctl = get_controller()
    ctl.reset(keep_obstacles=True)
    placed = ctl.grid.scatter_obstacles(wall_prob, seed=seed)
    return jsonify({"placed": placed, "grid": ctl.grid.snapshot(), "svg": render_grid(ctl.grid)})


# ---------------------------------------------------------------------------
# API: Run
# ---------------------------------------------------------------------------
@app.route("/api/run", methods=["POST"])
def api_run():
    data = _json_body()
    info = get_algorithm(data.get("algorithm", session.get("selected_algo", Algorithm.DIJKSTRA.key)))
    session["selected_algo"] = info.key

    ctl = get_controller()
    rec = Recorder(ctl.grid, controller=ctl)
    metrics = rec.run(info.algorithm)

    return jsonify({
        "snapshot":  ctl.grid.snapshot(),
        "events":    [e.to_dict() for e in rec.events],
        "outcome":   metrics.outcome,
        "metrics":   asdict(metrics),
        "analytics": analytics_panel(metrics),
        "delay":     _delays(ctl),
    })


@app.route("/api/run/cancel", methods=["POST"])
def api_run_cancel():
    ctl = get_controller()
    cancelled = ctl.cancel()
    return jsonify({"cancelled": cancelled, "run_state": ctl.state.value})


@app.route("/api/config/speed", methods=["POST"])
def api_config_speed():
    preset = _json_body().get("speed", config.DEFAULT_SPEED)
    if preset not in config.SPEED_PRESETS:
        return jsonify({"error": f"Unknown speed preset: {preset}"}), 400
    session["speed"] = preset
    ctl = get_controller()
    ctl.set_speed(preset)
    return jsonify({"speed": preset, "delay": _delays(ctl)})


@app.route("/api/compare", methods=["POST"])
def api_compare():
    data = _json_body()
    ctl = get_controller()

    left, right = Recorder(ctl.grid, controller=ctl), Recorder(ctl.grid, controller=ctl)
    left.run(data.get("left", Algorithm.BFS.key))
    right.run(data.get("right", Algorithm.ASTAR.key))

    result = compare(left, right)
    return jsonify({**asdict(result), "html": comparison_panel(result), "svg": render_grid(ctl.grid)})


# ---------------------------------------------------------------------------
# HTML Template
# ---------------------------------------------------------------------------
INDEX_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Maze Solver</title>
  <style>
    * { margin: 0; padding: 0; box-sizing: border-box; }
    body {
      font-family: -apple-system, BlinkMacSystemFont, 'Roboto', sans-serif;
      background: #1E1E2C;
      color: #ffffff;
      display: flex;
      gap: 16px;
      padding: 16px;
      min-height: 100vh;
    }
    #sidebar { width: 300px; display: flex; flex-direction: column; gap: 12px; }
    #main { flex: 1; display: flex; flex-direction: column; align-items: center; gap: 12px; }
    .panel { background: #2D2D3A; border-radius: 12px; padding: 12px 16px; }
    .panel h3 { font-size: 14px; margin-bottom: 8px; }
    select, button {
      background: #3F3F5A; color: #fff; border: none; border-radius: 8px;
      padding: 6px 10px; margin: 4px 0; cursor: pointer;
    }
    button.btn-primary { background: #6C63FF; }
    button:disabled { opacity: 0.4; cursor: default; }
    .button-row { display: flex; gap: 6px; flex-wrap: wrap; }
    .legend { display: flex; gap: 12px; }
    .legend-item { display: flex; align-items: center; gap: 4px; font-size: 12px; }
    .legend-item i { width: 14px; height: 14px; border-radius: 4px; display: inline-block; }
    .cell { cursor: pointer; transition: fill 0.2s; }
    table td { padding: 2px 6px; font-size: 13px; }
    #status { font-size: 13px; color: #aaa; }
  </style>
</head>
<body>
  <div id="sidebar">
    {{ algo_selector|safe }}
    {{ size_selector|safe }}
    {{ playback|safe }}
    <div id="analytics">{{ analytics|safe }}</div>
    {{ compare_controls|safe }}
    <div id="comparison"></div>
|safe }}</div>
  </div>
  <div id="main">
    {{ legend|safe }}
    <div id="canvas">{{ svg|safe }}</div>
    <div id="status">Click cells to place walls, then press Start.</div>
  </div>

  <script>
    const PALETTE = {{ palette|tojson }};
    let timers = [];
    let running = false;

    async function post(url, body) {
      const res = await fetch(url, {
        method: 'POST',
        headers: {'Content-Type': 'application/json'},
        body: JSON.stringify(body || {}),
      });
      return res.json();
    }

    function cell(row, col) {
      return document.querySelector(`.cell[data-row="${row}"][data-col="${col}"]`);
    }

    function paint(row, col, state) {
      const c = cell(row, col);
      if (!c || c.classList.contains('start') || c.classList.contains('end')) return;
      c.setAttribute('fill', PALETTE[state]);
      c.setAttribute('class', `cell ${state}`);
    }

    function paintSnapshot(snap) {
      for (let r = 0; r < snap.rows; r++)
        for (let c = 0; c < snap.cols; c++) paint(r, c, 'empty');
      snap.obstacles.forEach(([r, c]) => paint(r, c, 'obstacle'));
    }

    function setRunning(flag) {
      running = flag;
      document.getElementById('btn-run').disabled = flag;
      document.getElementById('btn-cancel').disabled = !flag;
    }

    function stopAnimation() {
      timers.forEach(clearTimeout);
      timers = [];
      setRunning(false);
    }

    function replaceCanvas(data) {
      document.getElementById('canvas').innerHTML = data.svg;
      bindCells();
    }

    function bindCells() {
      document.querySelectorAll('.cell').forEach(el => {
        el.addEventListener('click', async () => {
          if (running) return;
          const row = +el.dataset.row, col = +el.dataset.col;
          const data = await post('/api/grid/toggle', {row, col});
          if (data.toggled) paint(row, col, data.obstacle ? 'obstacle' : 'empty');
        });
      });
    }

    document.getElementById('btn-run').addEventListener('click', async () => {
      if (running) return;
      const algorithm = document.getElementById('algo-selector').value;
      const data = await post('/api/run', {algorithm});
      if (data.error) { document.getElementById('status').textContent = data.error; return; }

      paintSnapshot(data.snapshot);
      document.getElementById('analytics').innerHTML = data.analytics;
      setRunning(true);

      let t = 0;
      data.events.forEach(ev => {
        timers.push(setTimeout(() => {
          if (ev.kind === 'visited') paint(ev.row, ev.col, 'visited');
          else if (ev.kind === 'path_step') paint(ev.row, ev.col, 'path');
          else {
            document.getElementById('status').textContent =
              ev.outcome === 'completed' ? 'Path found.' : 'No path exists.';
            setRunning(false);
          }
        }, t * 1000));
        t += ev.kind === 'path_step' ? data.delay.path : data.delay.visited;
      });
    });

    document.getElementById('btn-cancel').addEventListener('click', async () => {
      stopAnimation();
      await post('/api/run/cancel');
      document.getElementById('status').textContent = 'Cancelled.';
    });

    document.getElementById('size-selector').addEventListener('change', async (e) => {
      stopAnimation();
      const side = +e.target.value;
      replaceCanvas(await post('/api/grid/configure', {rows: side, cols: side}));
    });

    document.getElementById('btn-reset-path').addEventListener('click', async () => {
      stopAnimation();
      replaceCanvas(await post('/api/grid/reset', {keep_obstacles: true}));
    });

    document.getElementById('btn-clear').addEventListener('click', async () => {
      stopAnimation();
      replaceCanvas(await post('/api/grid/reset', {keep_obstacles: false}));
    });

    document.getElementById('btn-random').addEventListener('click', async () => {
      stopAnimation();
      replaceCanvas(await post('/api/grid/random', {}));
    });

    document.getElementById('btn-compare').addEventListener('click', async () => {
      if (running) return;
      stopAnimation();
      const left = document.getElementById('compare-left').value;
      const right = document.getElementById('compare-right').value;
      const data = await post('/api/compare', {left, right});
      if (data.error) { document.getElementById('status').textContent = data.error; return; }
      replaceCanvas(data);
      document.getElementById('comparison').innerHTML = data.html;
      document.getElementById('status').textContent = 'Grid shows the ' + data.right.algo_label + ' run.';
    });

    document.getElementById('speed-selector').addEventListener('change', async (e) => {
      await post('/api/config/speed', {speed: e.target.value});
    });

    bindCells();
  </script>
</body>
</html>
"""


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
    logger.info("Grid Pathfinding Visualizer on http://%s:%d", config.HOST, config.PORT)
    app.run(host=config.HOST, port=config.PORT, debug=config.DEBUG)
