"""
controls.py — UI Control Panels
=================================
Every UI panel is a pure function that takes state and returns HTML.

Panels:
  • algorithm_selector   – dropdown + run button
  • grid_size_selector   – side length + random walls / reset buttons
  • playback_controls    – speed picker + cancel
  • legend               – colour key
  • analytics_panel      – cells visited, path length, outcome, …
  • comparison_controls  – pick two algorithms to compare
  • comparison_panel     – side-by-side metrics of two runs

All panels are stateless; the main app stitches them together.
"""

from typing import Optional, List

from config import GRID_SIZE_OPTIONS, SPEED_PRESETS
from grid import NodeState
from algorithms import AlgoInfo
from engine import RunMetrics, ComparisonResult
from ui.canvas import CONFIG


# ---------------------------------------------------------------------------
# Algorithm Selector
# ---------------------------------------------------------------------------
def algorithm_selector(algorithms: List[AlgoInfo], selected_key: str = "dijkstra") -> str:
    options = []
    for algo in algorithms:
        sel = 'selected' if algo.key == selected_key else ''
        options.append(
            f'<option value="{algo.key}" {sel}>{algo.label} ({algo.complexity_time})</option>'
        )

    return f"""
    <div class="panel algorithm-selector">
      <h3>Algorithm</h3>
      <select id="algo-selector">
        {''.join(options)}
      </select>
      <button id="btn-run" class="btn-primary">▶ Start</button>
    </div>
    """


# ---------------------------------------------------------------------------
# Grid Size
# ---------------------------------------------------------------------------
def grid_size_selector(rows: int, cols: int) -> str:
    options = []
    for side in GRID_SIZE_OPTIONS:
        sel = 'selected' if side == rows == cols else ''
        options.append(f'<option value="{side}" {sel}>{side} × {side}</option>')

    return f"""
    <div class="panel grid-size">
      <h3>Grid</h3>
      <select id="size-selector">
        {''.join(options)}
      </select>
      <div class="button-row">
        <button id="btn-reset-path">Reset Path</button>
        <button id="btn-clear">Clear All</button>
        <button id="btn-random">Random Walls</button>
      </div>
    </div>
    """


# ---------------------------------------------------------------------------
# Playback
# ---------------------------------------------------------------------------
def playback_controls(speed: str = "fast", is_running: bool = False) -> str:
    options = []
    for name in SPEED_PRESETS:
        sel = 'selected' if name == speed else ''
        options.append(f'<option value="{name}" {sel}>{name.title()}</option>')

    return f"""
    <div class="panel playback-controls">
      <h3>Playback</h3>
      <label>Speed:</label>
      <select id="speed-selector">
        {''.join(options)}
      </select>
      <button id="btn-cancel" {'' if is_running else 'disabled'}>■ Cancel</button>
    </div>
    """


# ---------------------------------------------------------------------------
# Legend
# ---------------------------------------------------------------------------
def legend() -> str:
    labels = [
        (NodeState.START, "Start"),
        (NodeState.END, "End"),
        (NodeState.OBSTACLE, "Wall"),
        (NodeState.PATH, "Path"),
        (NodeState.VISITED, "Visited"),
    ]
    items = "".join(
        f'<span class="legend-item"><i style="background:{CONFIG.cell_colors[state.value]}"></i>{label}</span>'
        for state, label in labels
    )
    return f'<div class="panel legend">{items}</div>'


# ---------------------------------------------------------------------------
# Analytics
# ---------------------------------------------------------------------------
def analytics_panel(metrics: Optional[RunMetrics] = None) -> str:
    if not metrics:
        return """
        <div class="panel analytics-panel">
          <h3>Analytics</h3>
          <p class="placeholder">Run an algorithm to see metrics.</p>
        </div>
        """

    path_status = "Found" if metrics.path_found else "No path"

    return f"""
    <div class="panel analytics-panel">
      <h3>Analytics: {metrics.algo_label}</h3>
      <table>
        <tr><td>Cells Visited:</td><td><strong>{metrics.nodes_visited}</strong></td></tr>
        <tr><td>Path Length:</td><td><strong>{metrics.path_length} steps</strong></td></tr>
        <tr><td>Total Events:</td><td><strong>{metrics.total_events}</strong></td></tr>
        <tr><td>Wall Time:</td><td><strong>{metrics.wall_time_ms:.2f} ms</strong></td></tr>
        <tr><td>Path:</td><td><strong>{path_status}</strong></td></tr>
      </table>
    </div>
    """


# ---------------------------------------------------------------------------
# Comparison Controls
# ---------------------------------------------------------------------------
def comparison_controls(algorithms: List[AlgoInfo], left_key: str = "bfs", right_key: str = "astar") -> str:
    def select(element_id: str, selected_key: str) -> str:
        options = "".join(
            f'<option value="{a.key}" {"selected" if a.key == selected_key else ""}>{a.label}</option>'
            for a in algorithms
        )
        return f'<select id="{element_id}">{options}</select>'

    return f"""
    <div class="panel comparison-controls">
      <h3>Compare</h3>
      {select("compare-left", left_key)}
      <span>vs</span>
      {select("compare-right", right_key)}
      <button id="btn-compare">Compare</button>
    </div>
    """


# ---------------------------------------------------------------------------
# Comparison Panel (side-by-side)
# ---------------------------------------------------------------------------
def comparison_panel(comp: Optional[ComparisonResult] = None) -> str:
    if not comp:
        return ""

    l, r = comp.left, comp.right
    return f"""
    <div class="panel comparison-panel">
      <h3>{l.algo_label} vs {r.algo_label}</h3>
      <table>
        <tr><th></th><th>{l.algo_label}</th><th>{r.algo_label}</th></tr>
        <tr><td>Cells Visited</td><td>{l.nodes_visited}</td><td>{r.nodes_visited}</td></tr>
        <tr><td>Path Length</td><td>{l.path_length}</td><td>{r.path_length}</td></tr>
        <tr><td>Outcome</td><td>{l.outcome}</td><td>{r.outcome}</td></tr>
      </table>
      <p>Fewer cells: <strong>{comp.winner_nodes}</strong> ·
         Shorter path: <strong>{comp.winner_path}</strong></p>
    </div>
    """
