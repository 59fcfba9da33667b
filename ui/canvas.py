"""
canvas.py — SVG Grid Renderer
==============================
Pure rendering function: Grid → SVG string.

The renderer consumes:
  • grid    – the Grid (dimensions, node flags, start / end)
  • config  – visual config (cell size, gap, colours)

And produces an SVG string ready to inject into the DOM.  Each cell is
a <rect> carrying data-row / data-col so the browser can apply run
events and obstacle clicks to it without re-rendering.

Design decisions:
  - NO mutation.  The caller passes in everything and gets back a string.
  - State-based colouring is a dict lookup: NodeState → hex colour,
    with the same precedence the grid uses (start > end > path >
    obstacle > visited > empty).
"""

from typing import Dict

from grid import Grid, Node, NodeState


# ---------------------------------------------------------------------------
# Visual Config: colour palette, dimensions
# ---------------------------------------------------------------------------
class CanvasConfig:
    bg:     str = "#2D2D3A"

    cell_colors: Dict[str, str] = {
        NodeState.EMPTY.value:    "#3F3F5A",
        NodeState.VISITED.value:  "#64B5F6",
        NodeState.PATH.value:     "#FFEB3B",
        NodeState.OBSTACLE.value: "#424242",
        NodeState.START.value:    "#4CAF50",
        NodeState.END.value:      "#F44336",
    }

    cell_size:   int = 24
    cell_gap:    int = 2
    cell_radius: int = 4
    padding:     int = 8

    marker_color: str = "#FFFFFF"


CONFIG = CanvasConfig()


# ---------------------------------------------------------------------------
# Main Render Function
# ---------------------------------------------------------------------------
def render_grid(grid: Grid, config: CanvasConfig = CONFIG) -> str:
    """Returns an SVG string for the grid in its current state."""
    pitch  = config.cell_size + config.cell_gap
    width  = 2 * config.padding + grid.cols * pitch - config.cell_gap
    height = 2 * config.padding + grid.rows * pitch - config.cell_gap

    svg_parts = [
        f'<svg id="grid-svg" width="{width}" height="{height}" '
        f'viewBox="0 0 {width} {height}" '
        f'xmlns="http://www.w3.org/2000/svg" data-rows="{grid.rows}" data-cols="{grid.cols}">',
        f'<rect width="{width}" height="{height}" rx="12" fill="{config.bg}"/>',
    ]

    for node in grid:
        svg_parts.append(_render_cell(grid, node, config))

    svg_parts.append("</svg>")
    return "\n".join(svg_parts)


def cell_color(grid: Grid, node: Node, config: CanvasConfig = CONFIG) -> str:
    return config.cell_colors[grid.display_state(node).value]


# ---------------------------------------------------------------------------
# Cell Rendering
# ---------------------------------------------------------------------------
def _render_cell(grid: Grid, node: Node, config: CanvasConfig) -> str:
    pitch = config.cell_size + config.cell_gap
    x = config.padding + node.col * pitch
    y = config.padding + node.row * pitch
    state = grid.display_state(node)
    fill = config.cell_colors[state.value]

    parts = [
        f'<rect class="cell {state.value}" data-row="{node.row}" data-col="{node.col}" '
        f'x="{x}" y="{y}" width="{config.cell_size}" height="{config.cell_size}" '
        f'rx="{config.cell_radius}" fill="{fill}"/>'
    ]

    # ▶ on start, ⚑ on end
    if state in (NodeState.START, NodeState.END):
        glyph = "▶" if state is NodeState.START else "⚑"
        cx = x + config.cell_size / 2
        cy = y + config.cell_size / 2 + 5
        parts.append(
            f'<text x="{cx}" y="{cy}" text-anchor="middle" font-size="14" '
            f'fill="{config.marker_color}" pointer-events="none">{glyph}</text>'
        )
    return "\n".join(parts)
