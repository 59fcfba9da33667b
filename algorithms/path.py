"""
path.py — Path Reconstruction
==============================
Walks `previous` links from the end node back to the start, then
replays them start → end as PATH_STEP events, marking each node
`is_path` as it goes.

    found = yield from reconstruct_path(grid)

No path (end.previous is None) yields nothing and returns False.
Timing between steps is left to the consumer.
"""

from typing import Generator, List

from grid import Grid, Node
from algorithms.events import Event, path_step


def path_nodes(grid: Grid) -> List[Node]:
    """Nodes on the current start → end path, or [] if end was never reached."""
    if grid.end.previous is None:
        return []
    return [grid.at(coord) for coord in grid.path_to(grid.end.coord)]


def reconstruct_path(grid: Grid) -> Generator[Event, None, bool]:
    nodes = path_nodes(grid)
    if not nodes:
        return False

    last = len(nodes) - 1
    for i, node in enumerate(nodes):
        node.is_path = True
        yield path_step(node, explanation=f"Path step {i}/{last}: ({node.row}, {node.col}).")
    return True
