"""
bfs.py — Breadth-First Search
==============================
Generator-based BFS over the grid.  Yields a VISITED event for every
dequeued node and returns True once the end node is dequeued.

Nodes are marked visited when ENQUEUED (not when dequeued), so no node
is ever queued twice.  Neighbours are discovered in up/down/left/right
order, which fixes the tie-break between equally short paths.

All steps cost 1, so the first time the end node is reached it is by a
shortest path (hop count).
"""

from collections import deque
from typing import Generator, List

from grid import Grid
from algorithms.events import Event, visited


# ---------------------------------------------------------------------------
# Pseudocode: each string is one displayed line; index = pseudocode_line
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def BFS(grid, start, end):",               # 0
    "    queue ← [start]",                      # 1
    "    mark start visited",                   # 2
    "    while queue is not empty:",             # 3
    "        node ← queue.dequeue()",           # 4
    "        if node == end: return path",      # 5
    "        for nbr in neighbours(node):",     # 6
    "            if nbr not visited and open:",  # 7
    "                mark nbr visited",         # 8
    "                prev[nbr] ← node",         # 9
    "                queue.enqueue(nbr)",       # 10
    "    return NO PATH",                       # 11
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def bfs(grid: Grid) -> Generator[Event, None, bool]:
    """
    Yields:
        Event – one VISITED per dequeued node, in FIFO order.

    Returns:
        True if the end node was reached.
    """
    start, end = grid.start, grid.end
    queue = deque([start])
    start.is_visited = True

    while queue:
        current = queue.popleft()

        yield visited(
            current,
            pseudocode_line=4,
            explanation=(
                f"Dequeue ({current.row}, {current.col}) at depth {current.distance:g}. "
                f"BFS always expands the node that was discovered earliest (FIFO)."
            ),
        )

        if current is end:
            return True

        for nbr in grid.neighbors(current):
            if nbr.is_visited or nbr.is_obstacle:
                continue
            nbr.is_visited = True
            nbr.previous = current.coord
            nbr.distance = current.distance + 1
            queue.append(nbr)

    return False
