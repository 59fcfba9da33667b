"""
dijkstra.py — Dijkstra's Shortest-Path Algorithm
==================================================
Generator-based Dijkstra over the grid using the project's binary
min-heap (algorithms.pqueue) with lazy deletion.

Yields a VISITED event each time a node's distance becomes final, and
returns True if the end node was reached:

    found = yield from dijkstra(grid)

Every node is queued up-front (start at 0, the rest at ∞).  A better
distance found later inserts a fresh entry; the superseded one is
skipped when popped because its node is already visited.  Popping an
∞ entry means nothing else is reachable.

Edge weight is uniform (1), so this is single-source shortest path by
hop count.
"""

import math
from typing import Generator, List

from grid import Grid
from algorithms.events import Event, visited
from algorithms.pqueue import PriorityQueue


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def Dijkstra(grid, start, end):",                 # 0
    "    dist[v] ← ∞ for all v;  dist[start] ← 0",     # 1
    "    pq ← every node keyed by dist",               # 2
    "    while pq is not empty:",                       # 3
    "        node ← pq.extract_min()",                 # 4
    "        if node visited: continue   # stale",     # 5
    "        if dist[node] = ∞: return NO PATH",       # 6
    "        mark node visited",                       # 7
    "        if node == end: return path",             # 8
    "        for nbr in neighbours(node):",            # 9
    "            if nbr visited or wall: continue",    # 10
    "            alt ← dist[node] + 1",                # 11
    "            if alt < dist[nbr]:",                 # 12
    "                dist[nbr] ← alt; prev[nbr] ← node",  # 13
    "                pq.insert(nbr)",                  # 14
    "    return NO PATH",                              # 15
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def dijkstra(grid: Grid) -> Generator[Event, None, bool]:
    end = grid.end
    pq: PriorityQueue = PriorityQueue(key=lambda n: n.distance)
    for node in grid:
        pq.insert(node)

    while pq:
        dist, current = pq.extract_min()

        # stale entry
        if current.is_visited:
            continue

        if math.isinf(dist):
            return False

        current.is_visited = True
        yield visited(
            current,
            pseudocode_line=7,
            explanation=(
                f"Extract ({current.row}, {current.col}) with distance {dist:g}: "
                f"the smallest in the queue, so its distance is now final."
            ),
        )

        if current is end:
            return True

        for nbr in grid.neighbors(current):
            if nbr.is_visited or nbr.is_obstacle:
                continue
            alt = current.distance + 1
            if alt < nbr.distance:
                nbr.distance = alt
                nbr.previous = current.coord
                pq.insert(nbr)

    return False
