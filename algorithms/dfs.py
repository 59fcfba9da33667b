"""
dfs.py — Depth-First Search
=============================
Generator-based DFS using an explicit stack (no Python recursion limit
issues).  Yields a VISITED event for every node popped for the first
time and returns True when the end node is popped.

Neighbours are pushed in up/down/left/right order, so the LAST one
(right) is explored first.  A node's `previous` is written when it is
PUSHED, and a later push from another parent overwrites it even if the
earlier copy ends up being the one that is expanded.  The resulting
path is always valid (each link points at an already-expanded node)
but it is neither shortest nor "the" DFS tree path.
"""

from typing import Generator, List, Set

from grid import Grid, Coord
from algorithms.events import Event, visited


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def DFS(grid, start, end):",               # 0
    "    stack ← [start]",                      # 1
    "    seen ← {}",                            # 2
    "    while stack is not empty:",             # 3
    "        node ← stack.pop()",               # 4
    "        if node in seen: continue",        # 5
    "        seen.add(node)",                   # 6
    "        if node == end: return path",      # 7
    "        for nbr in neighbours(node):",     # 8
    "            if nbr not in seen and open:",  # 9
    "                prev[nbr] ← node",         # 10
    "                stack.push(nbr)",          # 11
    "    return NO PATH",                       # 12
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def dfs(grid: Grid) -> Generator[Event, None, bool]:
    end = grid.end
    stack = [grid.start]
    seen: Set[Coord] = set()

    while stack:
        current = stack.pop()

        # already expanded via another push
        if current.coord in seen:
            continue

        seen.add(current.coord)
        current.is_visited = True
        yield visited(
            current,
            pseudocode_line=6,
            explanation=(
                f"Pop ({current.row}, {current.col}) from the stack. "
                f"DFS explores its neighbours before returning here."
            ),
        )

        if current is end:
            return True

        for nbr in grid.neighbors(current):
            if nbr.coord in seen or nbr.is_obstacle:
                continue
            nbr.previous = current.coord
            stack.append(nbr)

    return False
