"""
astar.py — A* Search
=====================
Generator-based A* over the grid with the Manhattan heuristic.

    f(n) = g(n) + h(n)
    g(n) = node.distance           (steps from start, ∞ until discovered)
    h(n) = |Δrow| + |Δcol| to end  (admissible AND consistent on a
                                    4-connected unit-cost grid → optimal)

The open set is a min-heap keyed on (f, first-insertion order).  The
second component makes the heap pick exactly the node a linear scan
over an insertion-ordered open set would pick: the lowest f, and among
equal f the one that joined the open set first.  Improved f-scores are
re-inserted; superseded entries are skipped on pop.

The end node is detected when it is SELECTED from the open set, before
it is closed, so it never gets a VISITED event of its own.
"""

from typing import Generator, Dict, List, Set

from grid import Grid, Node, Coord
from algorithms.events import Event, visited
from algorithms.pqueue import PriorityQueue


# ---------------------------------------------------------------------------
# Heuristic
# ---------------------------------------------------------------------------
def manhattan(a: Node, b: Node) -> int:
    return a.manhattan(b)


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def AStar(grid, start, end):",                # 0
    "    g[start] ← 0;  f[start] ← h(start)",      # 1
    "    open ← {start};  closed ← {}",            # 2
    "    while open is not empty:",                 # 3
    "        node ← argmin f over open",           # 4
    "        if node == end: return path",         # 5
    "        open.remove(node); closed.add(node)",  # 6
    "        for nbr in neighbours(node):",        # 7
    "            if nbr in closed or wall: continue",  # 8
    "            g' ← g[node] + 1",                # 9
    "            if nbr not in open: open.add(nbr)",   # 10
    "            elif g' ≥ g[nbr]: continue",      # 11
    "            prev[nbr] ← node",                # 12
    "            g[nbr] ← g';  f[nbr] ← g' + h(nbr)",  # 13
    "    return NO PATH",                          # 14
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def astar(grid: Grid) -> Generator[Event, None, bool]:
    start, end = grid.start, grid.end

    f_score:  Dict[Coord, float] = {start.coord: start.distance + manhattan(start, end)}
    order:    Dict[Coord, int]   = {start.coord: 0}
    open_set: Set[Coord]         = {start.coord}
    closed:   Set[Coord]         = set()

    open_heap: PriorityQueue = PriorityQueue(
        key=lambda n: (f_score[n.coord], order[n.coord])
    )
    open_heap.insert(start)

    while open_heap:
        (f, _), current = open_heap.extract_min()

        # stale entry: already closed, or f improved after this push
        if current.coord in closed or f != f_score[current.coord]:
            continue

        if current is end:
            return True

        open_set.discard(current.coord)
        closed.add(current.coord)
        current.is_visited = True
        yield visited(
            current,
            pseudocode_line=6,
            explanation=(
                f"Close ({current.row}, {current.col}): g={current.distance:g}, "
                f"h={manhattan(current, end)}, f={f:g}, the lowest f in the open set."
            ),
        )

        for nbr in grid.neighbors(current):
            if nbr.coord in closed or nbr.is_obstacle:
                continue

            tentative_g = current.distance + 1
            if nbr.coord not in open_set:
                open_set.add(nbr.coord)
                order.setdefault(nbr.coord, len(order))
            elif tentative_g >= nbr.distance:
                continue

            nbr.previous = current.coord
            nbr.distance = tentative_g
            f_score[nbr.coord] = tentative_g + manhattan(nbr, end)
            open_heap.insert(nbr)

    return False
