"""
grid.py — Grid Container
=========================
Single source of truth for the board.  Algorithms, the run controller
and the renderer all talk to this object.

Responsibilities:
  1. Own every Node                          (configure / node / iteration)
  2. Adjacency queries                       (neighbors, in fixed order)
  3. Bulk reset between runs                 (reset, keep or clear walls)
  4. Obstacle editing                        (toggle, random scatter)
  5. Snapshot & serialisation                (snapshot / to_dict / from_text)

Design decisions:
  - Nodes live in a flat row-major list addressed by (row, col), so a
    Node's `previous` is just a coordinate and nothing outside the grid
    ever holds on to a Node across a reconfiguration.
  - neighbors() always returns up, down, left, right (in-bounds only).
    DFS exploration order and BFS tie-breaks depend on this order.
  - `locked` is flipped by the run controller while a run is active;
    obstacle edits are ignored while it is set.
"""

import random
from typing import Dict, Iterator, List, Optional, Sequence, Tuple, Any

from config import DEFAULT_ROWS, DEFAULT_COLS, MIN_GRID_SIDE
from errors import InvalidSizeError
from grid.node import Node, NodeState, Coord


# up, down, left, right
DIRECTIONS: Tuple[Coord, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))

OBSTACLE_CHAR = "#"
OPEN_CHARS = ".SE"


class Grid:
    """
    Attributes:
        rows, cols : Dimensions (both >= 2).
        locked     : True while a run owns the grid.
        _nodes     : Row-major list of Node, length rows * cols.
    """

    def __init__(self, rows: int = DEFAULT_ROWS, cols: int = DEFAULT_COLS):
        self.rows:   int        = 0
        self.cols:   int        = 0
        self.locked: bool       = False
        self._nodes: List[Node] = []
        self.configure(rows, cols)

    # ==================================================================
    # CONFIGURATION
    # ==================================================================
    def configure(self, rows: int, cols: int) -> None:
        """Discard every node and rebuild a rows x cols grid."""
        if not _valid_side(rows) or not _valid_side(cols):
            raise InvalidSizeError(rows, cols)

        self.rows   = rows
        self.cols   = cols
        self._nodes = [Node(r, c) for r in range(rows) for c in range(cols)]
        self.start.distance = 0

    @property
    def start(self) -> Node:
        return self._nodes[0]

    @property
    def end(self) -> Node:
        return self._nodes[-1]

    def is_start(self, node: Node) -> bool:
        return node.coord == (0, 0)

    def is_end(self, node: Node) -> bool:
        return node.coord == (self.rows - 1, self.cols - 1)

    # ==================================================================
    # LOOKUP
    # ==================================================================
    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def node(self, row: int, col: int) -> Node:
        if not self.in_bounds(row, col):
            raise IndexError(f"Cell ({row}, {col}) is outside a {self.rows}x{self.cols} grid")
        return self._nodes[row * self.cols + col]

    def at(self, coord: Coord) -> Node:
        return self.node(coord[0], coord[1])

    def rows_of_nodes(self) -> List[List[Node]]:
        return [self._nodes[r * self.cols:(r + 1) * self.cols] for r in range(self.rows)]

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    # ==================================================================
    # ADJACENCY
    # ==================================================================
    def neighbors(self, node: Node) -> List[Node]:
        """Orthogonal in-bounds neighbours, always in up/down/left/right order."""
        result = []
        for dr, dc in DIRECTIONS:
            r, c = node.row + dr, node.col + dc
            if self.in_bounds(r, c):
                result.append(self._nodes[r * self.cols + c])
        return result

    # ==================================================================
    # RESET
    # ==================================================================
    def reset(self, keep_obstacles: bool = True) -> None:
        for node in self._nodes:
            node.reset(keep_obstacles=keep_obstacles)
        self.start.distance = 0

    # ==================================================================
    # OBSTACLES
    # ==================================================================
    def toggle_obstacle(self, row: int, col: int) -> bool:
        """
        Flip the obstacle flag.  Silently ignored (returns False) for the
        start / end cells and while a run is active.
        """
        node = self.node(row, col)
        if self.locked or self.is_start(node) or self.is_end(node):
            return False
        node.toggle_obstacle()
        return True

    def set_obstacle(self, row: int, col: int, blocked: bool = True) -> bool:
        node = self.node(row, col)
        if node.is_obstacle == blocked:
            return False
        return self.toggle_obstacle(row, col)

    def obstacles(self) -> List[Coord]:
        return [n.coord for n in self._nodes if n.is_obstacle]

    def scatter_obstacles(self, probability: float, seed: Optional[int] = None) -> int:
        """Randomly wall off cells (never start / end).  Returns how many were placed."""
        if not 0.0 <= probability <= 1.0:
            raise ValueError(f"Wall probability must be within [0, 1], got {probability}")
        if self.locked:
            return 0

        rng = random.Random(seed)
        placed = 0
        for node in self._nodes:
            if self.is_start(node) or self.is_end(node):
                continue
            blocked = rng.random() < probability
            node.is_obstacle = blocked
            placed += blocked
        return placed

    # ==================================================================
    # PATHS
    # ==================================================================
    def path_to(self, coord: Coord) -> List[Coord]:
        """Follow `previous` links back from `coord`; return them root-first."""
        path: List[Coord] = []
        seen = set()
        cur: Optional[Coord] = coord
        while cur is not None:
            if cur in seen:
                raise RuntimeError(f"Cycle in predecessor links at {cur}")
            seen.add(cur)
            path.append(cur)
            cur = self.at(cur).previous
        path.reverse()
        return path

    # ==================================================================
    # SNAPSHOT / SERIALISATION
    # ==================================================================
    def snapshot(self) -> Dict[str, Any]:
        """Everything a renderer needs to paint before the first event."""
        return {
            "rows":      self.rows,
            "cols":      self.cols,
            "start":     list(self.start.coord),
            "end":       list(self.end.coord),
            "obstacles": [list(c) for c in self.obstacles()],
        }

    def display_state(self, node: Node) -> NodeState:
        return node.display_state(is_start=self.is_start(node), is_end=self.is_end(node))

    def to_dict(self) -> Dict[str, Any]:
        data = self.snapshot()
        data["nodes"] = [n.to_dict() for n in self._nodes]
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Grid":
        g = cls(data["rows"], data["cols"])
        for r, c in data.get("obstacles", []):
            g.set_obstacle(r, c, True)
        return g

    @classmethod
    def from_text(cls, lines: Sequence[str]) -> "Grid":
        """
        Build a grid from an ASCII layout, one string per row:

            S..#.
            ..##.
            ....E

        `#` is an obstacle; `.`, `S` and `E` are open.  Start and end are
        always the top-left / bottom-right corners.
        """
        rows = [line.strip() for line in lines if line.strip()]
        if not rows:
            raise InvalidSizeError(0, 0)
        width = len(rows[0])
        if any(len(r) != width for r in rows):
            raise ValueError("Ragged grid layout: every row must have the same width")

        g = cls(len(rows), width)
        for r, line in enumerate(rows):
            for c, ch in enumerate(line):
                if ch == OBSTACLE_CHAR:
                    g.set_obstacle(r, c, True)
                elif ch not in OPEN_CHARS:
                    raise ValueError(f"Unexpected character {ch!r} at ({r}, {c})")
        return g

    def to_text(self) -> List[str]:
        out = []
        for row in self.rows_of_nodes():
            chars = []
            for n in row:
                if self.is_start(n):
                    chars.append("S")
                elif self.is_end(n):
                    chars.append("E")
                else:
                    chars.append(OBSTACLE_CHAR if n.is_obstacle else ".")
            out.append("".join(chars))
        return out

    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Grid({self.rows}x{self.cols}, obstacles={len(self.obstacles())}, locked={self.locked})"


def _valid_side(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= MIN_GRID_SIDE
