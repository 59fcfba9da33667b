"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every search the visualizer knows about.

    from algorithms import Algorithm, get_algorithm

The set of algorithms is closed: `Algorithm` is an enum, and REGISTRY
maps each member to an AlgoInfo card:

    {
        Algorithm.BFS: AlgoInfo(key, label, algorithm, fn, pseudocode, …),
        …
    }

Every `fn` has the same shape: a generator over a freshly reset Grid
that yields VISITED events and returns True if the end was reached.
The engine and UI both consume AlgoInfo, so adding an algorithm means
writing the generator and adding one entry here.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Dict, Union

from errors import UnknownAlgorithmError

# ---------------------------------------------------------------------------
# Import all algorithm modules
# ---------------------------------------------------------------------------
from algorithms.bfs      import bfs      as _bfs,      PSEUDOCODE as _bfs_pc
from algorithms.dfs      import dfs      as _dfs,      PSEUDOCODE as _dfs_pc
from algorithms.dijkstra import dijkstra as _dijkstra, PSEUDOCODE as _dij_pc
from algorithms.astar    import astar    as _astar,    PSEUDOCODE as _ast_pc


# ---------------------------------------------------------------------------
# Algorithm: the closed set of selectable searches
# ---------------------------------------------------------------------------
class Algorithm(Enum):
    DIJKSTRA = "Dijkstra"
    BFS      = "BFS"
    DFS      = "DFS"
    ASTAR    = "A*"

    @classmethod
    def parse(cls, selector: Union["Algorithm", str]) -> "Algorithm":
        """
        Accepts an Algorithm, its display name ("A*") or its registry
        key ("astar"), case-insensitively.
        """
        if isinstance(selector, cls):
            return selector
        if isinstance(selector, str):
            wanted = selector.strip().lower()
            for algo in cls:
                if wanted in (algo.value.lower(), algo.key):
                    return algo
        raise UnknownAlgorithmError(selector)

    @property
    def key(self) -> str:
        return self.name.lower()


# ---------------------------------------------------------------------------
# AlgoInfo: metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:                 str                   # registry key, e.g. "bfs"
    label:               str                   # human label, e.g. "Breadth-First Search"
    algorithm:           Algorithm
    fn:                  Callable              # the generator function
    pseudocode:          List[str]             # lines for the side-panel
    tags:                List[str] = field(default_factory=list)
    guarantees_shortest: bool      = True
    complexity_time:     str       = ""
    complexity_space:    str       = ""
    description:         str       = ""        # one-liner for the UI card


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[Algorithm, AlgoInfo] = {

    Algorithm.DIJKSTRA: AlgoInfo(
        key="dijkstra", label="Dijkstra's Algorithm", algorithm=Algorithm.DIJKSTRA,
        fn=_dijkstra, pseudocode=_dij_pc,
        tags=["shortest-path", "priority-queue"],
        complexity_time="O(V log V)", complexity_space="O(V)",
        description="Greedily finalises the closest cell. Optimal for non-negative costs.",
    ),

    Algorithm.BFS: AlgoInfo(
        key="bfs", label="Breadth-First Search", algorithm=Algorithm.BFS,
        fn=_bfs, pseudocode=_bfs_pc,
        tags=["shortest-path", "traversal"],
        complexity_time="O(V)", complexity_space="O(V)",
        description="Explores layer by layer. Finds the shortest path by step count.",
    ),

    Algorithm.DFS: AlgoInfo(
        key="dfs", label="Depth-First Search", algorithm=Algorithm.DFS,
        fn=_dfs, pseudocode=_dfs_pc,
        tags=["traversal"],
        guarantees_shortest=False,
        complexity_time="O(V)", complexity_space="O(V)",
        description="Dives deep before backtracking. Does NOT guarantee the shortest path.",
    ),

    Algorithm.ASTAR: AlgoInfo(
        key="astar", label="A* Search", algorithm=Algorithm.ASTAR,
        fn=_astar, pseudocode=_ast_pc,
        tags=["shortest-path", "heuristic", "priority-queue"],
        complexity_time="O(V log V)", complexity_space="O(V)",
        description="Dijkstra steered by Manhattan distance. Optimal and usually visits fewer cells.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(selector: Union[Algorithm, str]) -> AlgoInfo:
    """Return AlgoInfo for an Algorithm / name / key.  Raises UnknownAlgorithmError."""
    return REGISTRY[Algorithm.parse(selector)]


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


def algorithms_by_tag(tag: str) -> List[AlgoInfo]:
    """Filter registry by tag."""
    return [a for a in REGISTRY.values() if tag in a.tags]


__all__ = [
    "Algorithm",
    "AlgoInfo",
    "REGISTRY",
    "get_algorithm",
    "list_algorithms",
    "algorithms_by_tag",
]
