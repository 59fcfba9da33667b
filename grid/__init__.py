"""
grid/
-----
Core data layer.  Public API:

    from grid import Grid, Node, NodeState
"""

from grid.node import Node, NodeState, Coord
from grid.grid import Grid, DIRECTIONS

__all__ = [
    "Node",      "NodeState",
    "Coord",
    "Grid",      "DIRECTIONS",
]
