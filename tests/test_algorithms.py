"""
Tests for the four search algorithms and path reconstruction.

Property checks run each algorithm on seeded random grids and compare
against a plain reference BFS written independently of the engine.
"""

import math
from collections import deque

import pytest

from errors import UnknownAlgorithmError
from grid import Grid
from algorithms import Algorithm, REGISTRY, get_algorithm, list_algorithms, algorithms_by_tag
from algorithms.events import EventKind
from algorithms.path import reconstruct_path
from algorithms.bfs import bfs
from algorithms.dfs import dfs
from algorithms.dijkstra import dijkstra
from algorithms.astar import astar

from tests.conftest import drain


ALL = [dijkstra, bfs, dfs, astar]
SHORTEST = [dijkstra, bfs, astar]


def search(grid, fn):
    grid.reset(keep_obstacles=True)
    return drain(fn(grid))


def visited_coords(events):
    return [e.coord for e in events if e.kind is EventKind.VISITED]


def found_path(grid):
    if grid.end.previous is None:
        return None
    return grid.path_to(grid.end.coord)


def reference_hops(grid):
    """Brute-force BFS over the obstacle layout only."""
    start, end = (0, 0), (grid.rows - 1, grid.cols - 1)
    dist = {start: 0}
    queue = deque([start])
    while queue:
        r, c = queue.popleft()
        for nr, nc in ((r - 1, c), (r + 1, c), (r, c - 1), (r, c + 1)):
            if (nr, nc) in dist or not grid.in_bounds(nr, nc):
                continue
            if grid.node(nr, nc).is_obstacle:
                continue
            dist[(nr, nc)] = dist[(r, c)] + 1
            queue.append((nr, nc))
    return dist.get(end)


def assert_valid_path(grid, path):
    assert path[0] == grid.start.coord
    assert path[-1] == grid.end.coord
    assert len(set(path)) == len(path)
    for (r1, c1), (r2, c2) in zip(path, path[1:]):
        assert abs(r1 - r2) + abs(c1 - c2) == 1
    assert not any(grid.at(c).is_obstacle for c in path)


def random_grid(seed, rows=7, cols=9, wall_prob=0.3):
    g = Grid(rows, cols)
    g.scatter_obstacles(wall_prob, seed=seed)
    return g


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------
class TestRegistry:
    """Algorithm selection is a closed enumeration."""

    @pytest.mark.parametrize("selector,expected", [
        ("Dijkstra", Algorithm.DIJKSTRA),
        ("dijkstra", Algorithm.DIJKSTRA),
        ("BFS", Algorithm.BFS),
        ("dfs", Algorithm.DFS),
        ("A*", Algorithm.ASTAR),
        ("astar", Algorithm.ASTAR),
        (Algorithm.BFS, Algorithm.BFS),
    ])
    def test_parse(self, selector, expected):
        assert Algorithm.parse(selector) is expected

    @pytest.mark.parametrize("selector", ["Bellman-Ford", "", None, 3])
    def test_unknown_selector(self, selector):
        with pytest.raises(UnknownAlgorithmError):
            get_algorithm(selector)

    def test_every_algorithm_registered(self):
        assert set(REGISTRY) == set(Algorithm)
        assert [a.key for a in list_algorithms()] == ["dijkstra", "bfs", "dfs", "astar"]

    def test_only_dfs_is_not_shortest(self):
        assert [a.key for a in list_algorithms() if not a.guarantees_shortest] == ["dfs"]

    def test_tags(self):
        assert {a.key for a in algorithms_by_tag("priority-queue")} == {"dijkstra", "astar"}

    def test_pseudocode_lines_exist(self):
        for info in list_algorithms():
            assert info.pseudocode
            assert info.pseudocode[0].startswith("def ")


# ---------------------------------------------------------------------------
# Dijkstra
# ---------------------------------------------------------------------------
class TestDijkstra:
    """Dijkstra with a lazy-deletion heap."""

    def test_open_5x5_visits_every_cell(self, empty_grid):
        """The far corner is the farthest cell, so everything is finalised first."""
        events, found = search(empty_grid, dijkstra)
        assert found is True
        assert len(events) == 25
        assert set(visited_coords(events)) == {n.coord for n in empty_grid}
        assert events[0].coord == (0, 0)
        assert events[-1].coord == (4, 4)

    def test_visit_distances_non_decreasing(self, walled_grid):
        events, _ = search(walled_grid, dijkstra)
        distances = [e.distance for e in events]
        assert distances == sorted(distances)

    def test_end_distance(self, walled_grid):
        search(walled_grid, dijkstra)
        assert walled_grid.end.distance == reference_hops(walled_grid)

    def test_no_path_stops_at_infinity(self, sealed_grid):
        """Only the start side of the wall is ever finalised."""
        events, found = search(sealed_grid, dijkstra)
        assert found is False
        assert sealed_grid.end.previous is None
        assert all(c < 2 for _, c in visited_coords(events))
        assert len(events) == 10


# ---------------------------------------------------------------------------
# BFS
# ---------------------------------------------------------------------------
class TestBFS:
    """Breadth-first search."""

    def test_visit_order_3x3(self):
        g = Grid(3, 3)
        events, found = search(g, bfs)
        assert found is True
        assert visited_coords(events) == [
            (0, 0), (1, 0), (0, 1), (2, 0), (1, 1), (0, 2), (2, 1), (1, 2), (2, 2),
        ]

    def test_tie_break_prefers_down_first(self):
        """Neighbour order up/down/left/right decides which shortest path wins."""
        g = Grid(3, 3)
        search(g, bfs)
        assert found_path(g) == [(0, 0), (1, 0), (2, 0), (2, 1), (2, 2)]

    def test_routes_through_gap(self, walled_grid):
        """With column 2 walled on rows 0-3 the path must use (4, 2)."""
        _, found = search(walled_grid, bfs)
        assert found is True
        path = found_path(walled_grid)
        assert (4, 2) in path
        assert len(path) - 1 == 8

    def test_distances_are_hop_counts(self, walled_grid):
        search(walled_grid, bfs)
        assert walled_grid.end.distance == reference_hops(walled_grid)
        assert walled_grid.node(4, 2).distance == 6


# ---------------------------------------------------------------------------
# DFS
# ---------------------------------------------------------------------------
class TestDFS:
    """Depth-first search with parent written at push time."""

    def test_visit_order_3x3(self):
        """Right is pushed last, so it is explored first."""
        g = Grid(3, 3)
        events, found = search(g, dfs)
        assert found is True
        assert visited_coords(events) == [
            (0, 0), (0, 1), (0, 2), (1, 2), (1, 1), (1, 0), (2, 0), (2, 1), (2, 2),
        ]

    def test_push_time_parent_overwrite(self):
        """
        (2, 2) is first pushed from (1, 2) and later re-pushed from (2, 1);
        the later push rewrites its parent.  The path is a valid snake, not
        the shortest route.
        """
        g = Grid(3, 3)
        search(g, dfs)
        assert g.end.previous == (2, 1)
        path = found_path(g)
        assert path == [(0, 0), (0, 1), (0, 2), (1, 2), (1, 1), (1, 0), (2, 0), (2, 1), (2, 2)]
        assert_valid_path(g, path)

    def test_open_grid_path_not_shortest(self, empty_grid):
        search(empty_grid, dfs)
        path = found_path(empty_grid)
        assert_valid_path(empty_grid, path)
        assert len(path) - 1 > 8

    def test_separate_seen_set_skips_duplicates(self, empty_grid):
        """A node pushed twice is only expanded once."""
        events, _ = search(empty_grid, dfs)
        coords = visited_coords(events)
        assert len(coords) == len(set(coords))


# ---------------------------------------------------------------------------
# A*
# ---------------------------------------------------------------------------
class TestAStar:
    """A* with the Manhattan heuristic."""

    def test_end_not_emitted_as_visited(self, empty_grid):
        events, found = search(empty_grid, astar)
        assert found is True
        assert (4, 4) not in visited_coords(events)
        assert not empty_grid.end.is_visited

    def test_optimal_through_gap(self, walled_grid):
        search(walled_grid, astar)
        path = found_path(walled_grid)
        assert len(path) - 1 == 8
        assert (4, 2) in path

    def test_first_insertion_breaks_f_ties(self):
        """On an open grid every cell has f = 8; ties resolve in discovery order."""
        g = Grid(3, 3)
        events, _ = search(g, astar)
        assert visited_coords(events) == [
            (0, 0), (1, 0), (0, 1), (2, 0), (1, 1), (0, 2), (2, 1), (1, 2),
        ]

    def test_never_visits_more_than_dijkstra(self):
        g = Grid.from_text([
            "S.........",
            "..........",
            "..........",
            "..........",
            ".........E",
        ])
        astar_events, _ = search(g, astar)
        dijkstra_events, _ = search(g, dijkstra)
        assert len(astar_events) <= len(dijkstra_events)


# ---------------------------------------------------------------------------
# Properties across all algorithms
# ---------------------------------------------------------------------------
class TestProperties:
    """Shortest-path guarantees, validity and failure behaviour."""

    @pytest.mark.parametrize("seed", range(25))
    def test_dijkstra_bfs_match_reference(self, seed):
        g = random_grid(seed)
        expected = reference_hops(g)

        search(g, dijkstra)
        d_dist = g.end.distance
        search(g, bfs)
        b_dist = g.end.distance

        if expected is None:
            assert math.isinf(d_dist) and math.isinf(b_dist)
        else:
            assert d_dist == b_dist == expected

    @pytest.mark.parametrize("seed", range(25))
    def test_astar_is_optimal(self, seed):
        g = random_grid(seed)
        expected = reference_hops(g)
        _, found = search(g, astar)
        if expected is None:
            assert found is False
            assert g.end.previous is None
        else:
            assert found is True
            assert len(found_path(g)) - 1 == expected

    @pytest.mark.parametrize("seed", range(25))
    def test_dfs_finds_valid_path(self, seed):
        g = random_grid(seed)
        expected = reference_hops(g)
        _, found = search(g, dfs)
        assert found is (expected is not None)
        if found:
            assert_valid_path(g, found_path(g))

    @pytest.mark.parametrize("fn", SHORTEST)
    @pytest.mark.parametrize("rows,cols", [(2, 2), (5, 5), (4, 9), (12, 3)])
    def test_open_grid_manhattan(self, fn, rows, cols):
        g = Grid(rows, cols)
        _, found = search(g, fn)
        assert found is True
        assert len(found_path(g)) - 1 == (rows - 1) + (cols - 1)

    @pytest.mark.parametrize("fn", ALL)
    def test_full_wall_means_no_path(self, fn, sealed_grid):
        _, found = search(sealed_grid, fn)
        assert found is False
        assert sealed_grid.end.previous is None

    @pytest.mark.parametrize("fn", ALL)
    def test_full_row_wall_means_no_path(self, fn):
        g = Grid.from_text([
            "S....",
            ".....",
            "#####",
            "....E",
        ])
        _, found = search(g, fn)
        assert found is False

    @pytest.mark.parametrize("fn", ALL)
    def test_obstacles_never_visited(self, fn, walled_grid):
        events, _ = search(walled_grid, fn)
        assert not any(walled_grid.at(c).is_obstacle for c in visited_coords(events))

    @pytest.mark.parametrize("fn", ALL)
    def test_visited_event_per_visited_flag(self, fn, walled_grid):
        """Every VISITED event refers to a node whose is_visited flag is set."""
        events, _ = search(walled_grid, fn)
        assert all(walled_grid.at(c).is_visited for c in visited_coords(events))


# ---------------------------------------------------------------------------
# Path reconstruction
# ---------------------------------------------------------------------------
class TestReconstruction:
    """Walking previous links into PATH_STEP events."""

    def test_no_path_emits_nothing(self, sealed_grid):
        search(sealed_grid, bfs)
        events, found = drain(reconstruct_path(sealed_grid))
        assert events == []
        assert found is False

    def test_path_steps_in_source_to_goal_order(self):
        g = Grid(3, 3)
        search(g, bfs)
        events, found = drain(reconstruct_path(g))
        assert found is True
        assert [e.kind for e in events] == [EventKind.PATH_STEP] * 5
        assert [e.coord for e in events] == [(0, 0), (1, 0), (2, 0), (2, 1), (2, 2)]
        assert [e.distance for e in events] == [0, 1, 2, 3, 4]

    def test_marks_is_path(self, walled_grid):
        search(walled_grid, dijkstra)
        events, _ = drain(reconstruct_path(walled_grid))
        on_path = {n.coord for n in walled_grid if n.is_path}
        assert on_path == {e.coord for e in events}
        assert len(events) == 9

    def test_is_path_set_incrementally(self, empty_grid):
        """Each node is flagged just before its event is yielded."""
        search(empty_grid, bfs)
        gen = reconstruct_path(empty_grid)
        first = next(gen)
        assert empty_grid.at(first.coord).is_path
        assert sum(n.is_path for n in empty_grid) == 1
        gen.close()
