"""
Pytest configuration and shared fixtures.

This file is automatically loaded by pytest and provides
fixtures available to all test files.
"""

import pytest

from grid import Grid
from engine import RunController


def drain(generator):
    """Exhaust a search / reconstruction generator; return (events, return value)."""
    events = []
    while True:
        try:
            events.append(next(generator))
        except StopIteration as stop:
            return events, stop.value


@pytest.fixture
def empty_grid() -> Grid:
    """A 5x5 grid with no obstacles."""
    return Grid(5, 5)


@pytest.fixture
def walled_grid() -> Grid:
    """5x5 grid with a wall down column 2 on rows 0-3 (row 4 open)."""
    return Grid.from_text([
        "S.#..",
        "..#..",
        "..#..",
        "..#..",
        "....E",
    ])


@pytest.fixture
def sealed_grid() -> Grid:
    """5x5 grid with a full wall down column 2: end is unreachable."""
    return Grid.from_text([
        "S.#..",
        "..#..",
        "..#..",
        "..#..",
        "..#.E",
    ])


@pytest.fixture
def controller(empty_grid: Grid) -> RunController:
    """Batch-mode controller over the empty 5x5 grid."""
    return RunController(empty_grid, speed="instant")


@pytest.fixture
def client():
    """Flask test client with a clean per-session controller table."""
    import main

    main.app.config["TESTING"] = True
    main._controllers.clear()
    with main.app.test_client() as c:
        yield c
    main._controllers.clear()
