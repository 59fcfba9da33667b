"""Unit tests for the binary min-heap priority queue."""

import random

import pytest

from errors import EmptyQueueError
from algorithms.pqueue import PriorityQueue


class Item:
    def __init__(self, name, priority):
        self.name = name
        self.priority = priority


def by_priority():
    return PriorityQueue(key=lambda item: item.priority)


class TestOrdering:
    """extract_min() returns entries in priority order."""

    def test_sorted_output(self):
        values = list(range(50))
        random.Random(3).shuffle(values)
        pq = PriorityQueue(key=lambda v: v)
        for v in values:
            pq.insert(v)
        assert [pq.extract_min()[1] for _ in range(len(values))] == sorted(values)

    def test_returns_priority_and_item(self):
        pq = by_priority()
        a = Item("a", 4)
        pq.insert(a)
        assert pq.extract_min() == (4, a)

    def test_infinity_sorts_last(self):
        pq = PriorityQueue(key=lambda v: v)
        for v in (float("inf"), 3, 0):
            pq.insert(v)
        assert [pq.extract_min()[0] for _ in range(3)] == [0, 3, float("inf")]

    def test_tuple_priorities(self):
        """A* keys on (f, order); ties on f fall back to order."""
        pq = PriorityQueue(key=lambda t: t)
        for t in [(8, 3), (8, 1), (6, 9), (8, 2)]:
            pq.insert(t)
        assert [pq.extract_min()[1] for _ in range(4)] == [(6, 9), (8, 1), (8, 2), (8, 3)]

    def test_ties_follow_heap_position(self):
        """Equal priorities are not popped in insertion order."""
        pq = by_priority()
        items = [Item(name, 0) for name in "abcd"]
        for item in items:
            pq.insert(item)
        assert [pq.extract_min()[1].name for _ in range(4)] == ["a", "d", "c", "b"]


class TestLazyDeletion:
    """Decrease-key by re-insertion."""

    def test_priority_captured_at_insert(self):
        pq = by_priority()
        a = Item("a", 10)
        pq.insert(a)
        a.priority = 1
        assert pq.extract_min()[0] == 10

    def test_duplicate_entries_coexist(self):
        pq = by_priority()
        a = Item("a", 10)
        pq.insert(a)
        a.priority = 2
        pq.insert(a)
        assert len(pq) == 2
        assert pq.extract_min() == (2, a)
        assert pq.extract_min() == (10, a)


class TestEmpty:
    """Misuse on an empty queue."""

    def test_extract_from_empty(self):
        with pytest.raises(EmptyQueueError):
            by_priority().extract_min()

    def test_peek_empty(self):
        with pytest.raises(EmptyQueueError):
            by_priority().peek()

    def test_empty_queue_error_is_index_error(self):
        with pytest.raises(IndexError):
            by_priority().extract_min()

    def test_truthiness_and_len(self):
        pq = by_priority()
        assert not pq and len(pq) == 0
        pq.insert(Item("a", 1))
        assert pq and len(pq) == 1
        assert pq.peek()[0] == 1
        assert len(pq.snapshot()) == 1
