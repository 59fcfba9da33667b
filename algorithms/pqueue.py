"""
pqueue.py — Binary Min-Heap Priority Queue
===========================================
Array-backed binary heap used by Dijkstra (keyed on distance) and A*
(keyed on f-score).

    pq = PriorityQueue(key=lambda node: node.distance)
    pq.insert(node)
    priority, node = pq.extract_min()

Design decisions:
  - The priority is computed by `key(item)` ONCE, at insertion, and
    stored next to the item.  Later mutation of the item never breaks
    the heap property.
  - No decrease-key.  When a consumer finds a better priority for an
    item that is already queued it simply inserts it again; the older
    entry stays in the heap and the consumer must recognise it as stale
    when it is popped (Dijkstra checks is_visited, A* checks the closed
    set).  That costs at most one extra entry per relaxation.
  - Ties are broken by heap position, not insertion order: sift-up
    stops at a parent that is not strictly greater, sift-down prefers
    the left child unless the right one is strictly smaller.
"""

from typing import Any, Callable, Generic, List, Tuple, TypeVar

from errors import EmptyQueueError


T = TypeVar("T")


class PriorityQueue(Generic[T]):

    def __init__(self, key: Callable[[T], Any]):
        self._key = key
        self._heap: List[Tuple[Any, T]] = []

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def insert(self, item: T) -> None:
        self._heap.append((self._key(item), item))
        self._sift_up(len(self._heap) - 1)

    def extract_min(self) -> Tuple[Any, T]:
        """Remove and return (priority, item) with the smallest priority."""
        if not self._heap:
            raise EmptyQueueError()
        root = self._heap[0]
        last = self._heap.pop()
        if self._heap:
            self._heap[0] = last
            self._sift_down(0)
        return root

    def peek(self) -> Tuple[Any, T]:
        if not self._heap:
            raise EmptyQueueError()
        return self._heap[0]

    def snapshot(self) -> List[Tuple[Any, T]]:
        """Entries in heap-array order (for overlays / debugging)."""
        return list(self._heap)

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    # ------------------------------------------------------------------
    # Heap maintenance
    # ------------------------------------------------------------------
    def _sift_up(self, index: int) -> None:
        heap = self._heap
        entry = heap[index]
        while index > 0:
            parent_index = (index - 1) // 2
            parent = heap[parent_index]
            if not entry[0] < parent[0]:
                break
            heap[index] = parent
            index = parent_index
        heap[index] = entry

    def _sift_down(self, index: int) -> None:
        heap = self._heap
        end = len(heap)
        entry = heap[index]
        while True:
            child_index = 2 * index + 1
            if child_index >= end:
                break
            child = heap[child_index]
            right_index = child_index + 1
            if right_index < end and heap[right_index][0] < child[0]:
                child_index = right_index
                child = heap[right_index]
            if not child[0] < entry[0]:
                break
            heap[index] = child
            index = child_index
        heap[index] = entry
