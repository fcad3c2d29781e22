"""Bounded top-K selection with a deterministic tie-break.

Entries are ranked by value, highest first. When two entries share a value the
one whose key sorts first alphabetically ranks higher, so the retained set only
depends on which pairs were pushed and never on the order they arrived in.
"""

from __future__ import annotations

import heapq
from dataclasses import dataclass
from typing import Any, Callable, Iterable, MutableMapping


@dataclass(frozen=True)
class _HeapEntry:
    key: Any
    value: Any

    def __lt__(self, other: "_HeapEntry") -> bool:
        # Heap order is "worse first": lower value, then later key.
        if self.value != other.value:
            return self.value < other.value
        return self.key > other.key


class CappedTopK:
    """Keeps the ``capacity`` best ``(key, value)`` pairs seen so far."""

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise ValueError(f"capacity must be non-negative, got {capacity}")
        self.capacity = capacity
        self._heap: list[_HeapEntry] = []

    def __len__(self) -> int:
        return len(self._heap)

    def push(self, key: Any, value: Any) -> None:
        """Insert a pair, evicting the current minimum when the heap is full."""

        if self.capacity == 0:
            return
        entry = _HeapEntry(key, value)
        if len(self._heap) < self.capacity:
            heapq.heappush(self._heap, entry)
            return
        if self._heap[0] < entry:
            heapq.heapreplace(self._heap, entry)

    def extend(self, pairs: Iterable[tuple[Any, Any]]) -> None:
        """Push each ``(key, value)`` pair in turn."""

        for key, value in pairs:
            self.push(key, value)

    def merge(self, other: "CappedTopK") -> None:
        """Absorb every entry held by ``other``, leaving it empty."""

        self.extend(other.drain())

    def drain(self) -> list[tuple[Any, Any]]:
        pairs = [(entry.key, entry.value) for entry in self._heap]
        self._heap = []
        return pairs

    def ranked(self) -> list[tuple[Any, Any]]:
        """Retained pairs, best first, without emptying the selector."""

        ordered = sorted(self._heap, reverse=True)
        return [(entry.key, entry.value) for entry in ordered]


def _identity(value: Any) -> Any:
    return value


def retain_top_elements(
    elements: MutableMapping[Any, Any],
    top_count: int,
    value: Callable[[Any], Any] = _identity,
) -> None:
    """Keep only the ``top_count`` best entries of ``elements``, in place.

    ``value`` maps each stored item to the number it is ranked by. Surviving
    entries are re-inserted best first, so iteration order follows the ranking.
    Maps with fewer than ``top_count`` entries keep all of them.
    """

    selector = CappedTopK(top_count)
    for key, item in elements.items():
        selector.push(key, value(item))

    kept = {key: elements[key] for key, _ in selector.ranked()}
    elements.clear()
    elements.update(kept)
