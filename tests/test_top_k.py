"""Unit tests for :mod:`death_stats.top_k`."""

from __future__ import annotations

import itertools
import random
import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from death_stats.top_k import CappedTopK, retain_top_elements


def test_push_keeps_largest_values() -> None:
    selector = CappedTopK(3)
    for key, value in [(1, 1), (2, 2), (3, 3), (4, 4), (5, 5)]:
        selector.push(key, value)

    assert sorted(selector.drain()) == [(3, 3), (4, 4), (5, 5)]


def test_zero_capacity_keeps_nothing() -> None:
    selector = CappedTopK(0)
    selector.push("a", 10)

    assert len(selector) == 0
    assert selector.drain() == []


def test_fewer_entries_than_capacity_are_all_kept() -> None:
    selector = CappedTopK(3)
    selector.push("a", 1)
    selector.push("b", 2)

    assert sorted(selector.drain()) == [("a", 1), ("b", 2)]


def test_negative_capacity_is_rejected() -> None:
    with pytest.raises(ValueError):
        CappedTopK(-1)


def test_drain_empties_selector() -> None:
    selector = CappedTopK(2)
    selector.push("a", 1)

    assert selector.drain() == [("a", 1)]
    assert len(selector) == 0
    assert selector.drain() == []


def test_push_does_not_evict_on_smaller_value() -> None:
    selector = CappedTopK(2)
    selector.push("a", 5)
    selector.push("b", 4)
    selector.push("c", 1)

    assert selector.ranked() == [("a", 5), ("b", 4)]


@pytest.mark.parametrize("order", list(itertools.permutations(["a", "b", "c", "d"])))
def test_ties_keep_alphabetically_first_keys(order: tuple[str, ...]) -> None:
    """Equal values are resolved by key, whatever the push order."""

    selector = CappedTopK(2)
    for key in order:
        selector.push(key, 7)

    assert selector.ranked() == [("a", 7), ("b", 7)]


def test_ranked_orders_by_value_then_key() -> None:
    selector = CappedTopK(4)
    for key, value in [("d", 1), ("b", 3), ("c", 3), ("a", 1)]:
        selector.push(key, value)

    assert selector.ranked() == [("b", 3), ("c", 3), ("a", 1), ("d", 1)]


@pytest.mark.parametrize("capacity", [0, 1, 3, 10])
@pytest.mark.parametrize("count", [0, 1, 5, 12])
def test_selector_keeps_exactly_top_k(capacity: int, count: int) -> None:
    rng = random.Random(count * 31 + capacity)
    values = rng.sample(range(1000), count)
    pairs = [(f"key-{index}", value) for index, value in enumerate(values)]

    selector = CappedTopK(capacity)
    for key, value in pairs:
        selector.push(key, value)

    expected = sorted(pairs, key=lambda pair: pair[1], reverse=True)[:capacity]
    assert sorted(selector.drain()) == sorted(expected)


def test_merge_matches_single_selector() -> None:
    pairs = [(f"p{index}", (index * 7) % 11) for index in range(20)]

    single = CappedTopK(5)
    single.extend(pairs)

    left, right = CappedTopK(5), CappedTopK(5)
    left.extend(pairs[::2])
    right.extend(pairs[1::2])
    left.merge(right)

    assert left.ranked() == single.ranked()
    assert len(right) == 0


def test_merge_is_order_independent() -> None:
    """Any grouping of partial selectors ends with the same retained set."""

    pairs = [(f"p{index}", index % 4) for index in range(12)]
    chunks = [pairs[0:4], pairs[4:8], pairs[8:12]]

    results = []
    for permutation in itertools.permutations(range(3)):
        selectors = []
        for chunk_index in permutation:
            selector = CappedTopK(5)
            selector.extend(chunks[chunk_index])
            selectors.append(selector)
        first, second, third = selectors
        second.merge(third)
        first.merge(second)
        results.append(first.ranked())

    assert all(result == results[0] for result in results)
    assert results[0] == [("p11", 3), ("p3", 3), ("p7", 3), ("p10", 2), ("p2", 2)]


def test_retain_top_elements() -> None:
    elements = {1: 1, 2: 2, 3: 3, 4: 4, 5: 5}

    retain_top_elements(elements, 3)

    assert elements == {3: 3, 4: 4, 5: 5}
    assert list(elements) == [5, 4, 3]


def test_retain_empty_map() -> None:
    elements: dict[str, int] = {}

    retain_top_elements(elements, 3)

    assert elements == {}


def test_retain_less_elements_than_capacity() -> None:
    elements = {1: 1, 2: 2}

    retain_top_elements(elements, 3)

    assert elements == {1: 1, 2: 2}


def test_retain_with_value_function() -> None:
    elements = {"x": {"score": 1}, "y": {"score": 9}, "z": {"score": 5}}

    retain_top_elements(elements, 2, value=lambda item: item["score"])

    assert list(elements) == ["y", "z"]
