import random
from collections import Counter

import pytest

from xinukit.qsort import qsort


def ascending(a, b):
    return (a > b) - (a < b)


def descending(a, b):
    return ascending(b, a)


@pytest.mark.parametrize(
    "values",
    [
        [],
        [1],
        [2, 1],
        [1, 2],
        [3, 3, 3],
        [5, 4, 3, 2, 1],
        [1, 2, 3, 4, 5],
        [2, 1, 2, 1, 2, 1],
        [9, -3, 0, 7, 7, -3, 12, 0],
    ],
)
def test_sorts_small_lists(values):
    items = list(values)
    qsort(items, ascending)
    assert items == sorted(values)


@pytest.mark.parametrize("seed", range(10))
def test_sorts_random_lists(seed):
    rng = random.Random(seed)
    values = [rng.randint(-50, 50) for _ in range(rng.randint(0, 300))]
    items = list(values)
    qsort(items, ascending)
    assert items == sorted(values)


def test_descending_comparator():
    rng = random.Random(99)
    values = [rng.random() for _ in range(200)]
    items = list(values)
    qsort(items, descending)
    assert items == sorted(values, reverse=True)


def test_sort_by_key_keeps_elements():
    rng = random.Random(3)
    records = [(rng.randint(0, 5), name) for name in "abcdefghijklmnop"]
    items = list(records)
    qsort(items, lambda a, b: ascending(a[0], b[0]))
    assert [key for key, _ in items] == sorted(key for key, _ in records)
    assert Counter(items) == Counter(records)


def test_immutable_sequence_is_rejected():
    with pytest.raises(TypeError):
        qsort((3, 1, 2), ascending)