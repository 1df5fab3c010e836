"""In-place quicksort driven by a three-way comparison function."""

from __future__ import annotations

from collections.abc import Callable, MutableSequence
from typing import Any, TypeVar

T = TypeVar("T")


def qsort(items: MutableSequence[T], cmp: Callable[[T, T], int]) -> None:
    """Sort ``items`` in place; ``cmp`` returns <0, 0 or >0.

    Elements equal to the pivot are gathered around it, and the smaller
    partition is sorted first.  The sort is not stable.
    """
    _sort_range(items, cmp, 0, len(items))


def _swap(items: MutableSequence[Any], i: int, j: int) -> None:
    items[i], items[j] = items[j], items[i]


def _rotate(items: MutableSequence[Any], i: int, j: int, k: int) -> None:
    """Move k to i, j to k and i to j."""
    items[i], items[k], items[j] = items[k], items[j], items[i]


def _sort_range(items, cmp, lo: int, hi: int) -> None:
    while hi - lo > 1:
        lp = hp = lo + (hi - lo) // 2
        i, j = lo, hi - 1
        while True:
            if i < lp:
                c = cmp(items[i], items[lp])
                if c == 0:
                    lp -= 1
                    _swap(items, i, lp)
                    continue
                if c < 0:
                    i += 1
                    continue

            exchanged = False
            while j > hp:
                c = cmp(items[hp], items[j])
                if c == 0:
                    hp += 1
                    _swap(items, hp, j)
                    continue
                if c > 0:
                    if i == lp:
                        hp += 1
                        _rotate(items, i, hp, j)
                        lp += 1
                        i = lp
                        continue
                    _swap(items, i, j)
                    j -= 1
                    i += 1
                    exchanged = True
                    break
                j -= 1
            if exchanged:
                continue

            if i == lp:
                break

            lp -= 1
            _rotate(items, j, lp, i)
            hp -= 1
            j = hp

        if lp - lo >= hi - hp:
            _sort_range(items, cmp, hp + 1, hi)
            hi = lp
        else:
            _sort_range(items, cmp, lo, lp)
            lo = hp + 1