"""
Property helpers for validating sorting results.

Used by the tests and by the benchmark runner to verify every measured run.

Public API (stable):
    oracle_sort(a: Sequence[int]) -> list[int]
    is_nondecreasing(xs: Sequence[int]) -> bool
    first_inversion_index(xs: Sequence[int]) -> int | None
    is_permutation(a: Sequence[int], b: Sequence[int]) -> bool
    count_inversions(xs: Sequence[int]) -> int
    is_stable(before: Sequence, after: Sequence, tag=id) -> bool

Notes
-----
- Stability cannot be seen from plain int values. `is_stable` compares the
  order of a per-element tag among equal values; the default tag is the
  object identity, so callers tag duplicates with distinct int objects
  (e.g. an int subclass carrying an id).
"""

from __future__ import annotations

from collections import Counter, defaultdict
from typing import Any, Callable, Dict, List, Sequence

__all__ = [
    "oracle_sort",
    "is_nondecreasing",
    "first_inversion_index",
    "is_permutation",
    "count_inversions",
    "is_stable",
]


def oracle_sort(a: Sequence[int]) -> List[int]:
    """Ground truth: Python's built-in `sorted` (stable, never mutates `a`)."""
    return sorted(a)


def is_nondecreasing(xs: Sequence[int]) -> bool:
    """Return True iff xs[i] <= xs[i+1] for all i."""
    return first_inversion_index(xs) is None


def first_inversion_index(xs: Sequence[int]) -> int | None:
    """
    Return the first index i where xs[i] > xs[i+1], or None if nondecreasing.

        i = first_inversion_index(out)
        assert i is None, f"not sorted at i={i}: {out[i]} > {out[i+1]}"
    """
    for i in range(len(xs) - 1):
        if xs[i] > xs[i + 1]:
            return i
    return None


def is_permutation(a: Sequence[int], b: Sequence[int]) -> bool:
    """Return True iff `a` and `b` hold exactly the same multiset of values."""
    if len(a) != len(b):
        return False
    return Counter(a) == Counter(b)


def count_inversions(xs: Sequence[int]) -> int:
    """
    Number of pairs i < j with xs[i] > xs[j].

    This is exactly the number of element shifts the traditional insertion
    sort performs. Merge-sort based, O(n log n).
    """
    _, inv = _sort_count(list(xs))
    return inv


def _sort_count(xs: List[int]) -> tuple[List[int], int]:
    if len(xs) <= 1:
        return xs, 0
    mid = len(xs) // 2
    left, inv_l = _sort_count(xs[:mid])
    right, inv_r = _sort_count(xs[mid:])
    merged: List[int] = []
    inv = inv_l + inv_r
    i = j = 0
    while i < len(left) and j < len(right):
        if left[i] <= right[j]:
            merged.append(left[i])
            i += 1
        else:
            merged.append(right[j])
            inv += len(left) - i
            j += 1
    merged.extend(left[i:])
    merged.extend(right[j:])
    return merged, inv


def is_stable(
    before: Sequence[Any],
    after: Sequence[Any],
    tag: Callable[[Any], Any] = id,
) -> bool:
    """
    Return True iff, for every value, the tags of its occurrences appear in
    `after` in the same relative order as in `before`.
    """
    if len(before) != len(after):
        return False
    order_before: Dict[Any, List[Any]] = defaultdict(list)
    order_after: Dict[Any, List[Any]] = defaultdict(list)
    for x in before:
        order_before[x].append(tag(x))
    for x in after:
        order_after[x].append(tag(x))
    return order_before == order_after
