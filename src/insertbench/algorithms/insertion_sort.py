"""
Instrumented insertion sort.

Two variants share one `MetricsTracker`:

- `InsertionSorter.sort` (optimized):
    1. O(n) pre-scan; an input that is already nondecreasing is returned as is.
    2. Otherwise, for each i the insertion index of a[i] inside the sorted
       prefix a[0:i] is found by binary search. Equal keys send the search
       to the right, so the new element lands after its equal run (stable).
    3. The block a[idx:i] moves one slot right in a single bulk shift and the
       key is written at idx. Bulk shifts are not counted as swaps.

- `InsertionSorter.traditional_sort`:
    Classic linear-shift insertion sort; one swap is counted per shifted element.

Complexity:
    optimized:   Theta(n) best, Theta(n log n) comparisons, Theta(n^2) moves worst
    traditional: Theta(n) best, Theta(n^2) average/worst
    Both use O(1) extra space beyond the output list.

Public API (stable):
    InsertionSorter
    InvalidArgumentError
    sort(a: list[int], *, config: dict | None) -> list[int]

Conventions:
- Inputs are never mutated; a new list is returned.
- `None` input raises InvalidArgumentError before the tracker is touched.
- Every call resets the tracker first, so after a call returns the tracker
  holds the metrics of exactly that call.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from insertbench.metrics import MetricsTracker

__all__ = ["InsertionSorter", "InvalidArgumentError", "VARIANTS", "sort"]

VARIANTS = ("optimized", "traditional")


class InvalidArgumentError(ValueError):
    """Raised when a sort is called without an input sequence."""


class InsertionSorter:
    """
    Insertion sort that records its work into a `MetricsTracker`.

    A sorter owns one tracker. Sequential calls are safe because each call
    resets the tracker; concurrent calls on the same instance are not
    supported and need external locking.
    """

    def __init__(self, tracker: Optional[MetricsTracker] = None) -> None:
        self._tracker = tracker if tracker is not None else MetricsTracker()

    @property
    def tracker(self) -> MetricsTracker:
        return self._tracker

    # ------------------------- public sorts ------------------------- #

    def sort(self, a: Optional[Sequence[int]]) -> List[int]:
        """
        Return a sorted copy of `a` using binary insertion sort.

        Raises
        ------
        InvalidArgumentError
            If `a` is None.
        """
        buf = self._begin(a)
        if len(buf) > 1 and not self._is_already_sorted(buf):
            self._binary_insertion_sort(buf)
        self._tracker.stop_timer()
        return buf

    def traditional_sort(self, a: Optional[Sequence[int]]) -> List[int]:
        """Return a sorted copy of `a` using the classic element-by-element shift."""
        buf = self._begin(a)
        if len(buf) > 1:
            self._linear_insertion_sort(buf)
        self._tracker.stop_timer()
        return buf

    # ------------------------- internals ------------------------- #

    def _begin(self, a: Optional[Sequence[int]]) -> List[int]:
        if a is None:
            raise InvalidArgumentError("Input array cannot be None")
        self._tracker.reset()
        self._tracker.start_timer()
        return list(a)

    def _is_already_sorted(self, buf: List[int]) -> bool:
        t = self._tracker
        for i in range(1, len(buf)):
            t.record_array_access(2)  # buf[i-1], buf[i]
            t.record_comparison()
            if buf[i - 1] > buf[i]:
                return False
        return True

    def _binary_insertion_sort(self, buf: List[int]) -> None:
        t = self._tracker
        for i in range(1, len(buf)):
            key = buf[i]
            t.record_array_access()

            idx = self._find_insertion_index(buf, key, i)
            if idx == i:
                continue

            _shift_right(buf, idx, i)
            t.record_array_access(2 * (i - idx))
            buf[idx] = key
            t.record_array_access()

    def _find_insertion_index(self, buf: List[int], key: int, end: int) -> int:
        """
        Index in buf[0:end] (sorted) where `key` goes, after any equal elements.
        """
        t = self._tracker
        lo, hi = 0, end
        while lo < hi:
            mid = (lo + hi) // 2
            t.record_array_access()
            t.record_comparison()
            if buf[mid] > key:
                hi = mid
            else:
                lo = mid + 1
        return lo

    def _linear_insertion_sort(self, buf: List[int]) -> None:
        t = self._tracker
        for i in range(1, len(buf)):
            key = buf[i]
            t.record_array_access()

            j = i - 1
            while j >= 0 and buf[j] > key:
                t.record_comparison(2)  # j >= 0 and buf[j] > key
                buf[j + 1] = buf[j]
                t.record_array_access(2)
                t.record_swap()
                j -= 1
            t.record_comparison()  # the one that ends the loop

            buf[j + 1] = key
            t.record_array_access()


def _shift_right(buf: List[int], start: int, end: int) -> None:
    """Move buf[start:end] to buf[start+1:end+1]; buf[start] keeps its old value."""
    if not 0 <= start <= end < len(buf):
        raise IndexError(
            f"shift block [{start}, {end}) out of bounds for length {len(buf)}"
        )
    buf[start + 1 : end + 1] = buf[start:end]


# ------------------------- harness entry point ------------------------- #

def sort(a: Sequence[int], *, config: Optional[Dict[str, Any]] = None) -> List[int]:
    """
    Stateless convenience wrapper: sort with a fresh sorter.

    config["variant"] selects "optimized" (default) or "traditional".
    """
    variant = (config or {}).get("variant", "optimized")
    if variant not in VARIANTS:
        raise ValueError(f"Unknown insertion sort variant: {variant!r}. Supported: {list(VARIANTS)}")
    sorter = InsertionSorter()
    if variant == "traditional":
        return sorter.traditional_sort(a)
    return sorter.sort(a)
