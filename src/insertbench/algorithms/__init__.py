"""
Sorting algorithms.

`InsertionSorter` is the instrumented entry point. `insertion_sort.sort(a, *, config=None)`
is a stateless wrapper for callers that do not need the tracker.
"""

from .insertion_sort import VARIANTS, InsertionSorter, InvalidArgumentError

__all__ = ["VARIANTS", "InsertionSorter", "InvalidArgumentError"]
