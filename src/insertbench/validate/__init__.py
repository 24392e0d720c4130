"""
Validation utilities public API.

Re-exports:
    oracle_sort
    is_nondecreasing
    first_inversion_index
    is_permutation
    count_inversions
    is_stable
"""

from .properties import (
    count_inversions,
    first_inversion_index,
    is_nondecreasing,
    is_permutation,
    is_stable,
    oracle_sort,
)

__all__ = [
    "oracle_sort",
    "is_nondecreasing",
    "first_inversion_index",
    "is_permutation",
    "count_inversions",
    "is_stable",
]
