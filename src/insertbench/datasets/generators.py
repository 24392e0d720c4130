"""
Dataset generators for insertion sort benchmarks.

Currently implemented:
- dist == "random":
    Integers drawn uniformly from an inclusive range (default [0, 10n - 1]).

- dist == "sorted":
    Best case for insertion sort: [0, 1, ..., n-1].

- dist == "reverse":
    Worst case: [n, n-1, ..., 1].

- dist == "nearly_sorted":
    Start from [0, 1, ..., n-1] then perform floor(swap_frac * n) random
    index swaps using the provided RNG (default swap_frac 0.1).

Public API (stable):
    make_dataset(n: int, spec: dict, rng: numpy.random.Generator) -> list[int]

Conventions:
- Returns a Python `list[int]` (the sorter stays NumPy-agnostic).
- "sorted" and "reverse" ignore params and RNG.
- The caller supplies the RNG; the harness seeds a fresh one per run so every
  distribution is reproducible on its own.
"""

from __future__ import annotations

from typing import Any, Dict, List, Tuple

import numpy as np

# Canonical order, also the order the benchmark matrix runs in.
SUPPORTED_DISTS = ("random", "sorted", "reverse", "nearly_sorted")
__all__ = ["SUPPORTED_DISTS", "make_dataset"]


def make_dataset(n: int, spec: Dict[str, Any], rng: np.random.Generator) -> List[int]:
    """
    Generate an integer dataset according to `spec`, using the provided RNG.

    Parameters
    ----------
    n : int
        Number of elements to generate. Must be >= 0.
    spec : dict
        Distribution specification, e.g.

            {"dist": "random", "params": {"range": [0, 999]}}     # inclusive
            {"dist": "nearly_sorted", "params": {"swap_frac": 0.1}}
            {"dist": "sorted"}
            {"dist": "reverse"}

    rng : numpy.random.Generator
        Random number generator owned by the caller (seeded upstream).

    Returns
    -------
    list[int]
        A list of length `n`.

    Raises
    ------
    ValueError
        If inputs are invalid or if the distribution is unsupported.
    """
    _validate_n(n)

    if not isinstance(spec, dict):
        raise ValueError("spec must be a dict")

    dist = spec.get("dist", None)
    if dist not in SUPPORTED_DISTS:
        raise ValueError(
            f"Unsupported dataset dist: {dist!r}. Supported: {list(SUPPORTED_DISTS)}"
        )

    params = spec.get("params") or {}
    if n == 0:
        return []

    if dist == "random":
        lo, hi = _parse_range(params, default=(0, 10 * n - 1))
        # Generator.integers is half-open [low, high); +1 makes hi inclusive.
        arr = rng.integers(lo, hi + 1, size=n, dtype=np.int64)
        return arr.tolist()

    if dist == "sorted":
        return list(range(n))

    if dist == "reverse":
        return list(range(n, 0, -1))

    # nearly_sorted
    swap_frac = _parse_swap_frac(params)
    arr = list(range(n))
    num_swaps = int(swap_frac * n)
    if num_swaps <= 0:
        return arr
    # Draw 2 * num_swaps indices in [0, n) and swap in pairs; i == j is a no-op.
    idxs = rng.integers(0, n, size=2 * num_swaps)
    for k in range(num_swaps):
        i = int(idxs[2 * k])
        j = int(idxs[2 * k + 1])
        arr[i], arr[j] = arr[j], arr[i]
    return arr


# ------------------------- helpers ------------------------- #


def _validate_n(n: int) -> None:
    if not isinstance(n, (int, np.integer)) or isinstance(n, bool):
        raise ValueError("n must be an int")
    if n < 0:
        raise ValueError("n must be nonnegative")


def _parse_range(params: Dict[str, Any], default: Tuple[int, int]) -> Tuple[int, int]:
    """
    Parse the optional inclusive range params["range"] == [min_int, max_int].
    If not present, return `default`.
    """
    if "range" not in params:
        return default
    spec = params["range"]
    if not isinstance(spec, (list, tuple)) or len(spec) != 2:
        raise ValueError("random.params.range must be a 2-element list/tuple [min, max]")
    lo_raw, hi_raw = spec
    if not _is_int_like(lo_raw) or not _is_int_like(hi_raw):
        raise ValueError("random.params.range values must be integers")
    lo, hi = int(lo_raw), int(hi_raw)
    if lo > hi:
        raise ValueError(f"random.params.range invalid: min > max ({lo} > {hi})")
    return lo, hi


def _parse_swap_frac(params: Dict[str, Any]) -> float:
    val = params.get("swap_frac", 0.1)
    try:
        x = float(val)
    except (TypeError, ValueError) as e:
        raise ValueError(
            f"nearly_sorted.params.swap_frac must be a float in [0.0, 1.0]; got {val!r}"
        ) from e
    if not (0.0 <= x <= 1.0):
        raise ValueError(
            f"nearly_sorted.params.swap_frac must be in [0.0, 1.0]; got {x}"
        )
    return x


def _is_int_like(x: Any) -> bool:
    # Accept Python ints and NumPy integer types
    return isinstance(x, (int, np.integer)) and not isinstance(x, bool)
