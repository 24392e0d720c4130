"""
Timing harness for the instrumented insertion sort.

One benchmark run = a few untimed warmup sorts on copies of the input, then
exactly one timed call measured with a monotonic high-resolution clock. The
operation counters come from the sorter's tracker right after that call.
Copying and GC housekeeping happen outside the timed block.

Public API (stable):
    measure_sort(...) -> BenchmarkRecord
    BenchmarkRecord
"""

from __future__ import annotations

import gc
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from insertbench.algorithms import InsertionSorter
from insertbench.metrics import MetricsSnapshot
from insertbench.validate import first_inversion_index

__all__ = ["BenchmarkRecord", "measure_sort"]


@dataclass(frozen=True)
class BenchmarkRecord:
    size: int
    distribution: str
    variant: str
    time_ns: int
    metrics: MetricsSnapshot
    status: str = "ok"  # "ok" | "unsorted"
    error: Optional[str] = None

    def csv_line(self) -> str:
        m = self.metrics
        return (
            f"{self.size},{self.distribution},{self.time_ns},"
            f"{m.comparisons},{m.swaps},{m.array_accesses},{m.memory_allocations}"
        )

    def to_row(self) -> Dict[str, Any]:
        return {
            "size": self.size,
            "distribution": self.distribution,
            "variant": self.variant,
            "time_ns": self.time_ns,
            "tracked_ns": self.metrics.elapsed_time_ns,
            "comparisons": self.metrics.comparisons,
            "swaps": self.metrics.swaps,
            "array_accesses": self.metrics.array_accesses,
            "memory_allocations": self.metrics.memory_allocations,
            "status": self.status,
        }


def measure_sort(
    *,
    sorter: InsertionSorter,
    a: List[int],
    distribution: str,
    variant: str = "optimized",
    warmup_runs: int = 5,
    disable_gc: bool = True,
) -> BenchmarkRecord:
    """
    Warm up, then time one call of the chosen sort variant on a copy of `a`.

    Parameters
    ----------
    sorter : InsertionSorter
        Sorter whose tracker is read after the timed call.
    a : list[int]
        Input data; never mutated.
    distribution : str
        Label recorded in the result.
    variant : str
        "optimized" -> sorter.sort, "traditional" -> sorter.traditional_sort.
    warmup_runs : int
        Untimed calls before the measurement.
    disable_gc : bool
        If True, collect and disable Python GC around the timed call; restore afterward.

    Returns
    -------
    BenchmarkRecord
        status is "unsorted" (with an error message) if the output fails verification.
    """
    if warmup_runs < 0:
        raise ValueError("warmup_runs must be nonnegative")
    if variant == "optimized":
        sort_fn = sorter.sort
    elif variant == "traditional":
        sort_fn = sorter.traditional_sort
    else:
        raise ValueError(f"Unknown variant: {variant!r}")

    for _ in range(warmup_runs):
        sort_fn(list(a))

    arg = list(a)
    prev_gc_enabled = gc.isenabled()
    try:
        if disable_gc:
            gc.collect()
            gc.disable()

        t0 = time.perf_counter_ns()
        out = sort_fn(arg)
        t1 = time.perf_counter_ns()
    finally:
        # If GC was previously disabled, leave it disabled (respect caller's global state).
        if disable_gc and prev_gc_enabled:
            gc.enable()

    snapshot = sorter.tracker.snapshot()

    status, error = "ok", None
    bad = first_inversion_index(out)
    if bad is not None:
        status = "unsorted"
        error = f"not sorted at i={bad}: {out[bad]} > {out[bad + 1]}"

    return BenchmarkRecord(
        size=len(a),
        distribution=distribution,
        variant=variant,
        time_ns=int(t1 - t0),
        metrics=snapshot,
        status=status,
        error=error,
    )
