"""
Operation counters and a monotonic timer for instrumented sorting.

One tracker records a single measurement window at a time:

    tracker.reset()
    tracker.start_timer()
    ... record_comparison() / record_swap() / record_array_access() ...
    tracker.stop_timer()

Public API (stable):
    MetricsTracker
    MetricsSnapshot

Conventions:
- Counters only grow between two calls to `reset()`.
- `record_*(n)` does not validate `n`; callers pass nonnegative counts.
- `elapsed_time_ns` is 0 unless the timer was started and then stopped after
  the last reset. It is never negative.
- Not thread-safe: one tracker serves one in-flight sort.
"""

from __future__ import annotations

import time
from dataclasses import asdict, dataclass
from typing import Dict, Optional

from rich.console import Console
from rich.table import Table

__all__ = ["MetricsSnapshot", "MetricsTracker", "CSV_FIELDS"]

# Column order of `MetricsTracker.to_csv()`.
CSV_FIELDS = (
    "elapsed_time_ns",
    "comparisons",
    "swaps",
    "array_accesses",
    "memory_allocations",
)


@dataclass
class _Counters:
    comparisons: int = 0
    swaps: int = 0
    array_accesses: int = 0
    memory_allocations: int = 0


@dataclass(frozen=True)
class MetricsSnapshot:
    """Immutable copy of a tracker's state at one point in time."""

    elapsed_time_ns: int
    comparisons: int
    swaps: int
    array_accesses: int
    memory_allocations: int

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)


class MetricsTracker:
    """
    Accumulates comparisons, swaps, array accesses and allocation bytes,
    plus a start/stop timer based on `time.perf_counter_ns()`.
    """

    def __init__(self) -> None:
        self._counters = _Counters()
        self._start_ns: Optional[int] = None
        self._end_ns: Optional[int] = None

    # ---- lifecycle ----

    def reset(self) -> None:
        """Zero every counter and clear the timer."""
        self._counters = _Counters()
        self._start_ns = None
        self._end_ns = None

    def start_timer(self) -> None:
        self._start_ns = time.perf_counter_ns()
        self._end_ns = None

    def stop_timer(self) -> None:
        self._end_ns = time.perf_counter_ns()

    # ---- recording ----

    def record_comparison(self, n: int = 1) -> None:
        self._counters.comparisons += n

    def record_swap(self, n: int = 1) -> None:
        self._counters.swaps += n

    def record_array_access(self, n: int = 1) -> None:
        self._counters.array_accesses += n

    def record_memory_allocation(self, num_bytes: int) -> None:
        # The sorters work in a single preallocated buffer and never call this.
        self._counters.memory_allocations += num_bytes

    # ---- readers ----

    @property
    def elapsed_time_ns(self) -> int:
        if self._start_ns is None or self._end_ns is None:
            return 0
        return max(0, self._end_ns - self._start_ns)

    @property
    def comparisons(self) -> int:
        return self._counters.comparisons

    @property
    def swaps(self) -> int:
        return self._counters.swaps

    @property
    def array_accesses(self) -> int:
        return self._counters.array_accesses

    @property
    def memory_allocations(self) -> int:
        return self._counters.memory_allocations

    def snapshot(self) -> MetricsSnapshot:
        return MetricsSnapshot(
            elapsed_time_ns=self.elapsed_time_ns,
            comparisons=self.comparisons,
            swaps=self.swaps,
            array_accesses=self.array_accesses,
            memory_allocations=self.memory_allocations,
        )

    def get_all_metrics(self) -> Dict[str, int]:
        """
        Return all five metrics as a new dict.

        Keys are the snake_case field names of `MetricsSnapshot`:
        "elapsed_time_ns", "comparisons", "swaps", "array_accesses",
        "memory_allocations". These are also the `to_csv()` column order.

        The dict is a copy: later recording on this tracker does not change it.
        """
        return self.snapshot().as_dict()

    def to_csv(self) -> str:
        """Comma-joined metrics in `CSV_FIELDS` order, no header, no newline."""
        snap = self.get_all_metrics()
        return ",".join(str(snap[field]) for field in CSV_FIELDS)

    def print_metrics(self, console: Optional[Console] = None) -> None:
        console = console or Console()
        table = Table(title="Performance Metrics")
        table.add_column("Metric", style="bold")
        table.add_column("Value", justify="right")
        table.add_row("Execution Time", f"{self.elapsed_time_ns} ns")
        table.add_row("Comparisons", str(self.comparisons))
        table.add_row("Swaps", str(self.swaps))
        table.add_row("Array Accesses", str(self.array_accesses))
        table.add_row("Memory Allocations", f"{self.memory_allocations} bytes")
        console.print(table)
