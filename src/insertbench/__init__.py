"""
insertbench: instrumented insertion sort and its benchmark harness.
"""

from insertbench.algorithms import InsertionSorter, InvalidArgumentError
from insertbench.metrics import MetricsSnapshot, MetricsTracker

__version__ = "0.1.0"

__all__ = [
    "InsertionSorter",
    "InvalidArgumentError",
    "MetricsSnapshot",
    "MetricsTracker",
    "__version__",
]
