"""
Metrics package public API.

    from insertbench.metrics import MetricsTracker, MetricsSnapshot
"""

from .tracker import CSV_FIELDS, MetricsSnapshot, MetricsTracker

__all__ = ["CSV_FIELDS", "MetricsSnapshot", "MetricsTracker"]
