"""
Benchmark harness: configuration, measurement and the CLI runner.
"""

from .config import BenchmarkConfig, load_config
from .measure import BenchmarkRecord, measure_sort

__all__ = ["BenchmarkConfig", "BenchmarkRecord", "load_config", "measure_sort"]
