"""
Benchmark configuration.

A `BenchmarkConfig` is a plain value handed to the runner. Defaults give the
full matrix (sizes 100..50000 x all distributions, seed 42); a YAML file and
CLI flags override individual fields.

Example YAML (every key optional):

    sizes: [100, 1000, 10000]
    distributions: [random, reverse]
    seed: 42
    warmup_runs: 5
    variant: optimized        # or traditional
    disable_gc: true
    output_dir: experiments/results
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from insertbench.algorithms import VARIANTS
from insertbench.datasets import SUPPORTED_DISTS

__all__ = ["BenchmarkConfig", "DEFAULT_SIZES", "MAX_SAFE_SIZE", "load_config"]

DEFAULT_SIZES: Tuple[int, ...] = (100, 1000, 10000, 50000)

# Above this the runner warns about memory/time.
MAX_SAFE_SIZE = 1_000_000


@dataclass(frozen=True)
class BenchmarkConfig:
    sizes: Tuple[int, ...] = DEFAULT_SIZES
    distributions: Tuple[str, ...] = SUPPORTED_DISTS
    seed: int = 42
    warmup_runs: int = 5
    variant: str = "optimized"
    disable_gc: bool = True
    output_dir: Optional[Path] = None
    dataset_params: Dict[str, Dict[str, Any]] = field(default_factory=dict)

    def validate(self) -> "BenchmarkConfig":
        """Return self if every field is usable, else raise ValueError."""
        if not isinstance(self.sizes, (list, tuple)) or not self.sizes:
            raise ValueError("Config 'sizes' must be a non-empty list of positive integers")
        for n in self.sizes:
            if not _is_int(n) or n <= 0:
                raise ValueError(f"Config 'sizes' entries must be positive integers; got {n!r}")
        if not isinstance(self.distributions, (list, tuple)) or not self.distributions:
            raise ValueError("Config 'distributions' must be a non-empty list")
        unknown = [d for d in self.distributions if d not in SUPPORTED_DISTS]
        if unknown:
            raise ValueError(
                f"Unsupported distributions {unknown}. Supported: {list(SUPPORTED_DISTS)}"
            )
        if self.variant not in VARIANTS:
            raise ValueError(f"Unknown variant {self.variant!r}. Supported: {list(VARIANTS)}")
        if not _is_int(self.seed) or self.seed < 0:
            raise ValueError(f"seed must be a nonnegative integer; got {self.seed!r}")
        if not _is_int(self.warmup_runs) or self.warmup_runs < 0:
            raise ValueError(f"warmup_runs must be a nonnegative integer; got {self.warmup_runs!r}")
        if not isinstance(self.disable_gc, bool):
            raise ValueError(f"disable_gc must be true or false; got {self.disable_gc!r}")
        if self.output_dir is not None and not isinstance(self.output_dir, Path):
            raise ValueError(f"output_dir must be a path; got {self.output_dir!r}")
        if not isinstance(self.dataset_params, dict):
            raise ValueError("dataset_params must map distribution names to parameter mappings")
        for dist, params in self.dataset_params.items():
            if dist not in SUPPORTED_DISTS:
                raise ValueError(f"dataset_params has unknown distribution {dist!r}")
            if not isinstance(params, dict):
                raise ValueError(f"dataset_params.{dist} must be a mapping; got {params!r}")
        return self

    def dataset_spec(self, dist: str) -> Dict[str, Any]:
        return {"dist": dist, "params": dict(self.dataset_params.get(dist, {}))}

    def with_overrides(self, **overrides: Any) -> "BenchmarkConfig":
        """Copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    def to_dict(self) -> Dict[str, Any]:
        out = asdict(self)
        out["sizes"] = list(self.sizes)
        out["distributions"] = list(self.distributions)
        out["output_dir"] = str(self.output_dir) if self.output_dir is not None else None
        return out


def load_config(path: Path) -> BenchmarkConfig:
    """Read a YAML config file; missing keys keep their defaults."""
    with Path(path).open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"Config file {path} must contain a mapping at top level")

    known = {f.name for f in fields(BenchmarkConfig)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ValueError(f"Unknown config keys: {unknown}")

    kwargs: Dict[str, Any] = dict(raw)
    for key in ("sizes", "distributions"):
        if key in kwargs:
            if not isinstance(kwargs[key], list):
                raise ValueError(f"Config '{key}' must be a list; got {kwargs[key]!r}")
            kwargs[key] = tuple(kwargs[key])
    if "distributions" in kwargs:
        kwargs["distributions"] = tuple(str(d).lower() for d in kwargs["distributions"])
    if kwargs.get("output_dir") is not None:
        if not isinstance(kwargs["output_dir"], str):
            raise ValueError(f"Config 'output_dir' must be a string path; got {kwargs['output_dir']!r}")
        kwargs["output_dir"] = Path(kwargs["output_dir"])
    if "dataset_params" in kwargs and kwargs["dataset_params"] is None:
        kwargs["dataset_params"] = {}
    return BenchmarkConfig(**kwargs).validate()


def _is_int(x: Any) -> bool:
    # YAML booleans load as bool, which is an int subclass
    return isinstance(x, int) and not isinstance(x, bool)
