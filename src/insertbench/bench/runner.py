"""
Benchmark runner: sorts synthetic datasets and emits one CSV line per run.

Usage (from repo root):
    insertbench                          # full matrix: sizes x distributions
    insertbench 1000 random              # single run
    insertbench 5000 reverse --variant traditional
    insertbench --config experiments/configs/default.yaml --output-dir experiments/results

Stdout carries only CSV:
    Input Size,Data Distribution,Time (ns),Comparisons,Swaps,Array Accesses,Memory Allocations
    100,random,48213,648,0,3071,0
    ...

Status, warnings, errors and the rich summary table go to stderr.

With --output-dir (or `output_dir` in the config) a new run directory gets:
    - config_resolved.yaml    # the config we actually used
    - meta.json               # environment info (python, numpy, cpu/ram, git commit)
    - results.csv             # one row per run, incl. variant and tracker time

Design notes:
- Each run seeds a fresh RNG with `seed`, so a (size, distribution) pair
  always sees the same data whatever else is in the matrix.
- A run whose output fails verification is reported and left out of the CSV.
"""

from __future__ import annotations

import argparse
import datetime as _dt
import json
import os
import platform
import subprocess
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, TextIO

import numpy as np
import pandas as pd
import psutil
import yaml
from rich.console import Console
from rich.table import Table
from tqdm import tqdm

from insertbench.algorithms import VARIANTS, InsertionSorter
from insertbench.bench.config import MAX_SAFE_SIZE, BenchmarkConfig, load_config
from insertbench.bench.measure import BenchmarkRecord, measure_sort
from insertbench.datasets import SUPPORTED_DISTS, make_dataset

__all__ = ["CSV_HEADER", "run_benchmarks", "main"]

CSV_HEADER = (
    "Input Size,Data Distribution,Time (ns),Comparisons,Swaps,Array Accesses,Memory Allocations"
)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2

_console = Console(stderr=True)


# ------------------------- helpers: IO & meta ------------------------- #

def _write_yaml(obj: Dict[str, Any], path: Path) -> None:
    with path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(obj, f, sort_keys=False)


def _timestamp() -> str:
    return _dt.datetime.now().strftime("%Y%m%d_%H%M%S")


def _ensure_run_dir(base_dir: Path) -> Path:
    base_dir.mkdir(parents=True, exist_ok=True)
    run_dir = base_dir / f"{_timestamp()}_insertion_sort"
    suffix = 1
    while run_dir.exists():
        run_dir = base_dir / f"{_timestamp()}_insertion_sort_{suffix}"
        suffix += 1
    run_dir.mkdir(parents=False, exist_ok=False)
    return run_dir


def _git_commit_short() -> Optional[str]:
    try:
        out = subprocess.check_output(["git", "rev-parse", "--short", "HEAD"], stderr=subprocess.DEVNULL)
    except (OSError, subprocess.CalledProcessError):
        return None
    return out.decode("utf-8").strip()


def _gather_meta() -> Dict[str, Any]:
    return {
        "python": platform.python_version(),
        "numpy": np.__version__,
        "pandas": pd.__version__,
        "psutil": psutil.__version__,
        "git_commit": _git_commit_short(),
        "machine": {
            "cpu": platform.processor() or platform.machine(),
            "cores_logical": psutil.cpu_count(logical=True),
            "cores_physical": psutil.cpu_count(logical=False),
            "ram_gb": round(psutil.virtual_memory().total / (1024**3), 2),
            "platform": platform.platform(),
        },
        "start_time": _dt.datetime.now().isoformat(timespec="seconds"),
        "pid": os.getpid(),
        "cwd": str(Path.cwd()),
    }


def _write_run_files(
    base_dir: Path, cfg: BenchmarkConfig, results: pd.DataFrame, meta: Dict[str, Any]
) -> Path:
    run_dir = _ensure_run_dir(base_dir)
    _write_yaml(cfg.to_dict(), run_dir / "config_resolved.yaml")
    with (run_dir / "meta.json").open("w", encoding="utf-8") as f:
        json.dump(meta, f, indent=2)
    results.to_csv(run_dir / "results.csv", index=False)
    return run_dir


def _print_rich_summary(records: List[BenchmarkRecord]) -> None:
    table = Table(title="Insertion Sort Benchmark Summary")
    table.add_column("Size", justify="right", style="bold")
    table.add_column("Distribution")
    table.add_column("Variant")
    table.add_column("Time (ms)", justify="right")
    table.add_column("Comparisons", justify="right")
    table.add_column("Swaps", justify="right")
    table.add_column("Array Accesses", justify="right")
    for r in records:
        table.add_row(
            str(r.size),
            r.distribution,
            r.variant,
            f"{r.time_ns / 1e6:.3f}",
            str(r.metrics.comparisons),
            str(r.metrics.swaps),
            str(r.metrics.array_accesses),
        )
    _console.print()
    _console.print(table)


# ------------------------- core runner ------------------------- #

def run_benchmarks(cfg: BenchmarkConfig, *, out: Optional[TextIO] = None) -> pd.DataFrame:
    """
    Run every (size, distribution) pair of `cfg` and print CSV lines to `out`.

    Returns a DataFrame with one row per run (failed verifications included,
    with status "unsorted").
    """
    cfg.validate()
    out = out if out is not None else sys.stdout
    meta = _gather_meta() if cfg.output_dir is not None else None

    for n in cfg.sizes:
        if n > MAX_SAFE_SIZE:
            _console.print(f"[yellow]Warning:[/yellow] size {n} is large and may exhaust memory or time")

    sorter = InsertionSorter()
    records: List[BenchmarkRecord] = []
    pairs = [(n, dist) for n in cfg.sizes for dist in cfg.distributions]

    print(CSV_HEADER, file=out)
    for n, dist in tqdm(pairs, desc="Benchmarks", unit="run", disable=len(pairs) <= 1, file=sys.stderr):
        rng = np.random.default_rng(cfg.seed)
        data = make_dataset(n, cfg.dataset_spec(dist), rng)
        rec = measure_sort(
            sorter=sorter,
            a=data,
            distribution=dist,
            variant=cfg.variant,
            warmup_runs=cfg.warmup_runs,
            disable_gc=cfg.disable_gc,
        )
        records.append(rec)
        if rec.status != "ok":
            _console.print(
                f"[bold red]ERROR:[/bold red] Sorting verification failed for size {n} "
                f"distribution {dist}: {rec.error}"
            )
            continue
        tqdm.write(rec.csv_line(), file=out)

    results = pd.DataFrame([r.to_row() for r in records])

    if len(records) > 1:
        _print_rich_summary(records)

    if cfg.output_dir is not None and meta is not None:
        run_dir = _write_run_files(cfg.output_dir, cfg, results, meta)
        _console.print(f"[bold green]Done.[/bold green] Wrote results to {run_dir}")

    return results


# ------------------------- CLI ------------------------- #

_EPILOG = """\
Distributions: random, sorted, reverse, nearly_sorted

Examples:
  insertbench                      run the full benchmark matrix
  insertbench 1000 random
  insertbench 5000 sorted
  insertbench 10000 reverse --variant traditional
"""


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="insertbench",
        description="Benchmark instrumented insertion sort across input sizes and data distributions.",
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("size", nargs="?", help="Input size (positive integer). Omit to run the full matrix.")
    p.add_argument("distribution", nargs="?", default=None,
                   help="Data distribution for a single run (default: random)")
    p.add_argument("--variant", choices=VARIANTS, default=None,
                   help="Sort variant to benchmark (default: optimized)")
    p.add_argument("--config", type=str, default=None, help="Path to YAML benchmark config")
    p.add_argument("--output-dir", type=str, default=None,
                   help="Write results.csv, meta.json and config_resolved.yaml under this directory")
    p.add_argument("--warmup", type=int, default=None, help="Untimed warmup sorts per run (default: 5)")
    p.add_argument("--seed", type=int, default=None, help="RNG seed for data generation (default: 42)")
    return p


def _usage_error(parser: argparse.ArgumentParser, message: str) -> int:
    _console.print(f"[bold red]Error:[/bold red] {message}")
    parser.print_help(sys.stderr)
    return EXIT_USAGE


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        cfg = load_config(Path(args.config)) if args.config else BenchmarkConfig()
    except (OSError, ValueError, yaml.YAMLError) as e:
        _console.print(f"[bold red]Invalid config:[/bold red] {e}")
        return EXIT_FAILURE

    if args.size is not None:
        try:
            size = int(args.size)
        except ValueError:
            return _usage_error(parser, "Invalid size parameter")
        if size <= 0:
            return _usage_error(parser, "Size must be positive")
        dist = (args.distribution or "random").lower()
        if dist not in SUPPORTED_DISTS:
            return _usage_error(parser, f"Unknown distribution {dist!r}")
        cfg = cfg.with_overrides(sizes=(size,), distributions=(dist,))
    else:
        _console.print("Running comprehensive insertion sort benchmarks...")

    cfg = cfg.with_overrides(
        variant=args.variant,
        warmup_runs=args.warmup,
        seed=args.seed,
        output_dir=Path(args.output_dir) if args.output_dir else None,
    )

    try:
        results = run_benchmarks(cfg)
    except ValueError as e:
        _console.print(f"[bold red]Runner failed:[/bold red] {e}")
        return EXIT_FAILURE

    if not results.empty and (results["status"] != "ok").any():
        return EXIT_FAILURE
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
