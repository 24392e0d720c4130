"""
Tests for the benchmark harness: config loading, measurement and the CLI.

Sizes are kept tiny and warmups at zero so the suite stays fast.

Note:
- This file inserts the project `src/` onto sys.path so tests run without installing the package.
"""

from __future__ import annotations

import json
import pathlib
import sys

import pytest
import yaml

# Ensure `src/` is importable when running `pytest` from the repo root
_REPO_ROOT = pathlib.Path(__file__).resolve().parents[1]
_SRC = _REPO_ROOT / "src"
if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))

import pandas as pd

from insertbench.algorithms import InsertionSorter
from insertbench.bench import BenchmarkConfig, load_config, measure_sort
from insertbench.bench.runner import CSV_HEADER, main, run_benchmarks


def _csv_lines(text: str) -> list[str]:
    return [line for line in text.splitlines() if line.strip()]


# ------------------------- config ------------------------- #

def test_default_config_is_full_matrix() -> None:
    cfg = BenchmarkConfig().validate()
    assert cfg.sizes == (100, 1000, 10000, 50000)
    assert cfg.distributions == ("random", "sorted", "reverse", "nearly_sorted")
    assert cfg.seed == 42
    assert cfg.variant == "optimized"


@pytest.mark.parametrize(
    "overrides",
    [
        {"sizes": ()},
        {"sizes": (10, 0)},
        {"distributions": ("random", "zipf")},
        {"variant": "shell"},
        {"warmup_runs": -1},
        {"seed": "abc"},
        {"seed": True},
        {"warmup_runs": "abc"},
        {"disable_gc": "yes"},
        {"sizes": 5},
        {"sizes": (10, True)},
        {"distributions": "random"},
        {"dataset_params": 3},
        {"dataset_params": {"nearly_sorted": 0.2}},
        {"dataset_params": {"zipf": {}}},
    ],
)
def test_invalid_config_raises(overrides) -> None:
    with pytest.raises(ValueError):
        BenchmarkConfig(**overrides).validate()


def test_load_config_yaml(tmp_path: pathlib.Path) -> None:
    path = tmp_path / "cfg.yaml"
    path.write_text(
        yaml.safe_dump(
            {
                "sizes": [10, 20],
                "distributions": ["Reverse"],
                "variant": "traditional",
                "warmup_runs": 0,
                "dataset_params": {"nearly_sorted": {"swap_frac": 0.2}},
            }
        ),
        encoding="utf-8",
    )
    cfg = load_config(path)
    assert cfg.sizes == (10, 20)
    assert cfg.distributions == ("reverse",)
    assert cfg.variant == "traditional"
    assert cfg.seed == 42
    assert cfg.dataset_spec("nearly_sorted") == {"dist": "nearly_sorted", "params": {"swap_frac": 0.2}}


def test_load_config_rejects_unknown_keys(tmp_path: pathlib.Path) -> None:
    path = tmp_path / "cfg.yaml"
    path.write_text("sizes: [10]\nrepeats: 3\n", encoding="utf-8")
    with pytest.raises(ValueError, match="repeats"):
        load_config(path)


def test_shipped_configs_load() -> None:
    for path in sorted((_REPO_ROOT / "experiments" / "configs").glob("*.yaml")):
        load_config(path)


# ------------------------- measure ------------------------- #

def test_measure_sort_reads_tracker() -> None:
    sorter = InsertionSorter()
    data = [5, 2, 4, 6, 1, 3]
    rec = measure_sort(sorter=sorter, a=data, distribution="random", variant="traditional", warmup_runs=2)

    assert data == [5, 2, 4, 6, 1, 3]
    assert rec.status == "ok"
    assert rec.size == 6
    assert rec.time_ns >= 0
    assert rec.metrics.swaps == 9
    assert rec.csv_line() == f"6,random,{rec.time_ns},23,9,28,0"


def test_measure_sort_rejects_unknown_variant() -> None:
    with pytest.raises(ValueError):
        measure_sort(sorter=InsertionSorter(), a=[1], distribution="sorted", variant="bogo")


# ------------------------- runner ------------------------- #

def test_run_benchmarks_emits_header_and_rows(capsys) -> None:
    cfg = BenchmarkConfig(sizes=(8, 16), warmup_runs=0)
    results = run_benchmarks(cfg)
    lines = _csv_lines(capsys.readouterr().out)

    assert lines[0] == CSV_HEADER
    assert len(lines) == 1 + 2 * 4
    assert isinstance(results, pd.DataFrame)
    assert len(results) == 8
    assert (results["status"] == "ok").all()

    sorted_rows = results[results["distribution"] == "sorted"]
    assert list(sorted_rows["comparisons"]) == [7, 15]
    assert (results["swaps"] == 0).all()


def test_run_benchmarks_writes_run_files(tmp_path: pathlib.Path, capsys) -> None:
    cfg = BenchmarkConfig(sizes=(10,), distributions=("reverse",), warmup_runs=0, output_dir=tmp_path)
    run_benchmarks(cfg)
    capsys.readouterr()

    run_dirs = [p for p in tmp_path.iterdir() if p.is_dir()]
    assert len(run_dirs) == 1
    run_dir = run_dirs[0]

    df = pd.read_csv(run_dir / "results.csv")
    assert list(df["size"]) == [10]
    assert list(df["variant"]) == ["optimized"]
    meta = json.loads((run_dir / "meta.json").read_text(encoding="utf-8"))
    assert "machine" in meta
    resolved = yaml.safe_load((run_dir / "config_resolved.yaml").read_text(encoding="utf-8"))
    assert resolved["sizes"] == [10]


def test_cli_single_run(capsys) -> None:
    code = main(["20", "reverse", "--variant", "traditional", "--warmup", "0"])
    out = capsys.readouterr().out
    lines = _csv_lines(out)

    assert code == 0
    assert lines[0] == CSV_HEADER
    assert len(lines) == 2
    fields = lines[1].split(",")
    assert fields[0] == "20"
    assert fields[1] == "reverse"
    assert int(fields[4]) == 20 * 19 // 2


def test_cli_distribution_defaults_to_random(capsys) -> None:
    assert main(["12", "--warmup", "0"]) == 0
    lines = _csv_lines(capsys.readouterr().out)
    assert lines[1].startswith("12,random,")


@pytest.mark.parametrize("size", ["abc", "0", "-5"])
def test_cli_invalid_size_prints_usage_and_runs_nothing(size: str, capsys) -> None:
    code = main([size])
    captured = capsys.readouterr()

    assert code == 2
    assert CSV_HEADER not in captured.out
    assert "Error" in captured.err
    assert "usage" in captured.err.lower()


def test_cli_unknown_distribution(capsys) -> None:
    code = main(["10", "gaussian"])
    captured = capsys.readouterr()
    assert code == 2
    assert CSV_HEADER not in captured.out


def test_cli_with_config_file(tmp_path: pathlib.Path, capsys) -> None:
    path = tmp_path / "cfg.yaml"
    path.write_text("sizes: [5, 6]\ndistributions: [sorted]\nwarmup_runs: 0\n", encoding="utf-8")
    assert main(["--config", str(path)]) == 0
    lines = _csv_lines(capsys.readouterr().out)
    assert lines[0] == CSV_HEADER
    assert [line.split(",")[0] for line in lines[1:]] == ["5", "6"]


@pytest.mark.parametrize(
    "body",
    [
        "sizes: [0]\n",
        "sizes: 5\n",
        "distributions: random\n",
        "dataset_params: 3\n",
        "dataset_params:\n  nearly_sorted: 0.2\n",
        "warmup_runs: abc\n",
        "seed: abc\n",
        "disable_gc: maybe\n",
        "output_dir: 7\n",
        "- just\n- a list\n",
    ],
)
def test_cli_bad_config_file(body: str, tmp_path: pathlib.Path, capsys) -> None:
    path = tmp_path / "cfg.yaml"
    path.write_text(body, encoding="utf-8")
    assert main(["--config", str(path)]) == 1
    captured = capsys.readouterr()
    assert CSV_HEADER not in captured.out
    assert "Invalid config" in captured.err


@pytest.mark.parametrize("body", ["sizes: 5\n", "seed: abc\n", "warmup_runs: abc\n"])
def test_load_config_type_errors_are_value_errors(body: str, tmp_path: pathlib.Path) -> None:
    path = tmp_path / "cfg.yaml"
    path.write_text(body, encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(path)
