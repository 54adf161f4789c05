#!/usr/bin/env python3
"""
Run mlx-spectrogram benchmarks and compare results.

Usage:
    # Run full benchmark suite and save baseline
    python -m benchmarks.run_benchmarks --output baseline.json

    # Compare two benchmark runs
    python -m benchmarks.run_benchmarks --compare baseline.json optimized.json

    # Quick run with fewer iterations
    python -m benchmarks.run_benchmarks --quick --output quick_test.json
"""

from __future__ import annotations

import argparse
import json
from datetime import datetime
from pathlib import Path
from typing import Any


def run_benchmarks(quick: bool = False) -> dict[str, Any]:
    """Run all benchmarks and return results."""
    from benchmarks.bench_pipeline import BenchPipeline

    results: dict[str, Any] = {
        "timestamp": datetime.now().isoformat(),
        "pipeline": [],
    }

    if quick:
        fft_sizes = [512]
        durations = [1.0]
        iterations = 20
    else:
        fft_sizes = [256, 512, 1024, 2048]
        durations = [1.0, 10.0, 30.0]
        iterations = 100

    print("Running pipeline benchmarks...")
    bench = BenchPipeline()
    bench.run_all(fft_sizes=fft_sizes, durations=durations, iterations=iterations)
    results["pipeline"] = [r.to_dict() for r in bench.results]
    print(bench.summary())

    return results


def compare_results(baseline_path: str, optimized_path: str) -> None:
    """Compare two benchmark result files and show improvements."""
    with open(baseline_path) as f:
        baseline = json.load(f)
    with open(optimized_path) as f:
        optimized = json.load(f)

    print("=" * 80)
    print("BENCHMARK COMPARISON")
    print(f"Baseline: {baseline_path} ({baseline['timestamp']})")
    print(f"Optimized: {optimized_path} ({optimized['timestamp']})")
    print("=" * 80)

    def build_lookup(results: list[dict]) -> dict[tuple, dict]:
        return {(r["name"], json.dumps(r["params"], sort_keys=True)): r for r in results}

    base_lookup = build_lookup(baseline.get("pipeline", []))
    opt_lookup = build_lookup(optimized.get("pipeline", []))

    print(f"{'Benchmark':<30} {'Base(ms)':>10} {'Opt(ms)':>10} {'Speedup':>10} {'Improve':>10}")
    print("-" * 72)

    for key, base_result in base_lookup.items():
        if key not in opt_lookup:
            continue

        name, params_json = key
        params = json.loads(params_json)
        label = f"{name}[{params.get('fft_size')}"
        if "scale" in params:
            label += f",{params['scale']}"
        label += "]"

        base_time = base_result["mean_time_ms"]
        opt_time = opt_lookup[key]["mean_time_ms"]
        if base_time > 0:
            speedup = base_time / opt_time
            improvement_pct = (base_time - opt_time) / base_time * 100
        else:
            speedup = 1.0
            improvement_pct = 0.0

        color = ""
        reset = ""
        if improvement_pct > 5:
            color = "\033[92m"  # Green
            reset = "\033[0m"
        elif improvement_pct < -5:
            color = "\033[91m"  # Red
            reset = "\033[0m"

        print(
            f"{color}{label:<30} {base_time:>10.3f} {opt_time:>10.3f} "
            f"{speedup:>9.2f}x {improvement_pct:>9.1f}%{reset}"
        )


def main():
    parser = argparse.ArgumentParser(
        description="Run mlx-spectrogram benchmarks and compare results."
    )
    parser.add_argument(
        "--output", "-o", type=str, help="Output file for benchmark results (JSON)"
    )
    parser.add_argument(
        "--compare",
        "-c",
        nargs=2,
        metavar=("BASELINE", "OPTIMIZED"),
        help="Compare two benchmark result files",
    )
    parser.add_argument(
        "--quick", "-q", action="store_true", help="Quick run with fewer iterations"
    )

    args = parser.parse_args()

    if args.compare:
        compare_results(args.compare[0], args.compare[1])
    else:
        results = run_benchmarks(quick=args.quick)

        if args.output:
            output_path = Path(args.output)
            with open(output_path, "w") as f:
                json.dump(results, f, indent=2)
            print(f"\nResults saved to: {output_path}")
        else:
            print("\nNo output file specified. Use --output to save results.")


if __name__ == "__main__":
    main()
