"""Benchmarking suite for mlx-spectrogram performance."""

from benchmarks.bench_pipeline import BenchPipeline

__all__ = ["BenchPipeline"]
