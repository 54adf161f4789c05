"""Benchmarks for the mlx_spectrogram frame pipeline.

Measures per-frame cost of spectrum analysis, filter-bank reduction and
color quantization, and the whole-buffer compute() path.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any

import mlx.core as mx
import numpy as np


@dataclass
class BenchmarkResult:
    """Result of a single benchmark run."""

    name: str
    mean_time_ms: float
    std_time_ms: float
    min_time_ms: float
    max_time_ms: float
    throughput: float  # frames/sec
    peak_memory_mb: float
    iterations: int
    params: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "mean_time_ms": self.mean_time_ms,
            "std_time_ms": self.std_time_ms,
            "min_time_ms": self.min_time_ms,
            "max_time_ms": self.max_time_ms,
            "throughput": self.throughput,
            "peak_memory_mb": self.peak_memory_mb,
            "iterations": self.iterations,
            "params": self.params,
        }


def _warmup_and_sync():
    """Warmup MLX and synchronize."""
    x = mx.ones((100, 100))
    _ = mx.matmul(x, x)
    mx.eval(_)


def _measure_time(
    fn, warmup: int = 3, iterations: int = 10
) -> tuple[list[float], float]:
    """Measure execution time with warmup.

    Returns:
        Tuple of (list of times in seconds, peak memory in MB)
    """
    for _ in range(warmup):
        fn()

    try:
        mx.reset_peak_memory()
    except AttributeError:
        pass

    times = []
    for _ in range(iterations):
        start = time.perf_counter()
        fn()  # pipeline results are NumPy arrays, already evaluated
        end = time.perf_counter()
        times.append(end - start)

    try:
        peak_memory_mb = mx.get_peak_memory() / (1024 * 1024)
    except AttributeError:
        peak_memory_mb = 0.0

    return times, peak_memory_mb


class BenchPipeline:
    """Benchmarks for the spectrogram pipeline."""

    def __init__(self, sample_rate: int = 44100):
        self.sample_rate = sample_rate
        self.results: list[BenchmarkResult] = []

    def _generate_audio(self, n_samples: int) -> np.ndarray:
        """Generate a random signal for benchmarking."""
        rng = np.random.default_rng(42)
        return rng.standard_normal(n_samples).astype(np.float32)

    def _record(
        self,
        name: str,
        times: list[float],
        peak_memory: float,
        frames: int,
        iterations: int,
        params: dict[str, Any],
    ) -> BenchmarkResult:
        mean_time = float(np.mean(times))
        result = BenchmarkResult(
            name=name,
            mean_time_ms=mean_time * 1000,
            std_time_ms=float(np.std(times)) * 1000,
            min_time_ms=float(np.min(times)) * 1000,
            max_time_ms=float(np.max(times)) * 1000,
            throughput=frames / mean_time,
            peak_memory_mb=peak_memory,
            iterations=iterations,
            params=params,
        )
        self.results.append(result)
        return result

    def bench_analyze(
        self, fft_size: int = 512, window: str = "hann", iterations: int = 100
    ) -> BenchmarkResult:
        """Benchmark SpectrumAnalyzer.analyze on one frame."""
        from mlx_spectrogram.primitives import SpectrumAnalyzer

        analyzer = SpectrumAnalyzer(fft_size, window)
        frame = self._generate_audio(fft_size)

        times, peak_memory = _measure_time(
            lambda: analyzer.analyze(frame), iterations=iterations
        )
        return self._record(
            "analyze",
            times,
            peak_memory,
            frames=1,
            iterations=iterations,
            params={"fft_size": fft_size, "window": window},
        )

    def bench_filter_bank(
        self, fft_size: int = 512, scale: str = "mel", iterations: int = 100
    ) -> BenchmarkResult:
        """Benchmark FilterBank.apply on one spectrum."""
        from mlx_spectrogram.primitives import FilterBank

        bank = FilterBank(fft_size // 2, fft_size, self.sample_rate, scale)
        spectrum = np.abs(self._generate_audio(fft_size // 2))

        times, peak_memory = _measure_time(
            lambda: bank.apply(spectrum), iterations=iterations
        )
        return self._record(
            "filter_bank",
            times,
            peak_memory,
            frames=1,
            iterations=iterations,
            params={"fft_size": fft_size, "scale": scale},
        )

    def bench_color(self, fft_size: int = 512, iterations: int = 100) -> BenchmarkResult:
        """Benchmark to_color_indices on one band vector."""
        from mlx_spectrogram.primitives import to_color_indices

        bands = np.abs(self._generate_audio(fft_size // 2))

        times, peak_memory = _measure_time(
            lambda: to_color_indices(bands), iterations=iterations
        )
        return self._record(
            "color",
            times,
            peak_memory,
            frames=1,
            iterations=iterations,
            params={"fft_size": fft_size},
        )

    def bench_compute(
        self,
        duration_sec: float = 10.0,
        fft_size: int = 512,
        scale: str = "mel",
        iterations: int = 5,
    ) -> BenchmarkResult:
        """Benchmark whole-buffer Spectrogram.compute."""
        from mlx_spectrogram import Spectrogram, SpectrogramConfig

        audio = self._generate_audio(int(duration_sec * self.sample_rate))
        spec = Spectrogram(SpectrogramConfig(fft_samples=fft_size, scale=scale))
        frames = len(spec.frame_offsets(audio.shape[0], self.sample_rate))

        times, peak_memory = _measure_time(
            lambda: spec.compute(audio, self.sample_rate),
            warmup=1,
            iterations=iterations,
        )
        return self._record(
            "compute",
            times,
            peak_memory,
            frames=frames,
            iterations=iterations,
            params={
                "duration_sec": duration_sec,
                "fft_size": fft_size,
                "scale": scale,
                "frames": frames,
            },
        )

    def run_all(
        self,
        fft_sizes: list[int] | None = None,
        durations: list[float] | None = None,
        iterations: int = 100,
    ) -> list[BenchmarkResult]:
        """Run all pipeline benchmarks with various configurations."""
        if fft_sizes is None:
            fft_sizes = [256, 512, 1024, 2048]
        if durations is None:
            durations = [1.0, 10.0]

        _warmup_and_sync()

        for fft_size in fft_sizes:
            self.bench_analyze(fft_size=fft_size, iterations=iterations)
            for scale in ("mel", "bark", "erb"):
                self.bench_filter_bank(fft_size=fft_size, scale=scale, iterations=iterations)
            self.bench_color(fft_size=fft_size, iterations=iterations)

        for duration in durations:
            self.bench_compute(duration_sec=duration)

        return self.results

    def summary(self) -> str:
        """Generate a summary of benchmark results."""
        lines = ["=" * 80, "Pipeline Benchmark Summary", "=" * 80, ""]

        by_name: dict[str, list[BenchmarkResult]] = {}
        for r in self.results:
            by_name.setdefault(r.name, []).append(r)

        for name, results in by_name.items():
            lines.append(f"\n{name.upper()}")
            lines.append("-" * 40)
            header = f"{'FFT':>6} {'Scale':>6} {'Mean(ms)':>10}"
            header += f" {'Std(ms)':>10} {'Throughput':>15}"
            lines.append(header)

            for r in results:
                line = f"{r.params.get('fft_size', 0):>6} "
                line += f"{r.params.get('scale', '-'):>6} "
                line += f"{r.mean_time_ms:>10.3f} "
                line += f"{r.std_time_ms:>10.3f} "
                line += f"{r.throughput:>10.0f} fr/s"
                lines.append(line)

        return "\n".join(lines)


if __name__ == "__main__":
    bench = BenchPipeline()
    bench.run_all(fft_sizes=[512], durations=[1.0], iterations=20)
    print(bench.summary())
