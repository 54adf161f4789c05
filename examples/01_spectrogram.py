#!/usr/bin/env python3
"""Color-index spectrogram of a synthetic chirp.

This example demonstrates:
- Computing a whole-buffer spectrogram on different frequency scales
- Running the pipeline frame by frame
- Turning color indices into RGBA pixels

Usage:
    python 01_spectrogram.py [scale]
"""

import sys

import numpy as np

import mlx_spectrogram

SAMPLE_RATE = 44100


def make_chirp(duration: float = 2.0) -> np.ndarray:
    """Exponential sweep from 50 Hz to 15 kHz."""
    t = np.arange(int(duration * SAMPLE_RATE)) / SAMPLE_RATE
    f0, f1 = 50.0, 15000.0
    k = np.log(f1 / f0) / duration
    phase = 2 * np.pi * f0 * (np.exp(k * t) - 1) / k
    return (0.5 * np.sin(phase)).astype(np.float32)


def main():
    scale = sys.argv[1] if len(sys.argv) > 1 else "mel"
    audio = make_chirp()

    print(f"Computing {scale} spectrogram of a {len(audio) / SAMPLE_RATE:.1f}s chirp")
    print("-" * 50)

    indices = mlx_spectrogram.compute_frequencies(
        audio, SAMPLE_RATE, fft_samples=1024, scale=scale
    )
    channels, frames, bands = indices.shape
    print(f"Channels: {channels}, frames: {frames}, bands: {bands}")

    # Loudest band per frame should climb as the chirp sweeps up
    loudest = indices[0].argmax(axis=1)
    for f in range(0, frames, max(1, frames // 8)):
        print(f"  frame {f:4d}: loudest band {loudest[f]:4d}")

    # RGBA image, bands running bottom to top
    image = mlx_spectrogram.apply_colormap(indices[0].T[::-1], "roseus")
    print(f"\nRGBA image shape: {image.shape}")


def example_frame_by_frame():
    """Example running the pipeline one frame at a time."""
    audio = make_chirp(duration=0.5)
    fft_size = 512

    analyzer = mlx_spectrogram.SpectrumAnalyzer(fft_size, window="blackman")
    bank = mlx_spectrogram.FilterBank(fft_size // 2, fft_size, SAMPLE_RATE, scale="bark")

    for offset in range(0, len(audio) - fft_size, fft_size):
        spectrum = analyzer.analyze(audio[offset : offset + fft_size])
        bands = bank.apply(spectrum)
        colors = mlx_spectrogram.to_color_indices(bands, gain_db=20, range_db=80)
        print(f"offset {offset:6d}: max index {colors.max():3d}")

    print(f"Peak magnitude {analyzer.peak:.3f} in bin {analyzer.peak_band}")


def example_axis_labels():
    """Example placing frequency labels on a mel axis."""
    labels = mlx_spectrogram.scale_frequencies(6, 0.0, SAMPLE_RATE / 2, "mel")
    for hz in labels:
        print(f"{hz:8.0f} Hz")


if __name__ == "__main__":
    main()
