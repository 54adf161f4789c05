"""Whole-buffer spectrogram computation.

Slides one SpectrumAnalyzer over each channel, reduces every frame with
the configured filter bank and quantizes it to colormap indices. The
result is a (channels, frames, bins) uint8 array ready for a host to
paint with a colormap, or rendered to RGBA with render().
"""

from __future__ import annotations

import logging
import math
import time
from typing import Any

import mlx.core as mx
import numpy as np

from mlx_spectrogram.config import SpectrogramConfig
from mlx_spectrogram.constants import (
    DEFAULT_FFT_SAMPLES,
    DEFAULT_GAIN_DB,
    DEFAULT_RANGE_DB,
    DEFAULT_SCALE,
    DEFAULT_WINDOW,
)
from mlx_spectrogram.exceptions import ShapeMismatchError
from mlx_spectrogram.primitives._validation import (
    as_frame,
    validate_non_negative,
    validate_positive,
)
from mlx_spectrogram.primitives.analyzer import SpectrumAnalyzer
from mlx_spectrogram.primitives.color import to_color_indices
from mlx_spectrogram.primitives.colormaps import apply_colormap, get_colormap
from mlx_spectrogram.primitives.filterbank import FilterBank

logger = logging.getLogger(__name__)


def _as_channels(channels: Any) -> list[np.ndarray]:
    """Normalize host audio to a list of 1-D float32 channel buffers."""
    if isinstance(channels, mx.array):
        channels = np.array(channels)
    if isinstance(channels, np.ndarray):
        if channels.ndim == 1:
            return [as_frame(channels, "channel")]
        if channels.ndim == 2:
            return [as_frame(row, "channel") for row in channels]
        raise ShapeMismatchError(
            f"Audio must be (samples,) or (channels, samples), got shape {channels.shape}"
        )
    buffers = list(channels)
    if buffers and np.ndim(buffers[0]) == 0:
        # A flat sequence of samples is a single channel.
        return [as_frame(buffers, "channel")]
    return [as_frame(b, "channel") for b in buffers]


class Spectrogram:
    """Spectrogram pipeline bound to one configuration.

    Holds a single analyzer and one filter bank per sample rate, so
    repeated calls reuse the window, the FFT plan and the filter
    matrices. Not safe for concurrent use; create one per thread.

    Args:
        config: Pipeline parameters (default: SpectrogramConfig())

    Example:
        >>> spec = Spectrogram(SpectrogramConfig(fft_samples=1024, scale="bark"))
        >>> indices = spec.compute(one_second_mono, sample_rate=44100)
        >>> indices.shape  # (channels, frames, bands)
        (1, 85, 512)
    """

    def __init__(self, config: SpectrogramConfig | None = None) -> None:
        self.config = config or SpectrogramConfig()
        self._analyzer = SpectrumAnalyzer(
            self.config.fft_samples,
            self.config.window,
            self.config.resolved_alpha,
        )
        self._filter_banks: dict[float, FilterBank] = {}

    @property
    def analyzer(self) -> SpectrumAnalyzer:
        return self._analyzer

    @property
    def colormap(self) -> np.ndarray:
        """RGBA lookup table for config.color_map, shape (rows, 4)."""
        return get_colormap(self.config.color_map)

    def filter_bank(self, sample_rate: float) -> FilterBank:
        """Filter bank for ``sample_rate``, built on first use."""
        validate_positive(sample_rate, "sample_rate")
        key = float(sample_rate)
        if key not in self._filter_banks:
            self._filter_banks[key] = FilterBank(
                self.config.resolved_num_filters,
                self.config.fft_samples,
                key,
                self.config.scale,
            )
        return self._filter_banks[key]

    def process_frame(self, samples: Any, sample_rate: float) -> np.ndarray:
        """Analyze, reduce and quantize one frame of fft_samples samples."""
        spectrum = self._analyzer.analyze(samples)
        bands = self.filter_bank(sample_rate).apply(spectrum)
        return to_color_indices(bands, self.config.gain_db, self.config.range_db)

    def frame_offsets(
        self,
        num_samples: int,
        sample_rate: float,
        start_time: float | None = None,
        end_time: float | None = None,
    ) -> range:
        """Start offsets of the frames covering [start_time, end_time).

        A frame is emitted while ``offset + fft_samples < end``.
        """
        fft_samples = self.config.fft_samples
        start = 0
        end = num_samples
        if start_time is not None:
            validate_non_negative(start_time, "start_time")
            start = math.floor(start_time * sample_rate)
        if end_time is not None:
            validate_non_negative(end_time, "end_time")
            end = min(end, math.floor(end_time * sample_rate))
        return range(start, max(start, end - fft_samples), self.config.hop_length)

    def compute(
        self,
        channels: Any,
        sample_rate: float,
        start_time: float | None = None,
        end_time: float | None = None,
    ) -> np.ndarray:
        """Compute color indices for whole channel buffers.

        Args:
            channels: One buffer (samples,), a (channels, samples) array,
                or a sequence of equal-length buffers
            sample_rate: Sample rate of the audio in Hz
            start_time: First second to analyze (default: 0)
            end_time: Last second to analyze (default: end of buffer)

        Returns:
            uint8 array of shape (channels, frames, bins). Only the first
            channel is analyzed unless config.split_channels is set.

        Raises:
            ShapeMismatchError: If split channels differ in length
        """
        buffers = _as_channels(channels)
        if not buffers:
            raise ShapeMismatchError("At least one audio channel is required")
        if not self.config.split_channels:
            buffers = buffers[:1]
        lengths = {b.shape[0] for b in buffers}
        if len(lengths) > 1:
            raise ShapeMismatchError(
                f"All channels must have the same length, got {sorted(lengths)}"
            )

        bank = self.filter_bank(sample_rate)
        fft_samples = self.config.fft_samples
        n_bins = bank.spectrum_size if bank.is_linear else bank.filters.shape[0]
        offsets = self.frame_offsets(buffers[0].shape[0], sample_rate, start_time, end_time)

        frequencies = np.zeros((len(buffers), len(offsets), n_bins), dtype=np.uint8)
        start = time.perf_counter()
        for c, channel in enumerate(buffers):
            for f, offset in enumerate(offsets):
                frequencies[c, f] = self.process_frame(
                    channel[offset : offset + fft_samples], sample_rate
                )

        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.debug(
            "Spectrogram FFT calculation: %d FFTs in %.1fms",
            len(buffers) * len(offsets),
            elapsed_ms,
        )
        return frequencies

    def render(
        self,
        channels: Any,
        sample_rate: float,
        start_time: float | None = None,
        end_time: float | None = None,
    ) -> np.ndarray:
        """Compute color indices and look them up in the configured colormap.

        Returns:
            float32 array of shape (channels, frames, bins, 4)
        """
        indices = self.compute(channels, sample_rate, start_time, end_time)
        return apply_colormap(indices, self.colormap)


def compute_frequencies(
    channels: Any,
    sample_rate: float,
    *,
    fft_samples: int = DEFAULT_FFT_SAMPLES,
    window: str = DEFAULT_WINDOW,
    alpha: float | None = None,
    noverlap: int | None = None,
    scale: str = DEFAULT_SCALE,
    num_filters: int | None = None,
    gain_db: float = DEFAULT_GAIN_DB,
    range_db: float = DEFAULT_RANGE_DB,
    split_channels: bool = False,
    start_time: float | None = None,
    end_time: float | None = None,
) -> np.ndarray:
    """
    Compute a color-index spectrogram for whole channel buffers.

    Parameters
    ----------
    channels : array-like
        One buffer, a (channels, samples) array, or a sequence of buffers.
    sample_rate : float
        Sample rate in Hz.
    fft_samples : int, default=512
        Samples per frame. Must be a power of 2.
    window : str, default='hann'
        Window function.
    alpha : float, optional
        Window shape parameter. Default: 0.16.
    noverlap : int, optional
        Overlap between frames. Default: fft_samples // 2.
    scale : str, default='mel'
        Frequency scale of the output rows.
    num_filters : int, optional
        Number of bands. Default: fft_samples // 2.
    gain_db, range_db : float
        Color mapping window, see to_color_indices().
    split_channels : bool, default=False
        Analyze every channel instead of the first only.
    start_time, end_time : float, optional
        Time range to analyze, in seconds.

    Returns
    -------
    np.ndarray
        uint8 array of shape (channels, frames, bins).

    Examples
    --------
    >>> audio = np.random.randn(2, 44100).astype(np.float32)
    >>> compute_frequencies(audio, 44100, split_channels=True).shape
    (2, 171, 256)
    """
    config = SpectrogramConfig(
        fft_samples=fft_samples,
        window=window,
        alpha=alpha,
        noverlap=noverlap,
        scale=scale,
        num_filters=num_filters,
        gain_db=gain_db,
        range_db=range_db,
        split_channels=split_channels,
    )
    return Spectrogram(config).compute(channels, sample_rate, start_time, end_time)


__all__ = ["Spectrogram", "compute_frequencies"]
