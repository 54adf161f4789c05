"""
Perceptual filter banks.

Provides filter-bank construction for the mel, logarithmic, bark and ERB
scales, and application of a filter bank to a magnitude spectrum.

Each filter is a two-point linear interpolation that places one band
center between two adjacent FFT bins. Band centers are spaced evenly on
the chosen scale between 0 Hz and Nyquist.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any

import mlx.core as mx
import numpy as np

from mlx_spectrogram.constants import FILTER_BANK_CACHE_MAXSIZE
from mlx_spectrogram.exceptions import ShapeMismatchError

from ._validation import as_frame, validate_non_negative, validate_positive
from .scales import ScaleType, get_scale_functions

logger = logging.getLogger(__name__)

@lru_cache(maxsize=FILTER_BANK_CACHE_MAXSIZE)
def _compute_filter_bank_np(
    num_filters: int,
    fft_size: int,
    sample_rate: float,
    scale: ScaleType,
) -> np.ndarray:
    """Build the filter matrix as a read-only float32 array."""
    n_bins = fft_size // 2 + 1
    if scale is ScaleType.LINEAR or num_filters == 0:
        filters = np.zeros((0, n_bins), dtype=np.float32)
        filters.flags.writeable = False
        return filters

    hz_to_scale, scale_to_hz = get_scale_functions(scale)
    filter_min = hz_to_scale(0.0)
    filter_max = hz_to_scale(sample_rate / 2.0)
    bin_hz = sample_rate / fft_size

    positions = np.arange(num_filters, dtype=np.float64) / num_filters
    hz = scale_to_hz(filter_min + positions * (filter_max - filter_min))

    # Band centers that round below 0 Hz land in bin 0.
    j = np.maximum(np.floor(hz / bin_hz), 0.0)
    hz_low = j * bin_hz
    hz_high = (j + 1.0) * bin_hz
    r = (hz - hz_low) / (hz_high - hz_low)

    filters = np.zeros((num_filters, n_bins), dtype=np.float64)
    # Centers at or above the last spectrum bin leave their row empty.
    rows = np.nonzero(j < fft_size // 2)[0]
    cols = j[rows].astype(np.intp)
    filters[rows, cols] = 1.0 - r[rows]
    filters[rows, cols + 1] = r[rows]

    filters = filters.astype(np.float32)
    filters.flags.writeable = False
    return filters


def create_filter_bank(
    num_filters: int,
    fft_size: int,
    sample_rate: float,
    scale: str | ScaleType = ScaleType.MEL,
) -> np.ndarray:
    """
    Create a filter-bank matrix.

    Results are cached for repeated calls with identical parameters.

    Parameters
    ----------
    num_filters : int
        Number of bands.
    fft_size : int
        FFT size the filters are laid over.
    sample_rate : float
        Sample rate of the analyzed audio.
    scale : str or ScaleType, default='mel'
        Frequency scale. 'linear' yields an empty matrix.

    Returns
    -------
    np.ndarray
        Read-only float32 matrix of shape (num_filters, fft_size // 2 + 1),
        or (0, fft_size // 2 + 1) for the linear scale. Each row has at most
        two non-zero weights.

    Raises
    ------
    InvalidParameterError
        If the scale is unknown or a size parameter is out of range.

    Examples
    --------
    >>> fb = create_filter_bank(256, 512, 44100, "mel")
    >>> fb.shape
    (256, 257)
    """
    scale_type = ScaleType.parse(scale)
    validate_non_negative(num_filters, "num_filters")
    validate_positive(fft_size, "fft_size")
    validate_positive(sample_rate, "sample_rate")
    return _compute_filter_bank_np(
        int(num_filters), int(fft_size), float(sample_rate), scale_type
    )


@lru_cache(maxsize=FILTER_BANK_CACHE_MAXSIZE)
def _mlx_filters(
    num_filters: int,
    fft_size: int,
    sample_rate: float,
    scale: ScaleType,
    width: int,
) -> mx.array:
    """MLX copy of the first ``width`` columns of a cached filter matrix."""
    filters = _compute_filter_bank_np(num_filters, fft_size, sample_rate, scale)
    return mx.array(np.ascontiguousarray(filters[:, :width]))


@lru_cache(maxsize=1)
def _get_compiled_apply_fn():
    """
    Get a compiled function applying a filter matrix to one spectrum.

    Shape (F, K) @ (K,) -> (F,), expressed as a column matmul.
    """

    def _apply_core(weights: mx.array, spectrum: mx.array) -> mx.array:
        return mx.matmul(weights, spectrum[:, None])[:, 0]

    return mx.compile(_apply_core)


class FilterBank:
    """
    Reduces a magnitude spectrum to perceptual bands.

    The matrix is built once at construction and never modified, so a
    FilterBank can be shared read-only between threads.

    Parameters
    ----------
    num_filters : int
        Number of bands.
    fft_size : int
        FFT size of the spectra this bank will be applied to.
    sample_rate : float
        Sample rate of the analyzed audio.
    scale : str or ScaleType, default='mel'
        Frequency scale. With 'linear' no reduction is applied.

    Examples
    --------
    >>> bank = FilterBank(256, 512, 44100, "mel")
    >>> bands = bank.apply(spectrum)  # spectrum has 256 values
    >>> bands.shape
    (256,)
    """

    def __init__(
        self,
        num_filters: int,
        fft_size: int,
        sample_rate: float,
        scale: str | ScaleType = ScaleType.MEL,
    ) -> None:
        self._scale = ScaleType.parse(scale)
        self._filters = create_filter_bank(num_filters, fft_size, sample_rate, self._scale)
        self._num_filters = int(num_filters)
        self._fft_size = int(fft_size)
        self._sample_rate = float(sample_rate)
        self._key = (self._num_filters, self._fft_size, self._sample_rate, self._scale)
        logger.debug(
            "Built %s filter bank: %d filters over %d bins at %.1f Hz",
            self._scale.value,
            self._filters.shape[0],
            self._filters.shape[1],
            self._sample_rate,
        )

    @property
    def filters(self) -> np.ndarray:
        """Read-only filter matrix of shape (F, fft_size // 2 + 1)."""
        return self._filters

    @property
    def num_filters(self) -> int:
        """Number of bands requested at construction."""
        return self._num_filters

    @property
    def fft_size(self) -> int:
        return self._fft_size

    @property
    def sample_rate(self) -> float:
        return self._sample_rate

    @property
    def scale(self) -> ScaleType:
        return self._scale

    @property
    def is_linear(self) -> bool:
        """True when the bank performs no reduction (linear scale)."""
        return self._scale is ScaleType.LINEAR

    @property
    def spectrum_size(self) -> int:
        """Length of the spectra accepted by apply()."""
        return self._fft_size // 2

    def apply(self, spectrum: Any) -> np.ndarray:
        """
        Apply the filter bank to a magnitude spectrum.

        Parameters
        ----------
        spectrum : array-like
            Magnitude spectrum of exactly fft_size // 2 values.

        Returns
        -------
        np.ndarray
            float32 array with one value per filter, in construction order.
            For the linear scale, a copy of the input spectrum.

        Raises
        ------
        ShapeMismatchError
            If the spectrum length is not fft_size // 2.
        """
        frame = as_frame(spectrum, "spectrum")
        if frame.shape[0] != self.spectrum_size:
            raise ShapeMismatchError(
                f"Spectrum length {frame.shape[0]} does not match expected "
                f"size {self.spectrum_size}"
            )

        if self.is_linear:
            return frame.copy()
        if self._filters.shape[0] == 0:
            return np.zeros(0, dtype=np.float32)

        # Rows are one column wider than the spectrum; only the overlap counts.
        width = min(self._filters.shape[1], frame.shape[0])
        weights = _mlx_filters(*self._key, width)
        bands = _get_compiled_apply_fn()(weights, mx.array(frame[:width]))
        return np.array(bands, dtype=np.float32)

    def __repr__(self) -> str:
        return (
            f"FilterBank(num_filters={self._num_filters}, fft_size={self._fft_size}, "
            f"sample_rate={self._sample_rate}, scale={self._scale.value!r})"
        )


__all__ = ["FilterBank", "create_filter_bank"]
