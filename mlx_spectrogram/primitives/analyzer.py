"""
Windowed magnitude spectrum analysis.

Provides SpectrumAnalyzer, which turns fixed-size sample frames into
single-sided magnitude spectra using a compiled MLX FFT plan.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any

import mlx.core as mx
import numpy as np

from mlx_spectrogram.constants import (
    DEFAULT_WINDOW_ALPHA,
    FFT_PLAN_CACHE_MAXSIZE,
)
from mlx_spectrogram.exceptions import ShapeMismatchError

from ._validation import as_frame, validate_power_of_two
from .windows import WindowType, get_window

logger = logging.getLogger(__name__)


@lru_cache(maxsize=FFT_PLAN_CACHE_MAXSIZE)
def _get_fft_plan(size: int):
    """
    Get the compiled forward FFT for a transform size.

    The plan takes a complex64 frame and returns the real and imaginary
    parts of its DFT as two float32 arrays.
    """

    def _fft_core(frame: mx.array) -> tuple[mx.array, mx.array]:
        spectrum = mx.fft.fft(frame, n=size)
        return mx.real(spectrum), mx.imag(spectrum)

    return mx.compile(_fft_core)


class SpectrumAnalyzer:
    """
    Converts sample frames into magnitude spectra.

    The analyzer owns its window, its FFT plan and a complex scratch
    buffer that every call overwrites in place. It is not reentrant:
    use one analyzer per channel (or per thread).

    Parameters
    ----------
    size : int
        Transform size. Must be a power of two and at least 2.
    window : str or WindowType, default='hann'
        Window function applied to every frame.
    alpha : float, default=0.16
        Window shape parameter (blackman, gauss).

    Raises
    ------
    InvalidParameterError
        If ``size`` is not a power of two or the window is unknown.

    Examples
    --------
    >>> analyzer = SpectrumAnalyzer(8, "rectangular")
    >>> analyzer.analyze([1, 0, 0, 0, 0, 0, 0, 0])
    array([0.25, 0.25, 0.25, 0.25], dtype=float32)
    """

    def __init__(
        self,
        size: int,
        window: str | WindowType = WindowType.HANN,
        alpha: float = DEFAULT_WINDOW_ALPHA,
    ) -> None:
        validate_power_of_two(size, "FFT size")
        self._size = int(size)
        self._window_type = WindowType.parse(window)
        self._alpha = float(alpha)
        self._window = get_window(self._size, self._window_type, self._alpha)
        self._scratch = np.zeros(self._size, dtype=np.complex64)
        self._plan = _get_fft_plan(self._size)
        self._scale = 2.0 / self._size

        self._peak = 0.0
        self._peak_band = 0

        logger.debug(
            "Created spectrum analyzer: size=%d window=%s alpha=%.3f",
            self._size,
            self._window_type.value,
            self._alpha,
        )

    @property
    def size(self) -> int:
        """Transform size (samples per frame)."""
        return self._size

    @property
    def window(self) -> np.ndarray:
        """Read-only window coefficients."""
        return self._window

    @property
    def window_type(self) -> WindowType:
        return self._window_type

    @property
    def alpha(self) -> float:
        return self._alpha

    @property
    def num_bins(self) -> int:
        """Length of the spectra returned by analyze()."""
        return self._size // 2

    @property
    def peak(self) -> float:
        """Largest magnitude produced since construction or reset_peak()."""
        return self._peak

    @property
    def peak_band(self) -> int:
        """Bin index of ``peak``."""
        return self._peak_band

    def reset_peak(self) -> None:
        """Forget the tracked peak."""
        self._peak = 0.0
        self._peak_band = 0

    def analyze(self, samples: Any) -> np.ndarray:
        """
        Compute the magnitude spectrum of one frame.

        Parameters
        ----------
        samples : array-like
            Exactly ``size`` time-domain samples.

        Returns
        -------
        np.ndarray
            float32 array of shape (size // 2,) holding
            ``|X[k]| * 2 / size`` for bins 0 .. size / 2 - 1.

        Raises
        ------
        ShapeMismatchError
            If the frame length does not match the analyzer size.
        """
        frame = as_frame(samples)
        if frame.shape[0] != self._size:
            raise ShapeMismatchError(
                f"Input buffer size {frame.shape[0]} does not match FFT size "
                f"{self._size}"
            )

        scratch = self._scratch
        np.multiply(frame, self._window, out=scratch.real)
        scratch.imag[:] = 0.0

        real, imag = self._plan(mx.array(scratch))
        scratch.real[:] = np.array(real)
        scratch.imag[:] = np.array(imag)

        spectrum = (np.abs(scratch[: self.num_bins]) * self._scale).astype(
            np.float32, copy=False
        )

        band = int(np.argmax(spectrum))
        if spectrum[band] > self._peak:
            self._peak = float(spectrum[band])
            self._peak_band = band

        return spectrum

    def __repr__(self) -> str:
        return (
            f"SpectrumAnalyzer(size={self._size}, "
            f"window={self._window_type.value!r}, alpha={self._alpha})"
        )


__all__ = ["SpectrumAnalyzer"]
