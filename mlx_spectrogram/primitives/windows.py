"""
Window functions for spectral analysis.

Provides the closed-form window families used by the spectrum analyzer.
Windows are computed in float64 with NumPy, cached, and returned as
read-only float32 arrays.

Note: with n = size - 1 most formulas divide by n, so ``size`` must be at
least 2. Smaller sizes are not rejected; they produce NaN/Inf values.
"""

from __future__ import annotations

from enum import Enum
from functools import lru_cache
from typing import Callable

import numpy as np

from mlx_spectrogram.constants import DEFAULT_WINDOW_ALPHA, WINDOW_CACHE_MAXSIZE
from mlx_spectrogram.exceptions import InvalidParameterError


class WindowType(str, Enum):
    """Supported window families."""

    RECTANGULAR = "rectangular"
    TRIANGULAR = "triangular"
    BARTLETT = "bartlett"
    BARTLETT_HANN = "bartlettHann"
    BLACKMAN = "blackman"
    COSINE = "cosine"
    GAUSS = "gauss"
    HAMMING = "hamming"
    HANN = "hann"
    LANCZOS = "lanczos"

    @classmethod
    def parse(cls, kind: str | WindowType) -> WindowType:
        """Resolve a window name. The empty string selects hann."""
        if isinstance(kind, cls):
            return kind
        if kind == "":
            return cls.HANN
        try:
            return cls(kind)
        except ValueError:
            supported = ", ".join(w.value for w in cls)
            raise InvalidParameterError(
                f"Unknown window function: {kind!r}. Supported: {supported}"
            ) from None


def _rectangular(i: np.ndarray, size: int, alpha: float) -> np.ndarray:
    return np.ones_like(i)


def _triangular(i: np.ndarray, size: int, alpha: float) -> np.ndarray:
    # Normalized by size rather than size - 1, unlike bartlett.
    return (2.0 / size) * (size / 2.0 - np.abs(i - (size - 1) / 2.0))


def _bartlett(i: np.ndarray, size: int, alpha: float) -> np.ndarray:
    n = size - 1
    return (2.0 / n) * (n / 2.0 - np.abs(i - n / 2.0))


def _bartlett_hann(i: np.ndarray, size: int, alpha: float) -> np.ndarray:
    ratio = i / (size - 1)
    return 0.62 - 0.48 * np.abs(ratio - 0.5) - 0.38 * np.cos(2.0 * np.pi * ratio)


def _blackman(i: np.ndarray, size: int, alpha: float) -> np.ndarray:
    phase = 2.0 * np.pi * i / (size - 1)
    return (1.0 - alpha) / 2.0 - 0.5 * np.cos(phase) + (alpha / 2.0) * np.cos(2.0 * phase)


def _cosine(i: np.ndarray, size: int, alpha: float) -> np.ndarray:
    return np.cos(np.pi * i / (size - 1) - np.pi / 2.0)


def _gauss(i: np.ndarray, size: int, alpha: float) -> np.ndarray:
    n = size - 1
    sigma = alpha * n / 2.0
    x = (i - n / 2.0) / sigma
    return np.exp(-0.5 * x * x)


def _hamming(i: np.ndarray, size: int, alpha: float) -> np.ndarray:
    return 0.54 - 0.46 * np.cos(2.0 * np.pi * i / (size - 1))


def _hann(i: np.ndarray, size: int, alpha: float) -> np.ndarray:
    return 0.5 * (1.0 - np.cos(2.0 * np.pi * i / (size - 1)))


def _lanczos(i: np.ndarray, size: int, alpha: float) -> np.ndarray:
    # np.sinc is the normalized sinc, sin(pi x) / (pi x), with sinc(0) == 1
    return np.sinc(2.0 * i / (size - 1) - 1.0)


_WINDOW_FUNCTIONS: dict[WindowType, Callable[[np.ndarray, int, float], np.ndarray]] = {
    WindowType.RECTANGULAR: _rectangular,
    WindowType.TRIANGULAR: _triangular,
    WindowType.BARTLETT: _bartlett,
    WindowType.BARTLETT_HANN: _bartlett_hann,
    WindowType.BLACKMAN: _blackman,
    WindowType.COSINE: _cosine,
    WindowType.GAUSS: _gauss,
    WindowType.HAMMING: _hamming,
    WindowType.HANN: _hann,
    WindowType.LANCZOS: _lanczos,
}

# Only these families read the shape parameter.
_ALPHA_WINDOWS = frozenset({WindowType.BLACKMAN, WindowType.GAUSS})


@lru_cache(maxsize=WINDOW_CACHE_MAXSIZE)
def _compute_window(size: int, kind: WindowType, alpha: float) -> np.ndarray:
    i = np.arange(size, dtype=np.float64)
    with np.errstate(divide="ignore", invalid="ignore"):
        values = _WINDOW_FUNCTIONS[kind](i, size, alpha)
    window = values.astype(np.float32)
    window.flags.writeable = False
    return window


def get_window(
    size: int,
    kind: str | WindowType = WindowType.HANN,
    alpha: float = DEFAULT_WINDOW_ALPHA,
) -> np.ndarray:
    """
    Generate window coefficients.

    Results are cached for repeated calls with identical parameters.

    Parameters
    ----------
    size : int
        Number of coefficients. Must be >= 2 for meaningful output.
    kind : str or WindowType, default='hann'
        Window family. One of: rectangular, triangular, bartlett,
        bartlettHann, blackman, cosine, gauss, hamming, hann, lanczos.
        An empty string selects hann.
    alpha : float, default=0.16
        Shape parameter. Blends the cosine terms of the blackman window
        and sets the gauss standard deviation to ``alpha * (size - 1) / 2``.
        Ignored by the other families.

    Returns
    -------
    np.ndarray
        Read-only float32 array of shape (size,).

    Raises
    ------
    InvalidParameterError
        If ``kind`` is not a supported window or ``size`` is negative.

    Examples
    --------
    >>> get_window(4, "rectangular")
    array([1., 1., 1., 1.], dtype=float32)
    """
    window_type = WindowType.parse(kind)
    if size < 0:
        raise InvalidParameterError(f"size must be non-negative, got {size}")
    if window_type not in _ALPHA_WINDOWS:
        alpha = DEFAULT_WINDOW_ALPHA
    return _compute_window(int(size), window_type, float(alpha))


__all__ = ["WindowType", "get_window"]
