"""
Perceptual frequency scales.

Provides forward (Hz -> scale) and inverse (scale -> Hz) conversions for
the mel, logarithmic, bark and ERB scales, plus the identity linear scale.

Note: the conversions are NumPy-based and accept scalars or arrays. Scalar
input returns a NumPy float64 scalar.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable

import numpy as np
from numpy.typing import ArrayLike

from mlx_spectrogram.constants import (
    BARK_BASE_HZ,
    BARK_FACTOR,
    BARK_HIGH_CORRECTION,
    BARK_HIGH_EDGE,
    BARK_INVERSE_LIMIT,
    BARK_LOW_CORRECTION,
    BARK_LOW_EDGE,
    BARK_OFFSET,
    ERB_A,
    ERB_FREQ_FACTOR,
    HTK_MEL_BASE,
    HTK_MEL_FACTOR,
    LOG_SCALE_MIN_HZ,
)
from mlx_spectrogram.exceptions import InvalidParameterError


class ScaleType(str, Enum):
    """Supported frequency scales."""

    LINEAR = "linear"
    LOGARITHMIC = "logarithmic"
    MEL = "mel"
    BARK = "bark"
    ERB = "erb"

    @classmethod
    def parse(cls, scale: str | ScaleType) -> ScaleType:
        """Resolve a scale name."""
        if isinstance(scale, cls):
            return scale
        try:
            return cls(scale)
        except ValueError:
            supported = ", ".join(s.value for s in cls)
            raise InvalidParameterError(
                f"Unknown scale type: {scale!r}. Supported: {supported}"
            ) from None


def hz_to_mel(hz: ArrayLike) -> np.ndarray:
    """Convert Hz to mel using the HTK formula, 2595 * log10(1 + f / 700)."""
    hz = np.asarray(hz, dtype=np.float64)
    return HTK_MEL_FACTOR * np.log10(1.0 + hz / HTK_MEL_BASE)


def mel_to_hz(mel: ArrayLike) -> np.ndarray:
    """Convert mel to Hz, 700 * (10^(m / 2595) - 1)."""
    mel = np.asarray(mel, dtype=np.float64)
    return HTK_MEL_BASE * (10.0 ** (mel / HTK_MEL_FACTOR) - 1.0)


def hz_to_log(hz: ArrayLike) -> np.ndarray:
    """Convert Hz to log10, clamping frequencies below 1 Hz."""
    hz = np.asarray(hz, dtype=np.float64)
    return np.log10(np.maximum(hz, LOG_SCALE_MIN_HZ))


def log_to_hz(value: ArrayLike) -> np.ndarray:
    """Convert log10 frequency back to Hz."""
    value = np.asarray(value, dtype=np.float64)
    return 10.0**value


def hz_to_bark(hz: ArrayLike) -> np.ndarray:
    """
    Convert Hz to bark (Traunmüller approximation).

    The low-end correction is applied first and the high-end correction
    second, each on the already corrected value.
    """
    hz = np.asarray(hz, dtype=np.float64)
    bark = (BARK_FACTOR * hz) / (BARK_BASE_HZ + hz) - BARK_OFFSET
    bark = np.where(
        bark < BARK_LOW_EDGE, bark + BARK_LOW_CORRECTION * (BARK_LOW_EDGE - bark), bark
    )
    bark = np.where(
        bark > BARK_HIGH_EDGE, bark + BARK_HIGH_CORRECTION * (bark - BARK_HIGH_EDGE), bark
    )
    return bark


def bark_to_hz(bark: ArrayLike) -> np.ndarray:
    """
    Convert bark to Hz.

    Undoes the piecewise corrections of hz_to_bark in the same order
    before applying the closed-form inverse.
    """
    bark = np.asarray(bark, dtype=np.float64)
    bark = np.where(
        bark < BARK_LOW_EDGE,
        (bark - BARK_LOW_EDGE * BARK_LOW_CORRECTION) / (1.0 - BARK_LOW_CORRECTION),
        bark,
    )
    bark = np.where(
        bark > BARK_HIGH_EDGE,
        (bark + BARK_HIGH_EDGE * BARK_HIGH_CORRECTION) / (1.0 + BARK_HIGH_CORRECTION),
        bark,
    )
    return BARK_BASE_HZ * ((bark + BARK_OFFSET) / (BARK_INVERSE_LIMIT - bark))


def hz_to_erb(hz: ArrayLike) -> np.ndarray:
    """Convert Hz to ERB-rate, A * log10(1 + 0.00437 f)."""
    hz = np.asarray(hz, dtype=np.float64)
    return ERB_A * np.log10(1.0 + hz * ERB_FREQ_FACTOR)


def erb_to_hz(erb: ArrayLike) -> np.ndarray:
    """Convert ERB-rate back to Hz."""
    erb = np.asarray(erb, dtype=np.float64)
    return (10.0 ** (erb / ERB_A) - 1.0) / ERB_FREQ_FACTOR


def _identity(value: ArrayLike) -> np.ndarray:
    return np.asarray(value, dtype=np.float64)


ScaleFn = Callable[[ArrayLike], np.ndarray]

_SCALE_FUNCTIONS: dict[ScaleType, tuple[ScaleFn, ScaleFn]] = {
    ScaleType.LINEAR: (_identity, _identity),
    ScaleType.LOGARITHMIC: (hz_to_log, log_to_hz),
    ScaleType.MEL: (hz_to_mel, mel_to_hz),
    ScaleType.BARK: (hz_to_bark, bark_to_hz),
    ScaleType.ERB: (hz_to_erb, erb_to_hz),
}


def get_scale_functions(scale: str | ScaleType) -> tuple[ScaleFn, ScaleFn]:
    """
    Look up the (hz_to_scale, scale_to_hz) pair for a scale.

    Raises
    ------
    InvalidParameterError
        If the scale name is not recognized.
    """
    return _SCALE_FUNCTIONS[ScaleType.parse(scale)]


def hz_to_scale(hz: ArrayLike, scale: str | ScaleType) -> np.ndarray:
    """Convert Hz to the named scale."""
    forward, _ = get_scale_functions(scale)
    return forward(hz)


def scale_to_hz(value: ArrayLike, scale: str | ScaleType) -> np.ndarray:
    """Convert a value on the named scale back to Hz."""
    _, inverse = get_scale_functions(scale)
    return inverse(value)


def scale_frequencies(
    num: int,
    fmin: float,
    fmax: float,
    scale: str | ScaleType,
) -> np.ndarray:
    """
    Frequencies evenly spaced on a perceptual scale.

    Useful for placing axis labels: label ``i`` of ``num`` sits at
    ``scale_to_hz(smin + i / (num - 1) * (smax - smin))``.

    Parameters
    ----------
    num : int
        Number of frequencies, endpoints included.
    fmin, fmax : float
        Frequency range in Hz.
    scale : str or ScaleType
        Scale to space the points on.

    Returns
    -------
    np.ndarray
        float64 array of shape (num,).

    Examples
    --------
    >>> scale_frequencies(3, 0.0, 8000.0, "linear")
    array([   0., 4000., 8000.])
    """
    if num < 0:
        raise InvalidParameterError(f"num must be non-negative, got {num}")
    forward, inverse = get_scale_functions(scale)
    points = np.linspace(forward(fmin), forward(fmax), num)
    return inverse(points)


__all__ = [
    "ScaleType",
    "hz_to_mel",
    "mel_to_hz",
    "hz_to_log",
    "log_to_hz",
    "hz_to_bark",
    "bark_to_hz",
    "hz_to_erb",
    "erb_to_hz",
    "get_scale_functions",
    "hz_to_scale",
    "scale_to_hz",
    "scale_frequencies",
]
