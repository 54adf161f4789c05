"""
Magnitude to color-index quantization.

Maps magnitudes onto 8-bit colormap indices through a decibel window:
levels at or above ``-gain_db`` dB are 255, levels at or below
``-(gain_db + range_db)`` dB are 0, and the band in between is spread
linearly over the indices. Based on the Audacity spectrogram display
settings (https://manual.audacityteam.org/man/spectrogram_view.html).
"""

from __future__ import annotations

from typing import Any

import numpy as np

from mlx_spectrogram.constants import (
    COLOR_LEVELS,
    DEFAULT_GAIN_DB,
    DEFAULT_RANGE_DB,
    MAGNITUDE_FLOOR,
)

from ._validation import as_frame, validate_positive

_MAX_INDEX = COLOR_LEVELS - 1


def magnitude_to_db(spectrum: Any) -> np.ndarray:
    """
    Convert magnitudes to decibels, 20 * log10(m).

    Magnitudes at or below 1e-12 (and NaN) are floored to 1e-12, so the
    result is never below -240 dB.
    """
    magnitudes = np.asarray(spectrum, dtype=np.float64)
    # NaN fails the comparison and falls to the floor.
    floored = np.where(magnitudes > MAGNITUDE_FLOOR, magnitudes, MAGNITUDE_FLOOR)
    return 20.0 * np.log10(floored)


def to_color_indices(
    spectrum: Any,
    gain_db: float = DEFAULT_GAIN_DB,
    range_db: float = DEFAULT_RANGE_DB,
) -> np.ndarray:
    """
    Quantize a magnitude spectrum to colormap indices.

    Parameters
    ----------
    spectrum : array-like
        Non-negative magnitudes.
    gain_db : float, default=20.0
        Levels at or above ``-gain_db`` dB map to 255.
    range_db : float, default=80.0
        Width of the dB band below ``-gain_db`` that maps onto 1..255.
        Must be positive.

    Returns
    -------
    np.ndarray
        uint8 array with one index per magnitude.

    Examples
    --------
    >>> to_color_indices([1.0, 1e-3, 1e-9])
    array([255, 129,   0], dtype=uint8)
    """
    validate_positive(range_db, "range_db")
    magnitudes = as_frame(spectrum, "spectrum")
    # NaN fails the comparison and falls to the floor.
    floored = np.where(magnitudes > MAGNITUDE_FLOOR, magnitudes, np.float32(MAGNITUDE_FLOOR))
    value_db = magnitude_to_db(floored)

    # round half away from zero (the scaled values are positive), then
    # saturate like a float -> u8 cast: the top of the band lands on 256.
    scaled = np.floor((value_db + gain_db) / range_db * _MAX_INDEX + COLOR_LEVELS + 0.5)
    indices = np.clip(scaled, 0, _MAX_INDEX)

    # Thresholds are compared in float32 magnitudes, where the input was
    # rounded, so a magnitude exactly on a threshold lands on its edge index.
    with np.errstate(over="ignore"):
        low = np.float32(10.0 ** (-(gain_db + range_db) / 20.0))
        high = np.float32(10.0 ** (-gain_db / 20.0))
    indices = np.where(floored <= low, 0, indices)
    indices = np.where(floored >= high, _MAX_INDEX, indices)
    return indices.astype(np.uint8)


__all__ = ["magnitude_to_db", "to_color_indices"]
