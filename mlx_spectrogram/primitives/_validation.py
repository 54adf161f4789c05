"""
Shared argument validation for the primitives.

Every helper raises InvalidParameterError (or ShapeMismatchError for
input buffers) with the offending parameter named in the message.
"""

from __future__ import annotations

from typing import Any

import mlx.core as mx
import numpy as np

from mlx_spectrogram.exceptions import InvalidParameterError, ShapeMismatchError


def validate_positive(value: int | float, name: str) -> None:
    """Raise if ``value`` is not strictly positive."""
    if not value > 0:
        raise InvalidParameterError(f"{name} must be positive, got {value}")


def validate_non_negative(value: int | float, name: str) -> None:
    """Raise if ``value`` is negative."""
    if not value >= 0:
        raise InvalidParameterError(f"{name} must be non-negative, got {value}")


def validate_power_of_two(value: int, name: str) -> None:
    """Raise unless ``value`` is an integer power of two and at least 2."""
    if (
        isinstance(value, bool)
        or not isinstance(value, (int, np.integer))
        or value < 2
        or value & (value - 1) != 0
    ):
        raise InvalidParameterError(
            f"{name} must be a power of 2 and >= 2, got {value!r}"
        )


def as_frame(samples: Any, name: str = "samples") -> np.ndarray:
    """
    Convert a host buffer to a 1-D float32 NumPy array.

    Accepts np.ndarray, mx.array or any sequence of numbers. NumPy
    float32 input is returned without copying.

    Raises
    ------
    ShapeMismatchError
        If the buffer is not one-dimensional.
    """
    if isinstance(samples, mx.array):
        samples = np.array(samples)
    frame = np.asarray(samples, dtype=np.float32)
    if frame.ndim != 1:
        raise ShapeMismatchError(
            f"{name} must be one-dimensional, got shape {frame.shape}"
        )
    return frame


__all__ = [
    "validate_positive",
    "validate_non_negative",
    "validate_power_of_two",
    "as_frame",
]
