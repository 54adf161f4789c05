"""Analysis and display defaults for the spectrogram pipeline.

These constants define the default transform, window and color
mapping parameters shared by the primitives and the config layer.
"""

from __future__ import annotations

# Transform parameters
DEFAULT_FFT_SAMPLES = 512
"""Default FFT size (samples per analysis frame)."""

DEFAULT_WINDOW = "hann"
"""Default window function."""

DEFAULT_WINDOW_ALPHA = 0.16
"""Default shape parameter for blackman and gauss windows."""

DEFAULT_SCALE = "mel"
"""Default frequency scale for the filter bank."""

# Color mapping
DEFAULT_GAIN_DB = 20.0
"""Signal level (negated, dB) rendered at full brightness."""

DEFAULT_RANGE_DB = 80.0
"""Dynamic range (dB) below the gain level that maps to colors."""

MAGNITUDE_FLOOR = 1e-12
"""Magnitude floor applied before taking log10."""

COLOR_LEVELS = 256
"""Number of entries in a colormap lookup table."""

DEFAULT_COLOR_MAP = "roseus"
"""Default colormap name."""

# Caches
WINDOW_CACHE_MAXSIZE = 32
"""Maximum number of cached window coefficient arrays."""

FFT_PLAN_CACHE_MAXSIZE = 16
"""Maximum number of cached compiled FFT plans."""

FILTER_BANK_CACHE_MAXSIZE = 64
"""Maximum number of cached filter matrices (NumPy and MLX copies each)."""

__all__ = [
    "DEFAULT_FFT_SAMPLES",
    "DEFAULT_WINDOW",
    "DEFAULT_WINDOW_ALPHA",
    "DEFAULT_SCALE",
    "DEFAULT_GAIN_DB",
    "DEFAULT_RANGE_DB",
    "MAGNITUDE_FLOOR",
    "COLOR_LEVELS",
    "DEFAULT_COLOR_MAP",
    "WINDOW_CACHE_MAXSIZE",
    "FFT_PLAN_CACHE_MAXSIZE",
    "FILTER_BANK_CACHE_MAXSIZE",
]
