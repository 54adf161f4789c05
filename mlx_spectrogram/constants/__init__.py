"""Constants module for mlx-spectrogram.

This module centralizes magic numbers and default parameters used
throughout the codebase.

Submodules:
    spectral: Mel, bark and ERB scale constants
    audio_processing: Transform, color mapping and cache defaults
"""

from __future__ import annotations

from mlx_spectrogram.constants.audio_processing import *
from mlx_spectrogram.constants.spectral import *

__all__ = [
    # Audio processing
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
    # Spectral
    "HTK_MEL_FACTOR",
    "HTK_MEL_BASE",
    "BARK_FACTOR",
    "BARK_BASE_HZ",
    "BARK_OFFSET",
    "BARK_INVERSE_LIMIT",
    "BARK_LOW_EDGE",
    "BARK_HIGH_EDGE",
    "BARK_LOW_CORRECTION",
    "BARK_HIGH_CORRECTION",
    "ERB_FREQ_FACTOR",
    "ERB_A",
    "LOG_SCALE_MIN_HZ",
]
