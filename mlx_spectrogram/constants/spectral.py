"""Frequency-scale constants for perceptual filter banks.

These constants define the closed-form mel, bark and ERB conversions
used by the filter-bank construction.
"""

from __future__ import annotations

import math

# HTK mel formula constants
HTK_MEL_FACTOR = 2595.0
"""HTK mel scale conversion factor."""

HTK_MEL_BASE = 700.0
"""HTK mel scale base frequency."""

# Traunmüller bark approximation
BARK_FACTOR = 26.81
"""Bark scale numerator factor."""

BARK_BASE_HZ = 1960.0
"""Bark scale base frequency."""

BARK_OFFSET = 0.53
"""Bark scale additive offset."""

BARK_INVERSE_LIMIT = 26.28
"""Asymptote of the inverse bark conversion."""

BARK_LOW_EDGE = 2.0
"""Bark value below which the low-end correction applies."""

BARK_HIGH_EDGE = 20.1
"""Bark value above which the high-end correction applies."""

BARK_LOW_CORRECTION = 0.15
"""Low-end correction slope."""

BARK_HIGH_CORRECTION = 0.22
"""High-end correction slope."""

# Equivalent rectangular bandwidth (Glasberg & Moore)
ERB_FREQ_FACTOR = 0.00437
"""ERB linear frequency factor (1/Hz)."""

ERB_A = (1000.0 * math.log(10.0)) / (24.7 * 4.37)
"""ERB-rate scale factor, A = 1000 ln(10) / (24.7 * 4.37)."""

LOG_SCALE_MIN_HZ = 1.0
"""Frequency floor applied before log10 on the logarithmic scale."""

__all__ = [
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
