"""
Spectrogram primitives.

Window functions, frequency scales, filter banks, the spectrum analyzer
and color quantization. Everything here works on single frames; see
mlx_spectrogram.spectrogram for whole-buffer processing.
"""

from .analyzer import SpectrumAnalyzer
from .color import magnitude_to_db, to_color_indices
from .colormaps import apply_colormap, get_colormap
from .filterbank import FilterBank, create_filter_bank
from .scales import (
    ScaleType,
    bark_to_hz,
    erb_to_hz,
    get_scale_functions,
    hz_to_bark,
    hz_to_erb,
    hz_to_log,
    hz_to_mel,
    hz_to_scale,
    log_to_hz,
    mel_to_hz,
    scale_frequencies,
    scale_to_hz,
)
from .windows import WindowType, get_window

__all__ = [
    # Windows
    "WindowType",
    "get_window",
    # Scales
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
    # Filter banks
    "FilterBank",
    "create_filter_bank",
    # Analysis
    "SpectrumAnalyzer",
    # Color
    "magnitude_to_db",
    "to_color_indices",
    "get_colormap",
    "apply_colormap",
]
