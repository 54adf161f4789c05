"""mlx-spectrogram: per-frame spectrogram pipeline on MLX.

Turns frames of time-domain audio into perceptually scaled, color-quantized
spectra for scrolling spectrogram displays.

Quick Start:
    >>> import mlx_spectrogram as ms
    >>> analyzer = ms.SpectrumAnalyzer(1024, window="hann")
    >>> bank = ms.FilterBank(512, 1024, sample_rate=44100, scale="mel")
    >>> spectrum = analyzer.analyze(frame)          # 512 magnitudes
    >>> bands = bank.apply(spectrum)                # 512 mel bands
    >>> indices = ms.to_color_indices(bands, gain_db=20, range_db=80)

    >>> indices = ms.compute_frequencies(audio, 44100, scale="bark")
    >>> indices.shape  # (channels, frames, bands)

Submodules:
    - mlx_spectrogram.primitives: Windows, scales, filter banks, analyzer, color
    - mlx_spectrogram.spectrogram: Whole-buffer processing
    - mlx_spectrogram.config: SpectrogramConfig
    - mlx_spectrogram.constants: Defaults and scale constants
    - mlx_spectrogram.exceptions: Error hierarchy
"""

from mlx_spectrogram._version import __version__
from mlx_spectrogram.config import SpectrogramConfig
from mlx_spectrogram.exceptions import (
    ConfigurationError,
    InvalidParameterError,
    ShapeMismatchError,
    SpectrogramError,
)
from mlx_spectrogram.primitives import (
    FilterBank,
    ScaleType,
    SpectrumAnalyzer,
    WindowType,
    apply_colormap,
    bark_to_hz,
    create_filter_bank,
    erb_to_hz,
    get_colormap,
    get_window,
    hz_to_bark,
    hz_to_erb,
    hz_to_log,
    hz_to_mel,
    hz_to_scale,
    log_to_hz,
    magnitude_to_db,
    mel_to_hz,
    scale_frequencies,
    scale_to_hz,
    to_color_indices,
)
from mlx_spectrogram.spectrogram import Spectrogram, compute_frequencies

__all__ = [
    "__version__",
    # Pipeline
    "SpectrumAnalyzer",
    "FilterBank",
    "create_filter_bank",
    "to_color_indices",
    "magnitude_to_db",
    "Spectrogram",
    "compute_frequencies",
    "SpectrogramConfig",
    # Windows
    "WindowType",
    "get_window",
    # Scales
    "ScaleType",
    "hz_to_scale",
    "scale_to_hz",
    "scale_frequencies",
    "hz_to_mel",
    "mel_to_hz",
    "hz_to_log",
    "log_to_hz",
    "hz_to_bark",
    "bark_to_hz",
    "hz_to_erb",
    "erb_to_hz",
    # Colormaps
    "get_colormap",
    "apply_colormap",
    # Exceptions
    "SpectrogramError",
    "InvalidParameterError",
    "ShapeMismatchError",
    "ConfigurationError",
]
