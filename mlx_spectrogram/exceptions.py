"""Custom exception hierarchy for mlx-spectrogram.

All mlx-spectrogram specific exceptions inherit from SpectrogramError,
making it easy to catch any library-specific error.
"""

from __future__ import annotations


class SpectrogramError(Exception):
    """Base exception for all mlx-spectrogram errors.

    Example:
        try:
            spectrum = analyzer.analyze(frame)
        except SpectrogramError as e:
            print(f"mlx-spectrogram error: {e}")
    """

    pass


class InvalidParameterError(SpectrogramError):
    """A parameter is outside the set of accepted values.

    Raised when:
        - Window, scale or colormap name is not recognized
        - Transform size is not a power of two
        - A numeric parameter is out of its valid range
    """

    pass


class ShapeMismatchError(SpectrogramError):
    """Input length does not match the configured size.

    Raised when:
        - A sample frame is not exactly the analyzer size
        - A spectrum passed to a filter bank is not fft_size // 2 long
        - Input has more than one dimension where a frame is expected
    """

    pass


class ConfigurationError(InvalidParameterError):
    """Invalid pipeline configuration.

    Raised when:
        - Config parameters are out of valid range
        - Incompatible config combinations are specified
    """

    pass


__all__ = [
    "SpectrogramError",
    "InvalidParameterError",
    "ShapeMismatchError",
    "ConfigurationError",
]
