"""Configuration for the spectrogram pipeline.

Provides a validated dataclass holding every analysis and display
parameter, with dictionary round-tripping and named presets.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any, ClassVar, Self

from mlx_spectrogram.constants import (
    DEFAULT_COLOR_MAP,
    DEFAULT_FFT_SAMPLES,
    DEFAULT_GAIN_DB,
    DEFAULT_RANGE_DB,
    DEFAULT_SCALE,
    DEFAULT_WINDOW,
    DEFAULT_WINDOW_ALPHA,
)
from mlx_spectrogram.exceptions import ConfigurationError, InvalidParameterError
from mlx_spectrogram.primitives._validation import validate_power_of_two
from mlx_spectrogram.primitives.colormaps import get_colormap
from mlx_spectrogram.primitives.scales import ScaleType
from mlx_spectrogram.primitives.windows import WindowType


@dataclass
class SpectrogramConfig:
    """Spectrogram pipeline configuration.

    Attributes:
        fft_samples: Samples per FFT frame (power of two)
        window: Window function name
        alpha: Window shape parameter, between 0 and 1 (None = 0.16)
        noverlap: Samples shared by consecutive frames (None = fft_samples // 2)
        scale: Frequency scale ('linear', 'logarithmic', 'mel', 'bark', 'erb')
        num_filters: Filter-bank bands (None = fft_samples // 2)
        gain_db: Level (negated, dB) shown at full brightness
        range_db: Dynamic range below the gain level, in dB
        split_channels: Analyze every channel instead of the first only
        color_map: Colormap name or a (256, 4) RGBA table

    Example:
        >>> config = SpectrogramConfig.from_dict({"fft_samples": 1024})
        >>> config.resolved_noverlap
        512
    """

    fft_samples: int = DEFAULT_FFT_SAMPLES
    window: str = DEFAULT_WINDOW
    alpha: float | None = None
    noverlap: int | None = None
    scale: str = DEFAULT_SCALE
    num_filters: int | None = None
    gain_db: float = DEFAULT_GAIN_DB
    range_db: float = DEFAULT_RANGE_DB
    split_channels: bool = False
    color_map: Any = DEFAULT_COLOR_MAP

    _config_registry: ClassVar[dict[str, str]] = {
        "default": "quality",
        "quality": "quality",
        "fast": "fast",
    }

    def __post_init__(self) -> None:
        self._validate()

    # =========================================================================
    # Presets
    # =========================================================================

    @classmethod
    def quality(cls) -> Self:
        """Full-resolution defaults."""
        return cls()

    @classmethod
    def fast(cls) -> Self:
        """Lower FFT resolution for cheaper per-frame analysis."""
        return cls(fft_samples=256)

    @classmethod
    def from_name(cls, name: str) -> Self:
        """Create config from a preset name.

        Raises:
            ConfigurationError: If name is not recognized
        """
        normalized = name.lower().replace("-", "_")
        if normalized not in cls._config_registry:
            raise ConfigurationError(
                f"Unknown preset: {name!r}. "
                f"Available: {', '.join(sorted(cls._config_registry))}"
            )
        return getattr(cls, cls._config_registry[normalized])()

    # =========================================================================
    # Serialization
    # =========================================================================

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Self:
        """Create a config instance from a dictionary.

        Only keys that correspond to valid fields are used.
        Extra keys are silently ignored.
        """
        valid_fields = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in d.items() if k in valid_fields})

    def to_dict(self) -> dict[str, Any]:
        """Convert config to a dictionary."""
        return asdict(self)

    # =========================================================================
    # Derived values
    # =========================================================================

    @property
    def resolved_alpha(self) -> float:
        return DEFAULT_WINDOW_ALPHA if self.alpha is None else float(self.alpha)

    @property
    def resolved_noverlap(self) -> int:
        return self.fft_samples // 2 if self.noverlap is None else int(self.noverlap)

    @property
    def resolved_num_filters(self) -> int:
        return self.fft_samples // 2 if self.num_filters is None else int(self.num_filters)

    @property
    def hop_length(self) -> int:
        """Samples between the starts of consecutive frames."""
        return self.fft_samples - self.resolved_noverlap

    # =========================================================================
    # Validation utilities
    # =========================================================================

    def _validate(self) -> None:
        """Validate configuration values.

        Raises:
            ConfigurationError: If validation fails
        """
        fft = self.fft_samples
        try:
            validate_power_of_two(fft, "fft_samples")
        except InvalidParameterError as e:
            raise ConfigurationError(str(e)) from e

        self._validate_one_of(
            self.window, "window", [w.value for w in WindowType] + [""]
        )
        self._validate_one_of(self.scale, "scale", [s.value for s in ScaleType])

        if self.alpha is not None:
            self._validate_range(self.alpha, "alpha", 0.0, 1.0)
        if self.noverlap is not None:
            self._validate_non_negative(self.noverlap, "noverlap")
            if self.noverlap >= fft:
                raise ConfigurationError(
                    f"noverlap must be less than fft_samples ({fft}), got {self.noverlap}"
                )
        if self.num_filters is not None:
            self._validate_non_negative(self.num_filters, "num_filters")

        self._validate_positive(self.range_db, "range_db")

        try:
            get_colormap(self.color_map)
        except InvalidParameterError as e:
            raise ConfigurationError(f"color_map: {e}") from e

    @staticmethod
    def _validate_positive(value: int | float, name: str) -> None:
        if value <= 0:
            raise ConfigurationError(f"{name} must be positive, got {value}")

    @staticmethod
    def _validate_non_negative(value: int | float, name: str) -> None:
        if value < 0:
            raise ConfigurationError(f"{name} must be non-negative, got {value}")

    @staticmethod
    def _validate_range(
        value: int | float,
        name: str,
        min_val: int | float,
        max_val: int | float,
    ) -> None:
        if not (min_val <= value <= max_val):
            raise ConfigurationError(
                f"{name} must be in [{min_val}, {max_val}], got {value}"
            )

    @staticmethod
    def _validate_one_of(value: Any, name: str, choices: set | list | tuple) -> None:
        if value not in choices:
            raise ConfigurationError(
                f"{name} must be one of {sorted(choices)}, got {value!r}"
            )


__all__ = ["SpectrogramConfig"]
