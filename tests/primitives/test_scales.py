"""Tests for frequency scale primitives."""

import numpy as np
import pytest

from mlx_spectrogram.exceptions import InvalidParameterError
from mlx_spectrogram.primitives import (
    ScaleType,
    bark_to_hz,
    erb_to_hz,
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

FREQS = np.array([0.0, 20.0, 100.0, 440.0, 1000.0, 4000.0, 8000.0, 11025.0, 22050.0])


class TestMel:
    """Tests for the HTK mel scale."""

    def test_reference_value(self):
        """700 Hz sits at 2595 * log10(2) mel."""
        assert hz_to_mel(700.0) == pytest.approx(2595.0 * np.log10(2.0))

    def test_zero(self):
        """0 Hz is 0 mel."""
        assert hz_to_mel(0.0) == pytest.approx(0.0)

    def test_inverse(self):
        """mel_to_hz inverts hz_to_mel."""
        np.testing.assert_allclose(mel_to_hz(hz_to_mel(FREQS)), FREQS, atol=1e-6)


class TestLogarithmic:
    """Tests for the log10 scale."""

    def test_clamps_below_one_hz(self):
        """Frequencies below 1 Hz are clamped to log10(1) = 0."""
        np.testing.assert_allclose(hz_to_log([0.0, 0.5, 1.0]), [0.0, 0.0, 0.0])

    def test_inverse(self):
        """log_to_hz inverts hz_to_log above 1 Hz."""
        assert log_to_hz(3.0) == pytest.approx(1000.0)
        np.testing.assert_allclose(log_to_hz(hz_to_log(FREQS[1:])), FREQS[1:], rtol=1e-12)


class TestBark:
    """Tests for the Traunmüller bark scale."""

    def test_mid_range_value(self):
        """Between the correction edges the closed form applies directly."""
        expected = 26.81 * 1000.0 / (1960.0 + 1000.0) - 0.53
        assert hz_to_bark(1000.0) == pytest.approx(expected)

    def test_low_correction(self):
        """Values below 2 bark are pulled toward 2."""
        raw = 26.81 * 20.0 / (1960.0 + 20.0) - 0.53
        assert hz_to_bark(20.0) == pytest.approx(raw + 0.15 * (2.0 - raw))

    def test_high_correction(self):
        """Values above 20.1 bark are pushed away from 20.1."""
        raw = 26.81 * 16000.0 / (1960.0 + 16000.0) - 0.53
        assert hz_to_bark(16000.0) == pytest.approx(raw + 0.22 * (raw - 20.1))

    def test_inverse(self):
        """bark_to_hz inverts hz_to_bark across the audible range."""
        np.testing.assert_allclose(bark_to_hz(hz_to_bark(FREQS)), FREQS, atol=1e-6)

    @pytest.mark.parametrize("bark", [1.999, 2.0, 2.001, 20.099, 20.1, 20.101])
    def test_inverse_at_correction_edges(self, bark):
        """Round trips hold on both sides of the low and high correction edges."""
        hz = 1960.0 * (bark + 0.53) / (26.28 - bark)
        assert bark_to_hz(hz_to_bark(hz)) == pytest.approx(hz, rel=1e-9)

    def test_monotonic(self):
        """The corrected scale is strictly increasing."""
        hz = np.linspace(0.0, 22050.0, 1000)
        assert np.all(np.diff(hz_to_bark(hz)) > 0)


class TestErb:
    """Tests for the ERB-rate scale."""

    def test_zero(self):
        """0 Hz is 0 ERB."""
        assert hz_to_erb(0.0) == pytest.approx(0.0)

    def test_reference_value(self):
        """1 kHz is about 15.57 ERB."""
        assert hz_to_erb(1000.0) == pytest.approx(15.57, abs=0.01)

    def test_inverse(self):
        """erb_to_hz inverts hz_to_erb."""
        np.testing.assert_allclose(erb_to_hz(hz_to_erb(FREQS)), FREQS, atol=1e-6)


class TestScaleDispatch:
    """Tests for scale lookup by name."""

    def test_linear_is_identity(self):
        """The linear scale passes frequencies through."""
        np.testing.assert_array_equal(hz_to_scale(FREQS, "linear"), FREQS)
        np.testing.assert_array_equal(scale_to_hz(FREQS, ScaleType.LINEAR), FREQS)

    @pytest.mark.parametrize("scale", ["mel", "bark", "erb", "logarithmic"])
    def test_named_round_trip(self, scale):
        """hz_to_scale and scale_to_hz are inverses for each named scale."""
        # The logarithmic scale clamps below 1 Hz.
        freqs = FREQS[1:] if scale == "logarithmic" else FREQS
        np.testing.assert_allclose(
            scale_to_hz(hz_to_scale(freqs, scale), scale), freqs, rtol=1e-9, atol=1e-6
        )

    def test_unknown_scale(self):
        """Unknown scale names raise."""
        with pytest.raises(InvalidParameterError, match="Unknown scale type"):
            hz_to_scale(1000.0, "semitone")


class TestScaleFrequencies:
    """Tests for evenly spaced frequencies on a scale."""

    def test_linear(self):
        """Linear spacing is plain linspace."""
        np.testing.assert_allclose(
            scale_frequencies(3, 0.0, 8000.0, "linear"), [0.0, 4000.0, 8000.0]
        )

    @pytest.mark.parametrize("scale", ["mel", "bark", "erb", "logarithmic"])
    def test_endpoints_and_order(self, scale):
        """Endpoints are reproduced and points increase."""
        freqs = scale_frequencies(10, 20.0, 20000.0, scale)
        assert freqs.shape == (10,)
        assert freqs[0] == pytest.approx(20.0, rel=1e-9)
        assert freqs[-1] == pytest.approx(20000.0, rel=1e-9)
        assert np.all(np.diff(freqs) > 0)

    def test_mel_even_in_mel(self):
        """Mel-spaced points are evenly spaced in mel."""
        freqs = scale_frequencies(8, 0.0, 8000.0, "mel")
        steps = np.diff(hz_to_mel(freqs))
        np.testing.assert_allclose(steps, steps[0], rtol=1e-9)

    def test_empty(self):
        """Zero points yields an empty array."""
        assert scale_frequencies(0, 0.0, 8000.0, "mel").shape == (0,)

    def test_negative_count(self):
        """Negative counts raise."""
        with pytest.raises(InvalidParameterError):
            scale_frequencies(-1, 0.0, 8000.0, "mel")
