"""Tests for window function primitives."""

import numpy as np
import pytest

from mlx_spectrogram.exceptions import InvalidParameterError
from mlx_spectrogram.primitives import WindowType, get_window

ALL_WINDOWS = [w.value for w in WindowType]


class TestWindowValues:
    """Closed-form values of each window family."""

    def test_rectangular(self):
        """Rectangular window is all ones."""
        np.testing.assert_array_equal(get_window(4, "rectangular"), np.ones(4))

    def test_hann(self):
        """Hann window has zero endpoints and symmetric interior."""
        np.testing.assert_allclose(get_window(4, "hann"), [0.0, 0.75, 0.75, 0.0], atol=1e-6)

    def test_hamming_endpoints(self):
        """Hamming window endpoints are 0.08."""
        w = get_window(16, "hamming")
        assert w[0] == pytest.approx(0.08, abs=1e-6)
        assert w[-1] == pytest.approx(0.08, abs=1e-6)

    def test_triangular_normalized_by_size(self):
        """Triangular window never reaches zero at the edges."""
        np.testing.assert_allclose(
            get_window(4, "triangular"), [0.25, 0.75, 0.75, 0.25], atol=1e-6
        )

    def test_bartlett(self):
        """Bartlett window has zero endpoints and unit center."""
        np.testing.assert_allclose(
            get_window(5, "bartlett"), [0.0, 0.5, 1.0, 0.5, 0.0], atol=1e-6
        )

    def test_bartlett_hann(self):
        """Bartlett-Hann window is zero at the edges and one at the center."""
        w = get_window(9, "bartlettHann")
        assert w[0] == pytest.approx(0.0, abs=1e-6)
        assert w[4] == pytest.approx(1.0, abs=1e-6)

    def test_blackman_default_alpha(self):
        """Blackman with alpha=0.16 is zero at the edges and one at the center."""
        w = get_window(9, "blackman")
        assert w[0] == pytest.approx(0.0, abs=1e-6)
        assert w[4] == pytest.approx(1.0, abs=1e-6)

    def test_cosine(self):
        """Cosine window peaks at the center."""
        np.testing.assert_allclose(get_window(3, "cosine"), [0.0, 1.0, 0.0], atol=1e-6)

    def test_lanczos(self):
        """Lanczos window is a sinc lobe over the frame."""
        np.testing.assert_allclose(get_window(3, "lanczos"), [0.0, 1.0, 0.0], atol=1e-6)

    def test_gauss_center(self):
        """Gauss window is one at the center."""
        w = get_window(9, "gauss", alpha=0.4)
        assert w[4] == pytest.approx(1.0, abs=1e-6)
        assert w[0] < w[2] < w[4]

    def test_gauss_alpha_controls_width(self):
        """Wider alpha widens the Gaussian."""
        narrow = get_window(64, "gauss", alpha=0.2)
        wide = get_window(64, "gauss", alpha=0.6)
        assert wide[8] > narrow[8]


class TestWindowProperties:
    """Shape, dtype and symmetry."""

    @pytest.mark.parametrize("kind", ALL_WINDOWS)
    def test_shape_and_dtype(self, kind):
        """Every window returns float32 of the requested size."""
        w = get_window(64, kind)
        assert w.shape == (64,)
        assert w.dtype == np.float32

    @pytest.mark.parametrize("kind", ALL_WINDOWS)
    def test_symmetric(self, kind):
        """Every window is symmetric about its center."""
        w = get_window(33, kind)
        np.testing.assert_allclose(w, w[::-1], atol=1e-6)

    @pytest.mark.parametrize("kind", ALL_WINDOWS)
    def test_bounded(self, kind):
        """Window values stay within [0, 1]."""
        w = get_window(128, kind)
        assert np.all(w >= -1e-6)
        assert np.all(w <= 1.0 + 1e-6)

    def test_read_only(self):
        """Returned coefficients cannot be modified."""
        w = get_window(16, "hann")
        with pytest.raises(ValueError):
            w[0] = 1.0

    def test_zero_size(self):
        """Size zero yields an empty window."""
        assert get_window(0, "hann").shape == (0,)


class TestWindowLookup:
    """Name resolution and caching."""

    def test_empty_name_is_hann(self):
        """An empty window name selects hann."""
        np.testing.assert_array_equal(get_window(32, ""), get_window(32, "hann"))

    def test_enum_and_string_equivalent(self):
        """WindowType members and their values give the same window."""
        assert get_window(32, WindowType.HAMMING) is get_window(32, "hamming")

    def test_cached(self):
        """Repeated calls return the cached array."""
        assert get_window(256, "hann") is get_window(256, "hann")

    def test_alpha_ignored_for_hann(self):
        """Alpha does not affect windows that do not use it."""
        assert get_window(64, "hann", alpha=0.5) is get_window(64, "hann")

    def test_alpha_used_for_blackman(self):
        """Alpha changes the blackman window."""
        a = get_window(64, "blackman", alpha=0.16)
        b = get_window(64, "blackman", alpha=0.5)
        assert not np.allclose(a, b)

    def test_unknown_window(self):
        """Unknown window names raise."""
        with pytest.raises(InvalidParameterError, match="Unknown window function"):
            get_window(16, "kaiser")

    def test_negative_size(self):
        """Negative sizes raise."""
        with pytest.raises(InvalidParameterError):
            get_window(-1, "hann")

    def test_parse(self):
        """WindowType.parse resolves names and rejects unknown ones."""
        assert WindowType.parse("bartlettHann") is WindowType.BARTLETT_HANN
        assert WindowType.parse("") is WindowType.HANN
        with pytest.raises(InvalidParameterError):
            WindowType.parse("HANN")
