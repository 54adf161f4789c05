"""Tests for colormap lookup tables."""

import numpy as np
import pytest

from mlx_spectrogram.exceptions import InvalidParameterError
from mlx_spectrogram.primitives import apply_colormap, get_colormap


class TestGetColormap:
    """Tests for get_colormap."""

    @pytest.mark.parametrize("name", ["gray", "igray", "roseus"])
    def test_named_tables(self, name):
        """Named colormaps are 256 RGBA rows in [0, 1] with opaque alpha."""
        table = get_colormap(name)
        assert table.shape == (256, 4)
        assert table.dtype == np.float32
        assert np.all((table >= 0.0) & (table <= 1.0))
        np.testing.assert_array_equal(table[:, 3], 1.0)

    def test_gray_runs_light_to_dark(self):
        """gray goes from near white at 0 to black at 255."""
        table = get_colormap("gray")
        assert table[0, 0] == pytest.approx(255 / 256)
        assert table[255, 0] == pytest.approx(0.0)
        assert np.all(np.diff(table[:, 0]) < 0)

    def test_igray_runs_dark_to_light(self):
        """igray is gray reversed."""
        table = get_colormap("igray")
        assert table[0, 0] == pytest.approx(0.0)
        assert table[255, 0] == pytest.approx(255 / 256)
        np.testing.assert_allclose(table, get_colormap("gray")[::-1])

    def test_roseus_endpoints(self):
        """roseus starts near black and ends near white."""
        table = get_colormap("roseus")
        np.testing.assert_allclose(table[0, :3], [0.004528, 0.004341, 0.004307], atol=1e-6)
        np.testing.assert_allclose(table[255, :3], [0.997930, 0.983217, 0.976920], atol=1e-6)

    def test_named_tables_read_only(self):
        """Named tables cannot be modified."""
        with pytest.raises(ValueError):
            get_colormap("roseus")[0, 0] = 1.0

    def test_custom_table(self):
        """A custom (256, 4) table is accepted as float32."""
        custom = np.linspace(0, 1, 256 * 4).reshape(256, 4)
        table = get_colormap(custom)
        assert table.dtype == np.float32
        np.testing.assert_allclose(table, custom, rtol=1e-6)

    def test_unknown_name(self):
        """Unknown names raise."""
        with pytest.raises(InvalidParameterError, match="No such colormap"):
            get_colormap("viridis")

    def test_short_table(self):
        """Tables with fewer than 256 rows raise."""
        with pytest.raises(InvalidParameterError, match="256 elements"):
            get_colormap(np.zeros((255, 4)))

    def test_wrong_entry_width(self):
        """Entries must have exactly 4 values."""
        with pytest.raises(InvalidParameterError, match="4 values"):
            get_colormap(np.zeros((256, 3)))


class TestApplyColormap:
    """Tests for apply_colormap."""

    def test_lookup(self):
        """Each index selects its table row."""
        indices = np.array([[0, 128], [255, 1]], dtype=np.uint8)
        rgba = apply_colormap(indices, "igray")

        assert rgba.shape == (2, 2, 4)
        np.testing.assert_allclose(rgba[0, 1], [0.5, 0.5, 0.5, 1.0])
        np.testing.assert_allclose(rgba[1, 0, :3], 255 / 256)

    def test_requires_uint8(self):
        """Non-uint8 indices raise."""
        with pytest.raises(InvalidParameterError, match="uint8"):
            apply_colormap(np.array([0, 1, 2], dtype=np.int64))
