"""Tests for filter bank primitives."""

import numpy as np
import pytest

import mlx.core as mx
from mlx_spectrogram.exceptions import InvalidParameterError, ShapeMismatchError
from mlx_spectrogram.primitives import FilterBank, create_filter_bank


class TestCreateFilterBank:
    """Tests for filter matrix construction."""

    def test_shape(self):
        """Matrix has one row per filter and fft_size // 2 + 1 columns."""
        fb = create_filter_bank(256, 512, 44100, "mel")
        assert fb.shape == (256, 257)
        assert fb.dtype == np.float32

    @pytest.mark.parametrize("scale", ["mel", "bark", "erb", "logarithmic"])
    def test_two_point_rows(self, scale):
        """Each row interpolates between two adjacent bins with weights summing to 1."""
        fb = create_filter_bank(128, 512, 44100, scale)
        assert np.all((fb >= 0.0) & (fb <= 1.0))
        assert np.all(np.count_nonzero(fb, axis=1) <= 2)
        np.testing.assert_allclose(fb.sum(axis=1), 1.0, atol=1e-6)

        for row in fb:
            nz = np.nonzero(row)[0]
            if len(nz) == 2:
                assert nz[1] == nz[0] + 1

    @pytest.mark.parametrize("scale", ["mel", "bark", "erb"])
    def test_centers_increase(self, scale):
        """Band centers move up in frequency from row to row."""
        fb = create_filter_bank(64, 1024, 44100, scale)
        bins = np.arange(fb.shape[1])
        centers = fb @ bins
        assert np.all(np.diff(centers) >= 0)
        assert centers[-1] > centers[0]

    def test_first_row_at_dc(self):
        """The first band center is 0 Hz, all weight on bin 0."""
        fb = create_filter_bank(64, 512, 44100, "mel")
        assert fb[0, 0] == pytest.approx(1.0)
        assert fb[0, 1] == pytest.approx(0.0)

    def test_log_scale_clamps_low_edge(self):
        """The logarithmic scale starts at 1 Hz, not 0 Hz."""
        fb = create_filter_bank(2, 8, 8000, "logarithmic")
        # Centers at 1 Hz and 10^(log10(4000) / 2) Hz over 1000 Hz bins.
        second = 10 ** (np.log10(4000.0) / 2) / 1000.0
        np.testing.assert_allclose(fb[0, :2], [0.999, 0.001], atol=1e-6)
        np.testing.assert_allclose(fb[1, :2], [1.0 - second, second], atol=1e-6)

    def test_linear_is_empty(self):
        """The linear scale has no filters."""
        assert create_filter_bank(256, 512, 44100, "linear").shape == (0, 257)

    def test_zero_filters(self):
        """Zero filters yields an empty matrix."""
        assert create_filter_bank(0, 512, 44100, "mel").shape == (0, 257)

    def test_cached_and_read_only(self):
        """Identical parameters return the same read-only matrix."""
        fb = create_filter_bank(128, 512, 22050, "bark")
        assert fb is create_filter_bank(128, 512, 22050, "bark")
        with pytest.raises(ValueError):
            fb[0, 0] = 0.5

    def test_invalid_parameters(self):
        """Bad scale or sizes raise InvalidParameterError."""
        with pytest.raises(InvalidParameterError):
            create_filter_bank(64, 512, 44100, "octave")
        with pytest.raises(InvalidParameterError):
            create_filter_bank(-1, 512, 44100, "mel")
        with pytest.raises(InvalidParameterError):
            create_filter_bank(64, 512, 0, "mel")


class TestFilterBankApply:
    """Tests for FilterBank.apply."""

    def test_matches_numpy(self, fixed_seed):
        """apply() equals the matrix product over the spectrum bins."""
        bank = FilterBank(256, 512, 44100, "mel")
        spectrum = np.abs(np.random.randn(256)).astype(np.float32)

        bands = bank.apply(spectrum)
        expected = bank.filters[:, :256] @ spectrum

        assert bands.shape == (256,)
        assert bands.dtype == np.float32
        np.testing.assert_allclose(bands, expected, rtol=1e-5, atol=1e-6)

    def test_custom_filter_count(self, fixed_seed):
        """The output has one value per filter."""
        bank = FilterBank(40, 1024, 16000, "erb")
        spectrum = np.abs(np.random.randn(512)).astype(np.float32)
        assert bank.apply(spectrum).shape == (40,)

    def test_accepts_mlx_array(self):
        """MLX arrays are accepted as input."""
        bank = FilterBank(64, 256, 22050, "mel")
        bands = bank.apply(mx.ones((128,)))
        np.testing.assert_allclose(bands, 1.0, atol=1e-6)

    def test_linear_passthrough(self):
        """The linear bank returns a copy of the spectrum."""
        bank = FilterBank(256, 512, 44100, "linear")
        spectrum = np.linspace(0.0, 1.0, 256).astype(np.float32)

        out = bank.apply(spectrum)
        np.testing.assert_array_equal(out, spectrum)
        assert out is not spectrum
        assert bank.is_linear

    def test_zero_filters(self):
        """A bank without filters returns an empty array."""
        bank = FilterBank(0, 512, 44100, "mel")
        assert bank.apply(np.ones(256, dtype=np.float32)).shape == (0,)

    def test_wrong_length(self):
        """Spectra of the wrong length raise ShapeMismatchError."""
        bank = FilterBank(64, 512, 44100, "mel")
        with pytest.raises(ShapeMismatchError, match="does not match expected size 256"):
            bank.apply(np.ones(257, dtype=np.float32))

    def test_wrong_length_linear(self):
        """Length is checked for the linear bank too."""
        bank = FilterBank(64, 512, 44100, "linear")
        with pytest.raises(ShapeMismatchError):
            bank.apply(np.ones(100, dtype=np.float32))

    def test_properties(self):
        """Constructor parameters are exposed."""
        bank = FilterBank(64, 512, 44100, "bark")
        assert bank.num_filters == 64
        assert bank.fft_size == 512
        assert bank.sample_rate == 44100.0
        assert bank.scale.value == "bark"
        assert bank.spectrum_size == 256
        assert "bark" in repr(bank)


class TestFilterBankCache:
    """Tests for the MLX filter matrix cache."""

    def test_bounded(self, fixed_seed):
        """Many sample rates never grow the cache past its limit."""
        from mlx_spectrogram.constants import FILTER_BANK_CACHE_MAXSIZE
        from mlx_spectrogram.primitives.filterbank import _mlx_filters

        spectrum = np.abs(np.random.randn(64)).astype(np.float32)
        for sample_rate in range(8000, 8000 + 2 * FILTER_BANK_CACHE_MAXSIZE):
            FilterBank(16, 128, sample_rate, "mel").apply(spectrum)

        info = _mlx_filters.cache_info()
        assert info.maxsize == FILTER_BANK_CACHE_MAXSIZE
        assert info.currsize <= FILTER_BANK_CACHE_MAXSIZE

    def test_reused_across_instances(self):
        """Banks with identical parameters share one MLX matrix."""
        from mlx_spectrogram.primitives.filterbank import _mlx_filters

        spectrum = np.ones(128, dtype=np.float32)
        FilterBank(32, 256, 12345, "erb").apply(spectrum)
        hits = _mlx_filters.cache_info().hits
        FilterBank(32, 256, 12345, "erb").apply(spectrum)
        assert _mlx_filters.cache_info().hits == hits + 1
