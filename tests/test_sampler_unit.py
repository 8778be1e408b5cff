"""
Unit tests for pixel sampling and histogram construction.

Covers:
- channel layouts and their byte offsets
- near-white and near-transparent skip rules
- sampling stride
- histogram and seed box contents
- reduced color index packing
"""

import numpy as np
import pytest

from palettecut.services.colors.color_space import (
    HISTOGRAM_SIZE, Histogram, make_color_index_of, split_color_index
)
from palettecut.services.colors.sampler import (
    ColorFormat, make_histogram_and_vbox, sample_pixels
)


class TestColorFormat:
    """Test channel layout tags"""

    def test_channel_counts(self):
        assert ColorFormat.RGB.channels == 3
        assert ColorFormat.BGR.channels == 3
        assert ColorFormat.RGBA.channels == 4
        assert ColorFormat.ARGB.channels == 4
        assert ColorFormat.BGRA.channels == 4

    def test_offsets(self):
        assert ColorFormat.RGB.offsets == (0, 1, 2, None)
        assert ColorFormat.RGBA.offsets == (0, 1, 2, 3)
        assert ColorFormat.ARGB.offsets == (1, 2, 3, 0)
        assert ColorFormat.BGR.offsets == (2, 1, 0, None)
        assert ColorFormat.BGRA.offsets == (2, 1, 0, 3)

    def test_parse_from_tag(self):
        assert ColorFormat("bgra") is ColorFormat.BGRA
        with pytest.raises(ValueError):
            ColorFormat("yuv")

    @pytest.mark.parametrize("color_format,pixel", [
        (ColorFormat.RGB, [200, 100, 50]),
        (ColorFormat.RGBA, [200, 100, 50, 255]),
        (ColorFormat.ARGB, [255, 200, 100, 50]),
        (ColorFormat.BGR, [50, 100, 200]),
        (ColorFormat.BGRA, [50, 100, 200, 255]),
    ])
    def test_channel_extraction(self, color_format, pixel):
        """Every layout yields the same RGB triple"""
        kept = sample_pixels(bytes(pixel), color_format, 1)
        assert kept.tolist() == [[200, 100, 50]]


class TestSamplePixels:
    """Test skip rules and stride"""

    def test_near_white_is_skipped(self, primaries_rgb):
        kept = sample_pixels(primaries_rgb, ColorFormat.RGB, 1)
        assert kept.tolist() == [[255, 0, 0], [0, 255, 0], [0, 0, 255]]

    def test_white_threshold_needs_all_channels(self):
        """A pixel is near-white only when all three channels exceed 250"""
        pixels = bytes([251, 251, 251, 251, 251, 250, 250, 251, 251])
        kept = sample_pixels(pixels, ColorFormat.RGB, 1)
        assert kept.tolist() == [[251, 251, 250], [250, 251, 251]]

    def test_alpha_threshold(self):
        pixels = bytes([
            10, 20, 30, 124,
            10, 20, 30, 125,
            10, 20, 30, 0,
        ])
        kept = sample_pixels(pixels, ColorFormat.RGBA, 1)
        assert len(kept) == 1

    def test_stride_uses_quality(self):
        """quality=3 over 10 pixels samples pixels 0, 3, 6 and 9"""
        pixels = bytes(v for i in range(10) for v in (i, i, i))
        kept = sample_pixels(pixels, ColorFormat.RGB, 3)
        assert kept[:, 0].tolist() == [0, 3, 6, 9]

    def test_incomplete_trailing_pixel_ignored(self):
        pixels = bytes([1, 2, 3, 4, 5, 6, 7])
        kept = sample_pixels(pixels, ColorFormat.RGB, 1)
        assert kept.tolist() == [[1, 2, 3], [4, 5, 6]]

    def test_numpy_input(self, quadrant_image_array):
        kept = sample_pixels(quadrant_image_array, ColorFormat.RGB, 1)
        assert kept.shape == (32 * 32, 3)
        assert kept.dtype == np.uint8


class TestMakeHistogramAndVbox:
    """Test histogram and seed box construction"""

    def test_primaries(self, primaries_rgb):
        vbox, histogram = make_histogram_and_vbox(primaries_rgb, ColorFormat.RGB, 1)

        assert histogram.total == 3
        assert histogram[make_color_index_of(31, 0, 0)] == 1
        assert histogram[make_color_index_of(0, 31, 0)] == 1
        assert histogram[make_color_index_of(0, 0, 31)] == 1

        assert vbox.bounds == (0, 31, 0, 31, 0, 31)
        assert vbox.count == 3
        assert vbox.volume == 32 ** 3

    def test_tight_bounds(self, quadrant_image_array):
        vbox, histogram = make_histogram_and_vbox(quadrant_image_array, ColorFormat.RGB, 1)

        assert vbox.bounds == (3, 27, 5, 25, 5, 23)
        assert vbox.count == 32 * 32
        assert histogram[make_color_index_of(25, 5, 5)] == 256

    def test_histogram_dtype_and_size(self, noise_image_array):
        _, histogram = make_histogram_and_vbox(noise_image_array, ColorFormat.RGB, 2)
        assert histogram.counts.dtype == np.int32
        assert histogram.counts.shape == (HISTOGRAM_SIZE,)

    def test_nothing_survives(self):
        """All-transparent input leaves sentinel bounds and an empty seed"""
        pixels = bytes([10, 20, 30, 0] * 16)
        vbox, histogram = make_histogram_and_vbox(pixels, ColorFormat.RGBA, 1)

        assert histogram.total == 0
        assert vbox.bounds == (255, 0, 255, 0, 255, 0)
        assert vbox.count == 0

    def test_calls_are_independent(self, primaries_rgb):
        _, first = make_histogram_and_vbox(primaries_rgb, ColorFormat.RGB, 1)
        first.counts[:] = 0
        _, second = make_histogram_and_vbox(primaries_rgb, ColorFormat.RGB, 1)
        assert second.total == 3


class TestColorIndex:
    """Test reduced color index packing"""

    def test_packing(self):
        assert make_color_index_of(0, 0, 0) == 0
        assert make_color_index_of(0, 0, 1) == 1
        assert make_color_index_of(0, 1, 0) == 32
        assert make_color_index_of(1, 0, 0) == 1024
        assert make_color_index_of(31, 31, 31) == HISTOGRAM_SIZE - 1

    def test_injective_and_invertible(self):
        seen = set()
        for r in range(32):
            for g in range(32):
                for b in range(32):
                    index = make_color_index_of(r, g, b)
                    assert split_color_index(index) == (r, g, b)
                    seen.add(index)
        assert seen == set(range(HISTOGRAM_SIZE))

    def test_cube_view_matches_flat_index(self):
        histogram = Histogram.from_cells({(3, 17, 29): 5})
        assert histogram.cube[3, 17, 29] == 5
        assert histogram[make_color_index_of(3, 17, 29)] == 5

    def test_rejects_wrong_size(self):
        with pytest.raises(ValueError):
            Histogram(np.zeros(10, dtype=np.int32))
