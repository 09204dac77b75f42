"""Tests for bilinear and nearest resampling."""

import threading

import numpy as np
import pytest

from imgmod.bitmap import Bitmap
from imgmod.config import TargetSize
from imgmod.progress import RenderCancelled
from imgmod.resample import bilinear_coords, nearest_coords, resample


def row_bitmap(values):
    """Single-row opaque gray bitmap from a list of channel values."""
    row = np.asarray(values, dtype=np.uint8)
    pixels = np.empty((1, len(values), 4), dtype=np.uint8)
    pixels[0, :, :3] = row[:, None]
    pixels[0, :, 3] = 255
    return Bitmap(width=len(values), height=1, pixels=pixels)


@pytest.fixture
def random_bitmap():
    """Random RGBA bitmap (37 x 23)."""
    rng = np.random.default_rng(7)
    pixels = rng.integers(0, 256, size=(23, 37, 4), dtype=np.uint8)
    return Bitmap(width=37, height=23, pixels=pixels)


class TestCoords:
    """Test per-axis coordinate tables."""

    @pytest.mark.parametrize("src_len,dst_len", [(1, 5), (5, 1), (10, 3), (3, 10), (7, 7)])
    def test_bilinear_in_bounds(self, src_len, dst_len):
        i0, i1, frac = bilinear_coords(src_len, dst_len)

        assert len(i0) == dst_len
        assert (i0 >= 0).all() and (i1 <= src_len - 1).all()
        assert (i0 <= i1).all()
        assert ((frac >= 0.0) & (frac <= 1.0)).all()

    def test_bilinear_identity_mapping(self):
        i0, _, frac = bilinear_coords(6, 6)

        np.testing.assert_array_equal(i0, np.arange(6))
        np.testing.assert_array_equal(frac, np.zeros(6))

    def test_nearest_upscale_by_two(self):
        np.testing.assert_array_equal(nearest_coords(2, 4), [0, 0, 1, 1])

    def test_nearest_downscale_by_two(self):
        np.testing.assert_array_equal(nearest_coords(4, 2), [1, 3])


class TestResampleBilinear:
    """Test the default bilinear policy."""

    def test_native_size_is_exact_copy(self, random_bitmap):
        """Test resampling to the native size returns equal pixels in a new buffer."""
        result = resample(random_bitmap, TargetSize.of(random_bitmap))

        assert result == random_bitmap
        assert result.pixels is not random_bitmap.pixels

    @pytest.mark.parametrize("width,height", [(1, 1), (74, 46), (10, 40), (37, 5), (200, 3)])
    def test_output_dimensions(self, random_bitmap, width, height):
        result = resample(random_bitmap, TargetSize(width, height))

        assert result.shape == (width, height)
        assert result.pixels.shape == (height, width, 4)

    def test_upscale_interpolates(self):
        """Test 2 -> 4 pixel upscale blends between neighbours."""
        result = resample(row_bitmap([0, 255]), TargetSize(4, 1))

        np.testing.assert_array_equal(result.pixels[0, :, 0], [0, 64, 191, 255])

    def test_downscale_averages(self):
        """Test 4 -> 2 pixel downscale blends pixel pairs."""
        result = resample(row_bitmap([0, 100, 200, 255]), TargetSize(2, 1))

        np.testing.assert_array_equal(result.pixels[0, :, 0], [50, 228])

    def test_constant_image_stays_constant(self):
        bmp = Bitmap.blank(9, 4, color=(10, 200, 33, 128))
        result = resample(bmp, TargetSize(23, 17))

        assert (result.pixels == np.array([10, 200, 33, 128], dtype=np.uint8)).all()

    def test_single_pixel_source(self):
        """Test edges repeat when every coordinate clamps."""
        bmp = Bitmap.blank(1, 1, color=(1, 2, 3, 4))
        result = resample(bmp, TargetSize(5, 5))

        assert (result.pixels == np.array([1, 2, 3, 4], dtype=np.uint8)).all()

    def test_alpha_is_resampled(self):
        pixels = np.zeros((1, 2, 4), dtype=np.uint8)
        pixels[0, 1, 3] = 255
        result = resample(Bitmap(width=2, height=1, pixels=pixels), TargetSize(4, 1))

        np.testing.assert_array_equal(result.pixels[0, :, 3], [0, 64, 191, 255])

    def test_source_not_modified(self, random_bitmap):
        before = random_bitmap.pixels.copy()
        resample(random_bitmap, TargetSize(50, 11))

        np.testing.assert_array_equal(random_bitmap.pixels, before)

    def test_band_size_does_not_change_result(self, random_bitmap):
        size = TargetSize(51, 29)
        whole = resample(random_bitmap, size, band_rows=1000)
        banded = resample(random_bitmap, size, band_rows=3)

        assert whole == banded


class TestResampleNearest:
    """Test the nearest policy."""

    def test_upscale_repeats_pixels(self):
        result = resample(row_bitmap([10, 20]), TargetSize(4, 1), policy="nearest")

        np.testing.assert_array_equal(result.pixels[0, :, 0], [10, 10, 20, 20])

    def test_values_come_from_source(self, random_bitmap):
        result = resample(random_bitmap, TargetSize(13, 61), policy="nearest")
        source_colors = {tuple(p) for p in random_bitmap.pixels.reshape(-1, 4)}

        assert all(tuple(p) in source_colors for p in result.pixels.reshape(-1, 4))


class TestResampleErrors:
    """Test invalid input and cancellation."""

    @pytest.mark.parametrize("width,height", [(0, 5), (5, 0), (-2, 3)])
    def test_non_positive_size(self, random_bitmap, width, height):
        with pytest.raises(ValueError, match="positive"):
            resample(random_bitmap, TargetSize(width, height))

    def test_fractional_size(self, random_bitmap):
        with pytest.raises(ValueError, match="integer"):
            resample(random_bitmap, TargetSize(2.5, 3))

    def test_unknown_policy(self, random_bitmap):
        with pytest.raises(ValueError, match="policy"):
            resample(random_bitmap, TargetSize(5, 5), policy="bicubic")

    def test_cancel_before_start(self, random_bitmap):
        event = threading.Event()
        event.set()

        with pytest.raises(RenderCancelled):
            resample(random_bitmap, TargetSize(10, 10), cancel_event=event)

    def test_progress_within_range(self, random_bitmap):
        seen = []
        resample(
            random_bitmap,
            TargetSize(30, 30),
            band_rows=4,
            progress_callback=seen.append,
            progress_range=(0.2, 0.6),
        )

        assert seen[0] == pytest.approx(0.2)
        assert seen[-1] == pytest.approx(0.6)
        assert seen == sorted(seen)
